"""
Стратегии именования клиентов и операций
"""

import re
from typing import Any, Dict, List, Mapping, Type

from ..types.settings import OperationNameGenerator
from ..utils.naming import pascal_case

_PARAMETER_SEGMENT = re.compile(r"^\{(.+)\}$")


def _path_segments_name(path: str, skip: int = 0) -> str:
    """GET /pets/{petId}/photos -> PetsByPetIdPhotos"""
    parts = []
    for segment in [s for s in path.strip("/").split("/") if s][skip:]:
        match = _PARAMETER_SEGMENT.match(segment)
        if match:
            parts.append("By" + pascal_case(match.group(1)))
        else:
            parts.append(pascal_case(segment))
    return "".join(parts)


def _static_segments(path: str) -> List[str]:
    return [s for s in path.strip("/").split("/") if s and "{" not in s]


class OperationNameStrategy:
    """Базовая стратегия: имя клиента и имя операции"""

    def get_client_name(self, path: str, method: str, operation: Mapping[str, Any]) -> str:
        return ""

    def get_operation_name(
        self, path: str, method: str, operation: Mapping[str, Any]
    ) -> str:
        raise NotImplementedError

    @staticmethod
    def _from_path(path: str, method: str, skip: int = 0) -> str:
        return pascal_case(method) + _path_segments_name(path, skip)


class MultipleClientsFromOperationId(OperationNameStrategy):
    """Pets_List -> клиент Pets, операция List"""

    def get_client_name(self, path, method, operation):
        operation_id = operation.get("operationId") or ""
        index = operation_id.find("_")
        return operation_id[:index] if index > 0 else ""

    def get_operation_name(self, path, method, operation):
        operation_id = operation.get("operationId")
        if not operation_id:
            return self._from_path(path, method)

        index = operation_id.find("_")
        if 0 <= index < len(operation_id) - 1:
            return operation_id[index + 1 :]
        return operation_id


class MultipleClientsFromFirstTagAndPathSegments(OperationNameStrategy):
    """Клиент по первому тегу, операция по HTTP методу и сегментам пути"""

    def get_client_name(self, path, method, operation):
        tags = operation.get("tags") or []
        return tags[0] if tags else ""

    def get_operation_name(self, path, method, operation):
        return self._from_path(path, method)


class MultipleClientsFromPathSegments(OperationNameStrategy):
    """Клиент по первому сегменту пути, операция по остальным сегментам"""

    def get_client_name(self, path, method, operation):
        segments = _static_segments(path)
        return segments[0] if segments else ""

    def get_operation_name(self, path, method, operation):
        segments = [s for s in path.strip("/").split("/") if s]
        skip = 1 if segments and "{" not in segments[0] else 0
        return self._from_path(path, method, skip)


class SingleClientFromOperationId(OperationNameStrategy):
    def get_operation_name(self, path, method, operation):
        return operation.get("operationId") or self._from_path(path, method)


class SingleClientFromPathSegments(OperationNameStrategy):
    def get_operation_name(self, path, method, operation):
        return self._from_path(path, method)


OPERATION_NAME_STRATEGIES: Dict[OperationNameGenerator, Type[OperationNameStrategy]] = {
    OperationNameGenerator.MULTIPLE_CLIENTS_FROM_OPERATION_ID: MultipleClientsFromOperationId,
    OperationNameGenerator.MULTIPLE_CLIENTS_FROM_FIRST_TAG_AND_PATH_SEGMENTS: MultipleClientsFromFirstTagAndPathSegments,
    OperationNameGenerator.MULTIPLE_CLIENTS_FROM_PATH_SEGMENTS: MultipleClientsFromPathSegments,
    OperationNameGenerator.SINGLE_CLIENT_FROM_OPERATION_ID: SingleClientFromOperationId,
    OperationNameGenerator.SINGLE_CLIENT_FROM_PATH_SEGMENTS: SingleClientFromPathSegments,
}


def get_strategy(generator: OperationNameGenerator) -> OperationNameStrategy:
    return OPERATION_NAME_STRATEGIES[generator]()
