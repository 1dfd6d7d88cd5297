"""
Загрузка .nswag документа конфигурации
"""

import json
import logging
import os
from typing import Union

from pydantic import ValidationError

from ...exceptions import DocumentReadError, EmptyDocument, MalformedConfig
from ..types.document import NSwagDocument

logger = logging.getLogger(__name__)


def load_document(data: Union[bytes, str]) -> NSwagDocument:
    """Разбор документа из сырых байт"""
    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise MalformedConfig(f"Документ не в кодировке UTF-8: {e}") from e

    try:
        raw = json.loads(data)
    except json.JSONDecodeError as e:
        raise MalformedConfig(f"Документ не является валидным JSON: {e}") from e

    if raw is None or raw == {}:
        raise EmptyDocument("Документ пуст.")

    if not isinstance(raw, dict):
        raise MalformedConfig(
            f"Ожидался JSON объект, получено: {type(raw).__name__}"
        )

    try:
        return NSwagDocument.model_validate(raw)
    except ValidationError as e:
        raise MalformedConfig(f"Документ не соответствует схеме .nswag: {e}") from e


def read_document_bytes(path: Union[str, os.PathLike]) -> bytes:
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise DocumentReadError(f"Не удалось прочитать {path}: {e}") from e


def load_document_file(path: Union[str, os.PathLike]) -> NSwagDocument:
    """Чтение и разбор документа с диска"""
    logger.debug("Загрузка документа %s", path)
    return load_document(read_document_bytes(path))
