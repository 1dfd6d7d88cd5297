"""
Получение и разбор OpenAPI/Swagger описания
"""

import asyncio
import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

import httpx
import yaml

from ...exceptions import SpecFetchError, SpecParseError
from ..types.document import FromDocument

logger = logging.getLogger(__name__)


def is_json_text(text: str) -> bool:
    return text.strip().startswith("{")


@dataclass(frozen=True)
class ApiDescription:
    """Разобранное OpenAPI описание"""

    document: Dict[str, Any]
    source: Optional[str] = field(default=None, compare=False)

    @property
    def version(self) -> str:
        return str(self.document.get("openapi") or self.document.get("swagger"))

    @property
    def is_swagger2(self) -> bool:
        return "swagger" in self.document

    @property
    def title(self) -> str:
        return (self.document.get("info") or {}).get("title", "")

    @classmethod
    def from_json(cls, text: str, source: str = None) -> "ApiDescription":
        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise SpecParseError(f"Некорректный JSON в описании API: {e}") from e
        return cls._validated(document, source)

    @classmethod
    def from_yaml(cls, text: str, source: str = None) -> "ApiDescription":
        try:
            document = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise SpecParseError(f"Некорректный YAML в описании API: {e}") from e
        return cls._validated(document, source)

    @classmethod
    def from_text(cls, text: str, source: str = None) -> "ApiDescription":
        """JSON если текст начинается с '{', иначе YAML"""
        if is_json_text(text):
            return cls.from_json(text, source)
        return cls.from_yaml(text, source)

    @classmethod
    def _validated(cls, document: Any, source: Optional[str]) -> "ApiDescription":
        if not isinstance(document, dict):
            raise SpecParseError(
                f"Описание API должно быть объектом, получено: {type(document).__name__}"
            )
        if "openapi" not in document and "swagger" not in document:
            raise SpecParseError("В описании API нет ключа 'openapi' или 'swagger'")
        if not isinstance(document.get("paths", {}), dict):
            raise SpecParseError("Раздел 'paths' должен быть объектом")

        return cls(document=document, source=source)


def _read_text(path: str) -> str:
    with open(path, "r", encoding="utf-8-sig") as f:
        return f.read()


async def read_spec_file(path: str) -> str:
    try:
        return await asyncio.to_thread(_read_text, path)
    except OSError as e:
        raise SpecFetchError(f"Не удалось прочитать {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise SpecParseError(f"Описание API {path} не в кодировке UTF-8: {e}") from e


async def fetch_spec_text(
    url: str, http_client: Optional[httpx.AsyncClient] = None
) -> str:
    """Загрузка описания по HTTP"""
    try:
        if http_client is not None:
            response = await http_client.get(url)
        else:
            async with httpx.AsyncClient(follow_redirects=True) as client:
                response = await client.get(url)
        response.raise_for_status()
    except httpx.HTTPError as e:
        raise SpecFetchError(f"Не удалось загрузить {url}: {e}") from e

    return response.text


async def resolve_api_description(
    from_document: FromDocument,
    base_folder: Union[str, os.PathLike],
    http_client: Optional[httpx.AsyncClient] = None,
) -> ApiDescription:
    """
    Получение описания API из секции fromDocument.

    Порядок: локальный файл (url без http) -> удаленный url -> inline текст.
    """
    if from_document.has_url and not from_document.is_remote:
        path = os.path.join(base_folder, from_document.url.strip())
        logger.debug("Чтение описания API из файла %s", path)
        text = await read_spec_file(path)
        return ApiDescription.from_text(text, source=path)

    if from_document.is_remote:
        url = from_document.url.strip()
        logger.debug("Загрузка описания API с %s", url)
        text = await fetch_spec_text(url, http_client)
        return ApiDescription.from_text(text, source=url)

    if not from_document.json_text or not from_document.json_text.strip():
        raise SpecParseError("В fromDocument не указан ни url, ни json")

    return ApiDescription.from_text(from_document.json_text)
