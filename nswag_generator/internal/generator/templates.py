import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)

GENERATOR_NAME = "nswag_generator"
GENERATOR_VERSION = "0.1.0"


class Templates:
    """Шаблоны для генерации модуля клиента"""

    file_header = """# ----------------------
# <auto-generated>
#     Generated using {generator} v{version}{checksum}
# </auto-generated>
# ----------------------
# flake8: noqa
# pylint: skip-file"""

    imports = """from __future__ import annotations

import base64
import datetime
import enum
from typing import Any, Dict, Generic, List, Literal, Mapping, Optional, Protocol, Tuple, TypeVar, Union
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter"""

    helpers = """def _to_str(value: Any) -> str:
    if isinstance(value, enum.Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, bytes):
        return base64.b64encode(value).decode("utf-8")
    return str(value)


def _serialize(value: Any, settings: Mapping[str, Any]) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", **settings)
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, bytes):
        return base64.b64encode(value).decode("utf-8")
    if isinstance(value, dict):
        return dict((k, _serialize(v, settings)) for k, v in value.items())
    if isinstance(value, (list, tuple)):
        return [_serialize(item, settings) for item in value]
    return value


def _query(values: List[Tuple[str, Any]], null_value: str) -> List[Tuple[str, str]]:
    params = []
    for name, value in values:
        if value is None:
            if null_value:
                params.append((name, null_value))
            continue
        if isinstance(value, (list, tuple)):
            params.extend((name, _to_str(item)) for item in value)
        else:
            params.append((name, _to_str(value)))
    return params


def _form(value: Any, settings: Mapping[str, Any]) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    data = {}
    files = {}
    fields = value.model_dump(by_alias=True, exclude_none=True) if isinstance(value, BaseModel) else value or {}
    for name, item in fields.items():
        if item is None:
            continue
        if isinstance(item, bytes):
            files[name] = (name, item)
        else:
            data[name] = _to_str(_serialize(item, settings))
    return data, files"""

    read_body = """def _read_body(response: httpx.Response, type_: Any) -> Any:
    if type_ is None or not response.content:
        return None
    if type_ is bytes:
        return response.content
    {read_statement}"""

    read_json = "return TypeAdapter(type_).validate_python(response.json())"

    read_json_bytes = "return TypeAdapter(type_).validate_json(response.content)"

    deserialize = """def _deserialize(response: httpx.Response, type_: Any) -> Any:
    return _read_body(response, type_)"""

    deserialize_wrapped = """def _deserialize(response: httpx.Response, type_: Any) -> Any:
    try:
        return _read_body(response, type_)
    except ValueError as exc:
        raise {exception_class}(
            "Could not deserialize the response body.",
            response.status_code,
            response.text,
            dict(response.headers),
            None,
            exc,
        ) from exc"""

    handle_response = """def _handle_response(
    response: httpx.Response,
    success: Mapping[str, Any],
    errors: Mapping[str, Tuple[str, Any]],
    wrap: bool,
) -> Any:
    status = str(response.status_code)
    status_range = status[0] + "XX"
    headers = dict(response.headers)

    if status in success or status_range in success or (not success and response.is_success):
        result = _deserialize(response, success.get(status, success.get(status_range)))
        return {response_class}(response.status_code, headers, result) if wrap else result

    error = errors.get(status) or errors.get(status_range) or errors.get("default")
    if error is not None:
        message, type_ = error
        result = _deserialize(response, type_)
        raise {exception_class}(message, response.status_code, response.text, headers, result)

    raise {exception_class}(
        "The HTTP status code of the response was not expected (" + status + ").",
        response.status_code,
        response.text,
        headers,
    )"""

    exception = """class {exception_class}(Exception):
    def __init__(
        self,
        message: str,
        status_code: int,
        response: Optional[str],
        headers: Mapping[str, Any],
        result: Any = None,
        inner_exception: Optional[BaseException] = None,
    ) -> None:
        super().__init__(
            message
            + "\\n\\nStatus: "
            + str(status_code)
            + "\\nResponse: \\n"
            + (response or "")[:512]
        )
        self.message = message
        self.status_code = status_code
        self.response = response
        self.headers = headers
        self.result = result
        self.inner_exception = inner_exception"""

    response = """T = TypeVar("T")


class {response_class}(Generic[T]):
    def __init__(self, status_code: int, headers: Mapping[str, Any], result: Optional[T] = None) -> None:
        self.status_code = status_code
        self.headers = headers
        self.result = result

    def __repr__(self) -> str:
        return "{response_class}(status_code=%r, result=%r)" % (self.status_code, self.result)"""

    base_url_property = """@property
def base_url(self) -> str:
    return self._base_url

@base_url.setter
def base_url(self, value: str) -> None:
    self._base_url = value"""

    dispose = """async def aclose(self) -> None:
    if self._owns_http_client:
        await self._http_client.aclose(){close_sync}

async def __aenter__(self) -> "{class_name}":
    return self

async def __aexit__(self, *exc_info: Any) -> None:
    await self.aclose()"""

    TEMPLATE_NAMES = (
        "file_header",
        "imports",
        "helpers",
        "read_body",
        "read_json",
        "read_json_bytes",
        "deserialize",
        "deserialize_wrapped",
        "handle_response",
        "exception",
        "response",
        "base_url_property",
        "dispose",
    )

    @classmethod
    def load(cls, template_directory: Optional[str] = None) -> "Templates":
        """Шаблоны с переопределениями из <template_directory>/<имя>.tmpl"""
        templates = cls()
        if not template_directory:
            return templates

        if not os.path.isdir(template_directory):
            logger.warning("Директория шаблонов %s не найдена", template_directory)
            return templates

        for name in cls.TEMPLATE_NAMES:
            path = os.path.join(template_directory, f"{name}.tmpl")
            if os.path.exists(path):
                with open(path, "r", encoding="utf-8") as f:
                    setattr(templates, name, f.read().rstrip("\n"))
                logger.debug("Шаблон %s переопределен из %s", name, path)

        return templates

    def render(self, name: str, **context) -> str:
        template = getattr(self, name)
        return template.format(**context) if context else template
