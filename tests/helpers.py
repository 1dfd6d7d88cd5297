"""
Вспомогательные функции тестов
"""

import os
import sys
import types
import uuid
from typing import Any, Dict, Optional

from nswag_generator.internal.mapper.settings import map_settings
from nswag_generator.internal.parser.openapi import ApiDescription
from nswag_generator.internal.types.document import OpenApiToCSharpClient

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")


def fixture_path(name: str) -> str:
    return os.path.join(FIXTURES_DIR, name)


def read_fixture(name: str) -> str:
    with open(fixture_path(name), "r", encoding="utf-8") as f:
        return f.read()


def load_api(name: str) -> ApiDescription:
    return ApiDescription.from_text(read_fixture(name), source=name)


def make_settings(**overrides):
    """Нормализованные настройки с переопределенными полями секции"""
    return map_settings(OpenApiToCSharpClient(**overrides))


def make_document(
    from_document: Optional[Dict[str, Any]] = None,
    settings: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Документ .nswag в виде словаря"""
    return {
        "runtime": "Net80",
        "defaultVariables": None,
        "documentGenerator": {
            "fromDocument": {
                "url": "",
                "output": None,
                "newLineBehavior": "Auto",
                **(from_document or {}),
            }
        },
        "codeGenerators": {
            "openApiToCSharpClient": {
                "className": "{controller}Client",
                "namespace": "MyNamespace",
                **(settings or {}),
            }
        },
    }


def load_module(source: str) -> types.ModuleType:
    """Выполнение сгенерированного кода как модуля"""
    name = f"generated_{uuid.uuid4().hex}"
    module = types.ModuleType(name)
    sys.modules[name] = module
    exec(compile(source, f"<{name}>", "exec"), module.__dict__)
    return module
