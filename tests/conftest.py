"""
Общие фикстуры тестов
"""

import json

import pytest


@pytest.fixture
def write_document(tmp_path):
    """Запись документа в tmp_path, возвращает путь"""

    def write(name: str, document) -> str:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(document, (bytes, bytearray)):
            path.write_bytes(document)
        elif isinstance(document, str):
            path.write_text(document, encoding="utf-8")
        else:
            path.write_text(json.dumps(document), encoding="utf-8")
        return str(path)

    return write
