"""
Тесты загрузки .nswag документа
"""

import json

import pytest

from helpers import make_document
from nswag_generator.exceptions import DocumentReadError, EmptyDocument, MalformedConfig
from nswag_generator.internal.parser.document import load_document, load_document_file
from nswag_generator.internal.types.document import ClassStyle, FromDocument


class TestLoadDocument:
    """Разбор документа из байт"""

    def test_valid_document(self):
        """Валидный документ разбирается в модель"""
        raw = make_document({"url": "petstore.json"}, {"namespace": "Petstore"})
        document = load_document(json.dumps(raw).encode("utf-8"))

        assert document.runtime == "Net80"
        assert document.from_document.url == "petstore.json"
        assert document.settings.namespace == "Petstore"
        assert document.settings.class_name == "{controller}Client"

    def test_missing_settings_take_defaults(self):
        """Отсутствующие ключи секции получают значения по умолчанию"""
        document = load_document(json.dumps(make_document()))
        settings = document.settings

        assert settings.operation_generation_mode == "MultipleClientsFromOperationId"
        assert settings.generate_client_classes is True
        assert settings.class_style == ClassStyle.POCO
        assert settings.excluded_type_names == []

    def test_utf8_bom(self):
        """BOM в начале файла допускается"""
        data = b"\xef\xbb\xbf" + json.dumps(make_document()).encode("utf-8")
        assert load_document(data).settings.namespace == "MyNamespace"

    def test_unknown_keys_ignored(self):
        """Незнакомые ключи не ломают разбор"""
        raw = make_document(settings={"someFutureOption": 42})
        raw["swaggerGenerator"] = {"anything": True}
        assert load_document(json.dumps(raw)).settings.namespace == "MyNamespace"

    def test_inline_json_alias(self):
        """Поле json секции fromDocument доступно как json_text"""
        raw = make_document({"json": '{"openapi": "3.0.0"}'})
        document = load_document(json.dumps(raw))

        assert document.from_document.json_text == '{"openapi": "3.0.0"}'
        assert not document.from_document.has_url

    @pytest.mark.parametrize("text", ["null", "{}"])
    def test_empty_document(self, text):
        """null и пустой объект дают EmptyDocument"""
        with pytest.raises(EmptyDocument):
            load_document(text.encode("utf-8"))

    @pytest.mark.parametrize(
        "data",
        [
            b"{not json",
            b"[]",
            b'"string"',
            b"\xff\xfe\x00",
        ],
    )
    def test_malformed_document(self, data):
        """Невалидный JSON, не объект или не UTF-8 дают MalformedConfig"""
        with pytest.raises(MalformedConfig):
            load_document(data)

    def test_missing_sections(self):
        """Без codeGenerators документ не соответствует схеме"""
        raw = make_document()
        del raw["codeGenerators"]

        with pytest.raises(MalformedConfig) as exc_info:
            load_document(json.dumps(raw))

        assert exc_info.value.__cause__ is not None

    @pytest.mark.parametrize(
        "settings",
        [
            {"generateClientClasses": "definitely"},
            {"excludedTypeNames": "NotAList"},
        ],
    )
    def test_wrong_types(self, settings):
        """Поля неверного типа дают MalformedConfig"""
        with pytest.raises(MalformedConfig):
            load_document(json.dumps(make_document(settings=settings)))

    def test_document_is_read_only(self):
        """Модель документа неизменяема"""
        document = load_document(json.dumps(make_document()))
        with pytest.raises(Exception):
            document.runtime = "Net60"


class TestLoadDocumentFile:
    """Чтение документа с диска"""

    def test_load_from_file(self, write_document):
        """Документ читается и разбирается"""
        path = write_document("api.nswag", make_document({"url": "spec.json"}))
        assert load_document_file(path).from_document.url == "spec.json"

    def test_missing_file(self, tmp_path):
        """Отсутствующий файл дает DocumentReadError"""
        with pytest.raises(DocumentReadError):
            load_document_file(tmp_path / "missing.nswag")


class TestFromDocument:
    """Определение источника описания"""

    @pytest.mark.parametrize(
        "url,has_url,is_remote",
        [
            ("petstore.json", True, False),
            ("specs/api.yaml", True, False),
            ("http://example.com/swagger.json", True, True),
            ("HTTPS://EXAMPLE.COM/swagger.json", True, True),
            ("   ", False, False),
            (None, False, False),
        ],
    )
    def test_source_kind(self, url, has_url, is_remote):
        """Файл, удаленный url или отсутствие url"""
        from_document = FromDocument(url=url)

        assert from_document.has_url is has_url
        assert from_document.is_remote is is_remote
