"""
Тесты отображения настроек
"""

import json

import pytest
from pydantic import ValidationError

from helpers import make_document
from nswag_generator.exceptions import UnsupportedOperationNamingMode
from nswag_generator.internal.mapper.settings import (
    SETTINGS_MAP,
    map_settings,
    unmapped_fields,
)
from nswag_generator.internal.parser.document import load_document
from nswag_generator.internal.types.document import ClassStyle, OpenApiToCSharpClient
from nswag_generator.internal.types.settings import (
    JsonLibrary,
    NormalizedGeneratorSettings,
    OperationNameGenerator,
)


class TestOperationNameGenerator:
    """Режимы именования операций"""

    @pytest.mark.parametrize(
        "mode",
        [
            "MultipleClientsFromOperationId",
            "MultipleClientsFromFirstTagAndPathSegmentsOperation",
            "MultipleClientsFromPathSegments",
            "SingleClientFromOperationId",
            "SingleClientFromPathSegments",
        ],
    )
    def test_supported_modes(self, mode):
        """Пять режимов принимаются и сохраняют значение"""
        settings = map_settings(OpenApiToCSharpClient(operation_generation_mode=mode))

        assert settings.operation_name_generator == OperationNameGenerator(mode)
        assert settings.operation_name_generator.value == mode

    @pytest.mark.parametrize(
        "mode",
        [
            "MultipleClientsFromFirstTagAndOperationName",
            "multipleclientsfromoperationid",
            "",
            "Whatever",
        ],
    )
    def test_unsupported_modes(self, mode):
        """Прочие значения (включая другой регистр) отклоняются"""
        with pytest.raises(UnsupportedOperationNamingMode) as exc_info:
            map_settings(OpenApiToCSharpClient(operation_generation_mode=mode))

        assert isinstance(exc_info.value, NotImplementedError)
        assert exc_info.value.mode == mode
        assert mode in str(exc_info.value)


class TestJsonLibrary:
    """Разбор библиотеки сериализации"""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("NewtonsoftJson", JsonLibrary.NEWTONSOFT_JSON),
            ("SystemTextJson", JsonLibrary.SYSTEM_TEXT_JSON),
            ("systemtextjson", JsonLibrary.SYSTEM_TEXT_JSON),
            (" SYSTEMTEXTJSON ", JsonLibrary.SYSTEM_TEXT_JSON),
            ("Jil", JsonLibrary.NEWTONSOFT_JSON),
            ("", JsonLibrary.NEWTONSOFT_JSON),
            (None, JsonLibrary.NEWTONSOFT_JSON),
        ],
    )
    def test_json_library(self, value, expected):
        """Регистр не важен, неизвестное значение дает библиотеку по умолчанию"""
        settings = map_settings(OpenApiToCSharpClient(json_library=value))
        assert settings.json_library == expected


class TestMapSettings:
    """Проекция секции на нормализованные настройки"""

    def test_deterministic(self):
        """Одинаковый вход дает равные настройки"""
        section = OpenApiToCSharpClient(
            namespace="Api",
            class_style="Record",
            protected_methods=["PetsClient.Get"],
        )
        assert map_settings(section) == map_settings(section)

    def test_values_copied(self):
        """Поля копируются как есть"""
        section = OpenApiToCSharpClient(
            namespace="Petstore.Client",
            class_name="{controller}Api",
            exception_class="PetstoreError",
            query_null_value="null",
            class_style=ClassStyle.RECORD,
            generate_sync_methods=True,
            template_directory="templates",
        )
        settings = map_settings(section)

        assert settings.namespace == "Petstore.Client"
        assert settings.class_name == "{controller}Api"
        assert settings.exception_class == "PetstoreError"
        assert settings.query_null_value == "null"
        assert settings.class_style == ClassStyle.RECORD
        assert settings.generate_sync_methods is True
        assert settings.template_directory == "templates"

    def test_lists_become_tuples(self):
        """Списки превращаются в кортежи"""
        settings = map_settings(
            OpenApiToCSharpClient(
                excluded_type_names=["Internal"],
                json_converters=None,
                additional_namespace_usages=["json"],
            )
        )

        assert settings.excluded_type_names == ("Internal",)
        assert settings.additional_namespace_usages == ("json",)
        assert settings.json_converters is None

    def test_settings_are_frozen(self):
        """Нормализованные настройки неизменяемы"""
        settings = map_settings(OpenApiToCSharpClient())
        with pytest.raises(ValidationError):
            settings.namespace = "Other"

    def test_settings_have_no_defaults(self):
        """Каждое поле настроек обязательно"""
        assert all(
            field.is_required()
            for field in NormalizedGeneratorSettings.model_fields.values()
        )


class TestSettingsMapCompleteness:
    """Полнота таблицы отображения"""

    def test_no_unmapped_fields(self):
        """Каждое поле секции имеет назначение и наоборот"""
        assert unmapped_fields() == ([], [])

    def test_destinations_unique(self):
        """Каждое поле настроек заполняется ровно одной записью"""
        destinations = [mapping.destination for mapping in SETTINGS_MAP]
        assert len(destinations) == len(set(destinations))

    def test_sources_exist(self):
        """Источники таблицы существуют в секции документа"""
        for mapping in SETTINGS_MAP:
            assert mapping.source in OpenApiToCSharpClient.model_fields


class TestClassStyle:
    """Разбор стиля классов DTO"""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("Record", ClassStyle.RECORD),
            ("poco", ClassStyle.POCO),
            (" INPC ", ClassStyle.INPC),
            ("prism", ClassStyle.PRISM),
            ("Whatever", ClassStyle.POCO),
            ("", ClassStyle.POCO),
            (None, ClassStyle.POCO),
        ],
    )
    def test_class_style(self, value, expected):
        """Регистр не важен, неизвестное значение дает Poco"""
        section = OpenApiToCSharpClient.model_validate({"classStyle": value})
        assert map_settings(section).class_style == expected

    def test_document_with_lowercase_style(self):
        """Документ со стилем в нижнем регистре загружается"""
        raw = make_document(settings={"classStyle": "record"})
        document = load_document(json.dumps(raw))

        assert document.settings.class_style == ClassStyle.RECORD
