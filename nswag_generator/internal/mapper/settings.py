"""
Отображение секции openApiToCSharpClient на нормализованные настройки
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from ...exceptions import UnsupportedOperationNamingMode
from ..types.document import OpenApiToCSharpClient
from ..types.settings import (
    DEFAULT_JSON_LIBRARY,
    JsonLibrary,
    NormalizedGeneratorSettings,
    OperationNameGenerator,
)


def _same(value: Any) -> Any:
    return value


def _as_tuple(value: Optional[List[str]]) -> Optional[Tuple[str, ...]]:
    return None if value is None else tuple(value)


def _operation_name_generator(value: str) -> OperationNameGenerator:
    """Строгое совпадение с одним из пяти режимов"""
    for generator in OperationNameGenerator:
        if generator.value == value:
            return generator

    raise UnsupportedOperationNamingMode(value)


def _json_library(value: Optional[str]) -> JsonLibrary:
    """Регистронезависимый разбор, при неудаче - библиотека по умолчанию"""
    if value:
        for library in JsonLibrary:
            if library.value.lower() == value.strip().lower():
                return library

    return DEFAULT_JSON_LIBRARY


@dataclass(frozen=True)
class FieldMapping:
    source: str
    destination: str
    transform: Callable[[Any], Any] = _same


def _copy(*names: str) -> List[FieldMapping]:
    return [FieldMapping(name, name) for name in names]


def _copy_list(*names: str) -> List[FieldMapping]:
    return [FieldMapping(name, name, _as_tuple) for name in names]


SETTINGS_MAP: Tuple[FieldMapping, ...] = tuple(
    [
        FieldMapping(
            "operation_generation_mode",
            "operation_name_generator",
            _operation_name_generator,
        ),
        FieldMapping("json_library", "json_library", _json_library),
    ]
    + _copy(
        # Клиенты
        "class_name",
        "client_base_class",
        "client_base_interface",
        "client_class_access_modifier",
        "configuration_class",
        "generate_client_classes",
        "suppress_client_classes_output",
        "generate_client_interfaces",
        "suppress_client_interfaces_output",
        "inject_http_client",
        "dispose_http_client",
        "http_client_type",
        "use_http_client_creation_method",
        "use_http_request_message_creation_method",
        "use_base_url",
        "generate_base_url_property",
        "generate_sync_methods",
        "generate_prepare_request_and_process_response_as_async_methods",
        "generate_optional_parameters",
        "query_null_value",
        "parameter_date_format",
        "parameter_date_time_format",
        "parameter_array_type",
        "parameter_dictionary_type",
        # Ответы и исключения
        "generate_exception_classes",
        "exception_class",
        "wrap_dto_exceptions",
        "wrap_responses",
        "generate_response_classes",
        "response_class",
        "response_array_type",
        "response_dictionary_type",
        # Сериализация
        "expose_json_serializer_settings",
        "generate_update_json_serializer_settings_method",
        "use_request_and_response_serialization_settings",
        "serialize_type_information",
        "json_serializer_settings_transformation_method",
        "generate_json_methods",
        # DTO типы
        "namespace",
        "generate_contracts_output",
        "contracts_namespace",
        "generate_dto_types",
        "type_access_modifier",
        "property_setter_access_modifier",
        "class_style",
        "generate_native_records",
        "generate_data_annotations",
        "generate_default_values",
        "generate_nullable_reference_types",
        "generate_optional_properties_as_nullable",
        "required_properties_must_be_defined",
        "enforce_flag_enums",
        "handle_references",
        "generate_immutable_array_properties",
        "generate_immutable_dictionary_properties",
        "inline_named_any",
        "inline_named_arrays",
        "inline_named_dictionaries",
        "inline_named_tuples",
        # Отображение типов
        "any_type",
        "array_type",
        "array_instance_type",
        "array_base_type",
        "dictionary_type",
        "dictionary_instance_type",
        "dictionary_base_type",
        "date_type",
        "date_time_type",
        "time_type",
        "time_span_type",
        # Прочее
        "template_directory",
        "checksum_cache_enabled",
    )
    + _copy_list(
        "protected_methods",
        "excluded_parameter_names",
        "wrap_response_methods",
        "json_converters",
        "additional_namespace_usages",
        "additional_contract_namespace_usages",
        "excluded_type_names",
    )
)


def map_settings(section: OpenApiToCSharpClient) -> NormalizedGeneratorSettings:
    """Проекция секции настроек документа на настройки движка"""
    values: Dict[str, Any] = {}
    for mapping in SETTINGS_MAP:
        values[mapping.destination] = mapping.transform(
            getattr(section, mapping.source)
        )

    return NormalizedGeneratorSettings(**values)


def unmapped_fields() -> Tuple[List[str], List[str]]:
    """
    Проверка полноты таблицы.

    Returns:
        (поля документа без назначения, поля настроек без источника)
    """
    sources = {mapping.source for mapping in SETTINGS_MAP}
    destinations = {mapping.destination for mapping in SETTINGS_MAP}

    missing_sources = sorted(
        name for name in OpenApiToCSharpClient.model_fields if name not in sources
    )
    missing_destinations = sorted(
        name
        for name in NormalizedGeneratorSettings.model_fields
        if name not in destinations
    )
    return missing_sources, missing_destinations
