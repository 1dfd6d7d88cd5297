"""
Нормализованные настройки, которые получает движок генерации
"""

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .document import ClassStyle


class OperationNameGenerator(str, Enum):
    MULTIPLE_CLIENTS_FROM_OPERATION_ID = "MultipleClientsFromOperationId"
    MULTIPLE_CLIENTS_FROM_FIRST_TAG_AND_PATH_SEGMENTS = (
        "MultipleClientsFromFirstTagAndPathSegmentsOperation"
    )
    MULTIPLE_CLIENTS_FROM_PATH_SEGMENTS = "MultipleClientsFromPathSegments"
    SINGLE_CLIENT_FROM_OPERATION_ID = "SingleClientFromOperationId"
    SINGLE_CLIENT_FROM_PATH_SEGMENTS = "SingleClientFromPathSegments"


class JsonLibrary(str, Enum):
    NEWTONSOFT_JSON = "NewtonsoftJson"
    SYSTEM_TEXT_JSON = "SystemTextJson"


DEFAULT_JSON_LIBRARY = JsonLibrary.NEWTONSOFT_JSON


class NormalizedGeneratorSettings(BaseModel):
    """
    Плоский набор настроек генератора.

    Значения по умолчанию не задаются: каждое поле заполняет маппер.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Клиенты
    class_name: str
    operation_name_generator: OperationNameGenerator
    client_base_class: Optional[str]
    client_base_interface: Optional[str]
    client_class_access_modifier: str
    configuration_class: Optional[str]
    generate_client_classes: bool
    suppress_client_classes_output: bool
    generate_client_interfaces: bool
    suppress_client_interfaces_output: bool
    inject_http_client: bool
    dispose_http_client: bool
    http_client_type: str
    use_http_client_creation_method: bool
    use_http_request_message_creation_method: bool
    use_base_url: bool
    generate_base_url_property: bool
    generate_sync_methods: bool
    generate_prepare_request_and_process_response_as_async_methods: bool
    generate_optional_parameters: bool
    protected_methods: Tuple[str, ...]
    excluded_parameter_names: Tuple[str, ...]
    query_null_value: str
    parameter_date_format: str
    parameter_date_time_format: str
    parameter_array_type: str
    parameter_dictionary_type: str

    # Ответы и исключения
    generate_exception_classes: bool
    exception_class: str
    wrap_dto_exceptions: bool
    wrap_responses: bool
    wrap_response_methods: Tuple[str, ...]
    generate_response_classes: bool
    response_class: str
    response_array_type: str
    response_dictionary_type: str

    # Сериализация
    json_library: JsonLibrary
    json_converters: Optional[Tuple[str, ...]]
    expose_json_serializer_settings: bool
    generate_update_json_serializer_settings_method: bool
    use_request_and_response_serialization_settings: bool
    serialize_type_information: bool
    json_serializer_settings_transformation_method: Optional[str]
    generate_json_methods: bool

    # DTO типы
    namespace: str
    additional_namespace_usages: Tuple[str, ...]
    additional_contract_namespace_usages: Tuple[str, ...]
    generate_contracts_output: bool
    contracts_namespace: Optional[str]
    generate_dto_types: bool
    type_access_modifier: str
    property_setter_access_modifier: str
    class_style: ClassStyle
    generate_native_records: bool
    generate_data_annotations: bool
    generate_default_values: bool
    generate_nullable_reference_types: bool
    generate_optional_properties_as_nullable: bool
    required_properties_must_be_defined: bool
    enforce_flag_enums: bool
    excluded_type_names: Tuple[str, ...]
    handle_references: bool
    generate_immutable_array_properties: bool
    generate_immutable_dictionary_properties: bool
    inline_named_any: bool
    inline_named_arrays: bool
    inline_named_dictionaries: bool
    inline_named_tuples: bool

    # Отображение типов
    any_type: str
    array_type: str
    array_instance_type: str
    array_base_type: str
    dictionary_type: str
    dictionary_instance_type: str
    dictionary_base_type: str
    date_type: str
    date_time_type: str
    time_type: str
    time_span_type: str

    # Прочее
    template_directory: Optional[str]
    checksum_cache_enabled: bool
