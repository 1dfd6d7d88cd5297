"""
Модели .nswag документа конфигурации
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ClassStyle(str, Enum):
    POCO = "Poco"
    INPC = "Inpc"
    PRISM = "Prism"
    RECORD = "Record"


class DocumentModel(BaseModel):
    """База для секций документа: camelCase ключи, лишние ключи игнорируются"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class FromDocument(DocumentModel):
    """Источник OpenAPI описания: url (файл или http) либо inline текст"""

    url: Optional[str] = None
    json_text: Optional[str] = Field(default=None, alias="json")
    output: Optional[str] = None
    new_line_behavior: str = "Auto"

    @property
    def has_url(self) -> bool:
        return bool(self.url and self.url.strip())

    @property
    def is_remote(self) -> bool:
        return self.has_url and self.url.strip().lower().startswith(
            ("http://", "https://")
        )


class DocumentGenerator(DocumentModel):
    from_document: FromDocument


class OpenApiToCSharpClient(DocumentModel):
    """Секция настроек генератора клиента (словарь NSwag)"""

    client_base_class: Optional[str] = None
    configuration_class: Optional[str] = None
    generate_client_classes: bool = True
    suppress_client_classes_output: bool = False
    generate_client_interfaces: bool = False
    suppress_client_interfaces_output: bool = False
    client_base_interface: Optional[str] = None
    inject_http_client: bool = True
    dispose_http_client: bool = True
    protected_methods: List[str] = []
    generate_exception_classes: bool = True
    exception_class: str = "ApiException"
    wrap_dto_exceptions: bool = True
    use_http_client_creation_method: bool = False
    http_client_type: str = "System.Net.Http.HttpClient"
    use_http_request_message_creation_method: bool = False
    use_base_url: bool = True
    generate_base_url_property: bool = True
    generate_sync_methods: bool = False
    generate_prepare_request_and_process_response_as_async_methods: bool = False
    expose_json_serializer_settings: bool = False
    client_class_access_modifier: str = "public"
    type_access_modifier: str = "public"
    property_setter_access_modifier: str = ""
    generate_native_records: bool = False
    generate_contracts_output: bool = False
    contracts_namespace: Optional[str] = None
    parameter_date_time_format: str = "s"
    parameter_date_format: str = "yyyy-MM-dd"
    generate_update_json_serializer_settings_method: bool = True
    use_request_and_response_serialization_settings: bool = False
    serialize_type_information: bool = False
    query_null_value: str = ""
    class_name: str = "{controller}Client"
    operation_generation_mode: str = "MultipleClientsFromOperationId"
    additional_namespace_usages: List[str] = []
    additional_contract_namespace_usages: List[str] = []
    generate_optional_parameters: bool = False
    generate_json_methods: bool = False
    enforce_flag_enums: bool = False
    parameter_array_type: str = "System.Collections.Generic.IEnumerable"
    parameter_dictionary_type: str = "System.Collections.Generic.IDictionary"
    response_array_type: str = "System.Collections.Generic.ICollection"
    response_dictionary_type: str = "System.Collections.Generic.IDictionary"
    wrap_responses: bool = False
    wrap_response_methods: List[str] = []
    generate_response_classes: bool = True
    response_class: str = "SwaggerResponse"
    namespace: str = "MyNamespace"
    required_properties_must_be_defined: bool = True
    date_type: str = "System.DateTimeOffset"
    json_converters: Optional[List[str]] = None
    any_type: str = "object"
    date_time_type: str = "System.DateTimeOffset"
    time_type: str = "System.TimeSpan"
    time_span_type: str = "System.TimeSpan"
    array_type: str = "System.Collections.Generic.ICollection"
    array_instance_type: str = "System.Collections.ObjectModel.Collection"
    dictionary_type: str = "System.Collections.Generic.IDictionary"
    dictionary_instance_type: str = "System.Collections.Generic.Dictionary"
    array_base_type: str = "System.Collections.ObjectModel.Collection"
    dictionary_base_type: str = "System.Collections.Generic.Dictionary"
    class_style: ClassStyle = ClassStyle.POCO
    json_library: Optional[str] = "NewtonsoftJson"
    generate_default_values: bool = True
    generate_data_annotations: bool = True
    excluded_type_names: List[str] = []
    excluded_parameter_names: List[str] = []
    handle_references: bool = False
    generate_immutable_array_properties: bool = False
    generate_immutable_dictionary_properties: bool = False
    json_serializer_settings_transformation_method: Optional[str] = None
    inline_named_arrays: bool = False
    inline_named_dictionaries: bool = False
    inline_named_tuples: bool = True
    inline_named_any: bool = False
    generate_dto_types: bool = True
    generate_optional_properties_as_nullable: bool = False
    generate_nullable_reference_types: bool = False
    template_directory: Optional[str] = None
    checksum_cache_enabled: bool = False

    @field_validator("class_style", mode="before")
    def class_style_check(cls, value):
        """Регистронезависимый разбор, неизвестное значение дает Poco"""
        if isinstance(value, ClassStyle):
            return value
        if isinstance(value, str):
            for style in ClassStyle:
                if style.value.lower() == value.strip().lower():
                    return style
        return ClassStyle.POCO


class CodeGenerators(DocumentModel):
    open_api_to_c_sharp_client: OpenApiToCSharpClient = Field(
        alias="openApiToCSharpClient"
    )


class NSwagDocument(DocumentModel):
    """Документ конфигурации целиком"""

    runtime: Optional[str] = None
    default_variables: Optional[Any] = None
    document_generator: DocumentGenerator
    code_generators: CodeGenerators

    @property
    def settings(self) -> OpenApiToCSharpClient:
        return self.code_generators.open_api_to_c_sharp_client

    @property
    def from_document(self) -> FromDocument:
        return self.document_generator.from_document


def document_fields() -> Dict[str, str]:
    """Поля секции настроек: имя атрибута -> ключ в документе"""
    return {
        name: field.alias or name
        for name, field in OpenApiToCSharpClient.model_fields.items()
    }
