import hashlib
import json
import logging
import re
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple

import jsonref

from ..parser.openapi import ApiDescription
from ..types.models import Class, CodeBlock, CodeFile, Function, Parameter, Variable
from ..types.settings import JsonLibrary, NormalizedGeneratorSettings
from ..utils.naming import (
    clean_identifier,
    clean_type_name,
    pascal_case,
    snake_case,
    unique_name,
)
from .operation_names import get_strategy
from .schemas import IMPORTED_NAMES, SchemaGenerator, resolved
from .templates import GENERATOR_NAME, GENERATOR_VERSION, Templates

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

ORDER_ALL = 100
ORDER_EXCEPTION = 90
ORDER_RESPONSE = 85
ORDER_HELPERS = 50
ORDER_INTERFACES = 40
ORDER_CLIENTS = 30

# Порядок членов клиента
ORDER_INIT = 100
ORDER_PROPERTIES = 90
ORDER_OPERATIONS = 50
ORDER_HOOKS = 20
ORDER_INTERNALS = 10
ORDER_DISPOSE = 5

_PATH_PARAMETER = re.compile(r"\{([^}]+)\}")

# Члены клиента, которые не может занять метод операции
CLIENT_MEMBERS = {
    "_send",
    "_send_sync",
    "_url",
    "aclose",
    "base_url",
    "create_http_client",
    "create_http_request",
    "json_serializer_settings",
    "prepare_request",
    "process_response",
    "update_json_serializer_settings",
}


def _media_kind(media_type: str) -> str:
    """json, form, text или binary по media type"""
    media_type = media_type.split(";")[0].strip().lower()
    if media_type in ("application/json", "text/json", "*/*") or media_type.endswith(
        "+json"
    ):
        return "json"
    if media_type in ("multipart/form-data", "application/x-www-form-urlencoded"):
        return "form"
    if media_type.startswith("text/"):
        return "text"
    return "binary"


def _pick_media_type(content: Mapping[str, Any]) -> Tuple[Optional[str], Any]:
    """JSON предпочтительнее остальных media type"""
    for media_type, media in content.items():
        if _media_kind(media_type) == "json":
            return media_type, media
    for media_type, media in content.items():
        return media_type, media
    return None, None


@dataclass
class OperationParameter:
    """Параметр операции в описании и в сигнатуре метода"""

    name: str
    py_name: str
    location: str
    var_type: Variable
    required: bool
    description: str = ""
    kind: str = "json"


@dataclass
class Operation:
    path: str
    method: str
    spec: Mapping[str, Any]
    client_name: str
    name: str
    raw_parameters: List[Any] = field(default_factory=list)
    parameters: List[OperationParameter] = field(default_factory=list)


class ClientGenerator:
    """Генератор модуля Python клиента из OpenAPI описания"""

    def __init__(self, api: ApiDescription, settings: NormalizedGeneratorSettings):
        self.api = api
        self.settings = settings
        self.spec = jsonref.replace_refs(api.document)
        self.templates = Templates.load(settings.template_directory)

        self.file = CodeFile(file_name="client.py")
        self.public_names: List[str] = []

        self.exception_class = clean_type_name(
            settings.exception_class.replace("{controller}", "")
        )
        self.response_class = clean_type_name(
            settings.response_class.replace("{controller}", "")
        )
        self.used_names: Set[str] = set(IMPORTED_NAMES)
        self.used_names.update([self.exception_class, self.response_class])

        self.schemas = SchemaGenerator(
            self.spec, settings, api.is_swagger2, self.used_names
        )

    @property
    def types_public(self) -> bool:
        return self.settings.type_access_modifier.lower() != "internal"

    @property
    def clients_public(self) -> bool:
        return self.settings.client_class_access_modifier.lower() != "internal"

    def generate(self) -> CodeFile:
        """Основная генерация"""
        self._create_module_header()

        if self.settings.generate_dto_types:
            self.schemas.generate(self.file)

        clients = self._group_by_client(self._collect_operations())
        emit_classes = (
            self.settings.generate_client_classes
            and not self.settings.suppress_client_classes_output
        )
        emit_interfaces = (
            self.settings.generate_client_interfaces
            and not self.settings.suppress_client_interfaces_output
        )

        if clients and (emit_classes or emit_interfaces):
            self._create_shared_code()

        for client_name, operations in clients.items():
            class_name = unique_name(
                clean_type_name(
                    self.settings.class_name.replace(
                        "{controller}", pascal_case(client_name)
                    )
                ),
                self.used_names,
            )
            methods = self._create_methods(class_name, operations)

            if emit_interfaces:
                self._generate_interface(class_name, methods)
            if emit_classes:
                self._generate_client(class_name, methods)

        self._finalize()
        return self.file

    # Заголовок, импорты, общий код

    def _create_module_header(self):
        checksum = ""
        if self.settings.checksum_cache_enabled:
            digest = hashlib.sha256(
                json.dumps(self.api.document, sort_keys=True, default=str).encode(
                    "utf-8"
                )
            ).hexdigest()
            checksum = f", checksum {digest}"

        self.file.header.extend(
            self.templates.render(
                "file_header",
                generator=GENERATOR_NAME,
                version=GENERATOR_VERSION,
                checksum=checksum,
            ).splitlines()
        )

        docstring = [self.settings.namespace] if self.settings.namespace else []
        if self.api.title:
            version = (self.api.document.get("info") or {}).get("version", "")
            docstring.append(f"{self.api.title} {version}".strip())
        self.file.docstring.extend(docstring)

        self.file.imports.extend(self.templates.render("imports").splitlines())
        usages = list(self.settings.additional_namespace_usages) + list(
            self.settings.additional_contract_namespace_usages
        )
        for usage in usages:
            usage = usage.strip()
            if not usage:
                continue
            if usage.startswith(("import ", "from ")):
                self.file.imports.append(usage)
            else:
                self.file.imports.append(f"import {usage}")

    def _create_shared_code(self):
        """Исключение, обертка ответа и функции разбора ответа"""
        settings = self.settings

        if settings.generate_exception_classes:
            self.file.add_code_block(
                self.templates.render("exception", exception_class=self.exception_class),
                order=ORDER_EXCEPTION,
            )
            if self.types_public:
                self.public_names.append(self.exception_class)

        if settings.wrap_responses and settings.generate_response_classes:
            self.file.add_code_block(
                self.templates.render("response", response_class=self.response_class),
                order=ORDER_RESPONSE,
            )
            if self.types_public:
                self.public_names.append(self.response_class)

        read_statement = self.templates.render(
            "read_json_bytes"
            if settings.json_library == JsonLibrary.SYSTEM_TEXT_JSON
            else "read_json"
        )
        deserialize = (
            "deserialize_wrapped" if settings.wrap_dto_exceptions else "deserialize"
        )

        helpers = [
            self.templates.render("helpers"),
            self.templates.render("read_body", read_statement=read_statement),
            self.templates.render(deserialize, exception_class=self.exception_class),
            self.templates.render(
                "handle_response",
                response_class=self.response_class,
                exception_class=self.exception_class,
            ),
        ]
        self.file.add_code_block("\n\n\n".join(helpers), order=ORDER_HELPERS)

    def _finalize(self):
        names = self.schemas.public_names + self.public_names
        if not names:
            return

        self.file.add_code_block(
            "__all__ = [\n" + "".join(f'\t"{name}",\n' for name in names) + "]",
            order=ORDER_ALL,
        )

    # Операции

    def _collect_operations(self) -> List[Operation]:
        strategy = get_strategy(self.settings.operation_name_generator)
        operations = []

        for path, path_item in (self.spec.get("paths") or {}).items():
            path_item = resolved(path_item)
            if not isinstance(path_item, Mapping):
                continue

            shared = list(path_item.get("parameters") or [])
            for method in HTTP_METHODS:
                spec = path_item.get(method)
                if spec is None:
                    continue

                operations.append(
                    Operation(
                        path=path,
                        method=method,
                        spec=spec,
                        client_name=strategy.get_client_name(path, method, spec),
                        name=strategy.get_operation_name(path, method, spec),
                        raw_parameters=self._merge_parameters(
                            shared, spec.get("parameters") or []
                        ),
                    )
                )

        logger.debug("Найдено операций: %d", len(operations))
        return operations

    @staticmethod
    def _merge_parameters(shared: List[Any], own: List[Any]) -> List[Any]:
        """Параметры пути дополняются параметрами операции (по name и in)"""
        merged: Dict[Tuple[str, str], Any] = OrderedDict()
        for parameter in shared + list(own):
            parameter = resolved(parameter)
            merged[(parameter.get("name"), parameter.get("in"))] = parameter
        return list(merged.values())

    @staticmethod
    def _group_by_client(operations: List[Operation]) -> Dict[str, List[Operation]]:
        clients: Dict[str, List[Operation]] = OrderedDict()
        for operation in operations:
            clients.setdefault(pascal_case(operation.client_name), []).append(
                operation
            )
        return clients

    def _create_parameters(self, operation: Operation) -> List[OperationParameter]:
        excluded = set(self.settings.excluded_parameter_names)
        used: Set[str] = set()
        parameters = []

        consumes = operation.spec.get("consumes") or self.spec.get("consumes") or []
        for raw in operation.raw_parameters:
            name, location = raw.get("name"), raw.get("in")
            if not name or name in excluded:
                continue

            # Swagger 2: тело запроса как параметр in: body
            if location == "body":
                schema = raw.get("schema")
                kind = _media_kind(consumes[0]) if consumes else "json"
                var_type = (
                    Variable(value="bytes")
                    if kind == "binary"
                    else self.schemas.get_type(schema)
                )
            else:
                schema = raw.get("schema") if "schema" in raw else raw
                kind = "form" if location == "formData" else "json"
                var_type = self.schemas.get_type(schema)

            parameters.append(
                OperationParameter(
                    name=name,
                    py_name=unique_name(clean_identifier(name), used),
                    location=location,
                    var_type=var_type,
                    required=bool(raw.get("required")) or location == "path",
                    description=raw.get("description") or "",
                    kind=kind,
                )
            )

        request_body = operation.spec.get("requestBody")
        if request_body is not None:
            request_body = resolved(request_body)
            body_name = request_body.get("x-name") or "body"

            if body_name not in excluded:
                media_type, media = _pick_media_type(request_body.get("content") or {})
                kind = _media_kind(media_type) if media_type else "json"

                if kind == "binary":
                    var_type = Variable(value="bytes")
                elif kind == "text":
                    var_type = Variable(value="str")
                else:
                    var_type = self.schemas.get_type((media or {}).get("schema"))

                parameters.append(
                    OperationParameter(
                        name=body_name,
                        py_name=unique_name(clean_identifier(body_name), used),
                        location="body",
                        var_type=var_type,
                        required=bool(request_body.get("required")),
                        description=request_body.get("description") or "",
                        kind=kind,
                    )
                )

        return parameters

    def _response_type(self, response: Mapping[str, Any]) -> Optional[str]:
        # Swagger 2: schema прямо в ответе
        if "schema" in response:
            return str(self.schemas.get_type(response["schema"]))

        media_type, media = _pick_media_type(response.get("content") or {})
        if media_type is None:
            return None

        kind = _media_kind(media_type)
        if kind == "binary":
            return "bytes"
        if kind == "text":
            return "str"
        if not media or media.get("schema") is None:
            return None
        return str(self.schemas.get_type(media["schema"]))

    def _responses(
        self, operation: Operation
    ) -> Tuple[Dict[str, Optional[str]], Dict[str, Tuple[str, Optional[str]]]]:
        """Успешные ответы (код -> тип) и ошибки (код -> (описание, тип))"""
        success: Dict[str, Optional[str]] = OrderedDict()
        errors: Dict[str, Tuple[str, Optional[str]]] = OrderedDict()

        for status, response in (operation.spec.get("responses") or {}).items():
            status = str(status)
            status = "default" if status.lower() == "default" else status.upper()
            response = resolved(response)
            response_type = self._response_type(response)

            if status.startswith("2"):
                success[status] = response_type
            else:
                errors[status] = (response.get("description") or "", response_type)

        return success, errors

    def _accept_header(self, operation: Operation) -> Optional[str]:
        for status, response in (operation.spec.get("responses") or {}).items():
            if not str(status).startswith("2"):
                continue
            media_type, _ = _pick_media_type(resolved(response).get("content") or {})
            if media_type:
                return media_type

        produces = operation.spec.get("produces") or self.spec.get("produces") or []
        return produces[0] if produces else None

    @staticmethod
    def _return_type(success: Mapping[str, Optional[str]]) -> str:
        types = []
        for response_type in success.values():
            if response_type is not None and response_type not in types:
                types.append(response_type)

        if not types:
            return "None"
        if len(types) == 1:
            if None in success.values() and not types[0].startswith("Optional["):
                return f"Optional[{types[0]}]"
            return types[0]
        return f"Union[{', '.join(types)}]"

    # Методы

    def _method_key(self, class_name: str, operation_name: str) -> Set[str]:
        return {
            f"{class_name}.{operation_name}",
            f"{class_name}.{snake_case(operation_name)}",
        }

    def _create_methods(
        self, class_name: str, operations: List[Operation]
    ) -> List[Tuple[Function, Optional[Function], bool]]:
        """(асинхронный метод, синхронный метод, protected) для каждой операции"""
        settings = self.settings
        used: Set[str] = set(CLIENT_MEMBERS)
        operation_names: Set[str] = set()
        methods = []

        for operation in operations:
            operation.name = unique_name(
                pascal_case(operation.name) or "Index", operation_names
            )
            operation.parameters = self._create_parameters(operation)

            keys = self._method_key(class_name, operation.name)
            protected = bool(keys & set(settings.protected_methods))
            wrap = settings.wrap_responses and (
                not settings.wrap_response_methods
                or bool(keys & set(settings.wrap_response_methods))
            )

            method_name = clean_identifier(operation.name)
            if protected:
                method_name = f"_{method_name}"
            method_name = unique_name(method_name, used)

            async_method = self._create_method(method_name, operation, wrap, sync=False)
            sync_method = None
            if settings.generate_sync_methods:
                sync_method = self._create_method(
                    unique_name(f"{method_name}_sync", used), operation, wrap, sync=True
                )

            methods.append((async_method, sync_method, protected))

        return methods

    def _create_method(
        self, name: str, operation: Operation, wrap: bool, sync: bool
    ) -> Function:
        success, errors = self._responses(operation)

        return_type = self._return_type(success)
        if wrap:
            return_type = f"{self.response_class}[{return_type}]"

        signature = [Parameter(name="self")]
        parameter_docs = {}
        for parameter in operation.parameters:
            var_type = parameter.var_type
            default = None
            if not parameter.required:
                if not var_type.is_optional():
                    var_type = Variable(value=var_type, wrap_name="Optional")
                if self.settings.generate_optional_parameters:
                    default = Variable(value="None")

            signature.append(
                Parameter(name=parameter.py_name, var_type=var_type, default=default)
            )
            if parameter.description:
                parameter_docs[parameter.py_name] = parameter.description

        description = operation.spec.get("summary") or operation.spec.get(
            "description"
        )
        raises_doc = []
        if self.settings.generate_exception_classes:
            raises_doc.append(
                f"{self.exception_class}: Ответ сервера не соответствует описанию API"
            )

        return Function(
            name=name,
            parameters=signature,
            response=return_type,
            async_def=not sync,
            description=description,
            parameter_docs=parameter_docs,
            raises_doc=raises_doc if description or parameter_docs else [],
            code=CodeBlock(
                code=self._method_body(operation, success, errors, wrap, sync)
            ),
            order=ORDER_OPERATIONS,
        )

    def _url_expression(self, operation: Operation) -> str:
        """Выражение пути с подставленными параметрами"""
        by_name = {
            p.name: p.py_name for p in operation.parameters if p.location == "path"
        }

        pieces = []
        position = 0
        for match in _PATH_PARAMETER.finditer(operation.path):
            if match.group(1) not in by_name:
                continue
            if match.start() > position:
                pieces.append(repr(operation.path[position : match.start()]))
            pieces.append(f"quote(_to_str({by_name[match.group(1)]}), safe=\"\")")
            position = match.end()

        if position < len(operation.path) or not pieces:
            pieces.append(repr(operation.path[position:]))

        return " + ".join(pieces)

    def _method_body(
        self,
        operation: Operation,
        success: Mapping[str, Optional[str]],
        errors: Mapping[str, Tuple[str, Optional[str]]],
        wrap: bool,
        sync: bool,
    ) -> str:
        settings = self.settings
        lines = []
        by_location: Dict[str, List[OperationParameter]] = {}
        for parameter in operation.parameters:
            by_location.setdefault(parameter.location, []).append(parameter)

        for parameter in by_location.get("path", []):
            lines.extend(
                [
                    f"if {parameter.py_name} is None:",
                    f"\traise ValueError({(parameter.py_name + ' is required.')!r})",
                ]
            )

        lines.append(f"url_ = self._url({self._url_expression(operation)})")

        accept = self._accept_header(operation)
        lines.append(
            f"headers_: Dict[str, str] = {{'Accept': {accept!r}}}"
            if accept
            else "headers_: Dict[str, str] = {}"
        )
        for parameter in by_location.get("header", []):
            lines.extend(
                [
                    f"if {parameter.py_name} is not None:",
                    f"\theaders_[{parameter.name!r}] = _to_str({parameter.py_name})",
                ]
            )

        cookies = by_location.get("cookie", [])
        if cookies:
            lines.append("cookies_ = []")
            for parameter in cookies:
                lines.extend(
                    [
                        f"if {parameter.py_name} is not None:",
                        f"\tcookies_.append({parameter.name + '='!r} + _to_str({parameter.py_name}))",
                    ]
                )
            lines.extend(["if cookies_:", "\theaders_['Cookie'] = '; '.join(cookies_)"])

        arguments = [repr(operation.method.upper()), "url_"]

        query = by_location.get("query", [])
        if query:
            items = ", ".join(f"({p.name!r}, {p.py_name})" for p in query)
            arguments.append(
                f"params=_query([{items}], {settings.query_null_value!r})"
            )
        arguments.append("headers=headers_")

        form = by_location.get("formData", [])
        if form:
            fields = ", ".join(f"{p.name!r}: {p.py_name}" for p in form)
            lines.append(
                f"data_, files_ = _form({{{fields}}}, self._serializer_settings)"
            )
            arguments.extend(["data=data_", "files=files_ or None"])

        for body in by_location.get("body", []):
            if body.kind == "form":
                lines.append(
                    f"data_, files_ = _form({body.py_name}, self._serializer_settings)"
                )
                arguments.extend(["data=data_", "files=files_ or None"])
            elif body.kind in ("text", "binary"):
                arguments.append(f"content={body.py_name}")
            else:
                arguments.append(
                    f"json=_serialize({body.py_name}, self._serializer_settings)"
                )

        http_client = "self._sync_http_client" if sync else "self._http_client"
        if settings.use_http_request_message_creation_method:
            builder = f"self.create_http_request({http_client}, "
        else:
            builder = f"{http_client}.build_request("
        lines.append(
            "request_ = "
            + builder
            + "\n"
            + "".join(f"\t{argument},\n" for argument in arguments)
            + ")"
        )

        send = "self._send_sync(request_)" if sync else "await self._send(request_)"
        lines.append(f"response_ = {send}")

        success_literal = (
            "{" + ", ".join(f"{k!r}: {v or 'None'}" for k, v in success.items()) + "}"
        )
        errors_literal = (
            "{"
            + ", ".join(f"{k!r}: ({d!r}, {t or 'None'})" for k, (d, t) in errors.items())
            + "}"
        )
        lines.append(
            f"return _handle_response(response_, {success_literal}, {errors_literal}, {wrap})"
        )

        return "\n".join(lines)

    # Классы

    def _default_base_url(self) -> str:
        if self.api.is_swagger2:
            host = self.spec.get("host")
            base_path = self.spec.get("basePath") or ""
            if not host:
                return base_path.rstrip("/")
            schemes = self.spec.get("schemes") or ["http"]
            return f"{schemes[0]}://{host}{base_path}".rstrip("/")

        servers = self.spec.get("servers") or []
        if not servers:
            return ""

        url = servers[0].get("url") or ""
        for name, variable in (servers[0].get("variables") or {}).items():
            url = url.replace("{" + name + "}", str(variable.get("default", "")))
        return url.rstrip("/")

    def _generate_interface(
        self, class_name: str, methods: List[Tuple[Function, Optional[Function], bool]]
    ):
        interface_name = unique_name(f"I{class_name}", self.used_names)
        inherits = ["Protocol"]
        if self.settings.client_base_interface:
            inherits.insert(0, self.settings.client_base_interface)

        interface = Class(name=interface_name, inherits=inherits, order=ORDER_INTERFACES)
        for async_method, sync_method, protected in methods:
            if protected:
                continue
            for method in filter(None, (async_method, sync_method)):
                interface.add_function(
                    method.model_copy(
                        update={
                            "code": CodeBlock(code="..."),
                            "description": None,
                            "parameter_docs": {},
                            "raises_doc": [],
                        }
                    )
                )

        self.file.add_class(interface)
        if self.clients_public:
            self.public_names.append(interface_name)

    def _generate_client(
        self, class_name: str, methods: List[Tuple[Function, Optional[Function], bool]]
    ):
        settings = self.settings
        inherits = []
        if settings.client_base_class:
            inherits.append(settings.client_base_class)

        client = Class(
            name=class_name,
            inherits=inherits,
            description=self.api.title or None,
            order=ORDER_CLIENTS,
        )

        client.add_function(self._create_init())

        if settings.expose_json_serializer_settings:
            client.add_function(
                Function(
                    name="json_serializer_settings",
                    parameters=[Parameter(name="self")],
                    response="Dict[str, Any]",
                    decorators=["@property"],
                    code=CodeBlock(code="return self._serializer_settings"),
                    order=ORDER_PROPERTIES,
                )
            )

        if settings.use_base_url and settings.generate_base_url_property:
            client.add_code_block(
                self.templates.render("base_url_property"), order=ORDER_PROPERTIES
            )

        for async_method, sync_method, _ in methods:
            client.add_function(async_method)
            if sync_method is not None:
                client.add_function(sync_method)

        self._add_hooks(client)
        self._add_internals(client)

        if settings.dispose_http_client:
            close_sync = (
                "\n        self._sync_http_client.close()"
                if settings.generate_sync_methods
                else ""
            )
            client.add_code_block(
                self.templates.render(
                    "dispose", close_sync=close_sync, class_name=class_name
                ),
                order=ORDER_DISPOSE,
            )

        self.file.add_class(client)
        if self.clients_public:
            self.public_names.append(class_name)

    def _create_init(self) -> Function:
        settings = self.settings
        parameters = [Parameter(name="self")]
        lines = []

        if settings.configuration_class:
            parameters.append(
                Parameter(name="configuration", var_type=settings.configuration_class)
            )
            if settings.client_base_class:
                lines.append("super().__init__(configuration)")
            else:
                lines.append("self.configuration = configuration")
        elif settings.client_base_class:
            lines.append("super().__init__()")

        if settings.use_base_url:
            parameters.append(
                Parameter(
                    name="base_url",
                    var_type="str",
                    default=repr(self._default_base_url()),
                )
            )
            lines.append("self._base_url = base_url")

        if settings.inject_http_client:
            parameters.append(Parameter(name="http_client", var_type="httpx.AsyncClient"))
            lines.append("self._http_client = http_client")
            if settings.generate_sync_methods:
                parameters.append(
                    Parameter(name="sync_http_client", var_type="httpx.Client")
                )
                lines.append("self._sync_http_client = sync_http_client")
            lines.append("self._owns_http_client = False")
        else:
            if settings.use_http_client_creation_method:
                lines.append("self._http_client = self.create_http_client()")
            else:
                lines.append("self._http_client = httpx.AsyncClient()")
            if settings.generate_sync_methods:
                lines.append("self._sync_http_client = httpx.Client()")
            lines.append("self._owns_http_client = True")

        lines.append(
            "self._serializer_settings: Dict[str, Any] = "
            "{'by_alias': True, 'exclude_none': True}"
        )
        if settings.json_serializer_settings_transformation_method:
            lines.append(
                "self._serializer_settings = "
                f"{settings.json_serializer_settings_transformation_method}"
                "(self._serializer_settings)"
            )
        if settings.generate_update_json_serializer_settings_method:
            lines.append("self.update_json_serializer_settings(self._serializer_settings)")

        return Function(
            name="__init__",
            parameters=parameters,
            code=CodeBlock(code="\n".join(lines)),
            order=ORDER_INIT,
        )

    def _add_hooks(self, client: Class):
        """Точки расширения; при базовом классе их реализует он"""
        settings = self.settings
        if settings.client_base_class:
            return

        if settings.generate_update_json_serializer_settings_method:
            client.add_function(
                Function(
                    name="update_json_serializer_settings",
                    parameters=[
                        Parameter(name="self"),
                        Parameter(name="settings", var_type="Dict[str, Any]"),
                    ],
                    code=CodeBlock(code="pass"),
                    order=ORDER_HOOKS,
                )
            )

        hooks_async = settings.generate_prepare_request_and_process_response_as_async_methods
        client.add_function(
            Function(
                name="prepare_request",
                parameters=[
                    Parameter(name="self"),
                    Parameter(name="request", var_type="httpx.Request"),
                ],
                async_def=hooks_async,
                code=CodeBlock(code="pass"),
                order=ORDER_HOOKS,
            )
        )
        client.add_function(
            Function(
                name="process_response",
                parameters=[
                    Parameter(name="self"),
                    Parameter(name="response", var_type="httpx.Response"),
                ],
                async_def=hooks_async,
                code=CodeBlock(code="pass"),
                order=ORDER_HOOKS,
            )
        )

        if settings.use_http_client_creation_method and not settings.inject_http_client:
            client.add_function(
                Function(
                    name="create_http_client",
                    parameters=[Parameter(name="self")],
                    response="httpx.AsyncClient",
                    code=CodeBlock(code="return httpx.AsyncClient()"),
                    order=ORDER_HOOKS,
                )
            )

        if settings.use_http_request_message_creation_method:
            client.add_function(
                Function(
                    name="create_http_request",
                    parameters=[
                        Parameter(name="self"),
                        Parameter(name="client", var_type="Any"),
                        Parameter(name="method", var_type="str"),
                        Parameter(name="url", var_type="str"),
                        Parameter(name="**kwargs", var_type="Any"),
                    ],
                    response="httpx.Request",
                    code=CodeBlock(code="return client.build_request(method, url, **kwargs)"),
                    order=ORDER_HOOKS,
                )
            )

    def _add_internals(self, client: Class):
        settings = self.settings
        hooks_async = settings.generate_prepare_request_and_process_response_as_async_methods

        if settings.use_base_url:
            url_code = "return self._base_url.rstrip('/') + path"
        else:
            url_code = "return path"
        client.add_function(
            Function(
                name="_url",
                parameters=[Parameter(name="self"), Parameter(name="path", var_type="str")],
                response="str",
                code=CodeBlock(code=url_code),
                order=ORDER_INTERNALS,
            )
        )

        hook_call = "await " if hooks_async else ""
        client.add_function(
            Function(
                name="_send",
                parameters=[
                    Parameter(name="self"),
                    Parameter(name="request", var_type="httpx.Request"),
                ],
                response="httpx.Response",
                async_def=True,
                code=CodeBlock(
                    code="\n".join(
                        [
                            f"{hook_call}self.prepare_request(request)",
                            "response = await self._http_client.send(request)",
                            f"{hook_call}self.process_response(response)",
                            "return response",
                        ]
                    )
                ),
                order=ORDER_INTERNALS,
            )
        )

        if settings.generate_sync_methods:
            # Асинхронные хуки из синхронных методов не вызываются
            lines = ["response = self._sync_http_client.send(request)", "return response"]
            if not hooks_async:
                lines = (
                    ["self.prepare_request(request)", lines[0]]
                    + ["self.process_response(response)", lines[1]]
                )
            client.add_function(
                Function(
                    name="_send_sync",
                    parameters=[
                        Parameter(name="self"),
                        Parameter(name="request", var_type="httpx.Request"),
                    ],
                    response="httpx.Response",
                    code=CodeBlock(code="\n".join(lines)),
                    order=ORDER_INTERNALS,
                )
            )


def generate_client_code(
    api: ApiDescription, settings: NormalizedGeneratorSettings
) -> str:
    """Исходный код модуля клиента для описания API"""
    return str(ClientGenerator(api, settings).generate())
