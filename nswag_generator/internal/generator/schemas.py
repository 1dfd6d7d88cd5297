"""
Типы и DTO модели из components/schemas (definitions для Swagger 2)
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Set, Tuple

import jsonref

from ..types.document import ClassStyle
from ..types.models import Class, CodeBlock, CodeFile, Function, Parameter, Variable
from ..types.settings import NormalizedGeneratorSettings
from ..utils.naming import (
    clean_enum_member_name,
    clean_identifier,
    clean_type_name,
    unique_name,
)

logger = logging.getLogger(__name__)

ORDER_ENUMS = 80
ORDER_MODELS = 70
ORDER_ALIASES = 60
ORDER_REBUILD = 55

SCHEMA_PREFIXES = ("#/components/schemas/", "#/definitions/")

STRING_FORMATS = {
    "date-time": "datetime.datetime",
    "date": "datetime.date",
    "time": "datetime.time",
    "duration": "datetime.timedelta",
    "time-span": "datetime.timedelta",
    "binary": "bytes",
}

# Имена из импортов модуля, которые не может занять сгенерированный тип
IMPORTED_NAMES = {
    "Any",
    "Dict",
    "Generic",
    "List",
    "Literal",
    "Mapping",
    "Optional",
    "Protocol",
    "Tuple",
    "TypeVar",
    "Union",
    "BaseModel",
    "ConfigDict",
    "Field",
    "TypeAdapter",
    "T",
}

# Атрибуты BaseModel, которые нельзя переопределять полями
BASE_MODEL_ATTRIBUTES = {
    "construct",
    "copy",
    "dict",
    "fields",
    "from_orm",
    "json",
    "model_config",
    "parse_file",
    "parse_obj",
    "parse_raw",
    "schema",
    "schema_json",
    "update_forward_refs",
    "validate",
}


def resolved(node: Any) -> Any:
    """Объект, на который указывает $ref (или сам объект)"""
    if isinstance(node, jsonref.JsonRef):
        return node.__subject__
    return node


def is_schema(node: Any) -> bool:
    return isinstance(node, jsonref.JsonRef) or isinstance(node, Mapping)


def _plain(node: Any) -> Mapping[str, Any]:
    """Inline схема без $ref, для ссылок пустой словарь"""
    if isinstance(node, jsonref.JsonRef) or not isinstance(node, Mapping):
        return {}
    return node


class SchemaGenerator:
    """Отображение JSON схем на типы Python и генерация DTO"""

    def __init__(
        self,
        spec: Mapping[str, Any],
        settings: NormalizedGeneratorSettings,
        is_swagger2: bool,
        used_names: Set[str],
    ):
        self.spec = spec
        self.settings = settings
        self.is_swagger2 = is_swagger2
        self.used_names = used_names
        self.type_names: Dict[str, str] = {}
        self.public_names: List[str] = []

        for name in self.schemas:
            self.type_names[name] = unique_name(clean_type_name(name), used_names)

    @property
    def schemas(self) -> Mapping[str, Any]:
        if self.is_swagger2:
            return self.spec.get("definitions") or {}
        return (self.spec.get("components") or {}).get("schemas") or {}

    # Типы

    def schema_name(self, ref: jsonref.JsonRef) -> Optional[str]:
        """Имя схемы из components/schemas, на которую указывает ссылка"""
        pointer = ref.__reference__.get("$ref", "")
        for prefix in SCHEMA_PREFIXES:
            if pointer.startswith(prefix):
                name = pointer[len(prefix) :].replace("~1", "/").replace("~0", "~")
                if name in self.type_names:
                    return name
        return None

    def get_type(self, schema: Any) -> Variable:
        """Аннотация типа для схемы"""
        if isinstance(schema, jsonref.JsonRef):
            name = self.schema_name(schema)
            if name is not None:
                return Variable(value=self.type_names[name])
            # Ссылка не на именованную схему: раскрываем
            return self.get_type(schema.__subject__)

        if not isinstance(schema, Mapping) or not schema:
            return Variable(value="Any")

        nullable = bool(schema.get("nullable") or schema.get("x-nullable"))

        schema_type = schema.get("type")
        if isinstance(schema_type, list):
            types = [t for t in schema_type if t != "null"]
            nullable = nullable or len(types) != len(schema_type)
            schema_type = types[0] if len(types) == 1 else None

        enum_values = schema.get("enum")
        if isinstance(enum_values, list) and None in enum_values:
            nullable = True

        result = self._get_base_type(schema, schema_type)
        if nullable and not result.is_optional():
            result = Variable(value=result, wrap_name="Optional")
        return result

    def _get_base_type(self, schema: Mapping[str, Any], schema_type: Any) -> Variable:
        all_of = schema.get("allOf") or []
        if len(all_of) == 1 and not schema.get("properties"):
            return self.get_type(all_of[0])

        variants = list(schema.get("oneOf") or []) + list(schema.get("anyOf") or [])
        if variants:
            return self._get_union(variants)

        enum_values = schema.get("enum")
        if isinstance(enum_values, list) and schema_type not in ("object", "array"):
            values = [v for v in enum_values if v is not None]
            if not values:
                return Variable(value="Any")
            return Variable(value=[repr(v) for v in values], wrap_name="Literal")

        if schema_type == "string":
            return Variable(value=STRING_FORMATS.get(schema.get("format"), "str"))
        if schema_type == "integer":
            return Variable(value="int")
        if schema_type == "number":
            return Variable(value="float")
        if schema_type == "boolean":
            return Variable(value="bool")
        if schema_type == "file":
            return Variable(value="bytes")

        if schema_type == "array" or "items" in schema:
            item = self.get_type(schema.get("items"))
            if self.settings.generate_immutable_array_properties:
                return Variable(value=[item, "..."], wrap_name="Tuple")
            return Variable(value=item, wrap_name="List")

        if (
            schema_type == "object"
            or "properties" in schema
            or "additionalProperties" in schema
        ):
            additional = schema.get("additionalProperties")
            value = (
                self.get_type(additional)
                if is_schema(additional)
                else Variable(value="Any")
            )
            wrap = (
                "Mapping"
                if self.settings.generate_immutable_dictionary_properties
                else "Dict"
            )
            return Variable(value=["str", value], wrap_name=wrap)

        return Variable(value="Any")

    def _get_union(self, variants: Iterable[Any]) -> Variable:
        types: List[Variable] = []
        seen = set()
        nullable = False

        for variant in variants:
            if _plain(variant).get("type") == "null":
                nullable = True
                continue
            variant_type = self.get_type(variant)
            if str(variant_type) not in seen:
                seen.add(str(variant_type))
                types.append(variant_type)

        if not types:
            result = Variable(value="Any")
        elif len(types) == 1:
            result = types[0]
        else:
            result = Variable(value=types, wrap_name="Union")

        if nullable and not result.is_optional():
            result = Variable(value=result, wrap_name="Optional")
        return result

    # DTO

    def _is_excluded(self, name: str) -> bool:
        excluded = self.settings.excluded_type_names
        return name in excluded or self.type_names[name] in excluded

    def _register_public(self, name: str):
        if self.settings.type_access_modifier.lower() != "internal":
            self.public_names.append(name)

    def generate(self, file: CodeFile):
        """Генерация enum, моделей и псевдонимов в файл"""
        enums, models, aliases = [], [], []

        for name, schema in self.schemas.items():
            if self._is_excluded(name):
                logger.debug("Схема %s исключена из генерации", name)
                continue

            if isinstance(schema, jsonref.JsonRef):
                aliases.append(name)
            elif self._is_enum(schema):
                enums.append(name)
            elif self._is_model(schema):
                models.append(name)
            else:
                aliases.append(name)

        for name in enums:
            file.add_class(self._generate_enum(name, self.schemas[name]))

        models = self._ordered(models, self._base_names)
        for name in models:
            file.add_class(self._generate_model(name, self.schemas[name]))

        for name in self._ordered(aliases, self._referenced_names):
            alias_type = self.get_type(self.schemas[name])
            file.add_code_block(
                f"{self.type_names[name]} = {alias_type}", order=ORDER_ALIASES
            )
            self._register_public(self.type_names[name])

        # Отложенные аннотации разрешаются после объявления всех типов
        if models:
            file.add_code_block(
                "\n".join(f"{self.type_names[name]}.model_rebuild()" for name in models),
                order=ORDER_REBUILD,
            )

    @staticmethod
    def _is_enum(schema: Mapping[str, Any]) -> bool:
        values = schema.get("enum")
        return (
            isinstance(values, list)
            and any(v is not None for v in values)
            and schema.get("type") not in ("object", "array")
        )

    @staticmethod
    def _is_model(schema: Mapping[str, Any]) -> bool:
        if schema.get("properties") or schema.get("allOf"):
            return True
        return schema.get("type") == "object" and "additionalProperties" not in schema

    def _ordered(
        self, names: List[str], dependencies: Callable[[Any], List[str]]
    ) -> List[str]:
        """Сортировка: зависимости объявляются раньше зависимых"""
        pending = set(names)
        ordered, visited = [], set()

        def visit(name: str):
            if name in visited or name not in pending:
                return
            visited.add(name)
            for dependency in dependencies(self.schemas[name]):
                visit(dependency)
            ordered.append(name)

        for name in names:
            visit(name)
        return ordered

    def _base_names(self, schema: Any) -> List[str]:
        if isinstance(schema, jsonref.JsonRef):
            return []
        names = []
        for part in schema.get("allOf") or []:
            if isinstance(part, jsonref.JsonRef):
                name = self.schema_name(part)
                if name is not None:
                    names.append(name)
        return names

    def _referenced_names(self, node: Any, found: List[str] = None) -> List[str]:
        if found is None:
            found = []

        if isinstance(node, jsonref.JsonRef):
            name = self.schema_name(node)
            if name is not None:
                found.append(name)
        elif isinstance(node, Mapping):
            for value in node.values():
                self._referenced_names(value, found)
        elif isinstance(node, list):
            for value in node:
                self._referenced_names(value, found)

        return found

    def _generate_enum(self, name: str, schema: Mapping[str, Any]) -> Class:
        class_name = self.type_names[name]
        values = [v for v in schema["enum"] if v is not None]
        is_integer = schema.get("type") == "integer" or all(
            isinstance(v, int) and not isinstance(v, bool) for v in values
        )

        if is_integer:
            is_flags = self.settings.enforce_flag_enums or schema.get("x-enumFlags")
            inherits = ["enum.IntFlag" if is_flags else "enum.IntEnum"]
        else:
            inherits = ["str", "enum.Enum"]

        enum_class = Class(
            name=class_name,
            inherits=inherits,
            description=schema.get("description"),
            order=ORDER_ENUMS,
        )

        # Имена членов из x-enumNames (NSwag) или x-enum-varnames
        member_names = schema.get("x-enumNames") or schema.get("x-enum-varnames") or []
        used: Set[str] = set()
        for index, value in enumerate(values):
            raw_name = member_names[index] if index < len(member_names) else value
            member = unique_name(clean_enum_member_name(str(raw_name)), used)
            enum_class.parameters.append(
                Parameter(
                    name=member,
                    default=Variable(value=repr(value if is_integer else str(value))),
                )
            )

        self._register_public(class_name)
        return enum_class

    def _generate_model(self, name: str, schema: Mapping[str, Any]) -> Class:
        class_name = self.type_names[name]
        bases: List[str] = []
        properties: Dict[str, Any] = {}
        required = set(schema.get("required") or [])

        for part in schema.get("allOf") or []:
            if isinstance(part, jsonref.JsonRef):
                base_name = self.schema_name(part)
                if base_name is not None and not self._is_excluded(base_name):
                    bases.append(self.type_names[base_name])
                    continue
                part = part.__subject__
            if isinstance(part, Mapping):
                properties.update(part.get("properties") or {})
                required.update(part.get("required") or [])

        properties.update(schema.get("properties") or {})

        model = Class(
            name=class_name,
            inherits=bases or ["BaseModel"],
            description=schema.get("description") or schema.get("title"),
            order=ORDER_MODELS,
        )

        used: Set[str] = set()
        has_alias = has_pattern = False
        for property_name, property_schema in properties.items():
            field, alias, pattern = self._create_field(
                property_name, property_schema, property_name in required, used
            )
            model.parameters.append(field)
            has_alias = has_alias or alias
            has_pattern = has_pattern or pattern

        config = self._model_config(schema, has_alias, has_pattern)
        if config:
            model.add_code_block(f"model_config = ConfigDict({config})", order=10)

        if self.settings.generate_json_methods:
            self._add_json_methods(model)

        self._register_public(class_name)
        return model

    def _create_field(
        self, name: str, schema: Any, required: bool, used: Set[str]
    ) -> Tuple[Parameter, bool, bool]:
        """Поле модели: (параметр, есть ли alias, есть ли pattern)"""
        field_name = clean_identifier(name)
        if field_name in BASE_MODEL_ATTRIBUTES:
            field_name = f"{field_name}_"
        field_name = unique_name(field_name, used)

        var_type = self.get_type(schema)
        plain = _plain(schema)

        default = None
        if self.settings.generate_default_values and isinstance(
            plain.get("default"), (str, int, float, bool)
        ):
            default = repr(plain["default"])

        constraints = []
        if self.settings.generate_data_annotations:
            constraints = self._constraints(plain, str(var_type))

        # Необязательное поле (или обязательное, но допускающее отсутствие в JSON)
        if not (required and self.settings.required_properties_must_be_defined):
            if not var_type.is_optional():
                var_type = Variable(value=var_type, wrap_name="Optional")
            if default is None:
                default = "None"

        arguments = []
        if field_name != name:
            arguments.append(f"alias={name!r}")
        arguments.extend(constraints)

        if arguments:
            if default is not None:
                arguments.insert(0, f"default={default}")
            default = f"Field({', '.join(arguments)})"

        field = Parameter(name=field_name, var_type=var_type)
        if default is not None:
            field.set_default(default)

        has_pattern = any(c.startswith("pattern=") for c in constraints)
        return field, field_name != name, has_pattern

    @staticmethod
    def _constraints(schema: Mapping[str, Any], type_name: str) -> List[str]:
        """Ограничения схемы как аргументы Field"""
        constraints = []

        if type_name == "str":
            if "minLength" in schema:
                constraints.append(f"min_length={schema['minLength']!r}")
            if "maxLength" in schema:
                constraints.append(f"max_length={schema['maxLength']!r}")
            if "pattern" in schema:
                constraints.append(f"pattern={schema['pattern']!r}")

        elif type_name in ("int", "float"):
            for key, inclusive, exclusive in (
                ("minimum", "ge", "gt"),
                ("maximum", "le", "lt"),
            ):
                flag = schema.get("exclusiveM" + key[1:])
                if key in schema:
                    name = exclusive if flag is True else inclusive
                    constraints.append(f"{name}={schema[key]!r}")
                # OpenAPI 3.1: exclusiveMinimum/exclusiveMaximum числом
                if isinstance(flag, (int, float)) and not isinstance(flag, bool):
                    constraints.append(f"{exclusive}={flag!r}")

        elif type_name.startswith(("List[", "Tuple[")):
            if "minItems" in schema:
                constraints.append(f"min_length={schema['minItems']!r}")
            if "maxItems" in schema:
                constraints.append(f"max_length={schema['maxItems']!r}")

        return constraints

    def _model_config(
        self, schema: Mapping[str, Any], has_alias: bool, has_pattern: bool
    ) -> str:
        settings = self.settings
        config = []

        if has_alias:
            config.append("populate_by_name=True")
        if (
            settings.class_style == ClassStyle.RECORD
            or settings.generate_native_records
            or settings.property_setter_access_modifier
        ):
            config.append("frozen=True")
        elif settings.class_style in (ClassStyle.INPC, ClassStyle.PRISM):
            config.append("validate_assignment=True")
        if schema.get("additionalProperties"):
            config.append('extra="allow"')
        if has_pattern:
            config.append('regex_engine="python-re"')

        return ", ".join(config)

    @staticmethod
    def _add_json_methods(model: Class):
        model.add_function(
            Function(
                name="to_json",
                parameters=[Parameter(name="self")],
                response="str",
                code=CodeBlock(
                    code="return self.model_dump_json(by_alias=True, exclude_none=True)"
                ),
                order=-10,
            )
        )
        model.add_function(
            Function(
                name="from_json",
                parameters=[
                    Parameter(name="cls"),
                    Parameter(
                        name="data",
                        var_type=Variable(value=["str", "bytes"], wrap_name="Union"),
                    ),
                ],
                response=model.name,
                decorators=["@classmethod"],
                code=CodeBlock(code="return cls.model_validate_json(data)"),
                order=-10,
            )
        )
