from textwrap import indent
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, field_validator

INDENT = "    "


class Variable(BaseModel):
    """Выражение типа: значение и необязательная обертка (List[...], Optional[...])"""

    value: list[Union["Variable", str]] = []
    wrap_name: Optional[str] = None

    @field_validator("value", mode="before")
    def value_check(cls, value):
        if not isinstance(value, list):
            return [value]
        return value

    def __str__(self):
        _value = ", ".join(str(_) for _ in self.value)

        if self.wrap_name is None:
            return _value

        return f"{self.wrap_name}[{_value}]" if _value else "Any"

    def is_optional(self) -> bool:
        return self.wrap_name == "Optional" or str(self) in ("Any", "None")


class Parameter(BaseModel):
    name: str

    default: Optional[Variable] = None
    var_type: Optional[Variable] = None

    order: int = 0

    @field_validator("default", "var_type", mode="before")
    def variable_check(cls, value):
        if isinstance(value, str):
            return Variable(value=value)
        return value

    def set_default(self, default: Union[str, Variable], **kwargs):
        if isinstance(default, str):
            default = Variable(value=default, **kwargs)

        self.default = default

    def __str__(self):
        return (
            self.name
            + (f": {self.var_type}" if self.var_type else "")
            + (f" = {self.default}" if self.default else "")
        )


class CodeBlock(BaseModel):
    order: int = 0
    code: str = "pass"

    def __str__(self):
        return self.code.replace("\t", INDENT)


def render_docstring(lines: List[str]) -> str:
    lines = [
        line.replace("\\", "\\\\").replace('"""', "'''").rstrip() for line in lines
    ]
    while lines and not lines[-1]:
        lines.pop()

    if not lines:
        return ""

    if lines[-1].endswith('"'):
        lines[-1] += " "

    if len(lines) == 1:
        return f'"""{lines[0]}"""'

    return '"""' + "\n".join(lines) + '\n"""'


class Function(BaseModel):
    name: str
    parameters: list[Parameter] = []
    response: str = "None"

    async_def: bool = False
    decorators: list[str] = []

    description: Optional[str] = None
    parameter_docs: Dict[str, str] = {}
    returns_doc: Optional[str] = None
    raises_doc: List[str] = []

    code: CodeBlock = CodeBlock(order=0, code="pass")
    order: int = 0

    def __str__(self) -> str:
        # Параметры без значений по умолчанию идут первыми
        parameters = sorted(self.parameters, key=lambda x: x.default is not None)

        if len(parameters) > 1:
            signature = (
                "\n" + "".join(f"{INDENT}{parameter},\n" for parameter in parameters)
            )
        else:
            signature = ", ".join(map(str, parameters))

        header = (
            f"{'async ' if self.async_def else ''}def {self.name}"
            f"({signature}) -> {self.response}:"
        )

        body = [self._generate_docstring(), str(self.code)]

        return "\n".join(
            self.decorators
            + [header, indent("\n".join(filter(bool, body)), INDENT)]
        )

    def _generate_docstring(self) -> str:
        """Docstring из описания операции"""
        if not self.description and not self.parameter_docs:
            return ""

        lines = (self.description or "").strip().splitlines() or [self.name]

        documented = [p for p in self.parameters if p.name in self.parameter_docs]
        if documented:
            lines.extend(["", "Args:"])
            for param in documented:
                lines.append(f"{INDENT}{param.name}: {self.parameter_docs[param.name]}")

        if self.returns_doc:
            lines.extend(["", "Returns:", f"{INDENT}{self.returns_doc}"])

        if self.raises_doc:
            lines.extend(["", "Raises:"])
            lines.extend(f"{INDENT}{line}" for line in self.raises_doc)

        return render_docstring(lines)

    def set_code_block(self, code_block: Union["CodeBlock", str]) -> "Function":
        if isinstance(code_block, str):
            code_block = CodeBlock(code=code_block)

        self.code = code_block
        return self


class Class(BaseModel):
    name: str

    functions: dict[str, "Function"] = {}
    classes: dict[str, "Class"] = {}

    code_blocks: list["CodeBlock"] = []
    parameters: list[Parameter] = []

    inherits: list[str] = []
    description: Optional[str] = None

    order: int = 0

    def __str__(self) -> str:
        body = ""
        if self.description:
            body = render_docstring(self.description.strip().splitlines())

        previous = None
        for member in sorted(
            self.parameters
            + self.code_blocks
            + list(self.functions.values())
            + list(self.classes.values()),
            key=lambda x: x.order,
            reverse=True,
        ):
            # Поля идут подряд, остальное отделяется пустой строкой
            if body:
                both_fields = isinstance(member, Parameter) and isinstance(
                    previous, Parameter
                )
                body += "\n" if both_fields else "\n\n"
            body += str(member)
            previous = member

        body = body or "pass"

        return (
            f"class {self.name}"
            + (f"({', '.join(self.inherits)})" if self.inherits else "")
            + ":\n"
            + indent(body, INDENT)
        )

    def add_function(self, function: Union["Function", str], **kwargs) -> "Function":
        if isinstance(function, str):
            function = Function(name=function, **kwargs)

        self.functions[function.name] = function
        return function

    def add_class(self, cls: Union["Class", str], **kwargs) -> "Class":
        if isinstance(cls, str):
            cls = Class(name=cls, **kwargs)

        self.classes[cls.name] = cls
        return cls

    def add_code_block(self, code_block: Union["CodeBlock", str], **kwargs) -> "Class":
        if isinstance(code_block, str):
            code_block = CodeBlock(code=code_block, **kwargs)

        self.code_blocks.append(code_block)
        return self


class CodeFile(BaseModel):
    file_name: str

    header: list[str] = []
    docstring: list[str] = []
    imports: list[str] = []
    functions: dict[str, "Function"] = {}
    classes: dict[str, "Class"] = {}
    code_blocks: list["CodeBlock"] = []

    def __str__(self):
        members = sorted(
            self.code_blocks
            + list(self.functions.values())
            + list(self.classes.values()),
            key=lambda x: x.order,
            reverse=True,
        )

        head = "\n\n".join(
            filter(
                bool,
                [
                    "\n".join(self.header),
                    render_docstring(self.docstring),
                    "\n".join(self.imports),
                ],
            )
        )

        return (
            "\n\n\n".join(filter(bool, [head] + [str(_) for _ in members])) + "\n"
        ).replace("\t", INDENT)

    def add_function(self, function: Union["Function", str], **kwargs) -> "Function":
        if isinstance(function, str):
            function = Function(name=function, **kwargs)

        self.functions[function.name] = function
        return function

    def add_class(self, cls: Union["Class", str], **kwargs) -> "Class":
        if isinstance(cls, str):
            cls = Class(name=cls, **kwargs)

        self.classes[cls.name] = cls
        return cls

    def add_code_block(
        self, code_block: Union["CodeBlock", str], **kwargs
    ) -> "CodeFile":
        if isinstance(code_block, str):
            code_block = CodeBlock(code=code_block, **kwargs)

        self.code_blocks.append(code_block)
        return self


Class.model_rebuild()
CodeFile.model_rebuild()
