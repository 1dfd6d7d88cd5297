"""Утилиты для имен в генерируемом коде"""

import keyword
import re

# Имена модулей и встроенных типов, которые использует сгенерированный код
RESERVED_NAMES = {
    "self",
    "print",
    "exec",
    "base64",
    "datetime",
    "enum",
    "httpx",
    "quote",
    "bool",
    "bytes",
    "float",
    "int",
    "str",
}


def snake_case(name: str) -> str:
    """
    Преобразование в snake_case с учетом аббревиатур.

    Examples:
        >>> snake_case("HTTPValidationError")
        'http_validation_error'
        >>> snake_case("getPetById")
        'get_pet_by_id'
    """
    name = re.sub(r"[^0-9a-zA-Z_]", "_", name)
    # Подчеркивание перед заглавной буквой, за которой идут строчные
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    # Между строчной буквой (или цифрой) и заглавной
    s2 = re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1)
    s3 = re.sub("_+", "_", s2)
    return s3.strip("_").lower()


def pascal_case(name: str) -> str:
    """
    Преобразование в PascalCase, существующие заглавные буквы сохраняются.

    Examples:
        >>> pascal_case("pet_store")
        'PetStore'
        >>> pascal_case("getPetById")
        'GetPetById'
    """
    if not name:
        return ""

    clean = re.sub(r"[^a-zA-Z0-9]", "_", name)
    parts = [part[0].upper() + part[1:] for part in clean.split("_") if part]
    return "".join(parts)


def clean_identifier(name: str) -> str:
    """Очистка имени параметра или поля для использования в Python"""
    name = snake_case(name)

    if name and name[0].isdigit():
        name = f"param_{name}"
    if not name:
        name = "param"

    if keyword.iskeyword(name) or name in RESERVED_NAMES:
        name = f"{name}_"

    return name


def clean_type_name(name: str) -> str:
    """Имя класса из имени схемы"""
    name = pascal_case(name)
    if not name:
        return "Model"
    if name[0].isdigit():
        name = f"Model{name}"
    return name


def clean_enum_member_name(value: str) -> str:
    """Очистка значения enum для использования как имя атрибута"""
    if not value:
        return "EMPTY"

    if value.isspace():
        return "SPACE"

    name = snake_case(value).upper()
    if not name:
        name = "".join(c.upper() if c.isalnum() else "_" for c in value).strip("_")

    if name and name[0].isdigit():
        name = f"VALUE_{name}"

    if not name:
        return "VALUE"

    return name


def unique_name(name: str, used: set) -> str:
    """Имя без коллизий: Get, Get2, Get3..."""
    candidate = name
    counter = 2
    while candidate in used:
        candidate = f"{name}{counter}"
        counter += 1

    used.add(candidate)
    return candidate
