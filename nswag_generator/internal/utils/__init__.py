"""Утилиты для генератора"""

from .naming import (
    clean_enum_member_name,
    clean_identifier,
    clean_type_name,
    pascal_case,
    snake_case,
    unique_name,
)

__all__ = [
    "clean_enum_member_name",
    "clean_identifier",
    "clean_type_name",
    "pascal_case",
    "snake_case",
    "unique_name",
]
