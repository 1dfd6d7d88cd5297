"""Отображение секции настроек документа на настройки генератора"""

from .settings import SETTINGS_MAP, FieldMapping, map_settings, unmapped_fields

__all__ = [
    "SETTINGS_MAP",
    "FieldMapping",
    "map_settings",
    "unmapped_fields",
]
