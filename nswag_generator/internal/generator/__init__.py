"""Встроенный движок генерации: OpenAPI -> модуль Python клиента"""

from .client_generator import ClientGenerator, generate_client_code

__all__ = [
    "ClientGenerator",
    "generate_client_code",
]
