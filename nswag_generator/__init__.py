"""Генератор Python клиентов из документов .nswag и OpenAPI описаний"""

from .cache import ResultCache
from .config import GeneratorOptions
from .diagnostics import Diagnostic
from .exceptions import (
    DocumentReadError,
    EmptyDocument,
    MalformedConfig,
    NSwagGeneratorError,
    SpecFetchError,
    SpecParseError,
    UnsupportedOperationNamingMode,
)
from .generator import (
    GeneratedOutput,
    GenerationResult,
    IncrementalGenerator,
    NSwagGenerator,
)

__all__ = [
    "ResultCache",
    "GeneratorOptions",
    "Diagnostic",
    "DocumentReadError",
    "EmptyDocument",
    "MalformedConfig",
    "NSwagGeneratorError",
    "SpecFetchError",
    "SpecParseError",
    "UnsupportedOperationNamingMode",
    "GeneratedOutput",
    "GenerationResult",
    "IncrementalGenerator",
    "NSwagGenerator",
]
