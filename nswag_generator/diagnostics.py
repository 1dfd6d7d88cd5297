"""
Диагностики пакетной генерации
"""

from dataclasses import dataclass
from typing import Optional

DIAGNOSTIC_ID = "NSG001"
DIAGNOSTIC_TITLE = "NSwag generation failed"


@dataclass(frozen=True)
class Diagnostic:
    id: str
    title: str
    message: str
    severity: str = "error"
    location: Optional[str] = None
    path: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.severity} {self.id}: {self.message}"


def report_exception(exc: BaseException, path: Optional[str] = None) -> Diagnostic:
    """Диагностика по исключению: тип и текст, путь документа, без location"""
    return Diagnostic(
        id=DIAGNOSTIC_ID,
        title=DIAGNOSTIC_TITLE,
        message=f"{type(exc).__name__}: {exc}",
        path=path,
    )
