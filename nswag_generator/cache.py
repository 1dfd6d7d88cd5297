"""
Кэш результатов генерации по пути документа
"""

import threading
from typing import Dict, Optional


class ResultCache:
    """Путь документа -> сгенерированный код. Безопасен для нескольких потоков."""

    def __init__(self):
        self._entries: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, path: str) -> Optional[str]:
        with self._lock:
            return self._entries.get(path)

    def set(self, path: str, source: str) -> None:
        # Последняя запись выигрывает
        with self._lock:
            self._entries[path] = source

    def discard(self, path: str) -> None:
        with self._lock:
            self._entries.pop(path, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, path: str) -> bool:
        with self._lock:
            return path in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
