"""
Настройки хоста генератора (UseCache и параллельность)
"""

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import toml

SECTION = "NSwagGenerator"
CONFIG_FILE = "nswag.toml"
PYPROJECT_FILE = "pyproject.toml"

DEFAULT_MAX_CONCURRENCY = 4


def _as_bool(value: Any) -> bool:
    """Булево значение из TOML: true/false или строка "true"/"false" """
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


@dataclass
class GeneratorOptions:
    """Настройки генератора"""

    use_cache: bool = False
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY

    def __post_init__(self):
        # Параллельность не меньше 1
        self.max_concurrency = max(1, int(self.max_concurrency))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeneratorOptions":
        max_concurrency = int(data.get("MaxConcurrency", DEFAULT_MAX_CONCURRENCY))
        return cls(
            use_cache=_as_bool(data.get("UseCache", False)),
            max_concurrency=max_concurrency,
        )

    @classmethod
    def from_file(
        cls, config_path: Optional[str] = None, search_dir: str = "."
    ) -> "GeneratorOptions":
        """
        Загрузка настроек.

        Ищется таблица [NSwagGenerator] в nswag.toml, затем
        [tool.NSwagGenerator] в pyproject.toml. Если ничего не найдено,
        возвращаются значения по умолчанию.
        """
        candidates = (
            [config_path]
            if config_path
            else [
                os.path.join(search_dir, CONFIG_FILE),
                os.path.join(search_dir, PYPROJECT_FILE),
            ]
        )

        for path in candidates:
            if not os.path.exists(path):
                continue

            data = toml.load(path)
            section = data.get(SECTION)
            if section is None:
                section = data.get("tool", {}).get(SECTION)
            if section is not None:
                return cls.from_dict(section)

        return cls()

    def save_to_file(self, config_path: str = CONFIG_FILE) -> None:
        """Сохранение настроек в файл"""
        config_data = {
            SECTION: {
                "UseCache": self.use_cache,
                "MaxConcurrency": self.max_concurrency,
            }
        }

        with open(config_path, "w") as f:
            toml.dump(config_data, f)

    def merge_with_args(self, args) -> "GeneratorOptions":
        """Объединение с аргументами командной строки"""
        max_concurrency = getattr(args, "max_concurrency", None)
        return GeneratorOptions(
            use_cache=args.use_cache or self.use_cache,
            max_concurrency=(
                self.max_concurrency if max_concurrency is None else max_concurrency
            ),
        )
