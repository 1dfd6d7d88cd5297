"""
Ошибки конвейера генерации
"""


class NSwagGeneratorError(Exception):
    """Базовая ошибка генератора"""


class DocumentReadError(NSwagGeneratorError):
    """Не удалось прочитать .nswag документ с диска"""


class MalformedConfig(NSwagGeneratorError):
    """Документ конфигурации не разбирается как ожидаемый JSON"""


class EmptyDocument(NSwagGeneratorError):
    """Документ разобран, но в нем нет ничего полезного"""


class SpecFetchError(NSwagGeneratorError):
    """Ошибка ввода-вывода при получении OpenAPI описания"""


class SpecParseError(NSwagGeneratorError):
    """OpenAPI описание не является валидным JSON/YAML или нарушает схему"""


class UnsupportedOperationNamingMode(NSwagGeneratorError, NotImplementedError):
    """Неизвестный режим генерации имен операций"""

    def __init__(self, mode: str):
        self.mode = mode
        super().__init__(f"OperationGenerationMode: {mode} не реализован.")
