"""
Исключения генератора типов
"""

from typing import Optional


class GenerationError(ValueError):
    """Базовая ошибка генерации - прерывает обработку всего документа"""

    def __init__(self, message: str, location: Optional[str] = None):
        self.location = location
        super().__init__(f"[{location}] {message}" if location else message)


class UnsupportedReferenceError(GenerationError):
    """$ref указывает за пределы #/components/*"""

    def __init__(self, ref: str, location: Optional[str] = None):
        self.ref = ref
        super().__init__(
            f"Поддерживаются только $ref внутри `#/components/*`, получено: {ref!r}",
            location,
        )


class MissingOperationIdError(GenerationError):
    """У операции нет operationId"""

    def __init__(self, verb: str, route: str):
        self.verb = verb
        self.route = route
        super().__init__(
            f"Каждая операция должна иметь operationId - не задан для {verb.upper()} {route}"
        )


class DuplicateOperationIdError(GenerationError):
    """operationId уже встречался в документе"""

    def __init__(self, operation_id: str, location: Optional[str] = None):
        self.operation_id = operation_id
        super().__init__(
            f'"{operation_id}" дублируется в описании схемы', location
        )


class MissingArrayItemsError(GenerationError):
    """Массив без items"""

    def __init__(self, location: Optional[str] = None):
        super().__init__("Для каждого массива должен быть задан ключ `items`", location)


class UnsupportedDiscriminatorError(GenerationError):
    """Discriminator mapping указывает за пределы #/components/schemas"""

    def __init__(self, ref: str, location: Optional[str] = None):
        self.ref = ref
        super().__init__(
            f"Discriminator mapping вне `#/components/schemas` не поддерживается: {ref!r}",
            location,
        )


class UnresolvedPathParameterError(GenerationError):
    """Последний параметр пути DELETE не найден среди параметров операции"""

    def __init__(self, name: str, operation_id: str):
        self.name = name
        self.operation_id = operation_id
        super().__init__(
            f"Параметр пути {name!r} не найден среди параметров ({operation_id})"
        )


class SpecLoadError(GenerationError):
    """Не удалось прочитать или разобрать спецификацию"""


class UnsupportedVersionError(GenerationError):
    """Документ не в формате OpenAPI 3.0"""

    def __init__(self, version: Optional[str]):
        self.version = version
        super().__init__(
            f"Поддерживается только OpenAPI 3.0.x, получено: {version!r}. "
            "Сконвертируйте документ перед генерацией"
        )


class ConfigError(GenerationError):
    """Некорректная конфигурация"""
