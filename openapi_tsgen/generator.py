"""
Главный модуль генератора - чистый интерфейс
"""

import importlib
from typing import Any, Callable, Dict, Optional

from .errors import ConfigError
from .internal.generator.client_generator import ClientGenerator
from .internal.parser.openapi import OpenApiParser
from .internal.parser.validator import validate_spec
from .internal.types.models import GenerationOptions, GenerationResult, OperationMetadata


class ApiTypesGenerator:
    """Чистый интерфейс для генерации TypeScript типов и hooks"""

    def __init__(
        self,
        openapi_spec: Dict[str, Any],
        options: Optional[GenerationOptions] = None,
    ):
        self.generator = ClientGenerator(openapi_spec, options)

    def generate(self) -> GenerationResult:
        """Генерация по уже разобранному документу"""
        return self.generator.generate()


def load_callable(path: str) -> Callable:
    """Импорт объекта по пути вида `package.module:attribute`"""
    module_name, _, attribute = path.partition(":")
    if not module_name or not attribute:
        raise ConfigError(f"Ожидается путь вида module:attribute, получено {path!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError(f"Не удалось импортировать {module_name}: {e}") from e

    target = getattr(module, attribute, None)
    if not callable(target):
        raise ConfigError(f"{path} не является вызываемым объектом")
    return target


def import_open_api(
    data: str,
    format: str = "json",
    transformer: Optional[Callable[[Dict[str, Any]], Dict[str, Any]]] = None,
    validation: bool = False,
    skip_hooks: bool = False,
    custom_import: Optional[str] = None,
    path_parameters_encoding_mode: Optional[str] = None,
    custom_generator: Optional[Callable[[OperationMetadata], str]] = None,
) -> str:
    """
    Текст OpenAPI спецификации -> содержимое TypeScript файла.

    Args:
        data: Текст спецификации
        format: "yaml" или "json"
        transformer: Преобразование документа перед генерацией
        validation: Прогнать проверку документа (только логирование)
        skip_hooks: Генерировать только типы, без react-query hooks
        custom_import: Строка импорта в заголовок файла
        path_parameters_encoding_mode: "uriComponent" или "rfc3986"
        custom_generator: Дополнительный вывод для каждой операции

    Returns:
        Содержимое сгенерированного файла
    """
    spec = OpenApiParser(data, format, transformer).parse()

    if validation:
        validate_spec(spec)

    options = GenerationOptions(
        bindings=not skip_hooks,
        custom_import=custom_import,
        path_parameters_encoding_mode=path_parameters_encoding_mode,
        custom_generator=custom_generator,
    )
    return str(ApiTypesGenerator(spec, options).generate())
