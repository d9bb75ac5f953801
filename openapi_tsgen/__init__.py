"""Генератор TypeScript типов и react-query hooks из OpenAPI 3.0"""

from .errors import GenerationError
from .generator import ApiTypesGenerator, import_open_api
from .internal.types.models import GenerationOptions, GenerationResult, OperationMetadata

__all__ = [
    "ApiTypesGenerator",
    "GenerationError",
    "GenerationOptions",
    "GenerationResult",
    "OperationMetadata",
    "import_open_api",
]
