"""Утилиты для генератора"""

from .naming import (
    format_description,
    get_params_in_path,
    is_identifier,
    pascal_case,
    property_key,
    quote,
)

__all__ = [
    "format_description",
    "get_params_in_path",
    "is_identifier",
    "pascal_case",
    "property_key",
    "quote",
]
