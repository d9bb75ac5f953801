import json
import logging
from typing import Any, Callable, Dict, Optional

import yaml

from ...errors import SpecLoadError, UnsupportedVersionError

logger = logging.getLogger(__name__)

SUPPORTED_VERSION_PREFIX = "3.0"


def parse_spec(data: str, format: str = "json") -> Dict[str, Any]:
    """Разбор текста спецификации в словарь"""
    try:
        if format == "yaml":
            spec = yaml.safe_load(data)
        else:
            spec = json.loads(data)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise SpecLoadError(f"Не удалось разобрать спецификацию ({format}): {e}") from e

    if not isinstance(spec, dict):
        raise SpecLoadError(f"Спецификация должна быть объектом, получено: {type(spec).__name__}")

    return spec


class OpenApiParser:
    """Парсер OpenAPI спецификации"""

    def __init__(
        self,
        data: str,
        format: str = "json",
        transformer: Optional[Callable[[Dict[str, Any]], Dict[str, Any]]] = None,
    ):
        self.data = data
        self.format = format
        self.transformer = transformer

    def parse(self) -> Dict[str, Any]:
        """Текст -> OpenAPI 3.0 документ"""
        spec = parse_spec(self.data, self.format)

        # Версия проверяется у документа после transformer
        if self.transformer:
            spec = self.transformer(spec)
            if not isinstance(spec, dict):
                raise SpecLoadError("transformer должен вернуть документ в виде словаря")

        version = str(spec.get("openapi", ""))
        if not version.startswith(SUPPORTED_VERSION_PREFIX):
            raise UnsupportedVersionError(spec.get("openapi") or spec.get("swagger"))

        logger.info(
            "Загружена спецификация %s %s",
            (spec.get("info") or {}).get("title", ""),
            (spec.get("info") or {}).get("version", ""),
        )
        return spec
