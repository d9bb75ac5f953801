import copy
import logging
from typing import Any, Dict

from ...errors import UnsupportedDiscriminatorError
from .schema_resolver import is_reference, unescape_pointer

logger = logging.getLogger(__name__)

SCHEMAS_PREFIX = "#/components/schemas/"


def propagate_discriminators(schemas: Dict[str, Any]) -> Dict[str, Any]:
    """
    Прокидывает значения `discriminator.mapping` в схемы-наследники.

    Для каждой пары (значение, $ref) в целевую схему добавляется
    `properties[propertyName].enum = [значение]`, так что наследник
    сужается по тегу без специальной обработки при резолве типов.

    Исходная коллекция не изменяется - возвращается дополненная копия.

    Args:
        schemas: components.schemas документа

    Returns:
        Копия коллекции схем с проставленными enum
    """
    augmented = copy.deepcopy(schemas or {})

    for name, schema in (schemas or {}).items():
        if not isinstance(schema, dict) or is_reference(schema):
            continue

        discriminator = schema.get("discriminator") or {}
        mapping = discriminator.get("mapping")
        if not mapping:
            continue

        property_name = discriminator.get("propertyName")
        for value, ref in mapping.items():
            if not ref.startswith(SCHEMAS_PREFIX):
                raise UnsupportedDiscriminatorError(
                    ref, f"{SCHEMAS_PREFIX}{name}/discriminator/mapping/{value}"
                )

            target_name = unescape_pointer(ref[len(SCHEMAS_PREFIX) :])
            target = augmented.get(target_name)
            if not isinstance(target, dict):
                logger.warning(
                    "Discriminator %s.%s указывает на отсутствующую схему %s",
                    name,
                    property_name,
                    ref,
                )
                continue

            properties = target.setdefault("properties", {})
            prop = properties.get(property_name)
            if not isinstance(prop, dict) or is_reference(prop):
                prop = {}
                properties[property_name] = prop
            prop["enum"] = [value]

            logger.debug("Discriminator %s: %s -> %s", name, value, target_name)

    return augmented
