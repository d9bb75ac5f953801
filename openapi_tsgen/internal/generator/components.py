import logging
from typing import Any, Dict, List, Optional

from ..types.models import Shape, TypeExpr
from ..types.schema_resolver import TypeResolver, is_reference
from ..utils.naming import format_description, pascal_case

logger = logging.getLogger(__name__)

EMPTY_INTERFACE_MARKER = "// tslint:disable-next-line:no-empty-interface\n"


class NameRegistry:
    """Учет объявленных имен для предупреждения о коллизиях"""

    def __init__(self):
        self._names: Dict[str, str] = {}

    def register(self, name: str, origin: str):
        if name in self._names:
            logger.warning(
                "Имя %s объявлено повторно (%s, ранее %s)",
                name,
                origin,
                self._names[name],
            )
            return
        self._names[name] = origin

    def __contains__(self, name: str) -> bool:
        return name in self._names


def is_object_schema(schema: Any) -> bool:
    """Схема, которую можно объявить как interface"""
    return (
        isinstance(schema, dict)
        and not is_reference(schema)
        and schema.get("type") in (None, "object")
        and not schema.get("enum")
        and not schema.get("allOf")
        and not schema.get("anyOf")
        and not schema.get("oneOf")
        and not schema.get("nullable")
    )


def declare(name: str, expr: TypeExpr, description: Optional[str] = None) -> str:
    """interface для структурных типов, type alias для всего остального"""
    if isinstance(expr, Shape) and expr.is_empty:
        return f"{EMPTY_INTERFACE_MARKER}export interface {name} {expr}"

    doc = format_description(description)
    if isinstance(expr, Shape):
        return f"{doc}export interface {name} {expr}"
    return f"{doc}export type {name} = {expr};"


class ComponentsGenerator:
    """Объявления типов для components/schemas, requestBodies и responses"""

    def __init__(
        self,
        resolver: TypeResolver,
        registry: Optional[NameRegistry] = None,
    ):
        self.resolver = resolver
        self.registry = registry or NameRegistry()

    def generate_schemas(self, schemas: Optional[Dict[str, Any]]) -> str:
        if not schemas:
            return ""

        declarations = []
        for name, schema in schemas.items():
            type_name = pascal_case(name)
            location = f"#/components/schemas/{name}"
            self.registry.register(type_name, location)

            if is_object_schema(schema):
                expr = self.resolver.get_scalar(schema, location)
                doc = format_description(schema.get("description"))
                if isinstance(expr, Shape) and expr.is_empty:
                    doc += EMPTY_INTERFACE_MARKER
                declarations.append(f"{doc}export interface {type_name} {expr}")
            else:
                description = None
                if isinstance(schema, dict) and not is_reference(schema):
                    description = schema.get("description")
                expr = self.resolver.resolve(schema, location)
                declarations.append(
                    f"{format_description(description)}export type {type_name} = {expr};"
                )

            logger.debug("Схема %s -> %s", name, type_name)

        return "\n\n".join(declarations) + "\n"

    def generate_request_bodies(self, request_bodies: Optional[Dict[str, Any]]) -> str:
        return self._generate_bodies(request_bodies, "requestBodies", "RequestBody")

    def generate_responses(self, responses: Optional[Dict[str, Any]]) -> str:
        return self._generate_bodies(responses, "responses", "Response")

    def _generate_bodies(
        self, collection: Optional[Dict[str, Any]], section: str, suffix: str
    ) -> str:
        if not collection:
            return ""

        declarations = []
        for name, node in collection.items():
            type_name = pascal_case(name) + suffix
            location = f"#/components/{section}/{name}"
            self.registry.register(type_name, location)

            description = None
            if isinstance(node, dict) and not is_reference(node):
                description = node.get("description")

            expr = self.resolver.resolve_content(node, location)
            declarations.append(declare(type_name, expr, description))

        return "\n" + "\n\n".join(declarations) + "\n"

    def generate(self, components: Optional[Dict[str, Any]]) -> List[str]:
        """Все три коллекции в фиксированном порядке"""
        components = components or {}
        return [
            self.generate_schemas(components.get("schemas")),
            self.generate_request_bodies(components.get("requestBodies")),
            self.generate_responses(components.get("responses")),
        ]
