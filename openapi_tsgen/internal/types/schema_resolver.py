from typing import Any, Dict, Iterable, Optional, Tuple

from ...errors import MissingArrayItemsError, UnsupportedReferenceError
from ..utils.naming import pascal_case
from .models import (
    ANY,
    BOOLEAN,
    NULL,
    NUMBER,
    STRING,
    VOID,
    ArrayOf,
    FreeFormMap,
    IntersectionOf,
    LiteralUnion,
    NamedType,
    RequireFields,
    Shape,
    ShapeField,
    TupleOf,
    TypeExpr,
    UnionOf,
    nullable,
    union_of,
)


# Префикс $ref -> суффикс имени типа
REF_ROOTS: Tuple[Tuple[str, str], ...] = (
    ("#/components/schemas/", ""),
    ("#/components/responses/", "Response"),
    ("#/components/parameters/", "Parameter"),
    ("#/components/requestBodies/", "RequestBody"),
)

NUMERIC_TYPES = {"int32", "int64", "number", "integer", "long", "float", "double"}
STRING_TYPES = {
    "string",
    "byte",
    "binary",
    "date",
    "dateTime",
    "date-time",
    "password",
}

# Порядок важен: первый найденный content type определяет тип
CONTENT_TYPE_PRIORITY = ("*/*", "application/json", "application/octet-stream")


def is_reference(node: Any) -> bool:
    return isinstance(node, dict) and bool(node.get("$ref"))


def _is_set(value: Any) -> bool:
    """Истинность значения в смысле JSON документа: пустой объект тоже считается заданным"""
    return value is not None and value is not False


def unescape_pointer(segment: str) -> str:
    return segment.replace("~1", "/").replace("~0", "~")


def get_ref(ref: str, location: Optional[str] = None) -> NamedType:
    """Имя типа по $ref с суффиксом коллекции"""
    for prefix, suffix in REF_ROOTS:
        if ref.startswith(prefix):
            name = unescape_pointer(ref[len(prefix) :].split("/")[-1])
            return NamedType(name=pascal_case(name) + suffix)

    raise UnsupportedReferenceError(ref, location)


class TypeResolver:
    """Преобразование OpenAPI схемы в TypeScript тип"""

    def resolve(self, schema: Any, location: str = "#") -> TypeExpr:
        if not isinstance(schema, dict):
            # Булевы схемы и пустые значения - произвольное значение
            return ANY

        if is_reference(schema):
            return get_ref(schema["$ref"], location)

        return self.get_scalar(schema, location)

    def get_scalar(self, item: Dict[str, Any], location: str = "#") -> TypeExpr:
        schema_type = item.get("type")
        enum = item.get("enum")

        if schema_type in NUMERIC_TYPES:
            expr = LiteralUnion.from_values(enum, as_string=False) if enum else NUMBER
        elif schema_type == "boolean":
            expr = LiteralUnion.from_values(enum, as_string=False) if enum else BOOLEAN
        elif schema_type == "array":
            expr = self.get_array(item, location)
        elif schema_type == "null":
            return NULL
        elif schema_type in STRING_TYPES:
            expr = LiteralUnion.from_values(enum, as_string=True) if enum else STRING
        elif schema_type is None and enum and not self._is_composition(item):
            expr = LiteralUnion.from_values(enum, as_string=False)
        else:
            expr = self.get_object(item, location)

        return nullable(expr) if item.get("nullable") else expr

    def get_array(self, item: Dict[str, Any], location: str = "#") -> TypeExpr:
        if item.get("items") is None:
            raise MissingArrayItemsError(location)

        item_type = self.resolve(item["items"], f"{location}/items")

        min_items = item.get("minItems")
        max_items = item.get("maxItems")
        if min_items and max_items and min_items == max_items:
            return TupleOf(item=item_type, length=min_items)

        return ArrayOf(item=item_type)

    def get_object(self, item: Dict[str, Any], location: str = "#") -> TypeExpr:
        if is_reference(item):
            return get_ref(item["$ref"], location)

        if item.get("allOf"):
            composed = self._join(
                IntersectionOf, self._resolve_all(item["allOf"], f"{location}/allOf")
            )
            return self._require(composed, item.get("required"))

        if item.get("anyOf"):
            return self._join(
                UnionOf, self._resolve_all(item["anyOf"], f"{location}/anyOf")
            )

        if item.get("oneOf"):
            composed = self._join(
                UnionOf, self._resolve_all(item["oneOf"], f"{location}/oneOf")
            )
            return self._require(composed, item.get("required"))

        schema_type = item.get("type")
        properties = item.get("properties")
        additional = item.get("additionalProperties")

        if schema_type is None and properties is None and not _is_set(additional):
            return Shape()

        # Free form object (https://swagger.io/docs/specification/data-models/data-types/#free-form)
        if (
            schema_type == "object"
            and properties is None
            and (not _is_set(additional) or additional is True or additional == {})
        ):
            return FreeFormMap()

        if properties is not None or _is_set(additional):
            required = item.get("required") or []
            fields = []
            for key, prop in (properties or {}).items():
                description = None
                if isinstance(prop, dict) and not is_reference(prop):
                    description = prop.get("description")

                fields.append(
                    ShapeField(
                        name=key,
                        expr=self.resolve(prop, f"{location}/properties/{key}"),
                        required=key in required,
                        description=description,
                    )
                )

            index = None
            if additional is True:
                index = ANY
            elif _is_set(additional):
                index = self.resolve(additional, f"{location}/additionalProperties")

            return Shape(properties=tuple(fields), index=index)

        return FreeFormMap() if schema_type == "object" else ANY

    def resolve_content(self, node: Any, location: str = "#") -> TypeExpr:
        """Тип тела запроса/ответа по его content"""
        if not node:
            return VOID

        if is_reference(node):
            return get_ref(node["$ref"], location)

        content = node.get("content") if isinstance(node, dict) else None
        if not content:
            return VOID

        for content_type in CONTENT_TYPE_PRIORITY:
            for key, media in content.items():
                if key.startswith(content_type):
                    schema = (media or {}).get("schema")
                    return self.resolve(schema, f"{location}/content/{key}/schema")

        return VOID

    def res_req_types(
        self, entries: Iterable[Tuple[str, Any]], location: str = "#"
    ) -> Optional[TypeExpr]:
        """Union типов для набора ответов (или одного тела запроса) без дубликатов"""
        return union_of(
            self.resolve_content(node, f"{location}/{key}") for key, node in entries
        )

    def _resolve_all(self, members, location: str):
        return [
            self.resolve(member, f"{location}/{index}")
            for index, member in enumerate(members)
        ]

    @staticmethod
    def _join(expr_cls, members) -> TypeExpr:
        if len(members) == 1:
            return members[0]
        return expr_cls(members=tuple(members))

    @staticmethod
    def _require(expr: TypeExpr, required) -> TypeExpr:
        if required:
            return RequireFields(inner=expr, keys=tuple(required))
        return expr

    @staticmethod
    def _is_composition(item: Dict[str, Any]) -> bool:
        return any(item.get(key) for key in ("allOf", "anyOf", "oneOf"))
