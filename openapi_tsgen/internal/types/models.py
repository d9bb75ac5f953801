from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from ..utils.naming import format_description, property_key, quote


class TypeExpr(BaseModel):
    """Узел дерева TypeScript типа"""

    model_config = ConfigDict(frozen=True)

    # Нужны ли скобки, когда выражение стоит под `[]` или внутри `&`
    composite: bool = False

    def render(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.render()

    def wrapped(self) -> str:
        return f"({self.render()})" if self.composite else self.render()


class Primitive(TypeExpr):
    name: str

    def render(self) -> str:
        return self.name


ANY = Primitive(name="any")
NULL = Primitive(name="null")
VOID = Primitive(name="void")
UNKNOWN = Primitive(name="unknown")
NUMBER = Primitive(name="number")
STRING = Primitive(name="string")
BOOLEAN = Primitive(name="boolean")


class NamedType(TypeExpr):
    name: str

    def render(self) -> str:
        return self.name


class LiteralUnion(TypeExpr):
    """Union литералов из enum"""

    values: Tuple[str, ...]
    composite: bool = True

    @classmethod
    def from_values(cls, values: Iterable[Any], as_string: bool) -> "LiteralUnion":
        tokens = []
        for value in values:
            if value is None:
                tokens.append("null")
            elif as_string:
                tokens.append(quote(str(value)))
            elif isinstance(value, bool):
                tokens.append("true" if value else "false")
            elif isinstance(value, str):
                tokens.append(quote(value))
            else:
                tokens.append(str(value))
        return cls(values=tuple(tokens))

    def render(self) -> str:
        return " | ".join(self.values)


class ArrayOf(TypeExpr):
    item: TypeExpr

    def render(self) -> str:
        return f"{self.item.wrapped()}[]"


class TupleOf(TypeExpr):
    item: TypeExpr
    length: int

    def render(self) -> str:
        return "[" + ", ".join([self.item.wrapped()] * self.length) + "]"


class FreeFormMap(TypeExpr):
    def render(self) -> str:
        return "{[key: string]: any}"


class ShapeField(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    expr: TypeExpr
    required: bool = False
    description: Optional[str] = None

    def render(self) -> str:
        return (
            "  "
            + format_description(self.description, 2)
            + property_key(self.name)
            + ("" if self.required else "?")
            + f": {self.expr};"
        )


class Shape(TypeExpr):
    """Структурный тип `{ ... }`"""

    properties: Tuple[ShapeField, ...] = ()
    index: Optional[TypeExpr] = None

    @property
    def is_empty(self) -> bool:
        return not self.properties and self.index is None

    def render(self) -> str:
        if self.is_empty:
            return "{}"

        lines = [field.render() for field in self.properties]
        if self.index is not None:
            lines.append(f"  [key: string]: {self.index};")
        return "{\n" + "\n".join(lines) + "\n}"


class UnionOf(TypeExpr):
    members: Tuple[TypeExpr, ...]
    composite: bool = True

    def render(self) -> str:
        return " | ".join(member.render() for member in self.members)


class IntersectionOf(TypeExpr):
    members: Tuple[TypeExpr, ...]
    composite: bool = True

    def render(self) -> str:
        parts = []
        for member in self.members:
            # `&` связывает сильнее `|`
            if isinstance(member, (UnionOf, LiteralUnion)):
                parts.append(member.wrapped())
            else:
                parts.append(member.render())
        return " & ".join(parts)


class RequireFields(TypeExpr):
    """`Require<T, "a" | "b">` - делает перечисленные поля обязательными"""

    inner: TypeExpr
    keys: Tuple[str, ...]

    def render(self) -> str:
        keys = " | ".join(quote(key) for key in self.keys)
        return f"Require<{self.inner}, {keys}>"


def union_of(members: Iterable[TypeExpr]) -> Optional[TypeExpr]:
    """Union с удалением структурных дубликатов (порядок сохраняется)"""
    unique: List[TypeExpr] = []
    for member in members:
        if member not in unique:
            unique.append(member)

    if not unique:
        return None
    if len(unique) == 1:
        return unique[0]
    return UnionOf(members=tuple(unique))


def nullable(expr: TypeExpr) -> TypeExpr:
    if expr == NULL or (isinstance(expr, LiteralUnion) and "null" in expr.values):
        return expr
    if isinstance(expr, UnionOf):
        return UnionOf(members=expr.members + (NULL,))
    return UnionOf(members=(expr, NULL))


class OperationMetadata(BaseModel):
    """Метаданные операции для генераторов поверх типов (hooks, custom generator)"""

    component_name: str
    operation_id: str
    verb: str
    route: str
    description: str = ""
    params_in_path: List[str] = []
    params_types: str = ""
    # (Response, Error, QueryParams | void, Body | IdType | void, PathParams | void)
    generics: Tuple[str, str, str, str, str]
    response_type: str = "void"
    error_type: str = "unknown"
    query_params_type: Optional[str] = None
    path_params_type: Optional[str] = None
    request_body_type: Optional[str] = None
    id_param: Optional[str] = None
    id_type: Optional[str] = None
    operation: Dict[str, Any] = {}

    @property
    def generics_types(self) -> str:
        return ", ".join(self.generics)


class BoundOperation(BaseModel):
    metadata: OperationMetadata
    declarations: str = ""
    bindings: str = ""

    def __str__(self) -> str:
        return self.declarations + self.bindings


class HeaderFlags(BaseModel):
    """Какие общие помощники нужны в заголовке сгенерированного файла"""

    require_helper: bool = False
    encoding_helper: bool = False
    react_query: bool = False
    common_hooks: bool = False


class GenerationOptions(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    # Генерация hooks и вынос последнего параметра пути для DELETE
    bindings: bool = True
    custom_import: Optional[str] = None
    path_parameters_encoding_mode: Optional[str] = None
    custom_generator: Optional[Callable[[OperationMetadata], str]] = None


class GenerationResult(BaseModel):
    header: str = ""
    blocks: List[str] = []
    flags: HeaderFlags = HeaderFlags()
    operations: List[OperationMetadata] = []

    @property
    def body(self) -> str:
        return "".join(self.blocks)

    def __str__(self) -> str:
        return self.header + self.body
