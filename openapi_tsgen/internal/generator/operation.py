import logging
import re
from typing import Any, Dict, List, Optional, Set, Tuple

from ...errors import (
    DuplicateOperationIdError,
    MissingOperationIdError,
    UnresolvedPathParameterError,
    UnsupportedReferenceError,
)
from ..types.models import (
    ANY,
    STRING,
    UNKNOWN,
    VOID,
    BoundOperation,
    GenerationOptions,
    OperationMetadata,
    TypeExpr,
)
from ..types.schema_resolver import TypeResolver, get_ref, is_reference, unescape_pointer
from ..utils.naming import format_description, get_params_in_path, pascal_case, property_key
from .components import NameRegistry, declare
from .hooks import HooksGenerator

logger = logging.getLogger(__name__)

VERBS = ("get", "post", "patch", "put", "delete")

PARAMETERS_PREFIX = "#/components/parameters/"

# `/pet/${id}` или `/pet/${id}/` - последний параметр пути
LAST_PARAM_RE = re.compile(r"/\$\{(\w+)\}/?$")


def is_ok(status_code: Any) -> bool:
    return str(status_code).startswith("2")


def is_error(status_code: Any) -> bool:
    code = str(status_code)
    return code.startswith("4") or code.startswith("5") or code == "default"


class OperationBinder:
    """Типы и метаданные для одной операции (route + verb)"""

    def __init__(
        self,
        resolver: TypeResolver,
        components: Optional[Dict[str, Any]] = None,
        options: Optional[GenerationOptions] = None,
        operation_ids: Optional[Set[str]] = None,
        registry: Optional[NameRegistry] = None,
    ):
        self.resolver = resolver
        self.components = components or {}
        self.options = options or GenerationOptions()
        # Общий для всего документа набор operationId
        self.operation_ids = operation_ids if operation_ids is not None else set()
        self.registry = registry or NameRegistry()
        self.hooks = HooksGenerator(self.options.path_parameters_encoding_mode)

    def bind(
        self,
        operation: Dict[str, Any],
        verb: str,
        route: str,
        route_parameters: Optional[List[Any]] = None,
    ) -> BoundOperation:
        operation_id = operation.get("operationId")
        if not operation_id:
            raise MissingOperationIdError(verb, route)
        if operation_id in self.operation_ids:
            raise DuplicateOperationIdError(operation_id, f"{verb.upper()} {route}")
        self.operation_ids.add(operation_id)

        location = f"#/paths/{route}/{verb}"
        component_name = pascal_case(operation_id).replace("Controller", "")

        # `/pet/{id}` => `/pet/${id}`
        route = route.replace("{", "${")

        id_param = None
        if self.options.bindings and verb == "delete":
            match = LAST_PARAM_RE.search(route)
            if match:
                id_param = match.group(1)
                route = route[: match.start()]

        parameters = self._merge_parameters(
            route_parameters or [], operation.get("parameters") or []
        )
        query_params = [p for p in parameters if p.get("in") == "query"]
        path_params = [p for p in parameters if p.get("in") == "path"]

        params_in_path = [
            p
            for p in get_params_in_path(route)
            if not (verb == "delete" and p == id_param)
        ]

        responses = operation.get("responses") or {}
        response_expr = (
            self.resolver.res_req_types(
                [(code, node) for code, node in responses.items() if is_ok(code)],
                f"{location}/responses",
            )
            or VOID
        )
        error_expr = (
            self.resolver.res_req_types(
                [(code, node) for code, node in responses.items() if is_error(code)],
                f"{location}/responses",
            )
            or UNKNOWN
        )
        request_body_expr = self.resolver.resolve_content(
            operation.get("requestBody"), f"{location}/requestBody"
        )

        needs_response = "{" in str(response_expr)
        needs_request_body = request_body_expr != VOID

        params_types = ";\n  ".join(
            self._path_param_type(name, path_params, operation_id)
            for name in params_in_path
        )
        query_params_type = ";\n  ".join(
            self._query_param_type(p, location) for p in query_params
        )

        id_type = None
        if id_param:
            id_type = str(self._id_param_type(id_param, parameters, operation_id))

        response_type = f"{component_name}Response" if needs_response else str(response_expr)
        query_name = f"{component_name}QueryParams" if query_params_type else None
        path_name = f"{component_name}PathParams" if params_in_path else None
        body_name = f"{component_name}RequestBody" if needs_request_body else None

        if id_type:
            body_slot = id_type
        elif body_name:
            body_slot = body_name
        else:
            body_slot = str(request_body_expr)

        generics = (
            response_type,
            str(error_expr),
            query_name or "void",
            body_slot,
            path_name or "void",
        )

        summary = operation.get("summary") or ""
        long_description = operation.get("description") or ""
        description = (
            f"{summary}\n\n{long_description}"
            if summary and long_description
            else summary + long_description
        )

        declarations = ""
        if needs_response:
            declarations += (
                "\n" + self._declare(response_type, response_expr, location) + "\n"
            )
        if query_name:
            self.registry.register(query_name, location)
            declarations += (
                f"\nexport interface {query_name} {{\n  {query_params_type};\n}}\n"
            )
        if path_name:
            self.registry.register(path_name, location)
            declarations += f"\nexport interface {path_name} {{\n  {params_types};\n}}\n"
        if body_name:
            self.registry.register(body_name, location)
            declarations += f"\nexport type {body_name} = {request_body_expr};\n"
        declarations += "\n"

        metadata = OperationMetadata(
            component_name=component_name,
            operation_id=operation_id,
            verb=verb,
            route=route,
            description=description,
            params_in_path=params_in_path,
            params_types=params_types,
            generics=generics,
            response_type=response_type,
            error_type=str(error_expr),
            query_params_type=query_name,
            path_params_type=path_name,
            request_body_type=body_name,
            id_param=id_param,
            id_type=id_type,
            operation=operation,
        )

        bindings = ""
        if self.options.bindings:
            bindings += self.hooks.render(metadata)
        if self.options.custom_generator:
            bindings += self.options.custom_generator(metadata)

        logger.debug("Операция %s %s -> %s", verb.upper(), route, component_name)
        return BoundOperation(
            metadata=metadata, declarations=declarations, bindings=bindings
        )

    def resolve_parameter(self, parameter: Any) -> Optional[Dict[str, Any]]:
        """Параметр из components/parameters для $ref, иначе как есть"""
        if not is_reference(parameter):
            return parameter if isinstance(parameter, dict) else None

        ref = parameter["$ref"]
        if not ref.startswith(PARAMETERS_PREFIX):
            raise UnsupportedReferenceError(ref)

        name = unescape_pointer(ref[len(PARAMETERS_PREFIX) :])
        resolved = (self.components.get("parameters") or {}).get(name)
        if resolved is None:
            logger.warning("Параметр %s не найден в components/parameters", ref)
        return resolved

    def _merge_parameters(
        self, route_parameters: List[Any], operation_parameters: List[Any]
    ) -> List[Dict[str, Any]]:
        """Параметры уровня пути, переопределенные параметрами операции с тем же (name, in)"""
        merged: List[Dict[str, Any]] = []
        positions: Dict[Tuple[Any, Any], int] = {}

        for parameter in list(route_parameters) + list(operation_parameters):
            resolved = self.resolve_parameter(parameter)
            if resolved is None:
                continue

            key = (resolved.get("name"), resolved.get("in"))
            if key in positions:
                merged[positions[key]] = resolved
            else:
                positions[key] = len(merged)
                merged.append(resolved)

        return merged

    def _param_expr(self, parameter: Dict[str, Any], location: str) -> TypeExpr:
        if "schema" in parameter:
            return self.resolver.resolve(parameter["schema"], location)
        if parameter.get("content"):
            return self.resolver.resolve_content(parameter, location)
        return ANY

    def _query_param_type(self, parameter: Dict[str, Any], location: str) -> str:
        name = parameter.get("name", "")
        expr = self._param_expr(parameter, f"{location}/parameters/{name}")
        return (
            format_description(parameter.get("description"), 2)
            + property_key(name)
            + ("" if parameter.get("required") else "?")
            + f": {expr}"
        )

    def _path_param_type(
        self, name: str, path_params: List[Dict[str, Any]], operation_id: str
    ) -> str:
        declared = next((p for p in path_params if p.get("name") == name), None)
        if declared is None or "schema" not in declared:
            logger.warning(
                "Параметр пути %s не объявлен в параметрах (%s), используется string",
                name,
                operation_id,
            )
            return f"{name}: string"

        expr = self.resolver.resolve(declared["schema"])
        return (
            format_description(declared.get("description"), 2)
            + name
            + ("" if declared.get("required") else "?")
            + f": {expr}"
        )

    def _id_param_type(
        self, name: str, parameters: List[Dict[str, Any]], operation_id: str
    ) -> TypeExpr:
        if not parameters:
            return STRING

        definition = next((p for p in parameters if p.get("name") == name), None)
        if definition is None:
            raise UnresolvedPathParameterError(name, operation_id)

        schema = definition.get("schema")
        if is_reference(schema):
            return get_ref(schema["$ref"])
        if schema:
            return self.resolver.get_scalar(schema)
        return STRING

    def _declare(self, name: str, expr: TypeExpr, location: str) -> str:
        self.registry.register(name, location)
        return declare(name, expr)
