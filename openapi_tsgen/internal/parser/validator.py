"""Проверка OpenAPI документа перед генерацией"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Tuple

from ...errors import GenerationError
from ..utils.naming import get_params_in_path

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


@dataclass
class ValidationIssue:
    message: str
    path: str


@dataclass
class ValidationReport:
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def log(self):
        for issue in self.warnings:
            logger.warning("Message : %s | Path : %s", issue.message, issue.path)
        for issue in self.errors:
            logger.error("Message : %s | Path : %s", issue.message, issue.path)


def _walk(node: Any, path: str) -> Iterator[Tuple[str, Dict[str, Any]]]:
    if isinstance(node, dict):
        yield path, node
        for key, value in node.items():
            yield from _walk(value, f"{path}/{key}")
    elif isinstance(node, list):
        for index, value in enumerate(node):
            yield from _walk(value, f"{path}/{index}")


def _pointer_exists(spec: Dict[str, Any], ref: str) -> bool:
    current: Any = spec
    for part in ref[2:].split("/"):
        part = part.replace("~1", "/").replace("~0", "~")
        if not isinstance(current, dict) or part not in current:
            return False
        current = current[part]
    return True


def _resolve_parameter(spec: Dict[str, Any], parameter: Any) -> Any:
    ref = parameter.get("$ref") if isinstance(parameter, dict) else None
    if isinstance(ref, str) and ref.startswith("#/components/parameters/"):
        name = ref[len("#/components/parameters/") :]
        return ((spec.get("components") or {}).get("parameters") or {}).get(name)
    return parameter


def validate_spec(spec: Dict[str, Any], strict: bool = False) -> ValidationReport:
    """
    Набор структурных проверок документа.

    Ошибки и предупреждения только логируются; при strict=True
    наличие ошибок прерывает генерацию.
    """
    report = ValidationReport()

    if not spec.get("info"):
        report.errors.append(ValidationIssue("Не задан раздел info", "#/info"))
    if not spec.get("paths"):
        report.errors.append(ValidationIssue("Не задан раздел paths", "#/paths"))

    for path, node in _walk(spec, "#"):
        ref = node.get("$ref")
        if isinstance(ref, str):
            if not ref.startswith("#/"):
                report.warnings.append(
                    ValidationIssue(f"Внешняя ссылка не поддерживается: {ref}", path)
                )
            elif not _pointer_exists(spec, ref):
                report.errors.append(ValidationIssue(f"Ссылка не найдена: {ref}", path))

        if node.get("type") == "array" and "items" not in node:
            report.errors.append(
                ValidationIssue("Для массива не задан ключ `items`", path)
            )

    for route, path_spec in (spec.get("paths") or {}).items():
        if not isinstance(path_spec, dict):
            continue
        route_params = path_spec.get("parameters") or []

        for method, operation in path_spec.items():
            if method not in HTTP_METHODS or not isinstance(operation, dict):
                continue
            location = f"#/paths/{route}/{method}"

            if not operation.get("operationId"):
                report.errors.append(ValidationIssue("Не задан operationId", location))
            if not operation.get("responses"):
                report.warnings.append(ValidationIssue("Не заданы responses", location))

            parameters = [
                _resolve_parameter(spec, p)
                for p in route_params + (operation.get("parameters") or [])
            ]
            declared = {
                p.get("name")
                for p in parameters
                if isinstance(p, dict) and p.get("in") == "path"
            }
            in_route = set(get_params_in_path(route))

            for name in sorted(in_route - declared):
                report.warnings.append(
                    ValidationIssue(
                        f"Параметр пути {name!r} не объявлен в parameters", location
                    )
                )
            for name in sorted(declared - in_route):
                report.warnings.append(
                    ValidationIssue(
                        f"Параметр пути {name!r} отсутствует в шаблоне пути", location
                    )
                )

    report.log()

    if strict and report.errors:
        raise GenerationError(
            f"Спецификация не прошла проверку: {len(report.errors)} ошибок"
        )

    return report
