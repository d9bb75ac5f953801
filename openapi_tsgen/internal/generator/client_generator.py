import logging
from typing import Any, Dict, List, Optional, Set

from ..types.discriminator import propagate_discriminators
from ..types.models import GenerationOptions, GenerationResult, HeaderFlags
from ..types.schema_resolver import TypeResolver
from .components import ComponentsGenerator, NameRegistry
from .operation import VERBS, OperationBinder
from .templates import templates

logger = logging.getLogger(__name__)


class ClientGenerator:
    """Генератор TypeScript типов и hooks из OpenAPI документа"""

    def __init__(
        self,
        openapi_dict: Dict[str, Any],
        options: Optional[GenerationOptions] = None,
    ):
        self.openapi_dict = openapi_dict
        self.options = options or GenerationOptions()
        self.resolver = TypeResolver()

    def generate(self) -> GenerationResult:
        """Основная генерация"""
        # Имена и operationId накапливаются в пределах одного прогона
        self.registry = NameRegistry()
        self.operation_ids: Set[str] = set()

        components = self._augmented_components()

        blocks = self._generate_components(components)
        operations = self._generate_endpoints(components, blocks)

        body = "".join(blocks)
        flags = self._detect_flags(body)
        header = self._build_header(flags)

        logger.info(
            "Сгенерировано %d операций, %d блоков", len(operations), len(blocks)
        )
        return GenerationResult(
            header=header, blocks=blocks, flags=flags, operations=operations
        )

    def _augmented_components(self) -> Dict[str, Any]:
        """Компоненты с прокинутыми discriminator - первый этап, до любого резолва"""
        components = dict(self.openapi_dict.get("components") or {})
        if components.get("schemas"):
            components["schemas"] = propagate_discriminators(components["schemas"])
        return components

    def _generate_components(self, components: Dict[str, Any]) -> List[str]:
        generator = ComponentsGenerator(self.resolver, self.registry)
        return [block for block in generator.generate(components) if block]

    def _generate_endpoints(self, components: Dict[str, Any], blocks: List[str]):
        binder = OperationBinder(
            self.resolver,
            components=components,
            options=self.options,
            operation_ids=self.operation_ids,
            registry=self.registry,
        )

        operations = []
        for route, path_spec in (self.openapi_dict.get("paths") or {}).items():
            path_spec = path_spec or {}
            for verb, operation in path_spec.items():
                if verb not in VERBS:
                    continue

                bound = binder.bind(
                    operation or {}, verb, route, path_spec.get("parameters")
                )
                blocks.append(str(bound))
                operations.append(bound.metadata)

        return operations

    def _detect_flags(self, body: str) -> HeaderFlags:
        """Какие общие объявления реально используются в сгенерированном коде"""
        return HeaderFlags(
            require_helper="Require<" in body,
            encoding_helper=bool(self.options.path_parameters_encoding_mode)
            and "encode`" in body,
            react_query="useQuery<" in body or "useMutation<" in body,
            common_hooks="useInvalidateQuery(" in body,
        )

    def _build_header(self, flags: HeaderFlags) -> str:
        header = templates.banner
        if flags.react_query:
            header += templates.react_query_imports
        if self.options.custom_import:
            header += f"\n{self.options.custom_import}\n"
        if flags.common_hooks:
            header += templates.common_hooks
        if flags.require_helper:
            header += templates.require
        if flags.encoding_helper:
            header += "\n" + templates.encoding_function(
                self.options.path_parameters_encoding_mode
            )
            header += templates.encoding_tag
        return header
