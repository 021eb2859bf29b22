"""Document composer: drives the whole generation of one Swagger document.

Each call to ``generate`` allocates its own schema registry and operation
name registry, so one composer can serve concurrent callers without
locking.
"""

import copy
import functools
import logging
from typing import Mapping
from urllib.parse import urlsplit

from swagger_composer.descriptors.base import EndpointDescriptor, EndpointDescriptorProvider
from swagger_composer.document.models import Info, PathItem, SwaggerDocument
from swagger_composer.errors import ConfigurationError, UnknownApiVersionError
from swagger_composer.generator.operations import OperationAssembler, OperationNameRegistry
from swagger_composer.generator.options import GeneratorOptions
from swagger_composer.generator.paths import PathGroupingEngine
from swagger_composer.generator.tags import collect_tags
from swagger_composer.schema.registry import SchemaRegistry

logger = logging.getLogger(__name__)

DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443}


class DocumentComposer:
    """Assembles Swagger 2.0 documents from endpoint descriptors."""

    def __init__(
        self,
        provider: EndpointDescriptorProvider,
        api_versions: Mapping[str, Info],
        options: GeneratorOptions | None = None,
        models: dict[str, dict] | None = None,
    ):
        self.provider = provider
        self.api_versions = api_versions
        self.options = options or GeneratorOptions()
        self.models = models or {}

    def generate(self, root_url: str, api_version: str) -> SwaggerDocument:
        """Build the document for *api_version* as served from *root_url*.

        Raises UnknownApiVersionError when the version is not configured.
        """
        info = self.api_versions.get(api_version)
        if info is None:
            raise UnknownApiVersionError(api_version)

        host, base_path, url_scheme = _split_root_url(root_url)

        schema_registry = SchemaRegistry(self.models)
        operation_names = OperationNameRegistry()
        descriptors = self._descriptors_for(api_version)

        paths = self._create_paths(descriptors, schema_registry, operation_names)
        tags = collect_tags(descriptors, self.options.grouping_key_selector, self.options.model_filters)

        document = SwaggerDocument(
            info=info.model_copy(deep=True),
            host=host,
            base_path=base_path,
            tags=tags,
            schemes=list(self.options.schemes) if self.options.schemes is not None else [url_scheme],
            paths=paths,
            security_definitions=copy.deepcopy(self.options.security_definitions),
        )
        # Same dict as the registry's, so document filters may register more types
        document.definitions = schema_registry.definitions

        for document_filter in self.options.document_filters:
            document_filter.apply(document, schema_registry, self.provider)

        logger.info(
            "Generated %s document: %d paths, %d operations, %d definitions",
            api_version, len(document.paths), len(operation_names), len(schema_registry.definitions),
        )
        return document

    def _descriptors_for(self, api_version: str) -> list[EndpointDescriptor]:
        resolver = self.options.version_support_resolver
        result = []
        for descriptor in self.provider.descriptors:
            if resolver is not None and not resolver(descriptor, api_version):
                logger.debug("Skipping %s %s: not in %s", descriptor.method, descriptor.relative_path, api_version)
                continue
            if self.options.ignore_obsolete_actions and descriptor.obsolete:
                logger.debug("Skipping obsolete %s %s", descriptor.method, descriptor.relative_path)
                continue
            result.append(descriptor)
        return result

    def _create_paths(
        self,
        descriptors: list[EndpointDescriptor],
        schema_registry: SchemaRegistry,
        operation_names: OperationNameRegistry,
    ) -> dict[str, PathItem]:
        selector = self.options.grouping_key_selector
        comparer = self.options.grouping_key_comparer
        if comparer is None:
            sort_key = selector
        else:
            key_of = functools.cmp_to_key(comparer)
            sort_key = lambda descriptor: key_of(selector(descriptor))  # noqa: E731

        grouped: dict[str, list[EndpointDescriptor]] = {}
        for descriptor in sorted(descriptors, key=sort_key):
            grouped.setdefault(descriptor.relative_path_sans_query_string(), []).append(descriptor)

        engine = PathGroupingEngine(
            OperationAssembler(self.options, schema_registry),
            self.options.conflicting_actions_resolver,
        )
        return {
            "/" + path: engine.create_path_item(path, group, operation_names)
            for path, group in grouped.items()
        }


def _split_root_url(root_url: str) -> tuple[str, str | None, str]:
    """Return host (with any non-default port), base path and scheme."""
    parts = urlsplit(root_url)
    try:
        port = parts.port
    except ValueError as err:
        raise ConfigurationError(f"Invalid root URL {root_url!r}: {err}") from err
    if not parts.scheme or not parts.hostname:
        raise ConfigurationError(f"Invalid root URL {root_url!r}: scheme and host are required")

    host = f"[{parts.hostname}]" if ":" in parts.hostname else parts.hostname
    if port is not None and port != DEFAULT_PORTS.get(parts.scheme):
        host = f"{host}:{port}"

    base_path = parts.path.rstrip("/") or None
    return host, base_path, parts.scheme
