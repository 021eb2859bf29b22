"""Generator options and the filter extension points.

Filters are plain objects with an ``apply`` method; they are run in the
order they are listed and may mutate only the object handed to them.
"""

from dataclasses import dataclass, field
from typing import Callable, Protocol

from swagger_composer.descriptors.base import EndpointDescriptor, EndpointDescriptorProvider
from swagger_composer.document.models import Operation, SwaggerDocument
from swagger_composer.errors import ConfigurationError
from swagger_composer.schema.registry import SchemaRegistry

ALLOWED_SCHEMES = ("http", "https", "ws", "wss")

GroupingKeySelector = Callable[[EndpointDescriptor], str]
GroupingKeyComparer = Callable[[str, str], int]
ConflictingActionsResolver = Callable[[list[EndpointDescriptor]], EndpointDescriptor]
VersionSupportResolver = Callable[[EndpointDescriptor, str], bool]


@dataclass(frozen=True)
class ModelFilterContext:
    """What a model filter knows about the grouping it describes."""

    key: str
    descriptors: tuple[EndpointDescriptor, ...]


class ModelFilter(Protocol):
    def apply(self, model: dict, context: ModelFilterContext) -> None:
        ...


class OperationFilter(Protocol):
    def apply(
        self,
        operation: Operation,
        schema_registry: SchemaRegistry,
        descriptor: EndpointDescriptor,
    ) -> None:
        ...


class DocumentFilter(Protocol):
    def apply(
        self,
        document: SwaggerDocument,
        schema_registry: SchemaRegistry,
        provider: EndpointDescriptorProvider,
    ) -> None:
        ...


def controller_grouping_key(descriptor: EndpointDescriptor) -> str:
    return descriptor.controller


@dataclass
class GeneratorOptions:
    """Everything a caller can tune about document generation."""

    ignore_obsolete_actions: bool = False
    grouping_key_selector: GroupingKeySelector = controller_grouping_key
    grouping_key_comparer: GroupingKeyComparer | None = None
    conflicting_actions_resolver: ConflictingActionsResolver | None = None
    version_support_resolver: VersionSupportResolver | None = None
    schemes: list[str] | None = None
    security_definitions: dict[str, dict] | None = None
    model_filters: list[ModelFilter] = field(default_factory=list)
    operation_filters: list[OperationFilter] = field(default_factory=list)
    document_filters: list[DocumentFilter] = field(default_factory=list)

    def __post_init__(self):
        if not callable(self.grouping_key_selector):
            raise ConfigurationError("grouping_key_selector must be callable")
        for name in ("grouping_key_comparer", "conflicting_actions_resolver", "version_support_resolver"):
            value = getattr(self, name)
            if value is not None and not callable(value):
                raise ConfigurationError(f"{name} must be callable or None")
        if self.schemes is not None:
            unknown = [s for s in self.schemes if s not in ALLOWED_SCHEMES]
            if unknown:
                raise ConfigurationError(f"Unsupported schemes: {', '.join(unknown)}")
