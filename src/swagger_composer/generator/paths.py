"""Path grouping: one PathItem per normalized path, one Operation per method."""

import logging

from swagger_composer.descriptors.base import EndpointDescriptor
from swagger_composer.document.models import SUPPORTED_METHODS, PathItem
from swagger_composer.errors import ConflictingActionsError
from swagger_composer.generator.operations import OperationAssembler, OperationNameRegistry
from swagger_composer.generator.options import ConflictingActionsResolver

logger = logging.getLogger(__name__)


def first_action(descriptors: list[EndpointDescriptor]) -> EndpointDescriptor:
    """Conflict resolver that keeps the first action in grouping order."""
    return descriptors[0]


def last_action(descriptors: list[EndpointDescriptor]) -> EndpointDescriptor:
    """Conflict resolver that keeps the last action in grouping order."""
    return descriptors[-1]


class PathGroupingEngine:
    """Turns the descriptors sharing one path into a PathItem."""

    def __init__(
        self,
        assembler: OperationAssembler,
        conflicting_actions_resolver: ConflictingActionsResolver | None = None,
    ):
        self.assembler = assembler
        self.conflicting_actions_resolver = conflicting_actions_resolver

    def create_path_item(
        self,
        path: str,
        descriptors: list[EndpointDescriptor],
        operation_names: OperationNameRegistry,
    ) -> PathItem:
        per_method: dict[str, list[EndpointDescriptor]] = {}
        for descriptor in descriptors:
            per_method.setdefault(descriptor.method, []).append(descriptor)

        operations = {}
        for method, group in per_method.items():
            if method not in SUPPORTED_METHODS:
                logger.debug("Skipping unsupported method %s on /%s", method, path)
                continue
            descriptor = group[0] if len(group) == 1 else self._resolve_conflict(path, method, group)
            operations[method] = self.assembler.assemble(descriptor, operation_names)

        return PathItem(**operations)

    def _resolve_conflict(
        self, path: str, method: str, group: list[EndpointDescriptor]
    ) -> EndpointDescriptor:
        if self.conflicting_actions_resolver is None:
            raise ConflictingActionsError(
                path, method, group, "configure a conflicting_actions_resolver"
            )

        logger.debug("Resolving %d conflicting actions for %s /%s", len(group), method, path)
        resolved = self.conflicting_actions_resolver(list(group))
        if not isinstance(resolved, EndpointDescriptor):
            raise ConflictingActionsError(
                path, method, group, f"resolver returned {type(resolved).__name__}"
            )
        return resolved
