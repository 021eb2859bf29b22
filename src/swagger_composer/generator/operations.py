"""Operation assembly and operation id uniqueness."""

import logging

from swagger_composer.descriptors.base import EndpointDescriptor
from swagger_composer.document.models import Operation, Response
from swagger_composer.generator.options import GeneratorOptions
from swagger_composer.generator.parameters import classify_parameter
from swagger_composer.schema.registry import SchemaRegistry

logger = logging.getLogger(__name__)


class OperationNameRegistry:
    """Operation ids handed out so far in one document.

    A fresh registry is created for every generation call and threaded
    through every path, so ids are unique across the whole document.
    """

    def __init__(self):
        self._names: set[str] = set()

    def __contains__(self, name: str) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)

    def reserve(self, descriptor: EndpointDescriptor) -> str:
        """Pick the shortest free id for *descriptor* and mark it as taken.

        Tries the method/path id first, then ``Controller_Action``, then
        ``Controller_Action_1``, ``Controller_Action_2``...
        """
        friendly_id = descriptor.friendly_id()

        if friendly_id in self._names:
            friendly_id = descriptor.qualified_friendly_id()

        postfix = 1
        while friendly_id in self._names:
            friendly_id = f"{descriptor.qualified_friendly_id()}_{postfix}"
            postfix += 1

        self._names.add(friendly_id)
        return friendly_id


class OperationAssembler:
    """Builds one Operation per resolved endpoint descriptor."""

    def __init__(self, options: GeneratorOptions, schema_registry: SchemaRegistry):
        self.options = options
        self.schema_registry = schema_registry

    def assemble(self, descriptor: EndpointDescriptor, operation_names: OperationNameRegistry) -> Operation:
        parameters = [
            classify_parameter(descriptor, param, self.schema_registry)
            for param in descriptor.parameters
        ]
        responses = self._responses(descriptor)

        operation = Operation(
            tags=[self.options.grouping_key_selector(descriptor)],
            operation_id=operation_names.reserve(descriptor),
            produces=list(descriptor.produces),
            consumes=list(descriptor.consumes),
            parameters=parameters or None,  # absent rather than empty
            responses=responses,
            deprecated=True if descriptor.obsolete else None,
        )
        logger.debug("Assembled %s %s as %s", descriptor.method, descriptor.relative_path, operation.operation_id)

        for operation_filter in self.options.operation_filters:
            operation_filter.apply(operation, self.schema_registry, descriptor)

        return operation

    def _responses(self, descriptor: EndpointDescriptor) -> dict[str, Response]:
        if descriptor.returns_no_value():
            return {"204": Response(description="No Content")}
        schema = self.schema_registry.get_or_register(descriptor.response_type)
        return {"200": Response(description="OK", schema_=schema)}
