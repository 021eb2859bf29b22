"""Built-in filters."""

import copy
from typing import Mapping

from swagger_composer.descriptors.base import EndpointDescriptor
from swagger_composer.document.models import Operation
from swagger_composer.generator.options import ModelFilterContext
from swagger_composer.schema.registry import SchemaRegistry


class StaticTagDescriptions:
    """Model filter describing grouping keys from a fixed mapping."""

    def __init__(self, descriptions: Mapping[str, str]):
        self.descriptions = dict(descriptions)

    def apply(self, model: dict, context: ModelFilterContext) -> None:
        description = self.descriptions.get(context.key)
        if description:
            model["description"] = description


class ApplySecurityRequirements:
    """Operation filter attaching security requirements to unsecured operations."""

    def __init__(self, requirements: list[dict[str, list[str]]]):
        self.requirements = requirements

    def apply(
        self,
        operation: Operation,
        schema_registry: SchemaRegistry,
        descriptor: EndpointDescriptor,
    ) -> None:
        if operation.security is None:
            operation.security = copy.deepcopy(self.requirements)
