"""Document-level tag collection driven by model filters."""

from typing import Iterable

from swagger_composer.descriptors.base import EndpointDescriptor
from swagger_composer.document.models import Tag
from swagger_composer.generator.options import GroupingKeySelector, ModelFilter, ModelFilterContext


def grouping_contexts(
    descriptors: Iterable[EndpointDescriptor],
    grouping_key_selector: GroupingKeySelector,
) -> list[ModelFilterContext]:
    """One context per distinct grouping key, in order of first appearance."""
    groups: dict[str, list[EndpointDescriptor]] = {}
    for descriptor in descriptors:
        groups.setdefault(grouping_key_selector(descriptor), []).append(descriptor)
    return [ModelFilterContext(key=key, descriptors=tuple(group)) for key, group in groups.items()]


def collect_tags(
    descriptors: Iterable[EndpointDescriptor],
    grouping_key_selector: GroupingKeySelector,
    model_filters: list[ModelFilter],
) -> list[Tag] | None:
    """Build tags from the descriptions model filters produce.

    The first non-empty description for a key wins. Returns None when no
    filter produced anything.
    """
    contexts = grouping_contexts(descriptors, grouping_key_selector)

    tags: list[Tag] = []
    seen: set[str] = set()
    for model_filter in model_filters:
        for context in contexts:
            model: dict = {}
            model_filter.apply(model, context)
            description = model.get("description")
            if description and context.key not in seen:
                seen.add(context.key)
                tags.append(Tag(name=context.key, description=description))

    return tags or None
