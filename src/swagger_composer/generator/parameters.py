"""Parameter classification: decides where a parameter lives and materializes it."""

import re

from swagger_composer.descriptors.base import EndpointDescriptor, ParameterDescriptor
from swagger_composer.document.models import Parameter
from swagger_composer.schema.registry import SchemaRegistry


def parameter_location(endpoint: EndpointDescriptor, param: ParameterDescriptor) -> str:
    """Return ``path``, ``body`` or ``query`` for *param*.

    A placeholder in the route template wins over the declared source;
    a body source on a GET falls back to the query string.
    """
    placeholder = re.compile(r"\{\*?" + re.escape(param.name) + r"(:[^}]*)?\}")
    if placeholder.search(endpoint.relative_path_sans_query_string()):
        return "path"
    if param.source == "body" and endpoint.method != "get":
        return "body"
    return "query"


def create_parameter(location: str, param: ParameterDescriptor, schema_registry: SchemaRegistry) -> Parameter:
    parameter = Parameter(in_=location, name=param.name)

    if param.type_ref is None:
        parameter.type = "string"
        parameter.required = True
        return parameter

    if param.pattern:
        parameter.pattern = param.pattern

    parameter.required = location == "path" or not param.optional
    parameter.description = param.description

    schema = schema_registry.get_or_register(param.type_ref)
    if location == "body":
        parameter.schema_ = schema
    else:
        pattern = parameter.pattern
        parameter.populate_from(schema_registry.dereference(schema))
        if pattern:
            parameter.pattern = pattern

    if param.default is not None:
        parameter.default = param.default
    return parameter


def classify_parameter(
    endpoint: EndpointDescriptor,
    param: ParameterDescriptor,
    schema_registry: SchemaRegistry,
) -> Parameter:
    return create_parameter(parameter_location(endpoint, param), param, schema_registry)
