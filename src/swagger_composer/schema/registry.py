"""Schema registry: resolves type references into Swagger 2.0 schema fragments.

Type references are plain strings: a primitive name (``int64``), an
array (``Pet[]`` or ``array[Pet]``), a string-keyed map (``map[Pet]``)
or the name of a model from the catalog handed to the registry.
Complex models are registered once under ``definitions`` and referenced
by ``$ref``; primitives, arrays, maps and enums are returned inline.
"""

import copy
import re

from swagger_composer.errors import UnknownTypeError

DEFINITIONS_PREFIX = "#/definitions/"

PRIMITIVE_SCHEMAS: dict[str, dict] = {
    "string": {"type": "string"},
    "str": {"type": "string"},
    "integer": {"type": "integer", "format": "int32"},
    "int": {"type": "integer", "format": "int32"},
    "int32": {"type": "integer", "format": "int32"},
    "int64": {"type": "integer", "format": "int64"},
    "long": {"type": "integer", "format": "int64"},
    "number": {"type": "number"},
    "float": {"type": "number", "format": "float"},
    "double": {"type": "number", "format": "double"},
    "decimal": {"type": "number", "format": "double"},
    "boolean": {"type": "boolean"},
    "bool": {"type": "boolean"},
    "date": {"type": "string", "format": "date"},
    "date-time": {"type": "string", "format": "date-time"},
    "datetime": {"type": "string", "format": "date-time"},
    "uuid": {"type": "string", "format": "uuid"},
    "guid": {"type": "string", "format": "uuid"},
    "byte": {"type": "string", "format": "byte"},
    "binary": {"type": "string", "format": "binary"},
    "file": {"type": "file"},
    "object": {"type": "object"},
}

_GENERIC = re.compile(r"^(array|list|map|dict)\[(.+)\]$", re.IGNORECASE)


class SchemaRegistry:
    """Per-document registry of schemas, deduplicated by type name."""

    def __init__(self, models: dict[str, dict] | None = None):
        self._models = models or {}
        self.definitions: dict[str, dict] = {}

    def get_or_register(self, type_ref: str) -> dict:
        """Return a schema for *type_ref*, registering catalog models on first use.

        The returned dict is a fresh copy; callers may mutate it freely.
        """
        return copy.deepcopy(self._resolve(type_ref.strip()))

    def dereference(self, schema: dict) -> dict:
        """Return the definition behind a ``$ref`` schema, or the schema itself."""
        ref = schema.get("$ref")
        if ref and ref.startswith(DEFINITIONS_PREFIX):
            name = ref[len(DEFINITIONS_PREFIX):]
            if name in self.definitions:
                return copy.deepcopy(self.definitions[name])
        return schema

    def _resolve(self, type_ref: str) -> dict:
        lowered = type_ref.lower()
        if lowered in PRIMITIVE_SCHEMAS:
            return PRIMITIVE_SCHEMAS[lowered]

        if type_ref.endswith("[]"):
            return {"type": "array", "items": self._resolve(type_ref[:-2].strip())}

        match = _GENERIC.match(type_ref)
        if match:
            kind, inner = match.group(1).lower(), match.group(2).strip()
            if kind in ("array", "list"):
                return {"type": "array", "items": self._resolve(inner)}
            return {"type": "object", "additionalProperties": self._resolve(inner)}

        if type_ref not in self._models:
            raise UnknownTypeError(type_ref)

        model = self._models[type_ref]
        if "enum" in model:
            return {"type": "string", **model}

        if type_ref not in self.definitions:
            # Placeholder first so self-referencing models terminate
            self.definitions[type_ref] = {}
            self.definitions[type_ref] = self._build_definition(model)
        return {"$ref": DEFINITIONS_PREFIX + type_ref}

    def _build_definition(self, model: dict) -> dict:
        definition = {"type": "object", **copy.deepcopy(model)}
        properties = definition.get("properties")
        if properties:
            definition["properties"] = {
                name: self._resolve_property(value) for name, value in properties.items()
            }
        return definition

    def _resolve_property(self, value) -> dict:
        if isinstance(value, str):
            return copy.deepcopy(self._resolve(value.strip()))
        return value
