"""Swagger 2.0 output object model.

Field names follow Python conventions; serialization uses the Swagger
names through aliases (``in``, ``operationId``, ``basePath``...). Fields
left as None are omitted from the serialized document. Every model
accepts extra fields so filters can attach ``x-*`` vendor extensions.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

SUPPORTED_METHODS = ("get", "put", "post", "delete", "options", "head", "patch")

# Schema keywords that may appear directly on a non-body parameter
PARAMETER_SCHEMA_FIELDS = {
    "type": "type",
    "format": "format",
    "items": "items",
    "collectionFormat": "collection_format",
    "default": "default",
    "maximum": "maximum",
    "exclusiveMaximum": "exclusive_maximum",
    "minimum": "minimum",
    "exclusiveMinimum": "exclusive_minimum",
    "maxLength": "max_length",
    "minLength": "min_length",
    "pattern": "pattern",
    "maxItems": "max_items",
    "minItems": "min_items",
    "uniqueItems": "unique_items",
    "enum": "enum",
    "multipleOf": "multiple_of",
}


class SwaggerModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class Contact(SwaggerModel):
    name: str | None = None
    url: str | None = None
    email: str | None = None


class License(SwaggerModel):
    name: str
    url: str | None = None


class Info(SwaggerModel):
    """API metadata for one version."""

    model_config = ConfigDict(coerce_numbers_to_str=True)  # YAML reads `version: 1.0` as a float

    version: str
    title: str
    description: str | None = None
    terms_of_service: str | None = Field(None, alias="termsOfService")
    contact: Contact | None = None
    license: License | None = None


class Tag(SwaggerModel):
    name: str
    description: str | None = None


class Response(SwaggerModel):
    description: str
    schema_: dict | None = Field(None, alias="schema")
    headers: dict[str, dict] | None = None
    examples: dict[str, Any] | None = None


class Parameter(SwaggerModel):
    """A materialized parameter. Only body parameters carry a schema."""

    name: str
    in_: str = Field(alias="in")  # path / query / body
    required: bool | None = None
    description: str | None = None
    type: str | None = None
    format: str | None = None
    items: dict | None = None
    collection_format: str | None = Field(None, alias="collectionFormat")
    default: Any = None
    maximum: float | None = None
    exclusive_maximum: bool | None = Field(None, alias="exclusiveMaximum")
    minimum: float | None = None
    exclusive_minimum: bool | None = Field(None, alias="exclusiveMinimum")
    max_length: int | None = Field(None, alias="maxLength")
    min_length: int | None = Field(None, alias="minLength")
    pattern: str | None = None
    max_items: int | None = Field(None, alias="maxItems")
    min_items: int | None = Field(None, alias="minItems")
    unique_items: bool | None = Field(None, alias="uniqueItems")
    enum: list[Any] | None = None
    multiple_of: float | None = Field(None, alias="multipleOf")
    schema_: dict | None = Field(None, alias="schema")

    def populate_from(self, schema: dict) -> None:
        """Copy the inlinable keywords of *schema* onto this parameter."""
        for key, attr in PARAMETER_SCHEMA_FIELDS.items():
            if key in schema:
                setattr(self, attr, schema[key])


class Operation(SwaggerModel):
    tags: list[str] | None = None
    summary: str | None = None
    description: str | None = None
    operation_id: str | None = Field(None, alias="operationId")
    consumes: list[str] | None = None
    produces: list[str] | None = None
    parameters: list[Parameter] | None = None
    responses: dict[str, Response]
    schemes: list[str] | None = None
    deprecated: bool | None = None
    security: list[dict[str, list[str]]] | None = None


class PathItem(SwaggerModel):
    get: Operation | None = None
    put: Operation | None = None
    post: Operation | None = None
    delete: Operation | None = None
    options: Operation | None = None
    head: Operation | None = None
    patch: Operation | None = None

    def operations(self) -> dict[str, Operation]:
        """Populated operations keyed by lower-case method."""
        return {m: getattr(self, m) for m in SUPPORTED_METHODS if getattr(self, m) is not None}


class SwaggerDocument(SwaggerModel):
    swagger: str = "2.0"
    info: Info
    host: str | None = None
    base_path: str | None = Field(None, alias="basePath")
    schemes: list[str] | None = None
    consumes: list[str] | None = None
    produces: list[str] | None = None
    tags: list[Tag] | None = None
    paths: dict[str, PathItem]
    definitions: dict[str, dict] | None = None
    security_definitions: dict[str, dict] | None = Field(None, alias="securityDefinitions")
    security: list[dict[str, list[str]]] | None = None
