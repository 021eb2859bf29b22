"""Endpoint descriptor models.

Descriptors are the already-discovered metadata of a host framework's
HTTP actions. The generator only reads them; providers hand them over
as an ordered, immutable sequence.
"""

import re
from typing import Any, Literal, Protocol, Sequence

from pydantic import BaseModel, ConfigDict

NO_VALUE_TYPES = {"void", "none"}

_PLACEHOLDER = re.compile(r"(\{[^}]*\})")
_WORD_SPLIT = re.compile(r"[^0-9A-Za-z]+")


class ParameterDescriptor(BaseModel):
    """A single action parameter as reported by the host framework."""

    model_config = ConfigDict(frozen=True)

    name: str
    source: Literal["path", "query", "body"] = "query"
    optional: bool = False
    type_ref: str | None = None  # None for untyped route values
    default: Any = None
    pattern: str | None = None
    description: str | None = None


class EndpointDescriptor(BaseModel):
    """One HTTP action: method, route template, parameters and response type."""

    model_config = ConfigDict(frozen=True)

    http_method: str  # GET / POST / PUT / DELETE / PATCH / HEAD / OPTIONS
    relative_path: str  # users/{id}?expand={expand}
    controller: str
    action: str
    parameters: list[ParameterDescriptor] = []
    response_type: str | None = None
    obsolete: bool = False
    produces: list[str] = []
    consumes: list[str] = []

    @property
    def method(self) -> str:
        return self.http_method.lower()

    def relative_path_sans_query_string(self) -> str:
        return self.relative_path.split("?", 1)[0].lstrip("/")

    def returns_no_value(self) -> bool:
        return self.response_type is None or self.response_type.lower() in NO_VALUE_TYPES

    def friendly_id(self) -> str:
        """Method plus path segments, e.g. ``GET users/{id}`` -> ``GetUsersById``."""
        parts = [_pascal(self.method)]
        for segment in self.relative_path_sans_query_string().split("/"):
            for piece in _PLACEHOLDER.split(segment):
                if not piece:
                    continue
                if piece.startswith("{"):
                    name = piece[1:-1].split(":", 1)[0].lstrip("*")
                    parts.append("By" + _pascal(name))
                else:
                    parts.append(_pascal(piece))
        return "".join(parts)

    def qualified_friendly_id(self) -> str:
        """Controller and action name, e.g. ``Users_GetById``."""
        return f"{self.controller}_{self.action}"


class EndpointDescriptorProvider(Protocol):
    """Source of the endpoint descriptors for one generation call."""

    @property
    def descriptors(self) -> Sequence[EndpointDescriptor]:
        ...


def _pascal(text: str) -> str:
    return "".join(w[:1].upper() + w[1:] for w in _WORD_SPLIT.split(text) if w)
