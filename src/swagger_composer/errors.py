"""Exception hierarchy for document generation.

Every error raised by the generator derives from SwaggerComposerError so
callers (and the CLI) can catch one type.
"""


class SwaggerComposerError(Exception):
    """Base class for all generation errors."""


class UnknownApiVersionError(SwaggerComposerError):
    """The requested API version is not in the configured version map."""

    def __init__(self, api_version: str):
        self.api_version = api_version
        super().__init__(f"Unknown API version: {api_version!r}")


class ConfigurationError(SwaggerComposerError):
    """Generator options are missing or invalid."""


class ConflictingActionsError(ConfigurationError):
    """Several actions map to the same path and method and cannot be resolved."""

    def __init__(self, path: str, method: str, descriptors: list, reason: str):
        self.path = path
        self.method = method
        self.descriptors = descriptors
        actions = ", ".join(f"{d.controller}.{d.action}" for d in descriptors)
        super().__init__(
            f"Conflicting actions for {method.upper()} /{path} ({actions}): {reason}"
        )


class UnknownTypeError(SwaggerComposerError):
    """A type reference could not be resolved by the schema registry."""

    def __init__(self, type_ref: str):
        self.type_ref = type_ref
        super().__init__(f"Unknown type reference: {type_ref!r}")


class ProjectFileError(SwaggerComposerError):
    """A project file could not be read or failed validation."""
