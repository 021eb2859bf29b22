"""Project file loader.

A project file is a YAML (or JSON) document describing everything the
generator needs when no host framework is around to discover endpoints:

    versions:
      v1: {title: Petstore, version: v1}
    options:
      ignore_obsolete_actions: true
      tag_descriptions: {Pets: Everything about pets}
    models:
      Pet: {required: [name], properties: {id: int64, name: string}}
    endpoints:
      - {http_method: GET, relative_path: pets/{id}, controller: Pets,
         action: GetById, response_type: Pet, parameters: [...]}
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from swagger_composer.descriptors.base import EndpointDescriptor
from swagger_composer.document.models import Info
from swagger_composer.errors import ProjectFileError
from swagger_composer.generator.filters import ApplySecurityRequirements, StaticTagDescriptions
from swagger_composer.generator.options import ConflictingActionsResolver, GeneratorOptions


class ProjectEndpoint(EndpointDescriptor):
    """Endpoint descriptor that also lists the API versions it belongs to."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    api_versions: list[str] = []  # empty means every version


class ProjectOptions(BaseModel):
    ignore_obsolete_actions: bool = False
    schemes: list[str] | None = None
    security_definitions: dict[str, dict] | None = None
    security: list[dict[str, list[str]]] | None = None
    tag_descriptions: dict[str, str] = {}


class Project(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    versions: dict[str, Info]
    options: ProjectOptions = ProjectOptions()
    models: dict[str, dict] = {}
    endpoints: list[ProjectEndpoint] = []

    def provider(self) -> "StaticDescriptorProvider":
        return StaticDescriptorProvider(self.endpoints)

    def generator_options(
        self,
        conflicting_actions_resolver: ConflictingActionsResolver | None = None,
        ignore_obsolete_actions: bool | None = None,
    ) -> GeneratorOptions:
        """Translate the file's options section, with optional CLI overrides."""
        options = GeneratorOptions(
            ignore_obsolete_actions=(
                self.options.ignore_obsolete_actions
                if ignore_obsolete_actions is None
                else ignore_obsolete_actions
            ),
            conflicting_actions_resolver=conflicting_actions_resolver,
            version_support_resolver=declared_versions_resolver,
            schemes=self.options.schemes,
            security_definitions=self.options.security_definitions,
        )
        if self.options.tag_descriptions:
            options.model_filters.append(StaticTagDescriptions(self.options.tag_descriptions))
        if self.options.security:
            options.operation_filters.append(ApplySecurityRequirements(self.options.security))
        return options


class StaticDescriptorProvider:
    """Provider over a fixed list of descriptors."""

    def __init__(self, descriptors: list[EndpointDescriptor]):
        self._descriptors = tuple(descriptors)

    @property
    def descriptors(self) -> tuple[EndpointDescriptor, ...]:
        return self._descriptors


def declared_versions_resolver(descriptor: EndpointDescriptor, api_version: str) -> bool:
    versions = getattr(descriptor, "api_versions", None)
    return not versions or api_version in versions


def load_project(file_path: Path) -> Project:
    """Read and validate a project file."""
    try:
        text = file_path.read_text(encoding="utf-8")
        data = yaml.safe_load(text)
    except (OSError, yaml.YAMLError) as err:
        raise ProjectFileError(f"Cannot read {file_path}: {err}") from err

    if not isinstance(data, dict):
        raise ProjectFileError(f"{file_path} does not contain a mapping")

    try:
        return Project.model_validate(data)
    except ValidationError as err:
        raise ProjectFileError(f"Invalid project file {file_path}:\n{err}") from err
