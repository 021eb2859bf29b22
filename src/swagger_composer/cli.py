"""CLI entry point for swagger-composer."""

import logging
from pathlib import Path

import click

from swagger_composer.descriptors.loader import Project, load_project
from swagger_composer.document.writer import detect_output_format, dump_document
from swagger_composer.errors import SwaggerComposerError
from swagger_composer.generator.composer import DocumentComposer
from swagger_composer.generator.paths import first_action, last_action

CONFLICT_RESOLVERS = {
    "error": None,
    "first": first_action,
    "last": last_action,
}


def _load(project_path: Path) -> Project:
    try:
        return load_project(project_path)
    except SwaggerComposerError as err:
        raise click.ClickException(str(err)) from err


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log generation details to stderr.")
def main(verbose: bool):
    """Swagger Composer: assemble Swagger 2.0 documents from endpoint descriptors."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("project_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--root-url", required=True, help="URL the API is served from, e.g. https://api.example.com/v1.")
@click.option("--api-version", required=True, help="Version key from the project's versions section.")
@click.option("-o", "--output", default=None, type=click.Path(dir_okay=False, path_type=Path), help="Output file; stdout when omitted.")
@click.option("--format", "fmt", default="auto", type=click.Choice(["auto", "json", "yaml"]), help="Output format.")
@click.option("--on-conflict", default="error", type=click.Choice(sorted(CONFLICT_RESOLVERS)), help="How to resolve actions sharing a path and method.")
@click.option("--ignore-obsolete", is_flag=True, help="Drop obsolete actions regardless of the project file.")
def generate(project_path: Path, root_url: str, api_version: str, output: Path | None, fmt: str, on_conflict: str, ignore_obsolete: bool):
    """Generate the Swagger document for one API version."""
    project = _load(project_path)

    if fmt == "auto":
        fmt = detect_output_format(output) if output else "json"

    try:
        options = project.generator_options(
            conflicting_actions_resolver=CONFLICT_RESOLVERS[on_conflict],
            ignore_obsolete_actions=True if ignore_obsolete else None,
        )
        composer = DocumentComposer(project.provider(), project.versions, options, project.models)
        document = composer.generate(root_url, api_version)
    except SwaggerComposerError as err:
        raise click.ClickException(str(err)) from err

    text = dump_document(document, fmt)
    if output is None:
        click.echo(text, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    click.echo(f"Wrote {len(document.paths)} paths to {output}", err=True)


@main.command()
@click.argument("project_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def versions(project_path: Path):
    """List the API versions a project file configures."""
    project = _load(project_path)
    for key, info in project.versions.items():
        click.echo(f"{key}\t{info.title} {info.version}")
