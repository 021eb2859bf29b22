"""Serialization of generated documents to JSON or YAML text."""

import json
from pathlib import Path

import yaml

from swagger_composer.document.models import SwaggerDocument


def document_to_dict(document: SwaggerDocument) -> dict:
    """Plain dict with Swagger field names and absent fields dropped."""
    return document.model_dump(mode="json", by_alias=True, exclude_none=True)


def dump_document(document: SwaggerDocument, fmt: str = "json") -> str:
    data = document_to_dict(document)
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def detect_output_format(file_path: Path) -> str:
    """Return 'yaml' for .yaml/.yml files, otherwise 'json'."""
    if file_path.suffix.lower() in (".yaml", ".yml"):
        return "yaml"
    return "json"
