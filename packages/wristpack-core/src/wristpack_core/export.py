"""JSON Schema export functions for wristpack.

This module provides functions to export JSON Schema Draft 2020-12 schemas
from the Pydantic models, for editor support when writing wristpack.yaml
and for validating manifest.json in other toolchains.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from wristpack_core.schemas import ManifestDescriptor, ProjectConfig

SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"
SCHEMA_BASE_URI = "https://wristpack.dev/schemas"


def export_project_config_schema(
    output_path: Path | str | None = None,
) -> dict[str, Any]:
    """Export ProjectConfig JSON Schema for wristpack.yaml.

    Args:
        output_path: Optional path to write schema file. If provided,
            creates parent directories as needed.

    Returns:
        Dictionary containing the JSON Schema.

    Example:
        >>> schema = export_project_config_schema()
        >>> schema["$schema"]
        'https://json-schema.org/draft/2020-12/schema'
    """
    return _export(ProjectConfig, "wristpack.schema.json", output_path, by_alias=False)


def export_manifest_schema(
    output_path: Path | str | None = None,
) -> dict[str, Any]:
    """Export ManifestDescriptor JSON Schema for manifest.json.

    The schema describes the wire (camelCase) form of the manifest.

    Example:
        >>> schema = export_manifest_schema()
        >>> "buildId" in schema["properties"]
        True
    """
    return _export(ManifestDescriptor, "manifest.schema.json", output_path, by_alias=True)


def _export(
    model: type[BaseModel],
    file_name: str,
    output_path: Path | str | None,
    *,
    by_alias: bool,
) -> dict[str, Any]:
    schema = model.model_json_schema(by_alias=by_alias)

    schema["$schema"] = SCHEMA_DIALECT
    schema["$id"] = f"{SCHEMA_BASE_URI}/{file_name}"

    if "additionalProperties" not in schema:
        schema["additionalProperties"] = False

    if output_path is not None:
        _write_schema_file(schema, output_path)

    return schema


def _write_schema_file(schema: dict[str, Any], path: Path | str) -> None:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(schema, indent=2))
