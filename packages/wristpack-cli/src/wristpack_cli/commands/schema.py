"""wristpack schema command - Export JSON Schema."""

from __future__ import annotations

from pathlib import Path

import click

from wristpack_cli.errors import handle_permission_error
from wristpack_cli.output import success


@click.group()
def schema() -> None:
    """Export JSON Schema files.

    **Commands:**

    - `wristpack schema export` - Export the wristpack.yaml JSON Schema
    - `wristpack schema export-manifest` - Export the manifest.json JSON Schema
    """


@schema.command("export")
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(),
    default="./schemas/wristpack.schema.json",
    help="Output path [default: ./schemas/wristpack.schema.json]",
)
def export_schema(output_path: str) -> None:
    """Export the wristpack.yaml JSON Schema for editor support.

    Examples:

        wristpack schema export

        wristpack schema export --output custom/path/schema.json
    """
    from wristpack_core import export_project_config_schema

    try:
        export_project_config_schema(Path(output_path))
    except PermissionError:
        handle_permission_error(output_path, "write")

    success(f"Schema exported to {output_path}")


@schema.command("export-manifest")
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(),
    default="./schemas/manifest.schema.json",
    help="Output path [default: ./schemas/manifest.schema.json]",
)
def export_manifest(output_path: str) -> None:
    """Export the manifest.json JSON Schema.

    Examples:

        wristpack schema export-manifest
    """
    from wristpack_core import export_manifest_schema

    try:
        export_manifest_schema(Path(output_path))
    except PermissionError:
        handle_permission_error(output_path, "write")

    success(f"Manifest schema exported to {output_path}")
