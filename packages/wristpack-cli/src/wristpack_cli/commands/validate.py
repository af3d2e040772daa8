"""wristpack validate command - Validate project configuration and bundle tags."""

from __future__ import annotations

import click

from wristpack_cli.errors import CLIError
from wristpack_cli.loading import load_artifact_listing, load_project_config
from wristpack_cli.output import error, success


@click.command()
@click.option(
    "-p",
    "--project",
    "project_path",
    type=click.Path(exists=False),
    default="./wristpack.yaml",
    help="Path to wristpack.yaml [default: ./wristpack.yaml]",
)
@click.option(
    "-a",
    "--artifacts",
    "artifacts_path",
    type=click.Path(exists=False),
    default=None,
    help="Optional artifact listing whose bundle tags are checked too.",
)
def validate(project_path: str, artifacts_path: str | None) -> None:
    """Validate wristpack.yaml and, optionally, artifact bundle tags.

    Every malformed bundle tag is reported, not just the first one.

    Examples:

        wristpack validate

        wristpack validate --artifacts build/artifacts.yaml
    """
    load_project_config(project_path)
    success("Configuration valid")

    if artifacts_path is None:
        return

    listing = load_artifact_listing(artifacts_path)

    # Import here to avoid heavy imports at CLI startup
    from wristpack_core import ValidationError, validate_bundle_tag

    failures = 0
    for entry in listing.artifacts:
        if entry.component_bundle is None:
            continue
        result = validate_bundle_tag(entry.component_bundle, entry.path)
        if isinstance(result, ValidationError):
            failures += 1
            error(result.user_message)

    if failures:
        raise CLIError(f"{failures} artifact(s) carry invalid bundle tags")

    success(f"Bundle tags valid ({len(listing.artifacts)} artifacts)")
