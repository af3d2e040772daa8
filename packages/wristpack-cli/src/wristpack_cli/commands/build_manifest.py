"""wristpack build-manifest command - Generate manifest.json."""

from __future__ import annotations

from pathlib import Path

import click

from wristpack_cli.errors import EXIT_USER_ERROR, CLIError, handle_permission_error
from wristpack_cli.loading import load_artifact_listing, load_project_config
from wristpack_cli.output import print_json, success


@click.command("build-manifest")
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
    default="./artifacts.yaml",
    help="Path to the artifact listing [default: ./artifacts.yaml]",
)
@click.option(
    "-b",
    "--build-id",
    "build_id",
    type=str,
    default=None,
    help="Build identifier [default: random 64-bit id]",
)
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(),
    default=".",
    help="Output directory [default: current directory]",
)
@click.option(
    "--print",
    "print_manifest",
    is_flag=True,
    default=False,
    help="Also print the manifest to stdout.",
)
def build_manifest(
    project_path: str,
    artifacts_path: str,
    build_id: str | None,
    output_path: str,
    print_manifest: bool,
) -> None:
    """Generate manifest.json from a build's artifacts.

    Reads the project configuration and the artifact listing, checks the
    bundle components of the build and writes the package manifest.
    Nothing is written if any artifact is rejected.

    Examples:

        wristpack build-manifest

        wristpack build-manifest --artifacts build/artifacts.yaml --output build/

        wristpack build-manifest --build-id 0x0123456789abcdef --print
    """
    project_config = load_project_config(project_path)
    listing = load_artifact_listing(artifacts_path)

    # Import here to avoid heavy imports at CLI startup
    from wristpack_core import WristpackError, app_package_manifest, generate_build_id

    stage = app_package_manifest(
        project_config=project_config,
        build_id=build_id or generate_build_id(),
    )

    try:
        manifest = stage.run(listing.to_artifacts())
    except WristpackError as e:
        raise CLIError(f"Manifest generation failed: {e.user_message}", EXIT_USER_ERROR) from None

    output = Path(output_path)
    manifest_file = output / manifest.relative
    try:
        output.mkdir(parents=True, exist_ok=True)
        manifest_file.write_bytes(manifest.contents)
    except PermissionError:
        handle_permission_error(str(manifest_file), "write")

    if print_manifest:
        print_json(manifest.contents.decode("utf-8"))

    success(f"Manifest written to {manifest_file}")
