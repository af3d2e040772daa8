"""Shared test fixtures for wristpack-cli tests.

Provides CliRunner fixtures and paths to the YAML fixtures used to drive
the commands.
"""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

PROJECT_YAML_FILENAME = "wristpack.yaml"
ARTIFACTS_YAML_FILENAME = "artifacts.yaml"


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def isolated_runner(cli_runner: CliRunner) -> Generator[CliRunner, None, None]:
    """Create a Click test runner with an isolated filesystem.

    This fixture creates a temporary directory and changes to it
    for the duration of the test.

    Yields:
        CliRunner instance with isolated filesystem.
    """
    with cli_runner.isolated_filesystem():
        yield cli_runner


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def valid_project_yaml(fixtures_dir: Path) -> Path:
    """Return the path to a valid wristpack.yaml fixture."""
    return fixtures_dir / "valid_wristpack.yaml"


@pytest.fixture
def invalid_project_yaml(fixtures_dir: Path) -> Path:
    """Return the path to a wristpack.yaml fixture that fails validation."""
    return fixtures_dir / "invalid_wristpack.yaml"


@pytest.fixture
def artifacts_yaml(fixtures_dir: Path) -> Path:
    """Return the path to an artifact listing with JS device and companion bundles."""
    return fixtures_dir / "artifacts.yaml"


@pytest.fixture
def invalid_artifacts_yaml(fixtures_dir: Path) -> Path:
    """Return the path to an artifact listing with three malformed bundle tags."""
    return fixtures_dir / "invalid_artifacts.yaml"


@pytest.fixture
def mixed_artifacts_yaml(fixtures_dir: Path) -> Path:
    """Return the path to an artifact listing mixing native and JS device bundles."""
    return fixtures_dir / "mixed_artifacts.yaml"


@pytest.fixture
def project_in_cwd(isolated_runner: CliRunner, fixtures_dir: Path) -> Path:
    """Copy the valid fixtures into the isolated working directory.

    Returns:
        The isolated working directory.
    """
    Path(PROJECT_YAML_FILENAME).write_text((fixtures_dir / "valid_wristpack.yaml").read_text())
    Path(ARTIFACTS_YAML_FILENAME).write_text((fixtures_dir / "artifacts.yaml").read_text())
    return Path.cwd()
