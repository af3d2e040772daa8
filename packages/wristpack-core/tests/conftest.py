"""Shared pytest fixtures for wristpack-core tests.

This module provides project configuration, artifact factories and
path-normalization helpers used across the unit tests.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Callable
from typing import Any

import pytest
import structlog

from wristpack_core.compat.sdk_version import ApiVersionResolver, ApiVersions
from wristpack_core.schemas import Artifact, ProjectConfig

APP_ID = "b4ae822e-eca9-4fcb-8747-217f2a1f53a1"


def _stdout_logger_factory(*args: Any) -> structlog.PrintLogger:
    # Resolve sys.stdout per logger so capsys sees the output
    return structlog.PrintLogger(file=sys.stdout)


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture.

    Without this, structlog may use different processors depending on test
    execution order and capsys could miss logged details.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=_stdout_logger_factory,
        cache_logger_on_first_use=False,  # Important for test isolation
    )


@pytest.fixture
def sample_project_yaml() -> dict[str, Any]:
    """Return a minimal valid wristpack.yaml configuration."""
    return {
        "app_type": "app",
        "app_id": APP_ID,
        "requested_permissions": ["access_location", "access_internet"],
        "toolchain_version": "4.0.0",
    }


@pytest.fixture
def project_config(sample_project_yaml: dict[str, Any]) -> ProjectConfig:
    """Return a validated app configuration without tiles."""
    return ProjectConfig.model_validate(sample_project_yaml)


@pytest.fixture
def api_resolver() -> ApiVersionResolver:
    """Return a resolver whose single entry differs from the shipped table."""
    return ApiVersionResolver({"4.0.0": ApiVersions(device_api="5.1.0", companion_api="3.1.0")})


@pytest.fixture
def device_artifact() -> Callable[..., Artifact]:
    """Factory for device bundle artifacts.

    Returns:
        Function taking a family and optional nativity, path and platforms.
    """

    def _create(
        family: str,
        *,
        native: bool = False,
        relative: str | None = None,
        platform: list[str] | None = None,
    ) -> Artifact:
        tag: dict[str, Any] = {
            "type": "device",
            "family": family,
            "platform": platform if platform is not None else [family],
        }
        if native:
            tag["isNative"] = True
        return Artifact(
            relative=relative or f"device-{family}.zip",
            component_bundle=tag,
        )

    return _create


@pytest.fixture
def companion_artifact() -> Callable[..., Artifact]:
    """Factory for companion bundle artifacts."""

    def _create(relative: str = "companion.zip") -> Artifact:
        return Artifact(relative=relative, component_bundle={"type": "companion"})

    return _create


@pytest.fixture
def normalize_paths() -> Callable[[Any], Any]:
    """Normalize backslashes and the working directory in test output.

    Strings and exception messages are rewritten so that assertions do not
    depend on the platform or on where the tests run: backslashes become
    forward slashes and the current working directory becomes ``<cwd>``.
    """
    cwd = os.getcwd().replace("\\", "/")

    def _normalize(value: Any) -> Any:
        if isinstance(value, BaseException):
            value = str(value)
        if isinstance(value, str):
            return value.replace("\\", "/").replace(cwd, "<cwd>")
        return value

    return _normalize
