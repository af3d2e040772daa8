"""Input loading shared by wristpack-cli commands.

Every loader turns missing files, YAML syntax errors and schema
violations into CLIError with the matching exit code.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import yaml
from pydantic import ValidationError as PydanticValidationError

from wristpack_core.errors import ConfigurationError

from wristpack_cli.errors import (
    CLIError,
    handle_file_not_found,
    handle_validation_error,
    handle_yaml_error,
)

if TYPE_CHECKING:
    from wristpack_core.schemas import ArtifactListing, ProjectConfig

PROJECT_HINT = "Create a wristpack.yaml in the project root, or use --project to specify a path."
ARTIFACTS_HINT = "Use --artifacts to point at the artifact listing produced by the build."


def load_project_config(file_path: str) -> ProjectConfig:
    """Load wristpack.yaml or exit with a CLI error."""
    from wristpack_core.schemas import ProjectConfig

    path = Path(file_path)
    if not path.exists():
        handle_file_not_found(file_path, PROJECT_HINT)

    try:
        return ProjectConfig.from_yaml(path)
    except yaml.YAMLError as e:
        handle_yaml_error(e, file_path)
    except PydanticValidationError as e:
        handle_validation_error(e, file_path)
    except ConfigurationError as e:
        raise CLIError(e.user_message) from None


def load_artifact_listing(file_path: str) -> ArtifactListing:
    """Load an artifact listing or exit with a CLI error."""
    from wristpack_core.schemas import ArtifactListing

    path = Path(file_path)
    if not path.exists():
        handle_file_not_found(file_path, ARTIFACTS_HINT)

    try:
        return ArtifactListing.from_yaml(path)
    except yaml.YAMLError as e:
        handle_yaml_error(e, file_path)
    except PydanticValidationError as e:
        handle_validation_error(e, file_path)
    except ConfigurationError as e:
        raise CLIError(e.user_message) from None
