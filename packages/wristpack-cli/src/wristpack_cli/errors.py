"""CLI error handling for wristpack-cli.

Maps wristpack-core, pydantic and YAML failures to user-facing messages
and exit codes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import click
from pydantic import ValidationError as PydanticValidationError

from wristpack_cli.output import error

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails


# Exit codes following sysexits.h convention
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1  # Invalid configuration, rejected artifacts
EXIT_SYSTEM_ERROR = 2  # Missing input files, unwritable output


class CLIError(click.ClickException):
    """CLI-specific exception with exit code support.

    Attributes:
        message: User-facing error message.
        exit_code: Exit code for the CLI (default: 1).
    """

    def __init__(self, message: str, exit_code: int = EXIT_USER_ERROR) -> None:
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: object = None) -> None:
        """Display the error message using Rich formatting."""
        error(self.format_message())


def format_pydantic_error(err: PydanticValidationError) -> str:
    """Format a pydantic validation error as one line per field.

    Example:
        >>> format_pydantic_error(err)
        "Validation failed:\\n  - app_id: Field required"
    """
    errors: list[ErrorDetails] = err.errors()
    lines = ["Validation failed:"]

    for e in errors:
        loc = ".".join(str(x) for x in e["loc"])
        lines.append(f"  - {loc}: {e['msg']}")

    return "\n".join(lines)


def handle_yaml_error(err: Exception, file_path: str) -> NoReturn:
    """Raise a CLIError for a YAML parsing error, with line information."""
    error_msg = str(err)
    mark = getattr(err, "problem_mark", None)
    if mark is not None:
        problem = getattr(err, "problem", None)
        error_msg = f"YAML syntax error at line {mark.line + 1}, column {mark.column + 1}: {problem}"

    raise CLIError(f"Invalid YAML in {file_path}: {error_msg}")


def handle_validation_error(err: PydanticValidationError, file_path: str) -> NoReturn:
    """Raise a CLIError for a pydantic validation error."""
    raise CLIError(f"Invalid configuration in {file_path}:\n{format_pydantic_error(err)}")


def handle_file_not_found(file_path: str, hint: str | None = None) -> NoReturn:
    """Raise a CLIError for a missing input file."""
    message = f"File not found: {file_path}"
    if hint:
        message = f"{message}\n\n{hint}"
    raise CLIError(message, exit_code=EXIT_SYSTEM_ERROR)


def handle_permission_error(path: str, operation: str = "access") -> NoReturn:
    """Raise a CLIError for a permission failure."""
    raise CLIError(
        f"Permission denied: Cannot {operation} {path}",
        exit_code=EXIT_SYSTEM_ERROR,
    )
