"""Rich console output for wristpack-cli.

Colored status lines and JSON rendering. Color is disabled by the
``--no-color`` flag or the NO_COLOR environment variable.
"""

from __future__ import annotations

import os
from typing import Any

from rich.console import Console
from rich.markup import escape

_force_no_color = os.environ.get("NO_COLOR") is not None


def create_console(no_color: bool = False) -> Console:
    """Create a Rich Console honouring the color settings.

    Args:
        no_color: If True, disable colored output. NO_COLOR is always honoured.
    """
    disable = no_color or _force_no_color
    return Console(
        force_terminal=False if disable else None,
        no_color=disable,
        soft_wrap=True,
    )


console = create_console()


def success(message: str, **kwargs: Any) -> None:
    """Print a success line.

    Example:
        >>> success("Manifest written to manifest.json")
        ✓ Manifest written to manifest.json
    """
    console.print(f"[green]✓[/green] {escape(message)}", **kwargs)


def error(message: str, **kwargs: Any) -> None:
    """Print an error line.

    Example:
        >>> error("Cannot bundle mixed native/JS device components")
        ✗ Cannot bundle mixed native/JS device components
    """
    console.print(f"[red]✗[/red] {escape(message)}", **kwargs)


def info(message: str, **kwargs: Any) -> None:
    """Print a plain informational line."""
    console.print(escape(message), **kwargs)


def print_json(text: str, **kwargs: Any) -> None:
    """Print a JSON document with syntax highlighting."""
    console.print_json(text, **kwargs)


def set_no_color(no_color: bool) -> None:
    """Replace the module console to enable/disable colors."""
    global console
    console = create_console(no_color=no_color)
