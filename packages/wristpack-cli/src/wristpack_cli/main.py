"""CLI entry point for wristpack.

The main group loads subcommands lazily so that ``wristpack --help`` does
not import pydantic models or the manifest stage.
"""

from __future__ import annotations

import importlib
from typing import Any

import click
import rich_click as rclick

from wristpack_cli import __version__
from wristpack_cli.output import set_no_color

# Configure rich-click for better help formatting
rclick.rich_click.TEXT_MARKUP = "markdown"
rclick.rich_click.SHOW_ARGUMENTS = True
rclick.rich_click.GROUP_ARGUMENTS_OPTIONS = True


class LazyGroup(rclick.RichGroup):
    """Click group that imports command modules only when invoked.

    Attributes:
        lazy_subcommands: Mapping of command names to "module.attribute" paths.
    """

    def __init__(
        self,
        *args: Any,
        lazy_subcommands: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.lazy_subcommands: dict[str, str] = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        commands = set(super().list_commands(ctx))
        commands.update(self.lazy_subcommands.keys())
        return sorted(commands)

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        cmd = super().get_command(ctx, cmd_name)  # type: ignore[arg-type]
        if cmd is not None:
            return cmd

        if cmd_name not in self.lazy_subcommands:
            return None

        module_name, attr_name = self.lazy_subcommands[cmd_name].rsplit(".", 1)
        mod = importlib.import_module(module_name)
        return getattr(mod, attr_name)  # type: ignore[no-any-return]


LAZY_COMMANDS = {
    "build-manifest": "wristpack_cli.commands.build_manifest.build_manifest",
    "validate": "wristpack_cli.commands.validate.validate",
    "schema": "wristpack_cli.commands.schema.schema",
}


def _configure_logging(ctx: click.Context, param: click.Parameter, verbose: bool) -> None:
    from wristpack_core.observability import configure_logging

    if verbose:
        configure_logging(log_level="DEBUG", json_format=False)
    else:
        configure_logging(log_level="WARNING", json_format=False, add_timestamp=False)


@click.command(cls=LazyGroup, lazy_subcommands=LAZY_COMMANDS)
@click.version_option(version=__version__, prog_name="wristpack")
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output.",
    is_eager=True,
    expose_value=False,
    callback=lambda ctx, param, value: set_no_color(value) if value else None,
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    default=False,
    help="Log every ingested artifact.",
    expose_value=False,
    callback=_configure_logging,
)
def cli() -> None:
    """Wristpack - package manifest generation.

    Check the bundle components of a build and write its manifest.json.

    **Getting Started:**

    - `wristpack validate` - Validate wristpack.yaml
    - `wristpack build-manifest` - Write manifest.json for a build
    - `wristpack schema export` - Export JSON Schema for editor support
    """


if __name__ == "__main__":
    cli()
