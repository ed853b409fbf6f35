"""LRE Tools command-line interface.

Entry point for the ``lre`` CLI tool.
"""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from lre_tools import __app_name__, __version__

console = Console()

_LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO}


@click.group()
@click.version_option(version=__version__, prog_name=__app_name__)
@click.option("-v", "--verbose", count=True, help="Increase log output (-v info, -vv debug).")
@click.pass_context
def cli(ctx: click.Context, verbose: int) -> None:
    """LRE Tools — liquid rocket engine throttle and cooling analysis."""
    logging.basicConfig(
        level=_LOG_LEVELS.get(verbose, logging.DEBUG),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
    ctx.ensure_object(dict)
    ctx.obj["console"] = console


# Import and register sub-commands
from lre_tools.cli.init_cmd import init  # noqa: E402
from lre_tools.cli.regen_cmd import regen  # noqa: E402
from lre_tools.cli.throttle_cmd import throttle  # noqa: E402

cli.add_command(init)
cli.add_command(throttle)
cli.add_command(regen)


def main() -> None:
    """Convenience wrapper for entry-point scripts."""
    cli()
