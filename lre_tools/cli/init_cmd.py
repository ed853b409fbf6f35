"""CLI command that writes a starting configuration file."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console

from lre_tools.core.config import default_config, save_config


@click.command("init")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default="lre_config.json",
    show_default=True,
    help="Configuration file to create.",
)
@click.option("--name", type=str, default=None, help="Project name.")
@click.option("--force", is_flag=True, help="Overwrite an existing file.")
@click.pass_context
def init(ctx: click.Context, output: str, name: str | None, force: bool) -> None:
    """Write the reference engine configuration (SI values) to a JSON file."""
    console: Console = ctx.obj.get("console", Console())

    if Path(output).exists() and not force:
        console.print(f"[red]Error:[/red] {output} exists; use --force to overwrite.")
        raise SystemExit(1)

    config = default_config()
    if name:
        config.meta.name = name
    save_config(config, output)
    console.print(f"[green]Wrote[/green] {output}")
