"""Helpers shared by the analysis commands."""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape

from lre_tools.core.combustion import CombustionError, EquilibriumSolver, make_solver
from lre_tools.core.config import AnalysisConfig, ConfigError, default_config, load_config

# Exit status when an analysis ran but some point or station did not converge
EXIT_NOT_CONVERGED = 2

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Configuration JSON (default: reference engine).",
)
solver_option = click.option(
    "--solver",
    type=click.Choice(["cea", "ideal"], case_sensitive=False),
    default="cea",
    show_default=True,
    help="Equilibrium chemistry backend.",
)
units_option = click.option(
    "--units",
    type=click.Choice(["si", "imperial"], case_sensitive=False),
    default=None,
    help="Display units (default: from the configuration).",
)


def load_analysis_config(console: Console, path: str | None) -> AnalysisConfig:
    """Load a configuration file or fall back to the reference engine."""
    if path is None:
        return default_config()
    try:
        return load_config(path)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1)


def display_units(config: AnalysisConfig, units: str | None) -> str:
    return (units or config.meta.unit_system).lower()


def build_solver(console: Console, kind: str, config: AnalysisConfig) -> EquilibriumSolver:
    """Create the equilibrium backend, exiting with a message on failure."""
    prop = config.propellants
    try:
        return make_solver(
            kind,
            prop.oxidizer,
            prop.fuel,
            oxidizer_temperature=prop.oxidizer_temperature,
            fuel_temperature=prop.fuel_temperature,
        )
    except ImportError as e:
        console.print(
            f"[red]Error:[/red] RocketCEA is not available ({e}). "
            "Install the 'cea' extra or use --solver ideal."
        )
        raise SystemExit(1)
    except (CombustionError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)
