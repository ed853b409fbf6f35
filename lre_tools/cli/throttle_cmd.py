"""CLI command for the throttle performance sweep."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from lre_tools.cli.common import (
    EXIT_NOT_CONVERGED,
    build_solver,
    config_option,
    display_units,
    load_analysis_config,
    solver_option,
    units_option,
)
from lre_tools.core.combustion import CombustionError
from lre_tools.core.config import save_results_json
from lre_tools.core.throttle import throttle_sweep
from lre_tools.utils.units import display_unit, to_display


@click.command("throttle")
@config_option
@solver_option
@units_option
@click.option("--plot", type=click.Path(dir_okay=False), default=None, help="Save sweep plot (PNG/PDF/SVG).")
@click.option("--report", type=click.Path(dir_okay=False), default=None, help="Save text report.")
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None, help="Output file (JSON).")
@click.pass_context
def throttle(
    ctx: click.Context,
    config_path: str | None,
    solver: str,
    units: str | None,
    plot: str | None,
    report: str | None,
    output: str | None,
) -> None:
    """Sweep thrust from full throttle down to the minimum setting."""
    console: Console = ctx.obj.get("console", Console())

    config = load_analysis_config(console, config_path)
    units = display_units(config, units)
    backend = build_solver(console, solver, config)

    try:
        result = throttle_sweep(config.throttle, config.propellants, backend)
    except CombustionError as e:
        console.print(f"[red]Error:[/red] Full-throttle design point failed: {e}")
        raise SystemExit(1)

    b = result.baseline
    f_unit = display_unit("force", units)
    p_unit = display_unit("pressure", units)
    m_unit = display_unit("mass_flow", units)

    console.print("\n[bold]LRE Tools — Throttle Analysis[/bold]\n")
    console.print(
        f"  {config.propellants.oxidizer} / {config.propellants.fuel}, "
        f"O/F = {config.propellants.mixture_ratio:.2f}, "
        f"ε = {b.expansion_ratio:.3f}, "
        f"At = {to_display(b.throat_area, 'area', units):.4f} {display_unit('area', units)}\n"
    )

    table = Table(title="Throttle Sweep")
    table.add_column("Throttle", style="cyan", justify="right")
    table.add_column(f"Thrust ({f_unit})", style="green", justify="right")
    table.add_column(f"Pc ({p_unit})", style="green", justify="right")
    table.add_column(f"Pe ({p_unit})", justify="right")
    table.add_column(f"ṁ ({m_unit})", justify="right")
    table.add_column("Isp (s)", justify="right")
    table.add_column("Iter", style="dim", justify="right")
    table.add_column("Status")

    for p in result.points:
        status = "[green]converged[/green]" if p.converged else f"[red]{p.status.value}[/red]"
        table.add_row(
            f"{p.throttle * 100:.1f}%",
            f"{to_display(p.thrust, 'force', units):.2f}",
            f"{to_display(p.chamber_pressure, 'pressure', units):.3f}",
            f"{to_display(p.exit_pressure, 'pressure', units):.3f}",
            f"{to_display(p.mass_flow, 'mass_flow', units):.4f}",
            f"{p.specific_impulse:.1f}",
            str(p.iterations),
            status,
        )
    console.print(table)

    if report:
        from lre_tools.reports.summary import generate_throttle_report, save_text_report

        text = generate_throttle_report(result, config.propellants, config.meta, units=units)
        save_text_report(text, report)
        console.print(f"\n[dim]Report saved to {report}[/dim]")

    if plot:
        from lre_tools.reports.plots import plot_throttle_sweep

        plot_throttle_sweep(
            result, config.propellants, config.throttle.min_throttle, units=units, path=plot
        )
        console.print(f"[dim]Plot saved to {plot}[/dim]")

    if output:
        save_results_json(result, output, meta=config.meta)
        console.print(f"[dim]Saved to {output}[/dim]")

    failures = result.failures()
    if failures:
        console.print(
            f"\n[red]WARNING:[/red] {len(failures)} of {len(result.points)} throttle points "
            "did not converge."
        )
        ctx.exit(EXIT_NOT_CONVERGED)
    console.print("\n[green]OK:[/green] All throttle points converged.")
