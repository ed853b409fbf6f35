"""CLI command for the regenerative cooling heat balance."""

from __future__ import annotations

import click
import numpy as np
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
from lre_tools.core.config import save_results_json
from lre_tools.core.cooling import analyze_regen_cooling
from lre_tools.core.fluids import FluidPropertyError, get_fluid
from lre_tools.utils.units import display_unit, to_display
from lre_tools.utils.validation import ValidationResult, validate_contour


@click.command("regen")
@config_option
@solver_option
@units_option
@click.option(
    "--contour",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Wall contour CSV with columns x, r [m]; marches all stations.",
)
@click.option("--show-iterations", is_flag=True, help="Print the wall-temperature iterations.")
@click.option("--plot", type=click.Path(dir_okay=False), default=None, help="Save station or convergence plot.")
@click.option("--report", type=click.Path(dir_okay=False), default=None, help="Save text report.")
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None, help="Output file (JSON).")
@click.pass_context
def regen(
    ctx: click.Context,
    config_path: str | None,
    solver: str,
    units: str | None,
    contour: str | None,
    show_iterations: bool,
    plot: str | None,
    report: str | None,
    output: str | None,
) -> None:
    """Balance gas-side and coolant-side heat flux in the cooling channels.

    Exits with status 2 when a station does not converge or the coolant
    reaches saturation.
    """
    console: Console = ctx.obj.get("console", Console())

    config = load_analysis_config(console, config_path)
    units = display_units(config, units)
    regen_cfg = config.regen

    contour_x = contour_r = None
    if contour:
        try:
            data = np.loadtxt(contour, delimiter=",", ndmin=2)
        except ValueError as e:
            console.print(f"[red]Error:[/red] Cannot read contour {contour}: {e}")
            raise SystemExit(1)
        if data.shape[1] < 2:
            console.print("[red]Error:[/red] Contour CSV needs two columns: x, r.")
            raise SystemExit(1)
        contour_x, contour_r = data[:, 0], data[:, 1]
        check = ValidationResult()
        validate_contour(contour_x, contour_r, check)
        if not check.is_valid:
            for m in check.errors:
                console.print(f"[red]Error:[/red] {m.parameter}: {m.message}")
            raise SystemExit(1)

    backend = build_solver(console, solver, config)
    try:
        coolant = get_fluid(regen_cfg.coolant)
    except FluidPropertyError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    result = analyze_regen_cooling(
        regen_cfg, config.propellants, backend, coolant, contour_x=contour_x, contour_r=contour_r
    )

    t_unit = display_unit("temperature", units)
    console.print("\n[bold]LRE Tools — Regenerative Cooling Analysis[/bold]\n")

    table = Table(title="Cooling Summary")
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_column("Unit", style="dim")

    def row(label: str, value: float, quantity: str, fmt: str = ".2f") -> None:
        table.add_row(label, f"{to_display(value, quantity, units):{fmt}}", display_unit(quantity, units))

    table.add_row("Coolant", coolant.name, "—")
    table.add_row("Channels", str(result.n_channels), "—")
    row("Throat Diameter", result.throat_diameter, "length")
    row("Hydraulic Diameter", result.channel.hydraulic_diameter, "length", ".3f")
    row("Flow per Channel", result.channel_mass_flow, "mass_flow", ".5f")
    table.add_row("", "", "")
    row("Coolant Inlet Temp", result.coolant_inlet_temperature, "temperature", ".1f")
    row("Coolant Outlet Temp", result.coolant_outlet_temperature, "temperature", ".1f")
    row("Coolant Outlet Pressure", result.coolant_outlet_pressure, "pressure", ".3f")
    row("Max Wall Temp (gas side)", result.max_wall_temperature, "temperature", ".1f")
    row("Max Heat Flux", result.max_heat_flux, "heat_flux", ".4f")
    row("Total Heat Load", result.total_heat_load, "power", ".2f")
    table.add_row("Boiling Stations", str(len(result.boiling_stations)), "—")
    console.print(table)

    if len(result.stations) > 1:
        stations = Table(title="Stations (coolant flow order)")
        stations.add_column(f"x ({display_unit('length', units)})", justify="right")
        stations.add_column("Mach", justify="right")
        stations.add_column(f"T_wg ({t_unit})", justify="right")
        stations.add_column(f"T_cool ({t_unit})", justify="right")
        stations.add_column(f"q ({display_unit('heat_flux', units)})", justify="right")
        stations.add_column("Status")
        for s in result.stations:
            stations.add_row(
                f"{to_display(s.x, 'length', units):.2f}",
                f"{s.mach:.3f}",
                f"{to_display(s.T_wg, 'temperature', units):.1f}",
                f"{to_display(s.T_coolant_out, 'temperature', units):.1f}",
                f"{to_display(s.q_gas, 'heat_flux', units):.4f}",
                f"{s.status.value}, boiling" if s.boiling else s.status.value,
            )
        console.print(stations)

    if show_iterations:
        for s in result.stations:
            console.print(f"\n[bold]x = {to_display(s.x, 'length', units):.2f} {display_unit('length', units)}[/bold]")
            for r in s.history:
                console.print(
                    f"  {r.iteration:>4d}  Gas Side Wall Temp ({t_unit}): "
                    f"{to_display(r.T_wg, 'temperature', units):10.3f}   "
                    f"mismatch {r.mismatch:+.4e} W/m²"
                )

    if report:
        from lre_tools.reports.summary import generate_regen_report, save_text_report

        text = generate_regen_report(result, config.propellants, config.meta, units=units)
        save_text_report(text, report)
        console.print(f"\n[dim]Report saved to {report}[/dim]")

    if plot and result.stations:
        from lre_tools.reports.plots import plot_regen_stations, plot_wall_convergence

        if len(result.stations) > 1:
            plot_regen_stations(result, units=units, path=plot)
        else:
            plot_wall_convergence(result.stations[0], units=units, path=plot)
        console.print(f"[dim]Plot saved to {plot}[/dim]")

    if output:
        save_results_json(result, output, meta=config.meta)
        console.print(f"[dim]Saved to {output}[/dim]")

    boiling = result.boiling_stations
    if boiling:
        console.print(
            f"\n[red]WARNING:[/red] Coolant boils at {len(boiling)} of {len(result.stations)} "
            f"station(s), first at x = {to_display(boiling[0].x, 'length', units):.2f} "
            f"{display_unit('length', units)}; the liquid-side correlation does not hold there."
        )
    if not result.converged:
        console.print(f"\n[red]WARNING:[/red] {result.message or 'Heat balance did not converge.'}")
    if boiling or not result.converged:
        ctx.exit(EXIT_NOT_CONVERGED)
    console.print(
        f"\n[green]OK:[/green] Heat balance converged at {len(result.stations)} station(s)."
    )
