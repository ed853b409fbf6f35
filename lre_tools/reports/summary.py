"""Analysis summary report generation for LRE Tools.

Produces plain-text reports of the throttle sweep and the regenerative
cooling analysis.  Values are converted from SI to the requested display
unit system ("si" or "imperial").
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from lre_tools import __version__
from lre_tools.core.config import ProjectMeta, Propellants
from lre_tools.core.cooling import RegenResult
from lre_tools.core.throttle import ThrottleSweepResult
from lre_tools.utils.units import display_unit, to_display

_HR = "=" * 72


def _header(lines: list[str], title: str, meta: ProjectMeta | None) -> None:
    lines.append(_HR)
    lines.append(f"  LRE Tools — {title}")
    if meta is not None:
        lines.append(f"  {meta.name}")
    lines.append(_HR)
    lines.append("")


def _footer(lines: list[str]) -> None:
    lines.append(_HR)
    lines.append(f"  Generated: {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M UTC')}")
    lines.append(f"  LRE Tools v{__version__}")
    lines.append(_HR)


def _add_param(
    lines: list[str],
    label: str,
    value: float | int,
    unit: str = "",
    quantity: str | None = None,
    units: str = "si",
) -> None:
    """Add a parameter line, converting SI values of a known quantity."""
    if quantity is not None:
        value = to_display(value, quantity, units)
        unit = display_unit(quantity, units)
    unit_str = f" {unit}" if unit else ""
    if isinstance(value, float):
        lines.append(f"  {label:<24s} {value:>12.4f}{unit_str}")
    else:
        lines.append(f"  {label:<24s} {value!s:>12}{unit_str}")


def _add_param_str(lines: list[str], label: str, value: str) -> None:
    """Add a string parameter line."""
    lines.append(f"  {label:<24s} {value:>12}")


def _propellant_section(lines: list[str], propellants: Propellants) -> None:
    lines.append("PROPELLANTS")
    lines.append("-" * 40)
    _add_param_str(lines, "Oxidizer", propellants.oxidizer)
    _add_param_str(lines, "Fuel", propellants.fuel)
    _add_param(lines, "Mixture Ratio", float(propellants.mixture_ratio), "O/F")
    lines.append("")


# --- Throttle sweep ---


def generate_throttle_report(
    result: ThrottleSweepResult,
    propellants: Propellants,
    meta: ProjectMeta | None = None,
    units: str = "si",
) -> str:
    """Generate a plain-text report of a throttle sweep.

    Args:
        result: Throttle sweep result.
        propellants: Propellants the sweep was run with.
        meta: Optional project metadata for the header.
        units: Display unit system, "si" or "imperial".

    Returns:
        Multi-line text report string.
    """
    lines: list[str] = []
    _header(lines, "Throttle Analysis", meta)
    _propellant_section(lines, propellants)

    b = result.baseline
    lines.append("FULL-THROTTLE DESIGN POINT")
    lines.append("-" * 40)
    _add_param(lines, "Max Thrust", b.max_thrust, quantity="force", units=units)
    _add_param(lines, "Max Chamber Pressure", b.max_chamber_pressure, quantity="pressure", units=units)
    _add_param(lines, "Exit Pressure", b.exit_pressure, quantity="pressure", units=units)
    _add_param(lines, "Ambient Pressure", b.ambient_pressure, quantity="pressure", units=units)
    _add_param(lines, "Expansion Ratio", b.expansion_ratio)
    _add_param(lines, "Thrust Coefficient", b.thrust_coefficient)
    _add_param(lines, "Throat Area", b.throat_area, quantity="area", units=units)
    _add_param(lines, "c* (delivered)", b.c_star, "m/s")
    _add_param(lines, "Mass Flow Rate", b.mass_flow, quantity="mass_flow", units=units)
    _add_param(lines, "Isp (delivered)", b.specific_impulse, "s")
    lines.append("")

    f_unit = display_unit("force", units)
    p_unit = display_unit("pressure", units)
    m_unit = display_unit("mass_flow", units)
    lines.append("THROTTLE POINTS")
    lines.append("-" * 40)
    lines.append(
        f"  {'Throttle':>8s} {'Thrust':>10s} {'Pc':>10s} {'Pe':>10s} "
        f"{'mdot':>10s} {'Isp':>8s} {'Iter':>5s}  Status"
    )
    lines.append(
        f"  {'%':>8s} {f_unit:>10s} {p_unit:>10s} {p_unit:>10s} {m_unit:>10s} {'s':>8s}"
    )
    for p in result.points:
        lines.append(
            f"  {p.throttle * 100:>8.1f} "
            f"{to_display(p.thrust, 'force', units):>10.2f} "
            f"{to_display(p.chamber_pressure, 'pressure', units):>10.3f} "
            f"{to_display(p.exit_pressure, 'pressure', units):>10.3f} "
            f"{to_display(p.mass_flow, 'mass_flow', units):>10.4f} "
            f"{p.specific_impulse:>8.1f} {p.iterations:>5d}  {p.status.value}"
        )
    lines.append("")

    failures = result.failures()
    if failures:
        lines.append("NOT CONVERGED")
        lines.append("-" * 40)
        for p in failures:
            lines.append(f"  {p.throttle * 100:.1f}%: {p.message}")
        lines.append("")

    _footer(lines)
    return "\n".join(lines)


# --- Regenerative cooling ---


def generate_regen_report(
    result: RegenResult,
    propellants: Propellants,
    meta: ProjectMeta | None = None,
    units: str = "si",
) -> str:
    """Generate a plain-text report of a regenerative cooling analysis.

    Args:
        result: Cooling analysis result.
        propellants: Propellants the analysis was run with.
        meta: Optional project metadata for the header.
        units: Display unit system, "si" or "imperial".

    Returns:
        Multi-line text report string.
    """
    lines: list[str] = []
    _header(lines, "Regenerative Cooling", meta)
    _propellant_section(lines, propellants)

    ch = result.channel
    lines.append("COOLING CHANNELS")
    lines.append("-" * 40)
    _add_param_str(lines, "Coolant", result.coolant or "—")
    _add_param(lines, "Number of Channels", result.n_channels)
    _add_param(lines, "Throat Diameter", result.throat_diameter, quantity="length", units=units)
    _add_param(lines, "Channel Width", ch.width, quantity="length", units=units)
    _add_param(lines, "Channel Height", ch.height, quantity="length", units=units)
    _add_param(lines, "Wall Thickness", ch.wall_thickness, quantity="length", units=units)
    _add_param(lines, "Hydraulic Diameter", ch.hydraulic_diameter, quantity="length", units=units)
    _add_param(lines, "Flow per Channel", result.channel_mass_flow, quantity="mass_flow", units=units)
    lines.append("")

    lines.append("RESULTS")
    lines.append("-" * 40)
    _add_param_str(lines, "Status", result.status.value)
    if result.message:
        lines.append(f"  {result.message}")
    if result.stations:
        _add_param(lines, "Coolant Inlet Temp", result.coolant_inlet_temperature, quantity="temperature", units=units)
        _add_param(lines, "Coolant Outlet Temp", result.coolant_outlet_temperature, quantity="temperature", units=units)
        _add_param(lines, "Coolant Outlet Pressure", result.coolant_outlet_pressure, quantity="pressure", units=units)
        _add_param(lines, "Pressure Drop", result.total_pressure_drop, quantity="pressure", units=units)
        _add_param(lines, "Max Wall Temp", result.max_wall_temperature, quantity="temperature", units=units)
        _add_param(lines, "Max Heat Flux", result.max_heat_flux, quantity="heat_flux", units=units)
        _add_param(lines, "Total Heat Load", result.total_heat_load, quantity="power", units=units)
        _add_param(lines, "Boiling Stations", len(result.boiling_stations))
    lines.append("")

    if result.stations:
        t_unit = display_unit("temperature", units)
        q_unit = display_unit("heat_flux", units)
        x_unit = display_unit("length", units)
        lines.append("STATIONS (coolant flow order)")
        lines.append("-" * 40)
        lines.append(
            f"  {'x':>8s} {'Mach':>6s} {'T_wg':>8s} {'T_wl':>8s} {'T_r':>8s} "
            f"{'q':>10s} {'T_cool':>8s} {'Iter':>5s}  Status"
        )
        lines.append(
            f"  {x_unit:>8s} {'':>6s} {t_unit:>8s} {t_unit:>8s} {t_unit:>8s} "
            f"{q_unit:>10s} {t_unit:>8s}"
        )
        for s in result.stations:
            lines.append(
                f"  {to_display(s.x, 'length', units):>8.2f} {s.mach:>6.3f} "
                f"{to_display(s.T_wg, 'temperature', units):>8.1f} "
                f"{to_display(s.T_wl, 'temperature', units):>8.1f} "
                f"{to_display(s.T_recovery, 'temperature', units):>8.1f} "
                f"{to_display(s.q_gas, 'heat_flux', units):>10.4f} "
                f"{to_display(s.T_coolant_out, 'temperature', units):>8.1f} "
                f"{s.iterations:>5d}  {s.status.value}{', boiling' if s.boiling else ''}"
            )
        lines.append("")

    _footer(lines)
    return "\n".join(lines)


def save_text_report(text: str, path: str | Path) -> None:
    """Write a generated report to a text file."""
    Path(path).write_text(text, encoding="utf-8")
