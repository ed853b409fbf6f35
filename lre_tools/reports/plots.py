"""Result plots for LRE Tools.

Figures are built with the object-oriented matplotlib API
(:class:`matplotlib.figure.Figure`) so that no GUI backend is needed; each
function returns the figure and optionally writes it to a file.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
from matplotlib.figure import Figure

from lre_tools.core.config import Propellants
from lre_tools.core.cooling import RegenResult, StationResult
from lre_tools.core.throttle import ThrottleSweepResult
from lre_tools.utils.units import display_unit, to_display


def _save(fig: Figure, path: str | Path | None) -> None:
    if path is not None:
        fig.savefig(path, dpi=150, bbox_inches="tight")


def _to_display(values: np.ndarray, quantity: str, units: str) -> np.ndarray:
    return np.array([to_display(v, quantity, units) for v in values])


def plot_throttle_sweep(
    result: ThrottleSweepResult,
    propellants: Propellants,
    min_throttle: float,
    units: str = "imperial",
    path: str | Path | None = None,
) -> Figure:
    """Chamber pressure, mass flow and Isp against thrust over the throttle range.

    Args:
        result: Throttle sweep result.
        propellants: Propellants (the mixture ratio appears in the title).
        min_throttle: Lowest throttle fraction of the sweep.
        units: Display unit system, "si" or "imperial".
        path: Optional output image file.
    """
    thrust = _to_display(result.thrust, "force", units)
    pc = _to_display(result.chamber_pressure, "pressure", units)
    mdot = _to_display(result.mass_flow, "mass_flow", units)
    isp = result.specific_impulse
    f_unit = display_unit("force", units)
    p_unit = display_unit("pressure", units)

    fig = Figure(figsize=(15, 4.5))
    axes = fig.subplots(1, 3)
    panels = [
        (pc, "Chamber Pressure vs Throttle", f"Chamber Pressure [{p_unit}]"),
        (mdot, "Mass Flow Rate vs Throttle", f"Mass Flow Rate [{display_unit('mass_flow', units)}]"),
        (isp, "Isp vs Throttle", "Isp [s]"),
    ]
    for ax, (y, title, ylabel) in zip(axes, panels):
        ax.plot(thrust, y, color="blue")
        ax.set_title(title)
        ax.set_xlabel(f"Thrust [{f_unit}]")
        ax.set_ylabel(ylabel)
        ax.grid(True)

    b = result.baseline
    fig.suptitle(
        f"Throttle Analysis:   {to_display(b.max_thrust, 'force', units):.0f} {f_unit}, "
        f"{to_display(b.max_chamber_pressure, 'pressure', units):.0f} {p_unit} Pc, "
        f"{propellants.mixture_ratio:g} OF ratio, down to {min_throttle * 100:.0f}% throttle"
    )
    _save(fig, path)
    return fig


def plot_regen_stations(
    result: RegenResult,
    units: str = "si",
    path: str | Path | None = None,
) -> Figure:
    """Wall and coolant temperatures and heat flux along the channel."""
    stations = sorted(result.stations, key=lambda s: s.x)
    x = _to_display([s.x for s in stations], "length", units)
    t_unit = display_unit("temperature", units)

    fig = Figure(figsize=(10, 7))
    ax_t, ax_q = fig.subplots(2, 1, sharex=True)

    ax_t.plot(x, _to_display([s.T_wg for s in stations], "temperature", units), "r-o", label="Gas-side wall")
    ax_t.plot(x, _to_display([s.T_wl for s in stations], "temperature", units), "m-s", label="Coolant-side wall")
    ax_t.plot(x, _to_display([s.T_coolant_out for s in stations], "temperature", units), "b-^", label="Coolant")
    ax_t.set_ylabel(f"Temperature [{t_unit}]")
    ax_t.legend()
    ax_t.grid(True)

    ax_q.plot(x, _to_display([s.q_gas for s in stations], "heat_flux", units), "k-o")
    ax_q.set_ylabel(f"Heat Flux [{display_unit('heat_flux', units)}]")
    ax_q.set_xlabel(f"Axial Position [{display_unit('length', units)}]")
    ax_q.grid(True)

    fig.suptitle(f"Regenerative Cooling: {result.coolant}, {result.n_channels} channels")
    _save(fig, path)
    return fig


def plot_wall_convergence(
    station: StationResult,
    units: str = "si",
    path: str | Path | None = None,
) -> Figure:
    """Wall-temperature guess and flux mismatch per iteration at one station."""
    it = np.array([r.iteration for r in station.history])
    T_wg = _to_display([r.T_wg for r in station.history], "temperature", units)
    mismatch = np.abs([r.mismatch for r in station.history])

    fig = Figure(figsize=(8, 6))
    ax_t, ax_m = fig.subplots(2, 1, sharex=True)
    ax_t.plot(it, T_wg, "r-o")
    ax_t.set_ylabel(f"Gas-side Wall Temp [{display_unit('temperature', units)}]")
    ax_t.grid(True)

    ax_m.semilogy(it, np.maximum(mismatch, np.finfo(float).tiny), "k-o")
    ax_m.set_ylabel("|q_g - q_l| [W/m²]")
    ax_m.set_xlabel("Iteration")
    ax_m.grid(True, which="both")

    fig.suptitle(f"Wall Temperature Iteration at x = {station.x * 1e3:.1f} mm ({station.status.value})")
    _save(fig, path)
    return fig
