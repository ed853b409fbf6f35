"""Nozzle performance relations for rocket engines.

Provides isentropic nozzle flow relations, the Sutton area-ratio /
pressure-ratio relation (eq. 3.25) and its numerical inverse, and the
characteristic velocity / thrust coefficient / mass flow relations used by
the throttle solver.
"""

from __future__ import annotations

import math

from scipy.optimize import brentq

from lre_tools.utils.constants import G_0

# Smallest exit-to-chamber pressure ratio searched when inverting eq. 3.25
_PE_PC_FLOOR = 1.0e-12


# --- Isentropic nozzle flow ---


def area_ratio_from_mach(M: float, gamma: float) -> float:
    """Compute A/A* (area ratio) from Mach number using isentropic relation.

    Args:
        M: Mach number (> 0).
        gamma: Ratio of specific heats.

    Returns:
        Area ratio A/A*.
    """
    g = gamma
    gp1 = g + 1.0
    gm1 = g - 1.0
    exponent = gp1 / (2.0 * gm1)
    return (1.0 / M) * ((2.0 / gp1) * (1.0 + 0.5 * gm1 * M**2)) ** exponent


def mach_from_area_ratio(area_ratio: float, gamma: float, supersonic: bool = True) -> float:
    """Invert the area-Mach relation to find Mach number.

    Args:
        area_ratio: A/A* (must be >= 1).
        gamma: Ratio of specific heats.
        supersonic: If True return the supersonic solution, else subsonic.

    Returns:
        Mach number.
    """
    if area_ratio < 1.0:
        raise ValueError(f"Area ratio must be >= 1.0, got {area_ratio}")
    if area_ratio == 1.0:
        return 1.0

    def residual(M: float) -> float:
        return area_ratio_from_mach(M, gamma) - area_ratio

    if supersonic:
        M = brentq(residual, 1.0, 50.0)
    else:
        M = brentq(residual, 1e-6, 1.0)
    return M


def pressure_ratio(M: float, gamma: float) -> float:
    """Isentropic pressure ratio P/P0 at Mach number M."""
    return (1.0 + 0.5 * (gamma - 1.0) * M**2) ** (-gamma / (gamma - 1.0))


def temperature_ratio(M: float, gamma: float) -> float:
    """Isentropic temperature ratio T/T0 at Mach number M."""
    return (1.0 + 0.5 * (gamma - 1.0) * M**2) ** (-1.0)


def critical_pressure_ratio(gamma: float) -> float:
    """Throat-to-chamber pressure ratio p*/pc for choked flow."""
    return pressure_ratio(1.0, gamma)


# --- Sutton eq. 3.25 ---


def expansion_ratio_from_pressure(gamma: float, pe_pc: float) -> float:
    """Nozzle expansion ratio Ae/At for a given exit pressure ratio.

    Sutton, Rocket Propulsion Elements, eq. 3.25:

        At/Ae = ((γ+1)/2)^(1/(γ-1)) · (pe/pc)^(1/γ)
                · sqrt((γ+1)/(γ-1) · (1 - (pe/pc)^((γ-1)/γ)))

    Args:
        gamma: Ratio of specific heats.
        pe_pc: Exit-to-chamber pressure ratio (0 < pe/pc < 1).

    Returns:
        Expansion ratio Ae/At.
    """
    if not 0.0 < pe_pc < 1.0:
        raise ValueError(f"Pressure ratio pe/pc must be in (0, 1), got {pe_pc}")
    g = gamma
    gp1 = g + 1.0
    gm1 = g - 1.0
    inverse = (
        (gp1 / 2.0) ** (1.0 / gm1)
        * pe_pc ** (1.0 / g)
        * math.sqrt(gp1 / gm1 * (1.0 - pe_pc ** (gm1 / g)))
    )
    return 1.0 / inverse


def exit_pressure_ratio(gamma: float, expansion_ratio: float) -> float:
    """Calculate pe/pc from expansion ratio by root-finding on eq. 3.25.

    Only the supersonic branch (pe/pc below the critical ratio) is searched.

    Args:
        gamma: Ratio of specific heats.
        expansion_ratio: Ae/At (>= 1).

    Returns:
        pe/pc pressure ratio.
    """
    if expansion_ratio < 1.0:
        raise ValueError(f"Expansion ratio must be >= 1.0, got {expansion_ratio}")

    p_crit = critical_pressure_ratio(gamma)
    if expansion_ratio == 1.0:
        return p_crit

    def residual(pe_pc: float) -> float:
        return expansion_ratio_from_pressure(gamma, pe_pc) - expansion_ratio

    return brentq(residual, _PE_PC_FLOOR, p_crit, xtol=1e-15)


# --- Performance parameters ---


def characteristic_velocity(gamma: float, R_specific: float, Tc: float) -> float:
    """Characteristic exhaust velocity c* [m/s].

    Args:
        gamma: Ratio of specific heats of combustion products.
        R_specific: Specific gas constant [J/(kg·K)] = R_universal / M.
        Tc: Chamber (stagnation) temperature [K].

    Returns:
        c* in m/s.
    """
    g = gamma
    gp1 = g + 1.0
    gm1 = g - 1.0
    return math.sqrt(g * R_specific * Tc) / (
        g * math.sqrt((2.0 / gp1) ** (gp1 / gm1))
    )


def thrust_coefficient(gamma: float, expansion_ratio: float, pe_pc: float, pa_pc: float = 0.0) -> float:
    """Thrust coefficient CF (Sutton eq. 3.30).

    Args:
        gamma: Ratio of specific heats.
        expansion_ratio: Nozzle area ratio Ae/At.
        pe_pc: Exit-to-chamber pressure ratio pe/pc.
        pa_pc: Ambient-to-chamber pressure ratio pa/pc (0 for vacuum).

    Returns:
        Ideal thrust coefficient CF.
    """
    g = gamma
    gm1 = g - 1.0
    gp1 = g + 1.0

    # Momentum thrust term
    cf_momentum = math.sqrt(
        (2.0 * g**2 / gm1) * (2.0 / gp1) ** (gp1 / gm1) * (1.0 - pe_pc ** (gm1 / g))
    )
    # Pressure thrust term
    cf_pressure = (pe_pc - pa_pc) * expansion_ratio

    return cf_momentum + cf_pressure


def specific_impulse(c_star: float, CF: float) -> float:
    """Specific impulse Isp [s] from c* and CF.

    Isp = c* · CF / g0
    """
    return c_star * CF / G_0


def throat_area(thrust: float, pc: float, CF: float) -> float:
    """Throat area [m²] from thrust [N], chamber pressure [Pa], and CF.

    F = CF · Pc · At  →  At = F / (CF · Pc)
    """
    return thrust / (CF * pc)


def mass_flow_rate(pc: float, At: float, c_star: float) -> float:
    """Total propellant mass flow rate [kg/s].

    ṁ = Pc · At / c*
    """
    return pc * At / c_star
