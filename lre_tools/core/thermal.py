"""Hot-gas-side heat transfer for LRE Tools.

Implements the Bartz heat transfer correlation with its boundary-layer
property correction, recovery (adiabatic-wall) temperature, convective
heat flux and 1-D wall conduction.
"""

from __future__ import annotations


# --- Bartz equation ---


def bartz_sigma(T_wall: float, T_gas: float, gamma: float, M: float) -> float:
    """Bartz correction factor for property variation across the boundary layer.

        σ = [½ · Tw/T0 · (1 + (γ-1)/2 · M²) + ½]^-0.68 · [1 + (γ-1)/2 · M²]^-0.12

    (Huzel & Huang, eq. 4-14.)

    Args:
        T_wall: Gas-side wall temperature [K].
        T_gas: Combustion-gas stagnation temperature [K].
        gamma: Ratio of specific heats.
        M: Local Mach number.

    Returns:
        Dimensionless correction factor σ.
    """
    stag = 1.0 + 0.5 * (gamma - 1.0) * M**2
    return (0.5 * T_wall / T_gas * stag + 0.5) ** -0.68 * stag**-0.12


def bartz_heat_transfer_coefficient(
    pc: float,
    c_star: float,
    Dt: float,
    viscosity: float,
    cp: float,
    Pr: float,
    local_area_ratio: float = 1.0,
    throat_curvature_radius: float | None = None,
    sigma: float = 1.0,
) -> float:
    """Bartz convective heat transfer coefficient for the hot-gas side.

        h_g = (0.026 / Dt^0.2) · (mu^0.2 · cp / Pr^0.6) · (pc / c*)^0.8
              · (Dt / R_c)^0.1 · (At / A)^0.9 · σ

    In SI units pc/c* is the throat mass flux [kg/(m²·s)], so no
    gravitational constant appears.

    Args:
        pc: Chamber pressure [Pa].
        c_star: Characteristic velocity [m/s].
        Dt: Throat diameter [m].
        viscosity: Gas dynamic viscosity [Pa·s].
        cp: Gas specific heat [J/(kg·K)].
        Pr: Gas Prandtl number.
        local_area_ratio: A/At at the location of interest.
        throat_curvature_radius: Throat radius of curvature [m]; None drops
            the curvature term.
        sigma: Boundary-layer correction from :func:`bartz_sigma`.

    Returns:
        Hot-gas side heat transfer coefficient h_g [W/(m²·K)].
    """
    curvature = (Dt / throat_curvature_radius) ** 0.1 if throat_curvature_radius else 1.0
    return (
        0.026
        / Dt**0.2
        * (viscosity**0.2 * cp / Pr**0.6)
        * (pc / c_star) ** 0.8
        * curvature
        * (1.0 / local_area_ratio) ** 0.9
        * sigma
    )


# --- Recovery temperature ---


def recovery_factor(Pr: float) -> float:
    """Turbulent boundary-layer recovery factor r = Pr^(1/3)."""
    return Pr ** (1.0 / 3.0)


def recovery_temperature(T_static: float, gamma: float, M: float, r: float) -> float:
    """Adiabatic-wall (recovery) temperature.

        T_r = T · (1 + r · (γ-1)/2 · M²)

    Args:
        T_static: Local static gas temperature [K].
        gamma: Ratio of specific heats.
        M: Local Mach number.
        r: Recovery factor.

    Returns:
        Recovery temperature [K].
    """
    return T_static * (1.0 + r * 0.5 * (gamma - 1.0) * M**2)


# --- Heat flux ---


def heat_flux(h: float, T_hot: float, T_cold: float) -> float:
    """Convective heat flux [W/m²].

    q = h · (T_hot - T_cold)
    """
    return h * (T_hot - T_cold)


def conduction_wall_temperature(
    T_hot_side: float,
    q_dot: float,
    thickness: float,
    conductivity: float,
) -> float:
    """Cold-side wall temperature for steady 1-D conduction through a slab.

    T_cold = T_hot - q · t / k
    """
    return T_hot_side - q_dot * thickness / conductivity
