"""Combustion-gas properties for the throttle and cooling analyses.

Defines the interface every equilibrium-chemistry backend implements and a
frozen ideal-gas backend built on tabulated combustion data.  The NASA CEA
backend lives in :mod:`lre_tools.core.cea` so that RocketCEA is only loaded
when it is actually requested.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Protocol

from lre_tools.core.thermo import (
    characteristic_velocity,
    critical_pressure_ratio,
    expansion_ratio_from_pressure,
    pressure_ratio,
    specific_impulse,
    temperature_ratio,
    thrust_coefficient,
)
from lre_tools.utils.constants import R_UNIVERSAL

logger = logging.getLogger(__name__)


class CombustionError(Exception):
    """Raised when the equilibrium-chemistry backend cannot produce a state."""


@dataclass(frozen=True)
class GasState:
    """Combustion-gas state at one location in the thrust chamber.

    All values SI.
    """

    mach: float
    gamma: float
    pressure: float  # Pa
    temperature: float  # K, static
    density: float  # kg/m³
    viscosity: float  # Pa·s
    prandtl: float
    molar_mass: float  # kg/mol
    conductivity: float  # W/(m·K)
    sonic_velocity: float  # m/s
    cp: float  # J/(kg·K)


@dataclass(frozen=True)
class CombustionProperties:
    """Result of one equilibrium-chemistry evaluation.

    Gas states are given at the chamber, the throat and the nozzle exit
    (expanded to the ambient pressure the solver was called with).
    """

    chamber_pressure: float  # Pa
    ambient_pressure: float  # Pa
    mixture_ratio: float
    c_star: float  # m/s, theoretical characteristic velocity
    isp: float  # s, theoretical specific impulse at ambient pressure
    expansion_ratio: float  # Ae/At for exit pressure = ambient pressure
    chamber: GasState
    throat: GasState
    exit: GasState

    def locations(self) -> tuple[GasState, GasState, GasState]:
        """Chamber, throat and exit states in flow order."""
        return (self.chamber, self.throat, self.exit)


class EquilibriumSolver(Protocol):
    """Interface of an equilibrium-chemistry backend.

    Propellant identities and temperatures are fixed when the backend is
    constructed; each call evaluates one operating point.
    """

    def solve(
        self,
        chamber_pressure: float,
        ambient_pressure: float,
        mixture_ratio: float,
    ) -> CombustionProperties:
        ...


# --- Tabulated combustion data for the ideal-gas backend ---


@dataclass
class CombustionData:
    """Tabulated combustion product properties at a given mixture ratio."""

    oxidizer: str
    fuel: str
    mixture_ratio: float  # O/F by mass
    chamber_temperature: float  # K
    gamma: float  # ratio of specific heats of products
    molar_mass: float  # kg/mol of combustion products


# Representative data (approximate, for offline runs and tests)
_COMBUSTION_TABLE: list[CombustionData] = [
    CombustionData("lox", "ipa", 1.0, 2700, 1.23, 0.0200),
    CombustionData("lox", "ipa", 1.3, 3000, 1.21, 0.0215),
    CombustionData("lox", "ipa", 1.7, 3200, 1.19, 0.0235),
    CombustionData("n2o", "ethanol", 3.0, 2800, 1.23, 0.0245),
    CombustionData("n2o", "ethanol", 4.0, 3100, 1.21, 0.0260),
    CombustionData("n2o", "ethanol", 5.0, 3200, 1.19, 0.0270),
    CombustionData("lox", "ethanol", 1.5, 3200, 1.20, 0.0230),
    CombustionData("lox", "ethanol", 2.0, 3400, 1.18, 0.0240),
    CombustionData("lox", "rp1", 2.3, 3500, 1.22, 0.0230),
    CombustionData("lox", "rp1", 2.7, 3600, 1.20, 0.0235),
    CombustionData("lox", "methane", 3.0, 3400, 1.19, 0.0210),
    CombustionData("lox", "methane", 3.5, 3550, 1.17, 0.0220),
    CombustionData("lox", "hydrogen", 5.0, 3200, 1.25, 0.0120),
    CombustionData("lox", "hydrogen", 6.0, 3400, 1.22, 0.0130),
]

# CEA species names and common spellings → table keys
_PROPELLANT_ALIASES: dict[str, str] = {
    "o2(l)": "lox",
    "lo2": "lox",
    "o2": "lox",
    "oxygen": "lox",
    "nitrous": "n2o",
    "c3h8o,2propanol": "ipa",
    "isopropanol": "ipa",
    "c2h5oh(l)": "ethanol",
    "rp-1": "rp1",
    "ch4": "methane",
    "ch4(l)": "methane",
    "lh2": "hydrogen",
    "h2(l)": "hydrogen",
}


def normalize_propellant(name: str) -> str:
    """Map a propellant name to its key in the combustion table."""
    key = name.strip().lower()
    return _PROPELLANT_ALIASES.get(key, key)


def lookup_combustion(oxidizer: str, fuel: str, mixture_ratio: float) -> CombustionData:
    """Look up combustion data for a propellant pair at the closest mixture ratio.

    Raises:
        KeyError: If propellant combination is not in the table.
    """
    ox = normalize_propellant(oxidizer)
    fu = normalize_propellant(fuel)
    matches = [d for d in _COMBUSTION_TABLE if d.oxidizer == ox and d.fuel == fu]
    if not matches:
        available = sorted({(d.oxidizer, d.fuel) for d in _COMBUSTION_TABLE})
        raise KeyError(
            f"No combustion data for {oxidizer}/{fuel}. Available pairs: {available}"
        )
    return min(matches, key=lambda d: abs(d.mixture_ratio - mixture_ratio))


def estimate_gas_viscosity(molar_mass: float, T: float) -> float:
    """Combustion-gas dynamic viscosity [Pa·s].

    Engineering power law mu ~ 1.184e-7 · M^0.5 · T^0.6 with M in g/mol.
    """
    return 1.184e-7 * (molar_mass * 1000.0) ** 0.5 * T**0.6


def eucken_prandtl(gamma: float) -> float:
    """Prandtl number of a polyatomic gas from the Eucken relation."""
    return 4.0 * gamma / (9.0 * gamma - 5.0)


class IdealGasSolver:
    """Frozen ideal-gas combustion model.

    Chamber temperature, γ and molar mass come from the tabulated data at
    the nearest mixture ratio; the throat and exit states follow from
    isentropic expansion with the exit pressure equal to ambient.

    Args:
        oxidizer: Oxidizer name (CEA species names are accepted).
        fuel: Fuel name.
    """

    def __init__(self, oxidizer: str, fuel: str):
        self.oxidizer = oxidizer
        self.fuel = fuel
        # Fail early on an unknown pair
        try:
            lookup_combustion(oxidizer, fuel, 1.0)
        except KeyError as exc:
            raise CombustionError(str(exc)) from exc

    def solve(
        self,
        chamber_pressure: float,
        ambient_pressure: float,
        mixture_ratio: float,
    ) -> CombustionProperties:
        if chamber_pressure <= 0:
            raise CombustionError(f"Chamber pressure must be positive, got {chamber_pressure}")

        data = lookup_combustion(self.oxidizer, self.fuel, mixture_ratio)
        g = data.gamma
        R_spec = R_UNIVERSAL / data.molar_mass
        Tc = data.chamber_temperature

        pe_pc = ambient_pressure / chamber_pressure
        if not 0.0 < pe_pc < critical_pressure_ratio(g):
            raise CombustionError(
                f"Ambient pressure {ambient_pressure:.0f} Pa cannot be reached by supersonic "
                f"expansion from {chamber_pressure:.0f} Pa"
            )

        eps = expansion_ratio_from_pressure(g, pe_pc)
        Me = math.sqrt(2.0 / (g - 1.0) * (pe_pc ** (-(g - 1.0) / g) - 1.0))
        c_star = characteristic_velocity(g, R_spec, Tc)
        CF = thrust_coefficient(g, eps, pe_pc, pa_pc=pe_pc)

        def state(M: float) -> GasState:
            T = Tc * temperature_ratio(M, g)
            P = chamber_pressure * pressure_ratio(M, g)
            mu = estimate_gas_viscosity(data.molar_mass, T)
            cp = g * R_spec / (g - 1.0)
            Pr = eucken_prandtl(g)
            return GasState(
                mach=M,
                gamma=g,
                pressure=P,
                temperature=T,
                density=P / (R_spec * T),
                viscosity=mu,
                prandtl=Pr,
                molar_mass=data.molar_mass,
                conductivity=mu * cp / Pr,
                sonic_velocity=math.sqrt(g * R_spec * T),
                cp=cp,
            )

        return CombustionProperties(
            chamber_pressure=chamber_pressure,
            ambient_pressure=ambient_pressure,
            mixture_ratio=mixture_ratio,
            c_star=c_star,
            isp=specific_impulse(c_star, CF),
            expansion_ratio=eps,
            chamber=state(0.0),
            throat=state(1.0),
            exit=state(Me),
        )

    def __repr__(self) -> str:
        return f"IdealGasSolver('{self.oxidizer}', '{self.fuel}')"


def make_solver(
    kind: str,
    oxidizer: str,
    fuel: str,
    oxidizer_temperature: float | None = None,
    fuel_temperature: float | None = None,
) -> EquilibriumSolver:
    """Build an equilibrium-chemistry backend by name ("cea" or "ideal")."""
    kind = kind.lower()
    if kind == "ideal":
        return IdealGasSolver(oxidizer, fuel)
    if kind == "cea":
        from lre_tools.core.cea import RocketCEASolver

        return RocketCEASolver(
            oxidizer,
            fuel,
            oxidizer_temperature=oxidizer_temperature,
            fuel_temperature=fuel_temperature,
        )
    raise ValueError(f"Unknown combustion solver '{kind}' (expected 'cea' or 'ideal')")
