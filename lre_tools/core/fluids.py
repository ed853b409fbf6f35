"""Coolant property interface wrapping CoolProp.

Provides transport and thermodynamic properties of the regenerative
coolant with typed error handling.  Temperatures outside the equation of
state's validity range are clamped for transport lookups, which the
cooling solver relies on while probing hot-wall guesses.
"""

from __future__ import annotations

import logging

import CoolProp.CoolProp as CP
from CoolProp.CoolProp import PropsSI

logger = logging.getLogger(__name__)

# Common coolant spellings → CoolProp fluid names
_COOLANT_ALIASES: dict[str, str] = {
    "c3h8": "Propane",
    "propane": "Propane",
    "ethanol": "Ethanol",
    "c2h5oh": "Ethanol",
    "methanol": "Methanol",
    "water": "Water",
    "h2o": "Water",
    "methane": "Methane",
    "ch4": "Methane",
    "rp1": "n-Dodecane",
    "rp-1": "n-Dodecane",
    "kerosene": "n-Dodecane",
    "hydrogen": "Hydrogen",
    "h2": "Hydrogen",
    "oxygen": "Oxygen",
    "o2": "Oxygen",
}


class FluidPropertyError(Exception):
    """Raised when a fluid property calculation fails."""


class Fluid:
    """Interface to thermodynamic properties of a single fluid.

    Wraps CoolProp's low-level AbstractState for the fluid constants and
    ``PropsSI`` for scalar look-ups.

    Args:
        name: CoolProp fluid name (e.g. "Propane", "Ethanol", "Water").
        backend: CoolProp backend string.  ``"HEOS"`` for built-in,
                 ``"REFPROP"`` if RefProp is installed.
    """

    def __init__(self, name: str, backend: str = "HEOS"):
        self.name = name
        self.backend = backend
        try:
            self._state = CP.AbstractState(backend, name)
        except Exception as exc:
            raise FluidPropertyError(
                f"Cannot create fluid '{name}' with backend '{backend}': {exc}"
            ) from exc

        self.T_critical = self._state.T_critical()
        self.P_critical = self._state.p_critical()
        self.T_min = self._state.Tmin()
        self.T_max = self._state.Tmax()
        self.molar_mass = self._state.molar_mass()  # kg/mol

    # --- Core property access ---

    def _props_si(self, output: str, T: float, P: float) -> float:
        try:
            return PropsSI(output, "T", T, "P", P, self.name)
        except Exception as exc:
            raise FluidPropertyError(
                f"{self.name}: property '{output}' failed at T={T:.2f} K, P={P:.0f} Pa: {exc}"
            ) from exc

    def clamp_temperature(self, T: float) -> float:
        """Limit T to the equation of state's temperature range."""
        T_clamped = min(max(T, self.T_min), self.T_max)
        if T_clamped != T:
            logger.debug("%s: clamping T=%.1f K to %.1f K", self.name, T, T_clamped)
        return T_clamped

    # --- Convenience scalar lookups ---

    def density(self, T: float, P: float) -> float:
        """Density [kg/m³] at T [K], P [Pa]."""
        return self._props_si("D", T, P)

    def specific_heat_cp(self, T: float, P: float) -> float:
        """Isobaric specific heat [J/(kg·K)]."""
        return self._props_si("C", T, P)

    def viscosity(self, T: float, P: float) -> float:
        """Dynamic viscosity [Pa·s]."""
        return self._props_si("V", T, P)

    def thermal_conductivity(self, T: float, P: float) -> float:
        """Thermal conductivity [W/(m·K)]."""
        return self._props_si("L", T, P)

    def saturation_temperature(self, P: float) -> float | None:
        """Saturation temperature [K] at pressure P [Pa].

        Returns None at or above the critical pressure, where the coolant
        cannot boil.
        """
        if P >= self.P_critical:
            return None
        try:
            return PropsSI("T", "P", P, "Q", 0, self.name)
        except Exception as exc:
            raise FluidPropertyError(
                f"{self.name}: no saturation state at P={P:.0f} Pa: {exc}"
            ) from exc

    def __repr__(self) -> str:
        return f"Fluid('{self.name}', backend='{self.backend}')"


def coolprop_name(coolant: str) -> str:
    """Resolve a coolant alias to its CoolProp fluid name."""
    return _COOLANT_ALIASES.get(coolant.strip().lower(), coolant)


def get_fluid(coolant: str, backend: str = "HEOS") -> Fluid:
    """Create a Fluid instance from a coolant name or alias.

    Args:
        coolant: Coolant name, e.g. ``"C3H8"``, ``"propane"`` or any
            CoolProp fluid name.
        backend: CoolProp backend.

    Returns:
        Fluid instance configured for the coolant.
    """
    return Fluid(coolprop_name(coolant), backend=backend)
