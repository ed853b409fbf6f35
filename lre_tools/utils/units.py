"""Unit conversion utilities for LRE Tools.

Provides a lightweight unit conversion system built on top of pint, with
convenience functions for the quantities used by the throttle and cooling
analyses.  Core calculations are SI; these helpers sit at the edges
(configuration input and display output).
"""

from __future__ import annotations

from functools import lru_cache

import pint

# Module-level unit registry (singleton)
_ureg = pint.UnitRegistry()


Q_ = _ureg.Quantity


@lru_cache(maxsize=256)
def convert(value: float, from_unit: str, to_unit: str) -> float:
    """General-purpose unit conversion.

    Args:
        value: Numeric value in *from_unit*.
        from_unit: Source unit string.
        to_unit: Target unit string.

    Returns:
        Converted numeric value.
    """
    return Q_(value, from_unit).to(to_unit).magnitude


def parse_quantity(text: str, si_unit: str) -> float:
    """Parse a ``"<number> <unit>"`` string and return its SI magnitude.

    The number and the unit are split before building the quantity so that
    offset units (``degF``, ``degC``) are accepted.

    Args:
        text: Quantity string, e.g. ``"250 psi"`` or ``"1.45 in**2"``.
        si_unit: Unit the result is expressed in.

    Raises:
        ValueError: If the string cannot be parsed or has the wrong dimension.
    """
    parts = text.strip().split(maxsplit=1)
    try:
        magnitude = float(parts[0])
    except (IndexError, ValueError) as exc:
        raise ValueError(f"Cannot parse quantity '{text}'") from exc

    unit = parts[1] if len(parts) > 1 else si_unit
    try:
        return Q_(magnitude, unit).to(si_unit).magnitude
    except (pint.errors.UndefinedUnitError, pint.errors.DimensionalityError) as exc:
        raise ValueError(f"Cannot convert '{text}' to {si_unit}: {exc}") from exc


# --- Display units ---

# quantity -> SI unit of the core calculations
_SI_UNITS: dict[str, str] = {
    "force": "N",
    "pressure": "Pa",
    "mass_flow": "kg/s",
    "temperature": "K",
    "heat_flux": "W/m**2",
    "length": "m",
    "area": "m**2",
    "power": "W",
}

# unit system -> quantity -> (label, pint unit)
_DISPLAY_UNITS: dict[str, dict[str, tuple[str, str]]] = {
    "si": {
        "force": ("N", "N"),
        "pressure": ("bar", "bar"),
        "mass_flow": ("kg/s", "kg/s"),
        "temperature": ("K", "K"),
        "heat_flux": ("MW/m²", "MW/m**2"),
        "length": ("mm", "mm"),
        "area": ("mm²", "mm**2"),
        "power": ("kW", "kW"),
    },
    "imperial": {
        "force": ("lbf", "lbf"),
        "pressure": ("psi", "psi"),
        "mass_flow": ("lb/s", "lb/s"),
        "temperature": ("°F", "degF"),
        "heat_flux": ("BTU/s·in²", "BTU/s/inch**2"),
        "length": ("in", "inch"),
        "area": ("in²", "inch**2"),
        "power": ("BTU/s", "BTU/s"),
    },
}


def display_unit(quantity: str, system: str = "si") -> str:
    """Label of the display unit for a quantity in a unit system."""
    return _DISPLAY_UNITS[system.lower()][quantity][0]


def to_display(value: float, quantity: str, system: str = "si") -> float:
    """Convert an SI value to the display unit of *system* ("si" or "imperial")."""
    target = _DISPLAY_UNITS[system.lower()][quantity][1]
    return convert(float(value), _SI_UNITS[quantity], target)
