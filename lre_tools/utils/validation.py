"""Design rule checking and input validation for LRE Tools."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import numpy as np


class Severity(Enum):
    """Severity level for validation messages."""

    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationMessage:
    """A single validation finding."""

    severity: Severity
    parameter: str
    message: str
    value: Any = None
    limit: Any = None


@dataclass
class ValidationResult:
    """Aggregated validation result."""

    messages: list[ValidationMessage] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not any(m.severity == Severity.ERROR for m in self.messages)

    @property
    def errors(self) -> list[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.WARNING]

    def add(self, severity: Severity, parameter: str, message: str, **kwargs: Any) -> None:
        self.messages.append(
            ValidationMessage(severity=severity, parameter=parameter, message=message, **kwargs)
        )

    def error(self, parameter: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.ERROR, parameter, message, **kwargs)

    def warning(self, parameter: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.WARNING, parameter, message, **kwargs)

    def merge(self, other: ValidationResult) -> None:
        self.messages.extend(other.messages)


# --- Common validators ---


def validate_positive(name: str, value: float, result: ValidationResult) -> None:
    """Validate that a value is strictly positive."""
    if value <= 0:
        result.error(name, f"{name} must be positive, got {value}", value=value)


def validate_range(
    name: str,
    value: float,
    low: float,
    high: float,
    result: ValidationResult,
    severity: Severity = Severity.ERROR,
) -> None:
    """Validate that a value falls within [low, high]."""
    if value < low or value > high:
        result.add(
            severity, name, f"{name} = {value} is outside [{low}, {high}]",
            value=value, limit=(low, high),
        )


def validate_propellants(data: dict) -> ValidationResult:
    """Check propellant identities, temperatures and mixture ratio."""
    result = ValidationResult()

    for key in ("fuel", "oxidizer"):
        if not str(data.get(key, "")).strip():
            result.error(key, f"{key} name must not be empty")

    for key in ("fuel_temperature", "oxidizer_temperature"):
        T = data.get(key)
        if T is not None:
            validate_positive(key, T, result)

    mr = data.get("mixture_ratio")
    if mr is not None:
        validate_positive("mixture_ratio", mr, result)
        if mr > 20.0:
            result.warning("mixture_ratio", f"Mixture ratio {mr:.1f} is unusually high")

    return result


def validate_throttle_config(data: dict) -> ValidationResult:
    """Run validation checks on a throttle sweep configuration dictionary."""
    result = ValidationResult()

    for key in (
        "max_thrust",
        "max_chamber_pressure",
        "exit_pressure",
        "thrust_tolerance",
        "pressure_margin",
    ):
        validate_positive(key, data[key], result)

    if data["ambient_pressure"] < 0:
        result.error("ambient_pressure", "ambient_pressure must not be negative")

    if data["exit_pressure"] >= data["max_chamber_pressure"]:
        result.error(
            "exit_pressure",
            "Exit pressure must be below the full-throttle chamber pressure",
            value=data["exit_pressure"],
            limit=data["max_chamber_pressure"],
        )

    validate_range("min_throttle", data["min_throttle"], 1e-6, 1.0, result)
    if data["min_throttle"] < 0.1:
        result.warning(
            "min_throttle",
            f"Deep throttling to {data['min_throttle'] * 100:.0f}% is far outside "
            "the constant-O/F assumption",
        )

    validate_range("c_star_efficiency", data["c_star_efficiency"], 1e-6, 1.0, result)
    validate_range("cf_efficiency", data["cf_efficiency"], 1e-6, 1.0, result)

    if data["n_points"] < 1:
        result.error("n_points", "n_points must be at least 1")
    if data["max_iterations"] < 1:
        result.error("max_iterations", "max_iterations must be at least 1")

    return result


def validate_regen_config(data: dict) -> ValidationResult:
    """Run validation checks on a regenerative cooling configuration dictionary."""
    result = ValidationResult()

    for key in (
        "throat_area",
        "chamber_pressure",
        "exit_pressure",
        "throat_curvature_ratio",
        "wall_thickness",
        "channel_width",
        "channel_height",
        "station_length",
        "wall_conductivity",
        "coolant_mass_flow",
        "coolant_inlet_temperature",
        "coolant_inlet_pressure",
        "heat_flux_tolerance",
        "roughness",
    ):
        validate_positive(key, data[key], result)

    if data["exit_pressure"] >= data["chamber_pressure"]:
        result.error("exit_pressure", "Exit pressure must be below chamber pressure")

    if data["coolant_inlet_pressure"] < data["chamber_pressure"]:
        result.warning(
            "coolant_inlet_pressure",
            "Coolant inlet pressure is below chamber pressure; the jacket cannot feed the injector",
        )

    if data["max_iterations"] < 1:
        result.error("max_iterations", "max_iterations must be at least 1")

    step = data.get("initial_step")
    if step is not None:
        validate_positive("initial_step", step, result)
    guess = data.get("initial_wall_temperature")
    if guess is not None:
        validate_positive("initial_wall_temperature", guess, result)

    cx = data.get("contour_x")
    cr = data.get("contour_r")
    if (cx is None) != (cr is None):
        result.error("contour", "contour_x and contour_r must be given together")
    elif cx is not None:
        validate_contour(np.asarray(cx, dtype=float), np.asarray(cr, dtype=float), result)

    return result


def validate_contour(x: np.ndarray, r: np.ndarray, result: ValidationResult) -> None:
    """Check that a wall contour is usable for a station march."""
    if x.shape != r.shape:
        result.error("contour", f"contour_x has {x.size} points but contour_r has {r.size}")
        return
    if x.size < 2:
        result.error("contour", "A contour needs at least two stations")
        return
    if np.any(np.diff(x) <= 0):
        result.error("contour_x", "Contour x-coordinates must be strictly increasing")
    if np.any(r <= 0):
        result.error("contour_r", "Contour radii must be positive")
