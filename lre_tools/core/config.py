"""Analysis configuration and result I/O for LRE Tools.

Every physical input of the throttle and cooling analyses is an explicit,
unit-tagged dataclass field.  Values are held in SI; a JSON configuration
may give any field either as a plain number (SI) or as a quantity string
such as ``"250 psi"``, which is converted on load.  Configurations are
validated when they are loaded.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

import numpy as np

from lre_tools.utils.constants import BTU_TO_J, INCH_TO_M, LBF_TO_N, LBM_TO_KG, PSI_TO_PA
from lre_tools.utils.units import parse_quantity
from lre_tools.utils.validation import (
    ValidationResult,
    validate_propellants,
    validate_regen_config,
    validate_throttle_config,
)

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when a configuration file cannot be used."""

    def __init__(self, message: str, validation: ValidationResult | None = None):
        super().__init__(message)
        self.validation = validation


def _q(default: Any, unit: str | None = None) -> Any:
    """Dataclass field carrying its SI unit in the metadata."""
    return field(default=default, metadata={"unit": unit} if unit else {})


# --- Project metadata ---


@dataclass
class ProjectMeta:
    """Top-level project metadata."""

    name: str = "Untitled"
    description: str = ""
    author: str = ""
    version: str = "0.1.0"
    created: str = ""
    modified: str = ""
    unit_system: str = "SI"  # display units: "SI" or "imperial"

    def touch(self) -> None:
        """Update the modified timestamp."""
        self.modified = datetime.now(timezone.utc).isoformat()


# --- Analysis inputs ---


@dataclass
class Propellants:
    """Propellant identities, storage temperatures and mixture ratio."""

    fuel: str = "C3H8O,2propanol"
    fuel_temperature: float | None = _q(293.15, "K")
    oxidizer: str = "O2(L)"
    oxidizer_temperature: float | None = _q(90.17, "K")
    mixture_ratio: float = 1.3  # O/F by mass, held across the throttle range


@dataclass
class ThrottleConfig:
    """Inputs of the throttle performance sweep."""

    max_thrust: float = _q(500.0 * LBF_TO_N, "N")
    max_chamber_pressure: float = _q(250.0 * PSI_TO_PA, "Pa")
    exit_pressure: float = _q(14.7 * PSI_TO_PA, "Pa")  # at full throttle
    ambient_pressure: float = _q(14.7 * PSI_TO_PA, "Pa")
    min_throttle: float = 0.2  # fraction of max thrust
    n_points: int = 20
    c_star_efficiency: float = 0.94
    cf_efficiency: float = 0.90
    thrust_tolerance: float = _q(0.1 * LBF_TO_N, "N")
    max_iterations: int = 1000
    pressure_margin: float = _q(50.0 * PSI_TO_PA, "Pa")  # bisection upper bound above Pc,max


@dataclass
class RegenConfig:
    """Inputs of the regenerative cooling heat balance."""

    throat_area: float = _q(1.45 * INCH_TO_M**2, "m**2")
    chamber_pressure: float = _q(250.0 * PSI_TO_PA, "Pa")
    exit_pressure: float = _q(14.7 * PSI_TO_PA, "Pa")
    throat_curvature_ratio: float = 1.5  # throat radius of curvature / throat radius

    # Channel and wall geometry
    wall_thickness: float = _q(2.0e-3, "m")
    channel_width: float = _q(2.0e-3, "m")
    channel_height: float = _q(2.0e-3, "m")
    station_length: float = _q(1.0e-2, "m")
    wall_conductivity: float = _q(385.0, "W/m/K")  # copper
    roughness: float = _q(3.0e-6, "m")

    # Coolant
    coolant: str = "C3H8"
    coolant_mass_flow: float = _q(1.0555 * LBM_TO_KG, "kg/s")
    coolant_inlet_temperature: float = _q(293.15, "K")
    coolant_inlet_pressure: float = _q(250.0 * PSI_TO_PA, "Pa")

    # Wall-temperature iteration
    heat_flux_tolerance: float = _q(1.0e-4 * BTU_TO_J / INCH_TO_M**2, "W/m**2")
    max_iterations: int = 200
    initial_wall_temperature: float | None = _q(None, "K")  # None: bracket midpoint
    initial_step: float | None = _q(None, "K")  # None: quarter of the bracket

    # Optional wall contour for a station march (x increasing toward the exit)
    contour_x: list[float] | None = _q(None, "m")
    contour_r: list[float] | None = _q(None, "m")
    counter_flow: bool = True


@dataclass
class AnalysisConfig:
    """Complete analysis configuration."""

    meta: ProjectMeta = field(default_factory=ProjectMeta)
    propellants: Propellants = field(default_factory=Propellants)
    throttle: ThrottleConfig = field(default_factory=ThrottleConfig)
    regen: RegenConfig = field(default_factory=RegenConfig)


def default_config() -> AnalysisConfig:
    """Configuration reproducing the reference 500 lbf LOX/IPA engine."""
    return AnalysisConfig(meta=ProjectMeta(name="500 lbf LOX/IPA engine"))


# --- Loading and validation ---


def _coerce_value(value: Any, unit: str | None, name: str) -> Any:
    if isinstance(value, str) and unit:
        try:
            return parse_quantity(value, unit)
        except ValueError as exc:
            raise ConfigError(f"{name}: {exc}") from exc
    if isinstance(value, list) and unit:
        return [_coerce_value(v, unit, name) for v in value]
    return value


_SCALAR_TYPES = {"float": float, "int": int, "bool": bool, "str": str}


def _check_type(value: Any, type_name: str, name: str) -> Any:
    """Check a value against a field annotation such as ``"float | None"``.

    Integers are accepted for float fields, and integral floats for int
    fields.
    """
    optional = type_name.endswith("| None")
    base = type_name.removesuffix("| None").strip()
    if value is None:
        if optional:
            return None
        raise ConfigError(f"{name}: a value is required")

    if base.startswith("list["):
        if not isinstance(value, list):
            raise ConfigError(f"{name}: expected a list, got {value!r}")
        return [_check_type(v, base[5:-1], name) for v in value]

    expected = _SCALAR_TYPES[base]
    if expected in (float, int):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"{name}: expected a number, got {value!r}")
        if expected is int:
            if not float(value).is_integer():
                raise ConfigError(f"{name}: expected an integer, got {value!r}")
            return int(value)
        return float(value)
    if not isinstance(value, expected):
        raise ConfigError(f"{name}: expected {base}, got {value!r}")
    return value


def _build_section(cls: type, data: dict[str, Any], section: str) -> Any:
    if not isinstance(data, dict):
        raise ConfigError(f"Section '{section}' must be a JSON object")
    known = {f.name: f for f in fields(cls)}
    unknown = set(data) - set(known)
    if unknown:
        raise ConfigError(f"Unknown keys in '{section}': {sorted(unknown)}")

    kwargs = {}
    for name, value in data.items():
        unit = known[name].metadata.get("unit")
        kwargs[name] = _check_type(
            _coerce_value(value, unit, f"{section}.{name}"), known[name].type, f"{section}.{name}"
        )
    return cls(**kwargs)


def validate_config(config: AnalysisConfig) -> ValidationResult:
    """Run all validation checks on a configuration."""
    result = ValidationResult()
    result.merge(validate_propellants(asdict(config.propellants)))
    result.merge(validate_throttle_config(asdict(config.throttle)))
    result.merge(validate_regen_config(asdict(config.regen)))
    return result


def check_config(config: AnalysisConfig) -> AnalysisConfig:
    """Validate a configuration, logging warnings and raising on errors.

    Raises:
        ConfigError: If any check fails with ERROR severity.
    """
    result = validate_config(config)
    for msg in result.warnings:
        logger.warning("%s: %s", msg.parameter, msg.message)
    if not result.is_valid:
        details = "; ".join(f"{m.parameter}: {m.message}" for m in result.errors)
        raise ConfigError(f"Invalid configuration: {details}", validation=result)
    return config


def config_from_dict(data: dict[str, Any]) -> AnalysisConfig:
    """Build and validate a configuration from a parsed JSON document."""
    sections = {
        "meta": ProjectMeta,
        "propellants": Propellants,
        "throttle": ThrottleConfig,
        "regen": RegenConfig,
    }
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a JSON object")
    unknown = set(data) - set(sections)
    if unknown:
        raise ConfigError(f"Unknown configuration sections: {sorted(unknown)}")

    kwargs = {
        name: _build_section(cls, data.get(name) or {}, name)
        for name, cls in sections.items()
    }
    return check_config(AnalysisConfig(**kwargs))


def load_config(path: str | Path) -> AnalysisConfig:
    """Load and validate an analysis configuration from JSON.

    Raises:
        ConfigError: If the file is not valid JSON or fails validation.
    """
    path = Path(path)
    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path} is not valid JSON: {exc}") from exc

    config = config_from_dict(data)
    logger.info("Loaded configuration '%s' from %s", config.meta.name, path)
    return config


# --- JSON serialization ---


class _NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy types and enums."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, (np.integer,)):
            return int(obj)
        if isinstance(obj, (np.floating,)):
            return float(obj)
        if isinstance(obj, Enum):
            return obj.value
        return super().default(obj)


def save_config(config: AnalysisConfig, path: str | Path) -> None:
    """Save a configuration to a JSON file (SI values)."""
    path = Path(path)
    if not config.meta.created:
        config.meta.created = datetime.now(timezone.utc).isoformat()
    config.meta.touch()

    with open(path, "w") as f:
        json.dump(asdict(config), f, indent=2, cls=_NumpyEncoder)

    logger.info("Saved configuration to %s", path)


def save_results_json(result: Any, path: str | Path, meta: ProjectMeta | None = None) -> None:
    """Save an analysis result dataclass to JSON."""
    path = Path(path)
    data = {"result": asdict(result)}
    if meta is not None:
        meta.touch()
        data["meta"] = asdict(meta)

    with open(path, "w") as f:
        json.dump(data, f, indent=2, cls=_NumpyEncoder)

    logger.info("Saved results to %s", path)

