"""Tests for configuration loading, validation and persistence."""

import json
from dataclasses import asdict

import numpy as np
import pytest

from lre_tools.core.config import (
    AnalysisConfig,
    ConfigError,
    ProjectMeta,
    RegenConfig,
    config_from_dict,
    default_config,
    load_config,
    save_config,
    save_results_json,
    validate_config,
)
from lre_tools.core.solution import SolveStatus
from lre_tools.utils.constants import BTU_TO_J, INCH_TO_M, LBF_TO_N, PSI_TO_PA


class TestDefaults:
    def test_reference_engine(self):
        config = default_config()
        assert config.throttle.max_thrust == pytest.approx(500 * LBF_TO_N)
        assert config.throttle.max_chamber_pressure == pytest.approx(250 * PSI_TO_PA)
        assert config.throttle.min_throttle == pytest.approx(0.2)
        assert config.propellants.mixture_ratio == pytest.approx(1.3)
        assert config.regen.throat_area == pytest.approx(1.45 * INCH_TO_M**2)
        assert config.regen.heat_flux_tolerance == pytest.approx(1e-4 * BTU_TO_J / INCH_TO_M**2)

    def test_defaults_are_valid(self):
        result = validate_config(default_config())
        assert result.is_valid
        assert not result.warnings

    def test_meta_touch(self):
        meta = ProjectMeta(name="Test")
        meta.touch()
        assert meta.modified != ""


class TestConfigFromDict:
    def test_quantity_strings(self):
        config = config_from_dict({
            "throttle": {"max_thrust": "1000 lbf", "max_chamber_pressure": "20 bar"},
            "regen": {"coolant_inlet_temperature": "68 degF", "channel_width": "1.5 mm"},
        })
        assert config.throttle.max_thrust == pytest.approx(1000 * LBF_TO_N)
        assert config.throttle.max_chamber_pressure == pytest.approx(2.0e6)
        assert config.regen.coolant_inlet_temperature == pytest.approx(293.15)
        assert config.regen.channel_width == pytest.approx(1.5e-3)

    def test_plain_numbers_are_si(self):
        config = config_from_dict({"regen": {"chamber_pressure": 2.0e6, "coolant_inlet_pressure": 3.0e6}})
        assert config.regen.chamber_pressure == 2.0e6

    def test_contour_list_of_strings(self):
        config = config_from_dict({
            "regen": {"contour_x": ["0 mm", "10 mm"], "contour_r": ["20 mm", "25 mm"]},
        })
        assert config.regen.contour_x == pytest.approx([0.0, 0.01])
        assert config.regen.contour_r == pytest.approx([0.02, 0.025])

    def test_unknown_section(self):
        with pytest.raises(ConfigError, match="sections"):
            config_from_dict({"nozzle": {}})

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="thrust"):
            config_from_dict({"throttle": {"thrust": 100.0}})

    def test_wrong_dimension(self):
        with pytest.raises(ConfigError, match="max_chamber_pressure"):
            config_from_dict({"throttle": {"max_chamber_pressure": "3 m"}})

    def test_exit_pressure_above_chamber(self):
        with pytest.raises(ConfigError) as excinfo:
            config_from_dict({"throttle": {"exit_pressure": "300 psi"}})
        assert not excinfo.value.validation.is_valid

    def test_throttle_fraction_range(self):
        with pytest.raises(ConfigError, match="min_throttle"):
            config_from_dict({"throttle": {"min_throttle": 1.5}})

    def test_efficiency_range(self):
        with pytest.raises(ConfigError, match="c_star_efficiency"):
            config_from_dict({"throttle": {"c_star_efficiency": 0.0}})

    def test_contour_must_increase(self):
        with pytest.raises(ConfigError, match="contour_x"):
            config_from_dict({"regen": {"contour_x": [0.0, 0.0, 0.1], "contour_r": [0.02, 0.02, 0.03]}})

    def test_number_given_as_string(self):
        with pytest.raises(ConfigError, match="min_throttle"):
            config_from_dict({"throttle": {"min_throttle": "0.5"}})

    def test_integral_float_becomes_int(self):
        config = config_from_dict({"throttle": {"n_points": 20.0}})
        assert config.throttle.n_points == 20
        assert isinstance(config.throttle.n_points, int)

    def test_fractional_count_rejected(self):
        with pytest.raises(ConfigError, match="n_points"):
            config_from_dict({"throttle": {"n_points": 20.5}})

    def test_int_accepted_for_float(self):
        config = config_from_dict({"propellants": {"mixture_ratio": 2}})
        assert config.propellants.mixture_ratio == 2.0
        assert isinstance(config.propellants.mixture_ratio, float)

    def test_wrong_scalar_types(self):
        with pytest.raises(ConfigError, match="counter_flow"):
            config_from_dict({"regen": {"counter_flow": "yes"}})
        with pytest.raises(ConfigError, match="max_iterations"):
            config_from_dict({"regen": {"max_iterations": True}})
        with pytest.raises(ConfigError, match="coolant"):
            config_from_dict({"regen": {"coolant": 3}})

    def test_required_value_missing(self):
        with pytest.raises(ConfigError, match="max_thrust"):
            config_from_dict({"throttle": {"max_thrust": None}})

    def test_optional_value_may_be_null(self):
        config = config_from_dict({"regen": {"initial_wall_temperature": None}})
        assert config.regen.initial_wall_temperature is None

    def test_section_must_be_object(self):
        with pytest.raises(ConfigError, match="throttle"):
            config_from_dict({"throttle": [1, 2]})

    def test_low_coolant_pressure_warns(self):
        config = config_from_dict({"regen": {"coolant_inlet_pressure": "100 psi"}})
        result = validate_config(config)
        assert result.is_valid
        assert any(m.parameter == "coolant_inlet_pressure" for m in result.warnings)


class TestJsonPersistence:
    def test_save_and_load(self, tmp_path):
        config = default_config()
        config.meta.name = "Test Engine"
        config.regen.coolant = "ethanol"
        path = tmp_path / "config.json"
        save_config(config, path)

        loaded = load_config(path)
        assert loaded.meta.name == "Test Engine"
        assert loaded.meta.created != ""
        assert loaded.regen.coolant == "ethanol"
        assert asdict(loaded.throttle) == asdict(config.throttle)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="not valid JSON"):
            load_config(path)

    def test_numpy_serialization(self, tmp_path):
        """Numpy arrays and enums in results become JSON lists and strings."""
        from dataclasses import dataclass, field

        @dataclass
        class Result:
            values: np.ndarray = field(default_factory=lambda: np.linspace(0, 1, 5))
            count: np.int64 = np.int64(3)
            status: SolveStatus = SolveStatus.CONVERGED

        path = tmp_path / "result.json"
        save_results_json(Result(), path, meta=ProjectMeta(name="Run"))
        with open(path) as f:
            data = json.load(f)
        assert data["result"]["values"] == pytest.approx([0, 0.25, 0.5, 0.75, 1.0])
        assert data["result"]["count"] == 3
        assert data["result"]["status"] == "converged"
        assert data["meta"]["name"] == "Run"

    def test_regen_config_round_trip_with_contour(self, tmp_path):
        config = AnalysisConfig(regen=RegenConfig(contour_x=[0.0, 0.01], contour_r=[0.02, 0.021]))
        path = tmp_path / "contour.json"
        save_config(config, path)
        assert load_config(path).regen.contour_r == pytest.approx([0.02, 0.021])
