"""Integration tests for end-to-end CLI workflows.

Runs the commands with the ideal-gas backend: init → throttle → regen.
"""

import json
import math
import os
import tempfile

import numpy as np
import pytest
from click.testing import CliRunner

from lre_tools.cli.main import cli
from lre_tools.core.config import default_config, save_config
from lre_tools.utils.constants import PI


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def tmp_dir():
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def config_file(runner, tmp_dir):
    path = os.path.join(tmp_dir, "engine.json")
    result = runner.invoke(cli, ["init", "-o", path, "--name", "CLI Engine"])
    assert result.exit_code == 0, result.output
    return path


class TestInit:
    def test_writes_loadable_config(self, config_file):
        with open(config_file) as f:
            data = json.load(f)
        assert data["meta"]["name"] == "CLI Engine"
        assert data["propellants"]["oxidizer"] == "O2(L)"

    def test_refuses_overwrite(self, runner, config_file):
        result = runner.invoke(cli, ["init", "-o", config_file])
        assert result.exit_code == 1
        assert "exists" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestThrottleCommand:
    def test_sweep_with_outputs(self, runner, config_file, tmp_dir):
        out = os.path.join(tmp_dir, "throttle.json")
        report = os.path.join(tmp_dir, "throttle.txt")
        plot = os.path.join(tmp_dir, "throttle.png")
        result = runner.invoke(cli, [
            "throttle", "--config", config_file, "--solver", "ideal",
            "-o", out, "--report", report, "--plot", plot,
        ])
        assert result.exit_code == 0, result.output
        assert "All throttle points converged" in result.output

        with open(out) as f:
            data = json.load(f)
        points = data["result"]["points"]
        assert len(points) == 20
        assert all(p["status"] == "converged" for p in points)
        assert data["meta"]["name"] == "CLI Engine"
        assert os.path.exists(report)
        assert os.path.exists(plot)

    def test_default_config_imperial(self, runner):
        result = runner.invoke(cli, ["throttle", "--solver", "ideal", "--units", "imperial"])
        assert result.exit_code == 0, result.output
        assert "lbf" in result.output
        assert "(lbf)" in result.output
        assert "(psi)" in result.output

    def test_non_convergence_exit_code(self, runner, tmp_dir):
        """Throttling below ambient-pressure-limited chamber pressure is flagged."""
        config = default_config()
        config.throttle.min_throttle = 0.05
        path = os.path.join(tmp_dir, "deep.json")
        save_config(config, path)

        result = runner.invoke(cli, ["throttle", "--config", path, "--solver", "ideal"])
        assert result.exit_code == 2
        assert "did not converge" in result.output

    def test_invalid_config(self, runner, tmp_dir):
        path = os.path.join(tmp_dir, "bad.json")
        with open(path, "w") as f:
            json.dump({"throttle": {"max_chamber_pressure": "10 psi"}}, f)
        result = runner.invoke(cli, ["throttle", "--config", path, "--solver", "ideal"])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_mistyped_config_value(self, runner, tmp_dir):
        path = os.path.join(tmp_dir, "typo.json")
        with open(path, "w") as f:
            json.dump({"throttle": {"min_throttle": "0.5"}}, f)
        result = runner.invoke(cli, ["throttle", "--config", path, "--solver", "ideal"])
        assert result.exit_code == 1
        assert "min_throttle" in result.output
        assert "Traceback" not in result.output


class TestRegenCommand:
    def test_throat_station(self, runner, config_file, tmp_dir):
        out = os.path.join(tmp_dir, "regen.json")
        report = os.path.join(tmp_dir, "regen.txt")
        plot = os.path.join(tmp_dir, "regen.png")
        result = runner.invoke(cli, [
            "regen", "--config", config_file, "--solver", "ideal", "--show-iterations",
            "-o", out, "--report", report, "--plot", plot,
        ])
        assert result.exit_code == 0, result.output
        assert "Gas Side Wall Temp" in result.output
        assert "converged at 1 station" in result.output

        with open(out) as f:
            data = json.load(f)
        station = data["result"]["stations"][0]
        assert station["status"] == "converged"
        assert station["T_coolant_in"] < station["T_wg"] < station["T_recovery"]
        assert os.path.exists(report)
        assert os.path.exists(plot)

    def test_contour_march(self, runner, tmp_dir):
        R_t = math.sqrt(default_config().regen.throat_area / PI)
        x = np.linspace(-0.005, 0.01, 4)
        csv = os.path.join(tmp_dir, "contour.csv")
        np.savetxt(csv, np.column_stack([x, R_t + 2.0 * x**2]), delimiter=",")

        result = runner.invoke(cli, ["regen", "--solver", "ideal", "--contour", csv])
        assert result.exit_code == 0, result.output
        assert "converged at 4 station" in result.output
        assert "(mm)" in result.output

    def test_boiling_coolant_exit_code(self, runner, tmp_dir):
        """Propane entering close to saturation boils along the channel."""
        config = default_config()
        config.regen.coolant_inlet_temperature = 318.0
        path = os.path.join(tmp_dir, "hot_inlet.json")
        save_config(config, path)

        R_t = math.sqrt(config.regen.throat_area / PI)
        x = np.linspace(-0.03, 0.05, 9)
        csv = os.path.join(tmp_dir, "contour.csv")
        np.savetxt(csv, np.column_stack([x, R_t + 2.0 * x**2]), delimiter=",")

        result = runner.invoke(
            cli, ["regen", "--config", path, "--solver", "ideal", "--contour", csv]
        )
        assert result.exit_code == 2
        assert "Coolant boils" in result.output
        assert "OK:" not in result.output

    def test_bad_contour(self, runner, tmp_dir):
        csv = os.path.join(tmp_dir, "contour.csv")
        np.savetxt(csv, np.array([[0.0, 0.02], [0.0, 0.02], [0.01, 0.021]]), delimiter=",")
        result = runner.invoke(cli, ["regen", "--solver", "ideal", "--contour", csv])
        assert result.exit_code == 1
        assert "increasing" in result.output
