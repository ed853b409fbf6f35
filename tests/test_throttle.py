"""Tests for the throttle performance sweep."""

from dataclasses import replace

import numpy as np
import pytest

from lre_tools.core.combustion import CombustionError, IdealGasSolver
from lre_tools.core.solution import SolveStatus
from lre_tools.core.thermo import expansion_ratio_from_pressure
from lre_tools.core.throttle import (
    full_throttle_baseline,
    solve_throttle_point,
    throttle_sweep,
)
from lre_tools.utils.constants import G_0


class FailingBelowSolver(IdealGasSolver):
    """Ideal-gas backend that fails below a chamber pressure."""

    def __init__(self, oxidizer, fuel, pc_min):
        super().__init__(oxidizer, fuel)
        self.pc_min = pc_min

    def solve(self, chamber_pressure, ambient_pressure, mixture_ratio):
        if chamber_pressure < self.pc_min:
            raise CombustionError(f"no equilibrium below {self.pc_min:.0f} Pa")
        return super().solve(chamber_pressure, ambient_pressure, mixture_ratio)


@pytest.fixture
def baseline(throttle_config, propellants, ideal_solver):
    return full_throttle_baseline(throttle_config, propellants, ideal_solver)


class TestBaseline:
    """Test the full-throttle design point."""

    def test_throat_area_reproduces_max_thrust(self, baseline, throttle_config):
        F = baseline.thrust_coefficient * baseline.max_chamber_pressure * baseline.throat_area
        assert F == pytest.approx(throttle_config.max_thrust, rel=1e-12)

    def test_expansion_ratio(self, baseline, throttle_config):
        eps = expansion_ratio_from_pressure(
            baseline.gamma, throttle_config.exit_pressure / throttle_config.max_chamber_pressure
        )
        assert baseline.expansion_ratio == pytest.approx(eps)

    def test_efficiencies_applied(self, baseline, throttle_config, propellants, ideal_solver):
        props = ideal_solver.solve(
            throttle_config.max_chamber_pressure, throttle_config.ambient_pressure, 1.3
        )
        assert baseline.c_star == pytest.approx(props.c_star * 0.94)
        assert baseline.mass_flow == pytest.approx(
            baseline.max_chamber_pressure * baseline.throat_area / baseline.c_star
        )

    def test_reference_engine_magnitudes(self, baseline):
        """500 lbf at 250 psi: throat of order 1 in², ~1 kg/s."""
        assert 4e-4 < baseline.throat_area < 1.5e-3
        assert 0.5 < baseline.mass_flow < 2.0
        assert 150.0 < baseline.specific_impulse < 300.0


class TestSolveThrottlePoint:
    """Test the chamber-pressure bisection at one throttle setting."""

    def test_full_throttle_reproduces_baseline(self, baseline, throttle_config, ideal_solver):
        point = solve_throttle_point(baseline, 1.0, ideal_solver, throttle_config)
        assert point.status is SolveStatus.CONVERGED
        assert point.iterations == 1
        assert point.chamber_pressure == baseline.max_chamber_pressure
        assert point.thrust == pytest.approx(baseline.max_thrust, abs=throttle_config.thrust_tolerance)
        assert point.exit_pressure == pytest.approx(throttle_config.exit_pressure, rel=1e-9)

    def test_half_throttle(self, baseline, throttle_config, ideal_solver):
        point = solve_throttle_point(baseline, 0.5, ideal_solver, throttle_config)
        assert point.converged
        assert abs(point.thrust_error) <= throttle_config.thrust_tolerance
        assert point.chamber_pressure < baseline.max_chamber_pressure
        assert point.mass_flow == pytest.approx(
            point.chamber_pressure * baseline.throat_area / baseline.c_star
        )
        assert point.specific_impulse == pytest.approx(point.thrust / (point.mass_flow * G_0))

    def test_exit_pressure_follows_fixed_area_ratio(self, baseline, throttle_config, ideal_solver):
        point = solve_throttle_point(baseline, 0.5, ideal_solver, throttle_config)
        eps = expansion_ratio_from_pressure(
            baseline.gamma, point.exit_pressure / point.chamber_pressure
        )
        assert eps == pytest.approx(baseline.expansion_ratio, rel=1e-9)

    def test_target_below_bracket(self, baseline, throttle_config, ideal_solver):
        """Bracket that cannot reach the target is reported, not accepted."""
        pc = baseline.max_chamber_pressure
        point = solve_throttle_point(
            baseline, 0.5, ideal_solver, throttle_config, bracket=(0.9 * pc, 1.1 * pc)
        )
        assert point.status is SolveStatus.NOT_BRACKETED
        assert point.message

    def test_target_above_bracket(self, baseline, throttle_config, ideal_solver):
        pc = baseline.max_chamber_pressure
        point = solve_throttle_point(
            baseline, 0.9, ideal_solver, throttle_config, bracket=(0.2 * pc, 0.5 * pc)
        )
        assert point.status is SolveStatus.NOT_BRACKETED
        assert point.chamber_pressure == pytest.approx(0.5 * pc)

    def test_iteration_cap(self, baseline, throttle_config, ideal_solver):
        cfg = replace(throttle_config, max_iterations=3)
        point = solve_throttle_point(baseline, 0.5, ideal_solver, cfg)
        assert point.status is SolveStatus.MAX_ITERATIONS
        assert point.iterations == 3
        assert "3 iterations" in point.message

    def test_solver_fault(self, baseline, throttle_config, propellants):
        solver = FailingBelowSolver(
            propellants.oxidizer, propellants.fuel, pc_min=baseline.max_chamber_pressure
        )
        point = solve_throttle_point(baseline, 0.5, solver, throttle_config)
        assert point.status is SolveStatus.SOLVER_FAULT
        assert "no equilibrium" in point.message
        assert point.iterations == 1


class TestThrottleSweep:
    """Test the full sweep."""

    def test_reference_sweep(self, throttle_config, propellants, ideal_solver):
        result = throttle_sweep(throttle_config, propellants, ideal_solver)
        assert result.converged
        assert result.failures() == []
        assert len(result.points) == throttle_config.n_points
        assert result.throttle[0] == pytest.approx(1.0)
        assert result.throttle[-1] == pytest.approx(throttle_config.min_throttle)

    def test_chamber_pressure_decreases(self, throttle_config, propellants, ideal_solver):
        result = throttle_sweep(throttle_config, propellants, ideal_solver)
        assert np.all(np.diff(result.chamber_pressure) < 0)
        assert np.all(np.diff(result.mass_flow) < 0)

    def test_thrust_within_tolerance(self, throttle_config, propellants, ideal_solver):
        result = throttle_sweep(throttle_config, propellants, ideal_solver)
        targets = throttle_config.max_thrust * result.throttle
        assert np.all(np.abs(result.thrust - targets) <= throttle_config.thrust_tolerance)

    def test_expansion_ratio_constant(self, throttle_config, propellants, ideal_solver):
        result = throttle_sweep(throttle_config, propellants, ideal_solver)
        eps = [
            expansion_ratio_from_pressure(result.baseline.gamma, p.exit_pressure / p.chamber_pressure)
            for p in result.points
        ]
        assert eps == pytest.approx([result.baseline.expansion_ratio] * len(eps), rel=1e-9)

    def test_no_throttling_is_baseline(self, throttle_config, propellants, ideal_solver):
        cfg = replace(throttle_config, min_throttle=1.0, n_points=3)
        result = throttle_sweep(cfg, propellants, ideal_solver)
        assert result.converged
        assert np.all(result.chamber_pressure == cfg.max_chamber_pressure)
        assert result.thrust == pytest.approx(np.full(3, cfg.max_thrust), abs=cfg.thrust_tolerance)

    def test_failures_reported(self, throttle_config, propellants):
        """Deep throttling below what the backend can solve is flagged per point."""
        solver = FailingBelowSolver(propellants.oxidizer, propellants.fuel, pc_min=1.0e6)
        result = throttle_sweep(throttle_config, propellants, solver)
        assert not result.converged
        failures = result.failures()
        assert failures
        assert all(p.status is SolveStatus.SOLVER_FAULT for p in failures)
        assert result.points[0].converged
