"""Tests for the combustion-gas backends."""

import pytest

from lre_tools.core.combustion import (
    CombustionError,
    IdealGasSolver,
    eucken_prandtl,
    lookup_combustion,
    make_solver,
    normalize_propellant,
)
from lre_tools.core.thermo import expansion_ratio_from_pressure
from lre_tools.utils.constants import PSI_TO_PA

PC = 250.0 * PSI_TO_PA
PA = 14.7 * PSI_TO_PA


class TestCombustionTable:
    def test_cea_names_resolve(self):
        assert normalize_propellant("O2(L)") == "lox"
        assert normalize_propellant("C3H8O,2propanol") == "ipa"

    def test_nearest_mixture_ratio(self):
        data = lookup_combustion("O2(L)", "C3H8O,2propanol", 1.25)
        assert data.mixture_ratio == pytest.approx(1.3)

    def test_unknown_pair(self):
        with pytest.raises(KeyError):
            lookup_combustion("fluorine", "ipa", 2.0)

    def test_eucken_prandtl_range(self):
        assert 0.7 < eucken_prandtl(1.2) < 0.9


class TestIdealGasSolver:
    def test_states_in_flow_order(self, ideal_solver):
        props = ideal_solver.solve(PC, PA, 1.3)
        chamber, throat, exit_ = props.locations()
        assert chamber.mach == 0.0
        assert throat.mach == 1.0
        assert exit_.mach > 1.0
        assert chamber.temperature > throat.temperature > exit_.temperature
        assert chamber.pressure == pytest.approx(PC)
        assert exit_.pressure == pytest.approx(PA)

    def test_expansion_to_ambient(self, ideal_solver):
        props = ideal_solver.solve(PC, PA, 1.3)
        assert props.expansion_ratio == pytest.approx(
            expansion_ratio_from_pressure(props.chamber.gamma, PA / PC)
        )

    def test_performance_magnitudes(self, ideal_solver):
        props = ideal_solver.solve(PC, PA, 1.3)
        assert 1500.0 < props.c_star < 1900.0
        assert 180.0 < props.isp < 280.0
        assert 1.0e-5 < props.chamber.viscosity < 2.0e-4

    def test_rejects_non_expanding_pressure(self, ideal_solver):
        with pytest.raises(CombustionError):
            ideal_solver.solve(PC, 0.9 * PC, 1.3)

    def test_rejects_non_positive_pressure(self, ideal_solver):
        with pytest.raises(CombustionError):
            ideal_solver.solve(0.0, PA, 1.3)

    def test_unknown_pair_fails_early(self):
        with pytest.raises(CombustionError):
            IdealGasSolver("fluorine", "ipa")


class TestMakeSolver:
    def test_ideal(self):
        assert isinstance(make_solver("ideal", "O2(L)", "C3H8O,2propanol"), IdealGasSolver)

    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown combustion solver"):
            make_solver("magic", "O2(L)", "C3H8O,2propanol")


class TestRocketCEASolver:
    """NASA CEA backend; skipped when RocketCEA is not installed."""

    @pytest.fixture
    def cea_solver(self):
        pytest.importorskip("rocketcea")
        return make_solver(
            "cea", "O2(L)", "C3H8O,2propanol", oxidizer_temperature=90.17, fuel_temperature=293.15
        )

    def test_reference_point(self, cea_solver):
        props = cea_solver.solve(PC, PA, 1.3)
        assert 1500.0 < props.c_star < 1900.0
        assert 2500.0 < props.chamber.temperature < 3600.0
        assert props.throat.mach == 1.0
        assert props.exit.mach > 1.5
        assert props.expansion_ratio > 1.0
        assert props.chamber.pressure > props.throat.pressure > props.exit.pressure

    def test_transport_properties_si(self, cea_solver):
        props = cea_solver.solve(PC, PA, 1.3)
        throat = props.throat
        assert 1.0e-5 < throat.viscosity < 5.0e-4
        assert 0.3 < throat.prandtl < 1.0
        assert 1000.0 < throat.cp < 10000.0
        assert 0.01 < throat.molar_mass < 0.04

    def test_invalid_pressure(self, cea_solver):
        with pytest.raises(CombustionError):
            cea_solver.solve(PC, 2 * PC, 1.3)
