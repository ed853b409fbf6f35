"""Tests for the CoolProp coolant interface."""

import pytest

from lre_tools.core.fluids import Fluid, FluidPropertyError, coolprop_name, get_fluid


class TestAliases:
    def test_propane(self):
        assert coolprop_name("C3H8") == "Propane"
        assert coolprop_name(" propane ") == "Propane"

    def test_passthrough(self):
        assert coolprop_name("Nitrogen") == "Nitrogen"


class TestFluid:
    def test_water_density(self):
        water = get_fluid("water")
        assert water.density(300.0, 101325.0) == pytest.approx(996.5, rel=1e-3)

    def test_liquid_propane_properties(self):
        propane = get_fluid("C3H8")
        T, P = 293.15, 1.72e6
        assert 450.0 < propane.density(T, P) < 550.0
        assert 2000.0 < propane.specific_heat_cp(T, P) < 3000.0
        assert 5.0e-5 < propane.viscosity(T, P) < 2.0e-4
        assert 0.05 < propane.thermal_conductivity(T, P) < 0.2

    def test_clamp_temperature(self):
        propane = get_fluid("C3H8")
        assert propane.clamp_temperature(5000.0) == propane.T_max
        assert propane.clamp_temperature(1.0) == propane.T_min
        assert propane.clamp_temperature(300.0) == 300.0

    def test_saturation_temperature(self):
        water = get_fluid("water")
        assert water.saturation_temperature(101325.0) == pytest.approx(373.12, abs=0.1)

    def test_propane_boils_near_chamber_pressure(self):
        propane = get_fluid("C3H8")
        assert 310.0 < propane.saturation_temperature(1.6e6) < 330.0

    def test_no_saturation_above_critical_pressure(self):
        water = get_fluid("water")
        assert water.saturation_temperature(1.1 * water.P_critical) is None

    def test_unknown_fluid(self):
        with pytest.raises(FluidPropertyError):
            Fluid("NotAFluid")

    def test_out_of_range_query(self):
        water = get_fluid("water")
        with pytest.raises(FluidPropertyError):
            water.viscosity(-10.0, 101325.0)
