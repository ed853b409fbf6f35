"""Shared fixtures: offline combustion backend and constant-property coolants."""

import pytest

from lre_tools.core.combustion import IdealGasSolver
from lre_tools.core.config import Propellants, RegenConfig, ThrottleConfig
from lre_tools.core.fluids import FluidPropertyError


class _ConstantCoolant:
    """Coolant with fixed properties, roughly liquid propane.

    ``T_sat`` is returned as the saturation temperature at any pressure;
    None means the coolant never boils.
    """

    def __init__(self, name="FakePropane", rho=500.0, cp=2500.0, mu=1.0e-4, k=0.1, T_sat=None):
        self.name = name
        self.rho = rho
        self.cp = cp
        self.mu = mu
        self.k = k
        self.T_sat = T_sat

    def clamp_temperature(self, T):
        return T

    def density(self, T, P):
        return self.rho

    def specific_heat_cp(self, T, P):
        return self.cp

    def viscosity(self, T, P):
        return self.mu

    def thermal_conductivity(self, T, P):
        return self.k

    def saturation_temperature(self, P):
        return self.T_sat


class _HotWallFailingCoolant(_ConstantCoolant):
    """Coolant whose property service fails above a temperature."""

    def __init__(self, T_limit=400.0, **kwargs):
        super().__init__(**kwargs)
        self.T_limit = T_limit

    def viscosity(self, T, P):
        if T > self.T_limit:
            raise FluidPropertyError(f"{self.name}: no viscosity at T={T:.1f} K")
        return self.mu


@pytest.fixture
def propellants():
    return Propellants()


@pytest.fixture
def ideal_solver(propellants):
    return IdealGasSolver(propellants.oxidizer, propellants.fuel)


@pytest.fixture
def throttle_config():
    return ThrottleConfig()


@pytest.fixture
def regen_config():
    return RegenConfig()


@pytest.fixture
def make_coolant():
    """Factory for constant-property coolants, e.g. ``make_coolant(T_sat=300.0)``."""
    return _ConstantCoolant


@pytest.fixture
def make_failing_coolant():
    """Factory for coolants whose viscosity look-up fails on a hot wall."""
    return _HotWallFailingCoolant


@pytest.fixture
def coolant(make_coolant):
    return make_coolant()
