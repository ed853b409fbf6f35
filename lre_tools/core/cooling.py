"""Regenerative cooling analysis module for LRE Tools.

Provides channel geometry, coolant-side heat transfer correlations and
pressure drop, and the station heat balance: the gas-side wall temperature
is iterated until the Bartz gas-side heat flux matches the heat flux the
coolant removes through the wall, after which the coolant state is advanced
to the next station.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Protocol

import numpy as np

from lre_tools.core.combustion import CombustionError, CombustionProperties, EquilibriumSolver
from lre_tools.core.config import Propellants, RegenConfig
from lre_tools.core.fluids import FluidPropertyError
from lre_tools.core.solution import SolveStatus
from lre_tools.core.thermal import (
    bartz_heat_transfer_coefficient,
    bartz_sigma,
    conduction_wall_temperature,
    heat_flux,
    recovery_factor,
    recovery_temperature,
)
from lre_tools.core.thermo import mach_from_area_ratio
from lre_tools.utils.constants import PI
from lre_tools.utils.interpolation import linear_interp_1d

logger = logging.getLogger(__name__)


# --- Channel geometry ---


@dataclass
class CoolingChannel:
    """Cooling channel cross-section geometry.

    Rectangular channel geometry is assumed (milled, slit-sawn or printed
    regenerative jackets).
    """

    width: float = 2.0e-3  # m, channel width
    height: float = 2.0e-3  # m, channel height (radial depth)
    wall_thickness: float = 2.0e-3  # m, inner (hot-gas-side) wall thickness

    @property
    def area(self) -> float:
        """Channel cross-sectional flow area [m²]."""
        return self.width * self.height

    @property
    def wetted_perimeter(self) -> float:
        """Wetted perimeter of rectangular channel [m]."""
        return 2.0 * (self.width + self.height)

    @property
    def hydraulic_diameter(self) -> float:
        """Hydraulic diameter Dh = 4A/P [m]."""
        return 4.0 * self.area / self.wetted_perimeter

    def heated_area(self, length: float) -> float:
        """Hot-wall area feeding one channel over an axial length [m²]."""
        return self.width * length


def channel_count(throat_diameter: float, channel_diameter: float, wall_thickness: float) -> int:
    """Number of coolant channels that pack around the throat.

        N = π · (Dt + 0.8 · (d + 2t)) / (d + 2t)

    (Heister, eq. 6.30), rounded down.

    Args:
        throat_diameter: Throat diameter [m].
        channel_diameter: Channel (hydraulic) diameter [m].
        wall_thickness: Hot-gas-side wall thickness [m].
    """
    pitch = channel_diameter + 2.0 * wall_thickness
    return max(1, int(PI * (throat_diameter + 0.8 * pitch) / pitch))


# --- Coolant-side correlations ---


def reynolds_number(mass_flow: float, Dh: float, mu: float) -> float:
    """Channel Reynolds number Re = 4ṁ / (π · Dh · μ)."""
    return 4.0 * mass_flow / (PI * Dh * mu)


def prandtl_number(cp: float, mu: float, k: float) -> float:
    """Prandtl number Pr = cp · μ / k."""
    return cp * mu / k


def coolant_htc_sieder_tate(
    Re: float,
    Pr: float,
    k: float,
    Dh: float,
    mu_bulk: float,
    mu_wall: float,
) -> float:
    """Sieder-Tate correlation for turbulent convection with viscosity correction.

    Nu = 0.027 · Re^0.8 · Pr^(1/3) · (μ_bulk / μ_wall)^0.14

    Args:
        Re: Reynolds number.
        Pr: Prandtl number.
        k: Thermal conductivity of coolant [W/(m·K)].
        Dh: Hydraulic diameter [m].
        mu_bulk: Bulk dynamic viscosity [Pa·s].
        mu_wall: Wall dynamic viscosity [Pa·s].

    Returns:
        Coolant-side heat transfer coefficient [W/(m²·K)].
    """
    Nu = 0.027 * Re**0.8 * Pr ** (1.0 / 3.0) * (mu_bulk / mu_wall) ** 0.14
    return Nu * k / Dh


def channel_pressure_drop(
    length: float,
    Dh: float,
    rho: float,
    velocity: float,
    Re: float,
    roughness: float = 3.0e-6,
) -> float:
    """Frictional pressure drop in a cooling channel [Pa].

    Uses the Darcy-Weisbach equation with the Colebrook friction factor.

    Args:
        length: Channel length [m].
        Dh: Hydraulic diameter [m].
        rho: Coolant density [kg/m³].
        velocity: Coolant bulk velocity [m/s].
        Re: Reynolds number.
        roughness: Surface roughness [m] (default 3 μm for milled channels).

    Returns:
        Frictional pressure drop [Pa].
    """
    f = _friction_factor(Re, Dh, roughness)
    return f * (length / Dh) * 0.5 * rho * velocity**2


def _friction_factor(Re: float, Dh: float, roughness: float) -> float:
    """Darcy friction factor using Swamee-Jain approximation.

    Explicit approximation of the Colebrook equation.
    """
    if Re < 2300:
        # Laminar
        return 64.0 / max(Re, 1.0)

    # Swamee-Jain (1976) explicit approximation
    eps_d = roughness / Dh
    log_arg = eps_d / 3.7 + 5.74 / Re**0.9
    return 0.25 / (math.log10(log_arg)) ** 2


class CoolantProperties(Protocol):
    """Fluid-property service used by the heat balance (see ``fluids.Fluid``)."""

    name: str

    def clamp_temperature(self, T: float) -> float: ...

    def density(self, T: float, P: float) -> float: ...

    def specific_heat_cp(self, T: float, P: float) -> float: ...

    def viscosity(self, T: float, P: float) -> float: ...

    def thermal_conductivity(self, T: float, P: float) -> float: ...

    def saturation_temperature(self, P: float) -> float | None: ...


# --- Station heat balance ---


class WallPhase(Enum):
    """Phase of the wall-temperature iteration at one station."""

    GUESSING = "guessing"
    EVALUATING = "evaluating"
    CONVERGED = "converged"


@dataclass(frozen=True)
class WallIterate:
    """Solver state of the wall-temperature iteration at one station.

    Each step returns a new instance; nothing is updated in place.
    """

    T_wg: float  # K, gas-side wall temperature guess
    step: float  # K, size of the next correction
    iteration: int = 0
    phase: WallPhase = WallPhase.GUESSING

    def evaluate(self) -> WallIterate:
        return replace(self, phase=WallPhase.EVALUATING)

    def converge(self) -> WallIterate:
        return replace(self, phase=WallPhase.CONVERGED)

    def advance(self, mismatch: float) -> WallIterate:
        """Move the guess toward balance and halve the step.

        A positive mismatch (gas side delivers more than the coolant
        removes) means the wall is hotter than guessed.
        """
        direction = 1.0 if mismatch > 0 else -1.0
        return WallIterate(
            T_wg=self.T_wg + direction * self.step,
            step=0.5 * self.step,
            iteration=self.iteration + 1,
            phase=WallPhase.GUESSING,
        )


@dataclass
class WallIterationRecord:
    """One evaluated guess of the wall-temperature iteration."""

    iteration: int
    T_wg: float  # K
    T_wl: float  # K
    q_gas: float  # W/m²
    q_liquid: float  # W/m²

    @property
    def mismatch(self) -> float:
        return self.q_gas - self.q_liquid


@dataclass
class GasSideConditions:
    """Hot-gas conditions driving the heat balance at one station."""

    chamber_pressure: float  # Pa
    c_star: float  # m/s
    throat_diameter: float  # m
    throat_curvature_radius: float  # m
    area_ratio: float  # A/At
    mach: float
    gamma: float
    T_static: float  # K
    T_stagnation: float  # K
    viscosity: float  # Pa·s
    cp: float  # J/(kg·K)
    prandtl: float

    @property
    def T_recovery(self) -> float:
        return recovery_temperature(
            self.T_static, self.gamma, self.mach, recovery_factor(self.prandtl)
        )

    def htc(self, T_wall: float) -> float:
        """Bartz gas-side heat transfer coefficient at a wall temperature."""
        sigma = bartz_sigma(T_wall, self.T_stagnation, self.gamma, self.mach)
        return bartz_heat_transfer_coefficient(
            pc=self.chamber_pressure,
            c_star=self.c_star,
            Dt=self.throat_diameter,
            viscosity=self.viscosity,
            cp=self.cp,
            Pr=self.prandtl,
            local_area_ratio=self.area_ratio,
            throat_curvature_radius=self.throat_curvature_radius,
            sigma=sigma,
        )


@dataclass
class CoolantState:
    """Bulk coolant state entering a station."""

    temperature: float  # K
    pressure: float  # Pa


@dataclass
class StationResult:
    """Converged (or flagged) heat balance at one axial station."""

    x: float  # m
    radius: float  # m
    area_ratio: float
    mach: float
    status: SolveStatus
    message: str = ""
    iterations: int = 0

    # Gas side
    T_recovery: float = 0.0  # K
    h_g: float = 0.0  # W/(m²·K)
    q_gas: float = 0.0  # W/m²

    # Wall
    T_wg: float = 0.0  # K
    T_wl: float = 0.0  # K

    # Coolant side
    h_l: float = 0.0  # W/(m²·K)
    q_liquid: float = 0.0  # W/m²
    Re: float = 0.0
    velocity: float = 0.0  # m/s
    T_coolant_in: float = 0.0  # K
    T_coolant_out: float = 0.0  # K
    P_coolant_in: float = 0.0  # Pa
    P_coolant_out: float = 0.0  # Pa
    dp: float = 0.0  # Pa
    heat_per_channel: float = 0.0  # W
    T_saturation: float | None = None  # K, at the outlet pressure; None when supercritical

    history: list[WallIterationRecord] = field(default_factory=list)

    @property
    def converged(self) -> bool:
        return self.status.ok

    @property
    def mismatch(self) -> float:
        return self.q_gas - self.q_liquid

    @property
    def boiling(self) -> bool:
        """Coolant leaves the station at or above its saturation temperature."""
        return self.T_saturation is not None and self.T_coolant_out >= self.T_saturation


def solve_station(
    gas: GasSideConditions,
    channel: CoolingChannel,
    coolant: CoolantProperties,
    inlet: CoolantState,
    channel_mass_flow: float,
    wall_conductivity: float,
    station_length: float,
    tolerance: float,
    max_iterations: int = 200,
    initial_wall_temperature: float | None = None,
    initial_step: float | None = None,
    roughness: float = 3.0e-6,
    x: float = 0.0,
    radius: float = 0.0,
) -> StationResult:
    """Balance gas-side and coolant-side heat flux at one station.

    The gas-side wall temperature is corrected by a step that halves on
    every iteration, in the direction that reduces the flux mismatch.  By
    default the first guess is the midpoint of [T_coolant, T_recovery] and
    the first step a quarter of that span, which makes the sequence a
    bisection of the bracket.  After the balance is found the coolant
    temperature rises by q·A/(ṁ·cp) and its pressure falls by the channel
    friction loss over ``station_length``.  A coolant leaving at or above its
    saturation temperature is flagged as boiling.

    Args:
        gas: Hot-gas conditions at the station.
        channel: Channel cross-section and wall thickness.
        coolant: Fluid-property service for the coolant.
        inlet: Bulk coolant state entering the station.
        channel_mass_flow: Coolant mass flow through one channel [kg/s].
        wall_conductivity: Wall thermal conductivity [W/(m·K)].
        station_length: Axial length the station represents [m].
        tolerance: Accepted |q_gas - q_liquid| [W/m²].
        max_iterations: Iteration cap before giving up.
        initial_wall_temperature: First T_wg guess [K] (None: bracket midpoint).
        initial_step: First correction [K] (None: quarter of the bracket).
        roughness: Channel wall roughness [m].
        x: Axial position reported with the result [m].
        radius: Wall radius reported with the result [m].

    Returns:
        StationResult with the final state and the iteration history.
    """
    T_c = inlet.temperature
    P_c = inlet.pressure
    T_r = gas.T_recovery
    result = StationResult(
        x=x,
        radius=radius,
        area_ratio=gas.area_ratio,
        mach=gas.mach,
        status=SolveStatus.CONVERGED,
        T_recovery=T_r,
        T_coolant_in=T_c,
        T_coolant_out=T_c,
        P_coolant_in=P_c,
        P_coolant_out=P_c,
    )

    if T_r <= T_c:
        result.status = SolveStatus.NOT_BRACKETED
        result.message = (
            f"Recovery temperature {T_r:.1f} K does not exceed coolant temperature {T_c:.1f} K"
        )
        return result

    Dh = channel.hydraulic_diameter
    try:
        T_bulk = coolant.clamp_temperature(T_c)
        mu_b = coolant.viscosity(T_bulk, P_c)
        cp_l = coolant.specific_heat_cp(T_bulk, P_c)
        k_l = coolant.thermal_conductivity(T_bulk, P_c)
        rho_l = coolant.density(T_bulk, P_c)
    except FluidPropertyError as exc:
        logger.error("Coolant properties unavailable at x=%.4f m: %s", x, exc)
        result.status = SolveStatus.SOLVER_FAULT
        result.message = str(exc)
        return result

    Re = reynolds_number(channel_mass_flow, Dh, mu_b)
    Pr_l = prandtl_number(cp_l, mu_b, k_l)

    span = T_r - T_c
    state = WallIterate(
        T_wg=initial_wall_temperature if initial_wall_temperature is not None else T_c + 0.5 * span,
        step=initial_step if initial_step is not None else 0.25 * span,
    )

    while True:
        state = state.evaluate()
        h_g = gas.htc(state.T_wg)
        q_g = heat_flux(h_g, T_r, state.T_wg)
        T_wl = conduction_wall_temperature(state.T_wg, q_g, channel.wall_thickness, wall_conductivity)

        try:
            mu_w = coolant.viscosity(coolant.clamp_temperature(T_wl), P_c)
        except FluidPropertyError as exc:
            logger.error("Wall viscosity unavailable at x=%.4f m: %s", x, exc)
            result.status = SolveStatus.SOLVER_FAULT
            result.message = str(exc)
            result.iterations = len(result.history)
            return result

        h_l = coolant_htc_sieder_tate(Re, Pr_l, k_l, Dh, mu_b, mu_w)
        q_l = heat_flux(h_l, T_wl, T_c)

        record = WallIterationRecord(state.iteration, state.T_wg, T_wl, q_g, q_l)
        result.history.append(record)
        logger.debug(
            "x=%.4f m iter %d: T_wg=%.3f K, q_g=%.6e, q_l=%.6e W/m2",
            x, state.iteration, state.T_wg, q_g, q_l,
        )

        result.T_wg, result.T_wl = state.T_wg, T_wl
        result.h_g, result.h_l = h_g, h_l
        result.q_gas, result.q_liquid = q_g, q_l

        if abs(record.mismatch) <= tolerance:
            state = state.converge()
            break
        if state.iteration + 1 >= max_iterations:
            result.status = SolveStatus.MAX_ITERATIONS
            result.message = (
                f"Heat flux mismatch {record.mismatch:.3e} W/m2 after {max_iterations} iterations"
            )
            logger.warning("Station x=%.4f m: %s", x, result.message)
            break
        state = state.advance(record.mismatch)

    result.iterations = len(result.history)

    # Advance the coolant through the station
    velocity = channel_mass_flow / (rho_l * channel.area)
    heat = q_g * channel.heated_area(station_length)
    result.Re = Re
    result.velocity = velocity
    result.heat_per_channel = heat
    result.T_coolant_out = T_c + heat / (channel_mass_flow * cp_l)
    result.dp = channel_pressure_drop(station_length, Dh, rho_l, velocity, Re, roughness)
    result.P_coolant_out = P_c - result.dp

    try:
        result.T_saturation = coolant.saturation_temperature(result.P_coolant_out)
    except FluidPropertyError as exc:
        logger.error("Saturation state unavailable at x=%.4f m: %s", x, exc)
        result.status = SolveStatus.SOLVER_FAULT
        result.message = str(exc)
        return result
    if result.boiling:
        boiling = (
            f"Coolant boils: {result.T_coolant_out:.1f} K at {result.P_coolant_out:.0f} Pa "
            f"(saturation {result.T_saturation:.1f} K)"
        )
        result.message = f"{result.message}; {boiling}" if result.message else boiling
        logger.warning("Station x=%.4f m: %s", x, boiling)

    if result.converged:
        logger.info(
            "Station x=%.4f m: gas-side wall temperature %.2f K after %d iterations",
            x, result.T_wg, result.iterations,
        )
    return result


# --- Whole-jacket analysis ---


@dataclass
class RegenResult:
    """Regenerative cooling analysis result."""

    stations: list[StationResult] = field(default_factory=list)
    channel: CoolingChannel = field(default_factory=CoolingChannel)
    n_channels: int = 0
    channel_mass_flow: float = 0.0  # kg/s
    throat_diameter: float = 0.0  # m
    coolant: str = ""
    coolant_inlet_temperature: float = 0.0  # K
    coolant_inlet_pressure: float = 0.0  # Pa
    status: SolveStatus = SolveStatus.CONVERGED
    message: str = ""

    @property
    def converged(self) -> bool:
        return self.status.ok and all(s.converged for s in self.stations)

    @property
    def coolant_outlet_temperature(self) -> float:
        return self.stations[-1].T_coolant_out if self.stations else self.coolant_inlet_temperature

    @property
    def coolant_outlet_pressure(self) -> float:
        return self.stations[-1].P_coolant_out if self.stations else self.coolant_inlet_pressure

    @property
    def total_pressure_drop(self) -> float:
        return sum(s.dp for s in self.stations)

    @property
    def max_wall_temperature(self) -> float:
        return max((s.T_wg for s in self.stations), default=0.0)

    @property
    def max_heat_flux(self) -> float:
        return max((s.q_gas for s in self.stations), default=0.0)

    @property
    def boiling_stations(self) -> list[StationResult]:
        """Stations where the coolant reaches saturation."""
        return [s for s in self.stations if s.boiling]

    @property
    def total_heat_load(self) -> float:
        """Heat absorbed by all channels [W]."""
        return self.n_channels * sum(s.heat_per_channel for s in self.stations)


def gas_conditions_at(
    props: CombustionProperties,
    area_ratio: float,
    supersonic: bool,
    throat_diameter: float,
    throat_curvature_radius: float,
) -> GasSideConditions:
    """Hot-gas conditions at a station from the chamber/throat/exit states.

    The local Mach number follows from the area ratio with the throat γ;
    γ, static temperature and transport properties are interpolated in Mach
    number between the three equilibrium states.
    """
    ar = max(area_ratio, 1.0)
    M = mach_from_area_ratio(ar, props.throat.gamma, supersonic=supersonic)

    states = props.locations()
    machs = np.array([s.mach for s in states])

    def interp(attr: str) -> float:
        values = np.array([getattr(s, attr) for s in states])
        return linear_interp_1d(machs, values, M)

    return GasSideConditions(
        chamber_pressure=props.chamber_pressure,
        c_star=props.c_star,
        throat_diameter=throat_diameter,
        throat_curvature_radius=throat_curvature_radius,
        area_ratio=ar,
        mach=M,
        gamma=interp("gamma"),
        T_static=interp("temperature"),
        T_stagnation=props.chamber.temperature,
        viscosity=interp("viscosity"),
        cp=interp("cp"),
        prandtl=interp("prandtl"),
    )


def _station_lengths(x: np.ndarray, default: float) -> np.ndarray:
    if x.size < 2:
        return np.full(x.size, default)
    dx = np.abs(np.diff(x))
    return np.append(dx, dx[-1])


def march_channel(
    props: CombustionProperties,
    config: RegenConfig,
    coolant: CoolantProperties,
    contour_x: np.ndarray,
    contour_r: np.ndarray,
) -> RegenResult:
    """March the heat balance station by station along a wall contour.

    The channel count is fixed from the throat geometry before marching.
    With ``config.counter_flow`` the coolant enters at the nozzle end and
    flows toward the injector.  Stations upstream of the minimum radius are
    treated as subsonic.  The march stops at the first station whose
    property look-ups fail.
    Stations where the coolant leaves at or above its saturation
    temperature are flagged as boiling; the march carries on so the extent
    of the boiling region is reported.

    Args:
        props: Equilibrium combustion properties at the design point.
        config: Regenerative cooling inputs.
        coolant: Fluid-property service for the coolant.
        contour_x: Axial station positions [m], increasing toward the exit.
        contour_r: Wall radius at each station [m].

    Returns:
        RegenResult with stations in marching order.
    """
    contour_x = np.asarray(contour_x, dtype=float)
    contour_r = np.asarray(contour_r, dtype=float)

    R_t = math.sqrt(config.throat_area / PI)
    D_t = 2.0 * R_t
    channel = CoolingChannel(
        width=config.channel_width,
        height=config.channel_height,
        wall_thickness=config.wall_thickness,
    )
    n_channels = channel_count(D_t, channel.hydraulic_diameter, channel.wall_thickness)
    m_chan = config.coolant_mass_flow / n_channels
    logger.info(
        "%d channels around a %.2f mm throat, %.4f kg/s each", n_channels, D_t * 1e3, m_chan
    )

    result = RegenResult(
        channel=channel,
        n_channels=n_channels,
        channel_mass_flow=m_chan,
        throat_diameter=D_t,
        coolant=coolant.name,
        coolant_inlet_temperature=config.coolant_inlet_temperature,
        coolant_inlet_pressure=config.coolant_inlet_pressure,
    )

    throat_index = int(np.argmin(contour_r))
    lengths = _station_lengths(contour_x, config.station_length)
    order = range(contour_x.size - 1, -1, -1) if config.counter_flow else range(contour_x.size)

    inlet = CoolantState(config.coolant_inlet_temperature, config.coolant_inlet_pressure)
    for idx in order:
        gas = gas_conditions_at(
            props,
            area_ratio=(contour_r[idx] / R_t) ** 2,
            supersonic=idx > throat_index,
            throat_diameter=D_t,
            throat_curvature_radius=config.throat_curvature_ratio * R_t,
        )
        station = solve_station(
            gas,
            channel,
            coolant,
            inlet,
            channel_mass_flow=m_chan,
            wall_conductivity=config.wall_conductivity,
            station_length=float(lengths[idx]),
            tolerance=config.heat_flux_tolerance,
            max_iterations=config.max_iterations,
            initial_wall_temperature=config.initial_wall_temperature,
            initial_step=config.initial_step,
            roughness=config.roughness,
            x=float(contour_x[idx]),
            radius=float(contour_r[idx]),
        )
        result.stations.append(station)

        if station.status is SolveStatus.SOLVER_FAULT:
            result.status = SolveStatus.SOLVER_FAULT
            result.message = f"March stopped at x={station.x:.4f} m: {station.message}"
            logger.error(result.message)
            break
        if not station.converged and result.status.ok:
            result.status = station.status
            result.message = f"Station x={station.x:.4f} m: {station.message}"

        inlet = CoolantState(station.T_coolant_out, station.P_coolant_out)

    boiling = result.boiling_stations
    if boiling:
        logger.warning(
            "Coolant at or above saturation at %d of %d stations, first at x=%.4f m",
            len(boiling), len(result.stations), boiling[0].x,
        )
    return result


def analyze_regen_cooling(
    config: RegenConfig,
    propellants: Propellants,
    solver: EquilibriumSolver,
    coolant: CoolantProperties,
    contour_x: np.ndarray | None = None,
    contour_r: np.ndarray | None = None,
) -> RegenResult:
    """Run the regenerative cooling heat balance.

    The contour is taken from the arguments, then from the configuration.
    Without either, a single station at the throat is solved.

    Args:
        config: Regenerative cooling inputs.
        propellants: Propellants and mixture ratio.
        solver: Equilibrium-chemistry backend.
        coolant: Fluid-property service for the coolant.
        contour_x: Axial station positions [m], increasing toward the exit.
        contour_r: Wall radius at each station [m].

    Returns:
        RegenResult; a failed equilibrium call yields an empty result with
        ``SOLVER_FAULT`` status.
    """
    try:
        props = solver.solve(
            config.chamber_pressure, config.exit_pressure, propellants.mixture_ratio
        )
    except CombustionError as exc:
        logger.error("Equilibrium solve failed: %s", exc)
        return RegenResult(
            coolant=coolant.name,
            coolant_inlet_temperature=config.coolant_inlet_temperature,
            coolant_inlet_pressure=config.coolant_inlet_pressure,
            status=SolveStatus.SOLVER_FAULT,
            message=str(exc),
        )

    if contour_x is None or contour_r is None:
        contour_x, contour_r = config.contour_x, config.contour_r
    if contour_x is None or contour_r is None:
        contour_x = [0.0]
        contour_r = [math.sqrt(config.throat_area / PI)]

    return march_channel(
        props, config, coolant, np.asarray(contour_x, dtype=float), np.asarray(contour_r, dtype=float)
    )


def analyze_throat_station(
    config: RegenConfig,
    propellants: Propellants,
    solver: EquilibriumSolver,
    coolant: CoolantProperties,
) -> RegenResult:
    """Solve the heat balance at the throat only, ignoring any configured contour."""
    R_t = math.sqrt(config.throat_area / PI)
    return analyze_regen_cooling(
        config, propellants, solver, coolant, contour_x=np.array([0.0]), contour_r=np.array([R_t])
    )
