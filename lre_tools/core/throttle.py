"""Throttle performance sweep for LRE Tools.

At a fixed mixture ratio and a nozzle sized at full thrust, finds the
chamber pressure that produces each requested thrust level.  The expansion
ratio is fixed by the full-throttle design point; at every trial pressure
the exit pressure follows from that area ratio and the current chamber γ,
and the thrust from the (efficiency-corrected) thrust coefficient.  The
chamber pressure is found by bisection on the thrust error.

References:
    - Sutton & Biblarz, *Rocket Propulsion Elements*, eqs. 3.25 and 3.30.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from lre_tools.core.combustion import CombustionError, EquilibriumSolver
from lre_tools.core.config import Propellants, ThrottleConfig
from lre_tools.core.solution import SolveStatus
from lre_tools.core.thermo import (
    exit_pressure_ratio,
    expansion_ratio_from_pressure,
    mass_flow_rate,
    throat_area,
    thrust_coefficient,
)
from lre_tools.utils.constants import G_0

logger = logging.getLogger(__name__)


@dataclass
class ThrottleBaseline:
    """Engine design point at full throttle."""

    max_thrust: float  # N
    max_chamber_pressure: float  # Pa
    exit_pressure: float  # Pa
    ambient_pressure: float  # Pa
    mixture_ratio: float
    gamma: float  # chamber γ at full throttle
    c_star: float  # m/s, delivered (η_c* applied)
    expansion_ratio: float  # Ae/At, fixed for the whole sweep
    thrust_coefficient: float  # delivered (η_Cf applied)
    throat_area: float  # m²
    mass_flow: float  # kg/s
    c_star_efficiency: float
    cf_efficiency: float

    @property
    def specific_impulse(self) -> float:
        """Delivered specific impulse at full throttle [s]."""
        return self.max_thrust / (self.mass_flow * G_0)


def full_throttle_baseline(
    config: ThrottleConfig,
    propellants: Propellants,
    solver: EquilibriumSolver,
) -> ThrottleBaseline:
    """Size the nozzle at the full-throttle design point.

    The expansion ratio follows from the design exit pressure (eq. 3.25),
    and the throat area from A_t = F_max / (C_f · P_c,max).

    Raises:
        CombustionError: If the equilibrium solve at full throttle fails.
    """
    pc = config.max_chamber_pressure
    props = solver.solve(pc, config.ambient_pressure, propellants.mixture_ratio)
    gamma = props.chamber.gamma
    c_star = props.c_star * config.c_star_efficiency

    eps = expansion_ratio_from_pressure(gamma, config.exit_pressure / pc)
    CF = config.cf_efficiency * thrust_coefficient(
        gamma, eps, config.exit_pressure / pc, config.ambient_pressure / pc
    )
    At = throat_area(config.max_thrust, pc, CF)

    baseline = ThrottleBaseline(
        max_thrust=config.max_thrust,
        max_chamber_pressure=pc,
        exit_pressure=config.exit_pressure,
        ambient_pressure=config.ambient_pressure,
        mixture_ratio=propellants.mixture_ratio,
        gamma=gamma,
        c_star=c_star,
        expansion_ratio=eps,
        thrust_coefficient=CF,
        throat_area=At,
        mass_flow=mass_flow_rate(pc, At, c_star),
        c_star_efficiency=config.c_star_efficiency,
        cf_efficiency=config.cf_efficiency,
    )
    logger.info(
        "Full throttle: eps=%.3f, Cf=%.4f, At=%.4e m2, mdot=%.4f kg/s",
        eps, CF, At, baseline.mass_flow,
    )
    return baseline


@dataclass
class ThrottlePoint:
    """Operating point found for one throttle setting."""

    throttle: float  # fraction of max thrust
    target_thrust: float  # N
    status: SolveStatus
    thrust: float = 0.0  # N
    chamber_pressure: float = 0.0  # Pa
    exit_pressure: float = 0.0  # Pa
    mass_flow: float = 0.0  # kg/s
    specific_impulse: float = 0.0  # s
    thrust_coefficient: float = 0.0
    expansion_ratio: float = 0.0
    iterations: int = 0
    message: str = ""

    @property
    def converged(self) -> bool:
        return self.status.ok

    @property
    def thrust_error(self) -> float:
        return self.target_thrust - self.thrust


def solve_throttle_point(
    baseline: ThrottleBaseline,
    throttle: float,
    solver: EquilibriumSolver,
    config: ThrottleConfig,
    bracket: tuple[float, float] | None = None,
) -> ThrottlePoint:
    """Find the chamber pressure that produces F_max · throttle.

    The first trial is the lower end of the bracket, i.e. the pressure a
    linear thrust/pressure relation would give.  Each trial is followed by
    halving the bracket on the side that cannot contain the answer.

    Args:
        baseline: Full-throttle design point.
        throttle: Thrust fraction in (0, 1].
        solver: Equilibrium-chemistry backend.
        config: Throttle sweep inputs (tolerance, iteration cap, margin).
        bracket: Chamber-pressure search interval [Pa]; defaults to
            [P_c,max · throttle, P_c,max + margin].

    Returns:
        ThrottlePoint holding the last trial and how the search ended.
    """
    target = baseline.max_thrust * throttle
    if bracket is None:
        bracket = (
            baseline.max_chamber_pressure * throttle,
            baseline.max_chamber_pressure + config.pressure_margin,
        )
    lo, hi = bracket
    lo_end, hi_end = bracket
    point = ThrottlePoint(
        throttle=throttle,
        target_thrust=target,
        status=SolveStatus.MAX_ITERATIONS,
        expansion_ratio=baseline.expansion_ratio,
    )

    pc = lo
    pa = baseline.ambient_pressure
    for iteration in range(1, config.max_iterations + 1):
        try:
            props = solver.solve(pc, pa, baseline.mixture_ratio)
        except CombustionError as exc:
            point.status = SolveStatus.SOLVER_FAULT
            point.message = str(exc)
            point.iterations = iteration
            logger.error("Throttle %.1f%%: %s", throttle * 100, exc)
            return point

        gamma = props.chamber.gamma
        pe_pc = exit_pressure_ratio(gamma, baseline.expansion_ratio)
        CF = baseline.cf_efficiency * thrust_coefficient(
            gamma, baseline.expansion_ratio, pe_pc, pa / pc
        )
        thrust = baseline.throat_area * CF * pc
        c_star = props.c_star * baseline.c_star_efficiency
        mdot = mass_flow_rate(pc, baseline.throat_area, c_star)

        point.thrust = thrust
        point.chamber_pressure = pc
        point.exit_pressure = pe_pc * pc
        point.thrust_coefficient = CF
        point.mass_flow = mdot
        point.specific_impulse = thrust / (mdot * G_0)
        point.iterations = iteration

        error = target - thrust
        logger.debug(
            "Throttle %.1f%% iter %d: Pc=%.1f Pa, F=%.3f N, error=%.3e N",
            throttle * 100, iteration, pc, thrust, error,
        )
        if abs(error) <= config.thrust_tolerance:
            point.status = SolveStatus.CONVERGED
            logger.info(
                "Throttle %.1f%%: Pc=%.0f Pa after %d iterations",
                throttle * 100, pc, iteration,
            )
            return point

        if error > 0:
            lo = pc
        else:
            hi = pc

        # Bracket shrunk to nothing against one of its ends: target unreachable
        if hi - lo <= 1e-12 * max(abs(hi_end), 1.0) and (lo == lo_end or hi == hi_end):
            point.status = SolveStatus.NOT_BRACKETED
            point.message = (
                f"Target thrust {target:.2f} N is outside the range reachable with "
                f"Pc in [{lo_end:.0f}, {hi_end:.0f}] Pa"
            )
            logger.warning("Throttle %.1f%%: %s", throttle * 100, point.message)
            return point

        pc = 0.5 * (lo + hi)

    point.message = (
        f"Thrust error {point.thrust_error:.3e} N after {config.max_iterations} iterations"
    )
    logger.warning("Throttle %.1f%%: %s", throttle * 100, point.message)
    return point


@dataclass
class ThrottleSweepResult:
    """Operating points over the throttle range, full throttle first."""

    baseline: ThrottleBaseline
    points: list[ThrottlePoint] = field(default_factory=list)

    def _array(self, attr: str) -> np.ndarray:
        return np.array([getattr(p, attr) for p in self.points])

    @property
    def throttle(self) -> np.ndarray:
        return self._array("throttle")

    @property
    def thrust(self) -> np.ndarray:
        return self._array("thrust")

    @property
    def chamber_pressure(self) -> np.ndarray:
        return self._array("chamber_pressure")

    @property
    def exit_pressure(self) -> np.ndarray:
        return self._array("exit_pressure")

    @property
    def mass_flow(self) -> np.ndarray:
        return self._array("mass_flow")

    @property
    def specific_impulse(self) -> np.ndarray:
        return self._array("specific_impulse")

    @property
    def converged(self) -> bool:
        return all(p.converged for p in self.points)

    def failures(self) -> list[ThrottlePoint]:
        """Points that did not converge."""
        return [p for p in self.points if not p.converged]


def throttle_sweep(
    config: ThrottleConfig,
    propellants: Propellants,
    solver: EquilibriumSolver,
) -> ThrottleSweepResult:
    """Solve the operating point at ``n_points`` throttle settings.

    Settings are evenly spaced from full throttle down to ``min_throttle``.

    Raises:
        CombustionError: If the full-throttle design point cannot be solved.
    """
    baseline = full_throttle_baseline(config, propellants, solver)
    result = ThrottleSweepResult(baseline=baseline)
    for throttle in np.linspace(1.0, config.min_throttle, config.n_points):
        result.points.append(solve_throttle_point(baseline, float(throttle), solver, config))

    failures = result.failures()
    if failures:
        logger.warning("%d of %d throttle points did not converge", len(failures), len(result.points))
    return result
