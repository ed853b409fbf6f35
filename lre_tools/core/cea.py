"""NASA CEA equilibrium-chemistry backend via RocketCEA.

Wraps :class:`rocketcea.cea_obj_w_units.CEA_Obj` so that every call returns
a :class:`~lre_tools.core.combustion.CombustionProperties` in SI units.
Propellants given with a storage temperature are registered as custom CEA
reactant cards; otherwise the name is passed to RocketCEA unchanged.
"""

from __future__ import annotations

import logging
import re

from rocketcea.cea_obj import add_new_fuel, add_new_oxidizer
from rocketcea.cea_obj_w_units import CEA_Obj

from lre_tools.core.combustion import CombustionError, CombustionProperties, GasState
from lre_tools.utils.constants import BAR_TO_PA, MCAL_CM_K_S_TO_W_M_K, MILLIPOISE_TO_PA_S

logger = logging.getLogger(__name__)


def _card_name(prefix: str, species: str, temperature: float) -> str:
    slug = re.sub(r"[^A-Za-z0-9]+", "_", species).strip("_")
    return f"{prefix}_{slug}_{temperature:.2f}K".replace(".", "p")


def register_propellant(species: str, temperature: float, oxidizer: bool) -> str:
    """Register a CEA thermo-library species at a storage temperature.

    Args:
        species: CEA species name, e.g. ``"C3H8O,2propanol"`` or ``"O2(L)"``.
        temperature: Propellant temperature [K].
        oxidizer: True to register as oxidizer, False as fuel.

    Returns:
        The RocketCEA propellant name to use for this card.
    """
    kind = "oxid" if oxidizer else "fuel"
    name = _card_name(kind, species, temperature)
    card = f"{kind} {species}  t(k)={temperature:.2f}  wt%=100.0"
    if oxidizer:
        add_new_oxidizer(name, card)
    else:
        add_new_fuel(name, card)
    logger.debug("Registered CEA card %s: %s", name, card)
    return name


class RocketCEASolver:
    """Equilibrium combustion properties from NASA CEA.

    Args:
        oxidizer: Oxidizer name or CEA species.
        fuel: Fuel name or CEA species.
        oxidizer_temperature: Oxidizer temperature [K]; None uses the
            RocketCEA propellant definition as-is.
        fuel_temperature: Fuel temperature [K]; None uses the RocketCEA
            propellant definition as-is.
    """

    def __init__(
        self,
        oxidizer: str,
        fuel: str,
        oxidizer_temperature: float | None = None,
        fuel_temperature: float | None = None,
    ):
        self.oxidizer = oxidizer
        self.fuel = fuel
        ox_name = oxidizer
        fuel_name = fuel
        try:
            if oxidizer_temperature is not None:
                ox_name = register_propellant(oxidizer, oxidizer_temperature, oxidizer=True)
            if fuel_temperature is not None:
                fuel_name = register_propellant(fuel, fuel_temperature, oxidizer=False)
            self._cea = CEA_Obj(
                oxName=ox_name,
                fuelName=fuel_name,
                pressure_units="Bar",
                cstar_units="m/s",
                temperature_units="K",
                sonic_velocity_units="m/s",
                density_units="kg/m^3",
                specific_heat_units="J/kg-K",
                isp_units="sec",
            )
        except Exception as exc:
            raise CombustionError(f"Cannot set up CEA for {oxidizer}/{fuel}: {exc}") from exc

    def solve(
        self,
        chamber_pressure: float,
        ambient_pressure: float,
        mixture_ratio: float,
    ) -> CombustionProperties:
        if chamber_pressure <= 0 or ambient_pressure <= 0:
            raise CombustionError(
                "CEA needs positive chamber and ambient pressures, got "
                f"Pc={chamber_pressure}, Pa={ambient_pressure}"
            )
        if ambient_pressure >= chamber_pressure:
            raise CombustionError("Ambient pressure must be below chamber pressure")

        cea = self._cea
        pc = chamber_pressure / BAR_TO_PA
        pa = ambient_pressure / BAR_TO_PA
        mr = mixture_ratio
        try:
            eps = cea.get_eps_at_PcOvPe(Pc=pc, MR=mr, PcOvPe=pc / pa)
            c_star = cea.get_Cstar(Pc=pc, MR=mr)
            isp, _mode = cea.estimate_Ambient_Isp(Pc=pc, MR=mr, eps=eps, Pamb=pa)

            temperatures = cea.get_Temperatures(Pc=pc, MR=mr, eps=eps)
            densities = cea.get_Densities(Pc=pc, MR=mr, eps=eps)
            sonic = cea.get_SonicVelocities(Pc=pc, MR=mr, eps=eps)
            mw_gamma = (
                cea.get_Chamber_MolWt_gamma(Pc=pc, MR=mr, eps=eps),
                cea.get_Throat_MolWt_gamma(Pc=pc, MR=mr, eps=eps),
                cea.get_exit_MolWt_gamma(Pc=pc, MR=mr, eps=eps),
            )
            transport = (
                cea.get_Chamber_Transport(Pc=pc, MR=mr, eps=eps),
                cea.get_Throat_Transport(Pc=pc, MR=mr, eps=eps),
                cea.get_Exit_Transport(Pc=pc, MR=mr, eps=eps),
            )
            mach_exit = cea.get_MachNumber(Pc=pc, MR=mr, eps=eps)
        except Exception as exc:
            raise CombustionError(
                f"CEA failed at Pc={chamber_pressure:.0f} Pa, MR={mr}: {exc}"
            ) from exc

        # Throat pressure from the chamber-to-throat density/temperature ratio
        # of an ideal gas with the CEA compositions.
        p_throat = (
            chamber_pressure
            * (densities[1] * temperatures[1] / mw_gamma[1][0])
            / (densities[0] * temperatures[0] / mw_gamma[0][0])
        )
        pressures = (chamber_pressure, p_throat, ambient_pressure)
        machs = (0.0, 1.0, mach_exit)

        states = []
        for i in range(3):
            cp, visc, cond, prandtl = transport[i]
            mw, gamma = mw_gamma[i]
            states.append(
                GasState(
                    mach=machs[i],
                    gamma=gamma,
                    pressure=pressures[i],
                    temperature=temperatures[i],
                    density=densities[i],
                    viscosity=visc * MILLIPOISE_TO_PA_S,
                    prandtl=prandtl,
                    molar_mass=mw / 1000.0,
                    conductivity=cond * MCAL_CM_K_S_TO_W_M_K,
                    sonic_velocity=sonic[i],
                    cp=cp,
                )
            )

        return CombustionProperties(
            chamber_pressure=chamber_pressure,
            ambient_pressure=ambient_pressure,
            mixture_ratio=mixture_ratio,
            c_star=c_star,
            isp=isp,
            expansion_ratio=eps,
            chamber=states[0],
            throat=states[1],
            exit=states[2],
        )

    def __repr__(self) -> str:
        return f"RocketCEASolver('{self.oxidizer}', '{self.fuel}')"
