"""Core calculation modules for LRE Tools.

This package contains the engineering calculations:
- combustion: Combustion-gas states and the ideal-gas equilibrium backend
- cea: NASA CEA equilibrium backend (RocketCEA)
- fluids: CoolProp-based coolant property interface
- thermo: Isentropic flow and nozzle performance relations
- thermal: Gas-side heat transfer (Bartz, recovery temperature, conduction)
- cooling: Regenerative cooling channel heat balance
- throttle: Throttle performance sweep
- solution: Convergence status shared by the iterative solvers
- config: Analysis configuration and result persistence (JSON)
"""
