"""Physical constants and unit factors used throughout LRE Tools.

All values in SI units unless otherwise noted.
"""

import math

# Universal constants
R_UNIVERSAL = 8.31446261815324  # J/(mol·K), universal gas constant

# Gravitational
G_0 = 9.80665  # m/s², standard gravitational acceleration

# Atmospheric
P_ATM = 101325.0  # Pa, standard atmospheric pressure

# Mathematical
PI = math.pi

# Conversion factors
PSI_TO_PA = 6894.757293168
PA_TO_PSI = 1.0 / PSI_TO_PA
BAR_TO_PA = 1.0e5
INCH_TO_M = 0.0254
LBF_TO_N = 4.4482216152605
LBM_TO_KG = 0.45359237
BTU_TO_J = 1055.05585262

# RocketCEA default transport units
MILLIPOISE_TO_PA_S = 1.0e-4
MCAL_CM_K_S_TO_W_M_K = 0.4184
