"""Utility modules for LRE Tools."""

from lre_tools.utils.constants import G_0, P_ATM, R_UNIVERSAL
from lre_tools.utils.units import convert

__all__ = ["G_0", "P_ATM", "R_UNIVERSAL", "convert"]
