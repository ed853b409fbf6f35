"""Interpolation helpers for LRE Tools."""

from __future__ import annotations

import numpy as np
from scipy import interpolate


def linear_interp_1d(
    x: np.ndarray,
    y: np.ndarray,
    x_new: float | np.ndarray,
    extrapolate: bool = False,
) -> float | np.ndarray:
    """One-dimensional linear interpolation.

    Args:
        x: Known x-coordinates (must be monotonically increasing).
        y: Known y-values.
        x_new: Query point(s).
        extrapolate: If True, allow extrapolation beyond data range.

    Returns:
        Interpolated value(s).
    """
    fill = "extrapolate" if extrapolate else (y[0], y[-1])
    f = interpolate.interp1d(x, y, kind="linear", fill_value=fill, bounds_error=False)
    return float(f(x_new)) if np.isscalar(x_new) else f(x_new)
