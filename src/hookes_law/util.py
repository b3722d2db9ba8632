# MIT License (see LICENSE)
"""
Numeric helpers shared by the value cells and the spring model.

All quantities in the model are float64 scalars. These helpers coerce
user input (ints, numpy scalars, strings from config files) into plain
Python floats and guard against NaN/inf reaching the physical equations.
"""
from __future__ import annotations
import numbers

import numpy as np


def f64(x) -> float:
    """
    Convert a real scalar to a Python float with float64 precision.

    Raises:
        TypeError: If x is not a real number (e.g. None, complex, a sequence).
    """
    if isinstance(x, (bool, np.bool_)) or not isinstance(x, (numbers.Real, np.floating, np.integer)):
        raise TypeError(f"expected a real number, got {type(x).__name__}")
    return float(np.float64(x))


def is_finite(x) -> bool:
    """True if x is a finite real number (not NaN, not +/-inf)."""
    return bool(np.isfinite(x))


def is_number(x) -> bool:
    """True if x is a real, non-boolean scalar."""
    if isinstance(x, (bool, np.bool_)):
        return False
    return isinstance(x, (numbers.Real, np.floating, np.integer))


def approx_equal(a: float, b: float, tol: float) -> bool:
    """
    Compare two scalars with a combined absolute/relative tolerance.

    Uses numpy's isclose with rtol = atol = tol, so values near zero are
    compared absolutely and large values relatively.
    """
    return bool(np.isclose(a, b, rtol=tol, atol=tol))
