"""
Numerical precision constants and utilities.

Provides machine epsilon and closeness checks used by the linear solvers
and by callers that need a near-zero threshold for an element type.
"""

from functools import lru_cache

import numpy as np
from numpy.typing import DTypeLike, NDArray
from typing import Any

from mathx.core.exceptions import ValidationError


# Default tolerance for numerical comparisons (relative)
DEFAULT_RTOL: float = 1e-12

# Default tolerance for considering values as zero (absolute)
DEFAULT_ATOL: float = 1e-14


def machine_epsilon(dtype: DTypeLike = np.float64) -> float:
    """
    Get machine epsilon for a given element type.

    Epsilon is found the way it is defined: halve a candidate until adding
    it to one no longer changes one, in the element type's own arithmetic.
    For IEEE types this equals ``np.finfo(dtype).eps``. Complex types use
    their component type; ``object`` arrays hold Python floats.

    Args:
        dtype: NumPy dtype or type

    Returns:
        Machine epsilon for the dtype, as a Python float

    Raises:
        ValidationError: For integer and other non-inexact dtypes

    Example:
        >>> machine_epsilon(np.float64)
        2.220446049250313e-16
        >>> machine_epsilon(np.float32)
        1.1920928955078125e-07
    """
    return _machine_epsilon(np.dtype(dtype))


@lru_cache(maxsize=None)
def _machine_epsilon(dtype: np.dtype) -> float:
    if dtype == np.dtype(object):
        scalar = float
    elif np.issubdtype(dtype, np.complexfloating):
        scalar = np.zeros(0, dtype=dtype).real.dtype.type
    elif np.issubdtype(dtype, np.floating):
        scalar = dtype.type
    else:
        raise ValidationError(
            f"dtype: machine epsilon is undefined for non-floating dtype {dtype}"
        )

    one = scalar(1)
    two = scalar(2)
    eps = scalar(1)
    while one + eps / two != one:
        eps = eps / two
    return float(eps)


EPSILON_64: float = machine_epsilon(np.float64)  # ~2.22e-16

EPSILON_32: float = machine_epsilon(np.float32)  # ~1.19e-7


def is_close(
    a: float | NDArray[np.floating[Any]],
    b: float | NDArray[np.floating[Any]],
    rtol: float = DEFAULT_RTOL,
    atol: float = DEFAULT_ATOL
) -> bool | NDArray[np.bool_]:
    """
    Check if values are numerically close.

    Uses the formula: |a - b| <= atol + rtol * |b|

    Args:
        a: First value(s)
        b: Second value(s)
        rtol: Relative tolerance
        atol: Absolute tolerance

    Returns:
        Boolean or boolean array indicating closeness
    """
    return np.abs(a - b) <= atol + rtol * np.abs(b)
