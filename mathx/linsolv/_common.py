"""
Shared helpers for the linsolv algorithms.

Algorithms read their operands through ``as_numpy()`` (read-only views)
and compute in private working arrays, so caller-visible containers are
never written unless they were passed as an explicit output.
"""

from typing import Any

import numpy as np

from mathx.containers import Array, Matrix
from mathx.core.tolerances import pivot_tolerance
from mathx.core.validation import check_matching, check_square
from mathx.core.exceptions import ValidationError


def working_dtype(*dtypes: np.dtype) -> np.dtype:
    """
    Element type for elimination and substitution.

    Inexact and ``object`` operands keep their arithmetic; integer
    operands are promoted to float64 so division is exact-kind.
    """
    dtype = np.result_type(*dtypes)
    if dtype == np.dtype(object) or np.issubdtype(dtype, np.inexact):
        return dtype
    return np.dtype(np.float64)


def inexact_dtype(*dtypes: np.dtype) -> np.dtype:
    """
    Element type for algorithms that take square roots (Cholesky, QR,
    norms). ``object`` and integer operands compute in float64.
    """
    dtype = np.result_type(*dtypes)
    if np.issubdtype(dtype, np.inexact):
        return dtype
    return np.dtype(np.float64)


def require_matrix(A: Any, name: str) -> Matrix:
    if not isinstance(A, Matrix):
        raise TypeError(f"{name}: expected Matrix, got {type(A).__name__}")
    return A


def require_array(x: Any, name: str) -> Array:
    if not isinstance(x, Array):
        raise TypeError(f"{name}: expected Array, got {type(x).__name__}")
    return x


def check_system(A: Matrix, b: Array, a_name: str = 'A', b_name: str = 'b') -> int:
    """
    Verify A x = b is a square system.

    Returns:
        The system order n

    Raises:
        DimensionMismatchError: If A is not square or b.size != A.rows
    """
    require_matrix(A, a_name)
    require_array(b, b_name)
    check_square(A.shape, a_name)
    check_matching(A.rows, b.size, f"{b_name}.size must equal {a_name}.rows")
    return A.rows


def resolve_tolerance(values: np.ndarray, tol: float | None) -> float:
    """Caller tolerance, or the default pivot tolerance for ``values``."""
    if tol is None:
        return pivot_tolerance(values)
    if not tol >= 0:
        raise ValidationError(f"tol: must be >= 0, got {tol}")
    return float(tol)
