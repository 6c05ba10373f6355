"""
Tolerance tiers and the pivot tolerance policy.

Tiers define the precision expected from each element type and are used
by the test suite and by callers comparing results:
- FP64: double precision, tight agreement with reference libraries
- FP32: single precision, relaxed

The pivot policy decides when Gaussian elimination and LU give up on a
column: a pivot is unusable when its magnitude does not exceed

    max(n, 1) * eps(dtype) * max|A|

which scales machine epsilon by both the problem size and the magnitude
of the entries, so a system and any nonzero multiple of it are judged
singular or nonsingular alike.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from mathx.utils.precision import machine_epsilon


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerances for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='fp64',
    description='double precision, matches reference solvers',
)

FP32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='fp32',
    description='single precision',
)


def select_tolerance(dtype: Any) -> ToleranceTier:
    """Tier for comparing results computed in ``dtype``; FP32 for single precision."""
    dtype = np.dtype(dtype)
    if dtype in (np.dtype(np.float32), np.dtype(np.complex64), np.dtype(np.float16)):
        return FP32
    return FP64


def pivot_tolerance(values: NDArray[Any], dtype: Any | None = None) -> float:
    """
    Near-zero threshold for elimination pivots.

    Args:
        values: Square coefficient matrix as a 2-D numpy array
        dtype: Element type whose epsilon applies (defaults to values.dtype)

    Returns:
        max(n, 1) * eps * max|A|; 0.0 for an empty or all-zero matrix,
        in which case only exactly-zero pivots are rejected
    """
    dtype = values.dtype if dtype is None else np.dtype(dtype)
    if values.size == 0:
        return 0.0
    n = max(values.shape[0], 1)
    scale = float(np.max(np.abs(values)))
    return n * machine_epsilon(dtype) * scale
