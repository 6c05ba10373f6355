"""
Vector utilities on Array.

All functions take Arrays, leave them unchanged, and return scalars or
new Arrays.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from mathx.containers import Array
from mathx.core.exceptions import NumericalError
from mathx.core.validation import check_matching
from mathx.linsolv._common import inexact_dtype, require_array


def dot_product(v: Array, w: Array) -> Any:
    """
    Sum of v[i] * w[i] in the elements' own arithmetic.

    No conjugation is applied to complex input.

    Raises:
        DimensionMismatchError: If v.size != w.size
    """
    require_array(v, 'v')
    require_array(w, 'w')
    check_matching(v.size, w.size, "dot_product: w.size must equal v.size")
    if v.size == 0:
        return np.result_type(v.dtype, w.dtype).type(0)
    return np.dot(v.as_numpy(), w.as_numpy())


def cross_product(v: Array, w: Array) -> Array:
    """
    Cross product v x w of two 3-vectors.

    Raises:
        DimensionMismatchError: If either vector does not have length 3
    """
    require_array(v, 'v')
    require_array(w, 'w')
    check_matching(3, v.size, "cross_product: v.size")
    check_matching(3, w.size, "cross_product: w.size")
    a, b = v.as_numpy(), w.as_numpy()
    return Array.from_numpy(np.array([
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    ], dtype=np.result_type(a.dtype, b.dtype)))


def norm(v: Array) -> float:
    """Euclidean (l2) norm."""
    require_array(v, 'v')
    return float(np.sqrt(np.sum(np.abs(v.as_numpy()) ** 2)))


def one_norm(v: Array) -> float:
    """Sum of absolute values (l1 norm)."""
    require_array(v, 'v')
    return float(np.sum(np.abs(v.as_numpy())))


def infinity_norm(v: Array) -> float:
    """Largest absolute value; 0 for an empty vector."""
    require_array(v, 'v')
    if v.size == 0:
        return 0.0
    return float(np.max(np.abs(v.as_numpy())))


def normalize(v: Array) -> Array:
    """
    Unit l2-norm vector in the direction of v.

    Raises:
        NumericalError: If v is the zero vector
    """
    length = norm(v)
    if length == 0:
        raise NumericalError("normalize: cannot normalize the zero vector")
    values = v.as_numpy().astype(inexact_dtype(v.dtype))
    return Array.from_numpy(values / length)
