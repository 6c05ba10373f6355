"""
Shared storage helpers for Array and Matrix.

Both containers keep a numpy buffer that is larger than the logically
valid region and grow it by doubling. Elements cross into the buffer
through ``convert_scalar`` so that a write never silently changes kind
(a float stored into an integer container raises instead of truncating).
"""

import copy
from typing import Any

import numpy as np
from numpy.typing import DTypeLike

from mathx.core.validation import check_dtype


def resolve_dtype(dtype: DTypeLike | None, value: Any = None) -> np.dtype:
    """
    Element type for a new container.

    An explicit dtype wins; otherwise the fill value decides; otherwise
    float64.
    """
    if dtype is not None:
        return check_dtype(dtype, 'dtype')
    if value is not None:
        return check_dtype(np.asarray(value).dtype, 'value')
    return np.dtype(np.float64)


def check_storable(source: np.dtype, target: np.dtype) -> None:
    """
    Verify values of dtype ``source`` may be written into ``target`` storage.

    Raises:
        TypeError: If the write would change kind (complex -> float, ...)
    """
    if target == np.dtype(object):
        return
    if not np.can_cast(source, target, casting='same_kind'):
        raise TypeError(f"cannot store {source} values in a {target} container")


def convert_values(data: np.ndarray, dtype: np.dtype) -> np.ndarray:
    """
    Cast a freshly built buffer to ``dtype`` under the same rule as
    ``convert_scalar``.

    Raises:
        TypeError: If any element would change kind when stored
    """
    if data.size:
        check_storable(data.dtype, dtype)
    return data.astype(dtype, copy=False)


def convert_scalar(value: Any, dtype: np.dtype) -> Any:
    """
    Convert one element to the container's element type.

    Raises:
        TypeError: If value is not a scalar, or converting it would change
                   its kind (complex -> float, float -> int, ...)
    """
    if dtype == np.dtype(object):
        return value

    arr = np.asarray(value)
    if arr.ndim != 0:
        raise TypeError(f"expected a scalar element, got shape {arr.shape}")
    check_storable(arr.dtype, dtype)
    return arr.astype(dtype)[()]


def deep_copy_objects(values: np.ndarray, memo: dict[int, Any]) -> np.ndarray:
    """Element-by-element deepcopy of an ``object`` buffer, keeping its shape."""
    result = np.empty(values.shape, dtype=object)
    for index, value in np.ndenumerate(values):
        result[index] = copy.deepcopy(value, memo)
    return result


def grown_capacity(capacity: int) -> int:
    """Next capacity in the doubling sequence 0 -> 2 -> 4 -> 8 ..."""
    return 2 if capacity == 0 else 2 * capacity


def read_only(view: np.ndarray) -> np.ndarray:
    """Mark a view non-writeable so it cannot alias container storage."""
    view = view.view()
    view.flags.writeable = False
    return view
