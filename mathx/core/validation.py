"""
Argument validation utilities for mathx.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about caller intent.

Design principles:
    - No silent coercion of sizes, indices or dimensions
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

from collections.abc import Collection
from typing import Any

import numpy as np
from numpy.typing import DTypeLike

from mathx.core.exceptions import (
    DimensionMismatchError,
    IndexOutOfRangeError,
    InvalidDimensionError,
    InvalidSizeError,
    ValidationError,
)


def is_integer(value: Any) -> bool:
    """True for Python and numpy integers, False for bools."""
    if isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, (int, np.integer))


def check_dtype(dtype: DTypeLike, name: str) -> np.dtype:
    """
    Validate an element type and normalize it to a numpy dtype.

    Numeric dtypes and ``object`` (for Python number types such as
    Fraction) are accepted. Strings, bytes, datetimes and other
    non-arithmetic dtypes are rejected.

    Args:
        dtype: Anything numpy accepts as a dtype
        name: Parameter name for error messages

    Returns:
        numpy.dtype

    Raises:
        ValidationError: If the dtype is not numeric
    """
    try:
        result = np.dtype(dtype)
    except TypeError as e:
        raise ValidationError(f"{name}: not a valid dtype: {e}") from e

    if result == np.dtype(object):
        return result

    if not np.issubdtype(result, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result}, expected numeric element type"
        )
    return result


def check_size(size: Any, name: str) -> int:
    """
    Verify a container size is a non-negative integer.

    Args:
        size: Size to check
        name: Parameter name for error messages

    Returns:
        The size as a Python int

    Raises:
        InvalidSizeError: If size is not an integer or is negative
    """
    if not is_integer(size):
        raise InvalidSizeError(
            f"{name}: expected a non-negative integer, got {type(size).__name__} {size!r}",
            size=size,
        )
    if size < 0:
        raise InvalidSizeError(f"{name}: must be >= 0, got {size}", size=size)
    return int(size)


def check_dimensions(rows: Any, cols: Any) -> tuple[int, int]:
    """
    Verify matrix dimensions are non-negative integers.

    Raises:
        InvalidDimensionError: If either dimension is invalid
    """
    for label, value in (("rows", rows), ("cols", cols)):
        if not is_integer(value):
            raise InvalidDimensionError(
                f"{label}: expected a non-negative integer, got "
                f"{type(value).__name__} {value!r}",
                rows=rows,
                cols=cols,
            )
        if value < 0:
            raise InvalidDimensionError(
                f"{label}: must be >= 0, got {value}", rows=rows, cols=cols
            )
    return int(rows), int(cols)


def check_index(index: Any, bound: int, name: str) -> int:
    """
    Verify an index lies in [0, bound).

    Negative indices are out of range; they are never wrapped.

    Args:
        index: Index to check
        bound: Exclusive upper bound
        name: Parameter name for error messages

    Returns:
        The index as a Python int

    Raises:
        TypeError: If index is not an integer
        IndexOutOfRangeError: If index is outside [0, bound)
    """
    if not is_integer(index):
        raise TypeError(
            f"{name}: indices must be integers, got {type(index).__name__}"
        )
    if index < 0 or index >= bound:
        raise IndexOutOfRangeError(
            f"{name}: index {index} out of range [0, {bound})",
            index=index,
            bound=bound,
        )
    return int(index)


def check_choice(value: Any, choices: Collection[Any], name: str) -> None:
    """
    Verify an option is one of the allowed values.

    Raises:
        ValidationError: If value is not in choices
    """
    if value not in choices:
        raise ValidationError(
            f"{name} must be one of {tuple(choices)}, got {value!r}"
        )


def check_positive(value: float, name: str) -> None:
    """
    Verify a tolerance or step is strictly positive.

    Raises:
        ValidationError: If value <= 0 or NaN
    """
    if not value > 0:
        raise ValidationError(f"{name}: must be > 0, got {value}")


def check_iterations(max_iter: Any, name: str) -> int:
    """
    Verify an iteration cap is a positive integer.

    Raises:
        ValidationError: If max_iter is not an integer >= 1
    """
    if not is_integer(max_iter) or max_iter < 1:
        raise ValidationError(
            f"{name}: expected an integer >= 1, got {max_iter!r}"
        )
    return int(max_iter)


def check_matching(expected: Any, actual: Any, description: str) -> None:
    """
    Verify two operand extents agree.

    Args:
        expected: Required extent (length or shape)
        actual: Supplied extent
        description: What is being compared, used in the error message

    Raises:
        DimensionMismatchError: If expected != actual
    """
    if expected != actual:
        raise DimensionMismatchError(
            f"{description}: expected {expected}, got {actual}",
            expected=expected,
            actual=actual,
        )


def check_square(shape: tuple[int, int], name: str) -> None:
    """
    Verify a matrix shape is square.

    Raises:
        DimensionMismatchError: If rows != cols
    """
    rows, cols = shape
    if rows != cols:
        raise DimensionMismatchError(
            f"{name}: expected a square matrix, got shape {shape}",
            expected=(rows, rows),
            actual=shape,
        )
