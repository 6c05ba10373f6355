"""
Array: a generic growable 1-D container.

Array keeps the number of valid elements (size) separate from the length
of its allocated storage (capacity). Appending past capacity reallocates
to double the capacity and copies the existing elements, so a run of
pushes costs amortized O(1) each.

The element type is a numpy dtype chosen at construction. Every Array
owns its storage: copies are deep, and the only views handed out are
read-only.

Usage:
    >>> from mathx import Array
    >>> a = Array(3, 1.0)              # [1.0, 1.0, 1.0]
    >>> b = Array.from_iterable([1, 2, 3])
    >>> b.push(4)
    >>> b.size, b.capacity
    (4, 6)
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

import numpy as np
from numpy.typing import DTypeLike, NDArray

from mathx import goodrand
from mathx.containers._common import (
    check_storable,
    convert_scalar,
    convert_values,
    deep_copy_objects,
    grown_capacity,
    read_only,
    resolve_dtype,
)
from mathx.core.exceptions import (
    DimensionMismatchError,
    IndexOutOfRangeError,
    InvalidDimensionError,
    ValidationError,
)
from mathx.core.validation import check_dtype, check_index, check_size


class Array:
    """
    Generic 1-D container with explicit size and capacity.

    Construction:
        Array(n)                          # n zeros (float64)
        Array(n, value)                   # n copies of value; dtype from value
        Array(n, randomize=True)          # n values from mathx.goodrand
        Array.from_iterable([1, 2, 3])    # initializer list
        Array.with_capacity(16)           # empty, room for 16
        Array.from_numpy(values)          # copy of a 1-D numpy array

    Raises:
        InvalidSizeError: If size is negative or not an integer
        ValidationError: If both value and randomize are given
    """

    # Mixed arithmetic with numpy scalars goes through our operators
    __array_ufunc__ = None

    def __init__(
        self,
        size: int = 0,
        value: Any = None,
        *,
        randomize: bool = False,
        dtype: DTypeLike | None = None,
    ):
        size = check_size(size, 'size')
        if randomize and value is not None:
            raise ValidationError("Array: pass either value or randomize=True, not both")

        dtype = resolve_dtype(dtype, value)
        if randomize:
            data = goodrand.random_values(size, dtype)
        elif value is not None:
            data = np.full(size, convert_scalar(value, dtype), dtype=dtype)
        else:
            data = np.zeros(size, dtype=dtype)

        self._data: NDArray[Any] = data
        self._size = size

    # === Alternate constructors ===

    @classmethod
    def from_iterable(
        cls,
        values: Iterable[Any],
        dtype: DTypeLike | None = None,
    ) -> Array:
        """
        Build an Array holding exactly ``values``; capacity == size.

        Raises:
            TypeError: If dtype is given and a value would change kind
        """
        data = np.array(list(values))
        if dtype is not None:
            data = convert_values(data, check_dtype(dtype, 'dtype'))
        return cls._adopt(data)

    @classmethod
    def from_numpy(cls, values: NDArray[Any]) -> Array:
        """Copy a 1-D numpy array into a new Array."""
        return cls._adopt(np.array(values, copy=True))

    @classmethod
    def with_capacity(cls, capacity: int, dtype: DTypeLike | None = None) -> Array:
        """Empty Array with storage reserved for ``capacity`` elements."""
        capacity = check_size(capacity, 'capacity')
        arr = cls(0, dtype=dtype)
        arr._data = np.zeros(capacity, dtype=arr.dtype)
        return arr

    @classmethod
    def _adopt(cls, data: NDArray[Any]) -> Array:
        """Wrap a freshly allocated 1-D buffer without copying it again."""
        if data.ndim != 1:
            raise InvalidDimensionError(
                f"Array: expected 1D values, got {data.ndim}D with shape {data.shape}"
            )
        check_dtype(data.dtype, 'values')
        arr = cls.__new__(cls)
        arr._data = data
        arr._size = data.shape[0]
        return arr

    # === Properties ===

    @property
    def size(self) -> int:
        """Number of valid elements."""
        return self._size

    @property
    def capacity(self) -> int:
        """Length of the allocated storage."""
        return self._data.shape[0]

    @property
    def dtype(self) -> np.dtype:
        """Element type."""
        return self._data.dtype

    # === Element access ===

    def get(self, index: int) -> Any:
        index = check_index(index, self._size, 'Array')
        return self._data[index]

    def set(self, index: int, value: Any) -> None:
        index = check_index(index, self._size, 'Array')
        self._data[index] = convert_scalar(value, self.dtype)

    def assign(self, values: NDArray[Any]) -> None:
        """
        Overwrite every valid element at once.

        Shape and element kind are checked before anything is written.

        Raises:
            DimensionMismatchError: If values does not have shape (size,)
            TypeError: If values would change kind when stored
        """
        values = np.asarray(values)
        if values.shape != (self._size,):
            raise DimensionMismatchError(
                f"Array.assign: expected shape ({self._size},), got {values.shape}",
                expected=(self._size,),
                actual=values.shape,
            )
        check_storable(values.dtype, self.dtype)
        self._data[:self._size] = values

    def __getitem__(self, index: int) -> Any:
        return self.get(index)

    def __setitem__(self, index: int, value: Any) -> None:
        self.set(index, value)

    # === Growth ===

    def push(self, value: Any) -> None:
        """Append one element, doubling capacity when storage is full."""
        value = convert_scalar(value, self.dtype)
        if self._size >= self.capacity:
            self._reallocate(grown_capacity(self.capacity))
        self._data[self._size] = value
        self._size += 1

    def extend(self, values: Iterable[Any]) -> None:
        for value in values:
            self.push(value)

    def pop(self) -> Any:
        """
        Remove and return the last element.

        Storage shrinks to twice the size once size falls to a quarter of
        capacity; popping the only element releases storage entirely.

        Raises:
            IndexOutOfRangeError: If the array is empty
        """
        if self._size == 0:
            raise IndexOutOfRangeError("Array: pop from empty array", index=-1, bound=0)
        self._size -= 1
        value = self._data[self._size]
        if self._size <= self.capacity // 4:
            self._reallocate(2 * self._size)
        return value

    def reserve(self, capacity: int) -> None:
        """Ensure storage for at least ``capacity`` elements."""
        capacity = check_size(capacity, 'capacity')
        if capacity > self.capacity:
            self._reallocate(capacity)

    def clear(self) -> None:
        """Drop all elements and release storage."""
        self._data = np.zeros(0, dtype=self.dtype)
        self._size = 0

    def _reallocate(self, capacity: int) -> None:
        data = np.zeros(capacity, dtype=self.dtype)
        data[:self._size] = self._data[:self._size]
        self._data = data

    # === Copies and conversion ===

    def copy(self) -> Array:
        """Deep copy of the valid elements; capacity == size."""
        return Array._adopt(self._data[:self._size].copy())

    def __copy__(self) -> Array:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> Array:
        if self.dtype == np.dtype(object):
            return Array._adopt(deep_copy_objects(self.as_numpy(), memo))
        return self.copy()

    def to_numpy(self) -> NDArray[Any]:
        """Copy of the valid elements as a numpy array."""
        return self._data[:self._size].copy()

    def as_numpy(self) -> NDArray[Any]:
        """
        Read-only view of the valid elements.

        The view reflects later writes through set() until the next
        reallocation; it never permits writes itself.
        """
        return read_only(self._data[:self._size])

    def to_list(self) -> list[Any]:
        return self._data[:self._size].tolist()

    def to_string(self) -> str:
        """Column-vector rendering, e.g. ``[ 1.0 2.0 ]^T``."""
        body = " ".join(str(v) for v in self.to_list())
        return f"[ {body} ]^T" if body else "[ ]^T"

    # === Protocols ===

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Any]:
        for i in range(self._size):
            yield self._data[i]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Array):
            return NotImplemented
        return self._size == other._size and bool(
            np.array_equal(self.as_numpy(), other.as_numpy())
        )

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"Array({self.to_list()!r}, dtype={self.dtype})"

    def __str__(self) -> str:
        return self.to_string()

    # === Arithmetic ===

    def _check_same_size(self, other: Array, op: str) -> None:
        if self._size != other._size:
            raise DimensionMismatchError(
                f"Array {op}: sizes differ ({self._size} vs {other._size})",
                expected=self._size,
                actual=other._size,
            )

    def __add__(self, other: Array) -> Array:
        if not isinstance(other, Array):
            return NotImplemented
        self._check_same_size(other, '+')
        return Array._adopt(self.as_numpy() + other.as_numpy())

    def __sub__(self, other: Array) -> Array:
        if not isinstance(other, Array):
            return NotImplemented
        self._check_same_size(other, '-')
        return Array._adopt(self.as_numpy() - other.as_numpy())

    def __mul__(self, scalar: Any) -> Array:
        if isinstance(scalar, Array) or np.ndim(scalar) != 0:
            return NotImplemented
        return Array._adopt(self.as_numpy() * scalar)

    __rmul__ = __mul__

    def __neg__(self) -> Array:
        return Array._adopt(-self.as_numpy())

    def __matmul__(self, other: Array) -> Any:
        """Dot product."""
        if not isinstance(other, Array):
            return NotImplemented
        self._check_same_size(other, 'dot')
        return np.dot(self.as_numpy(), other.as_numpy())
