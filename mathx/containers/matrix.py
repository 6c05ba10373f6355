"""
Matrix: a generic dense 2-D container.

Storage is one row-major numpy buffer whose first axis may be longer than
the number of valid rows. ``append_row`` grows that row capacity by
doubling, the same discipline Array uses for its elements.

Cells are addressed as ``m[r, c]``. Negative indices are out of range.

Usage:
    >>> from mathx import Matrix
    >>> A = Matrix.from_rows([[2, 0], [0, 2]])
    >>> A[1, 1]  # 2
    >>> B = Matrix(3, 3, randomize=True)
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
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
from mathx.containers.array import Array
from mathx.core.exceptions import (
    DimensionMismatchError,
    InvalidDimensionError,
    RaggedRowsError,
    ValidationError,
)
from mathx.core.validation import (
    check_dimensions,
    check_dtype,
    check_index,
    check_size,
)


class Matrix:
    """
    Generic dense matrix with row-major storage.

    Construction:
        Matrix()                           # 0 x 0
        Matrix(r, c)                       # zeros (float64)
        Matrix(r, c, value)                # every cell == value
        Matrix(r, c, randomize=True)       # cells from mathx.goodrand
        Matrix.from_rows([[1, 2], [3, 4]]) # nested literal
        Matrix.identity(n)
        Matrix.from_numpy(values)          # copy of a 2-D numpy array

    Raises:
        InvalidDimensionError: If rows or cols is negative or not an integer
        RaggedRowsError: If nested rows have different lengths
    """

    __array_ufunc__ = None

    def __init__(
        self,
        rows: int = 0,
        cols: int = 0,
        value: Any = None,
        *,
        randomize: bool = False,
        dtype: DTypeLike | None = None,
    ):
        rows, cols = check_dimensions(rows, cols)
        if randomize and value is not None:
            raise ValidationError("Matrix: pass either value or randomize=True, not both")

        dtype = resolve_dtype(dtype, value)
        if randomize:
            data = goodrand.random_values(rows * cols, dtype).reshape(rows, cols)
        elif value is not None:
            data = np.full((rows, cols), convert_scalar(value, dtype), dtype=dtype)
        else:
            data = np.zeros((rows, cols), dtype=dtype)

        self._data: NDArray[Any] = data
        self._rows = rows

    # === Alternate constructors ===

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Sequence[Any]],
        dtype: DTypeLike | None = None,
    ) -> Matrix:
        """
        Build a Matrix from a nested literal.

        The row count is the outer length and the column count the length
        of the first row. An empty outer sequence gives a 0 x 0 matrix.

        Raises:
            RaggedRowsError: If any row length differs from the first
            TypeError: If dtype is given and a value would change kind
                (1.5 into an integer matrix, for instance)
        """
        rows = [list(row) for row in rows]
        if dtype is not None:
            dtype = check_dtype(dtype, 'dtype')
        if not rows:
            return cls(0, 0, dtype=dtype)

        expected = len(rows[0])
        for i, row in enumerate(rows):
            if len(row) != expected:
                raise RaggedRowsError(
                    f"Matrix.from_rows: row {i} has {len(row)} elements, "
                    f"expected {expected}",
                    row=i,
                    expected=expected,
                    actual=len(row),
                )

        data = np.array(rows)
        if expected == 0:
            data = data.reshape(len(rows), 0)
        if dtype is not None:
            data = convert_values(data, dtype)
        return cls._adopt(data)

    @classmethod
    def from_numpy(cls, values: NDArray[Any]) -> Matrix:
        """Copy a 2-D numpy array into a new Matrix."""
        return cls._adopt(np.array(values, copy=True))

    @classmethod
    def identity(cls, n: int, dtype: DTypeLike | None = None) -> Matrix:
        n = check_size(n, 'n')
        dtype = resolve_dtype(dtype)
        return cls._adopt(np.eye(n, dtype=dtype))

    @classmethod
    def _adopt(cls, data: NDArray[Any]) -> Matrix:
        """Wrap a freshly allocated 2-D buffer without copying it again."""
        if data.ndim != 2:
            raise InvalidDimensionError(
                f"Matrix: expected 2D values, got {data.ndim}D with shape {data.shape}"
            )
        check_dtype(data.dtype, 'values')
        m = cls.__new__(cls)
        m._data = data
        m._rows = data.shape[0]
        return m

    # === Properties ===

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return (self._rows, self.cols)

    @property
    def row_capacity(self) -> int:
        """Number of rows the current storage can hold."""
        return self._data.shape[0]

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def is_square(self) -> bool:
        return self._rows == self.cols

    # === Element access ===

    def _check_cell(self, row: int, col: int) -> tuple[int, int]:
        row = check_index(row, self._rows, 'Matrix row')
        col = check_index(col, self.cols, 'Matrix col')
        return row, col

    def get(self, row: int, col: int) -> Any:
        row, col = self._check_cell(row, col)
        return self._data[row, col]

    def set(self, row: int, col: int, value: Any) -> None:
        row, col = self._check_cell(row, col)
        self._data[row, col] = convert_scalar(value, self.dtype)

    def assign(self, values: NDArray[Any]) -> None:
        """
        Overwrite every valid cell at once.

        Shape and element kind are checked before anything is written.

        Raises:
            DimensionMismatchError: If values does not have shape (rows, cols)
            TypeError: If values would change kind when stored
        """
        values = np.asarray(values)
        if values.shape != self.shape:
            raise DimensionMismatchError(
                f"Matrix.assign: expected shape {self.shape}, got {values.shape}",
                expected=self.shape,
                actual=values.shape,
            )
        check_storable(values.dtype, self.dtype)
        self._data[:self._rows] = values

    def __getitem__(self, key: tuple[int, int]) -> Any:
        row, col = _unpack_key(key)
        return self.get(row, col)

    def __setitem__(self, key: tuple[int, int], value: Any) -> None:
        row, col = _unpack_key(key)
        self.set(row, col, value)

    def row(self, index: int) -> Array:
        """Copy of one row."""
        index = check_index(index, self._rows, 'Matrix row')
        return Array.from_numpy(self._data[index])

    def column(self, index: int) -> Array:
        """Copy of one column."""
        index = check_index(index, self.cols, 'Matrix col')
        return Array.from_numpy(self._data[:self._rows, index])

    # === Row operations ===

    def append_row(self, values: Iterable[Any]) -> None:
        """
        Append a row, doubling the row capacity when storage is full.

        A 0 x 0 matrix takes its column count from the first appended row.

        Raises:
            RaggedRowsError: If the row length differs from cols
        """
        row = [convert_scalar(v, self.dtype) for v in values]
        if self._rows == 0 and self.cols == 0 and row:
            self._data = np.zeros((0, len(row)), dtype=self.dtype)
        if len(row) != self.cols:
            raise RaggedRowsError(
                f"Matrix.append_row: row has {len(row)} elements, expected {self.cols}",
                row=self._rows,
                expected=self.cols,
                actual=len(row),
            )

        if self._rows >= self.row_capacity:
            data = np.zeros((grown_capacity(self.row_capacity), self.cols), dtype=self.dtype)
            data[:self._rows] = self._data[:self._rows]
            self._data = data
        self._data[self._rows] = np.array(row, dtype=self.dtype)
        self._rows += 1

    def swap_rows(self, r1: int, r2: int) -> None:
        r1 = check_index(r1, self._rows, 'Matrix row')
        r2 = check_index(r2, self._rows, 'Matrix row')
        if r1 != r2:
            self._data[[r1, r2]] = self._data[[r2, r1]]

    def find_pivot(self, k: int) -> int:
        """Row index i >= k maximizing |a[i, k]| (partial pivoting)."""
        k = check_index(k, min(self._rows, self.cols), 'pivot column')
        candidates = np.abs(self._data[k:self._rows, k])
        return k + int(np.argmax(candidates))

    def find_scaled_pivot(self, k: int) -> int:
        """
        Row index i >= k maximizing |a[i, k]| / max_{j >= k} |a[i, j]|.

        Rows whose remaining entries are all zero score zero.
        """
        k = check_index(k, min(self._rows, self.cols), 'pivot column')
        block = np.abs(self._data[k:self._rows, k:])
        scale = block.max(axis=1)
        ratios = np.zeros(block.shape[0], dtype=np.float64)
        nonzero = scale != 0
        ratios[nonzero] = (block[nonzero, 0] / scale[nonzero]).astype(np.float64)
        return k + int(np.argmax(ratios))

    # === Queries ===

    def is_symmetric(self, tol: float = 0.0) -> bool:
        if not self.is_square:
            return False
        values = self.as_numpy()
        return bool(np.all(np.abs(values - values.T) <= tol))

    def one_norm(self) -> float:
        """Maximum absolute column sum."""
        if self._rows == 0 or self.cols == 0:
            return 0.0
        return float(np.max(np.sum(np.abs(self.as_numpy()), axis=0)))

    def infinity_norm(self) -> float:
        """Maximum absolute row sum."""
        if self._rows == 0 or self.cols == 0:
            return 0.0
        return float(np.max(np.sum(np.abs(self.as_numpy()), axis=1)))

    # === Copies and conversion ===

    def copy(self) -> Matrix:
        """Deep copy; row capacity == rows."""
        return Matrix._adopt(self._data[:self._rows].copy())

    def __copy__(self) -> Matrix:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> Matrix:
        if self.dtype == np.dtype(object):
            return Matrix._adopt(deep_copy_objects(self.as_numpy(), memo))
        return self.copy()

    def to_numpy(self) -> NDArray[Any]:
        return self._data[:self._rows].copy()

    def as_numpy(self) -> NDArray[Any]:
        """Read-only view of the valid rows."""
        return read_only(self._data[:self._rows])

    def to_list(self) -> list[list[Any]]:
        return self._data[:self._rows].tolist()

    def to_string(self) -> str:
        return "\n".join(
            "[ " + " ".join(str(v) for v in row) + " ]" for row in self.to_list()
        )

    # === Protocols ===

    def __iter__(self) -> Iterator[Array]:
        """Iterate over row copies."""
        for i in range(self._rows):
            yield Array.from_numpy(self._data[i])

    def __len__(self) -> int:
        return self._rows

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(
            np.array_equal(self.as_numpy(), other.as_numpy())
        )

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"Matrix({self.to_list()!r}, dtype={self.dtype})"

    def __str__(self) -> str:
        return self.to_string()

    def __matmul__(self, other: Matrix | Array) -> Matrix | Array:
        from mathx.linsolv.products import matmul

        if not isinstance(other, (Matrix, Array)):
            return NotImplemented
        return matmul(self, other)


def _unpack_key(key: Any) -> tuple[Any, Any]:
    if not isinstance(key, tuple) or len(key) != 2:
        raise TypeError(f"Matrix indices must be (row, col) pairs, got {key!r}")
    return key
