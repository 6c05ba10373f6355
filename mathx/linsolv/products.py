"""
Matrix and vector products.

All products accumulate in the operands' own element arithmetic. Transposed
operands are read through transposed views, never materialized.

Every product validates shapes before computing, and computes into a
fresh buffer before touching an ``out`` container, so a failed call leaves
every argument unmodified.
"""

from __future__ import annotations

from typing import overload

import numpy as np

from mathx.containers import Array, Matrix
from mathx.core.exceptions import ValidationError
from mathx.core.validation import check_matching
from mathx.linsolv._common import require_array, require_matrix


@overload
def matmul(A: Matrix, x: Array, a_trans: bool = ..., *,
           b_trans: bool = ..., out: Array | None = ...) -> Array: ...


@overload
def matmul(A: Matrix, x: Matrix, a_trans: bool = ..., *,
           b_trans: bool = ..., out: Matrix | None = ...) -> Matrix: ...


def matmul(
    A: Matrix,
    x: Array | Matrix,
    a_trans: bool = False,
    *,
    b_trans: bool = False,
    out: Array | Matrix | None = None,
) -> Array | Matrix:
    """
    Matrix-vector or matrix-matrix product.

    With an Array operand computes ``A x`` (or ``Aᵗ x`` when ``a_trans``).
    With a Matrix operand computes ``A B``, where either factor may be
    read transposed via ``a_trans`` / ``b_trans``.

    Args:
        A: Left operand
        x: Right operand, Array or Matrix
        a_trans: Use Aᵗ in place of A
        b_trans: Use Bᵗ in place of B (Matrix operand only)
        out: Optional container to receive the product. Its shape is
             checked before any computation; on success it is fully
             overwritten. Values are identical to the returning form.

    Returns:
        The product (``out`` itself when given)

    Raises:
        DimensionMismatchError: If inner dimensions differ, or out has the
            wrong shape
        TypeError: If operands are not Matrix/Array, or out cannot hold
            the product's element type
    """
    require_matrix(A, 'A')
    a_view = A.as_numpy().T if a_trans else A.as_numpy()

    if isinstance(x, Array):
        if b_trans:
            raise ValidationError("b_trans applies to Matrix operands only")
        inner = A.rows if a_trans else A.cols
        check_matching(
            inner, x.size,
            f"matmul: x.size must equal A.{'rows' if a_trans else 'cols'}",
        )
        if out is not None:
            require_array(out, 'out')
            check_matching(a_view.shape[0], out.size, "matmul: out.size")
        values = _dot(a_view, x.as_numpy())
        if out is None:
            return Array.from_numpy(values)
        out.assign(values)
        return out

    require_matrix(x, 'B')
    b_view = x.as_numpy().T if b_trans else x.as_numpy()
    check_matching(
        a_view.shape[1], b_view.shape[0],
        "matmul: inner dimensions of A and B",
    )
    shape = (a_view.shape[0], b_view.shape[1])
    if out is not None:
        require_matrix(out, 'out')
        check_matching(shape, out.shape, "matmul: out.shape")
    values = _dot(a_view, b_view)
    if out is None:
        return Matrix.from_numpy(values)
    out.assign(values)
    return out


def _dot(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """a @ b, with an explicit zero result when the inner extent is 0."""
    if a.shape[1] == 0:
        shape = (a.shape[0],) + b.shape[1:]
        return np.zeros(shape, dtype=np.result_type(a.dtype, b.dtype))
    return a @ b


def transpose(A: Matrix) -> Matrix:
    """New matrix holding Aᵗ."""
    require_matrix(A, 'A')
    return Matrix.from_numpy(A.as_numpy().T)


def mult_transpose(A: Matrix, B: Matrix | None = None) -> Matrix:
    """
    Transposed product ``Aᵗ A`` (or ``Aᵗ B``).

    ``Aᵗ A`` is the normal-equations matrix used by ``least_squares``; for
    a random A it is symmetric positive semidefinite. The result is
    symmetrized so it is exactly symmetric in floating point.

    Raises:
        DimensionMismatchError: If B is given and B.rows != A.rows
    """
    require_matrix(A, 'A')
    if B is None:
        a = A.as_numpy()
        product = _dot(a.T, a)
        if np.issubdtype(product.dtype, np.inexact):
            product = (product + product.T) / 2
        return Matrix.from_numpy(product)

    require_matrix(B, 'B')
    check_matching(A.rows, B.rows, "mult_transpose: B.rows must equal A.rows")
    return Matrix.from_numpy(_dot(A.as_numpy().T, B.as_numpy()))


def matmul_tridiagonal(
    lower: Array,
    main: Array,
    upper: Array,
    x: Array,
) -> Array:
    """
    Product of a tridiagonal matrix with a vector.

    The matrix is given by three length-n diagonals: ``lower[i]`` multiplies
    ``x[i - 1]`` and ``upper[i]`` multiplies ``x[i + 1]``, so ``lower[0]``
    and ``upper[n - 1]`` are ignored.

    Raises:
        DimensionMismatchError: If any diagonal length differs from x.size
    """
    require_array(x, 'x')
    for name, diagonal in (('lower', lower), ('main', main), ('upper', upper)):
        require_array(diagonal, name)
        check_matching(x.size, diagonal.size, f"matmul_tridiagonal: {name}.size")
    lo, d, up, v = (a.as_numpy() for a in (lower, main, upper, x))

    result = (d * v).astype(np.result_type(lo, d, up, v))
    if v.size > 1:
        result[1:] += lo[1:] * v[:-1]
        result[:-1] += up[:-1] * v[1:]
    return Array.from_numpy(result)
