"""
Direct solvers for linear systems.

``linsolv`` is the workhorse: Gaussian elimination with partial pivoting
followed by back substitution, computed on private copies. The other
entry points pick a different factorization for systems with more
structure (symmetric positive definite, tridiagonal, overdetermined).
"""

from __future__ import annotations

from typing import Literal

import numpy as np

from mathx.containers import Array, Matrix
from mathx.core.exceptions import DimensionMismatchError, SingularMatrixError
from mathx.core.validation import check_choice, check_matching, check_square
from mathx.linsolv._common import (
    check_system,
    inexact_dtype,
    require_array,
    require_matrix,
    resolve_tolerance,
    working_dtype,
)
from mathx.linsolv.factorizations import (
    PIVOT_STRATEGIES,
    PivotStrategy,
    _back_substitute,
    _forward_substitute,
    _lu_in_place,
    cholesky,
    lu,
    lu_solve,
    qr_factorization_mgs,
)
from mathx.linsolv.products import matmul, mult_transpose

SolveMethod = Literal['gauss', 'lu', 'cholesky']
NormKind = Literal['one', 'inf']

SOLVE_METHODS = ('gauss', 'lu', 'cholesky')
NORM_KINDS = ('one', 'inf')


def linsolv(A: Matrix, b: Array, *, tol: float | None = None) -> Array:
    """
    Solve A x = b by Gaussian elimination with partial pivoting.

    Neither A nor b is modified. Integer systems are solved in float64;
    floating, complex and object systems keep their own arithmetic.

    Args:
        A: Square coefficient matrix
        b: Right-hand side, b.size == A.rows
        tol: Pivot threshold. A column whose best pivot magnitude is
             <= tol makes the system singular. Defaults to
             max(n, 1) * machine_epsilon * max|A|.

    Returns:
        Solution x as a new Array

    Raises:
        DimensionMismatchError: If A is not square or b.size != A.rows
        SingularMatrixError: If A is singular to working precision

    Example:
        >>> A = Matrix.from_rows([[2.0, 0.0], [0.0, 2.0]])
        >>> linsolv(A, Array.from_iterable([4.0, 6.0])).to_list()
        [2.0, 3.0]
    """
    check_system(A, b)
    dtype = working_dtype(A.dtype, b.dtype)
    a = np.array(A.as_numpy(), dtype=dtype)
    tol = resolve_tolerance(a, tol)

    perm = _lu_in_place(a, 'partial', tol, 'A')
    c = _forward_substitute(a, b.as_numpy()[perm].astype(dtype), True, 'A')
    return Array.from_numpy(_back_substitute(a, c, 'A'))


def solve(
    A: Matrix,
    b: Array,
    method: SolveMethod = 'gauss',
    pivoting: PivotStrategy = 'partial',
) -> Array:
    """
    Solve A x = b with a chosen direct method.

    Args:
        A: Square coefficient matrix
        b: Right-hand side
        method: 'gauss' (elimination + back substitution), 'lu'
                (factor then solve) or 'cholesky' (A must be SPD, or Hermitian PD)
        pivoting: Row pivoting for 'gauss' and 'lu'

    Raises:
        ValidationError: On an unknown method or pivoting choice, or a
            non-symmetric A with method='cholesky'
        DimensionMismatchError: If A is not square or b.size != A.rows
        SingularMatrixError: If A is singular to working precision
        NotPositiveDefiniteError: If method='cholesky' and A is not SPD
    """
    check_choice(method, SOLVE_METHODS, 'method')
    check_choice(pivoting, PIVOT_STRATEGIES, 'pivoting')
    check_system(A, b)

    if method == 'lu':
        return lu_solve(lu(A, pivoting), b)

    if method == 'cholesky':
        g = cholesky(A).as_numpy()
        rhs = b.as_numpy().astype(np.result_type(g.dtype, b.dtype))
        y = _forward_substitute(g, rhs, False, 'G')
        return Array.from_numpy(_back_substitute(g.conj().T, y, 'G'))

    a = np.array(A.as_numpy(), dtype=working_dtype(A.dtype, b.dtype))
    perm = _lu_in_place(a, pivoting, resolve_tolerance(a, None), 'A')
    c = _forward_substitute(a, b.as_numpy()[perm].astype(a.dtype), True, 'A')
    return Array.from_numpy(_back_substitute(a, c, 'A'))


def solve_tridiagonal(lower: Array, main: Array, upper: Array, b: Array) -> Array:
    """
    Solve a tridiagonal system by the Thomas algorithm in O(n).

    Diagonals follow the ``matmul_tridiagonal`` convention: all have
    length n, ``lower[0]`` and ``upper[n - 1]`` are ignored.

    No pivoting is done, so the method is meant for diagonally dominant
    or SPD systems.

    Raises:
        DimensionMismatchError: If any diagonal length differs from b.size
        SingularMatrixError: If elimination produces a zero pivot
    """
    require_array(b, 'b')
    for name, diagonal in (('lower', lower), ('main', main), ('upper', upper)):
        require_array(diagonal, name)
        check_matching(b.size, diagonal.size, f"solve_tridiagonal: {name}.size")

    dtype = working_dtype(lower.dtype, main.dtype, upper.dtype, b.dtype)
    lo, d, up, rhs = (v.as_numpy().astype(dtype, copy=False) for v in (lower, main, upper, b))
    n = b.size

    c_prime = np.zeros(n, dtype=dtype)
    d_prime = np.zeros(n, dtype=dtype)
    for i in range(n):
        denom = d[i] - lo[i] * c_prime[i - 1] if i > 0 else d[i]
        if denom == 0:
            raise SingularMatrixError(
                f"solve_tridiagonal: zero pivot at row {i}",
                matrix_name='tridiagonal',
                pivot_index=i,
                pivot_value=0.0,
                tolerance=0.0,
            )
        if i + 1 < n:
            c_prime[i] = up[i] / denom
        d_prime[i] = (rhs[i] - lo[i] * d_prime[i - 1]) / denom if i > 0 else rhs[i] / denom

    x = d_prime.copy()
    for i in range(n - 2, -1, -1):
        x[i] = d_prime[i] - c_prime[i] * x[i + 1]
    return Array.from_numpy(x)


def _check_overdetermined(A: Matrix, b: Array) -> None:
    require_matrix(A, 'A')
    require_array(b, 'b')
    if A.rows < A.cols:
        raise DimensionMismatchError(
            f"A: least squares needs rows >= cols, got shape {A.shape}",
            expected=(A.cols, A.cols),
            actual=A.shape,
        )
    check_matching(A.rows, b.size, "b.size must equal A.rows")


def least_squares(A: Matrix, b: Array) -> Array:
    """
    Least-squares solution of A x ≈ b through the normal equations.

    Solves Aᵗ A x = Aᵗ b with a Cholesky factorization. Squares the
    condition number of A; prefer ``least_squares_qr`` for
    ill-conditioned problems.

    Raises:
        DimensionMismatchError: If A.rows < A.cols or b.size != A.rows
        NotPositiveDefiniteError: If A has dependent columns
    """
    _check_overdetermined(A, b)
    normal = mult_transpose(A)
    rhs = matmul(A, b, a_trans=True)
    return solve(normal, rhs, method='cholesky')


def least_squares_qr(A: Matrix, b: Array) -> Array:
    """
    Least-squares solution of A x ≈ b via modified Gram-Schmidt QR.

    Solves R x = Qᵗ b.

    Raises:
        DimensionMismatchError: If A.rows < A.cols or b.size != A.rows
        SingularMatrixError: If A has dependent columns
    """
    _check_overdetermined(A, b)
    qr = qr_factorization_mgs(A)
    q, r = qr.q.as_numpy(), qr.r.as_numpy()
    rhs = q.conj().T @ b.as_numpy().astype(inexact_dtype(q.dtype, b.dtype))
    return Array.from_numpy(_back_substitute(r, rhs, 'R'))


def inverse(A: Matrix, tol: float | None = None) -> Matrix:
    """
    Inverse of A from its pivoted LU factorization.

    Each column of the identity is pushed through the factors; the
    substitution kernels handle all n right-hand sides at once.

    Raises:
        DimensionMismatchError: If A is not square
        SingularMatrixError: If A is singular to working precision
    """
    require_matrix(A, 'A')
    check_square(A.shape, 'A')
    a = np.array(A.as_numpy(), dtype=working_dtype(A.dtype))
    perm = _lu_in_place(a, 'partial', resolve_tolerance(a, tol), 'A')

    identity = np.eye(a.shape[0], dtype=a.dtype)
    y = _forward_substitute(a, identity[perm], True, 'A')
    return Matrix.from_numpy(_back_substitute(a, y, 'A'))


def kappa(A: Matrix, norm: NormKind = 'one') -> float:
    """
    Condition number ||A|| * ||A⁻¹|| in the one or infinity norm.

    Raises:
        ValidationError: If norm is not 'one' or 'inf'
        SingularMatrixError: If A is singular to working precision
    """
    check_choice(norm, NORM_KINDS, 'norm')
    inv = inverse(A)
    if norm == 'one':
        return A.one_norm() * inv.one_norm()
    return A.infinity_norm() * inv.infinity_norm()
