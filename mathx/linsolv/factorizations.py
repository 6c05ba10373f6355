"""
Elimination, substitution and matrix factorizations.

Direct methods for A x = b all reduce to three kernels working on private
numpy copies:

    _lu_in_place        row-pivoted LU, the elimination step of Gaussian
                        elimination
    _forward_substitute solve with a lower triangular factor
    _back_substitute    solve with an upper triangular factor

The public functions validate their operands, copy them into a working
element type (see ``working_dtype``) and wrap the results in new
containers. None of them modifies its arguments.

Pivoting strategies:
    'partial'  largest |a[i, k]| in the active column (default)
    'scaled'   largest |a[i, k]| relative to the largest entry of row i
    'none'     diagonal as it stands; still fails on a near-zero pivot
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import numpy as np

from mathx.containers import Array, Matrix
from mathx.core.exceptions import (
    NotPositiveDefiniteError,
    SingularMatrixError,
    ValidationError,
)
from mathx.core.tolerances import pivot_tolerance
from mathx.core.validation import check_choice, check_matching, check_square
from mathx.linsolv._common import (
    check_system,
    inexact_dtype,
    require_array,
    require_matrix,
    resolve_tolerance,
    working_dtype,
)
from mathx.utils.precision import machine_epsilon

PivotStrategy = Literal['partial', 'scaled', 'none']

PIVOT_STRATEGIES = ('partial', 'scaled', 'none')


# ═══════════════════════════════════════════════════════════════════════
# Kernels
# ═══════════════════════════════════════════════════════════════════════


def _choose_pivot(a: np.ndarray, k: int, pivoting: str) -> int:
    if pivoting == 'none':
        return k
    column = np.abs(a[k:, k])
    if pivoting == 'partial':
        return k + int(np.argmax(column))
    scale = np.abs(a[k:, k:]).max(axis=1)
    nonzero = scale != 0
    ratios = np.zeros(column.shape[0], dtype=np.float64)
    ratios[nonzero] = (column[nonzero] / scale[nonzero]).astype(np.float64)
    return k + int(np.argmax(ratios))


def _lu_in_place(
    a: np.ndarray,
    pivoting: str,
    tol: float,
    name: str,
) -> np.ndarray:
    """
    Overwrite square ``a`` with its compact LU factors.

    On return the strict lower triangle holds the multipliers (L has a
    unit diagonal) and the upper triangle holds U. Rows are swapped as
    pivoting requires.

    Returns:
        perm: row permutation, P A = L U with P = I[perm]

    Raises:
        SingularMatrixError: If no pivot candidate exceeds tol
    """
    n = a.shape[0]
    perm = np.arange(n)
    for k in range(n):
        p = _choose_pivot(a, k, pivoting)
        magnitude = abs(a[p, k])
        if not magnitude > tol:
            raise SingularMatrixError(
                f"{name}: no usable pivot in column {k} "
                f"(|pivot| = {float(magnitude):.3g} <= tol = {tol:.3g})",
                matrix_name=name,
                pivot_index=k,
                pivot_value=float(magnitude),
                tolerance=tol,
            )
        if p != k:
            a[[k, p]] = a[[p, k]]
            perm[[k, p]] = perm[[p, k]]
        if k + 1 < n:
            factors = a[k + 1:, k] / a[k, k]
            a[k + 1:, k + 1:] -= np.multiply.outer(factors, a[k, k + 1:])
            a[k + 1:, k] = factors
    return perm


def _forward_substitute(
    l: np.ndarray,
    c: np.ndarray,
    unit_diagonal: bool,
    name: str,
) -> np.ndarray:
    """Solve L x = c for lower triangular L; c may hold several columns."""
    n = l.shape[0]
    x = np.array(c, dtype=np.result_type(l.dtype, c.dtype))
    for i in range(n):
        if i > 0:
            x[i] = x[i] - l[i, :i] @ x[:i]
        if not unit_diagonal:
            _check_diagonal(l, i, name)
            x[i] = x[i] / l[i, i]
    return x


def _back_substitute(u: np.ndarray, c: np.ndarray, name: str) -> np.ndarray:
    """Solve U x = c for upper triangular U; c may hold several columns."""
    n = u.shape[0]
    x = np.array(c, dtype=np.result_type(u.dtype, c.dtype))
    for i in range(n - 1, -1, -1):
        if i + 1 < n:
            x[i] = x[i] - u[i, i + 1:] @ x[i + 1:]
        _check_diagonal(u, i, name)
        x[i] = x[i] / u[i, i]
    return x


def _check_diagonal(t: np.ndarray, i: int, name: str) -> None:
    if t[i, i] == 0:
        raise SingularMatrixError(
            f"{name}: zero diagonal entry at ({i}, {i})",
            matrix_name=name,
            pivot_index=i,
            pivot_value=0.0,
            tolerance=0.0,
        )


def _working_copy(A: Matrix, *dtypes: np.dtype) -> np.ndarray:
    return np.array(A.as_numpy(), dtype=working_dtype(A.dtype, *dtypes))


# ═══════════════════════════════════════════════════════════════════════
# Substitution
# ═══════════════════════════════════════════════════════════════════════


def back_substitution(U: Matrix, b: Array) -> Array:
    """
    Solve U x = b for upper triangular U.

    Only the upper triangle of U is read.

    Raises:
        DimensionMismatchError: If U is not square or b.size != U.rows
        SingularMatrixError: If a diagonal entry of U is zero
    """
    check_system(U, b, 'U', 'b')
    dtype = working_dtype(U.dtype, b.dtype)
    x = _back_substitute(U.as_numpy().astype(dtype, copy=False),
                         b.as_numpy().astype(dtype, copy=False), 'U')
    return Array.from_numpy(x)


def forward_substitution(L: Matrix, b: Array, unit_diagonal: bool = False) -> Array:
    """
    Solve L x = b for lower triangular L.

    Args:
        L: Lower triangular matrix (only the lower triangle is read)
        b: Right-hand side
        unit_diagonal: Treat the diagonal of L as ones, as in the compact
            LU factor returned by ``lu``

    Raises:
        DimensionMismatchError: If L is not square or b.size != L.rows
        SingularMatrixError: If a diagonal entry is zero (unit_diagonal=False)
    """
    check_system(L, b, 'L', 'b')
    dtype = working_dtype(L.dtype, b.dtype)
    x = _forward_substitute(L.as_numpy().astype(dtype, copy=False),
                            b.as_numpy().astype(dtype, copy=False),
                            unit_diagonal, 'L')
    return Array.from_numpy(x)


# ═══════════════════════════════════════════════════════════════════════
# Gaussian elimination and LU
# ═══════════════════════════════════════════════════════════════════════


def gaussian_elimination(
    A: Matrix,
    b: Array,
    pivoting: PivotStrategy = 'partial',
    tol: float | None = None,
) -> tuple[Matrix, Array]:
    """
    Reduce A x = b to an equivalent upper triangular system U x = c.

    Args:
        A: Square coefficient matrix
        b: Right-hand side
        pivoting: 'partial', 'scaled' or 'none'
        tol: Pivot threshold; defaults to the pivot tolerance policy in
             ``mathx.core.tolerances``

    Returns:
        (U, c), ready for ``back_substitution``

    Raises:
        DimensionMismatchError: If A is not square or b.size != A.rows
        SingularMatrixError: If no usable pivot exists in some column
    """
    check_system(A, b)
    check_choice(pivoting, PIVOT_STRATEGIES, 'pivoting')
    a = _working_copy(A, b.dtype)
    tol = resolve_tolerance(a, tol)

    perm = _lu_in_place(a, pivoting, tol, 'A')
    c = _forward_substitute(a, b.as_numpy()[perm].astype(a.dtype), True, 'A')
    return Matrix.from_numpy(np.triu(a)), Array.from_numpy(c)


@dataclass(frozen=True)
class LUResult:
    """
    Result of LU factorization with row pivoting.

    Attributes:
        lu: Compact factors. The strict lower triangle holds L (whose
            diagonal is implicitly one); the upper triangle holds U.
        perm: Row permutation; P A = L U where row i of P A is row
              perm[i] of A.
    """
    lu: Matrix
    perm: Array

    @property
    def lower(self) -> Matrix:
        """Unit lower triangular factor L."""
        values = self.lu.as_numpy()
        return Matrix.from_numpy(np.tril(values, -1) + np.eye(values.shape[0], dtype=values.dtype))

    @property
    def upper(self) -> Matrix:
        """Upper triangular factor U."""
        return Matrix.from_numpy(np.triu(self.lu.as_numpy()))


def lu(
    A: Matrix,
    pivoting: PivotStrategy = 'partial',
    tol: float | None = None,
) -> LUResult:
    """
    LU factorization P A = L U.

    Factor once, then call ``lu_solve`` for each right-hand side.

    Raises:
        DimensionMismatchError: If A is not square
        SingularMatrixError: If no usable pivot exists in some column
    """
    require_matrix(A, 'A')
    check_square(A.shape, 'A')
    check_choice(pivoting, PIVOT_STRATEGIES, 'pivoting')
    a = _working_copy(A)
    tol = resolve_tolerance(a, tol)

    perm = _lu_in_place(a, pivoting, tol, 'A')
    return LUResult(lu=Matrix.from_numpy(a), perm=Array.from_numpy(perm))


def lu_solve(factorization: LUResult, b: Array) -> Array:
    """
    Solve A x = b given ``lu(A)``.

    Raises:
        DimensionMismatchError: If b.size differs from the factored order
    """
    require_array(b, 'b')
    factors = factorization.lu.as_numpy()
    check_matching(factors.shape[0], b.size, "b.size must equal the order of A")
    perm = factorization.perm.as_numpy()

    dtype = working_dtype(factors.dtype, b.dtype)
    factors = factors.astype(dtype, copy=False)
    y = _forward_substitute(factors, b.as_numpy()[perm].astype(dtype), True, 'LU')
    return Array.from_numpy(_back_substitute(factors, y, 'LU'))


# ═══════════════════════════════════════════════════════════════════════
# Cholesky
# ═══════════════════════════════════════════════════════════════════════


def cholesky(A: Matrix) -> Matrix:
    """
    Cholesky factorization A = G Gᵗ (A = G Gᴴ for complex A).

    Args:
        A: Symmetric positive definite matrix, or Hermitian positive
           definite when complex

    Returns:
        Lower triangular G with real positive diagonal

    Raises:
        DimensionMismatchError: If A is not square
        ValidationError: If A is not symmetric (Hermitian when complex)
        NotPositiveDefiniteError: If a non-positive pivot appears
    """
    require_matrix(A, 'A')
    check_square(A.shape, 'A')
    a = np.array(A.as_numpy(), dtype=inexact_dtype(A.dtype))
    n = a.shape[0]

    # a.conj() is a itself for real a
    if not np.all(np.abs(a - a.conj().T) <= pivot_tolerance(a)):
        kind = 'Hermitian' if np.iscomplexobj(a) else 'symmetric'
        raise ValidationError(f"A: matrix is not {kind}")

    g = np.zeros_like(a)
    for j in range(n):
        d = np.real(a[j, j] - np.vdot(g[j, :j], g[j, :j]))
        if not d > 0:
            raise NotPositiveDefiniteError(
                f"A: not positive definite (pivot {float(d):.3g} at index {j})",
                matrix_name='A',
                index=j,
            )
        g[j, j] = np.sqrt(d)
        if j + 1 < n:
            g[j + 1:, j] = (a[j + 1:, j] - g[j + 1:, :j] @ g[j, :j].conj()) / g[j, j]
    return Matrix.from_numpy(g)


def is_spd(A: Matrix) -> bool:
    """True when ``cholesky(A)`` succeeds."""
    try:
        cholesky(A)
    except (ValidationError, NotPositiveDefiniteError):
        return False
    return True


# ═══════════════════════════════════════════════════════════════════════
# QR (modified Gram-Schmidt)
# ═══════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class QRResult:
    """
    Result of QR decomposition.

    Attributes:
        q: Matrix with orthonormal columns (m x n)
        r: Upper triangular matrix (n x n)
    """
    q: Matrix
    r: Matrix


def qr_factorization_mgs(A: Matrix) -> QRResult:
    """
    Reduced QR decomposition A = Q R by modified Gram-Schmidt.

    Each column is normalized and immediately removed from every later
    column, which keeps Q far closer to orthogonal than classical
    Gram-Schmidt in floating point.

    Args:
        A: m x n matrix with m >= n and independent columns

    Raises:
        DimensionMismatchError: If A has more columns than rows
        SingularMatrixError: If the columns are linearly dependent
    """
    require_matrix(A, 'A')
    m, n = A.shape
    if n > m:
        check_matching((m, m), (m, n), "A: QR needs rows >= cols")

    q = np.array(A.as_numpy(), dtype=inexact_dtype(A.dtype))
    r = np.zeros((n, n), dtype=q.dtype)
    scale = float(np.max(np.linalg.norm(q, axis=0))) if n > 0 and m > 0 else 0.0
    tol = max(m, n, 1) * machine_epsilon(q.dtype) * scale

    for j in range(n):
        r[j, j] = np.linalg.norm(q[:, j])
        if not abs(r[j, j]) > tol:
            raise SingularMatrixError(
                f"A: column {j} is linearly dependent on earlier columns",
                matrix_name='A',
                pivot_index=j,
                pivot_value=float(abs(r[j, j])),
                tolerance=tol,
            )
        q[:, j] = q[:, j] / r[j, j]
        if j + 1 < n:
            r[j, j + 1:] = q[:, j].conj() @ q[:, j + 1:]
            q[:, j + 1:] -= np.multiply.outer(q[:, j], r[j, j + 1:])
    return QRResult(q=Matrix.from_numpy(q), r=Matrix.from_numpy(r))
