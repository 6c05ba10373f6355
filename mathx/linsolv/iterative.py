"""
Iterative solvers and eigenvalue iterations.

Linear solvers:
    jacobi        x_new = D⁻¹ (b - (A - D) x)
    gauss_seidel  Jacobi sweep using each updated component immediately
    cgm           conjugate gradients, for symmetric positive definite A

Eigenvalue iterations:
    power_method          dominant eigenpair
    inverse_power_method  eigenpair nearest a shift alpha

All iterations stop when the change measure drops to ``tol`` or after
``maxiter`` iterations. Stopping at the cap is not an error by default:
the solution carries ``converged=False`` and a RuntimeWarning is emitted.
Pass ``raise_on_failure=True`` to get a ConvergenceError instead.

Computation happens in float64 (or the operands' own inexact type);
A, b and x0 are never modified.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from mathx import goodrand
from mathx.containers import Array, Matrix
from mathx.core.exceptions import ConvergenceError, NumericalError, SingularMatrixError
from mathx.core.result import Result
from mathx.core.timing import Timer
from mathx.core.validation import check_iterations, check_matching, check_positive, check_square
from mathx.linsolv._common import (
    check_system,
    inexact_dtype,
    require_array,
    require_matrix,
    resolve_tolerance,
)
from mathx.linsolv.factorizations import _back_substitute, _forward_substitute, _lu_in_place
from mathx.linsolv.solution import (
    EigenParams,
    EigenSolution,
    IterativeParams,
    IterativeSolution,
    frozen_copy,
)
from mathx.utils.error import report

DEFAULT_TOL = 1e-10
DEFAULT_MAXITER = 1000


# ═══════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════


def _prepare_system(
    A: Matrix,
    b: Array,
    x0: Array | None,
    tol: float,
    maxiter: int,
) -> tuple[NDArray[Any], NDArray[Any], NDArray[Any], int]:
    n = check_system(A, b)
    check_positive(tol, 'tol')
    maxiter = check_iterations(maxiter, 'maxiter')
    if x0 is not None:
        require_array(x0, 'x0')
        check_matching(n, x0.size, "x0.size must equal A.rows")

    dtypes = [A.dtype, b.dtype] + ([x0.dtype] if x0 is not None else [])
    dtype = inexact_dtype(*dtypes)
    a = A.as_numpy().astype(dtype, copy=False)
    rhs = b.as_numpy().astype(dtype, copy=False)
    x = np.zeros(n, dtype=dtype) if x0 is None else np.array(x0.as_numpy(), dtype=dtype)
    return a, rhs, x, maxiter


def _diagonal(a: NDArray[Any]) -> NDArray[Any]:
    diag = np.diag(a).copy()
    zeros = np.flatnonzero(diag == 0)
    if zeros.size:
        i = int(zeros[0])
        raise SingularMatrixError(
            f"A: zero diagonal entry at ({i}, {i})",
            matrix_name='A',
            pivot_index=i,
            pivot_value=0.0,
            tolerance=0.0,
        )
    return diag


def _convergence_warnings(
    method: str,
    converged: bool,
    iterations: int,
    final_change: float,
    tol: float,
    raise_on_failure: bool,
    stacklevel: int = 3,
) -> tuple[str, ...]:
    if converged:
        return ()
    message = (f"{method} did not converge after {iterations} iterations "
               f"(final change {final_change:.3g} > tol {tol:.3g})")
    if raise_on_failure:
        raise ConvergenceError(
            message,
            iterations=iterations,
            final_change=final_change,
            reason='max_iterations',
            threshold=tol,
        )
    return (report(message, RuntimeWarning, stacklevel=stacklevel),)


def _iterative_solution(
    method: str,
    x: NDArray[Any],
    converged: bool,
    iterations: int,
    final_change: float,
    timer: Timer,
    warnings: tuple[str, ...],
) -> IterativeSolution:
    return IterativeSolution(_result=Result(
        params=IterativeParams(x=frozen_copy(x)),
        info={'converged': converged, 'iterations': iterations, 'final_change': final_change},
        timing=timer.result(),
        method=method,
        warnings=warnings,
    ))


# ═══════════════════════════════════════════════════════════════════════
# Linear solvers
# ═══════════════════════════════════════════════════════════════════════


def jacobi(
    A: Matrix,
    b: Array,
    x0: Array | None = None,
    tol: float = DEFAULT_TOL,
    maxiter: int = DEFAULT_MAXITER,
    *,
    raise_on_failure: bool = False,
) -> IterativeSolution:
    """
    Solve A x = b by Jacobi iteration.

    Converges for strictly diagonally dominant A (and more generally when
    the spectral radius of D⁻¹ (A - D) is below one).

    Args:
        A: Square coefficient matrix with nonzero diagonal
        b: Right-hand side
        x0: Starting iterate (zeros if None)
        tol: Stop when ||x_new - x||₂ <= tol
        maxiter: Iteration cap
        raise_on_failure: Raise ConvergenceError instead of warning

    Returns:
        IterativeSolution

    Raises:
        DimensionMismatchError: If shapes of A, b, x0 disagree
        SingularMatrixError: If A has a zero diagonal entry
        ConvergenceError: If raise_on_failure and maxiter is reached
    """
    a, rhs, x, maxiter = _prepare_system(A, b, x0, tol, maxiter)
    diag = _diagonal(a)
    off = a - np.diag(diag)

    timer = Timer()
    timer.start()
    converged, change, iterations = False, float('inf'), 0
    with timer.section('iterations'):
        for iterations in range(1, maxiter + 1):
            x_new = (rhs - off @ x) / diag
            change = float(np.linalg.norm(x_new - x))
            x = x_new
            if change <= tol:
                converged = True
                break
    timer.stop()

    warnings = _convergence_warnings('jacobi', converged, iterations, change, tol, raise_on_failure)
    return _iterative_solution('jacobi', x, converged, iterations, change, timer, warnings)


def gauss_seidel(
    A: Matrix,
    b: Array,
    x0: Array | None = None,
    tol: float = DEFAULT_TOL,
    maxiter: int = DEFAULT_MAXITER,
    *,
    raise_on_failure: bool = False,
) -> IterativeSolution:
    """
    Solve A x = b by Gauss-Seidel iteration.

    Same contract as ``jacobi``. Converges for strictly diagonally dominant
    and for symmetric positive definite A, usually in fewer sweeps.
    """
    a, rhs, x, maxiter = _prepare_system(A, b, x0, tol, maxiter)
    diag = _diagonal(a)
    n = a.shape[0]

    timer = Timer()
    timer.start()
    converged, change, iterations = False, float('inf'), 0
    with timer.section('iterations'):
        for iterations in range(1, maxiter + 1):
            previous = x.copy()
            for i in range(n):
                s = a[i, :i] @ x[:i] + a[i, i + 1:] @ x[i + 1:]
                x[i] = (rhs[i] - s) / diag[i]
            change = float(np.linalg.norm(x - previous))
            if change <= tol:
                converged = True
                break
    timer.stop()

    warnings = _convergence_warnings('gauss_seidel', converged, iterations, change, tol, raise_on_failure)
    return _iterative_solution('gauss_seidel', x, converged, iterations, change, timer, warnings)


def cgm(
    A: Matrix,
    b: Array,
    x0: Array | None = None,
    tol: float = DEFAULT_TOL,
    maxiter: int = DEFAULT_MAXITER,
    *,
    raise_on_failure: bool = False,
) -> IterativeSolution:
    """
    Solve A x = b by the conjugate gradient method.

    A must be symmetric positive definite. In exact arithmetic CG
    terminates in at most n iterations.

    The stopping measure is the relative residual: iteration stops once
    ||b - A x||₂ <= tol * ||b||₂ (tol alone when b == 0). ``final_change``
    reports the last residual norm.

    Raises:
        DimensionMismatchError: If shapes of A, b, x0 disagree
        NumericalError: If a search direction has non-positive curvature
            (A is not positive definite)
        ConvergenceError: If raise_on_failure and maxiter is reached
    """
    a, rhs, x, maxiter = _prepare_system(A, b, x0, tol, maxiter)

    timer = Timer()
    timer.start()
    with timer.section('iterations'):
        r = rhs - a @ x
        p = r.copy()
        delta = float(np.real(np.vdot(r, r)))
        scale = float(np.real(np.vdot(rhs, rhs)))
        target = tol ** 2 * (scale if scale > 0 else 1.0)

        converged = delta <= target
        iterations = 0
        while not converged and iterations < maxiter:
            iterations += 1
            q = a @ p
            curvature = float(np.real(np.vdot(p, q)))
            if not curvature > 0:
                raise NumericalError(
                    f"cgm: non-positive curvature {curvature:.3g} at iteration "
                    f"{iterations}; A is not positive definite"
                )
            alpha = delta / curvature
            x = x + alpha * p
            r = r - alpha * q
            new_delta = float(np.real(np.vdot(r, r)))
            converged = new_delta <= target
            p = r + (new_delta / delta) * p
            delta = new_delta
    timer.stop()

    change = float(np.sqrt(delta))
    warnings = _convergence_warnings('cgm', converged, iterations, change, tol, raise_on_failure)
    return _iterative_solution('cgm', x, converged, iterations, change, timer, warnings)


# ═══════════════════════════════════════════════════════════════════════
# Eigenvalue iterations
# ═══════════════════════════════════════════════════════════════════════


def shift(A: Matrix, alpha: Any) -> Matrix:
    """New matrix A - alpha * I."""
    require_matrix(A, 'A')
    check_square(A.shape, 'A')
    values = A.as_numpy()
    return Matrix.from_numpy(values - alpha * np.eye(values.shape[0], dtype=values.dtype))


def _start_vector(A: Matrix, v0: Array | None, dtype: np.dtype) -> NDArray[Any]:
    n = A.rows
    if v0 is None:
        v = goodrand.random_values(n, np.float64).astype(dtype) + 1
    else:
        require_array(v0, 'v0')
        check_matching(n, v0.size, "v0.size must equal A.rows")
        v = np.array(v0.as_numpy(), dtype=dtype)
    length = np.linalg.norm(v)
    if length == 0:
        raise NumericalError("v0: starting vector must be nonzero")
    return v / length


def _rayleigh(a: NDArray[Any], v: NDArray[Any]) -> Any:
    value = np.vdot(v, a @ v)
    return float(value.real) if np.isrealobj(a) else complex(value)


def _eigen_iteration(
    method: str,
    A: Matrix,
    v0: Array | None,
    tol: float,
    maxiter: int,
    raise_on_failure: bool,
    apply: Any,
    timer: Timer,
) -> EigenSolution:
    a = A.as_numpy().astype(inexact_dtype(A.dtype), copy=False)
    v = _start_vector(A, v0, a.dtype)
    eigenvalue = _rayleigh(a, v)

    converged, change, iterations = False, float('inf'), 0
    with timer.section('iterations'):
        for iterations in range(1, maxiter + 1):
            w = apply(v)
            length = np.linalg.norm(w)
            if length == 0:
                raise NumericalError(
                    f"{method}: iterate vanished at iteration {iterations}; "
                    "the start vector lies in a null space"
                )
            v = w / length
            updated = _rayleigh(a, v)
            change = abs(updated - eigenvalue)
            eigenvalue = updated
            if change <= tol * max(1.0, abs(eigenvalue)):
                converged = True
                break
    timer.stop()

    warnings = _convergence_warnings(method, converged, iterations, change, tol,
                                     raise_on_failure, stacklevel=4)
    return EigenSolution(_result=Result(
        params=EigenParams(eigenvalue=eigenvalue, eigenvector=frozen_copy(v)),
        info={'converged': converged, 'iterations': iterations, 'final_change': change},
        timing=timer.result(),
        method=method,
        warnings=warnings,
    ))


def power_method(
    A: Matrix,
    v0: Array | None = None,
    tol: float = DEFAULT_TOL,
    maxiter: int = DEFAULT_MAXITER,
    *,
    raise_on_failure: bool = False,
) -> EigenSolution:
    """
    Dominant eigenpair of A by power iteration.

    The eigenvalue estimate is the Rayleigh quotient vᴴ A v of the
    normalized iterate, so a negative dominant eigenvalue is found as
    readily as a positive one. Iteration stops when successive estimates
    differ by at most tol * max(1, |lambda|).

    Args:
        A: Square matrix with a unique eigenvalue of largest modulus
        v0: Starting vector; a goodrand vector with positive entries if None
        tol: Relative stopping tolerance on the eigenvalue
        maxiter: Iteration cap
        raise_on_failure: Raise ConvergenceError instead of warning

    Raises:
        DimensionMismatchError: If A is not square or v0.size != A.rows
        NumericalError: If v0 is zero or the iterate collapses to zero
    """
    require_matrix(A, 'A')
    check_square(A.shape, 'A')
    check_positive(tol, 'tol')
    maxiter = check_iterations(maxiter, 'maxiter')
    a = A.as_numpy().astype(inexact_dtype(A.dtype), copy=False)

    timer = Timer()
    timer.start()
    return _eigen_iteration('power_method', A, v0, tol, maxiter, raise_on_failure,
                            lambda v: a @ v, timer)


def inverse_power_method(
    A: Matrix,
    v0: Array | None = None,
    alpha: Any = 0.0,
    tol: float = DEFAULT_TOL,
    maxiter: int = DEFAULT_MAXITER,
    *,
    raise_on_failure: bool = False,
) -> EigenSolution:
    """
    Eigenpair of A whose eigenvalue lies nearest the shift alpha.

    Factors A - alpha I once with pivoted LU, then iterates
    v <- (A - alpha I)⁻¹ v. The reported eigenvalue is the Rayleigh
    quotient against A itself, not the shifted matrix.

    Raises:
        DimensionMismatchError: If A is not square or v0.size != A.rows
        SingularMatrixError: If alpha is an eigenvalue of A to working
            precision (the shifted matrix cannot be factored)
        NumericalError: If v0 is zero
    """
    require_matrix(A, 'A')
    check_square(A.shape, 'A')
    check_positive(tol, 'tol')
    maxiter = check_iterations(maxiter, 'maxiter')

    timer = Timer()
    timer.start()
    with timer.section('factorization'):
        shifted = shift(A, alpha).as_numpy()
        factors = np.array(shifted, dtype=inexact_dtype(shifted.dtype))
        perm = _lu_in_place(factors, 'partial', resolve_tolerance(factors, None), 'A - alpha*I')

    def apply(v: NDArray[Any]) -> NDArray[Any]:
        y = _forward_substitute(factors, v[perm].astype(factors.dtype), True, 'A - alpha*I')
        return _back_substitute(factors, y, 'A - alpha*I')

    return _eigen_iteration('inverse_power_method', A, v0, tol, maxiter, raise_on_failure,
                            apply, timer)
