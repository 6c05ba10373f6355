"""
Root finding for scalar functions of one real variable.

Methods:
    bisect            bracketing, linear convergence, always converges
    fixed_point_iter  x = g(x) iteration, linear when g is contractive
    newtons_method    quadratic convergence near a simple root, needs f'
    secant_method     superlinear, replaces f' by a difference quotient
    hybrid_method     bisection that switches to secant steps once they
                      beat bisection (|f_new| < |f_old| / 2)

Invalid parameters raise ValidationError before f is iterated. Reaching
``max_iter`` is reported as a RuntimeWarning and the last iterate is
returned, except for fixed point iteration, which has no bracket to fall
back on and raises ConvergenceError.
"""

from __future__ import annotations

from collections.abc import Callable

from mathx.core.exceptions import ConvergenceError, NumericalError, ValidationError
from mathx.core.validation import check_iterations, check_positive
from mathx.utils.error import report

Function = Callable[[float], float]

DEFAULT_TOL = 1e-10
DEFAULT_MAX_ITER = 100

# Bisection steps between secant attempts in hybrid_method
HYBRID_BISECTION_STEPS = 5


def _not_converged(method: str, max_iter: int, change: float, tol: float) -> None:
    report(
        f"{method} reached max_iter={max_iter} (last change {change:.3g} > tol {tol:.3g})",
        RuntimeWarning,
        stacklevel=3,
    )


def bisect(
    f: Function,
    a: float,
    b: float,
    tol: float = DEFAULT_TOL,
    max_iter: int = DEFAULT_MAX_ITER,
    fa: float | None = None,
    fb: float | None = None,
) -> float:
    """
    Root of f in [a, b] by bisection.

    Args:
        f: Continuous function with f(a) * f(b) <= 0
        a, b: Bracket end points (either order)
        tol: Stop once the bracket is no wider than tol
        max_iter: Iteration cap
        fa, fb: f(a) and f(b) when already known

    Returns:
        Midpoint of the final bracket (or an end point that is a root)

    Raises:
        ValidationError: If a == b, tol <= 0, or f does not change sign
    """
    check_positive(tol, 'tol')
    max_iter = check_iterations(max_iter, 'max_iter')
    if a == b:
        raise ValidationError(f"bisect: empty bracket, a == b == {a}")
    fa = f(a) if fa is None else fa
    fb = f(b) if fb is None else fb
    if fa * fb > 0:
        raise ValidationError(
            f"bisect: f does not change sign on [{a}, {b}] (f(a)={fa:.3g}, f(b)={fb:.3g})"
        )
    if fa == 0:
        return a
    if fb == 0:
        return b
    if a > b:
        a, b, fa, fb = b, a, fb, fa

    c = (a + b) / 2
    for _ in range(max_iter):
        if abs(b - a) <= tol:
            return c
        c = (a + b) / 2
        fc = f(c)
        if fc == 0:
            return c
        if fa * fc < 0:
            b, fb = c, fc
        else:
            a, fa = c, fc

    if abs(b - a) > tol:
        _not_converged('bisect', max_iter, abs(b - a), tol)
    return c


def fixed_point_iter(
    g: Function,
    x0: float,
    tol: float = DEFAULT_TOL,
    max_iter: int = DEFAULT_MAX_ITER,
) -> float:
    """
    Fixed point of g by functional iteration x_{k+1} = g(x_k).

    Converges when g maps an interval around the fixed point into itself
    with |g'| < 1 there.

    Raises:
        ValidationError: If tol <= 0 or max_iter < 1
        ConvergenceError: If |x_{k+1} - x_k| > tol after max_iter steps
    """
    check_positive(tol, 'tol')
    max_iter = check_iterations(max_iter, 'max_iter')

    x = x0
    change = float('inf')
    for _ in range(max_iter):
        x_next = g(x)
        change = abs(x_next - x)
        x = x_next
        if change <= tol:
            return x
    raise ConvergenceError(
        f"fixed_point_iter: no convergence after {max_iter} iterations "
        f"(last change {change:.3g} > tol {tol:.3g})",
        iterations=max_iter,
        final_change=change,
        reason='max_iterations',
        threshold=tol,
    )


def newtons_method(
    f: Function,
    df: Function,
    x0: float,
    tol: float = DEFAULT_TOL,
    max_iter: int = DEFAULT_MAX_ITER,
) -> float:
    """
    Root of f by Newton's method, x_{k+1} = x_k - f(x_k) / f'(x_k).

    Raises:
        ValidationError: If tol <= 0 or f'(x0) == 0 (unless x0 is a root)
        NumericalError: If f' vanishes at a later iterate
    """
    check_positive(tol, 'tol')
    max_iter = check_iterations(max_iter, 'max_iter')
    fx = f(x0)
    if fx == 0:
        return x0
    if df(x0) == 0:
        raise ValidationError(f"newtons_method: f'(x0) == 0 at x0 = {x0}")

    x = x0
    change = float('inf')
    for k in range(max_iter):
        fx = f(x)
        if fx == 0:
            return x
        dfx = df(x)
        if dfx == 0:
            raise NumericalError(f"newtons_method: f'(x) == 0 at iterate {k}, x = {x}")
        x_next = x - fx / dfx
        change = abs(x_next - x)
        x = x_next
        if change <= tol:
            return x

    _not_converged('newtons_method', max_iter, change, tol)
    return x


def _secant_step(x0: float, x1: float, f0: float, f1: float) -> float:
    if f1 == f0:
        raise NumericalError(
            f"secant step: f({x0}) == f({x1}); the secant is horizontal"
        )
    return x1 - f1 * (x1 - x0) / (f1 - f0)


def secant_method(
    f: Function,
    x0: float,
    x1: float,
    tol: float = DEFAULT_TOL,
    max_iter: int = DEFAULT_MAX_ITER,
) -> float:
    """
    Root of f by the secant method, starting from two guesses.

    Raises:
        ValidationError: If tol <= 0
        NumericalError: If two iterates have equal function values
    """
    check_positive(tol, 'tol')
    max_iter = check_iterations(max_iter, 'max_iter')
    f0, f1 = f(x0), f(x1)
    if f0 == 0:
        return x0
    if f1 == 0:
        return x1

    for _ in range(max_iter):
        if abs(x1 - x0) <= tol:
            return x1
        x0, x1 = x1, _secant_step(x0, x1, f0, f1)
        f0, f1 = f1, f(x1)
        if f1 == 0:
            return x1

    if abs(x1 - x0) > tol:
        _not_converged('secant_method', max_iter, abs(x1 - x0), tol)
    return x1


def hybrid_method(
    f: Function,
    a: float,
    b: float,
    tol: float = DEFAULT_TOL,
    max_iter: int = DEFAULT_MAX_ITER,
) -> float:
    """
    Bisection globalized with secant steps.

    Every few bisection steps the current bracket seeds a run of secant
    steps, which continues while each step at least halves |f|. If that
    run settles to within tol its iterate is returned; otherwise
    bisection resumes on the bracket, which is never lost.

    Raises:
        ValidationError: If a == b, tol <= 0, or f does not change sign
    """
    check_positive(tol, 'tol')
    max_iter = check_iterations(max_iter, 'max_iter')
    if a == b:
        raise ValidationError(f"hybrid_method: empty bracket, a == b == {a}")
    fa, fb = f(a), f(b)
    if fa * fb > 0:
        raise ValidationError(
            f"hybrid_method: f does not change sign on [{a}, {b}] "
            f"(f(a)={fa:.3g}, f(b)={fb:.3g})"
        )
    if fa == 0:
        return a
    if fb == 0:
        return b
    if a > b:
        a, b, fa, fb = b, a, fb, fa

    c = (a + b) / 2
    for k in range(1, max_iter + 1):
        if abs(b - a) <= tol:
            return c
        c = (a + b) / 2
        fc = f(c)
        if fc == 0:
            return c
        if fa * fc < 0:
            b, fb = c, fc
        else:
            a, fa = c, fc

        if k % HYBRID_BISECTION_STEPS == 0:
            root = _secant_run(f, a, b, fa, fb, tol, max_iter)
            if root is not None:
                return root

    if abs(b - a) > tol:
        _not_converged('hybrid_method', max_iter, abs(b - a), tol)
    return c


def _secant_run(
    f: Function,
    x0: float,
    x1: float,
    f0: float,
    f1: float,
    tol: float,
    max_iter: int,
) -> float | None:
    """Secant steps while they halve |f|; the root if they reach tol."""
    for _ in range(max_iter):
        if f1 == f0:
            return None
        x_next = _secant_step(x0, x1, f0, f1)
        f_next = f(x_next)
        if f_next == 0:
            return x_next
        if not abs(f_next) < 0.5 * abs(f1):
            return None
        x0, x1, f0, f1 = x1, x_next, f1, f_next
        if abs(x1 - x0) <= tol:
            return x1
    return None
