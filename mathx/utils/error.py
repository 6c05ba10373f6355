"""
Error measures and the diagnostic sink.

``report`` is where mathx sends diagnostics that are not failures (an
iterative method stopping at its iteration cap, for instance). It goes
through the warnings module so callers can filter, escalate or record
the messages with the standard tools. Failures are never reported here;
they raise from the exception hierarchy in ``mathx.core.exceptions``.
"""

import warnings
from collections.abc import Callable

import numpy as np

from mathx.core.validation import check_positive


class MathxWarning(UserWarning):
    """Category for mathx diagnostics."""


def report(
    message: str,
    category: type[Warning] = MathxWarning,
    stacklevel: int = 2,
) -> str:
    """
    Emit a diagnostic message and return it.

    Returning the message lets callers also store it on a result's
    ``warnings`` tuple.
    """
    warnings.warn(message, category, stacklevel=stacklevel + 1)
    return message


def absolute_value(x: complex | float) -> float:
    """|x|, the modulus for complex input."""
    return float(abs(x))


def e_abs(exact: complex | float, approx: complex | float) -> float:
    """Absolute error |exact - approx|."""
    return absolute_value(exact - approx)


def e_rel(exact: complex | float, approx: complex | float) -> float:
    """Relative error |exact - approx| / |exact|."""
    denominator = absolute_value(exact)
    if denominator == 0:
        return float(np.inf) if exact != approx else 0.0
    return e_abs(exact, approx) / denominator


def one_sided_difference(
    f: Callable[[float], float],
    df: Callable[[float], float],
    x: float,
    h: float,
) -> float:
    """
    Absolute error of the one-sided difference approximation of f'(x).

        e_abs = |f'(x) - (f(x + h) - f(x)) / h|

    The approximation is O(h).

    Args:
        f: Function of one real variable
        df: Its derivative (or a function returning the accepted value)
        x: Evaluation point
        h: Step, typically 1e-8

    Example:
        >>> f = lambda x: np.exp(-2 * x)
        >>> df = lambda x: -2 * np.exp(-2 * x)
        >>> one_sided_difference(f, df, 0.5, 1e-8)  # ~7.4e-10
    """
    check_positive(h, 'h')
    return abs(df(x) - (f(x + h) - f(x)) / h)


def central_difference(
    f: Callable[[float], float],
    df: Callable[[float], float],
    x: float,
    h: float,
) -> float:
    """
    Absolute error of the central difference approximation of f'(x).

        e_abs = |f'(x) - (f(x + h) - f(x - h)) / (2h)|

    The approximation is O(h^2).
    """
    check_positive(h, 'h')
    return abs(df(x) - (f(x + h) - f(x - h)) / (2 * h))
