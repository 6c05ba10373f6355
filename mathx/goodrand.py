"""
Pseudo-random values for container initialization.

A single Mersenne Twister generator (numpy's MT19937 bit generator) backs
every call. It is seeded from OS entropy at import time; call ``seed()``
to make subsequent fills reproducible.

Usage:
    >>> from mathx import goodrand
    >>> goodrand.seed(7)
    >>> goodrand.get_rand(0.0, 1.0)     # uniform float in [0, 1)
    >>> goodrand.get_rand(-10, 10)      # uniform integer in [-10, 10]
"""

from __future__ import annotations

import numpy as np
from numpy.typing import DTypeLike, NDArray
from typing import Any

from mathx.core.validation import check_dtype, check_size, is_integer

# Inclusive upper bound for random integer elements
INTEGER_HIGH = 10

_generator = np.random.Generator(np.random.MT19937())


def seed(value: int | None = None) -> None:
    """
    Reseed the shared generator.

    Args:
        value: Seed; None draws fresh OS entropy
    """
    global _generator
    _generator = np.random.Generator(np.random.MT19937(value))


def get_rand(low: float, high: float) -> float | int:
    """
    Uniform random value on an interval.

    Integer bounds give an integer in [low, high] (both inclusive). Any
    float bound gives a float in [low, high).
    """
    if is_integer(low) and is_integer(high):
        return int(_generator.integers(low, high, endpoint=True))
    return float(_generator.uniform(low, high))


def random_values(count: int, dtype: DTypeLike = np.float64) -> NDArray[Any]:
    """
    Draw ``count`` random elements of the given element type.

    Floats are uniform in [0, 1); integers uniform in [0, INTEGER_HIGH];
    complex values have independent uniform real and imaginary parts;
    ``object`` gives Python floats.
    """
    count = check_size(count, 'count')
    dtype = check_dtype(dtype, 'dtype')

    if np.issubdtype(dtype, np.integer):
        return _generator.integers(0, INTEGER_HIGH, size=count, endpoint=True).astype(dtype)
    if np.issubdtype(dtype, np.complexfloating):
        parts = _generator.random((2, count))
        return (parts[0] + 1j * parts[1]).astype(dtype)
    return _generator.random(count).astype(dtype)


def next_value(dtype: DTypeLike = np.float64) -> Any:
    """One random element of the given element type."""
    return random_values(1, dtype)[0]
