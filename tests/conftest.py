"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from mathx import goodrand
from mathx.containers import Array, Matrix


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture(autouse=True)
def seeded_goodrand():
    """Reseed the shared goodrand generator so random fills are reproducible."""
    goodrand.seed(12345)
    yield
    goodrand.seed(12345)


@pytest.fixture
def spd_system(rng):
    """Symmetric, diagonally dominant (hence positive definite) 6 x 6 system."""
    n = 6
    M = rng.uniform(-1.0, 1.0, (n, n))
    S = (M + M.T) / 2
    A = S + np.diag(np.sum(np.abs(S), axis=1) + 1.0)
    x_true = rng.standard_normal(n)
    return Matrix.from_numpy(A), Array.from_numpy(A @ x_true), x_true


@pytest.fixture
def dominant_system(rng):
    """Strictly diagonally dominant, non-symmetric 8 x 8 system."""
    n = 8
    A = rng.uniform(-1.0, 1.0, (n, n))
    A += np.diag(np.sum(np.abs(A), axis=1) + 1.0)
    x_true = rng.standard_normal(n)
    return Matrix.from_numpy(A), Array.from_numpy(A @ x_true), x_true


@pytest.fixture
def general_system(rng):
    """Well-conditioned general 10 x 10 system."""
    n = 10
    A = rng.standard_normal((n, n)) + 2 * n * np.eye(n)
    x_true = rng.standard_normal(n)
    return Matrix.from_numpy(A), Array.from_numpy(A @ x_true), x_true
