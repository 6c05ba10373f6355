"""
mathx: dense numerical linear algebra on generic containers.

Array and Matrix hold elements of any numpy numeric dtype (or Python
objects such as Fraction). The linsolv module multiplies, factors and
solves with them; the remaining modules cover the numerical methods
that accompany a first course in scientific computing.

Submodules:
    containers: Array and Matrix
    linsolv: products, direct and iterative solvers, factorizations
    vectors: dot and cross products, vector norms
    interpolation: Newton form polynomial interpolation
    roots: bisection, fixed point, Newton, secant and hybrid root finders
    goodrand: seedable Mersenne Twister source for random fills
    utils: machine epsilon and error measures
"""

__version__ = "0.1.0"

from mathx import goodrand
from mathx.containers import Array, Matrix
from mathx.core.exceptions import (
    MathxError,
    ValidationError,
    DimensionMismatchError,
    IndexOutOfRangeError,
    NumericalError,
    SingularMatrixError,
    ConvergenceError,
)
from mathx import linsolv
from mathx import vectors
from mathx import interpolation
from mathx import roots

__all__ = [
    "__version__",
    "Array",
    "Matrix",
    "MathxError",
    "ValidationError",
    "DimensionMismatchError",
    "IndexOutOfRangeError",
    "NumericalError",
    "SingularMatrixError",
    "ConvergenceError",
    "goodrand",
    "linsolv",
    "vectors",
    "interpolation",
    "roots",
]
