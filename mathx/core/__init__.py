"""
Core infrastructure for mathx.

Shared abstractions used by the containers and the numerical modules.

Key components:
    exceptions: Exception hierarchy
    validation: Input validators
    result: Generic Result[P] envelope for iterative methods
    timing: Section timer
    tolerances: Comparison tiers and the pivot tolerance policy
"""

from mathx.core.exceptions import (
    MathxError,
    ValidationError,
    InvalidSizeError,
    InvalidDimensionError,
    RaggedRowsError,
    DimensionMismatchError,
    IndexOutOfRangeError,
    NumericalError,
    SingularMatrixError,
    NotPositiveDefiniteError,
    ConvergenceError,
)
from mathx.core.result import Result
from mathx.core.timing import Timer

__all__ = [
    # Result
    "Result",
    "Timer",
    # Exceptions
    "MathxError",
    "ValidationError",
    "InvalidSizeError",
    "InvalidDimensionError",
    "RaggedRowsError",
    "DimensionMismatchError",
    "IndexOutOfRangeError",
    "NumericalError",
    "SingularMatrixError",
    "NotPositiveDefiniteError",
    "ConvergenceError",
]
