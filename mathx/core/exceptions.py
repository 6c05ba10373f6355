"""
Exception hierarchy for mathx.

All exceptions inherit from MathxError so callers can catch any
library-specific error in one place. Containers and algorithms raise the
most specific class available.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class MathxError(Exception):
    """Base exception for all mathx errors."""
    pass


class ValidationError(MathxError):
    """
    Input validation failed.

    Raised when user-provided arguments fail validation checks.
    """
    pass


class InvalidSizeError(ValidationError):
    """
    A container size or capacity is negative or not an integer.

    Attributes:
        size: The rejected size argument
    """

    def __init__(self, message: str, size: object = None):
        super().__init__(message)
        self.size = size


class InvalidDimensionError(ValidationError):
    """
    Matrix dimensions are negative, not integers, or of the wrong rank.

    Attributes:
        rows: The rejected row count, if applicable
        cols: The rejected column count, if applicable
    """

    def __init__(
        self,
        message: str,
        rows: object = None,
        cols: object = None,
    ):
        super().__init__(message)
        self.rows = rows
        self.cols = cols


class RaggedRowsError(ValidationError):
    """
    Nested literal rows have inconsistent lengths.

    Attributes:
        row: Index of the first offending row
        expected: Length of the first row
        actual: Length of the offending row
    """

    def __init__(
        self,
        message: str,
        row: int | None = None,
        expected: int | None = None,
        actual: int | None = None,
    ):
        super().__init__(message)
        self.row = row
        self.expected = expected
        self.actual = actual


class DimensionMismatchError(ValidationError):
    """
    Operand shapes are incompatible for the requested operation.

    Attributes:
        expected: Expected shape or length
        actual: Shape or length that was supplied
    """

    def __init__(
        self,
        message: str,
        expected: object = None,
        actual: object = None,
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class IndexOutOfRangeError(MathxError, IndexError):
    """
    Element access outside the valid range.

    Also an IndexError, so generic sequence code treats it as one.

    Attributes:
        index: The rejected index
        bound: Exclusive upper bound of the valid range
    """

    def __init__(
        self,
        message: str,
        index: object = None,
        bound: int | None = None,
    ):
        super().__init__(message)
        self.index = index
        self.bound = bound


class NumericalError(MathxError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when elimination cannot find a pivot whose magnitude exceeds
    the tolerance, or when a triangular solve meets a zero diagonal.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        pivot_index: Elimination step (column) at which the failure occurred
        pivot_value: Magnitude of the best pivot candidate
        tolerance: Threshold the pivot failed to exceed
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        pivot_index: int | None = None,
        pivot_value: float | None = None,
        tolerance: float | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.pivot_index = pivot_index
        self.pivot_value = pivot_value
        self.tolerance = tolerance


class NotPositiveDefiniteError(NumericalError):
    """
    Matrix is not positive definite.

    Raised when Cholesky factorization meets a non-positive diagonal.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        index: Diagonal position where factorization broke down
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        index: int | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.index = index


class ConvergenceError(MathxError):
    """
    Iterative algorithm failed to converge.

    Raised when an iterative method (Jacobi, Gauss-Seidel, CG, power
    iteration, fixed point) does not meet its tolerance within the
    maximum number of iterations.

    Attributes:
        iterations: Number of iterations completed
        final_change: Final change between successive iterates
        reason: Why convergence failed (e.g., 'max_iterations', 'diverging')
        threshold: The convergence threshold that was not met
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        final_change: float | None = None,
        reason: str | None = None,
        threshold: float | None = None,
    ):
        super().__init__(message)
        self.iterations = iterations
        self.final_change = final_change
        self.reason = reason
        self.threshold = threshold
