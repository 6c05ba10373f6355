"""
Tests for the mathx exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via MathxError)
    - IndexOutOfRangeError is also a builtin IndexError
    - Diagnostic attributes and their defaults
"""

import pytest

from mathx.core.exceptions import (
    ConvergenceError,
    DimensionMismatchError,
    IndexOutOfRangeError,
    InvalidDimensionError,
    InvalidSizeError,
    MathxError,
    NotPositiveDefiniteError,
    NumericalError,
    RaggedRowsError,
    SingularMatrixError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via MathxError."""

    @pytest.mark.parametrize("exc", [
        InvalidSizeError,
        InvalidDimensionError,
        RaggedRowsError,
        DimensionMismatchError,
    ])
    def test_argument_errors_are_validation_errors(self, exc):
        with pytest.raises(ValidationError):
            raise exc("bad argument")

    @pytest.mark.parametrize("exc", [SingularMatrixError, NotPositiveDefiniteError])
    def test_matrix_failures_are_numerical_errors(self, exc):
        with pytest.raises(NumericalError):
            raise exc("failed")

    @pytest.mark.parametrize("exc", [
        ValidationError,
        IndexOutOfRangeError,
        NumericalError,
        SingularMatrixError,
    ])
    def test_all_are_mathx_errors(self, exc):
        with pytest.raises(MathxError):
            raise exc("failed")

    def test_convergence_error_is_mathx_error(self):
        with pytest.raises(MathxError):
            raise ConvergenceError("no convergence", iterations=10)

    def test_index_error_is_builtin_index_error(self):
        with pytest.raises(IndexError):
            raise IndexOutOfRangeError("out of range", index=3, bound=3)

    def test_convergence_is_not_numerical(self):
        assert not issubclass(ConvergenceError, NumericalError)


# ═══════════════════════════════════════════════════════════════════════
# Diagnostic attributes
# ═══════════════════════════════════════════════════════════════════════


class TestAttributes:

    def test_invalid_size(self):
        err = InvalidSizeError("bad size", size=-1)
        assert err.size == -1
        assert str(err) == "bad size"

    def test_invalid_dimension(self):
        err = InvalidDimensionError("bad dims", rows=-2, cols=3)
        assert (err.rows, err.cols) == (-2, 3)

    def test_ragged_rows(self):
        err = RaggedRowsError("ragged", row=1, expected=2, actual=3)
        assert (err.row, err.expected, err.actual) == (1, 2, 3)

    def test_dimension_mismatch(self):
        err = DimensionMismatchError("mismatch", expected=(3, 3), actual=(3, 4))
        assert err.expected == (3, 3)
        assert err.actual == (3, 4)

    def test_index_out_of_range(self):
        err = IndexOutOfRangeError("oob", index=5, bound=5)
        assert err.index == 5
        assert err.bound == 5

    def test_singular_matrix(self):
        err = SingularMatrixError(
            "singular", matrix_name='A', pivot_index=1, pivot_value=0.0, tolerance=1e-15,
        )
        assert err.matrix_name == 'A'
        assert err.pivot_index == 1
        assert err.pivot_value == 0.0
        assert err.tolerance == 1e-15

    def test_not_positive_definite(self):
        err = NotPositiveDefiniteError("not PD", matrix_name='A', index=2)
        assert err.matrix_name == 'A'
        assert err.index == 2

    def test_convergence(self):
        err = ConvergenceError(
            "stuck", iterations=100, final_change=1e-3, reason='max_iterations', threshold=1e-8,
        )
        assert err.iterations == 100
        assert err.final_change == 1e-3
        assert err.reason == 'max_iterations'
        assert err.threshold == 1e-8


class TestDefaults:
    """Optional attributes default to None."""

    def test_singular_defaults(self):
        err = SingularMatrixError("singular")
        assert err.matrix_name is None
        assert err.pivot_index is None

    def test_convergence_defaults(self):
        err = ConvergenceError("stuck", iterations=3)
        assert err.final_change is None
        assert err.reason is None
        assert err.threshold is None
