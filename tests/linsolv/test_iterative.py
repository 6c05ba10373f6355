"""
Tests for the iterative solvers and eigenvalue iterations.

Validates:
    - jacobi, gauss_seidel and cgm reach the direct solution
    - Solution metadata: converged, iterations, final_change, timing
    - Non-convergence warns by default and raises on request
    - power_method and inverse_power_method find the expected eigenpairs
    - shift() and input immutability
"""

import numpy as np
import pytest

from mathx.containers import Array, Matrix
from mathx.core.exceptions import (
    ConvergenceError,
    DimensionMismatchError,
    NumericalError,
    SingularMatrixError,
    ValidationError,
)
from mathx.linsolv import (
    EigenSolution,
    IterativeSolution,
    cgm,
    gauss_seidel,
    inverse_power_method,
    jacobi,
    linsolv,
    power_method,
    shift,
)

SOLVERS = [jacobi, gauss_seidel, cgm]


# ═══════════════════════════════════════════════════════════════════════
# Linear solvers
# ═══════════════════════════════════════════════════════════════════════


class TestConvergence:

    @pytest.mark.parametrize("solver", SOLVERS)
    def test_spd_system(self, spd_system, solver):
        A, b, x_true = spd_system
        solution = solver(A, b, tol=1e-12, maxiter=5000)
        assert isinstance(solution, IterativeSolution)
        assert solution.converged
        np.testing.assert_allclose(solution.x.to_numpy(), x_true, rtol=1e-8, atol=1e-10)

    @pytest.mark.parametrize("solver", [jacobi, gauss_seidel])
    def test_dominant_system(self, dominant_system, solver):
        A, b, _ = dominant_system
        solution = solver(A, b, tol=1e-12)
        direct = linsolv(A, b)
        np.testing.assert_allclose(solution.x.to_numpy(), direct.to_numpy(), atol=1e-10)

    def test_gauss_seidel_faster_than_jacobi(self, dominant_system):
        A, b, _ = dominant_system
        assert gauss_seidel(A, b).iterations < jacobi(A, b).iterations

    def test_cgm_finite_termination(self, spd_system):
        A, b, _ = spd_system
        solution = cgm(A, b, tol=1e-10)
        assert solution.iterations <= 2 * A.rows

    @pytest.mark.parametrize("solver", SOLVERS)
    def test_start_at_solution(self, solver):
        A = Matrix.from_rows([[4.0, 1.0], [1.0, 3.0]])
        x = Array.from_iterable([1.0, 1.0])
        b = Array.from_iterable([5.0, 4.0])
        solution = solver(A, b, x0=x)
        assert solution.converged
        assert solution.iterations <= 1
        np.testing.assert_allclose(solution.x.to_numpy(), [1.0, 1.0])

    @pytest.mark.parametrize("solver", SOLVERS)
    def test_metadata(self, spd_system, solver):
        A, b, _ = spd_system
        solution = solver(A, b)
        assert solution.method == solver.__name__
        assert solution.converged
        assert solution.final_change >= 0
        assert 'total_seconds' in solution.timing
        assert 'iterations' in solution.timing
        assert solution.warnings == ()

    @pytest.mark.parametrize("solver", SOLVERS)
    def test_inputs_unchanged(self, spd_system, solver):
        A, b, _ = spd_system
        x0 = Array(A.rows, 0.5)
        before = (A.copy(), b.copy(), x0.copy())
        solver(A, b, x0=x0)
        assert (A, b, x0) == before

    def test_x_is_a_copy(self, spd_system):
        A, b, _ = spd_system
        solution = jacobi(A, b)
        x = solution.x
        x[0] = 1e6
        assert solution.x[0] != 1e6


class TestFailure:

    @pytest.mark.parametrize("solver", SOLVERS)
    def test_warns_at_iteration_cap(self, spd_system, solver):
        A, b, _ = spd_system
        with pytest.warns(RuntimeWarning, match="did not converge"):
            solution = solver(A, b, tol=1e-14, maxiter=1)
        assert not solution.converged
        assert solution.iterations == 1
        assert "did not converge" in solution.warnings[0]

    @pytest.mark.parametrize("solver", SOLVERS)
    def test_raises_on_request(self, spd_system, solver):
        A, b, _ = spd_system
        with pytest.raises(ConvergenceError) as exc_info:
            solver(A, b, tol=1e-14, maxiter=1, raise_on_failure=True)
        assert exc_info.value.iterations == 1
        assert exc_info.value.reason == 'max_iterations'
        assert exc_info.value.threshold == 1e-14

    def test_jacobi_diverges_quietly_with_warning(self):
        A = Matrix.from_rows([[1.0, 3.0], [3.0, 1.0]])
        b = Array.from_iterable([1.0, 1.0])
        with pytest.warns(RuntimeWarning):
            solution = jacobi(A, b, maxiter=20)
        assert not solution.converged

    @pytest.mark.parametrize("solver", [jacobi, gauss_seidel])
    def test_zero_diagonal(self, solver):
        A = Matrix.from_rows([[0.0, 1.0], [1.0, 0.0]])
        with pytest.raises(SingularMatrixError) as exc_info:
            solver(A, Array(2, 1.0))
        assert exc_info.value.pivot_index == 0

    def test_cgm_indefinite(self):
        A = Matrix.from_rows([[1.0, 0.0], [0.0, -1.0]])
        with pytest.raises(NumericalError, match="curvature"):
            cgm(A, Array.from_iterable([0.0, 1.0]))

    @pytest.mark.parametrize("solver", SOLVERS)
    def test_bad_parameters(self, solver):
        A, b = Matrix.identity(2), Array(2, 1.0)
        with pytest.raises(ValidationError):
            solver(A, b, tol=0.0)
        with pytest.raises(ValidationError):
            solver(A, b, maxiter=0)
        with pytest.raises(DimensionMismatchError):
            solver(A, b, x0=Array(3))


# ═══════════════════════════════════════════════════════════════════════
# Eigenvalue iterations
# ═══════════════════════════════════════════════════════════════════════


class TestPowerMethod:

    def test_dominant_eigenvalue(self, spd_system):
        A, _, _ = spd_system
        solution = power_method(A, tol=1e-12, maxiter=10000)
        assert isinstance(solution, EigenSolution)
        expected = np.linalg.eigvalsh(A.to_numpy())[-1]
        assert solution.eigenvalue == pytest.approx(expected, rel=1e-8)

    def test_eigenvector(self):
        A = Matrix.from_rows([[2.0, 1.0], [1.0, 2.0]])
        solution = power_method(A, Array.from_iterable([1.0, 0.0]), tol=1e-14)
        assert solution.converged
        assert solution.eigenvalue == pytest.approx(3.0)
        v = solution.eigenvector.to_numpy()
        np.testing.assert_allclose(np.abs(v), [2 ** -0.5, 2 ** -0.5], rtol=1e-5)

    def test_negative_dominant(self):
        A = Matrix.from_rows([[-5.0, 0.0], [0.0, 1.0]])
        solution = power_method(A, Array.from_iterable([1.0, 1.0]))
        assert solution.eigenvalue == pytest.approx(-5.0)

    def test_zero_start_vector(self):
        with pytest.raises(NumericalError, match="nonzero"):
            power_method(Matrix.identity(2), Array(2))

    def test_not_square(self):
        with pytest.raises(DimensionMismatchError):
            power_method(Matrix(2, 3))

    def test_matrix_unchanged(self, spd_system):
        A, _, _ = spd_system
        before = A.copy()
        power_method(A)
        assert A == before


class TestInversePowerMethod:

    def test_smallest_eigenvalue(self, spd_system):
        A, _, _ = spd_system
        solution = inverse_power_method(A, tol=1e-12)
        expected = np.linalg.eigvalsh(A.to_numpy())[0]
        assert solution.eigenvalue == pytest.approx(expected, rel=1e-8)

    def test_shift_selects_nearest(self):
        A = Matrix.from_numpy(np.diag([1.0, 4.0, 10.0]))
        solution = inverse_power_method(A, Array(3, 1.0), alpha=3.5)
        assert solution.eigenvalue == pytest.approx(4.0)
        assert 'factorization' in solution.timing

    def test_shift_at_eigenvalue_is_singular(self):
        A = Matrix.from_numpy(np.diag([1.0, 2.0]))
        with pytest.raises(SingularMatrixError):
            inverse_power_method(A, alpha=2.0)

    def test_matrix_unchanged(self):
        A = Matrix.from_rows([[2.0, 1.0], [1.0, 2.0]])
        before = A.copy()
        inverse_power_method(A, alpha=0.5)
        assert A == before


class TestShift:

    def test_subtracts_diagonal(self):
        A = Matrix.from_rows([[2.0, 1.0], [1.0, 2.0]])
        assert shift(A, 0.5).to_list() == [[1.5, 1.0], [1.0, 1.5]]
        assert A.to_list() == [[2.0, 1.0], [1.0, 2.0]]

    def test_integer_matrix_float_shift(self):
        S = shift(Matrix.from_rows([[1, 0], [0, 1]]), 0.5)
        assert S.to_list() == [[0.5, 0.0], [0.0, 0.5]]

    def test_not_square(self):
        with pytest.raises(DimensionMismatchError):
            shift(Matrix(2, 3), 1.0)
