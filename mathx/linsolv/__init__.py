"""
Linear algebra on Array and Matrix.

Products:
    matmul, mult_transpose, transpose, matmul_tridiagonal

Direct solvers:
    linsolv (Gaussian elimination with partial pivoting), solve,
    solve_tridiagonal, least_squares, least_squares_qr, inverse, kappa

Factorizations and substitution:
    gaussian_elimination, back_substitution, forward_substitution,
    lu, lu_solve, cholesky, is_spd, qr_factorization_mgs

Iterative methods:
    jacobi, gauss_seidel, cgm, power_method, inverse_power_method, shift

Every function is pure with respect to its arguments, except that
``matmul(..., out=...)`` writes its result into ``out``.
"""

from mathx.linsolv.products import (
    matmul,
    matmul_tridiagonal,
    mult_transpose,
    transpose,
)
from mathx.linsolv.factorizations import (
    LUResult,
    QRResult,
    back_substitution,
    cholesky,
    forward_substitution,
    gaussian_elimination,
    is_spd,
    lu,
    lu_solve,
    qr_factorization_mgs,
)
from mathx.linsolv.direct import (
    inverse,
    kappa,
    least_squares,
    least_squares_qr,
    linsolv,
    solve,
    solve_tridiagonal,
)
from mathx.linsolv.iterative import (
    cgm,
    gauss_seidel,
    inverse_power_method,
    jacobi,
    power_method,
    shift,
)
from mathx.linsolv.solution import EigenSolution, IterativeSolution

__all__ = [
    # Products
    'matmul',
    'matmul_tridiagonal',
    'mult_transpose',
    'transpose',
    # Direct
    'linsolv',
    'solve',
    'solve_tridiagonal',
    'least_squares',
    'least_squares_qr',
    'inverse',
    'kappa',
    # Factorizations
    'gaussian_elimination',
    'back_substitution',
    'forward_substitution',
    'lu',
    'lu_solve',
    'LUResult',
    'cholesky',
    'is_spd',
    'qr_factorization_mgs',
    'QRResult',
    # Iterative
    'jacobi',
    'gauss_seidel',
    'cgm',
    'power_method',
    'inverse_power_method',
    'shift',
    'IterativeSolution',
    'EigenSolution',
]
