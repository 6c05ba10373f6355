"""
Polynomial interpolation in Newton form.

Given points (x_i, f_i) the divided difference table is

    f[x_i]           = f_i
    f[x_i, ..., x_j] = (f[x_{i+1}, ..., x_j] - f[x_i, ..., x_{j-1}]) / (x_j - x_i)

and its diagonal holds the coefficients c_k of

    p(x) = c_0 + c_1 (x - x_0) + ... + c_n (x - x_0) ... (x - x_{n-1})

which interpolates every point.

Usage:
    >>> x = Array.from_iterable([0.0, 1.0, 2.0])
    >>> p = interpolate(x, Array.from_iterable([1.0, 3.0, 7.0]))
    >>> p(3.0)  # 13.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from mathx.containers import Array, Matrix
from mathx.core.exceptions import ValidationError
from mathx.core.validation import check_matching
from mathx.linsolv._common import require_array, require_matrix, working_dtype


def divided_differences(x: Array, f: Array) -> Matrix:
    """
    Divided difference table for the points (x[i], f[i]).

    Entry (i, j), j <= i, holds f[x_{i-j}, ..., x_i]. Entries above the
    diagonal are zero.

    Raises:
        DimensionMismatchError: If x.size != f.size
        ValidationError: If there are no nodes or two nodes coincide
    """
    require_array(x, 'x')
    require_array(f, 'f')
    check_matching(x.size, f.size, "divided_differences: f.size must equal x.size")
    if x.size == 0:
        raise ValidationError("divided_differences: need at least one node")

    dtype = working_dtype(x.dtype, f.dtype)
    nodes = x.as_numpy().astype(dtype, copy=False)
    if len(set(nodes.tolist())) != nodes.shape[0]:
        raise ValidationError("divided_differences: nodes in x must be distinct")

    n = x.size
    table = np.zeros((n, n), dtype=dtype)
    table[:, 0] = f.as_numpy()
    for i in range(1, n):
        for j in range(1, i + 1):
            table[i, j] = (table[i, j - 1] - table[i - 1, j - 1]) / (nodes[i] - nodes[i - j])
    return Matrix.from_numpy(table)


def newtons_coeff(table: Matrix) -> Array:
    """Newton form coefficients: the diagonal of a divided difference table."""
    require_matrix(table, 'table')
    return Array.from_numpy(np.diag(table.as_numpy()))


def eval_newtons(x: Any, xi: Array, coeff: Array) -> Any:
    """
    Evaluate the Newton form polynomial at x by nested multiplication.

    Raises:
        DimensionMismatchError: If coeff.size != xi.size
        ValidationError: If there are no coefficients
    """
    require_array(xi, 'xi')
    require_array(coeff, 'coeff')
    check_matching(xi.size, coeff.size, "eval_newtons: coeff.size must equal xi.size")
    if coeff.size == 0:
        raise ValidationError("eval_newtons: need at least one coefficient")

    nodes, c = xi.as_numpy(), coeff.as_numpy()
    p = c[-1]
    for j in range(c.shape[0] - 2, -1, -1):
        p = p * (x - nodes[j]) + c[j]
    return p


@dataclass(frozen=True)
class NewtonPolynomial:
    """Interpolating polynomial in Newton form; call it to evaluate."""
    nodes: Array
    coefficients: Array

    @property
    def degree(self) -> int:
        return self.coefficients.size - 1

    def __call__(self, x: Any) -> Any:
        return eval_newtons(x, self.nodes, self.coefficients)


def interpolate(x: Array, f: Array) -> NewtonPolynomial:
    """Polynomial of degree < x.size through the points (x[i], f[i])."""
    coefficients = newtons_coeff(divided_differences(x, f))
    return NewtonPolynomial(nodes=x.copy(), coefficients=coefficients)
