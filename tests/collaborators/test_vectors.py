"""
Tests for vector utilities.
"""

import numpy as np
import pytest

from mathx.containers import Array
from mathx.core.exceptions import DimensionMismatchError, NumericalError
from mathx.vectors import (
    cross_product,
    dot_product,
    infinity_norm,
    norm,
    normalize,
    one_norm,
)


class TestProducts:

    def test_dot(self):
        v = Array.from_iterable([1.0, 2.0, 3.0])
        w = Array.from_iterable([4.0, -5.0, 6.0])
        assert dot_product(v, w) == 12.0

    def test_dot_integers(self):
        assert dot_product(Array.from_iterable([1, 2]), Array.from_iterable([3, 4])) == 11

    def test_dot_empty(self):
        assert dot_product(Array(0), Array(0)) == 0.0

    def test_dot_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            dot_product(Array(2), Array(3))

    def test_cross_unit_vectors(self):
        e1 = Array.from_iterable([1.0, 0.0, 0.0])
        e2 = Array.from_iterable([0.0, 1.0, 0.0])
        assert cross_product(e1, e2).to_list() == [0.0, 0.0, 1.0]
        assert cross_product(e2, e1).to_list() == [0.0, 0.0, -1.0]

    def test_cross_matches_numpy(self, rng):
        v, w = rng.standard_normal(3), rng.standard_normal(3)
        result = cross_product(Array.from_numpy(v), Array.from_numpy(w))
        np.testing.assert_allclose(result.to_numpy(), np.cross(v, w))

    @pytest.mark.parametrize("sizes", [(2, 3), (3, 2), (4, 4)])
    def test_cross_requires_length_three(self, sizes):
        with pytest.raises(DimensionMismatchError):
            cross_product(Array(sizes[0]), Array(sizes[1]))


class TestNorms:

    def test_norms(self):
        v = Array.from_iterable([3.0, -4.0])
        assert norm(v) == 5.0
        assert one_norm(v) == 7.0
        assert infinity_norm(v) == 4.0

    def test_empty(self):
        assert norm(Array(0)) == 0.0
        assert one_norm(Array(0)) == 0.0
        assert infinity_norm(Array(0)) == 0.0

    def test_complex_norm(self):
        assert norm(Array.from_iterable([3 + 4j])) == 5.0

    def test_normalize(self):
        u = normalize(Array.from_iterable([3.0, 4.0]))
        np.testing.assert_allclose(u.to_numpy(), [0.6, 0.8])
        assert norm(u) == pytest.approx(1.0)

    def test_normalize_integer(self):
        u = normalize(Array.from_iterable([0, 2]))
        assert u.dtype == np.float64
        assert u.to_list() == [0.0, 1.0]

    def test_normalize_zero(self):
        with pytest.raises(NumericalError, match="zero vector"):
            normalize(Array(3))

    def test_input_unchanged(self):
        v = Array.from_iterable([3.0, 4.0])
        normalize(v)
        assert v.to_list() == [3.0, 4.0]
