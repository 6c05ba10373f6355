"""
Tests for the Array container.

Validates:
    - Construction (size, fill value, randomize, literals, capacity)
    - Bounds checking for every size, including empty arrays
    - Growth: push doubles capacity, pop shrinks, data survives
    - Deep copies never alias
    - Element kind is preserved on writes
    - Arithmetic and conversions
"""

import copy
from fractions import Fraction

import numpy as np
import pytest

from mathx import goodrand
from mathx.containers import Array
from mathx.core.exceptions import (
    DimensionMismatchError,
    IndexOutOfRangeError,
    InvalidDimensionError,
    InvalidSizeError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Construction
# ═══════════════════════════════════════════════════════════════════════


class TestConstruction:

    def test_default_is_empty(self):
        a = Array()
        assert a.size == 0
        assert a.capacity == 0
        assert a.dtype == np.float64

    def test_zeros(self):
        a = Array(4)
        assert a.to_list() == [0.0, 0.0, 0.0, 0.0]
        assert a.capacity == 4

    def test_fill_value_sets_dtype(self):
        a = Array(3, 7)
        assert np.issubdtype(a.dtype, np.integer)
        assert a.to_list() == [7, 7, 7]

    def test_fill_value_with_dtype(self):
        a = Array(2, 1.5, dtype=np.float32)
        assert a.dtype == np.float32

    def test_negative_size(self):
        with pytest.raises(InvalidSizeError):
            Array(-1)

    def test_value_and_randomize_conflict(self):
        with pytest.raises(ValidationError, match="either value or randomize"):
            Array(3, 1.0, randomize=True)

    def test_randomize_is_reproducible(self):
        goodrand.seed(3)
        first = Array(5, randomize=True)
        goodrand.seed(3)
        second = Array(5, randomize=True)
        assert first == second
        assert all(0.0 <= v < 1.0 for v in first)

    def test_randomize_integers_in_range(self):
        a = Array(200, randomize=True, dtype=np.int64)
        values = a.to_numpy()
        assert values.min() >= 0
        assert values.max() <= 10

    def test_from_iterable(self):
        a = Array.from_iterable([1.0, 2.0, 3.0])
        assert a.size == 3
        assert a.capacity == 3
        assert a.to_list() == [1.0, 2.0, 3.0]

    def test_from_iterable_empty(self):
        a = Array.from_iterable([])
        assert a.size == 0

    def test_from_iterable_fractions(self):
        a = Array.from_iterable([Fraction(1, 3), Fraction(2, 3)], dtype=object)
        assert a[0] + a[1] == 1

    def test_from_numpy_copies(self):
        values = np.array([1.0, 2.0])
        a = Array.from_numpy(values)
        values[0] = 99.0
        assert a[0] == 1.0

    def test_from_numpy_rejects_2d(self):
        with pytest.raises(InvalidDimensionError, match="1D"):
            Array.from_numpy(np.zeros((2, 2)))

    def test_rejects_strings(self):
        with pytest.raises(ValidationError):
            Array.from_iterable(["a", "b"])

    def test_with_capacity(self):
        a = Array.with_capacity(16)
        assert a.size == 0
        assert a.capacity == 16


# ═══════════════════════════════════════════════════════════════════════
# Element access
# ═══════════════════════════════════════════════════════════════════════


class TestAccess:

    def test_get_set(self):
        a = Array(3)
        a[1] = 5.0
        assert a[1] == 5.0
        assert a.get(1) == 5.0

    @pytest.mark.parametrize("size", [0, 1, 2, 7])
    def test_index_equal_to_size(self, size):
        a = Array(size)
        with pytest.raises(IndexOutOfRangeError):
            a[size]
        with pytest.raises(IndexOutOfRangeError):
            a[size] = 1.0

    @pytest.mark.parametrize("size", [0, 1, 2, 7])
    def test_negative_index(self, size):
        a = Array(size)
        with pytest.raises(IndexOutOfRangeError):
            a[-1]

    def test_out_of_range_is_index_error(self):
        with pytest.raises(IndexError):
            Array(2)[2]

    def test_slice_rejected(self):
        with pytest.raises(TypeError):
            Array(3)[0:2]

    def test_float_into_int_rejected(self):
        a = Array(2, 0)
        with pytest.raises(TypeError, match="cannot store"):
            a[0] = 1.5

    def test_from_iterable_float_into_int_rejected(self):
        with pytest.raises(TypeError, match="cannot store"):
            Array.from_iterable([1.5, 2.7], dtype=int)

    def test_from_iterable_widening_dtype(self):
        a = Array.from_iterable([1, 2], dtype=np.float32)
        assert a.dtype == np.float32
        assert a.to_list() == [1.0, 2.0]
        assert Array.from_iterable([], dtype=np.int32).dtype == np.int32

    def test_complex_into_float_rejected(self):
        a = Array(2)
        with pytest.raises(TypeError):
            a[0] = 1 + 2j

    def test_int_into_float_accepted(self):
        a = Array(2)
        a[0] = 3
        assert a[0] == 3.0

    def test_assign(self):
        a = Array(3)
        a.assign(np.array([1.0, 2.0, 3.0]))
        assert a.to_list() == [1.0, 2.0, 3.0]

    def test_assign_wrong_shape_leaves_data(self):
        a = Array.from_iterable([1.0, 2.0])
        with pytest.raises(DimensionMismatchError):
            a.assign(np.zeros(3))
        assert a.to_list() == [1.0, 2.0]


# ═══════════════════════════════════════════════════════════════════════
# Growth
# ═══════════════════════════════════════════════════════════════════════


class TestGrowth:

    def test_push_doubles_capacity(self):
        a = Array()
        capacities = []
        for i in range(5):
            a.push(float(i))
            capacities.append(a.capacity)
        assert capacities == [2, 2, 4, 4, 8]
        assert a.to_list() == [0.0, 1.0, 2.0, 3.0, 4.0]

    def test_push_past_capacity_keeps_data(self):
        a = Array.from_iterable([1.0, 2.0, 3.0])
        a.push(4.0)
        assert a.capacity == 6
        assert a.to_list() == [1.0, 2.0, 3.0, 4.0]

    def test_extend(self):
        a = Array.from_iterable([1])
        a.extend([2, 3])
        assert a.to_list() == [1, 2, 3]

    def test_pop_returns_last(self):
        a = Array.from_iterable([1.0, 2.0, 3.0])
        assert a.pop() == 3.0
        assert a.size == 2

    def test_pop_shrinks(self):
        a = Array.with_capacity(8)
        a.extend([1.0, 2.0, 3.0])
        a.pop()
        assert a.size == 2
        assert a.capacity == 4
        assert a.to_list() == [1.0, 2.0]

    def test_pop_last_releases_storage(self):
        a = Array.from_iterable([1.0])
        a.pop()
        assert a.size == 0
        assert a.capacity == 0

    def test_pop_empty(self):
        with pytest.raises(IndexOutOfRangeError, match="empty"):
            Array().pop()

    def test_reserve(self):
        a = Array.from_iterable([1.0])
        a.reserve(10)
        assert a.capacity == 10
        a.reserve(2)
        assert a.capacity == 10
        assert a.to_list() == [1.0]

    def test_clear(self):
        a = Array(4)
        a.clear()
        assert a.size == 0
        assert a.capacity == 0


# ═══════════════════════════════════════════════════════════════════════
# Copies and views
# ═══════════════════════════════════════════════════════════════════════


class TestCopies:

    def test_copy_is_independent(self):
        a = Array.from_iterable([1.0, 2.0])
        b = a.copy()
        b[0] = 10.0
        assert a[0] == 1.0
        assert b.capacity == b.size

    def test_copy_module(self):
        a = Array.from_iterable([1.0, 2.0])
        for b in (copy.copy(a), copy.deepcopy(a)):
            b[1] = 0.0
            assert a[1] == 2.0

    def test_deepcopy_copies_object_elements(self):
        a = Array(2, dtype=object)
        a[0] = [1]
        b = copy.deepcopy(a)
        b[0].append(2)
        assert a[0] == [1]
        assert b.size == 2

    def test_as_numpy_is_read_only(self):
        a = Array(3)
        view = a.as_numpy()
        with pytest.raises(ValueError):
            view[0] = 1.0

    def test_to_numpy_is_a_copy(self):
        a = Array(2)
        values = a.to_numpy()
        values[0] = 5.0
        assert a[0] == 0.0


# ═══════════════════════════════════════════════════════════════════════
# Protocols and arithmetic
# ═══════════════════════════════════════════════════════════════════════


class TestProtocols:

    def test_len_and_iter(self):
        a = Array.from_iterable([1, 2, 3])
        assert len(a) == 3
        assert list(a) == [1, 2, 3]

    def test_equality(self):
        assert Array.from_iterable([1.0, 2.0]) == Array.from_iterable([1.0, 2.0])
        assert Array.from_iterable([1.0, 2.0]) != Array.from_iterable([1.0])
        assert Array(0) == Array.with_capacity(5)

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(Array(1))

    def test_to_string(self):
        assert Array.from_iterable([1.0, 2.0]).to_string() == "[ 1.0 2.0 ]^T"
        assert str(Array()) == "[ ]^T"

    def test_repr_round_trip_information(self):
        assert repr(Array.from_iterable([1.0])) == "Array([1.0], dtype=float64)"

    def test_add_sub(self):
        a = Array.from_iterable([1.0, 2.0])
        b = Array.from_iterable([3.0, 5.0])
        assert (a + b).to_list() == [4.0, 7.0]
        assert (b - a).to_list() == [2.0, 3.0]

    def test_add_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            Array(2) + Array(3)

    def test_scalar_multiply(self):
        a = Array.from_iterable([1.0, -2.0])
        assert (2 * a).to_list() == [2.0, -4.0]
        assert (a * 0.5).to_list() == [0.5, -1.0]
        assert (np.float64(2.0) * a).to_list() == [2.0, -4.0]
        assert (-a).to_list() == [-1.0, 2.0]

    def test_dot(self):
        a = Array.from_iterable([1.0, 2.0, 3.0])
        assert a @ a == 14.0
