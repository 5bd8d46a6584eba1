"""Tests for the public sort entry point."""

from array import array

import numpy as np
import pytest

from algorithms.radix_sort.sort import sort


def test_list_is_sorted_in_place():
    arr = [987654321, 123456789, 500000000, 1, 1000000000, 42]
    result = sort(arr)
    assert result is arr
    assert arr == [1, 42, 123456789, 500000000, 987654321, 1000000000]


def test_numpy_array_is_sorted_in_place():
    arr = np.array([5, 2, 8, 2, 5, 1, 8, 3] * 10, dtype=np.uint32)
    result = sort(arr)
    assert result is arr
    np.testing.assert_array_equal(arr, np.sort(np.array([5, 2, 8, 2, 5, 1, 8, 3] * 10)))


def test_array_module_array_is_sorted_in_place():
    arr = array('L', [9, 3, 7, 1] * 8)
    result = sort(arr)
    assert result is arr
    assert list(arr) == sorted([9, 3, 7, 1] * 8)


@pytest.mark.parametrize("container", [list, lambda data: np.array(data, dtype=np.int64)])
def test_empty_and_single_element_are_unchanged(container):
    empty = container([])
    single = container([42])
    assert sort(empty) is empty
    assert len(empty) == 0
    assert sort(single) is single
    assert list(single) == [42]


def test_python_and_numba_paths_agree():
    rng = np.random.RandomState(9)
    data = rng.randint(0, 2 ** 30 - 1, size=5000, dtype=np.int64)
    as_list = data.tolist()
    as_array = data.copy()
    sort(as_list, cutoff=8)
    sort(as_array, cutoff=8)
    assert as_list == as_array.tolist()


def test_sorting_twice_gives_same_result():
    rng = np.random.RandomState(10)
    arr = rng.randint(0, 1000, size=2000).tolist()
    first = list(sort(arr))
    assert sort(arr) == first
