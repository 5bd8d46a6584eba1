import numpy as np

from algorithms.radix_sort.hi_radix_sort import hi_radix_sort
from algorithms.radix_sort.numba_hi_radix_sort import hi_radix_sort_numba
from constants.params import CUTOFF


def sort(arr, cutoff=CUTOFF):
    """
    Sorts non-negative integers in place and returns the same object.

    NumPy arrays use the Numba-compiled sorter, any other mutable sequence
    (list, array.array) the pure-Python one. The result is not stable:
    equal keys may come out in a different relative order.
    """
    if isinstance(arr, np.ndarray):
        return hi_radix_sort_numba(arr, cutoff)
    return hi_radix_sort(arr, cutoff)
