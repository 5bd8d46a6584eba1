import numpy as np
from numba import njit

from constants.params import CUTOFF


# --- Numba compiled building blocks ---
@njit(cache=True)
def _insertion_sort_kernel(arr: np.ndarray, start: int, end: int):
    for i in range(start + 1, end + 1):
        current = arr[i]
        j = i - 1
        while j >= start and arr[j] > current:
            arr[j + 1] = arr[j]
            j -= 1
        arr[j + 1] = current


@njit(cache=True)
def _partition_kernel(arr: np.ndarray, start: int, end: int, bit: int):
    # Elements are widened to uint64 so the shift is always logical.
    shift = np.uint64(bit)
    one = np.uint64(1)
    l = start
    r = end
    while l <= r:
        while l <= end and ((np.uint64(arr[l]) >> shift) & one) == 0:
            l += 1
        while r >= start and ((np.uint64(arr[r]) >> shift) & one) == 1:
            r -= 1
        if l < r:
            tmp = arr[l]
            arr[l] = arr[r]
            arr[r] = tmp
            l += 1
            r -= 1
    return r, l


@njit(cache=True)
def _hi_radix_sort_kernel(arr: np.ndarray, cutoff: int):
    """Sorts an unsigned 1-D array in place. Returns the deepest stack size reached."""
    n = arr.size
    if n <= 1:
        return 0

    max_val = np.uint64(0)
    for i in range(n):
        value = np.uint64(arr[i])
        if value > max_val:
            max_val = value

    if n < cutoff or max_val == 0:
        _insertion_sort_kernel(arr, 0, n - 1)
        return 0

    # floor(log2(max_val)) without going through floating point
    top_bit = -1
    remaining = max_val
    while remaining != 0:
        remaining = remaining >> np.uint64(1)
        top_bit += 1

    # Bit indices strictly decrease from the bottom of the stack to the top,
    # so it never holds more than top_bit + 1 tasks.
    stack = np.empty((top_bit + 2, 3), dtype=np.int64)
    stack[0, 0] = 0
    stack[0, 1] = n - 1
    stack[0, 2] = top_bit
    size = 1
    max_depth = 1

    while size > 0:
        size -= 1
        start = stack[size, 0]
        end = stack[size, 1]
        bit = stack[size, 2]

        while start <= end and bit >= 0:
            if end - start + 1 < cutoff:
                _insertion_sort_kernel(arr, start, end)
                break

            r, l = _partition_kernel(arr, start, end, bit)
            next_bit = bit - 1
            len0 = r - start + 1
            len1 = end - l + 1

            if len0 <= len1:
                next_start = start
                next_end = r
                push_start = l
                push_end = end
            else:
                next_start = l
                next_end = end
                push_start = start
                push_end = r

            push_len = push_end - push_start + 1
            if push_len >= cutoff:
                stack[size, 0] = push_start
                stack[size, 1] = push_end
                stack[size, 2] = next_bit
                size += 1
                if size > max_depth:
                    max_depth = size
            elif push_len > 0:
                _insertion_sort_kernel(arr, push_start, push_end)

            start = next_start
            end = next_end
            bit = next_bit

    return max_depth


# --- Main entry point for NumPy arrays ---
def hi_radix_sort_numba(arr: np.ndarray, cutoff: int = CUTOFF) -> np.ndarray:
    """
    Numba-compiled in-place MSD bit radix sort with an insertion sort cutoff.

    Accepts any 1-D integer array. Signed arrays must not hold negative
    values; they are sorted through an unsigned view of the same buffer.
    Non-native byte order arrays are sorted in a native copy that is
    written back into `arr`. Not stable.

    Returns:
        The same array object, sorted ascending.
    """
    if not isinstance(arr, np.ndarray):
        raise TypeError("Input must be a NumPy array.")
    if arr.dtype.kind not in 'iu':
        raise TypeError(f"Input must be an integer array, got dtype {arr.dtype}.")
    if arr.ndim != 1:
        raise ValueError(f"Input must be one-dimensional, got {arr.ndim} dimensions.")
    if cutoff < 1:
        raise ValueError(f"cutoff must be at least 1, got {cutoff}.")
    if arr.size <= 1:
        return arr

    if not arr.dtype.isnative:
        native = arr.astype(arr.dtype.newbyteorder('='))
        hi_radix_sort_numba(native, cutoff)
        arr[:] = native
        return arr

    work = arr
    if arr.dtype.kind == 'i':
        if arr.min() < 0:
            raise ValueError("Input array contains negative numbers, cannot use bit radix sort.")
        work = arr.view(np.dtype(f'u{arr.itemsize}'))

    _hi_radix_sort_kernel(work, cutoff)
    return arr
