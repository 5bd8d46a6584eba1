from dataclasses import dataclass

from constants.params import CUTOFF


@dataclass
class SortStats:
    """Counters collected by hi_radix_sort when a stats object is passed in."""
    partitions: int = 0
    swaps: int = 0
    insertion_sorts: int = 0
    insertion_shifts: int = 0
    tasks_pushed: int = 0
    max_stack_depth: int = 0


def insertion_sort(arr, start, end, stats=None):
    """Sorts arr[start..end] (inclusive) in place."""
    if stats is not None:
        stats.insertion_sorts += 1
    for i in range(start + 1, end + 1):
        current = arr[i]
        j = i - 1
        while j >= start and arr[j] > current:
            arr[j + 1] = arr[j]
            j -= 1
        if stats is not None:
            stats.insertion_shifts += i - 1 - j
        arr[j + 1] = current


def partition_by_bit(arr, start, end, bit, stats=None):
    """
    Moves every element of arr[start..end] whose `bit` is 0 in front of every
    element whose `bit` is 1, using two pointers that meet in the middle.

    Args:
        arr: Mutable sequence of non-negative integers.
        start: First index of the range.
        end: Last index of the range (inclusive).
        bit: Bit position to split on, 0 being the least significant.
        stats: Optional SortStats to update.

    Returns:
        (r, l): the 0-group occupies arr[start..r] and the 1-group arr[l..end].
        Either group may be empty (r < start or l > end).
    """
    l = start
    r = end
    while l <= r:
        while l <= end and ((arr[l] >> bit) & 1) == 0:
            l += 1
        while r >= start and ((arr[r] >> bit) & 1) == 1:
            r -= 1
        if l < r:
            arr[l], arr[r] = arr[r], arr[l]
            l += 1
            r -= 1
            if stats is not None:
                stats.swaps += 1
    if stats is not None:
        stats.partitions += 1
    return r, l


def initial_bit_index(max_val):
    """Highest bit that can differ between elements: floor(log2(max_val)), or 0 when max_val <= 0."""
    if max_val <= 0:
        return 0
    return int(max_val).bit_length() - 1


def hi_radix_sort(arr, cutoff=CUTOFF, stats=None):
    """
    Sorts a sequence of non-negative integers in place with an iterative
    MSD bit radix sort, switching to insertion sort for partitions smaller
    than `cutoff`.

    Recursion is replaced by an explicit stack of (start, end, bit) tasks.
    After each split the smaller partition is processed right away and the
    larger one is pushed (or insertion sorted when already below the cutoff),
    so the stack never holds more than one task per bit.

    The sort is NOT stable: elements with equal keys may be reordered.

    Args:
        arr: Mutable sequence (list, array.array, ...) of non-negative integers.
        cutoff: Partition size below which insertion sort takes over.
        stats: Optional SortStats collecting operation counts.

    Returns:
        The same `arr` object, sorted ascending.

    Raises:
        ValueError: If cutoff < 1 or arr holds a negative number.
    """
    if cutoff < 1:
        raise ValueError(f"cutoff must be at least 1, got {cutoff}.")
    n = len(arr)
    if n <= 1:
        return arr

    min_val = arr[0]
    max_val = arr[0]
    for value in arr:
        if value > max_val:
            max_val = value
        elif value < min_val:
            min_val = value
    if min_val < 0:
        raise ValueError("Input contains negative numbers, cannot use bit radix sort.")

    if n < cutoff or max_val <= 0:
        insertion_sort(arr, 0, n - 1, stats)
        return arr

    stack = [(0, n - 1, initial_bit_index(max_val))]
    if stats is not None:
        stats.tasks_pushed += 1
        stats.max_stack_depth = 1

    while stack:
        start, end, bit = stack.pop()

        # Follow this branch, always descending into the smaller side.
        while start <= end and bit >= 0:
            if end - start + 1 < cutoff:
                insertion_sort(arr, start, end, stats)
                break

            r, l = partition_by_bit(arr, start, end, bit, stats)
            next_bit = bit - 1
            len0 = r - start + 1
            len1 = end - l + 1

            if len0 <= len1:
                next_start, next_end = start, r
                push_start, push_end = l, end
            else:
                next_start, next_end = l, end
                push_start, push_end = start, r

            push_len = push_end - push_start + 1
            if push_len >= cutoff:
                stack.append((push_start, push_end, next_bit))
                if stats is not None:
                    stats.tasks_pushed += 1
                    stats.max_stack_depth = max(stats.max_stack_depth, len(stack))
            elif push_len > 0:
                insertion_sort(arr, push_start, push_end, stats)

            start, end, bit = next_start, next_end, next_bit

        # A branch that ran out of bits holds equal elements: every element
        # agrees on all bits above the exhausted one.

    return arr
