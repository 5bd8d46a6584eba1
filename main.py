import os
import sys
import time
import argparse
import traceback

import numpy as np

from algorithms.radix_sort.sort import sort
from constants.params import CUTOFF, RUNS, SMALL_ARRAY_LENGTH, MID_ARRAY_LENGTH, BIG_ARRAY_LENGTH, \
    MAX_RANDOM_VALUE, RANDOM_TEST_SIZES, RESULTS_BASE_PATH
from utils.utils import is_sorted, generate_random_array, get_formatted_elapsed_time, write_system_info

TEST_CASES = [
    {"name": "Empty Array", "data": []},
    {"name": "Single Element", "data": [42]},
    {"name": "Two Elements (Sorted)", "data": [10, 20]},
    {"name": "Two Elements (Unsorted)", "data": [20, 10]},
    {"name": "Already Sorted (Small)", "data": [1, 2, 3, 4, 5, 6, 7, 8, 9, 10]},
    {"name": "Reverse Sorted (Small)", "data": [10, 9, 8, 7, 6, 5, 4, 3, 2, 1]},
    {"name": "With Duplicates", "data": [5, 2, 8, 2, 5, 1, 8, 3]},
    {"name": "All Same Elements", "data": [7, 7, 7, 7, 7, 7, 7, 7, 7, 7]},
    {"name": "Elements Around CUTOFF", "data": [15, 1, 14, 2, 13, 3, 12, 4, 11, 5, 10, 6, 9, 7, 8, 16]},
    {"name": "Values including 0", "data": [5, 0, 3, 8, 0, 1]},
    {"name": "All Zeros", "data": [0, 0, 0, 0, 0]},
    {"name": "Large Numbers (Small Array)", "data": [987654321, 123456789, 500000000, 1, 1000000000, 42]},
]

BENCHMARK_SIZES = [("SMALL", SMALL_ARRAY_LENGTH), ("MID", MID_ARRAY_LENGTH), ("BIG", BIG_ARRAY_LENGTH)]


def build_test_cases(random_sizes=RANDOM_TEST_SIZES, max_value=MAX_RANDOM_VALUE):
    cases = list(TEST_CASES)
    for size in random_sizes:
        cases.append({
            "name": f"Random Array (Size {size})",
            "generate": lambda size=size: generate_random_array(size, max_value),
        })
    return cases


def _prepare_input(test_case, impl):
    if "generate" in test_case:
        arr = test_case["generate"]()
    else:
        arr = np.array(test_case["data"], dtype=np.int64)
    if impl == "numba":
        return arr.copy()
    return arr.tolist()


def run_test_suite(random_sizes=RANDOM_TEST_SIZES, impl="python", cutoff=CUTOFF):
    """
    Sorts every test case with the chosen implementation, printing the size,
    time taken and whether the result is sorted.

    Returns:
        Number of failed cases.
    """
    print("--- HI_RadixSort Test Suite ---")
    print(f"Implementation: {impl}")
    print(f"Insertion Sort CUTOFF: {cutoff}")
    print("---------------------------------")

    if impl == "numba":
        # Keep JIT compilation out of the first timing
        sort(np.arange(cutoff * 2, 0, -1, dtype=np.int64), cutoff)

    failures = 0
    for test_case in build_test_cases(random_sizes):
        arr = _prepare_input(test_case, impl)
        array_size = len(arr)

        print(f"\n--- Test Case: {test_case['name']} ---")
        try:
            start = time.perf_counter()
            sorted_arr = sort(arr, cutoff)
            elapsed_time_ms = (time.perf_counter() - start) * 1000
        except Exception as e:
            print(f"Error: Sorting raised {e}")
            traceback.print_exc()
            failures += 1
            continue

        is_arr_sorted = sorted_arr is arr and is_sorted(sorted_arr)
        print(f"Array Size: {array_size}")
        print(f"Time Taken: {elapsed_time_ms:.3f} ms")
        print(f"Sorted Correctly: {'Yes' if is_arr_sorted else 'No'}")
        if not is_arr_sorted:
            print("Sorting failed for this case!")
            failures += 1

    print("\n--- Test Suite Complete ---")
    return failures


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="HI Radix Sort test suite and benchmark runner.")
    parser.add_argument("--impl", choices=["python", "numba"], default="python",
                        help="Sort implementation used by the test suite.")
    parser.add_argument("--cutoff", type=int, default=CUTOFF, help="Insertion sort cutoff.")
    parser.add_argument("--max-size", type=int, default=max(RANDOM_TEST_SIZES),
                        help="Largest random array size included in the test suite.")
    parser.add_argument("--benchmark", action="store_true",
                        help="Also run the benchmark and write results to the results folder.")
    parser.add_argument("--size", type=int, default=None,
                        help="Benchmark only this array size instead of the SMALL/MID/BIG sizes.")
    parser.add_argument("--runs", type=int, default=RUNS, help="Benchmark runs per implementation.")
    parser.add_argument("--plot", action="store_true", help="Generate plots from the results folder.")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    start_time = time.time()

    random_sizes = [size for size in RANDOM_TEST_SIZES if size <= args.max_size]
    failures = run_test_suite(random_sizes, impl=args.impl, cutoff=args.cutoff)
    print(f"\nElapsed time: {get_formatted_elapsed_time(start_time)}")

    if args.benchmark:
        from performance_profiling.radix_sort.profile_hi_radix_sort import run_hi_radix_sort_benchmark

        os.makedirs(RESULTS_BASE_PATH, exist_ok=True)
        system_info_path = os.path.join(RESULTS_BASE_PATH, "system_info.txt")
        write_system_info(system_info_path)
        print(f"System info successfully written to {system_info_path}")
        benchmark_sizes = [("CUSTOM", args.size)] if args.size is not None else BENCHMARK_SIZES
        for label, size in benchmark_sizes:
            print(f"\nRunning {label} HI Radix Sort benchmark (size {size:,})...")
            # Pure Python is skipped from BIG_ARRAY_LENGTH up
            run_hi_radix_sort_benchmark(size=size, runs=args.runs, run_python=size < BIG_ARRAY_LENGTH,
                                        cutoff=args.cutoff)
            print(f"\nElapsed time: {get_formatted_elapsed_time(start_time)}")

    if args.plot:
        from plotter import generate_all_plots

        generate_all_plots()

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
