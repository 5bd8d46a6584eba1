import os
import time
import traceback
import platform
import argparse

import numpy as np
import psutil

from algorithms.radix_sort.hi_radix_sort import hi_radix_sort
from algorithms.radix_sort.numba_hi_radix_sort import hi_radix_sort_numba
from constants.params import RESULTS_BASE_PATH, HI_RADIX_SORT_PATH, DATE_FORMAT, RANDOM_SEED, \
    MAX_RANDOM_VALUE, RUNS, MID_ARRAY_LENGTH, CUTOFF
from utils.utils import generate_random_array, is_sorted, get_cpu_info

DATA_TYPE_RADIX = np.uint32
STATS_HEADER = "Run,Timestamp,Time(s),Size,MElements/s\n"


def _sort_python_list(arr_np, cutoff):
    arr_list = arr_np.tolist()
    start_time = time.perf_counter()
    hi_radix_sort(arr_list, cutoff)
    return time.perf_counter() - start_time, arr_list


def _sort_numba(arr_np, cutoff):
    arr_input = arr_np.copy()
    start_time = time.perf_counter()
    hi_radix_sort_numba(arr_input, cutoff)
    return time.perf_counter() - start_time, arr_input


def _sort_numpy(arr_np, cutoff):
    start_time = time.perf_counter()
    sorted_arr = np.sort(arr_np)
    return time.perf_counter() - start_time, sorted_arr


IMPLEMENTATIONS = {
    "python_hi_radix_sort": {
        "file_suffix": 'python_hi_radix_sort_stats.txt',
        "func": _sort_python_list,
        "name_print": "Pure Python HI Radix Sort",
    },
    "numba_hi_radix_sort": {
        "file_suffix": 'numba_hi_radix_sort_stats.txt',
        "func": _sort_numba,
        "name_print": "Numba HI Radix Sort",
    },
    "numpy_sort": {
        "file_suffix": 'numpy_sort_stats.txt',
        "func": _sort_numpy,
        "name_print": "NumPy np.sort (baseline)",
    },
}


def format_result_line(run_number, exec_time, array_size):
    timestamp = time.strftime(DATE_FORMAT)
    if exec_time == float('inf'):
        return f"{run_number},{timestamp},inf,{array_size},0.0\n"
    melements_per_sec = (array_size / exec_time) / 1e6 if exec_time > 0 else 0.0
    return f"{run_number},{timestamp},{exec_time:.6f},{array_size},{melements_per_sec:.2f}\n"


def profile_and_save_stats(
        array_size: int,
        total_runs: int,
        run_python_impl: bool = True,
        cutoff: int = CUTOFF,
        results_base_path: str = RESULTS_BASE_PATH
):
    """
    Times every active implementation on the same seeded arrays and writes one
    stats file per implementation under <results>/hi_radix_sort/<size>/.

    Returns:
        Dict mapping implementation key to the list of measured times
        (float('inf') for failed or unsorted runs).
    """
    print(f"\nInfo: Profiling HI Radix Sort for size {array_size:,}")
    print(f"Parameters: Runs={total_runs}, Data Type={DATA_TYPE_RADIX.__name__}, Cutoff={cutoff}")
    if not run_python_impl:
        print("  NOTE: Pure Python implementation will be SKIPPED.")

    output_dir = os.path.join(results_base_path, HI_RADIX_SORT_PATH, str(array_size))
    os.makedirs(output_dir, exist_ok=True)

    active = {key: config for key, config in IMPLEMENTATIONS.items()
              if key != "python_hi_radix_sort" or run_python_impl}
    timings = {key: [] for key in active}
    file_handles = {}

    try:
        for key, config in active.items():
            path = os.path.join(output_dir, config["file_suffix"])
            file_handles[key] = open(path, 'w')
            file_handles[key].write(STATS_HEADER)

        print("  Warming up Numba HI Radix Sort JIT compiler...")
        warmup = generate_random_array(min(1000, array_size), MAX_RANDOM_VALUE, RANDOM_SEED - 1, DATA_TYPE_RADIX)
        hi_radix_sort_numba(warmup, cutoff)
        print("  Numba warm-up complete.")

        for run_number in range(1, total_runs + 1):
            print(f"  Starting Run {run_number}/{total_runs}...")
            arr_np_original = generate_random_array(array_size, MAX_RANDOM_VALUE, RANDOM_SEED + run_number,
                                                    DATA_TYPE_RADIX)

            for key, config in active.items():
                impl_name_print = config["name_print"]
                exec_time = float('inf')
                try:
                    exec_time, result = config["func"](arr_np_original, cutoff)
                    if len(result) != array_size or not is_sorted(result):
                        print(f"      Error: {impl_name_print} produced an unsorted result in run {run_number}.")
                        exec_time = float('inf')
                except Exception as e:
                    print(f"      Error during {impl_name_print} profiling for run {run_number}: {e}")
                    traceback.print_exc()

                timings[key].append(exec_time)
                file_handles[key].write(format_result_line(run_number, exec_time, array_size))
                if exec_time != float('inf'):
                    print(f"      {impl_name_print} Run {run_number}: {exec_time:.6f}s, "
                          f"MElements/s: {(array_size / exec_time) / 1e6 if exec_time > 0 else 0.0:.2f}")
        print(f"  Finished all runs for size {array_size:,}.")
    finally:
        for fh in file_handles.values():
            if not fh.closed:
                fh.close()

    return timings


def run_hi_radix_sort_benchmark(size: int, runs: int = RUNS, run_python: bool = True, cutoff: int = CUTOFF,
                                results_base_path: str = RESULTS_BASE_PATH):
    print(f"CPU Info: {get_cpu_info()} ({platform.processor()})")
    print(f"CPU Cores: {psutil.cpu_count(logical=False)} physical, {psutil.cpu_count(logical=True)} logical")
    return profile_and_save_stats(
        array_size=size,
        total_runs=runs,
        run_python_impl=run_python,
        cutoff=cutoff,
        results_base_path=results_base_path
    )


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Profiler for HI Radix Sort implementations.")
    parser.add_argument("--size", type=int, default=MID_ARRAY_LENGTH, help="Number of elements in the array to sort.")
    parser.add_argument("--runs", type=int, default=RUNS, help="Number of times to run each benchmark.")
    parser.add_argument("--cutoff", type=int, default=CUTOFF, help="Insertion sort cutoff.")
    parser.add_argument("--no_python", action="store_true",
                        help="If set, skips the pure Python implementation.")
    args = parser.parse_args()

    if args.size >= 1_000_000 and not args.no_python:
        print(f"Note: For array size {args.size:,}, the pure Python sort might be very slow.")

    run_hi_radix_sort_benchmark(size=args.size, runs=args.runs, run_python=not args.no_python, cutoff=args.cutoff)
    print("\nHI Radix Sort profiling complete. Results saved to respective files.")
