"""Tests for the HI radix sort benchmark runner."""

import os

import pandas as pd
import pytest

from constants.params import HI_RADIX_SORT_PATH
from performance_profiling.radix_sort import profile_hi_radix_sort as profiler


def _stats_dir(tmp_path, size):
    return os.path.join(str(tmp_path), HI_RADIX_SORT_PATH, str(size))


def test_profile_writes_one_file_per_implementation(tmp_path):
    timings = profiler.profile_and_save_stats(2000, 3, results_base_path=str(tmp_path))

    assert set(timings) == set(profiler.IMPLEMENTATIONS)
    output_dir = _stats_dir(tmp_path, 2000)
    for key, config in profiler.IMPLEMENTATIONS.items():
        assert len(timings[key]) == 3
        assert all(t != float('inf') for t in timings[key])
        df = pd.read_csv(os.path.join(output_dir, config["file_suffix"]))
        assert list(df.columns) == ["Run", "Timestamp", "Time(s)", "Size", "MElements/s"]
        assert df["Run"].tolist() == [1, 2, 3]
        assert (df["Size"] == 2000).all()


def test_profile_can_skip_python_implementation(tmp_path):
    timings = profiler.profile_and_save_stats(500, 2, run_python_impl=False, results_base_path=str(tmp_path))
    assert "python_hi_radix_sort" not in timings
    assert not os.path.exists(os.path.join(_stats_dir(tmp_path, 500), 'python_hi_radix_sort_stats.txt'))


def test_failed_implementation_is_recorded_as_inf(tmp_path, monkeypatch):
    def broken_sort(arr_np, cutoff):
        raise RuntimeError("boom")

    def unsorted_result(arr_np, cutoff):
        return 0.001, arr_np[::-1]

    implementations = {
        "broken": {"file_suffix": "broken_stats.txt", "func": broken_sort, "name_print": "Broken"},
        "unsorted": {"file_suffix": "unsorted_stats.txt", "func": unsorted_result, "name_print": "Unsorted"},
    }
    monkeypatch.setattr(profiler, "IMPLEMENTATIONS", implementations)

    timings = profiler.profile_and_save_stats(300, 2, results_base_path=str(tmp_path))

    assert timings["broken"] == [float('inf'), float('inf')]
    assert timings["unsorted"] == [float('inf'), float('inf')]
    df = pd.read_csv(os.path.join(_stats_dir(tmp_path, 300), "broken_stats.txt"))
    assert (df["MElements/s"] == 0.0).all()


@pytest.mark.parametrize(
    "exec_time, expected_tail",
    [(float('inf'), ",inf,1000,0.0\n"), (0.5, ",0.500000,1000,0.00\n"), (0.0001, ",0.000100,1000,10.00\n")],
)
def test_format_result_line(exec_time, expected_tail):
    line = profiler.format_result_line(4, exec_time, 1000)
    assert line.startswith("4,")
    assert line.endswith(expected_tail)
