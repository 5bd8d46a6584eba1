"""Tests for the benchmark plotter."""

import os

import pandas as pd

import plotter

HEADER = "Run,Timestamp,Time(s),Size,MElements/s\n"


def _write_stats(path, times, size=1_000_000):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w") as f:
        f.write(HEADER)
        for run, t in enumerate(times, start=1):
            if t == float('inf'):
                f.write(f"{run},2024-01-01 00:00:00,inf,{size},0.0\n")
            else:
                f.write(f"{run},2024-01-01 00:00:00,{t:.6f},{size},{size / t / 1e6:.2f}\n")


def test_get_implementation_sort_key_orders_python_numba_numpy():
    names = ["numpy_sort_stats", "numba_hi_radix_sort_stats", "python_hi_radix_sort_stats"]
    assert sorted(names, key=plotter.get_implementation_sort_key) == [
        "python_hi_radix_sort_stats", "numba_hi_radix_sort_stats", "numpy_sort_stats"]


def test_sanitize_filename():
    assert plotter.sanitize_filename("MElements/s") == "MElements_s"
    assert plotter.sanitize_filename("a b:c") == "a_b_c"


def test_load_data_file_drops_failed_runs(tmp_path):
    path = tmp_path / "impl.txt"
    _write_stats(str(path), [0.5, float('inf'), 0.25])
    df = plotter.load_data_file(str(path))
    assert df["Run"].tolist() == [1, 3]


def test_load_data_file_missing_columns_returns_none(tmp_path):
    path = tmp_path / "bad.txt"
    path.write_text("a,b\n1,2\n")
    assert plotter.load_data_file(str(path)) is None


def test_calculate_stats_excluding_warmup():
    stats = plotter.calculate_stats_excluding_warmup(pd.Series([1.0, 2.0, 3.0]))
    assert stats["mean"] == 2.0
    assert stats["median"] == 2.0
    assert stats["count"] == 3
    empty = plotter.calculate_stats_excluding_warmup(pd.Series([], dtype=float))
    assert empty["count"] == 0


def test_generate_all_plots_writes_plots_and_summary(tmp_path):
    results_dir = tmp_path / "results"
    output_dir = tmp_path / "out"
    size_dir = results_dir / "hi_radix_sort" / "1000000"
    _write_stats(str(size_dir / "python_hi_radix_sort_stats.txt"), [1.0, 0.4, 0.4, 0.4])
    _write_stats(str(size_dir / "numba_hi_radix_sort_stats.txt"), [2.0, 0.1, 0.1, 0.1])
    _write_stats(str(size_dir / "numpy_sort_stats.txt"), [0.05, 0.01, 0.01, 0.01])

    summary = plotter.generate_all_plots(str(results_dir), str(output_dir))

    assert os.path.exists(output_dir / plotter.SUMMARY_STATS_FILE_NAME)
    speedups = summary[summary["Metric"] == "Speedup Factor (Median Time)"]
    numba_speedup = speedups[speedups["Implementation"].str.startswith("numba_hi_radix_sort_stats")]
    assert abs(numba_speedup["Median"].iloc[0] - 4.0) < 1e-6

    plot_dir = output_dir / "hi_radix_sort" / "1000000"
    assert (plot_dir / "python_hi_radix_sort_stats_time_vs_run_excl_warmup.png").exists()
    assert (plot_dir / "comparison_median_Times_excl_warmup_log.png").exists()

    time_rows = summary[(summary["Metric"] == "Time(s)") & (summary["Implementation"] == "python_hi_radix_sort_stats")]
    assert time_rows["Count"].iloc[0] == 3


def test_generate_all_plots_without_results_returns_none(tmp_path):
    assert plotter.generate_all_plots(str(tmp_path / "missing"), str(tmp_path / "out")) is None
