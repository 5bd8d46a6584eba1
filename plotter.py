import os
import re
from collections import defaultdict

import pandas as pd
import matplotlib.pyplot as plt

# --- Configuration ---
RESULTS_DIR = 'results'
OUTPUT_DIR = 'visualizations_and_stats'
SUMMARY_STATS_FILE_NAME = 'summary_statistics_excl_warmup.csv'
BASELINE_IMPLEMENTATION = 'python_hi_radix_sort_stats'
PERF_COLUMN = 'MElements/s'
# Plotting Aesthetics
FIG_WIDTH = 6
FIG_DPI = 150
COMP_FIG_HEIGHT = 6
RUN_FIG_HEIGHT = 6
COMP_BAR_WIDTH = 0.5
LABEL_FONT_SIZE = 13
TITLE_FONT_SIZE = 15
TICK_FONT_SIZE = 11
LEGEND_FONT_SIZE = 12
ANNOTATION_FONT_SIZE = 12
BAR_LABEL_Y_FACTOR = 1.15
# --- End Configuration ---


# --- Helper Functions ---
def sanitize_filename(name):
    """Removes potentially problematic characters for filenames."""
    name = re.sub(r'[\\/*?:"<>|]+', '_', name)
    name = re.sub(r'\s+', '_', name)
    name = re.sub(r'[^a-zA-Z0-9_.-]', '', name)
    return name


def get_implementation_sort_key(impl_name):
    """
    Orders implementations in comparison plots: 0. pure Python, 1. Numba, 2. NumPy baseline.
    Ties are broken alphabetically.
    """
    name_lower = impl_name.lower()
    if 'numpy' in name_lower:
        return (2, impl_name)
    if 'numba' in name_lower:
        return (1, impl_name)
    return (0, impl_name)


def load_data_file(file_path):
    """Loads data from a single benchmark file."""
    try:
        df = pd.read_csv(file_path, skipinitialspace=True)
        if 'Run' not in df.columns or 'Time(s)' not in df.columns:
            print(f"Warning: Required columns ('Run', 'Time(s)') not found in {file_path}. Skipping.")
            return None
        df['Time(s)'] = pd.to_numeric(df['Time(s)'], errors='coerce')
        # Failed runs are written as inf
        df = df[df['Time(s)'] != float('inf')].dropna(subset=['Time(s)']).copy()

        if PERF_COLUMN in df.columns:
            df[PERF_COLUMN] = pd.to_numeric(df[PERF_COLUMN], errors='coerce')
            df = df[df[PERF_COLUMN] > 0]
            df = df.dropna(subset=[PERF_COLUMN])

        if df.empty:
            return None
        return df
    except FileNotFoundError:
        print(f"Error: File not found {file_path}")
        return None
    except pd.errors.EmptyDataError:
        print(f"Warning: Skipping empty file {file_path}")
        return None


def _plot_metric_per_run(df_plot, metric_col, marker, color, title, path):
    plt.figure(figsize=(FIG_WIDTH, RUN_FIG_HEIGHT))
    median = df_plot[metric_col].median()
    stdev = df_plot[metric_col].std() if len(df_plot[metric_col].dropna()) >= 2 else 0.0

    plt.plot(df_plot['Run'], df_plot[metric_col], marker=marker, linestyle='-', color=color, label=metric_col)
    if pd.notna(median):
        fmt = '{:,.2f}' if median >= 1 else '{:.4f}'
        plt.axhline(median, color='r', linestyle='--', linewidth=1.5, label=f'Median: {fmt.format(median)}')
    if pd.notna(stdev) and stdev > 1e-9:
        plt.text(0.98, 0.95, f'Std Dev: {stdev:.4f}', transform=plt.gca().transAxes,
                 fontsize=ANNOTATION_FONT_SIZE, verticalalignment='top', horizontalalignment='right',
                 bbox=dict(boxstyle='round,pad=0.3', fc='white', alpha=0.8))

    plt.xlabel('Run Number (Warm-up Excluded)', fontsize=LABEL_FONT_SIZE)
    plt.ylabel(metric_col, fontsize=LABEL_FONT_SIZE)
    plt.title(title, fontsize=TITLE_FONT_SIZE)
    plt.xticks(fontsize=TICK_FONT_SIZE)
    plt.yticks(fontsize=TICK_FONT_SIZE)
    plt.grid(True, which='both', linestyle='--', linewidth=0.5)
    plt.legend(fontsize=LEGEND_FONT_SIZE)
    plt.tight_layout()
    try:
        plt.savefig(path, dpi=FIG_DPI)
    except OSError as e:
        print(f"Error saving plot {path}: {e}")
    plt.close()


def plot_individual_run(df, algorithm, size_str, implementation, output_dir):
    """Generates and saves time and throughput plots for one benchmark file, excluding Run 1."""
    df_plot = df[df['Run'] > 1]
    if df_plot.empty:
        print(f"Info: Skipping individual plots for {algorithm}/{size_str}/{implementation} - "
              f"no data points left after excluding Run 1.")
        return

    base_filename = sanitize_filename(implementation)
    _plot_metric_per_run(
        df_plot, 'Time(s)', 'o', None,
        f'Execution Time per Run\nAlg: {algorithm}\nSize: {size_str}\nImpl: {implementation}',
        os.path.join(output_dir, f"{base_filename}_time_vs_run_excl_warmup.png"))

    if PERF_COLUMN in df_plot.columns and not df_plot[PERF_COLUMN].empty:
        _plot_metric_per_run(
            df_plot, PERF_COLUMN, 'x', 'green',
            f'{PERF_COLUMN} per Run\nAlg: {algorithm}\nSize: {size_str}\nImpl: {implementation}',
            os.path.join(output_dir, f"{base_filename}_{sanitize_filename(PERF_COLUMN)}_vs_run_excl_warmup.png"))


def calculate_stats_excluding_warmup(series):
    """Calculates stats for a series already excluding the warm-up run."""
    if not isinstance(series, pd.Series) or series.empty or series.isnull().all():
        count = len(series) if isinstance(series, pd.Series) else 0
        return {'mean': float('nan'), 'median': float('nan'), 'stdev': float('nan'), 'count': count}
    valid_data = series.dropna()
    stdev = valid_data.std() if len(valid_data) >= 2 else 0.0
    return {'mean': series.mean(), 'median': series.median(), 'stdev': stdev, 'count': len(series)}


def plot_comparison(stats_dict, metric_name, unit, algorithm, size_str, output_dir, use_median=False):
    """Bar plot (log scale) of the mean or median of one metric across implementations."""
    if not stats_dict:
        return

    impl_keys = sorted(stats_dict.keys(), key=get_implementation_sort_key)
    stat_key = 'median' if use_median else 'mean'
    plot_title_stat = 'Median' if use_median else 'Average'

    values = [stats_dict[key].get(metric_name, {}).get(stat_key, float('nan')) for key in impl_keys]
    errors = [stats_dict[key].get(metric_name, {}).get('stdev', float('nan')) for key in impl_keys]
    valid_indices = [i for i, v in enumerate(values) if pd.notna(v) and v > 0]
    if not valid_indices:
        return

    labels = [impl_keys[i] for i in valid_indices]
    values = [values[i] for i in valid_indices]
    errors = [errors[i] if pd.notna(errors[i]) else 0 for i in valid_indices]

    plt.figure(figsize=(FIG_WIDTH, COMP_FIG_HEIGHT))
    ax = plt.gca()
    x_positions = range(len(values))
    bars = ax.bar(x_positions, values, yerr=errors, capsize=5, color='skyblue', edgecolor='black',
                  log=True, width=COMP_BAR_WIDTH)

    ax.set_ylabel(f'{plot_title_stat} {metric_name} ({unit})', fontsize=LABEL_FONT_SIZE)
    ax.set_title(f'Comparison of {plot_title_stat} {metric_name}\nAlg: {algorithm}\nSize: {size_str}',
                 fontsize=TITLE_FONT_SIZE)
    ax.set_xticks(x_positions)
    ax.set_xticklabels(labels, rotation=30, ha='right', fontsize=TICK_FONT_SIZE)
    ax.grid(True, which='major', axis='y', linestyle='-', linewidth=0.7)
    ax.grid(True, which='minor', axis='y', linestyle=':', linewidth=0.5)

    max_text_y = 0
    for bar in bars:
        yval = bar.get_height()
        fmt = '{:,.2f}' if abs(yval) >= 1 else '{:.4f}'
        text_y = yval * BAR_LABEL_Y_FACTOR
        max_text_y = max(max_text_y, text_y)
        ax.text(x=bar.get_x() + bar.get_width() / 2.0, y=text_y, s=fmt.format(yval),
                va='bottom', ha='center', fontsize=ANNOTATION_FONT_SIZE)

    plt.tight_layout()
    bottom_lim, top_lim = ax.get_ylim()
    if max_text_y >= top_lim * 0.85:
        ax.set_ylim(bottom=bottom_lim, top=max_text_y * 1.25)
        plt.tight_layout()

    comp_plot_path = os.path.join(
        output_dir, f"comparison_{plot_title_stat.lower()}_{sanitize_filename(metric_name)}_excl_warmup_log.png")
    try:
        plt.savefig(comp_plot_path, dpi=FIG_DPI)
    except OSError as e:
        print(f"Error saving log comparison plot {comp_plot_path}: {e}")
    plt.close()


def collect_results(results_dir):
    """Reads every results/<algorithm>/<size>/<implementation>.txt file into nested dicts of DataFrames."""
    all_data = defaultdict(lambda: defaultdict(dict))
    for root, _, files in os.walk(results_dir):
        for file_name in files:
            if not file_name.endswith('.txt'):
                continue
            file_path = os.path.join(root, file_name)
            parts = os.path.relpath(file_path, results_dir).split(os.sep)
            if len(parts) != 3:
                print(f"Skipping {file_path}: path does not match 'algorithm/size/file.txt'")
                continue
            algorithm, size_str, impl_file = parts
            df = load_data_file(file_path)
            if df is not None:
                all_data[algorithm][size_str][impl_file[:-len('.txt')]] = df
    return all_data


def generate_all_plots(results_dir=RESULTS_DIR, output_dir=OUTPUT_DIR):
    """
    Loads all benchmark files, plots them, and saves summary statistics
    (warm-up run excluded) including the speedup of every implementation
    over the pure Python baseline.

    Returns:
        The summary DataFrame, or None if no data was found.
    """
    os.makedirs(output_dir, exist_ok=True)
    print(f"Input directory: {os.path.abspath(results_dir)}")
    print(f"Output directory: {os.path.abspath(output_dir)}")
    print("NOTE: All statistics and plots will exclude the first run (warm-up).")

    print("\n--- Starting Data Collection ---")
    all_data = collect_results(results_dir)
    print("--- Data Collection Finished ---")

    summary_rows = []
    for algorithm, sizes in all_data.items():
        for size_str, implementations in sizes.items():
            print(f"\nProcessing: Algorithm='{algorithm}', Size='{size_str}'")
            size_output_dir = os.path.join(output_dir, sanitize_filename(algorithm), sanitize_filename(size_str))
            os.makedirs(size_output_dir, exist_ok=True)

            current_run_stats = {}
            for implementation, df in implementations.items():
                plot_individual_run(df, algorithm, size_str, implementation, size_output_dir)
                df_no_warmup = df[df['Run'] > 1]
                impl_stats = {'Time(s)': calculate_stats_excluding_warmup(df_no_warmup['Time(s)'])}
                if PERF_COLUMN in df_no_warmup.columns:
                    impl_stats[PERF_COLUMN] = calculate_stats_excluding_warmup(df_no_warmup[PERF_COLUMN])
                current_run_stats[implementation] = impl_stats

                for metric, stats in impl_stats.items():
                    summary_rows.append({'Algorithm': algorithm, 'Size': size_str, 'Implementation': implementation,
                                         'Metric': metric, 'Mean': stats['mean'], 'Median': stats['median'],
                                         'StdDev': stats['stdev'], 'Count': stats['count']})

            plot_comparison(current_run_stats, 'Time(s)', 's', algorithm, size_str, size_output_dir)
            plot_comparison(current_run_stats, 'Time(s)', 's', algorithm, size_str, size_output_dir, use_median=True)
            plot_comparison(current_run_stats, PERF_COLUMN, PERF_COLUMN, algorithm, size_str, size_output_dir)

            baseline_median = current_run_stats.get(BASELINE_IMPLEMENTATION, {}).get('Time(s)', {}).get(
                'median', float('nan'))
            if pd.isna(baseline_median) or baseline_median <= 1e-9:
                continue
            for implementation, impl_stats in current_run_stats.items():
                if implementation == BASELINE_IMPLEMENTATION:
                    continue
                median_time = impl_stats['Time(s)']['median']
                if pd.notna(median_time) and median_time > 1e-9:
                    speedup = baseline_median / median_time
                    print(f"  {implementation} speedup vs {BASELINE_IMPLEMENTATION} (Median Time): {speedup:.2f}x")
                    summary_rows.append({'Algorithm': algorithm, 'Size': size_str,
                                         'Implementation': f'{implementation} Speedup vs {BASELINE_IMPLEMENTATION}',
                                         'Metric': 'Speedup Factor (Median Time)', 'Mean': speedup,
                                         'Median': speedup, 'StdDev': float('nan'), 'Count': 1})

    print(f"\n--- Saving Summary Statistics (Excluding Warm-up Run) ---")
    if not summary_rows:
        print("No summary statistics were generated.")
        return None

    summary_df = pd.DataFrame(summary_rows)[
        ['Algorithm', 'Size', 'Implementation', 'Metric', 'Mean', 'Median', 'StdDev', 'Count']]
    summary_path = os.path.join(output_dir, SUMMARY_STATS_FILE_NAME)
    summary_df.to_csv(summary_path, index=False, float_format='%.5f')
    print(f"Summary statistics saved to: {summary_path}")
    return summary_df


# Run manually
if __name__ == "__main__":
    generate_all_plots()
