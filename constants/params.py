# --- Sorting ---
# Partitions smaller than this are finished with insertion sort.
CUTOFF = 16

# --- Benchmark runs ---
RUNS = 11
SMALL_ARRAY_LENGTH = 10_000
MID_ARRAY_LENGTH = 100_000
BIG_ARRAY_LENGTH = 1_000_000

# --- Generated data ---
MAX_RANDOM_VALUE = 2 ** 30 - 1  # fits in 30 bits
RANDOM_TEST_SIZES = [100, 1000, 10000, 100000, 500000, 1000000]
RANDOM_SEED = 42

# --- Results ---
RESULTS_BASE_PATH = 'results/'
HI_RADIX_SORT_PATH = 'hi_radix_sort/'
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
