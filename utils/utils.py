import time

import numpy as np
import cpuinfo
import psutil


def get_cpu_info():
    """Returns CPU info using py-cpuinfo."""
    try:
        cpu_info = cpuinfo.get_cpu_info()
        return cpu_info['brand_raw']
    except Exception as e:
        return f"Error: {e}"


def get_ram_info():
    """Returns RAM info using psutil."""
    ram = psutil.virtual_memory()
    return f"Total: {ram.total / (1024 ** 3):.2f} GB, Available: {ram.available / (1024 ** 3):.2f} GB"


def write_system_info(file_path):
    with open(file_path, "w") as f:
        f.write(f"[System Info]\nCPU: {get_cpu_info()}\nRAM: {get_ram_info()}\n")
        f.write(f"Cores: {psutil.cpu_count(logical=False)} physical, {psutil.cpu_count(logical=True)} logical\n")


def is_sorted(arr):
    """Checks that arr is in non-decreasing order."""
    for i in range(len(arr) - 1):
        if arr[i] > arr[i + 1]:
            return False
    return True


def generate_random_array(size, max_value, seed=None, dtype=np.int64):
    """Generates `size` random integers in [0, max_value)."""
    rng = np.random.RandomState(seed)
    return rng.randint(0, max_value, size=size, dtype=dtype)


def get_formatted_elapsed_time(start_time):
    elapsed_time = time.time() - start_time
    formatted_time = time.strftime("%H:%M:%S", time.gmtime(elapsed_time))
    return formatted_time
