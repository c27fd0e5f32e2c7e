# benchmarks/runner.py
#
# A generic utility for running and timing benchmark functions.
# This runner provides a consistent methodology for all our benchmarks,
# handling warm-up iterations and calculating median execution time to
# provide stable performance numbers resistant to system noise. Most
# benchmarks mutate their destination, so an optional `setup` callable
# rebuilds the arguments before every run, outside the timed region.

import time
import numpy as np


def run_benchmark(func, args=(), num_warmup=2, num_iter=10, setup=None):
    """
    Runs a given function with arguments and measures its performance.

    Args:
        func: The function to benchmark.
        args: A tuple of arguments to pass to the function. Ignored when
            `setup` is given.
        num_warmup (int): Number of warm-up runs before timing.
        num_iter (int): Number of timed iterations.
        setup: Optional zero-argument callable returning fresh arguments
            for each run.

    Returns:
        The median execution time in milliseconds.
    """
    def _args():
        return setup() if setup is not None else args

    # Warm-up runs
    for _ in range(num_warmup):
        func(*_args())

    # Timed runs
    times = []
    for _ in range(num_iter):
        call_args = _args()
        start_time = time.perf_counter()
        func(*call_args)
        end_time = time.perf_counter()
        times.append((end_time - start_time) * 1000) # Store in ms

    return float(np.median(times))


def print_comparison(timings, baseline):
    """
    Prints a table of median timings relative to `baseline`.

    Args:
        timings: Mapping of label to median milliseconds.
        baseline: The label every speedup is measured against.
    """
    reference = timings[baseline]
    for label, elapsed in timings.items():
        speedup = reference / elapsed if elapsed > 0 else float("inf")
        print(f"{label:<28} {elapsed:>10.4f} ms   {speedup:5.2f}x")
