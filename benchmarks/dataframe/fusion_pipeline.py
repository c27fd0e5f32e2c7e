# benchmarks/dataframe/fusion_pipeline.py
#
# Runs a small column-arithmetic pipeline three ways over data held in a
# pandas DataFrame: vectorized pandas (the baseline, with a temporary column
# per step), a naive pure-Python version that materializes every step as a
# list, and lazyfuse, which fuses the steps into one pass per output
# column. lazyfuse is not expected to beat vectorized pandas; the benchmark
# shows what fusion buys over step-by-step Python.

import numpy as np
import pandas as pd

from benchmarks.runner import run_benchmark, print_comparison
from lazyfuse import LazyContainer

SIZE = 200_000


def make_frame():
    rng = np.random.default_rng(0)
    return pd.DataFrame({
        'col_a': rng.uniform(1, 10, SIZE),
        'col_b': rng.uniform(1, 10, SIZE),
    })


def pipeline_pandas(df):
    df['col_c'] = df['col_a'] + 10.0
    df['col_d'] = df['col_b'] * 2.5
    df['col_e'] = df['col_c'] / df['col_d']
    return df['col_e']


def pipeline_naive(a, b):
    c = [x + 10.0 for x in a]
    d = [y * 2.5 for y in b]
    return [x / y for x, y in zip(c, d)]


def pipeline_lazyfuse(a, b):
    col_a = LazyContainer(a, name='col_a')
    col_b = LazyContainer(b, name='col_b')
    # (a + 10) / (b * 2.5), evaluated once per index.
    return LazyContainer([0.0] * len(a), (col_a + 10.0) / (col_b * 2.5)).data


def main():
    print("--- Running DataFrame Column Fusion Benchmark ---")
    df = make_frame()
    a = df['col_a'].tolist()
    b = df['col_b'].tolist()

    expected = pipeline_pandas(df.copy()).to_numpy()
    assert np.allclose(pipeline_lazyfuse(a, b), expected), "lazyfuse result differs from pandas"

    timings = {
        "pandas (vectorized)": run_benchmark(pipeline_pandas, setup=lambda: (df.copy(),)),
        "naive (list per step)": run_benchmark(pipeline_naive, (a, b)),
        "lazyfuse": run_benchmark(pipeline_lazyfuse, (a, b)),
    }
    print_comparison(timings, baseline="naive (list per step)")


if __name__ == "__main__":
    main()
