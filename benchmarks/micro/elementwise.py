# benchmarks/micro/elementwise.py
#
# Compares the performance of `d += a + b + c` on lists of strings. The naive
# version evaluates one operator at a time, so `a + b` produces a full
# intermediate list that is walked again to add `c`, and once more to update
# `d`. The hand-written loop and lazyfuse both do the whole expression per
# index in a single pass; lazyfuse additionally extends the `a[i] + b[i]`
# temporary in place instead of building a second string.

from benchmarks.runner import run_benchmark, print_comparison
from lazyfuse import LazyContainer

SIZE = 1_000_000


def make_inputs():
    a = ["expression "] * SIZE
    b = ["template "] * SIZE
    c = ["rule!"] * SIZE
    d = ["993766dk"] * SIZE
    return a, b, c, d


def naive_passes(a, b, c, d):
    ab = [x + y for x, y in zip(a, b)]
    abc = [x + y for x, y in zip(ab, c)]
    for i, value in enumerate(abc):
        d[i] += value


def hand_loop(a, b, c, d):
    for i in range(len(d)):
        d[i] += a[i] + b[i] + c[i]


def fused_lazyfuse(a, b, c, d):
    lazy_d = LazyContainer(d)
    lazy_d += LazyContainer(a) + LazyContainer(b) + LazyContainer(c)


def main():
    print("--- Running Fused Element-wise Benchmark (strings) ---")

    # Verify all three agree before timing anything.
    expected = make_inputs()
    hand_loop(*expected)
    actual = make_inputs()
    fused_lazyfuse(*actual)
    assert actual[3] == expected[3], "lazyfuse result differs from the hand-written loop"

    timings = {
        "naive (one pass per op)": run_benchmark(naive_passes, setup=make_inputs),
        "hand-written loop": run_benchmark(hand_loop, setup=make_inputs),
        "lazyfuse": run_benchmark(fused_lazyfuse, setup=make_inputs),
    }
    print_comparison(timings, baseline="naive (one pass per op)")


if __name__ == "__main__":
    main()
