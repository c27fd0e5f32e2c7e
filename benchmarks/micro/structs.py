# benchmarks/micro/structs.py
#
# The same `d += a + b + c` chain over a small record type that carries an
# int, a float and a string. Each `+` on a record allocates a new one, so
# this highlights how many temporaries each strategy constructs per index.

from benchmarks.runner import run_benchmark, print_comparison
from lazyfuse import LazyContainer

SIZE = 100_000


class Element:
    __slots__ = ("m_int", "m_float", "m_string")
    constructed = 0

    def __init__(self, i=0, f=0.0, s=""):
        Element.constructed += 1
        self.m_int = i
        self.m_float = f
        self.m_string = s

    def __iadd__(self, other):
        self.m_int += other.m_int
        self.m_float += other.m_float
        self.m_string += other.m_string
        return self

    def __add__(self, other):
        result = Element(self.m_int, self.m_float, self.m_string)
        result += other
        return result

    def __eq__(self, other):
        return (self.m_int, self.m_float, self.m_string) == (other.m_int, other.m_float, other.m_string)


def make_inputs():
    a = [Element(325, -15.0, "hi") for _ in range(SIZE)]
    b = [Element(-325, 15.0, " expression ") for _ in range(SIZE)]
    c = [Element(0, 1.0, "template") for _ in range(SIZE)]
    d = [Element(0, 0.0, "__") for _ in range(SIZE)]
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


def _count_temporaries(func):
    inputs = make_inputs()
    Element.constructed = 0
    func(*inputs)
    return Element.constructed / SIZE


def main():
    print("--- Running Fused Element-wise Benchmark (records) ---")

    for label, func in (("naive", naive_passes), ("hand-written loop", hand_loop), ("lazyfuse", fused_lazyfuse)):
        print(f"{label:<28} {_count_temporaries(func):.1f} temporaries per index")

    timings = {
        "naive (one pass per op)": run_benchmark(naive_passes, setup=make_inputs),
        "hand-written loop": run_benchmark(hand_loop, setup=make_inputs),
        "lazyfuse": run_benchmark(fused_lazyfuse, setup=make_inputs),
    }
    print_comparison(timings, baseline="naive (one pass per op)")


if __name__ == "__main__":
    main()
