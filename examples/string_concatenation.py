# examples/string_concatenation.py

"""
Materializes a string expression into a fresh destination, then profiles a
larger run of the same chain.
"""

import sys
import os

project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

import lazyfuse
from lazyfuse import LazyContainer


def main():
    """Runs the demonstration."""
    print("--- Running String Concatenation Demonstration ---")

    a = LazyContainer(["x", "x"], name='a')
    b = LazyContainer(["y", "y"], name='b')

    # Constructing a wrapper from an expression evaluates it immediately.
    result = LazyContainer([None] * 2, a + b)
    print(f"\nLazyContainer([None] * 2, a + b) -> {result.data}")
    assert result.data == ["xy", "xy"]

    size = 100_000
    words = LazyContainer(["expression "] * size, name='words')
    glue = LazyContainer(["template "] * size, name='glue')
    tail = LazyContainer(["rule!"] * size, name='tail')
    out = LazyContainer([""] * size, name='out')

    with lazyfuse.profile() as p:
        out.assign(words + glue + tail)
    p.print_report()

    assert out[0] == "expression template rule!"
    print("\n--- String Concatenation Demonstration Complete ---")


if __name__ == "__main__":
    main()
