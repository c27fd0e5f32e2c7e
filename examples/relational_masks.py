# examples/relational_masks.py

"""
Builds boolean masks from comparison chains. Python's `and`/`or` cannot be
overloaded, so logical combinations use `logical_and` / `logical_or`, while
`&` and `|` stay bitwise.
"""

import sys
import os

project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

import numpy as np
from lazyfuse import LazyContainer, materialize


def main():
    """Runs the demonstration."""
    print("--- Running Relational Mask Demonstration ---")

    a = LazyContainer(np.array([1, 5, 3, 7]), name='a')
    b = LazyContainer(np.array([1, 2, 3, 4]), name='b')

    equal = materialize(a == b)
    print(f"\na == b              -> {equal}")

    in_range = materialize((a > 2).logical_and(a < 7))
    print(f"(a > 2) and (a < 7) -> {in_range}")

    # A numpy destination keeps its own dtype.
    mask = LazyContainer(np.zeros(4, dtype=bool), a != b)
    print(f"a != b into bool[4] -> {mask.data}")

    assert equal == [True, False, True, False]
    assert in_range == [False, True, True, False]
    assert mask.data.tolist() == [False, True, False, True]

    print("\n--- Relational Mask Demonstration Complete ---")


if __name__ == "__main__":
    main()
