# examples/compound_assignment.py

"""
Demonstrates `d += a + b + c` on wrapped lists.

The right-hand side builds an expression tree without reading any element;
the compound assignment then runs a single loop that evaluates the whole
tree for each index and adds the result into `d`.
"""

import sys
import os

# Add the project root to the Python path to allow importing 'lazyfuse'
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from lazyfuse import LazyContainer, compile_kernel


def main():
    """Runs the demonstration."""
    print("--- Running Compound Assignment Demonstration ---")

    a = LazyContainer([1, 2, 3], name='a')
    b = LazyContainer([10, 20, 30], name='b')
    c = LazyContainer([100, 200, 300], name='c')
    d = LazyContainer([0, 0, 0], name='d')

    expression = a + b + c
    print(f"\nExpression tree: {expression!r}")
    print(f"Fused kernel:    {compile_kernel(expression).body}")

    d += expression
    print(f"\nd after `d += a + b + c`: {d.data}")

    assert d.data == [111, 222, 333]
    print("\n[SUCCESS] Fused result matches the element-wise sum.")

    print("\n--- Compound Assignment Demonstration Complete ---")


if __name__ == "__main__":
    main()
