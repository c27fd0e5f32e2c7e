# lazyfuse/compiler/kernel.py
#
# This file turns an expression tree into a fused kernel: a single callable
# that evaluates the whole tree for one index. Its main responsibilities are:
# 1. Numbering the input collections of the tree (`in0`, `in1`, ...) in the
#    order they appear, so the fused body can be rendered and logged.
# 2. A tree traverser (`_traverse_expr_tree`) that converts the tree into
#    nested closures, resolving the operator and the in-place decision for
#    every node once, instead of once per index.
# 3. `compile_kernel`, the entry point used by the executor.

import logging

from ..config import get_settings
from .expr import ExprNode, BinaryOpNode, ColumnNode, LiteralNode

logger = logging.getLogger(__name__)


# ============================================================================
# Step 1: Expression Tree Traversal
# ============================================================================

def _traverse_expr_tree(node: ExprNode, input_map: dict, reuse_temporaries: bool):
    """
    Recursively traverses an expression tree and builds the per-index
    evaluator for it, together with a C-like string for the fused body.

    Args:
        node: The current node of the expression tree to traverse.
        input_map: Maps `id(collection)` to its generic input name (e.g.,
            'in0'). Collections seen for the first time are added to it.
        reuse_temporaries: Whether nodes may update their left sub-result
            in place.

    Returns:
        A `(evaluate, text)` pair where `evaluate(i)` computes the node at
        index `i` and `text` looks like "((in0 + in1) * 2.0)".
    """
    if isinstance(node, BinaryOpNode):
        left_eval, left_str = _traverse_expr_tree(node.left, input_map, reuse_temporaries)
        right_eval, right_str = _traverse_expr_tree(node.right, input_map, reuse_temporaries)
        # Only the left operand may be updated in place; reusing a right-hand
        # temporary would swap the operands of `-`, `/` and concatenation.
        if reuse_temporaries and isinstance(node.left, BinaryOpNode):
            apply = node.op.apply_inplace
        else:
            apply = node.op.apply

        def evaluate(i):
            return apply(left_eval(i), right_eval(i))

        return evaluate, f"({left_str} {node.op.symbol} {right_str})"

    elif isinstance(node, ColumnNode):
        key = id(node.data)
        if key not in input_map:
            input_map[key] = (f"in{len(input_map)}", node)
        return node.data.__getitem__, input_map[key][0]

    elif isinstance(node, LiteralNode):
        value = node.value

        def evaluate(i):
            return value

        return evaluate, repr(value)

    else:
        raise TypeError(f"Unknown expression tree node type: {type(node)}")


# ============================================================================
# Step 2: The compiled kernel
# ============================================================================

class Kernel:
    """
    A fused evaluator for one expression tree.

    Attributes:
        expression: The tree the kernel was compiled from.
        inputs: The distinct `ColumnNode`s read by the kernel, in `inN` order.
        body: The rendered fused body, e.g. "out0 = ((in0 + in1) + in2)".
    """
    __slots__ = ("expression", "inputs", "body", "_evaluate")

    def __init__(self, expression, inputs, body, evaluate):
        self.expression = expression
        self.inputs = inputs
        self.body = body
        self._evaluate = evaluate

    def __call__(self, index: int):
        return self._evaluate(index)

    def __repr__(self):
        return f"Kernel({self.body})"


def compile_kernel(expression: ExprNode, reuse_temporaries=None) -> Kernel:
    """
    Compiles an expression tree into a `Kernel`.

    Args:
        expression: The root of the tree.
        reuse_temporaries: Overrides the configured setting when not None.

    Returns:
        The compiled kernel. Compiling reads no element.
    """
    if not isinstance(expression, ExprNode):
        raise TypeError(f"Cannot compile {type(expression).__name__}; expected an expression node.")
    if reuse_temporaries is None:
        reuse_temporaries = get_settings().reuse_temporaries

    input_map = {}
    evaluate, kernel_body = _traverse_expr_tree(expression, input_map, reuse_temporaries)
    inputs = [node for _, node in input_map.values()]

    kernel = Kernel(expression, inputs, f"out0 = {kernel_body}", evaluate)
    logger.debug("Compiled fused kernel with %d input(s): %s", len(inputs), kernel.body)
    return kernel
