# lazyfuse/runtime/executor.py
#
# The materialization loops. This is the only place in lazyfuse where a
# collection is iterated: every assignment or compound assignment runs one
# compiled kernel over `0..len(destination)` in a single pass. Operand
# lengths are validated against the active length policy before the first
# element is evaluated, so a mismatch never leaves a half-written
# destination behind.

import logging
import time
from contextlib import contextmanager

from .. import profiler
from ..compiler.expr import ExprNode, BinaryOpNode, as_node
from ..compiler.kernel import compile_kernel
from ..compiler.ops import Op
from ..config import get_settings
from ..errors import LengthMismatchError, NotWrappableError
from ..protocols import MutableIndexable

logger = logging.getLogger(__name__)


def _check_target(target):
    if not isinstance(target, MutableIndexable):
        raise NotWrappableError(
            f"Cannot materialize into {type(target).__name__}: a destination "
            "needs __len__, __getitem__ and __setitem__."
        )


def check_lengths(expression: ExprNode, length: int, policy=None):
    """
    Verifies every collection under `expression` against a destination of
    `length` elements.

    Raises:
        LengthMismatchError: On the first incompatible collection.
    """
    if policy is None:
        policy = get_settings().length_policy
    for leaf in expression.leaves():
        actual = len(leaf.data)
        if actual == length or (policy == "prefix" and actual > length):
            continue
        raise LengthMismatchError(leaf.name, length, actual, policy)


@contextmanager
def _timed(kind: str, kernel, length: int):
    logger.debug("Materializing %s over %d element(s): %s", kind, length, kernel.body)
    if not profiler.is_active():
        yield
        return
    start_time = time.perf_counter()
    try:
        yield
    finally:
        end_time = time.perf_counter()
        profiler.record_event(f"{kind} {kernel.body}", (end_time - start_time) * 1000)


def run_assign(target, expression: ExprNode):
    """
    Overwrites `target[i]` with the value of `expression` at `i` for every
    index of `target`.

    Args:
        target: A `MutableIndexable` destination collection.
        expression: A `BinaryOpNode` tree.

    Returns:
        The target collection.
    """
    if not isinstance(expression, BinaryOpNode):
        raise TypeError(
            f"Can only materialize a lazy expression, not {type(expression).__name__}."
        )
    _check_target(target)
    length = len(target)
    check_lengths(expression, length)

    kernel = compile_kernel(expression)
    with _timed("assign", kernel, length):
        for i in range(length):
            target[i] = kernel(i)
    return target


def run_compound(target, op: Op, rhs):
    """
    Applies `target[i] <op>= rhs[i]` for every index of `target`, where
    `rhs` is an expression, a wrapped collection or a scalar.

    Returns:
        The target collection.
    """
    _check_target(target)
    length = len(target)
    node = as_node(rhs)
    check_lengths(node, length)

    kernel = compile_kernel(node)
    apply = op.apply_inplace
    with _timed(f"{op.symbol}=", kernel, length):
        for i in range(length):
            target[i] = apply(target[i], kernel(i))
    return target


def materialize(expression: ExprNode, out=None):
    """
    Evaluates `expression` into `out`, or into a new list sized after the
    shortest collection in the tree when `out` is None.

    Returns:
        The destination collection.
    """
    if out is None:
        if not isinstance(expression, ExprNode):
            raise TypeError(
                f"Can only materialize a lazy expression, not {type(expression).__name__}."
            )
        length = expression.size()
        if length is None:
            raise ValueError(
                "Cannot size a destination for an expression without collections; pass `out`."
            )
        out = [None] * length
    return run_assign(out, expression)
