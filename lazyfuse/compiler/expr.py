# lazyfuse/compiler/expr.py
#
# This file defines the node classes for building the lazy evaluation
# expression tree. When a user writes `a + b` on wrapped collections, no
# element is read; instead an instance of `BinaryOpNode` is created. The
# entire chain of operations thus forms a tree of these nodes, which is only
# evaluated, index by index, when it is materialized into a destination.
#
# Nodes hold plain references to their operands and are immutable once
# built. They refuse to be copied: a copy would either alias the same
# operands under a second identity or duplicate whole collections.

from ..config import get_settings
from ..protocols import Indexable
from .ops import Op


def as_node(value) -> "ExprNode":
    """
    Returns the expression-tree form of an operand.

    Nodes are returned as-is, objects that identify themselves in a tree
    through an `_expr_node` attribute (wrapped collections) contribute that
    node, and anything else is a scalar broadcast to every index. Strings
    and bytes are scalars; any other unwrapped sized, indexable collection
    is rejected, since broadcasting it would copy the whole collection into
    every element.

    Raises:
        TypeError: If `value` is an unwrapped collection.
    """
    if isinstance(value, ExprNode):
        return value
    node = getattr(value, "_expr_node", None)
    if isinstance(node, ExprNode):
        return node
    if isinstance(value, Indexable) and not isinstance(value, (str, bytes)):
        raise TypeError(
            f"Cannot use an unwrapped {type(value).__name__} as an operand; "
            "wrap it in LazyContainer to combine it elementwise."
        )
    return LiteralNode(value)


class ExprOperators:
    """
    Operator overloads shared by expression nodes and wrapped collections.
    Every overload builds a new `BinaryOpNode` in O(1); none reads an element.
    """
    __slots__ = ()

    # numpy defers to the reflected operators below instead of iterating us.
    __array_ufunc__ = None

    def _binary(self, op: Op, other) -> "BinaryOpNode":
        return BinaryOpNode(op, as_node(self), as_node(other))

    def _rbinary(self, op: Op, other) -> "BinaryOpNode":
        return BinaryOpNode(op, as_node(other), as_node(self))

    # arithmetic
    def __add__(self, other):
        return self._binary(Op.ADD, other)

    def __sub__(self, other):
        return self._binary(Op.SUB, other)

    def __mul__(self, other):
        return self._binary(Op.MUL, other)

    def __truediv__(self, other):
        return self._binary(Op.DIV, other)

    def __floordiv__(self, other):
        return self._binary(Op.FLOORDIV, other)

    def __mod__(self, other):
        return self._binary(Op.MOD, other)

    def __pow__(self, other):
        return self._binary(Op.POW, other)

    # bitwise
    def __or__(self, other):
        return self._binary(Op.BIT_OR, other)

    def __and__(self, other):
        return self._binary(Op.BIT_AND, other)

    def __xor__(self, other):
        return self._binary(Op.BIT_XOR, other)

    def __lshift__(self, other):
        return self._binary(Op.SHL, other)

    def __rshift__(self, other):
        return self._binary(Op.SHR, other)

    # reflected forms, for a scalar on the left (`2 * a`)
    def __radd__(self, other):
        return self._rbinary(Op.ADD, other)

    def __rsub__(self, other):
        return self._rbinary(Op.SUB, other)

    def __rmul__(self, other):
        return self._rbinary(Op.MUL, other)

    def __rtruediv__(self, other):
        return self._rbinary(Op.DIV, other)

    def __rfloordiv__(self, other):
        return self._rbinary(Op.FLOORDIV, other)

    def __rmod__(self, other):
        return self._rbinary(Op.MOD, other)

    def __rpow__(self, other):
        return self._rbinary(Op.POW, other)

    def __ror__(self, other):
        return self._rbinary(Op.BIT_OR, other)

    def __rand__(self, other):
        return self._rbinary(Op.BIT_AND, other)

    def __rxor__(self, other):
        return self._rbinary(Op.BIT_XOR, other)

    def __rlshift__(self, other):
        return self._rbinary(Op.SHL, other)

    def __rrshift__(self, other):
        return self._rbinary(Op.SHR, other)

    # logical; Python's `and`/`or` keywords cannot be overloaded
    def logical_and(self, other):
        return self._binary(Op.AND, other)

    def logical_or(self, other):
        return self._binary(Op.OR, other)

    # relational
    def __eq__(self, other):
        return self._binary(Op.EQ, other)

    def __ne__(self, other):
        return self._binary(Op.NE, other)

    def __lt__(self, other):
        return self._binary(Op.LT, other)

    def __le__(self, other):
        return self._binary(Op.LE, other)

    def __gt__(self, other):
        return self._binary(Op.GT, other)

    def __ge__(self, other):
        return self._binary(Op.GE, other)

    __hash__ = None


class ExprNode(ExprOperators):
    """Base class for all expression tree nodes."""
    __slots__ = ()

    def at(self, index: int):
        """Evaluates the node for a single index."""
        raise NotImplementedError

    def leaves(self) -> list:
        """The `ColumnNode`s under this node, left to right."""
        return []

    def size(self):
        """
        The length of the shortest collection under this node, or None when
        the tree contains only literals. Nodes carry no size of their own;
        this is derived from the leaves on every call.
        """
        lengths = [len(leaf.data) for leaf in self.leaves()]
        return min(lengths) if lengths else None

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __copy__(self):
        raise TypeError(f"{type(self).__name__} cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError(f"{type(self).__name__} cannot be copied")

    def __bool__(self):
        raise TypeError(
            "The truth value of a lazy expression is undefined; "
            "materialize it and test the elements instead."
        )


class BinaryOpNode(ExprNode):
    """Represents a binary operation (e.g., +, *, ==)."""
    __slots__ = ("op", "left", "right")

    def __init__(self, op: Op, left: ExprNode, right: ExprNode):
        if not isinstance(op, Op):
            raise TypeError(f"Expected an Op, got {type(op).__name__}")
        if not isinstance(left, ExprNode) or not isinstance(right, ExprNode):
            raise TypeError("BinaryOpNode operands must be expression nodes")
        object.__setattr__(self, "op", op)
        object.__setattr__(self, "left", left)
        object.__setattr__(self, "right", right)

    def operand_left(self) -> ExprNode:
        return self.left

    def operand_right(self) -> ExprNode:
        return self.right

    def at(self, index: int):
        left = self.left.at(index)
        right = self.right.at(index)
        # The left result of a sub-expression is a fresh temporary.
        if isinstance(self.left, BinaryOpNode) and get_settings().reuse_temporaries:
            return self.op.apply_inplace(left, right)
        return self.op.apply(left, right)

    def leaves(self) -> list:
        return self.left.leaves() + self.right.leaves()

    def __repr__(self):
        return f"({self.left!r} {self.op.symbol} {self.right!r})"


class ColumnNode(ExprNode):
    """Represents a wrapped collection inside an expression tree."""
    __slots__ = ("data", "name")

    def __init__(self, data, name: str):
        object.__setattr__(self, "data", data)
        object.__setattr__(self, "name", name)

    def at(self, index: int):
        return self.data[index]

    def leaves(self) -> list:
        return [self]

    def __repr__(self):
        return f"Column({self.name})"


class LiteralNode(ExprNode):
    """Represents a scalar value (e.g., 2.0, "x") used at every index."""
    __slots__ = ("value",)

    def __init__(self, value):
        object.__setattr__(self, "value", value)

    def at(self, index: int):
        return self.value

    def __repr__(self):
        return repr(self.value)
