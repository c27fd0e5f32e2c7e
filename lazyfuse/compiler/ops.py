# lazyfuse/compiler/ops.py
#
# Operation tags. Each member of `Op` describes one elementwise binary
# operator: how to render it, how to apply it to two element values, and
# (for arithmetic and bitwise operators) how to apply it in place when the
# left value is a temporary that nobody else can observe. Every operator in
# the package goes through `Op.apply` / `Op.apply_inplace`; there are no
# per-operator evaluation paths.

import enum
import operator


def _logical_and(a, b):
    return bool(a) and bool(b)


def _logical_or(a, b):
    return bool(a) or bool(b)


class Op(enum.Enum):
    """An elementwise binary operator."""

    # arithmetic
    ADD = ("+", operator.add, operator.iadd)
    SUB = ("-", operator.sub, operator.isub)
    MUL = ("*", operator.mul, operator.imul)
    DIV = ("/", operator.truediv, operator.itruediv)
    FLOORDIV = ("//", operator.floordiv, operator.ifloordiv)
    MOD = ("%", operator.mod, operator.imod)
    POW = ("**", operator.pow, operator.ipow)

    # bitwise
    BIT_OR = ("|", operator.or_, operator.ior)
    BIT_AND = ("&", operator.and_, operator.iand)
    BIT_XOR = ("^", operator.xor, operator.ixor)
    SHL = ("<<", operator.lshift, operator.ilshift)
    SHR = (">>", operator.rshift, operator.irshift)

    # logical
    AND = ("and", _logical_and, None)
    OR = ("or", _logical_or, None)

    # relational
    EQ = ("==", operator.eq, None)
    NE = ("!=", operator.ne, None)
    LT = ("<", operator.lt, None)
    LE = ("<=", operator.le, None)
    GT = (">", operator.gt, None)
    GE = (">=", operator.ge, None)

    def __init__(self, symbol, func, inplace_func):
        self.symbol = symbol
        self._func = func
        self._inplace_func = inplace_func

    @property
    def is_relational(self) -> bool:
        """True for comparison and logical operators, which yield bool-like values."""
        return self._inplace_func is None

    def apply(self, a, b):
        """Returns `a <op> b` without touching either operand."""
        return self._func(a, b)

    def apply_inplace(self, a, b):
        """
        Returns `a <op>= b`. Mutable element types update `a` and return it;
        immutable ones fall back to building a new value, exactly as the
        augmented assignment statement would. Relational and logical
        operators never mutate and behave like `apply`.

        Only call this when `a` is a disposable temporary or the element
        being overwritten by a compound assignment.
        """
        if self._inplace_func is None:
            return self._func(a, b)
        return self._inplace_func(a, b)

    def __repr__(self):
        return f"Op.{self.name}"
