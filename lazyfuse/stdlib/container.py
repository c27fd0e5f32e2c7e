# lazyfuse/stdlib/container.py
#
# Implements the LazyContainer object, the user-facing wrapper around an
# existing collection. Crucially, its operators are overloaded to build
# expression trees instead of computing results; the wrapped collection is
# only read or written when an expression is assigned into a wrapper.

from ..compiler.expr import ExprOperators, ExprNode, BinaryOpNode, ColumnNode
from ..compiler.ops import Op
from ..errors import NotWrappableError
from ..runtime import executor
from ..protocols import Indexable


class LazyContainer(ExprOperators):
    """
    A non-owning, lazily evaluated view of a sized, indexable collection.

    Example:
        >>> a, b, d = LazyContainer([1, 2]), LazyContainer([10, 20]), LazyContainer([0, 0])
        >>> d += a + b
        >>> d.data
        [11, 22]
    """
    def __init__(self, data, expression=None, name=None):
        """
        Wraps `data` by reference. When `expression` is given it is
        materialized into `data` right away.

        Args:
            data: Any collection with `__len__` and `__getitem__`; a
                destination also needs `__setitem__`. Wrapping another
                LazyContainer wraps its collection.
            expression: An optional lazy expression to evaluate into `data`.
            name: Label used when rendering expressions; defaults to an
                id-based name.

        Raises:
            NotWrappableError: If `data` lacks the required capabilities.
        """
        if isinstance(data, LazyContainer):
            data = data.data
        if not isinstance(data, Indexable):
            raise NotWrappableError(
                f"{type(data).__name__} can not be wrapped: it needs __len__ and __getitem__."
            )
        self._data = data
        # The ColumnNode is how the container identifies itself in an expression tree.
        self._expr_node = ColumnNode(data, name if name else f"arr_{id(self)}")

        if expression is not None:
            self.assign(expression)

    @property
    def data(self):
        """The wrapped collection."""
        return self._data

    @property
    def name(self) -> str:
        return self._expr_node.name

    def assign(self, expression: BinaryOpNode) -> "LazyContainer":
        """Evaluates `expression` into the wrapped collection in one pass."""
        executor.run_assign(self._data, expression)
        return self

    # ------------------------------------------------------------------
    # access
    # ------------------------------------------------------------------

    def __len__(self):
        return len(self._data)

    def __iter__(self):
        return iter(self._data)

    def __getitem__(self, index):
        return self._data[index]

    def __setitem__(self, index, value):
        # `d[:] = a + b` is assignment of a whole expression; any other
        # index would store the unevaluated node itself.
        if isinstance(value, ExprNode):
            if isinstance(index, slice) and index == slice(None):
                self.assign(value)
            else:
                raise TypeError("expressions can only be assigned to the whole container ([:])")
        else:
            self._data[index] = value

    def __copy__(self):
        return LazyContainer(self._data, name=self.name)

    def __repr__(self):
        return f"LazyContainer({self.name}, {type(self._data).__name__}[{len(self._data)}])"

    # ------------------------------------------------------------------
    # compound assignment: one pass, `c[i] <op>= rhs[i]`
    # ------------------------------------------------------------------

    def _compound(self, op: Op, other) -> "LazyContainer":
        executor.run_compound(self._data, op, other)
        return self

    def __iadd__(self, other):
        return self._compound(Op.ADD, other)

    def __isub__(self, other):
        return self._compound(Op.SUB, other)

    def __imul__(self, other):
        return self._compound(Op.MUL, other)

    def __itruediv__(self, other):
        return self._compound(Op.DIV, other)

    def __ifloordiv__(self, other):
        return self._compound(Op.FLOORDIV, other)

    def __imod__(self, other):
        return self._compound(Op.MOD, other)

    def __ipow__(self, other):
        return self._compound(Op.POW, other)

    def __ior__(self, other):
        return self._compound(Op.BIT_OR, other)

    def __iand__(self, other):
        return self._compound(Op.BIT_AND, other)

    def __ixor__(self, other):
        return self._compound(Op.BIT_XOR, other)

    def __ilshift__(self, other):
        return self._compound(Op.SHL, other)

    def __irshift__(self, other):
        return self._compound(Op.SHR, other)
