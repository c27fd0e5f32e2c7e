# lazyfuse/__init__.py

# Expose the core, user-facing components of the lazyfuse library
# at the top-level package namespace.

import logging

from .compiler.expr import ExprNode, BinaryOpNode, ColumnNode, LiteralNode
from .compiler.kernel import compile_kernel
from .compiler.ops import Op
from .config import configure, get_settings, options
from .errors import LazyFuseError, LengthMismatchError, NotWrappableError
from .profiler import profile
# The stdlib package pulls in the executor; import it before re-exporting
# from the executor directly.
from .protocols import Indexable, MutableIndexable
from .stdlib import LazyContainer
from .runtime.executor import materialize

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
