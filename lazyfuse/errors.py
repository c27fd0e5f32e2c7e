# lazyfuse/errors.py
#
# Exception types raised by lazyfuse. Errors coming from the elements
# themselves (a TypeError from an unsupported operator, a ZeroDivisionError)
# are never wrapped; they propagate unchanged out of the materialization loop.


class LazyFuseError(Exception):
    """Base class for all lazyfuse errors."""


class NotWrappableError(LazyFuseError, TypeError):
    """Raised when a collection lacks the capabilities an operation needs."""


class LengthMismatchError(LazyFuseError, ValueError):
    """
    Raised before a materialization loop starts when an operand collection
    does not fit the destination under the active length policy.
    """
    def __init__(self, name: str, expected: int, actual: int, policy: str):
        self.name = name
        self.expected = expected
        self.actual = actual
        self.policy = policy
        relation = "exactly" if policy == "strict" else "at least"
        super().__init__(
            f"Operand '{name}' has {actual} element(s); the destination "
            f"needs {relation} {expected} ({policy} length policy)."
        )
