# lazyfuse/protocols.py
#
# Structural capability sets a collection must satisfy to take part in lazy
# expressions. Any object with the right methods qualifies; no registration
# or inheritance is needed.

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Indexable(Protocol):
    """A sized collection whose elements can be read by integer index."""

    def __len__(self) -> int: ...

    def __getitem__(self, index: int) -> Any: ...


@runtime_checkable
class MutableIndexable(Indexable, Protocol):
    """An `Indexable` that can also be written by index (a destination)."""

    def __setitem__(self, index: int, value: Any) -> None: ...
