from __future__ import annotations

from typing import NamedTuple


class Enumerated[T](NamedTuple):
    """Represents an item with its associated index in an enumeration.

    See `Iter.enumerate()` for details.
    """

    idx: int
    """The index of the item in the enumeration."""
    value: T
    """The value of the item."""

    def __repr__(self) -> str:
        return f"({self.idx}, {self.value.__repr__()})"
