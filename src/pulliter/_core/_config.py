from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import Any

from ._format import seq_repr


@dataclass(slots=True, frozen=True)
class Config:
    """Display settings shared by every iterator `__repr__`.

    Args:
        max_items (int): Maximum number of buffered elements shown before truncating with `...`.
        depth (int): Nesting depth passed to `pprint.pformat`.
        width (int): Line width passed to `pprint.pformat`.
    """

    max_items: int = 20
    depth: int = 3
    width: int = 80

    def iter_repr(self, data: Sequence[Any]) -> str:
        return seq_repr(data, self.max_items, self.depth, self.width)


_CONFIG = Config()


def get_config() -> Config:
    """Return the active `Config`.

    Example:
    ```python
    >>> from pulliter import get_config
    >>> get_config().max_items
    20

    ```
    """
    return _CONFIG


def set_config(**changes: Any) -> Config:  # noqa: ANN401
    """Replace fields of the active `Config` and return the previous one.

    Returning the previous value allows restoring it afterwards.

    Raises:
        TypeError: If a field name is unknown.
        ValueError: If `max_items` is negative.

    Example:
    ```python
    >>> import pulliter as pi
    >>> previous = pi.set_config(max_items=2)
    >>> pi.Iter.from_([1, 2, 3])
    SeqIter(1, 2, ...)
    >>> _ = pi.set_config(max_items=previous.max_items)

    ```
    """
    global _CONFIG  # noqa: PLW0603
    new = replace(_CONFIG, **changes)
    if new.max_items < 0:
        msg = f"max_items must be >= 0, got {new.max_items}"
        raise ValueError(msg)
    previous, _CONFIG = _CONFIG, new
    return previous
