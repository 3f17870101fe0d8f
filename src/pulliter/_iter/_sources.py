from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import cast

from .._core import get_config
from .._results import NONE, Option, Some
from ._main import DoubleEndedIter, Iter

_EXHAUSTED = object()


class SeqIter[T](DoubleEndedIter[T]):
    """Double-ended iterator over a `Sequence`, between a front and a back index.

    The sequence itself is never copied.

    Args:
        data (Sequence[T]): The sequence to iterate over.
    """

    __slots__ = ("_back", "_data", "_front")

    def __init__(self, data: Sequence[T]) -> None:
        self._data = data
        self._front = 0
        self._back = len(data)

    def __repr__(self) -> str:
        config = get_config()
        # one extra item so the formatter knows to truncate
        stop = min(self._back, self._front + config.max_items + 1)
        remaining = [self._data[idx] for idx in range(self._front, stop)]
        return f"{self.__class__.__name__}({config.iter_repr(remaining)})"

    def next(self) -> Option[T]:
        if self._front >= self._back:
            return NONE
        item = self._data[self._front]
        self._front += 1
        return Some(item)

    def next_back(self) -> Option[T]:
        if self._front >= self._back:
            return NONE
        self._back -= 1
        return Some(self._data[self._back])


class IterableIter[T](Iter[T]):
    """Front-only iterator over any Python `Iterable`.

    The underlying Python iterator is dropped as soon as it raises `StopIteration`.

    Args:
        data (Iterable[T]): Any object that can be iterated over.
    """

    __slots__ = ("_inner",)

    def __init__(self, data: Iterable[T]) -> None:
        self._inner: Option[Iterator[T]] = Some(iter(data))

    def __repr__(self) -> str:
        name = self._inner.map(lambda it: type(it).__name__).unwrap_or("")
        return f"{self.__class__.__name__}({name})"

    def next(self) -> Option[T]:
        if self._inner.is_none():
            return NONE
        value = next(self._inner.unwrap(), _EXHAUSTED)
        if value is _EXHAUSTED:
            self._inner = NONE
            return NONE
        return Some(cast(T, value))


class FromFn[S, V](Iter[V]):
    """Iterator driven by a state machine, see `Iter.from_fn()`."""

    __slots__ = ("_generator", "_state")

    def __init__(self, state: S, generator: Callable[[S], Option[tuple[V, S]]]) -> None:
        self._state: Option[S] = Some(state)
        self._generator = generator

    def next(self) -> Option[V]:
        match self._state.and_then(self._generator):
            case Some((value, state)):
                self._state = Some(state)
                return Some(value)
            case _:
                self._state = NONE
                return NONE
