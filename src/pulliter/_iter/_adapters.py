from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import cast

from .._results import NONE, Option, Some
from .._types import Enumerated
from ._main import DoubleEndedIter, Iter


class Adapter[T, U](Iter[U]):
    """Base of the adapters pulling from a single upstream iterator.

    The upstream is claimed on construction: wrapping it a second time raises `IterOwnershipError`.

    Args:
        upstream (Iter[T]): The iterator to pull from.
    """

    __slots__ = ("_iter",)

    def __init__(self, upstream: Iter[T]) -> None:
        self._iter = upstream._claim()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._iter!r})"


class Map[T, R](Adapter[T, R]):
    """Yields `func(item)` for every upstream item, see `Iter.map()`."""

    __slots__ = ("_func",)

    def __init__(self, upstream: Iter[T], func: Callable[[T], R]) -> None:
        super().__init__(upstream)
        self._func = func

    def next(self) -> Option[R]:
        return self._iter.next().map(self._func)


class Filter[T](Adapter[T, T]):
    """Yields the upstream items satisfying a predicate, see `Iter.filter()`."""

    __slots__ = ("_predicate",)

    def __init__(self, upstream: Iter[T], predicate: Callable[[T], bool]) -> None:
        super().__init__(upstream)
        self._predicate = predicate

    def next(self) -> Option[T]:
        for item in self._iter:
            if self._predicate(item):
                return Some(item)
        return NONE


class Skip[T](Adapter[T, T]):
    """Discards the first `n` upstream items on the first pull, see `Iter.skip()`."""

    __slots__ = ("_n",)

    def __init__(self, upstream: Iter[T], n: int) -> None:
        super().__init__(upstream)
        self._n = n

    def next(self) -> Option[T]:
        while self._n > 0:
            self._n -= 1
            if self._iter.next().is_none():
                self._n = 0
                return NONE
        return self._iter.next()


class Take[T](Adapter[T, T]):
    """Yields at most `n` upstream items, see `Iter.take()`."""

    __slots__ = ("_n",)

    def __init__(self, upstream: Iter[T], n: int) -> None:
        super().__init__(upstream)
        self._n = n

    def next(self) -> Option[T]:
        if self._n == 0:
            return NONE
        self._n -= 1
        return self._iter.next()


class Enumerate[T](Adapter[T, Enumerated[T]]):
    """Pairs every upstream item with its index, see `Iter.enumerate()`."""

    __slots__ = ("_count",)

    def __init__(self, upstream: Iter[T]) -> None:
        super().__init__(upstream)
        self._count = 0

    def next(self) -> Option[Enumerated[T]]:
        match self._iter.next():
            case Some(value):
                item = Enumerated(self._count, value)
                self._count += 1
                return Some(item)
            case _:
                return NONE


class Fuse[T](Adapter[T, T]):
    """Stops pulling the upstream after its first `NONE`, see `Iter.fuse()`."""

    __slots__ = ("_done",)

    def __init__(self, upstream: Iter[T]) -> None:
        super().__init__(upstream)
        self._done = False

    def next(self) -> Option[T]:
        if self._done:
            return NONE
        item = self._iter.next()
        self._done = item.is_none()
        return item


class Chain[T](Iter[T]):
    """Yields the items of `a`, then the items of `b`, see `Iter.chain()`.

    Each side is dropped (set to `NONE`) once exhausted, so it is never pulled again.
    """

    __slots__ = ("_a", "_b")

    def __init__(self, a: Iter[T], b: Iter[T]) -> None:
        self._a: Option[Iter[T]] = Some(a._claim())
        self._b: Option[Iter[T]] = Some(b._claim())

    def __repr__(self) -> str:
        sides = (side.map(repr).unwrap_or("NONE") for side in (self._a, self._b))
        return f"{self.__class__.__name__}({', '.join(sides)})"

    def next(self) -> Option[T]:
        if self._a.is_some():
            item = self._a.unwrap().next()
            if item.is_some():
                return item
            self._a = NONE
        if self._b.is_some():
            item = self._b.unwrap().next()
            if item.is_some():
                return item
            self._b = NONE
        return NONE


class ChainDoubleEnded[T](Chain[T], DoubleEndedIter[T]):
    """`Chain` over two double-ended iterators.

    `next_back()` pulls from the back of `b`, then from the back of `a`.
    Since each side keeps its own cursors from crossing, the chain never yields an item twice.
    """

    __slots__ = ()

    _a: Option[DoubleEndedIter[T]]
    _b: Option[DoubleEndedIter[T]]

    def __init__(self, a: DoubleEndedIter[T], b: DoubleEndedIter[T]) -> None:
        super().__init__(a, b)

    def next_back(self) -> Option[T]:
        if self._b.is_some():
            item = self._b.unwrap().next_back()
            if item.is_some():
                return item
            self._b = NONE
        if self._a.is_some():
            item = self._a.unwrap().next_back()
            if item.is_some():
                return item
            self._a = NONE
        return NONE


def _inner_iter[U](inner: Iterable[U]) -> Iter[U]:
    from ._sources import IterableIter, SeqIter

    match inner:
        case Iter() as it:
            return it
        case Sequence() as seq:
            return SeqIter(seq)
        case Iterable() as iterable:
            return IterableIter(iterable)
        case _:
            msg = f"flatten() expects iterable items, got {type(inner).__name__!r}"
            raise TypeError(msg)


class Flatten[U](Adapter[Iterable[U], U]):
    """Yields the items of every upstream iterable in turn, see `Iter.flatten()`.

    Holds the inner iterator currently being drained, if any.
    """

    __slots__ = ("_front",)

    def __init__(self, upstream: Iter[Iterable[U]]) -> None:
        super().__init__(upstream)
        self._front: Option[Iter[U]] = NONE

    def next(self) -> Option[U]:
        while True:
            if self._front.is_some():
                item = self._front.unwrap().next()
                if item.is_some():
                    return item
                self._front = NONE
            match self._iter.next():
                case Some(inner):
                    self._front = Some(_inner_iter(inner)._claim())
                case _:
                    return NONE


class FlatMap[T, R](Flatten[R]):
    """`Flatten` over `Map`: the mapping function runs when its outer item is reached, see `Iter.flat_map()`."""

    __slots__ = ()

    def __init__(self, upstream: Iter[T], func: Callable[[T], Iterable[R]]) -> None:
        super().__init__(Map(upstream, func))


class Rev[T](Adapter[T, T], DoubleEndedIter[T]):
    """Swaps the front and the back of a double-ended iterator, see `DoubleEndedIter.rev()`."""

    __slots__ = ()

    def __init__(self, upstream: DoubleEndedIter[T]) -> None:
        super().__init__(upstream)

    def next(self) -> Option[T]:
        return cast(DoubleEndedIter[T], self._iter).next_back()

    def next_back(self) -> Option[T]:
        return self._iter.next()
