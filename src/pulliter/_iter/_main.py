from __future__ import annotations

import functools
import itertools
from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import TYPE_CHECKING, Self, overload

import cytoolz as cz
import more_itertools as mit

from .._core import Pipeable, deprecated
from .._results import NONE, Err, Ok, Option, Result, Some

if TYPE_CHECKING:
    from ._adapters import (
        Chain,
        ChainDoubleEnded,
        Enumerate,
        Filter,
        FlatMap,
        Flatten,
        Fuse,
        Map,
        Rev,
        Skip,
        Take,
    )
    from ._sources import SeqIter


class IterOwnershipError(RuntimeError):
    """Raised when an iterator already owned by an adapter is handed to another one."""


def _check_count(n: int) -> int:
    if n < 0:
        msg = f"count must be >= 0, got {n}"
        raise ValueError(msg)
    return n


def _convert_data[T](data: Iterable[T] | T, *more_data: T) -> Iterable[T]:
    if more_data or not cz.itertoolz.isiterable(data):
        return (data, *more_data)  # type: ignore[return-value]
    return data  # type: ignore[return-value]


class Iter[T](Pipeable, Iterator[T]):
    """Lazy, single-pass, pull-based iterator.

    `Iter` is a mixin: a class only has to override `next()` to gain every terminal operation
    (`fold`, `count`, `nth`, `any`, ...) and every adapter (`map`, `filter`, `chain`, ...).

    - `next()` returns `Some(item)` while elements remain, then `NONE` on every later call.
    - Adapters are lazy: nothing is pulled until a downstream pull asks for it.
    - Adapters own their upstream: once wrapped, an iterator must not be wrapped again.

    `Iter` also implements the Python `Iterator` protocol on top of `next()`, so it can be used in `for` loops and builtins.

    Example:
    ```python
    >>> import pulliter as pi
    >>> class Countdown(pi.Iter[int]):
    ...     def __init__(self, start: int) -> None:
    ...         self.current = start
    ...
    ...     def next(self) -> pi.Option[int]:
    ...         if self.current == 0:
    ...             return pi.NONE
    ...         self.current -= 1
    ...         return pi.Some(self.current + 1)
    >>>
    >>> Countdown(3).map(lambda x: x * 10).to_list()
    [30, 20, 10]
    >>> Countdown(4).position(lambda x: x == 2)
    Some(value=2)

    ```
    """

    __slots__ = ("_claimed",)

    def next(self) -> Option[T]:
        """Advance the iterator and return the next element.

        Every concrete iterator must override this method.

        Returns:
            Option[T]: `Some(item)`, or `NONE` once the iterator is exhausted, and on every call after that.

        Raises:
            NotImplementedError: If the subclass did not override it.

        Example:
        ```python
        >>> import pulliter as pi
        >>> it = pi.Iter.from_([1, 2])
        >>> it.next()
        Some(value=1)
        >>> it.next()
        Some(value=2)
        >>> it.next()
        NONE
        >>> it.next()
        NONE

        ```
        """
        msg = "next() is not implemented and needs to be overridden"
        raise NotImplementedError(msg)

    def __iter__(self) -> Self:
        return self

    def __next__(self) -> T:
        match self.next():
            case Some(value):
                return value
            case _:
                raise StopIteration

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"

    def _claim(self) -> Self:
        if getattr(self, "_claimed", False):
            msg = f"{self!r} is already owned by another adapter"
            raise IterOwnershipError(msg)
        self._claimed = True
        return self

    # constructors

    @overload
    @staticmethod
    def from_[U](data: Sequence[U]) -> SeqIter[U]: ...
    @overload
    @staticmethod
    def from_[U](data: Iterable[U]) -> Iter[U]: ...
    @overload
    @staticmethod
    def from_[U](data: U, *more_data: U) -> SeqIter[U]: ...
    @staticmethod
    def from_[U](data: Iterable[U] | U, *more_data: U) -> Iter[U]:
        """Create an `Iter` from any `Iterable`, or from unpacked values.

        - An `Iter` is returned as is.
        - A `Sequence` (list, tuple, range, str, ...) gives a double-ended `SeqIter`.
        - Any other `Iterable` (dict keys, set, generator, ...) gives a front-only `IterableIter`.

        Args:
            data (Iterable[U] | U): Iterable to iterate over, or a single value.
            *more_data (U): Additional values, in which case **data** is treated as a value too.

        Returns:
            Iter[U]: A new iterator positioned on the first element.

        Example:
        ```python
        >>> import pulliter as pi
        >>> pi.Iter.from_([1, 2, 3])
        SeqIter(1, 2, 3)
        >>> pi.Iter.from_(1, 2, 3).to_list()
        [1, 2, 3]
        >>> pi.Iter.from_({"a": 1, "b": 2}).to_list()
        ['a', 'b']

        ```
        """
        from ._sources import IterableIter, SeqIter

        match _convert_data(data, *more_data):
            case Iter() as it:
                return it
            case Sequence() as seq:
                return SeqIter(seq)
            case iterable:
                return IterableIter(iterable)

    @staticmethod
    def once[U](value: U) -> SeqIter[U]:
        """Create a double-ended `Iter` yielding **value** exactly once.

        Example:
        ```python
        >>> import pulliter as pi
        >>> pi.Iter.from_([1, 2]).chain(pi.Iter.once(3)).to_list()
        [1, 2, 3]

        ```
        """
        from ._sources import SeqIter

        return SeqIter((value,))

    @staticmethod
    def empty[U]() -> SeqIter[U]:
        """Create a double-ended `Iter` with no elements.

        Example:
        ```python
        >>> import pulliter as pi
        >>> pi.Iter[int].empty().next()
        NONE

        ```
        """
        from ._sources import SeqIter

        return SeqIter(())

    @staticmethod
    def from_fn[S, V](
        state: S, generator: Callable[[S], Option[tuple[V, S]]]
    ) -> Iter[V]:
        """Create an `Iter` by repeatedly applying a **generator** function to an initial **state**.

        The **generator** function takes the current state and must return:

        - `Some((value, new_state))` to emit the value `V` and continue with the new **state** `S`.
        - `NONE` to stop the generation, for good.

        **Warning** ⚠️
            If the **generator** function never returns `NONE`, it creates an infinite iterator.

        Args:
            state (S): Initial state for the generator.
            generator (Callable[[S], Option[tuple[V, S]]]): Function that generates the next value and state.

        Returns:
            Iter[V]: An iterator over the generated values.

        Example:
        ```python
        >>> import pulliter as pi
        >>> def fib(state: tuple[int, int]) -> pi.Option[tuple[int, tuple[int, int]]]:
        ...     a, b = state
        ...     if a > 30:
        ...         return pi.NONE
        ...     return pi.Some((a, (b, a + b)))
        >>> pi.Iter.from_fn((0, 1), fib).to_list()
        [0, 1, 1, 2, 3, 5, 8, 13, 21]

        ```
        """
        from ._sources import FromFn

        return FromFn(state, generator)

    @staticmethod
    def from_count(start: int = 0, step: int = 1) -> Iter[int]:
        """Create an infinite `Iter` of evenly spaced values.

        **Warning** ⚠️
            This creates an infinite iterator.
            Be sure to use `Iter.take()`, `Iter.nth()` or `Iter.find()` to stop pulling.

        Example:
        ```python
        >>> import pulliter as pi
        >>> pi.Iter.from_count(10, 2).take(3).to_list()
        [10, 12, 14]

        ```
        """
        from ._sources import IterableIter

        return IterableIter(itertools.count(start, step))

    # terminal operations

    def all(self, predicate: Callable[[T], bool]) -> bool:
        """Tests if every remaining element satisfies **predicate**.

        Stops at the first element that fails, leaving the iterator positioned just past it.

        An empty iterator returns `True`.

        Example:
        ```python
        >>> import pulliter as pi
        >>> it = pi.Iter.from_([2, 4, 5, 6])
        >>> it.all(lambda x: x % 2 == 0)
        False
        >>> it.next()
        Some(value=6)

        ```
        """
        return all(predicate(x) for x in self)

    def any(self, predicate: Callable[[T], bool]) -> bool:
        """Tests if some remaining element satisfies **predicate**.

        Stops at the first element that satisfies it, the next pull resumes right after.

        An empty iterator returns `False`.

        Example:
        ```python
        >>> import pulliter as pi
        >>> it = pi.Iter.from_([1, 2, 3])
        >>> it.any(lambda x: x != 2)
        True
        >>> it.next()
        Some(value=2)

        ```
        """
        return any(predicate(x) for x in self)

    def count(self) -> int:
        """Consume the iterator, counting the remaining elements.

        Example:
        ```python
        >>> import pulliter as pi
        >>> it = pi.Iter.from_(range(5))
        >>> _ = it.next()
        >>> it.count()
        4

        ```
        """
        return cz.itertoolz.count(self)

    def find(self, predicate: Callable[[T], bool]) -> Option[T]:
        """Return the first remaining element satisfying **predicate**.

        Example:
        ```python
        >>> import pulliter as pi
        >>> pi.Iter.from_([1, 2, 3]).find(lambda x: x > 1)
        Some(value=2)
        >>> pi.Iter.from_([1, 2, 3]).find(lambda x: x > 5)
        NONE

        ```
        """
        for item in self:
            if predicate(item):
                return Some(item)
        return NONE

    def fold[B](self, init: B, func: Callable[[B, T], B]) -> B:
        """Fold every remaining element into an accumulator, starting from **init**.

        **func** receives the accumulator and the element, and returns the new accumulator.

        Example:
        ```python
        >>> import pulliter as pi
        >>> pi.Iter.from_([1, 2, 3]).fold(10, lambda acc, x: acc + x)
        16
        >>> pi.Iter.from_(["a", "b"]).fold("", lambda acc, x: x + acc)
        'ba'

        ```
        """
        return functools.reduce(func, self, init)

    def reduce(self, func: Callable[[T, T], T]) -> Option[T]:
        """Fold the elements, using the first one as the initial accumulator.

        Returns:
            Option[T]: `NONE` if the iterator is empty, else the folded value.

        Example:
        ```python
        >>> import pulliter as pi
        >>> pi.Iter.from_([1, 2, 3]).reduce(max)
        Some(value=3)
        >>> pi.Iter[int].empty().reduce(max)
        NONE

        ```
        """
        return self.next().map(lambda first: self.fold(first, func))

    def last(self) -> Option[T]:
        """Consume the iterator, returning its final element.

        Example:
        ```python
        >>> import pulliter as pi
        >>> pi.Iter.from_([1, 2, 3]).last()
        Some(value=3)
        >>> pi.Iter.empty().last()
        NONE

        ```
        """
        init: Option[T] = NONE
        return self.fold(init, lambda _, item: Some(item))

    def nth(self, n: int) -> Option[T]:
        """Return the element **n** positions after the current one (zero-based).

        Consumes at most `n + 1` elements. Calling `nth(0)` is the same as `next()`.

        Raises:
            ValueError: If **n** is negative.

        Example:
        ```python
        >>> import pulliter as pi
        >>> it = pi.Iter.from_([10, 20, 30])
        >>> it.nth(1)
        Some(value=20)
        >>> it.nth(0)
        Some(value=30)
        >>> pi.Iter.from_([10, 20, 30]).nth(5)
        NONE

        ```
        """
        if self.advance_by(n).is_err():
            return NONE
        return self.next()

    def advance_by(self, n: int) -> Result[None, int]:
        """Advance the iterator by **n** elements.

        Returns:
            Result[None, int]: `Ok(None)` if **n** elements were skipped,
                `Err(k)` if the iterator was exhausted after only `k` elements.

        Raises:
            ValueError: If **n** is negative.

        Example:
        ```python
        >>> import pulliter as pi
        >>> it = pi.Iter.from_([1, 2, 3, 4])
        >>> it.advance_by(2)
        Ok(value=None)
        >>> it.next()
        Some(value=3)
        >>> it.advance_by(5)
        Err(error=1)
        >>> it.advance_by(0)
        Ok(value=None)

        ```
        """
        for advanced in range(_check_count(n)):
            if self.next().is_none():
                return Err(advanced)
        return Ok(None)

    def position(self, predicate: Callable[[T], bool]) -> Option[int]:
        """Return the index of the first remaining element satisfying **predicate**.

        The index counts from the current position, starting at zero.

        Example:
        ```python
        >>> import pulliter as pi
        >>> it = pi.Iter.from_([1, 2, 3, 4])
        >>> it.position(lambda x: x >= 2)
        Some(value=1)
        >>> it.position(lambda x: x == 4)
        Some(value=1)
        >>> it.position(lambda x: x == 1)
        NONE

        ```
        """
        for idx, item in enumerate(self):
            if predicate(item):
                return Some(idx)
        return NONE

    def to_list(self) -> list[T]:
        """Collect the remaining elements into a `list`.

        Example:
        ```python
        >>> import pulliter as pi
        >>> pi.Iter.from_("abc").to_list()
        ['a', 'b', 'c']

        ```
        """
        return list(self)

    @deprecated("to_list", since="0.2.0")
    def to_array(self) -> list[T]:
        """Alias of `to_list()`."""
        return self.to_list()

    def to_set(self) -> set[T]:
        """Collect the remaining elements into a `set`.

        Example:
        ```python
        >>> import pulliter as pi
        >>> sorted(pi.Iter.from_([3, 1, 3, 2]).to_set())
        [1, 2, 3]

        ```
        """
        return set(self)

    def to_dict[K, V](self: Iter[tuple[K, V]]) -> dict[K, V]:
        """Collect `(key, value)` pairs into a `dict`.

        When a key repeats, the last value wins.

        Example:
        ```python
        >>> import pulliter as pi
        >>> pi.Iter.from_([(1, "a"), (2, "b"), (1, "c")]).to_dict()
        {1: 'c', 2: 'b'}

        ```
        """
        return dict(self)

    def collect[R](self, factory: Callable[[Iterable[T]], R]) -> R:
        """Collect the remaining elements with **factory**.

        Example:
        ```python
        >>> import pulliter as pi
        >>> pi.Iter.from_([1, 2, 3]).map(str).collect(tuple)
        ('1', '2', '3')
        >>> pi.Iter.from_("hello").collect(frozenset) == frozenset("helo")
        True

        ```
        """
        return factory(self)

    def for_each(self, func: Callable[[T], object]) -> None:
        """Call **func** on every remaining element.

        Example:
        ```python
        >>> import pulliter as pi
        >>> pi.Iter.from_([1, 2]).for_each(print)
        1
        2

        ```
        """
        mit.consume(map(func, self))

    # adapters

    def map[R](self, func: Callable[[T], R]) -> Map[T, R]:
        """Lazily apply **func** to every element.

        **func** is only called when the resulting iterator is pulled.

        Example:
        ```python
        >>> import pulliter as pi
        >>> it = pi.Iter.from_([1, 2, 3]).map(lambda x: x * 2)
        >>> it.next()
        Some(value=2)
        >>> it.to_list()
        [4, 6]

        ```
        """
        from ._adapters import Map

        return Map(self, func)

    def filter(self, predicate: Callable[[T], bool]) -> Filter[T]:
        """Lazily keep the elements satisfying **predicate**.

        Example:
        ```python
        >>> import pulliter as pi
        >>> pi.Iter.from_(range(6)).filter(lambda x: x % 2 == 0).to_list()
        [0, 2, 4]

        ```
        """
        from ._adapters import Filter

        return Filter(self, predicate)

    def skip(self, n: int) -> Skip[T]:
        """Skip the first **n** elements, on the first pull.

        Raises:
            ValueError: If **n** is negative.

        Example:
        ```python
        >>> import pulliter as pi
        >>> pi.Iter.from_([1, 2, 3, 4]).skip(2).to_list()
        [3, 4]
        >>> pi.Iter.from_([1, 2]).skip(5).to_list()
        []

        ```
        """
        from ._adapters import Skip

        return Skip(self, _check_count(n))

    def take(self, n: int) -> Take[T]:
        """Yield at most **n** elements.

        Once **n** elements were yielded, the upstream is not pulled anymore.

        Raises:
            ValueError: If **n** is negative.

        Example:
        ```python
        >>> import pulliter as pi
        >>> pi.Iter.from_count().take(3).to_list()
        [0, 1, 2]

        ```
        """
        from ._adapters import Take

        return Take(self, _check_count(n))

    def enumerate(self) -> Enumerate[T]:
        """Pair every element with its zero-based index.

        Example:
        ```python
        >>> import pulliter as pi
        >>> pi.Iter.from_(["a", "b"]).enumerate().to_list()
        [(0, 'a'), (1, 'b')]
        >>> pi.Iter.from_(["a", "b"]).enumerate().last().unwrap().idx
        1

        ```
        """
        from ._adapters import Enumerate

        return Enumerate(self)

    @overload
    def chain(
        self: DoubleEndedIter[T], other: DoubleEndedIter[T] | Sequence[T]
    ) -> ChainDoubleEnded[T]: ...
    @overload
    def chain(self, other: Iterable[T]) -> Chain[T]: ...
    def chain(self, other: Iterable[T]) -> Chain[T]:
        """Yield the elements of `self`, then the elements of **other**.

        **other** goes through `Iter.from_()`.

        When both sides are double-ended, the result is a double-ended `ChainDoubleEnded`.

        Example:
        ```python
        >>> import pulliter as pi
        >>> pi.Iter.from_([1, 2]).chain([3, 4]).to_list()
        [1, 2, 3, 4]
        >>> it = pi.Iter.from_([1, 2]).chain([3, 4])
        >>> it.next_back()
        Some(value=4)
        >>> pi.Iter.from_({1: "a"}).chain([2])
        Chain(IterableIter(dict_keyiterator), SeqIter(2))

        ```
        """
        from ._adapters import Chain, ChainDoubleEnded

        other_iter = Iter.from_(other)
        if isinstance(self, DoubleEndedIter) and isinstance(other_iter, DoubleEndedIter):
            return ChainDoubleEnded(self, other_iter)
        return Chain(self, other_iter)

    def flatten[U](self: Iter[Iterable[U]]) -> Flatten[U]:
        """Flatten one level of nesting.

        Each inner iterable is wrapped when it is reached: an `Iter` is used as is, a `Sequence` becomes a `SeqIter`,
        any other iterable an `IterableIter`. Empty inner iterables are skipped.

        Raises:
            TypeError: When an element that is not iterable is reached.

        Example:
        ```python
        >>> import pulliter as pi
        >>> pi.Iter.from_([[], [1], [], [2, 3]]).flatten().to_list()
        [1, 2, 3]

        ```
        """
        from ._adapters import Flatten

        return Flatten(self)

    def flat_map[R](self, func: Callable[[T], Iterable[R]]) -> FlatMap[T, R]:
        """Map every element to an iterable, and flatten the results.

        **func** is only called when its element is reached.

        Example:
        ```python
        >>> import pulliter as pi
        >>> pi.Iter.from_([1, 2, 3]).flat_map(lambda x: range(x)).to_list()
        [0, 0, 1, 0, 1, 2]
        >>> pi.Iter.from_count(1).flat_map(lambda x: [x] * x).nth(4)
        Some(value=3)

        ```
        """
        from ._adapters import FlatMap

        return FlatMap(self, func)

    def fuse(self) -> Fuse[T]:
        """Guarantee that `NONE` is returned forever after the first `NONE`.

        Every iterator of this package is already fused. This is meant for user-written iterators that are not.

        Example:
        ```python
        >>> import pulliter as pi
        >>> class Flaky(pi.Iter[int]):
        ...     def __init__(self) -> None:
        ...         self.calls = 0
        ...
        ...     def next(self) -> pi.Option[int]:
        ...         self.calls += 1
        ...         return pi.Some(self.calls) if self.calls % 2 == 0 else pi.NONE
        >>> it = Flaky().fuse()
        >>> it.next(), it.next()
        (NONE, NONE)

        ```
        """
        from ._adapters import Fuse

        return Fuse(self)


class DoubleEndedIter[T](Iter[T]):
    """An `Iter` that can also be pulled from the back.

    A class only has to override `next()` and `next_back()`.

    Front and back pulls can be interleaved freely, and never yield the same element twice:
    once both ends meet, both report `NONE`.

    Example:
    ```python
    >>> import pulliter as pi
    >>> it = pi.Iter.from_([1, 2, 3])
    >>> it.next(), it.next_back(), it.next(), it.next_back()
    (Some(value=1), Some(value=3), Some(value=2), NONE)

    ```
    """

    __slots__ = ()

    def next_back(self) -> Option[T]:
        """Remove and return an element from the back of the iterator.

        Raises:
            NotImplementedError: If the subclass did not override it.
        """
        msg = "next_back() is not implemented and needs to be overridden"
        raise NotImplementedError(msg)

    def _iter_back(self) -> Iterator[T]:
        while True:
            match self.next_back():
                case Some(value):
                    yield value
                case _:
                    return

    def advance_back_by(self, n: int) -> Result[None, int]:
        """Advance the iterator from the back by **n** elements.

        Same contract as `advance_by()`, on the back end.

        Example:
        ```python
        >>> import pulliter as pi
        >>> it = pi.Iter.from_([1, 2, 3])
        >>> it.advance_back_by(2)
        Ok(value=None)
        >>> it.advance_back_by(2)
        Err(error=1)

        ```
        """
        for advanced in range(_check_count(n)):
            if self.next_back().is_none():
                return Err(advanced)
        return Ok(None)

    def nth_back(self, n: int) -> Option[T]:
        """Return the element **n** positions before the current back (zero-based).

        Example:
        ```python
        >>> import pulliter as pi
        >>> pi.Iter.from_([10, 20, 30]).nth_back(1)
        Some(value=20)
        >>> pi.Iter.from_([10, 20, 30]).nth_back(3)
        NONE

        ```
        """
        if self.advance_back_by(n).is_err():
            return NONE
        return self.next_back()

    def rfold[B](self, init: B, func: Callable[[B, T], B]) -> B:
        """Like `fold()`, starting from the back.

        Example:
        ```python
        >>> import pulliter as pi
        >>> pi.Iter.from_(["a", "b", "c"]).rfold("", lambda acc, x: acc + x)
        'cba'

        ```
        """
        return functools.reduce(func, self._iter_back(), init)

    def rfind(self, predicate: Callable[[T], bool]) -> Option[T]:
        """Like `find()`, starting from the back.

        Example:
        ```python
        >>> import pulliter as pi
        >>> it = pi.Iter.from_([1, 2, 3, 4])
        >>> it.rfind(lambda x: x % 2 == 1)
        Some(value=3)
        >>> it.to_list()
        [1, 2]

        ```
        """
        for item in self._iter_back():
            if predicate(item):
                return Some(item)
        return NONE

    def rev(self) -> Rev[T]:
        """Reverse the iterator direction.

        Example:
        ```python
        >>> import pulliter as pi
        >>> pi.Iter.from_([1, 2, 3]).rev().to_list()
        [3, 2, 1]
        >>> pi.Iter.from_([1, 2]).chain([3]).rev().map(str).to_list()
        ['3', '2', '1']

        ```
        """
        from ._adapters import Rev

        return Rev(self)


