"""Tests for the lazy adapters."""

from collections.abc import Callable
from typing import Any

import pytest

import pulliter as pi

ADAPTERS: dict[str, Callable[[pi.Iter[Any]], pi.Iter[Any]]] = {
    "map": lambda it: it.map(lambda x: x),
    "filter": lambda it: it.filter(lambda _: True),
    "skip": lambda it: it.skip(1),
    "take": lambda it: it.take(10),
    "enumerate": lambda it: it.enumerate(),
    "chain": lambda it: it.chain([9]),
    "chain_front_only": lambda it: it.chain(iter([9])),
    "flat_map": lambda it: it.flat_map(lambda x: [x, x]),
    "fuse": lambda it: it.fuse(),
    "rev": lambda it: it.rev(),
}


class Recorder:
    """Callable recording every argument it is called with."""

    def __init__(self) -> None:
        self.calls: list[object] = []

    def __call__(self, value: object) -> object:
        self.calls.append(value)
        return value


@pytest.mark.parametrize("name", ADAPTERS)
def test_fused_exhaustion(name: str) -> None:
    """Once NONE is returned, every later pull returns NONE."""
    it = ADAPTERS[name](pi.Iter.from_([1, 2, 3]))
    it.to_list()
    for _ in range(3):
        assert it.next() == pi.NONE


def test_fused_exhaustion_of_sources() -> None:
    """Every source stays exhausted."""
    sources: list[pi.Iter[int]] = [
        pi.Iter.from_([1]),
        pi.Iter.from_({1}),
        pi.Iter.from_fn(0, lambda s: pi.Some((s, s + 1)) if s < 1 else pi.NONE),
        pi.Iter.once(1),
        pi.Iter.empty(),
    ]
    for it in sources:
        it.to_list()
        assert it.next() == pi.NONE
        assert it.next() == pi.NONE


class TestLaziness:
    """Nothing is computed before a downstream pull asks for it."""

    def test_map_calls_once_per_pull(self) -> None:
        """Pulling twice from a mapped 5-element source calls the function twice."""
        record = Recorder()
        it = pi.Iter.from_(range(5)).map(record)
        assert record.calls == []
        it.next()
        it.next()
        assert record.calls == [0, 1]

    def test_filter_is_lazy(self) -> None:
        """filter() only evaluates the predicate up to the first match."""
        record = Recorder()
        it = pi.Iter.from_([0, 0, 1, 0, 1]).filter(record)
        assert record.calls == []
        assert it.next() == pi.Some(1)
        assert record.calls == [0, 0, 1]

    def test_flat_map_is_lazy(self) -> None:
        """The mapping function runs only when its outer element is reached."""
        record = Recorder()
        it = pi.Iter.from_([[1, 2], [3]]).flat_map(record)
        assert record.calls == []
        assert it.next() == pi.Some(1)
        assert it.next() == pi.Some(2)
        assert record.calls == [[1, 2]]
        assert it.next() == pi.Some(3)
        assert record.calls == [[1, 2], [3]]

    def test_composition_pulls_nothing(self) -> None:
        """Stacking adapters does not pull the source."""
        record = Recorder()
        pi.Iter.from_(range(3)).map(record).filter(bool).skip(1).enumerate().take(1)
        assert record.calls == []


class TestSkipTake:
    """skip() and take()."""

    def test_skip_zero_is_pass_through(self) -> None:
        """skip(0) yields everything."""
        assert pi.Iter.from_([1, 2]).skip(0).to_list() == [1, 2]

    def test_skip_past_end(self) -> None:
        """Skipping more elements than available yields nothing."""
        it = pi.Iter.from_([1, 2]).skip(3)
        assert it.next() == pi.NONE
        assert it.next() == pi.NONE

    def test_skip_happens_on_first_pull(self) -> None:
        """The upstream is only advanced when the skip adapter is pulled."""
        record = Recorder()
        it = pi.Iter.from_(range(5)).map(record).skip(2)
        assert record.calls == []
        assert it.next() == pi.Some(2)
        assert record.calls == [0, 1, 2]
        assert it.next() == pi.Some(3)

    def test_take_stops_pulling(self) -> None:
        """take(n) never pulls more than n elements."""
        record = Recorder()
        assert pi.Iter.from_count().map(record).take(3).to_list() == [0, 1, 2]
        assert record.calls == [0, 1, 2]

    def test_take_zero(self) -> None:
        """take(0) yields nothing."""
        assert pi.Iter.from_([1]).take(0).to_list() == []


def test_enumerate() -> None:
    """Indices start at zero and follow successful pulls."""
    it = pi.Iter.from_("ab").enumerate()
    first = it.next().unwrap()
    assert first == (0, "a")
    assert first.idx == 0
    assert first.value == "a"
    assert it.next() == pi.Some(pi.Enumerated(1, "b"))
    assert it.next() == pi.NONE


def test_enumerate_after_skip() -> None:
    """Enumerate counts its own pulls, not the upstream position."""
    assert pi.Iter.from_("abc").skip(1).enumerate().to_list() == [(0, "b"), (1, "c")]


class TestChain:
    """chain() over front-only and double-ended iterators."""

    def test_order(self) -> None:
        """Elements of the first side come first."""
        assert pi.Iter.from_([1, 2]).chain([3, 4]).to_list() == [1, 2, 3, 4]

    def test_switches_once_after_first_is_exhausted(self) -> None:
        """The second side is only pulled once the first one is exhausted."""
        first = pi.Iter.from_([1, 2]).map(Recorder())
        second_calls = Recorder()
        it = first.chain(pi.Iter.from_([3, 4]).map(second_calls))
        assert it.next() == pi.Some(1)
        assert it.next() == pi.Some(2)
        assert second_calls.calls == []
        assert it.next() == pi.Some(3)
        assert second_calls.calls == [3]
        assert it.next() == pi.Some(4)
        assert it.next() == pi.NONE

    def test_empty_first_side(self) -> None:
        """An empty first side defers to the second without extra pulls."""
        record = Recorder()
        it = pi.Iter[int].empty().chain(pi.Iter.from_([1, 2]).map(record))
        assert it.next() == pi.Some(1)
        assert record.calls == [1]

    def test_front_only_operand_gives_chain(self) -> None:
        """A front-only side gives a front-only Chain."""
        it = pi.Iter.from_(iter([1])).chain([2])
        assert type(it) is pi.Chain
        assert not isinstance(it, pi.DoubleEndedIter)
        assert it.to_list() == [1, 2]

    def test_double_ended_operands(self) -> None:
        """Two double-ended sides give a double-ended chain."""
        it = pi.Iter.from_([1, 2]).chain(pi.Iter.from_(range(3, 5)))
        assert isinstance(it, pi.ChainDoubleEnded)

    def test_exhausted_sides_are_dropped(self) -> None:
        """The repr shows which sides are still alive."""
        it = pi.Iter.from_([1]).chain([2])
        assert repr(it) == "ChainDoubleEnded(SeqIter(1), SeqIter(2))"
        it.next()
        it.next()
        assert repr(it) == "ChainDoubleEnded(NONE, SeqIter())"


class TestFlatten:
    """flatten() and flat_map()."""

    def test_empty_inners(self) -> None:
        """Empty inner iterables are skipped, not treated as the end."""
        assert pi.Iter.from_([[], [1], [], [2, 3]]).flatten().to_list() == [1, 2, 3]

    def test_only_empty_inners(self) -> None:
        """A run of empty inner iterables ends in NONE."""
        it = pi.Iter.from_([[]] * 5_000).flatten()
        assert it.next() == pi.NONE

    def test_mixed_inner_kinds(self) -> None:
        """Inner iterables can be any iterable, or an Iter."""
        outer = pi.Iter.from_([(1,), range(2, 4), pi.Iter.from_([4]), iter([5]), "6"])
        assert outer.flatten().to_list() == [1, 2, 3, 4, 5, "6"]

    def test_infinite_outer(self) -> None:
        """An infinite outer with finite inners can be consumed partially."""
        it = pi.Iter.from_count().flat_map(lambda x: [x] * (x % 3))
        assert it.take(6).to_list() == [1, 2, 2, 4, 5, 5]

    def test_flat_map(self) -> None:
        """flat_map() maps then flattens."""
        assert pi.Iter.from_([1, 2]).flat_map(lambda x: [x, -x]).to_list() == [1, -1, 2, -2]
        assert pi.Iter.from_([0, 1]).flat_map(range).to_list() == [0]

    def test_flatten_rejects_non_iterable_items(self) -> None:
        """A non-iterable element fails when reached, after the items before it."""
        it = pi.Iter.from_([[1], 2, [3]]).flatten()
        assert it.next() == pi.Some(1)
        with pytest.raises(TypeError, match="'int'"):
            it.next()

    def test_flat_map_rejects_non_iterable_results(self) -> None:
        """flat_map() fails when func does not return an iterable."""
        with pytest.raises(TypeError):
            pi.Iter.from_([1, 2]).flat_map(lambda x: x * 10).to_list()


def test_fuse_stops_a_flaky_iterator() -> None:
    """fuse() never pulls the upstream again after a NONE."""

    class Flaky(pi.Iter[int]):
        def __init__(self) -> None:
            self.pulls = 0

        def next(self) -> pi.Option[int]:
            self.pulls += 1
            return pi.NONE if self.pulls == 2 else pi.Some(self.pulls)

    flaky = Flaky()
    it = flaky.fuse()
    assert it.to_list() == [1]
    assert it.next() == pi.NONE
    assert flaky.pulls == 2


class TestOwnership:
    """An iterator can only be owned by a single adapter."""

    def test_wrapping_twice(self) -> None:
        """Mapping an already mapped iterator raises."""
        it = pi.Iter.from_([1, 2])
        it.map(str)
        with pytest.raises(pi.IterOwnershipError, match="already owned"):
            it.filter(bool)

    def test_chain_with_itself(self) -> None:
        """Chaining an iterator with itself raises."""
        it = pi.Iter.from_([1, 2])
        with pytest.raises(pi.IterOwnershipError):
            it.chain(it)

    def test_flatten_shared_inner(self) -> None:
        """The same inner iterator cannot be flattened twice."""
        inner = pi.Iter.from_([1])
        it = pi.Iter.from_([inner, inner]).flatten()
        assert it.next() == pi.Some(1)
        with pytest.raises(pi.IterOwnershipError):
            it.next()

    def test_terminal_operations_do_not_claim(self) -> None:
        """A partially consumed iterator can still be wrapped."""
        it = pi.Iter.from_([1, 2, 3])
        assert it.any(lambda x: x == 1)
        assert it.map(lambda x: x * 2).to_list() == [4, 6]
