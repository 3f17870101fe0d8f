from ._adapters import (
    Adapter,
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
from ._main import DoubleEndedIter, Iter, IterOwnershipError
from ._sources import FromFn, IterableIter, SeqIter

__all__ = [
    "Adapter",
    "Chain",
    "ChainDoubleEnded",
    "DoubleEndedIter",
    "Enumerate",
    "Filter",
    "FlatMap",
    "Flatten",
    "FromFn",
    "Fuse",
    "Iter",
    "IterOwnershipError",
    "IterableIter",
    "Map",
    "Rev",
    "SeqIter",
    "Skip",
    "Take",
]
