from ._core import Config, Pipeable, get_config, set_config
from ._iter import (
    Adapter,
    Chain,
    ChainDoubleEnded,
    DoubleEndedIter,
    Enumerate,
    Filter,
    FlatMap,
    Flatten,
    FromFn,
    Fuse,
    Iter,
    IterableIter,
    IterOwnershipError,
    Map,
    Rev,
    SeqIter,
    Skip,
    Take,
)
from ._results import (
    NONE,
    Err,
    NoneOption,
    Ok,
    Option,
    OptionUnwrapError,
    Result,
    ResultUnwrapError,
    Some,
)
from ._types import Enumerated

__all__ = [
    "NONE",
    "Adapter",
    "Chain",
    "ChainDoubleEnded",
    "Config",
    "DoubleEndedIter",
    "Enumerate",
    "Enumerated",
    "Err",
    "Filter",
    "FlatMap",
    "Flatten",
    "FromFn",
    "Fuse",
    "Iter",
    "IterOwnershipError",
    "IterableIter",
    "Map",
    "NoneOption",
    "Ok",
    "Option",
    "OptionUnwrapError",
    "Pipeable",
    "Result",
    "ResultUnwrapError",
    "Rev",
    "SeqIter",
    "Skip",
    "Some",
    "Take",
    "get_config",
    "set_config",
]
