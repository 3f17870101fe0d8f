from collections.abc import Sequence
from pprint import pformat
from typing import Any


def seq_repr(
    v: Sequence[Any],
    max_items: int = 20,
    depth: int = 3,
    width: int = 80,
    *,
    compact: bool = True,
) -> str:
    shown = tuple(v[:max_items])
    parts: list[str] = []
    match len(shown):
        case 0:
            pass
        case 1:
            parts.append(pformat(shown[0], depth=depth, width=width, compact=compact))
        case _:
            parts.append(pformat(shown, depth=depth, width=width, compact=compact)[1:-1])
    if len(v) > max_items:
        parts.append("...")
    return ", ".join(parts)
