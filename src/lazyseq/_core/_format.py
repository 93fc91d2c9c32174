from collections.abc import Collection, Set
from itertools import islice
from pprint import pformat
from typing import Any


def collection_repr(
    v: Collection[Any],
    max_items: int = 20,
    width: int = 80,
    *,
    compact: bool = True,
) -> str:
    data = tuple(v) if isinstance(v, Set) else v
    truncated = list(islice(data, max_items))
    body = pformat(truncated, width=width, compact=compact)[1:-1]
    if len(v) > max_items:
        body = f"{body}, ..." if body else "..."
    return f"[{body}]"
