from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import Any

from ._core import get_config


class Producer[T]:
    """A re-traversable pipeline stage.

    Holds an upstream `Iterable` and a factory turning it into an `Iterator`.

    Every call to `iter()` runs the factory again against the upstream, so each traversal gets its own iterator state.

    Whether a second traversal sees the same elements only depends on whether the original source can be iterated twice.

    Args:
        name (str): Stage name, used by `repr`.
        factory (Callable[[Iterable[Any]], Iterator[T]]): Builds the stage iterator from the upstream.
        upstream (Iterable[Any]): The parent stage or the original source.

    Example:
    ```python
    >>> from lazyseq._producer import Producer
    >>> doubled = Producer("map", lambda data: (x * 2 for x in data), [1, 2])
    >>> list(doubled), list(doubled)
    ([2, 4], [2, 4])
    >>> doubled
    map([1, 2])

    ```
    """

    __slots__ = ("_factory", "_name", "_upstream")

    def __init__(
        self,
        name: str,
        factory: Callable[[Iterable[Any]], Iterator[T]],
        upstream: Iterable[Any],
    ) -> None:
        self._name = name
        self._factory = factory
        self._upstream = upstream

    def __iter__(self) -> Iterator[T]:
        return self._factory(self._upstream)

    def __repr__(self) -> str:
        return f"{self._name}({get_config().iter_repr(self._upstream)})"
