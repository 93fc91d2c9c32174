from __future__ import annotations

import functools
import itertools
import logging
import sys
from collections.abc import Callable, Iterable, Iterator
from typing import Any, overload

import cytoolz as cz
import more_itertools as mit

from ._core import CommonBase, get_config
from ._producer import Producer
from ._results import NONE, Option, Some

logger = logging.getLogger(__name__)

type Comparator[T] = Callable[[T, T], int]
"""A total-order function returning a negative, zero or positive integer."""


def _check_count(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"{name} must be an int, got {type(value).__name__}"
        raise TypeError(msg)
    if value < 0:
        msg = f"{name} must be >= 0, got {value}"
        raise ValueError(msg)
    return min(value, sys.maxsize)


class Sequence[T](CommonBase[Iterable[T]]):
    """A lazy, chainable description of how to produce values of type `T`.

    A `Sequence` wraps any `Iterable`. Intermediate operations (`filter`, `map`, `flat_map`, `distinct`, `limit`, `skip`) return a new `Sequence` without iterating anything.

    Terminal operations (`to_array`, `reduce`, `for_each`, `find`, `some`, `every`, `count`) pull elements through the whole chain.

    `sorted` is the only intermediate operation that evaluates eagerly: it materializes the upstream when called.

    Each terminal operation starts a fresh traversal from the original source:

    - Over a re-iterable source (list, tuple, range, set...), a `Sequence` can be consumed any number of times.
    - Over a single-pass source (an iterator or generator), the second traversal sees whatever the first one left.

    Args:
        data (Iterable[T]): The source to wrap. It is not iterated.

    Example:
    ```python
    >>> import lazyseq as ls
    >>> evens = ls.stream(range(10)).filter(lambda x: x % 2 == 0)
    >>> evens.map(lambda x: x * x).to_array()
    [0, 4, 16, 36, 64]
    >>> evens.count()
    5

    ```
    """

    __slots__ = ()

    def __iter__(self) -> Iterator[T]:
        return iter(self._inner)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({get_config().iter_repr(self._inner)})"

    def _lazy[U](
        self, name: str, factory: Callable[[Iterable[T]], Iterator[U]]
    ) -> Sequence[U]:
        return Sequence(Producer(name, factory, self._inner))

    @overload
    @staticmethod
    def from_[U](data: Iterable[U]) -> Sequence[U]: ...
    @overload
    @staticmethod
    def from_[U](data: U, *more_data: U) -> Sequence[U]: ...
    @staticmethod
    def from_[U](data: Iterable[U] | U, *more_data: U) -> Sequence[U]:
        """Create a `Sequence` from any `Iterable`, or from unpacked values.

        A single iterable argument is wrapped as is, without being iterated.

        Args:
            data (Iterable[U] | U): Iterable to wrap, or a first value.
            *more_data (U): Additional values, if `data` is not an `Iterable`.

        Returns:
            Sequence[U]: A new `Sequence` over the provided data.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.Sequence.from_({"a": 1, "b": 2}).to_array()
        ['a', 'b']
        >>> ls.Sequence.from_(1, 2, 3).to_array()
        [1, 2, 3]

        ```
        """
        if not more_data and cz.itertoolz.isiterable(data):
            return Sequence(data)  # type: ignore[arg-type]
        return Sequence((data, *more_data))  # type: ignore[arg-type]

    # intermediate operations ---------------------------------------------

    def filter(self, predicate: Callable[[T], bool]) -> Sequence[T]:
        """Keep only the elements for which `predicate` returns a truthy value.

        Order is preserved.

        Args:
            predicate (Callable[[T], bool]): Function to evaluate each element.

        Returns:
            Sequence[T]: A lazy `Sequence` of the matching elements.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.stream([1, 2, 3, 4]).filter(lambda x: x > 1).to_array()
        [2, 3, 4]

        ```
        """

        def _filter(data: Iterable[T]) -> Iterator[T]:
            return filter(predicate, data)

        return self._lazy("filter", _filter)

    def map[U](self, mapper: Callable[[T], U]) -> Sequence[U]:
        """Apply `mapper` to each element.

        Args:
            mapper (Callable[[T], U]): Function to apply to each element.

        Returns:
            Sequence[U]: A lazy `Sequence` of the transformed elements.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.stream([1, 2, 3, 4]).filter(lambda x: x > 1).map(lambda x: x * 2).to_array()
        [4, 6, 8]

        ```
        """

        def _map(data: Iterable[T]) -> Iterator[U]:
            return map(mapper, data)

        return self._lazy("map", _map)

    def flat_map[U](self, mapper: Callable[[T], Iterable[U]]) -> Sequence[U]:
        """Apply `mapper` to each element and concatenate the resulting iterables.

        Each inner iterable is drained before the next outer element is pulled.

        Args:
            mapper (Callable[[T], Iterable[U]]): Function returning an iterable for each element.

        Returns:
            Sequence[U]: A lazy, flattened `Sequence`.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.stream([1, 2, 3]).flat_map(lambda x: range(x)).to_array()
        [0, 0, 1, 0, 1, 2]
        >>> ls.stream(["ab", "c"]).flat_map(str.upper).to_array()
        ['A', 'B', 'C']

        ```
        """

        def _flat_map(data: Iterable[T]) -> Iterator[U]:
            return itertools.chain.from_iterable(map(mapper, data))

        return self._lazy("flat_map", _flat_map)

    def distinct(self) -> Sequence[T]:
        """Keep only the first occurrence of each value.

        Hashable values are compared through a set, unhashable ones (lists, dicts...) by equality.

        The set of seen values is created anew for every traversal.

        Returns:
            Sequence[T]: A lazy `Sequence` of unique elements, in first-seen order.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.stream([1, 1, 2, 3, 3]).distinct().to_array()
        [1, 2, 3]
        >>> ls.stream([[1], [2], [1]]).distinct().to_array()
        [[1], [2]]

        ```
        """
        return self._lazy("distinct", mit.unique_everseen)

    def sorted(
        self,
        comparator: Comparator[T] | None = None,
        *,
        key: Callable[[T], Any] | None = None,
        reverse: bool = False,
    ) -> Sequence[T]:
        """Materialize the whole upstream now, and return a `Sequence` over its sorted elements.

        **Warning** ⚠️
            Unlike other intermediate operations, this one is eager.
            Calling it on an infinite source never returns.

        The sort is stable.

        Args:
            comparator (Comparator[T] | None): Function returning a negative, zero or positive integer. Defaults to None.
            key (Callable[[T], Any] | None): Function extracting a comparison key. Defaults to None.
            reverse (bool): Whether to sort in descending order. Defaults to False.

        Returns:
            Sequence[T]: A `Sequence` over a sorted tuple.

        Raises:
            ValueError: If both `comparator` and `key` are given.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.stream([3, 1, 2]).sorted().to_array()
        [1, 2, 3]
        >>> ls.stream([3, 1, 2]).sorted(lambda a, b: b - a).to_array()
        [3, 2, 1]
        >>> ls.stream(["bb", "a", "ccc"]).sorted(key=len, reverse=True).to_array()
        ['ccc', 'bb', 'a']

        ```
        """
        if comparator is not None:
            if key is not None:
                msg = "sorted() takes either a comparator or a key, not both"
                raise ValueError(msg)
            key = functools.cmp_to_key(comparator)
        items = tuple(sorted(self._inner, key=key, reverse=reverse))  # type: ignore[arg-type]
        logger.debug("sorted() materialized %d elements", len(items))
        return Sequence(items)

    def limit(self, max_size: int) -> Sequence[T]:
        """Yield at most `max_size` elements.

        Once `max_size` elements are yielded, no further element is pulled from upstream, so this is safe on infinite sources.

        Args:
            max_size (int): Maximum number of elements.

        Returns:
            Sequence[T]: A lazy `Sequence` of the first elements.

        Raises:
            TypeError: If `max_size` is not an int.
            ValueError: If `max_size` is negative.

        Example:
        ```python
        >>> import itertools
        >>> import lazyseq as ls
        >>> ls.stream(itertools.count()).limit(3).to_array()
        [0, 1, 2]

        ```
        """
        n = _check_count("max_size", max_size)

        def _limit(data: Iterable[T]) -> Iterator[T]:
            return cz.itertoolz.take(n, data)

        return self._lazy("limit", _limit)

    def skip(self, n: int) -> Sequence[T]:
        """Discard the first `n` elements.

        Args:
            n (int): Number of elements to skip.

        Returns:
            Sequence[T]: A lazy `Sequence` of the remaining elements.

        Raises:
            TypeError: If `n` is not an int.
            ValueError: If `n` is negative.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.stream([1, 2, 3, 4, 5]).skip(1).limit(2).to_array()
        [2, 3]

        ```
        """
        count = _check_count("n", n)

        def _skip(data: Iterable[T]) -> Iterator[T]:
            return cz.itertoolz.drop(count, data)

        return self._lazy("skip", _skip)

    # terminal operations -------------------------------------------------

    def to_array(self) -> list[T]:
        """Collect every element into a new `list`.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.stream((1, 2)).to_array()
        [1, 2]

        ```
        """
        return list(self._inner)

    def reduce[U](self, reducer: Callable[[U, T], U], initial: U) -> U:
        """Left fold over the elements, starting from `initial`.

        Args:
            reducer (Callable[[U, T], U]): Function combining the accumulator and the next element.
            initial (U): Starting accumulator, returned as is for an empty `Sequence`.

        Returns:
            U: The final accumulator.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.stream([1, 2, 3]).reduce(lambda acc, x: acc + x, 10)
        16
        >>> ls.stream([]).reduce(lambda acc, x: acc + x, 0)
        0

        ```
        """
        return functools.reduce(reducer, self._inner, initial)

    def for_each(self, callback: Callable[[T], Any]) -> None:
        """Call `callback` once for each element, in order.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.stream(["a", "b"]).for_each(print)
        a
        b

        ```
        """
        for item in self._inner:
            callback(item)

    def find(self, predicate: Callable[[T], bool]) -> Option[T]:
        """Return the first element matching `predicate`.

        Stops pulling elements as soon as one matches.

        Args:
            predicate (Callable[[T], bool]): Function to evaluate each element.

        Returns:
            Option[T]: `Some(element)`, or `NONE` if nothing matched.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.stream([1, 2, 3]).find(lambda x: x > 1)
        Some(value=2)
        >>> ls.stream([1, 2, 3]).find(lambda x: x > 5)
        NONE

        ```
        """
        for item in self._inner:
            if predicate(item):
                return Some(item)
        return NONE

    def some(self, predicate: Callable[[T], bool]) -> bool:
        """Return `True` if any element matches `predicate`.

        Stops at the first match. An empty `Sequence` returns `False`.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.stream([1, 2, 3]).some(lambda x: x > 2)
        True
        >>> ls.stream([]).some(lambda x: True)
        False

        ```
        """
        return any(map(predicate, self._inner))

    def every(self, predicate: Callable[[T], bool]) -> bool:
        """Return `True` if all elements match `predicate`.

        Stops at the first non-match. An empty `Sequence` returns `True`.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.stream([1, 2, 3]).every(lambda x: x > 0)
        True
        >>> ls.stream([]).every(lambda x: False)
        True

        ```
        """
        return all(map(predicate, self._inner))

    def count(self) -> int:
        """Return the number of elements.

        Always iterates the chain, even when the source reports a length.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.stream("hello").distinct().count()
        4

        ```
        """
        return mit.ilen(self._inner)

    flatMap = flat_map  # noqa: N815
    toArray = to_array  # noqa: N815
    forEach = for_each  # noqa: N815


def stream[T](source: Iterable[T]) -> Sequence[T]:
    """Create a `Sequence` from an array, set, or any other iterable.

    Equivalent to `Sequence.from_(source)`.

    Example:
    ```python
    >>> import lazyseq as ls
    >>> ls.stream([1, 2, 3]).filter(lambda x: x > 1).to_array()
    [2, 3]

    ```
    """
    return Sequence.from_(source)
