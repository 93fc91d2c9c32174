from __future__ import annotations

from abc import ABC
from collections.abc import Callable
from typing import Concatenate, Self


class Pipeable:
    __slots__ = ()

    def into[**P, R](
        self,
        func: Callable[Concatenate[Self, P], R],
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> R:
        """Convert `Self` to `R`.

        Pipe the instance into a function that takes it as first argument.

        Conceptually, this allow to do x.into(f) instead of f(x), hence keeping a chaining style.

        Args:
            func (Callable[Concatenate[Self, P], R]): Function for conversion.
            *args (P.args): Positional arguments to pass to the function.
            **kwargs (P.kwargs): Keyword arguments to pass to the function.

        Returns:
            R: The converted value.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.stream([3, 4]).map(lambda x: x * 10).into(sum)
        70
        >>> ls.stream("abc").into(lambda s, sep: sep.join(s), "-")
        'a-b-c'

        ```
        """
        return func(self, *args, **kwargs)

    def inspect[**P](
        self,
        func: Callable[Concatenate[Self, P], object],
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> Self:
        """Pass the instance to a function to perform side effects without altering it.

        The function receives the wrapper itself, not its elements, so no iteration happens unless `func` iterates.

        Args:
            func (Callable[Concatenate[Self, P], object]): Function to apply to the instance for side effects.
            *args (P.args): Positional arguments to pass to the function.
            **kwargs (P.kwargs): Keyword arguments to pass to the function.

        Returns:
            Self: The instance itself for chaining.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.stream([1, 2, 3]).inspect(print).count()
        Sequence([1, 2, 3])
        3

        ```
        """
        func(self, *args, **kwargs)
        return self


class CommonBase[T](ABC, Pipeable):
    """Base class for all wrappers.

    Args:
        data (T): The underlying data to wrap.
    """

    _inner: T

    __slots__ = ("_inner",)

    def __init__(self, data: T) -> None:
        self._inner = data
