from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Never, TypeIs


class OptionUnwrapError(RuntimeError): ...


class Option[T](ABC):
    """A value that may be absent.

    Returned by `Sequence.find()`: `Some(value)` when an element matched, `NONE` otherwise.

    Wrapping the result keeps a matching element that is itself `None` distinguishable from "no match".
    """

    __slots__ = ()

    @abstractmethod
    def is_some(self) -> TypeIs[Some[T]]:  # type: ignore[misc]
        """
        Returns `True` if the option is a `Some` value.

        Example:
            ```python
            >>> from lazyseq import Some, NONE
            >>> Some(2).is_some()
            True
            >>> NONE.is_some()
            False

            ```
        """
        ...

    @abstractmethod
    def is_none(self) -> TypeIs[NoneOption]:  # type: ignore[misc]
        """
        Returns `True` if the option is the `NONE` value.

        Example:
            ```python
            >>> from lazyseq import Some, NONE
            >>> Some(2).is_none()
            False
            >>> NONE.is_none()
            True

            ```
        """
        ...

    @abstractmethod
    def unwrap(self) -> T:
        """
        Returns the contained `Some` value.

        Raises:
            OptionUnwrapError: If the option is `NONE`.

        Example:
            ```python
            >>> from lazyseq import Some, NONE
            >>> Some("car").unwrap()
            'car'
            >>> NONE.unwrap()
            Traceback (most recent call last):
                ...
            lazyseq._results._option.OptionUnwrapError: called `unwrap` on a `None`

            ```
        """
        ...

    def expect(self, msg: str) -> T:
        """
        Returns the contained `Some` value, or raises with `msg` if the value is `NONE`.

        Args:
            msg: The message to include in the exception.

        Raises:
            OptionUnwrapError: If the option is `NONE`.

        Example:
            ```python
            >>> from lazyseq import Some, NONE
            >>> Some("value").expect("fruits are healthy")
            'value'
            >>> NONE.expect("fruits are healthy")
            Traceback (most recent call last):
                ...
            lazyseq._results._option.OptionUnwrapError: fruits are healthy (called `expect` on a `None`)

            ```
        """
        if self.is_some():
            return self.unwrap()
        msg = f"{msg} (called `expect` on a `None`)"
        raise OptionUnwrapError(msg)

    def unwrap_or(self, default: T) -> T:
        """
        Returns the contained `Some` value or a provided default.

        Example:
            ```python
            >>> from lazyseq import Some, NONE
            >>> Some("car").unwrap_or("bike")
            'car'
            >>> NONE.unwrap_or("bike")
            'bike'

            ```
        """
        return self.unwrap() if self.is_some() else default

    def unwrap_or_else(self, f: Callable[[], T]) -> T:
        """
        Returns the contained `Some` value or computes it from a function.

        Example:
            ```python
            >>> from lazyseq import Some, NONE
            >>> k = 10
            >>> Some(4).unwrap_or_else(lambda: 2 * k)
            4
            >>> NONE.unwrap_or_else(lambda: 2 * k)
            20

            ```
        """
        return self.unwrap() if self.is_some() else f()

    def map[U](self, f: Callable[[T], U]) -> Option[U]:
        """
        Maps an `Option[T]` to `Option[U]` by applying a function to a contained `Some` value.

        `NONE` is returned untouched.

        Example:
            ```python
            >>> from lazyseq import Some, NONE
            >>> Some("Hello, World!").map(len)
            Some(value=13)
            >>> NONE.map(len)
            NONE

            ```
        """
        if self.is_some():
            return Some(f(self.unwrap()))
        return NONE


@dataclass(slots=True)
class Some[T](Option[T]):
    """Option variant representing the presence of a value.

    Args:
        value (T): The contained value.
    """

    value: T

    def is_some(self) -> TypeIs[Some[T]]:  # type: ignore[misc]
        return True

    def is_none(self) -> TypeIs[NoneOption]:  # type: ignore[misc]
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(slots=True)
class NoneOption(Option[Any]):
    """Option variant representing the absence of a value."""

    def __repr__(self) -> str:
        return "NONE"

    def is_some(self) -> TypeIs[Some[Any]]:  # type: ignore[misc]
        return False

    def is_none(self) -> TypeIs[NoneOption]:  # type: ignore[misc]
        return True

    def unwrap(self) -> Never:
        raise OptionUnwrapError("called `unwrap` on a `None`")


NONE: Option[Any] = NoneOption()
"""Singleton instance representing the absence of a value."""
