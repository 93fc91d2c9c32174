from __future__ import annotations

from collections.abc import Collection, Iterable
from dataclasses import dataclass, replace
from typing import Any

from ._format import collection_repr


@dataclass(slots=True, frozen=True)
class Config:
    """Process-wide presentation settings.

    These only affect how wrappers are displayed, never how they are evaluated.

    Args:
        repr_max_items (int): Maximum number of collection items shown by `repr`. Defaults to 20.
        repr_width (int): Line width given to `pprint.pformat`. Defaults to 80.
    """

    repr_max_items: int = 20
    repr_width: int = 80

    def __post_init__(self) -> None:
        if self.repr_max_items < 0:
            msg = f"repr_max_items must be >= 0, got {self.repr_max_items}"
            raise ValueError(msg)
        if self.repr_width <= 0:
            msg = f"repr_width must be > 0, got {self.repr_width}"
            raise ValueError(msg)

    def iter_repr(self, data: Iterable[Any]) -> str:
        """Render an iterable without iterating it, unless it is a sized collection."""
        match data:
            case str() | bytes() | range():
                return repr(data)
            case Collection():
                return collection_repr(
                    data, max_items=self.repr_max_items, width=self.repr_width
                )
            case _:
                return repr(data)


_CONFIG = Config()


def get_config() -> Config:
    """Return the active `Config`.

    Example:
    ```python
    >>> import lazyseq as ls
    >>> ls.get_config().repr_max_items
    20

    ```
    """
    return _CONFIG


def set_config(**changes: Any) -> Config:
    """Replace the active `Config` with a copy updated by `changes`.

    Args:
        **changes (Any): Field values to override.

    Returns:
        Config: The new active configuration.

    Example:
    ```python
    >>> import lazyseq as ls
    >>> previous = ls.get_config()
    >>> _ = ls.set_config(repr_max_items=2)
    >>> ls.stream([1, 2, 3, 4])
    Sequence([1, 2, ...])
    >>> _ = ls.set_config(repr_max_items=previous.repr_max_items)

    ```
    """
    global _CONFIG  # noqa: PLW0603
    _CONFIG = replace(_CONFIG, **changes)
    return _CONFIG
