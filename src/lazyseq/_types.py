from __future__ import annotations

from collections.abc import Callable
from typing import NamedTuple

type Consumer[T] = Callable[[T], bool]
"""Step consumer of a `Seq`: return `True` to continue, `False` to stop."""
type KeyedConsumer[K, V] = Callable[[K, V], bool]
"""Step consumer of a `KeyedSeq`, called with the key and the value."""


class Pair[K, V](NamedTuple):
    """One step of a `KeyedSeq`.

    Unpacks like a plain 2-tuple, so `for k, v in keyed:` works.
    """

    key: K
    """The first value of the pair."""
    value: V
    """The second value of the pair."""

    def __repr__(self) -> str:
        return f"({self.key!r}, {self.value!r})"
