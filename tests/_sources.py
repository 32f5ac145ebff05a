"""Sources that record how they are driven."""

from collections.abc import Iterator, Sequence
from typing import Self


class Recorded[T]:
    """A replayable source counting visited elements, opened and closed iterators.

    With no items, it counts up from 0 forever.
    """

    def __init__(self, items: Sequence[T] | None = None) -> None:
        self.items = items
        self.visits = 0
        self.opened = 0
        self.closed = 0

    def __iter__(self) -> Iterator[T]:
        self.opened += 1
        return _Cursor(self)

    @property
    def released(self) -> bool:
        """Whether every iterator handed out was closed."""
        return self.opened == self.closed


class _Cursor[T]:
    def __init__(self, owner: Recorded[T]) -> None:
        self._owner = owner
        self._pos = 0
        self._closed = False

    def __iter__(self) -> Self:
        return self

    def __next__(self) -> T:
        items = self._owner.items
        if items is not None and self._pos >= len(items):
            raise StopIteration
        item = self._pos if items is None else items[self._pos]
        self._pos += 1
        self._owner.visits += 1
        return item  # type: ignore[return-value]

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._owner.closed += 1
