from __future__ import annotations

from collections.abc import Iterator
from types import TracebackType
from typing import Self

from ._core import logger
from ._results import NONE, Option, Some

_EXHAUSTED = object()


def close_iterator(it: Iterator[object]) -> None:
    """Run the cleanup of **it** if it has any (generators do, builtin iterators don't)."""
    close = getattr(it, "close", None)
    if close is not None:
        close()


class PullHandle[T]:
    """A cursor turning a sequence into an explicit "next element, or exhaustion" interface.

    Obtained with `Seq.pull()` or `KeyedSeq.pull()`.

    The handle owns the iterator it advances: closing it runs the cleanup of the underlying sequence
    (for generator sources, their `finally` blocks), even if it was stopped before exhaustion.

    Prefer the context manager form, which closes the handle on every exit path.

    A handle is not meant to be advanced from several threads at once.

    Args:
        it (Iterator[T]): The iterator to advance.

    Example:
    ```python
    >>> import lazyseq as ls
    >>> with ls.Seq([1, 2]).pull() as handle:
    ...     handle.next(), handle.next(), handle.next()
    (Some(1), Some(2), NONE)
    >>> handle.closed
    True

    ```
    """

    __slots__ = ("_closed", "_it")

    def __init__(self, it: Iterator[T]) -> None:
        self._it = it
        self._closed = False

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"{self.__class__.__name__}({state})"

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        """Whether the handle was released."""
        return self._closed

    def next(self) -> Option[T]:
        """Advance the cursor by one element.

        Once `NONE` was returned, or the handle was closed, every further call returns `NONE`
        without touching the underlying sequence.

        Returns:
            Option[T]: `Some(element)`, or `NONE` if the sequence is exhausted.
        """
        if self._closed:
            return NONE
        value = next(self._it, _EXHAUSTED)
        if value is _EXHAUSTED:
            self.close()
            return NONE
        return Some(value)  # type: ignore[arg-type]

    def close(self) -> None:
        """Release the handle. Calling it more than once has no effect."""
        if self._closed:
            return
        self._closed = True
        logger.debug("releasing pull handle over %r", self._it)
        close_iterator(self._it)
