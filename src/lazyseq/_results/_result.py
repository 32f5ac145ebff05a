from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Never, TypeIs

from ._option import NONE, Option, Some


class ResultUnwrapError(RuntimeError): ...


class Result[T, E](ABC):
    """The outcome of a fallible call: either `Ok(value)` or `Err(error)`.

    This is the natural return type of a `Seq.filter_map` transform: `Err` outputs are dropped.
    """

    __slots__ = ()

    @abstractmethod
    def is_ok(self) -> TypeIs[Ok[T, E]]:  # type: ignore[misc]
        """Returns True if the result is Ok."""
        ...

    @abstractmethod
    def is_err(self) -> TypeIs[Err[T, E]]:  # type: ignore[misc]
        """Returns True if the result is Err."""
        ...

    @abstractmethod
    def unwrap(self) -> T:
        """Returns the contained Ok value, or raises ResultUnwrapError if the result is Err."""
        ...

    @abstractmethod
    def unwrap_err(self) -> E:
        """Returns the contained Err value, or raises ResultUnwrapError if the result is Ok."""
        ...

    def expect(self, msg: str) -> T:
        """Returns the contained Ok value, or raises ResultUnwrapError with **msg** if the result is Err.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.Err("boom").expect("parsing failed")
        Traceback (most recent call last):
            ...
        lazyseq._results._result.ResultUnwrapError: parsing failed: boom

        ```
        """
        if self.is_ok():
            return self.unwrap()
        raise ResultUnwrapError(f"{msg}: {self.unwrap_err()}")

    def expect_err(self, msg: str) -> E:
        """Returns the contained Err value, or raises ResultUnwrapError with **msg** if the result is Ok."""
        if self.is_err():
            return self.unwrap_err()
        raise ResultUnwrapError(f"{msg}: expected Err, got Ok({self.unwrap()!r})")

    def unwrap_or(self, default: T) -> T:
        """Returns the contained Ok value or **default**."""
        return self.unwrap() if self.is_ok() else default

    def map[U](self, f: Callable[[T], U]) -> Result[U, E]:
        """Maps a `Result[T, E]` to `Result[U, E]` by applying **f** to a contained Ok value.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.Ok(2).map(lambda x: x * 10)
        Ok(20)
        >>> ls.Err("nope").map(lambda x: x * 10)
        Err('nope')

        ```
        """
        if self.is_ok():
            return Ok(f(self.unwrap()))
        return Err(self.unwrap_err())

    def map_err[F](self, f: Callable[[E], F]) -> Result[T, F]:
        """Maps a `Result[T, E]` to `Result[T, F]` by applying **f** to a contained Err value."""
        if self.is_err():
            return Err(f(self.unwrap_err()))
        return Ok(self.unwrap())

    def and_then[U](self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Calls **f** if the result is Ok, otherwise returns the Err value unchanged."""
        if self.is_ok():
            return f(self.unwrap())
        return Err(self.unwrap_err())

    def ok(self) -> Option[T]:
        """Converts to `Option[T]`, discarding the error.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.Ok(2).ok()
        Some(2)
        >>> ls.Err("nope").ok()
        NONE

        ```
        """
        return Some(self.unwrap()) if self.is_ok() else NONE

    def err(self) -> Option[E]:
        """Converts to `Option[E]`, discarding the success value."""
        return Some(self.unwrap_err()) if self.is_err() else NONE


@dataclass(slots=True)
class Ok[T, E](Result[T, E]):
    """Represents a successful value."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"

    def is_ok(self) -> TypeIs[Ok[T, E]]:  # type: ignore[misc]
        return True

    def is_err(self) -> TypeIs[Err[T, E]]:  # type: ignore[misc]
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_err(self) -> Never:
        raise ResultUnwrapError("called `unwrap_err` on Ok")


@dataclass(slots=True)
class Err[T, E](Result[T, E]):
    """Represents an error value."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"

    def is_ok(self) -> TypeIs[Ok[T, E]]:  # type: ignore[misc]
        return False

    def is_err(self) -> TypeIs[Err[T, E]]:  # type: ignore[misc]
        return True

    def unwrap(self) -> Never:
        raise ResultUnwrapError(f"called `unwrap` on Err: {self.error!r}")

    def unwrap_err(self) -> E:
        return self.error
