from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Never, TypeIs

if TYPE_CHECKING:
    from ._result import Result


class OptionUnwrapError(RuntimeError): ...


class Option[T](ABC):
    """An optional value: either `Some(value)` or `NONE`.

    Used by `PullHandle.next()` to signal exhaustion, by `Seq.filter_map` as a fallible transform output,
    and by `Flat` to express an absent nested sequence.
    """

    __slots__ = ()

    @staticmethod
    def from_[V](value: V | None) -> Option[V]:
        """Wrap a value that may be `None`.

        Args:
            value (V | None): The value to wrap.

        Returns:
            Option[V]: `NONE` if **value** is `None`, `Some(value)` otherwise.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.Option.from_(3)
        Some(3)
        >>> ls.Option.from_(None)
        NONE

        ```
        """
        return NONE if value is None else Some(value)

    @abstractmethod
    def is_some(self) -> TypeIs[Some[T]]:  # type: ignore[misc]
        """Returns `True` if the option is a `Some` value."""
        ...

    @abstractmethod
    def is_none(self) -> TypeIs[NoneOption]:  # type: ignore[misc]
        """Returns `True` if the option is `NONE`."""
        ...

    @abstractmethod
    def unwrap(self) -> T:
        """Returns the contained `Some` value.

        Raises:
            OptionUnwrapError: If the option is `NONE`.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.Some("car").unwrap()
        'car'
        >>> ls.NONE.unwrap()
        Traceback (most recent call last):
            ...
        lazyseq._results._option.OptionUnwrapError: called `unwrap` on a `None`

        ```
        """
        ...

    def expect(self, msg: str) -> T:
        """Returns the contained `Some` value, or raises with **msg** if the value is `NONE`.

        Args:
            msg (str): The message to include in the exception.

        Returns:
            T: The contained value.

        Raises:
            OptionUnwrapError: If the option is `NONE`.
        """
        if self.is_some():
            return self.unwrap()
        msg = f"{msg} (called `expect` on a `None`)"
        raise OptionUnwrapError(msg)

    def unwrap_or(self, default: T) -> T:
        """Returns the contained `Some` value or **default**.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.Some("car").unwrap_or("bike")
        'car'
        >>> ls.NONE.unwrap_or("bike")
        'bike'

        ```
        """
        return self.unwrap() if self.is_some() else default

    def map[U](self, f: Callable[[T], U]) -> Option[U]:
        """Maps an `Option[T]` to `Option[U]` by applying **f** to a contained value.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.Some("Hello, World!").map(len)
        Some(13)
        >>> ls.NONE.map(len)
        NONE

        ```
        """
        if self.is_some():
            return Some(f(self.unwrap()))
        return NONE

    def and_then[U](self, f: Callable[[T], Option[U]]) -> Option[U]:
        """Calls **f** if the option is `Some`, otherwise returns `NONE`.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> def half(x: int) -> ls.Option[int]:
        ...     return ls.Some(x // 2) if x % 2 == 0 else ls.NONE
        >>> ls.Some(8).and_then(half).and_then(half)
        Some(2)
        >>> ls.Some(6).and_then(half).and_then(half)
        NONE

        ```
        """
        if self.is_some():
            return f(self.unwrap())
        return NONE

    def ok_or[E](self, err: E) -> Result[T, E]:
        """Transforms `Some(v)` into `Ok(v)` and `NONE` into `Err(err)`.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.Some(1).ok_or("missing")
        Ok(1)
        >>> ls.NONE.ok_or("missing")
        Err('missing')

        ```
        """
        from ._result import Err, Ok

        if self.is_some():
            return Ok(self.unwrap())
        return Err(err)


@dataclass(slots=True)
class Some[T](Option[T]):
    """Option variant representing the presence of a value.

    Args:
        value (T): The contained value.
    """

    value: T

    def __repr__(self) -> str:
        return f"Some({self.value!r})"

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
