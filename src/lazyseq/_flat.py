"""The closed set of item shapes understood by `Seq.flatten`.

A producer that wants to emit "a value, or a sub-sequence of values, or nothing" wraps each item in one of the
five cases below, and `Seq.flatten` unrolls them in place.

`classify` builds these cases from raw, heterogeneous items, for producers that cannot wrap their output themselves.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ._core import logger
from ._results import NONE, NoneOption, Option, Some

if TYPE_CHECKING:
    from ._seq import Seq


@dataclass(slots=True, frozen=True)
class Nested[T]:
    """A sequence to unroll in place."""

    seq: Seq[T]


@dataclass(slots=True, frozen=True)
class MaybeNested[T]:
    """A sequence that may be absent. `NONE` contributes nothing."""

    seq: Option[Seq[T]]


@dataclass(slots=True, frozen=True)
class Bounded[T]:
    """A fixed collection (`list` or `tuple`) to unroll in place."""

    items: Sequence[T]


@dataclass(slots=True, frozen=True)
class MaybeBounded[T]:
    """A fixed collection that may be absent. `NONE` contributes nothing."""

    items: Option[Sequence[T]]


@dataclass(slots=True, frozen=True)
class Scalar[T]:
    """A single element."""

    value: T


type Flat[T] = Nested[T] | MaybeNested[T] | Bounded[T] | MaybeBounded[T] | Scalar[T]
"""Tagged variant accepted by `Seq.flatten`."""


def _is_a(item: object, target: type) -> bool:
    if isinstance(item, bool) and target is int:
        return False
    return isinstance(item, target)


def _all_of(items: Iterable[object], target: type) -> bool:
    return all(_is_a(item, target) for item in items)


def classify[T](item: object, target: type[T]) -> Option[Flat[T]]:
    """Recognise the shape of a raw item.

    Shapes are tried in this order:

    - a `Seq` -> `Nested`
    - `Some(Seq)` or `NONE` -> `MaybeNested`
    - a `list` or `tuple` whose elements are all instances of **target** -> `Bounded`
    - `Some(list or tuple)` holding such elements -> `MaybeBounded`
    - an instance of **target** -> `Scalar`

    `bool` values are not taken as `int`: `True` is unrecognised for a **target** of `int`.

    Args:
        item (object): The raw item.
        target (type[T]): Element type of the flattened sequence.

    Returns:
        Option[Flat[T]]: The recognised case, or `NONE` if the item has none of the shapes above.

    Example:
    ```python
    >>> import lazyseq as ls
    >>> ls.classify([1, 2], int)
    Some(Bounded(items=[1, 2]))
    >>> ls.classify(ls.Some((3,)), int)
    Some(MaybeBounded(items=Some((3,))))
    >>> ls.classify("x", int)
    NONE

    ```
    """
    from ._seq import Seq

    match item:
        case Seq():
            return Some(Nested(item))
        case Some(Seq() as seq):
            return Some(MaybeNested(Some(seq)))
        case NoneOption():
            return Some(MaybeNested(NONE))
        case list() | tuple() if _all_of(item, target):
            return Some(Bounded(item))
        case Some(list() | tuple() as items) if _all_of(items, target):
            return Some(MaybeBounded(Some(items)))
        case _ if _is_a(item, target):
            return Some(Scalar(item))
        case _:
            logger.debug("no flat shape of %s for %r", target.__name__, item)
            return NONE
