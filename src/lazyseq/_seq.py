from __future__ import annotations

import functools
import itertools
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, Any, overload

import cytoolz as cz
import more_itertools as mit

from ._core import Pipeable, logger, source_repr
from ._flat import Bounded, Flat, MaybeBounded, MaybeNested, Nested, Scalar, classify
from ._pull import PullHandle, close_iterator
from ._results import Ok, Option, Result, Some

if TYPE_CHECKING:
    from ._keyed import KeyedSeq
    from ._types import Consumer

type TryVal[T] = Result[T, Any] | Option[T]
"""Output of a fallible transform: `Ok`/`Some` keep the value, `Err`/`NONE` drop it."""


@dataclass(slots=True, frozen=True)
class Generated[T]:
    """A replayable iterable: every iteration calls **factory** again."""

    factory: Callable[[], Iterator[T]]
    label: str

    def __iter__(self) -> Iterator[T]:
        return self.factory()

    def __repr__(self) -> str:
        return f"<{self.label}>"


@contextmanager
def opened[T](source: Iterable[T]) -> Iterator[Iterator[T]]:
    """Open a fresh iterator over **source**, closed again however the block exits."""
    it = iter(source)
    try:
        yield it
    finally:
        close_iterator(it)


def convert_data[T](data: Iterable[T] | T, *more_data: T) -> Iterable[T]:
    if more_data or not cz.itertoolz.isiterable(data):
        return (data, *more_data)
    return data


def take_from[T](n: int, data: Iterable[T]) -> Iterator[T]:
    with opened(data) as it:
        yield from cz.itertoolz.take(max(n, 0), it)


def skip_from[T](n: int, data: Iterable[T]) -> Iterator[T]:
    with opened(data) as it:
        yield from cz.itertoolz.drop(max(n, 0), it)


class Seq[T](Pipeable, Iterable[T]):
    """A lazy, pull-driven sequence of elements, with chainable combinators.

    A `Seq` wraps any `Iterable`, and every combinator returns a new `Seq` that drives its input only on demand:
    nothing runs until the sequence is iterated, collected, reduced or driven.

    Every drive opens a fresh iterator over the wrapped data, so a `Seq` over a list, a tuple, a range,
    or built from other replayable `Seq`s can be driven several times with the same output.
    A `Seq` over a one-shot iterator (a generator object, a file...) does not rewind itself.
    Such an iterator is also closed when a drive ends: after `Seq(gen_obj).take(2).collect()`, the generator
    object is finished and yields nothing more. Iterators without a `close()` method (list or tuple iterators)
    keep their remaining elements. Use `Seq.from_gen()` to get a replayable sequence from a generator function.

    Infinite sequences are fine as long as something bounds them (`take()`, a consumer returning `False`, a `break`).

    Whenever a drive ends, early or not, the iterators opened on the inputs are closed,
    so generator sources get their `finally` blocks run right away.

    Args:
        data (Iterable[T]): The data to wrap.

    Example:
    ```python
    >>> import lazyseq as ls
    >>> evens = ls.Seq(range(10)).filter(lambda x: x % 2 == 0)
    >>> evens.map(lambda x: x * x).collect()
    (0, 4, 16, 36, 64)
    >>> evens.take(2).collect()
    (0, 2)

    ```
    """

    _source: Iterable[T]

    __slots__ = ("_source",)

    def __init__(self, data: Iterable[T]) -> None:
        self._source = data

    def __iter__(self) -> Iterator[T]:
        return iter(self._source)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({source_repr(self._source)})"

    def _iter[U](
        self, gen: Callable[[Iterable[T]], Iterator[U]], name: str | None = None
    ) -> Seq[U]:
        return Seq(Generated(partial(gen, self), name or gen.__name__.strip("_")))

    # constructors ------------------------------------------------------------
    @staticmethod
    def new() -> Seq[Any]:
        """Create an empty `Seq`.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.Seq.new().collect()
        ()

        ```
        """
        return Seq(())

    @overload
    @staticmethod
    def from_[U](data: Iterable[U]) -> Seq[U]: ...
    @overload
    @staticmethod
    def from_[U](data: U, *more_data: U) -> Seq[U]: ...
    @staticmethod
    def from_[U](data: Iterable[U] | U, *more_data: U) -> Seq[U]:
        """Create a `Seq` from any `Iterable`, or from unpacked values.

        Args:
            data (Iterable[U] | U): Iterable to wrap, or a single value.
            *more_data (U): Additional values. When given, **data** is taken as the first value, even if it is an `Iterable`.

        Returns:
            Seq[U]: A new `Seq` over the provided data.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.Seq.from_(1, 2, 3).collect()
        (1, 2, 3)
        >>> ls.Seq.from_([4, 5]).collect()
        (4, 5)

        ```
        """
        return Seq(convert_data(data, *more_data))

    @staticmethod
    def from_gen[U](factory: Callable[[], Iterator[U]]) -> Seq[U]:
        """Create a replayable `Seq` from a generator function.

        **factory** is called again each time the sequence is driven.

        Args:
            factory (Callable[[], Iterator[U]]): Zero-argument callable returning a fresh iterator.

        Returns:
            Seq[U]: A `Seq` producing what **factory** produces.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> def letters():
        ...     yield "a"
        ...     yield "b"
        >>> seq = ls.Seq.from_gen(letters)
        >>> seq.collect(), seq.collect()
        (('a', 'b'), ('a', 'b'))

        ```
        """
        return Seq(Generated(factory, getattr(factory, "__name__", "gen")))

    @staticmethod
    def from_count(start: int = 0, step: int = 1) -> Seq[int]:
        """Create an infinite `Seq` of evenly spaced values.

        **Warning** ⚠️
            This creates an infinite sequence.
            Be sure to use `Seq.take()` or a stopping consumer to bound it.

        Args:
            start (int): Starting value of the sequence. Defaults to 0.
            step (int): Difference between consecutive values. Defaults to 1.

        Returns:
            Seq[int]: A sequence generating the values.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.Seq.from_count(10, 2).take(3).collect()
        (10, 12, 14)

        ```
        """
        return Seq(Generated(partial(itertools.count, start, step), "count"))

    @staticmethod
    def from_fn[S, V](
        state: S, generator: Callable[[S], Option[tuple[V, S]]]
    ) -> Seq[V]:
        """Create a `Seq` by repeatedly applying a **generator** function to an initial **state**.

        The **generator** function takes the current state and must return:

        - `Some((value, new_state))` to emit the value `V` and continue with the new **state** `S`.
        - `NONE` to stop the generation.

        **Warning** ⚠️
            If the **generator** function never returns `NONE`, it creates an infinite sequence.

        Args:
            state (S): Initial state for the generator.
            generator (Callable[[S], Option[tuple[V, S]]]): Function that generates the next value and state.

        Returns:
            Seq[V]: A replayable sequence of the generated values.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> type FibState = tuple[int, int]
        >>> def fib(state: FibState) -> ls.Option[tuple[int, FibState]]:
        ...     a, b = state
        ...     if a > 20:
        ...         return ls.NONE
        ...     return ls.Some((a, (b, a + b)))
        >>> ls.Seq.from_fn((0, 1), fib).collect()
        (0, 1, 1, 2, 3, 5, 8, 13)

        ```
        """

        def _from_fn() -> Iterator[V]:
            current_state: S = state
            while True:
                result = generator(current_state)
                if result.is_none():
                    break
                value, current_state = result.unwrap()
                yield value

        return Seq(Generated(_from_fn, "from_fn"))

    # driving ------------------------------------------------------------
    def drive(self, consumer: Consumer[T]) -> None:
        """Drive the sequence, offering each element to **consumer**.

        **consumer** returns `True` to ask for the next element, `False` to stop right away.

        Once it returned `False`, no other element is produced and the iterators opened on the inputs are closed
        before `drive` returns.

        Exceptions raised by **consumer**, or by any function of the chain, propagate unchanged.

        Args:
            consumer (Consumer[T]): Step consumer called with each element.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> seen = []
        >>> def until_three(x: int) -> bool:
        ...     seen.append(x)
        ...     return x < 3
        >>> ls.Seq.from_count(1).drive(until_three)
        >>> seen
        [1, 2, 3]

        ```
        """
        with opened(self) as it:
            for item in it:
                if not consumer(item):
                    return

    def pull(self) -> PullHandle[T]:
        """Convert the sequence into an explicit cursor.

        The handle must be closed once done with, which the context manager form does for you.

        Returns:
            PullHandle[T]: A cursor over a fresh drive of the sequence.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> with ls.Seq.from_count().map(str).pull() as handle:
        ...     handle.next()
        Some('0')

        ```
        """
        return PullHandle(iter(self))

    # terminals ------------------------------------------------------------
    def collect[C](self, collector: Callable[[Iterator[T]], C] = tuple) -> C:
        """Drain the sequence into a collection.

        Args:
            collector (Callable[[Iterator[T]], C]): Collection constructor. Defaults to `tuple`.

        Returns:
            C: The collected elements.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.Seq.from_(3, 1, 2).collect(sorted)
        [1, 2, 3]

        ```
        """
        with opened(self) as it:
            return collector(it)

    def reduce[R](self, initial: R, func: Callable[[R, T], R]) -> R:
        """Fold the sequence from left to right, starting from **initial**.

        This is a terminal operation: the whole sequence is drained, so it never returns on an infinite one.

        Args:
            initial (R): Starting accumulator, returned as is for an empty sequence.
            func (Callable[[R, T], R]): Called with the accumulator and each element, returns the new accumulator.

        Returns:
            R: The final accumulator.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.Seq.from_(1, 2, 3, 4, 5).reduce(0, lambda acc, n: acc + n)
        15
        >>> ls.Seq.new().reduce("empty", lambda acc, n: acc + n)
        'empty'

        ```
        """
        with opened(self) as it:
            return functools.reduce(func, it, initial)

    def for_each(self, func: Callable[[T], object]) -> None:
        """Call **func** on every element, for its side effects.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.Seq.from_("a", "b").for_each(print)
        a
        b

        ```
        """
        with opened(self) as it:
            mit.consume(map(func, it))

    def length(self) -> int:
        """Count the elements, draining the sequence.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.Seq(range(10)).skip(3).length()
        7

        ```
        """
        with opened(self) as it:
            return cz.itertoolz.count(it)

    def first(self) -> Option[T]:
        """Return the first element, without requesting a second one.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.Seq.from_count(5).first()
        Some(5)
        >>> ls.Seq.new().first()
        NONE

        ```
        """
        with self.pull() as handle:
            return handle.next()

    # combinators ------------------------------------------------------------
    def filter(self, func: Callable[[T], bool]) -> Seq[T]:
        """Keep only the elements for which **func** returns `True`, in their original order.

        **func** is called at most once per element, when the element is reached.

        Args:
            func (Callable[[T], bool]): Predicate evaluated on each element.

        Returns:
            Seq[T]: A sequence of the elements satisfying the predicate.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.Seq(range(1, 11)).filter(lambda n: n % 2 == 0).collect()
        (2, 4, 6, 8, 10)

        ```
        """

        def _filter(data: Iterable[T]) -> Iterator[T]:
            with opened(data) as it:
                yield from filter(func, it)

        return self._iter(_filter)

    def map[R](self, func: Callable[[T], R]) -> Seq[R]:
        """Apply **func** to each element as it is reached.

        Args:
            func (Callable[[T], R]): Function to apply to each element.

        Returns:
            Seq[R]: A sequence of transformed elements.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.Seq.from_(1, 2, 3, 4, 5).map(lambda n: n * n).collect()
        (1, 4, 9, 16, 25)

        ```
        """

        def _map(data: Iterable[T]) -> Iterator[R]:
            with opened(data) as it:
                yield from map(func, it)

        return self._iter(_map)

    def take(self, n: int) -> Seq[T]:
        """Yield at most the first **n** elements.

        The element following the **n**-th is never requested, so this is the way to bound an infinite sequence.

        A negative or null **n** gives an empty sequence.

        Args:
            n (int): Number of elements to take.

        Returns:
            Seq[T]: A sequence of the first **n** elements.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> data = ls.Seq(range(1, 11))
        >>> data.take(5).collect()
        (1, 2, 3, 4, 5)
        >>> data.take(20).length()
        10

        ```
        """
        return self._iter(partial(take_from, n), "take")

    def skip(self, n: int) -> Seq[T]:
        """Discard the first **n** elements by position, then yield the rest.

        The skipped elements are still requested from the source, one by one.

        A negative or null **n** gives the source unchanged.

        Args:
            n (int): Number of elements to skip.

        Returns:
            Seq[T]: A sequence of the elements after the first **n**.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.Seq(range(1, 11)).skip(5).collect()
        (6, 7, 8, 9, 10)

        ```
        """
        return self._iter(partial(skip_from, n), "skip")

    def zip[U](self, other: Iterable[U]) -> KeyedSeq[T, U]:
        """Pair the elements of two sequences, in lockstep.

        Each step requests one element from `self`, then one from **other**.
        The sequence stops as soon as either side is exhausted: when `self` runs out first, **other** is not
        requested again.

        Both sides are advanced through a `PullHandle`, and both handles are closed whichever way the drive ends.

        Args:
            other (Iterable[U]): The second sequence.

        Returns:
            KeyedSeq[T, U]: Pairs of elements from both sides.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> numbers = ls.Seq.from_(1, 2, 3, 4, 5)
        >>> numbers.zip(["a", "b", "c"]).collect()
        ((1, 'a'), (2, 'b'), (3, 'c'))

        ```
        """
        from ._keyed import KeyedSeq
        from ._types import Pair

        right_seq = other if isinstance(other, Seq) else Seq(other)

        def _zip(data: Seq[T]) -> Iterator[Pair[T, U]]:
            with data.pull() as left, right_seq.pull() as right:
                while (a := left.next()).is_some() and (b := right.next()).is_some():
                    yield Pair(a.unwrap(), b.unwrap())

        return KeyedSeq(Generated(partial(_zip, self), "zip"))

    def flat_map[R](self, func: Callable[[T], Iterable[R]]) -> Seq[R]:
        """Map each element to a sequence, and yield the elements of each one in turn.

        Inner sequences are concatenated in the order of the outer elements, without interleaving.

        Stopping during an inner sequence stops the whole drive: no other outer element is visited.

        Args:
            func (Callable[[T], Iterable[R]]): Function returning the inner sequence of an element.

        Returns:
            Seq[R]: The concatenation of the inner sequences.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.Seq([[1, 2], [], [3, 4], [5, 6]]).flat_map(ls.Seq).collect()
        (1, 2, 3, 4, 5, 6)
        >>> ls.Seq.from_(1, 2, 3).flat_map(lambda n: [n] * n).collect()
        (1, 2, 2, 3, 3, 3)

        ```
        """

        def _flat_map(data: Iterable[T]) -> Iterator[R]:
            with opened(data) as it:
                for item in it:
                    with opened(func(item)) as inner:
                        yield from inner

        return self._iter(_flat_map)

    def flatten[U](self: Seq[Flat[U]]) -> Seq[U]:
        """Unroll a sequence of `Flat` items in place.

        - `Nested` and `Bounded` items yield each of their elements.
        - `MaybeNested` and `MaybeBounded` items do the same when `Some`, and contribute nothing when `NONE`.
        - `Scalar` items yield their value.

        Items that are none of these cases are skipped.

        Returns:
            Seq[U]: The unrolled elements, in their original order.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.Seq.from_(
        ...     ls.Bounded([1, 2]),
        ...     ls.Nested(ls.Seq.from_(3, 4)),
        ...     ls.Scalar(5),
        ...     ls.MaybeBounded(ls.NONE),
        ...     ls.MaybeNested(ls.Some(ls.Seq.from_(6))),
        ... ).flatten().collect()
        (1, 2, 3, 4, 5, 6)

        ```
        """

        def _flatten(data: Iterable[Flat[U]]) -> Iterator[U]:
            with opened(data) as it:
                for item in it:
                    match item:
                        case Nested(seq) | MaybeNested(Some(seq)):
                            with opened(seq) as inner:
                                yield from inner
                        case Bounded(items) | MaybeBounded(Some(items)):
                            yield from items
                        case Scalar(value):
                            yield value
                        case MaybeNested() | MaybeBounded():
                            pass
                        case _:
                            logger.debug("flatten skipped %r", item)

        return self._iter(_flatten)

    def flatten_as[U](self, target: type[U]) -> Seq[U]:
        """Unroll a sequence of raw, heterogeneous items.

        Each item is recognised with `classify()`, then unrolled like `flatten()` does.

        Optional references are expressed with `Option`: `Some(items)` is unrolled, `NONE` is empty.

        Items of an unrecognised shape are skipped, without stopping the rest.

        Args:
            target (type[U]): Element type of the flattened sequence.

        Returns:
            Seq[U]: The unrolled elements, in their original order.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.Seq.from_(
        ...     [1, 2, 3],
        ...     ls.Seq.from_(4, 5),
        ...     6,
        ...     ls.Some([7, 8]),
        ...     "not an int",
        ...     [9, 10],
        ... ).flatten_as(int).collect()
        (1, 2, 3, 4, 5, 6, 7, 8, 9, 10)

        ```
        """
        return self.filter_map(partial(classify, target=target)).flatten()

    def filter_map[R](self, func: Callable[[T], TryVal[R]]) -> Seq[R]:
        """Apply a fallible transform, keeping only the successful results.

        **func** is called once per element. `Ok(value)` and `Some(value)` yield **value**,
        `Err` and `NONE` yield nothing, and the reason of the failure is dropped.

        Args:
            func (Callable[[T], TryVal[R]]): Function returning a `Result` or an `Option` for each element.

        Returns:
            Seq[R]: A sequence of the successful results.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> def square(n: int) -> ls.Result[int, str]:
        ...     if n == 3:
        ...         return ls.Err("skipping 3")
        ...     return ls.Ok(n * n)
        >>> ls.Seq.from_(1, 2, 3, 4, 5).filter_map(square).collect()
        (1, 4, 16, 25)

        ```
        """

        def _filter_map(data: Iterable[T]) -> Iterator[R]:
            with opened(data) as it:
                for item in it:
                    match func(item):
                        case Ok(value) | Some(value):
                            yield value

        return self._iter(_filter_map)
