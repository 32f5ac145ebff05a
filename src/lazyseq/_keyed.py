from __future__ import annotations

import functools
from collections.abc import Callable, Iterable, Iterator, Mapping
from functools import partial
from typing import TYPE_CHECKING

import cytoolz as cz
import more_itertools as mit

from ._core import Pipeable, source_repr
from ._pull import PullHandle
from ._results import Ok, Option, Some
from ._seq import Generated, Seq, TryVal, opened, skip_from, take_from
from ._types import Pair

if TYPE_CHECKING:
    from ._types import KeyedConsumer


def _pairs[K, V](source: Iterable[tuple[K, V]]) -> Iterator[Pair[K, V]]:
    with opened(source) as it:
        for key, value in it:
            yield Pair(key, value)


class KeyedSeq[K, V](Pipeable, Iterable[Pair[K, V]]):
    """A lazy sequence yielding two values per step, as a `Pair(key, value)`.

    Same contract as `Seq`, but predicates, transforms and consumers receive the key and the value as two arguments.

    Obtained from `Seq.zip()`, from any `Iterable` of 2-tuples, or from a `Mapping` with `from_mapping()`.

    Args:
        data (Iterable[tuple[K, V]]): The pairs to wrap.

    Example:
    ```python
    >>> import lazyseq as ls
    >>> ages = ls.KeyedSeq([("ann", 31), ("bob", 17), ("cy", 45)])
    >>> ages.filter(lambda name, age: age >= 18).keys().collect()
    ('ann', 'cy')

    ```
    """

    _source: Iterable[tuple[K, V]]

    __slots__ = ("_source",)

    def __init__(self, data: Iterable[tuple[K, V]]) -> None:
        self._source = data

    def __iter__(self) -> Iterator[Pair[K, V]]:
        return _pairs(self._source)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({source_repr(self._source)})"

    def _iter[K1, V1](
        self,
        gen: Callable[[Iterable[Pair[K, V]]], Iterator[tuple[K1, V1]]],
        name: str | None = None,
    ) -> KeyedSeq[K1, V1]:
        return KeyedSeq(Generated(partial(gen, self), name or gen.__name__.strip("_")))

    @staticmethod
    def from_mapping[K1, V1](mapping: Mapping[K1, V1]) -> KeyedSeq[K1, V1]:
        """Create a `KeyedSeq` over the items of a `Mapping`, in iteration order.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.KeyedSeq.from_mapping({"a": 1, "b": 2}).collect()
        (('a', 1), ('b', 2))

        ```
        """
        return KeyedSeq(mapping.items())

    # driving ------------------------------------------------------------
    def drive(self, consumer: KeyedConsumer[K, V]) -> None:
        """Drive the sequence, offering each pair to **consumer** as `consumer(key, value)`.

        **consumer** returns `True` to continue, `False` to stop right away.

        Args:
            consumer (KeyedConsumer[K, V]): Step consumer.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> def show(k: str, v: int) -> bool:
        ...     print(k, v)
        ...     return v < 2
        >>> ls.KeyedSeq.from_mapping({"a": 1, "b": 2, "c": 3}).drive(show)
        a 1
        b 2

        ```
        """
        with opened(self) as it:
            for key, value in it:
                if not consumer(key, value):
                    return

    def pull(self) -> PullHandle[Pair[K, V]]:
        """Convert the sequence into an explicit cursor over its pairs."""
        return PullHandle(iter(self))

    # terminals ------------------------------------------------------------
    def collect[C](self, collector: Callable[[Iterator[Pair[K, V]]], C] = tuple) -> C:
        """Drain the sequence into a collection.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.Seq.from_("x", "y").zip(range(10)).collect(dict)
        {'x': 0, 'y': 1}

        ```
        """
        with opened(self) as it:
            return collector(it)

    def reduce[R](self, initial: R, func: Callable[[R, K, V], R]) -> R:
        """Fold the pairs from left to right, calling `func(accumulator, key, value)`.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> prices = ls.KeyedSeq([("apple", 3), ("pear", 2)])
        >>> prices.reduce(0, lambda total, _, price: total + price)
        5

        ```
        """
        with opened(self) as it:
            return functools.reduce(lambda acc, pair: func(acc, *pair), it, initial)

    def for_each(self, func: Callable[[K, V], object]) -> None:
        """Call `func(key, value)` on every pair, for its side effects."""
        with opened(self) as it:
            mit.consume(func(key, value) for key, value in it)

    def length(self) -> int:
        """Count the pairs, draining the sequence."""
        with opened(self) as it:
            return cz.itertoolz.count(it)

    def first(self) -> Option[Pair[K, V]]:
        """Return the first pair, without requesting a second one."""
        with self.pull() as handle:
            return handle.next()

    # projections ------------------------------------------------------------
    def keys(self) -> Seq[K]:
        """Project the sequence on its keys.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.KeyedSeq.from_mapping({"a": 1, "b": 2}).keys().collect()
        ('a', 'b')

        ```
        """

        def _keys() -> Iterator[K]:
            with opened(self) as it:
                for pair in it:
                    yield pair.key

        return Seq(Generated(_keys, "keys"))

    def values(self) -> Seq[V]:
        """Project the sequence on its values.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.KeyedSeq.from_mapping({"a": 1, "b": 2}).values().collect()
        (1, 2)

        ```
        """

        def _values() -> Iterator[V]:
            with opened(self) as it:
                for pair in it:
                    yield pair.value

        return Seq(Generated(_values, "values"))

    # combinators ------------------------------------------------------------
    def filter(self, func: Callable[[K, V], bool]) -> KeyedSeq[K, V]:
        """Keep only the pairs for which `func(key, value)` returns `True`.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.Seq.from_(1, 2, 3).zip("abc").filter(lambda n, _: n != 2).collect()
        ((1, 'a'), (3, 'c'))

        ```
        """

        def _filter(data: Iterable[Pair[K, V]]) -> Iterator[Pair[K, V]]:
            with opened(data) as it:
                for pair in it:
                    if func(*pair):
                        yield pair

        return self._iter(_filter)

    def map[K1, V1](self, func: Callable[[K, V], tuple[K1, V1]]) -> KeyedSeq[K1, V1]:
        """Transform each pair with `func(key, value)`, which returns the new `(key, value)`.

        Keys may change too.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.KeyedSeq.from_mapping({"a": 1, "b": 2}).map(lambda k, v: (v, k.upper())).collect()
        ((1, 'A'), (2, 'B'))

        ```
        """

        def _map(data: Iterable[Pair[K, V]]) -> Iterator[Pair[K1, V1]]:
            with opened(data) as it:
                for key, value in it:
                    yield Pair(*func(key, value))

        return self._iter(_map)

    def take(self, n: int) -> KeyedSeq[K, V]:
        """Yield at most the first **n** pairs, never requesting the next one.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.Seq.from_count().zip(ls.Seq.from_count(100)).take(2).collect()
        ((0, 100), (1, 101))

        ```
        """
        return self._iter(partial(take_from, n), "take")

    def skip(self, n: int) -> KeyedSeq[K, V]:
        """Discard the first **n** pairs by position, then yield the rest.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> ls.KeyedSeq.from_mapping({"a": 1, "b": 2, "c": 3}).skip(2).collect()
        (('c', 3),)

        ```
        """
        return self._iter(partial(skip_from, n), "skip")

    def flat_map[K1, V1](
        self, func: Callable[[K, V], Iterable[tuple[K1, V1]]]
    ) -> KeyedSeq[K1, V1]:
        """Map each pair to a sequence of pairs, and yield each of them in turn.

        **func** may return a `KeyedSeq` or any `Iterable` of 2-tuples.

        Stopping during an inner sequence stops the whole drive.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> groups = ls.KeyedSeq.from_mapping({"x": [1, 2], "y": [3]})
        >>> groups.flat_map(lambda k, vs: ((k, v) for v in vs)).collect()
        (('x', 1), ('x', 2), ('y', 3))

        ```
        """

        def _flat_map(data: Iterable[Pair[K, V]]) -> Iterator[Pair[K1, V1]]:
            with opened(data) as it:
                for key, value in it:
                    yield from _pairs(func(key, value))

        return self._iter(_flat_map)

    def filter_map[K1, V1](
        self, func: Callable[[K, V], TryVal[tuple[K1, V1]]]
    ) -> KeyedSeq[K1, V1]:
        """Apply a fallible transform to each pair, keeping only the successful new pairs.

        `func(key, value)` returns `Ok((key, value))`/`Some((key, value))` to keep a pair,
        `Err`/`NONE` to drop it.

        Example:
        ```python
        >>> import lazyseq as ls
        >>> def parse(name: str, raw: str) -> ls.Result[tuple[str, int], str]:
        ...     if raw.isdigit():
        ...         return ls.Ok((name, int(raw)))
        ...     return ls.Err(f"not a number: {raw!r}")
        >>> ls.KeyedSeq([("a", "1"), ("b", "x"), ("c", "3")]).filter_map(parse).collect()
        (('a', 1), ('c', 3))

        ```
        """

        def _filter_map(data: Iterable[Pair[K, V]]) -> Iterator[Pair[K1, V1]]:
            with opened(data) as it:
                for key, value in it:
                    match func(key, value):
                        case Ok(pair) | Some(pair):
                            yield Pair(*pair)

        return self._iter(_filter_map)

