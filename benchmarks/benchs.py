"""Benchmarks for lazyseq package - benchs.py."""

import itertools

import lazyseq as ls

from ._registery import bench

# Helper functions
# ------------------------------------------------------------


def _is_even(x: int) -> bool:
    return x % 2 == 0


def _square(x: int) -> int:
    return x * x


def _checked_square(x: int) -> ls.Result[int, int]:
    return ls.Ok(x * x) if x % 3 else ls.Err(x)


def _optional(x: int) -> ls.Option[int]:
    return ls.Some(x) if x % 3 else ls.NONE


# Benchmark classes
# ------------------------------------------------------------


class FilterMap:
    """Benchmark filter and map against builtins."""

    @bench()
    @staticmethod
    def seq_filter_map(data: tuple[int, ...]) -> object:
        """Benchmark a fused filter then map chain."""
        return ls.Seq(data).filter(_is_even).map(_square).collect()

    @bench()
    @staticmethod
    def builtin_filter_map(data: tuple[int, ...]) -> object:
        """Benchmark the same chain with builtins."""
        return tuple(map(_square, filter(_is_even, data)))

    @bench()
    @staticmethod
    def seq_reduce(data: tuple[int, ...]) -> object:
        """Benchmark a reduce over a mapped sequence."""
        return ls.Seq(data).map(_square).reduce(0, lambda acc, x: acc + x)


class TakeSkip:
    """Benchmark pagination on finite and infinite sources."""

    @bench()
    @staticmethod
    def seq_page(data: tuple[int, ...]) -> object:
        """Benchmark skip then take on a finite source."""
        return ls.Seq(data).skip(len(data) // 2).take(50).collect()

    @bench()
    @staticmethod
    def islice_page(data: tuple[int, ...]) -> object:
        """Benchmark the same page with islice."""
        start = len(data) // 2
        return tuple(itertools.islice(data, start, start + 50))

    @bench(source="count")
    @staticmethod
    def seq_count_take(data: ls.Seq[int]) -> object:
        """Benchmark a map over an infinite sequence bounded by take."""
        return data.map(_square).collect()

    @bench(source="count")
    @staticmethod
    def seq_count_first(data: ls.Seq[int]) -> object:
        """Benchmark pulling a single element from a bounded infinite sequence."""
        return data.skip(10).first()


class Zip:
    """Benchmark zip and its pull handles."""

    @bench()
    @staticmethod
    def seq_zip(data: tuple[int, ...]) -> object:
        """Benchmark zip of two finite sequences."""
        return ls.Seq(data).zip(data).collect()

    @bench()
    @staticmethod
    def builtin_zip(data: tuple[int, ...]) -> object:
        """Benchmark the builtin zip."""
        return tuple(zip(data, data, strict=False))

    @bench(source="pairs")
    @staticmethod
    def keyed_filter(data: tuple[ls.Pair[int, int], ...]) -> object:
        """Benchmark a keyed filter on collected pairs."""
        return ls.KeyedSeq(data).filter(lambda k, v: k > v).length()

    @bench(source="pairs")
    @staticmethod
    def keyed_map_values(data: tuple[ls.Pair[int, int], ...]) -> object:
        """Benchmark re-keying pairs then projecting their values."""
        return ls.KeyedSeq(data).map(lambda k, v: (v, k * v)).values().collect()


class Flatten:
    """Benchmark flat_map, flatten and filter_map."""

    @bench(source="nested")
    @staticmethod
    def seq_flat_map(data: tuple[list[int], ...]) -> object:
        """Benchmark flat_map over small lists."""
        return ls.Seq(data).flat_map(lambda xs: xs).collect()

    @bench(source="nested")
    @staticmethod
    def chain_from_iterable(data: tuple[list[int], ...]) -> object:
        """Benchmark itertools.chain on the same lists."""
        return tuple(itertools.chain.from_iterable(data))

    @bench(source="mixed")
    @staticmethod
    def seq_flatten_as(data: tuple[list[int] | int, ...]) -> object:
        """Benchmark runtime classification of mixed items."""
        return ls.Seq(data).flatten_as(int).collect()

    @bench()
    @staticmethod
    def filter_map_result(data: tuple[int, ...]) -> object:
        """Benchmark filter_map with a Result transform."""
        return ls.Seq(data).filter_map(_checked_square).collect()

    @bench()
    @staticmethod
    def filter_map_option(data: tuple[int, ...]) -> object:
        """Benchmark filter_map with an Option transform."""
        return ls.Seq(data).filter_map(_optional).collect()
