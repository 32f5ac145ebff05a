"""Registry of lazyseq benchmarks, the sources they run on, and the timing loop."""

import timeit
from collections.abc import Callable
from functools import partial
from typing import Any, Final, NamedTuple

from rich.console import Console
from rich.progress import track

import lazyseq as ls

type BenchFn = Callable[[Any], object]
type Source = Callable[[int], object]

SIZES: Final = (256, 1024, 4096)
REPEATS: Final = 7

CONSOLE: Final = Console()

SOURCES: Final[dict[str, Source]] = {
    "tuple": lambda size: tuple(range(size)),
    "count": lambda size: ls.Seq.from_count().take(size),
    "pairs": lambda size: ls.Seq(range(size)).zip(range(size, 0, -1)).collect(),
    "nested": lambda size: ls.Seq(range(size)).map(lambda x: [x, x, x]).collect(),
    "mixed": lambda size: ls.Seq(range(size)).map(lambda x: [x] if x % 2 else x).collect(),
}
"""Input builders, by name. Each one is called once per size, before timing."""


class Benchmark(NamedTuple):
    """A registered benchmark and the source it runs on."""

    category: str
    name: str
    source: str
    fn: BenchFn


class Row(NamedTuple):
    """Time of one call, for one repeat of a benchmark at a given size."""

    category: str
    name: str
    source: str
    size: int
    time: float


BENCHMARKS: list[Benchmark] = []


def bench(source: str = "tuple") -> Callable[[BenchFn], BenchFn]:
    """Register a benchmark, fed with the data built by `SOURCES[source]`.

    The category is the class the benchmark is defined in.
    """
    if source not in SOURCES:
        msg = f"Unknown benchmark source {source!r}, expected one of {sorted(SOURCES)}"
        raise ValueError(msg)

    def decorator(func: BenchFn) -> BenchFn:
        category = func.__qualname__.split(".")[0]
        BENCHMARKS.append(Benchmark(category, func.__name__, source, func))
        return func

    return decorator


def collect_raw_timings(benchmarks: ls.Seq[Benchmark]) -> tuple[Row, ...]:
    """Time every benchmark at every size. Stats are computed afterwards."""
    cases = benchmarks.flat_map(
        lambda b: ls.Seq(SIZES).map(lambda size: (b, size))
    ).collect()
    CONSOLE.print(
        f"Found {benchmarks.length()} benchmarks, {len(cases)} cases",
        style="bold white",
    )
    return (
        ls.Seq(track(cases, description="[cyan]Running benchmarks...", console=CONSOLE))
        .flat_map(lambda case: _time_case(*case))
        .collect()
    )


def _time_case(benchmark: Benchmark, size: int) -> ls.Seq[Row]:
    timer = timeit.Timer(partial(benchmark.fn, SOURCES[benchmark.source](size)))
    number, _ = timer.autorange()
    return ls.Seq(timer.repeat(REPEATS, number)).map(
        lambda total: Row(
            benchmark.category, benchmark.name, benchmark.source, size, total / number
        )
    )
