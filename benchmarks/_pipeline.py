"""Aggregation and display of benchmark timings."""

from collections.abc import Sequence

import polars as pl
from rich.table import Table

import lazyseq as ls

from ._registery import BENCHMARKS, Row, collect_raw_timings


def run_pipeline(category: str | None = None) -> pl.DataFrame:
    """Run the registered benchmarks, optionally only one category, and aggregate them."""
    selected = (
        ls.Option.from_(category)
        .map(lambda wanted: [b for b in BENCHMARKS if b.category == wanted])
        .unwrap_or(BENCHMARKS)
    )
    return (
        _non_empty(selected)
        .ok_or("No benchmarks registered!")
        .map(ls.Seq)
        .map(collect_raw_timings)
        .map(compute_all_stats)
        .and_then(_try_collect)
        .unwrap()
    )


def _non_empty[T](benchmarks: Sequence[T]) -> ls.Option[Sequence[T]]:
    return ls.Some(benchmarks) if benchmarks else ls.NONE


def _try_collect(lf: pl.LazyFrame) -> ls.Result[pl.DataFrame, str]:
    """Try to collect a LazyFrame, with error handling."""
    try:
        return ls.Ok(lf.collect())
    except (
        pl.exceptions.ColumnNotFoundError,
        pl.exceptions.InvalidOperationError,
    ) as e:
        return ls.Err(f"{e}")


def compute_all_stats(raw_rows: Sequence[Row]) -> pl.LazyFrame:
    """Compute median stats per benchmark and size from raw timings."""
    return (
        pl.LazyFrame(raw_rows, schema=list(Row._fields), orient="row")
        .group_by("category", "name", "source", "size")
        .agg(
            pl.len().alias("runs"),
            (pl.col("time").median() * 1e6).round(2).alias("median_us"),
        )
        .sort("category", "name", "size")
    )


def to_table(stats: pl.DataFrame) -> Table:
    """Render the aggregated timings as a rich table."""
    table = Table(title="lazyseq benchmarks")
    ls.Seq(stats.columns).for_each(table.add_column)
    ls.Seq(stats.iter_rows()).for_each(lambda row: table.add_row(*map(str, row)))
    return table
