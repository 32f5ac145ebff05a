"""Tests for the benchmark registry and its polars aggregation."""

import polars as pl
import pytest

import lazyseq as ls
from benchmarks._pipeline import compute_all_stats, run_pipeline, to_table
from benchmarks._registery import SOURCES, Row, bench


class TestSources:
    """Every named source builds an input of the requested size."""

    @pytest.mark.parametrize("name", sorted(SOURCES))
    def test_size(self, name: str) -> None:
        """Test each source yields exactly size items."""
        data = SOURCES[name](5)
        assert ls.Seq(data).length() == 5  # type: ignore[arg-type]

    def test_count_is_bounded_and_replayable(self) -> None:
        """Test the infinite source is bounded by take and can be timed repeatedly."""
        data = SOURCES["count"](4)
        assert data.collect() == data.collect() == (0, 1, 2, 3)  # type: ignore[attr-defined]

    def test_pairs_feed_keyed(self) -> None:
        """Test the pairs source can be wrapped in a KeyedSeq."""
        data = SOURCES["pairs"](3)
        assert ls.KeyedSeq(data).collect() == ((0, 3), (1, 2), (2, 1))  # type: ignore[arg-type]


def test_unknown_source_rejected() -> None:
    """Test registering a benchmark on an unknown source fails before registering."""
    with pytest.raises(ValueError, match="Unknown benchmark source"):
        bench(source="nope")


def test_compute_all_stats() -> None:
    """Test median and run count per benchmark and size."""
    rows = [
        Row("Zip", "seq_zip", "tuple", 256, 1e-6),
        Row("Zip", "seq_zip", "tuple", 256, 3e-6),
        Row("Zip", "seq_zip", "tuple", 256, 2e-6),
        Row("Zip", "seq_zip", "tuple", 1024, 8e-6),
    ]
    stats = compute_all_stats(rows).collect()
    assert isinstance(stats, pl.DataFrame)
    assert stats.columns == ["category", "name", "source", "size", "runs", "median_us"]
    assert stats["size"].to_list() == [256, 1024]
    assert stats["runs"].to_list() == [3, 1]
    assert stats["median_us"].to_list() == pytest.approx([2.0, 8.0])


def test_to_table() -> None:
    """Test the rich table has one row per aggregated line."""
    rows = [Row("A", "x", "count", size, 1e-6) for size in (256, 1024)]
    table = to_table(compute_all_stats(rows).collect())
    assert table.row_count == 2
    assert len(table.columns) == 6


def test_run_pipeline_unknown_category() -> None:
    """Test selecting a category with no benchmarks fails with the registry error."""
    with pytest.raises(ls.ResultUnwrapError, match="No benchmarks registered"):
        run_pipeline("NoSuchCategory")
