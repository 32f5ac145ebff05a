"""Tests for filter_map on Seq and KeyedSeq."""

import lazyseq as ls


def _square_unless_three(n: int) -> ls.Result[int, str]:
    if n == 3:
        return ls.Err("skipping 3")
    return ls.Ok(n * n)


def test_drops_failures_silently() -> None:
    """Test failed transforms leave no gap marker."""
    result = ls.Seq.from_(1, 2, 3, 4, 5).filter_map(_square_unless_three).collect()
    assert result == (1, 4, 16, 25)


def test_accepts_option() -> None:
    """Test an Option-returning transform keeps only Some values."""

    def _parse(s: str) -> ls.Option[int]:
        return ls.Some(int(s)) if s.isdigit() else ls.NONE

    data = ls.Seq(["1", "two", "NaN", "four", "5"])
    assert data.filter_map(_parse).collect() == (1, 5)


def test_result_ok_converted() -> None:
    """Test chaining Result.ok() into filter_map."""
    result = ls.Seq.from_(1, 2, 3).filter_map(lambda n: _square_unless_three(n).ok())
    assert result.collect() == (1, 4)


def test_transform_called_once_per_element() -> None:
    """Test success and value come from the same single call."""
    calls: list[int] = []

    def _record(n: int) -> ls.Result[int, str]:
        calls.append(n)
        return _square_unless_three(n)

    ls.Seq.from_(1, 2, 3, 4).filter_map(_record).collect()
    assert calls == [1, 2, 3, 4]


def test_falsy_success_values_kept() -> None:
    """Test Ok(0), Ok(None) and Some(False) are successes."""
    values = [ls.Ok(0), ls.Ok(None), ls.Some(False), ls.Err(0), ls.NONE]
    assert ls.Seq(values).filter_map(lambda r: r).collect() == (0, None, False)


def test_lazy_with_take() -> None:
    """Test filter_map over an infinite sequence bounded by take."""
    evens = ls.Seq.from_count().filter_map(
        lambda n: ls.Ok(n) if n % 2 == 0 else ls.Err(n),
    )
    assert evens.take(3).collect() == (0, 2, 4)


def test_keyed_filter_map() -> None:
    """Test the keyed variant transforms pairs into new pairs or failures."""

    def _invert(key: str, value: int) -> ls.Result[tuple[int, str], str]:
        if value < 0:
            return ls.Err(key)
        return ls.Ok((value, key))

    pairs = ls.KeyedSeq([("a", 1), ("b", -2), ("c", 3)])
    assert pairs.filter_map(_invert).collect(dict) == {1: "a", 3: "c"}


def test_keyed_filter_map_with_option() -> None:
    """Test the keyed variant with an Option-returning transform."""
    pairs = ls.Seq.from_(1, 2, 3).zip("xyz")
    kept = pairs.filter_map(
        lambda n, s: ls.Some((s, n)) if n != 2 else ls.NONE,
    )
    assert kept.collect() == (("x", 1), ("z", 3))
