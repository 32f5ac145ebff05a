"""Tests for Seq.zip and the release of its pull handles."""

import pytest

import lazyseq as ls
from tests._sources import Recorded


def test_shorter_side_wins() -> None:
    """Test zip stops with the shorter sequence."""
    result = ls.Seq.from_(1, 2, 3, 4, 5).zip(["a", "b", "c"]).collect()
    assert result == ((1, "a"), (2, "b"), (3, "c"))


@pytest.mark.parametrize(("left", "right"), [(0, 3), (3, 0), (2, 5), (5, 2), (4, 4)])
def test_length_is_min(left: int, right: int) -> None:
    """Test the zipped length is the minimum of both lengths."""
    zipped = ls.Seq(range(left)).zip(range(right))
    assert zipped.length() == min(left, right)


def test_pairs_have_names() -> None:
    """Test zipped steps are Pairs with key and value."""
    pair = ls.Seq.from_(1).zip("a").first().unwrap()
    assert pair.key == 1
    assert pair.value == "a"
    assert pair == (1, "a")


def test_early_stop_does_not_advance_sources() -> None:
    """Test stopping after two pairs visits each source exactly twice."""
    left, right = Recorded(), Recorded()
    seen: list[tuple[int, int]] = []

    def _consumer(a: int, b: int) -> bool:
        seen.append((a, b))
        return len(seen) < 2

    ls.Seq(left).zip(ls.Seq(right)).drive(_consumer)
    assert seen == [(0, 0), (1, 1)]
    assert left.visits == 2
    assert right.visits == 2
    assert left.released
    assert right.released


def test_alternation_order() -> None:
    """Test each step requests the left side, then the right side."""
    order: list[str] = []

    def _tag(side: str, n: int) -> ls.Seq[int]:
        return ls.Seq(range(n)).map(lambda x: order.append(side) or x)

    _tag("a", 4).zip(_tag("b", 3)).collect()
    assert order == ["a", "b", "a", "b", "a", "b", "a"]


def test_right_not_requested_when_left_exhausted() -> None:
    """Test the right side is not pulled once the left side is exhausted."""
    left, right = Recorded((1, 2)), Recorded()
    assert ls.Seq(left).zip(right).length() == 2
    assert right.visits == 2
    assert left.released
    assert right.released


def test_released_when_right_exhausted() -> None:
    """Test both handles are released when the right side runs out first."""
    left, right = Recorded(), Recorded(("x",))
    assert ls.Seq(left).zip(right).collect() == ((0, "x"),)
    assert left.visits == 2
    assert left.released
    assert right.released


def test_released_when_consumer_raises() -> None:
    """Test both handles are released when the consumer fails."""
    left, right = Recorded(), Recorded()

    def _consumer(a: int, b: int) -> bool:
        raise RuntimeError(a, b)

    with pytest.raises(RuntimeError):
        ls.Seq(left).zip(right).drive(_consumer)
    assert left.released
    assert right.released


def test_released_when_bounded_by_take() -> None:
    """Test an infinite zip bounded by take releases both sides."""
    left, right = Recorded(), Recorded()
    assert ls.Seq(left).zip(right).take(3).values().collect() == (0, 1, 2)
    assert left.visits == right.visits == 3
    assert left.released
    assert right.released


def test_zip_is_replayable() -> None:
    """Test a zip over replayable inputs can be driven twice."""
    zipped = ls.Seq.from_(1, 2).zip(("a", "b"))
    assert zipped.collect() == zipped.collect()


def test_break_out_of_for_loop_releases() -> None:
    """Test closing the iterator after a break releases both sides."""
    left, right = Recorded(), Recorded()
    it = iter(ls.Seq(left).zip(right))
    for key, _ in it:
        if key == 1:
            break
    it.close()  # type: ignore[attr-defined]
    assert left.released
    assert right.released
