"""Tests for PullHandle."""

import lazyseq as ls
from tests._sources import Recorded


def test_next_until_exhausted() -> None:
    """Test next yields Some values then NONE, and NONE forever after."""
    handle = ls.Seq.from_(1, 2).pull()
    assert handle.next() == ls.Some(1)
    assert handle.next() == ls.Some(2)
    assert handle.next() == ls.NONE
    assert handle.closed
    assert handle.next() == ls.NONE


def test_exhaustion_releases_source() -> None:
    """Test reaching the end releases the source without an explicit close."""
    source = Recorded((1,))
    handle = ls.Seq(source).pull()
    handle.next()
    handle.next()
    assert source.released


def test_close_before_exhaustion() -> None:
    """Test closing early releases the source and stops the cursor."""
    source = Recorded()
    handle = ls.Seq(source).map(str).pull()
    assert handle.next() == ls.Some("0")
    handle.close()
    assert source.released
    assert handle.next() == ls.NONE
    assert source.visits == 1


def test_close_is_idempotent() -> None:
    """Test closing twice releases the source once."""
    source = Recorded()
    handle = ls.Seq(source).pull()
    handle.next()
    handle.close()
    handle.close()
    assert source.closed == 1


def test_context_manager_closes_on_error() -> None:
    """Test the with block releases the handle when it raises."""
    source = Recorded()
    try:
        with ls.Seq(source).pull() as handle:
            handle.next()
            raise KeyError("stop")
    except KeyError:
        pass
    assert handle.closed
    assert source.released


def test_untouched_source_never_visited() -> None:
    """Test creating a handle does not request any element."""
    source = Recorded()
    with ls.Seq(source).pull():
        pass
    assert source.visits == 0
    assert source.released


def test_repr() -> None:
    """Test the repr shows the handle state."""
    handle = ls.Seq.new().pull()
    assert repr(handle) == "PullHandle(open)"
    handle.close()
    assert repr(handle) == "PullHandle(closed)"
