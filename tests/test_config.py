"""Tests for the configuration and logging helpers."""

import logging
import tomllib
import typing
from collections.abc import Iterator
from pathlib import Path

import pytest

import lazyseq as ls


@pytest.fixture
def restore_config() -> Iterator[ls.Config]:
    """Give the current configuration, and put it back after the test."""
    previous = ls.get_config()
    yield previous
    ls.set_config(
        repr_max_chars=previous.repr_max_chars,
        log_level=previous.log_level,
    )


def test_defaults() -> None:
    """Test the default repr width."""
    assert ls.Config().repr_max_chars == 60


def test_set_config_returns_new(restore_config: ls.Config) -> None:
    """Test set_config replaces only the given fields."""
    updated = ls.set_config(repr_max_chars=8)
    assert updated.repr_max_chars == 8
    assert updated.log_level == restore_config.log_level
    assert ls.get_config() is updated


def test_set_config_unknown_field(restore_config: ls.Config) -> None:
    """Test an unknown field is rejected and the configuration is kept."""
    with pytest.raises(TypeError):
        ls.set_config(colour="red")
    assert ls.get_config() == restore_config


def test_config_is_frozen() -> None:
    """Test the configuration cannot be mutated in place."""
    with pytest.raises(AttributeError):
        ls.get_config().repr_max_chars = 1  # type: ignore[misc]


def test_repr_truncated(restore_config: ls.Config) -> None:  # noqa: ARG001
    """Test the repr of a long source is shortened to the configured width."""
    ls.set_config(repr_max_chars=10)
    assert repr(ls.Seq(list(range(100)))) == "Seq([0, 1, ...)"


def test_log_level_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test the default log level reads the environment."""
    monkeypatch.setenv("LAZYSEQ_LOG_LEVEL", "debug")
    assert ls.Config().log_level == "DEBUG"


def test_setup_logger_attaches_one_handler() -> None:
    """Test repeated setup keeps a single stdout handler."""
    name = "lazyseq.test_setup"
    first = ls.setup_logger(name, level="INFO")
    second = ls.setup_logger(name, level="DEBUG")
    assert first is second
    assert len(second.handlers) == 1
    assert second.level == logging.DEBUG


def test_python_floor_supports_typeis() -> None:
    """Test the declared Python floor is one where typing.TypeIs exists."""
    pyproject = Path(__file__).parents[1] / "pyproject.toml"
    with pyproject.open("rb") as f:
        project = tomllib.load(f)["project"]
    assert project["requires-python"] == ">=3.13"
    assert hasattr(typing, "TypeIs")
