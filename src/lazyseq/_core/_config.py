from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from typing import Any

LOG_LEVEL_ENV = "LAZYSEQ_LOG_LEVEL"


def _default_log_level() -> str:
    return os.getenv(LOG_LEVEL_ENV, "WARNING").upper()


@dataclass(slots=True, frozen=True)
class Config:
    """Process-wide settings for lazyseq.

    Args:
        repr_max_chars (int): Width at which the source shown by `Seq.__repr__` is truncated.
        log_level (str): Default level used by `setup_logger`.
    """

    repr_max_chars: int = 60
    log_level: str = dataclasses.field(default_factory=_default_log_level)


_CONFIG = Config()


def get_config() -> Config:
    """Return the current configuration.

    Example:
    ```python
    >>> import lazyseq as ls
    >>> ls.get_config().repr_max_chars
    60

    ```
    """
    return _CONFIG


def set_config(**changes: Any) -> Config:  # noqa: ANN401
    """Replace configuration fields and return the new configuration.

    Args:
        **changes (Any): Fields of `Config` to replace.

    Returns:
        Config: The configuration now in effect.

    Raises:
        TypeError: If a field name is not part of `Config`.

    Example:
    ```python
    >>> import lazyseq as ls
    >>> previous = ls.get_config()
    >>> ls.set_config(repr_max_chars=10).repr_max_chars
    10
    >>> ls.set_config(repr_max_chars=previous.repr_max_chars).repr_max_chars
    60

    ```
    """
    global _CONFIG  # noqa: PLW0603
    _CONFIG = dataclasses.replace(_CONFIG, **changes)
    return _CONFIG
