"""Logger configuration for lazyseq."""

import logging
import sys

from ._config import get_config

__all__ = ["logger", "setup_logger"]

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(
    name: str = "lazyseq",
    level: str | None = None,
    format_string: str | None = None,
) -> logging.Logger:
    """Configure and return a logger writing to stdout.

    The handler is only attached once, so calling this repeatedly is harmless.

    Args:
        name (str): Logger name. Defaults to the package logger.
        level (str | None): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Defaults to `Config.log_level`.
        format_string (str | None): Custom format string.

    Returns:
        logging.Logger: The configured logger.
    """
    level = level or get_config().log_level
    format_string = format_string or DEFAULT_FORMAT

    configured = logging.getLogger(name)

    if not any(isinstance(h, logging.StreamHandler) for h in configured.handlers):
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(fmt=format_string, datefmt="%Y-%m-%d %H:%M:%S")
        handler.setFormatter(formatter)
        configured.addHandler(handler)
        configured.propagate = False
    configured.setLevel(getattr(logging, level.upper()))

    return configured


logger = logging.getLogger("lazyseq")
logger.addHandler(logging.NullHandler())
