from ._config import Config, get_config, set_config
from ._format import source_repr
from ._logger import logger, setup_logger
from ._main import Pipeable

__all__ = [
    "Config",
    "Pipeable",
    "get_config",
    "logger",
    "set_config",
    "setup_logger",
    "source_repr",
]
