__all__ = [
    "init", "shutdown", "get_config", "Config",
    "create_logger", "Logger", "OutputChannel", "NopChannel", "StdoutChannel", "LoggingChannel",
    "serialize", "safe_stringify", "SerializeOptions",
    "LEVELS", "is_enabled", "level_rank",
    "bytes_to_base64",
]
__version__ = "0.1.0"

from .bootstrap import Config, get_config, init, shutdown
from .encoding import bytes_to_base64
from .levels import LEVELS, is_enabled, level_rank
from .logging import Logger, LoggingChannel, NopChannel, OutputChannel, StdoutChannel, create_logger
from .serializer import SerializeOptions, safe_stringify, serialize
