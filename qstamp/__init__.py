#!filepath: qstamp/__init__.py

from .utils.logger import Logging, logs, init_logging
from .utils.errors import TimestampError, TimestampParseError, ZoneConfigError
from .core import (
    Timestamp,
    parse_date,
    parse_time,
    LocalZone,
    get_local_zone,
    set_local_zone,
    use_local_zone,
)
from .config.app_config import AppConfig

__version__ = "0.1.0"

__all__ = [
    "logs", "Logging", "init_logging",
    "Timestamp",
    "parse_date", "parse_time",
    "LocalZone", "get_local_zone", "set_local_zone", "use_local_zone",
    "TimestampError", "TimestampParseError", "ZoneConfigError",
    "AppConfig",
]
