from .constants import PRE_MARKET_HOUR, PRE_MARKET_MINUTE, PRE_MARKET_SECOND
from .timestamp import Timestamp
from .parser import parse_date, parse_time
from .zone import LocalZone, get_local_zone, set_local_zone, use_local_zone

__all__ = [
    "Timestamp",
    "parse_date", "parse_time",
    "LocalZone", "get_local_zone", "set_local_zone", "use_local_zone",
    "PRE_MARKET_HOUR", "PRE_MARKET_MINUTE", "PRE_MARKET_SECOND",
]
