from __future__ import annotations
# qstamp/core/timestamp.py
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from qstamp.core.constants import (
    CACHE_DATE_LAYOUT,
    DEFAULT_LAYOUT,
    MS_PER_HOUR,
    MS_PER_MINUTE,
    MS_PER_SECOND,
    ONLY_DATE_LAYOUT,
    ONLY_TIME_LAYOUT,
    PRE_MARKET_HOUR,
    PRE_MARKET_MINUTE,
    PRE_MARKET_SECOND,
)
from qstamp.core.layouts import render
from qstamp.core.parser import parse_date_ms, parse_time_ms
from qstamp.core.zone import get_local_zone


@dataclass(frozen=True, order=True)
class Timestamp:
    """
    本地时间戳，单位毫秒

    - ms : 自 1970-01-01T00:00:00 UTC 起的毫秒数（有符号）
    - 日历提取 / 格式化使用注入的本地时区（qstamp.core.zone）
    - 不可变：所有变换返回新对象
    - 0 是哨兵值（empty），同时也是 Unix epoch，需用 is_empty() 判断
    - 比较 / 相等 / hash 只看 ms
    """
    ms: int

    # ================================================================
    # 构造
    # ================================================================
    @classmethod
    def new(cls, ms: int) -> "Timestamp":
        return cls(int(ms))

    @classmethod
    def zero(cls) -> "Timestamp":
        return cls(0)

    @classmethod
    def now(cls) -> "Timestamp":
        zone = get_local_zone()
        return cls(zone.to_millis(datetime.now(zone.tz)))

    @classmethod
    def midnight(cls) -> "Timestamp":
        """当前本地日期的零点"""
        return cls.now().start_of_day()

    @classmethod
    def from_datetime(cls, dt: datetime) -> "Timestamp":
        """
        aware → 精确瞬间
        naive → 按本地时区解释，歧义 / 不存在时遵循 PEP 495 的 fold
        """
        zone = get_local_zone()
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=zone.tz)
        return cls(zone.to_millis(dt))

    @classmethod
    def from_calendar(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        millisecond: int = 0,
    ) -> Optional["Timestamp"]:
        """
        本地日历字段 → Timestamp

        字段非法（13 月、32 日、非闰年 2/29、毫秒 >= 1000 …）
        或本地时间因 DST 不存在 / 有歧义 → None
        """
        if not 0 <= millisecond < MS_PER_SECOND:
            return None
        try:
            naive = datetime(year, month, day, hour, minute, second, millisecond * 1000)
        except (ValueError, OverflowError):
            return None

        zone = get_local_zone()
        aware = zone.localize(naive, strict=True)
        if aware is None:
            return None
        return cls(zone.to_millis(aware))

    @classmethod
    def pre_market_time(cls, year: int, month: int, day: int) -> Optional["Timestamp"]:
        return cls.from_calendar(year, month, day, PRE_MARKET_HOUR, PRE_MARKET_MINUTE, PRE_MARKET_SECOND, 0)

    # ================================================================
    # 解析
    # ================================================================
    @classmethod
    def parse(cls, text: str) -> "Timestamp":
        return cls(parse_date_ms(text))

    from_string = parse

    @classmethod
    def parse_time(cls, text: str, anchor: Optional["Timestamp"] = None) -> "Timestamp":
        day = None
        if anchor is not None:
            day = anchor.to_datetime().date()
        return cls(parse_time_ms(text, anchor=day))

    # ================================================================
    # 取值 / 转换
    # ================================================================
    def value(self) -> int:
        return self.ms

    def unix_millis(self) -> int:
        return self.ms

    def __int__(self) -> int:
        return self.ms

    def to_datetime(self) -> datetime:
        """aware datetime，tzinfo 为当前本地时区"""
        return get_local_zone().to_local(self.ms)

    def _replace_fields(self, **fields) -> "Timestamp":
        zone = get_local_zone()
        return Timestamp(zone.to_millis(self.to_datetime().replace(**fields)))

    # ================================================================
    # 偏移 / 截断
    # ================================================================
    def offset(self, hours: int = 0, minutes: int = 0, seconds: int = 0, milliseconds: int = 0) -> "Timestamp":
        delta = hours * MS_PER_HOUR + minutes * MS_PER_MINUTE + seconds * MS_PER_SECOND + milliseconds
        return Timestamp(self.ms + delta)

    def start_of_day(self) -> "Timestamp":
        """
        本地零点（按本地日历字段计算，不是 ms 对 86_400_000 取整）
        零点被 DST 跳过 → 当天第一个合法瞬间
        """
        zone = get_local_zone()
        return Timestamp(zone.to_millis(zone.start_of(self.to_datetime().date())))

    def today(self, hour: int = 0, minute: int = 0, second: int = 0, millisecond: int = 0) -> Optional["Timestamp"]:
        """同一本地日期的指定时刻；非法 / DST 不存在或歧义 → None"""
        y, m, d = self.extract()
        return Timestamp.from_calendar(y, m, d, hour, minute, second, millisecond)

    def since(self, hour: int = 0, minute: int = 0, second: int = 0, millisecond: int = 0) -> "Timestamp":
        """从本地零点起偏移（不是从自身时刻起）"""
        return self.start_of_day().offset(hour, minute, second, millisecond)

    def elapsed_since_midnight(self) -> int:
        return self.ms - self.start_of_day().ms

    def pre_market_time_from_current(self) -> Optional["Timestamp"]:
        return self.today(PRE_MARKET_HOUR, PRE_MARKET_MINUTE, PRE_MARKET_SECOND, 0)

    def floor(self) -> "Timestamp":
        """秒、毫秒归零"""
        return self._replace_fields(second=0, microsecond=0)

    def ceil(self) -> "Timestamp":
        """秒置 59、毫秒置 999：本分钟最后一毫秒，而不是下一分钟起点"""
        return self._replace_fields(second=59, microsecond=999_000)

    # ================================================================
    # 提取 / 格式化
    # ================================================================
    def extract(self) -> Tuple[int, int, int]:
        dt = self.to_datetime()
        return dt.year, dt.month, dt.day

    def to_string_with_layout(self, layout: str = DEFAULT_LAYOUT) -> str:
        return render(self.to_datetime(), layout)

    def to_string_as_time_in_seconds(self, layout: str = ONLY_TIME_LAYOUT) -> str:
        return render(self.to_datetime().replace(microsecond=0), layout)

    def only_date(self) -> str:
        return self.to_string_with_layout(ONLY_DATE_LAYOUT)

    def only_time(self) -> str:
        return self.to_string_as_time_in_seconds(ONLY_TIME_LAYOUT)

    def cache_date(self) -> str:
        return self.to_string_with_layout(CACHE_DATE_LAYOUT)

    def yyyymmdd(self) -> int:
        y, m, d = self.extract()
        return y * 10000 + m * 100 + d

    def __str__(self) -> str:
        return self.to_string_with_layout(DEFAULT_LAYOUT)

    # ================================================================
    # 谓词
    # ================================================================
    def is_empty(self) -> bool:
        return self.ms == 0

    def is_same_date(self, other: "Timestamp") -> bool:
        return self.extract() == other.extract()
