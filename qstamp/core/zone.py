from __future__ import annotations
# qstamp/core/zone.py
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Iterator, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from tzlocal import get_localzone

from qstamp.utils.errors import ZoneConfigError
from qstamp.utils.logger import logs

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)
_MIN_MS = (datetime.min.replace(tzinfo=timezone.utc) - EPOCH) // _ONE_MS

ZoneLike = Union["LocalZone", tzinfo, str, None]


@dataclass(frozen=True)
class LocalZone:
    """
    注入式本地时区。

    - Timestamp 的日历提取 / 格式化 / 字段构造都通过它完成
    - 测试可以固定一个时区，避免依赖进程 TZ

    DST 策略（冻结）：
      - localize(strict=True)：不存在（gap）或有歧义（fold）的墙钟时间 → None
      - localize(strict=False)：gap 用转换前偏移，fold 取较早的瞬间
      - start_of：一天的第一个合法瞬间（gap 中取转换瞬间）
    """
    tz: tzinfo

    @property
    def name(self) -> str:
        return getattr(self.tz, "key", None) or str(self.tz)

    @classmethod
    def from_name(cls, name: Optional[str] = None) -> "LocalZone":
        """
        name=None → 系统时区（tzlocal）
        """
        if name is None:
            return cls(get_localzone())
        try:
            return cls(ZoneInfo(name))
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ZoneConfigError(f"unknown timezone: {name!r}") from e

    # ------------------------------------------------------------
    # ms <-> aware datetime
    # ------------------------------------------------------------
    def to_local(self, ms: int) -> datetime:
        return (EPOCH + timedelta(milliseconds=ms)).astimezone(self.tz)

    @staticmethod
    def to_millis(dt: datetime) -> int:
        """aware datetime → epoch ms（微秒向下截断）"""
        return (dt - EPOCH) // _ONE_MS

    def today(self) -> date:
        return datetime.now(self.tz).date()

    def representable(self, aware: datetime) -> bool:
        """
        该瞬间能否在本时区还原为 year 1..9999 内的日历时间。
        年份边界附近 UTC 与本地日期可能跨过 datetime 的取值范围。
        """
        try:
            self.to_local(self.to_millis(aware))
        except OverflowError:
            return False
        return True

    # ------------------------------------------------------------
    # naive 墙钟时间 → aware datetime
    # ------------------------------------------------------------
    def localize(self, naive: datetime, *, strict: bool = True) -> Optional[datetime]:
        early = naive.replace(tzinfo=self.tz, fold=0)
        late = naive.replace(tzinfo=self.tz, fold=1)

        if strict and not self.representable(early):
            logs.debug(f"[Zone] {naive.isoformat()} is out of range in {self.name}, rejected")
            return None

        if early.utcoffset() == late.utcoffset():
            return early

        # 偏移不同：落在 gap 或 fold 中
        if strict:
            reason = "non-existent" if self._in_gap(early) else "ambiguous"
            logs.debug(f"[Zone] {naive.isoformat()} is {reason} in {self.name}, rejected")
            return None

        # fold=0 在 gap 中使用转换前的偏移，在 fold 中即较早的那个瞬间
        return self.to_local(self.to_millis(early))

    def start_of(self, d: date) -> datetime:
        """
        本地日期 d 的第一个合法瞬间。

        - 零点唯一：零点本身
        - 零点有歧义：较早的那个瞬间
        - 零点被 gap 跳过：转换瞬间（gap 结束后的第一个墙钟时间）
        - 零点早于可表示范围：本时区可表示的第一个瞬间
        """
        naive = datetime(d.year, d.month, d.day)
        early = naive.replace(tzinfo=self.tz, fold=0)
        late = naive.replace(tzinfo=self.tz, fold=1)

        if not self.representable(early):
            return self.to_local(_MIN_MS)

        if early.utcoffset() != late.utcoffset() and self._in_gap(early):
            return self.to_local(self._transition_ms(late, early))

        return self.to_local(self.to_millis(early))

    def _in_gap(self, early: datetime) -> bool:
        back = self.to_local(self.to_millis(early))
        return back.replace(tzinfo=None) != early.replace(tzinfo=None)

    def _transition_ms(self, late: datetime, early: datetime) -> int:
        """
        gap 内墙钟时间：late（转换后偏移）映射到转换之前，early（转换前偏移）映射到转换之后。
        二分查找第一个使用转换后偏移的毫秒。
        """
        after = late.utcoffset()
        lo, hi = self.to_millis(late), self.to_millis(early)
        while hi - lo > 1:
            mid = (lo + hi) // 2
            if self.to_local(mid).utcoffset() == after:
                hi = mid
            else:
                lo = mid
        return hi


# ================================================================
# 进程默认 + 上下文覆盖
# ================================================================
_default: Optional[LocalZone] = None
_override: ContextVar[Optional[LocalZone]] = ContextVar("qstamp_local_zone", default=None)


def as_zone(zone: ZoneLike) -> LocalZone:
    if isinstance(zone, LocalZone):
        return zone
    if isinstance(zone, tzinfo):
        return LocalZone(zone)
    return LocalZone.from_name(zone)


def get_local_zone() -> LocalZone:
    global _default
    zone = _override.get()
    if zone is not None:
        return zone
    if _default is None:
        _default = LocalZone.from_name(None)
        logs.debug(f"[Zone] default local timezone = {_default.name}")
    return _default


def set_local_zone(zone: ZoneLike) -> LocalZone:
    """
    设置进程默认时区；None → 重新取系统时区
    """
    global _default
    _default = as_zone(zone)
    return _default


@contextmanager
def use_local_zone(zone: ZoneLike) -> Iterator[LocalZone]:
    """
    在当前上下文（线程 / asyncio task）内临时替换本地时区

        with use_local_zone("America/New_York"):
            Timestamp.from_calendar(2024, 3, 10, 2, 30)   # None
    """
    z = as_zone(zone)
    token = _override.set(z)
    try:
        yield z
    finally:
        _override.reset(token)
