from __future__ import annotations
# qstamp/core/parser.py
"""
字符串 → epoch 毫秒

两个入口：
    parse_date(s) : 日期优先，也兼容若干完整日期时间格式
    parse_time(s) : 时间优先（只关心时分秒），日期取锚点（默认今天）；
                    纯时间都失败后回落到 parse_date 的全部格式

策略：按固定顺序逐个尝试 Layout，第一个成功者胜出；
不存在 / 有歧义的本地墙钟时间让该 Layout 失败，继续尝试后面的。
"""
from datetime import date, datetime
from typing import TYPE_CHECKING, Iterable, Optional, Union

from qstamp.core.layouts import (
    DATE_ONLY_LAYOUTS,
    DATETIME_LAYOUTS,
    TIME_LAYOUTS,
    Layout,
    anchor_time,
)
from qstamp.core.zone import LocalZone, get_local_zone
from qstamp.utils.errors import TimestampParseError
from qstamp.utils.logger import logs

if TYPE_CHECKING:
    from qstamp.core.timestamp import Timestamp


def _resolve(layout: Layout, dt: datetime, zone: LocalZone, anchor: Optional[date]) -> Optional[datetime]:
    if layout.kind in ("utc", "offset"):
        return dt if zone.representable(dt) else None
    if layout.kind == "time":
        dt = anchor_time(dt, anchor or zone.today())
    return zone.localize(dt, strict=True)


def _try(layouts: Iterable[Layout], text: str, zone: LocalZone, anchor: Optional[date] = None) -> Optional[int]:
    for layout in layouts:
        dt = layout.match(text)
        if dt is None:
            continue
        aware = _resolve(layout, dt, zone, anchor)
        if aware is None:
            continue
        logs.debug(f"[parse] {text!r} matched {layout.name}")
        return zone.to_millis(aware)
    return None


def _try_date_only(text: str, zone: LocalZone) -> Optional[int]:
    for layout in DATE_ONLY_LAYOUTS:
        dt = layout.match(text)
        if dt is None:
            continue
        logs.debug(f"[parse] {text!r} matched {layout.name} (start of day)")
        return zone.to_millis(zone.start_of(dt.date()))
    return None


def parse_date_ms(text: str, zone: Optional[LocalZone] = None) -> int:
    zone = zone or get_local_zone()
    s = text.strip()

    ms = _try(DATETIME_LAYOUTS, s, zone)
    if ms is None:
        ms = _try_date_only(s, zone)
    if ms is None:
        logs.debug(f"[parse] no layout matched date input {text!r}")
        raise TimestampParseError(text, kind="date")
    return ms


def parse_time_ms(text: str, zone: Optional[LocalZone] = None, anchor: Optional[date] = None) -> int:
    zone = zone or get_local_zone()
    s = text.strip()

    ms = _try(TIME_LAYOUTS, s, zone, anchor)
    if ms is None:
        ms = _try(DATETIME_LAYOUTS, s, zone)
    if ms is None:
        ms = _try_date_only(s, zone)
    if ms is None:
        logs.debug(f"[parse] no layout matched time input {text!r}")
        raise TimestampParseError(text, kind="time")
    return ms


def parse_date(text: str) -> "Timestamp":
    """
    日期优先解析，返回 Timestamp

    >>> parse_date("20220615").only_date()
    '2022-06-15'

    Raises
    ------
    TimestampParseError
        所有 layout 都不匹配
    """
    from qstamp.core.timestamp import Timestamp

    return Timestamp(parse_date_ms(text))


def parse_time(text: str, anchor: Union["Timestamp", date, None] = None) -> "Timestamp":
    """
    时间优先解析，返回 Timestamp

    anchor : Timestamp | date | None
        纯时间输入所挂靠的本地日期，None → 今天
    """
    from qstamp.core.timestamp import Timestamp

    if isinstance(anchor, Timestamp):
        y, m, d = anchor.extract()
        anchor = date(y, m, d)
    return Timestamp(parse_time_ms(text, anchor=anchor))
