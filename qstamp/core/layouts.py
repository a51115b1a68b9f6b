from __future__ import annotations
# qstamp/core/layouts.py
import re
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Literal, Optional, Tuple

LayoutKind = Literal["datetime", "date", "time", "utc", "offset"]


@dataclass(frozen=True)
class Layout:
    """
    一个解析模式描述符

    name  : 人类可读模式（与各语言版本一致）
    fmt   : strptime 指令
    shape : 完整匹配的文本形状（位数 + 分隔符），先于 strptime 检查
    kind  :
        datetime → 本地墙钟日期时间
        date     → 本地日期（零点）
        time     → 本地时间，日期取锚点
        utc      → 末尾 Z，按 UTC 解释
        offset   → 显式 ±HHMM 偏移
    """
    name: str
    fmt: str
    shape: re.Pattern
    kind: LayoutKind

    def match(self, text: str) -> Optional[datetime]:
        if not self.shape.fullmatch(text):
            return None
        try:
            dt = datetime.strptime(text, self.fmt)
        except ValueError:
            return None
        if self.kind == "utc":
            dt = dt.replace(tzinfo=timezone.utc)
        return dt


def _layout(name: str, fmt: str, shape: str, kind: LayoutKind) -> Layout:
    return Layout(name=name, fmt=fmt, shape=re.compile(shape, re.ASCII), kind=kind)


_FRAC = r"\.\d{1,6}"

# ================================================================
# 日期优先（parse_date），顺序即契约，不要调整
# ================================================================
DATETIME_LAYOUTS: Tuple[Layout, ...] = (
    _layout("YYYY-MM-DD HH:MM:SS.fff", "%Y-%m-%d %H:%M:%S.%f", r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}" + _FRAC, "datetime"),
    _layout("YYYY-MM-DD HH:MM:SS", "%Y-%m-%d %H:%M:%S", r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", "datetime"),
    _layout("YYYY-MM-DD", "%Y-%m-%d", r"\d{4}-\d{2}-\d{2}", "date"),
    _layout("YYYYMMDD", "%Y%m%d", r"\d{8}", "date"),
    _layout("YYYY/MM/DD HH:MM:SS.fff", "%Y/%m/%d %H:%M:%S.%f", r"\d{4}/\d{2}/\d{2} \d{2}:\d{2}:\d{2}" + _FRAC, "datetime"),
    _layout("YYYY/MM/DD HH:MM:SS", "%Y/%m/%d %H:%M:%S", r"\d{4}/\d{2}/\d{2} \d{2}:\d{2}:\d{2}", "datetime"),
    _layout("YYYY/MM/DD", "%Y/%m/%d", r"\d{4}/\d{2}/\d{2}", "date"),
    _layout("MM/DD/YYYY HH:MM:SS", "%m/%d/%Y %H:%M:%S", r"\d{2}/\d{2}/\d{4} \d{2}:\d{2}:\d{2}", "datetime"),
    _layout("HH:MM:SS DD-MM-YYYY", "%H:%M:%S %d-%m-%Y", r"\d{2}:\d{2}:\d{2} \d{2}-\d{2}-\d{4}", "datetime"),
    _layout("YYYYMMDD HHMMSS", "%Y%m%d %H%M%S", r"\d{8} \d{6}", "datetime"),
    _layout("YYYY-MM-DDTHH:MM:SSZ", "%Y-%m-%dT%H:%M:%SZ", r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z", "utc"),
    _layout("YYYY-MM-DDTHH:MM:SS±HHMM", "%Y-%m-%dT%H:%M:%S%z", r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}[+-]\d{2}:?\d{2}", "offset"),
)

# datetime 阶段全部失败后的兜底：仅日期，取当天第一个合法瞬间
DATE_ONLY_LAYOUTS: Tuple[Layout, ...] = (
    _layout("YYYY-MM-DD", "%Y-%m-%d", r"\d{4}-\d{2}-\d{2}", "date"),
    _layout("YYYY/MM/DD", "%Y/%m/%d", r"\d{4}/\d{2}/\d{2}", "date"),
    _layout("YYYYMMDD", "%Y%m%d", r"\d{8}", "date"),
)

# ================================================================
# 时间优先（parse_time）：纯时间，日期取锚点
# ================================================================
TIME_LAYOUTS: Tuple[Layout, ...] = (
    _layout("HH:MM:SS.fff", "%H:%M:%S.%f", r"\d{2}:\d{2}:\d{2}" + _FRAC, "time"),
    _layout("HH:MM:SS", "%H:%M:%S", r"\d{2}:\d{2}:\d{2}", "time"),
    _layout("HH:MM", "%H:%M", r"\d{2}:\d{2}", "time"),
    _layout("HHMMSS", "%H%M%S", r"\d{6}", "time"),
    _layout("HHMM", "%H%M", r"\d{4}", "time"),
)


# ================================================================
# 格式化：strftime，%f 替换成 3 位毫秒
# ================================================================
_DIRECTIVE = re.compile(r"%[%f]")


def render(dt: datetime, layout: str) -> str:
    ms = f"{dt.microsecond // 1000:03d}"

    def _sub(m: re.Match) -> str:
        return ms if m.group(0) == "%f" else "%%"

    return dt.strftime(_DIRECTIVE.sub(_sub, layout))


def anchor_time(dt: datetime, day: date) -> datetime:
    """strptime 给纯时间补的是 1900-01-01，这里换成锚点日期"""
    return dt.replace(year=day.year, month=day.month, day=day.day)
