#!filepath: qstamp/cli.py
from typing import Optional

import typer
from rich import print
from rich.markup import escape

from qstamp import __version__
from qstamp.config.app_config import AppConfig
from qstamp.core.constants import DEFAULT_LAYOUT
from qstamp.core.parser import parse_date, parse_time
from qstamp.core.timestamp import Timestamp
from qstamp.core.zone import set_local_zone
from qstamp.utils.errors import TimestampError

app = typer.Typer(help="qstamp 本地毫秒时间戳（演示控制台）")

TzOption = typer.Option(None, "--tz", help="IANA 时区名，默认系统时区")


@app.callback()
def main(
    config: Optional[str] = typer.Option(None, "--config", help="YAML 配置文件（日志 + 时区）"),
):
    if config is not None:
        AppConfig.load(config).apply()


def _fail(e: Exception) -> None:
    print(f"[red]{escape(str(e))}[/red]")
    raise typer.Exit(code=1)


def _use_tz(tz: Optional[str]) -> None:
    if tz is None:
        return
    try:
        set_local_zone(tz)
    except TimestampError as e:
        _fail(e)


def _describe(ts: Timestamp) -> None:
    print(f"[green]{ts}[/green]")
    print(f"  value      = {ts.value()}")
    print(f"  date       = {ts.only_date()} ({ts.yyyymmdd()})")
    print(f"  time       = {ts.only_time()}")
    print(f"  pre-market = {ts.pre_market_time_from_current()}")


@app.command()
def version():
    print(f"v{__version__}")


@app.command()
def now(tz: Optional[str] = TzOption):
    """
    当前本地时间
    """
    _use_tz(tz)
    _describe(Timestamp.now())


@app.command()
def parse(
    text: str,
    time: bool = typer.Option(False, "--time", help="时间优先（parse_time）"),
    tz: Optional[str] = TzOption,
):
    """
    解析字符串（默认日期优先）
    """
    _use_tz(tz)
    try:
        ts = parse_time(text) if time else parse_date(text)
    except TimestampError as e:
        _fail(e)
    _describe(ts)


@app.command()
def show(ms: int, tz: Optional[str] = TzOption):
    """
    毫秒数 → 本地时间
    """
    _use_tz(tz)
    _describe(Timestamp(ms))


@app.command()
def fmt(ms: int, layout: str = typer.Argument(DEFAULT_LAYOUT), tz: Optional[str] = TzOption):
    """
    按 strftime layout 格式化（%f = 3 位毫秒）
    """
    _use_tz(tz)
    print(Timestamp(ms).to_string_with_layout(layout))


if __name__ == "__main__":
    app()
