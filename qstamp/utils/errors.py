# qstamp/utils/errors.py
class TimestampError(ValueError):
    """
    qstamp 所有可恢复错误的基类。
    继承 ValueError，调用方可以沿用 `except ValueError`。
    """


class TimestampParseError(TimestampError):
    """
    所有 layout 都无法匹配输入字符串。

    text : 原始输入（未 strip），用于诊断
    kind : "date" | "time"，对应 parse_date / parse_time 入口
    """

    def __init__(self, text: str, kind: str = "date"):
        super().__init__(f"unparseable timestamp ({kind}): {text!r}")
        self.text = text
        self.kind = kind


class ZoneConfigError(TimestampError):
    """
    Raised for an unknown / unloadable timezone name (config, CLI, set_local_zone).
    """
