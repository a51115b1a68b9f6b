#!filepath: qstamp/config/app_config.py
import os

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel

from .log_config import LogConfig
from .time_config import TimeConfig
from qstamp.utils.logger import logs, init_logging

TIMEZONE_ENV = "QSTAMP_TIMEZONE"


def project_root() -> str:
    """
    返回项目根目录（基于当前文件位置推导）:
    qstamp/config/app_config.py → qstamp/config → qstamp → project_root
    """
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "../../"))


class AppConfig(BaseModel):
    log: LogConfig = LogConfig()
    time: TimeConfig = TimeConfig()

    @classmethod
    def load(cls, path: str | None = None) -> "AppConfig":
        """
        加载 YAML 配置 + .env
        - 默认使用 qstamp/config/base.yml
        - 不依赖当前工作目录
        - 环境变量 QSTAMP_TIMEZONE 覆盖 time.timezone
        """
        root = project_root()

        # 1) 先加载 .env（在项目根目录下）
        load_dotenv(os.path.join(root, ".env"))

        # 2) 决定配置文件路径
        if path is None:
            path = os.path.join(os.path.dirname(__file__), "base.yml")

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        # 3) 读取 YAML
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        # 4) 从 env 注入时区
        tz = os.getenv(TIMEZONE_ENV)
        if tz:
            raw.setdefault("time", {})
            raw["time"] = {**(raw["time"] or {}), "timezone": tz}

        return cls(**raw)

    def apply(self) -> "AppConfig":
        """
        安装日志 sink，并设置进程默认本地时区
        """
        from qstamp.core.zone import set_local_zone

        init_logging(self.log)
        zone = set_local_zone(self.time.timezone)
        logs.info(f"[Config] local timezone = {zone.name}")
        return self
