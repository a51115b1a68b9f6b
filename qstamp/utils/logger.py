#!filepath: qstamp/utils/logger.py
import os
import sys
import json
from functools import wraps
from time import perf_counter
from typing import Callable, Optional

from loguru import logger

class Logging:
    """
    qstamp 日志模块（loguru 封装）
    ---------------------------------------
    - 库被 import 时不改动 loguru 全局配置
    - configure=True 时安装 sink：
        log_dir=None → stderr
        log_dir=路径 → 按日期切割的文件 + 保留周期
    - 包含函数级日志装饰器 catch()
    ---------------------------------------
    """

    def __init__(
        self,
        log_dir: Optional[str] = None,
        rotation: str = "1 day",
        retention: str = "30 days",
        log_level: str = "INFO",
        configure: bool = True,
    ):
        self.log_dir = log_dir
        self.rotation = rotation
        self.retention = retention
        self.level = log_level

        if configure:
            self._configure()

    def _configure(self) -> None:
        """
        配置全局 logger（会移除已有 sink）
        """
        logger.remove()

        if self.log_dir is None:
            logger.add(
                sink=sys.stderr,
                level=self.level,
                format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {message}",
            )
        else:
            os.makedirs(self.log_dir, exist_ok=True)
            logger.add(
                sink=f"{self.log_dir}/{{time:YYYY-MM-DD}}.log",
                rotation=self.rotation,
                retention=self.retention,
                level=self.level,
                format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}",
                enqueue=True,  # 多进程安全
                backtrace=True,
                diagnose=True,
            )

        logger.debug("-----------qstamp logger initialized-----------")

    # ----------- 日志方法 -----------
    def debug(self, msg: str, *args, **kwargs):
        logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        logger.error(msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs):
        logger.exception(msg, *args, **kwargs)

    # ---------- 日志装饰器 ----------
    def catch(
        self,
        msg: str = "Exception occurred",
        log_inputs: bool = False,
        log_time: bool = False,
    ) -> Callable:

        def decorator(func: Callable):
            @wraps(func)
            def wrapper(*args, **kwargs):

                if log_inputs:
                    logger.debug(
                        f"[CALL] {func.__name__} args={args}, kwargs={json.dumps(kwargs, ensure_ascii=False, default=str)}"
                    )

                start = perf_counter()

                try:
                    result = func(*args, **kwargs)
                except Exception:
                    logger.exception(f"[ERROR] {func.__name__}: {msg}")
                    raise

                if log_time:
                    cost = perf_counter() - start
                    logger.debug(f"[TIME] {func.__name__} took {cost:.4f}s")

                return result

            return wrapper

        return decorator


def init_logging(config=None) -> Logging:
    """
    按 LogConfig 原地重配全局 logs 并安装 sink。
    各模块 import 进来的 logs 是同一个对象，无需重新绑定。
    config=None → 使用 LogConfig 默认值（stderr, INFO）
    """
    from qstamp.config.log_config import LogConfig

    cfg = config or LogConfig()
    logs.log_dir = cfg.dir
    logs.rotation = cfg.rotation
    logs.retention = cfg.retention
    logs.level = cfg.level
    logs._configure()
    return logs


# 默认全局 logs（不安装 sink，由 init_logging 原地重配）
logs = Logging(configure=False)
