# tests/conftest.py
from __future__ import annotations

import pytest
from loguru import logger

import qstamp.core.zone as zone_mod
from qstamp.core.timestamp import Timestamp
from qstamp.core.zone import LocalZone


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)  # or sys.stderr
    yield


@pytest.fixture(autouse=True)
def local_zone():
    """
    固定进程默认时区为 Asia/Shanghai（UTC+8，无夏令时），测试结束后恢复
    """
    prev = zone_mod._default
    zone_mod._default = LocalZone.from_name("Asia/Shanghai")
    yield zone_mod._default
    zone_mod._default = prev


@pytest.fixture
def sample_ts() -> Timestamp:
    """2022-06-15 14:30:45.123 (Asia/Shanghai)"""
    return Timestamp.from_calendar(2022, 6, 15, 14, 30, 45, 123)


@pytest.fixture
def sample_ms() -> int:
    # 2022-06-15 14:30:45.123 CST == 2022-06-15T06:30:45.123Z
    return 1_655_274_645_123
