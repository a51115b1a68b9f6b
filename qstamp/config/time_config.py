#!filepath: qstamp/config/time_config.py
from typing import Optional

from pydantic import BaseModel, field_validator


class TimeConfig(BaseModel):
    """
    本地时区配置
    - timezone=None → 系统时区（tzlocal）
    - 其余为 IANA 名称，如 "Asia/Shanghai"
    """
    timezone: Optional[str] = None

    @field_validator("timezone")
    @classmethod
    def _blank_is_system(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None
