# gs1scan/core/config.py
from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# GS1 定义的 GTIN 长度：GTIN-8 / GTIN-12 / GTIN-13 / GTIN-14
SUPPORTED_GTIN_LENGTHS = (8, 12, 13, 14)


class AppSettings(BaseSettings):
    """
    全局应用配置（环境变量 / .env）
    """

    # 运行环境
    ENV: str = Field(default="dev")
    DEBUG: bool = Field(default=False)

    # 日志
    LOG_LEVEL: str = Field(default="INFO")
    JSON_LOG: bool = Field(default=False)

    # GTIN 校验：默认只接受 14 位（下游系统目前依赖这个口径）
    GTIN_ALLOWED_LENGTHS: List[int] = Field(default_factory=lambda: [14])

    # 效期无法判定时是否按“已过期”处理；默认 fail-open
    EXPIRY_FAIL_CLOSED: bool = Field(default=False)

    # 效期展示格式
    DISPLAY_DATE_SEPARATOR: str = Field(default="-")
    DISPLAY_FULL_MONTH_NAME: bool = Field(default=False)

    # 允许从 .env 文件读取配置
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("GTIN_ALLOWED_LENGTHS")
    @classmethod
    def _check_gtin_lengths(cls, v: List[int]) -> List[int]:
        if not v:
            raise ValueError("GTIN_ALLOWED_LENGTHS must not be empty")
        bad = [n for n in v if n not in SUPPORTED_GTIN_LENGTHS]
        if bad:
            raise ValueError(f"unsupported GTIN lengths: {bad}")
        return sorted(set(v))


@lru_cache
def get_settings() -> AppSettings:
    """全局单例设置入口。"""
    return AppSettings()
