from __future__ import annotations

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import OutputDefaults


class AppSettings(BaseSettings):
    """
    进程级配置，可通过 SQLINFOGEN_* 环境变量或 .env 文件覆盖。

    嵌套字段使用双下划线，例如 SQLINFOGEN_DEFAULTS__OUTPUT_DIR=docs。
    """

    model_config = SettingsConfigDict(
        env_prefix="SQLINFOGEN_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    defaults: OutputDefaults = Field(
        default_factory=OutputDefaults,
        description="输出目录、文件名前缀、后缀以及 \"使用默认值\" 标记。",
    )
    max_concurrent_databases: int = Field(default=4, gt=0, description="同时生成的数据库数量上限。")
    log_level: str = Field(default="INFO")
    settings_file: str = Field(default="appsettings.json", description="数据库任务配置文件路径。")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"不支持的日志级别: {value}")
        return level


def load_settings() -> AppSettings:
    """
    Raises:
        pydantic.ValidationError: 环境变量取值不合法。
    """
    return AppSettings()
