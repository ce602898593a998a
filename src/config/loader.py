from __future__ import annotations

import json
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from src.utils.logger import setup_logger

from .models import DatabaseConfig, TableConfig

logger = setup_logger("config_loader")


class ConfigFileError(RuntimeError):
    """配置文件不存在、无法解析或格式错误。"""


class AppSettingsFile(BaseModel):
    """数据库任务配置文件：{"databases": [ {...}, ... ]}。"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    databases: list[DatabaseConfig] = Field(validation_alias=AliasChoices("databases", "Databases"))


def _read_json(path: str) -> Any:
    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            return json.load(f)
    except FileNotFoundError:
        raise ConfigFileError(f"配置文件不存在: {path}") from None
    except json.JSONDecodeError as e:
        raise ConfigFileError(f"配置文件 {path} 不是合法的 JSON: {e}") from e


def describe_errors(error: ValidationError) -> str:
    """把 ValidationError 压缩成一行，例如 "fields.0.name: Input should be a valid string"。"""
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}"
        for err in error.errors()
    )


def load_app_settings(path: str) -> list[DatabaseConfig]:
    """
    读取数据库任务配置文件。

    文件格式为 {"databases": [ {...}, ... ]}，也兼容直接写成数组。

    Raises:
        ConfigFileError: 文件不存在或格式错误。
    """
    data = _read_json(path)
    if isinstance(data, list):
        data = {"databases": data}
    try:
        return AppSettingsFile.model_validate(data).databases
    except ValidationError as e:
        raise ConfigFileError(f"配置文件 {path} 格式错误: {describe_errors(e)}") from e


class JsonTableConfigSource:
    """
    表配置来源：从数据库对应的 JSON 文件中读取有序的表配置列表。

    单张表的配置格式错误时只跳过该表并记录日志，其余表照常返回。
    """

    def load(self, db: str, path: str) -> list[TableConfig]:
        """
        Args:
            db (str): 数据库标识，仅用于错误信息。
            path (str): 已解析的表配置文件绝对路径。

        Raises:
            ConfigFileError: 文件不存在、不是合法 JSON 或不是数组。
        """
        data = _read_json(path)
        if isinstance(data, dict):
            data = data.get("tables", data.get("Tables"))
        if not isinstance(data, list):
            raise ConfigFileError(f"{path} ({db}) 中的表配置必须为数组")

        tables: list[TableConfig] = []
        for index, item in enumerate(data):
            try:
                tables.append(TableConfig.model_validate(item))
            except ValidationError as e:
                logger.warning("%s 中存在错误信息: 第 %d 张表配置格式错误，已跳过: %s", path, index + 1, describe_errors(e))
        return tables
