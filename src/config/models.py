from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from .suffix import FileSuffix

# 配置文件同时兼容 snake_case 与旧版 PascalCase 的键名
_CONFIG = ConfigDict(populate_by_name=True, extra="ignore")


class FieldConfig(BaseModel):
    """
    需要查询的字段配置。

    Attributes:
        name (str): 字段名，必须与数据库中真实存在的列名一致。
        alias (str | None): 字段在生成文档中显示的别名，可不配置。
    """
    model_config = _CONFIG

    name: str = Field(default="", validation_alias=AliasChoices("name", "Name"))
    alias: str | None = Field(default=None, validation_alias=AliasChoices("alias", "Alias"))

    @model_validator(mode="before")
    @classmethod
    def accept_plain_name(cls, value: Any) -> Any:
        # 允许直接写字段名
        if isinstance(value, str):
            return {"name": value}
        return value


class LimitConfig(BaseModel):
    """
    查询返回数量配置，对应 SQL 中的 limit offset, count。
    """
    model_config = _CONFIG

    offset: int = Field(default=0, validation_alias=AliasChoices("offset", "Offset"))
    count: int = Field(default=10, validation_alias=AliasChoices("count", "Count"))


class TableConfig(BaseModel):
    """
    单张表的信息提取配置。

    Attributes:
        table (str): 表名。
        fields (list[FieldConfig] | None): 需要查询的字段；need_all_fields 为 True 时可为空。
        select_conditions (list[str] | None): 查询条件，每一项会被括号包裹后使用 and 连接。
        order_by_conditions (list[str] | None): 排序规则，按顺序使用逗号连接。
        limit (LimitConfig): 返回数量配置。
        need_all_fields (bool): 是否查询表中的所有字段。
    """
    model_config = _CONFIG

    table: str = Field(default="", validation_alias=AliasChoices("table", "Table"))
    fields: list[FieldConfig] | None = Field(default=None, validation_alias=AliasChoices("fields", "Fields"))
    select_conditions: list[str] | None = Field(
        default=None, validation_alias=AliasChoices("select_conditions", "SelectConditions")
    )
    order_by_conditions: list[str] | None = Field(
        default=None, validation_alias=AliasChoices("order_by_conditions", "OrderByConditions")
    )
    limit: LimitConfig = Field(default_factory=LimitConfig, validation_alias=AliasChoices("limit", "Limit"))
    need_all_fields: bool = Field(default=False, validation_alias=AliasChoices("need_all_fields", "NeedAllFields"))

    @field_validator("limit", mode="before")
    @classmethod
    def default_limit(cls, value: Any) -> Any:
        return LimitConfig() if value is None else value


class DatabaseConfig(BaseModel):
    """
    单个数据库的文档生成任务配置。

    read_file_path 与 output_file_path 总是由 resolve_output_paths 重新计算；
    output_suffix_type 只有在数据库配置校验通过后才会被赋值。
    """
    model_config = _CONFIG

    db: str = Field(default="", validation_alias=AliasChoices("db", "Db"))
    connection_string: str = Field(
        default="", validation_alias=AliasChoices("connection_string", "ConnectionString")
    )
    read_dir_levels: list[str] = Field(
        default_factory=list, validation_alias=AliasChoices("read_dir_levels", "ReadDirLevels")
    )
    read_file_name: str = Field(default="", validation_alias=AliasChoices("read_file_name", "ReadFileName"))
    output_dir: str = Field(default="", validation_alias=AliasChoices("output_dir", "OutputDir"))
    output_file_name: str = Field(default="", validation_alias=AliasChoices("output_file_name", "OutputFileName"))
    output_file_name_suffix: str = Field(
        default="", validation_alias=AliasChoices("output_file_name_suffix", "OutputFileNameSuffix")
    )
    output_suffix_type: FileSuffix | None = None
    read_file_path: str = ""
    output_file_path: str = ""
    tables: list[TableConfig] = Field(default_factory=list)


class OutputDefaults(BaseModel):
    """
    输出文件信息的默认值。

    当配置项为空或等于 default_marker 时，使用这里的值代替。
    """
    output_dir: str = "output"
    output_file_name_prefix: str = "SqlInfo_"
    output_file_name_suffix: str = "md"
    default_marker: str = "default"


@dataclass
class SchemaFieldInfo:
    """
    从数据库中查询到的字段信息。

    Attributes:
        field (str): 字段名。
        order (int): 字段在表中的序号 (ordinal_position)。
        data_type (str): 字段类型，如 varchar。
        column_type (str): 完整字段类型，如 varchar(255)。
        is_nullable (bool): 是否允许为空。
        column_key (str): 键类型 (PRI / UNI / MUL)。
        default (Any): 默认值。
        comment (str): 字段注释。
    """
    field: str
    order: int
    data_type: str = ""
    column_type: str = ""
    is_nullable: bool = True
    column_key: str = ""
    default: Any = None
    comment: str = ""


@dataclass
class QueryResult:
    """查询结果：有序的列名与数据行。"""
    columns: list[str] = field(default_factory=list)
    rows: list[tuple[Any, ...]] = field(default_factory=list)
