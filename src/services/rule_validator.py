from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from src.config import DatabaseConfig, SchemaFieldInfo, TableConfig, parse_suffix


class ViolationCode(Enum):
    """配置规则错误类型。"""
    EMPTY_CONNECTION_STRING = "empty_connection_string"
    UNSUPPORTED_SUFFIX = "unsupported_suffix"
    EMPTY_TABLE_NAME = "empty_table_name"
    MISSING_FIELDS_WITHOUT_ALL_FLAG = "missing_fields_without_all_flag"
    UNKNOWN_FIELDS = "unknown_fields"
    INVALID_LIMIT = "invalid_limit"


@dataclass(frozen=True)
class RuleViolation:
    """
    一条配置规则错误。

    Attributes:
        code (ViolationCode): 错误类型。
        message (str): 可读的错误信息。
        fields (tuple[str, ...]): UNKNOWN_FIELDS 时为不存在的字段名。
    """
    code: ViolationCode
    message: str
    fields: tuple[str, ...] = ()

    def __str__(self) -> str:
        return self.message


def validate_database(cfg: DatabaseConfig) -> RuleViolation | None:
    """
    检查数据库配置是否遵循规则。

    校验通过时会把解析后的文件类型写入 cfg.output_suffix_type。

    Returns:
        RuleViolation | None: 第一个不满足的规则，全部通过返回 None。
    """
    # 检查连接字符串是否进行配置
    if not cfg.connection_string or not cfg.connection_string.strip():
        return RuleViolation(ViolationCode.EMPTY_CONNECTION_STRING, "未正确配置参数 connection_string")

    # 检查文件后缀是否提供支持
    suffix_type = parse_suffix(cfg.output_file_name_suffix)
    if suffix_type is None:
        return RuleViolation(
            ViolationCode.UNSUPPORTED_SUFFIX,
            f"output_file_name_suffix 为 [{cfg.output_file_name_suffix}] 暂不支持生成",
        )

    cfg.output_suffix_type = suffix_type
    return None


def validate_table(table: TableConfig, schema: dict[str, SchemaFieldInfo]) -> RuleViolation | None:
    """
    检查表配置是否遵循规则，按顺序检查，遇到第一个错误即返回。

    1. 表名不能为空。
    2. need_all_fields 为 False 时必须配置 fields。
    3. need_all_fields 为 False 时，配置的字段必须都存在于表结构中。
    4. limit 的 offset >= 0 且 count > 0。
    """
    if not table.table or not table.table.strip():
        return RuleViolation(ViolationCode.EMPTY_TABLE_NAME, "table 不能为空")

    if not table.need_all_fields and not table.fields:
        return RuleViolation(
            ViolationCode.MISSING_FIELDS_WITHOUT_ALL_FLAG,
            f"{table.table} 的 need_all_fields 为 false 时，必须配置 fields",
        )

    if not table.need_all_fields:
        not_exists_fields = [f.name for f in table.fields if f.name not in schema]
        if not_exists_fields:
            return RuleViolation(
                ViolationCode.UNKNOWN_FIELDS,
                f"{table.table} 中不存在的字段: {','.join(not_exists_fields)}。请仔细检查配置。",
                tuple(not_exists_fields),
            )

    if table.limit.offset < 0 or table.limit.count <= 0:
        return RuleViolation(
            ViolationCode.INVALID_LIMIT,
            f"{table.table} 的 limit 中 offset 必须大于等于 0，count 必须大于 0",
        )

    return None
