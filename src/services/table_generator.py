from __future__ import annotations

from dataclasses import dataclass
from typing import TextIO

from src.config import DatabaseConfig, TableConfig
from src.core import QueryExecutor, SchemaProvider
from src.generator import build_query, render_content
from src.utils.logger import setup_logger

from .rule_validator import RuleViolation, validate_table
from .schema_reconciler import reconcile

logger = setup_logger("table_generator")


@dataclass
class TableOutcome:
    """
    单张表的生成结果。

    Attributes:
        table (str): 表名。
        written (bool): 是否已写入输出文件。
        violation (RuleViolation | None): 配置规则错误。
        reason (str | None): 跳过的原因。
    """
    table: str
    written: bool = False
    violation: RuleViolation | None = None
    reason: str | None = None


class TableGenerator:
    """
    单张表的文档生成流程：
    获取表结构 -> 规则校验 -> 展开字段 -> 生成 SQL -> 执行查询 -> 生成内容 -> 写入输出流。

    配置错误只会跳过当前表；数据库访问等意外异常会直接抛出。
    """

    def __init__(self, schema_provider: SchemaProvider, query_executor: QueryExecutor) -> None:
        self._schema_provider: SchemaProvider = schema_provider
        self._query_executor: QueryExecutor = query_executor

    def generate(self, db_cfg: DatabaseConfig, table: TableConfig, stream: TextIO) -> TableOutcome:
        # 获取表结构数据
        schema = self._schema_provider.get_table_schema(table.table, db_cfg.connection_string)

        # 检查是否遵循规则
        violation = validate_table(table, schema)
        if violation is not None:
            logger.warning("%s 中存在错误信息: %s", db_cfg.read_file_path, violation)
            return TableOutcome(table=table.table, violation=violation, reason=str(violation))

        # 如果需要所有字段，则替换 fields
        table = reconcile(table, schema)
        if not table.fields:
            reason = f"{table.table} 不存在或没有可查询的字段"
            logger.warning("%s 中存在错误信息: %s", db_cfg.read_file_path, reason)
            return TableOutcome(table=table.table, reason=reason)

        sql = build_query(table)
        logger.debug("%s 执行查询: %s", db_cfg.db, sql)
        result = self._query_executor.fetch(sql, db_cfg.connection_string)

        # 生成该表的内容
        content = render_content(db_cfg.output_suffix_type, table, result, schema)
        stream.write(content)
        return TableOutcome(table=table.table, written=True)
