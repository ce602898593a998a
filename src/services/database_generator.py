from __future__ import annotations

import os
import time
from dataclasses import dataclass, field
from typing import Protocol

from src.config import DatabaseConfig, OutputDefaults, TableConfig
from src.core import QueryExecutor, SchemaProvider
from src.utils import FileExporter, get_combine_path
from src.utils.logger import setup_logger

from .rule_validator import validate_database
from .table_generator import TableGenerator, TableOutcome

logger = setup_logger("database_generator")


class TableConfigSource(Protocol):
    """根据数据库标识与配置文件路径读取表配置列表。"""

    def load(self, db: str, path: str) -> list[TableConfig]:
        ...


@dataclass
class DatabaseResult:
    """
    单个数据库的生成结果。

    elapsed_ms 由 BatchRunner 填写时包含等待资源的时间。
    """
    db: str
    read_file_path: str
    output_file_path: str = ""
    success: bool = False
    elapsed_ms: int = 0
    error: str | None = None
    tables: list[TableOutcome] = field(default_factory=list)


def _is_default(value: str | None, defaults: OutputDefaults) -> bool:
    return value is None or not value.strip() or value == defaults.default_marker


def resolve_output_paths(
    cfg: DatabaseConfig,
    defaults: OutputDefaults,
    base_dir: str | None = None,
) -> DatabaseConfig:
    """
    补全输出文件信息，并计算读取路径与输出路径。

    output_dir、output_file_name、output_file_name_suffix 为空或等于默认标记时使用默认值，
    默认文件名为 前缀 + 数据库标识。相对路径基于 base_dir (默认当前工作目录)。

    Returns:
        DatabaseConfig: 新的数据库配置，不修改传入的对象。
    """
    output_dir = defaults.output_dir if _is_default(cfg.output_dir, defaults) else cfg.output_dir
    output_file_name = (
        f"{defaults.output_file_name_prefix}{cfg.db}"
        if _is_default(cfg.output_file_name, defaults) else cfg.output_file_name
    )
    suffix = (
        defaults.output_file_name_suffix
        if _is_default(cfg.output_file_name_suffix, defaults) else cfg.output_file_name_suffix
    )
    # ".md" 与 "md" 等价，文件名中只保留一个 "."
    suffix = suffix.strip().lstrip(".")

    root = base_dir or os.getcwd()
    read_file_path = os.path.abspath(get_combine_path(root, *cfg.read_dir_levels, cfg.read_file_name))
    output_dir = os.path.abspath(get_combine_path(root, output_dir))
    output_file_path = f"{output_dir}{os.sep}{output_file_name}.{suffix}"

    return cfg.model_copy(update={
        "output_dir": output_dir,
        "output_file_name": output_file_name,
        "output_file_name_suffix": suffix,
        "read_file_path": read_file_path,
        "output_file_path": output_file_path,
    })


class DatabaseGenerator:
    """
    单个数据库的文档生成流程：
    补全输出信息 -> 规则校验 -> 创建输出目录 -> 读取表配置 -> 按顺序生成每张表。

    配置错误会直接返回失败结果；读取配置、访问数据库、写文件时的异常向上抛出。
    """

    def __init__(
        self,
        schema_provider: SchemaProvider,
        query_executor: QueryExecutor,
        table_source: TableConfigSource,
        defaults: OutputDefaults | None = None,
        base_dir: str | None = None,
    ) -> None:
        self._table_generator = TableGenerator(schema_provider, query_executor)
        self._table_source: TableConfigSource = table_source
        self._defaults: OutputDefaults = defaults or OutputDefaults()
        self._base_dir: str | None = base_dir

    def resolve(self, cfg: DatabaseConfig) -> DatabaseConfig:
        return resolve_output_paths(cfg, self._defaults, self._base_dir)

    def run(self, cfg: DatabaseConfig) -> DatabaseResult:
        start = time.perf_counter()

        # 配置输出文件信息
        cfg = self.resolve(cfg)
        result = DatabaseResult(db=cfg.db, read_file_path=cfg.read_file_path, output_file_path=cfg.output_file_path)

        # 检查是否遵循规范
        violation = validate_database(cfg)
        if violation is not None:
            logger.error("%s 中存在错误信息: %s", cfg.read_file_path, violation)
            result.error = str(violation)
            return result

        FileExporter.ensure_output_dir(cfg.output_dir)
        cfg.tables = self._table_source.load(cfg.db, cfg.read_file_path)

        with FileExporter.open_output_stream(cfg.output_file_path) as stream:
            for table in cfg.tables:
                result.tables.append(self._table_generator.generate(cfg, table, stream))

        result.success = True
        result.elapsed_ms = int((time.perf_counter() - start) * 1000)
        return result
