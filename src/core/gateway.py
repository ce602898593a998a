from __future__ import annotations

from typing import Protocol

from src.config import QueryResult, SchemaFieldInfo

from .db_connector import DatabaseConnector
from .metadata_querier import MetaDataQuerier


class SchemaProvider(Protocol):
    """根据表名与连接字符串获取表结构。"""

    def get_table_schema(self, table_name: str, connection_string: str) -> dict[str, SchemaFieldInfo]:
        ...


class QueryExecutor(Protocol):
    """根据 SQL 与连接字符串获取查询结果。"""

    def fetch(self, sql: str, connection_string: str) -> QueryResult:
        ...


class MySqlGateway:
    """
    MySQL 访问入口，同时实现 SchemaProvider 与 QueryExecutor。

    每次调用都会单独打开并关闭一个连接，因此可以在多个线程中同时使用。
    """

    def get_table_schema(self, table_name: str, connection_string: str) -> dict[str, SchemaFieldInfo]:
        with DatabaseConnector.from_connection_string(connection_string) as db:
            return MetaDataQuerier(db).get_table_schema(table_name)

    def fetch(self, sql: str, connection_string: str) -> QueryResult:
        with DatabaseConnector.from_connection_string(connection_string) as db:
            return MetaDataQuerier(db).fetch(sql)
