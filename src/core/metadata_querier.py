from __future__ import annotations

from src.config import QueryResult, SchemaFieldInfo

from .db_connector import DatabaseConnector


class MetaDataQuerier:
    """
    元数据查询器，负责从数据库中获取表结构，以及执行生成的查询语句。

    与同步脚本工具不同，这里的查询错误不会被吞掉，而是直接抛出，
    由上层决定跳过该数据库。
    """

    def __init__(self, db_connector: DatabaseConnector) -> None:
        """
        初始化元数据查询器。

        Args:
            db_connector (DatabaseConnector): 一个有效的数据库连接器实例。
        """
        self._db_connector: DatabaseConnector = db_connector

    def get_table_schema(self, table_name: str) -> dict[str, SchemaFieldInfo]:
        """
        获取指定表的字段信息。

        Args:
            table_name (str): 要查询的表名。

        Returns:
            dict[str, SchemaFieldInfo]: 以字段名为键，按 ordinal_position 排序。
                                        表不存在时返回空字典。
        """
        cursor = self._db_connector.get_cursor()
        query = """
            SELECT
                column_name,
                ordinal_position,
                data_type,
                column_type,
                is_nullable,
                column_key,
                column_default,
                column_comment
            FROM information_schema.columns
            WHERE table_schema = DATABASE() AND table_name = %s
            ORDER BY ordinal_position;
        """
        try:
            cursor.execute(query, (table_name,))
            schema: dict[str, SchemaFieldInfo] = {}
            for row in cursor.fetchall():
                name, order, data_type, column_type, is_nullable, column_key, default, comment = row
                schema[name] = SchemaFieldInfo(
                    field=name,
                    order=int(order),
                    data_type=data_type or "",
                    column_type=column_type or "",
                    is_nullable=(is_nullable == 'YES'),
                    column_key=column_key or "",
                    default=default,
                    comment=comment or "",
                )
            return schema
        finally:
            cursor.close()

    def fetch(self, sql: str) -> QueryResult:
        """
        执行查询语句并返回结果集。

        Args:
            sql (str): 由 build_query 生成的查询语句。
        """
        cursor = self._db_connector.get_cursor()
        try:
            cursor.execute(sql)
            columns = [i[0] for i in cursor.description] if cursor.description else []
            rows = [tuple(row) for row in cursor.fetchall()]
            return QueryResult(columns=columns, rows=rows)
        finally:
            cursor.close()
