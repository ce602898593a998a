from __future__ import annotations

from typing import Any

import pymysql
from pymysql.connections import Connection
from pymysql.cursors import Cursor
from pymysql.err import Error

from src.utils.logger import setup_logger

logger = setup_logger("db_connector")

# 连接字符串中的键 (小写) -> PyMySQL 参数名
_CONNECTION_KEYS: dict[str, str] = {
    'server': 'host',
    'host': 'host',
    'data source': 'host',
    'port': 'port',
    'database': 'database',
    'initial catalog': 'database',
    'uid': 'user',
    'user id': 'user',
    'user': 'user',
    'username': 'user',
    'pwd': 'password',
    'password': 'password',
    'charset': 'charset',
    'connect timeout': 'connect_timeout',
}


class DatabaseConnectionError(RuntimeError):
    """无法建立数据库连接。"""


def parse_connection_string(connection_string: str) -> dict[str, Any]:
    """
    将 "Server=127.0.0.1;Port=3306;Database=test;Uid=root;Pwd=123456;" 形式的连接字符串
    转换为 PyMySQL 的连接参数。

    键名不区分大小写，未识别的键会被忽略。

    Raises:
        ValueError: 连接字符串中存在没有 '=' 的片段。
    """
    config: dict[str, Any] = {}
    for part in connection_string.split(';'):
        if not part.strip():
            continue
        if '=' not in part:
            raise ValueError(f"连接字符串片段 [{part.strip()}] 缺少 '='")
        key, value = part.split('=', 1)
        target = _CONNECTION_KEYS.get(key.strip().lower())
        if target is None:
            logger.debug("忽略连接字符串中未识别的参数: %s", key.strip())
            continue
        config[target] = value.strip()

    if 'port' in config:
        config['port'] = int(config['port'])
    if 'connect_timeout' in config:
        config['connect_timeout'] = int(config['connect_timeout'])
    return config


class DatabaseConnector:
    """
    数据库连接器，负责管理与MySQL数据库的连接（使用PyMySQL）。
    """

    def __init__(self, db_config: dict[str, Any]) -> None:
        """
        初始化数据库连接器。
        Args:
            db_config (dict[str, Any]): 数据库连接配置。
        """
        self._connection_config: dict[str, Any] = db_config
        self._connection: Connection | None = None

    @classmethod
    def from_connection_string(cls, connection_string: str) -> DatabaseConnector:
        """根据连接字符串创建连接器。"""
        return cls(parse_connection_string(connection_string))

    def connect(self) -> None:
        """
        建立与数据库的连接。

        Raises:
            DatabaseConnectionError: 连接失败时抛出。
        """
        if self.is_connected():
            self.disconnect()

        config = self._connection_config.copy()
        config['port'] = int(config.get('port', 3306))
        config.setdefault('charset', 'utf8mb4')
        try:
            self._connection = pymysql.connect(**config)
        except Error as e:
            self._connection = None
            raise DatabaseConnectionError(
                f"数据库连接失败 ({config.get('host')}:{config['port']}/{config.get('database')}): {e}"
            ) from e
        logger.debug("数据库连接成功: %s", self.get_db_name())

    def try_connect(self) -> bool:
        """
        尝试建立连接，失败时只记录日志并返回 False。
        """
        try:
            self.connect()
            return True
        except DatabaseConnectionError as e:
            logger.warning("%s", e)
            return False

    def disconnect(self) -> None:
        """
        关闭数据库连接。
        """
        if self._connection:
            self._connection.close()
            logger.debug("数据库连接已关闭: %s", self.get_db_name())
        self._connection = None

    def is_connected(self) -> bool:
        """
        检查当前是否存在有效的数据库连接。
        """
        return self._connection is not None and self._connection.open

    def get_cursor(self) -> Cursor:
        """
        获取一个用于执行SQL语句的游标对象。

        Raises:
            DatabaseConnectionError: 数据库未连接。
        """
        if not self.is_connected():
            raise DatabaseConnectionError("数据库未连接，无法获取游标。")
        return self._connection.cursor()

    def get_db_name(self) -> str | None:
        """
        获取当前连接的数据库名称。
        """
        return self._connection_config.get('database')

    def __enter__(self) -> DatabaseConnector:
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.disconnect()
