from .db_connector import DatabaseConnectionError, DatabaseConnector, parse_connection_string
from .metadata_querier import MetaDataQuerier
from .gateway import MySqlGateway, QueryExecutor, SchemaProvider

__all__ = [
    "DatabaseConnectionError",
    "DatabaseConnector",
    "parse_connection_string",
    "MetaDataQuerier",
    "MySqlGateway",
    "QueryExecutor",
    "SchemaProvider",
]
