from .suffix import FileSuffix, parse_suffix
from .models import (
    DatabaseConfig,
    FieldConfig,
    LimitConfig,
    OutputDefaults,
    QueryResult,
    SchemaFieldInfo,
    TableConfig,
)
from .settings import AppSettings, load_settings
from .loader import ConfigFileError, JsonTableConfigSource, load_app_settings

__all__ = [
    "FileSuffix",
    "parse_suffix",
    "DatabaseConfig",
    "FieldConfig",
    "LimitConfig",
    "OutputDefaults",
    "QueryResult",
    "SchemaFieldInfo",
    "TableConfig",
    "AppSettings",
    "load_settings",
    "ConfigFileError",
    "JsonTableConfigSource",
    "load_app_settings",
]
