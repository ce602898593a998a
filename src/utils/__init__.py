from .logger import setup_logger
from .env_utils import get_combine_path
from .file_exporter import FileExporter

__all__ = [
    "setup_logger",
    "get_combine_path",
    "FileExporter",
]
