import os
from typing import TextIO

from src.utils.logger import setup_logger

logger = setup_logger("file_exporter")


class FileExporter:
    """
    负责输出目录的创建以及输出文件的打开。
    """

    @staticmethod
    def ensure_output_dir(output_dir: str) -> None:
        """
        确保输出目录存在，不存在时递归创建。

        Raises:
            OSError: 目录创建失败。
        """
        if not os.path.isdir(output_dir):
            os.makedirs(output_dir, exist_ok=True)
            logger.info("已创建输出目录: %s", output_dir)

    @staticmethod
    def open_output_stream(file_path: str) -> TextIO:
        """
        以覆盖写入的方式打开输出文件。

        不做换行符转换，保证相同输入生成的文件内容完全一致。
        调用方需要使用 with 语句确保文件被关闭。

        Raises:
            OSError: 文件无法打开。
        """
        return open(file_path, "w", encoding="utf-8", newline="")
