"""
日志工具
"""
import logging
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

ROOT_LOGGER_NAME = "sqlinfogen"


def setup_logger(name: str, level: str | int | None = None) -> logging.Logger:
    """
    获取 sqlinfogen 下的子日志记录器。

    处理器只挂在根记录器 sqlinfogen 上，子记录器通过传播输出，避免重复打印。

    Args:
        name: 日志记录器名称，会自动加上 "sqlinfogen." 前缀
        level: 日志级别，传入时同时修改根记录器的级别

    Returns:
        配置好的日志记录器
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)

    # 已经有处理器时不再重复添加
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root.addHandler(handler)
        root.setLevel(logging.INFO)
        root.propagate = False

    if level is not None:
        root.setLevel(level.upper() if isinstance(level, str) else level)

    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
