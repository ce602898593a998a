# 命令行入口：读取数据库任务配置文件，批量生成表信息文档
#
#   python main.py                      # 使用 appsettings.json
#   python main.py configs/appsettings.json
#
# 相对路径 (表配置文件、输出目录) 基于任务配置文件所在目录解析。

import argparse
import os
import sys

from src.config import ConfigFileError, JsonTableConfigSource, load_app_settings, load_settings
from src.core import MySqlGateway
from src.services import DatabaseGenerator, run_batch_sync
from src.utils import setup_logger


def build_arg_parser(default_settings_file: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="根据配置文件批量生成数据库表信息文档")
    parser.add_argument(
        "settings_file",
        nargs="?",
        default=default_settings_file,
        help=f"数据库任务配置文件 (默认: {default_settings_file})",
    )
    parser.add_argument(
        "-j", "--max-concurrent",
        type=int,
        default=None,
        help="同时生成的数据库数量上限",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """主函数，返回进程退出码"""
    settings = load_settings()
    logger = setup_logger("main", settings.log_level)
    args = build_arg_parser(settings.settings_file).parse_args(argv)

    max_concurrent = args.max_concurrent if args.max_concurrent is not None else settings.max_concurrent_databases
    if max_concurrent <= 0:
        logger.error("并发数量上限必须大于 0")
        return 2

    settings_file = os.path.abspath(args.settings_file)
    try:
        configs = load_app_settings(settings_file)
    except ConfigFileError as e:
        logger.error("%s", e)
        return 2

    if not configs:
        logger.warning("%s 中没有配置任何数据库", settings_file)
        return 0

    gateway = MySqlGateway()
    generator = DatabaseGenerator(
        schema_provider=gateway,
        query_executor=gateway,
        table_source=JsonTableConfigSource(),
        defaults=settings.defaults,
        base_dir=os.path.dirname(settings_file),
    )
    results = run_batch_sync(configs, generator, max_concurrent)
    return 0 if all(r.success for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
