from __future__ import annotations

import asyncio
import time
from dataclasses import replace

from src.config import DatabaseConfig
from src.utils.logger import setup_logger

from .database_generator import DatabaseGenerator, DatabaseResult
from .resource_governor import ResourceGovernor

logger = setup_logger("batch_runner")


class BatchRunner:
    """
    批量生成：每个数据库一个任务，受 ResourceGovernor 限制并发，等待全部完成。

    单个数据库的任何异常只会记录到该数据库的结果中，不会影响其他数据库。
    """

    def __init__(self, generator: DatabaseGenerator, governor: ResourceGovernor) -> None:
        self._generator: DatabaseGenerator = generator
        self._governor: ResourceGovernor = governor

    async def run_batch(self, configs: list[DatabaseConfig]) -> list[DatabaseResult]:
        """
        Returns:
            list[DatabaseResult]: 与 configs 顺序一致的生成结果。
        """
        logger.info("开始生成 %d 个数据库的文档，并发上限 %d", len(configs), self._governor.limit)
        results = await asyncio.gather(*(self._run_one(cfg) for cfg in configs))
        failed = sum(1 for r in results if not r.success)
        logger.info("生成结束，成功 %d 个，失败 %d 个", len(results) - failed, failed)
        return list(results)

    async def _run_one(self, cfg: DatabaseConfig) -> DatabaseResult:
        start = time.perf_counter()
        read_file_path = cfg.read_file_name
        try:
            read_file_path = self._generator.resolve(cfg).read_file_path
            async with self._governor.slot():
                result = await asyncio.to_thread(self._generator.run, cfg)
        except Exception as e:
            elapsed_ms = int((time.perf_counter() - start) * 1000)
            logger.error("%s 中存在错误信息: %s", read_file_path, e)
            logger.debug("%s 生成失败", read_file_path, exc_info=True)
            return DatabaseResult(
                db=cfg.db,
                read_file_path=read_file_path,
                success=False,
                elapsed_ms=elapsed_ms,
                error=str(e) or e.__class__.__name__,
            )

        result = replace(result, elapsed_ms=int((time.perf_counter() - start) * 1000))
        if result.success:
            logger.info(
                "%s 配置文件解析成功，生成的输出文件路径 %s，生成（+资源等待）耗时为 %dms",
                result.read_file_path,
                result.output_file_path,
                result.elapsed_ms,
            )
        return result


def run_batch_sync(
    configs: list[DatabaseConfig],
    generator: DatabaseGenerator,
    max_concurrent: int,
) -> list[DatabaseResult]:
    """在新的事件循环中执行一次批量生成，供命令行与页面调用。"""

    async def _main() -> list[DatabaseResult]:
        return await BatchRunner(generator, ResourceGovernor(max_concurrent)).run_batch(configs)

    return asyncio.run(_main())
