from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class ResourceGovernor:
    """
    限制同时进行文档生成的数据库数量。

    slot() 在没有空闲名额时挂起，退出时只释放由本次获取的那一个名额。
    in_use 与 peak 仅在事件循环线程中修改，用于观察实际并发数。
    """

    def __init__(self, limit: int) -> None:
        if limit < 1:
            raise ValueError(f"并发数量上限必须大于 0，当前为 {limit}")
        self.limit: int = limit
        self._semaphore = asyncio.Semaphore(limit)
        self.in_use: int = 0
        self.peak: int = 0

    @asynccontextmanager
    async def slot(self) -> AsyncIterator[None]:
        async with self._semaphore:
            self.in_use += 1
            self.peak = max(self.peak, self.in_use)
            try:
                yield
            finally:
                self.in_use -= 1
