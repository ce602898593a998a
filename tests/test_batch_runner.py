import asyncio
import os
import tempfile
import threading
import time
import unittest

from src.config import ConfigFileError, DatabaseConfig, FieldConfig, OutputDefaults, QueryResult, SchemaFieldInfo, TableConfig
from src.services import BatchRunner, DatabaseGenerator, ResourceGovernor, run_batch_sync


class SlowGateway:
    """
    模拟数据库访问：每次调用阻塞一小段时间，并记录同时进行中的调用数量。
    """

    def __init__(self, delay=0.05):
        self.delay = delay
        self.active = 0
        self.max_active = 0
        self._lock = threading.Lock()

    def _enter(self):
        with self._lock:
            self.active += 1
            self.max_active = max(self.max_active, self.active)

    def _exit(self):
        with self._lock:
            self.active -= 1

    def get_table_schema(self, table_name, connection_string):
        self._enter()
        try:
            time.sleep(self.delay)
            return {"id": SchemaFieldInfo(field="id", order=1)}
        finally:
            self._exit()

    def fetch(self, sql, connection_string):
        self._enter()
        try:
            time.sleep(self.delay)
            return QueryResult(columns=["id"], rows=[(1,)])
        finally:
            self._exit()


class StaticTableSource:
    """名称以 broken 开头的数据库读取配置时抛出异常。"""

    def load(self, db, path):
        if db.startswith("broken"):
            raise ConfigFileError(f"配置文件不存在: {path}")
        return [TableConfig(table=f"{db}_table", fields=[FieldConfig(name="id")])]


def make_config(db, connection_string="Server=127.0.0.1;"):
    return DatabaseConfig(
        db=db,
        connection_string=connection_string,
        read_file_name=f"{db}.json",
        output_file_name_suffix="md",
    )


class TestResourceGovernor(unittest.IsolatedAsyncioTestCase):
    """
    针对 ResourceGovernor 的单元测试套件。
    """

    def test_invalid_limit(self):
        with self.assertRaises(ValueError):
            ResourceGovernor(0)

    async def test_slot_released_on_error(self):
        governor = ResourceGovernor(1)
        with self.assertRaises(RuntimeError):
            async with governor.slot():
                raise RuntimeError("boom")
        self.assertEqual(governor.in_use, 0)
        async with governor.slot():
            self.assertEqual(governor.in_use, 1)
        self.assertEqual(governor.peak, 1)

    async def test_counters_track_waiting_tasks(self):
        """
        测试：超过上限的任务等待期间不计入 in_use，peak 等于上限。
        """
        governor = ResourceGovernor(2)
        release = asyncio.Event()
        observed = []

        async def worker():
            async with governor.slot():
                observed.append(governor.in_use)
                await release.wait()

        tasks = [asyncio.create_task(worker()) for _ in range(3)]
        await asyncio.sleep(0)
        self.assertEqual(governor.in_use, 2)
        release.set()
        await asyncio.gather(*tasks)

        self.assertEqual(governor.peak, 2)
        self.assertEqual(governor.in_use, 0)
        self.assertLessEqual(max(observed), 2)


class TestBatchRunner(unittest.IsolatedAsyncioTestCase):
    """
    针对 BatchRunner 的单元测试套件。
    """

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.gateway = SlowGateway()
        self.generator = DatabaseGenerator(
            schema_provider=self.gateway,
            query_executor=self.gateway,
            table_source=StaticTableSource(),
            defaults=OutputDefaults(output_dir="output"),
            base_dir=self.tmp.name,
        )

    async def test_concurrency_never_exceeds_limit(self):
        """
        测试：6 个数据库、并发上限 2 时，同时访问数据库的任务不超过 2 个。
        """
        governor = ResourceGovernor(2)
        configs = [make_config(f"db{i}") for i in range(6)]
        results = await BatchRunner(self.generator, governor).run_batch(configs)

        self.assertEqual([r.db for r in results], [f"db{i}" for i in range(6)])
        self.assertTrue(all(r.success for r in results))
        self.assertLessEqual(self.gateway.max_active, 2)
        self.assertLessEqual(governor.peak, 2)
        self.assertEqual(governor.in_use, 0)

    async def test_failure_is_isolated(self):
        """
        测试：某个数据库读取配置失败时，其他数据库的输出文件正常生成。
        """
        configs = [make_config("db_ok"), make_config("broken_db"), make_config("db_blank", connection_string="")]
        results = await BatchRunner(self.generator, ResourceGovernor(3)).run_batch(configs)

        ok, broken, blank = results
        self.assertTrue(ok.success)
        self.assertTrue(os.path.exists(ok.output_file_path))

        self.assertFalse(broken.success)
        self.assertIn("配置文件不存在", broken.error)
        self.assertEqual(broken.read_file_path, os.path.join(self.tmp.name, "broken_db.json"))

        self.assertFalse(blank.success)
        self.assertIn("connection_string", blank.error)
        self.assertFalse(os.path.exists(blank.output_file_path))

    async def test_elapsed_time_recorded(self):
        results = await BatchRunner(self.generator, ResourceGovernor(1)).run_batch([make_config("db0")])
        # 一次表结构查询加一次数据查询
        self.assertGreaterEqual(results[0].elapsed_ms, 90)


class TestRunBatchSync(unittest.TestCase):
    """
    针对同步入口 run_batch_sync 的单元测试套件。
    """

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        gateway = SlowGateway(delay=0)
        self.generator = DatabaseGenerator(
            schema_provider=gateway,
            query_executor=gateway,
            table_source=StaticTableSource(),
            base_dir=self.tmp.name,
        )

    def test_run_batch_sync(self):
        results = run_batch_sync([make_config("db0"), make_config("db1")], self.generator, 1)
        self.assertEqual(len(results), 2)
        self.assertTrue(all(r.success for r in results))


if __name__ == '__main__':
    unittest.main()
