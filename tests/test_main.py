import json
import os
import tempfile
import unittest
from unittest.mock import patch

import main


class TestMain(unittest.TestCase):
    """
    针对命令行入口参数处理的单元测试套件。
    """

    def setUp(self):
        patcher = patch.dict(os.environ, {"SQLINFOGEN_MAX_CONCURRENT_DATABASES": "3"}, clear=True)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.settings_file = os.path.join(self.tmp.name, "appsettings.json")
        with open(self.settings_file, "w", encoding="utf-8") as f:
            json.dump({"databases": [{"db": "demo", "read_file_name": "demo.json"}]}, f)

    def test_zero_concurrency_rejected(self):
        """
        测试：-j 0 不会退回到配置中的并发数量。
        """
        with patch.object(main, "run_batch_sync") as run_batch_sync:
            self.assertEqual(main.main(["-j", "0", self.settings_file]), 2)
        run_batch_sync.assert_not_called()

    def test_negative_concurrency_rejected(self):
        with patch.object(main, "run_batch_sync") as run_batch_sync:
            self.assertEqual(main.main(["--max-concurrent", "-1", self.settings_file]), 2)
        run_batch_sync.assert_not_called()

    def test_concurrency_from_settings(self):
        with patch.object(main, "run_batch_sync", return_value=[]) as run_batch_sync:
            self.assertEqual(main.main([self.settings_file]), 0)
        self.assertEqual(run_batch_sync.call_args.args[2], 3)

    def test_concurrency_from_argument(self):
        with patch.object(main, "run_batch_sync", return_value=[]) as run_batch_sync:
            self.assertEqual(main.main(["-j", "1", self.settings_file]), 0)
        self.assertEqual(run_batch_sync.call_args.args[2], 1)

    def test_invalid_settings_file(self):
        with open(self.settings_file, "w", encoding="utf-8") as f:
            f.write("{not json")
        self.assertEqual(main.main([self.settings_file]), 2)


if __name__ == '__main__':
    unittest.main()
