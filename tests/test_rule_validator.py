import unittest

from src.config import DatabaseConfig, FieldConfig, FileSuffix, LimitConfig, SchemaFieldInfo, TableConfig
from src.services import ViolationCode, validate_database, validate_table


def make_schema(*names):
    return {name: SchemaFieldInfo(field=name, order=i + 1) for i, name in enumerate(names)}


class TestValidateDatabase(unittest.TestCase):
    """
    针对 validate_database 的单元测试套件。
    """

    def test_blank_connection_string(self):
        """
        测试：连接字符串为空或只有空白时返回 EMPTY_CONNECTION_STRING。
        """
        for value in ("", "   "):
            cfg = DatabaseConfig(db="demo", connection_string=value, output_file_name_suffix="md")
            violation = validate_database(cfg)
            self.assertIsNotNone(violation)
            self.assertEqual(violation.code, ViolationCode.EMPTY_CONNECTION_STRING)
            self.assertIsNone(cfg.output_suffix_type)

    def test_unsupported_suffix(self):
        """
        测试：不支持的后缀返回 UNSUPPORTED_SUFFIX，错误信息中包含原始后缀。
        """
        cfg = DatabaseConfig(db="demo", connection_string="Server=x;", output_file_name_suffix="docx")
        violation = validate_database(cfg)
        self.assertEqual(violation.code, ViolationCode.UNSUPPORTED_SUFFIX)
        self.assertIn("[docx]", str(violation))
        self.assertIsNone(cfg.output_suffix_type)

    def test_success_sets_suffix_type(self):
        """
        测试：校验通过时写入解析后的文件类型，后缀不区分大小写。
        """
        cfg = DatabaseConfig(db="demo", connection_string="Server=x;", output_file_name_suffix=" MD ")
        self.assertIsNone(validate_database(cfg))
        self.assertEqual(cfg.output_suffix_type, FileSuffix.MD)


class TestValidateTable(unittest.TestCase):
    """
    针对 validate_table 的单元测试套件。
    """

    def setUp(self):
        self.schema = make_schema("id", "name", "age")

    def test_empty_table_name(self):
        violation = validate_table(TableConfig(table=" ", fields=[FieldConfig(name="id")]), self.schema)
        self.assertEqual(violation.code, ViolationCode.EMPTY_TABLE_NAME)

    def test_missing_fields_without_all_flag(self):
        """
        测试：need_all_fields 为 False 且 fields 为空或 None 时返回 MISSING_FIELDS_WITHOUT_ALL_FLAG。
        """
        for fields in (None, []):
            violation = validate_table(TableConfig(table="t", fields=fields), self.schema)
            self.assertEqual(violation.code, ViolationCode.MISSING_FIELDS_WITHOUT_ALL_FLAG)

    def test_unknown_fields_lists_every_missing_name(self):
        """
        测试：返回所有不存在的字段。
        """
        table = TableConfig(
            table="t",
            fields=[FieldConfig(name="id"), FieldConfig(name="nick"), FieldConfig(name="email")],
        )
        violation = validate_table(table, self.schema)
        self.assertEqual(violation.code, ViolationCode.UNKNOWN_FIELDS)
        self.assertEqual(set(violation.fields), {"nick", "email"})
        self.assertIn("nick,email", str(violation))

    def test_unknown_fields_ignored_when_need_all_fields(self):
        """
        测试：need_all_fields 为 True 时不检查字段是否存在。
        """
        table = TableConfig(table="t", fields=[FieldConfig(name="nick", alias="昵称")], need_all_fields=True)
        self.assertIsNone(validate_table(table, self.schema))

    def test_invalid_limit(self):
        """
        测试：offset < 0 或 count <= 0 时返回 INVALID_LIMIT。
        """
        for offset, count in ((-1, 10), (0, 0), (0, -3), (-5, -5)):
            table = TableConfig(table="t", fields=[FieldConfig(name="id")], limit=LimitConfig(offset=offset, count=count))
            violation = validate_table(table, self.schema)
            self.assertEqual(violation.code, ViolationCode.INVALID_LIMIT, (offset, count))

    def test_checks_short_circuit_in_order(self):
        """
        测试：字段错误先于 limit 错误返回。
        """
        table = TableConfig(table="t", fields=[FieldConfig(name="nick")], limit=LimitConfig(offset=-1, count=0))
        self.assertEqual(validate_table(table, self.schema).code, ViolationCode.UNKNOWN_FIELDS)

    def test_valid_table(self):
        table = TableConfig(table="t", fields=[FieldConfig(name="id"), FieldConfig(name="age")])
        self.assertIsNone(validate_table(table, self.schema))


if __name__ == '__main__':
    unittest.main()
