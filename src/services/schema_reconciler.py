from __future__ import annotations

from src.config import FieldConfig, SchemaFieldInfo, TableConfig


def reconcile(table: TableConfig, schema: dict[str, SchemaFieldInfo]) -> TableConfig:
    """
    展开 need_all_fields 配置。

    need_all_fields 为 True 时，按表结构中的字段顺序生成全部字段，
    已经在 fields 中配置过的字段保留原别名；否则原样返回。

    Returns:
        TableConfig: 新的表配置，不修改传入的对象。
    """
    if not table.need_all_fields:
        return table

    # 同名字段只取第一个配置的别名
    aliases: dict[str, str | None] = {}
    for f in table.fields or []:
        aliases.setdefault(f.name, f.alias)

    fields = [
        FieldConfig(name=info.field, alias=aliases.get(info.field))
        for info in sorted(schema.values(), key=lambda info: info.order)
    ]
    return table.model_copy(update={"fields": fields})
