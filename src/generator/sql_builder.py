from __future__ import annotations

from src.config import TableConfig


def build_query(table: TableConfig) -> str:
    """
    根据表配置生成查询语句。

    查询条件与排序规则按配置原样拼接，不做转义，配置文件需要由可信的人员维护。
    need_all_fields 为 True 时，必须先调用 reconcile 展开字段。

    Args:
        table (TableConfig): 已完成字段展开的表配置。

    Returns:
        str: 形如 "select id,name from users  order by id limit 0, 10" 的查询语句。

    Raises:
        ValueError: fields 为空时抛出。
    """
    if not table.fields:
        raise ValueError(f"表 '{table.table}' 未配置任何查询字段，无法生成查询语句。")

    parts = ["select "]
    # 查询的字段
    parts.append(",".join(f.name for f in table.fields))
    # 查询的表
    parts.append(f" from {table.table} ")
    # 查询条件
    if table.select_conditions:
        parts.append(" where " + " and ".join(f" ({condition}) " for condition in table.select_conditions))
    # 排序规则
    if table.order_by_conditions:
        parts.append(" order by " + ", ".join(table.order_by_conditions))
    # 返回数量
    parts.append(f" limit {table.limit.offset}, {table.limit.count}")

    return "".join(parts)
