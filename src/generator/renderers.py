from __future__ import annotations

from typing import Any, Protocol

from src.config import FileSuffix, QueryResult, SchemaFieldInfo, TableConfig


class DocumentRenderer(Protocol):
    """将表配置、查询结果与表结构转换为文档片段。"""

    def render(self, table: TableConfig, result: QueryResult, schema: dict[str, SchemaFieldInfo]) -> str:
        ...


def _format_cell(value: Any) -> str:
    """转换单元格内容，避免破坏 Markdown 表格结构。"""
    if value is None:
        return ""
    if isinstance(value, (bytes, bytearray)):
        text = value.hex()
    else:
        text = str(value)
    return text.replace("\\", "\\\\").replace("|", "\\|").replace("\r\n", "<br>").replace("\n", "<br>")


def _table_row(cells: list[str]) -> str:
    return "| " + " | ".join(cells) + " |\n"


class MarkdownRenderer:
    """
    Markdown 文档生成。

    每张表输出一个二级标题、一个字段说明表格以及一个数据样例表格。
    """

    def render(self, table: TableConfig, result: QueryResult, schema: dict[str, SchemaFieldInfo]) -> str:
        fields = table.fields or []
        lines: list[str] = [f"## {table.table}\n", "\n"]

        # 字段说明
        lines.append(_table_row(["字段", "显示名", "类型", "允许为空", "说明"]))
        lines.append(_table_row(["---"] * 5))
        for f in fields:
            info = schema.get(f.name)
            lines.append(_table_row([
                _format_cell(f.name),
                _format_cell(f.alias or f.name),
                _format_cell(info.column_type or info.data_type) if info else "",
                ("是" if info.is_nullable else "否") if info else "",
                _format_cell(info.comment) if info else "",
            ]))
        lines.append("\n")

        # 数据样例，表头优先使用别名
        headers = [_format_cell(f.alias or f.name) for f in fields] or [_format_cell(c) for c in result.columns]
        lines.append(_table_row(headers))
        lines.append(_table_row(["---"] * len(headers)))
        for row in result.rows:
            lines.append(_table_row([_format_cell(v) for v in row]))
        lines.append("\n")

        return "".join(lines)


_RENDERERS: dict[FileSuffix, DocumentRenderer] = {
    FileSuffix.MD: MarkdownRenderer(),
}


def get_renderer(suffix_type: FileSuffix | None) -> DocumentRenderer | None:
    """根据输出文件类型获取对应的文档生成器。"""
    if suffix_type is None:
        return None
    return _RENDERERS.get(suffix_type)


def render_content(
    suffix_type: FileSuffix | None,
    table: TableConfig,
    result: QueryResult,
    schema: dict[str, SchemaFieldInfo],
) -> str:
    """
    生成该表的文档内容；没有注册文档生成器的文件类型返回空字符串。
    """
    renderer = get_renderer(suffix_type)
    if renderer is None:
        return ""
    return renderer.render(table, result, schema)
