from .sql_builder import build_query
from .renderers import DocumentRenderer, MarkdownRenderer, get_renderer, render_content

__all__ = [
    "build_query",
    "DocumentRenderer",
    "MarkdownRenderer",
    "get_renderer",
    "render_content",
]
