"""Markdown-dialect to HTML conversion."""

from .converter import MarkupConverter, convert_markup
from .inline import escape_html, render_inline

__all__ = ["MarkupConverter", "convert_markup", "escape_html", "render_inline"]
