"""Output orchestration: format selection, markup decision and wrapping."""

from .renderer import (
    OutputFormat,
    RenderResult,
    expand_template_safely,
    render_document,
    render_output,
    should_convert_markup,
    wrap_html,
    write_output,
)

__all__ = [
    "OutputFormat",
    "RenderResult",
    "expand_template_safely",
    "render_document",
    "render_output",
    "should_convert_markup",
    "wrap_html",
    "write_output",
]
