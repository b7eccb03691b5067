"""Templatimator: render data documents through templates into HTML or text.

The public surface is the three core transformations plus the orchestrator
that chains them:

- ``parse_structured_data`` / ``parse_data_input``: data text to a mapping;
- ``render_template``: template expansion against that mapping;
- ``convert_markup``: Markdown-dialect text to an HTML fragment;
- ``render_output``: the full template + data + stylesheet pipeline.
"""

from templatimator.pipeline.markup import convert_markup
from templatimator.pipeline.output import OutputFormat, render_document, render_output
from templatimator.pipeline.structured_data import (
    parse_data_input,
    parse_structured_data,
)
from templatimator.pipeline.templating import render_template

__all__ = [
    "OutputFormat",
    "convert_markup",
    "parse_data_input",
    "parse_structured_data",
    "render_document",
    "render_output",
    "render_template",
]

__version__ = "1.0.0"
