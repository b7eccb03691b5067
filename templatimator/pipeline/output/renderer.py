"""Output rendering: from template, data and stylesheet text to a document.

This module is the orchestration layer above the three core components.
It parses the data text, expands the template, decides whether to run the
markup converter and wraps the result for the selected output format.

System Boundaries
-----------------
- Accepts only strings and a format selector; file access is limited to
  ``write_output``.
- Template failures never propagate: they become an inline
  ``Error rendering template: ...`` diagnostic in the output.
- Malformed data degrades to an empty context (see
  ``templatimator.pipeline.structured_data.loader``).

Example
-------
>>> from templatimator.pipeline.output.renderer import render_output
>>> render_output("# Hi {{ name }}", "name: Ada", "", "html")
'<div class="templatimator-output"><h1>Hi Ada</h1></div>'
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from templatimator.config import (
    EXPORT_TYPES,
    OUTPUT_WRAPPER_CLASS,
    RENDER_ERROR_PREFIX,
)
from templatimator.exceptions import AppError, UserInputError
from templatimator.pipeline.markup import convert_markup, escape_html
from templatimator.pipeline.structured_data import parse_data_input
from templatimator.pipeline.templating import render_template

logger = logging.getLogger(__name__)

_MARKUP_HINT_RE = re.compile(r"^# |^- |\n- |\n\d+\. ")


class OutputFormat(str, Enum):
    """Output format selectors understood by :func:`render_output`."""

    HTML = "html"
    PDF = "pdf"
    MARKDOWN = "markdown"
    CSV = "csv"
    TXT = "txt"

    @property
    def is_html(self) -> bool:
        """Return ``True`` for formats rendered through the HTML shell."""
        return self in (OutputFormat.HTML, OutputFormat.PDF)

    @classmethod
    def parse(cls, value: str | OutputFormat) -> OutputFormat:
        """Return the member for ``value``.

        Raises
        ------
        UserInputError
            If ``value`` is not a recognised format name.
        """
        try:
            return cls(value)
        except ValueError:
            raise UserInputError(
                f"Unknown output format: {value!r}",
                context={"allowed": [member.value for member in cls]},
            ) from None


@dataclass(frozen=True)
class RenderResult:
    """A rendered document in both its display and exportable forms.

    Attributes
    ----------
    display : str
        The HTML shown to the user: the wrapped HTML fragment for html/pdf,
        the escaped text inside ``<pre>`` for text formats.
    export : str
        The content written when exporting: the HTML for html/pdf, the raw
        rendered text for text formats.
    mime_type : str
        MIME type of ``export``.
    extension : str
        File extension (without dot) for ``export``.
    """

    display: str
    export: str
    mime_type: str
    extension: str


def should_convert_markup(template: str) -> bool:
    """Return whether template source looks like Markdown.

    The template is treated as Markdown when it starts with ``# `` or
    ``- `` or contains a line starting with ``- `` or ``1. ``.

    Examples
    --------
    >>> should_convert_markup("# Title")
    True
    >>> should_convert_markup("name, item")
    False
    """
    return bool(_MARKUP_HINT_RE.search(template))


def expand_template_safely(template: str, data_text: str) -> str:
    """Parse ``data_text`` and render ``template``, never raising.

    Any exception escaping the template engine is logged and replaced by a
    human-readable diagnostic string.
    """
    context = parse_data_input(data_text)
    try:
        return render_template(template, context)
    except AppError as exc:
        logger.warning("Template rejected: %s", exc)
        return RENDER_ERROR_PREFIX + exc.message
    except Exception as exc:
        logger.exception("Unexpected failure while rendering template")
        return RENDER_ERROR_PREFIX + str(exc)


def wrap_html(content_html: str, stylesheet: str) -> str:
    """Wrap an HTML fragment in the output container and optional style."""
    wrapped = f'<div class="{OUTPUT_WRAPPER_CLASS}">{content_html}</div>'
    if stylesheet:
        wrapped += f"<style>{stylesheet}</style>"
    return wrapped


def render_document(
    template: str,
    data_text: str,
    stylesheet: str,
    output_format: str | OutputFormat,
    *,
    markup: bool | None = None,
) -> RenderResult:
    """Render a document and return its display and export forms.

    Parameters
    ----------
    template : str
        Template source.
    data_text : str
        JSON or YAML-subset data text.
    stylesheet : str
        CSS appended in a ``<style>`` block for html/pdf; ignored otherwise.
    output_format : str or OutputFormat
        One of ``html``, ``pdf``, ``markdown``, ``csv``, ``txt``.
    markup : bool or None, optional
        Force (``True``) or skip (``False``) markup conversion for html/pdf.
        ``None`` applies :func:`should_convert_markup` to the template.

    Returns
    -------
    RenderResult
        Display and export forms with export metadata.

    Raises
    ------
    UserInputError
        If ``output_format`` is not recognised.
    """
    fmt = OutputFormat.parse(output_format)
    body = expand_template_safely(template, data_text)
    mime_type, extension = EXPORT_TYPES[fmt.value]
    if fmt.is_html:
        use_markup = should_convert_markup(template) if markup is None else markup
        content_html = convert_markup(body) if use_markup else body
        html = wrap_html(content_html, stylesheet)
        logger.debug("Rendered %s output (markup=%s)", fmt.value, use_markup)
        return RenderResult(html, html, mime_type, extension)
    display = f"<pre>{escape_html(body)}</pre>"
    logger.debug("Rendered %s output", fmt.value)
    return RenderResult(display, body, mime_type, extension)


def render_output(
    template: str,
    data_text: str,
    stylesheet: str,
    output_format: str | OutputFormat,
    *,
    markup: bool | None = None,
) -> str:
    """Render a document and return the string handed to the presentation layer.

    See :func:`render_document` for parameters.
    """
    return render_document(
        template, data_text, stylesheet, output_format, markup=markup
    ).display


def write_output(content: str, output_file: Path) -> bool:
    r"""Write rendered content to disk, creating parent directories.

    Parameters
    ----------
    content : str
        Text to write (UTF-8).
    output_file : Path
        Destination path.

    Returns
    -------
    bool
        ``True`` when the file was written; ``False`` on I/O failure, which
        is logged rather than raised.
    """
    try:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(content, encoding="utf-8")
    except OSError:
        logger.exception("Failed to write output to %s", output_file)
        return False
    return True
