"""Line-oriented Markdown-dialect to HTML conversion.

The converter makes a single pass over the input lines and keeps at most
one open block (code fence, table, blockquote or list) besides the
paragraph buffer. Each line is classified with this precedence, earlier
rules winning:

1. fence delimiter (line starting with three backticks) toggles code mode;
   inside a fence lines are emitted escaped and without inline markup;
2. table row (``| ... |``); separator rows of dashes and colons are
   swallowed and the first row with values becomes the header;
3. blockquote line (``> ``), flowing into one ``<blockquote>``;
4. list item (``-``/``*``/``+`` or ``1.`` followed by a space);
5. heading (one to six ``#`` then whitespace);
6. horizontal rule (three or more ``-``);
7. blank line, which closes every open block;
8. anything else accumulates into a paragraph.

The whole input is HTML-escaped once before classification, so the
blockquote marker is matched in its escaped form. Whitespace between a
closing ``>`` and the next ``<`` is removed from the final document.

Examples
--------
>>> convert_markup("# Title")
'<h1>Title</h1>'
>>> convert_markup("- a\\n- b")
'<ul><li>a</li><li>b</li></ul>'
"""

from __future__ import annotations

import logging
import re

from .inline import escape_html, render_inline

logger = logging.getLogger(__name__)

_LINE_SPLIT_RE = re.compile(r"\r?\n")
_FENCE_RE = re.compile(r"^```")
_TABLE_ROW_RE = re.compile(r"^\|(.+)\|$")
_TABLE_SEPARATOR_RE = re.compile(r"^\|(?=.*-)[\s:|-]+\|$")
_BLOCKQUOTE_MARKER = "&gt; "
_UNORDERED_ITEM_RE = re.compile(r"^\s*[-*+] ")
_ORDERED_ITEM_RE = re.compile(r"^\s*\d+\. ")
_HEADING_RE = re.compile(r"^(#{1,6})\s+(.*)$")
_HORIZONTAL_RULE_RE = re.compile(r"^---+$")
_BLANK_RE = re.compile(r"^\s*$")
_INTER_TAG_WHITESPACE_RE = re.compile(r">\s+<")


def _split_cells(row: str) -> list[str]:
    return [cell.strip() for cell in row.split("|") if cell.strip()]


class MarkupConverter:
    """Single-use state machine turning escaped dialect lines into HTML.

    Use :func:`convert_markup` rather than instantiating this directly.
    """

    def __init__(self) -> None:
        self._html: list[str] = []
        self._paragraph: list[str] = []
        self._list_tag: str | None = None
        self._in_blockquote = False
        self._in_fence = False
        self._in_table = False
        self._table_header: str | None = None
        self._table_rows: list[str] = []

    # -- flushing -----------------------------------------------------

    def _flush_paragraph(self) -> None:
        if self._paragraph:
            text = render_inline(" ".join(self._paragraph))
            self._html.append(f"<p>{text}</p>")
            self._paragraph = []

    def _flush_list(self) -> None:
        if self._list_tag is not None:
            self._html.append(f"</{self._list_tag}>")
            self._list_tag = None

    def _flush_blockquote(self) -> None:
        if self._in_blockquote:
            self._html.append("</blockquote>")
            self._in_blockquote = False

    def _flush_table(self) -> None:
        if not self._in_table:
            return
        if self._table_header is not None:
            parts = ["<table><thead><tr>"]
            parts.extend(
                f"<th>{render_inline(cell)}</th>"
                for cell in _split_cells(self._table_header)
            )
            parts.append("</tr></thead><tbody>")
            for row in self._table_rows:
                parts.append("<tr>")
                parts.extend(
                    f"<td>{render_inline(cell)}</td>" for cell in _split_cells(row)
                )
                parts.append("</tr>")
            parts.append("</tbody></table>")
            self._html.append("".join(parts))
        self._in_table = False
        self._table_header = None
        self._table_rows = []

    def _flush_all(self) -> None:
        self._flush_paragraph()
        self._flush_list()
        self._flush_blockquote()
        self._flush_table()

    # -- line handlers --------------------------------------------------

    def _handle_fence(self) -> None:
        if self._in_fence:
            self._html.append("</code></pre>")
            self._in_fence = False
        else:
            self._flush_all()
            self._html.append("<pre><code>")
            self._in_fence = True

    def _handle_table_row(self, line: str) -> None:
        if not self._in_table:
            self._flush_paragraph()
            self._flush_list()
            self._flush_blockquote()
            self._in_table = True
        if _TABLE_SEPARATOR_RE.match(line):
            return
        if self._table_header is None:
            self._table_header = line
        else:
            self._table_rows.append(line)

    def _handle_blockquote(self, line: str) -> None:
        self._flush_paragraph()
        self._flush_list()
        if not self._in_blockquote:
            self._html.append("<blockquote>")
            self._in_blockquote = True
        self._html.append(render_inline(line[len(_BLOCKQUOTE_MARKER) :]) + " ")

    def _handle_list_item(self, tag: str, text: str) -> None:
        self._flush_paragraph()
        if self._list_tag != tag:
            self._flush_list()
            self._html.append(f"<{tag}>")
            self._list_tag = tag
        self._html.append(f"<li>{render_inline(text)}</li>")

    def feed(self, line: str) -> None:
        """Classify one escaped line and update the output."""
        if _FENCE_RE.match(line):
            self._handle_fence()
            return
        if self._in_fence:
            self._html.append(escape_html(line, preserve_entities=True) + "\n")
            return

        if _TABLE_ROW_RE.match(line):
            self._handle_table_row(line)
            return
        self._flush_table()

        if line.startswith(_BLOCKQUOTE_MARKER):
            self._handle_blockquote(line)
            return
        self._flush_blockquote()

        item = _UNORDERED_ITEM_RE.match(line)
        if item:
            self._handle_list_item("ul", line[item.end() :])
            return
        item = _ORDERED_ITEM_RE.match(line)
        if item:
            self._handle_list_item("ol", line[item.end() :])
            return

        heading = _HEADING_RE.match(line)
        if heading:
            self._flush_paragraph()
            self._flush_list()
            level = len(heading.group(1))
            self._html.append(f"<h{level}>{render_inline(heading.group(2))}</h{level}>")
            return

        if _HORIZONTAL_RULE_RE.match(line):
            self._flush_paragraph()
            self._flush_list()
            self._html.append("<hr />")
            return

        if _BLANK_RE.match(line):
            self._flush_all()
            return

        self._flush_list()
        self._paragraph.append(line.strip())

    def finish(self) -> str:
        """Close every open block and return the assembled HTML fragment."""
        self._flush_all()
        if self._in_fence:
            logger.debug("Closing unterminated code fence at end of input")
            self._html.append("</code></pre>")
            self._in_fence = False
        return _INTER_TAG_WHITESPACE_RE.sub("><", "".join(self._html))


def convert_markup(text: str) -> str:
    """Convert dialect text to an HTML fragment.

    Parameters
    ----------
    text : str
        Markdown-dialect source.

    Returns
    -------
    str
        HTML fragment without a document shell; ``""`` for empty input.
    """
    converter = MarkupConverter()
    for line in _LINE_SPLIT_RE.split(escape_html(text)):
        converter.feed(line)
    return converter.finish()
