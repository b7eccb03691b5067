"""Inline markup expansion and HTML escaping.

Inline rules apply to text inside a single block (paragraph, heading, list
item, blockquote line, table cell), in this order:

- backtick code spans become ``<code>`` and are shielded from the rules below;
- ``***x***`` -> ``<b><i>x</i></b>``, ``**x**`` -> ``<b>x</b>``,
  ``*x*`` -> ``<i>x</i>`` (longest marker first);
- ``[label](url)`` -> ``<a href="url">label</a>``; the URL is inserted
  verbatim.
"""

import re

_BARE_AMPERSAND_RE = re.compile(r"&(?!(?:amp|lt|gt|quot|#\d+|#x[0-9a-fA-F]+);)")
_CODE_SPAN_RE = re.compile(r"`([^`]+)`")
_BOLD_ITALIC_RE = re.compile(r"\*\*\*([^*]+)\*\*\*")
_BOLD_RE = re.compile(r"\*\*([^*]+)\*\*")
_ITALIC_RE = re.compile(r"\*([^*]+)\*")
_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")


def escape_html(text: str, *, preserve_entities: bool = False) -> str:
    """Escape ``&``, ``<`` and ``>`` for safe insertion into HTML.

    Parameters
    ----------
    text : str
        Text to escape.
    preserve_entities : bool, optional
        When ``True`` an ``&`` that already starts a character entity is
        left alone, which makes the escape idempotent.

    Returns
    -------
    str
        Escaped text.

    Examples
    --------
    >>> escape_html("a < b & c")
    'a &lt; b &amp; c'
    >>> escape_html("&lt;tag&gt; & more", preserve_entities=True)
    '&lt;tag&gt; &amp; more'
    """
    if preserve_entities:
        text = _BARE_AMPERSAND_RE.sub("&amp;", text)
    else:
        text = text.replace("&", "&amp;")
    return text.replace("<", "&lt;").replace(">", "&gt;")


def _render_emphasis_and_links(text: str) -> str:
    text = _BOLD_ITALIC_RE.sub(r"<b><i>\1</i></b>", text)
    text = _BOLD_RE.sub(r"<b>\1</b>", text)
    text = _ITALIC_RE.sub(r"<i>\1</i>", text)
    return _LINK_RE.sub(r'<a href="\2">\1</a>', text)


def render_inline(text: str) -> str:
    """Expand inline markup in already-escaped block text.

    Examples
    --------
    >>> render_inline("Use `**x**` for **bold**")
    'Use <code>**x**</code> for <b>bold</b>'
    >>> render_inline("[Docs](https://example.com)")
    '<a href="https://example.com">Docs</a>'
    """
    # split() with one group alternates plain text and code span interiors.
    pieces = _CODE_SPAN_RE.split(text)
    rendered: list[str] = []
    for index, piece in enumerate(pieces):
        if index % 2:
            rendered.append(
                "<code>" + escape_html(piece, preserve_entities=True) + "</code>"
            )
        else:
            rendered.append(_render_emphasis_and_links(piece))
    return "".join(rendered)
