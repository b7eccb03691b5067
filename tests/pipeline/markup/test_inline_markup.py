"""Tests for inline markup expansion and HTML escaping."""

import pytest

from templatimator.pipeline.markup.inline import escape_html, render_inline


def test_escape_html_basic():
    """Ampersands and angle brackets are escaped, ampersands first."""
    assert escape_html("a < b && c > d") == "a &lt; b &amp;&amp; c &gt; d"


def test_escape_html_preserves_existing_entities_when_asked():
    """Idempotent mode leaves entities alone but escapes bare ampersands."""
    escaped = escape_html("x &lt; y & z &#39; &#x27;", preserve_entities=True)
    assert escaped == "x &lt; y &amp; z &#39; &#x27;"
    assert escape_html(escaped, preserve_entities=True) == escaped


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("***both***", "<b><i>both</i></b>"),
        ("**bold**", "<b>bold</b>"),
        ("*italic*", "<i>italic</i>"),
        ("a **b** and *c*", "a <b>b</b> and <i>c</i>"),
    ],
)
def test_emphasis(text, expected):
    """Longest emphasis marker wins."""
    assert render_inline(text) == expected


def test_link_url_inserted_verbatim():
    """Links keep their URL untouched."""
    assert (
        render_inline("see [the docs](https://example.com/a?b=1)")
        == 'see <a href="https://example.com/a?b=1">the docs</a>'
    )


def test_code_span_is_shielded_from_emphasis():
    """Markers inside a code span stay literal."""
    assert render_inline("`*not* [x](y)` *yes*") == "<code>*not* [x](y)</code> <i>yes</i>"


def test_code_span_does_not_double_escape():
    """Already-escaped text inside a code span is not escaped again."""
    assert render_inline("`a &lt; b`") == "<code>a &lt; b</code>"


def test_unbalanced_markers_are_literal():
    """A lone asterisk or backtick is left as is."""
    assert render_inline("2 * 3 and `tick") == "2 * 3 and `tick"
