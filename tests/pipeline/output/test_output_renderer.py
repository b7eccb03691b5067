"""Tests for output rendering, wrapping and export metadata."""

from pathlib import Path

import pytest

from templatimator.config import DEFAULT_DATA_SETS, DEFAULT_TEMPLATES
from templatimator.exceptions import UserInputError
from templatimator.pipeline.output import renderer as out

WRAP_OPEN = '<div class="templatimator-output">'


def _default(collection, name):
    return next(entry["content"] for entry in collection if entry["name"] == name)


def test_markdown_template_is_converted_and_wrapped():
    """A heading-first template goes through the markup converter."""
    html = out.render_output("# Hi {{ name }}", "name: Ada", "", "html")
    assert html == WRAP_OPEN + "<h1>Hi Ada</h1></div>"


def test_stylesheet_is_appended_after_wrapper():
    """CSS follows the output container in a style block."""
    html = out.render_output("plain", "", "p { color: red; }", "html")
    assert html == WRAP_OPEN + "plain</div><style>p { color: red; }</style>"


def test_default_markdown_list_template():
    """The bundled list template renders into a heading and a list."""
    html = out.render_output(
        _default(DEFAULT_TEMPLATES, "Markdown List"),
        _default(DEFAULT_DATA_SETS, "Example"),
        "",
        "html",
    )
    assert html == (
        WRAP_OPEN
        + "<h1>Shopping List for Chris</h1>"
        + "<ul><li>apple</li></ul><ul><li>banana</li></ul><ul><li>carrot</li></ul>"
        + "</div>"
    )


def test_html_template_passes_through_unconverted():
    """Templates without markdown cues are emitted as rendered HTML."""
    html = out.render_output(
        "<p>{{ name }}</p>\n<i>{{ role }}</i>", '{"name": "Ada", "role": "dev"}', "", "html"
    )
    assert html == WRAP_OPEN + "<p>Ada</p>\n<i>dev</i></div>"


def test_pdf_matches_html():
    """PDF output is the same HTML as the html format."""
    args = ("# T\n- {{ a }}", "a: 1", "b{}")
    assert out.render_output(*args, "pdf") == out.render_output(*args, "html")


def test_csv_output_is_escaped_pre_for_display():
    """Text formats are displayed escaped inside pre."""
    result = out.render_document(
        _default(DEFAULT_TEMPLATES, "CSV Table"),
        '{"name": "Chris", "items": ["apple", "banana"]}',
        "ignored { }",
        "csv",
    )
    body = "name, item\n\nChris, apple\n\nChris, banana\n"
    assert result.display == f"<pre>{body}</pre>"
    assert result.export == body
    assert (result.mime_type, result.extension) == ("text/csv", "csv")


def test_text_format_escapes_markup_characters():
    """Angle brackets are escaped in the display form only."""
    result = out.render_document("<b>{{ x }}</b>", "x: a&b", "", "txt")
    assert result.display == "<pre>&lt;b&gt;a&amp;b&lt;/b&gt;</pre>"
    assert result.export == "<b>a&b</b>"


def test_markdown_format_is_not_converted():
    """The markdown format keeps markdown source as text."""
    result = out.render_document("# {{ t }}", "t: Hi", "", "markdown")
    assert result.export == "# Hi"
    assert result.extension == "md"


def test_template_error_becomes_inline_diagnostic():
    """Ill-formed templates never raise out of the renderer."""
    html = out.render_output("before {% endfor %}", "", "", "html")
    assert html.startswith(WRAP_OPEN + "Error rendering template: ")
    assert "{% endfor %}" in html


def test_malformed_data_renders_with_empty_context():
    """Bad JSON falls back to an empty context."""
    assert out.render_output("[{{ a }}]", '{"a": ', "", "txt") == "<pre>[]</pre>"


@pytest.mark.parametrize(
    ("template", "expected"),
    [
        ("# Title", True),
        ("- item", True),
        ("intro\n- item", True),
        ("intro\n12. item", True),
        ("#Title", False),
        ("name, item", False),
        ("<table>\n  - nope</table>", False),
    ],
)
def test_should_convert_markup(template, expected):
    """The markdown heuristic looks at the template source."""
    assert out.should_convert_markup(template) is expected


def test_markup_override_flag():
    """An explicit flag wins over the heuristic."""
    assert out.render_output("Title", "", "", "html", markup=True) == WRAP_OPEN + "<p>Title</p></div>"
    assert out.render_output("# Title", "", "", "html", markup=False) == WRAP_OPEN + "# Title</div>"


def test_unknown_format_rejected():
    """Unknown format selectors raise a user input error."""
    with pytest.raises(UserInputError) as info:
        out.render_output("x", "", "", "docx")
    assert "docx" in info.value.message


def test_output_format_is_html():
    """Only html and pdf use the HTML shell."""
    assert out.OutputFormat.parse("pdf").is_html
    assert not out.OutputFormat.parse(out.OutputFormat.TXT).is_html


def test_write_output_creates_parents(tmp_path: Path):
    """Nested destinations are created on demand."""
    target = tmp_path / "a" / "b" / "doc.html"
    assert out.write_output("<p>x</p>", target) is True
    assert target.read_text(encoding="utf-8") == "<p>x</p>"


def test_write_output_reports_failure(tmp_path: Path):
    """I/O errors are logged and reported as False."""
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    assert out.write_output("data", blocker / "child.txt") is False


def test_deeply_nested_json_data_still_renders():
    """Data the decoder cannot handle never aborts a render."""
    data = '{"a": ' + "[" * 100000 + "]" * 100000 + "}"
    assert out.render_output("x", data, "", "html") == WRAP_OPEN + "x</div>"
