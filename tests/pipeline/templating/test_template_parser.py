"""Tests for the template block-tree parser."""

import pytest

from templatimator.exceptions import TemplateSyntaxError
from templatimator.pipeline.templating.parser import (
    ForNode,
    IfNode,
    TextNode,
    VariableNode,
    iter_paths,
    parse_template,
)


def test_plain_text_is_single_node():
    """Text without markers becomes one text node."""
    assert parse_template("just text") == [TextNode("just text")]


def test_empty_template_has_no_nodes():
    """An empty template parses to an empty list."""
    assert parse_template("") == []


def test_variable_whitespace_is_optional():
    """Both spaced and compact variable markers are recognised."""
    assert parse_template("{{a}}{{  b.c  }}") == [VariableNode("a"), VariableNode("b.c")]


def test_nested_blocks_build_tree():
    """Loops and conditionals nest at the matching depth."""
    nodes = parse_template(
        "{% for row in rows %}{% if row.on %}{% for c in row.cells %}"
        "{{ c }}{% endfor %}{% endif %}{% endfor %}"
    )
    assert nodes == [
        ForNode(
            "row",
            "rows",
            (
                IfNode(
                    "row.on",
                    (ForNode("c", "row.cells", (VariableNode("c"),)),),
                ),
            ),
        )
    ]


def test_unknown_markers_are_literal_text():
    """Unsupported tags and expressions are kept verbatim."""
    text = "{% raw %}{{ a + b }}{% else %}"
    assert parse_template(text) == [TextNode(text)]


def test_unmatched_endfor_raises():
    """A closer without an opener is reported with its offset."""
    with pytest.raises(TemplateSyntaxError) as info:
        parse_template("abc{% endfor %}")
    assert info.value.position == 3
    assert info.value.marker == "{% endfor %}"
    assert info.value.code == "TEMPLATE_SYNTAX_ERROR"


def test_unclosed_block_raises():
    """A block left open at end of input is reported at its opener."""
    with pytest.raises(TemplateSyntaxError) as info:
        parse_template("x{% if a %}never closed")
    assert info.value.position == 1
    assert "never closed" in info.value.message


def test_crossed_blocks_raise():
    """A for opened inside an if and closed outside it is rejected."""
    with pytest.raises(TemplateSyntaxError) as info:
        parse_template("{% if a %}{% for x in xs %}{% endif %}{% endfor %}")
    assert info.value.marker == "{% endif %}"


def test_iter_paths_walks_depth_first():
    """Paths are reported in source order including block headers."""
    nodes = parse_template("{{ a }}{% for x in xs %}{% if x.ok %}{{ x.v }}{% endif %}{% endfor %}")
    assert iter_paths(nodes) == ["a", "xs", "x.ok", "x.v"]
