"""Template rendering for data-driven documents.

This module expands a template against a data context. Its sole
responsibility is text expansion: it performs no I/O beyond the optional
``load_template`` helper and never interprets Markdown or HTML.

Expansion runs as an explicit three-pass pipeline over the block tree
produced by :func:`~templatimator.pipeline.templating.parser.parse_template`:

1. loops: every ``for`` block is replaced by the rendering of its body once
   per item, each iteration in a derived context that binds the loop
   variable and ``loop.index`` / ``loop.index1``;
2. conditionals: every ``if`` block is kept (recursively expanded) when its
   condition is truthy and dropped otherwise;
3. variables: every ``{{ path }}`` becomes the display string of its value.

Unresolvable paths render as the empty string. Expanded loop output is
final text, so data values are never re-read as template markers.

Examples
--------
>>> from templatimator.pipeline.templating.engine import render_template
>>> render_template(
...     "{% for x in xs %}{{ loop.index1 }}.{{ x }} {% endfor %}", {"xs": ["a", "b"]}
... )
'1.a 2.b '
"""

from __future__ import annotations

import logging
from pathlib import Path

from .parser import (
    ForNode,
    IfNode,
    Node,
    TextNode,
    VariableNode,
    iter_paths,
    parse_template,
)
from .values import Context, Value, is_truthy, resolve_path, to_display_string

logger = logging.getLogger(__name__)


def load_template(path: Path) -> str:
    """Read the contents of a template file as a string.

    Parameters
    ----------
    path : Path
        Path to the template file.

    Returns
    -------
    str
        Template content.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    OSError
        If the file cannot be read due to permissions or disk errors.
    """
    with path.open("r", encoding="utf-8") as fh:
        return fh.read()


def extract_placeholders_from_template(content: str) -> list[str]:
    """Return a sorted list of unique data paths referenced by the template.

    Variable paths, loop iterables and conditions are all included; paths
    bound by a loop (``item``, ``loop.index1``) are reported as written.

    Raises
    ------
    TemplateSyntaxError
        If the template's block markers are unbalanced.
    """
    return sorted(set(iter_paths(parse_template(content))))


def _loop_context(
    context: Context, var_name: str, item: Value, index: int
) -> dict[str, Value]:
    derived: dict[str, Value] = dict(context)
    derived[var_name] = item
    derived["loop"] = {"index": index, "index1": index + 1}
    return derived


def _expand_loops(
    nodes: tuple[Node, ...] | list[Node], context: Context
) -> list[Node]:
    expanded: list[Node] = []
    for node in nodes:
        if isinstance(node, ForNode):
            items = resolve_path(node.iterable_path, context)
            if not isinstance(items, (list, tuple)):
                logger.debug("Loop over non-sequence %r skipped", node.iterable_path)
                continue
            for index, item in enumerate(items):
                iteration = _loop_context(context, node.var_name, item, index)
                expanded.append(TextNode(_render_nodes(node.body, iteration)))
        elif isinstance(node, IfNode):
            expanded.append(
                IfNode(node.condition_path, tuple(_expand_loops(node.body, context)))
            )
        else:
            expanded.append(node)
    return expanded


def _expand_conditionals(
    nodes: tuple[Node, ...] | list[Node], context: Context
) -> list[Node]:
    expanded: list[Node] = []
    for node in nodes:
        if isinstance(node, IfNode):
            if is_truthy(resolve_path(node.condition_path, context)):
                expanded.extend(_expand_conditionals(node.body, context))
        else:
            expanded.append(node)
    return expanded


def _substitute_variables(nodes: list[Node], context: Context) -> str:
    parts: list[str] = []
    for node in nodes:
        if isinstance(node, VariableNode):
            parts.append(to_display_string(resolve_path(node.path, context)))
        elif isinstance(node, TextNode):
            parts.append(node.text)
    return "".join(parts)


def _render_nodes(nodes: tuple[Node, ...] | list[Node], context: Context) -> str:
    looped = _expand_loops(nodes, context)
    kept = _expand_conditionals(looped, context)
    return _substitute_variables(kept, context)


def render_template(template: str, context: Context) -> str:
    """Render ``template`` against ``context``.

    Parameters
    ----------
    template : str
        Template text containing ``{{ }}`` variables and ``for``/``if`` blocks.
    context : Mapping[str, Value]
        Data values; never mutated.

    Returns
    -------
    str
        The expanded text. A template without markers is returned unchanged.

    Raises
    ------
    TemplateSyntaxError
        If block markers are unbalanced or crossed.

    Examples
    --------
    >>> render_template("Hello {{ user.name }}!", {"user": {"name": "Chris"}})
    'Hello Chris!'
    >>> render_template("{% if missing %}hidden{% endif %}shown", {})
    'shown'
    """
    nodes = parse_template(template)
    return _render_nodes(nodes, context)
