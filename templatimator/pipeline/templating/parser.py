"""Block-tree parser for the template dialect.

The dialect has five markers::

    {{ user.name }}                 variable
    {% for item in items %} ... {% endfor %}
    {% if user.active %} ... {% endif %}

Markers are scanned left to right in a single pass and assembled into a
tree with an explicit stack, so nested blocks of either kind close at the
matching depth. Unbalanced or crossed markers raise
:class:`~templatimator.exceptions.TemplateSyntaxError`. Any other ``{% %}``
or ``{{ }}`` text is kept as literal text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Union

from templatimator.exceptions import TemplateSyntaxError

_MARKER_RE = re.compile(
    r"\{%\s*for\s+(?P<for_var>\w+)\s+in\s+(?P<for_path>[\w.]+)\s*%\}"
    r"|(?P<endfor>\{%\s*endfor\s*%\})"
    r"|\{%\s*if\s+(?P<if_path>[\w.]+)\s*%\}"
    r"|(?P<endif>\{%\s*endif\s*%\})"
    r"|\{\{\s*(?P<var_path>[\w.]+)\s*\}\}"
)


@dataclass(frozen=True)
class TextNode:
    """Literal template text, emitted unchanged."""

    text: str


@dataclass(frozen=True)
class VariableNode:
    """A ``{{ path }}`` substitution."""

    path: str


@dataclass(frozen=True)
class ForNode:
    """A ``{% for var_name in iterable_path %}`` block."""

    var_name: str
    iterable_path: str
    body: tuple[Node, ...] = ()


@dataclass(frozen=True)
class IfNode:
    """A ``{% if condition_path %}`` block."""

    condition_path: str
    body: tuple[Node, ...] = ()


Node = Union[TextNode, VariableNode, ForNode, IfNode]


@dataclass
class _OpenBlock:
    kind: str
    marker: str
    position: int
    header: tuple[str, ...]
    children: list[Node] = field(default_factory=list)

    def close(self) -> Node:
        if self.kind == "for":
            var_name, iterable_path = self.header
            return ForNode(var_name, iterable_path, tuple(self.children))
        return IfNode(self.header[0], tuple(self.children))


def parse_template(template: str) -> list[Node]:
    """Parse ``template`` into a list of top-level nodes.

    Parameters
    ----------
    template : str
        Template source text.

    Returns
    -------
    list[Node]
        Top-level nodes in source order; adjacent literal text is kept in a
        single ``TextNode``.

    Raises
    ------
    TemplateSyntaxError
        On a closing marker without a matching opener of the same kind, or
        on a block left open at the end of the template.

    Examples
    --------
    >>> parse_template("Hi {{ name }}!")
    [TextNode(text='Hi '), VariableNode(path='name'), TextNode(text='!')]
    """
    root: list[Node] = []
    stack: list[_OpenBlock] = []
    cursor = 0

    def current() -> list[Node]:
        return stack[-1].children if stack else root

    for match in _MARKER_RE.finditer(template):
        if match.start() > cursor:
            current().append(TextNode(template[cursor : match.start()]))
        cursor = match.end()
        marker = match.group(0)
        if match.group("var_path") is not None:
            current().append(VariableNode(match.group("var_path")))
        elif match.group("for_var") is not None:
            stack.append(
                _OpenBlock(
                    "for",
                    marker,
                    match.start(),
                    (match.group("for_var"), match.group("for_path")),
                )
            )
        elif match.group("if_path") is not None:
            stack.append(
                _OpenBlock("if", marker, match.start(), (match.group("if_path"),))
            )
        else:
            kind = "for" if match.group("endfor") is not None else "if"
            if not stack:
                raise TemplateSyntaxError(
                    f"'{marker}' at offset {match.start()} has no opening block",
                    marker=marker,
                    position=match.start(),
                )
            if stack[-1].kind != kind:
                raise TemplateSyntaxError(
                    f"'{marker}' at offset {match.start()} closes "
                    f"'{stack[-1].marker}' opened at offset {stack[-1].position}",
                    marker=marker,
                    position=match.start(),
                )
            block = stack.pop()
            current().append(block.close())
    if stack:
        block = stack[-1]
        raise TemplateSyntaxError(
            f"'{block.marker}' at offset {block.position} is never closed",
            marker=block.marker,
            position=block.position,
        )
    if cursor < len(template):
        root.append(TextNode(template[cursor:]))
    return root


def iter_paths(nodes: list[Node] | tuple[Node, ...]) -> list[str]:
    """Return every data path referenced by ``nodes``, depth first."""
    paths: list[str] = []
    for node in nodes:
        if isinstance(node, VariableNode):
            paths.append(node.path)
        elif isinstance(node, ForNode):
            paths.append(node.iterable_path)
            paths.extend(iter_paths(node.body))
        elif isinstance(node, IfNode):
            paths.append(node.condition_path)
            paths.extend(iter_paths(node.body))
    return paths
