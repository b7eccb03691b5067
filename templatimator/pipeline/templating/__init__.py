"""Template engine: value model, block-tree parser and renderer."""

from .engine import extract_placeholders_from_template, load_template, render_template
from .parser import ForNode, IfNode, Node, TextNode, VariableNode, parse_template
from .values import Context, Value, is_truthy, resolve_path, to_display_string

__all__ = [
    "Context",
    "ForNode",
    "IfNode",
    "Node",
    "TextNode",
    "Value",
    "VariableNode",
    "extract_placeholders_from_template",
    "is_truthy",
    "load_template",
    "parse_template",
    "render_template",
    "resolve_path",
    "to_display_string",
]
