"""Structured data parsing: the flat YAML-like dialect and JSON dispatch."""

from .loader import looks_like_json, parse_data_input
from .parser import parse_scalar, parse_structured_data

__all__ = [
    "looks_like_json",
    "parse_data_input",
    "parse_scalar",
    "parse_structured_data",
]
