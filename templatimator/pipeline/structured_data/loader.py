"""Dispatch raw data text to the JSON or YAML-subset parser.

Data documents that look like JSON (first non-blank character ``{`` or
``[``) are decoded with :mod:`json`; everything else goes through
:func:`parse_structured_data`. Decoding failures never propagate: the
render continues with an empty context and a warning is logged.
"""

import json
import logging

from templatimator.pipeline.templating.values import Value

from .parser import parse_structured_data

logger = logging.getLogger(__name__)


def looks_like_json(text: str) -> bool:
    """Return ``True`` when the trimmed text starts like a JSON document."""
    return text.strip()[:1] in ("{", "[")


def parse_data_input(text: str) -> dict[str, Value]:
    """Parse user-supplied data text into a rendering context.

    Parameters
    ----------
    text : str
        JSON object text or the flat YAML-like dialect.

    Returns
    -------
    dict[str, Value]
        The parsed mapping. Empty text, malformed or too deeply nested JSON
        and JSON whose top level is not an object all yield ``{}``.

    Examples
    --------
    >>> parse_data_input('{"name": "Chris"}')
    {'name': 'Chris'}
    >>> parse_data_input("{broken")
    {}
    >>> parse_data_input("name: Chris")
    {'name': 'Chris'}
    """
    raw = text.strip()
    if not raw:
        return {}
    if not looks_like_json(raw):
        return parse_structured_data(raw)
    try:
        decoded = json.loads(raw)
    except (ValueError, RecursionError) as exc:
        logger.warning("Ignoring malformed JSON data (%s); using empty context", exc)
        return {}
    if not isinstance(decoded, dict):
        logger.warning(
            "JSON data must be an object, got %s; using empty context",
            type(decoded).__name__,
        )
        return {}
    return decoded
