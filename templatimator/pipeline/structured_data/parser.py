"""Best-effort parser for the flat YAML-like data dialect.

Supported line forms, top level only::

    # comment
    name: Chris              -> "Chris"
    count: 42                -> 42.0
    active: true             -> True
    tags: [a, b]             -> ["a", "b"]
    url: https://x.io:8080   -> "https://x.io:8080"
    items:                   -> ["apple", "pear"]
    - apple
    - pear

Anything else is skipped. The parser never raises.
"""

import logging
import re

from templatimator.pipeline.templating.values import Value

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")


def parse_scalar(raw: str) -> Value:
    """Classify the trimmed right-hand side of a ``key: value`` line.

    Parameters
    ----------
    raw : str
        Non-empty, already trimmed value text.

    Returns
    -------
    Value
        A list of strings for ``[a, b]``, a bool for exactly ``true`` or
        ``false``, a float for numeric literals, else the text verbatim.
    """
    if raw.startswith("[") and raw.endswith("]"):
        return [item.strip() for item in raw[1:-1].split(",")]
    if raw in ("true", "false"):
        return raw == "true"
    if _NUMBER_RE.fullmatch(raw):
        return float(raw)
    return raw


def parse_structured_data(text: str) -> dict[str, Value]:
    """Parse a data document into a mapping of keys to values.

    Parameters
    ----------
    text : str
        The raw data document.

    Returns
    -------
    dict[str, Value]
        Parsed mapping; duplicate keys keep the last value. Lines that do
        not fit any supported form are dropped.

    Examples
    --------
    >>> parse_structured_data("name: Chris\\nskills:\\n- Python\\n- SQL")
    {'name': 'Chris', 'skills': ['Python', 'SQL']}
    >>> parse_structured_data("notakeyvalue\\n")
    {}
    """
    result: dict[str, Value] = {}
    open_sequence: list[Value] | None = None
    for line_number, raw_line in enumerate(text.split("\n"), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if ":" in line:
            key, _, rest = line.partition(":")
            key = key.strip()
            value = rest.strip()
            if value == "":
                open_sequence = []
                result[key] = open_sequence
            else:
                # A scalar key closes any block sequence in progress.
                open_sequence = None
                result[key] = parse_scalar(value)
        elif line.startswith("-") and open_sequence is not None:
            open_sequence.append(line[1:].strip())
        else:
            logger.debug("Skipping unrecognised data line %d: %r", line_number, line)
    return result
