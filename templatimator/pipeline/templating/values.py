"""Runtime value model shared by the data parsers and the template engine.

A ``Value`` is one of ``None`` (null), ``bool``, ``int``/``float`` (number),
``str``, ``list`` of values (sequence) or ``dict`` of string keys to values
(mapping). The helpers below define the only two interpretations the
engine ever applies to a value: its truthiness and its display string.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Union

Value = Union[None, bool, int, float, str, list["Value"], dict[str, "Value"]]
Context = Mapping[str, Value]


def is_truthy(value: Value) -> bool:
    """Return whether ``value`` counts as true in a conditional block.

    Null, ``False``, the empty string and numeric zero are falsy; every
    other value, including empty sequences and mappings, is truthy.

    Examples
    --------
    >>> is_truthy(0), is_truthy(""), is_truthy([]), is_truthy("0")
    (False, False, True, True)
    """
    if value is None or value is False:
        return False
    if isinstance(value, bool):
        return True
    if isinstance(value, (int, float)):
        return value != 0 and not (isinstance(value, float) and math.isnan(value))
    if isinstance(value, str):
        return value != ""
    return True


def format_number(number: int | float) -> str:
    """Render a number in a locale-independent decimal form.

    Uses the shortest round-tripping digits. Magnitudes in ``[1e-6, 1e21)``
    print in plain decimal notation with integral values dropping their
    fractional part (``5.0`` -> ``"5"``); anything outside that range uses
    an exponent without padding (``1e-7``, ``1.5e+300``).

    Examples
    --------
    >>> [format_number(v) for v in (5.0, 19.99, 0.000001, 1e-7, 1e21)]
    ['5', '19.99', '0.000001', '1e-7', '1e+21']
    """
    if isinstance(number, int):
        if abs(number) < 2**53:
            return str(number)
        try:
            number = float(number)
        except OverflowError:
            number = math.inf if number > 0 else -math.inf
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number == 0:
        return "0"
    sign = "-" if number < 0 else ""
    mantissa, _, exponent = repr(abs(number)).partition("e")
    whole, _, fraction = mantissa.partition(".")
    all_digits = whole + fraction
    digits = all_digits.lstrip("0")
    # Value is 0.<digits> * 10**point.
    point = len(whole) + int(exponent or 0) - (len(all_digits) - len(digits))
    digits = digits.rstrip("0")
    if len(digits) <= point <= 21:
        return sign + digits + "0" * (point - len(digits))
    if 0 < point <= 21:
        return sign + digits[:point] + "." + digits[point:]
    if -6 < point <= 0:
        return sign + "0." + "0" * -point + digits
    power = point - 1
    head = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
    return f"{sign}{head}e{'+' if power > 0 else '-'}{abs(power)}"


def to_display_string(value: Value) -> str:
    """Return the text substituted for ``value`` in a ``{{ }}`` marker.

    Examples
    --------
    >>> to_display_string(True), to_display_string(19.99), to_display_string(None)
    ('true', '19.99', '')
    >>> to_display_string(["a", "b"])
    ''
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, str):
        return value
    return ""


def resolve_path(path: str, context: Context) -> Value:
    """Resolve a dotted path such as ``user.name`` against ``context``.

    Each segment descends into a mapping that contains it. As soon as a
    segment cannot be resolved the whole path yields the empty string;
    sequences are never indexed.
    """
    current: Value | Context = context
    for segment in path.split("."):
        if isinstance(current, Mapping) and segment in current:
            current = current[segment]
        else:
            return ""
    return current
