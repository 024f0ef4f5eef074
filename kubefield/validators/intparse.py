"""Strict integer parsing for string-encoded numbers.

``int()`` is too lenient for configuration values: it accepts surrounding
whitespace and ``_`` digit separators. These helpers accept only an optional
sign followed by digits of the requested base, and enforce a bit size.
"""

import re
from typing import Optional

_DIGITS = {
    8: re.compile(r"[+-]?[0-7]+"),
    10: re.compile(r"[+-]?[0-9]+"),
}


class NumericParseError(ValueError):
    """Raised when a string is not a valid integer of the requested size.

    ``clamped`` holds the nearest representable value for out-of-range
    input, and is None for syntax errors.
    """

    def __init__(self, text: str, reason: str, clamped: Optional[int] = None):
        self.text = text
        self.reason = reason
        self.clamped = clamped
        super().__init__(f'parsing "{text}": {reason}')


def _format(value: int, base: int) -> str:
    return f"{value:o}" if base == 8 else str(value)


def parse_int(text: str, base: int = 10, bits: int = 64) -> int:
    """Parse a signed integer of ``bits`` width in base 8 or 10."""
    pattern = _DIGITS.get(base)
    if pattern is None:
        raise ValueError(f"unsupported base {base}")
    if not pattern.fullmatch(text):
        raise NumericParseError(text, "invalid syntax")

    upper = (1 << (bits - 1)) - 1
    lower = -(1 << (bits - 1))
    negative = text[0] == "-"

    # Too many significant digits to fit; skip int() so huge inputs stay cheap.
    significant = text.lstrip("+-").lstrip("0")
    if len(significant) > len(_format(upper, base)):
        raise NumericParseError(text, "value out of range", clamped=lower if negative else upper)

    value = int(significant or "0", base)
    if negative:
        value = -value
    if value > upper:
        raise NumericParseError(text, "value out of range", clamped=upper)
    if value < lower:
        raise NumericParseError(text, "value out of range", clamped=lower)
    return value

