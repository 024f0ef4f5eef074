"""Resource quantity parser — numbers with an optional SI, binary or exponent suffix.

Examples: ``100m`` (0.1), ``1.5``, ``2Gi`` (2 * 1024**3), ``1e3``, ``-1k``.
The accepted grammar and the error messages follow the Kubernetes API
server, including its leniencies (``1.G`` and a bare ``.`` both parse).
"""

from decimal import Decimal, localcontext, MAX_EMAX, MIN_EMIN
from enum import Enum
from typing import NamedTuple, Optional

from kubefield.validators.intparse import NumericParseError, parse_int

QUANTITY_REGEX = "^([+-]?[0-9.]+)([eEinumkKMGTP]*[-+]?[0-9]*)$"

_DIGITS = "0123456789"
_SUFFIX_CHARS = "eEinumkKMGTP"


class QuantityFormat(str, Enum):
    BINARY_SI = "BinarySI"
    DECIMAL_SI = "DecimalSI"
    DECIMAL_EXPONENT = "DecimalExponent"


# suffix -> (base, exponent)
BINARY_SUFFIXES = {
    "Ki": (2, 10),
    "Mi": (2, 20),
    "Gi": (2, 30),
    "Ti": (2, 40),
    "Pi": (2, 50),
    "Ei": (2, 60),
}

DECIMAL_SUFFIXES = {
    "n": (10, -9),
    "u": (10, -6),
    "m": (10, -3),
    "": (10, 0),
    "k": (10, 3),
    "M": (10, 6),
    "G": (10, 9),
    "T": (10, 12),
    "P": (10, 15),
    "E": (10, 18),
}


class QuantityError(ValueError):
    """Raised when a string is not a valid resource quantity."""


class FormatError(QuantityError):
    def __init__(self):
        super().__init__(f"quantities must match the regular expression '{QUANTITY_REGEX}'")


class SuffixError(QuantityError):
    def __init__(self):
        super().__init__("unable to parse quantity's suffix")


class Quantity(NamedTuple):
    """A parsed quantity: exact decimal value plus the notation it was written in."""

    value: Decimal
    format: QuantityFormat
    suffix: str


class _Parts(NamedTuple):
    positive: bool
    num: str
    denom: str
    suffix: str


def _take_digits(text: str, pos: int) -> int:
    """Return the index of the first non-digit at or after pos."""
    while pos < len(text) and text[pos] in _DIGITS:
        pos += 1
    return pos


def _split(text: str) -> _Parts:
    """Split a quantity into sign, integer digits, fraction digits and suffix."""
    positive = True
    pos = 0
    end = len(text)

    if text[0] == "-":
        positive = False
        pos += 1
    elif text[0] == "+":
        pos += 1

    while pos < end and text[pos] == "0":
        pos += 1
    if pos >= end:
        return _Parts(positive, "0", "", "")

    num_end = _take_digits(text, pos)
    num = text[pos:num_end] or "0"
    pos = num_end

    denom = ""
    if pos < end and text[pos] == ".":
        denom_end = _take_digits(text, pos + 1)
        denom = text[pos + 1:denom_end]
        pos = denom_end

    suffix_start = pos
    while pos < end and text[pos] in _SUFFIX_CHARS:
        pos += 1
    if pos < end and text[pos] in "+-":
        pos += 1
    if _take_digits(text, pos) < end:
        raise FormatError()
    return _Parts(positive, num, denom, text[suffix_start:])


def _interpret_suffix(suffix: str) -> Optional[tuple[int, int, QuantityFormat]]:
    if suffix in BINARY_SUFFIXES:
        base, exponent = BINARY_SUFFIXES[suffix]
        return base, exponent, QuantityFormat.BINARY_SI
    if suffix in DECIMAL_SUFFIXES:
        base, exponent = DECIMAL_SUFFIXES[suffix]
        return base, exponent, QuantityFormat.DECIMAL_SI
    if len(suffix) > 1 and suffix[0] in "eE":
        try:
            exponent = parse_int(suffix[1:], bits=32)
        except NumericParseError:
            return None
        return 10, exponent, QuantityFormat.DECIMAL_EXPONENT
    return None


def parse_quantity(text: str) -> Quantity:
    """Parse a resource quantity string.

    Raises:
        QuantityError: if the text does not match the quantity grammar
    """
    if not text:
        raise FormatError()

    parts = _split(text)
    interpreted = _interpret_suffix(parts.suffix)
    if interpreted is None:
        raise SuffixError()
    base, exponent, fmt = interpreted

    mantissa = Decimal(f"{parts.num}.{parts.denom or '0'}")

    with localcontext() as ctx:
        ctx.prec = len(parts.num) + len(parts.denom) + 40
        ctx.Emax = MAX_EMAX
        ctx.Emin = MIN_EMIN
        if not parts.positive:
            mantissa = -mantissa
        try:
            if base == 2:
                value = mantissa * (1 << exponent)
            else:
                value = mantissa.scaleb(exponent)
        except ArithmeticError as exc:
            raise QuantityError(f"quantity {text!r} is out of range") from exc
    return Quantity(value=value, format=fmt, suffix=parts.suffix)
