"""Decimal string parser.

Accepts the java.math.BigDecimal string grammar:

    Number      ::= Sign? Significand Exponent?
    Significand ::= Digits ('.' Digits?)? | '.' Digits
    Exponent    ::= ('e' | 'E') Sign? Digits

No whitespace is allowed anywhere and only ASCII digits are recognised, so
inputs such as " 1", "1_000", "NaN", "Infinity" or "0x16" are rejected.
"""

from __future__ import annotations

import re

import structlog

from bigdecimal.constants import MAX_EXPONENT_DIGITS
from bigdecimal.errors import ParseError
from bigdecimal.math.digits import digits_to_int
from bigdecimal.math.scaling import fits_int32

logger = structlog.get_logger()

_NUMBER_RE = re.compile(
    r"""
    (?P<sign>[+-])?
    (?:
        (?P<int>[0-9]+)(?:\.(?P<frac>[0-9]*))?
      | \.(?P<bare_frac>[0-9]+)
    )
    (?:[eE](?P<exp_sign>[+-])?(?P<exp>[0-9]+))?
    """,
    re.VERBOSE,
)


def _parse_exponent(sign: str | None, digits: str) -> int:
    """Convert exponent digits, skipping leading zeros.

    Raises:
        ParseError: If more than MAX_EXPONENT_DIGITS significant digits remain
            or the exponent does not fit a signed 32-bit int
    """
    significant = digits.lstrip("0")
    if len(significant) > MAX_EXPONENT_DIGITS:
        raise ParseError("Too many nonzero exponent digits.")
    exponent = int(significant) if significant else 0
    if sign == "-":
        exponent = -exponent
    if not fits_int32(exponent):
        raise ParseError("Exponent overflow.")
    return exponent


def parse_decimal(text: str) -> tuple[int, int]:
    """Parse decimal text into a raw (unscaled, scale) pair.

    Args:
        text: Decimal string such as "-12.50", "1E+3" or ".5e-7"

    Returns:
        Tuple of (unscaled value, scale)

    Raises:
        ParseError: If text does not match the grammar or its scale leaves
            the signed 32-bit range

    Examples:
        parse_decimal("12.50")   -> (1250, 2)
        parse_decimal("-1.2E+3") -> (-12, -2)
    """
    match = _NUMBER_RE.fullmatch(text)
    if match is None:
        if structlog.is_configured():
            logger.debug("decimal_parse_rejected", text=text[:40], length=len(text))
        raise ParseError(f"Invalid decimal string: {text[:40]!r}")

    if match["bare_frac"] is not None:
        int_part, frac_part = "", match["bare_frac"]
    else:
        int_part, frac_part = match["int"], match["frac"] or ""

    exponent = 0
    if match["exp"] is not None:
        exponent = _parse_exponent(match["exp_sign"], match["exp"])

    # Checked before any digits are converted
    scale = len(frac_part) - exponent
    if not fits_int32(scale):
        raise ParseError("Scale out of range.")

    unscaled = digits_to_int(int_part + frac_part)
    if match["sign"] == "-":
        unscaled = -unscaled
    return unscaled, scale


__all__ = ["parse_decimal"]
