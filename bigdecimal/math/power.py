"""Integer power and square root over raw (unscaled, scale) pairs."""

from __future__ import annotations

from math import isqrt

import structlog

from bigdecimal.constants import LONG_MIN, MAX_POW_EXPONENT
from bigdecimal.context import MathContext, RoundingMode
from bigdecimal.errors import ArithmeticOverflow, LossOfPrecision, NonTerminatingExpansion
from bigdecimal.math.addition import add_to_precision
from bigdecimal.math.digits import digit_length, ten_pow
from bigdecimal.math.division import divide_to_precision
from bigdecimal.math.rounding import round_to_precision, strip_zeros_to_match_scale
from bigdecimal.math.scaling import check_scale, multiply

logger = structlog.get_logger()


def trunc_half(value: int) -> int:
    """value / 2 truncated toward zero (Java int division)."""
    return value // 2 if value >= 0 else -(-value // 2)


# =============================================================================
# Power
# =============================================================================


def pow_exact(unscaled: int, scale: int, n: int) -> tuple[int, int]:
    """Exact unscaled**n at scale scale*n.

    Raises:
        ArithmeticOverflow: If n is outside [0, 999999999]
        ScaleOverflow: If the new scale leaves the int32 range
    """
    if n < 0 or n > MAX_POW_EXPONENT:
        raise ArithmeticOverflow("Invalid operation")
    new_scale = check_scale(unscaled, scale * n)
    return unscaled**n, new_scale


def pow_to_precision(unscaled: int, scale: int, n: int, mc: MathContext) -> tuple[int, int]:
    """unscaled x 10^-scale raised to n, rounded to mc.

    Uses the ANSI X3.274 algorithm: left-to-right binary exponentiation at a
    working precision of mc.precision + (digits of |n|) + 1, a reciprocal
    for negative n, and a final rounding to mc.

    Raises:
        ArithmeticOverflow: If |n| > 999999999 or |n| has more digits than
            mc.precision
    """
    if mc.precision == 0:
        return pow_exact(unscaled, scale, n)
    if n < -MAX_POW_EXPONENT or n > MAX_POW_EXPONENT:
        raise ArithmeticOverflow("Invalid operation")
    if n == 0:
        return 1, 0

    mag = abs(n)
    elength = digit_length(mag)
    if elength > mc.precision:
        raise ArithmeticOverflow("Invalid operation")
    workmc = MathContext(mc.precision + elength + 1, mc.rounding_mode)

    acc, acc_scale = 1, 0
    bits = format(mag, "b")
    last = len(bits) - 1
    for i, bit in enumerate(bits):
        if bit == "1":
            acc, acc_scale = round_to_precision(*multiply(acc, acc_scale, unscaled, scale), workmc)
        if i < last:
            acc, acc_scale = round_to_precision(*multiply(acc, acc_scale, acc, acc_scale), workmc)

    if n < 0:
        acc, acc_scale = divide_to_precision(1, 0, acc, acc_scale, workmc)
    return round_to_precision(acc, acc_scale, mc)


# =============================================================================
# Square root
# =============================================================================


def _finish_sqrt(root: int, root_scale: int, preferred_scale: int, mc: MathContext) -> tuple[int, int]:
    """Move a root toward the preferred scale without exceeding mc.precision."""
    if root_scale == preferred_scale:
        return root, root_scale
    root, root_scale = strip_zeros_to_match_scale(root, root_scale, LONG_MIN)
    exact_mc = MathContext(mc.precision, RoundingMode.UNNECESSARY)
    return add_to_precision(root, root_scale, 0, preferred_scale, exact_mc)


def sqrt(unscaled: int, scale: int, mc: MathContext) -> tuple[int, int]:
    """Square root of unscaled x 10^-scale, correctly rounded to mc.

    The stripped operand is scaled up by an even power of ten until it has at
    least 2p + 2 digits, so isqrt() yields p + 1 or more root digits; a sticky
    digit records whether the root was inexact before the final rounding.
    Operands are never rounded before the root is taken.

    Raises:
        ArithmeticOverflow: If the value is negative
        NonTerminatingExpansion: If mc is unlimited and the root is irrational
        LossOfPrecision: If mc is UNNECESSARY and the root is inexact
    """
    if unscaled < 0:
        raise ArithmeticOverflow("Attempted square root of negative BigDecimal")
    preferred_scale = trunc_half(scale)
    if unscaled == 0:
        return 0, preferred_scale

    stripped, stripped_scale = strip_zeros_to_match_scale(unscaled, scale, LONG_MIN)
    if stripped == 1 and stripped_scale % 2 == 0:
        root_scale = stripped_scale // 2
        if root_scale == preferred_scale:
            return 1, root_scale
        return add_to_precision(1, root_scale, 0, preferred_scale, mc)

    if mc.precision == 0:
        radicand, radicand_scale = stripped, stripped_scale
        if radicand_scale % 2:
            radicand, radicand_scale = radicand * 10, radicand_scale + 1
        root = isqrt(radicand)
        if root * root != radicand:
            if structlog.is_configured():
                logger.debug("sqrt_not_exact", digits=digit_length(stripped), scale=stripped_scale)
            raise NonTerminatingExpansion("Computed square root not exact.")
        return _finish_sqrt(root, radicand_scale // 2, preferred_scale, mc)

    shift = max(0, 2 * mc.precision + 2 - digit_length(stripped))
    if (stripped_scale + shift) % 2:
        shift += 1
    radicand = stripped * ten_pow(shift)
    root = isqrt(radicand)
    exact = root * root == radicand
    if not exact and mc.rounding_mode is RoundingMode.UNNECESSARY:
        if structlog.is_configured():
            logger.debug("sqrt_not_exact", digits=digit_length(stripped), scale=stripped_scale)
        raise LossOfPrecision("Computed square root not exact.")

    # Sticky digit: strictly between two candidates is never a tie
    root = root * 10 + (0 if exact else 1)
    root_scale = (stripped_scale + shift) // 2 + 1
    root, root_scale = round_to_precision(root, root_scale, mc)
    return _finish_sqrt(root, root_scale, preferred_scale, mc)


__all__ = [
    "pow_exact",
    "pow_to_precision",
    "sqrt",
    "trunc_half",
]
