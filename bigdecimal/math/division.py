"""Division engine over raw (unscaled, scale) pairs.

Four entry points, mirroring the java.math.BigDecimal overloads:

- divide_exact: exact quotient or NonTerminatingExpansion
- divide_to_precision: quotient rounded to a MathContext precision
- divide_to_scale: quotient rounded at a caller-fixed scale
- divide_to_integral: quotient truncated to an integer value

The preferred scale of a quotient is dividend.scale - divisor.scale; exact
results are stripped or padded toward it.
"""

from __future__ import annotations

from math import gcd

import structlog

from bigdecimal.constants import INT32_MAX
from bigdecimal.context import MathContext, RoundingMode
from bigdecimal.errors import ArithmeticOverflow, DivisionByZero, NonTerminatingExpansion
from bigdecimal.math.digits import digit_length, remove_factor, ten_pow
from bigdecimal.math.rounding import (
    divide_and_round,
    round_to_precision,
    set_scale,
    strip_zeros_to_match_scale,
)
from bigdecimal.math.scaling import (
    add,
    check_scale,
    check_scale_nonzero,
    compare_magnitude,
    compare_normalized,
    multiply,
    multiply_power_ten,
    saturate_scale,
)

logger = structlog.get_logger()


def _zero_divisor(dividend: int) -> DivisionByZero:
    if dividend == 0:
        return DivisionByZero("Division undefined")
    return DivisionByZero("Division by zero")


# =============================================================================
# Exact division
# =============================================================================


def divide_exact(x: int, x_scale: int, y: int, y_scale: int) -> tuple[int, int]:
    """Exact quotient x / y.

    The fraction x / y is reduced by its gcd. The quotient terminates iff the
    reduced denominator is 2^a * 5^b, in which case multiplying numerator and
    denominator by 2^(k-a) * 5^(k-b), k = max(a, b), turns the denominator
    into 10^k.

    Returns:
        The quotient at scale max(preferred scale, smallest exact scale)

    Raises:
        DivisionByZero: If y is zero
        NonTerminatingExpansion: If the quotient has no finite decimal form
        ScaleOverflow: If the quotient's scale leaves the int32 range
    """
    if y == 0:
        raise _zero_divisor(x)
    preferred_scale = saturate_scale(x_scale - y_scale)
    if x == 0:
        return 0, preferred_scale

    g = gcd(x, y)
    numerator, denominator = x // g, y // g
    if denominator < 0:
        numerator, denominator = -numerator, -denominator

    twos = (denominator & -denominator).bit_length() - 1
    denominator >>= twos
    fives = 0
    if denominator > 1:
        denominator, fives = remove_factor(denominator, 5)
    if denominator != 1:
        if structlog.is_configured():
            logger.debug(
                "non_terminating_division",
                dividend_digits=digit_length(x),
                divisor_digits=digit_length(y),
            )
        raise NonTerminatingExpansion(
            "Non-terminating decimal expansion; no exact representable decimal result."
        )

    k = max(twos, fives)
    quotient = (numerator << (k - twos)) * 5 ** (k - fives)
    quotient, scale = strip_zeros_to_match_scale(quotient, x_scale - y_scale + k, preferred_scale)
    return quotient, check_scale_nonzero(scale)


# =============================================================================
# Context division
# =============================================================================


def divide_to_precision(
    x: int, x_scale: int, y: int, y_scale: int, mc: MathContext
) -> tuple[int, int]:
    """Quotient x / y rounded to mc.precision significant digits.

    Both operands are treated as mantissas in [0.1, 1); when the dividend's
    mantissa is the larger one the divisor is counted as one digit shorter,
    so the scaled integer division below yields exactly mc.precision digits
    and its remainder settles the rounding decision. A precision of 0
    delegates to divide_exact.
    """
    mcp = mc.precision
    if mcp == 0:
        return divide_exact(x, x_scale, y, y_scale)

    preferred_scale = x_scale - y_scale
    if y == 0:
        raise _zero_divisor(x)
    if x == 0:
        return 0, saturate_scale(preferred_scale)

    x_prec = digit_length(x)
    y_prec = digit_length(y)
    if compare_normalized(x, x_prec, y, y_prec) > 0:
        y_prec -= 1

    scl = check_scale_nonzero(preferred_scale + y_prec - x_prec + mcp)
    shift = check_scale_nonzero(mcp + y_prec - x_prec)
    preferred_scale = check_scale_nonzero(preferred_scale)
    if shift > 0:
        quotient, exact = divide_and_round(x * ten_pow(shift), y, mc.rounding_mode)
    else:
        new_scale = check_scale_nonzero(x_prec - mcp)
        raise_by = check_scale_nonzero(new_scale - y_prec)
        quotient, exact = divide_and_round(x, y * ten_pow(raise_by), mc.rounding_mode)

    if exact and scl != preferred_scale:
        quotient, scl = strip_zeros_to_match_scale(quotient, scl, preferred_scale)
    # Only a carry (e.g. 9.99 -> 10.0) can leave an extra digit here
    return round_to_precision(quotient, scl, mc)


def divide_to_scale(
    x: int,
    x_scale: int,
    y: int,
    y_scale: int,
    scale: int,
    mode: RoundingMode,
) -> tuple[int, int]:
    """Quotient x / y at exactly the given scale, rounded with mode."""
    if y == 0:
        raise DivisionByZero("Division by zero")

    if check_scale(x, scale + y_scale) > x_scale:
        raise_by = scale + y_scale - x_scale
        quotient, _ = divide_and_round(multiply_power_ten(x, raise_by), y, mode)
    else:
        new_scale = check_scale(y, x_scale - scale)
        raise_by = new_scale - y_scale
        quotient, _ = divide_and_round(x, multiply_power_ten(y, raise_by), mode)
    return quotient, scale


# =============================================================================
# Integral division
# =============================================================================


def _divide_to_integral_unlimited(
    x: int, x_scale: int, y: int, y_scale: int, preferred_scale: int
) -> tuple[int, int]:
    if compare_magnitude(x, x_scale, y, y_scale) < 0:
        return 0, preferred_scale

    # Enough digits to reach the units place of any quotient
    y_digits = -(-10 * digit_length(y) // 3)
    max_digits = min(digit_length(x) + y_digits + abs(x_scale - y_scale) + 2, INT32_MAX)
    quotient, scale = divide_to_precision(
        x, x_scale, y, y_scale, MathContext(max_digits, RoundingMode.DOWN)
    )
    if scale > 0:
        quotient, scale = set_scale(quotient, scale, 0, RoundingMode.DOWN)
        quotient, scale = strip_zeros_to_match_scale(quotient, scale, preferred_scale)
    if scale < preferred_scale:
        quotient, scale = set_scale(quotient, scale, preferred_scale)
    return quotient, scale


def divide_to_integral(
    x: int,
    x_scale: int,
    y: int,
    y_scale: int,
    mc: MathContext | None = None,
) -> tuple[int, int]:
    """Integer part of x / y, truncated toward zero.

    With a limited context the precision only bounds the number of digits
    of the integer part; it never rounds it.

    Raises:
        DivisionByZero: If y is zero
        ArithmeticOverflow: If the integer part needs more than mc.precision digits
    """
    preferred_scale = saturate_scale(x_scale - y_scale)
    if mc is None or mc.precision == 0 or compare_magnitude(x, x_scale, y, y_scale) < 0:
        return _divide_to_integral_unlimited(x, x_scale, y, y_scale, preferred_scale)

    quotient, scale = divide_to_precision(
        x, x_scale, y, y_scale, MathContext(mc.precision, RoundingMode.DOWN)
    )
    if scale < 0:
        # Integer part did not fit; the remainder tells whether digits were lost
        product, product_scale = multiply(quotient, scale, y, y_scale)
        rest, rest_scale = add(x, x_scale, -product, product_scale)
        if compare_magnitude(rest, rest_scale, y, y_scale) >= 0:
            raise ArithmeticOverflow("Division impossible")
    elif scale > 0:
        quotient, scale = set_scale(quotient, scale, 0, RoundingMode.DOWN)

    precision_diff = mc.precision - digit_length(quotient)
    if preferred_scale > scale and precision_diff > 0:
        return set_scale(quotient, scale, scale + min(precision_diff, preferred_scale - scale))
    return strip_zeros_to_match_scale(quotient, scale, preferred_scale)


__all__ = [
    "divide_exact",
    "divide_to_precision",
    "divide_to_scale",
    "divide_to_integral",
]
