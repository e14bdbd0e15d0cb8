"""Rounding engine.

Every inexact operation funnels through divide_and_round(): an integer
division whose quotient is adjusted by the rounding mode, using the exact
remainder to decide ties. round_to_precision() builds the MathContext
behaviour on top of it, and set_scale() / strip_zeros_to_match_scale() move
a raw (unscaled, scale) value between scales.
"""

from __future__ import annotations

from bigdecimal.context import MathContext, RoundingMode
from bigdecimal.errors import LossOfPrecision
from bigdecimal.math.digits import digit_length, remove_factor, ten_pow
from bigdecimal.math.scaling import check_scale, check_scale_nonzero, multiply_power_ten


def need_increment(mode: RoundingMode, qsign: int, cmp_frac_half: int, odd_quotient: bool) -> bool:
    """Decide whether a truncated quotient magnitude must be bumped by one.

    Only called when the discarded remainder is nonzero.

    Args:
        mode: Rounding mode to apply
        qsign: Sign of the true quotient (1 or -1)
        cmp_frac_half: Comparison of the discarded fraction with one half
            (-1, 0 or 1)
        odd_quotient: Whether the truncated quotient is odd (HALF_EVEN ties)

    Raises:
        LossOfPrecision: If mode is UNNECESSARY
    """
    if mode is RoundingMode.UNNECESSARY:
        raise LossOfPrecision("Rounding necessary")
    if mode is RoundingMode.UP:
        return True
    if mode is RoundingMode.DOWN:
        return False
    if mode is RoundingMode.CEILING:
        return qsign > 0
    if mode is RoundingMode.FLOOR:
        return qsign < 0

    if cmp_frac_half < 0:
        return False
    if cmp_frac_half > 0:
        return True
    if mode is RoundingMode.HALF_UP:
        return True
    if mode is RoundingMode.HALF_DOWN:
        return False
    return odd_quotient


def divide_and_round(dividend: int, divisor: int, mode: RoundingMode) -> tuple[int, bool]:
    """Divide two ints and round the quotient with mode.

    Args:
        dividend: Numerator
        divisor: Nonzero denominator

    Returns:
        Tuple of (rounded quotient, whether the division was exact)
    """
    qsign = -1 if (dividend < 0) != (divisor < 0) else 1
    divisor_mag = abs(divisor)
    q, r = divmod(abs(dividend), divisor_mag)
    if r == 0:
        return qsign * q, True

    twice = r << 1
    cmp_frac_half = (twice > divisor_mag) - (twice < divisor_mag)
    if need_increment(mode, qsign, cmp_frac_half, bool(q & 1)):
        q += 1
    return qsign * q, False


def divide_by_power_of_ten(value: int, n: int, mode: RoundingMode) -> tuple[int, bool]:
    """Round value / 10**n to an integer.

    When 10**n exceeds |value| by more than a digit the quotient is zero and
    the discarded fraction is below one half, so the rounding decision is
    made without building the power of ten.
    """
    if value == 0:
        return 0, True
    if n > digit_length(value):
        qsign = -1 if value < 0 else 1
        return (qsign if need_increment(mode, qsign, -1, False) else 0), False
    return divide_and_round(value, ten_pow(n), mode)


def round_to_precision(unscaled: int, scale: int, mc: MathContext) -> tuple[int, int]:
    """Round a raw value to mc.precision significant digits.

    Repeats while the digit count still exceeds the precision, which covers a
    carry out of a run of nines (999.9 -> 1000 at three digits -> 100E+1).

    Returns:
        Tuple of (unscaled, scale), unchanged if no rounding is needed

    Raises:
        LossOfPrecision: If mc is UNNECESSARY and a nonzero digit is dropped
        ScaleOverflow: If dropping digits pushes the scale out of range
    """
    mcp = mc.precision
    if mcp == 0:
        return unscaled, scale

    drop = digit_length(unscaled) - mcp
    while drop > 0:
        scale = check_scale_nonzero(scale - drop)
        unscaled, _ = divide_by_power_of_ten(unscaled, drop, mc.rounding_mode)
        drop = digit_length(unscaled) - mcp
    return unscaled, scale


def set_scale(
    unscaled: int,
    scale: int,
    new_scale: int,
    mode: RoundingMode = RoundingMode.UNNECESSARY,
) -> tuple[int, int]:
    """Re-express a raw value at new_scale, rounding away digits with mode.

    Raises:
        LossOfPrecision: If mode is UNNECESSARY and digits would be lost
        ScaleOverflow: If the scale difference leaves the int32 range
    """
    if new_scale == scale:
        return unscaled, scale
    if unscaled == 0:
        return 0, new_scale
    if new_scale > scale:
        return multiply_power_ten(unscaled, new_scale - scale), new_scale

    drop = check_scale(unscaled, scale - new_scale)
    result, _ = divide_by_power_of_ten(unscaled, drop, mode)
    return result, new_scale


def strip_zeros_to_match_scale(unscaled: int, scale: int, preferred_scale: int) -> tuple[int, int]:
    """Remove trailing zeros while the scale is above preferred_scale.

    A zero value is returned unchanged.

    Raises:
        ScaleOverflow: If stripping moves a nonzero value below the int32 range
    """
    if unscaled == 0 or scale <= preferred_scale:
        return unscaled, scale
    unscaled, removed = remove_factor(unscaled, 10, scale - preferred_scale)
    return unscaled, check_scale_nonzero(scale - removed)


__all__ = [
    "need_increment",
    "divide_and_round",
    "divide_by_power_of_ten",
    "round_to_precision",
    "set_scale",
    "strip_zeros_to_match_scale",
]
