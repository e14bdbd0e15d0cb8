"""Context-rounded addition over raw (unscaled, scale) pairs.

Rounding the exact sum is always correct but aligning two operands whose
scales are far apart can build enormous intermediates. When the smaller
operand lies entirely below the rounding position it is replaced by a single
unit just below the guard digits: that sticky unit moves the sum off any
exact boundary in the same direction as the true operand, so every rounding
mode makes the same decision it would on the exact sum.
"""

from __future__ import annotations

from bigdecimal.context import MathContext
from bigdecimal.math.digits import digit_length, ten_pow
from bigdecimal.math.rounding import round_to_precision, strip_zeros_to_match_scale
from bigdecimal.math.scaling import add, check_scale_nonzero


def _add_to_zero(value: int, scale: int, preferred_scale: int, mc: MathContext) -> tuple[int, int]:
    """Round a lone nonzero operand, then move it toward preferred_scale."""
    value, scale = round_to_precision(value, scale, mc)
    if scale == preferred_scale:
        return value, scale
    if scale > preferred_scale:
        return strip_zeros_to_match_scale(value, scale, preferred_scale)

    precision_diff = mc.precision - digit_length(value)
    scale_diff = preferred_scale - scale
    target = preferred_scale if precision_diff >= scale_diff else scale + precision_diff
    return value * ten_pow(target - scale), target


def _pre_align(
    x: int, x_scale: int, y: int, y_scale: int, mc: MathContext
) -> tuple[int, int, int, int]:
    """Collapse an operand far below the result's last digit into a sticky unit."""
    if x_scale < y_scale:
        big, big_scale, small, small_scale = x, x_scale, y, y_scale
    else:
        big, big_scale, small, small_scale = y, y_scale, x, x_scale

    est_result_ulp_scale = big_scale - digit_length(big) + mc.precision
    small_high_digit_pos = small_scale - digit_length(small) + 1
    if small_high_digit_pos > big_scale + 2 and small_high_digit_pos > est_result_ulp_scale + 2:
        small = 1 if small > 0 else -1
        small_scale = check_scale_nonzero(max(big_scale, est_result_ulp_scale) + 3)
    return big, big_scale, small, small_scale


def add_to_precision(x: int, x_scale: int, y: int, y_scale: int, mc: MathContext) -> tuple[int, int]:
    """x + y rounded to mc, equal to rounding the exact sum.

    When one operand is zero the result keeps as much of the preferred scale
    max(x_scale, y_scale) as the precision allows.
    """
    if mc.precision == 0:
        return add(x, x_scale, y, y_scale)

    if x == 0 or y == 0:
        preferred_scale = max(x_scale, y_scale)
        if x == 0 and y == 0:
            return 0, preferred_scale
        if x == 0:
            return _add_to_zero(y, y_scale, preferred_scale, mc)
        return _add_to_zero(x, x_scale, preferred_scale, mc)

    if x_scale != y_scale:
        x, x_scale, y, y_scale = _pre_align(x, x_scale, y, y_scale, mc)
    total, scale = add(x, x_scale, y, y_scale)
    return round_to_precision(total, scale, mc)


__all__ = ["add_to_precision"]
