"""Scale bookkeeping and aligned integer arithmetic.

Values are handled here as raw (unscaled, scale) pairs. Scales are computed
with unbounded Python ints and then narrowed back to the signed 32-bit range
through the check/saturate helpers, which decide between failing and
clamping exactly as java.math.BigDecimal does.
"""

from __future__ import annotations

from bigdecimal.constants import INT32_MAX, INT32_MIN
from bigdecimal.errors import ScaleOverflow
from bigdecimal.math.digits import digit_length, ten_pow

# =============================================================================
# Scale range checks
# =============================================================================


def fits_int32(value: int) -> bool:
    return INT32_MIN <= value <= INT32_MAX


def saturate_scale(value: int) -> int:
    """Clamp a scale into the int32 range."""
    if value > INT32_MAX:
        return INT32_MAX
    if value < INT32_MIN:
        return INT32_MIN
    return value


def check_scale_nonzero(value: int) -> int:
    """Return value if it is a valid scale for a nonzero number.

    Raises:
        ScaleOverflow: "Underflow" above the range, "Overflow" below it
    """
    if not fits_int32(value):
        raise ScaleOverflow("Underflow" if value > 0 else "Overflow")
    return value


def check_scale(unscaled: int, value: int) -> int:
    """Validate a new scale for a number with the given unscaled value.

    A zero value can take any scale, so its scale saturates instead of
    failing.

    Raises:
        ScaleOverflow: If unscaled is nonzero and value leaves the int32 range
    """
    if not fits_int32(value):
        if unscaled == 0:
            return saturate_scale(value)
        raise ScaleOverflow("Underflow" if value > 0 else "Overflow")
    return value


def require_int32(value: int, name: str = "scale") -> int:
    """Validate a caller-supplied int32 argument (scale, shift amount)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if not fits_int32(value):
        raise ScaleOverflow(f"{name} out of range: {value}")
    return value


# =============================================================================
# Aligned arithmetic
# =============================================================================


def multiply_power_ten(value: int, n: int) -> int:
    """Return value * 10**n for n >= 0; a raise beyond int32 fails for nonzero values."""
    if value == 0 or n == 0:
        return value
    check_scale(value, n)
    return value * ten_pow(n)


def align(x: int, x_scale: int, y: int, y_scale: int) -> tuple[int, int, int]:
    """Bring two operands to their larger scale.

    Returns:
        Tuple of (x', y', common_scale)
    """
    if x_scale == y_scale:
        return x, y, x_scale
    if x_scale < y_scale:
        return multiply_power_ten(x, y_scale - x_scale), y, y_scale
    return x, multiply_power_ten(y, x_scale - y_scale), x_scale


def add(x: int, x_scale: int, y: int, y_scale: int) -> tuple[int, int]:
    """Exact sum of two raw values at the larger of the two scales."""
    xa, ya, scale = align(x, x_scale, y, y_scale)
    return xa + ya, scale


def multiply(x: int, x_scale: int, y: int, y_scale: int) -> tuple[int, int]:
    """Exact product; the scale is checked against the left operand."""
    return x * y, check_scale(x, x_scale + y_scale)


def compare_magnitude(x: int, x_scale: int, y: int, y_scale: int) -> int:
    """Compare |x| and |y| numerically, returning -1, 0 or 1.

    Adjusted exponents are compared first so operands with far-apart scales
    never materialize a huge power of ten.
    """
    if x == 0:
        return 0 if y == 0 else -1
    if y == 0:
        return 1

    xa, ya = abs(x), abs(y)
    sdiff = x_scale - y_scale
    if sdiff != 0:
        x_adjusted = digit_length(xa) - x_scale
        y_adjusted = digit_length(ya) - y_scale
        if x_adjusted < y_adjusted:
            return -1
        if x_adjusted > y_adjusted:
            return 1
        if sdiff < 0:
            xa *= ten_pow(-sdiff)
        else:
            ya *= ten_pow(sdiff)
    return (xa > ya) - (xa < ya)


def compare_normalized(x: int, x_precision: int, y: int, y_precision: int) -> int:
    """Compare the mantissas of x and y after padding both to the same digit count."""
    xa, ya = abs(x), abs(y)
    sdiff = x_precision - y_precision
    if sdiff < 0:
        xa *= ten_pow(-sdiff)
    elif sdiff > 0:
        ya *= ten_pow(sdiff)
    return (xa > ya) - (xa < ya)


__all__ = [
    "fits_int32",
    "saturate_scale",
    "check_scale_nonzero",
    "check_scale",
    "require_int32",
    "multiply_power_ten",
    "align",
    "add",
    "multiply",
    "compare_magnitude",
    "compare_normalized",
]
