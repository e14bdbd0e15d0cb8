"""Digit-level helpers over Python ints.

Python's int is the arbitrary-precision substrate of the engine. This module
adds what the decimal layer needs on top of it: decimal digit counts, cached
powers of ten, removal of repeated factors, and int <-> digit-string
conversion that keeps working past the interpreter's int/str digit limit.
"""

from __future__ import annotations

from functools import lru_cache

from bigdecimal.constants import INFLATED, LONG_MAX, STR_CHUNK_DIGITS

# 10^0 .. 10^18: every power of ten that fits a signed 64-bit word
LONG_TEN_POWERS = tuple(10**i for i in range(19))


# =============================================================================
# Compact (64-bit) helpers
# =============================================================================


def is_compact(value: int) -> bool:
    """True if value can live in the compact slot (sentinel excluded)."""
    return INFLATED < value <= LONG_MAX


def long_digit_length(value: int) -> int:
    """Digit count of a compact value; zero has one digit.

    Estimates with log10(2) ~= 1233 / 4096 and corrects by one table lookup.
    """
    x = -value if value < 0 else value
    if x < 10:
        return 1
    r = ((x.bit_length() + 1) * 1233) >> 12
    return r if r >= len(LONG_TEN_POWERS) or x < LONG_TEN_POWERS[r] else r + 1


# =============================================================================
# Arbitrary-precision helpers
# =============================================================================


# Largest exponent kept in the power-of-ten cache
TEN_POW_CACHE_LIMIT = 1024


@lru_cache(maxsize=TEN_POW_CACHE_LIMIT)
def _cached_ten_pow(n: int) -> int:
    return 10**n


def ten_pow(n: int) -> int:
    """Return 10**n (n >= 0).

    Only exponents up to TEN_POW_CACHE_LIMIT are cached, so huge powers are
    not held for the life of the process.
    """
    if n < len(LONG_TEN_POWERS):
        return LONG_TEN_POWERS[n]
    if n <= TEN_POW_CACHE_LIMIT:
        return _cached_ten_pow(n)
    return 10**n


def big_digit_length(value: int) -> int:
    """Digit count of an arbitrary-precision value; zero has one digit.

    Estimates with log10(2) ~= 646456993 / 2^31, which is never more than one
    below the true length, then corrects by a single comparison.
    """
    x = -value if value < 0 else value
    if x == 0:
        return 1
    r = ((x.bit_length() + 1) * 646456993) >> 31
    return r if x < ten_pow(r) else r + 1


def digit_length(value: int) -> int:
    """Digit count of |value|, choosing the compact or big estimate."""
    if is_compact(value):
        return long_digit_length(value)
    return big_digit_length(value)


def remove_factor(value: int, factor: int, limit: int | None = None) -> tuple[int, int]:
    """Divide out as many copies of factor as possible.

    Works by squaring the divisor while it keeps dividing, then walking back
    down, so the cost is logarithmic in the multiplicity.

    Args:
        value: Nonzero integer to reduce
        factor: Factor to remove (>= 2)
        limit: Maximum number of copies to remove (default: unlimited)

    Returns:
        Tuple of (reduced value, number of copies removed)
    """
    if value == 0:
        raise ValueError("remove_factor requires a nonzero value")
    if limit is not None and limit <= 0:
        return value, 0

    count = 0
    powers = [factor]
    while value % powers[-1] == 0:
        step = 1 << (len(powers) - 1)
        if limit is not None and count + step > limit:
            break
        value //= powers[-1]
        count += step
        powers.append(powers[-1] * powers[-1])

    for i in range(len(powers) - 1, -1, -1):
        step = 1 << i
        if limit is not None and count + step > limit:
            continue
        if value % powers[i] == 0:
            value //= powers[i]
            count += step
    return value, count


# =============================================================================
# Digit strings
# =============================================================================


def digits_to_int(digits: str) -> int:
    """Convert a string of ASCII digits to a non-negative int.

    Splits long inputs in halves so no single int() call exceeds the
    interpreter's conversion limit.
    """
    if len(digits) <= STR_CHUNK_DIGITS:
        return int(digits)
    half = len(digits) // 2
    high = digits_to_int(digits[:-half])
    low = digits_to_int(digits[-half:])
    return high * ten_pow(half) + low


def int_to_digits(value: int) -> str:
    """Render |value| as a string of decimal digits."""
    x = -value if value < 0 else value
    # STR_CHUNK_DIGITS * 3 bits always stay under the str() digit limit
    if x.bit_length() <= STR_CHUNK_DIGITS * 3:
        return str(x)
    half = big_digit_length(x) // 2
    high, low = divmod(x, ten_pow(half))
    return int_to_digits(high) + int_to_digits(low).zfill(half)


__all__ = [
    "LONG_TEN_POWERS",
    "TEN_POW_CACHE_LIMIT",
    "is_compact",
    "long_digit_length",
    "ten_pow",
    "big_digit_length",
    "digit_length",
    "remove_factor",
    "digits_to_int",
    "int_to_digits",
]
