"""Arbitrary-precision decimal numbers with java.math.BigDecimal semantics.

A BigDecimal is an immutable pair (unscaled_value, scale) denoting
unscaled_value x 10^-scale. The scale is a signed 32-bit integer; the
unscaled value is unbounded.

Usage:
    from bigdecimal import BigDecimal, MathContext, RoundingMode

    price = BigDecimal("19.99")
    total = price.multiply(BigDecimal(3))                  # 59.97, exact
    share = total.divide(BigDecimal(7), MathContext(5))    # 8.5671
    cents = share.set_scale(2, RoundingMode.HALF_EVEN)     # 8.57

Storage mirrors the Java class: an unscaled value that fits a signed 64-bit
word lives in the compact slot, anything else in the big slot with the compact
slot holding the INFLATED sentinel. Operators branch on that discriminant.
The digit count is computed lazily and cached per instance.
"""

from __future__ import annotations

import math
import struct
import sys
from decimal import Decimal
from typing import ClassVar

import structlog

from bigdecimal.constants import INFLATED, LONG_MIN
from bigdecimal.context import MathContext, RoundingMode
from bigdecimal.errors import RangeError, UnsupportedInputType
from bigdecimal.formatting import to_engineering_string, to_plain_string, to_scientific_string
from bigdecimal.math import division, power
from bigdecimal.math.addition import add_to_precision
from bigdecimal.math.digits import big_digit_length, digits_to_int, is_compact, long_digit_length
from bigdecimal.math.rounding import round_to_precision, set_scale, strip_zeros_to_match_scale
from bigdecimal.math.scaling import (
    add,
    check_scale,
    compare_magnitude,
    multiply,
    require_int32,
)
from bigdecimal.parsing import parse_decimal

logger = structlog.get_logger()

_DOUBLE = struct.Struct(">d")
_LONG_BITS = struct.Struct(">Q")
_SIGNIFICAND_MASK = (1 << 52) - 1


def _float_to_parts(value: float) -> tuple[int, int]:
    """Exact (unscaled, scale) of a finite double.

    The IEEE-754 bits are split into sign, biased exponent and significand;
    trailing zero bits are dropped, and a negative binary exponent -k becomes
    significand * 5^k at decimal scale k.
    """
    (bits,) = _LONG_BITS.unpack(_DOUBLE.pack(value))
    sign = -1 if bits >> 63 else 1
    exponent = (bits >> 52) & 0x7FF
    if exponent == 0:
        significand = (bits & _SIGNIFICAND_MASK) << 1
    else:
        significand = (bits & _SIGNIFICAND_MASK) | (1 << 52)
    exponent -= 1075

    if significand == 0:
        return 0, 0
    trailing = (significand & -significand).bit_length() - 1
    significand >>= trailing
    exponent += trailing

    if exponent < 0:
        return sign * significand * 5**-exponent, -exponent
    return sign * (significand << exponent), 0


def _decimal_to_parts(value: Decimal) -> tuple[int, int]:
    if not value.is_finite():
        raise RangeError(f"Infinite or NaN: {value}")
    sign, digits, exponent = value.as_tuple()
    unscaled = digits_to_int("".join(map(str, digits)))
    return (-unscaled if sign else unscaled), require_int32(-exponent)


def _extract(other: object) -> BigDecimal | None:
    """Coerce an operator operand; ints become scale-0 values."""
    if isinstance(other, BigDecimal):
        return other
    if isinstance(other, int) and not isinstance(other, bool):
        return BigDecimal.value_of(other)
    return None


class BigDecimal:
    """Immutable arbitrary-precision signed decimal number.

    Construct from an int, float, str, decimal.Decimal or another BigDecimal:

        BigDecimal(12345, 2)                  # 123.45
        BigDecimal("1.2E+3")                  # 1.2E+3, scale -2
        BigDecimal(0.1)                       # exact binary value, 55 digits
        BigDecimal("2.675", mc=MathContext(3))  # 2.68

    Equality is strict: == compares value and scale, only against another
    BigDecimal, so BigDecimal("2.0") != BigDecimal("2") and BigDecimal(1) != 1.
    The ordering operators are numeric and also accept int, so
    BigDecimal(1) <= 1 and BigDecimal(1) >= 1 both hold. Use compare_to for
    numeric equality.

    Attributes:
        unscaled_value: The integer significand
        scale: Power-of-ten exponent, negated
        precision: Number of significant digits of unscaled_value
    """

    ZERO: ClassVar[BigDecimal]
    ONE: ClassVar[BigDecimal]
    TEN: ClassVar[BigDecimal]

    __slots__ = ("_int_val", "_int_compact", "_scale", "_precision")
    _int_val: int | None
    _int_compact: int
    _scale: int
    _precision: int

    def __init__(
        self,
        value: int | float | str | Decimal | BigDecimal,
        scale: int | None = None,
        mc: MathContext | None = None,
    ) -> None:
        """Create a BigDecimal.

        Args:
            value: Source number or decimal text
            scale: Scale for an int (or integral float) source; not allowed
                for text, Decimal, BigDecimal or non-integral floats
            mc: Optional context used to round the constructed value

        Raises:
            ParseError: If value is a malformed decimal string
            RangeError: If value is infinite/NaN or scale and mc are combined
                in a way the source type does not allow
            UnsupportedInputType: If value has an unsupported type
            ScaleOverflow: If scale is outside the int32 range
        """
        if isinstance(value, bool):
            raise UnsupportedInputType("BigDecimal does not accept bool")

        if isinstance(value, int):
            unscaled, new_scale = value, 0 if scale is None else require_int32(scale)
        elif isinstance(value, float):
            if not math.isfinite(value):
                raise RangeError(f"Infinite or NaN: {value}")
            if value.is_integer():
                if scale is not None and mc is not None:
                    raise RangeError("Scale and MathContext cannot both be given for an integer value")
                unscaled, new_scale = int(value), 0 if scale is None else require_int32(scale)
            else:
                if scale is not None:
                    raise RangeError("Scale cannot be given for a non-integer float")
                unscaled, new_scale = _float_to_parts(value)
        elif isinstance(value, str):
            if scale is not None:
                raise RangeError("Scale cannot be given for a string value")
            unscaled, new_scale = parse_decimal(value)
        elif isinstance(value, Decimal):
            if scale is not None:
                raise RangeError("Scale cannot be given for a Decimal value")
            unscaled, new_scale = _decimal_to_parts(value)
        elif isinstance(value, BigDecimal):
            if scale is not None:
                raise RangeError("Scale cannot be given for a BigDecimal value")
            unscaled, new_scale = value._inflated(), value._scale
        else:
            raise UnsupportedInputType(f"Cannot build a BigDecimal from {type(value).__name__}")

        if mc is not None:
            unscaled, new_scale = round_to_precision(unscaled, new_scale, mc)
        self._assign(unscaled, new_scale)

    # --- Internal construction ---

    def _assign(self, unscaled: int, scale: int, precision: int = 0) -> None:
        if is_compact(unscaled):
            self._int_compact = unscaled
            self._int_val = None
        else:
            self._int_compact = INFLATED
            self._int_val = unscaled
        self._scale = scale
        self._precision = precision

    @classmethod
    def _create(cls, unscaled: int, scale: int, precision: int = 0) -> BigDecimal:
        """Wrap an already validated raw pair without re-checking it."""
        result = object.__new__(cls)
        result._assign(unscaled, scale, precision)
        return result

    @classmethod
    def value_of(cls, unscaled: int, scale: int = 0) -> BigDecimal:
        """Create unscaled x 10^-scale without rounding."""
        if isinstance(unscaled, bool) or not isinstance(unscaled, int):
            raise UnsupportedInputType(f"value_of requires int, got {type(unscaled).__name__}")
        return cls._create(unscaled, require_int32(scale))

    def _inflated(self) -> int:
        compact = self._int_compact
        if compact != INFLATED:
            return compact
        assert self._int_val is not None
        return self._int_val

    def _with(self, raw: tuple[int, int]) -> BigDecimal:
        unscaled, scale = raw
        if unscaled == self._inflated() and scale == self._scale:
            return self
        return BigDecimal._create(unscaled, scale)

    # --- Properties ---

    @property
    def unscaled_value(self) -> int:
        """The integer significand."""
        return self._inflated()

    @property
    def scale(self) -> int:
        return self._scale

    @property
    def precision(self) -> int:
        """Number of significant digits; zero has precision 1.

        Computed on first access and cached.
        """
        result = self._precision
        if result == 0:
            compact = self._int_compact
            if compact != INFLATED:
                result = long_digit_length(compact)
            else:
                assert self._int_val is not None
                result = big_digit_length(self._int_val)
            self._precision = result
        return result

    def signum(self) -> int:
        """Return -1, 0 or 1 according to the sign of this value."""
        compact = self._int_compact
        if compact != INFLATED:
            return (compact > 0) - (compact < 0)
        assert self._int_val is not None
        return 1 if self._int_val > 0 else -1

    # --- Addition and multiplication ---

    def add(self, augend: BigDecimal, mc: MathContext | None = None) -> BigDecimal:
        """Return self + augend, rounded to mc if given.

        Without a context the result scale is max(self.scale, augend.scale).
        With one, the result is the exact sum rounded once.
        """
        if mc is not None and mc.precision > 0:
            return BigDecimal._create(
                *add_to_precision(self._inflated(), self._scale, augend._inflated(), augend._scale, mc)
            )
        if (
            self._scale == augend._scale
            and self._int_compact != INFLATED
            and augend._int_compact != INFLATED
        ):
            return BigDecimal._create(self._int_compact + augend._int_compact, self._scale)
        return BigDecimal._create(*add(self._inflated(), self._scale, augend._inflated(), augend._scale))

    def subtract(self, subtrahend: BigDecimal, mc: MathContext | None = None) -> BigDecimal:
        """Return self - subtrahend, rounded to mc if given."""
        return self.add(subtrahend.negate(), mc)

    def multiply(self, multiplicand: BigDecimal, mc: MathContext | None = None) -> BigDecimal:
        """Return self * multiplicand; the scale is the sum of the scales."""
        product = multiply(self._inflated(), self._scale, multiplicand._inflated(), multiplicand._scale)
        if mc is not None:
            product = round_to_precision(*product, mc)
        return BigDecimal._create(*product)

    # --- Division ---

    def divide(self, divisor: BigDecimal, mc: MathContext | None = None) -> BigDecimal:
        """Return self / divisor.

        Without a context (or with precision 0) the quotient must be exact
        and carries scale max(self.scale - divisor.scale, smallest exact scale).
        With a context it is rounded to mc.precision digits.

        Raises:
            DivisionByZero: If divisor is zero
            NonTerminatingExpansion: If an exact quotient does not terminate
        """
        if mc is None or mc.precision == 0:
            raw = division.divide_exact(self._inflated(), self._scale, divisor._inflated(), divisor._scale)
        else:
            raw = division.divide_to_precision(
                self._inflated(), self._scale, divisor._inflated(), divisor._scale, mc
            )
        return BigDecimal._create(*raw)

    def divide_to_scale(
        self,
        divisor: BigDecimal,
        scale: int,
        rounding_mode: RoundingMode = RoundingMode.UNNECESSARY,
    ) -> BigDecimal:
        """Return self / divisor at exactly the given scale.

        Pass self.scale to keep the dividend's scale.

        Raises:
            DivisionByZero: If divisor is zero
            LossOfPrecision: If rounding_mode is UNNECESSARY and the quotient
                does not fit the scale
        """
        raw = division.divide_to_scale(
            self._inflated(),
            self._scale,
            divisor._inflated(),
            divisor._scale,
            require_int32(scale),
            rounding_mode,
        )
        return BigDecimal._create(*raw)

    def divide_to_integral_value(self, divisor: BigDecimal, mc: MathContext | None = None) -> BigDecimal:
        """Return the integer part of self / divisor, truncated toward zero.

        Raises:
            DivisionByZero: If divisor is zero
            ArithmeticOverflow: If mc.precision is too small for the integer part
        """
        raw = division.divide_to_integral(
            self._inflated(), self._scale, divisor._inflated(), divisor._scale, mc
        )
        return BigDecimal._create(*raw)

    def divide_and_remainder(
        self, divisor: BigDecimal, mc: MathContext | None = None
    ) -> tuple[BigDecimal, BigDecimal]:
        """Return (divide_to_integral_value, remainder), with q * divisor + r == self."""
        quotient = self.divide_to_integral_value(divisor, mc)
        remainder = self.subtract(quotient.multiply(divisor))
        return quotient, remainder

    def remainder(self, divisor: BigDecimal, mc: MathContext | None = None) -> BigDecimal:
        """Return self - divisor * self.divide_to_integral_value(divisor); keeps self's sign."""
        return self.divide_and_remainder(divisor, mc)[1]

    # --- Power and root ---

    def pow(self, n: int, mc: MathContext | None = None) -> BigDecimal:
        """Return self**n.

        Without a context n must be in [0, 999999999] and the result is exact.
        With one, negative n is allowed and the result is rounded.

        Raises:
            ArithmeticOverflow: If n is out of range for the context
        """
        if isinstance(n, bool) or not isinstance(n, int):
            raise TypeError(f"pow exponent must be an int, got {type(n).__name__}")
        if mc is None:
            raw = power.pow_exact(self._inflated(), self._scale, n)
        else:
            raw = power.pow_to_precision(self._inflated(), self._scale, n, mc)
        return BigDecimal._create(*raw)

    def sqrt(self, mc: MathContext) -> BigDecimal:
        """Return the square root rounded to mc, at preferred scale scale // 2.

        Raises:
            ArithmeticOverflow: If self is negative
            NonTerminatingExpansion: If mc is unlimited and the root is irrational
            LossOfPrecision: If mc is UNNECESSARY and the root is inexact
        """
        return BigDecimal._create(*power.sqrt(self._inflated(), self._scale, mc))

    # --- Sign and rounding ---

    def negate(self, mc: MathContext | None = None) -> BigDecimal:
        result = BigDecimal._create(-self._inflated(), self._scale, self._precision)
        return result if mc is None else result.plus(mc)

    def abs(self, mc: MathContext | None = None) -> BigDecimal:
        if self.signum() < 0:
            return self.negate(mc)
        return self.plus(mc)

    def plus(self, mc: MathContext | None = None) -> BigDecimal:
        """Return +self, rounded to mc if given."""
        if mc is None or mc.precision == 0:
            return self
        return self._with(round_to_precision(self._inflated(), self._scale, mc))

    def round(self, mc: MathContext) -> BigDecimal:
        """Return self rounded to mc (same as plus(mc))."""
        return self.plus(mc)

    # --- Comparison ---

    def compare_to(self, val: BigDecimal) -> int:
        """Numeric comparison ignoring scale; returns -1, 0 or 1.

        2.0 and 2.00 compare equal here but are not equals().
        """
        if self._scale == val._scale:
            xs, ys = self._int_compact, val._int_compact
            if xs != INFLATED and ys != INFLATED:
                return (xs > ys) - (xs < ys)
        xsign = self.signum()
        ysign = val.signum()
        if xsign != ysign:
            return 1 if xsign > ysign else -1
        if xsign == 0:
            return 0
        cmp = compare_magnitude(self._inflated(), self._scale, val._inflated(), val._scale)
        return cmp if xsign > 0 else -cmp

    def equals(self, other: object) -> bool:
        """Strict equality: same numeric value and same scale."""
        if not isinstance(other, BigDecimal):
            return False
        if other is self:
            return True
        if self._scale != other._scale:
            return False
        if self._int_compact != INFLATED:
            return self._int_compact == other._int_compact
        return other._int_compact == INFLATED and self._int_val == other._int_val

    def min(self, val: BigDecimal) -> BigDecimal:
        return self if self.compare_to(val) <= 0 else val

    def max(self, val: BigDecimal) -> BigDecimal:
        return self if self.compare_to(val) >= 0 else val

    # --- Scale manipulation ---

    def set_scale(
        self, new_scale: int, rounding_mode: RoundingMode = RoundingMode.UNNECESSARY
    ) -> BigDecimal:
        """Return a value with the given scale, rounding dropped digits.

        Raises:
            LossOfPrecision: If rounding_mode is UNNECESSARY and digits would be lost
        """
        return self._with(set_scale(self._inflated(), self._scale, require_int32(new_scale), rounding_mode))

    def strip_trailing_zeros(self) -> BigDecimal:
        """Remove trailing zeros from the unscaled value; zero becomes ZERO."""
        if self.signum() == 0:
            return BigDecimal.ZERO
        return self._with(strip_zeros_to_match_scale(self._inflated(), self._scale, LONG_MIN))

    def move_point_left(self, n: int) -> BigDecimal:
        """Return self x 10^-n with a non-negative scale."""
        if require_int32(n, "n") == 0:
            return self
        return self._moved(check_scale(self._inflated(), self._scale + n))

    def move_point_right(self, n: int) -> BigDecimal:
        """Return self x 10^n with a non-negative scale."""
        if require_int32(n, "n") == 0:
            return self
        return self._moved(check_scale(self._inflated(), self._scale - n))

    def _moved(self, new_scale: int) -> BigDecimal:
        result = BigDecimal._create(self._inflated(), new_scale)
        return result.set_scale(0) if new_scale < 0 else result

    def scale_by_power_of_ten(self, n: int) -> BigDecimal:
        """Return self x 10^n by adjusting the scale only."""
        new_scale = check_scale(self._inflated(), self._scale - require_int32(n, "n"))
        return BigDecimal._create(self._inflated(), new_scale, self._precision)

    def ulp(self) -> BigDecimal:
        """Unit in the last place: 1 x 10^-scale."""
        return BigDecimal._create(1, self._scale, 1)

    # --- Conversion ---

    def to_big_integer(self) -> int:
        """Integer part, discarding any fraction."""
        return set_scale(self._inflated(), self._scale, 0, RoundingMode.DOWN)[0]

    def to_big_integer_exact(self) -> int:
        """Integer value.

        Raises:
            LossOfPrecision: If the fractional part is nonzero
        """
        return set_scale(self._inflated(), self._scale, 0, RoundingMode.UNNECESSARY)[0]

    def number_value(self) -> float:
        """Nearest float, saturating to +/-sys.float_info.max instead of infinity."""
        unscaled, scale = self._inflated(), self._scale
        if unscaled == 0:
            return 0.0
        # Decimal exponent of the leading digit, plus one
        magnitude = self.precision - scale
        if magnitude < -330:
            return -0.0 if unscaled < 0 else 0.0
        if magnitude > 310:
            return self._saturated_float()
        try:
            if scale <= 0:
                return float(unscaled * 10**-scale)
            return unscaled / 10**scale
        except OverflowError:
            return self._saturated_float()

    def _saturated_float(self) -> float:
        if structlog.is_configured():
            logger.debug("float_conversion_saturated", precision=self.precision, scale=self._scale)
        return -sys.float_info.max if self.signum() < 0 else sys.float_info.max

    # --- Formatting ---

    def to_plain_string(self) -> str:
        return to_plain_string(self._inflated(), self._scale)

    def to_engineering_string(self) -> str:
        return to_engineering_string(self._inflated(), self._scale)

    def __str__(self) -> str:
        return to_scientific_string(self._inflated(), self._scale)

    def __repr__(self) -> str:
        return f"BigDecimal('{self}')"

    # --- Python protocol ---

    def __hash__(self) -> int:
        return hash((self._inflated(), self._scale))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BigDecimal):
            return NotImplemented
        return self.equals(other)

    def __lt__(self, other: object) -> bool:
        val = _extract(other)
        if val is None:
            return NotImplemented
        return self.compare_to(val) < 0

    def __le__(self, other: object) -> bool:
        val = _extract(other)
        if val is None:
            return NotImplemented
        return self.compare_to(val) <= 0

    def __gt__(self, other: object) -> bool:
        val = _extract(other)
        if val is None:
            return NotImplemented
        return self.compare_to(val) > 0

    def __ge__(self, other: object) -> bool:
        val = _extract(other)
        if val is None:
            return NotImplemented
        return self.compare_to(val) >= 0

    def __add__(self, other: BigDecimal | int) -> BigDecimal:
        val = _extract(other)
        if val is None:
            return NotImplemented
        return self.add(val)

    def __radd__(self, other: int) -> BigDecimal:
        val = _extract(other)
        if val is None:
            return NotImplemented
        return val.add(self)

    def __sub__(self, other: BigDecimal | int) -> BigDecimal:
        val = _extract(other)
        if val is None:
            return NotImplemented
        return self.subtract(val)

    def __rsub__(self, other: int) -> BigDecimal:
        val = _extract(other)
        if val is None:
            return NotImplemented
        return val.subtract(self)

    def __mul__(self, other: BigDecimal | int) -> BigDecimal:
        val = _extract(other)
        if val is None:
            return NotImplemented
        return self.multiply(val)

    def __rmul__(self, other: int) -> BigDecimal:
        val = _extract(other)
        if val is None:
            return NotImplemented
        return val.multiply(self)

    def __truediv__(self, other: BigDecimal | int) -> BigDecimal:
        """Exact division (raises NonTerminatingExpansion for 1 / 3)."""
        val = _extract(other)
        if val is None:
            return NotImplemented
        return self.divide(val)

    def __rtruediv__(self, other: int) -> BigDecimal:
        val = _extract(other)
        if val is None:
            return NotImplemented
        return val.divide(self)

    def __floordiv__(self, other: BigDecimal | int) -> BigDecimal:
        """Integer quotient truncated toward zero, as decimal.Decimal does."""
        val = _extract(other)
        if val is None:
            return NotImplemented
        return self.divide_to_integral_value(val)

    def __mod__(self, other: BigDecimal | int) -> BigDecimal:
        """Remainder with the sign of the dividend, as decimal.Decimal does."""
        val = _extract(other)
        if val is None:
            return NotImplemented
        return self.remainder(val)

    def __divmod__(self, other: BigDecimal | int) -> tuple[BigDecimal, BigDecimal]:
        val = _extract(other)
        if val is None:
            return NotImplemented
        return self.divide_and_remainder(val)

    def __pow__(self, n: int) -> BigDecimal:
        if isinstance(n, bool) or not isinstance(n, int):
            return NotImplemented
        return self.pow(n)

    def __neg__(self) -> BigDecimal:
        return self.negate()

    def __pos__(self) -> BigDecimal:
        return self

    def __abs__(self) -> BigDecimal:
        return self.abs()

    def __bool__(self) -> bool:
        return self.signum() != 0

    def __int__(self) -> int:
        return self.to_big_integer()

    def __float__(self) -> float:
        return self.number_value()


BigDecimal.ZERO = BigDecimal._create(0, 0, 1)
BigDecimal.ONE = BigDecimal._create(1, 0, 1)
BigDecimal.TEN = BigDecimal._create(10, 0, 2)


__all__ = ["BigDecimal"]
