"""BigDecimal error classes.

Every failure raised by the engine derives from BigDecimalError, which is an
ArithmeticError. Where a builtin exception describes the same condition the
class also inherits from it, so callers can catch either family.
"""


class BigDecimalError(ArithmeticError):
    """Base error for BigDecimal operations."""

    pass


class ParseError(BigDecimalError, ValueError):
    """Text is not a valid decimal number."""

    pass


class ArithmeticOverflow(BigDecimalError, OverflowError):
    """Result cannot be represented (invalid pow, negative sqrt, division impossible)."""

    pass


class ScaleOverflow(ArithmeticOverflow):
    """Scale would leave the signed 32-bit range."""

    pass


class DivisionByZero(BigDecimalError, ZeroDivisionError):
    """Division or remainder by a zero divisor."""

    pass


class NonTerminatingExpansion(BigDecimalError):
    """Exact result requested but the decimal expansion never terminates."""

    pass


class LossOfPrecision(BigDecimalError):
    """Rounding mode UNNECESSARY met a result that needs rounding."""

    pass


class RangeError(BigDecimalError, ValueError):
    """Construction input is out of range or combined with a disallowed argument."""

    pass


class UnsupportedInputType(RangeError, TypeError):
    """Construction input has a type that cannot represent a decimal."""

    pass


__all__ = [
    "BigDecimalError",
    "ParseError",
    "ArithmeticOverflow",
    "ScaleOverflow",
    "DivisionByZero",
    "NonTerminatingExpansion",
    "LossOfPrecision",
    "RangeError",
    "UnsupportedInputType",
]
