"""Arbitrary-precision decimal arithmetic - java.math.BigDecimal for Python."""

from bigdecimal.big_decimal import BigDecimal
from bigdecimal.config import DEFAULT_SETTINGS, Settings, configure_logging
from bigdecimal.context import DECIMAL32, DECIMAL64, DECIMAL128, UNLIMITED, MathContext, RoundingMode
from bigdecimal.errors import (
    ArithmeticOverflow,
    BigDecimalError,
    DivisionByZero,
    LossOfPrecision,
    NonTerminatingExpansion,
    ParseError,
    RangeError,
    ScaleOverflow,
    UnsupportedInputType,
)
from bigdecimal.parsing import parse_decimal

__version__ = "0.1.0"
__all__ = [
    "BigDecimal",
    "MathContext",
    "RoundingMode",
    "UNLIMITED",
    "DECIMAL32",
    "DECIMAL64",
    "DECIMAL128",
    # Errors
    "BigDecimalError",
    "ParseError",
    "ArithmeticOverflow",
    "ScaleOverflow",
    "DivisionByZero",
    "NonTerminatingExpansion",
    "LossOfPrecision",
    "RangeError",
    "UnsupportedInputType",
    # Configuration
    "Settings",
    "DEFAULT_SETTINGS",
    "configure_logging",
    "parse_decimal",
    "__version__",
]
