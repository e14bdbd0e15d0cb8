"""Rounding modes and math contexts.

A MathContext pairs a precision (number of significant digits, 0 meaning
unlimited) with a RoundingMode. Both are immutable and can be shared freely
between threads and operations.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class RoundingMode(Enum):
    """Policy applied to the digits discarded by a rounding step.

    Values match the ordinals of java.math.RoundingMode.
    """

    UP = 0  # away from zero
    DOWN = 1  # toward zero
    CEILING = 2  # toward positive infinity
    FLOOR = 3  # toward negative infinity
    HALF_UP = 4  # nearest, ties away from zero
    HALF_DOWN = 5  # nearest, ties toward zero
    HALF_EVEN = 6  # nearest, ties to the even neighbour
    UNNECESSARY = 7  # assert the result is exact

    @property
    def is_half(self) -> bool:
        """True for the three round-to-nearest modes."""
        return self in (RoundingMode.HALF_UP, RoundingMode.HALF_DOWN, RoundingMode.HALF_EVEN)


@dataclass(frozen=True)
class MathContext:
    """Precision and rounding policy for inexact operations.

    Attributes:
        precision: Significant digits to keep. 0 means unlimited, in which
            case operations must produce the exact result or fail.
        rounding_mode: Rounding policy (default: HALF_UP)
    """

    UNLIMITED: ClassVar[MathContext]
    DECIMAL32: ClassVar[MathContext]
    DECIMAL64: ClassVar[MathContext]
    DECIMAL128: ClassVar[MathContext]

    precision: int
    rounding_mode: RoundingMode = RoundingMode.HALF_UP

    def __post_init__(self) -> None:
        if isinstance(self.precision, bool) or not isinstance(self.precision, int):
            raise TypeError(f"precision must be an int, got {type(self.precision).__name__}")
        if self.precision < 0:
            raise ValueError(f"Digits < 0: {self.precision}")
        if not isinstance(self.rounding_mode, RoundingMode):
            raise TypeError(
                f"rounding_mode must be a RoundingMode, got {type(self.rounding_mode).__name__}"
            )

    @property
    def is_unlimited(self) -> bool:
        return self.precision == 0

    def __str__(self) -> str:
        return f"precision={self.precision} roundingMode={self.rounding_mode.name}"


# IEEE 754-2008 interchange formats plus the unlimited context
UNLIMITED = MathContext(0, RoundingMode.HALF_UP)
DECIMAL32 = MathContext(7, RoundingMode.HALF_EVEN)
DECIMAL64 = MathContext(16, RoundingMode.HALF_EVEN)
DECIMAL128 = MathContext(34, RoundingMode.HALF_EVEN)

MathContext.UNLIMITED = UNLIMITED
MathContext.DECIMAL32 = DECIMAL32
MathContext.DECIMAL64 = DECIMAL64
MathContext.DECIMAL128 = DECIMAL128

__all__ = [
    "RoundingMode",
    "MathContext",
    "UNLIMITED",
    "DECIMAL32",
    "DECIMAL64",
    "DECIMAL128",
]
