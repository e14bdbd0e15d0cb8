"""Numeric limits shared by the decimal engine.

Scales are Java ``int`` values and the compact fast path mirrors a Java
``long``, so both ranges are spelled out here rather than derived from the
host platform.
"""

# =============================================================================
# Scale range (signed 32-bit)
# =============================================================================

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

# =============================================================================
# Compact representation (signed 64-bit, sentinel excluded)
# =============================================================================

LONG_MIN = -(2**63)
LONG_MAX = 2**63 - 1

# Marks "no compact value, consult the big integer". Never a valid compact value.
INFLATED = LONG_MIN

# =============================================================================
# Operation limits
# =============================================================================

MAX_POW_EXPONENT = 999_999_999  # |n| accepted by pow()
MAX_EXPONENT_DIGITS = 10  # nonzero digits allowed in a parsed exponent

# Beyond this many digits int()/str() hit the interpreter's conversion limit,
# so the digit helpers split the work into chunks of at most this size.
STR_CHUNK_DIGITS = 2048

__all__ = [
    "INT32_MIN",
    "INT32_MAX",
    "LONG_MIN",
    "LONG_MAX",
    "INFLATED",
    "MAX_POW_EXPONENT",
    "MAX_EXPONENT_DIGITS",
    "STR_CHUNK_DIGITS",
]
