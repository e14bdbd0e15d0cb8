"""Integer-level algorithms behind BigDecimal.

Every function here works on raw (unscaled, scale) pairs of Python ints:
- digits: digit counts, powers of ten, chunked int/str conversion
- scaling: int32 scale checks, alignment, magnitude comparison
- rounding: rounding modes, precision rounding, rescaling
- addition: context-rounded addition
- division: exact, precision, scale and integral division
- power: integer powers and square roots
"""
