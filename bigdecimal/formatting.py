"""String rendering of raw (unscaled, scale) values.

Three layouts, all pure functions of the stored digits:
- plain: never uses an exponent
- scientific: Java toString(), exponent once the number is very large or small
- engineering: like scientific, with the exponent a multiple of three

Formatting never rounds.
"""

from __future__ import annotations

from bigdecimal.math.digits import int_to_digits


def _layout(unscaled: int, scale: int, scientific: bool) -> str:
    if scale == 0:
        return ("-" if unscaled < 0 else "") + int_to_digits(unscaled)

    coeff = int_to_digits(unscaled)
    adjusted = -scale + (len(coeff) - 1)
    parts: list[str] = []

    if scale >= 0 and adjusted >= -6:
        # Plain number
        pad = scale - len(coeff)
        if pad >= 0:
            parts.append("0.")
            parts.append("0" * pad)
            parts.append(coeff)
        else:
            parts.append(coeff[:-pad])
            parts.append(".")
            parts.append(coeff[-pad:])
    else:
        if scientific:
            parts.append(coeff[0])
            if len(coeff) > 1:
                parts.append(".")
                parts.append(coeff[1:])
        else:
            sig = adjusted % 3  # non-negative for negative adjusted too
            adjusted -= sig
            sig += 1
            if unscaled == 0:
                if sig == 2:
                    parts.append("0.00")
                    adjusted += 3
                elif sig == 3:
                    parts.append("0.0")
                    adjusted += 3
                else:
                    parts.append("0")
            elif sig >= len(coeff):
                parts.append(coeff)
                parts.append("0" * (sig - len(coeff)))
            else:
                parts.append(coeff[:sig])
                parts.append(".")
                parts.append(coeff[sig:])
        if adjusted != 0:
            parts.append("E+" if adjusted > 0 else "E")
            parts.append(str(adjusted))

    body = "".join(parts)
    return "-" + body if unscaled < 0 else body


def to_scientific_string(unscaled: int, scale: int) -> str:
    """Render using scientific notation when an exponent is needed.

    Examples:
        (123, 0)   -> "123"
        (123, -2)  -> "1.23E+4"
        (123, 10)  -> "1.23E-8"
        (-123, 5)  -> "-0.00123"
    """
    return _layout(unscaled, scale, scientific=True)


def to_engineering_string(unscaled: int, scale: int) -> str:
    """Render using engineering notation when an exponent is needed.

    Examples:
        (123, -2)  -> "12.3E+3"
        (0, -10)   -> "0.00E+12"
    """
    return _layout(unscaled, scale, scientific=False)


def to_plain_string(unscaled: int, scale: int) -> str:
    """Render without an exponent."""
    sign = "-" if unscaled < 0 else ""
    if scale == 0:
        return sign + int_to_digits(unscaled)
    if scale < 0:
        if unscaled == 0:
            return "0"
        return sign + int_to_digits(unscaled) + "0" * -scale

    digits = int_to_digits(unscaled)
    insertion_point = len(digits) - scale
    if insertion_point == 0:
        return sign + "0." + digits
    if insertion_point > 0:
        return sign + digits[:insertion_point] + "." + digits[insertion_point:]
    return sign + "0." + "0" * -insertion_point + digits


__all__ = [
    "to_scientific_string",
    "to_engineering_string",
    "to_plain_string",
]
