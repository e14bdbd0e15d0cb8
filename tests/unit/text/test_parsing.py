"""Tests for the decimal string parser."""

import pytest
from structlog.testing import capture_logs

from bigdecimal import BigDecimal, ParseError, parse_decimal


class TestValidInput:
    """Tests for accepted strings."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("0", (0, 0)),
            ("-0", (0, 0)),
            ("12.50", (1250, 2)),
            ("-1.2E+3", (-12, -2)),
            ("+1.50E-2", (150, 4)),
            (".5", (5, 1)),
            ("5.", (5, 0)),
            ("007.10", (710, 2)),
            ("1e5", (1, -5)),
            ("1E-0", (1, 0)),
            (".5e-7", (5, 8)),
        ],
    )
    def test_parse(self, text: str, expected: tuple[int, int]):
        """Valid strings give (unscaled, scale)."""
        assert parse_decimal(text) == expected

    def test_exponent_leading_zeros_skipped(self):
        """Leading zeros of the exponent do not count toward its length."""
        assert parse_decimal("1e0000000000000000001") == (1, -1)
        assert parse_decimal("1e-00000000002147483647") == (1, 2147483647)

    @pytest.mark.parametrize("k", [0, 1, 9, 10, 11, 25, 1000, 5000])
    def test_exponent_leading_zeros_any_count(self, k: int):
        """Any run of exponent leading zeros parses to the same value."""
        text = "1.2e0" + "0" * k + "1"
        assert parse_decimal(text) == (12, 0)
        assert BigDecimal(text).equals(BigDecimal("12"))

    def test_exponent_at_int32_bounds(self):
        """The exponent may reach the int32 bounds."""
        assert parse_decimal("1E+2147483647") == (1, -2147483647)
        assert parse_decimal("1E-2147483647") == (1, 2147483647)


class TestInvalidInput:
    """Tests for rejected strings."""

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "+",
            "-",
            ".",
            "e5",
            "1e",
            "1e+",
            "1e+-3",
            "1..2",
            "1.2.3",
            " 1",
            "1 ",
            "1 000",
            "1_000",
            "NaN",
            "Infinity",
            "-Infinity",
            "0x16",
            "١",
            "1\n",
        ],
    )
    def test_rejected(self, text: str):
        """Malformed strings raise ParseError."""
        with pytest.raises(ParseError):
            parse_decimal(text)

    def test_parse_error_is_value_error(self):
        """ParseError can be caught as ValueError."""
        with pytest.raises(ValueError):
            parse_decimal("abc")

    def test_rejection_logged(self):
        """Rejected input is reported as a debug event with a truncated sample."""
        with capture_logs() as logs:
            with pytest.raises(ParseError):
                parse_decimal("x" * 100)
        assert logs[0]["event"] == "decimal_parse_rejected"
        assert logs[0]["length"] == 100
        assert len(logs[0]["text"]) == 40


class TestExponentLimits:
    """Tests for exponent and scale limits."""

    def test_too_many_exponent_digits(self):
        """More than ten significant exponent digits are rejected."""
        with pytest.raises(ParseError, match="Too many nonzero exponent digits"):
            parse_decimal("1e12345678901")

    def test_exponent_overflow(self):
        """Exponents outside int32 are rejected."""
        with pytest.raises(ParseError, match="Exponent overflow"):
            parse_decimal("1e2147483648")
        with pytest.raises(ParseError, match="Exponent overflow"):
            parse_decimal("1e-2147483649")

    def test_scale_out_of_range(self):
        """Fraction digits plus exponent must still fit int32."""
        with pytest.raises(ParseError, match="Scale out of range"):
            parse_decimal("1e-2147483648")
        with pytest.raises(ParseError, match="Scale out of range"):
            parse_decimal("0.1e-2147483647")
