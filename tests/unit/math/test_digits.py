"""Tests for digit-level helpers."""

import pytest

from bigdecimal.constants import INFLATED, LONG_MAX
from bigdecimal import BigDecimal
from bigdecimal.math import digits
from bigdecimal.math.digits import (
    TEN_POW_CACHE_LIMIT,
    big_digit_length,
    digit_length,
    digits_to_int,
    int_to_digits,
    is_compact,
    long_digit_length,
    remove_factor,
    ten_pow,
)


class TestDigitLength:
    """Tests for digit counting."""

    @pytest.mark.parametrize(
        "value,expected",
        [(0, 1), (9, 1), (10, 2), (-99, 2), (10**18, 19), (LONG_MAX, 19), (-(10**17), 18)],
    )
    def test_long_digit_length(self, value: int, expected: int):
        """Compact values count digits of the magnitude."""
        assert long_digit_length(value) == expected

    @pytest.mark.parametrize("n", [1, 19, 20, 100, 1000])
    def test_big_digit_length_at_powers(self, n: int):
        """Lengths are exact on both sides of each power of ten."""
        assert big_digit_length(10**n) == n + 1
        assert big_digit_length(10**n - 1) == n
        assert big_digit_length(-(10**n)) == n + 1

    def test_digit_length_dispatch(self):
        """digit_length agrees with both estimators."""
        for value in (0, 7, LONG_MAX, LONG_MAX + 1, INFLATED, 10**50):
            assert digit_length(value) == len(str(abs(value)))


class TestCompact:
    """Tests for the compact range."""

    def test_bounds(self):
        """The compact range excludes the INFLATED sentinel."""
        assert is_compact(LONG_MAX)
        assert is_compact(INFLATED + 1)
        assert not is_compact(INFLATED)
        assert not is_compact(LONG_MAX + 1)


class TestTenPow:
    """Tests for ten_pow."""

    def test_values(self):
        """ten_pow matches 10**n inside and outside the table."""
        assert ten_pow(0) == 1
        assert ten_pow(18) == 10**18
        assert ten_pow(25) == 10**25

    def test_large_powers_not_cached(self):
        """Powers above the cache limit are computed but not retained."""
        digits._cached_ten_pow.cache_clear()
        assert ten_pow(TEN_POW_CACHE_LIMIT + 1) == 10 ** (TEN_POW_CACHE_LIMIT + 1)
        assert BigDecimal(1).set_scale(1_000_000).precision == 1_000_001
        assert digits._cached_ten_pow.cache_info().currsize == 0

    def test_small_powers_cached(self):
        """Powers up to the cache limit are kept."""
        digits._cached_ten_pow.cache_clear()
        assert ten_pow(TEN_POW_CACHE_LIMIT) == 10**TEN_POW_CACHE_LIMIT
        assert ten_pow(TEN_POW_CACHE_LIMIT) == 10**TEN_POW_CACHE_LIMIT
        info = digits._cached_ten_pow.cache_info()
        assert (info.currsize, info.hits) == (1, 1)


class TestRemoveFactor:
    """Tests for remove_factor."""

    def test_removes_all(self):
        """Every copy of the factor is removed."""
        assert remove_factor(1000, 10) == (1, 3)
        assert remove_factor(3 * 2**100, 2) == (3, 100)
        assert remove_factor(-7 * 5**37, 5) == (-7, 37)

    def test_no_factor(self):
        """Values without the factor are returned unchanged."""
        assert remove_factor(123, 10) == (123, 0)

    def test_limit(self):
        """At most limit copies are removed."""
        assert remove_factor(10**20, 10, 5) == (10**15, 5)
        assert remove_factor(10**20, 10, 0) == (10**20, 0)
        assert remove_factor(10**20, 10, 1000) == (1, 20)

    @pytest.mark.parametrize("limit", [1, 2, 3, 7, 8, 9, 15, 16, 17, 31])
    def test_limit_exact_for_any_bound(self, limit: int):
        """Galloping never overshoots the limit."""
        assert remove_factor(10**64, 10, limit) == (10 ** (64 - limit), limit)

    def test_zero_rejected(self):
        """Zero has infinitely many factors."""
        with pytest.raises(ValueError):
            remove_factor(0, 10)


class TestDigitStrings:
    """Tests for chunked int/str conversion."""

    def test_short(self):
        """Short strings convert directly."""
        assert digits_to_int("00123") == 123
        assert int_to_digits(-123) == "123"

    def test_past_interpreter_limit(self):
        """Conversions work beyond the default int/str digit limit."""
        text = "1" + "0" * 5000
        assert digits_to_int(text) == 10**5000
        assert int_to_digits(10**5000) == text

    def test_inner_zeros_preserved(self):
        """Chunk boundaries keep zero padding."""
        value = 7 * 10**6000 + 3
        assert int_to_digits(value) == "7" + "0" * 5999 + "3"
        assert digits_to_int(int_to_digits(value)) == value
