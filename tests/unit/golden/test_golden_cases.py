"""Golden cases loaded from tests/fixtures/golden/*.json."""

from collections.abc import Callable

import pytest

import bigdecimal
from bigdecimal import BigDecimal
from tests.helpers import GoldenCase, iter_golden_cases, load_golden_suite

Operation = Callable[[GoldenCase], object]

_OPERATIONS: dict[str, Operation] = {
    "add": lambda c: BigDecimal(c.args[0]).add(BigDecimal(c.args[1]), c.mc),
    "subtract": lambda c: BigDecimal(c.args[0]).subtract(BigDecimal(c.args[1]), c.mc),
    "multiply": lambda c: BigDecimal(c.args[0]).multiply(BigDecimal(c.args[1]), c.mc),
    "round": lambda c: BigDecimal(c.args[0]).round(c.mc),
    "divide": lambda c: BigDecimal(c.args[0]).divide(BigDecimal(c.args[1]), c.mc),
    "divide_to_scale": lambda c: BigDecimal(c.args[0]).divide_to_scale(
        BigDecimal(c.args[1]), c.scale, c.mode
    ),
    "divide_to_integral_value": lambda c: BigDecimal(c.args[0]).divide_to_integral_value(
        BigDecimal(c.args[1]), c.mc
    ),
    "remainder": lambda c: BigDecimal(c.args[0]).remainder(BigDecimal(c.args[1]), c.mc),
    "pow": lambda c: BigDecimal(c.args[0]).pow(int(c.args[1]), c.mc),
    "sqrt": lambda c: BigDecimal(c.args[0]).sqrt(c.mc),
    "str": lambda c: BigDecimal(c.args[0]),
    "engineering": lambda c: BigDecimal(c.args[0]).to_engineering_string(),
    "plain": lambda c: BigDecimal(c.args[0]).to_plain_string(),
}

GOLDEN_CASES = list(iter_golden_cases())


class TestGoldenFiles:
    """Tests for the golden fixture files themselves."""

    @pytest.mark.parametrize("name", ["arithmetic", "division", "formatting", "power"])
    def test_suite_loads(self, name: str):
        """Each golden file validates and holds at least one case."""
        suite = load_golden_suite(name)
        assert suite.description
        assert len(suite.cases) > 0

    def test_cases_are_well_formed(self):
        """Every case names a known operation and exactly one outcome."""
        for _, case in GOLDEN_CASES:
            assert case.op in _OPERATIONS
            assert (case.expected is None) != (case.error is None)
            if case.error is not None:
                assert issubclass(getattr(bigdecimal, case.error), bigdecimal.BigDecimalError)

    def test_division_suite_covers_each_entry_point(self, division_suite):
        """The division suite exercises all four division operations."""
        ops = {case.op for case in division_suite.cases}
        assert {"divide", "divide_to_scale", "divide_to_integral_value", "remainder"} <= ops

    def test_case_ids_unique(self):
        """Case ids are unique across all suites."""
        ids = [name for name, _ in GOLDEN_CASES]
        assert len(ids) == len(set(ids))


class TestGoldenCases:
    """Run every golden case against the implementation."""

    @pytest.mark.parametrize("name,case", GOLDEN_CASES, ids=[name for name, _ in GOLDEN_CASES])
    def test_case(self, name: str, case: GoldenCase):
        """The operation renders as expected or raises the expected error."""
        operation = _OPERATIONS[case.op]
        if case.error is not None:
            with pytest.raises(getattr(bigdecimal, case.error)):
                operation(case)
            return

        assert str(operation(case)) == case.expected, name
