"""Test helpers module for shared test utilities.

- factories: shorthand constructors for BigDecimal and MathContext
- golden: pydantic models and loaders for the JSON golden cases
"""

from tests.helpers.factories import big, ctx, raw
from tests.helpers.golden import GoldenCase, GoldenSuite, iter_golden_cases, load_golden_suite

__all__ = [
    # Factories
    "big",
    "ctx",
    "raw",
    # Golden cases
    "GoldenCase",
    "GoldenSuite",
    "iter_golden_cases",
    "load_golden_suite",
]
