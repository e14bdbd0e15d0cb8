"""Pytest configuration and fixtures."""

from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

from tests.helpers.golden import GOLDEN_DIR, GoldenSuite, load_golden_suite

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the fixtures directory path."""
    return FIXTURES_DIR


@pytest.fixture
def golden_dir() -> Path:
    """Return the golden cases directory path."""
    return GOLDEN_DIR


@pytest.fixture
def division_suite() -> GoldenSuite:
    """Load the division golden suite."""
    return load_golden_suite("division")


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Restore the default structlog configuration after each test."""
    yield
    structlog.reset_defaults()
