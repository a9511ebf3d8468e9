"""Shared fixtures for the bookkeeping tests."""

from datetime import date

import pytest

from cashflow.catalog import get_catalog
from cashflow.classification import normalize
from cashflow.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached per process; tests that touch the env need a reload."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def catalog():
    return get_catalog()


@pytest.fixture
def sample_transactions():
    """A small July/August 2024 snapshot covering both directions."""
    return [
        normalize(date(2024, 7, 15), "Client Invoice #1042", 3300),
        normalize(date(2024, 7, 15), "OFFICEWORKS SYDNEY", -67),
        normalize(date(2024, 7, 20), "NETFLIX.COM", "-16.99"),
        normalize(date(2024, 8, 2), "WOOLWORTHS METRO", -80),
        normalize(date(2024, 8, 9), "RANDOM XYZ", -50),
        normalize(date(2024, 8, 12), "RED CROSS DONATION", -50),
    ]
