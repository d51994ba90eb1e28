"""Shared fixtures for the analytics test-suite."""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterator

import pytest

from options_analytics.config import get_settings
from options_analytics.core.models import PricingContext
from options_analytics.tests.utils import VALUATION_TIME, expiry_in


@pytest.fixture(autouse=True)
def _reset_settings() -> Iterator[None]:
    """Settings are cached per process; make every test start from the environment."""

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def valuation_time() -> datetime:
    return VALUATION_TIME


@pytest.fixture
def context() -> PricingContext:
    return PricingContext(
        underlying_price=100.0,
        risk_free_rate=0.05,
        volatility=0.25,
        valuation_time=VALUATION_TIME,
    )


@pytest.fixture
def expiry_30d() -> date:
    return expiry_in(30)
