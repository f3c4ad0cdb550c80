"""Shared test fixtures."""

from datetime import date, datetime, timezone

import pytest

from weather_by_day.config import Settings
from payloads import API_BASE, GEO_BASE


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at the mocked provider, resolving dates in UTC."""
    return Settings(
        api_key="test-key",
        api_base_url=API_BASE,
        geo_base_url=GEO_BASE,
        default_units="metric",
        default_lang="pt_br",
        request_timeout=5.0,
        forecast_window_days=5,
        timezone="UTC",
    )


@pytest.fixture
def today_utc() -> date:
    return datetime.now(timezone.utc).date()
