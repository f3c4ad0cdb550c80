"""Date token resolution and forecast window classification."""

import logging
import re
from datetime import date, datetime, timedelta, tzinfo
from enum import Enum
from typing import Optional

from weather_by_day.weather.errors import (
    ForecastHorizonExceeded, InvalidDateFormat, PastDateNotSupported
)

logger = logging.getLogger(__name__)

TODAY = "today"
TOMORROW = "tomorrow"

_DATE_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


class DateRange(str, Enum):
    """Position of a resolved date relative to today."""
    PAST = "past"
    CURRENT_DAY = "current_day"
    WITHIN_FORECAST_WINDOW = "within_forecast_window"
    BEYOND_FORECAST_WINDOW = "beyond_forecast_window"


def today_local(tz: Optional[tzinfo] = None) -> date:
    """Return today's calendar date in tz (process local time if None)."""
    return datetime.now(tz).date()


def format_date(value: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return value.strftime("%Y-%m-%d")


def uses_current_weather(token: Optional[str]) -> bool:
    """Whether a date token is served by the current-weather endpoint.

    Only an absent token or the literal "today" qualify. An explicit
    YYYY-MM-DD equal to today still goes through the forecast.
    """
    return not token or token == TODAY


def resolve_date(
    token: Optional[str] = None,
    tz: Optional[tzinfo] = None,
    today: Optional[date] = None
) -> date:
    """Resolve a date token to a local calendar date.

    Args:
        token: "today", "tomorrow", "YYYY-MM-DD" or None
        tz: Timezone that defines "today" (process local time if None)
        today: Override for the current date

    Returns:
        The resolved calendar date

    Raises:
        InvalidDateFormat: If the token is not recognised or not a real date
    """
    current = today or today_local(tz)

    if not token or token == TODAY:
        return current

    if token == TOMORROW:
        return current + timedelta(days=1)

    # Build from components; parsing through an epoch timestamp shifts the
    # day in timezones behind UTC.
    match = _DATE_PATTERN.match(token)
    if not match:
        raise InvalidDateFormat(
            f"Invalid date format: {token}. Use 'today', 'tomorrow' or 'YYYY-MM-DD'"
        )

    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        raise InvalidDateFormat(
            f"Invalid date: {token}. Use 'today', 'tomorrow' or 'YYYY-MM-DD'"
        )


def classify_range(
    resolved: date,
    today: date,
    window_days: int = 5
) -> DateRange:
    """Classify a resolved date by its whole-day distance from today."""
    diff = (resolved - today).days

    if diff < 0:
        return DateRange.PAST
    if diff == 0:
        return DateRange.CURRENT_DAY
    if diff <= window_days:
        return DateRange.WITHIN_FORECAST_WINDOW
    return DateRange.BEYOND_FORECAST_WINDOW


def reject_unsupported(
    classification: DateRange,
    resolved: date,
    window_days: int = 5
) -> None:
    """Raise for classifications no upstream endpoint can serve.

    Raises:
        PastDateNotSupported: If the date lies before today
        ForecastHorizonExceeded: If the date lies beyond the forecast window
    """
    if classification is DateRange.PAST:
        raise PastDateNotSupported(
            f"Weather data is not available for past dates. "
            f"Requested date: {format_date(resolved)}"
        )

    if classification is DateRange.BEYOND_FORECAST_WINDOW:
        raise ForecastHorizonExceeded(
            f"The forecast is only available for the next {window_days} days. "
            f"Requested date: {format_date(resolved)}"
        )


def ensure_forecast_range(
    resolved: date,
    today: date,
    window_days: int = 5
) -> DateRange:
    """Classify a date and reject the ones the forecast cannot serve.

    Raises:
        PastDateNotSupported: If the date lies before today
        ForecastHorizonExceeded: If the date lies beyond the forecast window
    """
    classification = classify_range(resolved, today, window_days)
    reject_unsupported(classification, resolved, window_days)

    logger.debug(f"Date {format_date(resolved)} classified as {classification.value}")
    return classification
