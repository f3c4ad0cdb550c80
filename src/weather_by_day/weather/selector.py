"""Selection of the most representative forecast bucket for a day."""

import logging
from datetime import date, datetime, tzinfo
from typing import List, Optional, Sequence, Tuple

from weather_by_day.weather.dates import format_date
from weather_by_day.weather.models import ForecastSample

logger = logging.getLogger(__name__)

TARGET_HOUR = 12
MIDDAY_HOURS = (12, 15)
AFTERNOON_HOURS = (15, 18)


def local_time(sample: ForecastSample, tz: Optional[tzinfo] = None) -> datetime:
    """Convert a sample's UTC epoch timestamp to local time."""
    return datetime.fromtimestamp(sample.dt, tz)


def _first_in_window(
    entries: List[Tuple[datetime, ForecastSample]],
    window: Tuple[int, int]
) -> Optional[ForecastSample]:
    start, end = window
    for moment, sample in entries:
        if start <= moment.hour <= end:
            return sample
    return None


def select_sample(
    samples: Sequence[ForecastSample],
    target: date,
    tz: Optional[tzinfo] = None
) -> Optional[ForecastSample]:
    """Pick the bucket that best represents the weather on target.

    Buckets are about 3 hours apart and rarely land on noon, so the
    midday window wins, then the afternoon window, then whatever is
    closest to 12:00.

    Args:
        samples: Forecast buckets
        target: Local calendar date to select for
        tz: Timezone for local time conversion (process local time if None)

    Returns:
        The selected sample, or None if no sample falls on target
    """
    day_entries = []
    for sample in samples:
        moment = local_time(sample, tz)
        if moment.date() == target:
            day_entries.append((moment, sample))
    day_entries.sort(key=lambda entry: entry[1].dt)

    if not day_entries:
        logger.info(f"No forecast samples found for {format_date(target)}")
        return None

    selected = _first_in_window(day_entries, MIDDAY_HOURS)
    if selected is None:
        selected = _first_in_window(day_entries, AFTERNOON_HOURS)
    if selected is None:
        # min() keeps the first of equal keys, entries are already time ordered
        _, selected = min(day_entries, key=lambda entry: abs(entry[0].hour - TARGET_HOUR))

    logger.info(
        f"Selected sample at {local_time(selected, tz).strftime('%Y-%m-%d %H:%M')} "
        f"out of {len(day_entries)} for {format_date(target)}"
    )
    return selected


def available_dates(
    samples: Sequence[ForecastSample],
    tz: Optional[tzinfo] = None,
    limit: int = 5
) -> List[str]:
    """Distinct local dates covered by samples, in order of appearance."""
    dates: List[str] = []
    for sample in samples:
        day = format_date(local_time(sample, tz).date())
        if day not in dates:
            dates.append(day)
    return dates[:limit]
