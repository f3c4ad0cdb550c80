"""Tests for forecast bucket selection."""

from datetime import date, timedelta, timezone

from payloads import epoch, make_reading
from weather_by_day.weather.models import ForecastSample
from weather_by_day.weather.selector import available_dates, select_sample

TARGET = date(2026, 10, 20)
UTC = timezone.utc


def samples_at(*hours: int, day: date = TARGET):
    return [ForecastSample.model_validate(make_reading(epoch(day, hour))) for hour in hours]


def hour_of(sample: ForecastSample) -> int:
    return (sample.dt - epoch(TARGET, 0)) // 3600


class TestSelectSample:
    def test_midday_beats_evening(self):
        selected = select_sample(samples_at(20, 13), TARGET, UTC)
        assert hour_of(selected) == 13

    def test_closest_to_noon_when_no_window_matches(self):
        selected = select_sample(samples_at(21, 9), TARGET, UTC)
        assert hour_of(selected) == 9

    def test_first_midday_by_timestamp(self):
        selected = select_sample(samples_at(15, 12, 3), TARGET, UTC)
        assert hour_of(selected) == 12

    def test_hour_15_reached_through_midday_window(self):
        selected = select_sample(samples_at(18, 15), TARGET, UTC)
        assert hour_of(selected) == 15

    def test_afternoon_window(self):
        selected = select_sample(samples_at(6, 9, 18, 21), TARGET, UTC)
        assert hour_of(selected) == 18

    def test_full_day_of_buckets(self):
        selected = select_sample(samples_at(*range(0, 24, 3)), TARGET, UTC)
        assert hour_of(selected) == 12

    def test_tie_goes_to_earliest(self):
        selected = select_sample(samples_at(19, 5), TARGET, UTC)
        assert hour_of(selected) == 5

    def test_other_days_ignored(self):
        samples = samples_at(12, day=TARGET - timedelta(days=1)) + samples_at(21)
        selected = select_sample(samples, TARGET, UTC)
        assert hour_of(selected) == 21

    def test_no_sample_for_target(self):
        samples = samples_at(12, day=TARGET + timedelta(days=1))
        assert select_sample(samples, TARGET, UTC) is None

    def test_empty_samples(self):
        assert select_sample([], TARGET, UTC) is None

    def test_uses_local_date_and_hour(self):
        sao_paulo = timezone(timedelta(hours=-3))
        # 02:00 UTC on the 21st is 23:00 on the 20th in UTC-3
        late = ForecastSample.model_validate(make_reading(epoch(TARGET + timedelta(days=1), 2)))
        # 15:00 UTC is noon in UTC-3
        noon = ForecastSample.model_validate(make_reading(epoch(TARGET, 15)))

        assert select_sample([late], TARGET, UTC) is None
        assert select_sample([late], TARGET, sao_paulo) is late
        assert select_sample([late, noon], TARGET, sao_paulo) is noon


class TestAvailableDates:
    def test_deduplicated_in_order(self):
        samples = (
            samples_at(0, 12, day=TARGET)
            + samples_at(0, 12, day=TARGET + timedelta(days=1))
        )
        assert available_dates(samples, UTC) == ["2026-10-20", "2026-10-21"]

    def test_limited_to_five(self):
        samples = []
        for offset in range(7):
            samples += samples_at(9, day=TARGET + timedelta(days=offset))
        dates = available_dates(samples, UTC)
        assert dates == [
            "2026-10-20", "2026-10-21", "2026-10-22", "2026-10-23", "2026-10-24"
        ]
