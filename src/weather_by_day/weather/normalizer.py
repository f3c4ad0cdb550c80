"""Mapping of upstream payloads to the normalized weather report."""

import math
from datetime import date, datetime, timezone
from typing import Optional, Union

from weather_by_day.weather.dates import format_date
from weather_by_day.weather.models import (
    ConditionInfo, CurrentWeatherSnapshot, ForecastSample,
    TemperatureInfo, WeatherReport, WindInfo
)

# Monday first, matching date.weekday()
WEEKDAY_NAMES = {
    "pt": ["segunda-feira", "terça-feira", "quarta-feira", "quinta-feira",
           "sexta-feira", "sábado", "domingo"],
    "en": ["monday", "tuesday", "wednesday", "thursday",
           "friday", "saturday", "sunday"],
    "es": ["lunes", "martes", "miércoles", "jueves",
           "viernes", "sábado", "domingo"],
    "fr": ["lundi", "mardi", "mercredi", "jeudi",
           "vendredi", "samedi", "dimanche"],
    "de": ["montag", "dienstag", "mittwoch", "donnerstag",
           "freitag", "samstag", "sonntag"],
    "it": ["lunedì", "martedì", "mercoledì", "giovedì",
           "venerdì", "sabato", "domenica"],
}
FALLBACK_LANGUAGE = "pt_br"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return int(math.floor(value + 0.5))


def _language(lang: Optional[str]) -> str:
    return (lang or "").lower().replace("-", "_").split("_")[0]


def weekday_name(day: date, lang: str = "pt_br", fallback: str = FALLBACK_LANGUAGE) -> str:
    """Localized, capitalized long weekday name.

    lang accepts provider codes such as "pt_br" or "en". Languages
    without a table use fallback, then Portuguese.
    """
    names = (
        WEEKDAY_NAMES.get(_language(lang))
        or WEEKDAY_NAMES.get(_language(fallback))
        or WEEKDAY_NAMES["pt"]
    )
    name = names[day.weekday()]
    return name[:1].upper() + name[1:]


def utc_date(timestamp: int) -> date:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).date()


def normalize(
    source: Union[ForecastSample, CurrentWeatherSnapshot],
    city: Optional[str] = None,
    country: Optional[str] = None,
    lang: str = "pt_br",
    fallback_lang: str = FALLBACK_LANGUAGE
) -> WeatherReport:
    """Build a WeatherReport from a forecast sample or a current snapshot.

    Args:
        source: Forecast bucket or current-weather payload
        city: City name (defaults to the snapshot's own name)
        country: Country code (defaults to the snapshot's own country)
        lang: Language used for the weekday name
        fallback_lang: Weekday language when lang has no table

    Returns:
        Normalized weather report
    """
    if isinstance(source, CurrentWeatherSnapshot):
        city = city or source.name
        country = country or source.sys.country
        # The current-weather endpoint reports no precipitation probability
        precipitation = 0
    else:
        precipitation = round_half_up(source.pop * 100)

    # Reported in the bucket's UTC date
    day = utc_date(source.dt)
    condition = source.weather[0]

    return WeatherReport(
        date=format_date(day),
        day_of_week=weekday_name(day, lang, fallback_lang),
        city=city or "",
        country=country or "",
        temperature=TemperatureInfo(
            min=round_half_up(source.main.temp_min),
            max=round_half_up(source.main.temp_max),
            current=round_half_up(source.main.temp),
            feels_like=round_half_up(source.main.feels_like),
        ),
        weather=ConditionInfo(
            main=condition.main,
            description=condition.description,
            icon=condition.icon,
        ),
        humidity=source.main.humidity,
        pressure=source.main.pressure,
        wind=WindInfo(speed=source.wind.speed, direction=source.wind.deg),
        clouds=source.clouds.all,
        visibility=source.visibility / 1000 if source.visibility is not None else None,
        precipitation_probability=precipitation,
    )
