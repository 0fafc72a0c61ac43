"""Forecast data models: raw periods, condition flags and daily aggregates."""

from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum
from typing import Any


class ConditionFlag(StrEnum):
    THUNDER = "thunder"
    RAIN = "rain"
    SNOW = "snow"
    FOG = "fog"
    WIND = "wind"
    SUN = "sun"
    CLOUD = "cloud"


# Consumers rely on this order: thunder outranks rain, and sun/cloud are
# only defaults when no precipitation or visibility flag is present.
FLAG_PRIORITY: tuple[ConditionFlag, ...] = (
    ConditionFlag.THUNDER,
    ConditionFlag.RAIN,
    ConditionFlag.SNOW,
    ConditionFlag.FOG,
    ConditionFlag.WIND,
    ConditionFlag.SUN,
    ConditionFlag.CLOUD,
)


@dataclass(frozen=True)
class ForecastPeriod:
    start_time: str
    is_daytime: bool
    temperature: float | None
    short_forecast: str
    name: str = ""
    end_time: str = ""
    temperature_unit: str = "F"

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "ForecastPeriod":
        temp = raw.get("temperature")
        # bool is an int subclass; never treat it as a temperature
        if isinstance(temp, bool) or not isinstance(temp, int | float):
            temp = None
        return cls(
            start_time=raw.get("startTime", ""),
            is_daytime=bool(raw.get("isDaytime", False)),
            temperature=temp,
            short_forecast=raw.get("shortForecast") or "",
            name=raw.get("name", ""),
            end_time=raw.get("endTime", ""),
            temperature_unit=raw.get("temperatureUnit", "F"),
        )


@dataclass(frozen=True)
class DayAggregate:
    date: date
    high: float | None
    low: float | None
    flags: tuple[ConditionFlag, ...]
    day_text: str | None
    night_text: str | None
    periods: tuple[ForecastPeriod, ...] = field(default_factory=tuple)
