"""Reduce time-ordered forecast periods into per-day summaries."""

import logging
import math
from collections import defaultdict
from datetime import UTC, date, datetime, timedelta

from wxcaption.models.common import parse_timestamp, utc_now
from wxcaption.models.forecast import DayAggregate, ForecastPeriod
from wxcaption.summary.conditions import classify

logger = logging.getLogger(__name__)


def aggregate(
    periods: list[ForecastPeriod],
    day_count: int,
    now: datetime | None = None,
) -> list[DayAggregate]:
    """Group periods starting in [now, now + day_count days] by UTC date.

    Returns at most day_count days in ascending date order; days with no
    periods are simply absent.
    """
    if day_count <= 0:
        return []
    if now is None:
        now = utc_now()
    elif now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    cutoff = now + timedelta(days=day_count)

    groups: dict[date, list[ForecastPeriod]] = defaultdict(list)
    for p in periods:
        start = parse_timestamp(p.start_time)
        if start is None:
            logger.debug("Skipping period with unparseable start %r", p.start_time)
            continue
        if start < now or start > cutoff:
            continue
        groups[start.astimezone(UTC).date()].append(p)

    return [_summarize_day(day, groups[day]) for day in sorted(groups)[:day_count]]


def _summarize_day(day: date, items: list[ForecastPeriod]) -> DayAggregate:
    temps = [
        p.temperature
        for p in items
        if p.temperature is not None and math.isfinite(p.temperature)
    ]
    day_period = next((p for p in items if p.is_daytime), None)
    night_period = next((p for p in items if not p.is_daytime), None)
    return DayAggregate(
        date=day,
        high=max(temps) if temps else None,
        low=min(temps) if temps else None,
        flags=classify(" ".join(p.short_forecast for p in items)),
        day_text=day_period.short_forecast if day_period else None,
        night_text=night_period.short_forecast if night_period else None,
        periods=tuple(items),
    )
