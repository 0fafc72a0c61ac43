"""Pipeline output consumed by the caption formatters."""

from dataclasses import dataclass, field
from typing import Any

from wxcaption.models.common import utc_now_iso
from wxcaption.models.forecast import DayAggregate
from wxcaption.models.location import Coordinate
from wxcaption.models.outlook import HazardOutlook


@dataclass
class WeatherReport:
    place: str
    coordinate: Coordinate
    days: list[DayAggregate]
    alerts: list[dict[str, Any]] = field(default_factory=list)
    hwo: HazardOutlook | None = None
    office: str | None = None
    day_count: int = 0
    generated_at: str = field(default_factory=utc_now_iso)
