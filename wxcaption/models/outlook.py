"""Hazardous Weather Outlook result model."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class OutlookSource(StrEnum):
    ALERTS = "alerts"
    PRODUCTS = "products"


@dataclass(frozen=True)
class HazardOutlook:
    source: OutlookSource
    title: str
    text: str
    raw: Any = None
