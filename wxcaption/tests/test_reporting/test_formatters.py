"""Tests for caption and report formatters."""

import json
from datetime import date

import pytest

from wxcaption.models.forecast import ConditionFlag, DayAggregate
from wxcaption.models.location import Coordinate
from wxcaption.models.outlook import HazardOutlook, OutlookSource
from wxcaption.models.report import WeatherReport
from wxcaption.reporting.formatters import (
    emoji_for_flags,
    format_alert_lines,
    format_alt_text,
    format_image_suggestions,
    format_long_caption,
    format_outlook,
    format_report_chat,
    format_report_json,
    format_report_text,
    format_short_caption,
    short_summary,
)

F = ConditionFlag
ALERT = {
    "properties": {
        "event": "Winter Weather Advisory",
        "severity": "Moderate",
        "areaDesc": "New York (Manhattan)",
        "headline": "Winter Weather Advisory issued February 11",
        "instruction": "Slow down and use caution while traveling. Check road conditions.",
    }
}


def _day(d: date, high=38, low=27, flags=(F.SUN, F.CLOUD), day_text="Mostly Sunny", night_text="Partly Cloudy"):
    return DayAggregate(
        date=d, high=high, low=low, flags=flags, day_text=day_text, night_text=night_text
    )


@pytest.fixture
def report() -> WeatherReport:
    return WeatherReport(
        place="New York City, NY",
        coordinate=Coordinate(40.7484, -73.9967),
        days=[
            _day(date(2026, 2, 11)),
            _day(date(2026, 2, 12), 41, 33, (F.RAIN, F.SNOW), "Chance Rain Showers", "Snow"),
        ],
        alerts=[ALERT],
        hwo=HazardOutlook(OutlookSource.ALERTS, "Hazardous Weather Outlook", "Fog possible."),
        office="OKX",
        day_count=2,
        generated_at="2026-02-11T12:00:00+00:00",
    )


class TestEmojiForFlags:
    def test_thunder_suppresses_rain(self):
        assert emoji_for_flags((F.THUNDER, F.RAIN)) == "⛈️"

    def test_precip_suppresses_sun(self):
        assert emoji_for_flags((F.RAIN, F.SUN)) == "🌧️"

    def test_sun_before_cloud(self):
        assert emoji_for_flags((F.SUN, F.CLOUD)) == "☀️"
        assert emoji_for_flags((F.CLOUD,)) == "☁️"

    def test_wind_and_fog_appended(self):
        assert emoji_for_flags((F.SNOW, F.FOG, F.WIND)) == "❄️ 🌬️ 🌫️"

    def test_wind_alone_blocks_sun_default(self):
        assert emoji_for_flags((F.WIND,)) == "🌬️"

    def test_default_cloud(self):
        assert emoji_for_flags(()) == "☁️"


class TestShortSummary:
    def test_empty(self):
        assert short_summary([]) == "Forecast unavailable."

    @pytest.mark.parametrize(
        "flags, expected",
        [
            ((F.THUNDER, F.RAIN), "Thunderstorms likely today"),
            ((F.RAIN,), "Rain likely today"),
            ((F.SNOW,), "Snow possible today"),
            ((F.SUN,), "Mostly sunny today"),
            ((F.SUN, F.CLOUD), "Typical mix of sun and clouds"),
        ],
    )
    def test_headline(self, flags, expected):
        assert expected in short_summary([_day(date(2026, 2, 11), flags=flags)])


class TestCaptions:
    def test_long_caption(self, report: WeatherReport):
        text = format_long_caption(report)
        lines = text.splitlines()
        assert lines[0] == "New York City, NY — 2-day snapshot"
        assert lines[2] == "☀️ WED Feb 11 — 38°/27° · Mostly Sunny"
        assert lines[3] == "🌧️ ❄️ THU Feb 12 — 41°/33° · Chance Rain Showers"
        assert "⚠️ Active alerts:" in lines
        assert (
            "- Winter Weather Advisory (Moderate) for New York (Manhattan): "
            "Slow down and use caution while traveling"
        ) in lines
        assert lines[-1] == "#weather #forecast #localweather #NewYorkCity"

    def test_long_caption_partial_temps(self, report: WeatherReport):
        report.days = [_day(date(2026, 2, 11), high=None, low=27, day_text=None)]
        assert "Low 27° · Partly Cloudy" in format_long_caption(report)

    def test_short_caption(self, report: WeatherReport):
        text = format_short_caption(report)
        assert text.startswith("☀️ 38°/27° — ☀️ Typical mix of sun and clouds today.")
        assert "⚠️ See alerts." in text
        assert text.endswith("\n\n#weather #forecast #localweather")

    def test_short_caption_no_days(self, report: WeatherReport):
        report.days = []
        report.alerts = []
        assert format_short_caption(report).startswith("☁️ — Forecast unavailable.")

    def test_alt_text(self, report: WeatherReport):
        assert format_alt_text(report) == (
            "New York City, NY weather preview. "
            "Wednesday: high 38°, low 27°, Mostly Sunny. "
            "Thursday: high 41°, low 33°, Chance Rain Showers."
        )

    def test_alt_text_missing_values(self, report: WeatherReport):
        report.days = [_day(date(2026, 2, 11), None, None, (), None, None)]
        assert "high —°, low —°, mixed skies." in format_alt_text(report)

    def test_alert_lines(self):
        assert format_alert_lines([ALERT, {}]) == [
            "Winter Weather Advisory — Winter Weather Advisory issued February 11",
            "Alert — No description",
        ]


class TestOutlook:
    def test_absent(self):
        assert format_outlook(None) == "No hazardous weather outlook available."

    def test_present(self, report: WeatherReport):
        assert format_outlook(report.hwo) == "Hazardous Weather Outlook\n\nFog possible."


class TestImageSuggestions:
    def test_mixed_skies_with_alerts(self, report: WeatherReport):
        text = format_image_suggestions(report, today=date(2026, 2, 11))
        assert text.startswith("Concept: Mixed skies")
        assert "Alerts: Create an attention variant" in text
        assert "Filename suggestion: New_York_City_forecast_2026-02-11.jpg" in text

    def test_storm_and_freezing(self, report: WeatherReport):
        report.days = [_day(date(2026, 2, 11), 40, 30, (F.THUNDER, F.WIND))]
        text = format_image_suggestions(report, today=date(2026, 2, 11))
        assert text.startswith("Concept: Dramatic storm")
        assert "Wind tip:" in text
        assert "Freezing:" in text

    def test_no_days(self, report: WeatherReport):
        report.days = []
        assert format_image_suggestions(report) == "No image suggestions available."


class TestReportOutputs:
    def test_json(self, report: WeatherReport):
        data = json.loads(format_report_json(report))
        assert data["place"] == "New York City, NY"
        assert data["days"][0]["date"] == "2026-02-11"
        assert data["days"][1]["flags"] == ["rain", "snow"]
        assert data["alerts"][0]["event"] == "Winter Weather Advisory"
        assert data["hwo"]["source"] == "alerts"

    def test_json_without_outlook(self, report: WeatherReport):
        report.hwo = None
        assert json.loads(format_report_json(report))["hwo"] is None

    def test_text_includes_outlook(self, report: WeatherReport):
        report.hwo = None
        assert format_report_text(report).endswith("No hazardous weather outlook available.")

    def test_chat(self, report: WeatherReport):
        text = format_report_chat(report)
        assert text.startswith("**New York City, NY**")
        assert "_Alt text:_ New York City, NY weather preview." in text
        assert "- Winter Weather Advisory — Winter Weather Advisory issued February 11" in text
