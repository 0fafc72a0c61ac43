"""Tests for forecast phrase classification."""

from wxcaption.models.forecast import FLAG_PRIORITY, ConditionFlag
from wxcaption.summary.conditions import classify


class TestClassify:
    def test_thunder_and_rain_in_priority_order(self):
        assert classify("Thunderstorms likely with rain") == (
            ConditionFlag.THUNDER,
            ConditionFlag.RAIN,
        )

    def test_order_independent_of_input(self):
        assert classify("Clear then patchy fog and rain") == (
            ConditionFlag.RAIN,
            ConditionFlag.FOG,
            ConditionFlag.SUN,
        )

    def test_case_insensitive(self):
        assert classify("MOSTLY SUNNY") == (ConditionFlag.SUN,)

    def test_keyword_variants(self):
        assert classify("Slight Chance T-storms") == (ConditionFlag.THUNDER,)
        assert classify("Drizzle") == (ConditionFlag.RAIN,)
        assert classify("Snow Flurries") == (ConditionFlag.SNOW,)
        assert classify("Sleet") == (ConditionFlag.SNOW,)
        assert classify("Haze") == (ConditionFlag.FOG,)
        assert classify("Breezy with gusts") == (ConditionFlag.WIND,)
        assert classify("Partly Cloudy") == (ConditionFlag.CLOUD,)

    def test_multiple_flags(self):
        flags = classify("Windy. Mostly Cloudy with Snow Showers")
        assert flags == (
            ConditionFlag.RAIN,
            ConditionFlag.SNOW,
            ConditionFlag.WIND,
            ConditionFlag.CLOUD,
        )

    def test_no_match(self):
        assert classify("Hot") == ()
        assert classify("") == ()

    def test_priority_is_public(self):
        assert [str(f) for f in FLAG_PRIORITY] == [
            "thunder", "rain", "snow", "fog", "wind", "sun", "cloud",
        ]
