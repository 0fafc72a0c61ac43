"""Free-text forecast phrase to canonical condition flags."""

import re

from wxcaption.models.forecast import FLAG_PRIORITY, ConditionFlag

CONDITION_PATTERNS: dict[ConditionFlag, re.Pattern[str]] = {
    ConditionFlag.THUNDER: re.compile(r"thunder|t-storm"),
    ConditionFlag.RAIN: re.compile(r"rain|showers|drizzle"),
    ConditionFlag.SNOW: re.compile(r"snow|flurr|sleet"),
    ConditionFlag.FOG: re.compile(r"fog|mist|haze"),
    ConditionFlag.WIND: re.compile(r"wind|gust"),
    ConditionFlag.SUN: re.compile(r"sunny|clear"),
    ConditionFlag.CLOUD: re.compile(r"cloudy"),
}


def classify(text: str) -> tuple[ConditionFlag, ...]:
    """Detect condition flags, returned in FLAG_PRIORITY order.

    Each flag is matched independently against the lower-cased text.
    """
    lowered = (text or "").lower()
    return tuple(flag for flag in FLAG_PRIORITY if CONDITION_PATTERNS[flag].search(lowered))
