"""Caption, alt-text and image-suggestion formatters for weather reports."""

import json
import re
from collections.abc import Iterable
from datetime import date

from wxcaption.models.forecast import ConditionFlag, DayAggregate
from wxcaption.models.outlook import HazardOutlook
from wxcaption.models.report import WeatherReport

EMOJI = {
    ConditionFlag.SUN: "☀️",
    ConditionFlag.CLOUD: "☁️",
    ConditionFlag.RAIN: "🌧️",
    ConditionFlag.THUNDER: "⛈️",
    ConditionFlag.SNOW: "❄️",
    ConditionFlag.WIND: "🌬️",
    ConditionFlag.FOG: "🌫️",
}
ALERT_EMOJI = "⚠️"
HASHTAGS_BASE = ("#weather", "#forecast", "#localweather")
MAX_CAPTION_ALERTS = 5


def emoji_for_flags(flags: Iterable[ConditionFlag]) -> str:
    """Pick emoji for a day: thunder hides rain, sun/cloud only as fallbacks."""
    present = set(flags)
    out: list[str] = []
    if ConditionFlag.THUNDER in present:
        out.append(EMOJI[ConditionFlag.THUNDER])
    if ConditionFlag.RAIN in present and ConditionFlag.THUNDER not in present:
        out.append(EMOJI[ConditionFlag.RAIN])
    if ConditionFlag.SNOW in present:
        out.append(EMOJI[ConditionFlag.SNOW])
    if ConditionFlag.SUN in present and not out:
        out.append(EMOJI[ConditionFlag.SUN])
    if ConditionFlag.CLOUD in present and not out:
        out.append(EMOJI[ConditionFlag.CLOUD])
    if ConditionFlag.WIND in present:
        out.append(EMOJI[ConditionFlag.WIND])
    if ConditionFlag.FOG in present:
        out.append(EMOJI[ConditionFlag.FOG])
    return " ".join(out) or EMOJI[ConditionFlag.CLOUD]


def short_summary(days: list[DayAggregate]) -> str:
    if not days:
        return "Forecast unavailable."
    flags = set(days[0].flags)
    emoji = emoji_for_flags(days[0].flags)
    if ConditionFlag.THUNDER in flags:
        return f"{emoji} Thunderstorms likely today — stay alert."
    if ConditionFlag.RAIN in flags:
        return f"{emoji} Rain likely today. Bring an umbrella."
    if ConditionFlag.SNOW in flags:
        return f"{emoji} Snow possible today."
    if ConditionFlag.SUN in flags and ConditionFlag.CLOUD not in flags:
        return f"{emoji} Mostly sunny today."
    return f"{emoji} Typical mix of sun and clouds today."


def _temps(day: DayAggregate) -> str:
    if day.high is not None and day.low is not None:
        return f"{_num(day.high)}°/{_num(day.low)}°"
    if day.high is not None:
        return f"High {_num(day.high)}°"
    if day.low is not None:
        return f"Low {_num(day.low)}°"
    return ""


def _num(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def _place_tag(place: str) -> str:
    return re.sub(r"[\s.]+", "", place.split(",")[0])


def _alert_props(alert: dict) -> dict:
    return alert.get("properties") or {}


def format_alert_lines(alerts: list[dict]) -> list[str]:
    """One line per alert: event and headline."""
    lines = []
    for a in alerts:
        p = _alert_props(a)
        detail = p.get("headline") or p.get("description") or "No description"
        lines.append(f"{p.get('event') or 'Alert'} — {detail}")
    return lines


def format_long_caption(report: WeatherReport) -> str:
    lines = [f"{report.place} — {report.day_count}-day snapshot", ""]
    for d in report.days:
        parts = []
        temps = _temps(d)
        if temps:
            parts.append(temps)
        text = d.day_text or d.night_text
        if text:
            parts.append(text)
        weekday = d.date.strftime("%a").upper()
        month_day = f"{d.date.strftime('%b')} {d.date.day}"
        lines.append(f"{emoji_for_flags(d.flags)} {weekday} {month_day} — {' · '.join(parts)}")

    lines.append("")
    lines.append(short_summary(report.days))

    if report.alerts:
        lines.append("")
        lines.append(f"{ALERT_EMOJI} Active alerts:")
        for a in report.alerts[:MAX_CAPTION_ALERTS]:
            p = _alert_props(a)
            instr = (p.get("instruction") or p.get("description") or "").split(".")[0]
            lines.append(
                f"- {p.get('event') or 'Alert'} ({p.get('severity') or ''}) "
                f"for {p.get('areaDesc') or ''}: {instr}"
            )

    tags = list(HASHTAGS_BASE)
    ptag = _place_tag(report.place)
    if ptag:
        tags.append(f"#{ptag}")
    lines.append("")
    lines.append(" ".join(tags))
    return "\n".join(lines)


def format_short_caption(report: WeatherReport) -> str:
    head = short_summary(report.days)
    d0 = report.days[0] if report.days else None
    temp = ""
    if d0 is not None:
        if d0.high is not None and d0.low is not None:
            temp = f" {_num(d0.high)}°/{_num(d0.low)}°"
        elif d0.high is not None:
            temp = f" {_num(d0.high)}°"
    out = f"{emoji_for_flags(d0.flags if d0 else ())}{temp} — {head}"
    if report.alerts:
        out += f" {ALERT_EMOJI} See alerts."
    return out + "\n\n" + " ".join(HASHTAGS_BASE)


def format_alt_text(report: WeatherReport) -> str:
    parts = [f"{report.place} weather preview."]
    for d in report.days:
        hi = _num(d.high) if d.high is not None else "—"
        lo = _num(d.low) if d.low is not None else "—"
        txt = d.day_text or d.night_text or "mixed skies"
        parts.append(f"{d.date.strftime('%A')}: high {hi}°, low {lo}°, {txt}.")
    return " ".join(parts)


def format_outlook(hwo: HazardOutlook | None) -> str:
    if hwo is None:
        return "No hazardous weather outlook available."
    return f"{hwo.title}\n\n{hwo.text}".rstrip()


_CONCEPTS: dict[str, tuple[str, ...]] = {
    "storm": (
        "Concept: Dramatic storm — dark clouds, wet streets or silhouette of trees. Aim for high contrast and moody tones.",
        "Action: Capture during/after a downpour; include reflections or a skyline silhouette.",
        "Overlay: bold headline e.g., 'Storm Watch' in white on a semi-opaque red/orange bar. Use ⚠️ or ⛈️ icon.",
        "Crop: square (1:1) or portrait (4:5) for strong vertical compositions.",
        "Palette: deep charcoal #0b1220, accent orange #ff6b35, highlight white.",
    ),
    "rain": (
        "Concept: Rain mood — umbrella, raindrops on a window, reflections in puddles.",
        "Action: Shoot close-up raindrops or street reflections in soft light; capture motion for umbrellas or splashes.",
        "Overlay: short headline like 'Rain Today' or the temps in thin uppercase; use a blue-gray semi-transparent bar.",
        "Crop: square (1:1) or vertical 4:5 for posts with a person holding an umbrella.",
        "Palette: slate blue #556c8a, cool gray #9fb0d4, accent yellow #ffc857 for contrast.",
    ),
    "snow": (
        "Concept: Snow — wide shot of flakes, rooftops, or close-up textures on branches.",
        "Action: Capture soft light or backlit flakes at golden hour; include footprints or a cozy subject.",
        "Overlay: 'Snow Possible' or temp headline in dark text on a light translucent bar; add ❄️.",
        "Crop: square or landscape depending on scene; portrait works for people in snow.",
        "Palette: cool cyan #bfe7ff, soft gray #dfeffb, deep navy accents.",
    ),
    "fog": (
        "Concept: Fog & mood — low contrast, minimal compositions, lone subject.",
        "Action: Use negative space; let fog simplify the background and focus on one object.",
        "Overlay: minimal text (one line) with small serif or uppercase; muted palette.",
        "Crop: square with center or left-aligned subject for editorial feel.",
        "Palette: muted beige #cfcfcf, soft blue-gray #aebccd.",
    ),
    "sun": (
        "Concept: Sunny/golden hour — warm, vibrant scenes, portraits, outdoors.",
        "Action: Shoot in golden hour; include sun flare or warm backlight. Use shadows for depth.",
        "Overlay: bright headline like 'Mostly Sunny' with warm accent; consider a subtle ☀️ badge.",
        "Crop: square or portrait (4:5) for people/landscape combos.",
        "Palette: warm gold #ffc857, soft orange #ffb86b, deep blue for contrast.",
    ),
    "mixed": (
        "Concept: Mixed skies — combine sky texture with local subject (street, park, skyline).",
        "Action: Balanced exposure; include foreground interest and sky as background.",
        "Overlay: concise headline (one short phrase) and temp; small icon for condition.",
        "Crop: square for the feed; keep safe margins for overlays.",
        "Palette: neutral blues and grays with one warm accent (e.g., #ffc857).",
    ),
}


def _concept(flags: set[ConditionFlag]) -> str:
    if ConditionFlag.THUNDER in flags:
        return "storm"
    if ConditionFlag.RAIN in flags:
        return "rain"
    if ConditionFlag.SNOW in flags:
        return "snow"
    if ConditionFlag.FOG in flags:
        return "fog"
    if ConditionFlag.SUN in flags and ConditionFlag.CLOUD not in flags:
        return "sun"
    return "mixed"


def format_image_suggestions(report: WeatherReport, today: date | None = None) -> str:
    if not report.days:
        return "No image suggestions available."
    first = report.days[0]
    flags = set(first.flags)
    suggestions = list(_CONCEPTS[_concept(flags)])

    if ConditionFlag.WIND in flags:
        suggestions.append(
            "Wind tip: emphasize motion — motion blur on grasses/flags, "
            "hair/clothing movement; diagonal compositions work well."
        )
    if first.high is not None and first.low is not None:
        if first.high >= 90:
            suggestions.append("Hot day: emphasize sun, warm colors, and hydration props.")
        if first.low <= 32:
            suggestions.append("Freezing: show breath, gloves, or frost textures; use a cool palette.")
    if report.alerts:
        suggestions.append(
            f"Alerts: Create an attention variant — red/orange banner with '{ALERT_EMOJI} Alert' "
            "and a one-line action (e.g., 'Avoid flooded roads')."
        )

    stamp = (today or date.today()).isoformat()
    stem = re.sub(r"\s+", "_", report.place.split(",")[0])
    suggestions.append("Overlay text suggestion: use the short caption headline or a 3–4 word summary.")
    suggestions.append(f"Filename suggestion: {stem}_forecast_{stamp}.jpg")
    suggestions.append("Accessibility: include the generated alt text alongside the image.")
    suggestions.append("Final tip: export at 1080×1080 for feed or 1080×1350 for portrait.")
    return "\n\n".join(suggestions)


def format_report_json(report: WeatherReport) -> str:
    """JSON report for programmatic consumption."""
    data = {
        "place": report.place,
        "coordinate": {"lat": report.coordinate.lat, "lon": report.coordinate.lon},
        "office": report.office,
        "generated_at": report.generated_at,
        "days": [
            {
                "date": d.date.isoformat(),
                "high": d.high,
                "low": d.low,
                "flags": [str(f) for f in d.flags],
                "day_text": d.day_text,
                "night_text": d.night_text,
            }
            for d in report.days
        ],
        "alerts": [_alert_props(a) for a in report.alerts],
        "hwo": None
        if report.hwo is None
        else {
            "source": str(report.hwo.source),
            "title": report.hwo.title,
            "text": report.hwo.text,
        },
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


def format_report_text(report: WeatherReport) -> str:
    """Long caption followed by the outlook."""
    return "\n\n".join(
        [format_long_caption(report), "Hazardous Weather Outlook:", format_outlook(report.hwo)]
    )


def format_report_chat(report: WeatherReport) -> str:
    """Short caption, alt text and alert list for pasting into a post."""
    lines = [
        f"**{report.place}**",
        format_short_caption(report),
        "",
        f"_Alt text:_ {format_alt_text(report)}",
    ]
    alert_lines = format_alert_lines(report.alerts)
    if alert_lines:
        lines.append("")
        lines.extend(f"- {line}" for line in alert_lines)
    return "\n".join(lines)
