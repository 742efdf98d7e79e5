from __future__ import annotations

from datetime import date
from typing import Dict, Tuple

# Names are spelled out per language so labels do not depend on the process locale.
WEEKDAYS: Dict[str, Tuple[str, ...]] = {
    "en": ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"),
    "nl": ("maandag", "dinsdag", "woensdag", "donderdag", "vrijdag", "zaterdag", "zondag"),
}
SHORT_WEEKDAYS: Dict[str, Tuple[str, ...]] = {
    "en": ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"),
    "nl": ("Ma", "Di", "Wo", "Do", "Vr", "Za", "Zo"),
}
MONTH_ABBR: Dict[str, Tuple[str, ...]] = {
    "en": ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
    "nl": ("jan", "feb", "mrt", "apr", "mei", "jun", "jul", "aug", "sep", "okt", "nov", "dec"),
}
TODAY: Dict[str, str] = {"en": "Today", "nl": "Vandaag"}

DEFAULT_LOCALE = "en"
SUPPORTED_LOCALES = tuple(WEEKDAYS)


def _resolve(locale: str) -> str:
    key = (locale or DEFAULT_LOCALE).split("-")[0].split("_")[0].lower()
    return key if key in WEEKDAYS else DEFAULT_LOCALE


def day_label(day: date, locale: str = DEFAULT_LOCALE) -> str:
    """Weekday name, day number and abbreviated month, e.g. ``Tuesday 20 Oct``."""
    key = _resolve(locale)
    month = MONTH_ABBR[key][day.month - 1]
    if key == "nl":
        month = f"{month}." if month != "mei" else month
    return f"{WEEKDAYS[key][day.weekday()]} {day.day} {month}"


def short_weekday(day: date, locale: str = DEFAULT_LOCALE) -> str:
    return SHORT_WEEKDAYS[_resolve(locale)][day.weekday()]


def today_label(locale: str = DEFAULT_LOCALE) -> str:
    return TODAY[_resolve(locale)]
