"""Date/time normalisation for event cards.

Resolution order for a card's date node:

1. its ``datetime`` attribute, parsed as an ISO-8601 timestamp;
2. its text, matched against "<day> <month-name>[.] <year>"
   (e.g. "22 nov. 2025", "15 juin. 2024", "3 Mar 2026");
3. the caller's reference date with the default time.

The reference date is always supplied by the caller, never read from the
clock here.
"""

from __future__ import annotations

import datetime as dt
import logging
import re
from dataclasses import dataclass

from bs4 import Tag

logger = logging.getLogger(__name__)

DEFAULT_TIME = "20:00"
DEFAULT_MONTH = 1

# Keys are lowercased month names as printed by the listing, with and
# without the trailing period already stripped by the text pattern.
MONTH_ABBREVIATIONS: dict[str, dict[str, int]] = {
    "fr": {
        "jan": 1, "janv": 1, "janvier": 1,
        "fév": 2, "févr": 2, "février": 2, "fev": 2, "fevr": 2, "fevrier": 2,
        "mar": 3, "mars": 3,
        "avr": 4, "avril": 4,
        "mai": 5,
        "juin": 6,
        "juil": 7, "juillet": 7,
        "août": 8, "aout": 8,
        "sep": 9, "sept": 9, "septembre": 9,
        "oct": 10, "octobre": 10,
        "nov": 11, "novembre": 11,
        "déc": 12, "décembre": 12, "dec": 12, "decembre": 12,
    },
    "en": {
        "jan": 1, "january": 1,
        "feb": 2, "february": 2,
        "mar": 3, "march": 3,
        "apr": 4, "april": 4,
        "may": 5,
        "jun": 6, "june": 6,
        "jul": 7, "july": 7,
        "aug": 8, "august": 8,
        "sep": 9, "sept": 9, "september": 9,
        "oct": 10, "october": 10,
        "nov": 11, "november": 11,
        "dec": 12, "december": 12,
    },
}

_DATE_TEXT_RE = re.compile(r"(\d{1,2})\s+(\w+)\.?\s+(\d{4})")


@dataclass(frozen=True)
class EventDateTime:
    date: dt.date
    time: str  # "HH:MM"

    @property
    def iso_date(self) -> str:
        return self.date.isoformat()


def parse_timestamp(value: str) -> tuple[dt.date, str | None] | None:
    """Parse a machine-readable datetime attribute.

    Returns (date, "HH:MM") for full timestamps, (date, None) for date-only
    values, and None when the value isn't ISO-8601. The wall-clock time is
    kept as written; no timezone conversion happens.
    """
    value = value.strip()
    if not value:
        return None
    try:
        if len(value) == 10:
            return dt.date.fromisoformat(value), None
        parsed = dt.datetime.fromisoformat(value)
    except ValueError:
        return None
    return parsed.date(), parsed.strftime("%H:%M")


def month_number(name: str, locale: str = "fr") -> int:
    """Map a month name to 1-12; unknown names fall back to January."""
    table = MONTH_ABBREVIATIONS.get(locale, MONTH_ABBREVIATIONS["fr"])
    return table.get(name.lower().rstrip("."), DEFAULT_MONTH)


def parse_date_text(text: str, locale: str = "fr") -> dt.date | None:
    """Parse "<day> <month-name> <year>" text, or None if it doesn't match."""
    match = _DATE_TEXT_RE.search(text)
    if not match:
        return None
    day, month_name, year = match.groups()
    month = month_number(month_name, locale)
    try:
        return dt.date(int(year), month, int(day))
    except ValueError:
        logger.debug("Impossible date in %r", text)
        return None


def normalise_event_datetime(
    node: Tag | None,
    reference_date: dt.date,
    *,
    locale: str = "fr",
    default_time: str = DEFAULT_TIME,
) -> EventDateTime:
    """Resolve a card's date node to a calendar date and HH:MM time."""
    if node is None:
        return EventDateTime(reference_date, default_time)

    attr = node.get("datetime")
    if attr:
        parsed = parse_timestamp(str(attr))
        if parsed:
            date, time = parsed
            return EventDateTime(date, time or default_time)
        logger.debug("Unparseable datetime attribute %r, trying text", attr)

    text = node.get_text().strip()
    if text:
        date = parse_date_text(text, locale)
        if date:
            return EventDateTime(date, default_time)
        logger.debug("Unrecognised date text %r", text)

    return EventDateTime(reference_date, default_time)
