"""Date parsing for trip settings and rate periods."""

import re
from datetime import date, datetime, timedelta
from typing import Optional

from dateutil import parser as dateutil_parser

# Two fill-in dates that differ in every field. A string that parses to
# the same date under both carries its own year, month and day.
_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def parse_date(raw) -> Optional[date]:
    """Parse a date value, returning a date or None.

    Handles:
      - date / datetime objects (passed through)
      - YYYY-MM-DD
      - full ISO-8601 timestamps ("2024-12-01T00:00:00.000Z")
      - written-out dates that name a day, month and year ("1 Dec 2024")

    Partial dates ("2025-01", "March 2025", "Dec 5") are rejected instead
    of being completed from the clock or from January 1st.
    """
    if raw is None:
        return None
    if isinstance(raw, date):
        return raw if type(raw) is date else raw.date()
    if not isinstance(raw, str) or raw.strip().lower() in ("null", "none", "undefined", ""):
        return None

    raw = raw.strip()

    # 1. YYYY-MM-DD
    m = re.match(r'^(\d{4})-(\d{2})-(\d{2})$', raw)
    if m:
        try:
            return date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
        except ValueError:
            return None

    # 2. ISO timestamps, only when the full calendar date is spelled out
    if re.match(r'^\d{4}-\d{2}-\d{2}[T ]', raw):
        try:
            return dateutil_parser.isoparse(raw).date()
        except (ValueError, OverflowError):
            return None

    # 3. dateutil for written-out dates. Not fuzzy, and anything it had to
    #    fill in from a default shows up as a disagreement between the two.
    try:
        parsed = {dateutil_parser.parse(raw, default=d).date() for d in _DEFAULTS}
    except (ValueError, OverflowError):
        return None
    return parsed.pop() if len(parsed) == 1 else None


def trip_date_for_day(start: Optional[date], day_number: int) -> Optional[date]:
    """Calendar date of trip day N (day 1 is the start date)."""
    if start is None:
        return None
    return start + timedelta(days=day_number - 1)


def in_closed_range(dt: date, start: Optional[date], end: Optional[date]) -> bool:
    """True if start <= dt <= end. Missing bounds never match."""
    if start is None or end is None:
        return False
    return start <= dt <= end
