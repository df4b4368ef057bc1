"""Calendar Dates — week normalization, strict ISO parsing, and zone-aware "today".

Invariants:
    - week_start(d) is always a Monday and week_start(week_start(d)) == week_start(d)
    - week_start never consults the clock; only today_in does
    - parse_iso_date accepts exactly YYYY-MM-DD (no times, no ordinal/week forms)

Design Decisions:
    - Dates are opaque calendar dates: no time zone arithmetic beyond date offsets
    - today_in takes the zone name from the caller, so the shell fixes one zone
      (settings.default_timezone) for every request
"""

import re
from datetime import date, datetime, timedelta

import pytz

from horoscope_api.core.errors import InputValidationError


_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


def week_start(d: date) -> date:
    """Return the Monday starting the Monday-to-Sunday week containing d."""
    dow = (d.weekday() + 1) % 7  # Sunday=0 .. Saturday=6
    offset = -6 if dow == 0 else 1 - dow
    return d + timedelta(days=offset)


def parse_iso_date(value: object, field: str = "date") -> date:
    """Coerce a request value into a calendar date or raise InputValidationError."""
    if isinstance(value, datetime):
        raise InputValidationError(f"{field} must be a date, not a datetime", field)
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _ISO_DATE.fullmatch(value):
        raise InputValidationError(f"{field} must be formatted YYYY-MM-DD", field)
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InputValidationError(f"{field} is not a valid calendar date", field)


def today_in(zone_name: str) -> date:
    """Current calendar date in the given IANA time zone."""
    return datetime.now(pytz.timezone(zone_name)).date()
