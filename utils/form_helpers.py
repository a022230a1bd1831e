"""
Parsing helpers for registration and login form values.

Dates of birth are compared at calendar-date granularity: whatever time of
day or UTC offset a value carries is dropped, the wall-clock date is kept.
"""
import re
from datetime import date, datetime

from dateutil import parser as date_parser

_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')
MAX_AGE = 150


def clean(value):
    """Strip a submitted string; ``None`` stays ``None``."""
    if value is None:
        return None
    return value.strip()


def normalize_email(value):
    """Trim and lower-case an email so lookups are case-insensitive."""
    value = clean(value)
    return value.lower() if value else value


def parse_dob(value):
    """Parse a submitted date of birth into a naive ``datetime``.

    Accepts ISO dates (``1990-01-01``), full timestamps with or without an
    offset, and the other formats ``dateutil`` understands.  A timezone offset
    is stripped rather than converted.

    Raises ValueError when the value is missing or cannot be parsed.
    """
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if value is None or not str(value).strip():
        raise ValueError('Date of birth is required')
    try:
        parsed = date_parser.parse(str(value).strip())
    except (ValueError, OverflowError) as exc:
        raise ValueError(f'Invalid date of birth: {value!r}') from exc
    return parsed.replace(tzinfo=None)


def to_calendar_date(value):
    """Reduce a date, datetime or date string to a ``date``."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_dob(value).date()


def parse_age(value):
    """Parse an age the way a lenient form would: leading digits win.

    ``"20"`` -> 20, ``"20 years"`` -> 20, ``"twenty"`` -> None.
    ``None`` is the not-a-number result; the caller stores it as an empty age.
    Ages outside 0..MAX_AGE are treated as not-a-number too.
    """
    if value is None:
        return None
    if isinstance(value, int):
        age = value
    else:
        match = _LEADING_INT.match(str(value))
        if not match:
            return None
        age = int(match.group(1))
    if not 0 <= age <= MAX_AGE:
        return None
    return age
