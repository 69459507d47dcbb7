"""Date formatting helpers.

Dates of minutes and due dates are plain ``YYYY-MM-DD`` strings so that
prefix matching (``due:2017-07``) and lexical ordering both work.
"""

import re
from datetime import date, datetime, timedelta

_ISO_DATE = re.compile(r"[0-9]{4}-(0[1-9]|1[0-2])-(0[1-9]|[1-2][0-9]|3[0-1])")


def format_date_iso8601(value: date | datetime) -> str:
    """Format as ``YYYY-MM-DD``."""
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def format_datetime_iso8601_time(value: datetime) -> str:
    """Format as ``YYYY-MM-DD hh:mm:ss`` (no timezone conversion)."""
    return value.strftime("%Y-%m-%d %H:%M:%S")


def current_date_plus_delta_days(delta_days: int = 0, current: date | None = None) -> str:
    """Return today (or ``current``) shifted by ``delta_days`` as ``YYYY-MM-DD``."""
    base = current or date.today()
    return format_date_iso8601(base + timedelta(days=delta_days))


def extract_date_from_string(text: str) -> str | None:
    """Return the first ``YYYY-MM-DD`` found in text, or None."""
    match = _ISO_DATE.search(text)
    return match.group(0) if match else None
