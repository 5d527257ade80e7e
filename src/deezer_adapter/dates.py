"""
Date helpers converting between the service's date strings and datetime values
"""

from datetime import datetime, time, timezone
from typing import Any, Optional


NULL_DATE_PREFIX = "0000-00-00"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"


def parse_date(value: Any) -> Optional[datetime]:
    """
    Parse a date or datetime string as returned by the service

    Args:
        value: Raw value such as '2001-03-07' or '2019-11-05 10:00:00'

    Returns:
        Timezone-aware UTC datetime, or None for empty, null or unparsable dates
    """
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if not value or not isinstance(value, str) or value.startswith(NULL_DATE_PREFIX):
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_date(value: datetime) -> str:
    """
    Render a datetime back to the service's string form

    Midnight UTC collapses to a date-only string, since the service does not
    distinguish a date from a datetime at midnight.

    Args:
        value: Datetime to render

    Returns:
        'YYYY-MM-DD' or 'YYYY-MM-DD HH:MM:SS'
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    if value.time() == time(0, 0):
        return value.strftime(DATE_FORMAT)
    return value.strftime(DATETIME_FORMAT)
