"""Calendar-day and time-of-day helpers."""

from datetime import date, datetime, time
from typing import Optional


def calendar_day(moment: datetime) -> date:
    """Truncate a local datetime to its calendar day."""
    return moment.date()


def is_same_day(first: datetime, second: datetime) -> bool:
    """True when both local datetimes fall on the same calendar day (not a rolling 24h window)."""
    return calendar_day(first) == calendar_day(second)


def format_timestamp(moment: datetime) -> str:
    return moment.isoformat(timespec="seconds")


def parse_timestamp(value: object) -> Optional[datetime]:
    """Parse an ISO-8601 string (or a bare date). Returns None when unparseable."""
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        moment = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    # Aware values are shifted into local time then made naive
    if moment.tzinfo is not None:
        moment = moment.astimezone().replace(tzinfo=None)
    return moment


def format_time_of_day(value: time) -> str:
    return value.strftime("%H:%M")


def parse_time_of_day(value: object) -> Optional[time]:
    """Parse 'HH:MM'. Returns None when unparseable."""
    if not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value.strip(), "%H:%M").time()
    except ValueError:
        return None
