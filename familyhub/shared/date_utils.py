"""
Date helpers.
All timestamps are stored as naive UTC; calendar days are UTC days.
"""
from datetime import datetime, date, timedelta, timezone
from typing import Optional


def utcnow() -> datetime:
    """Current UTC time as a naive datetime"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_day(value: Optional[datetime]) -> Optional[date]:
    """Truncate a timestamp to its calendar day"""
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.date()


def yesterday_of(now: datetime) -> date:
    """Calendar day of now - 24h"""
    return to_day(now - timedelta(days=1))


def parse_hhmm(time_str: str) -> tuple[int, int]:
    """
    Parse time string into hour and minute.

    Args:
        time_str: Time string in "HH:MM" format

    Returns:
        Tuple of (hour, minute)

    Raises:
        ValueError: If time string is invalid
    """
    parts = time_str.split(":")
    hour = int(parts[0])
    minute = int(parts[1])
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValueError(f"Invalid time: {time_str}")
    return hour, minute
