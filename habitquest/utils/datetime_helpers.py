"""
Date/time helpers

- Timestamps are timezone-aware and taken in the configured TIMEZONE
- Calendar days are plain ``date`` objects, ISO ``YYYY-MM-DD`` when serialized
- Store operations accept either a ``date`` or an ISO string for a day
"""

import logging
from datetime import date, datetime, timedelta
from typing import Callable, List, Union
from uuid import uuid4
from zoneinfo import ZoneInfo

from habitquest.config import TIMEZONE

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "UTC"

Clock = Callable[[], datetime]
DateLike = Union[date, str]


def get_timezone() -> ZoneInfo:
    """Get the configured timezone, falling back to UTC"""
    try:
        return ZoneInfo(TIMEZONE)
    except Exception as e:
        logger.error(f"Invalid timezone '{TIMEZONE}': {e}")
        return ZoneInfo(DEFAULT_TIMEZONE)


def now_local() -> datetime:
    """Current datetime in the configured timezone (timezone-aware)"""
    return datetime.now(get_timezone())


def today_local() -> date:
    """Today's calendar day in the configured timezone"""
    return now_local().date()


def to_date(value: DateLike) -> date:
    """
    Normalize a calendar day

    Args:
        value: ``date``/``datetime`` or ISO string (``YYYY-MM-DD``; a full
            ISO timestamp is truncated to its day)

    Returns:
        The calendar day as ``date``
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])


def days_ending(end: date, days: int) -> List[date]:
    """The ``days`` calendar days ending at ``end``, oldest first"""
    return [end - timedelta(days=offset) for offset in range(days - 1, -1, -1)]


def start_of_week(day: date) -> date:
    """Sunday on or before ``day``"""
    # weekday(): Monday=0 .. Sunday=6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def generate_id(prefix: str) -> str:
    """Unique entity id, e.g. ``xp-3f2a...``"""
    return f"{prefix}-{uuid4().hex}"
