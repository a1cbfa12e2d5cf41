"""
Streak calculation

A streak is the number of consecutive calendar days, ending "today", with at
least one completion. Today is treated as still in progress: if there is no
completion yet for today, the count starts from yesterday instead of
dropping to zero. Any missing day before today ends the streak.

The scan is exact over the completion dates. ``max_days`` optionally bounds
how many days (today included) are examined.
"""

from typing import Iterable, Optional
from datetime import date, timedelta
import logging

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


def calculate_current_streak(
    completion_dates: Iterable[date],
    as_of: date,
    max_days: Optional[int] = None
) -> int:
    """
    Count consecutive completed days ending at ``as_of``

    Args:
        completion_dates: Days with at least one completion (duplicates allowed)
        as_of: The day treated as "today"
        max_days: Maximum number of days to examine, None/0 for no bound

    Returns:
        Current streak length; 0 when there are no completions
    """
    days = set(completion_dates)
    if not days:
        return 0

    streak = 0
    examined = 0
    check_date = as_of

    # Today's absence does not break the streak
    if check_date not in days:
        check_date -= ONE_DAY
        examined += 1

    while check_date in days and (not max_days or examined < max_days):
        streak += 1
        examined += 1
        check_date -= ONE_DAY

    return streak


def calculate_longest_streak(completion_dates: Iterable[date]) -> int:
    """
    Longest run of consecutive completed days ever

    Returns:
        Best streak length; 0 when there are no completions
    """
    days = sorted(set(completion_dates))
    if not days:
        return 0

    best = 1
    current = 1
    for previous, day in zip(days, days[1:]):
        if day - previous == ONE_DAY:
            current += 1
            best = max(best, current)
        else:
            current = 1

    return best
