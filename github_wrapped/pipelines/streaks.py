"""
Streak calculation over a daily contribution timeline.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from github_wrapped.core.models import DailyActivity


@dataclass(frozen=True)
class StreakResult:
    longest: int
    current: int


def longest_streak(days: Sequence[DailyActivity]) -> int:
    """Length of the longest run of consecutive days with count > 0."""
    running = 0
    longest = 0
    for day in days:
        if day.count > 0:
            running += 1
            longest = max(longest, running)
        else:
            running = 0
    return longest


def current_streak(days: Sequence[DailyActivity], today: Optional[date] = None) -> int:
    """
    Count active days walking backwards from ``today``.

    The walk only stops at a zero day whose distance from ``today`` exceeds
    the streak accumulated so far, so a quiet day inside the already-counted
    span (typically today itself, before any push) does not end the streak.

    Args:
        days: Chronological timeline
        today: Reference day (default: last day of the timeline)
    """
    if not days:
        return 0

    reference = today or days[-1].date
    streak = 0
    for day in sorted(days, key=lambda d: d.date, reverse=True):
        distance = (reference - day.date).days
        if distance > streak and day.count == 0:
            break
        if day.count > 0:
            streak += 1
    return streak


def calculate_streaks(days: Sequence[DailyActivity], today: Optional[date] = None) -> StreakResult:
    """
    Compute longest and current streaks in one call.

    Example:
        >>> result = calculate_streaks(timeline)
        >>> result.longest >= 0
        True
    """
    return StreakResult(longest=longest_streak(days), current=current_streak(days, today))
