"""
Distribution analysis of a contribution timeline.
Finds peaks (day, month, weekday), consistency, and the work style label.
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence

from github_wrapped.core.logger import get_logger
from github_wrapped.core.models import DailyActivity, MostActiveDay

logger = get_logger(__name__)


MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

# Sunday first, matching the tie-break order for weekdays
WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

WORK_STYLE_BURST = "Burst Coder"
WORK_STYLE_CONSISTENT = "Consistent Shinobi"
WORK_STYLE_BALANCED = "Balanced Developer"


@dataclass(frozen=True)
class WorkStyleThresholds:
    burst_variance: float = 10.0
    consistent_mean: float = 5.0


@dataclass(frozen=True)
class Distribution:
    most_active_day: Optional[MostActiveDay]
    most_active_month: Optional[str]
    most_active_weekday: Optional[str]
    preferred_work_days: list[str] = field(default_factory=list)
    active_days: int = 0
    consistency: float = 0.0
    work_style: str = WORK_STYLE_BALANCED


def weekday_index(day: DailyActivity) -> int:
    """0 for Sunday ... 6 for Saturday."""
    return (day.date.weekday() + 1) % 7


def most_active_day(days: Sequence[DailyActivity]) -> Optional[MostActiveDay]:
    """Day with the highest count; the earliest date wins ties."""
    if not days:
        return None
    peak = min(days, key=lambda d: (-d.count, d.date))
    return MostActiveDay(date=peak.date, contributions=peak.count)


def _totals_by(days: Sequence[DailyActivity], bucket_count: int, bucket_of) -> list[Optional[int]]:
    # None marks buckets that never occur in the timeline
    totals: list[Optional[int]] = [None] * bucket_count
    for day in days:
        bucket = bucket_of(day)
        totals[bucket] = (totals[bucket] or 0) + day.count
    return totals


def _ranked(totals: list[Optional[int]]) -> list[int]:
    # Descending by total, ascending by bucket index on ties
    present = [index for index, total in enumerate(totals) if total is not None]
    return sorted(present, key=lambda index: (-totals[index], index))


def most_active_month(days: Sequence[DailyActivity]) -> Optional[str]:
    ranked = _ranked(_totals_by(days, 12, lambda d: d.date.month - 1))
    return MONTH_NAMES[ranked[0]] if ranked else None


def weekday_ranking(days: Sequence[DailyActivity]) -> list[str]:
    return [WEEKDAY_NAMES[index] for index in _ranked(_totals_by(days, 7, weekday_index))]


def consistency_ratio(days: Sequence[DailyActivity]) -> float:
    """Percentage of observed days with a nonzero count, in [0, 100]."""
    if not days:
        return 0.0
    active = sum(1 for day in days if day.count > 0)
    return active / len(days) * 100


def determine_work_style(
    days: Sequence[DailyActivity],
    thresholds: WorkStyleThresholds = WorkStyleThresholds(),
) -> str:
    """Classify by the population variance of daily counts, then by their mean."""
    if not days:
        return WORK_STYLE_BALANCED

    counts = [day.count for day in days]
    mean = sum(counts) / len(counts)
    variance = sum((count - mean) ** 2 for count in counts) / len(counts)

    if variance > thresholds.burst_variance:
        return WORK_STYLE_BURST
    if mean > thresholds.consistent_mean:
        return WORK_STYLE_CONSISTENT
    return WORK_STYLE_BALANCED


def analyze_distribution(
    days: Sequence[DailyActivity],
    thresholds: WorkStyleThresholds = WorkStyleThresholds(),
) -> Distribution:
    """
    Run every distribution metric over one timeline.

    Args:
        days: Chronological timeline
        thresholds: Work style policy constants

    Returns:
        Distribution with peaks, consistency and work style
    """
    weekdays = weekday_ranking(days)
    distribution = Distribution(
        most_active_day=most_active_day(days),
        most_active_month=most_active_month(days),
        most_active_weekday=weekdays[0] if weekdays else None,
        preferred_work_days=weekdays[:3],
        active_days=sum(1 for day in days if day.count > 0),
        consistency=consistency_ratio(days),
        work_style=determine_work_style(days, thresholds),
    )

    logger.debug(
        "Distribution analyzed",
        extra={
            "days": len(days),
            "most_active_month": distribution.most_active_month,
            "work_style": distribution.work_style,
        },
    )
    return distribution
