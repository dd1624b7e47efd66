"""
Domain models for the wrapped bundle.
Everything that flows out of the pipeline and into the cache is defined here.
"""

from datetime import date, datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WrappedModel(BaseModel):
    """Immutable base model serialized with camelCase keys."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class DailyActivity(WrappedModel):
    """Contribution count for one calendar day."""

    date: date
    count: int = Field(..., ge=0)


class RepositorySummary(WrappedModel):
    """Repository metadata used for stars and language weighting."""

    name: str
    stars: int = Field(default=0, ge=0)
    forks: int = Field(default=0, ge=0)
    language: Optional[str] = None


class ProfileInfo(WrappedModel):
    """Public profile fields of the analyzed identity."""

    login: str
    name: str
    avatar: Optional[str] = None
    followers: int = 0
    following: int = 0
    public_repos: int = 0


class MostActiveDay(WrappedModel):
    date: date
    contributions: int


class RankTitle(WrappedModel):
    """Narrative rank with its tier code (SSS ... C)."""

    title: str
    description: str
    level: str


class EngineerProfile(WrappedModel):
    level: str
    description: str
    percentile: int
    intensity: str
    focus_score: float


class Narrative(WrappedModel):
    story: str = ""
    highlights: list[str] = Field(default_factory=list)
    theme: str = "growth"


class AggregateStats(WrappedModel):
    """
    Derived statistics for one identity and one observation window.

    Immutable once computed; the narrative is attached by building a copy
    with ``model_copy(update=...)``.
    """

    total_contributions: int
    current_streak: int
    longest_streak: int
    most_active_day: Optional[MostActiveDay] = None
    most_active_month: Optional[str] = None
    most_active_weekday: Optional[str] = None
    preferred_work_days: list[str] = Field(default_factory=list)
    stars_earned: int = 0
    consistency: float = 0.0
    work_style: str
    power_level: str
    universal_rank: str
    rank: RankTitle
    special_achievements: list[str] = Field(default_factory=list)
    top_languages: list[tuple[str, float]] = Field(default_factory=list)
    engineer_profile: Optional[EngineerProfile] = None
    narrative: Narrative = Field(default_factory=Narrative)
    pull_requests: int = 0
    issues_opened: int = 0
    # Hour-of-day is not available from a contribution calendar.
    favorite_time: Optional[str] = None
    night_owl: bool = False


class WrappedBundle(WrappedModel):
    """The unit cached and returned to callers."""

    user_identity: str
    user_info: ProfileInfo
    stats: AggregateStats
    top_repositories: list[RepositorySummary] = Field(default_factory=list)
    contribution_timeline: list[DailyActivity] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
