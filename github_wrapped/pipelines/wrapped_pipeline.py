"""
Aggregation pipeline for a GitHub wrapped bundle.
Fetches raw data through an ActivitySource, runs the analytics stages, and
assembles one WrappedBundle.
"""

import asyncio
from datetime import date, datetime, timezone
from typing import Callable, Optional

from github_wrapped.connectors.source import ActivitySource
from github_wrapped.core.config import Settings, settings as default_settings
from github_wrapped.core.exceptions import GitHubAPIError, PartialDataError
from github_wrapped.core.logger import get_logger
from github_wrapped.core.models import (
    AggregateStats,
    DailyActivity,
    ProfileInfo,
    RepositorySummary,
    WrappedBundle,
)
from github_wrapped.narrative.storyteller import Storyteller
from github_wrapped.pipelines.achievements import (
    ActivityClock,
    AchievementContext,
    UnknownClock,
    evaluate_achievements,
    is_night_owl,
)
from github_wrapped.pipelines.distribution import WorkStyleThresholds, analyze_distribution
from github_wrapped.pipelines.engineer_profile import classify_engineer
from github_wrapped.pipelines.languages import build_language_breakdown, top_languages
from github_wrapped.pipelines.rank_classifier import percentile_tier, power_level, rank_title
from github_wrapped.pipelines.streaks import calculate_streaks

logger = get_logger(__name__)


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


async def _gather_or_cancel(*aws):
    """
    Like ``asyncio.gather`` but the first failure cancels the remaining
    fetches and waits for them before re-raising.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


class WrappedPipeline:
    """
    Builds a WrappedBundle for one identity.

    Stages:
    1. Profile lookup (essential, NotFoundError propagates)
    2. Concurrent fetch of calendar, repositories and search counts
    3. Language bytes per repository, at most LANGUAGE_FETCH_CONCURRENCY at a
       time (failures omitted)
    4. Pure analytics: streaks, distribution, languages, ranks, achievements
    5. Best-effort narrative
    """

    def __init__(
        self,
        source: ActivitySource,
        storyteller: Storyteller,
        settings: Optional[Settings] = None,
        clock: ActivityClock = UnknownClock(),
        today: Callable[[], date] = _utc_today,
    ):
        """
        Initialize the pipeline.

        Args:
            source: Upstream data source
            storyteller: Narrative requester
            settings: Settings instance (default: module settings)
            clock: Hour-of-day provider for time-based achievements
            today: Callable returning the last day of the observation window
        """
        self.source = source
        self.storyteller = storyteller
        self.settings = settings or default_settings
        self.clock = clock
        self.today = today
        self.thresholds = WorkStyleThresholds(
            burst_variance=self.settings.WORK_STYLE_BURST_VARIANCE,
            consistent_mean=self.settings.WORK_STYLE_CONSISTENT_MEAN,
        )

        logger.info("WrappedPipeline initialized")

    async def build(self, identity: str) -> WrappedBundle:
        """
        Fetch and aggregate everything for ``identity``.

        Raises:
            NotFoundError: If the identity does not exist upstream
            GitHubAPIError: If the profile, calendar or repository list fetch fails
        """
        today = self.today()
        from_date = date(today.year, 1, 1)

        logger.info(f"Building wrapped bundle for {identity}", extra={"from": str(from_date), "to": str(today)})

        profile = await self.source.get_profile(identity)

        timeline, repositories, pull_requests, issues = await _gather_or_cancel(
            self.source.get_daily_activity(identity, from_date, today),
            self.source.list_repositories(identity),
            self._count_or_zero(self.source.count_pull_requests(identity, today.year), "pull_requests"),
            self._count_or_zero(self.source.count_issues(identity, today.year), "issues"),
        )

        byte_maps = await self._collect_language_bytes(identity, repositories)
        breakdown = build_language_breakdown(byte_maps)

        stats = self.compute_stats(
            timeline,
            repositories,
            breakdown,
            today=today,
            pull_requests=pull_requests,
            issues=issues,
        )

        narrative = await self.storyteller.tell(stats, timeline)
        stats = stats.model_copy(update={"narrative": narrative})

        bundle = WrappedBundle(
            user_identity=identity,
            user_info=profile,
            stats=stats,
            top_repositories=self.top_repositories(repositories),
            contribution_timeline=timeline,
        )

        logger.info(
            f"Wrapped bundle built for {identity}",
            extra={
                "total_contributions": stats.total_contributions,
                "repositories": len(repositories),
                "languages": len(breakdown),
                "achievements": len(stats.special_achievements),
            },
        )
        return bundle

    def compute_stats(
        self,
        timeline: list[DailyActivity],
        repositories: list[RepositorySummary],
        breakdown: dict[str, float],
        today: Optional[date] = None,
        pull_requests: int = 0,
        issues: int = 0,
    ) -> AggregateStats:
        """Run every pure analytics stage over already-fetched data."""
        total = sum(day.count for day in timeline)
        streaks = calculate_streaks(timeline, today)
        distribution = analyze_distribution(timeline, self.thresholds)

        context = AchievementContext(
            days=timeline,
            total_contributions=total,
            longest_streak=streaks.longest,
            consistency=distribution.consistency,
            clock=self.clock,
        )

        return AggregateStats(
            total_contributions=total,
            current_streak=streaks.current,
            longest_streak=streaks.longest,
            most_active_day=distribution.most_active_day,
            most_active_month=distribution.most_active_month,
            most_active_weekday=distribution.most_active_weekday,
            preferred_work_days=distribution.preferred_work_days,
            stars_earned=sum(repo.stars for repo in repositories),
            consistency=distribution.consistency,
            work_style=distribution.work_style,
            power_level=power_level(total),
            universal_rank=percentile_tier(total),
            rank=rank_title(total, distribution.consistency, streaks.longest),
            special_achievements=evaluate_achievements(context),
            top_languages=top_languages(breakdown, self.settings.TOP_LANGUAGES_LIMIT),
            engineer_profile=classify_engineer(timeline, total, streaks.longest, distribution.consistency),
            pull_requests=pull_requests,
            issues_opened=issues,
            night_owl=is_night_owl(context),
        )

    def top_repositories(self, repositories: list[RepositorySummary]) -> list[RepositorySummary]:
        ranked = sorted(repositories, key=lambda repo: repo.stars, reverse=True)
        return ranked[: self.settings.TOP_REPOSITORIES_LIMIT]

    async def _collect_language_bytes(
        self,
        identity: str,
        repositories: list[RepositorySummary],
    ) -> list[dict[str, int]]:
        """Language bytes of every repository with a primary language, in repository order."""
        limit = asyncio.Semaphore(self.settings.LANGUAGE_FETCH_CONCURRENCY)
        results = await asyncio.gather(
            *(self._language_bytes(identity, repo, limit) for repo in repositories if repo.language),
            return_exceptions=True,
        )

        byte_maps = []
        for result in results:
            if isinstance(result, PartialDataError):
                # Non-essential: that repository is left out of the breakdown
                logger.warning(result.message, extra=result.details)
            elif isinstance(result, BaseException):
                raise result
            else:
                byte_maps.append(result)
        return byte_maps

    async def _language_bytes(
        self,
        identity: str,
        repo: RepositorySummary,
        limit: asyncio.Semaphore,
    ) -> dict[str, int]:
        async with limit:
            try:
                return await self.source.get_language_bytes(identity, repo.name)
            except GitHubAPIError as e:
                raise PartialDataError(
                    f"Language data unavailable for {identity}/{repo.name}",
                    details={"repo": repo.name, "error": e.message},
                ) from e

    async def _count_or_zero(self, fetch, label: str) -> int:
        try:
            return await fetch
        except GitHubAPIError as e:
            logger.warning(
                f"Search count unavailable: {label}",
                extra={"error": e.message},
            )
            return 0
