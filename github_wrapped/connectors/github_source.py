"""
GitHub-backed activity source.
Fetches profile, repositories, language bytes and the contribution calendar,
and transforms the raw API payloads into domain models.
"""

from datetime import date, timedelta
from typing import Any, Optional

from github_wrapped.core.exceptions import NotFoundError
from github_wrapped.core.github_client import GitHubClient
from github_wrapped.core.logger import get_logger
from github_wrapped.core.models import DailyActivity, ProfileInfo, RepositorySummary
from github_wrapped.utils.github_queries import (
    CONTRIBUTION_CALENDAR_QUERY,
    build_calendar_variables,
    parse_contribution_calendar,
)

logger = get_logger(__name__)


class GitHubActivitySource:
    """
    ActivitySource implementation on top of the GitHub REST and GraphQL APIs.

    Endpoints used:
    - GET  /users/{login}
    - GET  /users/{login}/repos (paged)
    - GET  /repos/{login}/{repo}/languages
    - GET  /search/issues (pull request / issue counts)
    - POST /graphql (contributionsCollection.contributionCalendar)
    """

    REPOS_PER_PAGE = 100
    MAX_REPO_PAGES = 5

    def __init__(self, client: GitHubClient):
        self.client = client

    async def get_profile(self, identity: str) -> ProfileInfo:
        user_json = await self.client.get_json(f"/users/{identity}")
        return self.transform_profile(user_json, identity)

    async def list_repositories(self, identity: str) -> list[RepositorySummary]:
        repositories: list[RepositorySummary] = []

        for page in range(1, self.MAX_REPO_PAGES + 1):
            batch = await self.client.get_json(
                f"/users/{identity}/repos",
                params={"per_page": self.REPOS_PER_PAGE, "page": page, "type": "owner"},
            )
            repositories.extend(self.transform_repository(repo) for repo in batch)
            if len(batch) < self.REPOS_PER_PAGE:
                break
        else:
            logger.warning(
                "Repository listing truncated",
                extra={"identity": identity, "max_pages": self.MAX_REPO_PAGES},
            )

        logger.debug(f"Listed {len(repositories)} repositories for {identity}")
        return repositories

    async def get_language_bytes(self, identity: str, repo_name: str) -> dict[str, int]:
        languages = await self.client.get_json(f"/repos/{identity}/{repo_name}/languages")
        return {language: int(size) for language, size in languages.items()}

    async def get_daily_activity(self, identity: str, from_date: date, to_date: date) -> list[DailyActivity]:
        variables = build_calendar_variables(identity, from_date, to_date)
        data = await self.client.execute_query(CONTRIBUTION_CALENDAR_QUERY, variables)

        days = parse_contribution_calendar(data)
        if days is None:
            raise NotFoundError(f"GitHub user '{identity}' not found", details={"identity": identity})

        return self.normalize_calendar(days, from_date, to_date)

    async def count_pull_requests(self, identity: str, year: int) -> int:
        return await self._search_count(f"author:{identity} type:pr created:{year}")

    async def count_issues(self, identity: str, year: int) -> int:
        return await self._search_count(f"author:{identity} type:issue created:{year}")

    async def _search_count(self, query: str) -> int:
        result = await self.client.get_json("/search/issues", params={"q": query, "per_page": 1})
        return int(result.get("total_count") or 0)

    @staticmethod
    def transform_profile(user_json: dict[str, Any], identity: str) -> ProfileInfo:
        """Transform a /users/{login} payload, falling back to the identity for missing names."""
        login = user_json.get("login") or identity
        return ProfileInfo(
            login=login,
            name=user_json.get("name") or login,
            avatar=user_json.get("avatar_url"),
            followers=user_json.get("followers") or 0,
            following=user_json.get("following") or 0,
            public_repos=user_json.get("public_repos") or 0,
        )

    @staticmethod
    def transform_repository(repo_json: dict[str, Any]) -> RepositorySummary:
        return RepositorySummary(
            name=repo_json["name"],
            stars=repo_json.get("stargazers_count") or 0,
            forks=repo_json.get("forks_count") or 0,
            language=repo_json.get("language"),
        )

    @staticmethod
    def normalize_calendar(
        days: list[tuple[date, int]],
        from_date: date,
        to_date: Optional[date] = None,
    ) -> list[DailyActivity]:
        """
        Build a gap-free, strictly increasing timeline for the window.

        Days outside the window are dropped, duplicates keep the last value
        and missing days are filled with zero counts.
        """
        counts = {day: count for day, count in days}
        if to_date is None:
            to_date = max(counts) if counts else from_date

        timeline = []
        current = from_date
        while current <= to_date:
            timeline.append(DailyActivity(date=current, count=max(counts.get(current, 0), 0)))
            current += timedelta(days=1)
        return timeline
