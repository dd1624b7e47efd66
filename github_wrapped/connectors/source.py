"""
Fetch interface between the analytics core and its upstream data source.
"""

from datetime import date
from typing import Protocol

from github_wrapped.core.models import DailyActivity, ProfileInfo, RepositorySummary


class ActivitySource(Protocol):
    """
    Read-only upstream data source.

    Implementations raise NotFoundError when the identity does not exist and
    UpstreamUnavailableError (or another GitHubAPIError) on any other failure.
    They never retry on behalf of the caller beyond their own transport policy.
    """

    async def get_profile(self, identity: str) -> ProfileInfo:
        ...

    async def list_repositories(self, identity: str) -> list[RepositorySummary]:
        ...

    async def get_language_bytes(self, identity: str, repo_name: str) -> dict[str, int]:
        ...

    async def get_daily_activity(self, identity: str, from_date: date, to_date: date) -> list[DailyActivity]:
        ...

    async def count_pull_requests(self, identity: str, year: int) -> int:
        ...

    async def count_issues(self, identity: str, year: int) -> int:
        ...
