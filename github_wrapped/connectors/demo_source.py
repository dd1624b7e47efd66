"""
Demo activity source for running without the GitHub API.
Generates a plausible, deterministic year of activity per identity.
"""

import random
from datetime import date, timedelta

from github_wrapped.core.exceptions import NotFoundError
from github_wrapped.core.logger import get_logger
from github_wrapped.core.models import DailyActivity, ProfileInfo, RepositorySummary

logger = get_logger(__name__)


class DemoActivitySource:
    """
    ActivitySource that simulates GitHub data.

    Features:
    - Same identity always yields the same data (seeded by identity)
    - No API calls required
    - Identities listed in ``missing`` raise NotFoundError
    """

    SAMPLE_REPO_NAMES = [
        "dotfiles",
        "advent-of-code",
        "homelab",
        "blog",
        "cli-toolkit",
        "data-notebooks",
        "game-jam",
        "api-gateway",
    ]

    SAMPLE_LANGUAGES = [
        "Python",
        "TypeScript",
        "Go",
        "Rust",
        "Shell",
        "HTML",
    ]

    def __init__(self, missing: tuple[str, ...] = ("ghost",), activity_rate: float = 0.6):
        """
        Initialize demo source.

        Args:
            missing: Identities that behave as non-existent users
            activity_rate: Probability that a simulated day has contributions
        """
        self.missing = {name.lower() for name in missing}
        self.activity_rate = activity_rate

        logger.info(
            "Demo source initialized",
            extra={"missing": sorted(self.missing), "activity_rate": activity_rate},
        )

    def _rng(self, identity: str, salt: str = "") -> random.Random:
        return random.Random(f"{identity.lower()}:{salt}")

    def _check(self, identity: str) -> None:
        if identity.lower() in self.missing:
            raise NotFoundError(f"Demo user '{identity}' not found", details={"identity": identity})

    async def get_profile(self, identity: str) -> ProfileInfo:
        self._check(identity)
        rng = self._rng(identity, "profile")
        return ProfileInfo(
            login=identity,
            name=identity.replace("-", " ").title(),
            avatar=f"https://avatars.githubusercontent.com/{identity}",
            followers=rng.randint(0, 500),
            following=rng.randint(0, 200),
            public_repos=len(self.SAMPLE_REPO_NAMES),
        )

    async def list_repositories(self, identity: str) -> list[RepositorySummary]:
        self._check(identity)
        rng = self._rng(identity, "repos")
        return [
            RepositorySummary(
                name=name,
                stars=rng.randint(0, 80),
                forks=rng.randint(0, 15),
                language=rng.choice(self.SAMPLE_LANGUAGES + [None]),
            )
            for name in self.SAMPLE_REPO_NAMES
        ]

    async def get_language_bytes(self, identity: str, repo_name: str) -> dict[str, int]:
        self._check(identity)
        rng = self._rng(identity, repo_name)
        chosen = rng.sample(self.SAMPLE_LANGUAGES, k=rng.randint(1, 3))
        return {language: rng.randint(1_000, 250_000) for language in chosen}

    async def get_daily_activity(self, identity: str, from_date: date, to_date: date) -> list[DailyActivity]:
        self._check(identity)
        rng = self._rng(identity, "calendar")

        days = []
        current = from_date
        while current <= to_date:
            count = rng.randint(1, 14) if rng.random() < self.activity_rate else 0
            days.append(DailyActivity(date=current, count=count))
            current += timedelta(days=1)
        return days

    async def count_pull_requests(self, identity: str, year: int) -> int:
        self._check(identity)
        return self._rng(identity, f"prs:{year}").randint(0, 120)

    async def count_issues(self, identity: str, year: int) -> int:
        self._check(identity)
        return self._rng(identity, f"issues:{year}").randint(0, 60)
