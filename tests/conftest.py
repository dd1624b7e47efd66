"""Shared test fixtures for the GitHub Wrapped test suite."""

import asyncio
from datetime import date, timedelta

import pytest

from github_wrapped.core.config import Settings
from github_wrapped.core.exceptions import NotFoundError, UpstreamUnavailableError
from github_wrapped.core.models import DailyActivity, ProfileInfo, RepositorySummary


# ── Settings ─────────────────────────────────────────────────────────────

@pytest.fixture
def test_settings():
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        GITHUB_TOKEN=None,
        OPENAI_API_KEY=None,
        REDIS_URL=None,
        DEMO_MODE=False,
        LOG_FORMAT="pretty",
    )


# ── Timelines ────────────────────────────────────────────────────────────

def build_timeline(counts, start=date(2025, 1, 1)):
    """Consecutive days starting at ``start`` with the given counts."""
    return [
        DailyActivity(date=start + timedelta(days=offset), count=count)
        for offset, count in enumerate(counts)
    ]


@pytest.fixture
def make_timeline():
    """Factory fixture: make_timeline([0, 3, 3], start=date(...))."""
    return build_timeline


# ── Fake collaborators ───────────────────────────────────────────────────

class FakeSource:
    """
    In-memory ActivitySource with call counters and injectable failures.
    """

    def __init__(
        self,
        counts=None,
        repositories=None,
        languages=None,
        missing=(),
        fail_activity=False,
        fail_languages=(),
        fail_search=False,
        delay=0.0,
    ):
        self.counts = counts if counts is not None else [1] * 30
        self.repositories = repositories if repositories is not None else [
            RepositorySummary(name="alpha", stars=12, forks=1, language="Python"),
            RepositorySummary(name="beta", stars=40, forks=3, language="Go"),
            RepositorySummary(name="notes", stars=0, forks=0, language=None),
        ]
        self.languages = languages if languages is not None else {
            "alpha": {"Python": 600, "Shell": 100},
            "beta": {"Go": 300},
        }
        self.missing = set(missing)
        self.fail_activity = fail_activity
        self.fail_languages = set(fail_languages)
        self.fail_search = fail_search
        self.delay = delay
        self.calls = {"profile": 0, "repos": 0, "languages": 0, "activity": 0, "search": 0}
        self.activity_windows = []
        self.active_language_fetches = 0
        self.peak_language_fetches = 0

    async def _pause(self):
        if self.delay:
            await asyncio.sleep(self.delay)

    def _check(self, identity):
        if identity in self.missing:
            raise NotFoundError(f"'{identity}' not found")

    async def get_profile(self, identity):
        self.calls["profile"] += 1
        await self._pause()
        self._check(identity)
        return ProfileInfo(login=identity, name=identity.title(), followers=3, following=1, public_repos=3)

    async def list_repositories(self, identity):
        self.calls["repos"] += 1
        await self._pause()
        return list(self.repositories)

    async def get_language_bytes(self, identity, repo_name):
        self.calls["languages"] += 1
        self.active_language_fetches += 1
        self.peak_language_fetches = max(self.peak_language_fetches, self.active_language_fetches)
        try:
            await self._pause()
            if repo_name in self.fail_languages:
                raise UpstreamUnavailableError(f"languages for {repo_name} unavailable")
            return dict(self.languages.get(repo_name, {}))
        finally:
            self.active_language_fetches -= 1

    async def get_daily_activity(self, identity, from_date, to_date):
        self.calls["activity"] += 1
        self.activity_windows.append((from_date, to_date))
        await self._pause()
        if self.fail_activity:
            raise UpstreamUnavailableError("calendar unavailable")
        return build_timeline(self.counts, start=from_date)

    async def count_pull_requests(self, identity, year):
        self.calls["search"] += 1
        if self.fail_search:
            raise UpstreamUnavailableError("search unavailable")
        return 7

    async def count_issues(self, identity, year):
        self.calls["search"] += 1
        if self.fail_search:
            raise UpstreamUnavailableError("search unavailable")
        return 2


class FakeGenerator:
    """TextGenerator returning a fixed story or raising."""

    def __init__(self, story="An epic year.", error=None):
        self.story = story
        self.error = error
        self.prompts = []

    async def generate(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.story


@pytest.fixture
def fake_source():
    return FakeSource()


@pytest.fixture
def fake_generator():
    return FakeGenerator()
