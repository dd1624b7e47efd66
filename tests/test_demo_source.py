from datetime import date

import pytest

from github_wrapped.connectors.demo_source import DemoActivitySource
from github_wrapped.core.exceptions import NotFoundError


@pytest.fixture
def demo():
    return DemoActivitySource()


async def test_same_identity_same_data(demo):
    first = await demo.get_daily_activity("octocat", date(2025, 1, 1), date(2025, 3, 31))
    second = await demo.get_daily_activity("octocat", date(2025, 1, 1), date(2025, 3, 31))
    assert first == second
    assert len(first) == 90


async def test_identity_lookup_ignores_case(demo):
    lower = await demo.list_repositories("octocat")
    upper = await demo.list_repositories("OctoCat")
    assert lower == upper


async def test_missing_identity(demo):
    with pytest.raises(NotFoundError):
        await demo.get_profile("Ghost")


async def test_language_bytes_are_positive(demo):
    languages = await demo.get_language_bytes("octocat", "dotfiles")
    assert 1 <= len(languages) <= 3
    assert all(size > 0 for size in languages.values())
