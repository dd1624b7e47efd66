"""Tests for the HTTP surface."""

import pytest
from fastapi.testclient import TestClient

from conftest import FakeGenerator, FakeSource
from github_wrapped.api.main import create_app
from github_wrapped.api.utils.pipeline_manager import PipelineManager
from github_wrapped.cache.store import InMemoryStore
from github_wrapped.narrative.storyteller import Storyteller


def make_client(settings, source):
    manager = PipelineManager(
        settings,
        source=source,
        store=InMemoryStore(),
        storyteller=Storyteller(FakeGenerator(), settings),
    )
    return TestClient(create_app(settings, manager), raise_server_exceptions=False)


@pytest.fixture
def source():
    return FakeSource(missing=("ghost",))


@pytest.fixture
def client(test_settings, source):
    with make_client(test_settings, source) as test_client:
        yield test_client


class TestWrappedEndpoint:
    def test_returns_bundle_with_camel_case_keys(self, client):
        response = client.get("/api/github-wrapped", params={"username": "octocat"})

        assert response.status_code == 200
        payload = response.json()
        assert payload["userIdentity"] == "octocat"
        assert payload["userInfo"]["publicRepos"] == 3
        assert payload["stats"]["totalContributions"] == 30
        assert payload["stats"]["rank"]["title"]
        assert payload["stats"]["narrative"]["story"] == "An epic year."
        assert len(payload["contributionTimeline"]) == 30
        assert "X-Request-ID" in response.headers

    def test_second_request_is_served_from_cache(self, client, source):
        client.get("/api/github-wrapped", params={"username": "octocat"})
        client.get("/api/github-wrapped", params={"username": "OCTOCAT"})
        assert source.calls["profile"] == 1

    def test_missing_username_is_bad_request(self, client):
        response = client.get("/api/github-wrapped")
        assert response.status_code == 400
        assert response.json()["error"] == "ValidationError"

    def test_blank_username_is_bad_request(self, client):
        response = client.get("/api/github-wrapped", params={"username": "  "})
        assert response.status_code == 400

    def test_unknown_user_is_not_found(self, client):
        response = client.get("/api/github-wrapped", params={"username": "ghost"})
        assert response.status_code == 404
        assert response.json()["error"] == "NotFound"

    def test_upstream_failure_is_unavailable(self, test_settings):
        with make_client(test_settings, FakeSource(fail_activity=True)) as client:
            response = client.get("/api/github-wrapped", params={"username": "octocat"})
        assert response.status_code == 503
        assert response.json()["error"] == "UpstreamUnavailable"


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        payload = response.json()
        assert payload["status"] == "healthy"
        assert payload["cache_backend"] == "memory"
        assert payload["pipeline_running"] is True

    def test_versioned_health(self, client):
        assert client.get("/api/v1/health").status_code == 200

    def test_root(self, client):
        assert client.get("/").json()["name"] == "GitHub Wrapped"
