"""
GitHub REST + GraphQL API client.
Handles authentication, requests, rate limit bookkeeping, and error mapping.
"""

import asyncio
from datetime import datetime, timezone
from typing import Any, Optional

import httpx

from github_wrapped.core.config import Settings, settings as default_settings
from github_wrapped.core.exceptions import (
    GitHubAPIError,
    NotFoundError,
    RateLimitError,
    UpstreamUnavailableError,
)
from github_wrapped.core.logger import get_logger

logger = get_logger(__name__)


class GitHubClient:
    """
    Async GitHub API client with error mapping.

    Features:
    - Optional authentication with a PAT token
    - Rate limit monitoring from response headers
    - Bounded retry for 5xx and transport failures
    - 404 mapped to NotFoundError, everything else to UpstreamUnavailableError
    """

    RETRY_DELAY = 2  # seconds

    def __init__(
        self,
        token: Optional[str] = None,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        retry_delay: Optional[float] = None,
    ):
        """
        Initialize GitHub client.

        Args:
            token: GitHub Personal Access Token. If None, uses settings.GITHUB_TOKEN
            settings: Settings instance (default: module settings)
            http_client: Pre-built httpx client, mostly for tests
            retry_delay: Base delay between retries in seconds
        """
        self.settings = settings or default_settings
        self.token = token or self.settings.GITHUB_TOKEN
        self.max_retries = self.settings.GITHUB_MAX_RETRIES
        self.retry_delay = self.RETRY_DELAY if retry_delay is None else retry_delay
        self.headers = {
            "Accept": "application/vnd.github.v3+json",
        }
        if self.token:
            self.headers["Authorization"] = f"Bearer {self.token}"
        else:
            logger.warning("GitHub client is not authenticated. Rate limits will be lower.")

        self._client = http_client
        self._owns_client = http_client is None
        self._rate_limit_remaining: Optional[int] = None
        self._rate_limit_reset_at: Optional[datetime] = None

        logger.info("GitHub client initialized", extra={"api_base": self.settings.GITHUB_API_BASE})

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers=self.headers,
                timeout=self.settings.GITHUB_TIMEOUT_SECONDS,
            )
        return self._client

    async def aclose(self) -> None:
        """Close the underlying HTTP client if we created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def get_json(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        """
        GET a REST resource relative to GITHUB_API_BASE.

        Raises:
            NotFoundError: If the resource does not exist
            RateLimitError: If rate limit is exceeded
            UpstreamUnavailableError: On any other failure
        """
        url = f"{self.settings.GITHUB_API_BASE}{path}"
        response = await self._request("GET", url, params=params)
        return response.json()

    async def execute_query(self, query: str, variables: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Execute a GraphQL query against GitHub API.

        Args:
            query: GraphQL query string
            variables: Query variables

        Returns:
            The ``data`` member of the response

        Raises:
            RateLimitError: If rate limit is exceeded
            GitHubAPIError: If API returns GraphQL errors
            UpstreamUnavailableError: If the request fails
        """
        payload = {
            "query": query,
            "variables": variables or {},
        }
        response = await self._request("POST", self.settings.GITHUB_GRAPHQL_URL, json=payload)
        data = response.json()

        # Check for GraphQL errors
        if data.get("errors"):
            error_messages = [err.get("message", "Unknown error") for err in data["errors"]]
            if any(err.get("type") == "NOT_FOUND" for err in data["errors"]):
                raise NotFoundError(
                    f"GraphQL errors: {'; '.join(error_messages)}",
                    details={"errors": data["errors"]},
                )
            raise GitHubAPIError(
                f"GraphQL errors: {'; '.join(error_messages)}",
                details={"errors": data["errors"]},
            )

        return data.get("data") or {}

    async def _request(self, method: str, url: str, retry_count: int = 0, **kwargs: Any) -> httpx.Response:
        client = self._get_client()

        try:
            logger.debug(
                "Executing GitHub request",
                extra={"method": method, "url": url, "retry_count": retry_count},
            )
            response = await client.request(method, url, headers=self.headers, **kwargs)

        except httpx.TimeoutException as e:
            logger.error(f"GitHub API request timeout: {e}")
            if retry_count < self.max_retries:
                await asyncio.sleep(self.retry_delay)
                return await self._request(method, url, retry_count + 1, **kwargs)
            raise UpstreamUnavailableError(
                f"GitHub API timeout after {retry_count + 1} attempts",
                details={"url": url},
            ) from e

        except httpx.RequestError as e:
            logger.error(f"GitHub API request failed: {e}")
            if retry_count < self.max_retries:
                await asyncio.sleep(self.retry_delay)
                return await self._request(method, url, retry_count + 1, **kwargs)
            raise UpstreamUnavailableError(
                f"GitHub API connection error: {e}",
                details={"url": url},
            ) from e

        self._update_rate_limit_from_response(response)

        if response.status_code == 404:
            raise NotFoundError(
                "GitHub resource not found",
                details={"status_code": 404, "url": url},
            )

        if response.status_code in (403, 429) and (
            response.status_code == 429 or "rate limit" in response.text.lower()
        ):
            raise RateLimitError(
                "GitHub API rate limit exceeded",
                details={
                    "reset_at": self._rate_limit_reset_at,
                    "remaining": self._rate_limit_remaining,
                },
            )

        if response.status_code >= 500:
            # Server error - retry
            if retry_count < self.max_retries:
                await asyncio.sleep(self.retry_delay * (retry_count + 1))
                return await self._request(method, url, retry_count + 1, **kwargs)

            raise UpstreamUnavailableError(
                f"GitHub API server error: {response.status_code}",
                details={"status_code": response.status_code, "url": url},
            )

        if response.is_error:
            raise UpstreamUnavailableError(
                f"GitHub API error: {response.status_code} {response.reason_phrase}",
                details={"status_code": response.status_code, "url": url},
            )

        return response

    def _update_rate_limit_from_response(self, response: httpx.Response) -> None:
        """Update rate limit info from response headers."""
        if "X-RateLimit-Remaining" in response.headers:
            self._rate_limit_remaining = int(response.headers["X-RateLimit-Remaining"])

        if "X-RateLimit-Reset" in response.headers:
            reset_timestamp = int(response.headers["X-RateLimit-Reset"])
            self._rate_limit_reset_at = datetime.fromtimestamp(reset_timestamp, timezone.utc)

    @property
    def rate_limit_status(self) -> dict[str, Any]:
        """Get current rate limit status."""
        return {
            "remaining": self._rate_limit_remaining,
            "reset_at": self._rate_limit_reset_at,
        }
