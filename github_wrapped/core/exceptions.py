"""
All custom exceptions for the project.
"""


class BaseAppException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class GitHubAPIError(BaseAppException):
    """Raised when a request to the upstream data source fails."""

    pass


class NotFoundError(GitHubAPIError):
    """Raised when the requested identity does not exist upstream. Terminal."""

    pass


class UpstreamUnavailableError(GitHubAPIError):
    """Raised on transient upstream failures (network, 5xx). Safe to retry later."""

    pass


class RateLimitError(UpstreamUnavailableError):
    """Raised when GitHub API rate limit is exceeded."""

    pass


class PartialDataError(GitHubAPIError):
    """Raised when a non-essential sub-fetch fails (e.g. one repository's languages)."""

    pass


class NarrativeUnavailableError(BaseAppException):
    """Raised by text generators when no story could be produced."""

    pass


class CacheError(BaseAppException):
    """Raised when the cache store cannot be read or written."""

    pass


class ValidationError(BaseAppException):
    """Raised when input validation fails."""

    pass
