"""
Global error handling.
Maps the exception hierarchy to consistent JSON error responses.
"""

from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from github_wrapped.api.models.responses import ErrorResponse
from github_wrapped.core.exceptions import (
    GitHubAPIError,
    NotFoundError,
    RateLimitError,
    UpstreamUnavailableError,
    ValidationError,
)
from github_wrapped.core.logger import get_logger

logger = get_logger(__name__)


def create_error_response(
    error_type: str,
    message: str,
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    details: Optional[str] = None,
    request_id: str = "unknown",
    retry_after: Optional[int] = None,
) -> JSONResponse:
    """
    Create a standardized error response.

    Args:
        error_type: Type of error
        message: Human-readable error message
        status_code: HTTP status code
        details: Additional error details
        request_id: Request tracking ID
        retry_after: Suggested retry delay, also sent as a Retry-After header

    Returns:
        JSON error response
    """
    body = ErrorResponse(
        error=error_type,
        message=message,
        details=details,
        request_id=request_id,
        retry_after=retry_after,
    )
    headers = {"Retry-After": str(retry_after)} if retry_after else None
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
        headers=headers,
    )


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


async def handle_validation_error(request: Request, error: ValidationError) -> JSONResponse:
    """Handle invalid inbound input."""
    logger.warning(
        "Validation error",
        extra={"request_id": _request_id(request), "path": request.url.path, "error": error.message},
    )
    return create_error_response(
        "ValidationError",
        error.message,
        status_code=status.HTTP_400_BAD_REQUEST,
        request_id=_request_id(request),
    )


async def handle_not_found_error(request: Request, error: NotFoundError) -> JSONResponse:
    """Handle identities that do not exist upstream."""
    logger.info(
        "Identity not found",
        extra={"request_id": _request_id(request), "path": request.url.path, "error": error.message},
    )
    return create_error_response(
        "NotFound",
        "GitHub user not found",
        status_code=status.HTTP_404_NOT_FOUND,
        details=error.message,
        request_id=_request_id(request),
    )


async def handle_rate_limit_error(request: Request, error: RateLimitError) -> JSONResponse:
    """Handle rate limit errors."""
    logger.warning(
        "Rate limit exceeded",
        extra={"request_id": _request_id(request), "path": request.url.path, "error": error.message},
    )
    return create_error_response(
        "RateLimitError",
        "API rate limit exceeded. Please try again later.",
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        details=error.message,
        request_id=_request_id(request),
        retry_after=60,
    )


async def handle_upstream_error(request: Request, error: GitHubAPIError) -> JSONResponse:
    """Handle transient upstream failures."""
    logger.warning(
        "GitHub API error",
        extra={
            "request_id": _request_id(request),
            "path": request.url.path,
            "error": error.message,
            "error_type": type(error).__name__,
        },
    )
    return create_error_response(
        "UpstreamUnavailable",
        "GitHub API is currently unavailable",
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        details=error.message,
        request_id=_request_id(request),
    )


async def handle_generic_error(request: Request, error: Exception) -> JSONResponse:
    """Handle all other unhandled exceptions."""
    logger.error(
        "Unhandled exception",
        extra={
            "request_id": _request_id(request),
            "path": request.url.path,
            "error_type": type(error).__name__,
            "error": str(error),
        },
    )
    return create_error_response(
        "InternalServerError",
        "An unexpected error occurred",
        request_id=_request_id(request),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach every handler; the most specific exception class wins."""
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(NotFoundError, handle_not_found_error)
    app.add_exception_handler(RateLimitError, handle_rate_limit_error)
    app.add_exception_handler(UpstreamUnavailableError, handle_upstream_error)
    app.add_exception_handler(GitHubAPIError, handle_upstream_error)
    app.add_exception_handler(Exception, handle_generic_error)
