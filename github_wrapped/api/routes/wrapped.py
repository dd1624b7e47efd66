"""
Wrapped endpoints.
Serves the yearly bundle for a GitHub identity.
"""

from typing import Optional

from fastapi import APIRouter, Query, Request, status

from github_wrapped.cache.manager import CacheManager
from github_wrapped.core.exceptions import ValidationError
from github_wrapped.core.logger import get_logger
from github_wrapped.core.models import WrappedBundle

logger = get_logger(__name__)

router = APIRouter()


def get_cache(request: Request) -> CacheManager:
    return request.app.state.cache


@router.get(
    "/github-wrapped",
    response_model=WrappedBundle,
    response_model_by_alias=True,
    status_code=status.HTTP_200_OK,
    summary="Get the GitHub wrapped bundle",
    description="Returns yearly stats, ranks, achievements and story for a GitHub user",
    tags=["Wrapped"],
)
async def get_github_wrapped(
    request: Request,
    username: Optional[str] = Query(default=None, max_length=39, description="GitHub login"),
) -> WrappedBundle:
    """
    Look up (or compute and cache) the wrapped bundle for ``username``.

    Returns 400 without a username, 404 for unknown users and 503/429 when
    GitHub is unavailable.
    """
    if not username or not username.strip():
        raise ValidationError("Username is required")

    logger.info("Wrapped bundle requested", extra={"username": username})
    return await get_cache(request).lookup(username)
