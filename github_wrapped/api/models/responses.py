"""
Response models for API endpoints.
The wrapped bundle itself is served from github_wrapped.core.models.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response model for the health endpoint."""

    status: str = Field(..., description="Overall status (healthy, unavailable)")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    pipeline_running: bool = Field(..., description="Whether the pipeline is wired")
    cache_backend: str = Field(..., description="Cache store in use (redis, memory)")
    demo_mode: bool = Field(default=False, description="Whether simulated data is served")
    uptime_seconds: Optional[float] = Field(None, description="Seconds since startup")
    version: str = Field(..., description="Service version")


class ErrorResponse(BaseModel):
    """Standardized error body."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[str] = Field(None, description="Additional error details")
    request_id: str = Field(default="unknown", description="Request tracking ID")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    retry_after: Optional[int] = Field(None, description="Suggested retry delay in seconds")
