"""
FastAPI application entry point.
GitHub Wrapped - API Layer
"""
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from github_wrapped.api.middleware.error_handler import register_exception_handlers
from github_wrapped.api.middleware.logging import RequestLoggingMiddleware
from github_wrapped.api.routes import health, wrapped
from github_wrapped.api.routes.health import VERSION
from github_wrapped.api.utils.pipeline_manager import PipelineManager
from github_wrapped.core.config import Settings, settings as default_settings
from github_wrapped.core.logger import get_logger

logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    pipeline_manager: Optional[PipelineManager] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings instance (default: module settings)
        pipeline_manager: Pre-configured manager, mostly for tests
    """
    settings = settings or default_settings
    manager = pipeline_manager or PipelineManager(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan context manager.
        Handles startup and shutdown events.
        """
        logger.info("Starting FastAPI application")
        app.state.startup_time = datetime.now(timezone.utc)
        app.state.pipeline_manager = manager
        app.state.cache = manager.initialize()

        try:
            logger.info("Application startup complete")
            yield
        finally:
            logger.info("Shutting down FastAPI application")
            await manager.shutdown()
            logger.info("Application shutdown complete")

    app = FastAPI(
        title="GitHub Wrapped",
        description="Yearly GitHub activity stats, ranks, achievements and story",
        version=VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS Configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins_list() or ["*"],
        allow_credentials=True,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    @app.get("/")
    async def root():
        """Root endpoint - API information."""
        return {
            "name": "GitHub Wrapped",
            "version": VERSION,
            "status": "operational",
            "docs": "/docs",
            "health": "/api/v1/health",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    app.include_router(health.router, tags=["Health"])
    app.include_router(health.router, prefix="/api/v1", tags=["Health"])
    app.include_router(wrapped.router, prefix="/api", tags=["Wrapped"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    from github_wrapped.core.logger import setup_logging

    setup_logging()
    uvicorn.run(
        "github_wrapped.api.main:app",
        host=default_settings.API_HOST,
        port=default_settings.API_PORT,
        reload=default_settings.API_RELOAD,
        log_level=default_settings.LOG_LEVEL.lower(),
    )
