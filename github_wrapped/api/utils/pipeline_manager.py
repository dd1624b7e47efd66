"""
Pipeline manager for FastAPI integration.
Wires the data source, storyteller, pipeline, store and cache manager.
"""

from typing import Optional

from github_wrapped.cache.manager import CacheManager
from github_wrapped.cache.store import InMemoryStore, KeyValueStore, RedisStore
from github_wrapped.connectors.demo_source import DemoActivitySource
from github_wrapped.connectors.github_source import GitHubActivitySource
from github_wrapped.connectors.source import ActivitySource
from github_wrapped.core.config import Settings, settings as default_settings
from github_wrapped.core.github_client import GitHubClient
from github_wrapped.core.logger import get_logger
from github_wrapped.narrative.storyteller import Storyteller
from github_wrapped.pipelines.wrapped_pipeline import WrappedPipeline

logger = get_logger(__name__)


class PipelineManager:
    """
    Owns the long-lived collaborators of the service.

    Handles:
    - Choosing the demo or GitHub data source
    - Choosing the Redis or in-memory cache store
    - Building the cache manager exposed to routes
    - Closing network clients on shutdown
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        source: Optional[ActivitySource] = None,
        store: Optional[KeyValueStore] = None,
        storyteller: Optional[Storyteller] = None,
    ):
        self.settings = settings or default_settings
        self.client: Optional[GitHubClient] = None
        self.source = source
        self.store = store
        self.storyteller = storyteller
        self.pipeline: Optional[WrappedPipeline] = None
        self.cache: Optional[CacheManager] = None
        self.is_running = False

        logger.info("PipelineManager initialized")

    def initialize(self) -> CacheManager:
        """Build every collaborator that was not injected and return the cache manager."""
        if self.source is None:
            if self.settings.DEMO_MODE:
                logger.info("Using demo source (simulated data)")
                self.source = DemoActivitySource()
            else:
                logger.info("Using GitHub source (real data)")
                self.client = GitHubClient(settings=self.settings)
                self.source = GitHubActivitySource(self.client)

        if self.store is None:
            if self.settings.REDIS_URL:
                logger.info("Using Redis cache store")
                self.store = RedisStore.from_url(self.settings.REDIS_URL)
            else:
                logger.info("Using in-memory cache store")
                self.store = InMemoryStore()

        if self.storyteller is None:
            self.storyteller = Storyteller(settings=self.settings)

        self.pipeline = WrappedPipeline(self.source, self.storyteller, self.settings)
        self.cache = CacheManager(self.store, self.pipeline.build, self.settings)
        self.is_running = True

        logger.info("Pipeline and cache initialized successfully")
        return self.cache

    @property
    def store_backend(self) -> str:
        if isinstance(self.store, RedisStore):
            return "redis"
        if isinstance(self.store, InMemoryStore):
            return "memory"
        return type(self.store).__name__ if self.store is not None else "none"

    async def shutdown(self) -> None:
        """Close network clients."""
        logger.info("Shutting down pipeline...")
        self.is_running = False
        if self.client is not None:
            await self.client.aclose()
        if isinstance(self.store, RedisStore):
            await self.store.aclose()
        logger.info("Pipeline shutdown complete")
