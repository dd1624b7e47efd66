"""
Cache manager: get-or-compute with single-flight and expiry.
"""

import asyncio
from typing import Awaitable, Callable, Optional

from pydantic import ValidationError as PydanticValidationError

from github_wrapped.cache.store import KeyValueStore
from github_wrapped.core.config import Settings, settings as default_settings
from github_wrapped.core.exceptions import CacheError, ValidationError
from github_wrapped.core.logger import get_logger
from github_wrapped.core.models import WrappedBundle

logger = get_logger(__name__)

ComputeFn = Callable[[str], Awaitable[WrappedBundle]]


class CacheManager:
    """
    Memoizes wrapped bundles per identity.

    - A live entry is returned without calling ``compute``.
    - On a miss, concurrent callers for the same identity share one
      in-flight computation.
    - Failed computations are not cached; every waiter gets the error.
    - Store failures are logged and the request is served uncached.
    """

    def __init__(
        self,
        store: KeyValueStore,
        compute: ComputeFn,
        settings: Optional[Settings] = None,
    ):
        """
        Args:
            store: Key-value store with expiry
            compute: Coroutine function building a bundle for an identity
            settings: Settings instance (default: module settings)
        """
        self.store = store
        self.compute = compute
        self.settings = settings or default_settings
        self.ttl_seconds = self.settings.CACHE_TTL_SECONDS
        self.key_prefix = self.settings.CACHE_KEY_PREFIX

        self._inflight: dict[str, asyncio.Task] = {}
        self._lock = asyncio.Lock()

        logger.info("CacheManager initialized", extra={"ttl_seconds": self.ttl_seconds})

    @staticmethod
    def normalize_identity(identity: str) -> str:
        normalized = (identity or "").strip().lower()
        if not normalized:
            raise ValidationError("Identity must not be empty")
        return normalized

    def cache_key(self, identity: str) -> str:
        return f"{self.key_prefix}{self.normalize_identity(identity)}"

    async def get_or_compute(self, identity: str) -> WrappedBundle:
        """
        Return the cached bundle for ``identity`` or compute and cache it.

        The computation runs in its own task shared by every caller, so a
        caller that goes away does not cancel it for the others.

        Raises:
            ValidationError: If the identity is empty
            NotFoundError / GitHubAPIError: Propagated from the computation
        """
        identity = self.normalize_identity(identity)
        key = self.cache_key(identity)

        cached = await self._read(key)
        if cached is not None:
            logger.info(f"Cache hit for {identity}")
            return cached

        async with self._lock:
            task = self._inflight.get(key)
            if task is None:
                task = asyncio.create_task(self._compute_and_store(key, identity))
                task.add_done_callback(lambda done: self._forget(key, done))
                self._inflight[key] = task
            else:
                logger.info(f"Joining in-flight computation for {identity}")

        return await asyncio.shield(task)

    # Alias for the inbound lookup operation
    lookup = get_or_compute

    async def _compute_and_store(self, key: str, identity: str) -> WrappedBundle:
        # Another computation may have finished between the caller's read and the registry check
        bundle = await self._read(key)
        if bundle is not None:
            return bundle

        logger.info(f"Cache miss, computing bundle for {identity}")
        bundle = await self.compute(identity)
        await self._write(key, bundle)
        return bundle

    def _forget(self, key: str, task: asyncio.Task) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]
        # Mark the outcome retrieved even when every caller has gone away
        if not task.cancelled():
            task.exception()

    async def _read(self, key: str) -> Optional[WrappedBundle]:
        try:
            raw = await self.store.get(key)
        except CacheError as e:
            logger.warning("Cache read failed, treating as miss", extra={"key": key, "error": e.message})
            return None

        if raw is None:
            return None

        try:
            return WrappedBundle.model_validate_json(raw)
        except PydanticValidationError as e:
            logger.warning("Discarding unreadable cache entry", extra={"key": key, "error": str(e)})
            return None

    async def _write(self, key: str, bundle: WrappedBundle) -> None:
        try:
            await self.store.set_with_expiry(key, bundle.model_dump_json(by_alias=True), self.ttl_seconds)
        except CacheError as e:
            logger.warning("Cache write failed, serving uncached", extra={"key": key, "error": e.message})
