"""
Backend Selector

Chooses the cache backend once, at startup:

    1. CACHE_SERVICE_ADDRESS set?  -> try Redis (connect + PING), one attempt
    2. Any failure, or no address  -> open the local diskcache store

The fallback is permanent for the lifetime of the returned backend and is
never reported to callers as an error.
"""

from collections.abc import Callable

from product_catalog.core.config.constants import Stage
from product_catalog.core.config.settings import CacheSettings
from product_catalog.core.interfaces.cache import CacheBackend
from product_catalog.core.logging.logger import get_logger
from product_catalog.infrastructure.cache.local_backend import LocalBackend
from product_catalog.infrastructure.cache.redis_backend import RedisBackend

logger = get_logger(__name__)


class BackendSelector:
    """
    One-shot backend selection.

    Usage:
        selector = BackendSelector(settings.cache)
        backend = await selector.initialize()

    Args:
        settings: Cache settings
        networked_factory: Builds the networked backend (tests inject fakes)
        local_factory: Builds the local backend (tests inject fakes)
    """

    def __init__(
        self,
        settings: CacheSettings,
        networked_factory: Callable[[], CacheBackend] | None = None,
        local_factory: Callable[[], CacheBackend] | None = None,
    ):
        self._settings = settings
        self._networked_factory = networked_factory or (
            lambda: RedisBackend(
                settings.CACHE_SERVICE_ADDRESS,
                socket_timeout=settings.CACHE_SOCKET_TIMEOUT,
            )
        )
        self._local_factory = local_factory or (
            lambda: LocalBackend(settings.CACHE_LOCAL_DIRECTORY)
        )

    async def initialize(self) -> CacheBackend:
        """
        Select and connect a backend.

        STAGE-CACHE.0: Backend selection

        Returns:
            CacheBackend: Connected networked backend, or the local fallback

        Raises:
            CacheConnectionError: Only if the local fallback itself cannot be opened
        """
        if self._settings.CACHE_SERVICE_ADDRESS:
            backend = self._networked_factory()
            try:
                await backend.connect()
            except Exception as e:
                # Any failure, including ones outside the redis error family,
                # means "no networked cache for this process".
                logger.warning(
                    "Networked cache unavailable, using local store",
                    stage=Stage.CACHE_INIT,
                    address=self._settings.CACHE_SERVICE_ADDRESS,
                    error=str(e),
                    error_type=type(e).__name__,
                )
            else:
                logger.info("Cache backend selected", stage=Stage.CACHE_INIT, backend=backend.name)
                return backend
        else:
            logger.info("Networked cache disabled, using local store", stage=Stage.CACHE_INIT)

        local = self._local_factory()
        await local.connect()
        logger.info("Cache backend selected", stage=Stage.CACHE_INIT, backend=local.name)
        return local
