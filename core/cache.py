from fastapi_cache import FastAPICache
from fastapi_cache.backends.inmemory import InMemoryBackend
from fastapi_cache.decorator import cache
from aiocache import SimpleMemoryCache, caches
from typing import Optional, Callable
import logging

from core.config import settings

logger = logging.getLogger(__name__)

# Service-level views (rows read back from the hosted backend)
caches.set_config({
    'default': {
        'cache': "aiocache.SimpleMemoryCache",
        'serializer': {
            'class': "aiocache.serializers.PickleSerializer"
        },
        'ttl': settings.get_cache_ttl()["stored_weather"],
    }
})

async def init_cache():
    """Initialize in-memory cache backend for route responses."""
    FastAPICache.init(
        backend=InMemoryBackend(),
        prefix=settings.cache["prefix"]
    )
    logger.info("Response cache initialized")

def get_cache() -> SimpleMemoryCache:
    """Get the default service-level cache instance."""
    return caches.get('default')  # type: ignore

def cached(
    expire: Optional[int] = None,
    namespace: Optional[str] = None,
    key_builder: Optional[Callable] = None
):
    """Cache decorator that respects the enabled setting."""
    def decorator(func):
        if not settings.cache["enabled"]:
            return func

        # Get TTL from settings if not provided
        ttl = expire
        if ttl is None and namespace:
            ttl = settings.get_cache_ttl().get(namespace)

        return cache(
            expire=ttl,
            namespace=namespace or func.__name__,
            key_builder=key_builder
        )(func)

    return decorator
