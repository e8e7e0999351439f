"""CacheService unit tests covering memory fallback behavior."""

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from services.cache import CacheService


@pytest.mark.asyncio
async def test_cache_round_trip_and_expiry():
    """Ensure values expire immediately when ttl=0 and persist otherwise."""
    cache = CacheService(redis_url=None)
    assert await cache.get("missing") is None

    await cache.set("key", {"value": 1}, ttl_seconds=0)
    assert await cache.get("key") is None

    await cache.set("fresh", {"value": 2}, ttl_seconds=5)
    assert await cache.get("fresh") == {"value": 2}


@pytest.mark.asyncio
async def test_company_review_helpers_normalize_names():
    cache = CacheService(redis_url=None)
    payload = {"name": "ABC Corp", "rating": "4.0", "reviews": ["Good"]}
    await cache.set_company_review("ABC Corp", payload, ttl_seconds=5)
    assert await cache.get_company_review("  abc corp ") == payload


@pytest.mark.asyncio
async def test_cache_falls_back_to_memory_when_redis_errors():
    """If Redis is unavailable the cache should fall back to in-memory storage."""

    class DownRedis:
        async def get(self, key):
            raise RedisConnectionError("redis down")

        async def set(self, key, value, ex=None):
            raise RedisConnectionError("redis down")

    cache = CacheService(redis_url=None)
    cache._redis = DownRedis()

    await cache.set("key", {"value": 3}, ttl_seconds=5)
    assert await cache.get("key") == {"value": 3}
