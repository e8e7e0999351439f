"""TTL cache with optional Redis backend."""
from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from redis import asyncio as redis_asyncio
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    value: Any
    expires_at: datetime


class CacheService:
    """A very small cache facade that prefers Redis but falls back to memory."""

    def __init__(self, redis_url: Optional[str]):
        self._redis = redis_asyncio.from_url(redis_url) if redis_url else None
        self._store: dict[str, CacheEntry] = {}
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> Any:
        """Return a cached value or None."""

        if self._redis:
            try:
                result = await self._redis.get(key)
                return json.loads(result) if result else None
            except RedisError as exc:
                logger.warning("Redis get failed for %s (%s); using memory cache", key, exc)
        async with self._lock:
            entry = self._store.get(key)
            if entry and entry.expires_at > datetime.now(timezone.utc):
                return entry.value
            if entry:
                self._store.pop(key, None)
            return None

    async def set(self, key: str, value: Any, ttl_seconds: int = 3600) -> None:
        """Store a value for a period of time."""

        expires = datetime.now(timezone.utc) + timedelta(seconds=ttl_seconds)
        if self._redis and ttl_seconds > 0:
            try:
                await self._redis.set(key, json.dumps(value), ex=ttl_seconds)
                return
            except RedisError as exc:
                logger.warning("Redis set failed for %s (%s); using memory cache", key, exc)
        async with self._lock:
            self._store[key] = CacheEntry(value=value, expires_at=expires)

    async def get_company_review(self, name: str) -> Optional[dict[str, Any]]:
        """Return a cached review lookup for a company name."""

        return await self.get(self._company_key(name))

    async def set_company_review(self, name: str, review: dict[str, Any], ttl_seconds: int = 86400) -> None:
        await self.set(self._company_key(name), review, ttl_seconds=ttl_seconds)

    @staticmethod
    def _company_key(name: str) -> str:
        return f"company-review:{name.strip().lower()}"
