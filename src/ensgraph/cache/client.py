"""Redis cache for resolved profiles, reverse names and the friendship graph."""

from __future__ import annotations

import json
import logging
from typing import Any

import redis.asyncio as aioredis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


class AsyncRedisClient:
    """
    JSON values in Redis with a per-client default TTL.

    Entries that fail to decode are dropped and read as misses, so a
    format change between releases never surfaces as a stale profile.
    """

    def __init__(
        self,
        redis_url: str,
        *,
        default_ttl: int = 600,
        max_connections: int = 20,
    ) -> None:
        self._redis_url = redis_url
        self._default_ttl = default_ttl
        self._max_connections = max_connections
        self._redis: aioredis.Redis | None = None

    async def connect(self) -> None:
        """Open the connection pool and verify the server answers."""
        redis = aioredis.from_url(
            self._redis_url,
            max_connections=self._max_connections,
            decode_responses=True,
        )
        try:
            await redis.ping()
        except RedisError:
            await redis.aclose()
            raise
        self._redis = redis

    async def close(self) -> None:
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None

    async def ping(self) -> bool:
        """True when the server answers; never raises."""
        if self._redis is None:
            return False
        try:
            return bool(await self._redis.ping())
        except RedisError as e:
            logger.warning(f"Redis ping failed: {e}")
            return False

    async def get(self, key: str) -> Any | None:
        if self._redis is None:
            return None
        raw = await self._redis.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.debug(f"Dropping undecodable cache entry {key}")
            await self._redis.delete(key)
            return None

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        if self._redis is None:
            return
        await self._redis.set(key, json.dumps(value, default=str), ex=ttl or self._default_ttl)

    async def delete(self, *keys: str) -> int:
        """Remove keys, returning how many existed."""
        if self._redis is None or not keys:
            return 0
        return await self._redis.delete(*keys)

    async def __aenter__(self) -> AsyncRedisClient:
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
