"""
Redis Key/Value Store
Shares client state between processes; degrades to an empty store when Redis is down
"""
from typing import Optional

import redis.asyncio as redis
from redis.asyncio import Redis
from redis.exceptions import RedisError

from application.services.storage.interfaces import IKeyValueStore
from core.config import settings
from core.logging_config import logger


class RedisKeyValueStore(IKeyValueStore):
    """Redis-backed store"""

    def __init__(self, url: Optional[str] = None, client: Optional[Redis] = None):
        self.url = url or settings.REDIS_URL
        self._redis: Optional[Redis] = client

    async def connect(self):
        """Connect to Redis"""
        if self._redis is not None:
            return
        try:
            self._redis = redis.from_url(self.url, encoding="utf-8", decode_responses=True)
            logger.info(f"Connected to Redis: {self.url}")
        except (RedisError, ValueError) as e:
            logger.error(f"Failed to connect to Redis: {e}")
            self._redis = None

    async def disconnect(self):
        """Disconnect from Redis"""
        if self._redis:
            await self._redis.aclose()
            self._redis = None
            logger.info("Disconnected from Redis")

    async def get(self, key: str) -> Optional[str]:
        await self.connect()
        if not self._redis:
            return None

        try:
            return await self._redis.get(key)
        except RedisError as e:
            logger.error(f"Redis GET error for key {key}: {e}")
            return None

    async def set(self, key: str, value: str) -> None:
        await self.connect()
        if not self._redis:
            return

        try:
            await self._redis.set(key, value)
            logger.debug(f"Stored key {key}")
        except RedisError as e:
            logger.error(f"Redis SET error for key {key}: {e}")

    async def delete(self, key: str) -> None:
        await self.connect()
        if not self._redis:
            return

        try:
            await self._redis.delete(key)
            logger.debug(f"Deleted key {key}")
        except RedisError as e:
            logger.error(f"Redis DELETE error for key {key}: {e}")
