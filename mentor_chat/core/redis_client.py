# mentor_chat/core/redis_client.py
"""Redis connection used for cross-worker chat fan-out."""
from typing import Optional
import logging
import redis.asyncio as redis
from .config import settings

logger = logging.getLogger(__name__)

class RedisManager:
    def __init__(self, url: Optional[str] = None):
        self.url = url
        self.redis: Optional[redis.Redis] = None

    @property
    def enabled(self) -> bool:
        return bool(self.url)

    async def connect(self) -> redis.Redis:
        """Initialize Redis connection."""
        if not self.redis:
            self.redis = redis.from_url(
                self.url,
                encoding="utf-8",
                decode_responses=True
            )
            logger.info("Redis client initialized")
        return self.redis

    async def disconnect(self):
        """Close Redis connection."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None

    async def publish(self, channel: str, data: str) -> int:
        client = await self.connect()
        return await client.publish(channel, data)

    async def pubsub(self):
        client = await self.connect()
        return client.pubsub()

# Global redis instance
redis_manager = RedisManager(settings.redis_url)
