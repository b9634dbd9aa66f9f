# mentor_chat/services/chat/delivery.py
"""Best-effort new-message notification for live chat clients."""
from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID
import asyncio
import json
import logging

from redis.exceptions import RedisError

from ...core.config import settings
from ...core.redis_client import RedisManager

logger = logging.getLogger(__name__)

class DeliveryChannel(ABC):
    """Notifies subscribers of a chat room that something was appended."""

    @abstractmethod
    async def notify(self, chat_room_id: UUID, payload: dict) -> None:
        ...


class RedisDeliveryChannel(DeliveryChannel):
    """Publishes room events to redis so every API worker can fan them out."""

    def __init__(self, redis_manager: RedisManager, prefix: str = settings.chat_channel_prefix):
        self.redis_manager = redis_manager
        self.prefix = prefix

    def channel_for(self, chat_room_id: UUID) -> str:
        return f"{self.prefix}{chat_room_id}"

    async def notify(self, chat_room_id: UUID, payload: dict) -> None:
        receivers = await self.redis_manager.publish(
            self.channel_for(chat_room_id), json.dumps(payload, default=str)
        )
        logger.debug(f"Published event for room {chat_room_id} to {receivers} workers")


class RedisRelay:
    """Forwards redis room events to this worker's local delivery channel."""

    def __init__(
        self,
        redis_manager: RedisManager,
        local: DeliveryChannel,
        prefix: str = settings.chat_channel_prefix,
        retry_delay: float = 1.0,
        max_retry_delay: float = 30.0,
    ):
        self.redis_manager = redis_manager
        self.local = local
        self.prefix = prefix
        self.retry_delay = retry_delay
        self.max_retry_delay = max_retry_delay
        self._delay = retry_delay
        self._task: Optional[asyncio.Task] = None

    async def start(self):
        self._task = asyncio.create_task(self._run())

    async def stop(self):
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            except Exception as e:
                logger.error(f"Chat event relay had already failed: {e!r}")
            self._task = None

    async def _run(self):
        """Subscribe and relay until cancelled, resubscribing with backoff when redis drops"""
        self._delay = self.retry_delay
        while True:
            try:
                await self._listen(await self.redis_manager.pubsub())
                logger.warning("Chat event subscription ended")
            except (RedisError, OSError) as e:
                logger.error(f"Chat event relay lost redis: {e!r}")
            logger.info(f"Resubscribing to chat events in {self._delay:.1f}s")
            await asyncio.sleep(self._delay)
            self._delay = min(self._delay * 2, self.max_retry_delay)

    async def _listen(self, pubsub):
        try:
            await pubsub.psubscribe(f"{self.prefix}*")
            logger.info(f"Listening for chat events on {self.prefix}*")
            self._delay = self.retry_delay
            async for event in pubsub.listen():
                if event.get("type") != "pmessage":
                    continue
                try:
                    room_id = UUID(event["channel"][len(self.prefix):])
                    payload = json.loads(event["data"])
                    await self.local.notify(room_id, payload)
                except (ValueError, KeyError) as e:
                    logger.warning(f"Dropping malformed chat event: {e}")
                except Exception as e:
                    logger.error(f"Error relaying chat event: {e}")
        finally:
            await pubsub.aclose()
