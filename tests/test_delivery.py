"""
Redis fan-out tests with an in-memory stand-in for the redis connection.
"""

import asyncio
import json
import uuid

from redis.exceptions import ConnectionError as RedisConnectionError

from mentor_chat.core.redis_client import RedisManager
from mentor_chat.routers.chat.dependencies import get_delivery_channel
from mentor_chat.services.chat.delivery import DeliveryChannel, RedisDeliveryChannel, RedisRelay
from mentor_chat.services.chat.websocket_manager import websocket_manager

from .conftest import RecordingChannel


class FakePubSub:
    def __init__(self, events=(), error=None, block=False):
        self.events = list(events)
        self.error = error
        self.block = block
        self.patterns = []
        self.closed = False

    async def psubscribe(self, pattern):
        self.patterns.append(pattern)

    async def listen(self):
        for event in self.events:
            yield event
        if self.error is not None:
            raise self.error
        if self.block:
            await asyncio.Event().wait()

    async def aclose(self):
        self.closed = True


class FakeRedisManager(RedisManager):
    def __init__(self, pubsubs=()):
        super().__init__("redis://fake")
        self.published = []
        self.pubsubs = list(pubsubs)

    async def publish(self, channel: str, data: str) -> int:
        self.published.append((channel, data))
        return 1

    async def pubsub(self):
        if self.pubsubs:
            return self.pubsubs.pop(0)
        return FakePubSub(block=True)


class SignallingChannel(DeliveryChannel):
    def __init__(self):
        self.events = []
        self.received = asyncio.Event()

    async def notify(self, chat_room_id, payload):
        self.events.append((chat_room_id, payload))
        self.received.set()


def room_event(room_id, payload):
    return {"type": "pmessage", "channel": f"chat:room:{room_id}", "data": json.dumps(payload)}


class TestRedisDeliveryChannel:

    async def test_publishes_on_room_channel(self):
        manager = FakeRedisManager()
        channel = RedisDeliveryChannel(manager, prefix="chat:room:")
        room_id = uuid.uuid4()

        await channel.notify(room_id, {"type": "new_message", "message": {"content": "hello"}})

        (published_channel, data), = manager.published
        assert published_channel == f"chat:room:{room_id}"
        assert json.loads(data)["message"]["content"] == "hello"


class TestRedisRelay:

    async def test_forwards_pattern_messages(self):
        room_id = uuid.uuid4()
        local = RecordingChannel()
        relay = RedisRelay(FakeRedisManager(), local, prefix="chat:room:")
        pubsub = FakePubSub([
            {"type": "psubscribe", "channel": "chat:room:*", "data": 1},
            room_event(room_id, {"type": "new_message"}),
            {"type": "pmessage", "channel": "chat:room:not-a-uuid", "data": "{}"},
        ])

        await relay._listen(pubsub)

        assert pubsub.patterns == ["chat:room:*"]
        assert local.events == [(room_id, {"type": "new_message"})]
        assert pubsub.closed

    async def test_resubscribes_after_connection_loss(self):
        room_id = uuid.uuid4()
        dropped = FakePubSub(error=RedisConnectionError("connection reset"))
        recovered = FakePubSub([room_event(room_id, {"type": "new_message"})], block=True)
        local = SignallingChannel()
        relay = RedisRelay(
            FakeRedisManager([dropped, recovered]), local,
            prefix="chat:room:", retry_delay=0.01, max_retry_delay=0.01,
        )

        await relay.start()
        await asyncio.wait_for(local.received.wait(), timeout=2)
        await relay.stop()

        assert dropped.closed
        assert recovered.closed
        assert local.events == [(room_id, {"type": "new_message"})]

    async def test_stop_tolerates_a_failed_task(self):
        relay = RedisRelay(FakeRedisManager(), RecordingChannel(), prefix="chat:room:")

        async def crashed():
            raise RedisConnectionError("gone")

        relay._task = asyncio.create_task(crashed())
        await asyncio.sleep(0)

        await relay.stop()

        assert relay._task is None


def test_in_process_channel_without_redis():
    assert get_delivery_channel() is websocket_manager
