# mentor_chat/routers/chat/dependencies.py
from ...core.redis_client import redis_manager
from ...services.chat.delivery import DeliveryChannel, RedisDeliveryChannel
from ...services.chat.websocket_manager import websocket_manager

_redis_channel = RedisDeliveryChannel(redis_manager)

def get_delivery_channel() -> DeliveryChannel:
    """Redis fan-out when configured, otherwise this process's websockets"""
    if redis_manager.enabled:
        return _redis_channel
    return websocket_manager
