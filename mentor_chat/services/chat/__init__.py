# mentor_chat/services/chat/__init__.py
from .chat_room_service import ChatRoomService
from .message_service import MessageService
from .delivery import DeliveryChannel, RedisDeliveryChannel, RedisRelay
from .websocket_manager import WebSocketManager, websocket_manager

__all__ = [
    "ChatRoomService",
    "MessageService",
    "DeliveryChannel",
    "RedisDeliveryChannel",
    "RedisRelay",
    "WebSocketManager",
    "websocket_manager",
]
