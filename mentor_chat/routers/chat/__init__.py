# mentor_chat/routers/chat/__init__.py
from .chat_rooms import router as chat_rooms_router
from .messages import router as messages_router
from .websocket_router import router as websocket_router

__all__ = ["chat_rooms_router", "messages_router", "websocket_router"]
