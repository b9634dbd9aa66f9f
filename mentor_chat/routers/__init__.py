from . import health, profiles, mentors, auth
from .chat import chat_rooms_router, messages_router, websocket_router

__all__ = [
    "health",
    "profiles",
    "mentors",
    "auth",
    "chat_rooms_router",
    "messages_router",
    "websocket_router",
]
