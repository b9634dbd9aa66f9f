# mentor_chat/models/chat/__init__.py
from .chat_room import ChatRoom
from .message import Message

__all__ = ["ChatRoom", "Message"]
