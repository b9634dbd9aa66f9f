"""Import all models here, if needed for Alembic migration."""
from .base import Base

from .profile import Profile, UserType
from .mentor import Mentor
from .chat import ChatRoom, Message

__all__ = ["Base", "Profile", "UserType", "Mentor", "ChatRoom", "Message"]
