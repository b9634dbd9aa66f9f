# mentor_chat/schemas/chat_schemas.py
"""Pydantic schemas for chat rooms and messages."""
from typing import Optional
from datetime import datetime
from uuid import UUID
from pydantic import Field

from .base import CamelModel
from .profile_schemas import ProfileResponse


class ChatRoomCreate(CamelModel):
    mentor_id: UUID
    patient_id: UUID


class ChatRoomResponse(CamelModel):
    id: UUID
    mentor_id: UUID
    patient_id: UUID
    created_at: datetime


class ChatRoomDetail(ChatRoomResponse):
    mentor_profile: Optional[ProfileResponse] = None
    patient_profile: Optional[ProfileResponse] = None


class MessageCreate(CamelModel):
    chat_room_id: UUID
    sender_id: UUID
    # Blank content is rejected by the message log, not here
    content: str = Field(..., max_length=10000)


class MessageResponse(CamelModel):
    id: UUID
    chat_room_id: UUID
    sender_id: UUID
    content: str
    created_at: datetime


class ChatRoomSummary(ChatRoomDetail):
    latest_message: Optional[MessageResponse] = None
    unread_count: int = 0


class UnreadCountResponse(CamelModel):
    chat_room_id: UUID
    viewer_id: UUID
    unread_count: int
