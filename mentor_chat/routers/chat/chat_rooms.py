# mentor_chat/routers/chat/chat_rooms.py
from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.database import get_db
from ...core.exceptions import ValidationError
from ...models.profile import UserType
from ...schemas.chat_schemas import (
    ChatRoomCreate, ChatRoomDetail, ChatRoomResponse, ChatRoomSummary, UnreadCountResponse
)
from ...services.chat.chat_room_service import ChatRoomService
from ...services.chat.message_service import MessageService
from ...services.profile_service import ProfileService

router = APIRouter(prefix="/api/chat-rooms", tags=["Chat Rooms"])

@router.post("", response_model=ChatRoomResponse, status_code=status.HTTP_201_CREATED)
async def find_or_create_chat_room(
    request: ChatRoomCreate,
    response: Response,
    db: AsyncSession = Depends(get_db)
):
    """Start a chat between a mentor and a patient, reusing the pair's room if it exists"""
    service = ChatRoomService(db)
    chat_room, created = await service.find_or_create_room(request.mentor_id, request.patient_id)
    if not created:
        response.status_code = status.HTTP_200_OK
    return chat_room

@router.get("", response_model=List[ChatRoomSummary])
async def list_chat_rooms(
    mentor_id: Optional[UUID] = Query(None, alias="mentorId"),
    patient_id: Optional[UUID] = Query(None, alias="patientId"),
    db: AsyncSession = Depends(get_db)
):
    """Dashboard list of a participant's rooms with latest message and unread count"""
    if mentor_id:
        participant_id, role = mentor_id, UserType.MENTOR
    elif patient_id:
        participant_id, role = patient_id, UserType.PATIENT
    else:
        raise ValidationError("mentorId or patientId required")

    rooms = await ChatRoomService(db).list_rooms_for_participant(participant_id, role)
    profiles = await ProfileService(db).get_many(
        [room.mentor_id for room in rooms] + [room.patient_id for room in rooms]
    )
    messages = MessageService(db)

    summaries = []
    for room in rooms:
        summary = await messages.summarize(room, participant_id)
        summaries.append(ChatRoomSummary(
            id=room.id,
            mentor_id=room.mentor_id,
            patient_id=room.patient_id,
            created_at=room.created_at,
            mentor_profile=profiles.get(room.mentor_id),
            patient_profile=profiles.get(room.patient_id),
            **summary,
        ))
    return summaries

@router.get("/{chat_room_id}", response_model=ChatRoomDetail)
async def get_chat_room(
    chat_room_id: UUID,
    db: AsyncSession = Depends(get_db)
):
    """Get a chat room with both participants' profiles"""
    chat_room = await ChatRoomService(db).get_room(chat_room_id)
    profiles = await ProfileService(db).get_many([chat_room.mentor_id, chat_room.patient_id])

    return ChatRoomDetail(
        id=chat_room.id,
        mentor_id=chat_room.mentor_id,
        patient_id=chat_room.patient_id,
        created_at=chat_room.created_at,
        mentor_profile=profiles.get(chat_room.mentor_id),
        patient_profile=profiles.get(chat_room.patient_id),
    )

@router.get("/{chat_room_id}/unread-count", response_model=UnreadCountResponse)
async def get_unread_count(
    chat_room_id: UUID,
    viewer_id: UUID = Query(..., alias="viewerId"),
    db: AsyncSession = Depends(get_db)
):
    """Count of messages in the room not written by the viewer"""
    count = await MessageService(db).unread_count(chat_room_id, viewer_id)
    return UnreadCountResponse(chat_room_id=chat_room_id, viewer_id=viewer_id, unread_count=count)
