# mentor_chat/routers/chat/messages.py
from datetime import datetime
from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.database import get_db
from ...core.exceptions import ValidationError
from ...schemas.chat_schemas import MessageCreate, MessageResponse
from ...services.chat.delivery import DeliveryChannel
from ...services.chat.message_service import MessageService
from .dependencies import get_delivery_channel

router = APIRouter(prefix="/api/messages", tags=["Messages"])

@router.get("", response_model=List[MessageResponse])
async def list_messages(
    chat_room_id: Optional[UUID] = Query(None, alias="chatRoomId"),
    since: Optional[datetime] = Query(None, description="Only messages created after this instant"),
    db: AsyncSession = Depends(get_db)
):
    """Messages of a chat room, oldest first"""
    if not chat_room_id:
        raise ValidationError("chatRoomId required")
    return await MessageService(db).list_messages(chat_room_id, since)

@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    request: MessageCreate,
    db: AsyncSession = Depends(get_db),
    delivery: DeliveryChannel = Depends(get_delivery_channel)
):
    """Append a message to a chat room and notify live clients"""
    service = MessageService(db, delivery)
    return await service.append(request.chat_room_id, request.sender_id, request.content)
