# mentor_chat/services/chat/message_service.py
"""Message log: append-only, per-room ordered chat messages."""
from datetime import datetime, timedelta, timezone
from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select, and_, func
import asyncio
import logging

from ..base_service import BaseService
from .chat_room_service import ChatRoomService
from .delivery import DeliveryChannel
from ...core.exceptions import EmptyContentError, NotAParticipantError, StorageUnavailableError
from ...models.base import utcnow
from ...models.chat.chat_room import ChatRoom
from ...models.chat.message import Message

logger = logging.getLogger(__name__)

NOTIFY_TIMEOUT_SECONDS = 2.0


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything stored is UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def serialize_message(message: Message) -> dict:
    return {
        "id": str(message.id),
        "chatRoomId": str(message.chat_room_id),
        "senderId": str(message.sender_id),
        "content": message.content,
        "createdAt": _as_utc(message.created_at).isoformat(),
    }


class MessageService(BaseService[Message]):
    def __init__(self, db: AsyncSession, delivery: Optional[DeliveryChannel] = None):
        super().__init__(Message, db)
        self.delivery = delivery
        self.rooms = ChatRoomService(db)

    async def append(self, chat_room_id: UUID, sender_id: UUID, content: str) -> Message:
        """Store a message and notify the room's live subscribers"""
        chat_room = await self.rooms.get_room(chat_room_id)
        if sender_id not in (chat_room.mentor_id, chat_room.patient_id):
            raise NotAParticipantError(sender_id, chat_room_id)
        if content is None or not content.strip():
            raise EmptyContentError()

        message = Message(
            chat_room_id=chat_room_id,
            sender_id=sender_id,
            content=content,
            created_at=await self._next_timestamp(chat_room_id),
        )
        self.db.add(message)
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to store message in room {chat_room_id}: {e}")
            raise StorageUnavailableError("Message could not be sent") from e
        await self.db.refresh(message)

        logger.info(f"Message {message.id} appended to room {chat_room_id}")
        await self._notify(message)
        return message

    async def _next_timestamp(self, chat_room_id: UUID) -> datetime:
        """Server clock, bumped past the room's newest message so reads follow append order"""
        now = utcnow()
        stmt = select(func.max(Message.created_at)).where(Message.chat_room_id == chat_room_id)
        latest = (await self._execute(stmt)).scalar()
        if latest is not None:
            latest = _as_utc(latest)
            if now <= latest:
                now = latest + timedelta(microseconds=1)
        return now

    async def _notify(self, message: Message):
        if self.delivery is None:
            return
        payload = {"type": "new_message", "message": serialize_message(message)}
        try:
            await asyncio.wait_for(
                self.delivery.notify(message.chat_room_id, payload),
                timeout=NOTIFY_TIMEOUT_SECONDS,
            )
        except Exception as e:
            # The message is durable; clients that miss this can re-fetch
            logger.warning(f"Delivery notification failed for message {message.id}: {e!r}")

    async def list_messages(self, chat_room_id: UUID, since: Optional[datetime] = None) -> List[Message]:
        """Messages of a room in (created_at, id) order, optionally only those after `since`"""
        await self.rooms.get_room(chat_room_id)

        stmt = select(Message).where(Message.chat_room_id == chat_room_id)
        if since is not None:
            stmt = stmt.where(Message.created_at > _as_utc(since))
        stmt = stmt.order_by(Message.created_at.asc(), Message.id.asc())

        result = await self._execute(stmt)
        return list(result.scalars().all())

    async def latest_message(self, chat_room_id: UUID) -> Optional[Message]:
        stmt = (
            select(Message)
            .where(Message.chat_room_id == chat_room_id)
            .order_by(Message.created_at.desc(), Message.id.desc())
            .limit(1)
        )
        result = await self._execute(stmt)
        return result.scalar_one_or_none()

    async def unread_count(self, chat_room_id: UUID, viewer_id: UUID) -> int:
        """Messages in the room not authored by the viewer.

        There are no per-viewer read markers, so this is every message the
        other participant has sent, not the ones sent since the viewer last
        looked.
        """
        await self.rooms.get_room(chat_room_id)
        return await self._count_not_from(chat_room_id, viewer_id)

    async def _count_not_from(self, chat_room_id: UUID, viewer_id: UUID) -> int:
        stmt = select(func.count()).select_from(Message).where(
            and_(
                Message.chat_room_id == chat_room_id,
                Message.sender_id != viewer_id,
            )
        )
        result = await self._execute(stmt)
        return result.scalar() or 0

    async def summarize(self, chat_room: ChatRoom, viewer_id: UUID) -> dict:
        """Latest message and unread count of a room for a dashboard row"""
        return {
            "latest_message": await self.latest_message(chat_room.id),
            "unread_count": await self._count_not_from(chat_room.id, viewer_id),
        }
