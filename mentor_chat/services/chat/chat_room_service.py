# mentor_chat/services/chat/chat_room_service.py
"""Chat room registry: one room per (mentor, patient) pair."""
from typing import List, Tuple
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy import select, and_
import logging

from ..base_service import BaseService
from ..profile_service import ProfileService
from ...core.exceptions import (
    InvalidPairError, ParticipantNotFoundError, RoomNotFoundError, StorageUnavailableError
)
from ...models.chat.chat_room import ChatRoom
from ...models.profile import UserType

logger = logging.getLogger(__name__)

class ChatRoomService(BaseService[ChatRoom]):
    def __init__(self, db: AsyncSession):
        super().__init__(ChatRoom, db)

    async def find_room(self, mentor_id: UUID, patient_id: UUID):
        stmt = select(ChatRoom).where(
            and_(
                ChatRoom.mentor_id == mentor_id,
                ChatRoom.patient_id == patient_id,
            )
        )
        result = await self._execute(stmt)
        return result.scalar_one_or_none()

    async def find_or_create_room(self, mentor_id: UUID, patient_id: UUID) -> Tuple[ChatRoom, bool]:
        """Get existing chat room or create new one.

        Returns the room and whether this call created it. Concurrent first
        contact for the same pair is settled by the unique constraint: the
        loser of the insert race re-reads and returns the winner's room.
        """
        if mentor_id == patient_id:
            raise InvalidPairError()

        profiles = await ProfileService(self.db).get_many([mentor_id, patient_id])
        for participant_id in (mentor_id, patient_id):
            if participant_id not in profiles:
                raise ParticipantNotFoundError(participant_id)

        chat_room = await self.find_room(mentor_id, patient_id)
        if chat_room:
            return chat_room, False

        chat_room = ChatRoom(mentor_id=mentor_id, patient_id=patient_id)
        self.db.add(chat_room)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.info(f"Chat room for mentor {mentor_id} / patient {patient_id} created concurrently, re-reading")
            existing = await self.find_room(mentor_id, patient_id)
            if existing is None:
                # Not the pair constraint, e.g. a participant vanished mid-request
                logger.error(f"Chat room insert failed: {e}")
                raise StorageUnavailableError("Could not start chat") from e
            return existing, False
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Chat room insert failed: {e}")
            raise StorageUnavailableError("Could not start chat") from e

        await self.db.refresh(chat_room)
        logger.info(f"Created chat room {chat_room.id} for mentor {mentor_id} / patient {patient_id}")
        return chat_room, True

    async def get_room(self, room_id: UUID) -> ChatRoom:
        chat_room = await self.get(room_id)
        if not chat_room:
            raise RoomNotFoundError(room_id)
        return chat_room

    async def list_rooms_for_participant(self, participant_id: UUID, role: UserType) -> List[ChatRoom]:
        """Rooms where the participant holds the given role, newest first"""
        column = ChatRoom.mentor_id if UserType(role) == UserType.MENTOR else ChatRoom.patient_id
        stmt = (
            select(ChatRoom)
            .where(column == participant_id)
            .order_by(ChatRoom.created_at.desc(), ChatRoom.id.desc())
        )
        result = await self._execute(stmt)
        return list(result.scalars().all())
