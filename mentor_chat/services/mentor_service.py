# mentor_chat/services/mentor_service.py
"""Mentor directory: specialization lookup and availability."""
from typing import Dict, List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select
import logging

from .base_service import BaseService
from .profile_service import ProfileService
from ..core.exceptions import ConflictError, MentorNotFoundError, ValidationError
from ..models.mentor import Mentor

logger = logging.getLogger(__name__)

class MentorService(BaseService[Mentor]):
    def __init__(self, db: AsyncSession):
        super().__init__(Mentor, db)

    async def get_by_profile(self, profile_id: UUID) -> Optional[Mentor]:
        # Reload mentors already in the session so their profile is loaded too
        stmt = select(Mentor).where(Mentor.profile_id == profile_id).execution_options(populate_existing=True)
        result = await self._execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_profile_or_404(self, profile_id: UUID) -> Mentor:
        mentor = await self.get_by_profile(profile_id)
        if not mentor:
            raise MentorNotFoundError(profile_id)
        return mentor

    async def list_available(self, specialization: Optional[str] = None) -> List[Mentor]:
        """Available mentors, optionally matching a specialization substring (case-insensitive)"""
        stmt = select(Mentor).where(Mentor.is_available == True)
        if specialization:
            stmt = stmt.where(Mentor.specialization.icontains(specialization.strip(), autoescape=True))
        stmt = stmt.order_by(Mentor.created_at.asc(), Mentor.id.asc())

        result = await self._execute(stmt)
        return list(result.scalars().all())

    async def create_mentor(self, data: Dict) -> Mentor:
        # Raises ProfileNotFoundError for unknown profiles
        await ProfileService(self.db).get_or_404(data["profile_id"])
        try:
            mentor = await self.create(data)
        except IntegrityError:
            raise ConflictError(f"Profile {data['profile_id']} is already registered as a mentor")
        logger.info(f"Registered mentor {mentor.id} for profile {mentor.profile_id}")
        # Re-select so the profile relationship is loaded
        return await self.get_by_profile(mentor.profile_id)

    async def update_mentor(self, profile_id: UUID, data: Dict) -> Mentor:
        mentor = await self.get_by_profile_or_404(profile_id)
        for key, value in data.items():
            setattr(mentor, key, value)
        try:
            await self._commit()
        except IntegrityError as e:
            logger.error(f"Mentor {profile_id} update rejected by the database: {e}")
            raise ValidationError("Invalid mentor data") from e
        return await self.get_by_profile(profile_id)
