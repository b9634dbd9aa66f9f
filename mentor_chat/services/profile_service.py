# mentor_chat/services/profile_service.py
from typing import Dict, Iterable, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select
import logging

from .base_service import BaseService
from ..core.exceptions import ConflictError, ProfileNotFoundError, ValidationError
from ..models.profile import Profile

logger = logging.getLogger(__name__)

class ProfileService(BaseService[Profile]):
    def __init__(self, db: AsyncSession):
        super().__init__(Profile, db)

    async def get_or_404(self, profile_id: UUID) -> Profile:
        profile = await self.get(profile_id)
        if not profile:
            raise ProfileNotFoundError(profile_id)
        return profile

    async def get_by_username(self, username: str) -> Optional[Profile]:
        stmt = select(Profile).where(Profile.username == username)
        result = await self._execute(stmt)
        return result.scalar_one_or_none()

    async def get_many(self, profile_ids: Iterable[UUID]) -> Dict[UUID, Profile]:
        """Resolve several profiles in one query, keyed by id"""
        ids = set(profile_ids)
        if not ids:
            return {}
        stmt = select(Profile).where(Profile.id.in_(ids))
        result = await self._execute(stmt)
        return {profile.id: profile for profile in result.scalars().all()}

    async def create_profile(self, data: Dict) -> Profile:
        try:
            profile = await self.create(data)
        except IntegrityError:
            raise ConflictError(f"Username '{data.get('username')}' is already taken")
        logger.info(f"Created {profile.user_type} profile {profile.id}")
        return profile

    async def update_profile(self, profile_id: UUID, data: Dict) -> Profile:
        username = data.get("username")
        if username is not None:
            owner = await self.get_by_username(username)
            if owner is not None and owner.id != profile_id:
                raise ConflictError(f"Username '{username}' is already taken")
        try:
            profile = await self.update(profile_id, data)
        except IntegrityError as e:
            if username is not None and await self.get_by_username(username) is not None:
                raise ConflictError(f"Username '{username}' is already taken")
            logger.error(f"Profile {profile_id} update rejected by the database: {e}")
            raise ValidationError("Invalid profile data") from e
        if not profile:
            raise ProfileNotFoundError(profile_id)
        return profile
