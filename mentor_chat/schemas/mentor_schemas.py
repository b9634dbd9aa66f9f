# mentor_chat/schemas/mentor_schemas.py
from typing import Optional
from datetime import datetime
from uuid import UUID
from pydantic import Field, field_validator

from .base import CamelModel
from .profile_schemas import ProfileResponse


class MentorCreate(CamelModel):
    profile_id: UUID
    specialization: str = Field(..., min_length=1, max_length=500)
    bio: Optional[str] = None
    experience_years: Optional[int] = Field(default=None, ge=0, le=80)
    is_available: bool = True


class MentorUpdate(CamelModel):
    specialization: Optional[str] = Field(default=None, min_length=1, max_length=500)
    bio: Optional[str] = None
    experience_years: Optional[int] = Field(default=None, ge=0, le=80)
    is_available: Optional[bool] = None

    @field_validator('specialization', 'is_available')
    @classmethod
    def not_null(cls, v, info):
        # Omit a field to leave it unchanged; these columns cannot be cleared
        if v is None:
            raise ValueError(f'{info.field_name} cannot be null')
        return v


class MentorResponse(CamelModel):
    id: UUID
    profile_id: UUID
    specialization: str
    bio: Optional[str] = None
    experience_years: Optional[int] = None
    is_available: bool
    created_at: datetime
    updated_at: datetime
    profile: Optional[ProfileResponse] = None
