# mentor_chat/schemas/profile_schemas.py
"""Pydantic schemas for profiles and the simplified auth flow."""
from typing import Optional
from datetime import datetime
from uuid import UUID
from pydantic import Field, field_validator

from .base import CamelModel
from ..models.profile import UserType


class ProfileBase(CamelModel):
    username: Optional[str] = Field(default=None, min_length=1, max_length=100)
    full_name: Optional[str] = Field(default=None, max_length=200)
    user_type: UserType
    avatar_url: Optional[str] = Field(default=None, max_length=500)

    @field_validator('username')
    @classmethod
    def strip_username(cls, v):
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError('Username must not be blank')
        return v


class ProfileCreate(ProfileBase):
    pass


class ProfileUpdate(CamelModel):
    """Schema for updating a profile - all fields optional"""
    username: Optional[str] = Field(default=None, min_length=1, max_length=100)
    full_name: Optional[str] = Field(default=None, max_length=200)
    user_type: Optional[UserType] = None
    avatar_url: Optional[str] = Field(default=None, max_length=500)

    @field_validator('username')
    @classmethod
    def strip_username(cls, v):
        # null clears the username; blank is rejected
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError('Username must not be blank')
        return v

    @field_validator('user_type')
    @classmethod
    def user_type_not_null(cls, v):
        if v is None:
            raise ValueError('userType cannot be null')
        return v


class ProfileResponse(ProfileBase):
    id: UUID
    created_at: datetime
    updated_at: datetime


class SignUpRequest(CamelModel):
    email: str = Field(..., min_length=3, max_length=100)
    password: Optional[str] = None  # accepted for client compatibility, never stored
    username: Optional[str] = Field(default=None, max_length=100)
    full_name: Optional[str] = Field(default=None, max_length=200)
    user_type: UserType = UserType.PATIENT


class SignInRequest(CamelModel):
    email: str = Field(..., min_length=1)
    password: Optional[str] = None


class AuthResponse(CamelModel):
    user: ProfileResponse
