# mentor_chat/routers/auth.py
"""Simplified sign-up / sign-in.

Accounts are anonymous profiles looked up by username; no passwords or
session tokens are kept here.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from ..core.database import get_db
from ..core.exceptions import AuthenticationError, ValidationError
from ..schemas.profile_schemas import AuthResponse, SignInRequest, SignUpRequest
from ..services.profile_service import ProfileService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["Authentication"])

@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(request: SignUpRequest, db: AsyncSession = Depends(get_db)):
    service = ProfileService(db)
    username = (request.username or request.email).strip()

    if await service.get_by_username(username):
        raise ValidationError("User already exists")

    profile = await service.create_profile({
        "username": username,
        "full_name": request.full_name or username,
        "user_type": request.user_type.value,
    })
    return AuthResponse(user=profile)

@router.post("/signin", response_model=AuthResponse)
async def signin(request: SignInRequest, db: AsyncSession = Depends(get_db)):
    profile = await ProfileService(db).get_by_username(request.email.strip())
    if not profile:
        logger.info("Sign-in attempt for unknown username")
        raise AuthenticationError()
    return AuthResponse(user=profile)

@router.get("/me", response_model=AuthResponse)
async def me():
    """There are no server-side sessions, so nobody is ever signed in here"""
    raise AuthenticationError("Not authenticated")
