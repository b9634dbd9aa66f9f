# mentor_chat/routers/mentors.py
from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..schemas.mentor_schemas import MentorCreate, MentorResponse, MentorUpdate
from ..services.mentor_service import MentorService

router = APIRouter(prefix="/api/mentors", tags=["Mentors"])

@router.get("", response_model=List[MentorResponse])
async def list_mentors(
    specialization: Optional[str] = Query(None, max_length=100),
    db: AsyncSession = Depends(get_db)
):
    """Available mentors, optionally filtered by specialization"""
    return await MentorService(db).list_available(specialization)

@router.get("/{profile_id}", response_model=MentorResponse)
async def get_mentor(profile_id: UUID, db: AsyncSession = Depends(get_db)):
    return await MentorService(db).get_by_profile_or_404(profile_id)

@router.post("", response_model=MentorResponse, status_code=status.HTTP_201_CREATED)
async def create_mentor(request: MentorCreate, db: AsyncSession = Depends(get_db)):
    """Register an existing profile as a mentor"""
    return await MentorService(db).create_mentor(request.model_dump())

@router.put("/{profile_id}", response_model=MentorResponse)
async def update_mentor(
    profile_id: UUID,
    request: MentorUpdate,
    db: AsyncSession = Depends(get_db)
):
    return await MentorService(db).update_mentor(profile_id, request.model_dump(exclude_unset=True))
