# mentor_chat/routers/profiles.py
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..schemas.profile_schemas import ProfileCreate, ProfileResponse, ProfileUpdate
from ..services.profile_service import ProfileService

router = APIRouter(prefix="/api/profiles", tags=["Profiles"])

@router.get("/{profile_id}", response_model=ProfileResponse)
async def get_profile(profile_id: UUID, db: AsyncSession = Depends(get_db)):
    return await ProfileService(db).get_or_404(profile_id)

@router.post("", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
async def create_profile(request: ProfileCreate, db: AsyncSession = Depends(get_db)):
    data = request.model_dump()
    data["user_type"] = request.user_type.value
    return await ProfileService(db).create_profile(data)

@router.put("/{profile_id}", response_model=ProfileResponse)
async def update_profile(
    profile_id: UUID,
    request: ProfileUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Partial update: only fields present in the body change"""
    data = request.model_dump(exclude_unset=True)
    if "user_type" in data:
        data["user_type"] = request.user_type.value
    return await ProfileService(db).update_profile(profile_id, data)
