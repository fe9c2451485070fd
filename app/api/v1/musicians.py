"""Musician profile endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_active_user, get_db
from app.models.profile import Musician
from app.models.user import User
from app.schemas.profile import (
    MusicianCreate,
    MusicianListResponse,
    MusicianResponse,
    MusicianUpdate,
)
from app.services.profile_service import profile_service

router = APIRouter()


@router.post("/", response_model=MusicianResponse, status_code=status.HTTP_201_CREATED)
async def create_musician(
    musician_data: MusicianCreate,
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Musician:
    """Create the current user's musician profile."""
    return await profile_service.create_musician(
        db, current_user, musician_data.model_dump(exclude_unset=True)
    )


@router.get("/", response_model=MusicianListResponse)
async def list_musicians(
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    genre: str | None = Query(None),
    city: str | None = Query(None),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=20, ge=1, le=100),
) -> MusicianListResponse:
    """Browse active musician profiles."""
    query = select(Musician).where(Musician.is_active == True)  # noqa: E712
    if city:
        query = query.where(Musician.city.ilike(f"%{city}%"))

    result = await db.execute(query.order_by(Musician.created_at.desc()))
    musicians = list(result.scalars().all())
    # Genres live in a JSON list
    if genre:
        musicians = [m for m in musicians if genre in (m.genres or [])]

    total = len(musicians)
    offset = (page - 1) * page_size
    return MusicianListResponse(
        musicians=[MusicianResponse.model_validate(m) for m in musicians[offset : offset + page_size]],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/{musician_id}", response_model=MusicianResponse)
async def get_musician(
    musician_id: UUID,
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Musician:
    """Get a musician profile."""
    return await profile_service.get_musician(db, musician_id)


@router.patch("/{musician_id}", response_model=MusicianResponse)
async def update_musician(
    musician_id: UUID,
    updates: MusicianUpdate,
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Musician:
    """Update the current user's musician profile."""
    musician = await profile_service.get_musician(db, musician_id)
    return await profile_service.update_musician(
        db, musician, current_user, updates.model_dump(exclude_none=True)
    )
