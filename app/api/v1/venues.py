"""Venue profile endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_active_user, get_db
from app.models.profile import Venue
from app.models.user import User
from app.schemas.profile import (
    VenueCreate,
    VenueListResponse,
    VenueResponse,
    VenueUpdate,
)
from app.services.profile_service import profile_service

router = APIRouter()


@router.post("/", response_model=VenueResponse, status_code=status.HTTP_201_CREATED)
async def create_venue(
    venue_data: VenueCreate,
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Venue:
    """Create the current user's venue."""
    return await profile_service.create_venue(
        db, current_user, venue_data.model_dump(exclude_unset=True)
    )


@router.get("/", response_model=VenueListResponse)
async def list_venues(
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    city: str | None = Query(None),
    venue_type: str | None = Query(None, alias="type"),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=20, ge=1, le=100),
) -> VenueListResponse:
    """Browse active venues."""
    query = select(Venue).where(Venue.is_active == True)  # noqa: E712
    if city:
        query = query.where(Venue.city.ilike(f"%{city}%"))
    if venue_type:
        query = query.where(Venue.type == venue_type)

    count_result = await db.execute(select(func.count()).select_from(query.subquery()))
    total = count_result.scalar() or 0

    offset = (page - 1) * page_size
    query = query.order_by(Venue.created_at.desc()).offset(offset).limit(page_size)
    result = await db.execute(query)

    return VenueListResponse(
        venues=[VenueResponse.model_validate(v) for v in result.scalars().all()],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/{venue_id}", response_model=VenueResponse)
async def get_venue(
    venue_id: UUID,
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Venue:
    """Get a venue."""
    return await profile_service.get_venue(db, venue_id)


@router.patch("/{venue_id}", response_model=VenueResponse)
async def update_venue(
    venue_id: UUID,
    updates: VenueUpdate,
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Venue:
    """Update a venue the current user owns."""
    venue = await profile_service.get_venue(db, venue_id)
    return await profile_service.update_venue(
        db, venue, current_user, updates.model_dump(exclude_none=True)
    )
