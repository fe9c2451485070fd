"""Review endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_active_user, get_db
from app.models.review import Review
from app.models.user import User
from app.schemas.review import ReviewCreate, ReviewListResponse, ReviewResponse
from app.services.profile_service import profile_service
from app.services.review_service import review_service

router = APIRouter()


@router.post("/", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
async def create_review(
    review_data: ReviewCreate,
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Review:
    """Review the other side of a confirmed booking."""
    return await review_service.create_review(db, current_user, review_data.model_dump())


@router.get("/musicians/{musician_id}", response_model=ReviewListResponse)
async def get_musician_reviews(
    musician_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=20, ge=1, le=100),
) -> ReviewListResponse:
    """Get reviews of a musician."""
    await profile_service.get_musician(db, musician_id)
    reviews, total, average = await review_service.list_reviews(
        db, musician_id=musician_id, page=page, page_size=page_size
    )
    return ReviewListResponse(
        reviews=[ReviewResponse.model_validate(r) for r in reviews],
        total=total,
        average_rating=average,
        page=page,
        page_size=page_size,
    )


@router.get("/venues/{venue_id}", response_model=ReviewListResponse)
async def get_venue_reviews(
    venue_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=20, ge=1, le=100),
) -> ReviewListResponse:
    """Get reviews of a venue."""
    await profile_service.get_venue(db, venue_id)
    reviews, total, average = await review_service.list_reviews(
        db, venue_id=venue_id, page=page, page_size=page_size
    )
    return ReviewListResponse(
        reviews=[ReviewResponse.model_validate(r) for r in reviews],
        total=total,
        average_rating=average,
        page=page,
        page_size=page_size,
    )
