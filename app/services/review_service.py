"""Review service.

Either side of a confirmed booking may review the other once. Each new
review refreshes the reviewed musician's or venue's average rating.
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AuthorizationError, ValidationError
from app.domain.booking_state import CONFIRMED
from app.models.profile import Musician, Venue
from app.models.review import Review
from app.models.user import User
from app.services.booking_service import booking_service

logger = logging.getLogger(__name__)

MUSICIAN_TO_VENUE = "musician_to_venue"
VENUE_TO_MUSICIAN = "venue_to_musician"


class ReviewService:
    """Service for booking reviews and profile ratings."""

    async def create_review(self, db: AsyncSession, user: User, params: dict[str, Any]) -> Review:
        booking = await booking_service.get_booking(db, params["booking_id"])
        if booking.status != CONFIRMED:
            raise ValidationError("Can only review confirmed bookings")

        musician, venue = await booking_service.get_parties(db, booking)
        if user.id == musician.user_id:
            review_type = MUSICIAN_TO_VENUE
        elif user.id == venue.owner_id:
            review_type = VENUE_TO_MUSICIAN
        else:
            raise AuthorizationError("You can only review bookings you took part in")

        existing = await db.execute(
            select(Review).where(Review.booking_id == booking.id, Review.reviewer_id == user.id)
        )
        if existing.scalar_one_or_none():
            raise ValidationError("You have already reviewed this booking")

        review = Review(
            booking_id=booking.id,
            event_id=booking.event_id,
            reviewer_id=user.id,
            review_type=review_type,
            rating=params["rating"],
            comment=params.get("comment"),
            is_verified=True,
        )
        if review_type == MUSICIAN_TO_VENUE:
            review.venue_id = venue.id
        else:
            review.musician_id = musician.id

        db.add(review)
        await db.flush()
        await db.refresh(review)
        logger.info(f"Created {review_type} review {review.id} for booking {booking.id}")

        if review_type == MUSICIAN_TO_VENUE:
            venue.rating = await self._average_rating(db, Review.venue_id, venue.id)
        else:
            musician.rating = await self._average_rating(db, Review.musician_id, musician.id)
        await db.flush()
        return review

    async def _average_rating(self, db: AsyncSession, column: Any, subject_id: UUID) -> float:
        result = await db.execute(
            select(func.avg(Review.rating)).where(
                column == subject_id,
                Review.is_active == True,  # noqa: E712
            )
        )
        return round(float(result.scalar() or 0), 2)

    async def list_reviews(
        self,
        db: AsyncSession,
        musician_id: UUID | None = None,
        venue_id: UUID | None = None,
        page: int = 1,
        page_size: int = 20,
    ) -> tuple[list[Review], int, float]:
        """Active reviews of a musician or a venue, newest first."""
        if musician_id is not None:
            column, subject_id = Review.musician_id, musician_id
        else:
            column, subject_id = Review.venue_id, venue_id

        query = select(Review).where(column == subject_id, Review.is_active == True)  # noqa: E712

        count_result = await db.execute(select(func.count()).select_from(query.subquery()))
        total = count_result.scalar() or 0
        average = await self._average_rating(db, column, subject_id)

        offset = (page - 1) * page_size
        query = query.order_by(Review.created_at.desc()).offset(offset).limit(page_size)
        result = await db.execute(query)
        return list(result.scalars().all()), total, average


review_service = ReviewService()
