"""Booking service.

Creating and updating bookings stamps the lifecycle timestamp for the
booking's status. Notifications, event history and emails that follow a
save are best-effort: they are logged on failure and never undo the save.
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from app.domain.booking_state import (
    APPLIED,
    EMAIL_STATUSES,
    INVITED,
    apply_status_timestamp,
)
from app.models.booking import Booking
from app.models.event import Event
from app.models.profile import Musician, Venue
from app.models.user import User
from app.services.event_history_service import event_history_service
from app.services.notification_service import notification_service
from app.services.role_service import role_service
from app.utils.normalizers import apply_defaults

logger = logging.getLogger(__name__)

INTEREST_EXPRESSION = "interest_expression"
DIRECT_INVITATION = "direct_invitation"

BOOKING_DEFAULTS = {
    "proposed_rate": 0,
    "total_amount": 0,
    "deposit_amount": 0,
    "deposit_paid": False,
    "full_payment_paid": False,
    "equipment_provided": [],
    "is_active": True,
}


class BookingService:
    """Service for musician/venue bookings."""

    async def get_booking(self, db: AsyncSession, booking_id: UUID) -> Booking:
        result = await db.execute(select(Booking).where(Booking.id == booking_id))
        booking = result.scalar_one_or_none()
        if not booking:
            raise NotFoundError("Booking", str(booking_id))
        return booking

    async def get_parties(self, db: AsyncSession, booking: Booking) -> tuple[Musician, Venue]:
        """Load the musician and venue on a booking."""
        musician = await db.get(Musician, booking.musician_id)
        venue = await db.get(Venue, booking.venue_id)
        if musician is None or venue is None:
            raise NotFoundError("Booking party")
        return musician, venue

    async def assert_participant(self, db: AsyncSession, booking: Booking, user: User) -> None:
        """Only the musician's user and the venue owner may act on a booking."""
        musician, venue = await self.get_parties(db, booking)
        if user.id not in (musician.user_id, venue.owner_id):
            raise AuthorizationError("You are not a participant in this booking")

    async def list_bookings(
        self,
        db: AsyncSession,
        user: User,
        status: str | None = None,
        event_id: UUID | None = None,
        page: int = 1,
        page_size: int = 20,
    ) -> tuple[list[Booking], int]:
        """Bookings where the user is the musician or the venue owner."""
        query = (
            select(Booking)
            .join(Musician, Booking.musician_id == Musician.id)
            .join(Venue, Booking.venue_id == Venue.id)
            .where((Musician.user_id == user.id) | (Venue.owner_id == user.id))
        )
        if status:
            query = query.where(Booking.status == status)
        if event_id:
            query = query.where(Booking.event_id == event_id)

        count_result = await db.execute(select(func.count()).select_from(query.subquery()))
        total = count_result.scalar() or 0

        offset = (page - 1) * page_size
        query = query.order_by(Booking.created_at.desc()).offset(offset).limit(page_size)
        result = await db.execute(query)
        return list(result.scalars().all()), total

    async def create_booking(self, db: AsyncSession, user: User, params: dict[str, Any]) -> Booking:
        """Create a booking as either the musician or the venue owner.

        A musician applying gets ``applied``; a venue owner inviting gets
        ``invited``, unless a status is given explicitly.
        """
        logger.info(f"Booking create parameters: {params}")
        params = dict(params)

        event = await db.get(Event, params.pop("event_id"))
        if event is None:
            raise ValidationError("Booking event not found")

        venue_id = params.pop("venue_id", None) or event.venue_id
        if venue_id != event.venue_id:
            raise ValidationError("Booking venue does not match the event's venue")
        venue = await db.get(Venue, venue_id)
        if venue is None:
            raise ValidationError("Booking venue not found")

        musician_id = params.pop("musician_id", None)
        if musician_id is not None:
            musician = await db.get(Musician, musician_id)
        else:
            musician = await role_service.find_musician(db, user.id)
        if musician is None:
            raise ValidationError("Booking musician is required")

        is_musician_side = musician.user_id == user.id
        is_venue_side = venue.owner_id == user.id
        if not (is_musician_side or is_venue_side):
            raise AuthorizationError("You can only book as the musician or the venue owner")

        booking = Booking(
            event_id=event.id,
            venue_id=venue.id,
            musician_id=musician.id,
            booked_by_id=user.id,
            **params,
        )
        if booking.status is None:
            booking.status = INVITED if is_venue_side and not is_musician_side else APPLIED
        if booking.booking_type is None:
            booking.booking_type = DIRECT_INVITATION if booking.status == INVITED else INTEREST_EXPRESSION
        apply_defaults(
            booking,
            {
                **BOOKING_DEFAULTS,
                "date": event.date,
                "start_time": event.start_time,
                "end_time": event.end_time,
            },
        )
        apply_status_timestamp(booking)

        db.add(booking)
        await db.flush()
        await db.refresh(booking)
        logger.info(f"Created booking {booking.id} with status {booking.status}")

        await self._after_create(db, booking, event, musician, venue, user)
        return booking

    async def update_booking(
        self, db: AsyncSession, booking: Booking, user: User, params: dict[str, Any]
    ) -> Booking:
        """Apply changes to a booking and stamp its status timestamp."""
        await self.assert_participant(db, booking, user)
        previous_status = booking.status

        for field, value in params.items():
            setattr(booking, field, value)
        apply_status_timestamp(booking)

        await db.flush()
        await db.refresh(booking)

        if booking.status != previous_status:
            logger.info(f"Booking {booking.id} status changed from {previous_status} to {booking.status}")
            await self._after_status_change(db, booking, previous_status, user)
        return booking

    async def _after_create(
        self,
        db: AsyncSession,
        booking: Booking,
        event: Event,
        musician: Musician,
        venue: Venue,
        user: User,
    ) -> None:
        try:
            async with db.begin_nested():
                await event_history_service.log_booking_created(db, booking, user.id)
        except Exception as e:
            logger.error(f"Failed to log history for booking {booking.id}: {e}")

        try:
            async with db.begin_nested():
                if booking.status == INVITED:
                    await notification_service.notify_booking_invitation(
                        db,
                        musician_user_id=musician.user_id,
                        venue_name=venue.name,
                        event_title=event.title,
                        booking_id=booking.id,
                        event_id=event.id,
                        musician_id=musician.id,
                        venue_id=venue.id,
                    )
                else:
                    await notification_service.notify_new_application(
                        db,
                        venue_owner_id=venue.owner_id,
                        musician_name=musician.stage_name or musician.name,
                        event_title=event.title,
                        booking_id=booking.id,
                        event_id=event.id,
                        musician_id=musician.id,
                        venue_id=venue.id,
                    )
        except Exception as e:
            logger.error(f"Failed to notify about booking {booking.id}: {e}")

    async def _after_status_change(
        self, db: AsyncSession, booking: Booking, previous_status: str, user: User
    ) -> None:
        try:
            async with db.begin_nested():
                await event_history_service.log_booking_status(db, booking, previous_status, user.id)
        except Exception as e:
            logger.error(f"Failed to log status change for booking {booking.id}: {e}")

        try:
            musician, venue = await self.get_parties(db, booking)
            event = await db.get(Event, booking.event_id)
        except Exception as e:
            logger.error(f"Failed to load parties for booking {booking.id}: {e}")
            return

        # Tell the other side; the musician hears about venue-side changes
        recipient_id = venue.owner_id if user.id == musician.user_id else musician.user_id
        try:
            async with db.begin_nested():
                await notification_service.notify_booking_status_change(
                    db,
                    user_id=recipient_id,
                    status=booking.status,
                    booking_id=booking.id,
                    event_id=booking.event_id,
                    musician_id=musician.id,
                    venue_id=venue.id,
                )
        except Exception as e:
            logger.error(f"Failed to notify status change for booking {booking.id}: {e}")

        if booking.status in EMAIL_STATUSES and musician.email and event is not None:
            try:
                sent = await notification_service.send_booking_status_email(
                    to_email=musician.email,
                    musician_name=musician.stage_name or musician.name,
                    status=booking.status,
                    event_title=event.title,
                    event_date=booking.date,
                    venue_name=venue.name,
                    booking_id=booking.id,
                )
                if not sent:
                    logger.info(f"Status email for booking {booking.id} was not sent")
            except Exception as e:
                logger.error(f"Failed to email status change for booking {booking.id}: {e}")


booking_service = BookingService()
