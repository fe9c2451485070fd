"""Event history logging service."""

from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.booking import Booking
from app.models.event import Event, EventHistory


class EventHistoryService:
    """Service for the append-only event change log."""

    BOOKING_CREATED = "booking_created"
    BOOKING_STATUS = "booking_status"
    EVENT_STATUS = "event_status"

    async def log_change(
        self,
        db: AsyncSession,
        event_id: UUID,
        change_type: str,
        changed_by_id: UUID | None = None,
        booking_id: UUID | None = None,
        previous_value: str | None = None,
        new_value: str | None = None,
        description: str | None = None,
        context: dict[str, Any] | None = None,
        request_metadata: dict[str, Any] | None = None,
    ) -> EventHistory:
        """Append a history entry for an event.

        Args:
            db: Database session
            event_id: Event the change belongs to
            change_type: Kind of change (e.g., "booking_status")
            changed_by_id: User who made the change
            booking_id: Related booking, if any
            previous_value: Value before the change
            new_value: Value after the change
            description: Human readable summary
            context: Extra details about the change
            request_metadata: Request details (client, IP, ...)

        Returns:
            Created history entry
        """
        entry = EventHistory(
            event_id=event_id,
            booking_id=booking_id,
            changed_by_id=changed_by_id,
            change_type=change_type,
            previous_value=previous_value,
            new_value=new_value,
            description=description,
            context=context or {},
            request_metadata=request_metadata or {},
        )
        db.add(entry)
        await db.flush()
        return entry

    async def log_booking_created(
        self,
        db: AsyncSession,
        booking: Booking,
        changed_by_id: UUID,
    ) -> EventHistory:
        """Log a new booking against its event."""
        return await self.log_change(
            db=db,
            event_id=booking.event_id,
            booking_id=booking.id,
            changed_by_id=changed_by_id,
            change_type=self.BOOKING_CREATED,
            new_value=booking.status,
            description=f"Booking created with status {booking.status}",
            context={
                "musician_id": str(booking.musician_id),
                "venue_id": str(booking.venue_id),
                "booking_type": booking.booking_type,
            },
        )

    async def log_booking_status(
        self,
        db: AsyncSession,
        booking: Booking,
        previous_status: str,
        changed_by_id: UUID,
    ) -> EventHistory:
        """Log a booking status change."""
        return await self.log_change(
            db=db,
            event_id=booking.event_id,
            booking_id=booking.id,
            changed_by_id=changed_by_id,
            change_type=self.BOOKING_STATUS,
            previous_value=previous_status,
            new_value=booking.status,
            description=f"Booking status changed from {previous_status} to {booking.status}",
            context={
                "musician_id": str(booking.musician_id),
                "venue_id": str(booking.venue_id),
            },
        )

    async def log_event_status(
        self,
        db: AsyncSession,
        event: Event,
        previous_status: str | None,
        changed_by_id: UUID,
    ) -> EventHistory:
        """Log an event status change."""
        return await self.log_change(
            db=db,
            event_id=event.id,
            changed_by_id=changed_by_id,
            change_type=self.EVENT_STATUS,
            previous_value=previous_status,
            new_value=event.status,
            description=f"Event status changed from {previous_status} to {event.status}",
        )

    async def list_for_event(self, db: AsyncSession, event_id: UUID) -> list[EventHistory]:
        """Return an event's history, newest first."""
        result = await db.execute(
            select(EventHistory)
            .where(EventHistory.event_id == event_id)
            .order_by(EventHistory.created_at.desc())
        )
        return list(result.scalars().all())


event_history_service = EventHistoryService()
