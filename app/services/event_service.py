"""Event service."""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AuthorizationError, NotFoundError
from app.domain.event_rules import assert_valid_recurrence, clamp_ticket_counts
from app.models.event import Event
from app.models.profile import Venue
from app.models.user import User
from app.services.event_history_service import event_history_service
from app.utils.normalizers import apply_defaults, blank_to_default, ensure_list

logger = logging.getLogger(__name__)

DEFAULT_EVENT_TITLE = "Untitled Event"

EVENT_DEFAULTS = {
    "genres": [],
    "equipment": [],
    "recurring_days": [],
    "is_recurring": False,
    "ticket_type": "general",
    "status": "confirmed",
    "is_active": True,
    "is_public": True,
}


class EventService:
    """Service for publishing and editing venue events."""

    async def get_event(self, db: AsyncSession, event_id: UUID) -> Event:
        result = await db.execute(select(Event).where(Event.id == event_id))
        event = result.scalar_one_or_none()
        if not event:
            raise NotFoundError("Event", str(event_id))
        return event

    async def _get_owned_venue(self, db: AsyncSession, venue_id: UUID, user: User) -> Venue:
        result = await db.execute(select(Venue).where(Venue.id == venue_id))
        venue = result.scalar_one_or_none()
        if not venue:
            raise NotFoundError("Venue", str(venue_id))
        if venue.owner_id != user.id:
            raise AuthorizationError("You can only manage events for venues you own")
        return venue

    async def create_event(self, db: AsyncSession, user: User, params: dict[str, Any]) -> Event:
        """Create an event for one of the caller's venues."""
        venue = await self._get_owned_venue(db, params["venue_id"], user)

        event = Event(created_by_id=user.id, **params)
        event.title = blank_to_default(event.title, DEFAULT_EVENT_TITLE)
        apply_defaults(event, EVENT_DEFAULTS)
        if event.available_tickets is None:
            event.available_tickets = event.total_capacity
        clamp_ticket_counts(event)
        assert_valid_recurrence(event.is_recurring, event.recurring_pattern, event.recurring_days)

        db.add(event)
        await db.flush()
        await db.refresh(event)
        logger.info(f"Created event {event.id} at venue {venue.id}")
        return event

    async def update_event(
        self, db: AsyncSession, event: Event, user: User, params: dict[str, Any]
    ) -> Event:
        """Update an event owned through the caller's venue."""
        await self._get_owned_venue(db, event.venue_id, user)
        previous_status = event.status

        for field, value in params.items():
            setattr(event, field, value)
        for field in ("genres", "equipment", "recurring_days"):
            setattr(event, field, ensure_list(getattr(event, field)))
        if "title" in params:
            event.title = blank_to_default(event.title, DEFAULT_EVENT_TITLE)
        clamp_ticket_counts(event)
        assert_valid_recurrence(event.is_recurring, event.recurring_pattern, event.recurring_days)

        await db.flush()
        await db.refresh(event)

        if event.status != previous_status:
            try:
                async with db.begin_nested():
                    await event_history_service.log_event_status(db, event, previous_status, user.id)
            except Exception as e:
                logger.error(f"Failed to log status change for event {event.id}: {e}")

        return event


event_service = EventService()
