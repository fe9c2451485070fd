"""Event and event history models."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from app.database import Base, JSONType

if TYPE_CHECKING:
    from app.models.booking import Booking
    from app.models.profile import Venue


class Event(Base):
    """A performance slot published by a venue."""

    __tablename__ = "events"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    venue_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("venues.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_by_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False
    )

    # Details
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    category: Mapped[str | None] = mapped_column(String(50))
    genres: Mapped[list] = mapped_column(JSONType, default=list)
    equipment: Mapped[list] = mapped_column(JSONType, default=list)

    # Schedule
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    start_time: Mapped[str | None] = mapped_column(String(10))  # HH:MM
    end_time: Mapped[str | None] = mapped_column(String(10))

    # Recurrence
    is_recurring: Mapped[bool] = mapped_column(Boolean, default=False)
    recurring_pattern: Mapped[str | None] = mapped_column(String(20))  # daily, weekly, bi-weekly, monthly
    recurring_interval: Mapped[int | None] = mapped_column(Integer)
    recurring_days: Mapped[list] = mapped_column(JSONType, default=list)

    # Tickets (prices in cents)
    ticket_type: Mapped[str | None] = mapped_column(String(20))
    ticket_price: Mapped[int | None] = mapped_column(Integer)
    total_capacity: Mapped[int | None] = mapped_column(Integer)
    available_tickets: Mapped[int | None] = mapped_column(Integer)

    # Status
    status: Mapped[str] = mapped_column(String(20), default="confirmed", index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    is_public: Mapped[bool] = mapped_column(Boolean, default=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    venue: Mapped["Venue"] = relationship("Venue", back_populates="events")
    bookings: Mapped[list["Booking"]] = relationship("Booking", back_populates="event")
    history: Mapped[list["EventHistory"]] = relationship(
        "EventHistory", back_populates="event", cascade="all, delete-orphan"
    )


class EventHistory(Base):
    """Append-only log of changes to an event and its bookings."""

    __tablename__ = "event_history"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    event_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    booking_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("bookings.id", ondelete="SET NULL"), index=True
    )
    changed_by_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL")
    )

    # booking_status, event_status, booking_created, ...
    change_type: Mapped[str] = mapped_column(String(50), nullable=False)
    previous_value: Mapped[str | None] = mapped_column(String(100))
    new_value: Mapped[str | None] = mapped_column(String(100))
    description: Mapped[str | None] = mapped_column(Text)
    context: Mapped[dict] = mapped_column(JSONType, default=dict)
    # "metadata" is reserved on declarative classes
    request_metadata: Mapped[dict] = mapped_column("metadata", JSONType, default=dict)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), index=True
    )

    # Relationships
    event: Mapped["Event"] = relationship("Event", back_populates="history")
