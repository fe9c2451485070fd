"""Musician and venue profile models."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from app.database import Base, JSONType

if TYPE_CHECKING:
    from app.models.booking import Booking
    from app.models.event import Event
    from app.models.review import Review
    from app.models.user import User


class Musician(Base):
    """Musician profile, owned by one user."""

    __tablename__ = "musicians"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    # Not unique at the schema level; creation is guarded in the service layer
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Profile
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    stage_name: Mapped[str | None] = mapped_column(String(200))
    email: Mapped[str | None] = mapped_column(String(255))
    bio: Mapped[str | None] = mapped_column(Text)
    genres: Mapped[list] = mapped_column(JSONType, default=list)
    instruments: Mapped[list] = mapped_column(JSONType, default=list)
    social_links: Mapped[list] = mapped_column(JSONType, default=list)
    hourly_rate: Mapped[int | None] = mapped_column(Integer)
    years_experience: Mapped[int | None] = mapped_column(Integer)

    # Location & contact
    city: Mapped[str | None] = mapped_column(String(100))
    state: Mapped[str | None] = mapped_column(String(100))
    country: Mapped[str | None] = mapped_column(String(100))
    location: Mapped[str | None] = mapped_column(String(300))
    phone: Mapped[str | None] = mapped_column(String(30))
    website: Mapped[str | None] = mapped_column(Text)
    profile_picture_url: Mapped[str | None] = mapped_column(Text)

    # Status
    rating: Mapped[float] = mapped_column(Float, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="musician_profiles")
    bookings: Mapped[list["Booking"]] = relationship("Booking", back_populates="musician")
    reviews: Mapped[list["Review"]] = relationship("Review", back_populates="musician")


class Venue(Base):
    """Venue profile, owned by one user."""

    __tablename__ = "venues"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Profile
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    type: Mapped[str | None] = mapped_column(String(50))  # bar, club, cafe, hall, ...
    capacity: Mapped[int | None] = mapped_column(Integer)
    price_range: Mapped[str | None] = mapped_column(String(20))
    genres: Mapped[list] = mapped_column(JSONType, default=list)
    amenities: Mapped[list] = mapped_column(JSONType, default=list)
    social_links: Mapped[list] = mapped_column(JSONType, default=list)
    additional_pictures: Mapped[list] = mapped_column(JSONType, default=list)
    hours: Mapped[dict] = mapped_column(JSONType, default=dict)

    # Location & contact
    address: Mapped[str | None] = mapped_column(String(300))
    city: Mapped[str | None] = mapped_column(String(100))
    state: Mapped[str | None] = mapped_column(String(100))
    country: Mapped[str | None] = mapped_column(String(100))
    zip_code: Mapped[str | None] = mapped_column(String(20))
    location: Mapped[str | None] = mapped_column(String(300))
    phone: Mapped[str | None] = mapped_column(String(30))
    email: Mapped[str | None] = mapped_column(String(255))
    website: Mapped[str | None] = mapped_column(Text)
    profile_picture_url: Mapped[str | None] = mapped_column(Text)

    # Status
    rating: Mapped[float] = mapped_column(Float, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    owner: Mapped["User"] = relationship("User", back_populates="venues")
    events: Mapped[list["Event"]] = relationship("Event", back_populates="venue")
    bookings: Mapped[list["Booking"]] = relationship("Booking", back_populates="venue")
    reviews: Mapped[list["Review"]] = relationship("Review", back_populates="venue")
