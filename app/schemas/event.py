"""Event-related Pydantic schemas."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class EventCreate(BaseModel):
    """Schema for creating an event."""

    venue_id: UUID
    title: str | None = Field(None, max_length=200)
    description: str | None = Field(None, max_length=5000)
    category: str | None = Field(None, max_length=50)
    genres: list[str] | None = None
    equipment: list[str] | None = None
    date: datetime
    start_time: str | None = Field(None, pattern=TIME_PATTERN)
    end_time: str | None = Field(None, pattern=TIME_PATTERN)
    is_recurring: bool | None = None
    recurring_pattern: str | None = None
    recurring_interval: int | None = Field(None, ge=1)
    recurring_days: list[Any] | None = None
    ticket_type: str | None = Field(None, max_length=20)
    ticket_price: int | None = None
    total_capacity: int | None = None
    available_tickets: int | None = None
    status: str | None = Field(None, max_length=20)
    is_public: bool | None = None


class EventUpdate(BaseModel):
    """Schema for updating an event."""

    title: str | None = Field(None, max_length=200)
    description: str | None = Field(None, max_length=5000)
    category: str | None = Field(None, max_length=50)
    genres: list[str] | None = None
    equipment: list[str] | None = None
    date: datetime | None = None
    start_time: str | None = Field(None, pattern=TIME_PATTERN)
    end_time: str | None = Field(None, pattern=TIME_PATTERN)
    is_recurring: bool | None = None
    recurring_pattern: str | None = None
    recurring_interval: int | None = Field(None, ge=1)
    recurring_days: list[Any] | None = None
    ticket_type: str | None = Field(None, max_length=20)
    ticket_price: int | None = None
    total_capacity: int | None = None
    available_tickets: int | None = None
    status: str | None = Field(None, max_length=20)
    is_public: bool | None = None
    is_active: bool | None = None


class EventResponse(BaseModel):
    """Schema for event response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    venue_id: UUID
    created_by_id: UUID
    title: str
    description: str | None
    category: str | None
    genres: list[str]
    equipment: list[str]
    date: datetime
    start_time: str | None
    end_time: str | None
    is_recurring: bool
    recurring_pattern: str | None
    recurring_interval: int | None
    recurring_days: list[Any]
    ticket_type: str | None
    ticket_price: int | None
    total_capacity: int | None
    available_tickets: int | None
    status: str
    is_active: bool
    is_public: bool
    created_at: datetime


class EventListResponse(BaseModel):
    """Schema for paginated event list."""

    events: list[EventResponse]
    total: int
    page: int
    page_size: int


class EventHistoryResponse(BaseModel):
    """Schema for an event history entry."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    event_id: UUID
    booking_id: UUID | None
    changed_by_id: UUID | None
    change_type: str
    previous_value: str | None
    new_value: str | None
    description: str | None
    context: dict[str, Any]
    created_at: datetime
