"""Booking-related Pydantic schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class BookingCreate(BaseModel):
    """Schema for creating a booking.

    ``musician_id`` may be omitted when the caller is a musician applying
    with their own profile. ``venue_id`` defaults to the event's venue.
    """

    event_id: UUID
    musician_id: UUID | None = None
    venue_id: UUID | None = None
    status: str | None = Field(None, min_length=1, max_length=30)
    booking_type: str | None = Field(None, max_length=30)
    date: datetime | None = None
    start_time: str | None = Field(None, max_length=10)
    end_time: str | None = Field(None, max_length=10)
    response_deadline: datetime | None = None
    proposed_rate: int | None = Field(None, ge=0)
    total_amount: int | None = Field(None, ge=0)
    deposit_amount: int | None = Field(None, ge=0)
    deposit_paid: bool | None = None
    full_payment_paid: bool | None = None
    musician_pitch: str | None = Field(None, max_length=5000)
    notes: str | None = Field(None, max_length=5000)
    special_requirements: str | None = Field(None, max_length=2000)
    equipment_provided: list[str] | None = None


class BookingUpdate(BaseModel):
    """Schema for updating a booking."""

    status: str | None = Field(None, min_length=1, max_length=30)
    date: datetime | None = None
    start_time: str | None = Field(None, max_length=10)
    end_time: str | None = Field(None, max_length=10)
    response_deadline: datetime | None = None
    proposed_rate: int | None = Field(None, ge=0)
    total_amount: int | None = Field(None, ge=0)
    deposit_amount: int | None = Field(None, ge=0)
    deposit_paid: bool | None = None
    full_payment_paid: bool | None = None
    musician_pitch: str | None = Field(None, max_length=5000)
    notes: str | None = Field(None, max_length=5000)
    special_requirements: str | None = Field(None, max_length=2000)
    equipment_provided: list[str] | None = None
    is_active: bool | None = None


class BookingResponse(BaseModel):
    """Schema for booking response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    event_id: UUID
    venue_id: UUID
    musician_id: UUID
    booked_by_id: UUID
    status: str
    booking_type: str

    # Schedule
    date: datetime
    start_time: str | None
    end_time: str | None
    response_deadline: datetime | None

    # Money
    proposed_rate: int
    total_amount: int
    deposit_amount: int
    deposit_paid: bool
    full_payment_paid: bool

    # Details
    musician_pitch: str | None
    notes: str | None
    special_requirements: str | None
    equipment_provided: list[str]
    is_active: bool

    # Lifecycle
    applied_at: datetime | None
    invited_at: datetime | None
    selected_at: datetime | None
    confirmed_at: datetime | None
    created_at: datetime
    updated_at: datetime


class BookingListResponse(BaseModel):
    """Schema for paginated booking list."""

    bookings: list[BookingResponse]
    total: int
    page: int
    page_size: int
