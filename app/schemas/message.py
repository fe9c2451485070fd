"""Messaging and notification schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class MessageCreate(BaseModel):
    """Schema for sending a message on a booking."""

    booking_id: UUID
    content: str = Field(..., min_length=1, max_length=5000)
    message_type: str = Field(default="text", pattern="^(text|image|file)$")
    attachments: list[str] = Field(default_factory=list)


class MessageResponse(BaseModel):
    """Schema for message response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    booking_id: UUID
    sender_id: UUID
    recipient_id: UUID
    content: str
    message_type: str
    attachments: list[str]
    is_read: bool
    read_at: datetime | None
    created_at: datetime


class MessageListResponse(BaseModel):
    """Schema for booking message thread."""

    messages: list[MessageResponse]
    total: int
    unread_count: int


class NotificationResponse(BaseModel):
    """Schema for notification response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    type: str
    title: str
    content: str
    booking_id: UUID | None
    event_id: UUID | None
    musician_id: UUID | None
    venue_id: UUID | None
    is_read: bool
    read_at: datetime | None
    created_at: datetime


class NotificationListResponse(BaseModel):
    """Schema for paginated notification list."""

    notifications: list[NotificationResponse]
    total: int
    unread_count: int
    page: int
    page_size: int


class ReadStateResponse(BaseModel):
    """Result of marking a record read, with the counterparts it touched."""

    id: UUID
    is_read: bool
    propagated: int
