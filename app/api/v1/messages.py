"""Booking message endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_active_user, get_db
from app.core.exceptions import AuthorizationError
from app.models.message import Message
from app.models.user import User
from app.schemas.message import (
    MessageCreate,
    MessageListResponse,
    MessageResponse,
    ReadStateResponse,
)
from app.services.booking_service import booking_service
from app.services.message_service import message_service
from app.services.read_state_service import read_state_service

router = APIRouter()


@router.post("/", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    message_data: MessageCreate,
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Message:
    """Send a message to the other side of a booking."""
    booking = await booking_service.get_booking(db, message_data.booking_id)
    return await message_service.send_message(
        db,
        sender=current_user,
        booking=booking,
        content=message_data.content,
        message_type=message_data.message_type,
        attachments=message_data.attachments,
    )


@router.get("/booking/{booking_id}", response_model=MessageListResponse)
async def get_booking_messages(
    booking_id: UUID,
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageListResponse:
    """Get the message thread for a booking."""
    booking = await booking_service.get_booking(db, booking_id)
    messages, unread_count = await message_service.list_booking_messages(db, booking, current_user)
    return MessageListResponse(
        messages=[MessageResponse.model_validate(m) for m in messages],
        total=len(messages),
        unread_count=unread_count,
    )


@router.patch("/{message_id}/read", response_model=ReadStateResponse)
async def mark_message_read(
    message_id: UUID,
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ReadStateResponse:
    """Mark a message read.

    Also marks the reader's new-message notifications for the booking read.
    """
    message = await message_service.get_message(db, message_id)
    if message.recipient_id != current_user.id:
        raise AuthorizationError("Only the recipient can mark a message as read")

    propagated = await read_state_service.mark_message_read(db, message, current_user.id)
    return ReadStateResponse(id=message.id, is_read=message.is_read, propagated=propagated)
