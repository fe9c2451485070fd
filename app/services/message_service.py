"""Booking message service."""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from app.models.booking import Booking
from app.models.message import Message
from app.models.user import User
from app.services.booking_service import booking_service
from app.services.notification_service import notification_service

logger = logging.getLogger(__name__)


class MessageService:
    """Service for messages between the two sides of a booking."""

    async def get_message(self, db: AsyncSession, message_id: UUID) -> Message:
        result = await db.execute(
            select(Message).where(
                Message.id == message_id,
                Message.is_active == True,  # noqa: E712
            )
        )
        message = result.scalar_one_or_none()
        if not message:
            raise NotFoundError("Message", str(message_id))
        return message

    async def send_message(
        self,
        db: AsyncSession,
        sender: User,
        booking: Booking,
        content: str,
        message_type: str = "text",
        attachments: list[str] | None = None,
    ) -> Message:
        """Send a message to the other side of a booking.

        The recipient gets a ``new_message`` notification linked to the
        booking.
        """
        musician, venue = await booking_service.get_parties(db, booking)
        if sender.id == musician.user_id:
            recipient_id = venue.owner_id
        elif sender.id == venue.owner_id:
            recipient_id = musician.user_id
        else:
            raise AuthorizationError("You are not a participant in this booking")
        if recipient_id == sender.id:
            raise ValidationError("You cannot message yourself")

        message = Message(
            booking_id=booking.id,
            sender_id=sender.id,
            recipient_id=recipient_id,
            content=content,
            message_type=message_type,
            attachments=list(attachments or []),
            is_read=False,
            is_active=True,
        )
        db.add(message)
        await db.flush()
        await db.refresh(message)

        try:
            async with db.begin_nested():
                await notification_service.notify_new_message(
                    db,
                    recipient_id=recipient_id,
                    sender_name=sender.full_name or sender.email,
                    message_preview=content,
                    booking_id=booking.id,
                )
        except Exception as e:
            logger.error(f"Failed to notify recipient of message {message.id}: {e}")

        return message

    async def list_booking_messages(
        self, db: AsyncSession, booking: Booking, user: User
    ) -> tuple[list[Message], int]:
        """Return a booking's thread, oldest first, and the user's unread count."""
        await booking_service.assert_participant(db, booking, user)

        result = await db.execute(
            select(Message)
            .where(
                Message.booking_id == booking.id,
                Message.is_active == True,  # noqa: E712
            )
            .order_by(Message.created_at)
        )
        messages = list(result.scalars().all())

        unread_result = await db.execute(
            select(func.count()).where(
                Message.booking_id == booking.id,
                Message.recipient_id == user.id,
                Message.is_read == False,  # noqa: E712
            )
        )
        return messages, unread_result.scalar() or 0


message_service = MessageService()
