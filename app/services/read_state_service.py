"""Read-state propagation between notifications and messages.

Reading a notification about a booking marks the user's unread messages on
that booking as read. Reading a message marks the reader's unread
``new_message`` notifications for that booking as read. Each counterpart is
updated on its own, so one failure does not stop the rest.
"""

import logging
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.message import Message, Notification
from app.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

ReadTrackedModel = type[Message] | type[Notification]


async def _mark_read(
    db: AsyncSession, model: ReadTrackedModel, record_id: UUID, read_at: datetime
) -> None:
    await db.execute(
        update(model)
        .where(model.id == record_id, model.is_read == False)  # noqa: E712
        .values(is_read=True, read_at=read_at)
    )


class ReadStateService:
    """Service for marking notifications and messages read."""

    async def mark_notification_read(self, db: AsyncSession, notification: Notification) -> int:
        """Mark a notification read and propagate to the booking's messages.

        Returns the number of messages updated. A notification that is
        already read is left alone.
        """
        if notification.is_read:
            return 0

        now = datetime.now(UTC)
        notification.is_read = True
        notification.read_at = now
        await db.flush()

        return await self.propagate_notification_read(db, notification, now)

    async def mark_message_read(
        self, db: AsyncSession, message: Message, actor_id: UUID | None = None
    ) -> int:
        """Mark a message read and propagate to the reader's notifications.

        ``actor_id`` is the user reading the message. It defaults to the
        message recipient. Returns the number of notifications updated.
        """
        if message.is_read:
            return 0

        now = datetime.now(UTC)
        message.is_read = True
        message.read_at = now
        await db.flush()

        return await self.propagate_message_read(db, message, actor_id or message.recipient_id, now)

    async def mark_all_notifications_read(self, db: AsyncSession, user_id: UUID) -> int:
        """Mark every unread notification of a user read, one at a time."""
        result = await db.execute(
            select(Notification).where(
                Notification.user_id == user_id,
                Notification.is_read == False,  # noqa: E712
            )
        )
        notifications = list(result.scalars().all())
        for notification in notifications:
            await self.mark_notification_read(db, notification)
        return len(notifications)

    async def propagate_notification_read(
        self, db: AsyncSession, notification: Notification, read_at: datetime | None = None
    ) -> int:
        """Mark unread messages to the notified user on the same booking read."""
        if notification.booking_id is None:
            return 0

        result = await db.execute(
            select(Message.id).where(
                Message.booking_id == notification.booking_id,
                Message.recipient_id == notification.user_id,
                Message.is_read == False,  # noqa: E712
            )
        )
        message_ids = list(result.scalars().all())
        return await self._mark_each_read(db, Message, message_ids, read_at or datetime.now(UTC))

    async def propagate_message_read(
        self,
        db: AsyncSession,
        message: Message,
        actor_id: UUID,
        read_at: datetime | None = None,
    ) -> int:
        """Mark the reader's unread new-message notifications for the booking read."""
        if message.booking_id is None:
            return 0

        result = await db.execute(
            select(Notification.id).where(
                Notification.booking_id == message.booking_id,
                Notification.user_id == actor_id,
                Notification.type == NotificationService.NEW_MESSAGE,
                Notification.is_read == False,  # noqa: E712
            )
        )
        notification_ids = list(result.scalars().all())
        return await self._mark_each_read(
            db, Notification, notification_ids, read_at or datetime.now(UTC)
        )

    async def _mark_each_read(
        self,
        db: AsyncSession,
        model: ReadTrackedModel,
        record_ids: list[UUID],
        read_at: datetime,
    ) -> int:
        updated = 0
        for record_id in record_ids:
            try:
                async with db.begin_nested():
                    await _mark_read(db, model, record_id, read_at)
                updated += 1
            except SQLAlchemyError as e:
                logger.error(f"Failed to mark {model.__tablename__} {record_id} as read: {e}")
        if updated:
            logger.info(f"Propagated read state to {updated} {model.__tablename__}")
        return updated


read_state_service = ReadStateService()
