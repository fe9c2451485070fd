"""Notification Service for in-app notifications and email.

Handles the two notification channels:
- In-app notifications (database)
- Email (SendGrid)
"""

import html
import logging
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.domain.booking_state import CONFIRMED, REJECTED, status_change_message
from app.models.message import Notification

logger = logging.getLogger(__name__)


class NotificationService:
    """Service for sending in-app and email notifications."""

    # Notification types
    NEW_MESSAGE = "new_message"
    NEW_APPLICATION = "new_application"
    BOOKING_INVITATION = "booking_invitation"
    BOOKING_STATUS_CHANGE = "booking_status_change"

    def __init__(self) -> None:
        """Initialize notification service."""
        self._http_client: httpx.AsyncClient | None = None

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Lazy-load HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=30.0)
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    # ==================== IN-APP NOTIFICATIONS ====================

    async def create_notification(
        self,
        db: AsyncSession,
        user_id: UUID,
        notification_type: str,
        title: str,
        content: str,
        booking_id: UUID | None = None,
        event_id: UUID | None = None,
        musician_id: UUID | None = None,
        venue_id: UUID | None = None,
    ) -> Notification:
        """Create an in-app notification.

        Args:
            db: Database session
            user_id: User to notify
            notification_type: Type of notification
            title: Notification title
            content: Notification body text
            booking_id: Related booking ID
            event_id: Related event ID
            musician_id: Related musician ID
            venue_id: Related venue ID

        Returns:
            Notification: Created notification
        """
        notification = Notification(
            user_id=user_id,
            type=notification_type,
            title=title,
            content=content,
            booking_id=booking_id,
            event_id=event_id,
            musician_id=musician_id,
            venue_id=venue_id,
            is_read=False,
            is_active=True,
        )
        db.add(notification)
        await db.flush()
        return notification

    # ==================== EMAIL (SENDGRID) ====================

    async def send_email(
        self,
        to_email: str,
        subject: str,
        html_content: str,
        text_content: str | None = None,
    ) -> bool:
        """Send an email via SendGrid.

        Returns:
            bool: True if sent successfully
        """
        if not settings.sendgrid_api_key:
            logger.debug(f"SendGrid not configured, skipping email to {to_email}")
            return False

        try:
            headers = {
                "Authorization": f"Bearer {settings.sendgrid_api_key}",
                "Content-Type": "application/json",
            }

            payload: dict[str, Any] = {
                "personalizations": [{"to": [{"email": to_email}]}],
                "from": {
                    "email": settings.email_from_address,
                    "name": settings.email_from_name,
                },
                "subject": subject,
                "content": [{"type": "text/html", "value": html_content}],
            }
            if text_content:
                payload["content"].insert(0, {"type": "text/plain", "value": text_content})

            response = await self.http_client.post(
                "https://api.sendgrid.com/v3/mail/send",
                headers=headers,
                json=payload,
            )
            if response.status_code not in (200, 202):
                logger.warning(f"SendGrid returned {response.status_code} for {to_email}")
                return False
            return True
        except httpx.HTTPError as e:
            logger.error(f"Failed to send email to {to_email}: {e}")
            return False

    def _generate_email_html(self, title: str, body: str, action_url: str | None) -> str:
        """Generate simple HTML email content."""
        title = html.escape(title)
        body = html.escape(body)
        button_html = ""
        if action_url:
            button_html = f"""
            <p style="margin-top: 24px;">
                <a href="{html.escape(action_url)}"
                   style="background-color: #7C3AED; color: white; padding: 12px 24px;
                          text-decoration: none; border-radius: 6px; display: inline-block;">
                    View Booking
                </a>
            </p>
            """

        return f"""
        <!DOCTYPE html>
        <html>
        <head>
            <meta charset="utf-8">
            <meta name="viewport" content="width=device-width, initial-scale=1.0">
        </head>
        <body style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
                     max-width: 600px; margin: 0 auto; padding: 20px; color: #333;">
            <div style="background-color: #f9fafb; border-radius: 8px; padding: 24px;">
                <h1 style="color: #111827; font-size: 24px; margin-bottom: 16px;">{title}</h1>
                <p style="color: #4b5563; font-size: 16px; line-height: 1.6;">{body}</p>
                {button_html}
            </div>
            <p style="color: #9ca3af; font-size: 12px; margin-top: 24px; text-align: center;">
                &copy; {datetime.now(UTC).year} {settings.app_name}. All rights reserved.
            </p>
        </body>
        </html>
        """

    # ==================== SPECIFIC NOTIFICATION HELPERS ====================

    async def notify_new_application(
        self,
        db: AsyncSession,
        venue_owner_id: UUID,
        musician_name: str,
        event_title: str,
        booking_id: UUID,
        event_id: UUID,
        musician_id: UUID,
        venue_id: UUID,
    ) -> Notification:
        """Tell the venue owner a musician applied for their event."""
        return await self.create_notification(
            db=db,
            user_id=venue_owner_id,
            notification_type=self.NEW_APPLICATION,
            title="New application",
            content=f"{musician_name} applied to perform at {event_title}",
            booking_id=booking_id,
            event_id=event_id,
            musician_id=musician_id,
            venue_id=venue_id,
        )

    async def notify_booking_invitation(
        self,
        db: AsyncSession,
        musician_user_id: UUID,
        venue_name: str,
        event_title: str,
        booking_id: UUID,
        event_id: UUID,
        musician_id: UUID,
        venue_id: UUID,
    ) -> Notification:
        """Tell a musician a venue invited them to perform."""
        return await self.create_notification(
            db=db,
            user_id=musician_user_id,
            notification_type=self.BOOKING_INVITATION,
            title="You're invited!",
            content=f"{venue_name} invited you to perform at {event_title}",
            booking_id=booking_id,
            event_id=event_id,
            musician_id=musician_id,
            venue_id=venue_id,
        )

    async def notify_booking_status_change(
        self,
        db: AsyncSession,
        user_id: UUID,
        status: str,
        booking_id: UUID,
        event_id: UUID,
        musician_id: UUID,
        venue_id: UUID,
    ) -> Notification:
        """Tell one side of a booking that its status changed."""
        return await self.create_notification(
            db=db,
            user_id=user_id,
            notification_type=self.BOOKING_STATUS_CHANGE,
            title="Booking update",
            content=status_change_message(status),
            booking_id=booking_id,
            event_id=event_id,
            musician_id=musician_id,
            venue_id=venue_id,
        )

    async def notify_new_message(
        self,
        db: AsyncSession,
        recipient_id: UUID,
        sender_name: str,
        message_preview: str,
        booking_id: UUID,
    ) -> Notification:
        """Notify user about a new message on a booking."""
        preview = message_preview if len(message_preview) <= 100 else f"{message_preview[:100]}..."
        return await self.create_notification(
            db=db,
            user_id=recipient_id,
            notification_type=self.NEW_MESSAGE,
            title=f"New message from {sender_name}",
            content=preview,
            booking_id=booking_id,
        )

    async def send_booking_status_email(
        self,
        to_email: str,
        musician_name: str,
        status: str,
        event_title: str,
        event_date: datetime,
        venue_name: str,
        booking_id: UUID,
    ) -> bool:
        """Email a musician when their booking is confirmed or rejected."""
        when = event_date.strftime("%B %d, %Y")
        if status == CONFIRMED:
            subject = f"Booking confirmed: {event_title}"
            body = (
                f"Hi {musician_name}, your booking to perform at {venue_name} "
                f"for {event_title} on {when} has been confirmed."
            )
        elif status == REJECTED:
            subject = f"Application update: {event_title}"
            body = (
                f"Hi {musician_name}, unfortunately your application to perform at "
                f"{venue_name} for {event_title} on {when} was not selected."
            )
        else:
            return False

        action_url = f"{settings.frontend_url}/bookings/{booking_id}"
        return await self.send_email(
            to_email=to_email,
            subject=subject,
            html_content=self._generate_email_html(subject, body, action_url),
            text_content=f"{body}\n\n{action_url}",
        )


# Singleton instance
notification_service = NotificationService()
