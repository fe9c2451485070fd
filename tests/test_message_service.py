import pytest
from sqlalchemy import select

from app.core.exceptions import AuthorizationError
from app.models.message import Notification
from app.services.booking_service import booking_service
from app.services.message_service import message_service
from app.services.read_state_service import read_state_service


@pytest.mark.asyncio
async def test_message_goes_to_the_other_side(db, event, musician, musician_user, venue_owner):
    booking = await booking_service.create_booking(db, musician_user, {"event_id": event.id})

    message = await message_service.send_message(db, musician_user, booking, "Is there a PA?")

    assert message.sender_id == musician_user.id
    assert message.recipient_id == venue_owner.id
    assert message.is_read is False

    result = await db.execute(
        select(Notification).where(
            Notification.user_id == venue_owner.id,
            Notification.type == "new_message",
        )
    )
    notification = result.scalar_one()
    assert notification.booking_id == booking.id
    assert notification.title == "New message from Mia Stone"


@pytest.mark.asyncio
async def test_outsider_cannot_message(db, event, musician, musician_user, make_user):
    booking = await booking_service.create_booking(db, musician_user, {"event_id": event.id})
    stranger = await make_user()

    with pytest.raises(AuthorizationError):
        await message_service.send_message(db, stranger, booking, "hello")


@pytest.mark.asyncio
async def test_reading_thread_and_message_clears_notification(
    db, event, musician, musician_user, venue_owner
):
    booking = await booking_service.create_booking(db, musician_user, {"event_id": event.id})
    message = await message_service.send_message(db, musician_user, booking, "Is there a PA?")

    messages, unread = await message_service.list_booking_messages(db, booking, venue_owner)
    assert [m.id for m in messages] == [message.id]
    assert unread == 1

    assert await read_state_service.mark_message_read(db, message, venue_owner.id) == 1

    _, unread = await message_service.list_booking_messages(db, booking, venue_owner)
    assert unread == 0
