import pytest
from sqlalchemy import select

from app.core.exceptions import AuthorizationError, ValidationError
from app.models.event import EventHistory
from app.models.message import Notification
from app.services.booking_service import booking_service
from app.services.notification_service import notification_service


async def _notifications_for(db, user_id):
    result = await db.execute(select(Notification).where(Notification.user_id == user_id))
    return list(result.scalars().all())


@pytest.mark.asyncio
async def test_musician_applies_to_event(db, event, musician, musician_user, venue_owner):
    booking = await booking_service.create_booking(db, musician_user, {"event_id": event.id})

    assert booking.status == "applied"
    assert booking.booking_type == "interest_expression"
    assert booking.musician_id == musician.id
    assert booking.venue_id == event.venue_id
    assert booking.applied_at is not None
    assert booking.invited_at is None
    assert booking.proposed_rate == 0
    assert booking.deposit_paid is False
    assert booking.equipment_provided == []

    notifications = await _notifications_for(db, venue_owner.id)
    assert [n.type for n in notifications] == ["new_application"]
    assert notifications[0].booking_id == booking.id
    assert "Mia & The Tides" in notifications[0].content


@pytest.mark.asyncio
async def test_venue_owner_invites_musician(db, event, musician, musician_user, venue_owner):
    booking = await booking_service.create_booking(
        db, venue_owner, {"event_id": event.id, "musician_id": musician.id, "proposed_rate": 0}
    )

    assert booking.status == "invited"
    assert booking.booking_type == "direct_invitation"
    assert booking.invited_at is not None
    assert booking.applied_at is None
    assert booking.booked_by_id == venue_owner.id

    notifications = await _notifications_for(db, musician_user.id)
    assert [n.type for n in notifications] == ["booking_invitation"]


@pytest.mark.asyncio
async def test_explicit_zero_values_are_kept(db, event, musician, musician_user):
    booking = await booking_service.create_booking(
        db,
        musician_user,
        {"event_id": event.id, "deposit_amount": 0, "total_amount": 0, "notes": ""},
    )

    assert booking.deposit_amount == 0
    assert booking.notes == ""


@pytest.mark.asyncio
async def test_booking_requires_a_musician(db, event, make_user):
    stranger = await make_user()

    with pytest.raises(ValidationError):
        await booking_service.create_booking(db, stranger, {"event_id": event.id})


@pytest.mark.asyncio
async def test_booking_venue_must_match_event(db, event, musician, musician_user, make_user, make_venue):
    other_venue = await make_venue(await make_user())

    with pytest.raises(ValidationError):
        await booking_service.create_booking(
            db, musician_user, {"event_id": event.id, "venue_id": other_venue.id}
        )


@pytest.mark.asyncio
async def test_outsider_cannot_book_someone_else(db, event, musician, make_user):
    stranger = await make_user()

    with pytest.raises(AuthorizationError):
        await booking_service.create_booking(
            db, stranger, {"event_id": event.id, "musician_id": musician.id}
        )


@pytest.mark.asyncio
async def test_booking_moves_from_applied_to_confirmed(
    db, event, musician, musician_user, venue_owner
):
    booking = await booking_service.create_booking(db, musician_user, {"event_id": event.id})
    applied_at = booking.applied_at

    await booking_service.update_booking(db, booking, venue_owner, {"status": "selected"})
    selected_at = booking.selected_at
    await booking_service.update_booking(db, booking, venue_owner, {"status": "confirmed"})

    assert booking.status == "confirmed"
    assert booking.applied_at == applied_at
    assert booking.selected_at == selected_at
    assert booking.confirmed_at is not None
    assert booking.invited_at is None

    result = await db.execute(
        select(EventHistory)
        .where(EventHistory.booking_id == booking.id)
        .order_by(EventHistory.created_at)
    )
    history = [(h.change_type, h.previous_value, h.new_value) for h in result.scalars().all()]
    assert ("booking_created", None, "applied") in history
    assert ("booking_status", "applied", "selected") in history
    assert ("booking_status", "selected", "confirmed") in history

    status_changes = [
        n for n in await _notifications_for(db, musician_user.id) if n.type == "booking_status_change"
    ]
    assert {n.content for n in status_changes} == {
        "You have been shortlisted for this event!",
        "Your booking has been confirmed!",
    }


@pytest.mark.asyncio
async def test_repeating_status_keeps_timestamp(db, event, musician, musician_user, venue_owner):
    booking = await booking_service.create_booking(db, musician_user, {"event_id": event.id})
    await booking_service.update_booking(db, booking, venue_owner, {"status": "confirmed"})
    confirmed_at = booking.confirmed_at

    await booking_service.update_booking(db, booking, venue_owner, {"status": "confirmed", "notes": "Bring a DI box"})

    assert booking.confirmed_at == confirmed_at
    assert booking.notes == "Bring a DI box"


@pytest.mark.asyncio
async def test_unknown_status_is_saved_without_timestamp(db, event, musician, musician_user, venue_owner):
    booking = await booking_service.create_booking(db, musician_user, {"event_id": event.id})

    await booking_service.update_booking(db, booking, venue_owner, {"status": "on_hold"})

    assert booking.status == "on_hold"
    assert booking.selected_at is None
    assert booking.confirmed_at is None


@pytest.mark.asyncio
async def test_musician_change_notifies_venue_owner(db, event, musician, musician_user, venue_owner):
    booking = await booking_service.create_booking(
        db, venue_owner, {"event_id": event.id, "musician_id": musician.id}
    )

    await booking_service.update_booking(db, booking, musician_user, {"status": "cancelled"})

    owner_types = [n.type for n in await _notifications_for(db, venue_owner.id)]
    assert owner_types == ["booking_status_change"]


@pytest.mark.asyncio
async def test_outsider_cannot_update_booking(db, event, musician, musician_user, make_user):
    booking = await booking_service.create_booking(db, musician_user, {"event_id": event.id})
    stranger = await make_user()

    with pytest.raises(AuthorizationError):
        await booking_service.update_booking(db, booking, stranger, {"status": "confirmed"})


@pytest.mark.asyncio
async def test_confirmation_emails_the_musician(
    db, event, musician, musician_user, venue_owner, monkeypatch
):
    sent = []

    async def _fake_send_email(to_email, subject, html_content, text_content=None):
        sent.append((to_email, subject))
        return True

    monkeypatch.setattr(notification_service, "send_email", _fake_send_email)
    booking = await booking_service.create_booking(db, musician_user, {"event_id": event.id})

    await booking_service.update_booking(db, booking, venue_owner, {"status": "selected"})
    assert sent == []

    await booking_service.update_booking(db, booking, venue_owner, {"status": "confirmed"})
    assert sent == [(musician.email, f"Booking confirmed: {event.title}")]


@pytest.mark.asyncio
async def test_notification_failure_does_not_undo_status_change(
    db, event, musician, musician_user, venue_owner, monkeypatch, caplog
):
    booking = await booking_service.create_booking(db, musician_user, {"event_id": event.id})

    async def _broken(*args, **kwargs):
        raise RuntimeError("notification store down")

    monkeypatch.setattr(notification_service, "notify_booking_status_change", _broken)

    await booking_service.update_booking(db, booking, venue_owner, {"status": "selected"})

    assert booking.status == "selected"
    assert booking.selected_at is not None
    assert "notification store down" in caplog.text


@pytest.mark.asyncio
async def test_list_bookings_for_participants_only(db, event, musician, musician_user, venue_owner, make_user):
    await booking_service.create_booking(db, musician_user, {"event_id": event.id})
    stranger = await make_user()

    owner_bookings, owner_total = await booking_service.list_bookings(db, venue_owner)
    musician_bookings, _ = await booking_service.list_bookings(db, musician_user, status="applied")
    stranger_bookings, stranger_total = await booking_service.list_bookings(db, stranger)

    assert owner_total == 1 and len(owner_bookings) == 1
    assert len(musician_bookings) == 1
    assert stranger_total == 0 and stranger_bookings == []
