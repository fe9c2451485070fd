from datetime import UTC, datetime, timedelta
from types import SimpleNamespace

import pytest

from app.domain.booking_state import (
    STATUS_TIMESTAMP_FIELDS,
    apply_status_timestamp,
    status_change_message,
    timestamp_field_for,
)


def _booking(status, **timestamps):
    fields = {field: None for field in STATUS_TIMESTAMP_FIELDS.values()}
    fields.update(timestamps)
    return SimpleNamespace(status=status, **fields)


@pytest.mark.parametrize(
    "status,field",
    [
        ("applied", "applied_at"),
        ("invited", "invited_at"),
        ("selected", "selected_at"),
        ("confirmed", "confirmed_at"),
    ],
)
def test_tracked_status_sets_its_timestamp(status, field):
    now = datetime(2026, 3, 1, 20, 0, tzinfo=UTC)
    booking = _booking(status)

    assert apply_status_timestamp(booking, now) == field
    assert getattr(booking, field) == now
    others = [f for f in STATUS_TIMESTAMP_FIELDS.values() if f != field]
    assert all(getattr(booking, f) is None for f in others)


def test_existing_timestamp_is_never_overwritten():
    first = datetime(2026, 1, 1, tzinfo=UTC)
    booking = _booking("confirmed", confirmed_at=first)

    assert apply_status_timestamp(booking, first + timedelta(days=3)) is None
    assert booking.confirmed_at == first


def test_moving_forward_keeps_earlier_stamps():
    applied = datetime(2026, 1, 1, tzinfo=UTC)
    booking = _booking("selected", applied_at=applied)

    apply_status_timestamp(booking, applied + timedelta(days=1))
    booking.status = "confirmed"
    apply_status_timestamp(booking, applied + timedelta(days=2))

    assert booking.applied_at == applied
    assert booking.selected_at == applied + timedelta(days=1)
    assert booking.confirmed_at == applied + timedelta(days=2)
    assert booking.invited_at is None


@pytest.mark.parametrize("status", ["rejected", "cancelled", "on_hold", "", None])
def test_untracked_status_is_a_no_op(status):
    booking = _booking(status)

    assert apply_status_timestamp(booking) is None
    assert all(getattr(booking, f) is None for f in STATUS_TIMESTAMP_FIELDS.values())


def test_record_without_status_attribute_is_ignored():
    assert apply_status_timestamp(SimpleNamespace()) is None


def test_timestamp_defaults_to_now():
    booking = _booking("applied")
    before = datetime.now(UTC)

    apply_status_timestamp(booking)

    assert before <= booking.applied_at <= datetime.now(UTC)


def test_status_table_is_read_only():
    with pytest.raises(TypeError):
        STATUS_TIMESTAMP_FIELDS["waitlisted"] = "waitlisted_at"  # type: ignore[index]


def test_timestamp_field_lookup():
    assert timestamp_field_for("invited") == "invited_at"
    assert timestamp_field_for("rejected") is None
    assert timestamp_field_for(None) is None


def test_status_change_message_falls_back_for_unknown_status():
    assert status_change_message("confirmed") == "Your booking has been confirmed!"
    assert status_change_message("on_hold") == "Your booking status changed to on_hold"
