"""Booking status lifecycle.

Each tracked status has a timestamp column that is stamped the first time a
booking is saved with that status:

    applied -> applied_at
    invited -> invited_at
    selected -> selected_at
    confirmed -> confirmed_at

Timestamps are set once. Saving the same status again, or moving to a later
status, never clears or overwrites an earlier stamp. Any other status value
(``rejected``, ``cancelled`` or something new) leaves the timestamps alone.
"""

from datetime import UTC, datetime
from types import MappingProxyType
from typing import Any

APPLIED = "applied"
INVITED = "invited"
SELECTED = "selected"
CONFIRMED = "confirmed"
REJECTED = "rejected"
CANCELLED = "cancelled"

STATUS_TIMESTAMP_FIELDS = MappingProxyType(
    {
        APPLIED: "applied_at",
        INVITED: "invited_at",
        SELECTED: "selected_at",
        CONFIRMED: "confirmed_at",
    }
)

# Statuses that trigger an email to the musician
EMAIL_STATUSES = frozenset({CONFIRMED, REJECTED})

STATUS_CHANGE_MESSAGES = MappingProxyType(
    {
        APPLIED: "Your application has been received",
        INVITED: "You have been invited to perform",
        SELECTED: "You have been shortlisted for this event!",
        CONFIRMED: "Your booking has been confirmed!",
        REJECTED: "Your application was not selected",
        CANCELLED: "Your booking has been cancelled",
    }
)


def timestamp_field_for(status: str | None) -> str | None:
    """Return the timestamp column tracked for a status, if any."""
    if status is None:
        return None
    return STATUS_TIMESTAMP_FIELDS.get(status)


def apply_status_timestamp(booking: Any, now: datetime | None = None) -> str | None:
    """Stamp the timestamp column matching ``booking.status``.

    Returns the name of the column that was set, or ``None`` when the status
    is not tracked or its timestamp is already present.
    """
    field = timestamp_field_for(getattr(booking, "status", None))
    if field is None:
        return None
    if getattr(booking, field, None) is not None:
        return None
    setattr(booking, field, now or datetime.now(UTC))
    return field


def status_change_message(status: str) -> str:
    """Human readable notification text for a status change."""
    return STATUS_CHANGE_MESSAGES.get(status, f"Your booking status changed to {status}")
