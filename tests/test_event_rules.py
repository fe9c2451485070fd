from types import SimpleNamespace

import pytest

from app.core.exceptions import ValidationError
from app.domain.event_rules import assert_valid_recurrence, clamp_ticket_counts
from app.utils.normalizers import apply_defaults, blank_to_default, build_location


def test_non_recurring_event_skips_validation():
    assert_valid_recurrence(False, None, None)


@pytest.mark.parametrize(
    "pattern,days,message",
    [
        (None, [], "Recurring pattern is required"),
        ("yearly", [], "Invalid recurring pattern"),
        ("weekly", [], "Recurring days are required"),
        ("monthly", None, "Recurring days of month are required"),
    ],
)
def test_invalid_recurrence(pattern, days, message):
    with pytest.raises(ValidationError) as exc:
        assert_valid_recurrence(True, pattern, days)
    assert message in exc.value.detail


@pytest.mark.parametrize("pattern,days", [("daily", []), ("bi-weekly", []), ("weekly", ["fri"]), ("monthly", [1, 15])])
def test_valid_recurrence(pattern, days):
    assert_valid_recurrence(True, pattern, days)


def test_ticket_counts_are_clamped():
    event = SimpleNamespace(ticket_price=-5, total_capacity=100, available_tickets=250)

    clamp_ticket_counts(event)

    assert event.ticket_price == 0
    assert event.available_tickets == 100


def test_negative_capacity_and_tickets_become_zero():
    event = SimpleNamespace(ticket_price=None, total_capacity=-1, available_tickets=-3)

    clamp_ticket_counts(event)

    assert event.total_capacity == 0
    assert event.available_tickets == 0


def test_apply_defaults_only_fills_missing_values():
    record = SimpleNamespace(rate=0, paid=False, note="", tags=None, name=None)

    apply_defaults(record, {"rate": 50, "paid": True, "note": "n/a", "tags": [], "name": "x"})

    assert record.rate == 0
    assert record.paid is False
    assert record.note == ""
    assert record.tags == []
    assert record.name == "x"


def test_apply_defaults_copies_mutable_defaults():
    defaults = {"tags": []}
    first, second = SimpleNamespace(tags=None), SimpleNamespace(tags=None)

    apply_defaults(first, defaults)
    apply_defaults(second, defaults)
    first.tags.append("jazz")

    assert second.tags == []
    assert defaults["tags"] == []


def test_blank_name_falls_back():
    assert blank_to_default("   ", "Unnamed Venue") == "Unnamed Venue"
    assert blank_to_default(None, "Unnamed Venue") == "Unnamed Venue"
    assert blank_to_default("Hall", "Unnamed Venue") == "Hall"


def test_location_needs_all_parts():
    assert build_location("Austin", "TX", "USA") == "Austin, TX, USA"
    assert build_location("Austin", None, "USA") is None
