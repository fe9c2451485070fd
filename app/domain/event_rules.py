"""Event recurrence and ticket rules."""

from typing import Any

from app.core.exceptions import ValidationError

RECURRING_PATTERNS = frozenset({"daily", "weekly", "bi-weekly", "monthly"})

# Patterns that need an explicit list of days
PATTERNS_REQUIRING_DAYS = {
    "weekly": "Recurring days are required for weekly recurring events",
    "monthly": "Recurring days of month are required for monthly recurring events",
}


def _recurrence_error(field: str, message: str) -> ValidationError:
    return ValidationError(message, errors=[{"field": field, "message": message}])


def assert_valid_recurrence(
    is_recurring: bool,
    pattern: str | None,
    days: list[Any] | None,
) -> None:
    """Validate recurring event settings."""
    if not is_recurring:
        return
    if not pattern:
        raise _recurrence_error(
            "recurring_pattern", "Recurring pattern is required for recurring events"
        )
    if pattern not in RECURRING_PATTERNS:
        raise _recurrence_error("recurring_pattern", f"Invalid recurring pattern: {pattern}")
    if pattern in PATTERNS_REQUIRING_DAYS and not days:
        raise _recurrence_error("recurring_days", PATTERNS_REQUIRING_DAYS[pattern])


def clamp_ticket_counts(event: Any) -> None:
    """Keep price and ticket counts non-negative and within capacity."""
    if event.ticket_price is not None and event.ticket_price < 0:
        event.ticket_price = 0
    if event.total_capacity is not None and event.total_capacity < 0:
        event.total_capacity = 0
    if event.available_tickets is not None and event.available_tickets < 0:
        event.available_tickets = 0
    if (
        event.total_capacity
        and event.available_tickets is not None
        and event.available_tickets > event.total_capacity
    ):
        event.available_tickets = event.total_capacity
