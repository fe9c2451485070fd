"""Helpers for filling in record defaults.

Defaults only replace values that are missing (``None``). A caller that sends
``0``, ``False`` or ``""`` keeps that value. Display names are the exception:
a blank name falls back to the default as well.
"""

from typing import Any


def apply_defaults(record: Any, defaults: dict[str, Any]) -> None:
    """Set each attribute in ``defaults`` whose current value is ``None``.

    Mutable defaults (lists, dicts) are copied per record.
    """
    for field, default in defaults.items():
        if getattr(record, field, None) is None:
            if isinstance(default, (list, dict)):
                default = type(default)(default)
            setattr(record, field, default)


def ensure_list(value: Any) -> list:
    """Return ``value`` if it is a list, otherwise an empty list."""
    return value if isinstance(value, list) else []


def ensure_dict(value: Any) -> dict:
    """Return ``value`` if it is a dict, otherwise an empty dict."""
    return value if isinstance(value, dict) else {}


def blank_to_default(value: str | None, default: str) -> str:
    """Use ``default`` when ``value`` is missing or only whitespace."""
    if value is None or not value.strip():
        return default
    return value


def full_name(first_name: str | None, last_name: str | None) -> str:
    """Join first and last name, skipping missing parts."""
    return " ".join(part for part in (first_name, last_name) if part).strip()


def build_location(city: str | None, state: str | None, country: str | None) -> str | None:
    """Build a "City, State, Country" string when all parts are present."""
    if city and state and country:
        return f"{city}, {state}, {country}"
    return None
