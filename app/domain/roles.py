"""User role resolution.

A user carries an additive set of role tags (``signed-in``, ``musician``,
``venueOwner``) and a single primary role (``user``, ``musician`` or
``venue``). Tags are derived from the profiles the user owns and are never
removed here. The primary role only moves while it is still the default.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable

SIGNED_IN = "signed-in"
MUSICIAN_ROLE = "musician"
VENUE_OWNER_ROLE = "venueOwner"

PRIMARY_USER = "user"
PRIMARY_MUSICIAN = "musician"
PRIMARY_VENUE = "venue"

PRIMARY_ROLES = (PRIMARY_USER, PRIMARY_MUSICIAN, PRIMARY_VENUE)

# Role tag granted for each non-default primary role
PRIMARY_ROLE_TAGS = MappingProxyType(
    {
        PRIMARY_MUSICIAN: MUSICIAN_ROLE,
        PRIMARY_VENUE: VENUE_OWNER_ROLE,
    }
)

# When a user owns both profiles and has not picked a primary role yet,
# the first entry wins.
PRIMARY_ROLE_PRECEDENCE = (PRIMARY_MUSICIAN, PRIMARY_VENUE)


@dataclass(frozen=True)
class RoleResolution:
    """Outcome of resolving a user's roles against their profiles."""

    roles: list[str]
    primary_role: str
    changed: bool


def is_profile_setup(primary_role: str | None) -> bool:
    """True while the user has not committed to a primary role."""
    return primary_role is None or primary_role == PRIMARY_USER


def merge_roles(current: Iterable[str] | None, *extra: str) -> list[str]:
    """Order-preserving union of role tags."""
    merged: list[str] = []
    for role in [*(current or []), *extra]:
        if role not in merged:
            merged.append(role)
    return merged


def resolve_roles(
    current_roles: Iterable[str] | None,
    primary_role: str | None,
    has_musician: bool,
    has_venue: bool,
) -> RoleResolution:
    """Compute roles and primary role from profile existence."""
    current = list(current_roles or [])
    owned = {PRIMARY_MUSICIAN: has_musician, PRIMARY_VENUE: has_venue}

    extra = [PRIMARY_ROLE_TAGS[p] for p in PRIMARY_ROLE_PRECEDENCE if owned[p]]
    roles = merge_roles(current, *extra)

    resolved_primary = primary_role or PRIMARY_USER
    if is_profile_setup(primary_role):
        for candidate in PRIMARY_ROLE_PRECEDENCE:
            if owned[candidate]:
                resolved_primary = candidate
                break

    changed = roles != current or resolved_primary != primary_role
    return RoleResolution(roles=roles, primary_role=resolved_primary, changed=changed)
