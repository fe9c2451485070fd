import pytest
from pydantic import ValidationError as PydanticValidationError

from app.domain.roles import (
    PRIMARY_ROLE_PRECEDENCE,
    is_profile_setup,
    merge_roles,
    resolve_roles,
)
from app.schemas.user import UserUpdate


def test_musician_profile_during_setup():
    resolution = resolve_roles(["signed-in"], "user", has_musician=True, has_venue=False)

    assert resolution.roles == ["signed-in", "musician"]
    assert resolution.primary_role == "musician"
    assert resolution.changed


def test_venue_profile_during_setup():
    resolution = resolve_roles(["signed-in"], "user", has_musician=False, has_venue=True)

    assert resolution.roles == ["signed-in", "venueOwner"]
    assert resolution.primary_role == "venue"


def test_both_profiles_prefer_musician_primary():
    resolution = resolve_roles(["signed-in"], "user", has_musician=True, has_venue=True)

    assert resolution.roles == ["signed-in", "musician", "venueOwner"]
    assert resolution.primary_role == PRIMARY_ROLE_PRECEDENCE[0] == "musician"


def test_committed_primary_role_is_kept():
    resolution = resolve_roles(["signed-in", "venueOwner"], "venue", has_musician=True, has_venue=True)

    assert resolution.primary_role == "venue"
    assert resolution.roles == ["signed-in", "venueOwner", "musician"]


def test_roles_are_never_removed():
    resolution = resolve_roles(
        ["signed-in", "musician", "admin"], "musician", has_musician=False, has_venue=False
    )

    assert resolution.roles == ["signed-in", "musician", "admin"]
    assert resolution.primary_role == "musician"
    assert not resolution.changed


def test_no_profiles_leaves_user_unchanged():
    resolution = resolve_roles(["signed-in"], "user", has_musician=False, has_venue=False)

    assert resolution.roles == ["signed-in"]
    assert resolution.primary_role == "user"
    assert not resolution.changed


def test_missing_roles_and_primary_role():
    resolution = resolve_roles(None, None, has_musician=False, has_venue=False)

    assert resolution.roles == []
    assert resolution.primary_role == "user"
    assert resolution.changed


def test_resolving_twice_is_stable():
    first = resolve_roles(["signed-in"], "user", has_musician=True, has_venue=True)
    second = resolve_roles(first.roles, first.primary_role, has_musician=True, has_venue=True)

    assert second.roles == first.roles
    assert second.primary_role == first.primary_role
    assert not second.changed


def test_input_list_is_not_mutated():
    roles = ["signed-in"]

    resolve_roles(roles, "user", has_musician=True, has_venue=False)

    assert roles == ["signed-in"]


def test_merge_roles_keeps_order_and_drops_duplicates():
    assert merge_roles(["signed-in", "musician"], "musician", "venueOwner") == [
        "signed-in",
        "musician",
        "venueOwner",
    ]


@pytest.mark.parametrize("primary_role,expected", [("user", True), (None, True), ("musician", False), ("venue", False)])
def test_is_profile_setup(primary_role, expected):
    assert is_profile_setup(primary_role) is expected


def test_user_update_accepts_only_known_primary_roles():
    assert UserUpdate(primary_role="venue").primary_role == "venue"

    with pytest.raises(PydanticValidationError):
        UserUpdate(primary_role="admin")
