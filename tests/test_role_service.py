import pytest
from sqlalchemy import func, select

from app.models.profile import Musician, Venue
from app.services.role_service import role_service


@pytest.mark.asyncio
async def test_musician_profile_sets_primary_role(db, make_user, make_musician):
    user = await make_user()
    await make_musician(user)

    resolution = await role_service.resolve_user_roles(db, user)

    assert resolution.changed
    assert user.roles == ["signed-in", "musician"]
    assert user.primary_role == "musician"


@pytest.mark.asyncio
async def test_user_with_both_profiles(db, make_user, make_musician, make_venue):
    user = await make_user()
    await make_venue(user)
    await make_musician(user)

    await role_service.resolve_user_roles(db, user)

    assert user.roles == ["signed-in", "musician", "venueOwner"]
    assert user.primary_role == "musician"


@pytest.mark.asyncio
async def test_committed_primary_role_only_gains_tags(db, make_user, make_musician, make_venue):
    user = await make_user(primary_role="venue", roles=["signed-in", "venueOwner"])
    await make_venue(user)
    await make_musician(user)

    await role_service.resolve_user_roles(db, user)

    assert user.primary_role == "venue"
    assert user.roles == ["signed-in", "venueOwner", "musician"]


@pytest.mark.asyncio
async def test_no_profiles_is_unchanged(db, make_user):
    user = await make_user()

    resolution = await role_service.resolve_user_roles(db, user)

    assert not resolution.changed
    assert user.roles == ["signed-in"]
    assert user.primary_role == "user"


@pytest.mark.asyncio
async def test_backfills_musician_profile(db, make_user):
    user = await make_user(first_name="Sam", last_name="Reed", primary_role="musician")

    profile = await role_service.ensure_primary_profile(db, user)

    assert isinstance(profile, Musician)
    assert profile.user_id == user.id
    assert profile.name == "Sam Reed"
    assert profile.email == user.email
    assert profile.is_active is True
    assert profile.genres == []


@pytest.mark.asyncio
async def test_backfilled_profile_name_falls_back_to_email(db, make_user):
    user = await make_user(email="nameless@example.com", primary_role="venue")

    profile = await role_service.ensure_primary_profile(db, user)

    assert isinstance(profile, Venue)
    assert profile.name == "nameless@example.com"
    assert profile.owner_id == user.id


@pytest.mark.asyncio
async def test_backfill_skips_existing_profile(db, make_user, make_musician):
    user = await make_user(primary_role="musician")
    await make_musician(user)

    assert await role_service.ensure_primary_profile(db, user) is None

    result = await db.execute(select(func.count()).where(Musician.user_id == user.id))
    assert result.scalar() == 1


@pytest.mark.asyncio
async def test_backfill_skipped_during_setup(db, make_user):
    user = await make_user()

    assert await role_service.ensure_primary_profile(db, user) is None


@pytest.mark.asyncio
async def test_backfill_failure_is_swallowed(db, make_user, monkeypatch, caplog):
    user = await make_user(primary_role="musician")

    async def _boom(*args, **kwargs):
        raise RuntimeError("storage unavailable")

    monkeypatch.setattr(role_service, "_create_primary_profile", _boom)

    assert await role_service.ensure_primary_profile(db, user) is None
    assert "storage unavailable" in caplog.text
