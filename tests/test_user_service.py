import pytest
from sqlalchemy import select

from app.core.exceptions import AuthenticationError, PrimaryRoleLocked, ValidationError
from app.models.profile import Musician, Venue
from app.services.user_service import user_service


@pytest.mark.asyncio
async def test_sign_up_starts_in_profile_setup(db):
    user = await user_service.sign_up(db, "new@example.com", "Secret123", "New", "Person")

    assert user.roles == ["signed-in"]
    assert user.primary_role == "user"
    assert user.last_signed_in is not None
    assert user.password_hash != "Secret123"


@pytest.mark.asyncio
async def test_duplicate_email_is_rejected(db):
    await user_service.sign_up(db, "twice@example.com", "Secret123")

    with pytest.raises(ValidationError):
        await user_service.sign_up(db, "twice@example.com", "Secret123")


@pytest.mark.asyncio
async def test_authenticate(db):
    await user_service.sign_up(db, "login@example.com", "Secret123")

    user = await user_service.authenticate(db, "login@example.com", "Secret123")
    assert user.email == "login@example.com"

    with pytest.raises(AuthenticationError):
        await user_service.authenticate(db, "login@example.com", "wrong-password")


@pytest.mark.asyncio
async def test_choosing_primary_role_adds_tag(db, make_user):
    user = await make_user()

    await user_service.update_user(db, user, {"primary_role": "venue", "first_name": "Val"})

    assert user.primary_role == "venue"
    assert user.roles == ["signed-in", "venueOwner"]
    assert user.first_name == "Val"


@pytest.mark.asyncio
async def test_choosing_primary_role_on_update_creates_profile(db, make_user):
    user = await make_user(first_name="Mo", last_name="Keys")

    await user_service.update_user(db, user, {"primary_role": "musician"})

    result = await db.execute(select(Musician).where(Musician.user_id == user.id))
    musicians = list(result.scalars().all())
    assert len(musicians) == 1
    assert musicians[0].name == "Mo Keys"
    assert user.roles == ["signed-in", "musician"]

    # A second update does not create another profile
    await user_service.update_user(db, user, {"first_name": "Mona"})
    result = await db.execute(select(Musician).where(Musician.user_id == user.id))
    assert len(result.scalars().all()) == 1


@pytest.mark.asyncio
async def test_primary_role_is_locked_after_setup(db, make_user):
    user = await make_user(primary_role="musician", roles=["signed-in", "musician"])

    with pytest.raises(PrimaryRoleLocked):
        await user_service.update_user(db, user, {"primary_role": "venue"})

    # Re-sending the same role is fine
    await user_service.update_user(db, user, {"primary_role": "musician"})
    assert user.primary_role == "musician"


@pytest.mark.asyncio
async def test_update_re_derives_roles_from_profiles(db, make_user, make_venue):
    user = await make_user()
    await make_venue(user)

    await user_service.update_user(db, user, {"last_name": "Keys"})

    assert user.primary_role == "venue"
    assert "venueOwner" in user.roles


@pytest.mark.asyncio
async def test_role_update_creates_missing_profile(db, make_user):
    user = await make_user(first_name="Rae", last_name="Lin")

    await user_service.update_role(db, user, "musician")

    result = await db.execute(select(Musician).where(Musician.user_id == user.id))
    profile = result.scalar_one()
    assert profile.name == "Rae Lin"
    assert user.primary_role == "musician"
    assert user.roles == ["signed-in", "musician"]


@pytest.mark.asyncio
async def test_role_update_without_role_keeps_setup(db, make_user):
    user = await make_user()

    await user_service.update_role(db, user, None)

    assert user.primary_role == "user"
    result = await db.execute(select(Venue).where(Venue.owner_id == user.id))
    assert result.scalar_one_or_none() is None


@pytest.mark.asyncio
async def test_role_update_survives_profile_creation_failure(db, make_user, monkeypatch):
    from app.services.role_service import role_service

    user = await make_user()

    async def _boom(*args, **kwargs):
        raise RuntimeError("cannot create profile")

    monkeypatch.setattr(role_service, "_create_primary_profile", _boom)

    await user_service.update_role(db, user, "venue")

    assert user.primary_role == "venue"
    assert "venueOwner" in user.roles
