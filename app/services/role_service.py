"""Role resolution service.

Keeps a user's role tags and primary role in line with the musician and
venue profiles they own.
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.roles import (
    PRIMARY_MUSICIAN,
    PRIMARY_VENUE,
    RoleResolution,
    resolve_roles,
)
from app.models.profile import Musician, Venue
from app.models.user import User
from app.utils.normalizers import apply_defaults, full_name

logger = logging.getLogger(__name__)

MUSICIAN_DEFAULTS = {
    "genres": [],
    "instruments": [],
    "social_links": [],
    "rating": 0,
    "is_active": True,
    "is_verified": False,
}

VENUE_DEFAULTS = {
    "genres": [],
    "amenities": [],
    "social_links": [],
    "additional_pictures": [],
    "hours": {},
    "capacity": 0,
    "rating": 0,
    "is_active": True,
    "is_verified": False,
}


class RoleService:
    """Service for deriving user roles from owned profiles."""

    async def find_musician(self, db: AsyncSession, user_id: UUID) -> Musician | None:
        """Return the first musician profile owned by a user."""
        result = await db.execute(
            select(Musician).where(Musician.user_id == user_id).order_by(Musician.created_at).limit(1)
        )
        return result.scalars().first()

    async def find_venue(self, db: AsyncSession, owner_id: UUID) -> Venue | None:
        """Return the first venue owned by a user."""
        result = await db.execute(
            select(Venue).where(Venue.owner_id == owner_id).order_by(Venue.created_at).limit(1)
        )
        return result.scalars().first()

    async def resolve_user_roles(self, db: AsyncSession, user: User) -> RoleResolution:
        """Add role tags for owned profiles and pick a primary role during setup.

        The user is only written back when something changed.
        """
        has_musician = await self.find_musician(db, user.id) is not None
        has_venue = await self.find_venue(db, user.id) is not None

        resolution = resolve_roles(user.roles, user.primary_role, has_musician, has_venue)
        if resolution.changed:
            # Assign fresh lists so the JSON column is flagged dirty
            user.roles = list(resolution.roles)
            user.primary_role = resolution.primary_role
            await db.flush()
            logger.info(
                f"Resolved roles for user {user.id}: roles={resolution.roles} "
                f"primary_role={resolution.primary_role}"
            )
        return resolution

    async def ensure_primary_profile(
        self, db: AsyncSession, user: User
    ) -> Musician | Venue | None:
        """Create the profile matching the user's primary role if it is missing.

        Failures are logged and swallowed so the calling role update still
        succeeds. Returns the created profile, or ``None``.
        """
        if user.primary_role not in (PRIMARY_MUSICIAN, PRIMARY_VENUE):
            return None

        try:
            async with db.begin_nested():
                return await self._create_primary_profile(db, user)
        except Exception as e:
            logger.error(f"Failed to create {user.primary_role} profile for user {user.id}: {e}")
            return None

    async def _create_primary_profile(
        self, db: AsyncSession, user: User
    ) -> Musician | Venue | None:
        name = full_name(user.first_name, user.last_name) or user.email

        if user.primary_role == PRIMARY_MUSICIAN:
            if await self.find_musician(db, user.id) is not None:
                return None
            profile: Musician | Venue = Musician(user_id=user.id, name=name, email=user.email)
            apply_defaults(profile, MUSICIAN_DEFAULTS)
        else:
            if await self.find_venue(db, user.id) is not None:
                return None
            profile = Venue(owner_id=user.id, name=name, email=user.email)
            apply_defaults(profile, VENUE_DEFAULTS)

        db.add(profile)
        await db.flush()
        logger.info(f"Created {user.primary_role} profile {profile.id} for user {user.id}")
        return profile


role_service = RoleService()
