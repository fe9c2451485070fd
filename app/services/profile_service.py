"""Musician and venue profile service."""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AuthorizationError, NotFoundError, ProfileAlreadyExists
from app.models.profile import Musician, Venue
from app.models.user import User
from app.services.role_service import MUSICIAN_DEFAULTS, VENUE_DEFAULTS, role_service
from app.utils.normalizers import (
    apply_defaults,
    blank_to_default,
    build_location,
    ensure_dict,
    ensure_list,
    full_name,
)

logger = logging.getLogger(__name__)

DEFAULT_VENUE_NAME = "Unnamed Venue"

MUSICIAN_LIST_FIELDS = ("genres", "instruments", "social_links")
VENUE_LIST_FIELDS = ("genres", "amenities", "social_links", "additional_pictures")


class ProfileService:
    """Service for creating and updating musician and venue profiles."""

    async def get_musician(self, db: AsyncSession, musician_id: UUID) -> Musician:
        result = await db.execute(select(Musician).where(Musician.id == musician_id))
        musician = result.scalar_one_or_none()
        if not musician:
            raise NotFoundError("Musician", str(musician_id))
        return musician

    async def get_venue(self, db: AsyncSession, venue_id: UUID) -> Venue:
        result = await db.execute(select(Venue).where(Venue.id == venue_id))
        venue = result.scalar_one_or_none()
        if not venue:
            raise NotFoundError("Venue", str(venue_id))
        return venue

    async def create_musician(
        self, db: AsyncSession, user: User, params: dict[str, Any]
    ) -> Musician:
        """Create the caller's musician profile.

        A user may own at most one musician profile.
        """
        if await role_service.find_musician(db, user.id) is not None:
            raise ProfileAlreadyExists("musician")

        musician = Musician(user_id=user.id, **params)
        musician.name = blank_to_default(
            musician.name, full_name(user.first_name, user.last_name) or user.email
        )
        apply_defaults(musician, {**MUSICIAN_DEFAULTS, "email": user.email})
        if musician.location is None:
            musician.location = build_location(musician.city, musician.state, musician.country)

        db.add(musician)
        await db.flush()
        await db.refresh(musician)
        logger.info(f"Created musician profile {musician.id} for user {user.id}")

        await self._resolve_roles_quietly(db, user)
        return musician

    async def update_musician(
        self, db: AsyncSession, musician: Musician, user: User, params: dict[str, Any]
    ) -> Musician:
        if musician.user_id != user.id:
            raise AuthorizationError("You can only edit your own musician profile")

        for field, value in params.items():
            setattr(musician, field, value)
        for field in MUSICIAN_LIST_FIELDS:
            setattr(musician, field, ensure_list(getattr(musician, field)))
        if "name" in params:
            musician.name = blank_to_default(
                musician.name, full_name(user.first_name, user.last_name) or user.email
            )
        if {"city", "state", "country"} & params.keys():
            musician.location = build_location(musician.city, musician.state, musician.country)

        await db.flush()
        await db.refresh(musician)
        return musician

    async def create_venue(self, db: AsyncSession, user: User, params: dict[str, Any]) -> Venue:
        """Create the caller's venue profile.

        A user may own at most one venue.
        """
        if await role_service.find_venue(db, user.id) is not None:
            raise ProfileAlreadyExists("venue")

        venue = Venue(owner_id=user.id, **params)
        venue.name = blank_to_default(venue.name, DEFAULT_VENUE_NAME)
        apply_defaults(venue, VENUE_DEFAULTS)
        if venue.location is None:
            venue.location = build_location(venue.city, venue.state, venue.country)

        db.add(venue)
        await db.flush()
        await db.refresh(venue)
        logger.info(f"Created venue {venue.id} for user {user.id}")

        await self._resolve_roles_quietly(db, user)
        return venue

    async def update_venue(
        self, db: AsyncSession, venue: Venue, user: User, params: dict[str, Any]
    ) -> Venue:
        if venue.owner_id != user.id:
            raise AuthorizationError("You can only edit venues you own")

        for field, value in params.items():
            setattr(venue, field, value)
        for field in VENUE_LIST_FIELDS:
            setattr(venue, field, ensure_list(getattr(venue, field)))
        venue.hours = ensure_dict(venue.hours)
        if "name" in params:
            venue.name = blank_to_default(venue.name, DEFAULT_VENUE_NAME)
        if "location" not in params and {"city", "state", "country"} & params.keys():
            venue.location = build_location(venue.city, venue.state, venue.country)

        await db.flush()
        await db.refresh(venue)
        return venue

    async def _resolve_roles_quietly(self, db: AsyncSession, user: User) -> None:
        # Profile creation stands even if role bookkeeping fails
        try:
            async with db.begin_nested():
                await role_service.resolve_user_roles(db, user)
        except Exception as e:
            logger.error(f"Role resolution failed for user {user.id}: {e}")


profile_service = ProfileService()
