"""User account service."""

import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AuthenticationError, PrimaryRoleLocked, ValidationError
from app.core.security import get_password_hash, verify_password
from app.domain.roles import (
    PRIMARY_ROLE_TAGS,
    SIGNED_IN,
    is_profile_setup,
    merge_roles,
)
from app.models.user import User
from app.services.role_service import role_service

logger = logging.getLogger(__name__)


class UserService:
    """Service for sign-up, login and account updates."""

    async def sign_up(
        self,
        db: AsyncSession,
        email: str,
        password: str,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> User:
        """Register a new user account."""
        result = await db.execute(select(User).where(User.email == email))
        if result.scalar_one_or_none():
            raise ValidationError("Email already registered")

        user = User(
            email=email,
            password_hash=get_password_hash(password),
            first_name=first_name,
            last_name=last_name,
            roles=[SIGNED_IN],
            last_signed_in=datetime.now(UTC),
        )
        db.add(user)
        await db.flush()

        await role_service.resolve_user_roles(db, user)
        await db.refresh(user)
        logger.info(f"User {user.id} signed up")
        return user

    async def authenticate(self, db: AsyncSession, email: str, password: str) -> User:
        """Check credentials and record the sign-in."""
        result = await db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()

        if not user or not verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid email or password")
        if not user.is_active:
            raise AuthenticationError("Account is deactivated")

        user.last_signed_in = datetime.now(UTC)
        await db.flush()
        return user

    def apply_primary_role(self, user: User, primary_role: str | None) -> None:
        """Set the primary role while the user is still in profile setup.

        Once a non-default primary role is set it can no longer change.
        """
        if primary_role is None or primary_role == user.primary_role:
            return
        if not is_profile_setup(user.primary_role):
            raise PrimaryRoleLocked()

        user.primary_role = primary_role
        tag = PRIMARY_ROLE_TAGS.get(primary_role)
        if tag:
            user.roles = merge_roles(user.roles, tag)

    async def update_user(self, db: AsyncSession, user: User, params: dict[str, Any]) -> User:
        """Update account fields, then re-derive roles from owned profiles.

        Setting the primary role during setup also creates the matching
        profile when the user has none yet.
        """
        self.apply_primary_role(user, params.pop("primary_role", None))
        for field, value in params.items():
            setattr(user, field, value)
        await db.flush()

        await role_service.resolve_user_roles(db, user)
        if await role_service.ensure_primary_profile(db, user) is not None:
            await role_service.resolve_user_roles(db, user)
        await db.refresh(user)
        return user

    async def update_role(self, db: AsyncSession, user: User, primary_role: str | None) -> User:
        """Explicit role update action.

        Applies the requested primary role, re-derives roles and creates the
        profile matching the primary role when the user has none yet.
        """
        self.apply_primary_role(user, primary_role)
        await db.flush()

        await role_service.resolve_user_roles(db, user)
        if await role_service.ensure_primary_profile(db, user) is not None:
            await role_service.resolve_user_roles(db, user)
        await db.refresh(user)
        logger.info(f"Updated roles for user {user.id}: primary_role={user.primary_role}")
        return user


user_service = UserService()
