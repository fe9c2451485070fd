"""User-related Pydantic schemas."""

import re
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.domain.roles import PRIMARY_ROLES

PRIMARY_ROLE_PATTERN = f"^({'|'.join(PRIMARY_ROLES)})$"


class UserSignUp(BaseModel):
    """Schema for email sign-up."""

    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if not re.search(r"[A-Z]", v):
            raise ValueError("Password must contain at least one uppercase letter")
        if not re.search(r"[a-z]", v):
            raise ValueError("Password must contain at least one lowercase letter")
        if not re.search(r"\d", v):
            raise ValueError("Password must contain at least one digit")
        return v


class UserLogin(BaseModel):
    """Schema for user login."""

    email: EmailStr
    password: str


class UserUpdate(BaseModel):
    """Schema for updating user profile."""

    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    profile_picture_url: str | None = None
    primary_role: str | None = Field(None, pattern=PRIMARY_ROLE_PATTERN)


class RoleUpdateRequest(BaseModel):
    """Schema for the explicit role update action."""

    primary_role: str | None = Field(None, pattern=PRIMARY_ROLE_PATTERN)


class UserResponse(BaseModel):
    """Schema for user response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    first_name: str | None
    last_name: str | None
    profile_picture_url: str | None
    roles: list[str]
    primary_role: str
    email_verified: bool
    is_active: bool
    last_signed_in: datetime | None
    created_at: datetime


class UserPublicResponse(BaseModel):
    """Schema for public user profile (visible to others)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    first_name: str | None
    last_name: str | None
    profile_picture_url: str | None
    primary_role: str


class TokenResponse(BaseModel):
    """Schema for authentication token response."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshTokenRequest(BaseModel):
    """Schema for token refresh request."""

    refresh_token: str
