"""Musician and venue profile schemas."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class MusicianCreate(BaseModel):
    """Schema for creating a musician profile."""

    name: str | None = Field(None, max_length=200)
    stage_name: str | None = Field(None, max_length=200)
    email: EmailStr | None = None
    bio: str | None = Field(None, max_length=5000)
    genres: list[str] | None = None
    instruments: list[str] | None = None
    social_links: list[str] | None = None
    hourly_rate: int | None = Field(None, ge=0)
    years_experience: int | None = Field(None, ge=0)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    country: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=30)
    website: str | None = None
    profile_picture_url: str | None = None


class MusicianUpdate(MusicianCreate):
    """Schema for updating a musician profile."""

    is_active: bool | None = None


class MusicianResponse(BaseModel):
    """Schema for musician response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    name: str
    stage_name: str | None
    email: str | None
    bio: str | None
    genres: list[str]
    instruments: list[str]
    social_links: list[str]
    hourly_rate: int | None
    years_experience: int | None
    city: str | None
    state: str | None
    country: str | None
    location: str | None
    phone: str | None
    website: str | None
    profile_picture_url: str | None
    rating: float
    is_active: bool
    is_verified: bool
    created_at: datetime


class VenueCreate(BaseModel):
    """Schema for creating a venue profile."""

    name: str | None = Field(None, max_length=200)
    description: str | None = Field(None, max_length=5000)
    type: str | None = Field(None, max_length=50)
    capacity: int | None = Field(None, ge=0)
    price_range: str | None = Field(None, max_length=20)
    genres: list[str] | None = None
    amenities: list[str] | None = None
    social_links: list[str] | None = None
    additional_pictures: list[str] | None = None
    hours: dict[str, Any] | None = None
    address: str | None = Field(None, max_length=300)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    country: str | None = Field(None, max_length=100)
    zip_code: str | None = Field(None, max_length=20)
    location: str | None = Field(None, max_length=300)
    phone: str | None = Field(None, max_length=30)
    email: EmailStr | None = None
    website: str | None = None
    profile_picture_url: str | None = None


class VenueUpdate(VenueCreate):
    """Schema for updating a venue profile."""

    is_active: bool | None = None


class VenueResponse(BaseModel):
    """Schema for venue response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    owner_id: UUID
    name: str
    description: str | None
    type: str | None
    capacity: int | None
    price_range: str | None
    genres: list[str]
    amenities: list[str]
    social_links: list[str]
    additional_pictures: list[str]
    hours: dict[str, Any]
    address: str | None
    city: str | None
    state: str | None
    country: str | None
    zip_code: str | None
    location: str | None
    phone: str | None
    email: str | None
    website: str | None
    profile_picture_url: str | None
    rating: float
    is_active: bool
    is_verified: bool
    created_at: datetime


class MusicianListResponse(BaseModel):
    """Schema for paginated musician list."""

    musicians: list[MusicianResponse]
    total: int
    page: int
    page_size: int


class VenueListResponse(BaseModel):
    """Schema for paginated venue list."""

    venues: list[VenueResponse]
    total: int
    page: int
    page_size: int
