"""Pydantic schemas for API validation."""

from app.schemas.booking import BookingCreate, BookingResponse, BookingUpdate
from app.schemas.event import EventCreate, EventResponse, EventUpdate
from app.schemas.message import (
    MessageCreate,
    MessageResponse,
    NotificationResponse,
)
from app.schemas.profile import (
    MusicianCreate,
    MusicianResponse,
    MusicianUpdate,
    VenueCreate,
    VenueResponse,
    VenueUpdate,
)
from app.schemas.user import (
    RoleUpdateRequest,
    TokenResponse,
    UserLogin,
    UserResponse,
    UserSignUp,
    UserUpdate,
)

__all__ = [
    # User
    "UserSignUp",
    "UserLogin",
    "UserUpdate",
    "UserResponse",
    "RoleUpdateRequest",
    "TokenResponse",
    # Profiles
    "MusicianCreate",
    "MusicianUpdate",
    "MusicianResponse",
    "VenueCreate",
    "VenueUpdate",
    "VenueResponse",
    # Event
    "EventCreate",
    "EventUpdate",
    "EventResponse",
    # Booking
    "BookingCreate",
    "BookingUpdate",
    "BookingResponse",
    # Message
    "MessageCreate",
    "MessageResponse",
    "NotificationResponse",
]
