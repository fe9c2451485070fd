"""Database models."""

from app.models.booking import Booking
from app.models.event import Event, EventHistory
from app.models.message import Message, Notification
from app.models.profile import Musician, Venue
from app.models.review import Review
from app.models.user import User

__all__ = [
    # User
    "User",
    # Profiles
    "Musician",
    "Venue",
    # Events
    "Event",
    "EventHistory",
    # Booking
    "Booking",
    # Message
    "Message",
    "Notification",
    # Review
    "Review",
]
