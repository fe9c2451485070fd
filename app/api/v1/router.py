"""Main API router that includes all endpoint routers."""

from fastapi import APIRouter

from app.api.v1 import (
    auth,
    bookings,
    events,
    messages,
    musicians,
    notifications,
    reviews,
    users,
    venues,
)

api_router = APIRouter()

# Authentication
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])

# Users
api_router.include_router(users.router, prefix="/users", tags=["Users"])

# Profiles
api_router.include_router(musicians.router, prefix="/musicians", tags=["Musicians"])
api_router.include_router(venues.router, prefix="/venues", tags=["Venues"])

# Events
api_router.include_router(events.router, prefix="/events", tags=["Events"])

# Bookings
api_router.include_router(bookings.router, prefix="/bookings", tags=["Bookings"])

# Messages
api_router.include_router(messages.router, prefix="/messages", tags=["Messages"])

# Notifications
api_router.include_router(notifications.router, prefix="/notifications", tags=["Notifications"])

# Reviews
api_router.include_router(reviews.router, prefix="/reviews", tags=["Reviews"])
