"""Event endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_active_user, get_db
from app.models.event import Event, EventHistory
from app.models.user import User
from app.schemas.event import (
    EventCreate,
    EventHistoryResponse,
    EventListResponse,
    EventResponse,
    EventUpdate,
)
from app.services.event_history_service import event_history_service
from app.services.event_service import event_service

router = APIRouter()


@router.post("/", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    event_data: EventCreate,
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Event:
    """Publish an event at one of the current user's venues."""
    return await event_service.create_event(db, current_user, event_data.model_dump(exclude_unset=True))


@router.get("/", response_model=EventListResponse)
async def list_events(
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    venue_id: UUID | None = Query(None),
    status_filter: str | None = Query(None, alias="status"),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=20, ge=1, le=100),
) -> EventListResponse:
    """List public events, optionally for one venue."""
    query = select(Event).where(
        Event.is_active == True,  # noqa: E712
        Event.is_public == True,  # noqa: E712
    )
    if venue_id:
        query = query.where(Event.venue_id == venue_id)
    if status_filter:
        query = query.where(Event.status == status_filter)

    count_result = await db.execute(select(func.count()).select_from(query.subquery()))
    total = count_result.scalar() or 0

    offset = (page - 1) * page_size
    query = query.order_by(Event.date).offset(offset).limit(page_size)
    result = await db.execute(query)

    return EventListResponse(
        events=[EventResponse.model_validate(e) for e in result.scalars().all()],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: UUID,
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Event:
    """Get an event."""
    return await event_service.get_event(db, event_id)


@router.patch("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: UUID,
    updates: EventUpdate,
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Event:
    """Update an event at one of the current user's venues."""
    event = await event_service.get_event(db, event_id)
    return await event_service.update_event(
        db, event, current_user, updates.model_dump(exclude_none=True)
    )


@router.get("/{event_id}/history", response_model=list[EventHistoryResponse])
async def get_event_history(
    event_id: UUID,
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[EventHistory]:
    """Get the change log for an event."""
    await event_service.get_event(db, event_id)
    return await event_history_service.list_for_event(db, event_id)
