"""Calendar event endpoints."""

import calendar
from datetime import date
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field, field_validator
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sleeptrack.core.database import get_db
from sleeptrack.core.errors import backend_call
from sleeptrack.core.hybrid_auth import get_current_user
from sleeptrack.models.calendar_event import CalendarEvent
from sleeptrack.models.user import User

router = APIRouter()


# -------------------------------------------------------------------------
# Color Tags
# -------------------------------------------------------------------------

EventColor = Literal["purple", "pink", "green", "yellow", "blue", "red"]

EVENT_COLORS = [
    {"value": "purple", "label": "Purple"},
    {"value": "pink", "label": "Pink"},
    {"value": "green", "label": "Green"},
    {"value": "yellow", "label": "Yellow"},
    {"value": "blue", "label": "Blue"},
    {"value": "red", "label": "Red"},
]


# -------------------------------------------------------------------------
# Request/Response Models
# -------------------------------------------------------------------------


class EventCreateSchema(BaseModel):
    """Schema for creating an event."""

    date: date
    title: str = Field(..., max_length=200)
    note: str | None = Field(None, max_length=1000)
    color: EventColor = "purple"

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Title must not be blank")
        return value


class EventResponseSchema(BaseModel):
    """Response schema for an event."""

    id: int
    date: date
    title: str
    note: str | None
    color: str

    model_config = {"from_attributes": True}


class EventsListResponseSchema(BaseModel):
    events: list[EventResponseSchema]


class EventColorsResponseSchema(BaseModel):
    colors: list[dict]


# -------------------------------------------------------------------------
# Endpoints
# -------------------------------------------------------------------------


@router.get("/colors", response_model=EventColorsResponseSchema)
async def get_event_colors():
    """Get available color tags."""
    return {"colors": EVENT_COLORS}


@router.get("/events", response_model=EventsListResponseSchema)
async def get_events(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    year: int | None = Query(None, ge=1900, le=9999, description="Month view: year"),
    month: int | None = Query(None, ge=1, le=12, description="Month view: month"),
    start_date: date | None = Query(None, description="Start date filter"),
    end_date: date | None = Query(None, description="End date filter"),
):
    """Get events for a month or a date range, oldest first."""
    if (year is None) != (month is None):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="year and month must be given together",
        )
    if year is not None and month is not None:
        start_date = date(year, month, 1)
        end_date = date(year, month, calendar.monthrange(year, month)[1])

    query = select(CalendarEvent).where(CalendarEvent.user_id == current_user.id)
    if start_date:
        query = query.where(CalendarEvent.date >= start_date)
    if end_date:
        query = query.where(CalendarEvent.date <= end_date)
    query = query.order_by(CalendarEvent.date.asc(), CalendarEvent.id.asc())

    async with backend_call("Failed to load calendar events."):
        result = await db.execute(query)
        events = result.scalars().all()

    return {"events": events}


@router.post("/events", response_model=EventResponseSchema, status_code=status.HTTP_201_CREATED)
async def create_event(
    event_data: EventCreateSchema,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Add an event to a date."""
    event = CalendarEvent(
        user_id=current_user.id,
        date=event_data.date,
        title=event_data.title,
        note=event_data.note or None,
        color=event_data.color,
    )
    async with backend_call("Failed to save event.", db):
        db.add(event)
        await db.commit()
        await db.refresh(event)
    return event


@router.delete("/events/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Delete an event."""
    async with backend_call("Failed to delete event.", db):
        result = await db.execute(
            select(CalendarEvent).where(
                CalendarEvent.id == event_id,
                CalendarEvent.user_id == current_user.id,
            )
        )
        event = result.scalar_one_or_none()

        if not event:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Event not found",
            )

        await db.delete(event)
        await db.commit()
