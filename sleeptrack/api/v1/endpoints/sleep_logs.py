"""Sleep log endpoints.

Paths:
  GET    /api/v1/sleep-logs/factors - selectable factors
  GET    /api/v1/sleep-logs         - logs, newest first
  POST   /api/v1/sleep-logs         - log a night
  GET    /api/v1/sleep-logs/{id}    - one log
  DELETE /api/v1/sleep-logs/{id}    - delete a log
"""

import datetime as dt
from datetime import date, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field, field_validator
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sleeptrack.core.database import get_db
from sleeptrack.core.errors import backend_call
from sleeptrack.core.hybrid_auth import get_current_user
from sleeptrack.models.sleep import SleepLog
from sleeptrack.models.user import User
from sleeptrack.services.analysis import score_log

router = APIRouter()

CLOCK_TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"

AVAILABLE_FACTORS = [
    {"name": "Caffeine", "icon": "coffee"},
    {"name": "Exercise", "icon": "dumbbell"},
    {"name": "Stress", "icon": "brain-circuit"},
    {"name": "Read book", "icon": "book-open"},
    {"name": "Screen time", "icon": "zap"},
    {"name": "Ate late", "icon": "moon"},
    {"name": "Meditation", "icon": "zap"},
]


# -------------------------------------------------------------------------
# Request/Response Models
# -------------------------------------------------------------------------


class SleepLogCreate(BaseModel):
    """Schema for logging a night of sleep."""

    date: dt.date = Field(default_factory=dt.date.today)
    bedtime: str = Field("22:30", pattern=CLOCK_TIME_PATTERN, description="HH:MM")
    wake_time: str = Field("06:30", pattern=CLOCK_TIME_PATTERN, description="HH:MM")
    quality: int = Field(4, ge=1, le=5, description="1 (poor) to 5 (great)")
    notes: str | None = Field(None, max_length=1000)
    factors: list[str] = Field(default_factory=list, max_length=20)

    @field_validator("factors")
    @classmethod
    def _strip_factors(cls, value: list[str]) -> list[str]:
        cleaned = [f.strip() for f in value]
        if any(not f or len(f) > 50 for f in cleaned):
            raise ValueError("Factor names must be 1-50 characters")
        return cleaned


class DurationSchema(BaseModel):
    hours: int
    minutes: int
    total_minutes: int


class SleepLogResponse(BaseModel):
    """A log with its derived duration and score."""

    id: int
    date: date
    bedtime: str
    wake_time: str
    quality: int
    notes: str | None
    factors: list[str]
    duration: DurationSchema
    score: int
    created_at: datetime | None = None


class SleepLogListResponse(BaseModel):
    items: list[SleepLogResponse]
    total: int


class FactorsResponse(BaseModel):
    factors: list[dict[str, str]]


def to_response(log: SleepLog) -> SleepLogResponse:
    scored = score_log(log)
    return SleepLogResponse(
        id=log.id,
        date=log.date,
        bedtime=log.bedtime,
        wake_time=log.wake_time,
        quality=log.quality,
        notes=log.notes,
        factors=scored.factors,
        duration=DurationSchema(**scored.duration.to_dict()),
        score=scored.score,
        created_at=log.created_at,
    )


async def _get_own_log(db: AsyncSession, user: User, log_id: int) -> SleepLog:
    result = await db.execute(
        select(SleepLog).where(SleepLog.id == log_id, SleepLog.user_id == user.id)
    )
    log = result.scalar_one_or_none()
    if not log:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Sleep log not found",
        )
    return log


# -------------------------------------------------------------------------
# Endpoints
# -------------------------------------------------------------------------


@router.get("/factors", response_model=FactorsResponse)
async def get_factors():
    """Get the factors a log can be tagged with."""
    return {"factors": AVAILABLE_FACTORS}


@router.get("", response_model=SleepLogListResponse)
async def list_sleep_logs(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    start_date: date | None = Query(None, description="Filter from date"),
    end_date: date | None = Query(None, description="Filter to date"),
    limit: int = Query(30, ge=1, le=365),
) -> SleepLogListResponse:
    """Get the user's sleep logs, newest first."""
    query = select(SleepLog).where(SleepLog.user_id == current_user.id)
    if start_date:
        query = query.where(SleepLog.date >= start_date)
    if end_date:
        query = query.where(SleepLog.date <= end_date)
    query = query.order_by(SleepLog.date.desc(), SleepLog.id.desc()).limit(limit)

    async with backend_call("Failed to load sleep logs."):
        result = await db.execute(query)
        logs = result.scalars().all()

    items = [to_response(log) for log in logs]
    return SleepLogListResponse(items=items, total=len(items))


@router.post("", response_model=SleepLogResponse, status_code=status.HTTP_201_CREATED)
async def create_sleep_log(
    log_data: SleepLogCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SleepLogResponse:
    """Log a night of sleep."""
    log = SleepLog(
        user_id=current_user.id,
        date=log_data.date,
        bedtime=log_data.bedtime,
        wake_time=log_data.wake_time,
        quality=log_data.quality,
        notes=log_data.notes or None,
        factors=log_data.factors,
    )
    async with backend_call("Failed to save log.", db):
        db.add(log)
        await db.commit()
        await db.refresh(log)

    return to_response(log)


@router.get("/{log_id}", response_model=SleepLogResponse)
async def get_sleep_log(
    log_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SleepLogResponse:
    """Get one of the user's logs."""
    async with backend_call("Failed to load sleep logs."):
        log = await _get_own_log(db, current_user, log_id)
    return to_response(log)


@router.delete("/{log_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_sleep_log(
    log_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Delete one of the user's logs."""
    async with backend_call("Failed to delete log.", db):
        log = await _get_own_log(db, current_user, log_id)
        await db.delete(log)
        await db.commit()
