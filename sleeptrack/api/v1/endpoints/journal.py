"""Sleep journal endpoints."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field, field_validator
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sleeptrack.core.database import get_db
from sleeptrack.core.errors import backend_call
from sleeptrack.core.hybrid_auth import get_current_user
from sleeptrack.models.sleep import JournalEntry
from sleeptrack.models.user import User

router = APIRouter()


class JournalCreateSchema(BaseModel):
    note: str = Field(..., max_length=5000)

    @field_validator("note")
    @classmethod
    def _note_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Note must not be blank")
        return value


class JournalEntrySchema(BaseModel):
    id: int
    note: str
    date: date

    model_config = {"from_attributes": True}


class JournalListSchema(BaseModel):
    entries: list[JournalEntrySchema]


@router.get("", response_model=JournalListSchema)
async def list_journal(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    limit: int = Query(20, ge=1, le=100),
):
    """Get journal notes, newest first."""
    async with backend_call("Failed to load journal."):
        result = await db.execute(
            select(JournalEntry)
            .where(JournalEntry.user_id == current_user.id)
            .order_by(JournalEntry.date.desc(), JournalEntry.id.desc())
            .limit(limit)
        )
        entries = result.scalars().all()
    return {"entries": entries}


@router.post("", response_model=JournalEntrySchema, status_code=status.HTTP_201_CREATED)
async def add_journal_entry(
    entry_data: JournalCreateSchema,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Save a note dated today."""
    entry = JournalEntry(user_id=current_user.id, note=entry_data.note, date=date.today())
    async with backend_call("Error saving note.", db):
        db.add(entry)
        await db.commit()
        await db.refresh(entry)
    return entry
