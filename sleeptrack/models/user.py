"""User model."""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sleeptrack.models.base import BaseModel

if TYPE_CHECKING:
    from sleeptrack.models.calendar_event import CalendarEvent
    from sleeptrack.models.sleep import JournalEntry, SleepGoal, SleepLog


class User(BaseModel):
    """A SleepTrack user, local or mirrored from Clerk."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    # Clerk-only users have no local password
    password_hash: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    clerk_user_id: Mapped[Optional[str]] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=True,
    )
    display_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    timezone: Mapped[str] = mapped_column(String(50), default="UTC")
    last_login_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # Relationships
    sleep_logs: Mapped[list["SleepLog"]] = relationship(
        "SleepLog",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    sleep_goal: Mapped[Optional["SleepGoal"]] = relationship(
        "SleepGoal",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )
    journal_entries: Mapped[list["JournalEntry"]] = relationship(
        "JournalEntry",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    calendar_events: Mapped[list["CalendarEvent"]] = relationship(
        "CalendarEvent",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
