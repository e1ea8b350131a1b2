"""Sleep-related models (nightly logs, goal, journal)."""

import datetime as dt
from typing import TYPE_CHECKING, Optional

from sqlalchemy import JSON, Date, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sleeptrack.models.base import BaseModel

if TYPE_CHECKING:
    from sleeptrack.models.user import User


class SleepLog(BaseModel):
    """One night of sleep as entered by the user.

    Duration and score are derived from bedtime, wake_time and quality on
    every read and are never stored.
    """

    __tablename__ = "sleep_logs"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
    )

    date: Mapped[dt.date] = mapped_column(Date, index=True)
    bedtime: Mapped[str] = mapped_column(String(8))  # "HH:MM"
    wake_time: Mapped[str] = mapped_column(String(8))  # "HH:MM"
    quality: Mapped[int] = mapped_column(Integer)  # 1-5
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Factor names as a JSON list, e.g. ["Caffeine", "Exercise"]
    factors: Mapped[list[str]] = mapped_column(JSON, default=list)

    # Relationship
    user: Mapped["User"] = relationship("User", back_populates="sleep_logs")

    def __repr__(self) -> str:
        return f"<SleepLog(user_id={self.user_id}, date={self.date})>"


class SleepGoal(BaseModel):
    """Nightly sleep goal in hours, one row per user."""

    __tablename__ = "sleep_goals"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        index=True,
    )
    goal_hours: Mapped[float] = mapped_column(Float)

    user: Mapped["User"] = relationship("User", back_populates="sleep_goal")

    def __repr__(self) -> str:
        return f"<SleepGoal(user_id={self.user_id}, goal_hours={self.goal_hours})>"


class JournalEntry(BaseModel):
    """Free-text sleep journal note."""

    __tablename__ = "sleep_journal"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
    )
    note: Mapped[str] = mapped_column(Text, nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, index=True)

    user: Mapped["User"] = relationship("User", back_populates="journal_entries")

    def __repr__(self) -> str:
        return f"<JournalEntry(user_id={self.user_id}, date={self.date})>"
