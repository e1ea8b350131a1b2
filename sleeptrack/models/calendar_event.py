"""Calendar event model."""

import datetime as dt
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Date, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sleeptrack.models.base import BaseModel

if TYPE_CHECKING:
    from sleeptrack.models.user import User


class CalendarEvent(BaseModel):
    """A titled event on a calendar date. Several events may share a date."""

    __tablename__ = "calendar_events"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
    )

    date: Mapped[dt.date] = mapped_column(Date, index=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Color tag, e.g. "purple"
    color: Mapped[str] = mapped_column(String(20), default="purple", nullable=False)

    user: Mapped["User"] = relationship("User", back_populates="calendar_events")

    def __repr__(self) -> str:
        return f"<CalendarEvent(user_id={self.user_id}, date={self.date}, title={self.title})>"
