"""Base model with timestamp columns."""

from datetime import date, datetime
from typing import Any

from sqlalchemy import DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from sleeptrack.core.database import Base


class BaseModel(Base):
    """Abstract base adding created_at / updated_at to every table."""

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def to_row(self) -> dict[str, Any]:
        """Every column of the table row, with dates as ISO strings."""
        row = {}
        for column in self.__table__.columns:
            value = getattr(self, column.key)
            if isinstance(value, (date, datetime)):
                value = value.isoformat()
            row[column.key] = value
        return row
