"""User data export."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sleeptrack.models.sleep import JournalEntry, SleepGoal, SleepLog

EXPORT_FILENAME = "sleep_data.json"


async def export_user_data(db: AsyncSession, user_id: int) -> dict[str, list[dict[str, Any]]]:
    """Collect the user's raw rows from the three exported tables.

    Rows are returned as stored; no scores or durations are added. Every
    column is included and rows are reloaded so server-side defaults such as
    timestamps are present.
    """
    logs = await db.execute(
        select(SleepLog)
        .where(SleepLog.user_id == user_id)
        .order_by(SleepLog.date, SleepLog.id)
        .execution_options(populate_existing=True)
    )
    goals = await db.execute(
        select(SleepGoal)
        .where(SleepGoal.user_id == user_id)
        .execution_options(populate_existing=True)
    )
    journal = await db.execute(
        select(JournalEntry)
        .where(JournalEntry.user_id == user_id)
        .order_by(JournalEntry.date, JournalEntry.id)
        .execution_options(populate_existing=True)
    )

    return {
        "logs": [row.to_row() for row in logs.scalars().all()],
        "goals": [row.to_row() for row in goals.scalars().all()],
        "journal": [row.to_row() for row in journal.scalars().all()],
    }
