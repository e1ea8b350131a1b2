"""Database models for SleepTrack."""

from sleeptrack.models.user import User
from sleeptrack.models.sleep import JournalEntry, SleepGoal, SleepLog
from sleeptrack.models.calendar_event import CalendarEvent

__all__ = [
    # User
    "User",
    # Sleep
    "SleepLog",
    "SleepGoal",
    "JournalEntry",
    # Calendar
    "CalendarEvent",
]
