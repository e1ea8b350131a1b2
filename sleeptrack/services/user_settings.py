"""Per-user display settings.

Settings live in process memory only. They are not written to the database
and reset to defaults when the server restarts.
"""

from dataclasses import asdict, dataclass, replace
from threading import Lock
from typing import Literal, Optional

from sleeptrack.core.config import get_settings

Theme = Literal["dark", "light"]


@dataclass(frozen=True)
class UserSettings:
    sleep_goal_hours: float = 8.0
    theme: Theme = "dark"

    def to_dict(self) -> dict:
        return asdict(self)


class SettingsStore:
    """Thread-safe in-memory settings keyed by user id."""

    def __init__(self, default_goal_hours: float = 8.0) -> None:
        self._lock = Lock()
        self._settings: dict[int, UserSettings] = {}
        # Users whose goal was changed here rather than left at the default
        self._goal_set: set[int] = set()
        self._defaults = UserSettings(sleep_goal_hours=default_goal_hours)

    def get(self, user_id: int) -> UserSettings:
        with self._lock:
            return self._settings.get(user_id, self._defaults)

    def update(
        self,
        user_id: int,
        sleep_goal_hours: Optional[float] = None,
        theme: Optional[Theme] = None,
    ) -> UserSettings:
        """Apply the given fields and return the resulting settings."""
        changes = {}
        if sleep_goal_hours is not None:
            changes["sleep_goal_hours"] = sleep_goal_hours
        if theme is not None:
            changes["theme"] = theme

        with self._lock:
            current = self._settings.get(user_id, self._defaults)
            updated = replace(current, **changes)
            self._settings[user_id] = updated
            if sleep_goal_hours is not None:
                self._goal_set.add(user_id)
            return updated

    def goal_hours_if_set(self, user_id: int) -> Optional[float]:
        """The goal the user chose, or None while it is still the default."""
        with self._lock:
            if user_id not in self._goal_set:
                return None
            return self._settings[user_id].sleep_goal_hours

    def clear(self) -> None:
        with self._lock:
            self._settings.clear()
            self._goal_set.clear()


_settings_store: SettingsStore | None = None


def get_settings_store() -> SettingsStore:
    """Return the process-wide settings store."""
    global _settings_store
    if _settings_store is None:
        _settings_store = SettingsStore(get_settings().default_sleep_goal_hours)
    return _settings_store
