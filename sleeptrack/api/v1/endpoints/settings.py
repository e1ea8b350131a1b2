"""User settings endpoints (kept in memory, not persisted)."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator

from sleeptrack.core.hybrid_auth import get_current_user
from sleeptrack.models.user import User
from sleeptrack.services.user_settings import SettingsStore, Theme, get_settings_store

router = APIRouter()


class SettingsSchema(BaseModel):
    sleep_goal_hours: float
    theme: Theme


class SettingsUpdateSchema(BaseModel):
    sleep_goal_hours: Optional[float] = Field(None, ge=4, le=12)
    theme: Optional[Theme] = None

    @field_validator("sleep_goal_hours")
    @classmethod
    def _half_hour_steps(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and (value * 2) != int(value * 2):
            raise ValueError("Sleep goal must be set in half-hour steps")
        return value


@router.get("", response_model=SettingsSchema)
async def get_user_settings(
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[SettingsStore, Depends(get_settings_store)],
):
    """Get the current settings."""
    return store.get(current_user.id).to_dict()


@router.put("", response_model=SettingsSchema)
async def update_user_settings(
    update: SettingsUpdateSchema,
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[SettingsStore, Depends(get_settings_store)],
):
    """Change one or both settings."""
    updated = store.update(
        current_user.id,
        sleep_goal_hours=update.sleep_goal_hours,
        theme=update.theme,
    )
    return updated.to_dict()
