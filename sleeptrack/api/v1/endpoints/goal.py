"""Sleep goal endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sleeptrack.core.database import get_db
from sleeptrack.core.errors import backend_call
from sleeptrack.core.hybrid_auth import get_current_user
from sleeptrack.models.sleep import SleepGoal
from sleeptrack.models.user import User
from sleeptrack.services.user_settings import SettingsStore, get_settings_store

router = APIRouter()


class GoalSchema(BaseModel):
    goal_hours: float = Field(..., ge=1, le=24)


class GoalResponse(BaseModel):
    goal_hours: float | None


@router.get("", response_model=GoalResponse)
async def get_goal(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> GoalResponse:
    """Get the saved goal, or null when none was saved."""
    async with backend_call("Failed to load goal."):
        result = await db.execute(
            select(SleepGoal.goal_hours).where(SleepGoal.user_id == current_user.id)
        )
        goal_hours = result.scalar_one_or_none()
    return GoalResponse(goal_hours=goal_hours)


@router.put("", response_model=GoalResponse)
async def save_goal(
    goal_data: GoalSchema,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    store: Annotated[SettingsStore, Depends(get_settings_store)],
) -> GoalResponse:
    """Create or replace the user's goal.

    The dashboard reads the goal from settings first, so it is updated there too.
    """
    async with backend_call("Error saving goal.", db):
        result = await db.execute(
            select(SleepGoal).where(SleepGoal.user_id == current_user.id)
        )
        goal = result.scalar_one_or_none()
        if goal:
            goal.goal_hours = goal_data.goal_hours
        else:
            goal = SleepGoal(user_id=current_user.id, goal_hours=goal_data.goal_hours)
            db.add(goal)
        await db.commit()

    store.update(current_user.id, sleep_goal_hours=goal_data.goal_hours)
    return GoalResponse(goal_hours=goal_data.goal_hours)
