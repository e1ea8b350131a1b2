"""Dashboard and analysis endpoints.

Paths:
  GET /api/v1/dashboard/summary - last night, last 7 nights, sleep debt
  GET /api/v1/analysis          - factor impact, trends, insights
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from sleeptrack.api.v1.endpoints.sleep_logs import DurationSchema
from sleeptrack.core.database import get_db
from sleeptrack.core.errors import backend_call
from sleeptrack.core.hybrid_auth import get_current_user
from sleeptrack.models.user import User
from sleeptrack.services.dashboard import get_dashboard_service

router = APIRouter()
analysis_router = APIRouter()

GoalQuery = Query(None, ge=1, le=24, description="Override the goal used for debt and overview")


# -------------------------------------------------------------------------
# Response Models
# -------------------------------------------------------------------------


class LastNightSchema(BaseModel):
    id: int | None
    date: str
    bedtime: str
    wake_time: str
    quality: int
    duration: DurationSchema
    score: int


class OverviewDaySchema(BaseModel):
    label: str
    date: str
    duration_hours: float
    goal_hours: float


class DashboardSummaryResponse(BaseModel):
    log_count: int
    goal_hours: float
    last_night: LastNightSchema | None
    sleep_score: int
    average_duration_hours: float
    sleep_debt_hours: float
    weekly_overview: list[OverviewDaySchema]


class FactorImpactSchema(BaseModel):
    name: str
    avg_score: int
    count: int


class AnalysisResponse(BaseModel):
    log_count: int
    average_duration_hours: float
    factor_impact: list[FactorImpactSchema]
    best_factor: FactorImpactSchema | None
    worst_factor: FactorImpactSchema | None
    trends: list[dict[str, Any]]
    sleep_debt_hours: float
    goal_hours: float
    insights: list[str]


# -------------------------------------------------------------------------
# Endpoints
# -------------------------------------------------------------------------


@router.get("/summary", response_model=DashboardSummaryResponse)
async def get_dashboard_summary(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    goal_hours: float | None = GoalQuery,
):
    """Get the home dashboard summary."""
    service = get_dashboard_service(db, current_user.id)
    async with backend_call("Failed to load sleep logs."):
        return await service.get_summary(goal_hours)


@analysis_router.get("", response_model=AnalysisResponse)
async def get_analysis(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    goal_hours: float | None = GoalQuery,
):
    """Get the sleep analysis report."""
    service = get_dashboard_service(db, current_user.id)
    async with backend_call("Failed to load sleep logs."):
        return await service.get_analysis(goal_hours)
