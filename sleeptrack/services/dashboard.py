"""Dashboard data service.

Loads a user's recent sleep logs and turns them into the home dashboard
summary and the analysis report.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sleeptrack.core.config import get_settings
from sleeptrack.models.sleep import SleepGoal, SleepLog
from sleeptrack.services import analysis
from sleeptrack.services.user_settings import get_settings_store

logger = logging.getLogger(__name__)


class DashboardService:
    """Service for dashboard data aggregation."""

    def __init__(self, db: AsyncSession, user_id: int):
        """Initialize dashboard service.

        Args:
            db: Database session.
            user_id: User ID.
        """
        self.db = db
        self.user_id = user_id
        self.settings = get_settings()

    async def get_recent_logs(self, limit: Optional[int] = None) -> list[SleepLog]:
        """Most recent ``limit`` logs, returned oldest first."""
        limit = limit or self.settings.dashboard_log_limit
        result = await self.db.execute(
            select(SleepLog)
            .where(SleepLog.user_id == self.user_id)
            .order_by(SleepLog.date.desc(), SleepLog.id.desc())
            .limit(limit)
        )
        logs = list(result.scalars().all())
        logs.reverse()
        return logs

    async def resolve_goal_hours(self, explicit: Optional[float] = None) -> float:
        """Goal to compare against.

        An explicit value wins, then a goal chosen in settings, then the saved
        goal, then the settings default. Saving a goal also sets it in
        settings, so the latest change from either place is the one used.
        """
        if explicit is not None:
            return explicit

        store = get_settings_store()
        chosen = store.goal_hours_if_set(self.user_id)
        if chosen is not None:
            return chosen

        result = await self.db.execute(
            select(SleepGoal.goal_hours).where(SleepGoal.user_id == self.user_id)
        )
        saved = result.scalar_one_or_none()
        if saved is not None:
            return saved

        return store.get(self.user_id).sleep_goal_hours

    async def get_summary(self, goal_hours: Optional[float] = None) -> dict:
        """Home dashboard: last night, the last seven nights and sleep debt."""
        logs = await self.get_recent_logs()
        goal = await self.resolve_goal_hours(goal_hours)
        scored = analysis.score_logs(logs)

        last_night = None
        if scored:
            latest = scored[-1]
            last_night = {
                "id": latest.id,
                "date": latest.date.isoformat(),
                "bedtime": latest.bedtime,
                "wake_time": latest.wake_time,
                "quality": latest.quality,
                "duration": latest.duration.to_dict(),
                "score": latest.score,
            }

        logger.debug(f"Dashboard summary for user {self.user_id}: {len(scored)} logs, goal {goal}h")

        return {
            "log_count": len(scored),
            "goal_hours": goal,
            "last_night": last_night,
            "sleep_score": last_night["score"] if last_night else 0,
            "average_duration_hours": round(analysis.average_duration_hours(scored), 2),
            "sleep_debt_hours": round(
                analysis.sleep_debt(scored, goal, self.settings.sleep_debt_window), 2
            ),
            "weekly_overview": analysis.weekly_overview(scored, goal),
        }

    async def get_analysis(self, goal_hours: Optional[float] = None) -> dict:
        """Factor impact, bedtime trends, sleep debt and insights."""
        logs = await self.get_recent_logs()
        goal = await self.resolve_goal_hours(goal_hours)
        report = analysis.analyze(logs, goal, self.settings.sleep_debt_window)
        return report.to_dict()


def get_dashboard_service(db: AsyncSession, user_id: int) -> DashboardService:
    """Factory function to create dashboard service."""
    return DashboardService(db, user_id)
