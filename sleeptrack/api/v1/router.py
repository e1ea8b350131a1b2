"""API v1 router aggregating all endpoint routers.

Authentication:
  /api/v1/auth/login, /logout, /me

Sleep:
  /api/v1/sleep-logs (list, create, detail, delete, factors)
  /api/v1/goal (get, upsert)
  /api/v1/journal (list, add)

Calendar:
  /api/v1/calendar/events (list, create, delete), /colors

Dashboard & Analysis:
  /api/v1/dashboard/summary
  /api/v1/analysis

Settings & Export:
  /api/v1/settings
  /api/v1/export
"""

from fastapi import APIRouter

from sleeptrack.api.v1.endpoints import (
    auth,
    calendar_events,
    dashboard,
    export,
    goal,
    journal,
    settings,
    sleep_logs,
)

api_router = APIRouter()

# -------------------------------------------------------------------------
# Authentication
# -------------------------------------------------------------------------
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])

# -------------------------------------------------------------------------
# Sleep
# -------------------------------------------------------------------------
api_router.include_router(sleep_logs.router, prefix="/sleep-logs", tags=["sleep"])
api_router.include_router(goal.router, prefix="/goal", tags=["sleep"])
api_router.include_router(journal.router, prefix="/journal", tags=["sleep"])

# -------------------------------------------------------------------------
# Calendar
# -------------------------------------------------------------------------
api_router.include_router(calendar_events.router, prefix="/calendar", tags=["calendar"])

# -------------------------------------------------------------------------
# Dashboard & Analysis
# -------------------------------------------------------------------------
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(dashboard.analysis_router, prefix="/analysis", tags=["dashboard"])

# -------------------------------------------------------------------------
# Settings & Export
# -------------------------------------------------------------------------
api_router.include_router(settings.router, prefix="/settings", tags=["settings"])
api_router.include_router(export.router, prefix="/export", tags=["export"])
