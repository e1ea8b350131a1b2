"""Service layer for SleepTrack.

Services contain the sleep calculations and data aggregation.
"""

from sleeptrack.services.dashboard import DashboardService, get_dashboard_service
from sleeptrack.services.export import export_user_data
from sleeptrack.services.sleep_metrics import calculate_duration, calculate_sleep_score

__all__ = [
    "DashboardService",
    "get_dashboard_service",
    "export_user_data",
    "calculate_duration",
    "calculate_sleep_score",
]
