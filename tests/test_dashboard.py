"""Tests for dashboard and analysis endpoints."""

from datetime import date

from httpx import AsyncClient

from sleeptrack.models.sleep import SleepGoal, SleepLog
from sleeptrack.models.user import User


class TestDashboardSummary:
    """Tests for dashboard summary endpoint."""

    async def test_get_summary_unauthenticated(self, client: AsyncClient):
        response = await client.get("/api/v1/dashboard/summary")
        assert response.status_code == 401

    async def test_get_summary_empty(self, auth_client: AsyncClient, test_user: User):
        """Test getting summary with no data."""
        response = await auth_client.get("/api/v1/dashboard/summary")

        assert response.status_code == 200
        data = response.json()
        assert data["log_count"] == 0
        assert data["last_night"] is None
        assert data["sleep_score"] == 0
        assert data["sleep_debt_hours"] == 0
        assert data["weekly_overview"] == []
        assert data["goal_hours"] == 8.0

    async def test_get_summary_with_logs(
        self, auth_client: AsyncClient, sample_logs: list[SleepLog]
    ):
        response = await auth_client.get("/api/v1/dashboard/summary")

        assert response.status_code == 200
        data = response.json()
        assert data["log_count"] == 7
        assert data["last_night"]["date"] == date.today().isoformat()
        assert data["last_night"]["duration"] == {"hours": 8, "minutes": 0, "total_minutes": 480}
        assert data["sleep_score"] == 92
        assert data["sleep_debt_hours"] == 5
        assert data["average_duration_hours"] == 7.43

        overview = data["weekly_overview"]
        assert len(overview) == 7
        assert [d["duration_hours"] for d in overview] == [6, 8, 9, 7, 8, 6, 8]
        assert overview[-1]["label"] == date.today().strftime("%a")

    async def test_saved_goal_used_when_settings_untouched(
        self,
        auth_client: AsyncClient,
        sample_logs: list[SleepLog],
        saved_goal: SleepGoal,
    ):
        data = (await auth_client.get("/api/v1/dashboard/summary")).json()

        assert data["goal_hours"] == 7.5
        assert data["sleep_debt_hours"] == 3.5

    async def test_settings_change_overrides_saved_goal(
        self,
        auth_client: AsyncClient,
        sample_logs: list[SleepLog],
        saved_goal: SleepGoal,
    ):
        await auth_client.put("/api/v1/settings", json={"sleep_goal_hours": 6})

        summary = (await auth_client.get("/api/v1/dashboard/summary")).json()
        assert summary["goal_hours"] == 6
        assert summary["sleep_debt_hours"] == 0
        assert all(day["goal_hours"] == 6 for day in summary["weekly_overview"])

        analysis = (await auth_client.get("/api/v1/analysis")).json()
        assert analysis["goal_hours"] == 6

    async def test_latest_goal_change_wins(
        self, auth_client: AsyncClient, sample_logs: list[SleepLog]
    ):
        await auth_client.put("/api/v1/settings", json={"sleep_goal_hours": 6})
        await auth_client.put("/api/v1/goal", json={"goal_hours": 9})

        summary = (await auth_client.get("/api/v1/dashboard/summary")).json()
        assert summary["goal_hours"] == 9

        settings = (await auth_client.get("/api/v1/settings")).json()
        assert settings["sleep_goal_hours"] == 9

        await auth_client.put("/api/v1/settings", json={"sleep_goal_hours": 7})
        summary = (await auth_client.get("/api/v1/dashboard/summary")).json()
        assert summary["goal_hours"] == 7

    async def test_explicit_goal_wins(
        self,
        auth_client: AsyncClient,
        sample_logs: list[SleepLog],
        saved_goal: SleepGoal,
    ):
        response = await auth_client.get(
            "/api/v1/dashboard/summary", params={"goal_hours": 9}
        )

        data = response.json()
        assert data["goal_hours"] == 9
        # 3 + 1 + 0 + 2 + 1 + 3 + 1
        assert data["sleep_debt_hours"] == 11

    async def test_settings_goal_is_fallback(
        self, auth_client: AsyncClient, sample_logs: list[SleepLog]
    ):
        await auth_client.put("/api/v1/settings", json={"sleep_goal_hours": 6})

        data = (await auth_client.get("/api/v1/dashboard/summary")).json()
        assert data["goal_hours"] == 6
        assert data["sleep_debt_hours"] == 0

    async def test_only_recent_logs(self, auth_client: AsyncClient, db_session, test_user: User):
        """Older nights beyond the dashboard window are left out."""
        for day in range(1, 32):
            db_session.add(
                SleepLog(
                    user_id=test_user.id,
                    date=date(2024, 1, day),
                    bedtime="22:00",
                    wake_time="04:00" if day == 1 else "06:00",
                    quality=3,
                )
            )
        await db_session.commit()

        data = (await auth_client.get("/api/v1/dashboard/summary")).json()
        assert data["log_count"] == 30
        assert data["last_night"]["date"] == "2024-01-31"
        assert data["average_duration_hours"] == 8


class TestAnalysis:
    async def test_analysis_empty(self, auth_client: AsyncClient):
        response = await auth_client.get("/api/v1/analysis")

        assert response.status_code == 200
        data = response.json()
        assert data["log_count"] == 0
        assert data["best_factor"] is None
        assert data["worst_factor"] is None
        assert data["trends"] == []

    async def test_analysis_with_logs(
        self, auth_client: AsyncClient, sample_logs: list[SleepLog]
    ):
        response = await auth_client.get("/api/v1/analysis")

        assert response.status_code == 200
        data = response.json()

        impacts = {f["name"]: f for f in data["factor_impact"]}
        assert impacts["Caffeine"] == {"name": "Caffeine", "avg_score": 65, "count": 2}
        assert impacts["Exercise"]["avg_score"] == 96
        assert impacts["Read book"]["avg_score"] == 96
        assert impacts["Stress"]["avg_score"] == 77

        # Exercise and Read book tie, the first seen wins
        assert data["best_factor"]["name"] == "Exercise"
        assert data["worst_factor"]["name"] == "Screen time"

        trends = data["trends"]
        assert trends[0]["bedtime_minutes"] == 24 * 60
        assert trends[1]["bedtime_minutes"] == 22 * 60
        assert trends[5]["bedtime_minutes"] == 25 * 60

        assert data["sleep_debt_hours"] == 5
        assert len(data["insights"]) == 3

    async def test_analysis_unauthenticated(self, client: AsyncClient):
        response = await client.get("/api/v1/analysis")
        assert response.status_code == 401
