"""Tests for the data export endpoint."""

from httpx import AsyncClient

from sleeptrack.models.sleep import JournalEntry, SleepGoal, SleepLog


async def test_export_empty(auth_client: AsyncClient):
    response = await auth_client.get("/api/v1/export")

    assert response.status_code == 200
    assert response.json() == {"logs": [], "goals": [], "journal": []}


async def test_export_download(
    auth_client: AsyncClient,
    sample_logs: list[SleepLog],
    saved_goal: SleepGoal,
    sample_journal: list[JournalEntry],
):
    response = await auth_client.get("/api/v1/export")

    assert response.status_code == 200
    assert response.headers["content-disposition"] == 'attachment; filename="sleep_data.json"'

    data = response.json()
    assert len(data["logs"]) == 7
    assert data["goals"][0]["goal_hours"] == 7.5
    assert {e["note"] for e in data["journal"]} == {"Woke up twice", "Slept like a rock"}

    # Raw rows only, nothing derived
    first = data["logs"][0]
    assert first["bedtime"] == "00:00"
    assert first["factors"] == ["Caffeine"]
    assert "score" not in first
    assert "duration" not in first


async def test_export_unauthenticated(client: AsyncClient):
    response = await client.get("/api/v1/export")
    assert response.status_code == 401


async def test_export_has_every_column(
    auth_client: AsyncClient,
    sample_logs: list[SleepLog],
    saved_goal: SleepGoal,
    sample_journal: list[JournalEntry],
):
    data = (await auth_client.get("/api/v1/export")).json()

    timestamps = {"created_at", "updated_at"}
    assert set(data["logs"][0]) == {
        "id", "user_id", "date", "bedtime", "wake_time", "quality", "notes", "factors",
    } | timestamps
    assert set(data["goals"][0]) == {"id", "user_id", "goal_hours"} | timestamps
    assert set(data["journal"][0]) == {"id", "user_id", "note", "date"} | timestamps
    assert data["logs"][0]["created_at"] is not None
