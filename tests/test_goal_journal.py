"""Tests for sleep goal and journal endpoints."""

from datetime import date

from httpx import AsyncClient

from sleeptrack.models.sleep import JournalEntry, SleepGoal


class TestGoal:
    async def test_no_goal_yet(self, auth_client: AsyncClient):
        response = await auth_client.get("/api/v1/goal")

        assert response.status_code == 200
        assert response.json() == {"goal_hours": None}

    async def test_upsert(self, auth_client: AsyncClient):
        response = await auth_client.put("/api/v1/goal", json={"goal_hours": 7.5})
        assert response.status_code == 200
        assert response.json()["goal_hours"] == 7.5

        response = await auth_client.put("/api/v1/goal", json={"goal_hours": 9})
        assert response.json()["goal_hours"] == 9

        response = await auth_client.get("/api/v1/goal")
        assert response.json()["goal_hours"] == 9

    async def test_existing_goal(self, auth_client: AsyncClient, saved_goal: SleepGoal):
        response = await auth_client.get("/api/v1/goal")
        assert response.json()["goal_hours"] == 7.5

    async def test_out_of_range(self, auth_client: AsyncClient):
        for hours in (0, 25):
            response = await auth_client.put("/api/v1/goal", json={"goal_hours": hours})
            assert response.status_code == 422


class TestJournal:
    async def test_add_note_dated_today(self, auth_client: AsyncClient):
        response = await auth_client.post("/api/v1/journal", json={"note": "Dreamt of the sea"})

        assert response.status_code == 201
        data = response.json()
        assert data["note"] == "Dreamt of the sea"
        assert data["date"] == date.today().isoformat()

    async def test_blank_note_rejected(self, auth_client: AsyncClient):
        response = await auth_client.post("/api/v1/journal", json={"note": "  \n "})
        assert response.status_code == 422

    async def test_list_newest_first(
        self, auth_client: AsyncClient, sample_journal: list[JournalEntry]
    ):
        response = await auth_client.get("/api/v1/journal")

        assert response.status_code == 200
        notes = [e["note"] for e in response.json()["entries"]]
        assert notes == ["Slept like a rock", "Woke up twice"]

    async def test_unauthenticated(self, client: AsyncClient):
        response = await client.get("/api/v1/journal")
        assert response.status_code == 401
