import pytest
from httpx import AsyncClient
from unittest.mock import AsyncMock
from backend.habit_service import tasks

pytestmark = pytest.mark.asyncio


class TestIntegration:
    async def test_water_habit_flow(self, habit_client: AsyncClient):
        # 1. habit registration
        response = await habit_client.post("/habits", json={"name": "Water", "daily_goal": 8})
        assert response.status_code == 201
        habit_id = response.json()["data"]["id"]
        assert habit_id == 1

        # 2. progress, second report is capped at the goal
        response = await habit_client.put(f"/habits/{habit_id}", json={"quantity": 5})
        assert response.json()["data"]["progress"] == 5
        response = await habit_client.put(f"/habits/{habit_id}", json={"quantity": 5})
        assert response.status_code == 200
        assert response.json()["data"]["progress"] == 8

        # 3. weekly report on the same day
        response = await habit_client.get("/habits/report")
        assert response.status_code == 200
        body = response.json()
        today = body["report_date"]
        assert len(body["data"]) == 1
        assert body["data"][0]["weekly_data"] == {today: {"progress": 8, "completed": True}}
        assert body["data"][0]["weekly_completion"] == 1

        # 4. the habit now shows up as completed
        response = await habit_client.get("/habits", params={"completed": "true"})
        assert response.json()["total"] == 1

    async def test_ids_never_reused(self, habit_client: AsyncClient):
        ids = []
        for name in ["Read", "", "Walk", "Run"]:
            response = await habit_client.post("/habits", json={"name": name, "daily_goal": 1})
            if response.status_code == 201:
                ids.append(response.json()["data"]["id"])
        assert ids == [1, 2, 3]

    async def test_expired_progress_leaves_reports(self, habit_client: AsyncClient, store, clock):
        await habit_client.post("/habits", json={"name": "Water", "daily_goal": 8})
        await habit_client.put("/habits/1", json={"quantity": 8})

        clock.advance(days=31)
        tasks.run_retention_purge(store)

        response = await habit_client.get("/habits", params={"completed": "true"})
        assert response.json()["total"] == 0
        response = await habit_client.get("/habits/1/progress", params={"date": "2024-07-10"})
        assert response.json()["data"]["progress"] == 0

    async def test_reminder_after_registration(self, habit_client: AsyncClient, store, manager):
        client_socket = AsyncMock()
        await manager.connect(client_socket)

        assert await tasks.send_daily_reminder(store, manager) == 0
        await habit_client.post("/habits", json={"name": "Water", "daily_goal": 8})
        assert await tasks.send_daily_reminder(store, manager) == 1
        client_socket.send_json.assert_awaited_once()
