"""
Unit tests for the work schedule API.
"""

from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from main import app
from stress_police.api.deps import get_clock
from stress_police.api.work_schedule import EMPTY_SCHEDULE_MESSAGE
from stress_police.utils.clock import FixedClock

NOW = datetime(2025, 3, 10, 9, 0)


@pytest.fixture
def frozen_clock():
    clock = FixedClock(NOW)
    app.dependency_overrides[get_clock] = lambda: clock
    yield clock
    app.dependency_overrides.clear()


def _client() -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_preview_high_priority(frozen_clock):
    async with _client() as client:
        response = await client.post(
            "/api/work-schedule/preview",
            json={
                "title": "Write report",
                "deadline": "2025-03-13T09:00:00",
                "priority": "high",
                "workingHours": {"start": 9, "end": 19},
            },
        )

    assert response.status_code == 200, response.text
    data = response.json()
    assert data["message"] == ""
    assert len(data["blocks"]) == 6
    first = data["blocks"][0]
    assert first["startHour"] == pytest.approx(9 + 10 / 60)
    assert first["endHour"] == pytest.approx(9 + 55 / 60)
    assert first["source"] == "defaultPlan"
    assert first["label"] is None
    assert first["completed"] is False
    assert "id" in first


@pytest.mark.asyncio
async def test_preview_is_repeatable_for_fixed_clock(frozen_clock):
    body = {"title": "Essay", "deadline": "2025-03-12T17:00:00", "priority": "medium"}
    async with _client() as client:
        first = await client.post("/api/work-schedule/preview", json=body)
        second = await client.post("/api/work-schedule/preview", json=body)

    assert first.json() == second.json()


@pytest.mark.asyncio
async def test_preview_empty_schedule_has_message(frozen_clock):
    async with _client() as client:
        response = await client.post(
            "/api/work-schedule/preview",
            json={"title": "Late", "deadline": "2025-03-10T09:05:00", "priority": "low"},
        )

    assert response.status_code == 200
    assert response.json() == {"blocks": [], "message": EMPTY_SCHEDULE_MESSAGE}


@pytest.mark.asyncio
async def test_preview_degenerate_hours_is_422(frozen_clock):
    async with _client() as client:
        response = await client.post(
            "/api/work-schedule/preview",
            json={
                "title": "Task",
                "deadline": "2025-03-13T09:00:00",
                "priority": "low",
                "workingHours": {"start": 19, "end": 9},
            },
        )

    assert response.status_code == 422
    assert "Invalid working hours" in response.json()["detail"]


@pytest.mark.asyncio
async def test_progress(frozen_clock):
    frozen_clock.instant = datetime(2025, 3, 10, 9, 45)
    blocks = [
        {
            "startHour": 9.0,
            "endHour": 9.5,
            "startTime": "2025-03-10T09:00:00",
            "endTime": "2025-03-10T09:30:00",
            "completed": True,
        },
        {
            "startHour": 10.0,
            "endHour": 10.5,
            "startTime": "2025-03-10T10:00:00",
            "endTime": "2025-03-10T10:30:00",
        },
    ]
    async with _client() as client:
        response = await client.post("/api/work-schedule/progress", json={"blocks": blocks})

    assert response.status_code == 200, response.text
    assert response.json() == {"progress": 50.0, "completed": 50.0}


@pytest.mark.asyncio
async def test_progress_completed_task(frozen_clock):
    async with _client() as client:
        response = await client.post(
            "/api/work-schedule/progress",
            json={"blocks": [], "isCompleted": True},
        )

    assert response.json()["progress"] == 100.0


@pytest.mark.asyncio
async def test_ai_blocks_accepted():
    async with _client() as client:
        response = await client.post(
            "/api/work-schedule/ai-blocks",
            json={"blocks": [{"startHour": 10.5, "endHour": 11.25, "label": "Research"}]},
        )

    assert response.status_code == 200
    block = response.json()["blocks"][0]
    assert block["source"] == "ai"
    assert block["label"] == "Research"


@pytest.mark.asyncio
async def test_ai_blocks_invalid_is_422():
    async with _client() as client:
        response = await client.post(
            "/api/work-schedule/ai-blocks",
            json={"blocks": [{"startHour": 12, "endHour": 11}]},
        )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_preview_uses_deadline_offset_as_calendar(frozen_clock):
    frozen_clock.instant = datetime(2025, 3, 10, 0, 0, tzinfo=timezone.utc)
    async with _client() as client:
        response = await client.post(
            "/api/work-schedule/preview",
            json={
                "title": "Report",
                "deadline": "2025-03-10T19:00:00+09:00",
                "priority": "low",
                "workingHours": {"start": 9, "end": 19},
            },
        )

    assert response.status_code == 200, response.text
    blocks = response.json()["blocks"]
    assert len(blocks) == 3
    assert blocks[0]["startHour"] == pytest.approx(9 + 10 / 60)
    assert blocks[0]["startTime"].endswith("+09:00")


@pytest.mark.asyncio
async def test_preview_with_named_timezone(frozen_clock):
    frozen_clock.instant = datetime(2025, 3, 10, 0, 0, tzinfo=timezone.utc)
    async with _client() as client:
        response = await client.post(
            "/api/work-schedule/preview",
            json={
                "title": "Report",
                "deadline": "2025-03-10T10:00:00Z",
                "priority": "low",
                "timezone": "Asia/Tokyo",
            },
        )

    assert response.status_code == 200, response.text
    hours = [(b["startHour"], b["endHour"]) for b in response.json()["blocks"]]
    assert hours[0] == pytest.approx((9 + 10 / 60, 9 + 40 / 60))
    assert len(hours) == 3


@pytest.mark.asyncio
async def test_preview_unknown_timezone_is_422(frozen_clock):
    async with _client() as client:
        response = await client.post(
            "/api/work-schedule/preview",
            json={
                "title": "Report",
                "deadline": "2025-03-13T09:00:00",
                "timezone": "Mars/Olympus",
            },
        )

    assert response.status_code == 422
    assert "Unknown timezone" in response.json()["detail"]


@pytest.mark.asyncio
async def test_plan_default_task(frozen_clock):
    async with _client() as client:
        response = await client.post(
            "/api/work-schedule/plan",
            json={
                "task": {
                    "title": "Essay",
                    "deadline": "2025-03-11T09:00:00",
                    "priority": "medium",
                    "planMode": "defaultPlan",
                },
                "workingHours": {"start": 9, "end": 19},
            },
        )

    assert response.status_code == 200, response.text
    data = response.json()
    assert len(data["task"]["workSchedule"]) == 4
    assert data["task"]["title"] == "Essay"
    assert data["progress"] == 0.0
    assert data["message"] == ""


@pytest.mark.asyncio
async def test_plan_custom_task_keeps_its_blocks(frozen_clock):
    block = {"startHour": 13, "endHour": 14, "label": "Draft", "source": "custom"}
    async with _client() as client:
        response = await client.post(
            "/api/work-schedule/plan",
            json={
                "task": {
                    "title": "Essay",
                    "deadline": "2025-03-11T09:00:00",
                    "planMode": "customPlan",
                    "workSchedule": [block],
                },
            },
        )

    assert response.status_code == 200, response.text
    schedule = response.json()["task"]["workSchedule"]
    assert [(b["startHour"], b["label"]) for b in schedule] == [(13.0, "Draft")]


@pytest.mark.asyncio
async def test_health():
    async with _client() as client:
        response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
