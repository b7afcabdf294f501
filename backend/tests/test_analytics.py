"""Tests for analytics API: weekly/monthly reports, heatmap feed, calendar grid (clock pinned to 2024-03-15)."""

import pytest
from httpx import AsyncClient


async def _save(client: AsyncClient, day: str, wake: str, minutes: list[int] | None = None):
    sessions = [{"topic": f"Topic {i}", "duration": m} for i, m in enumerate(minutes or [])]
    resp = await client.post("/api/activities", json={"date": day, "wake_time": wake, "study_sessions": sessions})
    assert resp.status_code == 201


@pytest.mark.asyncio
async def test_weekly_report_empty(client: AsyncClient):
    resp = await client.get("/api/analytics/weekly")
    assert resp.status_code == 200
    data = resp.json()
    assert data["period"] == "week"
    assert data["current"]["avg_wake_time"] is None
    assert data["current"]["total_days"] == 0
    assert data["current"]["total_study_hours"] == 0
    assert data["comparison"] == {"wake_time": None, "study_hours": None}
    assert data["current"]["start_date"].startswith("2024-03-10T00:00:00")
    assert data["current"]["end_date"].startswith("2024-03-16T23:59:59.999")
    assert data["previous"]["start_date"].startswith("2024-03-03T00:00:00")


@pytest.mark.asyncio
async def test_weekly_report_with_comparison(client: AsyncClient):
    # Current week (Mar 10-16)
    await _save(client, "2024-03-11", "06:00", [90, 30])
    await _save(client, "2024-03-12", "06:00", [60])
    # Previous week (Mar 3-9)
    await _save(client, "2024-03-04", "07:00", [60])
    await _save(client, "2024-03-05", "07:00", [])
    # Outside both
    await _save(client, "2024-02-20", "04:00", [600])

    resp = await client.get("/api/analytics/weekly")
    data = resp.json()
    cur, prev = data["current"], data["previous"]
    assert cur["avg_wake_time"] == "06:00"
    assert cur["total_days"] == 2
    assert cur["total_study_hours"] == 3.0
    assert cur["avg_study_hours_per_day"] == 1.5
    assert prev["avg_wake_time"] == "07:00"
    assert prev["total_study_hours"] == 1.0
    assert data["comparison"]["wake_time"] == {"diff_minutes": 60, "improved": True}
    assert data["comparison"]["study_hours"] == {"diff_hours": 2.0, "improved": True}


@pytest.mark.asyncio
async def test_weekly_zero_baseline_suppresses_study_comparison(client: AsyncClient):
    await _save(client, "2024-03-11", "06:00", [120])
    await _save(client, "2024-03-04", "06:30", [])
    data = (await client.get("/api/analytics/weekly")).json()
    assert data["comparison"]["study_hours"] is None
    assert data["comparison"]["wake_time"]["diff_minutes"] == 30


@pytest.mark.asyncio
async def test_weekly_offset_shifts_both_periods(client: AsyncClient):
    await _save(client, "2024-03-04", "06:00", [60])
    data = (await client.get("/api/analytics/weekly?offset=1")).json()
    assert data["current"]["start_date"].startswith("2024-03-03")
    assert data["previous"]["start_date"].startswith("2024-02-25")
    assert data["current"]["total_days"] == 1


@pytest.mark.asyncio
async def test_monthly_report(client: AsyncClient):
    await _save(client, "2024-03-01", "05:00", [60])
    await _save(client, "2024-03-15", "06:00", [30])
    await _save(client, "2024-02-29", "07:30", [180])
    data = (await client.get("/api/analytics/monthly")).json()
    assert data["period"] == "month"
    assert data["current"]["start_date"].startswith("2024-03-01T00:00:00")
    assert data["current"]["end_date"].startswith("2024-03-31T23:59:59.999")
    assert data["previous"]["end_date"].startswith("2024-02-29T23:59:59.999")
    assert data["current"]["avg_wake_time"] == "05:30"
    assert data["current"]["total_study_hours"] == 1.5
    assert data["previous"]["total_study_hours"] == 3.0
    assert data["comparison"]["wake_time"] == {"diff_minutes": 120, "improved": True}
    assert data["comparison"]["study_hours"] == {"diff_hours": -1.5, "improved": False}


@pytest.mark.asyncio
async def test_negative_offset_rejected(client: AsyncClient):
    resp = await client.get("/api/analytics/monthly?offset=-1")
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_heatmap_feed(client: AsyncClient):
    await _save(client, "2024-03-15", "04:30", [45])
    await _save(client, "2024-01-10", "08:00", [])
    await _save(client, "2023-03-16", "06:00", [10])  # one day before the window
    resp = await client.get("/api/analytics/heatmap")
    assert resp.status_code == 200
    data = resp.json()
    assert data == [
        {"date": "2024-01-10", "wake_time": "08:00", "wake_category": "late", "study_minutes": 0},
        {"date": "2024-03-15", "wake_time": "04:30", "wake_category": "early", "study_minutes": 45},
    ]


@pytest.mark.asyncio
async def test_calendar_grid(client: AsyncClient):
    await _save(client, "2024-03-12", "05:30", [20])
    resp = await client.get("/api/analytics/calendar")
    assert resp.status_code == 200
    data = resp.json()
    assert data["from_date"] == "2023-03-17"
    assert data["to_date"] == "2024-03-15"
    months = data["months"]
    assert months[0]["month_key"] == "2023-03"
    assert months[-1]["display_name"] == "Mar"
    assert all(len(week) == 7 for m in months for week in m["weeks"])
    cells = [c for m in months for week in m["weeks"] for c in week if c is not None]
    assert len(cells) == 365
    logged = [c for c in cells if c["activity"] is not None]
    assert len(logged) == 1
    assert logged[0]["date"] == "2024-03-12"
    assert logged[0]["day_of_week"] == 2
    assert logged[0]["activity"]["wake_category"] == "good"
