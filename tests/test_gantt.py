"""
Gantt geometry and chart endpoint tests.
"""

from datetime import date
from types import SimpleNamespace

import pytest
from httpx import AsyncClient

from app.services import gantt_calculator
from app.services.gantt_service import default_window
from factories import create_project, create_timeline


VIEW_START = date(2026, 1, 1)
VIEW_END = date(2026, 4, 11)  # 100 days


def test_clamp_zoom():
    assert gantt_calculator.clamp_zoom(0.01) == 0.1
    assert gantt_calculator.clamp_zoom(2.5) == 2.5
    assert gantt_calculator.clamp_zoom(12) == 5.0


def test_task_position_at_zoom_one():
    left, width = gantt_calculator.task_position(date(2026, 1, 11), date(2026, 1, 31), VIEW_START, VIEW_END)

    assert left == pytest.approx(10.0)
    assert width == pytest.approx(20.0)


def test_task_position_clamps_left_and_width():
    # Starts before the window
    left, _ = gantt_calculator.task_position(date(2025, 12, 1), date(2026, 1, 5), VIEW_START, VIEW_END)
    assert left == 0.0

    # One-day task gets the minimum width
    _, width = gantt_calculator.task_position(date(2026, 1, 2), date(2026, 1, 2), VIEW_START, VIEW_END)
    assert width == 2.0

    # Very long task is capped
    _, width = gantt_calculator.task_position(VIEW_START, date(2026, 12, 31), VIEW_START, VIEW_END, zoom=0.1)
    assert width == 95.0


def test_higher_zoom_narrows_bars():
    start, end = date(2026, 1, 11), date(2026, 1, 31)

    _, at_two = gantt_calculator.task_position(start, end, VIEW_START, VIEW_END, zoom=2)
    _, at_five = gantt_calculator.task_position(start, end, VIEW_START, VIEW_END, zoom=5)

    assert at_two == pytest.approx(10.0)
    # Adjustment bottoms out at 0.3
    assert at_five == pytest.approx(6.0)


def test_milestone_position_is_not_clamped():
    assert gantt_calculator.milestone_position(date(2026, 1, 21), VIEW_START, VIEW_END) == pytest.approx(20.0)
    assert gantt_calculator.milestone_position(date(2025, 12, 22), VIEW_START, VIEW_END) == pytest.approx(-10.0)


def test_empty_window_is_rejected():
    with pytest.raises(ValueError):
        gantt_calculator.task_position(VIEW_START, VIEW_END, VIEW_START, VIEW_START)


def test_label_steps_follow_zoom():
    assert gantt_calculator.label_step(2) == "day"
    assert gantt_calculator.label_step(1.5) == "3days"
    assert gantt_calculator.label_step(1) == "week"
    assert gantt_calculator.label_step(0.5) == "month"


def test_weekly_labels():
    labels = gantt_calculator.time_labels(date(2026, 1, 1), date(2026, 1, 15), zoom=1)

    assert [label.date for label in labels] == [date(2026, 1, 1), date(2026, 1, 8), date(2026, 1, 15)]
    assert labels[0].label == "01 Jan"


def test_monthly_labels_keep_day_within_month():
    labels = gantt_calculator.time_labels(date(2026, 1, 31), date(2026, 4, 30), zoom=0.5)

    assert [label.date for label in labels] == [
        date(2026, 1, 31),
        date(2026, 2, 28),
        date(2026, 3, 31),
        date(2026, 4, 30),
    ]
    assert labels[0].label == "31 January"
    assert labels[2].label == "31 March"


def test_daily_labels_carry_year():
    labels = gantt_calculator.time_labels(date(2026, 1, 1), date(2026, 1, 3), zoom=3)

    assert [label.label for label in labels] == ["01 Jan 26", "02 Jan 26", "03 Jan 26"]


def test_auto_fit_zoom_and_chart_width():
    assert gantt_calculator.auto_fit_zoom(date(2026, 1, 1), date(2026, 1, 11)) == pytest.approx(1.5)
    assert gantt_calculator.auto_fit_zoom(VIEW_START, date(2027, 1, 1)) == 0.1
    assert gantt_calculator.chart_width(3, 1) == 800
    assert gantt_calculator.chart_width(20, 1) == 1600


def test_default_window_pads_timeline_span():
    timelines = [
        SimpleNamespace(start_date=date(2026, 2, 1), end_date=None, tasks=[
            SimpleNamespace(planned_end=date(2026, 3, 1)),
        ]),
        SimpleNamespace(start_date=date(2026, 1, 15), end_date=date(2026, 5, 1), tasks=[]),
    ]

    assert default_window(timelines, 14) == (date(2026, 1, 1), date(2026, 3, 15))


def test_default_window_without_timelines_centres_on_today():
    today = date(2026, 6, 15)

    assert default_window([], 14, today=today) == (date(2026, 6, 1), date(2026, 6, 29))


async def _schedule(client, name, start, tasks, milestones=()):
    project = await create_project(client, name=name)
    timeline = await create_timeline(client, project["id"], start_date=start, end_date=None)
    for task in tasks:
        response = await client.post(f"/api/timeline/{timeline['id']}/tasks", json=task)
        assert response.status_code == 201, response.text
    for milestone in milestones:
        response = await client.post(f"/api/timeline/{timeline['id']}/milestones", json=milestone)
        assert response.status_code == 201, response.text
    return project


@pytest.mark.asyncio
async def test_gantt_chart_across_projects(test_client: AsyncClient):
    await _schedule(
        test_client,
        "Villa",
        "2026-01-15",
        [{"name": "Roofing", "planned_start": "2026-02-01", "duration": 10, "task_type": "CONSTRUCTION"}],
        [{"name": "Handover", "due_date": "2026-02-20"}],
    )
    await _schedule(
        test_client,
        "Apartment",
        "2026-01-20",
        [
            {"name": "Wiring", "planned_start": "2026-01-20", "duration": 5, "task_type": "ELECTRICAL", "priority": "HIGH"},
            {"name": "Permit", "planned_start": "2026-01-25", "duration": 3, "task_type": "PERMIT"},
        ],
    )

    response = await test_client.get("/api/gantt")

    assert response.status_code == 200
    chart = response.json()
    # Earliest start and latest task end padded by 14 days
    assert chart["view_start"] == "2026-01-01"
    assert chart["view_end"] == "2026-02-25"
    assert chart["project_count"] == 2
    assert [(i["project_name"], i["type"], i["name"]) for i in chart["items"]] == [
        ("Apartment", "task", "Wiring"),
        ("Apartment", "task", "Permit"),
        ("Villa", "milestone", "Handover"),
        ("Villa", "task", "Roofing"),
    ]
    assert chart["labels"][0]["date"] == "2026-01-01"
    assert chart["chart_width"] >= 800


@pytest.mark.asyncio
async def test_gantt_filters(test_client: AsyncClient):
    await _schedule(
        test_client,
        "Villa",
        "2026-01-15",
        [
            {"name": "Roofing", "planned_start": "2026-02-01", "duration": 10},
            {"name": "Wiring", "planned_start": "2026-01-20", "duration": 5, "task_type": "ELECTRICAL", "priority": "HIGH"},
        ],
        [{"name": "Handover", "due_date": "2026-02-20"}],
    )

    response = await test_client.get("/api/gantt", params={"task_type": "electrical"})
    assert {i["name"] for i in response.json()["items"]} == {"Wiring", "Handover"}

    response = await test_client.get("/api/gantt", params={"priority": "HIGH", "task_type": "all"})
    assert {i["name"] for i in response.json()["items"]} == {"Wiring", "Handover"}

    response = await test_client.get("/api/gantt", params={"search": "roof"})
    assert [i["name"] for i in response.json()["items"]] == ["Roofing"]

    response = await test_client.get("/api/gantt", params={"search": "villa"})
    assert len(response.json()["items"]) == 3

    response = await test_client.get("/api/gantt", params={"date_from": "2026-02-01"})
    assert {i["name"] for i in response.json()["items"]} == {"Roofing", "Handover"}


@pytest.mark.asyncio
async def test_gantt_explicit_window_and_zoom(test_client: AsyncClient):
    await _schedule(
        test_client,
        "Villa",
        "2026-01-01",
        [{"name": "Roofing", "planned_start": "2026-01-11", "duration": 20}],
    )

    response = await test_client.get("/api/gantt", params={
        "view_start": "2026-01-01", "view_end": "2026-04-11", "zoom": 40,
    })
    chart = response.json()

    assert chart["zoom"] == 5.0
    task = chart["items"][0]
    assert task["left"] == pytest.approx(10.0)
    assert task["width"] == pytest.approx(6.0)

    response = await test_client.get("/api/gantt", params={"view_start": "2026-04-11", "view_end": "2026-01-01"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_gantt_auto_fit(test_client: AsyncClient):
    response = await test_client.get("/api/gantt", params={
        "view_start": "2026-01-01", "view_end": "2026-01-11", "auto_fit": True,
    })

    assert response.json()["zoom"] == pytest.approx(1.5)
    assert response.json()["items"] == []


def test_bars_inside_the_window_stay_inside():
    for zoom in (1, 2.5, 5):
        for offset, length in ((0, 1), (10, 30), (50, 49), (0, 100), (99, 1)):
            start = date.fromordinal(VIEW_START.toordinal() + offset)
            end = date.fromordinal(start.toordinal() + length)
            left, width = gantt_calculator.task_position(start, end, VIEW_START, VIEW_END, zoom)
            assert 2 <= width <= 95
            # The 2% minimum can push a one-day bar on the last day past the edge
            assert 0 <= left <= 100 - width or length < 2
