"""
Project, timeline, milestone and task API tests.
"""

import uuid

import pytest
from httpx import AsyncClient

from factories import create_client, create_user, create_project, create_timeline


async def _milestone(client, timeline_id, **overrides):
    payload = {"name": "Foundation done", "due_date": "2026-01-30"}
    payload.update(overrides)
    response = await client.post(f"/api/timeline/{timeline_id}/milestones", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def _task(client, timeline_id, **overrides):
    payload = {"name": "Excavation", "planned_start": "2026-01-05", "duration": 5}
    payload.update(overrides)
    response = await client.post(f"/api/timeline/{timeline_id}/tasks", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_create_project_with_references(test_client: AsyncClient):
    client = await create_client(test_client, company_name="PT Maju Bersama")
    user = await create_user(test_client)

    project = await create_project(
        test_client,
        client_id=client["id"],
        created_by=user["id"],
        start_date="2026-01-05",
        end_date="2026-06-30",
        priority="HIGH",
    )

    assert project["client_name"] == "PT Maju Bersama"
    assert project["creator_name"] == "Dewi Lestari"
    assert project["status"] == "PLANNING"
    assert project["priority"] == "HIGH"
    assert project["has_timeline"] is False


@pytest.mark.asyncio
async def test_project_with_unknown_client_is_404(test_client: AsyncClient):
    response = await test_client.post("/api/projects", json={"name": "Ghost", "client_id": str(uuid.uuid4())})

    assert response.status_code == 404
    assert response.json()["error"] == "Client not found"


@pytest.mark.asyncio
async def test_project_end_before_start_is_400(test_client: AsyncClient):
    response = await test_client.post("/api/projects", json={
        "name": "Backwards", "start_date": "2026-02-01", "end_date": "2026-01-01",
    })

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_list_projects_filters(test_client: AsyncClient):
    client = await create_client(test_client)
    await create_project(test_client, name="Villa", client_id=client["id"], status="IN_PROGRESS")
    await create_project(test_client, name="Office", priority="CRITICAL")

    response = await test_client.get("/api/projects", params={"client_id": client["id"]})
    assert [p["name"] for p in response.json()["items"]] == ["Villa"]

    response = await test_client.get("/api/projects", params={"priority": "critical"})
    assert [p["name"] for p in response.json()["items"]] == ["Office"]

    response = await test_client.get("/api/projects", params={"search": "vil"})
    assert response.json()["total"] == 1


@pytest.mark.asyncio
async def test_project_timeline_lifecycle(test_client: AsyncClient):
    project = await create_project(test_client)

    response = await test_client.get(f"/api/projects/{project['id']}/timeline")
    assert response.status_code == 200
    assert response.json()["exists"] is False

    timeline = await create_timeline(test_client, project["id"], holidays=["2026-02-17", "2026-01-01", "2026-02-17"])
    assert timeline["duration"] == 56
    assert timeline["project_name"] == project["name"]
    assert timeline["holidays"] == ["2026-01-01", "2026-02-17"]
    assert timeline["working_days"]["monday"] is True
    assert timeline["working_days"]["sunday"] is False

    response = await test_client.get(f"/api/projects/{project['id']}/timeline")
    assert response.json()["exists"] is True
    assert response.json()["timeline"]["id"] == timeline["id"]

    response = await test_client.get(f"/api/projects/{project['id']}")
    assert response.json()["has_timeline"] is True

    response = await test_client.put(f"/api/projects/{project['id']}/timeline", json={"end_date": "2026-01-15"})
    assert response.status_code == 200
    assert response.json()["duration"] == 10

    response = await test_client.delete(f"/api/projects/{project['id']}/timeline")
    assert response.status_code == 204
    assert (await test_client.get(f"/api/timeline/{timeline['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_second_timeline_for_project_conflicts(test_client: AsyncClient):
    project = await create_project(test_client)
    await create_timeline(test_client, project["id"])

    response = await test_client.post(f"/api/projects/{project['id']}/timeline", json={"start_date": "2026-02-01"})

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_timeline_for_missing_project_is_404(test_client: AsyncClient):
    response = await test_client.post(f"/api/projects/{uuid.uuid4()}/timeline", json={"start_date": "2026-02-01"})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_timeline_end_before_start_is_400(test_client: AsyncClient):
    project = await create_project(test_client)

    response = await test_client.post(
        f"/api/projects/{project['id']}/timeline",
        json={"start_date": "2026-02-01", "end_date": "2026-01-01"},
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_task_end_defaults_from_duration(test_client: AsyncClient):
    project = await create_project(test_client)
    timeline = await create_timeline(test_client, project["id"])

    task = await _task(test_client, timeline["id"], milestone_id="")

    assert task["milestone_id"] is None
    assert task["planned_end"] == "2026-01-10"

    response = await test_client.put(
        f"/api/timeline/{timeline['id']}/tasks/{task['id']}",
        json={"duration": 10},
    )
    assert response.json()["planned_end"] == "2026-01-15"

    response = await test_client.put(
        f"/api/timeline/{timeline['id']}/tasks/{task['id']}",
        json={"planned_end": "2026-01-04"},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_task_duration_must_be_positive(test_client: AsyncClient):
    project = await create_project(test_client)
    timeline = await create_timeline(test_client, project["id"])

    response = await test_client.post(
        f"/api/timeline/{timeline['id']}/tasks",
        json={"name": "Nothing", "planned_start": "2026-01-05", "duration": 0},
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_task_milestone_must_share_timeline(test_client: AsyncClient):
    first = await create_timeline(test_client, (await create_project(test_client, name="A"))["id"])
    second = await create_timeline(test_client, (await create_project(test_client, name="B"))["id"])
    foreign = await _milestone(test_client, second["id"])

    response = await test_client.post(
        f"/api/timeline/{first['id']}/tasks",
        json={"name": "Wrong", "planned_start": "2026-01-05", "duration": 1, "milestone_id": foreign["id"]},
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_milestone_dependencies(test_client: AsyncClient):
    project = await create_project(test_client)
    timeline = await create_timeline(test_client, project["id"])
    first = await _milestone(test_client, timeline["id"], depends_on="")
    second = await _milestone(test_client, timeline["id"], name="Roof done", depends_on=first["id"])

    assert first["depends_on"] is None
    assert second["depends_on"] == first["id"]

    response = await test_client.put(
        f"/api/timeline/{timeline['id']}/milestones/{first['id']}",
        json={"depends_on": first["id"]},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_delete_milestone_removes_its_tasks(test_client: AsyncClient):
    project = await create_project(test_client)
    timeline = await create_timeline(test_client, project["id"])
    milestone = await _milestone(test_client, timeline["id"])
    dependent = await _milestone(test_client, timeline["id"], name="Later", depends_on=milestone["id"])
    await _task(test_client, timeline["id"], milestone_id=milestone["id"])
    await _task(test_client, timeline["id"], name="Footings", milestone_id=milestone["id"])
    await _task(test_client, timeline["id"], name="Unrelated")

    response = await test_client.delete(f"/api/timeline/{timeline['id']}/milestones/{milestone['id']}")

    assert response.status_code == 200
    assert response.json() == {"id": milestone["id"], "tasks_removed": 2}

    tasks = (await test_client.get(f"/api/timeline/{timeline['id']}/tasks")).json()
    assert [t["name"] for t in tasks] == ["Unrelated"]
    milestones = (await test_client.get(f"/api/timeline/{timeline['id']}/milestones")).json()
    assert [m["id"] for m in milestones] == [dependent["id"]]
    assert milestones[0]["depends_on"] is None


@pytest.mark.asyncio
async def test_timeline_derived_progress(test_client: AsyncClient):
    project = await create_project(test_client)
    timeline = await create_timeline(test_client, project["id"])
    await _task(test_client, timeline["id"], progress=100)
    await _task(test_client, timeline["id"], name="Walls", progress=50)

    response = await test_client.get(f"/api/timeline/{timeline['id']}")

    assert response.json()["derived_progress"] == 75
    assert len(response.json()["tasks"]) == 2


@pytest.mark.asyncio
async def test_delete_project_removes_timeline(test_client: AsyncClient):
    project = await create_project(test_client)
    timeline = await create_timeline(test_client, project["id"])
    await _milestone(test_client, timeline["id"])
    await _task(test_client, timeline["id"])

    response = await test_client.delete(f"/api/projects/{project['id']}")

    assert response.status_code == 204
    assert (await test_client.get(f"/api/timeline/{timeline['id']}")).status_code == 404
