"""
Dashboard analytics tests.
"""

from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient

from factories import create_material, create_category, create_assembly, create_project, create_user
from app.services.dashboard_service import DashboardService, _last_months


async def _populate(client):
    cable = await create_material(client, name="Cable", manufacturer="Supreme", unit="METER", price=1000)
    clip = await create_material(client, name="Clip", manufacturer="Supreme", unit="PCS", price=200)
    await create_material(client, name="Tape", unit="PCS", price=0)

    category = await create_category(client)
    outlet = await create_assembly(
        client,
        category["id"],
        name="Outlet",
        materials=[
            {"material_id": cable["id"], "quantity": 5},
            {"material_id": clip["id"], "quantity": 2},
        ],
    )
    await create_assembly(client, category["id"], name="Bare", price=300)

    response = await client.post("/api/templates", json={
        "name": "Apartment",
        "assemblies": [{"assembly_id": outlet["id"], "quantity": 2}],
    })
    assert response.status_code == 201, response.text
    template = response.json()

    await create_project(client, name="Open", from_template_id=template["id"], total_price=1000)
    await create_project(client, name="Done", from_template_id=template["id"], total_price=2000, status="COMPLETED")
    await create_project(client, name="Plain", total_price=3000, status="IN_PROGRESS")

    await create_user(client, email="pm@example.com", role="PROJECT_MANAGER")
    await create_user(client, email="eng@example.com", role="ENGINEER", status="INACTIVE")


def test_last_months_cross_year_boundary():
    now = datetime(2026, 2, 15, tzinfo=timezone.utc)

    assert _last_months(now, 6) == ["2025-09", "2025-10", "2025-11", "2025-12", "2026-01", "2026-02"]


@pytest.mark.asyncio
async def test_empty_database_has_zeroed_analytics(test_client: AsyncClient):
    response = await test_client.get("/api/dashboard-analytics")

    assert response.status_code == 200
    body = response.json()
    assert body["materials"]["total"] == 0
    assert body["assemblies"]["avg_complexity"] == 0
    assert body["templates"]["avg_assemblies"] == 0
    assert body["projects"]["avg_value"] == 0
    assert set(body["projects"]["status_breakdown"].values()) == {0}
    assert len(body["projects"]["monthly_growth"]) == 6
    assert body["users"] == {"total": 0, "active": 0, "by_role": {}}


@pytest.mark.asyncio
async def test_analytics_aggregate_catalog_projects_and_users(test_client: AsyncClient):
    await _populate(test_client)

    response = await test_client.get("/api/dashboard-analytics")

    assert response.status_code == 200
    body = response.json()

    materials = body["materials"]
    assert materials["total"] == 3
    assert materials["total_value"] == 1200
    assert materials["with_prices"] == 2
    assert materials["without_prices"] == 1
    assert materials["manufacturers_count"] == 1
    assert materials["unit_types_count"] == 2
    assert materials["top_expensive"] == [{"name": "Cable", "value": 1000}, {"name": "Clip", "value": 200}]
    assert materials["recent_count"] == 3

    assemblies = body["assemblies"]
    assert assemblies["total"] == 2
    # 5 x 1000 + 2 x 200
    assert assemblies["total_value"] == 5400
    assert assemblies["avg_complexity"] == 1
    assert assemblies["top_used"] == [{"name": "Outlet", "count": 1}]

    templates = body["templates"]
    assert templates["total"] == 1
    assert templates["avg_assemblies"] == 1
    # The completed project no longer counts
    assert templates["active_projects"] == 1
    assert templates["most_popular"] == [{"name": "Apartment", "count": 2}]

    projects = body["projects"]
    assert projects["total"] == 3
    assert projects["total_value"] == 6000
    assert projects["avg_value"] == 2000
    assert projects["status_breakdown"]["PLANNING"] == 1
    assert projects["status_breakdown"]["COMPLETED"] == 1
    assert projects["status_breakdown"]["IN_PROGRESS"] == 1
    assert projects["status_breakdown"]["CANCELLED"] == 0
    assert projects["monthly_growth"][-1]["count"] == 3
    assert projects["monthly_growth"][-1]["value"] == 6000
    assert {p["name"] for p in projects["recent_projects"]} == {"Open", "Done", "Plain"}

    assert body["users"] == {
        "total": 2,
        "active": 1,
        "by_role": {"PROJECT_MANAGER": 1, "ENGINEER": 1},
    }


@pytest.mark.asyncio
async def test_time_windows_follow_the_reference_time(test_client: AsyncClient, test_db_session):
    await _populate(test_client)
    later = datetime.now(timezone.utc) + timedelta(days=240)

    analytics = await DashboardService(test_db_session).get_analytics(now=later)

    assert analytics.materials.recent_count == 0
    assert sum(m.count for m in analytics.projects.monthly_growth) == 0
    assert analytics.projects.total == 3
    assert analytics.generated_at == later
