"""
List export and bulk delete tests.
"""

import csv
import io
import uuid

import pytest
from httpx import AsyncClient
from openpyxl import load_workbook

from factories import create_material, create_category, create_assembly, create_client, create_project


@pytest.mark.asyncio
async def test_export_materials_csv(test_client: AsyncClient):
    await create_material(test_client, name="Cable", price=100)
    await create_material(test_client, name="Conduit", price=50, manufacturer="Clipsal")

    response = await test_client.get("/api/materials/export", params={"format": "csv"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "attachment; filename=materials_" in response.headers["content-disposition"]
    rows = list(csv.reader(io.StringIO(response.content.decode("utf-8-sig"))))
    assert rows[0][:4] == ["Name", "Part Number", "Manufacturer", "Unit"]
    assert [row[0] for row in rows[1:]] == ["Cable", "Conduit"]
    assert rows[2][2] == "Clipsal"


@pytest.mark.asyncio
async def test_export_ignores_pagination_but_keeps_filters(test_client: AsyncClient):
    for index in range(4):
        await create_material(test_client, name=f"Cable {index}")
    await create_material(test_client, name="Breaker")

    response = await test_client.get(
        "/api/materials/export",
        params={"format": "csv", "search": "cable", "page_size": 1, "page": 3},
    )

    rows = list(csv.reader(io.StringIO(response.content.decode("utf-8-sig"))))
    assert len(rows) == 5


@pytest.mark.asyncio
async def test_export_clients_xlsx_matches_list(test_client: AsyncClient):
    client = await create_client(test_client, company_name="PT Maju")
    await create_client(test_client, contact_email="b@example.com", contact_person="Rina")
    await create_project(test_client, client_id=client["id"], total_price=500)

    listed = (await test_client.get("/api/clients")).json()
    response = await test_client.get("/api/clients/export", params={"format": "xlsx"})

    assert response.status_code == 200
    workbook = load_workbook(io.BytesIO(response.content))
    sheet = workbook.active
    assert sheet.title == "Clients"
    assert sheet.freeze_panes == "A2"
    assert sheet.max_row == listed["total"] + 1
    headers = [cell.value for cell in sheet[1]]
    assert headers[0] == "Contact Person"
    projects_column = headers.index("Projects") + 1
    values = {sheet.cell(row=r, column=1).value: sheet.cell(row=r, column=projects_column).value for r in range(2, sheet.max_row + 1)}
    assert values["Ahmad Susanto"] == 1
    assert values["Rina"] == 0


@pytest.mark.asyncio
async def test_export_assemblies_and_users(test_client: AsyncClient):
    category = await create_category(test_client)
    await create_assembly(test_client, category["id"], module="ASSEMBLY")

    response = await test_client.get("/api/assemblies/export")
    rows = list(csv.reader(io.StringIO(response.content.decode("utf-8-sig"))))
    assert rows[1][:3] == ["Power Outlet", "Electrical", "ASSEMBLY"]

    response = await test_client.get("/api/users/export", params={"format": "xlsx"})
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_export_unknown_format_is_400(test_client: AsyncClient):
    response = await test_client.get("/api/materials/export", params={"format": "pdf"})

    assert response.status_code == 400
    assert response.json()["error"] == "Unsupported export format: pdf"


@pytest.mark.asyncio
async def test_bulk_delete_splits_outcomes(test_client: AsyncClient):
    category = await create_category(test_client)
    used = await create_material(test_client, name="Used")
    free = await create_material(test_client, name="Free")
    await create_assembly(test_client, category["id"], materials=[{"material_id": used["id"], "quantity": 1}])
    missing = str(uuid.uuid4())

    response = await test_client.post(
        "/api/materials/bulk-delete",
        json={"ids": [free["id"], used["id"], missing]},
    )

    assert response.status_code == 200
    result = response.json()
    assert result["deleted"] == [free["id"]]
    assert [f["id"] for f in result["constraint_errors"]] == [used["id"]]
    assert result["constraint_errors"][0]["message"] == "Material is used by assemblies"
    assert result["other_errors"] == [{"id": missing, "message": "Not found"}]

    remaining = (await test_client.get("/api/materials")).json()
    assert [m["name"] for m in remaining["items"]] == ["Used"]


@pytest.mark.asyncio
async def test_bulk_delete_needs_ids(test_client: AsyncClient):
    response = await test_client.post("/api/clients/bulk-delete", json={"ids": []})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_bulk_delete_clients_and_categories(test_client: AsyncClient):
    busy = await create_client(test_client)
    idle = await create_client(test_client, contact_email="idle@example.com")
    await create_project(test_client, client_id=busy["id"])

    result = (await test_client.post("/api/clients/bulk-delete", json={"ids": [busy["id"], idle["id"]]})).json()
    assert result["deleted"] == [idle["id"]]
    assert len(result["constraint_errors"]) == 1

    category = await create_category(test_client, name="Empty")
    result = (await test_client.post("/api/assembly-categories/bulk-delete", json={"ids": [category["id"]]})).json()
    assert result["deleted"] == [category["id"]]
