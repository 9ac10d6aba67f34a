"""
Material API tests.
"""

import uuid

import pytest
from httpx import AsyncClient

from factories import create_material, create_category, create_assembly


@pytest.mark.asyncio
async def test_create_and_get_material(test_client: AsyncClient):
    created = await create_material(test_client, manufacturer="Supreme", part_number="NYM-325")

    assert created["name"] == "Cable NYM 3x2.5"
    assert created["price"] == 12500

    response = await test_client.get(f"/api/materials/{created['id']}")
    assert response.status_code == 200
    assert response.json()["manufacturer"] == "Supreme"


@pytest.mark.asyncio
async def test_duplicate_material_name_conflicts(test_client: AsyncClient):
    await create_material(test_client)

    response = await test_client.post("/api/materials", json={"name": "Cable NYM 3x2.5", "unit": "METER"})

    assert response.status_code == 409
    assert response.json()["error"] == "Material name already exists"


@pytest.mark.asyncio
async def test_material_negative_price_is_rejected(test_client: AsyncClient):
    response = await test_client.post("/api/materials", json={"name": "Conduit", "unit": "METER", "price": -1})

    assert response.status_code == 400
    assert response.json()["error"] == "Validation error"


@pytest.mark.asyncio
async def test_update_material(test_client: AsyncClient):
    created = await create_material(test_client)

    response = await test_client.put(f"/api/materials/{created['id']}", json={"price": 13000})

    assert response.status_code == 200
    assert response.json()["price"] == 13000
    assert response.json()["unit"] == "METER"


@pytest.mark.asyncio
async def test_missing_material_is_404(test_client: AsyncClient):
    missing = uuid.uuid4()

    assert (await test_client.get(f"/api/materials/{missing}")).status_code == 404
    assert (await test_client.put(f"/api/materials/{missing}", json={"price": 1})).status_code == 404
    assert (await test_client.delete(f"/api/materials/{missing}")).status_code == 404


@pytest.mark.asyncio
async def test_list_materials_search_filter_and_sort(test_client: AsyncClient):
    await create_material(test_client, name="Cable NYM 3x2.5", manufacturer="Supreme", price=12500)
    await create_material(test_client, name="Cable NYA 1.5", manufacturer="Eterna", price=4000)
    await create_material(test_client, name="MCB 16A", unit="PCS", manufacturer="Schneider", price=65000)

    response = await test_client.get("/api/materials", params={"search": "cable", "sort_by": "price"})
    data = response.json()
    assert data["total"] == 2
    assert [m["name"] for m in data["items"]] == ["Cable NYA 1.5", "Cable NYM 3x2.5"]

    response = await test_client.get("/api/materials", params={"unit": "PCS"})
    assert [m["name"] for m in response.json()["items"]] == ["MCB 16A"]

    response = await test_client.get("/api/materials", params={"unit": "all", "sort_by": "price", "sort_dir": "desc"})
    assert response.json()["items"][0]["name"] == "MCB 16A"


@pytest.mark.asyncio
async def test_list_materials_paginates(test_client: AsyncClient):
    for index in range(5):
        await create_material(test_client, name=f"Material {index}")

    response = await test_client.get("/api/materials", params={"page": 2, "page_size": 2})
    data = response.json()

    assert data["total"] == 5
    assert data["page"] == 2
    assert [m["name"] for m in data["items"]] == ["Material 2", "Material 3"]


@pytest.mark.asyncio
async def test_sort_by_unknown_column_is_400(test_client: AsyncClient):
    response = await test_client.get("/api/materials", params={"sort_by": "purchase_url"})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_material_used_by_assembly_cannot_be_deleted(test_client: AsyncClient):
    material = await create_material(test_client)
    category = await create_category(test_client)
    await create_assembly(
        test_client,
        category["id"],
        materials=[{"material_id": material["id"], "quantity": 3}],
    )

    response = await test_client.delete(f"/api/materials/{material['id']}")

    assert response.status_code == 409
    assert response.json()["details"] == {"assembly_usages": 1}


@pytest.mark.asyncio
async def test_delete_unused_material(test_client: AsyncClient):
    material = await create_material(test_client)

    response = await test_client.delete(f"/api/materials/{material['id']}")

    assert response.status_code == 204
    assert (await test_client.get(f"/api/materials/{material['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_usage_count_only_counts_assembly_lines_of_that_material(test_client: AsyncClient):
    used = await create_material(test_client, name="Cable")
    await create_material(test_client, name="Conduit")
    await create_material(test_client, name="Junction Box")
    category = await create_category(test_client)
    await create_assembly(test_client, category["id"], materials=[{"material_id": used["id"], "quantity": 2}])

    response = await test_client.delete(f"/api/materials/{used['id']}")

    assert response.status_code == 409
    assert response.json()["details"] == {"assembly_usages": 1}
    assert response.json()["message"] == "Material is referenced by 1 assembly line(s)"


@pytest.mark.asyncio
async def test_clearing_a_required_field_is_400(test_client: AsyncClient):
    material = await create_material(test_client)

    response = await test_client.put(f"/api/materials/{material['id']}", json={"name": None})

    assert response.status_code == 400
    assert response.json()["details"] == {"field": "name"}
    assert (await test_client.get(f"/api/materials/{material['id']}")).json()["name"] == "Cable NYM 3x2.5"
