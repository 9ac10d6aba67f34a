"""
Assembly group API tests: CRUD, item quantity and selection validation.
"""

import uuid

import pytest
from httpx import AsyncClient

from factories import create_material, create_category, create_assembly


async def _catalog(client):
    """One category with three priced assemblies."""
    category = await create_category(client)
    cable = await create_material(client, name="Cable", price=1000)
    outlet = await create_assembly(
        client,
        category["id"],
        name="Outlet",
        price=99999,
        materials=[{"material_id": cable["id"], "quantity": 5}],
    )
    switch = await create_assembly(client, category["id"], name="Switch", price=3000)
    dimmer = await create_assembly(client, category["id"], name="Dimmer", price=8000)
    return category, outlet, switch, dimmer


async def _create_group(client, category_id, group_type, items, name="Wiring"):
    response = await client.post("/api/assembly-groups", json={
        "name": name,
        "group_type": group_type,
        "category_id": category_id,
        "items": items,
    })
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_create_group_with_items(test_client: AsyncClient):
    category, outlet, switch, _ = await _catalog(test_client)

    group = await _create_group(test_client, category["id"], "CHOOSE_ONE", [
        {"assembly_id": outlet["id"], "quantity": 2},
        {"assembly_id": switch["id"], "is_default": True},
    ])

    assert group["category_name"] == "Electrical"
    assert [item["assembly"]["name"] for item in group["items"]] == ["Outlet", "Switch"]
    assert [item["sort_order"] for item in group["items"]] == [0, 1]
    assert group["items"][0]["quantity"] == 2
    # Unit cost comes from materials when the assembly has any
    assert group["items"][0]["assembly"]["unit_cost"] == 5000
    assert group["items"][1]["assembly"]["unit_cost"] == 3000
    assert group["default_selection"] == [switch["id"]]


@pytest.mark.asyncio
async def test_group_rejects_invalid_item_sets(test_client: AsyncClient):
    category, outlet, switch, _ = await _catalog(test_client)
    other_category = await create_category(test_client, name="Plumbing")
    tap = await create_assembly(test_client, other_category["id"], name="Tap")

    cases = [
        ("OPTIONAL", [{"assembly_id": outlet["id"]}, {"assembly_id": outlet["id"]}]),
        ("OPTIONAL", [{"assembly_id": tap["id"]}]),
        ("OPTIONAL", [{"assembly_id": str(uuid.uuid4())}]),
        ("CHOOSE_ONE", [
            {"assembly_id": outlet["id"], "is_default": True},
            {"assembly_id": switch["id"], "is_default": True},
        ]),
        ("CONFLICT", [{"assembly_id": outlet["id"], "conflicts_with": [tap["id"]]}]),
    ]
    for group_type, items in cases:
        response = await test_client.post("/api/assembly-groups", json={
            "name": "Broken",
            "group_type": group_type,
            "category_id": category["id"],
            "items": items,
        })
        assert response.status_code == 400, (group_type, items)


@pytest.mark.asyncio
async def test_group_in_missing_category_is_404(test_client: AsyncClient):
    response = await test_client.post("/api/assembly-groups", json={
        "name": "Nowhere",
        "group_type": "OPTIONAL",
        "category_id": str(uuid.uuid4()),
    })

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_groups_by_category(test_client: AsyncClient):
    category, outlet, _, _ = await _catalog(test_client)
    other = await create_category(test_client, name="Plumbing")
    await _create_group(test_client, category["id"], "OPTIONAL", [{"assembly_id": outlet["id"]}], name="B")
    await _create_group(test_client, category["id"], "OPTIONAL", [], name="A")
    await _create_group(test_client, other["id"], "OPTIONAL", [], name="C")

    response = await test_client.get("/api/assembly-groups", params={"category_id": category["id"]})
    data = response.json()

    assert data["total"] == 2
    assert [g["name"] for g in data["items"]] == ["A", "B"]


@pytest.mark.asyncio
async def test_update_group_replaces_items(test_client: AsyncClient):
    category, outlet, switch, dimmer = await _catalog(test_client)
    group = await _create_group(test_client, category["id"], "OPTIONAL", [
        {"assembly_id": outlet["id"]},
        {"assembly_id": switch["id"]},
    ])

    response = await test_client.put(f"/api/assembly-groups/{group['id']}", json={
        "name": "Lighting",
        "items": [{"assembly_id": dimmer["id"], "quantity": 3}],
    })

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Lighting"
    assert [item["assembly_id"] for item in data["items"]] == [dimmer["id"]]
    assert data["items"][0]["quantity"] == 3


@pytest.mark.asyncio
async def test_delete_group_reports_removed_items(test_client: AsyncClient):
    category, outlet, switch, _ = await _catalog(test_client)
    group = await _create_group(test_client, category["id"], "OPTIONAL", [
        {"assembly_id": outlet["id"]},
        {"assembly_id": switch["id"]},
    ])

    response = await test_client.delete(f"/api/assembly-groups/{group['id']}")

    assert response.status_code == 200
    assert response.json() == {"id": group["id"], "items_removed": 2}
    assert (await test_client.get(f"/api/assembly-groups/{group['id']}")).status_code == 404
    # The assemblies are no longer in use
    assert (await test_client.delete(f"/api/assemblies/{outlet['id']}")).status_code == 204


@pytest.mark.asyncio
async def test_assembly_in_group_cannot_be_deleted(test_client: AsyncClient):
    category, outlet, _, _ = await _catalog(test_client)
    await _create_group(test_client, category["id"], "OPTIONAL", [{"assembly_id": outlet["id"]}])

    response = await test_client.delete(f"/api/assemblies/{outlet['id']}")

    assert response.status_code == 409
    assert response.json()["details"] == {"group_usages": 1}


@pytest.mark.asyncio
async def test_set_item_quantity(test_client: AsyncClient):
    category, outlet, switch, _ = await _catalog(test_client)
    group = await _create_group(test_client, category["id"], "OPTIONAL", [{"assembly_id": outlet["id"]}])

    response = await test_client.patch(
        f"/api/assembly-groups/{group['id']}/items/{outlet['id']}",
        json={"quantity": 4},
    )
    assert response.status_code == 200
    assert response.json()["items"][0]["quantity"] == 4

    response = await test_client.patch(
        f"/api/assembly-groups/{group['id']}/items/{outlet['id']}",
        json={"quantity": 0},
    )
    assert response.status_code == 400

    response = await test_client.patch(
        f"/api/assembly-groups/{group['id']}/items/{switch['id']}",
        json={"quantity": 2},
    )
    assert response.status_code == 404

    response = await test_client.patch(
        f"/api/assembly-groups/{uuid.uuid4()}/items/{outlet['id']}",
        json={"quantity": 2},
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_validate_selection_prices_valid_choice(test_client: AsyncClient):
    category, outlet, switch, dimmer = await _catalog(test_client)
    required = await _create_group(test_client, category["id"], "REQUIRED", [
        {"assembly_id": outlet["id"], "quantity": 2},
    ], name="Base")
    choose = await _create_group(test_client, category["id"], "CHOOSE_ONE", [
        {"assembly_id": switch["id"]},
        {"assembly_id": dimmer["id"]},
    ], name="Control")

    response = await test_client.post("/api/assembly-groups/validate-selection", json={
        "selections": {
            category["id"]: {
                required["id"]: [outlet["id"]],
                choose["id"]: [dimmer["id"]],
            }
        }
    })

    assert response.status_code == 200
    result = response.json()
    assert result["is_valid"] is True
    assert result["errors"] == []
    # Outlet: 5 x 1000 material cost, twice; dimmer: own price
    assert result["total_cost"] == 18000
    assert result["breakdown"][0]["category_name"] == "Electrical"
    assert {g["group_name"]: g["cost"] for g in result["breakdown"][0]["groups"]} == {"Base": 10000, "Control": 8000}


@pytest.mark.asyncio
async def test_validate_selection_reports_rule_errors(test_client: AsyncClient):
    category, outlet, switch, dimmer = await _catalog(test_client)
    required = await _create_group(test_client, category["id"], "REQUIRED", [
        {"assembly_id": outlet["id"]},
        {"assembly_id": switch["id"]},
    ], name="Base")
    conflict = await _create_group(test_client, category["id"], "CONFLICT", [
        {"assembly_id": switch["id"], "conflicts_with": [dimmer["id"]]},
        {"assembly_id": dimmer["id"]},
    ], name="Exclusive")

    response = await test_client.post("/api/assembly-groups/validate-selection", json={
        "selections": {
            category["id"]: {
                required["id"]: [outlet["id"]],
                conflict["id"]: [switch["id"], dimmer["id"]],
                str(uuid.uuid4()): [outlet["id"]],
            }
        }
    })

    result = response.json()
    assert result["is_valid"] is False
    assert sorted(e["type"] for e in result["errors"]) == ["conflict", "required"]
    assert any("not found" in w for w in result["warnings"])


@pytest.mark.asyncio
async def test_choose_one_group_keeps_a_single_default(test_client: AsyncClient):
    category, outlet, switch, dimmer = await _catalog(test_client)
    group = await _create_group(test_client, category["id"], "CHOOSE_ONE", [
        {"assembly_id": outlet["id"], "is_default": True},
        {"assembly_id": switch["id"]},
        {"assembly_id": dimmer["id"]},
    ])

    fetched = (await test_client.get(f"/api/assembly-groups/{group['id']}")).json()

    assert len(fetched["items"]) == 3
    assert [item["is_default"] for item in fetched["items"]].count(True) == 1
    assert fetched["default_selection"] == [outlet["id"]]

    # A rejected quantity leaves the item set untouched
    await test_client.patch(f"/api/assembly-groups/{group['id']}/items/{switch['id']}", json={"quantity": 0})
    fetched = (await test_client.get(f"/api/assembly-groups/{group['id']}")).json()
    assert len(fetched["items"]) == 3
    assert all(item["quantity"] == 1 for item in fetched["items"])
