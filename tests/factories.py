"""
Factories creating records through the API.
"""


async def create_material(client, **overrides):
    payload = {"name": "Cable NYM 3x2.5", "unit": "METER", "price": 12500}
    payload.update(overrides)
    response = await client.post("/api/materials", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def create_category(client, **overrides):
    payload = {"name": "Electrical", "color": "#f59e0b"}
    payload.update(overrides)
    response = await client.post("/api/assembly-categories", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def create_assembly(client, category_id, **overrides):
    payload = {"name": "Power Outlet", "category_id": category_id, "price": 50000}
    payload.update(overrides)
    response = await client.post("/api/assemblies", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def create_client(client, **overrides):
    payload = {
        "contact_person": "Ahmad Susanto",
        "contact_email": "ahmad@example.com",
        "contact_phone": "+62 812 0000 0001",
        "address": "Jl. Sudirman 1",
        "city": "Jakarta",
        "province": "DKI Jakarta",
    }
    payload.update(overrides)
    response = await client.post("/api/clients", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def create_user(client, **overrides):
    payload = {"email": "pm@example.com", "name": "Dewi Lestari", "password": "s3cret-pass", "role": "PROJECT_MANAGER"}
    payload.update(overrides)
    response = await client.post("/api/users", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def create_project(client, **overrides):
    payload = {"name": "Rumah Tinggal Kemang", "total_price": 1000}
    payload.update(overrides)
    response = await client.post("/api/projects", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def create_timeline(client, project_id, **overrides):
    payload = {"start_date": "2026-01-05", "end_date": "2026-03-02"}
    payload.update(overrides)
    response = await client.post(f"/api/projects/{project_id}/timeline", json=payload)
    assert response.status_code == 201, response.text
    return response.json()
