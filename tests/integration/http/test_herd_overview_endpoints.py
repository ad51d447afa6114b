from __future__ import annotations

from src.domain.value_objects.role import Role


async def _animal(client, headers, tag: str, **extra) -> dict:
    payload = {
        "tag": tag,
        "type": "dairy",
        "breed": "Holstein",
        "birth_date": "2019-09-09",
        "gender": "female",
    }
    payload.update(extra)
    response = await client.post("/api/v1/animals", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def _milk(client, headers, animal_id: str, when: str, quantity: float, category="milk"):
    response = await client.post(
        "/api/v1/production-records",
        json={
            "animal_id": animal_id,
            "recorded_at": when,
            "category": category,
            "quantity": quantity,
        },
        headers=headers,
    )
    assert response.status_code == 201, response.text


async def test_dashboard_as_of(client, owner):
    headers = owner["headers"]
    cow = await _animal(client, headers, "COW-1", status="lactating")
    steer = await _animal(client, headers, "STEER-1", type="beef", gender="male")
    await _milk(client, headers, cow["id"], "2024-03-16T06:00:00Z", 5)
    await _milk(client, headers, cow["id"], "2024-03-13T06:00:00Z", 10)
    await _milk(client, headers, cow["id"], "2024-03-02T06:00:00Z", 3)
    await _milk(client, headers, cow["id"], "2023-12-31T06:00:00Z", 7)
    await _milk(client, headers, cow["id"], "2024-03-20T06:00:00Z", 100)
    await _milk(client, headers, steer["id"], "2024-03-05T06:00:00Z", 200, category="meat")
    await client.post(
        "/api/v1/health-records",
        json={
            "animal_id": cow["id"],
            "date": "2024-03-10",
            "category": "checkup",
            "description": "Body condition",
        },
        headers=headers,
    )

    response = await client.get(
        "/api/v1/dashboard", params={"as_of": "2024-03-16"}, headers=headers
    )
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["as_of"] == "2024-03-16"
    assert body["total_animals"] == 2
    assert body["by_type"] == {"dairy": 1, "beef": 1}
    assert body["by_status"]["lactating"] == 1
    assert body["by_status"]["healthy"] == 1
    assert body["milk"] == {"today": 5, "this_week": 15, "this_month": 18, "this_year": 18}
    assert body["meat"] == {"this_month": 200, "this_year": 200}
    assert body["health_by_category"] == {"vaccination": 0, "treatment": 0, "checkup": 1}
    assert [r["description"] for r in body["recent_health"]] == ["Body condition"]


async def test_dashboard_for_empty_farm(client, owner):
    response = await client.get("/api/v1/dashboard", headers=owner["headers"])
    body = response.json()
    assert body["total_animals"] == 0
    assert body["milk"]["today"] == 0
    assert body["recent_health"] == []


async def test_genealogy_lifecycle(client, owner, add_member):
    headers = owner["headers"]
    sire = await _animal(client, headers, "BULL-1", gender="male", name="Thor")
    dam = await _animal(client, headers, "COW-1")
    calf = await _animal(client, headers, "CALF-1")
    url = f"/api/v1/genealogy/{calf['id']}"

    empty = await client.get(url, headers=headers)
    assert empty.status_code == 200
    assert empty.json()["father_id"] is None
    assert len(empty.json()["members"]) == 6

    saved = await client.put(
        url, json={"father_id": sire["id"], "mother_id": dam["id"]}, headers=headers
    )
    assert saved.status_code == 200, saved.text
    body = saved.json()
    assert body["father_id"] == sire["id"]
    assert body["updated_by"] == "owner@example.com"
    members = {m["kinship"]: m for m in body["members"]}
    assert members["father"]["tag"] == "BULL-1"
    assert members["father"]["name"] == "Thor"
    assert members["mother"]["label"] == "COW-1"
    assert members["maternal_grandmother"]["animal_id"] is None

    own_parent = await client.put(url, json={"mother_id": calf["id"]}, headers=headers)
    assert own_parent.status_code == 422

    worker = await add_member(Role.WORKER, "hand@example.com")
    assert (await client.delete(url, headers=worker)).status_code == 403

    assert (await client.delete(url, headers=headers)).status_code == 204
    assert (await client.get(url, headers=headers)).json()["father_id"] is None
    assert (await client.delete(url, headers=headers)).status_code == 404


async def test_farm_details_and_update(client, owner, add_member):
    headers = owner["headers"]
    await _animal(client, headers, "COW-1")
    await _animal(client, headers, "STEER-1", type="beef", gender="male")

    farm = await client.get("/api/v1/farm", headers=headers)
    assert farm.status_code == 200
    assert farm.json()["name"] == "Green Valley"
    assert farm.json()["animal_count"] == {"dairy": 1, "beef": 1, "total": 2}

    manager = await add_member(Role.MANAGER, "manager@example.com")
    denied = await client.put("/api/v1/farm", json={"name": "Renamed"}, headers=manager)
    assert denied.status_code == 403

    updated = await client.put(
        "/api/v1/farm", json={"name": "Blue Ridge", "size": 12.5, "units": "acres"}, headers=headers
    )
    assert updated.status_code == 200, updated.text
    assert updated.json()["name"] == "Blue Ridge"
    assert updated.json()["units"] == "acres"
    assert (await client.get("/api/v1/farm", headers=headers)).json()["size"] == 12.5
