from __future__ import annotations

from src.domain.value_objects.role import Role

RECORDS = "/api/v1/production-records"


async def _animal(client, headers, tag: str, type_: str = "dairy") -> dict:
    response = await client.post(
        "/api/v1/animals",
        json={
            "tag": tag,
            "type": type_,
            "breed": "Holstein",
            "birth_date": "2019-09-09",
            "gender": "female",
        },
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


async def _record(client, headers, animal_id: str, when: str, quantity: float, **extra) -> dict:
    payload = {
        "animal_id": animal_id,
        "recorded_at": when,
        "category": "milk",
        "quantity": quantity,
    }
    payload.update(extra)
    response = await client.post(RECORDS, json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def test_create_and_list_production(client, owner):
    headers = owner["headers"]
    cow = await _animal(client, headers, "COW-1")
    created = await _record(
        client, headers, cow["id"], "2024-03-13T07:00:00Z", 10.5, shift="morning"
    )
    assert created["date"] == "2024-03-13"
    assert created["unit"] == "L"
    assert created["shift"] == "morning"

    await _record(client, headers, cow["id"], "2024-04-02T07:00:00Z", 8)
    march = await client.get(
        RECORDS, params={"date_from": "2024-03-01", "date_to": "2024-03-31"}, headers=headers
    )
    assert [r["id"] for r in march.json()["items"]] == [created["id"]]
    per_animal = await client.get(
        f"/api/v1/animals/{cow['id']}/production-records", headers=headers
    )
    assert per_animal.json()["total"] == 2


async def test_totals_per_animal(client, owner):
    headers = owner["headers"]
    daisy = await _animal(client, headers, "COW-1")
    bella = await _animal(client, headers, "COW-2")
    steer = await _animal(client, headers, "STEER-1", type_="beef")
    await _record(client, headers, daisy["id"], "2024-03-01T06:00:00Z", 10)
    await _record(client, headers, daisy["id"], "2024-03-02T06:00:00Z", 12)
    await _record(client, headers, bella["id"], "2024-03-01T06:00:00Z", 30)
    await _record(client, headers, steer["id"], "2024-03-01T06:00:00Z", 250, category="meat")

    milk = await client.get(f"{RECORDS}/totals", params={"category": "milk"}, headers=headers)
    assert milk.status_code == 200
    body = milk.json()
    assert body["unit"] == "L"
    assert body["subtotal"] == 52
    assert [(i["tag"], i["total"], i["count"]) for i in body["items"]] == [
        ("COW-2", 30, 1),
        ("COW-1", 22, 2),
    ]

    meat = await client.get(f"{RECORDS}/totals", params={"category": "meat"}, headers=headers)
    assert meat.json()["unit"] == "kg"
    assert meat.json()["subtotal"] == 250


async def test_update_and_delete_production(client, owner, add_member):
    headers = owner["headers"]
    cow = await _animal(client, headers, "COW-1")
    record = await _record(client, headers, cow["id"], "2024-03-01T06:00:00Z", 10)
    url = f"{RECORDS}/{record['id']}"

    worker = await add_member(Role.WORKER, "milker@example.com")
    assert (await client.patch(url, json={"quantity": 11}, headers=worker)).status_code == 403

    patched = await client.patch(url, json={"quantity": 11, "quality": "A"}, headers=headers)
    assert patched.status_code == 200
    assert patched.json()["quantity"] == 11
    assert patched.json()["quality"] == "A"

    negative = await client.patch(url, json={"quantity": -1}, headers=headers)
    assert negative.status_code == 422

    assert (await client.delete(url, headers=headers)).status_code == 204
    assert (await client.get(url, headers=headers)).status_code == 404


async def test_production_report_pdf(client, owner):
    headers = owner["headers"]
    cow = await _animal(client, headers, "COW-1")
    await _record(client, headers, cow["id"], "2024-03-01T06:00:00Z", 10)

    response = await client.get(
        "/api/v1/reports/production.pdf",
        params={"category": "milk", "date_from": "2024-03-01", "date_to": "2024-03-31"},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert (
        response.headers["content-disposition"]
        == 'attachment; filename="production_2024-03-01_2024-03-31.pdf"'
    )
    assert response.content.startswith(b"%PDF")
