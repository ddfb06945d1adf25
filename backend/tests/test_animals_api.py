"""Animal registry API tests."""

import uuid

import pytest

pytestmark = pytest.mark.asyncio


def _animal_payload(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "name": "Rex",
        "sex": "Macho",
        "coat": "Tabby",
        "age": "2 years",
        "owner_name": "Shelter",
        "treatment_for": "Skin infection",
        "treatment": "Antibiotics",
        "fiv": False,
        "felv": False,
        "rabies": True,
        "v6": True,
    }
    payload.update(overrides)
    return payload


async def test_create_list_and_get(app_context: dict[str, object]) -> None:
    client = app_context["client"]
    headers = app_context["headers"]

    created = await client.post("/api/v1/animals", json=_animal_payload(), headers=headers)
    assert created.status_code == 201
    animal_id = created.json()["id"]

    listed = await client.get("/api/v1/animals", headers=headers)
    assert listed.status_code == 200
    assert [animal["id"] for animal in listed.json()] == [animal_id]

    fetched = await client.get(f"/api/v1/animals/{animal_id}", headers=headers)
    body = fetched.json()
    assert body["name"] == "Rex"
    assert body["sex"] == "Macho"
    assert body["active"] is True
    assert body["created_by"] == str(app_context["caretaker_id"])


async def test_anonymous_reads_are_empty_and_writes_rejected(
    app_context: dict[str, object],
) -> None:
    client = app_context["client"]
    created = await client.post(
        "/api/v1/animals", json=_animal_payload(), headers=app_context["headers"]
    )
    animal_id = created.json()["id"]

    assert (await client.get("/api/v1/animals")).json() == []
    anonymous_get = await client.get(f"/api/v1/animals/{animal_id}")
    assert anonymous_get.status_code == 200
    assert anonymous_get.json() is None

    rejected = await client.post("/api/v1/animals", json=_animal_payload())
    assert rejected.status_code == 401


async def test_invalid_sex_is_rejected(app_context: dict[str, object]) -> None:
    client = app_context["client"]

    response = await client.post(
        "/api/v1/animals",
        json=_animal_payload(sex="Unknown"),
        headers=app_context["headers"],
    )

    assert response.status_code == 422


async def test_update_replaces_fields(app_context: dict[str, object]) -> None:
    client = app_context["client"]
    headers = app_context["headers"]
    animal_id = (
        await client.post("/api/v1/animals", json=_animal_payload(), headers=headers)
    ).json()["id"]

    response = await client.put(
        f"/api/v1/animals/{animal_id}",
        json=_animal_payload(name="Rexy", sex="Femea", rabies=False),
        headers=headers,
    )
    assert response.status_code == 204

    body = (await client.get(f"/api/v1/animals/{animal_id}", headers=headers)).json()
    assert body["name"] == "Rexy"
    assert body["sex"] == "Femea"
    assert body["rabies"] is False


async def test_update_unknown_animal_is_404(app_context: dict[str, object]) -> None:
    client = app_context["client"]

    response = await client.put(
        f"/api/v1/animals/{uuid.uuid4()}",
        json=_animal_payload(),
        headers=app_context["headers"],
    )

    assert response.status_code == 404


async def test_deactivate_hides_animal(app_context: dict[str, object]) -> None:
    client = app_context["client"]
    headers = app_context["headers"]
    animal_id = (
        await client.post("/api/v1/animals", json=_animal_payload(), headers=headers)
    ).json()["id"]

    response = await client.post(f"/api/v1/animals/{animal_id}/deactivate", headers=headers)
    assert response.status_code == 204

    assert (await client.get("/api/v1/animals", headers=headers)).json() == []
    assert (await client.get(f"/api/v1/animals/{animal_id}", headers=headers)).json() is None

    scheduled = await client.post(
        "/api/v1/medications",
        json={
            "animal_id": animal_id,
            "date": "2024-01-01",
            "time": "08:00",
            "medication": "Amoxicillin",
            "dose": "50mg",
        },
        headers=headers,
    )
    assert scheduled.status_code == 404
