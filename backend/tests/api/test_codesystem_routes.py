"""CodeSystem Routes — GET/POST, type and instance forms, error bodies."""

import pytest
from uuid import uuid4

from seed_data import CS_URL


async def test_lookup_get(client, seeded):
    res = await client.get(
        "/r4/CodeSystem/$lookup", params={"system": CS_URL, "code": "b"},
    )
    assert res.status_code == 200
    assert res.json() == {
        "resourceType": "Parameters",
        "parameter": [
            {"name": "name", "valueString": "Letters"},
            {"name": "display", "valueString": "Beta"},
        ],
    }


async def test_lookup_post_with_typed_parameters(client, seeded):
    res = await client.post("/r5/CodeSystem/$lookup", json={
        "resourceType": "Parameters",
        "parameter": [
            {"name": "system", "valueUri": CS_URL},
            {"name": "code", "valueCode": "a"},
        ],
    })
    assert res.status_code == 200
    names = [p["name"] for p in res.json()["parameter"]]
    assert names == ["name", "display", "designation", "property", "property"]


async def test_lookup_missing_code_is_400(client, seeded):
    res = await client.get("/r4/CodeSystem/$lookup", params={"system": CS_URL})
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "BAD_REQUEST"
    assert error["message"] == "code parameter required"


async def test_lookup_unknown_code_is_404(client, seeded):
    res = await client.get(
        "/r4/CodeSystem/$lookup", params={"system": CS_URL, "code": "nope"},
    )
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_lookup_instance_pins_version(client, seeded):
    res = await client.get(
        f"/r4/CodeSystem/{seeded.old_code_system.id}/$lookup",
        params={"system": "http://ignored", "code": "legacy"},
    )
    assert res.status_code == 200
    assert res.json()["parameter"][1] == {"name": "display", "valueString": "Legacy letter"}


async def test_instance_unknown_id_is_404(client, seeded):
    res = await client.post(
        f"/r4/CodeSystem/{uuid4()}/$lookup",
        json={"resourceType": "Parameters", "parameter": [{"name": "code", "valueCode": "a"}]},
    )
    assert res.status_code == 404


async def test_validate_code_negative_is_200(client, seeded):
    res = await client.get(
        "/r4/CodeSystem/$validate-code", params={"url": CS_URL, "code": "nope"},
    )
    assert res.status_code == 200
    assert res.json()["parameter"][0] == {"name": "result", "valueBoolean": False}


async def test_validate_code_instance_post(client, seeded):
    res = await client.post(
        f"/r6/CodeSystem/{seeded.code_system.id}/$validate-code",
        json={"resourceType": "Parameters", "parameter": [
            {"name": "code", "valueCode": "a"},
            {"name": "display", "valueString": "Alfa"},
        ]},
    )
    assert res.status_code == 200
    assert [p["name"] for p in res.json()["parameter"]] == ["result", "message", "display"]


@pytest.mark.parametrize("code_b, outcome", [
    ("a", "equivalent"), ("b", "subsumes"), ("z", "not-subsumed"),
])
async def test_subsumes_get(client, seeded, code_b, outcome):
    res = await client.get("/r4/CodeSystem/$subsumes", params={
        "system": CS_URL, "codeA": "a", "codeB": code_b,
    })
    assert res.status_code == 200
    assert res.json()["parameter"] == [{"name": "outcome", "valueCode": outcome}]


async def test_subsumes_instance_post(client, seeded):
    res = await client.post(
        f"/r4/CodeSystem/{seeded.code_system.id}/$subsumes",
        json={"resourceType": "Parameters", "parameter": [
            {"name": "codeA", "valueCode": "b"},
            {"name": "codeB", "valueCode": "a"},
        ]},
    )
    assert res.json()["parameter"] == [{"name": "outcome", "valueCode": "subsumed-by"}]


async def test_malformed_parameters_body_is_400(client, seeded):
    res = await client.post("/r4/CodeSystem/$lookup", json={
        "resourceType": "Parameters",
        "parameter": [{"name": "code", "valueCode": "a", "valueString": "b"}],
    })
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_wrong_resource_type_is_400(client, seeded):
    res = await client.post("/r4/CodeSystem/$lookup", json={"resourceType": "Bundle"})
    assert res.status_code == 400


async def test_read_and_search(client, seeded):
    res = await client.get(f"/r4/CodeSystem/{seeded.code_system.id}")
    assert res.status_code == 200
    assert res.json()["version"] == "1.0"

    res = await client.get("/r4/CodeSystem", params={"status": "active", "_count": 5})
    bundle = res.json()
    assert bundle["total"] == 2
    assert [e["resource"]["version"] for e in bundle["entry"]] == ["1.0"]


async def test_read_unknown_is_404(client, seeded):
    missing = uuid4()
    res = await client.get(f"/r4/CodeSystem/{missing}")
    assert res.status_code == 404
    assert res.json()["error"]["message"] == f"CodeSystem {missing} not found"


async def test_read_unknown_url_names_url(client, seeded):
    res = await client.get("/r4/CodeSystem/urn:example:nope")
    assert res.status_code == 404
    assert res.json()["error"]["message"] == "CodeSystem 'urn:example:nope' not found"
