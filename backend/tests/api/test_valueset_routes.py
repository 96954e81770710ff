"""ValueSet Routes — $expand paging and $validate-code over HTTP."""

from uuid import uuid4

from seed_data import CS_URL, VS_SMALL_URL, VS_URL


async def test_expand_get_pages(client, seeded):
    first = await client.get("/r4/ValueSet/$expand", params={"url": VS_URL})
    second = await client.get(
        "/r4/ValueSet/$expand", params={"url": VS_URL, "offset": 100},
    )
    assert first.status_code == second.status_code == 200
    assert first.json()["resourceType"] == "ValueSet"
    assert len(first.json()["expansion"]["contains"]) == 100
    assert len(second.json()["expansion"]["contains"]) == 50
    assert second.json()["expansion"]["total"] == 150


async def test_expand_post_with_integer_parameters(client, seeded):
    res = await client.post("/r4/ValueSet/$expand", json={
        "resourceType": "Parameters",
        "parameter": [
            {"name": "url", "valueUri": VS_URL},
            {"name": "offset", "valueInteger": 10},
            {"name": "count", "valueInteger": 5},
        ],
    })
    expansion = res.json()["expansion"]
    assert expansion["offset"] == 10
    assert [e["code"] for e in expansion["contains"]] == [f"n{i}" for i in range(10, 15)]


async def test_expand_instance_with_filter(client, seeded):
    res = await client.get(
        f"/r5/ValueSet/{seeded.small_value_set.id}/$expand",
        params={"filter": "infarct"},
    )
    assert [e["code"] for e in res.json()["expansion"]["contains"]] == ["mi"]


async def test_expand_bad_count_is_400(client, seeded):
    res = await client.get(
        "/r4/ValueSet/$expand", params={"url": VS_URL, "count": "lots"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "BAD_REQUEST"


async def test_expand_unknown_is_404(client, seeded):
    res = await client.get("/r4/ValueSet/$expand", params={"url": "http://nope"})
    assert res.status_code == 404


async def test_validate_code_missing_system_is_400(client, seeded):
    res = await client.get(
        "/r4/ValueSet/$validate-code", params={"url": VS_URL, "code": "a"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["message"] == (
        "system parameter required for ValueSet validation"
    )


async def test_validate_code_get(client, seeded):
    res = await client.get("/r4/ValueSet/$validate-code", params={
        "url": VS_SMALL_URL, "system": CS_URL, "code": "b",
    })
    assert res.json()["parameter"] == [
        {"name": "result", "valueBoolean": True},
        {"name": "display", "valueString": "Beta"},
    ]


async def test_validate_code_unknown_value_set_delegates(client, seeded):
    res = await client.post("/r4/ValueSet/$validate-code", json={
        "resourceType": "Parameters",
        "parameter": [
            {"name": "url", "valueUri": "http://nope"},
            {"name": "system", "valueUri": CS_URL},
            {"name": "code", "valueCode": "a"},
        ],
    })
    assert res.status_code == 200
    assert res.json()["parameter"] == [
        {"name": "result", "valueBoolean": True},
        {"name": "display", "valueString": "Alpha"},
    ]


async def test_validate_code_unknown_instance_is_404(client, seeded):
    res = await client.get(f"/r4/ValueSet/{uuid4()}/$validate-code", params={
        "system": CS_URL, "code": "a",
    })
    assert res.status_code == 404


async def test_search_value_sets(client, seeded):
    res = await client.get("/r4/ValueSet", params={"name": "card"})
    bundle = res.json()
    assert bundle["type"] == "searchset"
    assert [e["resource"]["url"] for e in bundle["entry"]] == [VS_SMALL_URL]
