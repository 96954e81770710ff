"""Resource Queries — read, search Bundles and stats against the SQL store."""

from uuid import uuid4

import pytest

from termserver.core.domain_types import ResourceType, SearchParams
from termserver.core.errors import ResourceNotFoundError
from termserver.services.handle_resources import ResourceQueries

from seed_data import CS_URL, VS_SMALL_URL


async def test_read_by_id(store, seeded):
    content = await ResourceQueries(store).read(
        ResourceType.CODE_SYSTEM, str(seeded.old_code_system.id),
    )
    assert content["version"] == "0.9"


async def test_read_by_url_returns_latest(store, seeded):
    content = await ResourceQueries(store).read(ResourceType.CODE_SYSTEM, CS_URL)
    assert content["version"] == "1.0"


async def test_read_missing_by_url_names_url(store, seeded):
    with pytest.raises(ResourceNotFoundError) as exc:
        await ResourceQueries(store).read(ResourceType.VALUE_SET, "http://nope")
    assert exc.value.message == "ValueSet 'http://nope' not found"
    assert exc.value.http_status == 404


async def test_read_missing_by_id_names_id(store, seeded):
    missing = uuid4()
    with pytest.raises(ResourceNotFoundError) as exc:
        await ResourceQueries(store).read(ResourceType.CODE_SYSTEM, str(missing))
    assert exc.value.message == f"CodeSystem {missing} not found"


async def test_search_total_counts_all(store, seeded):
    bundle = await ResourceQueries(store).search(
        ResourceType.VALUE_SET, SearchParams(limit=1),
    )
    assert bundle["resourceType"] == "Bundle"
    assert bundle["total"] == 3
    assert len(bundle["entry"]) == 1
    assert bundle["entry"][0]["search"] == {"mode": "match"}


async def test_search_filters(store, seeded):
    queries = ResourceQueries(store)
    by_name = await queries.search(ResourceType.VALUE_SET, SearchParams(name="card"))
    assert [e["resource"]["url"] for e in by_name["entry"]] == [VS_SMALL_URL]

    by_status = await queries.search(
        ResourceType.CODE_SYSTEM, SearchParams(status="retired"),
    )
    assert [e["resource"]["version"] for e in by_status["entry"]] == ["0.9"]

    by_release = await queries.search(
        ResourceType.VALUE_SET, SearchParams(fhir_version="r5"),
    )
    assert len(by_release["entry"]) == 1


async def test_search_orders_most_recent_first(store, seeded):
    bundle = await ResourceQueries(store).search(
        ResourceType.CODE_SYSTEM, SearchParams(url=CS_URL),
    )
    assert [e["resource"]["version"] for e in bundle["entry"]] == ["1.0", "0.9"]


async def test_stats(store, seeded):
    assert await ResourceQueries(store).stats() == {
        "code_systems": 2, "value_sets": 3, "concept_maps": 1,
    }
