"""Resource Queries — read, search and count for CodeSystem / ValueSet / ConceptMap.

Invariants:
    - read accepts a UUID id or a canonical url (latest version)
    - search returns a searchset Bundle of stored content documents
    - Missing resource on read → ResourceNotFoundError
"""

from uuid import UUID

from termserver.core.bundle import build_search_bundle
from termserver.core.domain_types import ResourceType, SearchParams
from termserver.core.errors import ResourceNotFoundError
from termserver.core.repository_protocols import TerminologyStore


def _as_uuid(value: str) -> UUID | None:
    try:
        return UUID(value)
    except ValueError:
        return None


class ResourceQueries:
    """Plain resource access for the listing/read surface."""

    def __init__(self, store: TerminologyStore):
        self.store = store
        self._readers = {
            ResourceType.CODE_SYSTEM: (store.get_code_system_by_id, store.get_code_system),
            ResourceType.VALUE_SET: (store.get_value_set_by_id, store.get_value_set),
            ResourceType.CONCEPT_MAP: (store.get_concept_map_by_id, store.get_concept_map),
        }
        self._searchers = {
            ResourceType.CODE_SYSTEM: (store.search_code_systems, store.count_code_systems),
            ResourceType.VALUE_SET: (store.search_value_sets, store.count_value_sets),
            ResourceType.CONCEPT_MAP: (store.search_concept_maps, store.count_concept_maps),
        }

    async def read(self, resource_type: ResourceType, id_or_url: str) -> dict:
        by_id, by_url = self._readers[resource_type]
        resource_id = _as_uuid(id_or_url)
        if resource_id:
            record = await by_id(resource_id)
            if not record:
                raise ResourceNotFoundError.by_id(resource_type.value, resource_id)
        else:
            record = await by_url(id_or_url, None)
            if not record:
                raise ResourceNotFoundError.by_url(resource_type.value, id_or_url)
        return record.content

    async def search(self, resource_type: ResourceType, params: SearchParams) -> dict:
        search, count = self._searchers[resource_type]
        total = await count()
        records = await search(params)
        return build_search_bundle(total, (r.content for r in records))

    async def stats(self) -> dict:
        return {
            "code_systems": await self.store.count_code_systems(),
            "value_sets": await self.store.count_value_sets(),
            "concept_maps": await self.store.count_concept_maps(),
        }
