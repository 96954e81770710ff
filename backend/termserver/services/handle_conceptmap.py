"""ConceptMap Operations — $translate against a TerminologyStore.

Invariants:
    - No ConceptMap url → explicit result=false envelope; maps are never searched
      by source/target system
    - Url given but map missing → ResourceNotFoundError
    - No match → result=false + message (a negative answer, not an error)
"""

import logging
from uuid import UUID

from termserver.core.domain_types import ResourceType
from termserver.core.errors import ResourceNotFoundError
from termserver.core.input_resolver import BoundResource, TranslateInput
from termserver.core.parameters import Parameters
from termserver.core.repository_protocols import TerminologyStore
from termserver.core.translation import (
    build_translate_result, find_matches, no_concept_map_result,
)

logger = logging.getLogger(__name__)


class ConceptMapOperations:
    """Operations scoped to one ConceptMap."""

    def __init__(self, store: TerminologyStore):
        self.store = store

    async def bind(self, concept_map_id: UUID) -> BoundResource:
        concept_map = await self.store.get_concept_map_by_id(concept_map_id)
        if not concept_map:
            raise ResourceNotFoundError.by_id(
                ResourceType.CONCEPT_MAP.value, concept_map_id,
            )
        return BoundResource(url=concept_map.url, version=concept_map.version)

    async def translate(self, inp: TranslateInput) -> Parameters:
        if not inp.url:
            logger.info(
                "translate without ConceptMap url",
                extra={"operation": "translate", "system": inp.system},
            )
            return no_concept_map_result()

        concept_map = await self.store.get_concept_map(inp.url, inp.version)
        if not concept_map:
            raise ResourceNotFoundError.by_url(ResourceType.CONCEPT_MAP.value, inp.url)

        matches = list(find_matches(
            concept_map.content, inp.system, inp.code,
            target_system=inp.target, reverse=inp.reverse,
        ))
        return build_translate_result(matches, inp.system, inp.code)
