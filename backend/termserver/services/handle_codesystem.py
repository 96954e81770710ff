"""CodeSystem Operations — $lookup, $validate-code and $subsumes against a TerminologyStore.

Invariants:
    - Lookup/Subsumes: missing CodeSystem or code → ResourceNotFoundError (no negative answer exists)
    - Validate-Code: missing CodeSystem or code → result=false envelope, never an error
    - Subsumes checks codeA before codeB, then short-circuits on textual equality
      before any closure query
    - Store errors propagate untouched (already DatabaseError); nothing is retried

Design Decisions:
    - Handler holds only the store: stateless, one instance per request
    - Envelope shapes come from core/ builders; this layer only sequences awaits
"""

import logging
from uuid import UUID

from termserver.core.domain_types import ResourceType, SubsumptionOutcome
from termserver.core.errors import ResourceNotFoundError
from termserver.core.input_resolver import (
    BoundResource, LookupInput, SubsumesInput, ValidateCodeInput,
)
from termserver.core.lookup import build_lookup_result
from termserver.core.parameters import Parameters
from termserver.core.records import CodeSystemRecord, ConceptRecord
from termserver.core.repository_protocols import TerminologyStore
from termserver.core.subsumption import (
    build_subsumes_result, is_equivalent, outcome_for,
)
from termserver.core.validate_code import (
    missing_resource_result, unknown_code_result, valid_code_result,
)

logger = logging.getLogger(__name__)


class CodeSystemOperations:
    """Operations scoped to one CodeSystem."""

    def __init__(self, store: TerminologyStore):
        self.store = store

    async def bind(self, code_system_id: UUID) -> BoundResource:
        """Resolve an instance-level path id to the system it pre-fixes."""
        code_system = await self.store.get_code_system_by_id(code_system_id)
        if not code_system:
            raise ResourceNotFoundError.by_id(
                ResourceType.CODE_SYSTEM.value, code_system_id,
            )
        return BoundResource(url=code_system.url, version=code_system.version)

    async def _require_code_system(
        self, system: str, version: str | None,
    ) -> CodeSystemRecord:
        code_system = await self.store.get_code_system(system, version)
        if not code_system:
            raise ResourceNotFoundError.by_url(ResourceType.CODE_SYSTEM.value, system)
        return code_system

    async def _require_concept(
        self, code_system: CodeSystemRecord, system: str, code: str,
    ) -> ConceptRecord:
        concept = await self.store.get_concept(code_system.id, code)
        if not concept:
            raise ResourceNotFoundError.code(code, system)
        return concept

    async def lookup(self, inp: LookupInput) -> Parameters:
        code_system = await self._require_code_system(inp.system, inp.version)
        concept = await self._require_concept(code_system, inp.system, inp.code)
        logger.debug(
            f"lookup {inp.system}|{inp.code}",
            extra={"operation": "lookup", "system": inp.system, "code": inp.code},
        )
        return build_lookup_result(code_system, concept)

    async def validate_code(self, inp: ValidateCodeInput) -> Parameters:
        code_system = await self.store.get_code_system(inp.system, inp.version)
        if not code_system:
            return missing_resource_result(ResourceType.CODE_SYSTEM.value, inp.system)

        concept = await self.store.get_concept(code_system.id, inp.code)
        if not concept:
            return unknown_code_result(inp.system, inp.code)
        return valid_code_result(concept, inp.display)

    async def subsumes(self, inp: SubsumesInput) -> Parameters:
        code_system = await self._require_code_system(inp.system, inp.version)
        await self._require_concept(code_system, inp.system, inp.code_a)
        await self._require_concept(code_system, inp.system, inp.code_b)

        if is_equivalent(inp.code_a, inp.code_b):
            outcome = SubsumptionOutcome.EQUIVALENT
        else:
            relation = await self.store.check_subsumption(
                code_system.id, inp.code_a, inp.code_b,
            )
            outcome = outcome_for(relation)

        logger.debug(
            f"subsumes {inp.code_a} / {inp.code_b} → {outcome.value}",
            extra={"operation": "subsumes", "system": inp.system, "outcome": outcome.value},
        )
        return build_subsumes_result(outcome)
