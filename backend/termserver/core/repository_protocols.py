"""Boundary Protocols — the terminology store contract between core and shell.

Invariants:
    - Core NEVER imports from infrastructure — dependency arrows point inward only
    - Lookup by (url, version): version None means "latest by update time"
    - Every method returns records or None; absence is never an exception
    - Failures surface as DatabaseError, once, with no retry

Design Decisions:
    - Protocol over ABC: structural subtyping, handlers never downcast to the SQL adapter
    - Async in Protocol: implementations do IO; the pure builders in core/ stay sync
      and the services layer orchestrates the awaits around them
"""

from typing import Any, Protocol
from uuid import UUID

from termserver.core.domain_types import SearchParams, SubsumptionRelation
from termserver.core.records import (
    CodeSystemRecord, ConceptMapRecord, ConceptRecord, ValueSetRecord,
)


class TerminologyStore(Protocol):
    """Read contract for terminology persistence — implemented by shell."""

    # CodeSystem
    async def get_code_system(
        self, url: str, version: str | None = None,
    ) -> CodeSystemRecord | None: ...
    async def get_code_system_by_id(self, id: UUID) -> CodeSystemRecord | None: ...
    async def search_code_systems(self, params: SearchParams) -> list[CodeSystemRecord]: ...
    async def count_code_systems(self) -> int: ...

    # ValueSet
    async def get_value_set(
        self, url: str, version: str | None = None,
    ) -> ValueSetRecord | None: ...
    async def get_value_set_by_id(self, id: UUID) -> ValueSetRecord | None: ...
    async def search_value_sets(self, params: SearchParams) -> list[ValueSetRecord]: ...
    async def count_value_sets(self) -> int: ...

    # ConceptMap
    async def get_concept_map(
        self, url: str, version: str | None = None,
    ) -> ConceptMapRecord | None: ...
    async def get_concept_map_by_id(self, id: UUID) -> ConceptMapRecord | None: ...
    async def search_concept_maps(self, params: SearchParams) -> list[ConceptMapRecord]: ...
    async def count_concept_maps(self) -> int: ...

    # Concepts, closure, expansions
    async def get_concept(
        self, code_system_id: UUID, code: str,
    ) -> ConceptRecord | None: ...
    async def check_subsumption(
        self, code_system_id: UUID, code_a: str, code_b: str,
    ) -> SubsumptionRelation: ...
    async def get_value_set_expansion(
        self, value_set_id: UUID,
    ) -> list[dict[str, Any]] | None: ...
