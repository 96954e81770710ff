"""SQL Terminology Store — SQLAlchemy async adapter for the TerminologyStore protocol.

Invariants:
    - Read-only: no method adds, flushes or commits
    - (url, None) resolves to the most recently updated row for that url
    - check_subsumption asks "A ancestor of B" before "B ancestor of A"
    - Every SQLAlchemyError is logged with detail and re-raised as DatabaseError
      carrying a generic message; never retried
    - ORM instances never leave this module: callers receive core records

Design Decisions:
    - One AsyncSession per store instance (per request); pooling lives in DatabaseSessionManager
    - Error mapping via decorator so each query method stays a plain select
"""

import functools
import logging
from typing import Any
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from termserver.core.domain_types import SearchParams, SubsumptionRelation
from termserver.core.errors import DatabaseError, ErrorContext
from termserver.core.records import (
    CodeSystemRecord, ConceptMapRecord, ConceptRecord, ValueSetRecord,
    normalize_properties,
)
from termserver.models import (
    ClosureEntry, CodeSystem, Concept, ConceptMap, ValueSet, ValueSetExpansion,
)

logger = logging.getLogger(__name__)


def _store_call(operation: str):
    """Map SQLAlchemy failures of one store method to DatabaseError."""
    def decorator(fn):
        @functools.wraps(fn)
        async def wrapper(*args, **kwargs):
            try:
                return await fn(*args, **kwargs)
            except SQLAlchemyError as e:
                logger.error(
                    f"Store query {operation} failed: {e}",
                    extra={"operation": operation},
                )
                raise DatabaseError(
                    "query failed", operation,
                    ErrorContext(operation=operation),
                ) from e
        return wrapper
    return decorator


# ─── ORM → record ────────────────────────────────────────────────

def _code_system_record(row: CodeSystem) -> CodeSystemRecord:
    return CodeSystemRecord(
        id=row.id, url=row.url, version=row.version, status=row.status,
        name=row.name, title=row.title, fhir_version=row.fhir_version,
        content=row.content, updated_at=row.updated_at,
    )


def _value_set_record(row: ValueSet) -> ValueSetRecord:
    return ValueSetRecord(
        id=row.id, url=row.url, version=row.version, status=row.status,
        name=row.name, title=row.title, fhir_version=row.fhir_version,
        content=row.content, updated_at=row.updated_at,
    )


def _concept_map_record(row: ConceptMap) -> ConceptMapRecord:
    return ConceptMapRecord(
        id=row.id, url=row.url, version=row.version, status=row.status,
        name=row.name, title=row.title, source_uri=row.source_uri,
        target_uri=row.target_uri, fhir_version=row.fhir_version,
        content=row.content, updated_at=row.updated_at,
    )


def _concept_record(row: Concept) -> ConceptRecord:
    return ConceptRecord(
        id=row.id, code_system_id=row.code_system_id, code=row.code,
        display=row.display, definition=row.definition,
        properties=normalize_properties(row.properties),
    )


class SqlTerminologyStore:
    """TerminologyStore backed by the relational schema in models/."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── shared query shapes ─────────────────────────────────────

    async def _by_canonical(self, model, url: str, version: str | None):
        query = select(model).where(model.url == url)
        if version is not None:
            query = query.where(model.version == version)
        else:
            query = query.order_by(model.updated_at.desc())
        result = await self.db.execute(query.limit(1))
        return result.scalars().first()

    async def _by_id(self, model, id: UUID):
        result = await self.db.execute(select(model).where(model.id == id))
        return result.scalar_one_or_none()

    async def _search(self, model, params: SearchParams) -> list:
        query = select(model)
        if params.url:
            query = query.where(model.url == params.url)
        if params.name:
            query = query.where(model.name.ilike(f"%{params.name}%"))
        if params.status:
            query = query.where(model.status == params.status)
        if params.fhir_version:
            query = query.where(model.fhir_version == params.fhir_version)
        query = query.order_by(model.updated_at.desc())
        if params.limit is not None:
            query = query.limit(params.limit)
        if params.offset is not None:
            query = query.offset(params.offset)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def _count(self, model) -> int:
        result = await self.db.execute(select(func.count()).select_from(model))
        return int(result.scalar_one())

    # ─── CodeSystem ──────────────────────────────────────────────

    @_store_call("get_code_system")
    async def get_code_system(
        self, url: str, version: str | None = None,
    ) -> CodeSystemRecord | None:
        row = await self._by_canonical(CodeSystem, url, version)
        return _code_system_record(row) if row else None

    @_store_call("get_code_system_by_id")
    async def get_code_system_by_id(self, id: UUID) -> CodeSystemRecord | None:
        row = await self._by_id(CodeSystem, id)
        return _code_system_record(row) if row else None

    @_store_call("search_code_systems")
    async def search_code_systems(self, params: SearchParams) -> list[CodeSystemRecord]:
        return [_code_system_record(r) for r in await self._search(CodeSystem, params)]

    @_store_call("count_code_systems")
    async def count_code_systems(self) -> int:
        return await self._count(CodeSystem)

    # ─── ValueSet ────────────────────────────────────────────────

    @_store_call("get_value_set")
    async def get_value_set(
        self, url: str, version: str | None = None,
    ) -> ValueSetRecord | None:
        row = await self._by_canonical(ValueSet, url, version)
        return _value_set_record(row) if row else None

    @_store_call("get_value_set_by_id")
    async def get_value_set_by_id(self, id: UUID) -> ValueSetRecord | None:
        row = await self._by_id(ValueSet, id)
        return _value_set_record(row) if row else None

    @_store_call("search_value_sets")
    async def search_value_sets(self, params: SearchParams) -> list[ValueSetRecord]:
        return [_value_set_record(r) for r in await self._search(ValueSet, params)]

    @_store_call("count_value_sets")
    async def count_value_sets(self) -> int:
        return await self._count(ValueSet)

    # ─── ConceptMap ──────────────────────────────────────────────

    @_store_call("get_concept_map")
    async def get_concept_map(
        self, url: str, version: str | None = None,
    ) -> ConceptMapRecord | None:
        row = await self._by_canonical(ConceptMap, url, version)
        return _concept_map_record(row) if row else None

    @_store_call("get_concept_map_by_id")
    async def get_concept_map_by_id(self, id: UUID) -> ConceptMapRecord | None:
        row = await self._by_id(ConceptMap, id)
        return _concept_map_record(row) if row else None

    @_store_call("search_concept_maps")
    async def search_concept_maps(self, params: SearchParams) -> list[ConceptMapRecord]:
        return [_concept_map_record(r) for r in await self._search(ConceptMap, params)]

    @_store_call("count_concept_maps")
    async def count_concept_maps(self) -> int:
        return await self._count(ConceptMap)

    # ─── Concepts, closure, expansions ───────────────────────────

    @_store_call("get_concept")
    async def get_concept(
        self, code_system_id: UUID, code: str,
    ) -> ConceptRecord | None:
        result = await self.db.execute(
            select(Concept)
            .where(Concept.code_system_id == code_system_id)
            .where(Concept.code == code),
        )
        row = result.scalar_one_or_none()
        return _concept_record(row) if row else None

    async def _is_ancestor(
        self, code_system_id: UUID, ancestor: str, descendant: str,
    ) -> bool:
        result = await self.db.execute(
            select(ClosureEntry.id)
            .where(ClosureEntry.code_system_id == code_system_id)
            .where(ClosureEntry.ancestor_code == ancestor)
            .where(ClosureEntry.descendant_code == descendant)
            .limit(1),
        )
        return result.first() is not None

    @_store_call("check_subsumption")
    async def check_subsumption(
        self, code_system_id: UUID, code_a: str, code_b: str,
    ) -> SubsumptionRelation:
        if await self._is_ancestor(code_system_id, code_a, code_b):
            return SubsumptionRelation.A_SUBSUMES_B
        if await self._is_ancestor(code_system_id, code_b, code_a):
            return SubsumptionRelation.B_SUBSUMES_A
        return SubsumptionRelation.NONE

    @_store_call("get_value_set_expansion")
    async def get_value_set_expansion(
        self, value_set_id: UUID,
    ) -> list[dict[str, Any]] | None:
        result = await self.db.execute(
            select(ValueSetExpansion.expansion_data)
            .where(ValueSetExpansion.value_set_id == value_set_id)
            .order_by(ValueSetExpansion.created_at.desc())
            .limit(1),
        )
        data = result.scalars().first()
        if data is None:
            return None
        contains = data.get("contains") if isinstance(data, dict) else None
        return list(contains) if isinstance(contains, list) else []
