"""Store Records — read-only projections of stored terminology entities.

Invariants:
    - Records are frozen: the operations core never mutates store data
    - content is the authoritative resource body; columns are lookup keys only
    - ConceptRecord.properties is always a mapping (or None), never a FHIR array

Design Decisions:
    - Dataclasses instead of ORM instances: core never imports models/ or db/
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID


@dataclass(frozen=True)
class CodeSystemRecord:
    id: UUID
    url: str
    status: str
    content: dict[str, Any]
    version: str | None = None
    name: str | None = None
    title: str | None = None
    fhir_version: str | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class ValueSetRecord:
    id: UUID
    url: str
    status: str
    content: dict[str, Any]
    version: str | None = None
    name: str | None = None
    title: str | None = None
    fhir_version: str | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class ConceptMapRecord:
    id: UUID
    url: str
    status: str
    content: dict[str, Any]
    version: str | None = None
    name: str | None = None
    title: str | None = None
    source_uri: str | None = None
    target_uri: str | None = None
    fhir_version: str | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class ConceptRecord:
    id: UUID
    code_system_id: UUID
    code: str
    display: str | None = None
    definition: str | None = None
    properties: dict[str, Any] | None = field(default=None)


def normalize_properties(raw: Any) -> dict[str, Any] | None:
    """Coerce stored concept properties into a name → value mapping.

    Accepts either a plain mapping or a FHIR `property` array
    ([{"code": "status", "valueCode": "active"}, ...]). Array entries
    without a code are dropped; the first value[x] field wins.
    """
    if raw is None:
        return None
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, list):
        mapping: dict[str, Any] = {}
        for entry in raw:
            if not isinstance(entry, dict) or not isinstance(entry.get("code"), str):
                continue
            value = next(
                (v for k, v in entry.items() if k.startswith("value")), None,
            )
            mapping[entry["code"]] = value
        return mapping
    return None
