"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - Subsumption outcomes and relations encoded as Enums — no raw string matching
    - SubsumptionOutcome values are the literal wire codes

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum


# ─── Enums ───────────────────────────────────────────────────────

class ResourceType(str, Enum):
    """Terminology resource types served by this API."""
    CODE_SYSTEM = "CodeSystem"
    VALUE_SET = "ValueSet"
    CONCEPT_MAP = "ConceptMap"


class ResourceStatus(str, Enum):
    """Publication status — maps to DB `status` column check constraint."""
    DRAFT = "draft"
    ACTIVE = "active"
    RETIRED = "retired"
    UNKNOWN = "unknown"


class SubsumptionOutcome(str, Enum):
    """$subsumes outcome codes."""
    EQUIVALENT = "equivalent"
    SUBSUMES = "subsumes"
    SUBSUMED_BY = "subsumed-by"
    NOT_SUBSUMED = "not-subsumed"


class SubsumptionRelation(str, Enum):
    """Three-valued answer from the precomputed ancestor/descendant closure."""
    A_SUBSUMES_B = "a_subsumes_b"
    B_SUBSUMES_A = "b_subsumes_a"
    NONE = "none"


class FhirVersion(str, Enum):
    """Versioned base paths the API is mounted under."""
    R4 = "r4"
    R5 = "r5"
    R6 = "r6"


# ─── Search ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class SearchParams:
    """Filter bag for resource listing. name matches as a case-insensitive substring."""
    url: str | None = None
    name: str | None = None
    status: str | None = None
    fhir_version: str | None = None
    limit: int | None = None
    offset: int | None = None
