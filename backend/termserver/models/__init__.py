"""ORM Models — SQLAlchemy declarative models for terminology entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - CodeSystem/ValueSet/ConceptMap are unique by (url, version)
    - Concepts, closure rows and expansions are owned by their resource (cascade delete)

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all / alembic
"""

from termserver.models.code_system import CodeSystem  # noqa: F401
from termserver.models.value_set import ValueSet  # noqa: F401
from termserver.models.concept_map import ConceptMap  # noqa: F401
from termserver.models.concept import Concept  # noqa: F401
from termserver.models.closure_entry import ClosureEntry  # noqa: F401
from termserver.models.value_set_expansion import ValueSetExpansion  # noqa: F401
