"""ConceptMap ORM — persists a translation document between code systems.

Invariants:
    - (url, version) unique
    - source_uri/target_uri are indexed hints only; translation reads content.group
"""

from sqlalchemy import CheckConstraint, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from termserver.db.base import Base
from termserver.models.resource_columns import STATUS_CHECK, ResourceColumns


class ConceptMap(ResourceColumns, Base):
    """ConceptMap entity — groups of element → target translations."""
    __tablename__ = "concept_maps"
    __table_args__ = (
        UniqueConstraint("url", "version", name="uq_concept_maps_url_version"),
        CheckConstraint(
            STATUS_CHECK,
            name="ck_concept_maps_status",
        ),
    )

    source_uri: Mapped[str | None] = mapped_column(
        String(512), nullable=True, index=True,
    )
    target_uri: Mapped[str | None] = mapped_column(
        String(512), nullable=True, index=True,
    )
