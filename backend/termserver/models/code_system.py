"""CodeSystem ORM — persists a named collection of codes.

Invariants:
    - (url, version) unique
    - Concepts and closure rows cascade-delete with their CodeSystem
"""

from sqlalchemy import CheckConstraint, UniqueConstraint
from sqlalchemy.orm import Mapped, relationship

from termserver.db.base import Base
from termserver.models.resource_columns import STATUS_CHECK, ResourceColumns


class CodeSystem(ResourceColumns, Base):
    """CodeSystem entity — owns its concepts and closure rows."""
    __tablename__ = "code_systems"
    __table_args__ = (
        UniqueConstraint("url", "version", name="uq_code_systems_url_version"),
        CheckConstraint(
            STATUS_CHECK,
            name="ck_code_systems_status",
        ),
    )

    concepts: Mapped[list["Concept"]] = relationship(
        "Concept", back_populates="code_system",
        cascade="all, delete-orphan", lazy="raise",
    )
