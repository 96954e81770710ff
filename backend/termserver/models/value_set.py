"""ValueSet ORM — persists a value set definition.

Invariants:
    - (url, version) unique
    - Expansions are stored separately (value_set_expansions) and cascade-delete
"""

from sqlalchemy import CheckConstraint, UniqueConstraint
from sqlalchemy.orm import Mapped, relationship

from termserver.db.base import Base
from termserver.models.resource_columns import STATUS_CHECK, ResourceColumns


class ValueSet(ResourceColumns, Base):
    """ValueSet entity — owns its materialised expansions."""
    __tablename__ = "value_sets"
    __table_args__ = (
        UniqueConstraint("url", "version", name="uq_value_sets_url_version"),
        CheckConstraint(
            STATUS_CHECK,
            name="ck_value_sets_status",
        ),
    )

    expansions: Mapped[list["ValueSetExpansion"]] = relationship(
        "ValueSetExpansion", back_populates="value_set",
        cascade="all, delete-orphan", lazy="raise",
    )
