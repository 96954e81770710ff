"""ClosureEntry ORM — precomputed ancestor/descendant pairs for $subsumes.

Invariants:
    - (code_system_id, ancestor_code, descendant_code) unique
    - depth >= 0; rows are written by the import pipeline, read-only here
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint, DateTime, ForeignKey, Index, Integer, String, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from termserver.db.base import Base


class ClosureEntry(Base):
    """One ancestor → descendant edge of the transitive closure."""
    __tablename__ = "closure_table"
    __table_args__ = (
        UniqueConstraint(
            "code_system_id", "ancestor_code", "descendant_code",
            name="uq_closure_system_ancestor_descendant",
        ),
        CheckConstraint("depth >= 0", name="ck_closure_depth"),
        Index("idx_closure_ancestor", "code_system_id", "ancestor_code"),
        Index("idx_closure_descendant", "code_system_id", "descendant_code"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    code_system_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("code_systems.id", ondelete="CASCADE"),
        nullable=False,
    )
    ancestor_code: Mapped[str] = mapped_column(String(255), nullable=False)
    descendant_code: Mapped[str] = mapped_column(String(255), nullable=False)
    depth: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
