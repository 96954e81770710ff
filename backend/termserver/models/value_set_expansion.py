"""ValueSetExpansion ORM — a materialised expansion snapshot for one ValueSet.

Invariants:
    - expansion_data is a ValueSet.expansion-shaped document; only `contains` is read
    - The newest snapshot (created_at) is the one served by $expand
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from termserver.db.base import Base


class ValueSetExpansion(Base):
    """Precomputed expansion rows for a ValueSet."""
    __tablename__ = "value_set_expansions"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    value_set_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("value_sets.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    expansion_data: Mapped[dict] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )

    value_set: Mapped["ValueSet"] = relationship(
        "ValueSet", back_populates="expansions",
    )
