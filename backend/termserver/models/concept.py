"""Concept ORM — one code inside one CodeSystem.

Invariants:
    - (code_system_id, code) unique
    - properties is either a name → value mapping or a FHIR `property` array;
      the store adapter normalises both to a mapping
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, JSON, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from termserver.db.base import Base


class Concept(Base):
    """Concept entity — code, display, definition, free-form properties."""
    __tablename__ = "concepts"
    __table_args__ = (
        UniqueConstraint("code_system_id", "code", name="uq_concepts_system_code"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    code_system_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("code_systems.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    code: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    display: Mapped[str | None] = mapped_column(Text, nullable=True)
    definition: Mapped[str | None] = mapped_column(Text, nullable=True)
    properties: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    code_system: Mapped["CodeSystem"] = relationship(
        "CodeSystem", back_populates="concepts",
    )
