"""Resource Columns — columns shared by CodeSystem, ValueSet and ConceptMap tables.

Invariants:
    - content holds the full resource JSON; other columns are extracted lookup keys
    - updated_at drives the "latest version" policy when no version is requested
    - status limited to draft | active | retired | unknown
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from termserver.core.domain_types import ResourceStatus

STATUS_CHECK = "status IN ({})".format(
    ", ".join(f"'{s.value}'" for s in ResourceStatus),
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ResourceColumns:
    """Declarative mixin for canonical terminology resources."""

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    url: Mapped[str] = mapped_column(String(512), nullable=False, index=True)
    version: Mapped[str | None] = mapped_column(String(100), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="unknown",
    )
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    title: Mapped[str | None] = mapped_column(Text, nullable=True)
    fhir_version: Mapped[str | None] = mapped_column(String(10), nullable=True)
    content: Mapped[dict] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
