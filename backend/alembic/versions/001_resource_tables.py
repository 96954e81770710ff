"""Resource tables — code_systems, value_sets, concept_maps.

Revision ID: 001_resource_tables
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_resource_tables"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_STATUS_CHECK = "status IN ('draft', 'active', 'retired', 'unknown')"


def _resource_columns() -> list[sa.Column]:
    return [
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("url", sa.String(512), nullable=False),
        sa.Column("version", sa.String(100), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="unknown"),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("title", sa.Text, nullable=True),
        sa.Column("fhir_version", sa.String(10), nullable=True),
        sa.Column("content", sa.JSON, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "code_systems",
        *_resource_columns(),
        sa.UniqueConstraint("url", "version", name="uq_code_systems_url_version"),
        sa.CheckConstraint(_STATUS_CHECK, name="ck_code_systems_status"),
    )
    op.create_index("ix_code_systems_url", "code_systems", ["url"])

    op.create_table(
        "value_sets",
        *_resource_columns(),
        sa.UniqueConstraint("url", "version", name="uq_value_sets_url_version"),
        sa.CheckConstraint(_STATUS_CHECK, name="ck_value_sets_status"),
    )
    op.create_index("ix_value_sets_url", "value_sets", ["url"])

    op.create_table(
        "concept_maps",
        *_resource_columns(),
        sa.Column("source_uri", sa.String(512), nullable=True),
        sa.Column("target_uri", sa.String(512), nullable=True),
        sa.UniqueConstraint("url", "version", name="uq_concept_maps_url_version"),
        sa.CheckConstraint(_STATUS_CHECK, name="ck_concept_maps_status"),
    )
    op.create_index("ix_concept_maps_url", "concept_maps", ["url"])
    op.create_index("ix_concept_maps_source_uri", "concept_maps", ["source_uri"])
    op.create_index("ix_concept_maps_target_uri", "concept_maps", ["target_uri"])


def downgrade() -> None:
    op.drop_table("concept_maps")
    op.drop_table("value_sets")
    op.drop_table("code_systems")
