"""Concepts, closure table and ValueSet expansion snapshots.

Revision ID: 002_concepts_closure
Revises: 001_resource_tables
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "002_concepts_closure"
down_revision: Union[str, None] = "001_resource_tables"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "concepts",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "code_system_id", UUID(as_uuid=True),
            sa.ForeignKey("code_systems.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("code", sa.String(255), nullable=False),
        sa.Column("display", sa.Text, nullable=True),
        sa.Column("definition", sa.Text, nullable=True),
        sa.Column("properties", sa.JSON, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("code_system_id", "code", name="uq_concepts_system_code"),
    )
    op.create_index("ix_concepts_code_system_id", "concepts", ["code_system_id"])
    op.create_index("ix_concepts_code", "concepts", ["code"])

    op.create_table(
        "closure_table",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "code_system_id", UUID(as_uuid=True),
            sa.ForeignKey("code_systems.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("ancestor_code", sa.String(255), nullable=False),
        sa.Column("descendant_code", sa.String(255), nullable=False),
        sa.Column("depth", sa.Integer, nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint(
            "code_system_id", "ancestor_code", "descendant_code",
            name="uq_closure_system_ancestor_descendant",
        ),
        sa.CheckConstraint("depth >= 0", name="ck_closure_depth"),
    )
    op.create_index("idx_closure_ancestor", "closure_table", ["code_system_id", "ancestor_code"])
    op.create_index("idx_closure_descendant", "closure_table", ["code_system_id", "descendant_code"])

    op.create_table(
        "value_set_expansions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "value_set_id", UUID(as_uuid=True),
            sa.ForeignKey("value_sets.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("expansion_data", sa.JSON, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_value_set_expansions_value_set_id", "value_set_expansions", ["value_set_id"])
    op.create_index("ix_value_set_expansions_created_at", "value_set_expansions", ["created_at"])


def downgrade() -> None:
    op.drop_table("value_set_expansions")
    op.drop_table("closure_table")
    op.drop_table("concepts")
