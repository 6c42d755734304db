"""create irrigation tables

Revision ID: 0001_create_irrigation_tables
Revises:
Create Date: 2026-10-17
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "0001_create_irrigation_tables"
down_revision: Union[str, Sequence[str], None] = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # --- Users ---
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("email", sa.String(), nullable=False, unique=True),
        sa.Column("full_name", sa.String(), nullable=False),
        sa.Column("role", sa.String(length=10), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )

    # --- Fields ---
    op.create_table(
        "fields",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("crop_type", sa.String(), nullable=False),
        sa.Column("warning_threshold", sa.Float(), nullable=False, server_default="10"),
        sa.Column("critical_threshold", sa.Float(), nullable=False, server_default="15"),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )

    # --- Irrigation readings ---
    op.create_table(
        "irrigation_logs",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("field_id", sa.String(length=36), sa.ForeignKey("fields.id"), nullable=False),
        sa.Column("moisture_deficit", sa.Float(), nullable=False),
        sa.Column("recorded_by_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_irrigation_logs_field_created", "irrigation_logs", ["field_id", "created_at"])

    # --- Remediation tasks ---
    op.create_table(
        "tasks",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("field_id", sa.String(length=36), sa.ForeignKey("fields.id"), nullable=False),
        sa.Column("incident_id", sa.String(length=36), nullable=True),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=9), nullable=False),
        sa.Column("priority", sa.String(length=8), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_tasks_field_id", "tasks", ["field_id"])

    # --- Notification ledger ---
    op.create_table(
        "notification_logs",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("event_type", sa.String(), nullable=False),
        sa.Column("related_entity_id", sa.String(length=36), nullable=False),
        sa.Column("delivery_status", sa.String(length=9), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )


def downgrade() -> None:
    op.drop_table("notification_logs")
    op.drop_index("ix_tasks_field_id", table_name="tasks")
    op.drop_table("tasks")
    op.drop_index("ix_irrigation_logs_field_created", table_name="irrigation_logs")
    op.drop_table("irrigation_logs")
    op.drop_table("fields")
    op.drop_table("users")
