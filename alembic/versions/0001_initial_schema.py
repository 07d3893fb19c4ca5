"""initial schema: clients, users, jobs (with workflow columns), notifications

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-01-15
"""
from alembic import op
import sqlalchemy as sa

revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "clients",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("default_workflow", sa.String(), nullable=True),
        sa.Column("integrations", sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_clients_name", "clients", ["name"])

    op.create_table(
        "users",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("role", sa.String(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_role", "users", ["role"])

    op.create_table(
        "jobs",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("job_number", sa.String(), nullable=True),
        sa.Column("model_name", sa.String(), nullable=False),
        # request | scheduled | scanned | qc | done | archived
        sa.Column("status", sa.String(), nullable=False, server_default="request"),
        sa.Column("priority", sa.String(), nullable=False, server_default="normal"),
        sa.Column("client", sa.String(), sa.ForeignKey("clients.id"), nullable=True),
        sa.Column("tech", sa.String(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("capture_address", sa.String(), nullable=True),
        sa.Column("city", sa.String(), nullable=True),
        sa.Column("state", sa.String(), nullable=True),
        sa.Column("sq_ft", sa.Integer(), nullable=True),
        sa.Column("scheduling_notes", sa.String(), nullable=True),
        sa.Column("tech_instructions", sa.String(), nullable=True),
        sa.Column("target_date", sa.Date(), nullable=True),
        sa.Column("scanned_date", sa.Date(), nullable=True),
        sa.Column("completion_token", sa.String(), nullable=True),
        sa.Column("completion_form_submitted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("completion_status", sa.String(), nullable=True),
        sa.Column("incompletion_reason", sa.String(), nullable=True),
        sa.Column("incompletion_notes", sa.String(), nullable=True),
        sa.Column("tech_feedback", sa.String(), nullable=True),
        sa.Column("workflow_type", sa.String(), nullable=True),
        sa.Column("workflow_steps", sa.JSON(), nullable=False),
        sa.Column("qc_status", sa.String(), nullable=False, server_default="pending"),
        sa.Column("invoice_status", sa.String(), nullable=False, server_default="not-invoiced"),
        sa.Column("total_price", sa.Float(), nullable=True),
        sa.Column("vendor_cost", sa.Float(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_jobs_job_number", "jobs", ["job_number"])
    op.create_index("ix_jobs_status", "jobs", ["status"])
    op.create_index("ix_jobs_client", "jobs", ["client"])
    op.create_index("ix_jobs_tech", "jobs", ["tech"])
    op.create_index("ix_jobs_completion_token", "jobs", ["completion_token"], unique=True)
    op.create_index("ix_jobs_workflow_type", "jobs", ["workflow_type"])

    op.create_table(
        "notifications",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("user", sa.String(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("message", sa.String(), nullable=False),
        sa.Column("type", sa.String(), nullable=False, server_default="info"),
        sa.Column("read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("related_job", sa.String(), sa.ForeignKey("jobs.id"), nullable=True),
        sa.Column("action_url", sa.String(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_notifications_user", "notifications", ["user"])
    op.create_index("ix_notifications_read", "notifications", ["read"])


def downgrade() -> None:
    op.drop_table("notifications")
    op.drop_table("jobs")
    op.drop_table("users")
    op.drop_table("clients")
