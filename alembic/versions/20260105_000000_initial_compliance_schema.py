"""Initial schema for Compliance-AI

Revision ID: 20260105_000000
Revises: None
Create Date: 2026-01-05 00:00:00.000000

Creates every table of the compliance backend:
- Users and departments
- AI system inventory, risk assessments and documents
- Activity log, alerts and deadlines
- Training modules and progress
- Approval workflow items, assignments, history, notifications and settings
- Stored API keys and the regulatory glossary

Training modules are not seeded here; run
``python -m compliance_ai.scripts.seed_training_modules``.

Revision format: YYYYMMDD_HHMMSS_description

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20260105_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables."""

    # Create users table
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("uid", sa.String(128), nullable=False),
        sa.Column("username", sa.String(128), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column("display_name", sa.String(255), nullable=True),
        sa.Column("role", sa.String(32), nullable=False, server_default="user"),
        sa.Column("department", sa.String(128), nullable=True),
        sa.Column("photo_url", sa.String(512), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_users_uid", "uid", unique=True),
        sa.Index("ix_users_email", "email", unique=True),
        sa.Index("ix_users_role", "role"),
    )

    # Create departments table
    op.create_table(
        "departments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column("compliance_score", sa.Integer(), nullable=True, server_default="0"),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_departments_name", "name", unique=True),
    )

    # Create ai_systems table
    op.create_table(
        "ai_systems",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("system_id", sa.String(64), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("vendor", sa.String(255), nullable=True),
        sa.Column("department", sa.String(128), nullable=True),
        sa.Column("risk_level", sa.String(16), nullable=True),
        sa.Column("risk_score", sa.Integer(), nullable=True),
        sa.Column("implementation_date", sa.DateTime(), nullable=True),
        sa.Column("last_assessment_date", sa.DateTime(), nullable=True),
        sa.Column("doc_completeness", sa.Integer(), nullable=True, server_default="0"),
        sa.Column("training_completeness", sa.Integer(), nullable=True, server_default="0"),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(32), nullable=False, server_default="active"),
        sa.Column("purpose", sa.Text(), nullable=True),
        sa.Column("version", sa.String(64), nullable=True),
        sa.Column("ai_capabilities", sa.Text(), nullable=True),
        sa.Column("training_datasets", sa.Text(), nullable=True),
        sa.Column("usage_context", sa.Text(), nullable=True),
        sa.Column("potential_impact", sa.Text(), nullable=True),
        sa.Column("keywords", sa.JSON(), nullable=True),
        sa.Column("expected_lifetime", sa.String(128), nullable=True),
        sa.Column("maintenance_schedule", sa.String(255), nullable=True),
        sa.Column("deployment_scope", sa.String(255), nullable=True),
        sa.Column("created_by", sa.String(128), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_ai_systems_system_id", "system_id", unique=True),
        sa.Index("ix_ai_systems_department", "department"),
        sa.Index("ix_ai_systems_risk_level", "risk_level"),
        sa.Index("ix_ai_systems_status", "status"),
    )

    # Create risk_assessments table
    op.create_table(
        "risk_assessments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("assessment_id", sa.String(64), nullable=False),
        sa.Column("system_id", sa.String(64), nullable=False),
        sa.Column("assessment_date", sa.DateTime(), nullable=False),
        sa.Column("status", sa.String(32), nullable=False, server_default="draft"),
        sa.Column("risk_level", sa.String(16), nullable=False),
        sa.Column("risk_score", sa.Integer(), nullable=True),
        sa.Column("system_category", sa.String(128), nullable=True),
        sa.Column("prohibited_use_checks", sa.JSON(), nullable=True),
        sa.Column("eu_ai_act_articles", sa.JSON(), nullable=True),
        sa.Column("compliance_gaps", sa.JSON(), nullable=True),
        sa.Column("remediation_actions", sa.JSON(), nullable=True),
        sa.Column("evidence_documents", sa.JSON(), nullable=True),
        sa.Column("summary_notes", sa.Text(), nullable=True),
        sa.Column("created_by", sa.String(128), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_risk_assessments_assessment_id", "assessment_id", unique=True),
        sa.Index("ix_risk_assessments_system_id", "system_id"),
        sa.Index("ix_risk_assessments_status", "status"),
    )

    # Create documents table
    op.create_table(
        "documents",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("type", sa.String(64), nullable=False),
        sa.Column("system_id", sa.String(64), nullable=True),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("version", sa.String(32), nullable=False, server_default="1.0"),
        sa.Column("status", sa.String(32), nullable=False, server_default="draft"),
        sa.Column("created_by", sa.String(128), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_documents_type", "type"),
        sa.Index("ix_documents_system_id", "system_id"),
        sa.Index("ix_documents_status", "status"),
    )

    # Create activities table (details are stored in the "metadata" column)
    op.create_table(
        "activities",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("type", sa.String(64), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("user_id", sa.String(128), nullable=True),
        sa.Column("system_id", sa.String(64), nullable=True),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
        sa.Column("metadata", sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_activities_type", "type"),
        sa.Index("ix_activities_user_id", "user_id"),
        sa.Index("ix_activities_system_id", "system_id"),
        sa.Index("ix_activities_timestamp", "timestamp"),
    )

    # Create alerts table
    op.create_table(
        "alerts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("type", sa.String(64), nullable=False),
        sa.Column("severity", sa.String(16), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("system_id", sa.String(64), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("is_resolved", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_alerts_severity", "severity"),
        sa.Index("ix_alerts_system_id", "system_id"),
        sa.Index("ix_alerts_is_resolved", "is_resolved"),
    )

    # Create deadlines table
    op.create_table(
        "deadlines",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column("type", sa.String(64), nullable=False),
        sa.Column("related_system_id", sa.String(64), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_deadlines_date", "date"),
    )

    # Create training_modules table
    op.create_table(
        "training_modules",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("module_id", sa.String(64), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("estimated_time", sa.String(64), nullable=True),
        sa.Column("topics", sa.JSON(), nullable=True),
        sa.Column("role_relevance", sa.JSON(), nullable=True),
        sa.Column("content", sa.JSON(), nullable=True),
        sa.Column("order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("status", sa.String(32), nullable=False, server_default="active"),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_training_modules_module_id", "module_id", unique=True),
    )

    # Create training_progress table
    op.create_table(
        "training_progress",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(128), nullable=False),
        sa.Column("module_id", sa.String(64), nullable=False),
        sa.Column("completion", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("assessment_score", sa.Integer(), nullable=True),
        sa.Column("last_attempt_date", sa.DateTime(), nullable=False),
        sa.Column("certificate_id", sa.String(64), nullable=True),
        sa.Column("completed_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_training_progress_user_id", "user_id"),
        sa.Index("ix_training_progress_module_id", "module_id"),
        sa.Index("ix_training_progress_certificate_id", "certificate_id", unique=True),
    )

    # Create approval_items table
    op.create_table(
        "approval_items",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("workflow_id", sa.String(64), nullable=False),
        sa.Column("module_type", sa.String(32), nullable=False),
        sa.Column("module_id", sa.String(64), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("submitted_by", sa.String(128), nullable=False),
        sa.Column("submitter_name", sa.String(255), nullable=True),
        sa.Column("department", sa.String(128), nullable=True),
        sa.Column("submitted_date", sa.DateTime(), nullable=False),
        sa.Column("due_date", sa.DateTime(), nullable=True),
        sa.Column("status", sa.String(16), nullable=False, server_default="pending"),
        sa.Column("priority", sa.String(16), nullable=False, server_default="medium"),
        sa.Column("details", sa.JSON(), nullable=True),
        sa.Column("language", sa.String(8), nullable=False, server_default="en"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_approval_items_workflow_id", "workflow_id", unique=True),
        sa.Index("ix_approval_items_module_type", "module_type"),
        sa.Index("ix_approval_items_module_id", "module_id"),
        sa.Index("ix_approval_items_submitted_by", "submitted_by"),
        sa.Index("ix_approval_items_submitted_date", "submitted_date"),
        sa.Index("ix_approval_items_status", "status"),
        sa.Index("ix_approval_items_priority", "priority"),
    )

    # Create approval_assignments table
    op.create_table(
        "approval_assignments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("workflow_id", sa.String(64), nullable=False),
        sa.Column("assigned_to", sa.String(128), nullable=False),
        sa.Column("assigned_by", sa.String(128), nullable=False),
        sa.Column("assigned_date", sa.DateTime(), nullable=False),
        sa.Column("due_date", sa.DateTime(), nullable=True),
        sa.Column("is_auto_assigned", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("status", sa.String(16), nullable=False, server_default="pending"),
        sa.Column("priority", sa.String(16), nullable=False, server_default="medium"),
        sa.Column("comments", sa.Text(), nullable=True),
        sa.Column("completed_date", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_approval_assignments_workflow_id", "workflow_id"),
        sa.Index("ix_approval_assignments_assigned_to", "assigned_to"),
        sa.Index("ix_approval_assignments_due_date", "due_date"),
        sa.Index("ix_approval_assignments_status", "status"),
    )

    # Create approval_history table
    op.create_table(
        "approval_history",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("workflow_id", sa.String(64), nullable=False),
        sa.Column("action_type", sa.String(32), nullable=False),
        sa.Column("action_by", sa.String(128), nullable=False),
        sa.Column("action_by_name", sa.String(255), nullable=True),
        sa.Column("action_date", sa.DateTime(), nullable=False),
        sa.Column("details", sa.Text(), nullable=True),
        sa.Column("comments", sa.Text(), nullable=True),
        sa.Column("previous_status", sa.String(16), nullable=True),
        sa.Column("new_status", sa.String(16), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_approval_history_workflow_id", "workflow_id"),
        sa.Index("ix_approval_history_action_date", "action_date"),
    )

    # Create approval_notifications table
    op.create_table(
        "approval_notifications",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("workflow_id", sa.String(64), nullable=False),
        sa.Column("user_id", sa.String(128), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("priority", sa.String(16), nullable=False, server_default="medium"),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("related_action", sa.String(64), nullable=True),
        sa.Column("language", sa.String(8), nullable=False, server_default="en"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_approval_notifications_workflow_id", "workflow_id"),
        sa.Index("ix_approval_notifications_user_id", "user_id"),
        sa.Index("ix_approval_notifications_is_read", "is_read"),
        sa.Index("ix_approval_notifications_created_at", "created_at"),
    )

    # Create approval_settings table
    op.create_table(
        "approval_settings",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(128), nullable=False),
        sa.Column("auto_assign_enabled", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("default_assignees", sa.JSON(), nullable=True),
        sa.Column("notification_frequency", sa.String(16), nullable=False, server_default="immediately"),
        sa.Column("email_notifications_enabled", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("language", sa.String(8), nullable=False, server_default="en"),
        sa.Column("department_rules", sa.JSON(), nullable=True),
        sa.Column("module_type_rules", sa.JSON(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_approval_settings_user_id", "user_id", unique=True),
    )

    # Create api_keys table
    op.create_table(
        "api_keys",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("provider", sa.String(32), nullable=False),
        sa.Column("key", sa.Text(), nullable=False),
        sa.Column("description", sa.String(255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("usage_limit", sa.Integer(), nullable=True),
        sa.Column("usage_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_used", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_api_keys_provider", "provider"),
        sa.Index("ix_api_keys_is_active", "is_active"),
    )

    # Create regulatory_terms table
    op.create_table(
        "regulatory_terms",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("term", sa.String(255), nullable=False),
        sa.Column("definition", sa.Text(), nullable=False),
        sa.Column("explanation", sa.Text(), nullable=True),
        sa.Column("article_reference", sa.String(128), nullable=True),
        sa.Column("category", sa.String(64), nullable=True),
        sa.Column("language", sa.String(8), nullable=False, server_default="en"),
        sa.Column("created_by", sa.String(128), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("term", "language", name="uq_regulatory_terms_term_language"),
        sa.Index("ix_regulatory_terms_term", "term"),
        sa.Index("ix_regulatory_terms_category", "category"),
        sa.Index("ix_regulatory_terms_language", "language"),
    )


def downgrade() -> None:
    """Drop all tables."""
    for table in (
        "regulatory_terms",
        "api_keys",
        "approval_settings",
        "approval_notifications",
        "approval_history",
        "approval_assignments",
        "approval_items",
        "training_progress",
        "training_modules",
        "deadlines",
        "alerts",
        "activities",
        "documents",
        "risk_assessments",
        "ai_systems",
        "departments",
        "users",
    ):
        op.drop_table(table)
