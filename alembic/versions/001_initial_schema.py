"""Initial schema: users, resumes, contacts and votes, profiles, posts, applications, audit log.

Revision ID: 001
Revises: None
Create Date: 2026-10-18
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects.postgresql import JSONB, UUID

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_ENUM_TYPES = ("contacttype", "votetype", "educationlevel", "worktype", "applicationstatus")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(255), unique=True, nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("is_active", sa.Boolean(), default=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_users_email", "users", ["email"])

    op.create_table(
        "resumes",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("resume_name", sa.String(255), server_default="My Resume"),
        sa.Column("file_url", sa.String(500), nullable=False),
        sa.Column("content_type", sa.String(100), server_default=""),
        sa.Column("file_size", sa.Integer(), server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("parsed_content", JSONB(), server_default="{}"),
        sa.Column("education", JSONB(), server_default="[]"),
        sa.Column("skills", JSONB(), server_default="[]"),
        sa.Column("experience", JSONB(), server_default="[]"),
        sa.Column("projects", JSONB(), server_default="[]"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_resumes_user_id", "resumes", ["user_id"])
    op.create_index(
        "idx_resumes_user_active",
        "resumes",
        ["user_id"],
        postgresql_where=sa.text("is_active"),
    )

    op.create_table(
        "contacts",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("company_name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("industry", sa.String(255), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("contact_person_name", sa.String(255), nullable=True),
        sa.Column("position", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("website", sa.String(500), nullable=True),
        sa.Column(
            "contact_type",
            sa.Enum("recruiter", "hr", "manager", "general", name="contacttype"),
            server_default="recruiter",
        ),
        sa.Column("is_public", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("verification_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("verified_by", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("upvotes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("downvotes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_contacts_user_id", "contacts", ["user_id"])
    op.create_index("idx_contacts_public_company", "contacts", ["is_public", "company_name"])
    op.create_index("idx_contacts_industry", "contacts", ["industry"])

    op.create_table(
        "contact_votes",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "contact_id", UUID(as_uuid=True), sa.ForeignKey("contacts.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("vote_type", sa.Enum("up", "down", name="votetype"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("contact_id", "user_id", name="uq_contact_votes_contact_user"),
    )
    op.create_index("ix_contact_votes_contact_id", "contact_votes", ["contact_id"])
    op.create_index("ix_contact_votes_user_id", "contact_votes", ["user_id"])

    op.create_table(
        "user_profiles",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id",
            UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("full_name", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("linkedin_url", sa.String(500), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("target_position", sa.String(255), nullable=True),
        sa.Column("target_industry", sa.String(255), nullable=True),
        sa.Column("profile_picture_url", sa.String(500), nullable=True),
        sa.Column("github_url", sa.String(500), nullable=True),
        sa.Column("portfolio_url", sa.String(500), nullable=True),
        sa.Column("years_of_experience", sa.Integer(), server_default="0"),
        sa.Column(
            "education_level",
            sa.Enum("high_school", "associate", "bachelor", "master", "phd", "other", name="educationlevel"),
            nullable=True,
        ),
        sa.Column("preferred_locations", JSONB(), server_default="[]"),
        sa.Column("availability_date", sa.Date(), nullable=True),
        sa.Column("salary_expectation", sa.String(255), nullable=True),
        sa.Column("email_signature", sa.Text(), nullable=True),
        sa.Column("twitter_url", sa.String(500), nullable=True),
        sa.Column(
            "preferred_work_type",
            sa.Enum("remote", "hybrid", "onsite", "flexible", name="worktype"),
            server_default="remote",
        ),
        sa.Column(
            "notification_preferences",
            JSONB(),
            server_default=(
                '{"email_on_application_sent": true, "email_on_application_failed": true, '
                '"weekly_summary": true, "new_opportunities": true}'
            ),
        ),
        sa.Column("is_profile_public", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("timezone", sa.String(64), server_default="UTC"),
        sa.Column("language_preference", sa.String(10), server_default="en"),
        sa.Column("completeness", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("completeness >= 0 AND completeness <= 100", name="ck_user_profiles_completeness"),
    )
    op.create_index("ix_user_profiles_user_id", "user_profiles", ["user_id"])
    op.create_index("ix_user_profiles_target_industry", "user_profiles", ["target_industry"])

    op.create_table(
        "internship_posts",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("company_name", sa.String(255), nullable=False),
        sa.Column("position_title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("contact_email", sa.String(255), nullable=True),
        sa.Column("extracted_emails", JSONB(), server_default="[]"),
        sa.Column("company_activity", sa.Text(), nullable=True),
        sa.Column("industry_sector", sa.String(255), nullable=True),
        sa.Column("deadline", sa.Date(), nullable=True),
        sa.Column("post_url", sa.String(500), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_internship_posts_user_id", "internship_posts", ["user_id"])

    op.create_table(
        "applications",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "post_id", UUID(as_uuid=True), sa.ForeignKey("internship_posts.id", ondelete="SET NULL"), nullable=True
        ),
        sa.Column("contact_id", UUID(as_uuid=True), sa.ForeignKey("contacts.id", ondelete="SET NULL"), nullable=True),
        sa.Column("resume_id", UUID(as_uuid=True), sa.ForeignKey("resumes.id", ondelete="SET NULL"), nullable=True),
        sa.Column("recipient_email", sa.String(255), nullable=False),
        sa.Column("subject", sa.String(500), nullable=False),
        sa.Column("email_body", sa.Text(), nullable=False),
        sa.Column("ai_generated", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "status",
            sa.Enum("draft", "sent", "failed", "scheduled", name="applicationstatus"),
            nullable=False,
            server_default="draft",
        ),
        sa.Column("sent_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("scheduled_for", sa.DateTime(timezone=True), nullable=True),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_applications_user_id", "applications", ["user_id"])
    op.create_index("idx_applications_user_status", "applications", ["user_id", "status"])

    op.create_table(
        "audit_logs",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("action", sa.String(50), nullable=False),
        sa.Column("resource_type", sa.String(30), server_default=""),
        sa.Column("resource_id", UUID(as_uuid=True), nullable=True),
        sa.Column("detail", sa.Text(), server_default=""),
        sa.Column("ip_address", sa.String(45), server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_audit_logs_action", "audit_logs", ["action"])
    op.create_index("ix_audit_logs_created_at", "audit_logs", ["created_at"])
    op.create_index("idx_audit_user_created", "audit_logs", ["user_id", "created_at"])


def downgrade() -> None:
    op.drop_table("audit_logs")
    op.drop_table("applications")
    op.drop_table("internship_posts")
    op.drop_table("user_profiles")
    op.drop_table("contact_votes")
    op.drop_table("contacts")
    op.drop_table("resumes")
    op.drop_table("users")
    for name in _ENUM_TYPES:
        sa.Enum(name=name).drop(op.get_bind(), checkfirst=True)
