"""Outgoing application email model."""

import enum
import uuid
from datetime import UTC, datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, String, Text
from sqlalchemy import (
    Enum as SQLEnum,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from ..database.base import Base


class ApplicationStatus(enum.StrEnum):
    DRAFT = "draft"
    SENT = "sent"
    FAILED = "failed"
    SCHEDULED = "scheduled"


class Application(Base):
    __tablename__ = "applications"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    post_id = Column(UUID(as_uuid=True), ForeignKey("internship_posts.id", ondelete="SET NULL"), nullable=True)
    contact_id = Column(UUID(as_uuid=True), ForeignKey("contacts.id", ondelete="SET NULL"), nullable=True)
    resume_id = Column(UUID(as_uuid=True), ForeignKey("resumes.id", ondelete="SET NULL"), nullable=True)
    recipient_email = Column(String(255), nullable=False)
    subject = Column(String(500), nullable=False)
    email_body = Column(Text, nullable=False)
    ai_generated = Column(Boolean, default=False, nullable=False)
    status = Column(
        SQLEnum(ApplicationStatus, values_callable=lambda e: [s.value for s in e]),
        default=ApplicationStatus.DRAFT,
        nullable=False,
    )
    sent_at = Column(DateTime(timezone=True), nullable=True)
    scheduled_for = Column(DateTime(timezone=True), nullable=True)
    error_message = Column(Text, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
    )

    user = relationship("User", back_populates="applications")
    post = relationship("InternshipPost", back_populates="applications")
    resume = relationship("Resume")

    __table_args__ = (
        Index("idx_applications_user_status", "user_id", "status"),
    )
