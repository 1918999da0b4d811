"""Internship post model."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import JSON, Column, Date, DateTime, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from ..database.base import Base


class InternshipPost(Base):
    __tablename__ = "internship_posts"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    company_name = Column(String(255), nullable=False)
    position_title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    contact_email = Column(String(255), nullable=True)
    extracted_emails = Column(JSON, default=list)
    company_activity = Column(Text, nullable=True)
    industry_sector = Column(String(255), nullable=True)
    deadline = Column(Date, nullable=True)
    post_url = Column(String(500), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    user = relationship("User", back_populates="posts")
    applications = relationship("Application", back_populates="post", passive_deletes=True)
