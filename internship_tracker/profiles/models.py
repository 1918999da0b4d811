"""User profile model with server-derived completeness."""

import enum
import logging
import uuid
from datetime import UTC, datetime

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    event,
)
from sqlalchemy import (
    Enum as SQLEnum,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from ..database.base import Base
from .completeness import compute_completeness

logger = logging.getLogger(__name__)


class EducationLevel(enum.StrEnum):
    HIGH_SCHOOL = "high_school"
    ASSOCIATE = "associate"
    BACHELOR = "bachelor"
    MASTER = "master"
    PHD = "phd"
    OTHER = "other"


class WorkType(enum.StrEnum):
    REMOTE = "remote"
    HYBRID = "hybrid"
    ONSITE = "onsite"
    FLEXIBLE = "flexible"


def default_notification_preferences() -> dict:
    return {
        "email_on_application_sent": True,
        "email_on_application_failed": True,
        "weekly_summary": True,
        "new_opportunities": True,
    }


class UserProfile(Base):
    __tablename__ = "user_profiles"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )

    # Tracked by completeness
    full_name = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    linkedin_url = Column(String(500), nullable=True)
    bio = Column(Text, nullable=True)
    target_position = Column(String(255), nullable=True)
    target_industry = Column(String(255), nullable=True, index=True)
    profile_picture_url = Column(String(500), nullable=True)
    github_url = Column(String(500), nullable=True)
    portfolio_url = Column(String(500), nullable=True)
    years_of_experience = Column(Integer, default=0)
    education_level = Column(
        SQLEnum(EducationLevel, values_callable=lambda e: [lvl.value for lvl in e]),
        nullable=True,
    )
    preferred_locations = Column(JSON, default=list)
    availability_date = Column(Date, nullable=True)
    salary_expectation = Column(String(255), nullable=True)
    email_signature = Column(Text, nullable=True)

    # Not tracked
    twitter_url = Column(String(500), nullable=True)
    preferred_work_type = Column(
        SQLEnum(WorkType, values_callable=lambda e: [w.value for w in e]),
        default=WorkType.REMOTE,
    )
    notification_preferences = Column(JSON, default=default_notification_preferences)
    is_profile_public = Column(Boolean, default=False, nullable=False)
    timezone = Column(String(64), default="UTC")
    language_preference = Column(String(10), default="en")

    completeness = Column(Integer, default=0, nullable=False)

    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    user = relationship("User", back_populates="profile")

    __table_args__ = (
        CheckConstraint("completeness >= 0 AND completeness <= 100", name="ck_user_profiles_completeness"),
    )


@event.listens_for(UserProfile, "before_insert")
@event.listens_for(UserProfile, "before_update")
def score_profile_completeness(mapper, connection, target: UserProfile) -> None:
    # Always server-derived: whatever the caller put in completeness is replaced
    target.completeness = compute_completeness(target)
    logger.debug("Profile %s completeness=%d", target.user_id, target.completeness)
