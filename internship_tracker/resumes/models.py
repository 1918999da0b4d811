"""Resume model and the single-active-resume rule."""

import logging
import uuid
from collections import defaultdict
from datetime import UTC, datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Index, Integer, String, event, inspect, select, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Session, relationship

from ..database.base import Base

logger = logging.getLogger(__name__)


class Resume(Base):
    __tablename__ = "resumes"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    resume_name = Column(String(255), default="My Resume")
    file_url = Column(String(500), nullable=False)  # "{user_id}/{filename}" in the resumes bucket
    content_type = Column(String(100), default="")
    file_size = Column(Integer, default=0)
    is_active = Column(Boolean, default=True, nullable=False)
    parsed_content = Column(JSON, default=dict)
    education = Column(JSON, default=list)
    skills = Column(JSON, default=list)
    experience = Column(JSON, default=list)
    projects = Column(JSON, default=list)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    user = relationship("User", back_populates="resumes")

    __table_args__ = (
        Index(
            "idx_resumes_user_active",
            "user_id",
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active = 1"),
        ),
    )


def _owner_id(resume: Resume):
    if resume.user_id is not None:
        return resume.user_id
    return resume.user.id if resume.user is not None else None


def _is_being_activated(session: Session, resume: Resume) -> bool:
    """True for a new active resume or an existing one whose is_active changes to true."""
    if resume in session.new:
        # None falls back to the column default, which is active
        return resume.is_active is not False
    history = inspect(resume).attrs.is_active.history
    return True in history.added


@event.listens_for(Session, "before_flush")
def enforce_single_active_resume(session: Session, flush_context, instances) -> None:
    """Deactivate an owner's other resumes when one of them is activated.

    Runs inside the flush transaction, so the activation and the sibling
    deactivation commit or fail together. When several resumes of one owner
    are activated in the same flush, the last one written wins.
    """
    activated: dict = defaultdict(list)
    for obj in [*session.new, *session.dirty]:
        if isinstance(obj, Resume) and _is_being_activated(session, obj):
            activated[_owner_id(obj)].append(obj)

    for owner_id, candidates in activated.items():
        winner = candidates[-1]
        winner.is_active = True
        losers = candidates[:-1]

        if owner_id is not None:
            with session.no_autoflush:
                stored = session.scalars(
                    select(Resume).where(Resume.user_id == owner_id, Resume.is_active.is_(True))
                ).all()
            losers.extend(r for r in stored if r is not winner and r not in losers)

        for resume in losers:
            resume.is_active = False

        if losers:
            logger.debug("Activated resume for user %s, deactivated %d other(s)", owner_id, len(losers))
