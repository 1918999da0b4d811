"""Resume service: uploads, listing, and active-resume selection.

Keeping a single active resume per user is done by the flush listener in
``models``; these functions only express the caller's intent.
"""

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from ..dependencies import to_uuid
from .models import Resume

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = frozenset({
    "application/pdf",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/msword",
})


def upload_resume(
    db: Session,
    user_id: UUID,
    file_url: str,
    resume_name: str = "My Resume",
    content_type: str = "",
    file_size: int = 0,
) -> Resume:
    """Register an uploaded resume file. A newly uploaded resume becomes the active one."""
    resume = Resume(
        user_id=user_id,
        file_url=file_url,
        resume_name=resume_name or "My Resume",
        content_type=content_type,
        file_size=file_size,
        is_active=True,
    )
    db.add(resume)
    db.flush()
    logger.info("Resume %s uploaded for user %s", resume.id, user_id)
    return resume


def list_resumes(db: Session, user_id: UUID) -> list[Resume]:
    """All resumes of a user, active first, then most recently updated."""
    return (
        db.query(Resume)
        .filter(Resume.user_id == user_id)
        .order_by(Resume.is_active.desc(), Resume.updated_at.desc())
        .all()
    )


def get_resume(db: Session, resume_id: str | UUID, user_id: UUID) -> Resume | None:
    uid = to_uuid(resume_id)
    if uid is None:
        return None
    return db.query(Resume).filter(Resume.id == uid, Resume.user_id == user_id).first()


def get_active_resume(db: Session, user_id: UUID) -> Resume | None:
    """The resume attached by default to new applications, if any."""
    return db.query(Resume).filter(Resume.user_id == user_id, Resume.is_active.is_(True)).first()


def set_active_resume(db: Session, resume_id: str | UUID, user_id: UUID) -> Resume | None:
    resume = get_resume(db, resume_id, user_id)
    if not resume:
        return None
    resume.is_active = True
    db.flush()
    return resume


def deactivate_resume(db: Session, resume_id: str | UUID, user_id: UUID) -> Resume | None:
    """Mark a resume inactive. No other resume is promoted in its place."""
    resume = get_resume(db, resume_id, user_id)
    if not resume:
        return None
    resume.is_active = False
    db.flush()
    return resume


def rename_resume(db: Session, resume_id: str | UUID, user_id: UUID, resume_name: str) -> Resume | None:
    resume = get_resume(db, resume_id, user_id)
    if not resume:
        return None
    resume.resume_name = resume_name
    db.flush()
    return resume


def delete_resume(db: Session, resume_id: str | UUID, user_id: UUID) -> bool:
    resume = get_resume(db, resume_id, user_id)
    if not resume:
        return False
    db.delete(resume)
    db.flush()
    logger.info("Resume %s deleted for user %s", resume_id, user_id)
    return True
