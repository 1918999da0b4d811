"""Dashboard service."""

from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..applications.models import Application, ApplicationStatus
from ..audit.service import get_recent_activity
from ..contacts.models import Contact
from ..posts.models import InternshipPost
from ..profiles.models import UserProfile
from ..resumes.models import Resume
from ..resumes.service import get_active_resume


def _count(db: Session, model, user_id: UUID) -> int:
    return db.query(func.count(model.id)).filter(model.user_id == user_id).scalar() or 0


def get_application_counts(db: Session, user_id: UUID) -> dict[str, int]:
    """Application counts per status; every status is present, zero when unused."""
    rows = (
        db.query(Application.status, func.count(Application.id))
        .filter(Application.user_id == user_id)
        .group_by(Application.status)
        .all()
    )
    counts = {status.value: 0 for status in ApplicationStatus}
    for status, n in rows:
        counts[ApplicationStatus(status).value] = n
    return counts


def get_dashboard(db: Session, user_id: UUID) -> dict:
    """Build dashboard stats for one user."""
    active = get_active_resume(db, user_id)
    completeness = (
        db.query(UserProfile.completeness).filter(UserProfile.user_id == user_id).scalar()
    )
    by_status = get_application_counts(db, user_id)

    return {
        "resumes": _count(db, Resume, user_id),
        "posts": _count(db, InternshipPost, user_id),
        "contacts": _count(db, Contact, user_id),
        "applications": sum(by_status.values()),
        "applications_by_status": by_status,
        "active_resume": active.resume_name if active else None,
        "profile_completeness": completeness or 0,
        "recent_activity": [
            {
                "action": entry.action,
                "resource_type": entry.resource_type or None,
                "created_at": entry.created_at.isoformat() if entry.created_at else None,
            }
            for entry in get_recent_activity(db, user_id, limit=10)
        ],
    }
