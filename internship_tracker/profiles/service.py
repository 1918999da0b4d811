"""Profile service."""

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from .completeness import TRACKED_FIELDS, filled_fields
from .models import EducationLevel, UserProfile, WorkType

logger = logging.getLogger(__name__)

# Identity, timestamps and completeness are managed by the server
_PROTECTED_FIELDS = frozenset({"id", "user_id", "completeness", "created_at", "updated_at"})

WRITABLE_FIELDS = frozenset(
    c.key for c in UserProfile.__table__.columns if c.key not in _PROTECTED_FIELDS
)

# A None for these keeps the stored value
_NOT_NULL_FIELDS = frozenset(c.key for c in UserProfile.__table__.columns if not c.nullable)


def get_profile(db: Session, user_id: UUID) -> UserProfile | None:
    return db.query(UserProfile).filter(UserProfile.user_id == user_id).first()


def save_profile(db: Session, user_id: UUID, /, **fields) -> UserProfile:
    """Create or update the user's profile with the given fields.

    Unknown and server-managed keys (including ``completeness``) are ignored,
    as is None for a column that cannot be null. Completeness is recomputed
    when the row is written.
    """
    profile = get_profile(db, user_id)
    if profile is None:
        profile = UserProfile(user_id=user_id)
        db.add(profile)
        logger.info("Creating profile for user %s", user_id)

    for field, value in fields.items():
        if field not in WRITABLE_FIELDS:
            continue
        if value is None and field in _NOT_NULL_FIELDS:
            continue
        if field == "education_level" and value is not None:
            value = EducationLevel(value)
        elif field == "preferred_work_type" and value is not None:
            value = WorkType(value)
        setattr(profile, field, value)

    db.flush()
    return profile


def missing_fields(profile: UserProfile | None) -> list[str]:
    """Tracked fields still empty, in display order."""
    filled = set(filled_fields(profile)) if profile is not None else set()
    return [name for name, _ in TRACKED_FIELDS if name not in filled]
