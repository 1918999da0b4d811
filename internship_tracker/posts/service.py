"""Internship post service: owner-scoped CRUD and search."""

import re
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..dependencies import to_uuid
from .models import InternshipPost

EDITABLE_FIELDS = frozenset({
    "company_name",
    "position_title",
    "description",
    "contact_email",
    "extracted_emails",
    "company_activity",
    "industry_sector",
    "deadline",
    "post_url",
})

_NOT_NULL_FIELDS = frozenset(c.key for c in InternshipPost.__table__.columns if not c.nullable)

_EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")


def find_emails(text: str) -> list[str]:
    """Distinct email addresses in ``text``, lowercased, in order of appearance."""
    seen: dict[str, None] = {}
    for match in _EMAIL_RE.findall(text or ""):
        seen.setdefault(match.lower().rstrip("."), None)
    return list(seen)


def create_post(
    db: Session,
    user_id: UUID,
    company_name: str,
    position_title: str,
    description: str,
    /,
    **details,
) -> InternshipPost:
    fields = {k: v for k, v in details.items() if k in EDITABLE_FIELDS}
    if not fields.get("extracted_emails"):
        fields["extracted_emails"] = find_emails(description)
    if not fields.get("contact_email") and fields["extracted_emails"]:
        fields["contact_email"] = fields["extracted_emails"][0]

    post = InternshipPost(
        user_id=user_id,
        company_name=company_name,
        position_title=position_title,
        description=description,
        **fields,
    )
    db.add(post)
    db.flush()
    return post


def get_post(db: Session, post_id: str | UUID, user_id: UUID) -> InternshipPost | None:
    uid = to_uuid(post_id)
    if uid is None:
        return None
    return db.query(InternshipPost).filter(InternshipPost.id == uid, InternshipPost.user_id == user_id).first()


def update_post(db: Session, post_id: str | UUID, user_id: UUID, /, **changes) -> InternshipPost | None:
    post = get_post(db, post_id, user_id)
    if not post:
        return None
    for field, value in changes.items():
        if field not in EDITABLE_FIELDS:
            continue
        if value is None and field in _NOT_NULL_FIELDS:
            continue
        setattr(post, field, value)
    db.flush()
    return post


def list_posts(db: Session, user_id: UUID, search: str = "") -> list[InternshipPost]:
    query = db.query(InternshipPost).filter(InternshipPost.user_id == user_id)
    if search.strip():
        pattern = f"%{search.strip()}%"
        query = query.filter(
            or_(
                InternshipPost.company_name.ilike(pattern),
                InternshipPost.position_title.ilike(pattern),
                InternshipPost.industry_sector.ilike(pattern),
            )
        )
    return query.order_by(InternshipPost.created_at.desc()).all()


def delete_post(db: Session, post_id: str | UUID, user_id: UUID) -> bool:
    post = get_post(db, post_id, user_id)
    if not post:
        return False
    db.delete(post)
    db.flush()
    return True
