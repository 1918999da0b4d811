"""Contact service: CRUD for company contacts, public discovery, and voting.

Vote counters on Contact are maintained by the flush listener in ``models``;
nothing here writes upvotes/downvotes directly.
"""

import logging
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..dependencies import to_uuid
from ..profiles.models import UserProfile
from .models import Contact, ContactType, ContactVote, VoteType

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset({
    "company_name",
    "email",
    "industry",
    "notes",
    "contact_person_name",
    "position",
    "phone",
    "location",
    "website",
    "contact_type",
    "is_public",
})

_NOT_NULL_FIELDS = frozenset(c.key for c in Contact.__table__.columns if not c.nullable)

SORTABLE_FIELDS = {
    "created_at": Contact.created_at,
    "company_name": Contact.company_name,
    "email": Contact.email,
    "industry": Contact.industry,
}


def create_contact(
    db: Session,
    user_id: UUID,
    company_name: str,
    email: str,
    /,
    **details,
) -> Contact:
    fields = {k: v for k, v in details.items() if k in EDITABLE_FIELDS}
    if "contact_type" in fields and fields["contact_type"] is not None:
        fields["contact_type"] = ContactType(fields["contact_type"])
    contact = Contact(user_id=user_id, company_name=company_name, email=email, **fields)
    db.add(contact)
    db.flush()
    return contact


def get_own_contact(db: Session, contact_id: str | UUID, user_id: UUID) -> Contact | None:
    uid = to_uuid(contact_id)
    if uid is None:
        return None
    return db.query(Contact).filter(Contact.id == uid, Contact.user_id == user_id).first()


def get_visible_contact(db: Session, contact_id: str | UUID, user_id: UUID) -> Contact | None:
    """A contact the user may read: any public contact, or one of their own."""
    uid = to_uuid(contact_id)
    if uid is None:
        return None
    return (
        db.query(Contact)
        .filter(Contact.id == uid, or_(Contact.is_public.is_(True), Contact.user_id == user_id))
        .first()
    )


def update_contact(db: Session, contact_id: str | UUID, user_id: UUID, /, **changes) -> Contact | None:
    """Apply editable field changes to one of the user's contacts.

    Other keys are ignored, and so is None for a column that cannot be null.
    """
    contact = get_own_contact(db, contact_id, user_id)
    if not contact:
        return None
    for field, value in changes.items():
        if field not in EDITABLE_FIELDS:
            continue
        if value is None and field in _NOT_NULL_FIELDS:
            continue
        if field == "contact_type" and value is not None:
            value = ContactType(value)
        setattr(contact, field, value)
    db.flush()
    return contact


def verify_contact(db: Session, contact_id: str | UUID, user_id: UUID) -> Contact | None:
    contact = get_own_contact(db, contact_id, user_id)
    if not contact:
        return None
    contact.is_verified = True
    contact.verification_date = datetime.now(UTC)
    contact.verified_by = user_id
    db.flush()
    return contact


def delete_contact(db: Session, contact_id: str | UUID, user_id: UUID) -> bool:
    contact = get_own_contact(db, contact_id, user_id)
    if not contact:
        return False
    db.delete(contact)
    db.flush()
    return True


def list_user_contacts(
    db: Session,
    user_id: UUID,
    search: str = "",
    industry: str | None = None,
    sort_by: str = "created_at",
    descending: bool = True,
    page: int = 1,
    per_page: int = 20,
) -> tuple[list[Contact], int]:
    """Page through the user's own contacts. Returns ``(contacts, total)``."""
    query = db.query(Contact).filter(Contact.user_id == user_id)

    if search.strip():
        pattern = f"%{search.strip()}%"
        query = query.filter(
            or_(
                Contact.company_name.ilike(pattern),
                Contact.email.ilike(pattern),
                Contact.notes.ilike(pattern),
            )
        )
    if industry:
        query = query.filter(Contact.industry == industry)

    total = query.count()

    column = SORTABLE_FIELDS.get(sort_by, Contact.created_at)
    query = query.order_by(column.desc() if descending else column.asc())

    page = max(page, 1)
    contacts = query.offset((page - 1) * per_page).limit(per_page).all()
    return contacts, total


def list_industries(db: Session, user_id: UUID) -> list[str]:
    rows = (
        db.query(Contact.industry)
        .filter(Contact.user_id == user_id, Contact.industry.isnot(None), Contact.industry != "")
        .distinct()
        .all()
    )
    return sorted(r[0] for r in rows)


def list_public_contacts(
    db: Session, search: str = "", limit: int = 50, offset: int = 0
) -> list[tuple[Contact, str | None]]:
    """Public contacts ranked by net votes, newest first among equal scores.

    Each row is ``(contact, contributor_name)``; the name is the owner's
    profile ``full_name``, or None when the owner has no profile or name.
    """
    query = (
        db.query(Contact, UserProfile.full_name)
        .outerjoin(UserProfile, UserProfile.user_id == Contact.user_id)
        .filter(Contact.is_public.is_(True))
    )
    if search.strip():
        pattern = f"%{search.strip()}%"
        query = query.filter(
            or_(
                Contact.company_name.ilike(pattern),
                Contact.industry.ilike(pattern),
                Contact.email.ilike(pattern),
            )
        )
    return (
        query.order_by(Contact.score.desc(), Contact.created_at.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )


# ── Voting ─────────────────────────────────────────────────────────────


def get_user_vote(db: Session, contact_id: str | UUID, user_id: UUID) -> ContactVote | None:
    uid = to_uuid(contact_id)
    if uid is None:
        return None
    return db.query(ContactVote).filter(ContactVote.contact_id == uid, ContactVote.user_id == user_id).first()


def cast_vote(db: Session, contact_id: str | UUID, user_id: UUID, vote_type: VoteType | str) -> ContactVote | None:
    """Record the user's vote on a visible contact, replacing any earlier vote.

    Returns None when the contact does not exist or is not visible to the user.
    A concurrent first vote by the same user can still hit the
    (contact_id, user_id) unique constraint; that IntegrityError is left to
    the caller.
    """
    contact = get_visible_contact(db, contact_id, user_id)
    if not contact:
        return None

    vote_type = VoteType(vote_type)
    vote = get_user_vote(db, contact.id, user_id)
    if vote:
        vote.vote_type = vote_type
    else:
        vote = ContactVote(contact_id=contact.id, user_id=user_id, vote_type=vote_type)
        db.add(vote)
    db.flush()
    logger.info("User %s voted %s on contact %s", user_id, vote_type, contact.id)
    return vote


def remove_vote(db: Session, contact_id: str | UUID, user_id: UUID) -> bool:
    vote = get_user_vote(db, contact_id, user_id)
    if not vote:
        return False
    db.delete(vote)
    db.flush()
    return True
