"""Company contact and vote models, with the vote-count aggregation rule."""

import enum
import logging
import uuid
from datetime import UTC, datetime
from itertools import chain

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    event,
    func,
    inspect,
    select,
    update,
)
from sqlalchemy import (
    Enum as SQLEnum,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.orm import Session, column_property, relationship
from sqlalchemy.orm.attributes import set_committed_value

from ..database.base import Base

logger = logging.getLogger(__name__)


class ContactType(enum.StrEnum):
    RECRUITER = "recruiter"
    HR = "hr"
    MANAGER = "manager"
    GENERAL = "general"


class VoteType(enum.StrEnum):
    UP = "up"
    DOWN = "down"


class Contact(Base):
    __tablename__ = "contacts"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    company_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    industry = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    contact_person_name = Column(String(255), nullable=True)
    position = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    location = Column(String(255), nullable=True)
    website = Column(String(500), nullable=True)
    contact_type = Column(
        SQLEnum(ContactType, values_callable=lambda e: [t.value for t in e]),
        default=ContactType.RECRUITER,
    )

    # Sharing and verification
    is_public = Column(Boolean, default=True, nullable=False)
    is_verified = Column(Boolean, default=False, nullable=False)
    verification_date = Column(DateTime(timezone=True), nullable=True)
    verified_by = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    # Maintained from contact_votes, never written by clients
    upvotes = Column(Integer, default=0, nullable=False)
    downvotes = Column(Integer, default=0, nullable=False)

    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
    )

    user = relationship("User", back_populates="contacts", foreign_keys=[user_id])
    votes = relationship("ContactVote", back_populates="contact", cascade="all, delete-orphan", passive_deletes=True)

    __table_args__ = (
        Index("idx_contacts_public_company", "is_public", "company_name"),
        Index("idx_contacts_industry", "industry"),
    )

    @hybrid_property
    def score(self) -> int:
        """Net rating used to rank public contacts."""
        return (self.upvotes or 0) - (self.downvotes or 0)

    @score.expression
    def score(cls):
        return cls.upvotes - cls.downvotes


class ContactVote(Base):
    __tablename__ = "contact_votes"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    # Old value kept on change so a moved vote also recounts the contact it left
    contact_id = column_property(
        Column(
            UUID(as_uuid=True),
            ForeignKey("contacts.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        active_history=True,
    )
    user_id = Column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    vote_type = Column(
        SQLEnum(VoteType, values_callable=lambda e: [v.value for v in e]),
        nullable=False,
    )
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
    )

    contact = relationship("Contact", back_populates="votes")
    user = relationship("User", back_populates="votes")

    __table_args__ = (
        UniqueConstraint("contact_id", "user_id", name="uq_contact_votes_contact_user"),
    )


def recount_contact_votes(session: Session, contact_id: uuid.UUID) -> tuple[int, int]:
    """Recompute a contact's vote counters from contact_votes and store them.

    The contact row is locked first (FOR UPDATE, ignored by SQLite) so
    concurrent recounts for the same contact serialise. Returns
    ``(upvotes, downvotes)``.
    """
    conn = session.connection()
    conn.execute(select(Contact.id).where(Contact.id == contact_id).with_for_update())

    rows = conn.execute(
        select(ContactVote.vote_type, func.count())
        .where(ContactVote.contact_id == contact_id)
        .group_by(ContactVote.vote_type)
    ).all()
    counts = {VoteType(vote_type): n for vote_type, n in rows}
    upvotes = counts.get(VoteType.UP, 0)
    downvotes = counts.get(VoteType.DOWN, 0)

    conn.execute(
        update(Contact.__table__)
        .where(Contact.__table__.c.id == contact_id)
        .values(upvotes=upvotes, downvotes=downvotes)
    )

    # Keep an already-loaded contact in step without marking it dirty
    key = inspect(Contact).identity_key_from_primary_key((contact_id,))
    contact = session.identity_map.get(key)
    if contact is not None:
        set_committed_value(contact, "upvotes", upvotes)
        set_committed_value(contact, "downvotes", downvotes)

    logger.debug("Recounted votes for contact %s: +%d / -%d", contact_id, upvotes, downvotes)
    return upvotes, downvotes


_PENDING_RECOUNT_KEY = "contact_votes_pending_recount"


def _vote_contact_ids(vote: ContactVote) -> set:
    ids = {vote.contact_id}
    # A vote moved to another contact also changes the one it left
    state = inspect(vote)
    ids.update(state.attrs.contact_id.history.deleted)
    ids.update(c.id for c in state.attrs.contact.history.deleted if c is not None)
    ids.discard(None)
    return ids


@event.listens_for(Session, "before_flush")
def _collect_changed_votes(session: Session, flush_context, instances) -> None:
    # Read before the flush: deleted rows can no longer be loaded afterwards
    contact_ids: set = set()
    for obj in chain(session.dirty, session.deleted):
        if isinstance(obj, ContactVote):
            contact_ids.update(_vote_contact_ids(obj))
    session.info[_PENDING_RECOUNT_KEY] = contact_ids


@event.listens_for(Session, "after_flush")
def aggregate_contact_votes(session: Session, flush_context) -> None:
    """Recount every contact whose votes were inserted, updated or deleted in this flush."""
    contact_ids: set = session.info.pop(_PENDING_RECOUNT_KEY, set())
    for obj in chain(session.new, session.dirty):
        if isinstance(obj, ContactVote) and obj.contact_id is not None:
            contact_ids.add(obj.contact_id)

    for contact_id in contact_ids:
        recount_contact_votes(session, contact_id)
