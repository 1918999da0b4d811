"""Application service: drafting outgoing application emails and recording send outcomes.

Sending itself happens outside this service; callers report the outcome
through ``record_send_result``.
"""

import logging
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy.orm import Session

from ..contacts.service import get_visible_contact
from ..dependencies import to_uuid
from ..posts.service import get_post
from ..resumes.service import get_active_resume
from .models import Application, ApplicationStatus

logger = logging.getLogger(__name__)


class ReferenceNotFound(Exception):
    """A referenced post or contact does not exist or is not accessible to the user."""


def create_application(
    db: Session,
    user_id: UUID,
    recipient_email: str,
    subject: str,
    email_body: str,
    post_id: str | UUID | None = None,
    contact_id: str | UUID | None = None,
    ai_generated: bool = False,
    scheduled_for: datetime | None = None,
) -> Application:
    """Create an application using the user's active resume at this moment.

    Raises ReferenceNotFound when ``post_id`` is not one of the user's posts
    or ``contact_id`` is not a contact the user can see.
    """
    post = None
    if post_id is not None:
        post = get_post(db, post_id, user_id)
        if not post:
            raise ReferenceNotFound("post")
    contact = None
    if contact_id is not None:
        contact = get_visible_contact(db, contact_id, user_id)
        if not contact:
            raise ReferenceNotFound("contact")

    resume = get_active_resume(db, user_id)

    application = Application(
        user_id=user_id,
        post_id=post.id if post else None,
        contact_id=contact.id if contact else None,
        resume_id=resume.id if resume else None,
        recipient_email=recipient_email,
        subject=subject,
        email_body=email_body,
        ai_generated=ai_generated,
        scheduled_for=scheduled_for,
        status=ApplicationStatus.SCHEDULED if scheduled_for else ApplicationStatus.DRAFT,
    )
    db.add(application)
    db.flush()
    logger.info("Application %s created for user %s (status=%s)", application.id, user_id, application.status)
    return application


def get_application(db: Session, application_id: str | UUID, user_id: UUID) -> Application | None:
    uid = to_uuid(application_id)
    if uid is None:
        return None
    return db.query(Application).filter(Application.id == uid, Application.user_id == user_id).first()


def list_applications(
    db: Session,
    user_id: UUID,
    status: ApplicationStatus | str | None = None,
) -> list[Application]:
    query = db.query(Application).filter(Application.user_id == user_id)
    if status:
        query = query.filter(Application.status == ApplicationStatus(status))
    return query.order_by(Application.created_at.desc()).all()


def record_send_result(
    db: Session,
    application_id: str | UUID,
    user_id: UUID,
    success: bool,
    error_message: str = "",
) -> Application | None:
    application = get_application(db, application_id, user_id)
    if not application:
        return None

    if success:
        application.status = ApplicationStatus.SENT
        application.sent_at = datetime.now(UTC)
        application.error_message = None
    else:
        application.status = ApplicationStatus.FAILED
        application.error_message = error_message[:2000] or "Unknown error"
        logger.warning("Application %s failed to send: %s", application.id, application.error_message)

    db.flush()
    return application


def delete_application(db: Session, application_id: str | UUID, user_id: UUID) -> bool:
    application = get_application(db, application_id, user_id)
    if not application:
        return False
    db.delete(application)
    db.flush()
    return True
