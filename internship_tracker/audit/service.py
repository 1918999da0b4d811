"""Audit log service."""

import contextlib
from uuid import UUID

from fastapi import Request
from sqlalchemy.orm import Session

from .models import AuditLog


def _get_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else ""


def audit(
    db: Session,
    request: Request,
    action: str,
    detail: str = "",
    user_id: UUID | None = None,
    resource_type: str = "",
    resource_id: UUID | None = None,
) -> None:
    """Write an audit log entry for a user action."""
    if user_id is None:
        uid = request.session.get("user_id")
        if uid:
            with contextlib.suppress(ValueError, AttributeError):
                user_id = UUID(uid)

    db.add(
        AuditLog(
            user_id=user_id,
            action=action,
            resource_type=resource_type,
            resource_id=resource_id,
            detail=detail[:2000],
            ip_address=_get_ip(request),
        )
    )


def get_recent_activity(db: Session, user_id: UUID, limit: int = 10) -> list[AuditLog]:
    """Most recent audit entries for a user, newest first."""
    return (
        db.query(AuditLog)
        .filter(AuditLog.user_id == user_id)
        .order_by(AuditLog.created_at.desc())
        .limit(limit)
        .all()
    )
