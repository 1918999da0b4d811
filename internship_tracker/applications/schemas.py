"""Application schemas."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from .models import ApplicationStatus


class ApplicationCreateRequest(BaseModel):
    recipient_email: EmailStr
    subject: str = Field(..., min_length=1, max_length=500)
    email_body: str = Field(..., min_length=1, max_length=50000)
    post_id: str | None = None
    contact_id: str | None = None
    ai_generated: bool = False
    scheduled_for: datetime | None = None


class SendResultRequest(BaseModel):
    success: bool
    error_message: str = Field("", max_length=2000)


class ApplicationResponse(BaseModel):
    id: str
    post_id: str | None = None
    contact_id: str | None = None
    resume_id: str | None = None
    recipient_email: str
    subject: str
    email_body: str
    ai_generated: bool
    status: ApplicationStatus
    sent_at: datetime | None = None
    scheduled_for: datetime | None = None
    error_message: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_model(cls, app) -> "ApplicationResponse":
        return cls(
            id=str(app.id),
            post_id=str(app.post_id) if app.post_id else None,
            contact_id=str(app.contact_id) if app.contact_id else None,
            resume_id=str(app.resume_id) if app.resume_id else None,
            recipient_email=app.recipient_email,
            subject=app.subject,
            email_body=app.email_body,
            ai_generated=bool(app.ai_generated),
            status=app.status,
            sent_at=app.sent_at,
            scheduled_for=app.scheduled_for,
            error_message=app.error_message,
            created_at=app.created_at,
        )
