"""Resume request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from ..config import settings
from .service import ALLOWED_CONTENT_TYPES


class ResumeUploadRequest(BaseModel):
    file_url: str = Field(..., min_length=1, max_length=500)
    resume_name: str = Field("My Resume", max_length=255)
    content_type: str = Field(..., max_length=100)
    file_size: int = Field(..., ge=1)

    @field_validator("content_type")
    @classmethod
    def _allowed_type(cls, v: str) -> str:
        if v not in ALLOWED_CONTENT_TYPES:
            raise ValueError("Only PDF and DOCX files are allowed")
        return v

    @field_validator("file_size")
    @classmethod
    def _max_size(cls, v: int) -> int:
        if v > settings.max_resume_size:
            raise ValueError(f"File size must be at most {settings.max_resume_size // 1_048_576} MB")
        return v


class ResumeRenameRequest(BaseModel):
    resume_name: str = Field(..., min_length=1, max_length=255)


class ResumeResponse(BaseModel):
    id: str
    resume_name: str
    file_url: str
    content_type: str | None = None
    file_size: int | None = None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_model(cls, resume) -> "ResumeResponse":
        return cls(
            id=str(resume.id),
            resume_name=resume.resume_name,
            file_url=resume.file_url,
            content_type=resume.content_type,
            file_size=resume.file_size,
            is_active=bool(resume.is_active),
            created_at=resume.created_at,
            updated_at=resume.updated_at,
        )
