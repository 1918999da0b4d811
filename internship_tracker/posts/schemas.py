"""Internship post schemas."""

from datetime import date, datetime

from pydantic import BaseModel, EmailStr, Field, field_validator


class PostCreateRequest(BaseModel):
    company_name: str = Field(..., min_length=1, max_length=255)
    position_title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1, max_length=50000)
    contact_email: EmailStr | None = None
    extracted_emails: list[EmailStr] | None = None
    company_activity: str | None = Field(None, max_length=5000)
    industry_sector: str | None = Field(None, max_length=255)
    deadline: date | None = None
    post_url: str | None = Field(None, max_length=500)


class PostUpdateRequest(BaseModel):
    company_name: str | None = Field(None, min_length=1, max_length=255)
    position_title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, min_length=1, max_length=50000)
    contact_email: EmailStr | None = None
    extracted_emails: list[EmailStr] | None = None
    company_activity: str | None = Field(None, max_length=5000)
    industry_sector: str | None = Field(None, max_length=255)
    deadline: date | None = None
    post_url: str | None = Field(None, max_length=500)

    @field_validator("company_name", "position_title", "description")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class PostResponse(BaseModel):
    id: str
    company_name: str
    position_title: str
    description: str
    contact_email: str | None = None
    extracted_emails: list[str] = []
    company_activity: str | None = None
    industry_sector: str | None = None
    deadline: date | None = None
    post_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_model(cls, post) -> "PostResponse":
        return cls(
            id=str(post.id),
            company_name=post.company_name,
            position_title=post.position_title,
            description=post.description,
            contact_email=post.contact_email,
            extracted_emails=post.extracted_emails or [],
            company_activity=post.company_activity,
            industry_sector=post.industry_sector,
            deadline=post.deadline,
            post_url=post.post_url,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )
