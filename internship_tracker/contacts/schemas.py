"""Contact request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from .models import ContactType, VoteType


class ContactCreateRequest(BaseModel):
    company_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    industry: str | None = Field(None, max_length=255)
    notes: str | None = Field(None, max_length=5000)
    contact_person_name: str | None = Field(None, max_length=255)
    position: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=50)
    location: str | None = Field(None, max_length=255)
    website: str | None = Field(None, max_length=500)
    contact_type: ContactType = ContactType.RECRUITER
    is_public: bool = True


class ContactUpdateRequest(BaseModel):
    company_name: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = None
    industry: str | None = Field(None, max_length=255)
    notes: str | None = Field(None, max_length=5000)
    contact_person_name: str | None = Field(None, max_length=255)
    position: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=50)
    location: str | None = Field(None, max_length=255)
    website: str | None = Field(None, max_length=500)
    contact_type: ContactType | None = None
    is_public: bool | None = None

    @field_validator("company_name", "email", "is_public")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class VoteRequest(BaseModel):
    vote_type: VoteType


class ContactResponse(BaseModel):
    id: str
    company_name: str
    email: str
    industry: str | None = None
    notes: str | None = None
    contact_person_name: str | None = None
    position: str | None = None
    phone: str | None = None
    location: str | None = None
    website: str | None = None
    contact_type: str | None = None
    is_public: bool
    is_verified: bool
    verification_date: datetime | None = None
    upvotes: int
    downvotes: int
    score: int
    is_own: bool = False
    contributor_name: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_model(cls, contact, viewer_id=None, contributor_name=None) -> "ContactResponse":
        return cls(
            id=str(contact.id),
            company_name=contact.company_name,
            email=contact.email,
            industry=contact.industry,
            notes=contact.notes,
            contact_person_name=contact.contact_person_name,
            position=contact.position,
            phone=contact.phone,
            location=contact.location,
            website=contact.website,
            contact_type=contact.contact_type.value if contact.contact_type else None,
            is_public=bool(contact.is_public),
            is_verified=bool(contact.is_verified),
            verification_date=contact.verification_date,
            upvotes=contact.upvotes or 0,
            downvotes=contact.downvotes or 0,
            score=contact.score,
            is_own=viewer_id is not None and contact.user_id == viewer_id,
            contributor_name=contributor_name,
            created_at=contact.created_at,
        )
