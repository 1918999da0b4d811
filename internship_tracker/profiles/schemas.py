"""Profile request/response schemas."""

from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from .models import EducationLevel, WorkType


class ProfileUpdateRequest(BaseModel):
    full_name: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=50)
    linkedin_url: str | None = Field(None, max_length=500)
    bio: str | None = Field(None, max_length=5000)
    target_position: str | None = Field(None, max_length=255)
    target_industry: str | None = Field(None, max_length=255)
    profile_picture_url: str | None = Field(None, max_length=500)
    github_url: str | None = Field(None, max_length=500)
    portfolio_url: str | None = Field(None, max_length=500)
    years_of_experience: int | None = Field(None, ge=0, le=60)
    education_level: EducationLevel | None = None
    preferred_locations: list[str] | None = None
    availability_date: date | None = None
    salary_expectation: str | None = Field(None, max_length=255)
    email_signature: str | None = Field(None, max_length=2000)
    twitter_url: str | None = Field(None, max_length=500)
    preferred_work_type: WorkType | None = None
    notification_preferences: dict[str, bool] | None = None
    is_profile_public: bool | None = None
    timezone: str | None = Field(None, max_length=64)
    language_preference: str | None = Field(None, max_length=10)

    @field_validator("is_profile_public")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v

    @field_validator("preferred_locations")
    @classmethod
    def strip_locations(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return v
        return [loc.strip() for loc in v if loc.strip()]


class ProfileResponse(BaseModel):
    full_name: str | None = None
    phone: str | None = None
    linkedin_url: str | None = None
    bio: str | None = None
    target_position: str | None = None
    target_industry: str | None = None
    profile_picture_url: str | None = None
    github_url: str | None = None
    portfolio_url: str | None = None
    years_of_experience: int = 0
    education_level: str | None = None
    preferred_locations: list[str] = []
    availability_date: date | None = None
    salary_expectation: str | None = None
    email_signature: str | None = None
    twitter_url: str | None = None
    preferred_work_type: str | None = None
    notification_preferences: dict = {}
    is_profile_public: bool = False
    timezone: str | None = None
    language_preference: str | None = None
    completeness: int = 0
    missing_fields: list[str] = []
    updated_at: datetime | None = None

    @classmethod
    def from_model(cls, profile, missing: list[str]) -> "ProfileResponse":
        return cls(
            full_name=profile.full_name,
            phone=profile.phone,
            linkedin_url=profile.linkedin_url,
            bio=profile.bio,
            target_position=profile.target_position,
            target_industry=profile.target_industry,
            profile_picture_url=profile.profile_picture_url,
            github_url=profile.github_url,
            portfolio_url=profile.portfolio_url,
            years_of_experience=profile.years_of_experience or 0,
            education_level=profile.education_level.value if profile.education_level else None,
            preferred_locations=profile.preferred_locations or [],
            availability_date=profile.availability_date,
            salary_expectation=profile.salary_expectation,
            email_signature=profile.email_signature,
            twitter_url=profile.twitter_url,
            preferred_work_type=profile.preferred_work_type.value if profile.preferred_work_type else None,
            notification_preferences=profile.notification_preferences or {},
            is_profile_public=bool(profile.is_profile_public),
            timezone=profile.timezone,
            language_preference=profile.language_preference,
            completeness=profile.completeness or 0,
            missing_fields=missing,
            updated_at=profile.updated_at,
        )
