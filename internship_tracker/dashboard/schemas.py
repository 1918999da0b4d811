"""Dashboard schemas."""

from pydantic import BaseModel


class ActivityEntry(BaseModel):
    action: str
    resource_type: str | None = None
    created_at: str | None = None


class DashboardResponse(BaseModel):
    resumes: int = 0
    posts: int = 0
    contacts: int = 0
    applications: int = 0
    applications_by_status: dict[str, int] = {}
    active_resume: str | None = None
    profile_completeness: int = 0
    recent_activity: list[ActivityEntry] = []
