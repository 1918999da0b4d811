"""Profile routes."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..audit.service import audit
from ..auth.models import User
from ..database.base import get_db
from ..dependencies import get_current_user
from .schemas import ProfileResponse, ProfileUpdateRequest
from .service import get_profile, missing_fields, save_profile

router = APIRouter(tags=["profile"])


@router.get("/profile")
def get_profile_route(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    profile = get_profile(db, user.id)
    if not profile:
        return JSONResponse({"profile": None, "completeness": 0, "missing_fields": missing_fields(None)})
    data = ProfileResponse.from_model(profile, missing_fields(profile)).model_dump(mode="json")
    return JSONResponse({"profile": data, "completeness": data["completeness"], "missing_fields": data["missing_fields"]})


@router.put("/profile")
def save_profile_route(
    request: Request,
    payload: ProfileUpdateRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    profile = save_profile(db, user.id, **payload.model_dump(exclude_unset=True))
    audit(db, request, "profile_update", f"completeness={profile.completeness}", resource_type="profile", resource_id=profile.id)
    db.commit()
    data = ProfileResponse.from_model(profile, missing_fields(profile)).model_dump(mode="json")
    return JSONResponse({"ok": True, "profile": data})
