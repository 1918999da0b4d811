"""Resume routes."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..audit.service import audit
from ..auth.models import User
from ..database.base import get_db
from ..dependencies import get_current_user
from .schemas import ResumeRenameRequest, ResumeResponse, ResumeUploadRequest
from .service import (
    deactivate_resume,
    delete_resume,
    get_active_resume,
    list_resumes,
    rename_resume,
    set_active_resume,
    upload_resume,
)

router = APIRouter(tags=["resumes"])

_NOT_FOUND = {"error": "Resume not found"}


def _resume_json(resume) -> dict:
    return ResumeResponse.from_model(resume).model_dump(mode="json")


@router.get("/resumes")
def list_resumes_route(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return JSONResponse({"resumes": [_resume_json(r) for r in list_resumes(db, user.id)]})


@router.post("/resumes")
def upload_resume_route(
    request: Request,
    payload: ResumeUploadRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    # Files live under the owner's folder in the storage bucket
    if not payload.file_url.startswith(f"{user.id}/"):
        return JSONResponse({"error": "file_url must be inside your own folder"}, status_code=400)

    resume = upload_resume(
        db,
        user.id,
        payload.file_url,
        payload.resume_name,
        payload.content_type,
        payload.file_size,
    )
    audit(db, request, "resume_upload", f"name={resume.resume_name}", resource_type="resume", resource_id=resume.id)
    db.commit()
    return JSONResponse({"ok": True, "resume": _resume_json(resume)}, status_code=201)


@router.get("/resumes/active")
def active_resume_route(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    resume = get_active_resume(db, user.id)
    return JSONResponse({"resume": _resume_json(resume) if resume else None})


@router.post("/resumes/{resume_id}/activate")
def activate_resume_route(
    request: Request,
    resume_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    resume = set_active_resume(db, resume_id, user.id)
    if not resume:
        return JSONResponse(_NOT_FOUND, status_code=404)
    audit(db, request, "resume_activate", resource_type="resume", resource_id=resume.id)
    db.commit()
    return JSONResponse({"ok": True, "resume": _resume_json(resume)})


@router.post("/resumes/{resume_id}/deactivate")
def deactivate_resume_route(
    request: Request,
    resume_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    resume = deactivate_resume(db, resume_id, user.id)
    if not resume:
        return JSONResponse(_NOT_FOUND, status_code=404)
    audit(db, request, "resume_deactivate", resource_type="resume", resource_id=resume.id)
    db.commit()
    return JSONResponse({"ok": True, "resume": _resume_json(resume)})


@router.patch("/resumes/{resume_id}")
def rename_resume_route(
    request: Request,
    resume_id: str,
    payload: ResumeRenameRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    resume = rename_resume(db, resume_id, user.id, payload.resume_name)
    if not resume:
        return JSONResponse(_NOT_FOUND, status_code=404)
    audit(db, request, "resume_rename", f"name={payload.resume_name}", resource_type="resume", resource_id=resume.id)
    db.commit()
    return JSONResponse({"ok": True, "resume": _resume_json(resume)})


@router.delete("/resumes/{resume_id}")
def delete_resume_route(
    request: Request,
    resume_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    if not delete_resume(db, resume_id, user.id):
        return JSONResponse(_NOT_FOUND, status_code=404)
    audit(db, request, "resume_delete", f"id={resume_id}", resource_type="resume")
    db.commit()
    return JSONResponse({"ok": True})
