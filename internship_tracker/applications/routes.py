"""Application routes."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..audit.service import audit
from ..auth.models import User
from ..database.base import get_db
from ..dependencies import get_current_user
from .models import ApplicationStatus
from .schemas import ApplicationCreateRequest, ApplicationResponse, SendResultRequest
from .service import (
    ReferenceNotFound,
    create_application,
    delete_application,
    get_application,
    list_applications,
    record_send_result,
)

router = APIRouter(tags=["applications"])

_NOT_FOUND = {"error": "Application not found"}


def _application_json(application) -> dict:
    return ApplicationResponse.from_model(application).model_dump(mode="json")


@router.get("/applications")
def list_applications_route(
    status: ApplicationStatus | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    applications = list_applications(db, user.id, status)
    return JSONResponse({"applications": [_application_json(a) for a in applications]})


@router.post("/applications")
def create_application_route(
    request: Request,
    payload: ApplicationCreateRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        application = create_application(
            db,
            user.id,
            payload.recipient_email,
            payload.subject,
            payload.email_body,
            post_id=payload.post_id,
            contact_id=payload.contact_id,
            ai_generated=payload.ai_generated,
            scheduled_for=payload.scheduled_for,
        )
    except ReferenceNotFound as e:
        return JSONResponse({"error": f"{str(e).capitalize()} not found"}, status_code=404)

    audit(
        db,
        request,
        "application_create",
        f"to={application.recipient_email}",
        resource_type="application",
        resource_id=application.id,
    )
    db.commit()
    return JSONResponse({"ok": True, "application": _application_json(application)}, status_code=201)


@router.get("/applications/{application_id}")
def get_application_route(
    application_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    application = get_application(db, application_id, user.id)
    if not application:
        return JSONResponse(_NOT_FOUND, status_code=404)
    return JSONResponse({"application": _application_json(application)})


@router.post("/applications/{application_id}/result")
def record_result_route(
    request: Request,
    application_id: str,
    payload: SendResultRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    application = record_send_result(db, application_id, user.id, payload.success, payload.error_message)
    if not application:
        return JSONResponse(_NOT_FOUND, status_code=404)
    audit(
        db,
        request,
        "application_sent" if payload.success else "application_failed",
        resource_type="application",
        resource_id=application.id,
    )
    db.commit()
    return JSONResponse({"ok": True, "application": _application_json(application)})


@router.delete("/applications/{application_id}")
def delete_application_route(
    request: Request,
    application_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    if not delete_application(db, application_id, user.id):
        return JSONResponse(_NOT_FOUND, status_code=404)
    audit(db, request, "application_delete", f"id={application_id}", resource_type="application")
    db.commit()
    return JSONResponse({"ok": True})
