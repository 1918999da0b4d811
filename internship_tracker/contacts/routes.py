"""Contact routes: own contacts, public discovery, and voting."""

import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..audit.service import audit
from ..auth.models import User
from ..config import settings
from ..database.base import get_db
from ..dependencies import get_current_user, to_uuid
from ..rate_limit import limiter
from .schemas import ContactCreateRequest, ContactResponse, ContactUpdateRequest, VoteRequest
from .service import (
    cast_vote,
    create_contact,
    delete_contact,
    get_user_vote,
    get_visible_contact,
    list_industries,
    list_public_contacts,
    list_user_contacts,
    remove_vote,
    update_contact,
    verify_contact,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["contacts"])

_NOT_FOUND = {"error": "Contact not found"}


def _contact_json(contact, viewer_id=None, contributor_name=None) -> dict:
    return ContactResponse.from_model(contact, viewer_id, contributor_name).model_dump(mode="json")


@router.get("/contacts")
def list_contacts_route(
    search: str = "",
    industry: str | None = None,
    sort_by: str = "created_at",
    order: str = Query("desc", pattern="^(asc|desc)$"),
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    contacts, total = list_user_contacts(
        db, user.id, search, industry, sort_by, order == "desc", page, per_page
    )
    return JSONResponse({
        "contacts": [_contact_json(c, user.id) for c in contacts],
        "total": total,
        "page": page,
        "per_page": per_page,
    })


@router.post("/contacts")
def create_contact_route(
    request: Request,
    payload: ContactCreateRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    details = payload.model_dump(exclude={"company_name", "email"})
    contact = create_contact(db, user.id, payload.company_name, payload.email, **details)
    audit(db, request, "contact_create", f"company={contact.company_name}", resource_type="contact", resource_id=contact.id)
    db.commit()
    return JSONResponse({"ok": True, "contact": _contact_json(contact, user.id)}, status_code=201)


@router.get("/contacts/public")
def public_contacts_route(
    search: str = "",
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    rows = list_public_contacts(db, search, limit, offset)
    return JSONResponse({"contacts": [_contact_json(c, user.id, name) for c, name in rows]})


@router.get("/contacts/industries")
def industries_route(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return JSONResponse({"industries": list_industries(db, user.id)})


@router.get("/contacts/{contact_id}")
def get_contact_route(
    contact_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    contact = get_visible_contact(db, contact_id, user.id)
    if not contact:
        return JSONResponse(_NOT_FOUND, status_code=404)
    vote = get_user_vote(db, contact.id, user.id)
    return JSONResponse({
        "contact": _contact_json(contact, user.id),
        "my_vote": vote.vote_type.value if vote else None,
    })


@router.patch("/contacts/{contact_id}")
def update_contact_route(
    request: Request,
    contact_id: str,
    payload: ContactUpdateRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    contact = update_contact(db, contact_id, user.id, **payload.model_dump(exclude_unset=True))
    if not contact:
        return JSONResponse(_NOT_FOUND, status_code=404)
    audit(db, request, "contact_update", resource_type="contact", resource_id=contact.id)
    db.commit()
    return JSONResponse({"ok": True, "contact": _contact_json(contact, user.id)})


@router.post("/contacts/{contact_id}/verify")
def verify_contact_route(
    request: Request,
    contact_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    contact = verify_contact(db, contact_id, user.id)
    if not contact:
        return JSONResponse(_NOT_FOUND, status_code=404)
    audit(db, request, "contact_verify", resource_type="contact", resource_id=contact.id)
    db.commit()
    return JSONResponse({"ok": True, "contact": _contact_json(contact, user.id)})


@router.delete("/contacts/{contact_id}")
def delete_contact_route(
    request: Request,
    contact_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    if not delete_contact(db, contact_id, user.id):
        return JSONResponse(_NOT_FOUND, status_code=404)
    audit(db, request, "contact_delete", f"id={contact_id}", resource_type="contact", resource_id=to_uuid(contact_id))
    db.commit()
    return JSONResponse({"ok": True})


@router.put("/contacts/{contact_id}/vote")
@limiter.limit(settings.rate_limit_vote)
def vote_route(
    request: Request,
    contact_id: str,
    payload: VoteRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        vote = cast_vote(db, contact_id, user.id, payload.vote_type)
        if not vote:
            return JSONResponse(_NOT_FOUND, status_code=404)
        audit(db, request, "contact_vote", f"vote={payload.vote_type}", resource_type="contact", resource_id=vote.contact_id)
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Concurrent vote by user %s on contact %s", user.id, contact_id)
        return JSONResponse({"error": "Vote already recorded, retry"}, status_code=409)

    contact = get_visible_contact(db, contact_id, user.id)
    return JSONResponse({"ok": True, "my_vote": vote.vote_type.value, "contact": _contact_json(contact, user.id)})


@router.delete("/contacts/{contact_id}/vote")
@limiter.limit(settings.rate_limit_vote)
def remove_vote_route(
    request: Request,
    contact_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    if not remove_vote(db, contact_id, user.id):
        return JSONResponse({"error": "Vote not found"}, status_code=404)
    audit(db, request, "contact_unvote", resource_type="contact", resource_id=to_uuid(contact_id))
    db.commit()
    contact = get_visible_contact(db, contact_id, user.id)
    return JSONResponse({"ok": True, "my_vote": None, "contact": _contact_json(contact, user.id) if contact else None})
