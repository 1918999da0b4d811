"""Internship post routes."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..audit.service import audit
from ..auth.models import User
from ..database.base import get_db
from ..dependencies import get_current_user
from .schemas import PostCreateRequest, PostResponse, PostUpdateRequest
from .service import create_post, delete_post, get_post, list_posts, update_post

router = APIRouter(tags=["posts"])

_NOT_FOUND = {"error": "Post not found"}


def _post_json(post) -> dict:
    return PostResponse.from_model(post).model_dump(mode="json")


@router.get("/posts")
def list_posts_route(
    search: str = "",
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return JSONResponse({"posts": [_post_json(p) for p in list_posts(db, user.id, search)]})


@router.post("/posts")
def create_post_route(
    request: Request,
    payload: PostCreateRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    details = payload.model_dump(exclude={"company_name", "position_title", "description"}, exclude_none=True)
    post = create_post(db, user.id, payload.company_name, payload.position_title, payload.description, **details)
    audit(db, request, "post_create", f"company={post.company_name}", resource_type="post", resource_id=post.id)
    db.commit()
    return JSONResponse({"ok": True, "post": _post_json(post)}, status_code=201)


@router.get("/posts/{post_id}")
def get_post_route(
    post_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    post = get_post(db, post_id, user.id)
    if not post:
        return JSONResponse(_NOT_FOUND, status_code=404)
    return JSONResponse({"post": _post_json(post)})


@router.patch("/posts/{post_id}")
def update_post_route(
    request: Request,
    post_id: str,
    payload: PostUpdateRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    post = update_post(db, post_id, user.id, **payload.model_dump(exclude_unset=True))
    if not post:
        return JSONResponse(_NOT_FOUND, status_code=404)
    audit(db, request, "post_update", resource_type="post", resource_id=post.id)
    db.commit()
    return JSONResponse({"ok": True, "post": _post_json(post)})


@router.delete("/posts/{post_id}")
def delete_post_route(
    request: Request,
    post_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    if not delete_post(db, post_id, user.id):
        return JSONResponse(_NOT_FOUND, status_code=404)
    audit(db, request, "post_delete", f"id={post_id}", resource_type="post")
    db.commit()
    return JSONResponse({"ok": True})
