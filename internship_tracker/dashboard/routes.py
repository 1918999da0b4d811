"""Dashboard routes."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..auth.models import User
from ..database.base import get_db
from ..dependencies import get_current_user
from .schemas import DashboardResponse
from .service import get_dashboard

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard")
def dashboard_api(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return JSONResponse(DashboardResponse(**get_dashboard(db, user.id)).model_dump())
