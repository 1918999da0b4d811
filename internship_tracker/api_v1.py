"""API v1 router: all JSON endpoints under /api/v1 prefix."""

from fastapi import APIRouter

from .applications.routes import router as applications_router
from .auth.routes import router as auth_router
from .contacts.routes import router as contacts_router
from .dashboard.routes import router as dashboard_router
from .posts.routes import router as posts_router
from .profiles.routes import router as profiles_router
from .resumes.routes import router as resumes_router

api_v1_router = APIRouter(prefix="/api/v1", tags=["api-v1"])

api_v1_router.include_router(auth_router)
api_v1_router.include_router(resumes_router)
api_v1_router.include_router(contacts_router)
api_v1_router.include_router(profiles_router)
api_v1_router.include_router(posts_router)
api_v1_router.include_router(applications_router)
api_v1_router.include_router(dashboard_router)
