"""FastAPI application factory with middleware, routers, and lifespan."""

import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from .api_v1 import api_v1_router
from .auth.service import ensure_admin_user
from .config import settings, setup_logging
from .database.base import get_db, session_scope
from .dependencies import AuthRequired
from .rate_limit import limiter

logger = logging.getLogger(__name__)

VERSION = "1.0.0"
SESSION_MAX_AGE = 86400 * 7
RETRY_AFTER_SECONDS = 60

_startup_time: float = 0.0


def _run_migrations() -> None:
    """Bring the schema to the latest Alembic revision."""
    from alembic import command
    from alembic.config import Config

    alembic_cfg = Config()
    alembic_cfg.set_main_option("script_location", str(Path(__file__).parent.parent / "alembic"))
    alembic_cfg.set_main_option("sqlalchemy.url", settings.effective_database_url)
    command.upgrade(alembic_cfg, "head")


@asynccontextmanager
async def lifespan(app: FastAPI):
    global _startup_time
    _startup_time = time.time()

    setup_logging()
    _run_migrations()
    with session_scope() as db:
        ensure_admin_user(db)

    logger.info("Internship tracker %s ready", VERSION)
    yield
    logger.info("Internship tracker shutting down")


def _error(message: str, status_code: int, **extra) -> JSONResponse:
    return JSONResponse({"error": message, **extra}, status_code=status_code)


def _rate_limit_handler(request: Request, exc: RateLimitExceeded) -> Response:
    response = _error("Too many requests", 429, detail=str(exc.detail), retry_after=RETRY_AFTER_SECONDS)
    response.headers["Retry-After"] = str(RETRY_AFTER_SECONDS)
    return response


def _register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)

    @app.exception_handler(AuthRequired)
    async def auth_required_handler(request: Request, exc: AuthRequired):
        return _error("Not authenticated", 401)

    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError):
        errors = [{"field": ".".join(str(p) for p in e["loc"][1:]), "message": e["msg"]} for e in exc.errors()]
        return _error("Validation failed", 422, detail=errors)

    @app.exception_handler(IntegrityError)
    async def integrity_handler(request: Request, exc: IntegrityError):
        # Unique and foreign-key violations that a route did not map itself
        logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
        return _error("Conflicts with existing data", 409)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _error(str(exc.detail), exc.status_code)

    @app.exception_handler(Exception)
    async def unhandled_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return _error("Internal server error", 500)


def _add_middleware(app: FastAPI) -> None:
    # Starlette wraps in reverse order: the last one added runs first
    app.add_middleware(SessionMiddleware, secret_key=settings.secret_key, max_age=SESSION_MAX_AGE)

    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    if settings.trusted_hosts_list != ["*"]:
        app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.trusted_hosts_list)

    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=["*"])

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = "max-age=63072000; includeSubDomains"
        return response


def _database_status(db: Session) -> str:
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.warning("Health check could not reach the database", exc_info=True)
        return "unreachable"
    return "ok"


def create_app() -> FastAPI:
    app = FastAPI(title="Internship Tracker", version=VERSION, lifespan=lifespan)

    _register_exception_handlers(app)
    _add_middleware(app)
    app.include_router(api_v1_router)

    @app.get("/health")
    def health(db: Session = Depends(get_db)):
        db_status = _database_status(db)
        return {
            "status": "ok" if db_status == "ok" else "degraded",
            "db": db_status,
            "version": VERSION,
            "uptime_seconds": round(time.time() - _startup_time, 1) if _startup_time else 0.0,
        }

    return app


app = create_app()
