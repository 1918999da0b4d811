import logging
import logging.handlers
from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql://tracker:tracker@db:5432/tracker"
    secret_key: str = "change-me"

    # Bootstrap admin account (created on startup if both are set)
    admin_email: str = ""
    admin_password: str = ""

    # HTTP
    cors_origins: str = "http://localhost:5173"
    cors_allow_credentials: bool = True
    trusted_hosts: str = "*"
    rate_limit_auth: str = "10/minute"
    rate_limit_vote: str = "30/minute"

    # Resume uploads
    max_resume_size: int = 5_242_880  # 5 MB

    # Logging
    log_level: str = "INFO"
    log_dir: str = "logs"
    log_max_bytes: int = 10_485_760  # 10 MB
    log_backup_count: int = 5

    model_config = {"env_file": ".env"}

    @property
    def effective_database_url(self) -> str:
        """Database URL with legacy ``postgres://`` schemes rewritten for SQLAlchemy."""
        if self.database_url.startswith("postgres://"):
            return "postgresql://" + self.database_url[len("postgres://") :]
        return self.database_url

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def trusted_hosts_list(self) -> list[str]:
        return [h.strip() for h in self.trusted_hosts.split(",") if h.strip()] or ["*"]


settings = Settings()


_CONSOLE_FORMAT = logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s", datefmt="%H:%M:%S")
_FILE_FORMAT = logging.Formatter(
    "%(asctime)s %(levelname)-8s [%(name)s:%(funcName)s:%(lineno)d] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

# Library loggers that would drown out application messages at INFO
_NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "alembic")


def _rotating_handler(path: Path, level: int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=settings.log_max_bytes,
        backupCount=settings.log_backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(_FILE_FORMAT)
    return handler


def setup_logging() -> None:
    """Configure root logging: console plus rotating ``app.log`` and ``error.log``.

    The console shows INFO and above; ``app.log`` keeps everything down to
    DEBUG, which is where the derived-state listeners report their work;
    ``error.log`` keeps ERROR and above only.
    """
    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    root.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(_CONSOLE_FORMAT)
    root.addHandler(console)
    root.addHandler(_rotating_handler(log_dir / "app.log", logging.DEBUG))
    root.addHandler(_rotating_handler(log_dir / "error.log", logging.ERROR))

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging to %s at %s (rotating at %d MB, %d backups)",
        log_dir,
        settings.log_level.upper(),
        settings.log_max_bytes // 1_048_576,
        settings.log_backup_count,
    )
