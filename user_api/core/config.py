import logging
import os
from collections.abc import Mapping

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict
from sqlalchemy.engine import URL

logger = logging.getLogger(__name__)

# Weak on purpose so a fresh checkout runs; refused in production.
FALLBACK_JWT_SECRET = "your-secret-key"


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int(value: str | None, default: int) -> int:
    if value is None or not value.strip():
        return default
    return int(value)


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if value is None:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseModel):
    """Process-wide configuration, resolved once at startup."""

    model_config = ConfigDict(frozen=True)

    app_env: str = "development"

    jwt_secret: str = FALLBACK_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_expires_minutes: int = 60
    bcrypt_rounds: int = 10

    database_url: str = "sqlite+aiosqlite:///./users.db"
    db_tablename: str = "users"
    db_pool_size: int = 10
    db_auto_create: bool = False

    host: str = "0.0.0.0"
    port: int = 5000
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    log_level: str = "INFO"

    @property
    def uses_fallback_secret(self) -> bool:
        return self.jwt_secret == FALLBACK_JWT_SECRET


def _database_url_from_parts(environ: Mapping[str, str]) -> str:
    url = URL.create(
        "mysql+aiomysql",
        username=environ.get("DB_USER", "root"),
        password=environ.get("DB_PASSWORD") or None,
        host=environ.get("DB_HOST", "localhost"),
        port=_get_int(environ.get("DB_PORT"), 3306),
        database=environ.get("DB_NAME", "users_db"),
    )
    return url.render_as_string(hide_password=False)


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from the environment (and .env when reading os.environ)."""
    if environ is None:
        load_dotenv()
        environ = os.environ

    return Settings(
        app_env=environ.get("APP_ENV", "development"),
        jwt_secret=environ.get("JWT_SECRET") or FALLBACK_JWT_SECRET,
        jwt_algorithm=environ.get("JWT_ALGORITHM", "HS256"),
        jwt_expires_minutes=_get_int(environ.get("JWT_EXPIRES_MINUTES"), 60),
        bcrypt_rounds=_get_int(environ.get("BCRYPT_ROUNDS"), 10),
        database_url=environ.get("DATABASE_URL") or _database_url_from_parts(environ),
        db_tablename=environ.get("DB_TABLENAME", "users"),
        db_pool_size=_get_int(environ.get("DB_POOL_SIZE"), 10),
        db_auto_create=_get_bool(environ.get("DB_AUTO_CREATE"), default=False),
        host=environ.get("HOST", "0.0.0.0"),
        port=_get_int(environ.get("PORT"), 5000),
        cors_origins=_get_list(
            environ.get("CORS_ORIGINS"),
            ["http://localhost:5173", "http://localhost:3000"],
        ),
        log_level=environ.get("LOG_LEVEL", "INFO").upper(),
    )


def validate_runtime_config(settings: Settings) -> None:
    if not settings.uses_fallback_secret:
        return
    if settings.app_env.lower() == "production":
        raise RuntimeError("JWT_SECRET must be set in production.")
    logger.warning("JWT_SECRET is not set; signing tokens with the insecure fallback secret.")
