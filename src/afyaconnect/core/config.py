"""
AfyaConnect settings.

Everything comes from the process environment and is read once, when this
module is first imported. ENVIRONMENT must always be set; outside the test
environment the signing key and admin credentials are mandatory too.
"""

import os
from enum import Enum
from pathlib import Path


class Environment(str, Enum):
    PRODUCTION = "production"
    DEVELOPMENT = "development"
    TEST = "test"


def _get_environment() -> Environment:
    raw = os.getenv("ENVIRONMENT")
    choices = ", ".join(env.value for env in Environment)
    if not raw:
        raise RuntimeError(f"ENVIRONMENT must be set to one of: {choices}")
    try:
        return Environment(raw.strip().lower())
    except ValueError:
        raise RuntimeError(f"Unknown ENVIRONMENT {raw!r}; expected one of: {choices}")


def _csv(name: str, default: str = "") -> list[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


def _flag(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).strip().lower() in ("1", "true", "yes")


class Settings:
    """Service configuration, one attribute per environment variable."""

    APP_NAME: str = "AfyaConnect API"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: Environment = _get_environment()

    # Storage: PostgreSQL when DATABASE_URL is set, else the SQLite file
    PROJECT_ROOT: Path = Path(__file__).resolve().parents[3]
    DATA_DIR: Path = PROJECT_ROOT / "data"
    DATABASE_URL: str | None = os.getenv("DATABASE_URL")
    DB_PATH: str = os.getenv("AFYACONNECT_DB", str(DATA_DIR / "afyaconnect.db"))

    # Bearer tokens and the single environment-defined admin account
    SECRET_KEY: str | None = os.getenv("SECRET_KEY")
    TOKEN_MAX_AGE_SECONDS: int = int(os.getenv("TOKEN_MAX_AGE_SECONDS", str(24 * 3600)))
    ADMIN_USERNAME: str | None = os.getenv("ADMIN_USERNAME")
    ADMIN_PASSWORD: str | None = os.getenv("ADMIN_PASSWORD")
    BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

    # Testimonial images
    UPLOAD_DIR: str = os.getenv("UPLOAD_DIR", str(DATA_DIR / "uploads"))
    MAX_UPLOAD_BYTES: int = int(os.getenv("MAX_FILE_SIZE", str(5 * 1024 * 1024)))
    ALLOWED_IMAGE_TYPES: list[str] = _csv(
        "ALLOWED_FILE_TYPES", "image/jpeg,image/png,image/gif,image/webp"
    )

    # Hospital search
    MAX_QUERY_LEN: int = int(os.getenv("MAX_QUERY_LEN", "200"))
    DEFAULT_RESULTS_LIMIT: int = int(os.getenv("DEFAULT_RESULTS_LIMIT", "20"))
    MAX_RESULTS_LIMIT: int = int(os.getenv("MAX_RESULTS_LIMIT", "100"))

    # HTTP surface
    RATE_LIMIT_ENABLED: bool = _flag("RATE_LIMIT_ENABLED", True)
    ALLOWED_HOSTS: list[str] = _csv("ALLOWED_HOSTS", "localhost,127.0.0.1,testclient,testserver")
    CORS_ORIGINS: list[str] = _csv("CORS_ORIGINS")
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3001"))
    DEBUG: bool = _flag("DEBUG", False)
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()


def _validate_required(settings: Settings) -> None:
    if settings.ENVIRONMENT is Environment.TEST:
        return
    missing = [
        name
        for name in ("SECRET_KEY", "ADMIN_USERNAME", "ADMIN_PASSWORD")
        if not getattr(settings, name)
    ]
    if settings.ENVIRONMENT is Environment.PRODUCTION and not settings.DATABASE_URL:
        missing.append("DATABASE_URL")
    if missing:
        raise RuntimeError(f"Missing required environment variables: {', '.join(missing)}")


_validate_required(settings)
