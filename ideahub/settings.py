from __future__ import annotations

from dataclasses import dataclass
import logging
import os


@dataclass(frozen=True)
class AppSettings:
    host: str = "0.0.0.0"
    port: int = 8000
    database_url: str | None = None
    jwt_secret: str | None = None
    log_level: str = "INFO"


def app_settings_from_env() -> AppSettings:
    return AppSettings(
        host=os.getenv("APP_HOST", "0.0.0.0"),
        port=_env_int("APP_PORT", 8000),
        database_url=os.getenv("DATABASE_URL") or None,
        jwt_secret=os.getenv("AUTH_JWT_SECRET") or None,
        log_level=validate_log_level(os.getenv("LOG_LEVEL", "INFO")),
    )


def validate_log_level(value: str) -> str:
    level = value.upper()
    if level not in logging.getLevelNamesMapping():
        raise ValueError(f"Unsupported log level '{value}'")
    return level


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default

    try:
        parsed = int(value)
    except ValueError:
        return default

    return parsed if parsed > 0 else default
