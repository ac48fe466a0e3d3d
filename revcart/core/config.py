"""
Configuration helpers for the RevCart auth backend.

Settings are read from environment variables (database, SMTP, token signing,
OTP lifetime) so that routers/services do not fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    smtp_host: str
    smtp_port: int
    smtp_user: str
    smtp_password: str
    smtp_from: str
    jwt_secret: str
    jwt_expiration_seconds: int
    otp_ttl_seconds: int
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        database_url=os.getenv("DATABASE_URL", "sqlite:///./revcart.db"),
        smtp_host=os.getenv("SMTP_HOST", ""),
        smtp_port=_int(os.getenv("SMTP_PORT", "465"), 465),
        smtp_user=os.getenv("SMTP_USER", ""),
        smtp_password=os.getenv("SMTP_PASSWORD", ""),
        smtp_from=os.getenv("SMTP_FROM", os.getenv("SMTP_USER", "")),
        jwt_secret=os.getenv("JWT_SECRET", "dev-insecure-change-me"),
        jwt_expiration_seconds=_int(os.getenv("JWT_EXPIRATION_SECONDS", "86400"), 86400),
        otp_ttl_seconds=_int(os.getenv("OTP_TTL_SECONDS", "600"), 600),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
