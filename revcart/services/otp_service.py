"""One-time passcode issuance and validity checks."""
from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from revcart.core.config import get_settings
from revcart.core.mailer import send_otp_email
from revcart.db.models import OtpToken
from revcart.repositories.sql_repository import SQLRepository

logger = logging.getLogger("revcart.otp")

OTP_MIN = 100000
OTP_SPAN = 900000


def generate_otp() -> str:
    """Six-digit numeric code from a CSPRNG."""
    return str(OTP_MIN + secrets.randbelow(OTP_SPAN))


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone=True columns.
    return value.astimezone(timezone.utc) if value.tzinfo else value.replace(tzinfo=timezone.utc)


@dataclass
class OtpService:
    repository: SQLRepository = field(default_factory=SQLRepository)

    @property
    def settings(self):
        return get_settings()

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    @property
    def ttl(self) -> timedelta:
        return timedelta(seconds=self.settings.otp_ttl_seconds)

    def is_expired(self, token: OtpToken, now: datetime | None = None) -> bool:
        current = _as_utc(now) if now else self._now()
        return _as_utc(token.expires_at) < current

    def matches(self, token: OtpToken, code: str) -> bool:
        expected = str(token.otp_code or "").encode()
        return secrets.compare_digest(expected, str(code or "").strip().encode())

    def issue(self, email: str) -> OtpToken:
        """Persist a fresh code for ``email`` and mail it. Older codes stay but are never looked up again."""
        code = generate_otp()
        token = self.repository.save_otp(email, code, self._now() + self.ttl)
        ttl_minutes = max(1, self.settings.otp_ttl_seconds // 60)
        if send_otp_email(email, code, ttl_minutes):
            logger.info("OTP issued and mailed to %s", email)
        else:
            logger.warning("OTP issued for %s but the email was not delivered", email)
        return token

    def latest(self, email: str) -> OtpToken | None:
        return self.repository.find_latest_otp(email)

    def consume(self, token: OtpToken) -> None:
        self.repository.mark_otp_consumed(token.id)
