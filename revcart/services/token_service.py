"""Signed session tokens (HS256 JWT)."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt

from revcart.core.config import get_settings
from revcart.db.models import User

ALGORITHM = "HS256"


class InvalidSessionToken(Exception):
    pass


def issue_token(user: User) -> str:
    """Sign a token carrying the user's id, email, name and role."""
    settings = get_settings()
    now = datetime.now(timezone.utc)
    ttl = settings.jwt_expiration_seconds
    role = getattr(user.role, "value", user.role)
    claims = {
        "sub": str(user.id),
        "email": user.email,
        "name": user.full_name,
        "role": role,
        "iat": now,
        "exp": now + timedelta(seconds=ttl),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=ALGORITHM)


def decode_token(token: str) -> dict:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[ALGORITHM])
    except jwt.PyJWTError as exc:
        raise InvalidSessionToken(str(exc)) from exc
