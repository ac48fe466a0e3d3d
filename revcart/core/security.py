"""Security helpers (hashing, verification and credential checks)."""

from __future__ import annotations

from typing import Callable, Optional, TypeVar

from argon2 import PasswordHasher, exceptions as argon_exc

_ph = PasswordHasher()
_PREFIX = "argon2$"

T = TypeVar("T")


class AuthenticationFailed(Exception):
    """Raised by :func:`authenticate`; ``reason`` is for logs only."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


def hash_password(password: str) -> str:
    """Create an Argon2 hash with a prefix for detection."""
    hashed = _ph.hash(password)
    return f"{_PREFIX}{hashed}"


def verify_password(password: str, stored_hash: str | None) -> bool:
    stored = stored_hash or ""
    if not stored.startswith(_PREFIX):
        return False
    hashed = stored[len(_PREFIX) :]
    try:
        return _ph.verify(hashed, password)
    except (argon_exc.VerifyMismatchError, argon_exc.VerificationError, argon_exc.InvalidHashError):
        return False


def authenticate(email: str, password: str, load_user: Callable[[str], Optional[T]]) -> T:
    """
    Check an email/password pair against the stored credential.

    ``load_user`` returns the account for an email (or None); the account must
    expose ``password_hash``. Returns the account on success.
    """
    raw_email = (email or "").strip()
    if not raw_email or not password:
        raise AuthenticationFailed("missing_credentials")
    user = load_user(raw_email)
    if user is None:
        raise AuthenticationFailed("unknown_user")
    if not verify_password(password, getattr(user, "password_hash", None)):
        raise AuthenticationFailed("bad_password")
    return user
