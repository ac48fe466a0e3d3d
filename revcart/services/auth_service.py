"""
Authentication and identity related use cases.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, is_dataclass
from typing import Any, Optional
import logging

from revcart.core.security import AuthenticationFailed, authenticate, hash_password
from revcart.db.models import User, UserRole
from revcart.db.session import transactional
from revcart.repositories.sql_repository import SQLRepository
from revcart.services.activity_service import ActivityLogService
from revcart.services.otp_service import OtpService
from revcart.services.token_service import issue_token

logger = logging.getLogger("revcart.auth")


class AuthError(Exception):
    """Base class for authentication-related exceptions."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(AuthError):
    status_code = 400


class ResourceNotFoundError(AuthError):
    status_code = 404


@dataclass
class ApiResponse:
    success: bool
    message: str
    data: Any = None

    def to_dict(self) -> dict:
        body: dict = {"success": self.success, "message": self.message}
        if self.data is not None:
            body["data"] = asdict(self.data) if is_dataclass(self.data) else self.data
        return body


@dataclass
class AuthPayload:
    token: str
    user_id: int
    email: str
    name: str
    role: str


@dataclass
class UserDto:
    id: int
    full_name: str
    email: str
    phone: Optional[str]
    role: str
    email_verified: bool
    active: bool

    @classmethod
    def from_user(cls, user: User) -> "UserDto":
        return cls(
            id=user.id,
            full_name=user.full_name,
            email=user.email,
            phone=user.phone,
            role=_role_name(user.role),
            email_verified=bool(user.email_verified),
            active=bool(user.active),
        )


def _role_name(role: UserRole | str | None) -> str:
    if role is None:
        return UserRole.CUSTOMER.value
    return getattr(role, "value", role)


@dataclass
class AuthService:
    """Handles registration, login, OTP verification and password reset flows."""

    def __post_init__(self):
        self.repository = SQLRepository()
        self.otp = OtpService(self.repository)
        self.activity = ActivityLogService(self.repository)

    # -------------------------------------- registration --------------------------------------
    @transactional
    def register(
        self,
        full_name: str,
        email: str,
        password: str,
        phone: Optional[str] = None,
        role: Optional[UserRole] = None,
    ) -> ApiResponse:
        raw_email = (email or "").strip()
        if self.repository.exists_by_email(raw_email):
            raise BadRequestError("Email already registered")
        user_role = UserRole(role) if role else UserRole.CUSTOMER
        user = self.repository.save_user(
            full_name=(full_name or "").strip(),
            email=raw_email,
            password_hash=hash_password(password),
            phone=phone,
            role=user_role,
            authorities=[f"ROLE_{user_role.value}"],
        )
        self.activity.log(user.id, "REGISTER", {"email": user.email})
        logger.info("Registered user id=%s role=%s", user.id, user_role.value)
        self.otp.issue(user.email)
        return ApiResponse(success=True, message="User registered. Please verify OTP sent to your email.")

    # -------------------------------------- login --------------------------------------
    @transactional
    def login(self, email: str, password: str) -> ApiResponse:
        try:
            user = authenticate(email, password, self.repository.find_user_by_email)
        except AuthenticationFailed as exc:
            # one message for every cause so callers cannot tell which emails exist
            logger.debug("Login rejected for %s: %s", email, exc.reason)
            raise BadRequestError("Invalid email or password") from exc
        if not user.email_verified:
            raise BadRequestError("Email not verified")
        if not user.active:
            raise BadRequestError("Account is disabled. Please contact administrator.")
        token = issue_token(user)
        self.activity.log(user.id, "LOGIN", {"email": user.email})
        logger.info("Login successful for user id=%s", user.id)
        payload = AuthPayload(
            token=token,
            user_id=user.id,
            email=user.email,
            name=user.full_name,
            role=_role_name(user.role),
        )
        return ApiResponse(success=True, message="Login successful", data=payload)

    # -------------------------------------- OTP verification --------------------------------------
    @transactional
    def verify_otp(self, email: str, otp: str) -> ApiResponse:
        raw_email = (email or "").strip()
        token = self.otp.latest(raw_email)
        if not token:
            raise BadRequestError("OTP not found")
        if token.consumed or self.otp.is_expired(token):
            logger.warning("Expired or consumed OTP submitted for %s", raw_email)
            raise BadRequestError("OTP expired")
        if not self.otp.matches(token, otp):
            logger.warning("OTP mismatch for %s", raw_email)
            raise BadRequestError("Invalid OTP")
        self.otp.consume(token)
        if not self.repository.exists_by_email(raw_email):
            raise ResourceNotFoundError("User not found")
        self.repository.set_email_verified(raw_email)
        return ApiResponse(success=True, message="Email verified successfully")

    @transactional
    def resend_otp(self, email: str) -> ApiResponse:
        self.otp.issue((email or "").strip())
        return ApiResponse(success=True, message="OTP resent successfully")

    # -------------------------------------- password reset --------------------------------------
    @transactional
    def forgot_password(self, email: str) -> ApiResponse:
        raw_email = (email or "").strip()
        if not self.repository.exists_by_email(raw_email):
            raise ResourceNotFoundError("User not found")
        self.otp.issue(raw_email)
        return ApiResponse(success=True, message="OTP sent to your email")

    @transactional
    def reset_password(self, email: str, otp: str, new_password: str) -> ApiResponse:
        raw_email = (email or "").strip()
        token = self.otp.latest(raw_email)
        if not token:
            raise BadRequestError("OTP not found")
        # TODO: also reject consumed tokens here once product confirms reset should match verify_otp
        if not self.otp.matches(token, otp) or self.otp.is_expired(token):
            logger.warning("Invalid password reset OTP for %s", raw_email)
            raise BadRequestError("Invalid OTP")
        self.otp.consume(token)
        if not self.repository.exists_by_email(raw_email):
            raise ResourceNotFoundError("User not found")
        self.repository.update_user_password(raw_email, hash_password(new_password))
        user = self.repository.find_user_by_email(raw_email)
        logger.info("Password reset for user id=%s", user.id)
        return ApiResponse(success=True, message="Password reset successful", data=UserDto.from_user(user))
