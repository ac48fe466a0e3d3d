"""Request/response models for the auth endpoints."""
from __future__ import annotations

import re
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, Field, field_validator

from revcart.db.models import UserRole

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_OTP_RE = re.compile(r"^\d{6}$")


def normalize_email(value: str) -> str:
    value = (value or "").strip()
    if not _EMAIL_RE.match(value):
        raise ValueError("Invalid email address")
    return value


# ?email=... on resend/forgot; failures go through the same 422 handler as bodies
EmailQuery = Annotated[str, AfterValidator(normalize_email)]


class RegisterRequest(BaseModel):
    """Request model for creating an account"""
    full_name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., description="Login email; receives the OTP")
    password: str = Field(..., min_length=1)
    phone: Optional[str] = Field(None, max_length=32)
    role: Optional[UserRole] = Field(None, description="Defaults to CUSTOMER")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return normalize_email(v)

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Full name is required")
        return v


class AuthRequest(BaseModel):
    email: str
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return normalize_email(v)


class OtpVerificationRequest(BaseModel):
    email: str
    otp: str = Field(..., description="6-digit OTP code")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return normalize_email(v)

    @field_validator("otp")
    @classmethod
    def validate_otp(cls, v):
        v = (v or "").strip()
        if not _OTP_RE.match(v):
            raise ValueError("OTP must be 6 digits")
        return v


class PasswordResetRequest(OtpVerificationRequest):
    new_password: str = Field(..., min_length=1)
