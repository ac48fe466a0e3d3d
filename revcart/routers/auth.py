from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from revcart.schemas import (
    AuthRequest,
    EmailQuery,
    OtpVerificationRequest,
    PasswordResetRequest,
    RegisterRequest,
)
from revcart.services.auth_service import ApiResponse, AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])
auth_service = AuthService()


def _respond(result: ApiResponse, status_code: int = 200) -> JSONResponse:
    return JSONResponse(result.to_dict(), status_code=status_code)


@router.post("/register")
def register(body: RegisterRequest):
    result = auth_service.register(body.full_name, body.email, body.password, body.phone, body.role)
    return _respond(result, status_code=201)


@router.post("/login")
def login(body: AuthRequest):
    return _respond(auth_service.login(body.email, body.password))


@router.post("/verify-otp")
def verify_otp(body: OtpVerificationRequest):
    return _respond(auth_service.verify_otp(body.email, body.otp))


@router.post("/resend-otp")
def resend_otp(email: EmailQuery):
    return _respond(auth_service.resend_otp(email))


@router.post("/forgot-password")
def forgot_password(email: EmailQuery):
    return _respond(auth_service.forgot_password(email))


@router.post("/reset-password")
def reset_password(body: PasswordResetRequest):
    return _respond(auth_service.reset_password(body.email, body.otp, body.new_password))
