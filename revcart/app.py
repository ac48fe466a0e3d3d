"""FastAPI application for the RevCart auth API."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from revcart.core.config import get_settings
from revcart.core.log import configure_logging
from revcart.routers import auth as auth_router
from revcart.services.auth_service import AuthError

logger = logging.getLogger("revcart.app")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Baseline security headers for JSON responses."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("Cache-Control", "no-store")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


async def _auth_error_handler(request: Request, exc: AuthError):
    logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse({"success": False, "message": exc.message}, status_code=exc.status_code)


async def _validation_error_handler(request: Request, exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        field_path = ".".join(str(loc) for loc in err.get("loc", []) if loc != "body")
        errors.append(f"{field_path}: {err.get('msg', 'Invalid input')}")
    logger.warning("validation_error | %s %s errors=%s", request.method, request.url.path, errors)
    return JSONResponse(
        {"success": False, "message": "Invalid request data", "errors": errors},
        status_code=422,
    )


def create_app() -> FastAPI:
    """Factory compatible with uvicorn/gunicorn (``--factory``)."""
    settings = get_settings()
    configure_logging(settings.log_level)
    app = FastAPI(title="RevCart Auth API")
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")
    app.add_exception_handler(AuthError, _auth_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.include_router(auth_router.router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()
