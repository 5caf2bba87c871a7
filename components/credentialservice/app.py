from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .config import AuthSettings
from .contracts import ErrorPayload, UWFResponse
from .hashing import PasswordHasher
from .routes import router
from .service import AuthService, set_auth_service
from .store import InMemoryUserStore, UserStorePort
from .tokens import JWTTokenIssuer


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Rejected input is not echoed back; it may not even be encodable.
    fields = [{"loc": [str(p) for p in err.get("loc", ())], "msg": err.get("msg", "")} for err in exc.errors()]
    body = UWFResponse(
        ok=False,
        error=ErrorPayload(
            type="VALIDATION",
            code="validation_error",
            message="Request validation failed",
            details={"fields": fields},
        ),
    )
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=body.model_dump())


def create_app(settings: Optional[AuthSettings] = None, user_store: Optional[UserStorePort] = None) -> FastAPI:
    settings = settings or AuthSettings()
    svc = AuthService(
        user_store=user_store or InMemoryUserStore(),
        hasher=PasswordHasher(iterations=settings.AUTH_HASH_ITERATIONS),
        issuer=JWTTokenIssuer(settings),
        settings=settings,
    )
    set_auth_service(svc)

    app = FastAPI(title="credentialservice")
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.include_router(router)
    return app
