from __future__ import annotations
from typing import Optional
from .contracts import AuthErrorCodes, ErrorPayload


class CredentialServiceError(Exception):
    """Base error for the credential service. Carries a UWF error payload."""
    type: str = "INTERNAL"
    code: str = "internal_error"
    message: str = "Internal server error"
    status_code: int = 500

    def __init__(self, message: Optional[str] = None, *, details: Optional[dict] = None):
        self.payload = ErrorPayload(
            type=self.type,
            code=self.code,
            message=message or self.message,
            details=details,
        )
        super().__init__(self.payload.message)


class DuplicateAccountError(CredentialServiceError):
    """Raised on signup when the email is already registered."""
    type = "CONFLICT"
    code = AuthErrorCodes.EMAIL_TAKEN
    message = "An account with this email already exists"
    status_code = 409


class InvalidCredentialsError(CredentialServiceError):
    """Raised on login for an unknown email or a wrong password alike."""
    type = "AUTH_ERROR"
    code = AuthErrorCodes.BAD_CREDENTIALS
    message = "Invalid email or password"
    status_code = 401


class InvalidTokenError(CredentialServiceError):
    type = "AUTH_ERROR"
    code = AuthErrorCodes.INVALID_TOKEN
    message = "Invalid or expired token"
    status_code = 401
