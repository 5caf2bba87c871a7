from __future__ import annotations
from enum import Enum
from typing import Any, Dict, Literal, Optional, Protocol
from pydantic import BaseModel, ConfigDict, Field, constr, field_validator

# ---------- Unified Wire Format (UWF) ----------
class ErrorPayload(BaseModel):
    type: Literal["AUTH_ERROR","VALIDATION","NOT_FOUND","CONFLICT","INTERNAL"]
    code: constr(strip_whitespace=True, min_length=1)
    message: constr(strip_whitespace=True, min_length=1)
    details: Optional[Dict[str, Any]] = None

class MetaPayload(BaseModel):
    request_id: Optional[str] = None
    duration_ms: Optional[int] = None

class UWFResponse(BaseModel):
    ok: bool
    result: Optional[Any] = None
    error: Optional[ErrorPayload] = None
    meta: MetaPayload = Field(default_factory=MetaPayload)

# ---------- Domain Models ----------
# Emails keep their case; only surrounding whitespace is trimmed.
Email = constr(strip_whitespace=True, min_length=3)

def normalize_email(email: str) -> str:
    return email.strip()

class Role(str, Enum):
    STUDENT = "STUDENT"
    INSTRUCTOR = "INSTRUCTOR"
    ADMIN = "ADMIN"

class User(BaseModel):
    """Identity record. Frozen: build a new instance instead of mutating."""
    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    full_name: constr(strip_whitespace=True, min_length=1)
    email: Email
    password_hash: str
    role: Role = Role.STUDENT

    def with_password_hash(self, password_hash: str) -> "User":
        return self.model_copy(update={"password_hash": password_hash})

    def with_id(self, user_id: int) -> "User":
        return self.model_copy(update={"id": user_id})

class PublicUser(BaseModel):
    id: Optional[int] = None
    full_name: str
    email: str
    role: Role

    @classmethod
    def from_user(cls, user: User) -> "PublicUser":
        return cls(id=user.id, full_name=user.full_name, email=user.email, role=user.role)

# ---------- Service I/O ----------
def _utf8_encodable(v: str) -> str:
    try:
        v.encode("utf-8")
    except UnicodeEncodeError:
        raise ValueError("password must be valid UTF-8 text")
    return v

class SignupRequest(BaseModel):
    full_name: constr(strip_whitespace=True, min_length=1)
    email: Email
    password: constr(min_length=1)
    role: Role = Role.STUDENT

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        return _utf8_encodable(v)

class LoginRequest(BaseModel):
    email: Email
    password: str

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        return _utf8_encodable(v)

class UpdatePasswordRequest(BaseModel):
    new_password: constr(min_length=1)

    @field_validator("new_password")
    @classmethod
    def check_password(cls, v: str) -> str:
        return _utf8_encodable(v)

class AuthResponse(BaseModel):
    id: Optional[int] = None
    full_name: str
    email: str
    role: Role
    token: str

class MeResponse(BaseModel):
    user: PublicUser

# ---------- Ports (Contracts) ----------
class PasswordHasherPort(Protocol):
    def encode(self, plaintext: str) -> str: ...
    def matches(self, plaintext: str, hashed: str) -> bool: ...
    def needs_rehash(self, hashed: str) -> bool: ...

class TokenIssuerPort(Protocol):
    """
    Contract for token signing. `verify_token` is only used by the HTTP layer
    to resolve the caller; the core never verifies tokens.
    """
    def generate_token(self, subject: str, claims: Dict[str, Any]) -> str: ...
    def verify_token(self, token: str) -> Dict[str, Any]: ...

# ---------- Errors ----------
class AuthErrorCodes:
    BAD_CREDENTIALS = "BAD_CREDENTIALS"
    EMAIL_TAKEN = "EMAIL_TAKEN"
    INVALID_TOKEN = "INVALID_TOKEN"
    FORBIDDEN_ROLE = "FORBIDDEN_ROLE"
