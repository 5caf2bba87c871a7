from __future__ import annotations
import logging
from typing import Any, Dict, Optional
from .contracts import (
    PasswordHasherPort, TokenIssuerPort,
    SignupRequest, LoginRequest, AuthResponse, User, normalize_email,
)
from .errors import DuplicateAccountError, InvalidCredentialsError
from .store import UserStorePort
from .config import AuthSettings

log = logging.getLogger("credentialservice")


class AuthService:
    """
    Orchestrates signup, login and password updates over injected ports.
    Holds no per-request state; concurrent calls are safe as long as the
    store enforces email uniqueness on insert.
    """
    def __init__(
        self,
        *,
        user_store: UserStorePort,
        hasher: PasswordHasherPort,
        issuer: TokenIssuerPort,
        settings: Optional[AuthSettings] = None,
    ):
        self.user_store = user_store
        self.hasher = hasher
        self.issuer = issuer
        self.settings = settings or AuthSettings()

    # --------- Core operations ----------
    def find_by_email(self, email: str) -> Optional[User]:
        return self.user_store.find_by_email(normalize_email(email))

    def signup(self, req: SignupRequest) -> AuthResponse:
        if self.user_store.exists_by_email(req.email):
            log.info("auth.signup rejected reason=email_taken")
            raise DuplicateAccountError(details={"email": req.email})

        user = User(
            full_name=req.full_name,
            email=req.email,
            password_hash=self.hasher.encode(req.password),
            role=req.role,
        )
        saved = self.user_store.save_and_flush(user)
        log.info("auth.signup ok user_id=%s role=%s", saved.id, saved.role.value)
        return self._respond(saved)

    def login(self, req: LoginRequest) -> AuthResponse:
        user = self.user_store.find_by_email(req.email)
        if user is None:
            log.warning("auth.login failed reason=unknown_email")
            raise InvalidCredentialsError()
        if not self.hasher.matches(req.password, user.password_hash):
            log.warning("auth.login failed reason=bad_password user_id=%s", user.id)
            raise InvalidCredentialsError()

        if self.settings.AUTH_REHASH_ON_LOGIN and self.hasher.needs_rehash(user.password_hash):
            user = self.user_store.save(user.with_password_hash(self.hasher.encode(req.password)))
            log.info("auth.login rehashed user_id=%s", user.id)

        log.info("auth.login ok user_id=%s", user.id)
        return self._respond(user)

    def update_password(self, email: str, new_password: str) -> None:
        user = self.find_by_email(email)
        if user is None:
            # Unknown email is a silent no-op; callers get no existence signal.
            log.info("auth.update_password skipped reason=unknown_email")
            return
        self.user_store.save(user.with_password_hash(self.hasher.encode(new_password)))
        log.info("auth.update_password ok user_id=%s", user.id)

    # --------- Helpers ----------
    def _claims_for(self, user: User) -> Dict[str, Any]:
        return {"role": user.role.value, "uid": user.id, "name": user.full_name}

    def _respond(self, user: User) -> AuthResponse:
        token = self.issuer.generate_token(user.email, self._claims_for(user))
        return AuthResponse(
            id=user.id,
            full_name=user.full_name,
            email=user.email,
            role=user.role,
            token=token,
        )


_auth_service: Optional[AuthService] = None


def set_auth_service(svc: AuthService) -> None:
    global _auth_service
    _auth_service = svc


def get_auth_service() -> AuthService:
    # Dependency hook for DI; wired by the app factory or tests
    if _auth_service is None:
        raise RuntimeError("AuthService not configured; call set_auth_service() first")
    return _auth_service
