from .service import AuthService, get_auth_service, set_auth_service
from .hashing import PasswordHasher
from .tokens import JWTTokenIssuer
from .store import InMemoryUserStore, UserStorePort
from .config import AuthSettings
from .contracts import AuthResponse, LoginRequest, Role, SignupRequest, User
from .errors import CredentialServiceError, DuplicateAccountError, InvalidCredentialsError, InvalidTokenError
from .deps import get_current_user, require_roles
from .routes import router as auth_router
from .app import create_app

__all__ = [
    "AuthService",
    "get_auth_service",
    "set_auth_service",
    "PasswordHasher",
    "JWTTokenIssuer",
    "InMemoryUserStore",
    "UserStorePort",
    "AuthSettings",
    "AuthResponse",
    "LoginRequest",
    "Role",
    "SignupRequest",
    "User",
    "CredentialServiceError",
    "DuplicateAccountError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "get_current_user",
    "require_roles",
    "auth_router",
    "create_app",
]
