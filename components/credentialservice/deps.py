from typing import Callable, Optional

from fastapi import Depends, Header, HTTPException, status

from .contracts import Role, User
from .errors import InvalidTokenError
from .service import AuthService, get_auth_service


def get_authorization_header(authorization: Optional[str] = Header(default=None, alias="Authorization")) -> Optional[str]:
    """Extract the raw Authorization header value (e.g. 'Bearer <token>')."""
    return authorization


def get_current_user(
    auth: AuthService = Depends(get_auth_service),
    authorization: Optional[str] = Depends(get_authorization_header),
) -> User:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid Authorization header",
        )

    token = authorization.split(" ", 1)[1].strip()
    try:
        claims = auth.issuer.verify_token(token)
    except InvalidTokenError as ex:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=ex.payload.message)

    user = auth.find_by_email(claims["sub"])
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unknown user")
    return user


def require_roles(*allowed: Role) -> Callable[..., User]:
    """
    Dependency factory: `user: User = Depends(require_roles(Role.ADMIN))`.
    No roles means any authenticated user.
    """
    def _dep(user: User = Depends(get_current_user)) -> User:
        if allowed and user.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Role {user.role.value} not permitted",
            )
        return user

    return _dep
