from __future__ import annotations
import time, uuid
from typing import Any, Callable, Dict, Optional

import jwt

from .config import AuthSettings
from .errors import InvalidTokenError

REGISTERED_CLAIMS = ("sub", "iat", "exp", "iss", "aud", "jti")


class JWTTokenIssuer:
    """
    Signs identity tokens with PyJWT. Each token carries a random jti, so two
    tokens for the same subject and claims never collide.
    """
    def __init__(self, settings: Optional[AuthSettings] = None, now: Optional[Callable[[], float]] = None):
        self.settings = settings or AuthSettings()
        if not self.settings.AUTH_SECRET:
            raise ValueError("JWTTokenIssuer requires non-empty AUTH_SECRET")
        self._now = now or time.time

    def generate_token(self, subject: str, claims: Dict[str, Any]) -> str:
        iat = int(self._now())
        payload = {k: v for k, v in claims.items() if k not in REGISTERED_CLAIMS}
        payload.update({
            "sub": subject,
            "iat": iat,
            "exp": iat + self.settings.AUTH_ACCESS_TTL_SECONDS,
            "iss": self.settings.AUTH_ISSUER,
            "aud": self.settings.AUTH_AUDIENCE,
            "jti": str(uuid.uuid4()),
        })
        return jwt.encode(payload, self.settings.AUTH_SECRET, algorithm=self.settings.AUTH_ALG)

    def verify_token(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(
                token,
                self.settings.AUTH_SECRET,
                algorithms=[self.settings.AUTH_ALG],
                audience=self.settings.AUTH_AUDIENCE,
                issuer=self.settings.AUTH_ISSUER,
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.PyJWTError as ex:
            raise InvalidTokenError(f"Invalid token: {ex}")
