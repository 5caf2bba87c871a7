from __future__ import annotations
from pydantic_settings import BaseSettings
from pydantic import Field

class AuthSettings(BaseSettings):
    AUTH_SECRET: str = Field(default="change-me-dev-secret")
    AUTH_ALG: str = Field(default="HS256")
    AUTH_ACCESS_TTL_SECONDS: int = Field(default=900)  # 15 minutes
    AUTH_ISSUER: str = Field(default="elearning-credentials")
    AUTH_AUDIENCE: str = Field(default="elearning-clients")
    # Hashing policy
    AUTH_HASH_ITERATIONS: int = Field(default=100_000)
    AUTH_REHASH_ON_LOGIN: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = False
