"""
Credential service: password hashing and signed session tokens.
"""

from functools import lru_cache

from hostelcare.config.settings import settings
from hostelcare.core.security.jwt_handler import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    JWTManager,
)
from hostelcare.core.security.password_hasher import PasswordHasher


@lru_cache()
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=settings.PASSWORD_BCRYPT_ROUNDS)


@lru_cache()
def get_jwt_manager() -> JWTManager:
    return JWTManager(
        secret_key=settings.JWT_SECRET_KEY,
        refresh_secret_key=settings.JWT_REFRESH_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        access_token_expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        refresh_token_expire_days=settings.REFRESH_TOKEN_EXPIRE_DAYS,
    )


__all__ = [
    "ACCESS_TOKEN_TYPE",
    "REFRESH_TOKEN_TYPE",
    "JWTManager",
    "PasswordHasher",
    "get_jwt_manager",
    "get_password_hasher",
]
