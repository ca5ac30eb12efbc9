"""
JWT token management utilities.

Access tokens carry the caller's identity claims; refresh tokens carry only
the user id and are signed with a separate secret.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class JWTManager:
    """
    JWT token manager for authentication.

    Handles creation and validation of access and refresh tokens with
    different secrets and expiration times.
    """

    DEFAULT_ALGORITHM = "HS256"

    def __init__(
        self,
        secret_key: str,
        refresh_secret_key: str,
        algorithm: str = DEFAULT_ALGORITHM,
        access_token_expire_minutes: int = 60,
        refresh_token_expire_days: int = 10,
    ):
        self.secret_key = secret_key
        self.refresh_secret_key = refresh_secret_key
        self.algorithm = algorithm
        self.access_token_expire_minutes = access_token_expire_minutes
        self.refresh_token_expire_days = refresh_token_expire_days

    def create_access_token(
        self,
        user_id: str,
        additional_claims: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Create JWT access token.

        Args:
            user_id: User identifier
            additional_claims: Identity claims (role, hostel, room or username)

        Returns:
            Encoded JWT token
        """
        now = datetime.now(timezone.utc)
        payload = {
            "user_id": str(user_id),
            "token_type": ACCESS_TOKEN_TYPE,
            "iat": now,
            "exp": now + timedelta(minutes=self.access_token_expire_minutes),
            "jti": secrets.token_hex(16),
        }
        if additional_claims:
            payload.update(additional_claims)

        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        logger.debug(f"Access token created for user {user_id}")
        return token

    def create_refresh_token(self, user_id: str) -> str:
        """Create JWT refresh token."""
        now = datetime.now(timezone.utc)
        payload = {
            "user_id": str(user_id),
            "token_type": REFRESH_TOKEN_TYPE,
            "iat": now,
            "exp": now + timedelta(days=self.refresh_token_expire_days),
            "jti": secrets.token_hex(16),
        }
        token = jwt.encode(payload, self.refresh_secret_key, algorithm=self.algorithm)
        logger.debug(f"Refresh token created for user {user_id}")
        return token

    def verify_token(self, token: str, token_type: str = ACCESS_TOKEN_TYPE) -> Dict[str, Any]:
        """
        Verify and decode JWT token.

        Raises:
            jwt.ExpiredSignatureError: If token is expired
            jwt.InvalidTokenError: If token is invalid or of the wrong type
        """
        key = self.refresh_secret_key if token_type == REFRESH_TOKEN_TYPE else self.secret_key
        try:
            payload = jwt.decode(token, key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            logger.warning("Token verification failed: token expired")
            raise
        except jwt.InvalidTokenError as e:
            logger.warning(f"Token verification failed: {e}")
            raise

        if payload.get("token_type") != token_type:
            raise jwt.InvalidTokenError(f"Expected a {token_type} token")
        return payload

    def create_token_pair(
        self,
        user_id: str,
        additional_claims: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, str]:
        """Create both access and refresh tokens."""
        return {
            "access_token": self.create_access_token(user_id, additional_claims),
            "refresh_token": self.create_refresh_token(user_id),
        }
