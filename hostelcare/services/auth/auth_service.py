"""
Authentication service: logins, token issuance, refresh and logout.

The hostel supplied at login is only a selector for the lookup; once a
session exists the hostel always comes from the stored user record.
"""

from typing import Optional

import jwt
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hostelcare.core.context import CallerContext
from hostelcare.core.exceptions import RepositoryError
from hostelcare.core.security import (
    REFRESH_TOKEN_TYPE,
    JWTManager,
    PasswordHasher,
    get_jwt_manager,
    get_password_hasher,
)
from hostelcare.models.user import User
from hostelcare.repositories.base import BaseRepository
from hostelcare.repositories.user_repository import UserRepository
from hostelcare.schemas.auth import LoginResponse, TokenPair, UserPublic
from hostelcare.services.base import BaseService, ServiceResult
from hostelcare.utils.datetime_utils import Clock


class AuthService(BaseService):
    """
    Credential checks and session token lifecycle.
    """

    def __init__(
        self,
        db_session: Session,
        clock: Optional[Clock] = None,
        password_hasher: Optional[PasswordHasher] = None,
        jwt_manager: Optional[JWTManager] = None,
    ):
        super().__init__(db_session, clock)
        self.password_hasher = password_hasher or get_password_hasher()
        self.jwt_manager = jwt_manager or get_jwt_manager()
        self.identities = BaseRepository(User, db_session)

    # -------------------------------------------------------------------------
    # Login
    # -------------------------------------------------------------------------

    def login_admin(self, username: str, password: str, hostel_name: str) -> ServiceResult[LoginResponse]:
        try:
            if not username or not password or not hostel_name:
                return ServiceResult.validation_failure(
                    "Username, password, and hostel selection are required"
                )
            user = UserRepository(self.db, hostel_name).find_admin(username)
            if user is None:
                self._logger.info(f"Admin login failed: unknown user in {hostel_name}")
                return ServiceResult.invalid_credentials(
                    "Admin user does not exist in the selected hostel"
                )
            return self._complete_login(user, password, "Admin logged in successfully")
        except (SQLAlchemyError, RepositoryError) as e:
            return self._handle_exception(e, "log in admin")

    def login_student(self, room_no: str, password: str, hostel_name: str) -> ServiceResult[LoginResponse]:
        try:
            if not room_no or not password or not hostel_name:
                return ServiceResult.validation_failure(
                    "Room number, password, and hostel selection are required"
                )
            room_no = room_no.strip().upper()
            user = UserRepository(self.db, hostel_name).find_student(room_no)
            if user is None:
                self._logger.info(f"Student login failed: room {room_no} not in {hostel_name}")
                return ServiceResult.invalid_credentials(
                    f"Room {room_no} not found in {hostel_name}"
                )
            return self._complete_login(user, password, "Student logged in successfully")
        except (SQLAlchemyError, RepositoryError) as e:
            return self._handle_exception(e, "log in student")

    def _complete_login(self, user: User, password: str, message: str) -> ServiceResult[LoginResponse]:
        if not self.password_hasher.verify(password, user.password_hash):
            self._logger.info(f"Login failed: wrong password for user {user.id}")
            return ServiceResult.invalid_credentials("Invalid credentials")

        tokens = self.issue_tokens(user.id)
        if tokens.is_failure:
            return tokens

        user = self.identities.find_by_id(user.id)
        self._logger.info(
            f"User {user.id} logged in",
            extra={"role": user.role.value, "hostel_name": user.hostel_name},
        )
        return ServiceResult.success(
            LoginResponse(
                user=UserPublic.model_validate(user),
                access_token=tokens.data.access_token,
                refresh_token=tokens.data.refresh_token,
            ),
            message=message,
        )

    # -------------------------------------------------------------------------
    # Tokens
    # -------------------------------------------------------------------------

    def issue_tokens(self, user_id: str) -> ServiceResult[TokenPair]:
        """
        Sign a fresh access/refresh pair and persist the refresh token.

        The user is re-read right before signing.
        """
        try:
            user = self.identities.find_by_id(user_id)
            if user is None:
                return ServiceResult.not_found(
                    "User", user_id, message="User not found while generating tokens"
                )

            claims = {
                "role": user.role.value,
                "hostel_name": user.hostel_name,
                "room_no": user.room_no,
                "username": user.username,
            }
            pair = self.jwt_manager.create_token_pair(user.id, claims)
            self.identities.update(user.id, {"refresh_token": pair["refresh_token"]})

            return ServiceResult.success(
                TokenPair(
                    access_token=pair["access_token"],
                    refresh_token=pair["refresh_token"],
                )
            )
        except (jwt.PyJWTError, SQLAlchemyError, RepositoryError) as e:
            self._logger.error(f"Token generation failed for user {user_id}: {e}", exc_info=True)
            return ServiceResult.internal(
                "Something went wrong while generating access & refresh tokens"
            )

    def refresh_session(self, refresh_token: Optional[str]) -> ServiceResult[LoginResponse]:
        """
        Exchange a valid refresh token for a new token pair.

        The token must match the one stored on the user, so a token
        cleared by logout or replaced by a later login is rejected.
        """
        if not refresh_token:
            return ServiceResult.unauthenticated("Refresh token is required")

        try:
            payload = self.jwt_manager.verify_token(refresh_token, REFRESH_TOKEN_TYPE)
        except jwt.PyJWTError:
            return ServiceResult.unauthenticated("Invalid or expired refresh token")

        try:
            user = self.identities.find_by_id(payload.get("user_id"))
            if user is None or user.refresh_token != refresh_token:
                return ServiceResult.unauthenticated("Refresh token is expired or used")

            tokens = self.issue_tokens(user.id)
            if tokens.is_failure:
                return tokens

            user = self.identities.find_by_id(user.id)
            return ServiceResult.success(
                LoginResponse(
                    user=UserPublic.model_validate(user),
                    access_token=tokens.data.access_token,
                    refresh_token=tokens.data.refresh_token,
                ),
                message="Access token refreshed",
            )
        except (SQLAlchemyError, RepositoryError) as e:
            return self._handle_exception(e, "refresh session")

    def resolve_caller(self, access_token: Optional[str]) -> ServiceResult[CallerContext]:
        """
        Resolve an access token to the caller's identity.

        The user record is re-read so that role and hostel come from the
        store rather than from token claims.
        """
        if not access_token:
            return ServiceResult.unauthenticated()

        try:
            payload = self.jwt_manager.verify_token(access_token)
        except jwt.PyJWTError:
            return ServiceResult.unauthenticated("Invalid access token")

        try:
            user = self.identities.find_by_id(payload.get("user_id"))
        except (SQLAlchemyError, RepositoryError) as e:
            return self._handle_exception(e, "resolve caller")

        if user is None:
            return ServiceResult.unauthenticated("Invalid access token")

        return ServiceResult.success(CallerContext.from_user(user))

    # -------------------------------------------------------------------------
    # Session
    # -------------------------------------------------------------------------

    def logout(
        self,
        caller: Optional[CallerContext] = None,
        refresh_token: Optional[str] = None,
    ) -> ServiceResult[dict]:
        """
        Clear the stored refresh token.

        Without a caller (access token missing or expired) the session is
        found through ``refresh_token``, which is revoked only if it is the
        one currently stored. Always succeeds otherwise, so repeated logouts
        are harmless.
        """
        user_id = caller.id if caller else None
        try:
            if user_id is None:
                user_id = self._refresh_token_owner(refresh_token)
            if user_id is None:
                return ServiceResult.success({}, message="User logged out successfully")

            self.identities.update(user_id, {"refresh_token": None})
            self._logger.info(f"User {user_id} logged out")
            return ServiceResult.success({}, message="User logged out successfully")
        except (SQLAlchemyError, RepositoryError) as e:
            return self._handle_exception(e, "log out", user_id)

    def _refresh_token_owner(self, refresh_token: Optional[str]) -> Optional[str]:
        """Id of the user whose stored refresh token is ``refresh_token``."""
        if not refresh_token:
            return None
        try:
            payload = self.jwt_manager.verify_token(refresh_token, REFRESH_TOKEN_TYPE)
        except jwt.PyJWTError:
            return None
        user = self.identities.find_by_id(payload.get("user_id"))
        if user is None or user.refresh_token != refresh_token:
            return None
        return user.id

    def current_user(self, caller: CallerContext) -> ServiceResult[UserPublic]:
        try:
            user = self.identities.find_by_id(caller.id)
            if user is None:
                return ServiceResult.unauthenticated("Invalid access token")
            return ServiceResult.success(
                UserPublic.model_validate(user),
                message="Current user fetched successfully",
            )
        except (SQLAlchemyError, RepositoryError) as e:
            return self._handle_exception(e, "fetch current user", caller.id)
