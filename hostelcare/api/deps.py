"""
Shared FastAPI dependencies.

Example usage in a router:
    from fastapi import APIRouter, Depends
    from hostelcare.api import deps

    @router.get("/workers")
    def list_workers(caller=Depends(deps.get_caller), service=Depends(deps.get_worker_service)):
        ...
"""

from typing import Any, Optional

from fastapi import Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from hostelcare.config.settings import settings
from hostelcare.core.context import CallerContext
from hostelcare.db.session import get_db
from hostelcare.schemas.auth import RefreshRequest
from hostelcare.schemas.common.response import ApiResponse
from hostelcare.services import (
    AuthService,
    CleaningLogService,
    DashboardService,
    IssueService,
    RoomService,
    WorkerService,
)
from hostelcare.services.integrations.blob_store import BlobStore, get_blob_store
from hostelcare.utils.datetime_utils import Clock, utc_now

ACCESS_TOKEN_COOKIE = "accessToken"
REFRESH_TOKEN_COOKIE = "refreshToken"


# --- Database, clock & storage -------------------------------------------------

def get_clock() -> Clock:
    return utc_now


def get_image_store() -> BlobStore:
    return get_blob_store()


# --- Services ------------------------------------------------------------------

def get_auth_service(db: Session = Depends(get_db), clock: Clock = Depends(get_clock)) -> AuthService:
    return AuthService(db, clock)


def get_room_service(db: Session = Depends(get_db), clock: Clock = Depends(get_clock)) -> RoomService:
    return RoomService(db, clock)


def get_worker_service(db: Session = Depends(get_db), clock: Clock = Depends(get_clock)) -> WorkerService:
    return WorkerService(db, clock)


def get_cleaning_log_service(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    blob_store: BlobStore = Depends(get_image_store),
) -> CleaningLogService:
    return CleaningLogService(db, clock, blob_store)


def get_issue_service(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    blob_store: BlobStore = Depends(get_image_store),
) -> IssueService:
    return IssueService(db, clock, blob_store)


def get_dashboard_service(db: Session = Depends(get_db), clock: Clock = Depends(get_clock)) -> DashboardService:
    return DashboardService(db, clock)


# --- Authentication ------------------------------------------------------------

def extract_access_token(request: Request) -> Optional[str]:
    """Access token from the ``accessToken`` cookie or a Bearer header."""
    token = request.cookies.get(ACCESS_TOKEN_COOKIE)
    if token:
        return token
    scheme, _, credentials = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


def extract_refresh_token(request: Request, payload: Optional[RefreshRequest] = None) -> Optional[str]:
    """Refresh token from the ``refreshToken`` cookie, then the request body."""
    token = request.cookies.get(REFRESH_TOKEN_COOKIE)
    if not token and payload is not None:
        token = payload.refresh_token
    return token or None


def get_caller(request: Request, auth: AuthService = Depends(get_auth_service)) -> CallerContext:
    """Authenticated caller; raises AuthenticationError (401) otherwise."""
    return auth.resolve_caller(extract_access_token(request)).unwrap()


def get_optional_caller(
    request: Request,
    auth: AuthService = Depends(get_auth_service),
) -> Optional[CallerContext]:
    token = extract_access_token(request)
    if not token:
        return None
    result = auth.resolve_caller(token)
    return result.data if result.is_success else None


# --- Responses & cookies -------------------------------------------------------

def respond(data: Any = None, message: str = "Success", status_code: int = 200) -> JSONResponse:
    """Wrap ``data`` in the success envelope."""
    envelope = ApiResponse.create(data=data, message=message, status_code=status_code)
    return JSONResponse(status_code=status_code, content=envelope.to_response())


def set_auth_cookies(response: JSONResponse, access_token: str, refresh_token: str) -> JSONResponse:
    options = {"httponly": True, "secure": settings.COOKIE_SECURE, "samesite": "lax"}
    response.set_cookie(ACCESS_TOKEN_COOKIE, access_token, **options)
    response.set_cookie(REFRESH_TOKEN_COOKIE, refresh_token, **options)
    return response


def clear_auth_cookies(response: JSONResponse) -> JSONResponse:
    options = {"httponly": True, "secure": settings.COOKIE_SECURE, "samesite": "lax"}
    response.delete_cookie(ACCESS_TOKEN_COOKIE, **options)
    response.delete_cookie(REFRESH_TOKEN_COOKIE, **options)
    return response
