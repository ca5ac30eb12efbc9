"""
Session refresh and current-user endpoints.
"""
from typing import Optional

from fastapi import APIRouter, Body, Depends, Request

from hostelcare.api import deps
from hostelcare.core.context import CallerContext
from hostelcare.schemas.auth import RefreshRequest
from hostelcare.services import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/refresh")
def refresh_session(
    request: Request,
    payload: Optional[RefreshRequest] = Body(default=None),
    auth: AuthService = Depends(deps.get_auth_service),
):
    """Rotate tokens. The refresh token is read from the cookie, then the body."""
    result = auth.refresh_session(deps.extract_refresh_token(request, payload)).raise_for_error()
    response = deps.respond(result.data, result.message)
    return deps.set_auth_cookies(response, result.data.access_token, result.data.refresh_token)


@router.get("/me")
def current_user(
    caller: CallerContext = Depends(deps.get_caller),
    auth: AuthService = Depends(deps.get_auth_service),
):
    result = auth.current_user(caller).raise_for_error()
    return deps.respond(result.data, result.message)
