"""
Admin session, room provisioning and dashboard endpoints.
"""
from typing import Optional

from fastapi import APIRouter, Body, Depends, Request

from hostelcare.api import deps
from hostelcare.core.context import CallerContext
from hostelcare.schemas.auth import AdminLoginRequest, RefreshRequest
from hostelcare.schemas.room import RoomCreateRequest
from hostelcare.services import AuthService, DashboardService, RoomService

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post("/login")
def login_admin(
    payload: AdminLoginRequest,
    auth: AuthService = Depends(deps.get_auth_service),
):
    result = auth.login_admin(payload.username, payload.password, payload.hostel_name).raise_for_error()
    response = deps.respond(result.data, result.message)
    return deps.set_auth_cookies(response, result.data.access_token, result.data.refresh_token)


@router.post("/logout")
def logout_admin(
    request: Request,
    payload: Optional[RefreshRequest] = Body(default=None),
    caller: Optional[CallerContext] = Depends(deps.get_optional_caller),
    auth: AuthService = Depends(deps.get_auth_service),
):
    result = auth.logout(
        caller, deps.extract_refresh_token(request, payload)
    ).raise_for_error()
    return deps.clear_auth_cookies(deps.respond(result.data, result.message))


@router.post("/rooms", status_code=201)
def create_student_room(
    payload: RoomCreateRequest,
    caller: CallerContext = Depends(deps.get_caller),
    rooms: RoomService = Depends(deps.get_room_service),
):
    result = rooms.create_student_room(payload.room_no, payload.password, caller=caller).raise_for_error()
    return deps.respond(result.data, result.message, 201)


@router.get("/dashboard")
def admin_dashboard(
    caller: CallerContext = Depends(deps.get_caller),
    dashboards: DashboardService = Depends(deps.get_dashboard_service),
):
    result = dashboards.admin_dashboard(caller=caller).raise_for_error()
    return deps.respond(result.data, result.message)
