"""
Student session and dashboard endpoints.
"""
from typing import Optional

from fastapi import APIRouter, Body, Depends, Request

from hostelcare.api import deps
from hostelcare.core.context import CallerContext
from hostelcare.schemas.auth import RefreshRequest, StudentLoginRequest
from hostelcare.services import AuthService, DashboardService

router = APIRouter(prefix="/students", tags=["Students"])


@router.post("/login")
def login_student(
    payload: StudentLoginRequest,
    auth: AuthService = Depends(deps.get_auth_service),
):
    result = auth.login_student(payload.room_no, payload.password, payload.hostel_name).raise_for_error()
    response = deps.respond(result.data, result.message)
    return deps.set_auth_cookies(response, result.data.access_token, result.data.refresh_token)


@router.post("/logout")
def logout_student(
    request: Request,
    payload: Optional[RefreshRequest] = Body(default=None),
    caller: Optional[CallerContext] = Depends(deps.get_optional_caller),
    auth: AuthService = Depends(deps.get_auth_service),
):
    result = auth.logout(
        caller, deps.extract_refresh_token(request, payload)
    ).raise_for_error()
    return deps.clear_auth_cookies(deps.respond(result.data, "Student logged out successfully"))


@router.get("/dashboard")
def student_dashboard(
    caller: CallerContext = Depends(deps.get_caller),
    dashboards: DashboardService = Depends(deps.get_dashboard_service),
):
    result = dashboards.student_dashboard(caller=caller).raise_for_error()
    return deps.respond(result.data, result.message)
