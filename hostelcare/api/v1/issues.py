"""
Maintenance issue endpoints.
"""
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from starlette.concurrency import run_in_threadpool

from hostelcare.api import deps
from hostelcare.core.context import CallerContext
from hostelcare.core.exceptions import ValidationError
from hostelcare.schemas.issue import IssueResolve
from hostelcare.services import IssueService
from hostelcare.utils.file_handler import discard_file, save_upload_file

router = APIRouter(prefix="/issues", tags=["Issues"])


@router.post("", status_code=201)
async def raise_issue(
    issue_type: Optional[str] = Form(default=None, alias="issueType"),
    description: Optional[str] = Form(default=None),
    image: Optional[UploadFile] = File(default=None),
    caller: CallerContext = Depends(deps.get_caller),
    issues: IssueService = Depends(deps.get_issue_service),
):
    if not issue_type or not description:
        raise ValidationError("Issue Type and Description are required")

    image_path = await save_upload_file(image)
    try:
        result = await run_in_threadpool(
            issues.raise_issue, issue_type, description, image_path, caller=caller
        )
    finally:
        discard_file(image_path)
    result.raise_for_error()
    return deps.respond(result.data, result.message, 201)


@router.get("/my")
def get_my_issues(
    caller: CallerContext = Depends(deps.get_caller),
    issues: IssueService = Depends(deps.get_issue_service),
):
    result = issues.get_my_issues(caller=caller).raise_for_error()
    return deps.respond(result.data, result.message)


@router.get("/room/{room_no}")
def get_issues_by_room(
    room_no: str,
    caller: CallerContext = Depends(deps.get_caller),
    issues: IssueService = Depends(deps.get_issue_service),
):
    result = issues.get_issues_by_room(room_no, caller=caller).raise_for_error()
    return deps.respond(result.data, result.message)


@router.get("")
def get_all_issues(
    caller: CallerContext = Depends(deps.get_caller),
    issues: IssueService = Depends(deps.get_issue_service),
):
    result = issues.get_all_issues(caller=caller).raise_for_error()
    return deps.respond(result.data, result.message)


@router.patch("/{issue_id}")
def resolve_issue(
    issue_id: str,
    payload: IssueResolve,
    caller: CallerContext = Depends(deps.get_caller),
    issues: IssueService = Depends(deps.get_issue_service),
):
    result = issues.resolve_issue(
        issue_id, payload.status, payload.admin_response, caller=caller
    ).raise_for_error()
    return deps.respond(result.data, result.message)
