"""
Cleaning log endpoints. Submissions are multipart so a photo can be attached.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import ValidationError as PydanticValidationError
from starlette.concurrency import run_in_threadpool

from hostelcare.api import deps
from hostelcare.core.context import CallerContext
from hostelcare.core.exceptions import ValidationError
from hostelcare.schemas.cleaning_log import CleaningLogCreate
from hostelcare.services import CleaningLogService
from hostelcare.utils.file_handler import discard_file, save_upload_file

router = APIRouter(prefix="/logs", tags=["Cleaning Logs"])


@router.post("", status_code=201)
async def submit_log(
    worker: Optional[str] = Form(default=None),
    cleaning_type: Optional[List[str]] = Form(default=None, alias="cleaningType"),
    feedback: Optional[str] = Form(default=None),
    rating: Optional[int] = Form(default=None),
    image: Optional[UploadFile] = File(default=None),
    caller: CallerContext = Depends(deps.get_caller),
    logs: CleaningLogService = Depends(deps.get_cleaning_log_service),
):
    if not worker:
        raise ValidationError("Worker selection is required")
    try:
        payload = CleaningLogCreate(
            worker=worker, cleaningType=cleaning_type, feedback=feedback, rating=rating
        )
    except PydanticValidationError as e:
        raise ValidationError(e.errors()[0]["msg"]) from e

    image_path = await save_upload_file(image)
    try:
        # Database work and the blob upload block, so they stay off the event loop
        result = await run_in_threadpool(
            logs.submit_log,
            payload.worker_id,
            payload.cleaning_type,
            payload.feedback,
            payload.rating,
            image_path,
            caller=caller,
        )
    finally:
        # Rejected before the blob store took the file
        discard_file(image_path)
    result.raise_for_error()
    return deps.respond(result.data, result.message, 201)


@router.get("/my-history")
def get_my_room_history(
    caller: CallerContext = Depends(deps.get_caller),
    logs: CleaningLogService = Depends(deps.get_cleaning_log_service),
):
    result = logs.get_my_room_history(caller=caller).raise_for_error()
    return deps.respond(result.data, result.message)


@router.get("")
def get_all_logs(
    caller: CallerContext = Depends(deps.get_caller),
    logs: CleaningLogService = Depends(deps.get_cleaning_log_service),
):
    result = logs.get_all_logs(caller=caller).raise_for_error()
    return deps.respond(result.data, result.message)
