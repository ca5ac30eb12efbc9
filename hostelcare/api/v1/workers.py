"""
Worker management endpoints.
"""
from fastapi import APIRouter, Depends

from hostelcare.api import deps
from hostelcare.core.context import CallerContext
from hostelcare.schemas.worker import WorkerCreate, WorkerUpdate
from hostelcare.services import WorkerService

router = APIRouter(prefix="/workers", tags=["Workers"])


@router.post("", status_code=201)
def add_worker(
    payload: WorkerCreate,
    caller: CallerContext = Depends(deps.get_caller),
    workers: WorkerService = Depends(deps.get_worker_service),
):
    result = workers.add_worker(
        payload.name, payload.phone, payload.assigned_block, caller=caller
    ).raise_for_error()
    return deps.respond(result.data, result.message, 201)


@router.get("")
def list_workers_with_stats(
    caller: CallerContext = Depends(deps.get_caller),
    workers: WorkerService = Depends(deps.get_worker_service),
):
    result = workers.list_workers_with_stats(caller=caller).raise_for_error()
    return deps.respond(result.data, result.message)


@router.get("/active")
def list_active_workers(
    caller: CallerContext = Depends(deps.get_caller),
    workers: WorkerService = Depends(deps.get_worker_service),
):
    result = workers.list_active_workers(caller=caller).raise_for_error()
    return deps.respond(result.data, result.message)


@router.patch("/{worker_id}")
def edit_worker(
    worker_id: str,
    payload: WorkerUpdate,
    caller: CallerContext = Depends(deps.get_caller),
    workers: WorkerService = Depends(deps.get_worker_service),
):
    result = workers.edit_worker(worker_id, payload, caller=caller).raise_for_error()
    return deps.respond(result.data, result.message)


@router.patch("/{worker_id}/toggle-status")
def toggle_worker_status(
    worker_id: str,
    caller: CallerContext = Depends(deps.get_caller),
    workers: WorkerService = Depends(deps.get_worker_service),
):
    result = workers.toggle_worker_status(worker_id, caller=caller).raise_for_error()
    return deps.respond(result.data, result.message)
