"""
API v1 Router - aggregates all v1 endpoints.
"""
from fastapi import APIRouter

from hostelcare.api.v1 import admin, auth, hostels, issues, logs, students, workers

router = APIRouter(
    responses={
        400: {"description": "Bad Request"},
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        404: {"description": "Not Found"},
        409: {"description": "Conflict"},
        500: {"description": "Internal Server Error"},
    }
)

router.include_router(hostels.router)
router.include_router(admin.router)
router.include_router(students.router)
router.include_router(auth.router)
router.include_router(workers.router)
router.include_router(logs.router)
router.include_router(issues.router)
