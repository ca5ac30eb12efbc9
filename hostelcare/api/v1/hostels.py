"""Public hostel roster for the login selector."""
from fastapi import APIRouter

from hostelcare.api.deps import respond
from hostelcare.config.settings import settings

router = APIRouter(prefix="/hostels", tags=["Hostels"])


@router.get("")
def list_hostels():
    return respond(list(settings.HOSTEL_ROSTER), "Hostels fetched successfully")
