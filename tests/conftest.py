import os

# Settings are read at import time, so the environment is fixed first.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["PASSWORD_BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET_KEY"] = "test-access-secret"
os.environ["JWT_REFRESH_SECRET_KEY"] = "test-refresh-secret"
os.environ["COOKIE_SECURE"] = "true"
os.environ["TIMEZONE"] = "Asia/Kolkata"
os.environ["LOG_FORMAT"] = "console"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest
import pytz
from fastapi.testclient import TestClient

from hostelcare.api import deps
from hostelcare.config.settings import settings
from hostelcare.core.context import CallerContext
from hostelcare.core.security import PasswordHasher
from hostelcare.db.init_db import drop_db, init_db
from hostelcare.db.seed import create_admin
from hostelcare.db.session import SessionLocal, engine, get_db
from hostelcare.main import create_app
from hostelcare.models.base.enums import UserRole
from hostelcare.models.user import User
from hostelcare.repositories.user_repository import UserRepository
from hostelcare.services import (
    AuthService,
    CleaningLogService,
    DashboardService,
    IssueService,
    RoomService,
    WorkerService,
)
from hostelcare.services.integrations.blob_store import BlobStore
from hostelcare.utils.file_handler import discard_file

HOSTEL_A = "Sahyadri"
HOSTEL_B = "Vindya"

# 12:00 in Asia/Kolkata
NOON_IST = datetime(2024, 3, 15, 6, 30, tzinfo=pytz.UTC)


class FixedClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def set(self, now: datetime) -> None:
        self.now = now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class FakeBlobStore(BlobStore):
    """
    Records uploads and returns a fixed URL, or None when ``fail`` is set.
    ``on_upload`` runs inside the upload, standing in for network time.
    """

    def __init__(self, url: str = "https://res.cloudinary.com/demo/image/upload/room.jpg"):
        self.url = url
        self.fail = False
        self.on_upload = None
        self.uploaded = []

    def upload(self, local_path):
        if not local_path:
            return None
        self.uploaded.append(local_path)
        try:
            if self.on_upload is not None:
                self.on_upload()
            return None if self.fail else self.url
        finally:
            discard_file(local_path)


@pytest.fixture
def db():
    init_db(engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        drop_db(engine)


@pytest.fixture
def clock():
    return FixedClock(NOON_IST)


@pytest.fixture
def blob_store():
    return FakeBlobStore()


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def services(db, clock, blob_store, hasher):
    return SimpleNamespace(
        auth=AuthService(db, clock, password_hasher=hasher),
        rooms=RoomService(db, clock, password_hasher=hasher),
        workers=WorkerService(db, clock),
        logs=CleaningLogService(db, clock, blob_store),
        issues=IssueService(db, clock, blob_store),
        dashboard=DashboardService(db, clock),
    )


@pytest.fixture
def make_admin(db, hasher):
    def _make(hostel_name: str = HOSTEL_A, username: str = "warden", password: str = "admin-pass") -> CallerContext:
        return CallerContext.from_user(create_admin(db, username, password, hostel_name, password_hasher=hasher))

    return _make


@pytest.fixture
def make_student(db, hasher):
    def _make(hostel_name: str = HOSTEL_A, room_no: str = "A1", password: str = "room-pass") -> CallerContext:
        user = UserRepository(db, hostel_name).create(
            User(room_no=room_no, password_hash=hasher.hash(password), role=UserRole.STUDENT)
        )
        return CallerContext.from_user(user)

    return _make


@pytest.fixture
def add_worker(services):
    def _add(admin: CallerContext, name: str = "Ravi", phone: str = "9000000001", block: str = None):
        result = services.workers.add_worker(name, phone, block, caller=admin)
        assert result.is_success, result.message
        return result.data

    return _add


@pytest.fixture
def client(db, clock, blob_store, tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path / "uploads"))

    app = create_app()

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[deps.get_clock] = lambda: clock
    app.dependency_overrides[deps.get_image_store] = lambda: blob_store

    with TestClient(app, base_url="https://testserver") as test_client:
        yield test_client
