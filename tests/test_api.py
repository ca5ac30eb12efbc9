import os
import threading

from hostelcare.api import deps
from hostelcare.config.settings import settings
from hostelcare.db.seed import create_admin

from tests.conftest import HOSTEL_A, HOSTEL_B

API = "/api/v1"


def admin_login(client, hostel=HOSTEL_A, username="warden", password="admin-pass"):
    return client.post(
        f"{API}/admin/login",
        json={"username": username, "password": password, "hostelName": hostel},
    )


def student_login(client, room_no="A1", hostel=HOSTEL_A, password="room-pass"):
    return client.post(
        f"{API}/students/login",
        json={"room_no": room_no, "password": password, "hostelName": hostel},
    )


def setup_hostel(client, db, hasher, hostel=HOSTEL_A):
    """Admin, one student room and one worker; leaves the admin logged in."""
    create_admin(db, "warden", "admin-pass", hostel, password_hasher=hasher)
    assert admin_login(client, hostel).status_code == 200
    room = client.post(f"{API}/admin/rooms", json={"room_no": "a1", "password": "room-pass"})
    assert room.status_code == 201
    worker = client.post(f"{API}/workers", json={"name": "Ravi", "phone": "9000000001"})
    assert worker.status_code == 201
    return worker.json()["data"]


def test_health_and_hostels(client):
    health = client.get("/health")
    hostels = client.get(f"{API}/hostels")

    assert health.status_code == 200
    assert health.json()["data"]["status"] == "ok"
    assert health.headers["X-Request-ID"]
    assert hostels.json()["success"] is True
    assert HOSTEL_A in hostels.json()["data"]


def test_admin_login_sets_cookies(client, db, hasher):
    create_admin(db, "warden", "admin-pass", HOSTEL_A, password_hasher=hasher)

    response = admin_login(client)

    assert response.status_code == 200
    body = response.json()
    assert body["statusCode"] == 200
    assert body["data"]["user"]["role"] == "ADMIN"
    assert "password_hash" not in body["data"]["user"]
    assert client.cookies.get(deps.ACCESS_TOKEN_COOKIE) == body["data"]["accessToken"]
    assert "httponly" in response.headers["set-cookie"].lower()

    me = client.get(f"{API}/auth/me")
    assert me.status_code == 200
    assert me.json()["data"]["hostelName"] == HOSTEL_A


def test_login_errors_use_error_envelope(client, db, hasher):
    create_admin(db, "warden", "admin-pass", HOSTEL_A, password_hasher=hasher)

    wrong_hostel = admin_login(client, hostel=HOSTEL_B)
    missing = client.post(f"{API}/admin/login", json={"username": "warden"})

    assert wrong_hostel.status_code == 400
    assert wrong_hostel.json() == {
        "statusCode": 400,
        "message": "Admin user does not exist in the selected hostel",
        "success": False,
    }
    assert missing.status_code == 400
    assert missing.json()["success"] is False


def test_requests_without_token_are_rejected(client):
    response = client.get(f"{API}/workers")

    assert response.status_code == 401
    assert response.json()["success"] is False


def test_bearer_header_is_accepted(client, db, hasher):
    create_admin(db, "warden", "admin-pass", HOSTEL_A, password_hasher=hasher)
    token = admin_login(client).json()["data"]["accessToken"]
    client.cookies.clear()

    response = client.get(f"{API}/workers", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json()["data"] == []


def test_student_cannot_manage_workers(client, db, hasher):
    setup_hostel(client, db, hasher)
    assert student_login(client).status_code == 200

    response = client.post(f"{API}/workers", json={"name": "Meena", "phone": "9000000002"})

    assert response.status_code == 403


def test_submit_log_with_photo(client, db, hasher, blob_store):
    worker = setup_hostel(client, db, hasher)
    student_login(client)

    form = {"worker": worker["id"], "cleaningType": ["Sweeping", "Mopping"], "rating": "4"}
    photo = {"image": ("room.jpg", b"\xff\xd8\xff fake jpeg", "image/jpeg")}
    first = client.post(f"{API}/logs", data=form, files=photo)
    again = client.post(f"{API}/logs", data=form)

    assert first.status_code == 201
    data = first.json()["data"]
    assert sorted(data["cleaningType"]) == ["Mopping", "Sweeping"]
    assert data["image"] == blob_store.url
    assert data["worker"]["name"] == "Ravi"
    assert data["status"] == "Verified"
    assert len(blob_store.uploaded) == 1

    assert again.status_code == 409
    assert again.json()["message"] == "You have already submitted a cleaning log for today!"

    history = client.get(f"{API}/logs/my-history")
    assert [entry["id"] for entry in history.json()["data"]] == [data["id"]]


def test_submit_log_rejects_bad_input(client, db, hasher, blob_store):
    worker = setup_hostel(client, db, hasher)
    student_login(client)

    bad_file = client.post(
        f"{API}/logs",
        data={"worker": worker["id"], "cleaningType": "Sweeping"},
        files={"image": ("notes.txt", b"hello", "text/plain")},
    )
    no_worker = client.post(f"{API}/logs", data={"cleaningType": "Sweeping"})
    no_tasks = client.post(f"{API}/logs", data={"worker": worker["id"]})

    assert bad_file.status_code == 400
    assert no_worker.status_code == 400
    assert no_worker.json()["message"] == "Worker selection is required"
    assert no_tasks.status_code == 400
    assert blob_store.uploaded == []


def test_issue_flow_and_cross_hostel_patch(client, db, hasher):
    setup_hostel(client, db, hasher)
    student_login(client)
    raised = client.post(f"{API}/issues", data={"issueType": "Plumbing", "description": "Leak"})
    assert raised.status_code == 201
    issue_id = raised.json()["data"]["id"]

    create_admin(db, "other", "admin-pass", HOSTEL_B, password_hasher=hasher)
    admin_login(client, HOSTEL_B, "other")
    foreign = client.patch(f"{API}/issues/{issue_id}", json={"status": "Resolved"})
    assert foreign.status_code == 404

    admin_login(client)
    patched = client.patch(
        f"{API}/issues/{issue_id}", json={"status": "Resolved", "adminResponse": "Fixed"}
    )
    assert patched.status_code == 200
    assert patched.json()["data"]["status"] == "Resolved"
    assert patched.json()["data"]["adminResponse"] == "Fixed"

    invalid = client.patch(f"{API}/issues/{issue_id}", json={"status": "Escalated"})
    assert invalid.status_code == 400


def test_dashboards_over_http(client, db, hasher):
    worker = setup_hostel(client, db, hasher)
    admin_view = client.get(f"{API}/admin/dashboard").json()["data"]
    assert admin_view["stats"]["totalWorkers"] == 1
    assert admin_view["hostelName"] == HOSTEL_A

    student_login(client)
    client.post(f"{API}/logs", data={"worker": worker["id"], "cleaningType": "Sweeping"})
    student_view = client.get(f"{API}/students/dashboard").json()["data"]
    assert student_view["room_no"] == "A1"
    assert student_view["stats"]["monthCount"] == 1


def test_refresh_rotates_and_logout_revokes(client, db, hasher):
    create_admin(db, "warden", "admin-pass", HOSTEL_A, password_hasher=hasher)
    old_refresh = admin_login(client).json()["data"]["refreshToken"]

    refreshed = client.post(f"{API}/auth/refresh")
    assert refreshed.status_code == 200
    new_refresh = refreshed.json()["data"]["refreshToken"]
    assert new_refresh != old_refresh
    assert client.cookies.get(deps.REFRESH_TOKEN_COOKIE) == new_refresh

    client.cookies.clear()
    reused = client.post(f"{API}/auth/refresh", json={"refreshToken": old_refresh})
    assert reused.status_code == 401

    admin_login(client)
    logout = client.post(f"{API}/admin/logout")
    assert logout.status_code == 200
    assert client.cookies.get(deps.ACCESS_TOKEN_COOKIE) is None
    assert client.post(f"{API}/auth/refresh", json={"refreshToken": new_refresh}).status_code == 401


def test_logout_without_session_succeeds(client):
    response = client.post(f"{API}/students/logout")

    assert response.status_code == 200
    assert response.json()["message"] == "Student logged out successfully"


def uploads_left():
    if not os.path.isdir(settings.UPLOAD_DIR):
        return []
    return os.listdir(settings.UPLOAD_DIR)


PHOTO = {"image": ("room.jpg", b"\xff\xd8\xff fake jpeg", "image/jpeg")}


def test_rejected_submissions_leave_no_upload_behind(client, db, hasher, blob_store):
    worker = setup_hostel(client, db, hasher)

    # Still logged in as the admin: both student-only endpoints refuse
    log = client.post(
        f"{API}/logs", data={"worker": worker["id"], "cleaningType": "Sweeping"}, files=PHOTO
    )
    issue = client.post(
        f"{API}/issues", data={"issueType": "Plumbing", "description": "Leak"}, files=PHOTO
    )

    assert log.status_code == 403
    assert issue.status_code == 403
    assert blob_store.uploaded == []
    assert uploads_left() == []

    student_login(client)
    unknown_worker = client.post(
        f"{API}/logs", data={"worker": "no-such-worker", "cleaningType": "Sweeping"}, files=PHOTO
    )
    assert unknown_worker.status_code == 404
    assert uploads_left() == []


def test_slow_image_upload_does_not_block_other_requests(client, db, hasher, blob_store):
    worker = setup_hostel(client, db, hasher)
    student_login(client)

    upload_started = threading.Event()
    health_answered = threading.Event()
    seen = {}

    def slow_upload():
        upload_started.set()
        seen["health_answered"] = health_answered.wait(timeout=5)

    blob_store.on_upload = slow_upload
    responses = {}

    def submit():
        responses["submit"] = client.post(
            f"{API}/logs", data={"worker": worker["id"], "cleaningType": "Sweeping"}, files=PHOTO
        )

    submitter = threading.Thread(target=submit)
    submitter.start()
    assert upload_started.wait(timeout=5)

    assert client.get("/health").status_code == 200
    health_answered.set()
    submitter.join(timeout=10)

    assert responses["submit"].status_code == 201
    assert seen["health_answered"] is True
    assert uploads_left() == []


def test_logout_with_only_refresh_cookie_revokes_session(client, db, hasher):
    create_admin(db, "warden", "admin-pass", HOSTEL_A, password_hasher=hasher)
    refresh_token = admin_login(client).json()["data"]["refreshToken"]
    # Access token expired or lost; the refresh cookie is all that remains
    client.cookies.clear()
    client.cookies.set(deps.REFRESH_TOKEN_COOKIE, refresh_token)

    logout = client.post(f"{API}/admin/logout")

    assert logout.status_code == 200
    again = client.post(f"{API}/auth/refresh", json={"refreshToken": refresh_token})
    assert again.status_code == 401


def test_student_logout_with_refresh_token_in_body(client, db, hasher):
    setup_hostel(client, db, hasher)
    refresh_token = student_login(client).json()["data"]["refreshToken"]
    client.cookies.clear()

    assert client.post(f"{API}/students/logout", json={"refreshToken": refresh_token}).status_code == 200
    assert client.post(f"{API}/auth/refresh", json={"refreshToken": refresh_token}).status_code == 401
