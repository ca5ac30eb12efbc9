import pytest

from hostelcare.core.exceptions import AuthenticationError, InvalidCredentialsError
from hostelcare.core.security import REFRESH_TOKEN_TYPE, get_jwt_manager
from hostelcare.models.base.enums import UserRole
from hostelcare.services.base import ErrorCode

from tests.conftest import HOSTEL_A, HOSTEL_B


def test_admin_login_returns_sanitized_user_and_tokens(services, make_admin, db):
    make_admin(HOSTEL_A, "warden", "admin-pass")

    result = services.auth.login_admin("warden", "admin-pass", HOSTEL_A)

    assert result.is_success
    body = result.data.to_response()
    assert set(body) == {"user", "accessToken", "refreshToken"}
    assert body["user"]["hostelName"] == HOSTEL_A
    assert body["user"]["role"] == "ADMIN"
    assert "password_hash" not in body["user"]
    assert "refresh_token" not in body["user"]


def test_admin_login_persists_refresh_token(services, make_admin, db):
    admin = make_admin()

    result = services.auth.login_admin("warden", "admin-pass", HOSTEL_A)

    stored = services.auth.identities.find_by_id(admin.id)
    assert stored.refresh_token == result.data.refresh_token


def test_admin_login_with_wrong_hostel_is_invalid_credentials(services, make_admin):
    make_admin(HOSTEL_A, "warden", "admin-pass")

    result = services.auth.login_admin("warden", "admin-pass", HOSTEL_B)

    assert result.is_failure
    assert result.error.code == ErrorCode.INVALID_CREDENTIALS
    with pytest.raises(InvalidCredentialsError) as exc_info:
        result.raise_for_error()
    assert exc_info.value.status_code == 400


def test_admin_login_with_wrong_password(services, make_admin):
    make_admin()

    result = services.auth.login_admin("warden", "nope", HOSTEL_A)

    assert result.error.code == ErrorCode.INVALID_CREDENTIALS


def test_admin_login_with_unknown_hostel_selector(services, make_admin):
    make_admin()

    result = services.auth.login_admin("warden", "admin-pass", "Atlantis")

    assert result.error.code == ErrorCode.INVALID_CREDENTIALS


def test_student_login_uppercases_room_number(services, make_admin):
    admin = make_admin()
    created = services.rooms.create_student_room("a1", "room-pass", caller=admin)
    assert created.is_success
    assert created.data.user.room_no == "A1"

    upper = services.auth.login_student("A1", "room-pass", HOSTEL_A)
    lower = services.auth.login_student("a1", "room-pass", HOSTEL_A)

    assert upper.is_success
    assert lower.is_success
    assert upper.data.user.role == UserRole.STUDENT


def test_student_login_is_scoped_to_hostel(services, make_student):
    make_student(HOSTEL_A, "A1", "room-pass")

    result = services.auth.login_student("A1", "room-pass", HOSTEL_B)

    assert result.error.code == ErrorCode.INVALID_CREDENTIALS


def test_missing_login_fields_fail_validation(services):
    result = services.auth.login_student("", "room-pass", HOSTEL_A)

    assert result.error.code == ErrorCode.VALIDATION_ERROR


def test_issue_tokens_for_vanished_user_is_not_found(services):
    result = services.auth.issue_tokens("00000000-0000-0000-0000-000000000000")

    assert result.error.code == ErrorCode.NOT_FOUND


def test_resolve_caller_reads_identity_from_store(services, make_student):
    student = make_student(HOSTEL_A, "B7")
    login = services.auth.login_student("B7", "room-pass", HOSTEL_A)

    caller = services.auth.resolve_caller(login.data.access_token).unwrap()

    assert caller.id == student.id
    assert caller.hostel_name == HOSTEL_A
    assert caller.room_no == "B7"
    assert caller.is_student


def test_resolve_caller_rejects_refresh_token(services, make_student):
    make_student()
    login = services.auth.login_student("A1", "room-pass", HOSTEL_A)

    result = services.auth.resolve_caller(login.data.refresh_token)

    assert result.error.code == ErrorCode.UNAUTHORIZED


def test_resolve_caller_rejects_garbage_and_missing_tokens(services):
    assert services.auth.resolve_caller(None).error.code == ErrorCode.UNAUTHORIZED
    with pytest.raises(AuthenticationError):
        services.auth.resolve_caller("not-a-jwt").unwrap()


def test_refresh_rotates_tokens_and_rejects_the_old_one(services, make_admin):
    make_admin()
    login = services.auth.login_admin("warden", "admin-pass", HOSTEL_A)
    old_refresh = login.data.refresh_token

    refreshed = services.auth.refresh_session(old_refresh)

    assert refreshed.is_success
    assert refreshed.data.refresh_token != old_refresh
    payload = get_jwt_manager().verify_token(refreshed.data.refresh_token, REFRESH_TOKEN_TYPE)
    assert payload["user_id"] == refreshed.data.user.id

    replay = services.auth.refresh_session(old_refresh)
    assert replay.error.code == ErrorCode.UNAUTHORIZED


def test_refresh_rejects_access_token(services, make_admin):
    make_admin()
    login = services.auth.login_admin("warden", "admin-pass", HOSTEL_A)

    result = services.auth.refresh_session(login.data.access_token)

    assert result.error.code == ErrorCode.UNAUTHORIZED


def test_logout_clears_refresh_token_and_is_idempotent(services, make_admin):
    admin = make_admin()
    login = services.auth.login_admin("warden", "admin-pass", HOSTEL_A)

    assert services.auth.logout(admin).is_success
    assert services.auth.logout(admin).is_success
    assert services.auth.logout(None).is_success

    assert services.auth.identities.find_by_id(admin.id).refresh_token is None
    assert services.auth.refresh_session(login.data.refresh_token).error.code == ErrorCode.UNAUTHORIZED


def test_current_user_projection(services, make_admin):
    admin = make_admin()

    result = services.auth.current_user(admin)

    assert result.data.id == admin.id
    assert result.data.username == "warden"


def test_logout_by_refresh_token_revokes_only_the_stored_one(services, make_admin):
    admin = make_admin()
    stale = services.auth.login_admin("warden", "admin-pass", HOSTEL_A).data.refresh_token
    current = services.auth.login_admin("warden", "admin-pass", HOSTEL_A).data.refresh_token

    # A superseded token does not end the newer session
    assert services.auth.logout(None, stale).is_success
    assert services.auth.identities.find_by_id(admin.id).refresh_token == current

    assert services.auth.logout(None, current).is_success
    assert services.auth.identities.find_by_id(admin.id).refresh_token is None
    assert services.auth.refresh_session(current).error.code == ErrorCode.UNAUTHORIZED


def test_logout_ignores_unusable_refresh_tokens(services, make_admin):
    admin = make_admin()
    login = services.auth.login_admin("warden", "admin-pass", HOSTEL_A)

    assert services.auth.logout(None, "not-a-jwt").is_success
    assert services.auth.logout(None, login.data.access_token).is_success
    assert services.auth.identities.find_by_id(admin.id).refresh_token == login.data.refresh_token
