"""
Two hostels sharing room numbers and worker phones must never see each
other's records.
"""

import pytest

from hostelcare.models.base.enums import IssueStatus
from hostelcare.schemas.worker import WorkerUpdate
from hostelcare.services.base import ErrorCode

from tests.conftest import HOSTEL_A, HOSTEL_B


@pytest.fixture
def two_hostels(services, make_admin, make_student, add_worker):
    admin_a = make_admin(HOSTEL_A)
    admin_b = make_admin(HOSTEL_B)
    # Same room number and worker phone in both hostels
    student_a = make_student(HOSTEL_A, "A1")
    student_b = make_student(HOSTEL_B, "A1")
    worker_a = add_worker(admin_a, "Ravi", "9000000001")
    worker_b = add_worker(admin_b, "Suresh", "9000000001")

    assert services.logs.submit_log(worker_a.id, "Sweeping", rating=5, caller=student_a).is_success
    assert services.logs.submit_log(worker_b.id, "Mopping", rating=2, caller=student_b).is_success
    issue_a = services.issues.raise_issue("Plumbing", "Leak in A", caller=student_a).data
    issue_b = services.issues.raise_issue("Electrical", "Fan in B", caller=student_b).data

    return {
        "admin_a": admin_a,
        "admin_b": admin_b,
        "student_a": student_a,
        "student_b": student_b,
        "worker_a": worker_a,
        "worker_b": worker_b,
        "issue_a": issue_a,
        "issue_b": issue_b,
    }


def test_worker_listings_are_scoped(services, two_hostels):
    stats = services.workers.list_workers_with_stats(caller=two_hostels["admin_a"]).data
    active = services.workers.list_active_workers(caller=two_hostels["student_b"]).data

    assert [(w.name, w.total_jobs, w.rating) for w in stats] == [("Ravi", 1, 5.0)]
    assert [w.name for w in active] == ["Suresh"]


def test_student_cannot_log_against_other_hostels_worker(services, two_hostels):
    result = services.logs.submit_log(
        two_hostels["worker_b"].id, "Sweeping", caller=two_hostels["student_a"]
    )

    assert result.error.code == ErrorCode.NOT_FOUND


def test_log_listings_are_scoped(services, two_hostels):
    history = services.logs.get_my_room_history(caller=two_hostels["student_a"]).data
    all_logs = services.logs.get_all_logs(caller=two_hostels["admin_b"]).data

    assert [log.cleaning_type for log in history] == [["Sweeping"]]
    assert [(log.hostel_name, log.worker.name) for log in all_logs] == [(HOSTEL_B, "Suresh")]


def test_issue_listings_are_scoped(services, two_hostels):
    mine = services.issues.get_my_issues(caller=two_hostels["student_b"]).data
    by_room = services.issues.get_issues_by_room("A1", caller=two_hostels["admin_a"]).data
    everything = services.issues.get_all_issues(caller=two_hostels["admin_b"]).data

    assert [i.description for i in mine] == ["Fan in B"]
    assert [i.description for i in by_room] == ["Leak in A"]
    assert [i.description for i in everything] == ["Fan in B"]


def test_admin_cannot_touch_other_hostels_records(services, two_hostels):
    admin_a = two_hostels["admin_a"]
    worker_b = two_hostels["worker_b"]

    edited = services.workers.edit_worker(worker_b.id, WorkerUpdate(name="Hijacked"), caller=admin_a)
    toggled = services.workers.toggle_worker_status(worker_b.id, caller=admin_a)
    resolved = services.issues.resolve_issue(
        two_hostels["issue_b"].id, IssueStatus.CLOSED, "done", caller=admin_a
    )

    assert edited.error.code == ErrorCode.NOT_FOUND
    assert toggled.error.code == ErrorCode.NOT_FOUND
    assert resolved.error.code == ErrorCode.NOT_FOUND

    still = services.workers.list_active_workers(caller=two_hostels["admin_b"]).data
    assert [w.name for w in still] == ["Suresh"]
    issues_b = services.issues.get_all_issues(caller=two_hostels["admin_b"]).data
    assert issues_b[0].status == IssueStatus.OPEN


def test_dashboards_are_scoped(services, two_hostels):
    admin = services.dashboard.admin_dashboard(caller=two_hostels["admin_a"]).data.to_response()
    student = services.dashboard.student_dashboard(caller=two_hostels["student_b"]).data.to_response()

    assert admin["stats"] == {
        "totalWorkers": 1,
        "cleaningsToday": 1,
        "weeklySubmissions": 1,
        "pendingIssues": 1,
    }
    assert admin["charts"]["workerPerformance"] == [{"name": "Ravi", "count": 1}]
    assert admin["charts"]["taskDistribution"] == [{"name": "Sweeping", "value": 1}]
    assert [i["description"] for i in admin["recentIssues"]] == ["Leak in A"]

    assert student["hostelName"] == HOSTEL_B
    assert student["stats"]["monthCount"] == 1
    assert student["stats"]["openIssues"] == 1
    assert student["recentActivity"][0]["worker"]["name"] == "Suresh"


def test_room_creation_is_per_hostel(services, two_hostels):
    again_a = services.rooms.create_student_room("A1", "pw", caller=two_hostels["admin_a"])
    fresh_b = services.rooms.create_student_room("B7", "pw", caller=two_hostels["admin_b"])

    assert again_a.error.code == ErrorCode.CONFLICT
    assert fresh_b.is_success
    assert fresh_b.data.user.hostel_name == HOSTEL_B
