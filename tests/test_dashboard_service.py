from datetime import datetime

import pytz

from hostelcare.models.base.enums import IssueStatus
from hostelcare.services.base import ErrorCode

from tests.conftest import HOSTEL_A, HOSTEL_B


def test_admin_dashboard_counts(services, make_admin, make_student, add_worker, clock):
    admin = make_admin()
    ravi = add_worker(admin, "Ravi", "9000000001")
    meena = add_worker(admin, "Meena", "9000000002")
    a1 = make_student(HOSTEL_A, "A1")
    a2 = make_student(HOSTEL_A, "A2")

    # Ten days ago: outside the weekly window
    clock.set(datetime(2024, 3, 5, 6, 30, tzinfo=pytz.UTC))
    services.logs.submit_log(ravi.id, "Sweeping", caller=a1)
    # Three days ago
    clock.set(datetime(2024, 3, 12, 6, 30, tzinfo=pytz.UTC))
    services.logs.submit_log(ravi.id, ["Sweeping", "Mopping"], caller=a1)
    services.logs.submit_log(meena.id, "Dusting", caller=a2)
    # Today
    clock.set(datetime(2024, 3, 15, 6, 30, tzinfo=pytz.UTC))
    services.logs.submit_log(ravi.id, "Sweeping", caller=a1)

    open_issue = services.issues.raise_issue("Plumbing", "Leak", caller=a1).data
    clock.advance(minutes=1)
    services.issues.raise_issue("Electrical", "Fan", caller=a2)
    clock.advance(minutes=1)
    done = services.issues.raise_issue("Other", "Noise", caller=a2).data
    services.issues.resolve_issue(done.id, IssueStatus.RESOLVED, caller=admin)
    services.issues.resolve_issue(open_issue.id, IssueStatus.IN_PROGRESS, caller=admin)

    result = services.dashboard.admin_dashboard(caller=admin)
    assert result.is_success
    body = result.data.to_response()

    assert body["hostelName"] == HOSTEL_A
    assert body["stats"] == {
        "totalWorkers": 2,
        "cleaningsToday": 1,
        "weeklySubmissions": 3,
        "pendingIssues": 2,
    }
    assert body["charts"]["workerPerformance"] == [
        {"name": "Ravi", "count": 3},
        {"name": "Meena", "count": 1},
    ]
    assert body["charts"]["taskDistribution"] == [
        {"name": "Sweeping", "value": 3},
        {"name": "Dusting", "value": 1},
        {"name": "Mopping", "value": 1},
    ]
    assert body["charts"]["weeklyTrend"] == [
        {"date": "2024-03-12", "count": 2},
        {"date": "2024-03-15", "count": 1},
    ]
    assert [i["status"] for i in body["recentIssues"]] == ["Open", "In Progress"]
    assert set(body["recentIssues"][0]) >= {"id", "room_no", "issueType", "description", "status", "createdAt"}


def test_trend_groups_by_local_day(services, make_admin, make_student, add_worker, clock):
    admin = make_admin()
    worker = add_worker(admin)
    a1 = make_student(HOSTEL_A, "A1")
    a2 = make_student(HOSTEL_A, "A2")

    # 19:00 UTC on the 14th is 00:30 on the 15th in Asia/Kolkata
    clock.set(datetime(2024, 3, 14, 19, 0, tzinfo=pytz.UTC))
    services.logs.submit_log(worker.id, "Sweeping", caller=a1)
    clock.set(datetime(2024, 3, 15, 6, 30, tzinfo=pytz.UTC))
    services.logs.submit_log(worker.id, "Sweeping", caller=a2)

    body = services.dashboard.admin_dashboard(caller=admin).data.to_response()

    assert body["charts"]["weeklyTrend"] == [{"date": "2024-03-15", "count": 2}]
    assert body["stats"]["cleaningsToday"] == 2


def test_top_workers_limited_to_five(services, make_admin, make_student, add_worker):
    admin = make_admin()
    for n in range(6):
        worker = add_worker(admin, f"Worker {n}", f"90000000{n:02d}")
        for r in range(n + 1):
            services.logs.submit_log(worker.id, "Sweeping", caller=make_student(HOSTEL_A, f"R{n}{r}"))

    performance = services.dashboard.admin_dashboard(caller=admin).data.charts.worker_performance

    assert [p.name for p in performance] == ["Worker 5", "Worker 4", "Worker 3", "Worker 2", "Worker 1"]
    assert performance[0].count == 6


def test_admin_dashboard_of_empty_hostel(services, make_admin):
    admin = make_admin(HOSTEL_B)

    body = services.dashboard.admin_dashboard(caller=admin).data.to_response()

    assert body["stats"]["totalWorkers"] == 0
    assert body["charts"] == {"workerPerformance": [], "taskDistribution": [], "weeklyTrend": []}
    assert body["recentIssues"] == []


def test_student_dashboard(services, make_admin, make_student, add_worker, clock):
    admin = make_admin()
    worker = add_worker(admin)
    student = make_student(HOSTEL_A, "A1")
    neighbour = make_student(HOSTEL_A, "A2")

    # Last day of February, then four days in March
    clock.set(datetime(2024, 2, 29, 6, 30, tzinfo=pytz.UTC))
    services.logs.submit_log(worker.id, "Sweeping", caller=student)
    for day in (1, 2, 3, 4):
        clock.set(datetime(2024, 3, day, 6, 30, tzinfo=pytz.UTC))
        services.logs.submit_log(worker.id, "Sweeping", caller=student)
    services.logs.submit_log(worker.id, "Sweeping", caller=neighbour)
    services.issues.raise_issue("Plumbing", "Leak", caller=student)
    services.issues.raise_issue("Plumbing", "Leak", caller=neighbour)

    clock.set(datetime(2024, 3, 15, 6, 30, tzinfo=pytz.UTC))
    body = services.dashboard.student_dashboard(caller=student).data.to_response()

    assert body["room_no"] == "A1"
    assert body["hostelName"] == HOSTEL_A
    assert body["stats"]["monthCount"] == 4
    assert body["stats"]["openIssues"] == 1
    assert body["stats"]["lastCleaningDate"].startswith("2024-03-04T06:30:00")
    assert len(body["recentActivity"]) == 3
    assert body["recentActivity"][0]["worker"]["name"] == "Ravi"
    assert [a["submission_date"] for a in body["recentActivity"]] == ["2024-03-04", "2024-03-03", "2024-03-02"]


def test_student_dashboard_without_history(services, make_student):
    student = make_student()

    body = services.dashboard.student_dashboard(caller=student).data.to_response()

    assert body["stats"] == {"lastCleaningDate": None, "monthCount": 0, "openIssues": 0}
    assert body["recentActivity"] == []


def test_dashboards_require_matching_role(services, make_admin, make_student):
    assert services.dashboard.admin_dashboard(caller=make_student()).error.code == ErrorCode.INSUFFICIENT_PERMISSIONS
    assert services.dashboard.student_dashboard(caller=make_admin()).error.code == ErrorCode.INSUFFICIENT_PERMISSIONS
