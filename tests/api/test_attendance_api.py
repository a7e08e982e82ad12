from __future__ import annotations

import pytest

STUDENTS = ["asha@example.edu", "bala@example.edu", "chen@example.edu"]


@pytest.fixture
def subject_id(seed):
    seed.faculty("prof@example.edu", "Prof Ada")
    for email in STUDENTS:
        seed.student(email, login=False)
    return seed.subject("prof@example.edu", STUDENTS)


def _mark(client, seed, subject_id, present_by_email, day="2024-01-10"):
    return client.post(
        "/api/attendance/bulk",
        json={
            "facultyEmail": "prof@example.edu",
            "subjectId": subject_id,
            "date": day,
            "studentAttendances": [{"studentEmail": e, "present": p} for e, p in present_by_email.items()],
        },
        headers=seed.headers("prof@example.edu"),
    )


def test_remarking_a_date_updates_instead_of_duplicating(client, seed, repos, subject_id):
    first = _mark(client, seed, subject_id, {"asha@example.edu": True, "bala@example.edu": False, "chen@example.edu": True})
    assert first.status_code == 200
    assert len(first.get_json()["attendance"]) == 3

    second = _mark(client, seed, subject_id, {"asha@example.edu": False, "bala@example.edu": True, "chen@example.edu": True})
    assert second.status_code == 200

    resp = client.get(f"/api/attendance/subject/{subject_id}/date/2024-01-10", headers=seed.headers("prof@example.edu"))
    rows = resp.get_json()["attendance"]

    assert len(rows) == 3
    assert {r["studentEmail"]: r["present"] for r in rows} == {
        "asha@example.edu": False,
        "bala@example.edu": True,
        "chen@example.edu": True,
    }
    assert len(repos["attendance_repo"].records) == 3


def test_unenrolled_student_rejects_whole_batch(client, seed, repos, subject_id):
    seed.student("outsider@example.edu", login=False)

    resp = _mark(client, seed, subject_id, {"asha@example.edu": True, "outsider@example.edu": True})

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Student not enrolled: outsider@example.edu"
    assert repos["attendance_repo"].records == {}


def test_empty_batch_is_rejected(client, seed, subject_id):
    resp = _mark(client, seed, subject_id, {})
    assert resp.status_code == 400


def test_unknown_subject_is_404(client, seed, subject_id):
    resp = _mark(client, seed, 999, {"asha@example.edu": True})
    assert resp.status_code == 404


def test_stats_after_marking(client, seed, subject_id):
    _mark(client, seed, subject_id, {"asha@example.edu": True, "bala@example.edu": False, "chen@example.edu": True})

    resp = client.get(f"/api/attendance/stats/subject/{subject_id}", headers=seed.headers("prof@example.edu"))
    stats = resp.get_json()["stats"]

    assert stats["totalStudents"] == 3
    assert stats["totalClasses"] == 1
    assert stats["totalPresent"] == 2
    assert stats["attendancePercentage"] == pytest.approx(66.67)


def test_students_cannot_read_staff_reports(client, seed, subject_id):
    seed.student("d@example.edu")

    resp = client.get(f"/api/attendance/stats/subject/{subject_id}", headers=seed.headers("d@example.edu"))

    assert resp.status_code == 403
