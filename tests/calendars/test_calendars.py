from __future__ import annotations

import io

import pytest

from src.campus_portal.campus_portal.core.exceptions import NotFoundError, PayloadTooLargeError, ValidationError


def test_upload_sanitizes_file_name(container):
    cal = container.calendar_service.upload(title="Spring 2024", file_name="../Spring 2024.pdf", data=b"%PDF-1.4")

    assert cal.file_name == "Spring_2024.pdf"
    assert cal.title == "Spring 2024"


def test_upload_requires_title_and_file(container):
    svc = container.calendar_service
    with pytest.raises(ValidationError):
        svc.upload(title="", file_name="a.pdf", data=b"x")
    with pytest.raises(ValidationError, match="No file uploaded"):
        svc.upload(title="Spring", file_name=None, data=None)


def test_upload_size_limit(container):
    with pytest.raises(PayloadTooLargeError):
        container.calendar_service.upload(title="Big", file_name="big.pdf", data=b"0" * (10 * 1024 * 1024 + 1))


def test_latest_is_most_recent(container):
    svc = container.calendar_service
    with pytest.raises(NotFoundError, match="No calendar found"):
        svc.latest()

    svc.upload(title="Old", file_name="old.pdf", data=b"1")
    svc.upload(title="New", file_name="new.pdf", data=b"2")

    assert svc.latest().title == "New"
    assert [c.title for c in svc.list_all()] == ["New", "Old"]


def test_update_title_and_delete(container):
    svc = container.calendar_service
    cal = svc.upload(title="Draft", file_name="c.pdf", data=b"1")

    assert svc.update_title(cal.calendar_id, "Final").title == "Final"
    svc.delete(cal.calendar_id)
    with pytest.raises(NotFoundError):
        svc.get(cal.calendar_id)


def test_upload_and_download_over_http(client, seed):
    seed.admin()
    seed.faculty("prof@example.edu")

    resp = client.post(
        "/api/calendar/upload",
        data={"title": "Academic Calendar", "file": (io.BytesIO(b"%PDF-1.4 body"), "calendar.pdf")},
        content_type="multipart/form-data",
        headers=seed.headers("admin@example.edu"),
    )
    assert resp.status_code == 201
    calendar_id = resp.get_json()["calendar"]["id"]

    download = client.get(f"/api/calendar/{calendar_id}/download", headers=seed.headers("prof@example.edu"))
    assert download.status_code == 200
    assert download.data == b"%PDF-1.4 body"
    assert "calendar.pdf" in download.headers["Content-Disposition"]


def test_only_admin_uploads(client, seed):
    seed.faculty("prof@example.edu")

    resp = client.post(
        "/api/calendar/upload",
        data={"title": "T", "file": (io.BytesIO(b"x"), "c.pdf")},
        content_type="multipart/form-data",
        headers=seed.headers("prof@example.edu"),
    )

    assert resp.status_code == 403
