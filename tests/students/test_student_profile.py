from __future__ import annotations

import io

import pytest
from PIL import Image

from src.campus_portal.campus_portal.core.exceptions import NotFoundError, PayloadTooLargeError, ValidationError


def _png() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (4, 4), color=(200, 30, 30)).save(buf, format="PNG")
    return buf.getvalue()


def test_profile_not_found(container):
    with pytest.raises(NotFoundError):
        container.student_service.get_profile("ghost@example.edu")


def test_image_round_trip_keeps_mimetype(container, seed):
    seed.student("alice@example.com", login=False)
    svc = container.student_service

    assert svc.upload_image("alice@example.com", _png()) == "image/png"

    data, mimetype = svc.get_image("alice@example.com")
    assert mimetype == "image/png"
    assert data == _png()


def test_non_image_is_rejected(container, seed):
    seed.student("alice@example.com", login=False)

    with pytest.raises(ValidationError, match="Only image files are allowed"):
        container.student_service.upload_image("alice@example.com", b"%PDF-1.4 not an image")


def test_image_size_limit(container, seed):
    seed.student("alice@example.com", login=False)

    with pytest.raises(PayloadTooLargeError):
        container.student_service.upload_image("alice@example.com", b"\x89PNG" + b"0" * (2 * 1024 * 1024))


def test_missing_image_is_404(container, seed):
    seed.student("alice@example.com", login=False)
    with pytest.raises(NotFoundError):
        container.student_service.get_image("alice@example.com")


def test_subjects_lists_enrollments(container, seed):
    seed.faculty("prof@example.edu", login=False)
    seed.student("alice@example.com", login=False)
    seed.subject("prof@example.edu", ["alice@example.com"], name="Databases", code="CS204")

    subjects = container.student_service.subjects("alice@example.com")

    assert [s.to_dict()["subjectCode"] for s in subjects] == ["CS204"]


def test_upload_image_over_http(client, seed):
    seed.student("alice@example.com")

    resp = client.post(
        "/api/student/upload-image",
        data={"image": (io.BytesIO(_png()), "me.png")},
        content_type="multipart/form-data",
        headers=seed.headers("alice@example.com"),
    )
    assert resp.status_code == 200
    assert resp.get_json()["email"] == "alice@example.com"

    image = client.get("/api/student/profile-image/alice@example.com", headers=seed.headers("alice@example.com"))
    assert image.status_code == 200
    assert image.mimetype == "image/png"
