from __future__ import annotations

import pytest

from src.campus_portal.campus_portal.core.exceptions import NotFoundError, ValidationError


def test_create_and_read_back(container):
    svc = container.announcement_service
    created = svc.create("  Exams start Monday  ")

    assert created.message == "Exams start Monday"
    assert svc.get(created.announcement_id) == created


@pytest.mark.parametrize("message", ["", "   ", None, 42])
def test_message_required(container, message):
    with pytest.raises(ValidationError):
        container.announcement_service.create(message)


def test_message_length_limit(container):
    svc = container.announcement_service
    svc.create("x" * 5000)
    with pytest.raises(ValidationError, match="5000"):
        svc.create("x" * 5001)


def test_current_is_newest_or_none(container):
    svc = container.announcement_service
    assert svc.current() is None

    svc.create("first")
    svc.create("second")

    assert svc.current().message == "second"


def test_pagination_metadata(container):
    svc = container.announcement_service
    for i in range(1, 13):
        svc.create(f"notice {i}")

    page = svc.paginated(page=2, limit=5).to_dict()

    assert [a["message"] for a in page["announcements"]] == [f"notice {i}" for i in (7, 6, 5, 4, 3)]
    assert page["totalCount"] == 12
    assert page["totalPages"] == 3
    assert page["currentPage"] == 2
    assert page["hasNextPage"] is True
    assert page["hasPrevPage"] is True

    last = svc.paginated(page=3, limit=5).to_dict()
    assert len(last["announcements"]) == 2
    assert last["hasNextPage"] is False


@pytest.mark.parametrize("page,limit", [(0, 10), (1, 0), (1, 101), ("abc", 10)])
def test_pagination_bounds(container, page, limit):
    with pytest.raises(ValidationError):
        container.announcement_service.paginated(page=page, limit=limit)


def test_update_and_delete_missing(container):
    svc = container.announcement_service
    with pytest.raises(NotFoundError):
        svc.update(99, "text")
    with pytest.raises(NotFoundError):
        svc.delete(99)


def test_admin_manages_announcements_over_http(client, seed):
    seed.admin()
    seed.student("alice@example.com")
    admin = seed.headers("admin@example.edu")

    created = client.post("/api/announcements/", json={"message": "Holiday on Friday"}, headers=admin)
    assert created.status_code == 201
    announcement_id = created.get_json()["announcement"]["id"]

    current = client.get("/api/announcements/current", headers=seed.headers("alice@example.com"))
    assert current.get_json()["announcement"]["message"] == "Holiday on Friday"

    updated = client.put(f"/api/announcements/{announcement_id}", json={"message": "Holiday moved"}, headers=admin)
    assert updated.get_json()["announcement"]["message"] == "Holiday moved"

    assert client.delete(f"/api/announcements/{announcement_id}", headers=admin).status_code == 200
    assert client.get(f"/api/announcements/{announcement_id}", headers=admin).status_code == 404


def test_paginated_endpoint_reads_query_args(client, seed):
    seed.admin()
    admin = seed.headers("admin@example.edu")
    for i in range(3):
        client.post("/api/announcements/", json={"message": f"n{i}"}, headers=admin)

    body = client.get("/api/announcements/paginated?page=1&limit=2", headers=admin).get_json()

    assert body["totalPages"] == 2
    assert len(body["announcements"]) == 2
