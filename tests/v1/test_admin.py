# tests/v1/test_admin.py
from __future__ import annotations

from collections.abc import Callable

import pytest
from fastapi.testclient import TestClient

from campus_board.models import Post, Report
from campus_board.models.enums import ReportStatus

HOUR_MS = 60 * 60 * 1000


@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("get", "/api/v1/admin/posts"),
        ("get", "/api/v1/admin/reports"),
        ("get", "/api/v1/admin/stats"),
        ("delete", "/api/v1/admin/posts/any"),
    ],
)
def test_admin_routes_reject_user_tokens(
    client: TestClient,
    auth_token: dict[str, str],
    method: str,
    path: str,
) -> None:
    response = client.request(method.upper(), path, headers=auth_token)

    assert response.status_code == 403


def test_admin_routes_require_a_token(client: TestClient) -> None:
    assert client.get("/api/v1/admin/stats").status_code in {401, 403}


def test_admin_post_views(
    client: TestClient,
    stored_post: Callable[..., Post],
    stored_report: Callable[..., Report],
    admin_token: dict[str, str],
) -> None:
    posts = [stored_post(age_ms=index * 1000, likes=index) for index in range(12)]
    stored_post(age_ms=30 * HOUR_MS, likes=100)
    stored_report(posts[4].id)
    stored_report(posts[6].id, status=ReportStatus.APPROVED)

    def _ids(view: str) -> list[str]:
        response = client.get(f"/api/v1/admin/posts?view={view}", headers=admin_token)
        assert response.status_code == 200
        return [post["id"] for post in response.json()]

    assert len(_ids("all")) == 12
    assert _ids("recent") == [post.id for post in posts[:10]]
    assert _ids("popular")[0] == posts[11].id
    assert _ids("flagged") == [posts[4].id]


def test_admin_delete_is_idempotent(
    client: TestClient,
    stored_post: Callable[..., Post],
    admin_token: dict[str, str],
) -> None:
    post = stored_post()

    assert client.delete(f"/api/v1/admin/posts/{post.id}", headers=admin_token).status_code == 204
    assert client.delete(f"/api/v1/admin/posts/{post.id}", headers=admin_token).status_code == 204
    assert client.get(f"/api/v1/posts/{post.id}").status_code == 404


def test_rejecting_a_report_removes_the_post(
    client: TestClient,
    stored_post: Callable[..., Post],
    stored_report: Callable[..., Report],
    admin_token: dict[str, str],
) -> None:
    post = stored_post()
    report = stored_report(post.id)

    response = client.post(
        f"/api/v1/admin/reports/{report.id}/resolve",
        json={"action": "rejected"},
        headers=admin_token,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "rejected"
    assert body["admin_action"] is not None
    assert client.get(f"/api/v1/posts/{post.id}").status_code == 404


def test_approving_a_report_keeps_the_post(
    client: TestClient,
    stored_post: Callable[..., Post],
    stored_report: Callable[..., Report],
    admin_token: dict[str, str],
) -> None:
    post = stored_post()
    report = stored_report(post.id)

    response = client.post(
        f"/api/v1/admin/reports/{report.id}/resolve",
        json={"action": "approved"},
        headers=admin_token,
    )

    assert response.status_code == 200
    assert response.json()["status"] == "approved"
    assert client.get(f"/api/v1/posts/{post.id}").status_code == 200


def test_resolved_report_cannot_be_resolved_again(
    client: TestClient,
    stored_post: Callable[..., Post],
    stored_report: Callable[..., Report],
    admin_token: dict[str, str],
) -> None:
    post = stored_post()
    report = stored_report(post.id)
    url = f"/api/v1/admin/reports/{report.id}/resolve"

    assert client.post(url, json={"action": "approved"}, headers=admin_token).status_code == 200
    second = client.post(url, json={"action": "rejected"}, headers=admin_token)

    assert second.status_code == 409
    assert client.get(f"/api/v1/posts/{post.id}").status_code == 200


def test_resolving_to_pending_is_a_conflict(
    client: TestClient,
    stored_post: Callable[..., Post],
    stored_report: Callable[..., Report],
    admin_token: dict[str, str],
) -> None:
    report = stored_report(stored_post().id)

    response = client.post(
        f"/api/v1/admin/reports/{report.id}/resolve",
        json={"action": "pending"},
        headers=admin_token,
    )

    assert response.status_code == 409


def test_rejecting_when_post_already_gone(
    client: TestClient,
    stored_report: Callable[..., Report],
    admin_token: dict[str, str],
) -> None:
    report = stored_report("already-deleted")

    response = client.post(
        f"/api/v1/admin/reports/{report.id}/resolve",
        json={"action": "rejected"},
        headers=admin_token,
    )

    assert response.status_code == 200
    assert response.json()["status"] == "rejected"


def test_resolve_unknown_report(client: TestClient, admin_token: dict[str, str]) -> None:
    response = client.post(
        "/api/v1/admin/reports/nope/resolve",
        json={"action": "approved"},
        headers=admin_token,
    )

    assert response.status_code == 404


def test_report_filters(
    client: TestClient,
    stored_post: Callable[..., Post],
    stored_report: Callable[..., Report],
    admin_token: dict[str, str],
) -> None:
    first = stored_post()
    second = stored_post()
    stored_report(first.id)
    stored_report(second.id, status=ReportStatus.APPROVED)

    everything = client.get("/api/v1/admin/reports", headers=admin_token).json()
    pending = client.get("/api/v1/admin/reports?status=pending", headers=admin_token).json()
    by_post = client.get(f"/api/v1/admin/reports?post_id={second.id}", headers=admin_token).json()

    assert len(everything) == 2
    assert [report["post_id"] for report in pending] == [first.id]
    assert [report["status"] for report in by_post] == ["approved"]


def test_admin_stats(
    client: TestClient,
    stored_post: Callable[..., Post],
    stored_report: Callable[..., Report],
    admin_token: dict[str, str],
) -> None:
    live = stored_post(author="a", likes=3)
    stored_post(author="b", likes=2)
    stored_post(author="a", likes=4, age_ms=30 * HOUR_MS)
    stored_report(live.id)
    stored_report(live.id, status=ReportStatus.REJECTED)

    response = client.get("/api/v1/admin/stats", headers=admin_token)

    assert response.status_code == 200
    assert response.json() == {
        "live_posts": 2,
        "total_likes": 9,
        "unique_authors": 2,
        "pending_reports": 1,
    }
