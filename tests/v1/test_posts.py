# tests/v1/test_posts.py
from __future__ import annotations

from collections.abc import Callable

from fastapi.testclient import TestClient

from campus_board.models import Post
from campus_board.models.enums import Category

HOUR_MS = 60 * 60 * 1000


def test_create_post(client: TestClient, auth_token: dict[str, str]) -> None:
    response = client.post(
        "/api/v1/posts/",
        json={"title": "Study group", "content": "Organic chem, Tuesday 7pm", "category": "academic"},
        headers=auth_token,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["title"] == "Study group"
    assert body["category"] == "academic"
    assert body["likes"] == 0
    assert body["expires_at"] - body["timestamp"] == 24 * HOUR_MS
    assert body["is_mine"] is True
    assert body["liked_by_me"] is False
    assert "anonymous_user_id" not in body


def test_create_post_requires_a_session(client: TestClient) -> None:
    response = client.post("/api/v1/posts/", json={"title": "Hi", "content": "There"})

    assert response.status_code in {401, 403}


def test_create_post_truncates_long_fields(client: TestClient, auth_token: dict[str, str]) -> None:
    response = client.post(
        "/api/v1/posts/",
        json={"title": "T" * 140, "content": "C" * 700},
        headers=auth_token,
    )

    assert response.status_code == 201
    assert len(response.json()["title"]) == 100
    assert len(response.json()["content"]) == 500
    assert response.json()["category"] == "general"


def test_create_post_missing_fields(client: TestClient, auth_token: dict[str, str]) -> None:
    response = client.post("/api/v1/posts/", json={"title": "  "}, headers=auth_token)

    assert response.status_code == 400
    assert response.json()["detail"] == "Missing required fields"


def test_moderation_rejects_and_stores_nothing(
    client: TestClient,
    auth_token: dict[str, str],
) -> None:
    response = client.post(
        "/api/v1/posts/",
        json={"title": "Free stuff", "content": "This is SPAM honestly"},
        headers=auth_token,
    )

    assert response.status_code == 400
    assert "spam" not in response.json()["detail"].lower()
    assert client.get("/api/v1/posts/").json() == []


def test_feed_hides_expired_posts(
    client: TestClient,
    stored_post: Callable[..., Post],
) -> None:
    live = stored_post(age_ms=HOUR_MS)
    stored_post(age_ms=25 * HOUR_MS)

    response = client.get("/api/v1/posts/")

    assert response.status_code == 200
    assert [post["id"] for post in response.json()] == [live.id]


def test_feed_sort_modes(client: TestClient, stored_post: Callable[..., Post]) -> None:
    a = stored_post(age_ms=1 * HOUR_MS, likes=5)
    b = stored_post(age_ms=10 * HOUR_MS, likes=8)
    c = stored_post(age_ms=2 * HOUR_MS, likes=3)

    def _order(sort: str) -> list[str]:
        return [post["id"] for post in client.get(f"/api/v1/posts/?sort={sort}").json()]

    assert _order("newest") == [a.id, c.id, b.id]
    assert _order("best") == [b.id, a.id, c.id]
    assert _order("trending") == [a.id, b.id, c.id]


def test_feed_rejects_unknown_sort(client: TestClient) -> None:
    assert client.get("/api/v1/posts/?sort=hottest").status_code == 422


def test_feed_category_selection(client: TestClient, stored_post: Callable[..., Post]) -> None:
    food = stored_post(category=Category.FOOD, age_ms=3)
    sports = stored_post(category=Category.SPORTS, age_ms=2)
    clubs = stored_post(category=Category.CLUBS, age_ms=1)

    def _ids(query: str) -> set[str]:
        return {post["id"] for post in client.get(f"/api/v1/posts/{query}").json()}

    assert _ids("?categories=food,sports") == {food.id, sports.id}
    assert _ids("?categories=clubs,all") == {food.id, sports.id, clubs.id}
    assert _ids("") == {food.id, sports.id, clubs.id}
    assert _ids("?categories=unknown") == set()


def test_feed_limit(client: TestClient, stored_post: Callable[..., Post]) -> None:
    for age in range(5):
        stored_post(age_ms=age)

    assert len(client.get("/api/v1/posts/?limit=3").json()) == 3


def test_feed_is_uncapped_without_a_limit(
    client: TestClient,
    stored_post: Callable[..., Post],
) -> None:
    for age in range(120):
        stored_post(age_ms=age)

    assert len(client.get("/api/v1/posts/").json()) == 120


def test_get_post(client: TestClient, stored_post: Callable[..., Post]) -> None:
    post = stored_post()

    response = client.get(f"/api/v1/posts/{post.id}")

    assert response.status_code == 200
    assert response.json()["id"] == post.id
    assert response.json()["time_remaining_ms"] > 0


def test_get_expired_or_missing_post(client: TestClient, stored_post: Callable[..., Post]) -> None:
    expired = stored_post(age_ms=30 * HOUR_MS)

    assert client.get(f"/api/v1/posts/{expired.id}").status_code == 404
    assert client.get("/api/v1/posts/does-not-exist").status_code == 404


def test_like_toggle_round_trip(
    client: TestClient,
    stored_post: Callable[..., Post],
    auth_token: dict[str, str],
) -> None:
    post = stored_post(likes=2, likers=("x", "y"))

    liked = client.post(f"/api/v1/posts/{post.id}/like", headers=auth_token)
    assert liked.status_code == 200
    assert liked.json()["likes"] == 3
    assert liked.json()["liked_by_me"] is True

    unliked = client.post(f"/api/v1/posts/{post.id}/like", headers=auth_token)
    assert unliked.status_code == 200
    assert unliked.json()["likes"] == 2
    assert unliked.json()["liked_by_me"] is False


def test_unlike_with_stale_zero_counter_stays_at_zero(
    client: TestClient,
    stored_post: Callable[..., Post],
    auth_token: dict[str, str],
) -> None:
    post = stored_post(likes=0, likers=("user-alpha",))

    response = client.post(f"/api/v1/posts/{post.id}/like", headers=auth_token)

    assert response.status_code == 200
    assert response.json()["likes"] == 0
    assert response.json()["liked_by_me"] is False


def test_like_reflects_viewer(
    client: TestClient,
    stored_post: Callable[..., Post],
    auth_token: dict[str, str],
    other_auth_token: dict[str, str],
) -> None:
    post = stored_post(author="user-beta")
    client.post(f"/api/v1/posts/{post.id}/like", headers=auth_token)

    mine = client.get(f"/api/v1/posts/{post.id}", headers=auth_token).json()
    theirs = client.get(f"/api/v1/posts/{post.id}", headers=other_auth_token).json()
    anonymous = client.get(f"/api/v1/posts/{post.id}").json()

    assert mine["liked_by_me"] is True and mine["is_mine"] is False
    assert theirs["liked_by_me"] is False and theirs["is_mine"] is True
    assert anonymous["liked_by_me"] is False and anonymous["is_mine"] is False


def test_like_missing_post(client: TestClient, auth_token: dict[str, str]) -> None:
    assert client.post("/api/v1/posts/nope/like", headers=auth_token).status_code == 404


def test_author_deletes_own_post(
    client: TestClient,
    stored_post: Callable[..., Post],
    auth_token: dict[str, str],
) -> None:
    post = stored_post(author="user-alpha")

    response = client.delete(f"/api/v1/posts/{post.id}", headers=auth_token)

    assert response.status_code == 204
    assert client.get(f"/api/v1/posts/{post.id}").status_code == 404


def test_other_user_cannot_delete(
    client: TestClient,
    stored_post: Callable[..., Post],
    other_auth_token: dict[str, str],
) -> None:
    post = stored_post(author="user-alpha")

    response = client.delete(f"/api/v1/posts/{post.id}", headers=other_auth_token)

    assert response.status_code == 403
    assert client.get(f"/api/v1/posts/{post.id}").status_code == 200


def test_delete_missing_post(client: TestClient, auth_token: dict[str, str]) -> None:
    assert client.delete("/api/v1/posts/nope", headers=auth_token).status_code == 404


def test_report_post(
    client: TestClient,
    stored_post: Callable[..., Post],
    other_auth_token: dict[str, str],
    admin_token: dict[str, str],
) -> None:
    post = stored_post()

    response = client.post(
        f"/api/v1/posts/{post.id}/reports",
        json={"reason": "Harassment"},
        headers=other_auth_token,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["post_id"] == post.id
    assert body["status"] == "pending"
    assert body["admin_action"] is None
    assert "reported_by" not in body

    pending = client.get("/api/v1/admin/reports?status=pending", headers=admin_token).json()
    assert [report["id"] for report in pending] == [body["id"]]


def test_report_requires_a_reason(
    client: TestClient,
    stored_post: Callable[..., Post],
    auth_token: dict[str, str],
) -> None:
    post = stored_post()

    response = client.post(
        f"/api/v1/posts/{post.id}/reports",
        json={"reason": "   "},
        headers=auth_token,
    )

    assert response.status_code == 400


def test_report_missing_post(client: TestClient, auth_token: dict[str, str]) -> None:
    response = client.post(
        "/api/v1/posts/nope/reports",
        json={"reason": "Spam"},
        headers=auth_token,
    )

    assert response.status_code == 404
