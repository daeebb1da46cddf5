# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["EXPIRY_SWEEP_ENABLED"] = "false"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ADMIN_PASSWORD", "admin123")

from campus_board.api.v1.dependencies import get_hub  # noqa: E402
from campus_board.core.security import (  # noqa: E402
    ADMIN_ROLE,
    ADMIN_SUBJECT,
    create_access_token,
)
from campus_board.core.settings import settings  # noqa: E402
from campus_board.db.session import Base  # noqa: E402
from campus_board.db.session import get_db as app_get_session  # noqa: E402
from campus_board.db.session import get_session_factory  # noqa: E402
from campus_board.db.time import now_ms  # noqa: E402
from campus_board.main import app as fastapi_app  # noqa: E402
from campus_board.models import Post, PostLike, Report  # noqa: E402
from campus_board.models.enums import Category, ReportStatus  # noqa: E402
from campus_board.models.records import PostRecord  # noqa: E402
from campus_board.services.realtime import SnapshotHub  # noqa: E402

TEST_DB_URL = "sqlite://"

_POST_COUNTER = count(1)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db_session(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    session = session_factory(expire_on_commit=False)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def hub() -> SnapshotHub:
    """Provide a snapshot hub isolated from other tests."""
    return SnapshotHub()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI,
    session_factory: sessionmaker[Session],
    hub: SnapshotHub,
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_hub] = lambda: hub
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        app.dependency_overrides.pop(get_session_factory, None)
        app.dependency_overrides.pop(get_hub, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def _auth_headers_for(user_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest.fixture()
def headers_for() -> Callable[[str], dict[str, str]]:
    """Return a factory of authorization headers for any anonymous id."""
    return _auth_headers_for


@pytest.fixture()
def auth_token() -> dict[str, str]:
    """Return authorization headers for the primary anonymous user."""
    return _auth_headers_for("user-alpha")


@pytest.fixture()
def other_auth_token() -> dict[str, str]:
    """Return authorization headers for a second anonymous user."""
    return _auth_headers_for("user-beta")


@pytest.fixture()
def admin_token() -> dict[str, str]:
    """Return authorization headers carrying the admin role."""
    token = create_access_token(ADMIN_SUBJECT, {"role": ADMIN_ROLE})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def make_record() -> Callable[..., PostRecord]:
    """Return a factory for in-memory post records."""

    def _make(
        *,
        post_id: str | None = None,
        timestamp: int = 0,
        expires_at: int | None = None,
        likes: int = 0,
        liked_by: frozenset[str] = frozenset(),
        category: Category = Category.GENERAL,
        author: str = "author",
        title: str = "Lost keys",
        content: str = "Found near the library",
    ) -> PostRecord:
        return PostRecord(
            id=post_id or f"p{next(_POST_COUNTER)}",
            title=title,
            content=content,
            category=category,
            timestamp=timestamp,
            expires_at=expires_at if expires_at is not None else timestamp + settings.post_ttl_ms,
            anonymous_user_id=author,
            likes=likes,
            liked_by=liked_by,
        )

    return _make


@pytest.fixture()
def stored_post(db_session: Session) -> Callable[..., Post]:
    """Return a factory that persists posts directly through the ORM."""

    def _store(
        *,
        author: str = "user-alpha",
        age_ms: int = 0,
        expires_in_ms: int | None = None,
        likes: int = 0,
        likers: tuple[str, ...] = (),
        category: Category = Category.GENERAL,
        title: str = "Quiet study spots",
        content: str = "The third floor of the library is empty after six",
    ) -> Post:
        now = now_ms()
        timestamp = now - age_ms
        post = Post(
            title=title,
            content=content,
            category=category.value,
            timestamp=timestamp,
            expires_at=(
                now + expires_in_ms
                if expires_in_ms is not None
                else timestamp + settings.post_ttl_ms
            ),
            anonymous_user_id=author,
            likes=likes,
            is_active=True,
        )
        post.likers = [PostLike(user_id=user_id) for user_id in likers]
        db_session.add(post)
        db_session.commit()
        db_session.refresh(post)
        return post

    return _store


@pytest.fixture()
def stored_report(db_session: Session) -> Callable[..., Report]:
    """Return a factory that persists reports directly through the ORM."""

    def _store(
        post_id: str,
        *,
        reporter: str = "user-beta",
        reason: str = "Harassment",
        status: ReportStatus = ReportStatus.PENDING,
    ) -> Report:
        report = Report(
            post_id=post_id,
            reported_by=reporter,
            reason=reason,
            timestamp=now_ms(),
            status=status.value,
        )
        db_session.add(report)
        db_session.commit()
        db_session.refresh(report)
        return report

    return _store
