"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session, sessionmaker

from campus_board.core.errors import (
    BoardError,
    InvalidTransition,
    ModerationRejected,
    NotFound,
    StoreUnavailable,
    Unauthorized,
    ValidationError,
)
from campus_board.core.security import ADMIN_ROLE, decode_access_token
from campus_board.db.session import get_db, get_session_factory
from campus_board.db.time import now_ms
from campus_board.repositories import PostRepository, ReportRepository
from campus_board.services.realtime import SnapshotHub, get_snapshot_hub

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()
optional_bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
SessionFactoryDep = Annotated[sessionmaker[Session], Depends(get_session_factory)]

_ERROR_STATUS: dict[type[BoardError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    ModerationRejected: status.HTTP_400_BAD_REQUEST,
    Unauthorized: status.HTTP_403_FORBIDDEN,
    NotFound: status.HTTP_404_NOT_FOUND,
    StoreUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
    InvalidTransition: status.HTTP_409_CONFLICT,
}


def http_error(exc: BoardError) -> HTTPException:
    """Translate a board error into the matching HTTP error.

    Args:
        exc: Error raised by a service or repository

    Returns:
        HTTPException carrying the error message as detail
    """
    for error_type, status_code in _ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=str(exc),
    )


def get_now() -> int:
    """Return the request's reference instant in epoch milliseconds."""
    return now_ms()


def get_hub() -> SnapshotHub:
    """Return the shared snapshot hub."""
    return get_snapshot_hub()


NowDep = Annotated[int, Depends(get_now)]
HubDep = Annotated[SnapshotHub, Depends(get_hub)]


def get_post_repository(db: SessionDep, hub: HubDep) -> PostRepository:
    """Return a post repository that publishes to the shared hub."""
    return PostRepository(db, hub)


def get_report_repository(db: SessionDep) -> ReportRepository:
    """Return a report repository bound to the request session."""
    return ReportRepository(db)


PostRepoDep = Annotated[PostRepository, Depends(get_post_repository)]
ReportRepoDep = Annotated[ReportRepository, Depends(get_report_repository)]


def _decode(token: str) -> dict[str, object]:
    try:
        return decode_access_token(token)
    except Unauthorized as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err


def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
) -> str:
    """Get the anonymous session id from the bearer token.

    Args:
        credentials: HTTP Bearer token credentials

    Returns:
        The anonymous user id carried in the token subject

    Raises:
        HTTPException: If the token is invalid or expired
    """
    return str(_decode(credentials.credentials)["sub"])


def get_optional_user_id(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(optional_bearer_scheme)
    ],
) -> str | None:
    """Return the viewer's id when a bearer token is supplied."""
    if credentials is None:
        return None
    return str(_decode(credentials.credentials)["sub"])


def require_admin(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
) -> str:
    """Ensure the bearer token belongs to the admin console.

    Raises:
        HTTPException: 401 for a bad token, 403 for a non-admin token
    """
    payload = _decode(credentials.credentials)
    if payload.get("role") != ADMIN_ROLE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return str(payload["sub"])


# Type aliases for identity dependencies
CurrentUserDep = Annotated[str, Depends(get_current_user_id)]
OptionalUserDep = Annotated[str | None, Depends(get_optional_user_id)]
AdminDep = Annotated[str, Depends(require_admin)]
