"""Token helpers for anonymous sessions and the admin console."""
from __future__ import annotations

import secrets
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from campus_board.core.errors import Unauthorized
from campus_board.core.settings import settings

ADMIN_ROLE = "admin"
ADMIN_SUBJECT = "admin"


def new_anonymous_id() -> str:
    """Return a fresh opaque identifier for an anonymous session."""
    return secrets.token_urlsafe(16)


def create_access_token(subject: str, extra_claims: dict[str, str] | None = None) -> str:
    """Create JWT access token for an anonymous session or the admin."""
    to_encode: dict[str, object] = {"sub": subject}
    if extra_claims:
        to_encode.update(extra_claims)
    expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = expire
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> dict[str, object]:
    """Decode and validate a bearer token.

    Raises:
        Unauthorized: If the token is malformed, expired or lacks a subject.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as err:
        raise Unauthorized("Could not validate credentials") from err
    if not payload.get("sub"):
        raise Unauthorized("Could not validate credentials")
    return payload


def verify_admin_password(candidate: str) -> bool:
    """Compare an admin password in constant time."""
    return secrets.compare_digest(candidate.encode("utf-8"), settings.admin_password.encode("utf-8"))
