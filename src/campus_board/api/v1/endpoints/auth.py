# src/campus_board/api/v1/endpoints/auth.py
"""Authentication endpoints for the Campus Board API."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from campus_board.core.security import (
    ADMIN_ROLE,
    ADMIN_SUBJECT,
    create_access_token,
    new_anonymous_id,
    verify_admin_password,
)
from campus_board.schemas.auth import AdminLogin, AnonymousSession, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/anonymous", response_model=AnonymousSession, status_code=status.HTTP_201_CREATED)
async def start_anonymous_session() -> AnonymousSession:
    """Issue a fresh anonymous identity.

    The id is random and not tied to any account; signing in again yields a
    different id, so likes and authorship do not carry over.

    Returns:
        The new user id and a bearer token for it
    """
    user_id = new_anonymous_id()
    return AnonymousSession(user_id=user_id, access_token=create_access_token(user_id))


@router.post("/admin", response_model=TokenResponse)
async def admin_login(credentials: AdminLogin) -> TokenResponse:
    """Exchange the admin password for an admin bearer token.

    Args:
        credentials: Admin password

    Returns:
        Bearer token carrying the admin role

    Raises:
        HTTPException: If the password is wrong
    """
    if not verify_admin_password(credentials.password):
        logger.warning("Rejected admin login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect password",
        )
    token = create_access_token(ADMIN_SUBJECT, {"role": ADMIN_ROLE})
    return TokenResponse(access_token=token)
