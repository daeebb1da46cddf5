"""Authentication-related Pydantic schemas."""

from pydantic import BaseModel, Field


class AnonymousSession(BaseModel):
    """A freshly issued anonymous identity and its bearer token."""

    user_id: str
    access_token: str
    token_type: str = "bearer"


class AdminLogin(BaseModel):
    """Schema for signing in to the admin console."""

    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Bearer token returned to the admin console."""

    access_token: str
    token_type: str = "bearer"
