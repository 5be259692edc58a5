"""
Pydantic schemas for Session API.
"""

from pydantic import BaseModel

from cinefile.models import Identity


class CredentialsRequest(BaseModel):
    """Request body for sign-in and sign-up."""

    email: str
    password: str


class UsernameUpdateRequest(BaseModel):
    username: str


class PasswordResetRequest(BaseModel):
    email: str
    redirect_to: str | None = None


class PasswordUpdateRequest(BaseModel):
    password: str


class SessionStateResponse(BaseModel):
    """Response model for the session state."""

    user: Identity | None
    loading: bool
    error: str | None
