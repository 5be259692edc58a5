"""
Pydantic schemas for API request/response validation.
"""

from cinefile.api.models.session import (
    CredentialsRequest,
    PasswordResetRequest,
    PasswordUpdateRequest,
    SessionStateResponse,
    UsernameUpdateRequest,
)
from cinefile.api.models.favorite import FavoriteCreate, FavoriteStatusResponse
from cinefile.api.models.rating import RatingSubmit

__all__ = [
    "CredentialsRequest",
    "PasswordResetRequest",
    "PasswordUpdateRequest",
    "SessionStateResponse",
    "UsernameUpdateRequest",
    "FavoriteCreate",
    "FavoriteStatusResponse",
    "RatingSubmit",
]
