"""
Pydantic record models.

Field aliases carry the camelCase names used in persisted JSON bodies, so
records written by this package keep the same layout as the browser
client's local storage.
"""

from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, Field


class IntimacyRating(str, Enum):
    """How intimate a film felt to the reviewer."""

    LITTLE = "Little"
    SOME = "Some"
    VERY_MUCH = "Very Much"
    MOST = "Most"


class Identity(BaseModel):
    """The authenticated user held by a session store."""

    id: str
    email: str
    username: Optional[str] = None
    avatar_url: Optional[str] = None

    def to_record(self) -> dict:
        return self.model_dump(exclude_none=True)


class FavoriteMovie(BaseModel):
    """A movie a user marked as favorite."""

    movie_id: str = Field(..., alias="movieId", min_length=1)
    tmdb_id: int = Field(..., alias="tmdbId")
    title: str
    poster_path: Optional[str] = Field(None, alias="posterPath")
    release_date: Optional[str] = Field(None, alias="releaseDate")

    class Config:
        populate_by_name = True

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class MovieDetails(BaseModel):
    """Movie fields copied onto a rating record for display."""

    tmdb_id: Optional[int] = Field(None, alias="tmdbId")
    title: Optional[str] = None
    poster_path: Optional[str] = Field(None, alias="posterPath")

    class Config:
        populate_by_name = True


class RatingReview(BaseModel):
    """A user's single rating and review for one movie."""

    movie_id: str = Field(..., alias="movieId", min_length=1)
    rating: Union[int, float]
    review_text: str = Field("", alias="reviewText")
    intimacy_rating: IntimacyRating = Field(..., alias="intimacyRating")
    tmdb_id: Optional[int] = Field(None, alias="tmdbId")
    title: Optional[str] = None
    poster_path: Optional[str] = Field(None, alias="posterPath")

    class Config:
        populate_by_name = True
        use_enum_values = True

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class AuthSession(BaseModel):
    """Tokens and user payload returned by the hosted auth service."""

    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    expires_at: Optional[float] = None
    user: dict[str, Any]

    @property
    def user_id(self) -> Optional[str]:
        return self.user.get("id")

    @property
    def user_email(self) -> Optional[str]:
        return self.user.get("email")
