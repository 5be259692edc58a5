"""
Pydantic schemas for Favorites API.
"""

from pydantic import BaseModel, Field


class FavoriteCreate(BaseModel):
    """Request body for marking a movie as favorite."""

    tmdb_id: int = Field(..., alias="tmdbId")
    title: str = Field(..., min_length=1)
    poster_path: str | None = Field(None, alias="posterPath")
    release_date: str | None = Field(None, alias="releaseDate")

    class Config:
        populate_by_name = True


class FavoriteStatusResponse(BaseModel):
    movie_id: str
    is_favorite: bool
