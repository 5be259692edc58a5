"""
Pydantic schemas for Rating API.
"""

from pydantic import BaseModel, Field


class RatingSubmit(BaseModel):
    """
    Request body for submitting a rating and review.

    Values are checked by the router so that rejections carry the same
    messages the review form shows.
    """

    rating: int | float
    review_text: str = Field("", alias="reviewText")
    intimacy_rating: str = Field(..., alias="intimacyRating")
    tmdb_id: int | None = Field(None, alias="tmdbId")
    title: str | None = None
    poster_path: str | None = Field(None, alias="posterPath")

    class Config:
        populate_by_name = True
