"""
Rating API endpoints for the signed-in user.
"""

from fastapi import APIRouter, Depends, HTTPException

from cinefile.api.dependencies import get_current_identity, get_ratings_repository
from cinefile.api.models.rating import RatingSubmit
from cinefile.errors import ReviewValidationError
from cinefile.models import Identity, MovieDetails, RatingReview
from cinefile.storage import RatingsRepository
from cinefile.validation import sanitize_review, validate_intimacy, validate_rating, validate_review

router = APIRouter(prefix="/api/ratings", tags=["ratings"])


@router.get("", response_model=list[RatingReview])
def list_ratings(
    identity: Identity = Depends(get_current_identity),
    repo: RatingsRepository = Depends(get_ratings_repository),
):
    return repo.list_by_user(identity.id)


@router.get("/{movie_id}", response_model=RatingReview)
def get_rating(
    movie_id: str,
    identity: Identity = Depends(get_current_identity),
    repo: RatingsRepository = Depends(get_ratings_repository),
):
    review = repo.get(identity.id, movie_id)
    if review is None:
        raise HTTPException(status_code=404, detail="Rating not found")
    return review


@router.put("/{movie_id}", response_model=RatingReview)
def submit_rating(
    movie_id: str,
    body: RatingSubmit,
    identity: Identity = Depends(get_current_identity),
    repo: RatingsRepository = Depends(get_ratings_repository),
):
    """Validate, sanitize and store the user's rating, replacing any earlier one."""
    try:
        validate_rating(body.rating)
        intimacy = validate_intimacy(body.intimacy_rating)
        validate_review(body.review_text)
    except ReviewValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    review = repo.save(
        identity.id,
        movie_id,
        body.rating,
        sanitize_review(body.review_text),
        intimacy,
        MovieDetails(tmdb_id=body.tmdb_id, title=body.title, poster_path=body.poster_path),
    )
    if review is None:
        raise HTTPException(status_code=500, detail="Failed to submit rating. Please try again.")
    return review
