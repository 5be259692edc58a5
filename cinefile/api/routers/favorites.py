"""
Favorites API endpoints for the signed-in user.
"""

from fastapi import APIRouter, Depends, HTTPException

from cinefile.api.dependencies import get_current_identity, get_favorites_repository
from cinefile.api.models.favorite import FavoriteCreate, FavoriteStatusResponse
from cinefile.models import FavoriteMovie, Identity
from cinefile.storage import FavoritesRepository

router = APIRouter(prefix="/api/favorites", tags=["favorites"])


@router.get("", response_model=list[FavoriteMovie])
def list_favorites(
    identity: Identity = Depends(get_current_identity),
    repo: FavoritesRepository = Depends(get_favorites_repository),
):
    return repo.list(identity.id)


@router.get("/{movie_id}", response_model=FavoriteStatusResponse)
def get_favorite_status(
    movie_id: str,
    identity: Identity = Depends(get_current_identity),
    repo: FavoritesRepository = Depends(get_favorites_repository),
):
    return FavoriteStatusResponse(movie_id=movie_id, is_favorite=repo.is_favorite(identity.id, movie_id))


@router.put("/{movie_id}", response_model=FavoriteStatusResponse)
def add_favorite(
    movie_id: str,
    body: FavoriteCreate,
    identity: Identity = Depends(get_current_identity),
    repo: FavoritesRepository = Depends(get_favorites_repository),
):
    movie = FavoriteMovie(
        movie_id=movie_id,
        tmdb_id=body.tmdb_id,
        title=body.title,
        poster_path=body.poster_path,
        release_date=body.release_date,
    )
    if not repo.save(identity.id, movie):
        raise HTTPException(status_code=500, detail="Failed to update favorites")
    return FavoriteStatusResponse(movie_id=movie_id, is_favorite=True)


@router.delete("/{movie_id}", response_model=FavoriteStatusResponse)
def remove_favorite(
    movie_id: str,
    identity: Identity = Depends(get_current_identity),
    repo: FavoritesRepository = Depends(get_favorites_repository),
):
    repo.remove(identity.id, movie_id)
    return FavoriteStatusResponse(movie_id=movie_id, is_favorite=False)
