"""
Movie browsing endpoints backed by TMDB.
"""

import logging

import requests
from fastapi import APIRouter, Depends, HTTPException, Query

from cinefile.api.dependencies import get_tmdb_client
from cinefile.tmdb import GENRES, LANGUAGE_CODES, MOOD_MAP, TMDBClient, film_industry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/movies", tags=["movies"])


def _call(fn, *args, **kwargs):
    try:
        return fn(*args, **kwargs)
    except requests.RequestException as e:
        logger.error("TMDB request failed: %s", e)
        raise HTTPException(status_code=502, detail="Failed to fetch movies")


@router.get("/catalog")
def get_catalog():
    """Genres, moods and languages available as filters."""
    return {
        "genres": [{"id": genre_id, "name": name} for genre_id, name in GENRES.items()],
        "moods": list(MOOD_MAP),
        "languages": LANGUAGE_CODES,
    }


@router.get("/popular")
def popular_movies(
    page: int = Query(1, ge=1),
    language: str | None = None,
    client: TMDBClient = Depends(get_tmdb_client),
):
    return _call(client.get_popular_movies, page, language)


@router.get("/search")
def search_movies(
    query: str = Query(..., min_length=1),
    language: str | None = None,
    client: TMDBClient = Depends(get_tmdb_client),
):
    return _call(client.search_movies, query, language)


@router.get("/genre/{genre_id}")
def movies_by_genre(
    genre_id: int,
    page: int = Query(1, ge=1),
    language: str | None = None,
    client: TMDBClient = Depends(get_tmdb_client),
):
    return _call(client.get_movies_by_genre, genre_id, page, language)


@router.get("/mood/{mood}")
def movies_by_mood(
    mood: str,
    page: int = Query(1, ge=1),
    client: TMDBClient = Depends(get_tmdb_client),
):
    if mood not in MOOD_MAP:
        raise HTTPException(status_code=400, detail=f"Unknown mood '{mood}'")
    return _call(client.get_movies_by_mood, mood, page)


@router.get("/{movie_id}")
def movie_details(movie_id: int, client: TMDBClient = Depends(get_tmdb_client)):
    """Movie details plus the derived film industry label."""
    details = _call(client.get_movie_details, movie_id)
    return {**details, "film_industry": film_industry(details)}
