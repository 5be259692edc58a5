"""
TMDB API client.

Thin wrapper over the TMDB v3 REST API. Listing calls return the paged
TMDB payload ({'results', 'page', 'total_pages', ...}) unchanged; detail
calls return the movie object. HTTP errors raise requests.HTTPError.
"""

import logging
from typing import Any, Dict, Optional

import requests

from cinefile.config import get_tmdb_api_key, get_tmdb_base_url
from cinefile.tmdb.catalog import LANGUAGE_CODES, MOOD_MAP

logger = logging.getLogger(__name__)

IMAGE_BASE_URL = "https://image.tmdb.org/t/p"


def resolve_language(language: Optional[str]) -> Optional[str]:
    """Map a language name ('korean') to its ISO code; codes pass through."""
    if not language:
        return None
    return LANGUAGE_CODES.get(language.strip().lower(), language.strip().lower())


def poster_url(poster_path: Optional[str], size: str = "w500") -> Optional[str]:
    if not poster_path:
        return None
    return f"{IMAGE_BASE_URL}/{size}{poster_path}"


def has_more(page_result: Dict[str, Any]) -> bool:
    """Whether a paged result has pages after the current one."""
    return page_result.get("page", 1) < page_result.get("total_pages", 0)


class TMDBClient:
    """
    TMDB v3 client.

    Args:
        api_key: TMDB API key (default: TMDB_API_KEY from env)
        base_url: API base URL (default: TMDB_BASE_URL from env)
        timeout: Request timeout in seconds
        http: Optional requests.Session to use

    Raises:
        RuntimeError: If no API key is available
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = 10,
        http: Optional[requests.Session] = None,
    ):
        self.api_key = api_key or get_tmdb_api_key()
        if not self.api_key:
            raise RuntimeError("Missing TMDB API key")
        self.base_url = (base_url or get_tmdb_base_url()).rstrip("/")
        self.timeout = timeout
        self.http = http or requests.Session()

    def search_movies(self, query: str, language: Optional[str] = None) -> Dict[str, Any]:
        """Search movies by title."""
        return self._get("/search/movie", query=query, with_original_language=resolve_language(language))

    def get_popular_movies(self, page: int = 1, language: Optional[str] = None) -> Dict[str, Any]:
        """Get popular movies."""
        return self._get("/movie/popular", page=page, with_original_language=resolve_language(language))

    def get_movies_by_genre(self, genre_id: int, page: int = 1, language: Optional[str] = None) -> Dict[str, Any]:
        """Discover movies in a genre."""
        return self._get(
            "/discover/movie",
            with_genres=str(genre_id),
            page=page,
            with_original_language=resolve_language(language),
        )

    def get_movies_by_mood(self, mood: str, page: int = 1) -> Dict[str, Any]:
        """
        Discover popular movies matching a mood.

        Raises:
            ValueError: If `mood` is not a key of MOOD_MAP
        """
        if mood not in MOOD_MAP:
            raise ValueError(f"Unknown mood '{mood}'. Expected one of: {', '.join(MOOD_MAP)}")
        query = MOOD_MAP[mood]
        return self._get(
            "/discover/movie",
            with_genres=",".join(str(g) for g in query["genres"]),
            with_keywords=",".join(str(k) for k in query["keywords"]),
            page=page,
            sort_by="popularity.desc",
        )

    def get_movie_details(self, movie_id: int) -> Dict[str, Any]:
        """Get movie details including keywords and watch providers."""
        return self._get(f"/movie/{int(movie_id)}", append_to_response="keywords,watch/providers")

    def _get(self, path: str, **params) -> Dict[str, Any]:
        query = {"api_key": self.api_key}
        query.update({k: v for k, v in params.items() if v is not None})
        logger.debug("TMDB GET %s", path)
        r = self.http.get(f"{self.base_url}{path}", params=query, timeout=self.timeout)
        r.raise_for_status()
        return r.json()
