"""
TMDB movie metadata client.
"""

from cinefile.tmdb.catalog import FILM_INDUSTRIES, GENRES, LANGUAGE_CODES, MOOD_MAP, film_industry
from cinefile.tmdb.client import TMDBClient, has_more, poster_url, resolve_language

__all__ = [
    'FILM_INDUSTRIES',
    'GENRES',
    'LANGUAGE_CODES',
    'MOOD_MAP',
    'TMDBClient',
    'film_industry',
    'has_more',
    'poster_url',
    'resolve_language',
]
