"""
API route handlers.
"""

from cinefile.api.routers import session, favorites, ratings, movies, system

__all__ = ["session", "favorites", "ratings", "movies", "system"]
