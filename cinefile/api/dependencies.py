"""
FastAPI dependency providers.

Each service is built once per process from configuration. Tests replace
them through `app.dependency_overrides`.
"""

import logging

from fastapi import Depends, HTTPException

from cinefile import factory
from cinefile.models import Identity
from cinefile.session import SessionStore
from cinefile.storage import DatabaseManager, FavoritesRepository, RatingsRepository, RecordStore
from cinefile.tmdb import TMDBClient

logger = logging.getLogger(__name__)

_db_manager: DatabaseManager | None = None
_record_store: RecordStore | None = None
_session_store: SessionStore | None = None
_favorites: FavoritesRepository | None = None
_ratings: RatingsRepository | None = None


def get_database() -> DatabaseManager:
    global _db_manager
    if _db_manager is None:
        _db_manager = factory.build_database()
    return _db_manager


def get_record_store() -> RecordStore:
    global _record_store
    if _record_store is None:
        _record_store = factory.build_record_store(get_database())
    return _record_store


def get_session_store() -> SessionStore:
    """Get the process session store, restoring the persisted session on first use."""
    global _session_store
    if _session_store is None:
        _session_store = factory.build_session_store(get_record_store())
    return _session_store


def get_favorites_repository() -> FavoritesRepository:
    global _favorites
    if _favorites is None:
        _favorites = factory.build_favorites_repository(get_database(), get_record_store())
    return _favorites


def get_ratings_repository() -> RatingsRepository:
    global _ratings
    if _ratings is None:
        _ratings = factory.build_ratings_repository(get_database(), get_record_store())
    return _ratings


def get_tmdb_client() -> TMDBClient:
    try:
        return TMDBClient()
    except RuntimeError as e:
        logger.warning("TMDB client unavailable: %s", e)
        raise HTTPException(status_code=503, detail="TMDB API key not configured")


def get_current_identity(session_store: SessionStore = Depends(get_session_store)) -> Identity:
    """The signed-in identity; 401 when nobody is signed in."""
    identity = session_store.user
    if identity is None:
        raise HTTPException(status_code=401, detail="Not signed in")
    return identity
