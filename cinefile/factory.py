"""
Builds the storage, repositories and session store selected by configuration.
"""

import logging
from typing import Optional

from cinefile import config
from cinefile.session import HttpAuthBackend, LocalSessionStore, RemoteSessionStore, SessionStore
from cinefile.storage import (
    DatabaseManager,
    FavoritesRepository,
    KeyValueFavoritesRepository,
    KeyValueRatingsRepository,
    RatingsRepository,
    RecordStore,
    SqlFavoritesRepository,
    SqlRatingsRepository,
)

logger = logging.getLogger(__name__)

STORAGE_BACKENDS = ("kv", "sql")
SESSION_BACKENDS = ("local", "remote")


def build_database(db_path: Optional[str] = None) -> DatabaseManager:
    return DatabaseManager(db_path=db_path or config.get_database_path())


def build_record_store(db_manager: DatabaseManager, quota_bytes: Optional[int] = None) -> RecordStore:
    quota = quota_bytes if quota_bytes is not None else config.get_storage_quota_bytes()
    return RecordStore(db_manager, quota_bytes=quota)


def _check_backend(name: str, allowed: tuple, setting: str) -> str:
    if name not in allowed:
        raise ValueError(f"{setting} must be one of {', '.join(allowed)}, got '{name}'")
    return name


def build_favorites_repository(
    db_manager: DatabaseManager,
    store: RecordStore,
    backend: Optional[str] = None,
) -> FavoritesRepository:
    backend = _check_backend(backend or config.get_storage_backend(), STORAGE_BACKENDS, "CINEFILE_STORAGE_BACKEND")
    if backend == "sql":
        return SqlFavoritesRepository(db_manager)
    return KeyValueFavoritesRepository(store)


def build_ratings_repository(
    db_manager: DatabaseManager,
    store: RecordStore,
    backend: Optional[str] = None,
) -> RatingsRepository:
    backend = _check_backend(backend or config.get_storage_backend(), STORAGE_BACKENDS, "CINEFILE_STORAGE_BACKEND")
    if backend == "sql":
        return SqlRatingsRepository(db_manager)
    return KeyValueRatingsRepository(store)


def build_session_store(store: RecordStore, backend: Optional[str] = None) -> SessionStore:
    """
    Create the session store and restore any persisted session.

    Raises:
        ValueError: If the remote variant is selected without AUTH_URL/AUTH_API_KEY
    """
    backend = _check_backend(backend or config.get_session_backend(), SESSION_BACKENDS, "CINEFILE_SESSION_BACKEND")
    if backend == "remote":
        auth = HttpAuthBackend(config.get_auth_url(), config.get_auth_api_key(), storage=store)
        session_store: SessionStore = RemoteSessionStore(auth)
    else:
        session_store = LocalSessionStore(store)
    logger.info("Using %s session store", backend)
    session_store.restore_session()
    return session_store
