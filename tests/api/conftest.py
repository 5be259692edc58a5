"""
Shared fixtures for API tests.

The real app is used with its storage, session and TMDB dependencies
replaced by in-memory instances.
"""

import pytest
from fastapi.testclient import TestClient

from cinefile.api import dependencies
from cinefile.api.main import app
from cinefile.session import LocalSessionStore
from cinefile.storage import DatabaseManager, KeyValueFavoritesRepository, KeyValueRatingsRepository, RecordStore


@pytest.fixture
def record_store():
    manager = DatabaseManager(":memory:")
    yield RecordStore(manager)
    manager.close()


@pytest.fixture
def session_store(record_store):
    store = LocalSessionStore(record_store)
    store.restore_session()
    return store


@pytest.fixture
def favorites_repo(record_store):
    return KeyValueFavoritesRepository(record_store)


@pytest.fixture
def ratings_repo(record_store):
    return KeyValueRatingsRepository(record_store)


@pytest.fixture
def client(record_store, session_store, favorites_repo, ratings_repo):
    app.dependency_overrides[dependencies.get_record_store] = lambda: record_store
    app.dependency_overrides[dependencies.get_session_store] = lambda: session_store
    app.dependency_overrides[dependencies.get_favorites_repository] = lambda: favorites_repo
    app.dependency_overrides[dependencies.get_ratings_repository] = lambda: ratings_repo
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def signed_in(client, session_store):
    """Client with a@x.com signed in."""
    session_store.sign_in("a@x.com", "secret1")
    return client
