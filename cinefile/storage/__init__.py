"""
Storage module.

This module provides the key/value record store, record key templates,
and the favorites and ratings repositories, using SQLAlchemy over SQLite.
"""

from cinefile.storage.models import Base, KeyValueRecord, FavoriteRow, RatingRow
from cinefile.storage.connection import DatabaseManager
from cinefile.storage.kv_store import RecordStore, RecordScan
from cinefile.storage.favorites import (
    FavoritesRepository,
    KeyValueFavoritesRepository,
    SqlFavoritesRepository,
)
from cinefile.storage.ratings import (
    RatingsRepository,
    KeyValueRatingsRepository,
    SqlRatingsRepository,
)

__all__ = [
    # Models
    'Base',
    'KeyValueRecord',
    'FavoriteRow',
    'RatingRow',
    # Connection
    'DatabaseManager',
    # Record store
    'RecordStore',
    'RecordScan',
    # Repositories
    'FavoritesRepository',
    'KeyValueFavoritesRepository',
    'SqlFavoritesRepository',
    'RatingsRepository',
    'KeyValueRatingsRepository',
    'SqlRatingsRepository',
]
