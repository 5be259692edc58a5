"""
Favorites repositories.

`FavoritesRepository` is the interface used by callers. The key/value
implementation stores one JSON record per (user, movie) under
'favorite_<userId>_<movieId>'; the SQL implementation uses the
`favorites` table. Both reject missing ids with a logged error and never
raise storage errors.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Union

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from cinefile.models import FavoriteMovie
from cinefile.storage import keys
from cinefile.storage.connection import DatabaseManager
from cinefile.storage.kv_store import RecordStore
from cinefile.storage.models import FavoriteRow

logger = logging.getLogger(__name__)

FavoriteInput = Union[FavoriteMovie, dict]


def _coerce_favorite(favorite: FavoriteInput) -> FavoriteMovie | None:
    if isinstance(favorite, FavoriteMovie):
        return favorite
    try:
        return FavoriteMovie.model_validate(favorite or {})
    except ValidationError as e:
        logger.error("Invalid favorite movie data: %s", e)
        return None


class FavoritesRepository(ABC):
    """A user's favorited movies, at most one record per (user, movie)."""

    def save(self, user_id: str, favorite: FavoriteInput) -> bool:
        """
        Add or overwrite a favorite.

        Returns:
            True if the favorite was stored
        """
        movie = _coerce_favorite(favorite)
        if not user_id or movie is None:
            logger.error("User ID and movie data (with movieId) are required to save favorite.")
            return False
        return self._save(user_id, movie)

    def remove(self, user_id: str, movie_id: str) -> None:
        if not user_id or not movie_id:
            logger.error("User ID and Movie ID are required to remove favorite.")
            return
        self._remove(user_id, str(movie_id))

    def is_favorite(self, user_id: str, movie_id: str) -> bool:
        if not user_id or not movie_id:
            logger.error("User ID and Movie ID are required to check if favorite.")
            return False
        return self._exists(user_id, str(movie_id))

    def list(self, user_id: str) -> List[FavoriteMovie]:
        """All favorites of `user_id`, in no particular order."""
        if not user_id:
            logger.error("User ID is required to get favorites.")
            return []
        return self._list(user_id)

    def toggle(self, user_id: str, favorite: FavoriteInput) -> bool:
        """
        Flip the favorite state of a movie.

        Returns:
            The new state: True if the movie is now a favorite
        """
        movie = _coerce_favorite(favorite)
        if not user_id or movie is None:
            logger.error("User ID and movie data (with movieId) are required to toggle favorite.")
            return False
        if self.is_favorite(user_id, movie.movie_id):
            self.remove(user_id, movie.movie_id)
            return False
        return self.save(user_id, movie)

    @abstractmethod
    def _save(self, user_id: str, movie: FavoriteMovie) -> bool:
        ...

    @abstractmethod
    def _remove(self, user_id: str, movie_id: str) -> None:
        ...

    @abstractmethod
    def _exists(self, user_id: str, movie_id: str) -> bool:
        ...

    @abstractmethod
    def _list(self, user_id: str) -> List[FavoriteMovie]:
        ...


class KeyValueFavoritesRepository(FavoritesRepository):
    """Favorites stored as JSON records in a RecordStore."""

    def __init__(self, store: RecordStore):
        self.store = store

    def _save(self, user_id: str, movie: FavoriteMovie) -> bool:
        return self.store.put(keys.favorite_key(user_id, movie.movie_id), movie.to_record())

    def _remove(self, user_id: str, movie_id: str) -> None:
        self.store.remove(keys.favorite_key(user_id, movie_id))

    def _exists(self, user_id: str, movie_id: str) -> bool:
        return self.store.get(keys.favorite_key(user_id, movie_id)) is not None

    def _list(self, user_id: str) -> List[FavoriteMovie]:
        results = []
        for record in self.store.scan_by_prefix(keys.user_prefix(keys.FAVORITE_PREFIX, user_id)):
            try:
                results.append(FavoriteMovie.model_validate(record))
            except ValidationError as e:
                logger.warning("Skipping malformed favorite for user '%s': %s", user_id, e)
        return results


class SqlFavoritesRepository(FavoritesRepository):
    """Favorites stored in the `favorites` table."""

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    def _save(self, user_id: str, movie: FavoriteMovie) -> bool:
        try:
            with self.db_manager.session_scope() as session:
                session.merge(FavoriteRow(
                    user_id=user_id,
                    movie_id=movie.movie_id,
                    tmdb_id=movie.tmdb_id,
                    title=movie.title,
                    poster_path=movie.poster_path,
                    release_date=movie.release_date,
                ))
        except SQLAlchemyError as e:
            logger.error("Error saving favorite: %s", e)
            return False
        return True

    def _remove(self, user_id: str, movie_id: str) -> None:
        try:
            with self.db_manager.session_scope() as session:
                row = session.get(FavoriteRow, (user_id, movie_id))
                if row is not None:
                    session.delete(row)
        except SQLAlchemyError as e:
            logger.error("Error removing favorite: %s", e)

    def _exists(self, user_id: str, movie_id: str) -> bool:
        try:
            with self.db_manager.session_scope() as session:
                return session.get(FavoriteRow, (user_id, movie_id)) is not None
        except SQLAlchemyError as e:
            logger.error("Error checking favorite status: %s", e)
            return False

    def _list(self, user_id: str) -> List[FavoriteMovie]:
        try:
            with self.db_manager.session_scope() as session:
                rows = session.scalars(
                    select(FavoriteRow).where(FavoriteRow.user_id == user_id)
                ).all()
        except SQLAlchemyError as e:
            logger.error("Error retrieving favorites: %s", e)
            return []
        return [
            FavoriteMovie(
                movie_id=row.movie_id,
                tmdb_id=row.tmdb_id,
                title=row.title,
                poster_path=row.poster_path,
                release_date=row.release_date,
            )
            for row in rows
        ]
