"""
Ratings repositories.

Each user holds at most one RatingReview per movie. Saving again replaces
the previous record entirely, including the optional movie details.
The repositories store review text as given; sanitizing it is the
caller's job (see cinefile.validation).
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Union

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from cinefile.models import IntimacyRating, MovieDetails, RatingReview
from cinefile.storage import keys
from cinefile.storage.connection import DatabaseManager
from cinefile.storage.kv_store import RecordStore
from cinefile.storage.models import RatingRow

logger = logging.getLogger(__name__)


class RatingsRepository(ABC):
    """A user's single rating and review per movie."""

    def save(
        self,
        user_id: str,
        movie_id: str,
        rating: float,
        review_text: str,
        intimacy_rating: Union[IntimacyRating, str],
        movie_details: Optional[Union[MovieDetails, dict]] = None,
    ) -> Optional[RatingReview]:
        """
        Store the rating for (user_id, movie_id), replacing any earlier one.

        Args:
            user_id: Owning user id
            movie_id: TMDB id as string
            rating: Rating value
            review_text: Already sanitized review text
            intimacy_rating: One of the IntimacyRating values
            movie_details: Optional tmdbId/title/posterPath to keep on the record

        Returns:
            The stored RatingReview, or None if rejected or not written
        """
        if not user_id or not movie_id:
            logger.error("User ID and Movie ID are required to save rating/review.")
            return None

        try:
            if isinstance(movie_details, MovieDetails):
                details = movie_details
            else:
                details = MovieDetails.model_validate(movie_details or {})
            review = RatingReview(
                movie_id=str(movie_id),
                rating=rating,
                review_text=review_text or "",
                intimacy_rating=intimacy_rating,
                tmdb_id=details.tmdb_id,
                title=details.title,
                poster_path=details.poster_path,
            )
        except ValidationError as e:
            logger.error("Invalid rating/review for movie '%s': %s", movie_id, e)
            return None

        if not self._save(user_id, review):
            return None
        return review

    def get(self, user_id: str, movie_id: str) -> Optional[RatingReview]:
        if not user_id or not movie_id:
            logger.error("User ID and Movie ID are required to get rating/review.")
            return None
        return self._get(user_id, str(movie_id))

    def list_by_user(self, user_id: str) -> List[RatingReview]:
        """All ratings of `user_id`, in no particular order."""
        if not user_id:
            logger.error("User ID is required to get all ratings/reviews.")
            return []
        return self._list_by_user(user_id)

    @abstractmethod
    def _save(self, user_id: str, review: RatingReview) -> bool:
        ...

    @abstractmethod
    def _get(self, user_id: str, movie_id: str) -> Optional[RatingReview]:
        ...

    @abstractmethod
    def _list_by_user(self, user_id: str) -> List[RatingReview]:
        ...


class KeyValueRatingsRepository(RatingsRepository):
    """Ratings stored as JSON records in a RecordStore."""

    def __init__(self, store: RecordStore):
        self.store = store

    def _save(self, user_id: str, review: RatingReview) -> bool:
        return self.store.put(keys.rating_key(user_id, review.movie_id), review.to_record())

    def _get(self, user_id: str, movie_id: str) -> Optional[RatingReview]:
        record = self.store.get(keys.rating_key(user_id, movie_id))
        if record is None:
            return None
        try:
            return RatingReview.model_validate(record)
        except ValidationError as e:
            logger.error("Stored rating for movie '%s' is malformed: %s", movie_id, e)
            return None

    def _list_by_user(self, user_id: str) -> List[RatingReview]:
        results = []
        for record in self.store.scan_by_prefix(keys.user_prefix(keys.RATING_PREFIX, user_id)):
            try:
                results.append(RatingReview.model_validate(record))
            except ValidationError as e:
                logger.warning("Skipping malformed rating for user '%s': %s", user_id, e)
        return results


class SqlRatingsRepository(RatingsRepository):
    """Ratings stored in the `ratings` table."""

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    def _save(self, user_id: str, review: RatingReview) -> bool:
        try:
            with self.db_manager.session_scope() as session:
                session.merge(RatingRow(
                    user_id=user_id,
                    movie_id=review.movie_id,
                    rating=review.rating,
                    review_text=review.review_text,
                    intimacy_rating=review.intimacy_rating,
                    tmdb_id=review.tmdb_id,
                    title=review.title,
                    poster_path=review.poster_path,
                ))
        except SQLAlchemyError as e:
            logger.error("Error saving rating/review: %s", e)
            return False
        return True

    def _get(self, user_id: str, movie_id: str) -> Optional[RatingReview]:
        try:
            with self.db_manager.session_scope() as session:
                row = session.get(RatingRow, (user_id, movie_id))
        except SQLAlchemyError as e:
            logger.error("Error getting rating/review: %s", e)
            return None
        return self._to_review(row) if row is not None else None

    def _list_by_user(self, user_id: str) -> List[RatingReview]:
        try:
            with self.db_manager.session_scope() as session:
                rows = session.scalars(
                    select(RatingRow).where(RatingRow.user_id == user_id)
                ).all()
        except SQLAlchemyError as e:
            logger.error("Error retrieving user ratings/reviews: %s", e)
            return []
        return [self._to_review(row) for row in rows]

    @staticmethod
    def _to_review(row: RatingRow) -> RatingReview:
        rating = row.rating
        if float(rating).is_integer():
            rating = int(rating)
        return RatingReview(
            movie_id=row.movie_id,
            rating=rating,
            review_text=row.review_text,
            intimacy_rating=row.intimacy_rating,
            tmdb_id=row.tmdb_id,
            title=row.title,
            poster_path=row.poster_path,
        )
