"""
SQLAlchemy ORM models for the record store.

`KeyValueRecord` is the flat string-to-string table that stands in for
browser local storage. `FavoriteRow` and `RatingRow` back the relational
repositories, keyed by the composite primary key (user_id, movie_id).
"""

from datetime import datetime
from sqlalchemy import (
    Integer, String, Float, Text, CheckConstraint, Index, TIMESTAMP
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


class KeyValueRecord(Base):
    """
    Flat key/value table.

    Attributes:
        key: Record key, e.g. 'favorite_<userId>_<movieId>'
        value: JSON-serialized record body
        updated_at: Timestamp of the last write
    """
    __tablename__ = 'kv_records'

    key: Mapped[str] = mapped_column(Text, primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        server_default=func.current_timestamp(),
        onupdate=func.current_timestamp()
    )

    def __repr__(self) -> str:
        return f"<KeyValueRecord(key='{self.key}')>"


class FavoriteRow(Base):
    """
    Favorite movies per user.

    Attributes:
        user_id: Owning user id
        movie_id: TMDB id as string
        tmdb_id: TMDB numeric id
        title: Movie title
        poster_path: TMDB poster path
        release_date: Release date as returned by TMDB
    """
    __tablename__ = 'favorites'

    user_id: Mapped[str] = mapped_column(String(320), primary_key=True)
    movie_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    tmdb_id: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    poster_path: Mapped[str] = mapped_column(Text, nullable=True)
    release_date: Mapped[str] = mapped_column(String(32), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        server_default=func.current_timestamp()
    )

    __table_args__ = (
        Index('idx_favorites_user', 'user_id'),
    )

    def __repr__(self) -> str:
        return f"<FavoriteRow(user_id='{self.user_id}', movie_id='{self.movie_id}')>"


class RatingRow(Base):
    """
    One rating and review per user and movie.

    Attributes:
        user_id: Owning user id
        movie_id: TMDB id as string
        rating: Rating value (1 to 10)
        review_text: Sanitized review text
        intimacy_rating: 'Little', 'Some', 'Very Much' or 'Most'
        tmdb_id, title, poster_path: Optional movie details for display
    """
    __tablename__ = 'ratings'

    user_id: Mapped[str] = mapped_column(String(320), primary_key=True)
    movie_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    rating: Mapped[float] = mapped_column(Float, nullable=False)
    review_text: Mapped[str] = mapped_column(Text, nullable=False, default="")
    intimacy_rating: Mapped[str] = mapped_column(String(16), nullable=False)
    tmdb_id: Mapped[int] = mapped_column(Integer, nullable=True)
    title: Mapped[str] = mapped_column(Text, nullable=True)
    poster_path: Mapped[str] = mapped_column(Text, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        server_default=func.current_timestamp(),
        onupdate=func.current_timestamp()
    )

    __table_args__ = (
        CheckConstraint(
            "intimacy_rating IN ('Little', 'Some', 'Very Much', 'Most')",
            name='check_intimacy_rating'
        ),
        Index('idx_ratings_user', 'user_id'),
    )

    def __repr__(self) -> str:
        return f"<RatingRow(user_id='{self.user_id}', movie_id='{self.movie_id}', rating={self.rating})>"
