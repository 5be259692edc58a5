"""
Database connection management using SQLAlchemy.

This module handles SQLite engine creation and session management for the
record store and the relational repositories.
"""

import os
from contextlib import contextmanager
from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from cinefile.storage.models import Base


IN_MEMORY = ":memory:"


def get_database_url(db_path: str) -> str:
    """
    Get SQLite database URL.

    Args:
        db_path: Path to SQLite database file, or ':memory:'

    Returns:
        SQLAlchemy database URL
    """
    if db_path == IN_MEMORY:
        return "sqlite:///:memory:"

    db_dir = os.path.dirname(db_path)
    if db_dir:
        os.makedirs(db_dir, exist_ok=True)

    return f"sqlite:///{os.path.abspath(db_path)}"


class DatabaseManager:
    """
    Database connection manager.

    Handles engine creation, session management, and table creation.
    """

    def __init__(self, db_path: str = IN_MEMORY, echo: bool = False, create: bool = True):
        """
        Initialize database manager.

        Args:
            db_path: Path to SQLite database file, or ':memory:'
            echo: If True, log all SQL statements (useful for debugging)
            create: If True, create missing tables immediately
        """
        self.db_path = db_path
        self.database_url = get_database_url(db_path)

        # StaticPool keeps a single connection so in-memory databases
        # survive across sessions.
        self.engine = create_engine(
            self.database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool
        )

        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine
        )

        if create:
            self.create_tables()

    def create_tables(self):
        """Create all tables that do not exist yet."""
        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self):
        """
        Drop all tables.

        WARNING: This will delete all data in the database!
        """
        Base.metadata.drop_all(bind=self.engine)

    def reset_database(self):
        """Drop and recreate all tables."""
        self.drop_tables()
        self.create_tables()

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """
        Context manager for database sessions.

        Commits on success and rolls back on failure.

        Yields:
            SQLAlchemy Session object
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def close(self):
        """Close the database engine and all connections."""
        self.engine.dispose()
