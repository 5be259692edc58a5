"""
Storage initialization and schema verification.
"""

import logging

from sqlalchemy import inspect

from cinefile.storage.connection import DatabaseManager

logger = logging.getLogger(__name__)

EXPECTED_TABLES = {'kv_records', 'favorites', 'ratings'}


def init_store(db_path: str, reset: bool = False) -> DatabaseManager:
    """
    Create the storage tables.

    Args:
        db_path: Path to SQLite database file
        reset: If True, drop existing tables before creating new ones

    Returns:
        DatabaseManager instance
    """
    db_manager = DatabaseManager(db_path=db_path, create=False)

    if reset:
        logger.warning("Resetting storage at %s (dropping all tables)", db_path)
        db_manager.reset_database()
    else:
        db_manager.create_tables()
    logger.info("Storage tables ready at %s", db_path)

    return db_manager


def verify_schema(db_manager: DatabaseManager) -> bool:
    """
    Check that every storage table exists.

    Returns:
        True if all tables exist, False otherwise
    """
    existing_tables = set(inspect(db_manager.engine).get_table_names())
    missing_tables = EXPECTED_TABLES - existing_tables

    if missing_tables:
        logger.error("Missing tables: %s", sorted(missing_tables))
        return False
    return True
