"""
Key/value record store.

Records are JSON documents stored as text under flat string keys in the
`kv_records` table. Storage and decoding failures are logged and degrade
to a False/None/skip result; they never propagate to callers.
"""

import json
import logging
from typing import Any, Iterator, List, Optional

from sqlalchemy import LargeBinary, cast, func, select
from sqlalchemy.exc import SQLAlchemyError

from cinefile.errors import RecordDecodeError
from cinefile.storage.connection import DatabaseManager
from cinefile.storage.models import KeyValueRecord

logger = logging.getLogger(__name__)

DEFAULT_QUOTA_BYTES = 5 * 1024 * 1024

# Sorts after every valid code point, closing the prefix range.
_PREFIX_UPPER_BOUND = "\U0010ffff"


def _encoded_size(key: str, value: str) -> int:
    return len(key.encode("utf-8")) + len(value.encode("utf-8"))


class RecordScan:
    """
    Restartable sequence of the records whose key starts with a prefix.

    Each iteration re-reads the store, so a scan reflects the records
    present when iteration starts. Order is not guaranteed.
    """

    def __init__(self, store: "RecordStore", prefix: str):
        self._store = store
        self.prefix = prefix

    def __iter__(self) -> Iterator[dict]:
        for key, value in self._store._rows_with_prefix(self.prefix):
            try:
                yield json.loads(value)
            except ValueError as e:
                logger.warning("Skipping malformed record '%s': %s", key, e)

    def __repr__(self) -> str:
        return f"<RecordScan(prefix='{self.prefix}')>"


class RecordStore:
    """
    JSON records over a flat key/value table.

    Args:
        db_manager: Database holding the `kv_records` table
        quota_bytes: Maximum total UTF-8 size of all keys and values; None
            disables the check
    """

    def __init__(self, db_manager: DatabaseManager, quota_bytes: Optional[int] = DEFAULT_QUOTA_BYTES):
        self.db_manager = db_manager
        self.quota_bytes = quota_bytes

    def put(self, key: str, record: Any) -> bool:
        """
        Serialize `record` and store it under `key`, replacing any value.

        Returns:
            True if the record was written, False if serialization, the
            quota check or the database write failed (already logged)
        """
        try:
            value = json.dumps(record)
        except (TypeError, ValueError) as e:
            logger.error("Error serializing record '%s': %s", key, e)
            return False

        try:
            with self.db_manager.session_scope() as session:
                row = session.get(KeyValueRecord, key)
                if self.quota_bytes is not None:
                    used = self._used_bytes(session)
                    if row is not None:
                        used -= _encoded_size(row.key, row.value)
                    if used + _encoded_size(key, value) > self.quota_bytes:
                        logger.error(
                            "Error saving record '%s': storage quota of %d bytes exceeded",
                            key, self.quota_bytes
                        )
                        return False
                if row is None:
                    session.add(KeyValueRecord(key=key, value=value))
                else:
                    row.value = value
        except SQLAlchemyError as e:
            logger.error("Error saving record '%s': %s", key, e)
            return False

        logger.debug("Stored record '%s'", key)
        return True

    def get(self, key: str, strict: bool = False) -> Optional[dict]:
        """
        Load the record stored under `key`.

        Args:
            key: Record key
            strict: Raise RecordDecodeError instead of returning None when
                the stored text is not valid JSON

        Returns:
            Decoded record, or None if absent or unreadable
        """
        try:
            with self.db_manager.session_scope() as session:
                row = session.get(KeyValueRecord, key)
                value = row.value if row is not None else None
        except SQLAlchemyError as e:
            logger.error("Error reading record '%s': %s", key, e)
            return None

        if value is None:
            return None

        try:
            return json.loads(value)
        except ValueError as e:
            if strict:
                raise RecordDecodeError(key, str(e)) from e
            logger.error("Error decoding record '%s': %s", key, e)
            return None

    def exists(self, key: str) -> bool:
        try:
            with self.db_manager.session_scope() as session:
                return session.get(KeyValueRecord, key) is not None
        except SQLAlchemyError as e:
            logger.error("Error checking record '%s': %s", key, e)
            return False

    def remove(self, key: str) -> None:
        """Delete `key`; no-op when it does not exist."""
        try:
            with self.db_manager.session_scope() as session:
                row = session.get(KeyValueRecord, key)
                if row is not None:
                    session.delete(row)
        except SQLAlchemyError as e:
            logger.error("Error removing record '%s': %s", key, e)

    def scan_by_prefix(self, prefix: str) -> RecordScan:
        """All records whose key starts with `prefix`, malformed ones skipped."""
        return RecordScan(self, prefix)

    def keys(self) -> List[str]:
        try:
            with self.db_manager.session_scope() as session:
                return list(session.scalars(select(KeyValueRecord.key)))
        except SQLAlchemyError as e:
            logger.error("Error listing record keys: %s", e)
            return []

    def clear(self) -> None:
        """Delete every record."""
        try:
            with self.db_manager.session_scope() as session:
                session.query(KeyValueRecord).delete()
        except SQLAlchemyError as e:
            logger.error("Error clearing record store: %s", e)

    def __len__(self) -> int:
        return len(self.keys())

    def _rows_with_prefix(self, prefix: str) -> List[tuple]:
        stmt = select(KeyValueRecord.key, KeyValueRecord.value).where(
            KeyValueRecord.key >= prefix,
            KeyValueRecord.key < prefix + _PREFIX_UPPER_BOUND,
        )
        try:
            with self.db_manager.session_scope() as session:
                rows = [(key, value) for key, value in session.execute(stmt)]
        except SQLAlchemyError as e:
            logger.error("Error scanning records with prefix '%s': %s", prefix, e)
            return []
        # Range bounds are byte-ordered; re-check so the prefix contract holds exactly.
        return [(key, value) for key, value in rows if key.startswith(prefix)]

    @staticmethod
    def _used_bytes(session) -> int:
        total = session.scalar(
            select(func.sum(
                func.length(cast(KeyValueRecord.key, LargeBinary))
                + func.length(cast(KeyValueRecord.value, LargeBinary))
            ))
        )
        return int(total or 0)
