"""
Unit tests for the key/value record store.

Uses an in-memory SQLite database for fast, isolated testing.
"""

import logging

import pytest

from cinefile.errors import RecordDecodeError
from cinefile.storage import keys
from cinefile.storage.connection import DatabaseManager
from cinefile.storage.kv_store import RecordStore
from cinefile.storage.models import KeyValueRecord


@pytest.fixture
def db_manager():
    """Create an in-memory database with all tables."""
    manager = DatabaseManager(":memory:")
    yield manager
    manager.close()


@pytest.fixture
def store(db_manager):
    return RecordStore(db_manager)


def write_raw(db_manager, key, value):
    """Store raw text, bypassing JSON encoding."""
    with db_manager.session_scope() as session:
        session.merge(KeyValueRecord(key=key, value=value))


class TestPutGet:
    """Tests for put/get/remove."""

    def test_put_then_get(self, store):
        assert store.put("favorite_u1_42", {"movieId": "42", "title": "Inception"}) is True
        assert store.get("favorite_u1_42") == {"movieId": "42", "title": "Inception"}

    def test_get_missing_returns_none(self, store):
        assert store.get("nope") is None

    def test_put_overwrites(self, store):
        store.put("k", {"a": 1, "b": 2})
        store.put("k", {"a": 3})
        assert store.get("k") == {"a": 3}
        assert store.keys() == ["k"]

    def test_put_unserializable_returns_false(self, store, caplog):
        with caplog.at_level(logging.ERROR):
            assert store.put("k", {"bad": object()}) is False
        assert store.get("k") is None
        assert "serializing" in caplog.text

    def test_get_corrupt_record_returns_none(self, store, db_manager, caplog):
        write_raw(db_manager, "user", "{not json")
        with caplog.at_level(logging.ERROR):
            assert store.get("user") is None
        assert "decoding" in caplog.text

    def test_get_corrupt_record_strict_raises(self, store, db_manager):
        write_raw(db_manager, "user", "{not json")
        with pytest.raises(RecordDecodeError) as exc_info:
            store.get("user", strict=True)
        assert exc_info.value.key == "user"

    def test_remove(self, store):
        store.put("k", {"a": 1})
        store.remove("k")
        assert store.get("k") is None
        assert store.exists("k") is False

    def test_remove_missing_is_noop(self, store):
        store.remove("missing")
        assert len(store) == 0

    def test_clear(self, store):
        store.put("a", 1)
        store.put("b", 2)
        store.clear()
        assert store.keys() == []


class TestQuota:
    """Tests for the storage quota."""

    def test_put_over_quota_rejected(self, db_manager, caplog):
        store = RecordStore(db_manager, quota_bytes=40)
        assert store.put("a", "x" * 10) is True
        with caplog.at_level(logging.ERROR):
            assert store.put("b", "y" * 40) is False
        assert "quota" in caplog.text
        assert store.get("b") is None
        assert store.get("a") == "x" * 10

    def test_overwrite_counts_replaced_value_once(self, db_manager):
        store = RecordStore(db_manager, quota_bytes=30)
        assert store.put("a", "x" * 20) is True
        # Replacing the value must not count the old one as well.
        assert store.put("a", "y" * 20) is True
        assert store.get("a") == "y" * 20

    def test_quota_counts_utf8_bytes(self, db_manager):
        store = RecordStore(db_manager, quota_bytes=20)
        # 5 two-byte characters plus '"a"': 13 bytes, 8 code points.
        assert store.put("ééééé", "a") is True
        # 1 + len('"xxxxx"') = 8 bytes; fits by code points, not by bytes.
        assert store.put("b", "xxxxx") is False
        assert store.put("b", "xxxx") is True

    def test_quota_disabled(self, db_manager):
        store = RecordStore(db_manager, quota_bytes=None)
        assert store.put("big", "z" * 100_000) is True


class TestScanByPrefix:
    """Tests for prefix enumeration."""

    def test_returns_only_matching_records(self, store):
        store.put("favorite_a_1", {"movieId": "1"})
        store.put("favorite_a_2", {"movieId": "2"})
        store.put("favorite_b_1", {"movieId": "b1"})
        store.put("rating_a_1", {"movieId": "r1"})
        store.put("user", {"id": "a"})

        found = sorted(r["movieId"] for r in store.scan_by_prefix("favorite_a_"))
        assert found == ["1", "2"]

    def test_scan_is_restartable(self, store):
        store.put("p_1", 1)
        scan = store.scan_by_prefix("p_")
        assert list(scan) == [1]
        store.put("p_2", 2)
        assert sorted(scan) == [1, 2]

    def test_scan_skips_malformed(self, store, db_manager, caplog):
        store.put("p_good", {"ok": True})
        write_raw(db_manager, "p_bad", "][")
        with caplog.at_level(logging.WARNING):
            assert list(store.scan_by_prefix("p_")) == [{"ok": True}]
        assert "p_bad" in caplog.text

    def test_scan_empty(self, store):
        assert list(store.scan_by_prefix("favorite_nobody_")) == []

    def test_non_ascii_prefix(self, store):
        store.put("favorite_zoë_1", {"movieId": "1"})
        store.put("favorite_zoë_\U0001f600", {"movieId": "emoji"})
        store.put("favorite_zoe_1", {"movieId": "other"})
        found = sorted(r["movieId"] for r in store.scan_by_prefix("favorite_zoë_"))
        assert found == ["1", "emoji"]


class TestRecordKeys:
    """Tests for record key templates."""

    def test_plain_ids_keep_original_layout(self):
        assert keys.favorite_key("u1", "42") == "favorite_u1_42"
        assert keys.rating_key("a@x.com", "42") == "rating_a@x.com_42"

    def test_underscores_do_not_collide(self):
        assert keys.favorite_key("a_b", "c") != keys.favorite_key("a", "b_c")

    def test_user_prefix_excludes_other_users(self):
        other = keys.favorite_key("a_b", "1")
        assert not other.startswith(keys.user_prefix(keys.FAVORITE_PREFIX, "a"))

    def test_percent_is_escaped(self):
        assert keys.favorite_key("a%5Fb", "1") != keys.favorite_key("a_b", "1")
