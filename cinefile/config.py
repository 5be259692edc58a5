"""
Configuration loaded from environment or defaults.
"""

import os
from pathlib import Path


DEFAULT_PROFANITY_WORDS = ("badword1", "badword2")


def get_database_path() -> str:
    """Get record store database file path from env or default."""
    return os.getenv("CINEFILE_DB_PATH", "") or str(
        Path(__file__).resolve().parents[1] / "data" / "cinefile.db"
    )


def get_storage_backend() -> str:
    """Get repository backend: 'kv' (flat record store) or 'sql' (tables)."""
    return os.getenv("CINEFILE_STORAGE_BACKEND", "kv").strip().lower()


def get_session_backend() -> str:
    """Get session variant: 'local' or 'remote'."""
    return os.getenv("CINEFILE_SESSION_BACKEND", "local").strip().lower()


def get_storage_quota_bytes() -> int:
    """Get the maximum total size of the record store (default 5MB)."""
    return int(os.getenv("CINEFILE_STORAGE_QUOTA_BYTES", str(5 * 1024 * 1024)))


def get_tmdb_api_key() -> str | None:
    """Get TMDB API key, or None when not configured."""
    return os.getenv("TMDB_API_KEY") or None


def get_tmdb_base_url() -> str:
    """Get TMDB API base URL."""
    return os.getenv("TMDB_BASE_URL", "https://api.themoviedb.org/3").rstrip("/")


def get_auth_url() -> str | None:
    """Get the hosted auth service URL (remote sessions only)."""
    url = os.getenv("AUTH_URL")
    return url.rstrip("/") if url else None


def get_auth_api_key() -> str | None:
    """Get the hosted auth service public API key."""
    return os.getenv("AUTH_API_KEY") or None


def get_profanity_words() -> list[str]:
    """Get the review profanity word list (comma separated in env)."""
    raw = os.getenv("CINEFILE_PROFANITY_WORDS")
    if raw is None:
        return list(DEFAULT_PROFANITY_WORDS)
    return [w.strip().lower() for w in raw.split(",") if w.strip()]


def get_log_level() -> str:
    """Get log level from env or default."""
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_api_host() -> str:
    """Get API host for binding."""
    return os.getenv("API_HOST", "0.0.0.0")


def get_api_port() -> int:
    """Get API port."""
    return int(os.getenv("API_PORT", "8000"))
