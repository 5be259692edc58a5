"""
System API endpoints (health).
"""

from fastapi import APIRouter, Depends

from cinefile import config
from cinefile.api.dependencies import get_record_store, get_session_store
from cinefile.session import SessionStore
from cinefile.storage import RecordStore

router = APIRouter(prefix="/api", tags=["system"])


@router.get("/health")
def health_check(
    store: RecordStore = Depends(get_record_store),
    session_store: SessionStore = Depends(get_session_store),
):
    """Health check: record store reachable and session restored."""
    return {
        "status": "healthy",
        "records": len(store),
        "storage_backend": config.get_storage_backend(),
        "session_backend": config.get_session_backend(),
        "session_ready": not session_store.loading,
        "tmdb_configured": config.get_tmdb_api_key() is not None,
    }
