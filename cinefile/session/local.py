"""
Local-identity session store.

Identities are derived from the e-mail address and persisted under the
'user' key of a RecordStore. Passwords are accepted but never checked.
Failures end up in `state.error`; nothing here raises except the password
operations, which local sessions do not support.
"""

import logging
from typing import Optional

from pydantic import ValidationError

from cinefile.errors import AuthError, RecordDecodeError
from cinefile.models import Identity
from cinefile.session.state import SessionStore
from cinefile.storage.keys import IDENTITY_KEY
from cinefile.storage.kv_store import RecordStore

logger = logging.getLogger(__name__)


class LocalSessionStore(SessionStore):
    """SessionStore persisting the identity in a RecordStore."""

    def __init__(self, store: RecordStore):
        super().__init__()
        self.store = store

    def sign_in(self, email: str, password: str) -> None:
        self._set(loading=True, error=None)
        try:
            username = None
            existing = self.store.get(IDENTITY_KEY)
            # Keep the username only when the same account signs back in.
            if isinstance(existing, dict) and existing.get("email") == email:
                username = existing.get("username")
            identity = Identity(id=email, email=email, username=username)
        except ValidationError as e:
            self._set(loading=False, error=f"Failed to sign in: {e}")
            return
        self._persist(identity, "Failed to sign in")

    def sign_up(self, email: str, password: str) -> None:
        self._set(loading=True, error=None)
        try:
            identity = Identity(id=email, email=email)
        except ValidationError as e:
            self._set(loading=False, error=f"Failed to sign up: {e}")
            return
        self._persist(identity, "Failed to sign up")

    def sign_out(self) -> None:
        self._set(loading=True, error=None)
        self.store.remove(IDENTITY_KEY)
        self._set(identity=None, loading=False, error=None)
        logger.info("Signed out")

    def restore_session(self) -> None:
        self._set(loading=True, error=None)
        try:
            record = self.store.get(IDENTITY_KEY, strict=True)
            identity = Identity.model_validate(record) if record is not None else None
        except (RecordDecodeError, ValidationError) as e:
            logger.error("Error loading user from local storage: %s", e)
            self._set(identity=None, loading=False, error=f"Failed to load session: {e}")
            return
        self._set(identity=identity, loading=False)

    def update_username(self, new_username: str) -> None:
        identity = self.user
        if identity is None:
            return
        updated = identity.model_copy(update={"username": new_username})
        if self.store.put(IDENTITY_KEY, updated.to_record()):
            self._set(identity=updated, error=None)
        else:
            logger.error("Failed to save updated user to local storage")
            self._set(identity=updated, error="Failed to update username in local storage")

    def reset_password(self, email: str, redirect_to: Optional[str] = None) -> None:
        raise AuthError("Password reset is not supported for local sessions")

    def update_password(self, new_password: str) -> None:
        raise AuthError("Password update is not supported for local sessions")

    def _persist(self, identity: Identity, failure: str) -> None:
        if not self.store.put(IDENTITY_KEY, identity.to_record()):
            self._set(loading=False, error=f"{failure}: could not save session")
            return
        self._set(identity=identity, loading=False, error=None)
        logger.info("Signed in as '%s'", identity.id)
