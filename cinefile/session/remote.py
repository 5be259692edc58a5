"""
Remote-backed session store.

Every operation marks the store as loading, delegates to the AuthBackend
and always clears `loading` when the call returns, whether it succeeded
or not. Backend failures are recorded in `state.error` and re-raised so
the caller can react too.

The identity itself follows the backend's auth state notifications: a
session yields an Identity, no session clears it.
"""

import logging
from typing import Any, Callable, Optional

from cinefile.errors import AuthError
from cinefile.models import AuthSession, Identity
from cinefile.session.auth_backend import AuthBackend, AuthSubscription
from cinefile.session.state import SessionStore

logger = logging.getLogger(__name__)


def identity_from_session(session: Optional[AuthSession]) -> Optional[Identity]:
    """Translate a backend session's user into an Identity (None without one)."""
    if session is None or not session.user_id:
        return None
    metadata = session.user.get("user_metadata") or {}
    return Identity(
        id=session.user_id,
        email=session.user_email or "",
        username=metadata.get("username"),
        avatar_url=metadata.get("avatar_url"),
    )


class RemoteSessionStore(SessionStore):
    """SessionStore delegating to a hosted auth service."""

    def __init__(self, backend: AuthBackend, attach: bool = True):
        super().__init__()
        self.backend = backend
        self._subscription: Optional[AuthSubscription] = None
        if attach:
            self.attach()

    def attach(self) -> None:
        """Start following the backend's auth state notifications."""
        if self._subscription is None:
            self._subscription = self.backend.on_auth_state_change(self._on_auth_state_change)

    def detach(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def _on_auth_state_change(self, event: str, session: Optional[AuthSession]) -> None:
        logger.info("Auth event %s", event)
        self.set_user(identity_from_session(session))

    def sign_in(self, email: str, password: str) -> None:
        self._run(self.backend.sign_in_with_password, email, password)

    def sign_up(self, email: str, password: str) -> None:
        self._run(self.backend.sign_up, email, password)

    def sign_out(self) -> None:
        self._run(self.backend.sign_out)

    def reset_password(self, email: str, redirect_to: Optional[str] = None) -> None:
        self._run(self.backend.reset_password_for_email, email, redirect_to)

    def update_password(self, new_password: str) -> None:
        self._run(self.backend.update_user, password=new_password)

    def update_username(self, new_username: str) -> None:
        identity = self.user
        if identity is None:
            return
        self._run(self.backend.update_user, data={"username": new_username})
        # The backend may not echo metadata back; keep the requested name.
        if self.user is not None and self.user.username != new_username:
            self._set(identity=self.user.model_copy(update={"username": new_username}))

    def restore_session(self) -> None:
        self._set(loading=True, error=None)
        try:
            session = self.backend.get_session()
            self._set(identity=identity_from_session(session))
        except AuthError as e:
            logger.error("Error restoring session: %s", e.message)
            self._set(identity=None, error=f"Failed to load session: {e.message}")
        finally:
            self._set(loading=False)

    def _run(self, operation: Callable[..., Any], *args, **kwargs) -> Any:
        self._set(loading=True, error=None)
        try:
            return operation(*args, **kwargs)
        except AuthError as e:
            self._set(error=e.message)
            raise
        finally:
            self._set(loading=False)
