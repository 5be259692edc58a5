"""
Session state and the SessionStore interface.

A SessionStore owns the current Identity together with the `loading` and
`error` flags. Stores are plain objects created by the application and
passed to whatever needs them. Calls are expected to come from one
thread; nothing prevents overlapping calls, and the last transition to
finish wins.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Callable, List, Optional

from cinefile.models import Identity

logger = logging.getLogger(__name__)

StateListener = Callable[["SessionState"], None]


@dataclass(frozen=True)
class SessionState:
    """Snapshot of a session store."""

    identity: Optional[Identity] = None
    loading: bool = True
    error: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None


class SessionStore(ABC):
    """
    Holds the authenticated identity and exposes the auth operations.

    Starts with identity=None and loading=True; `restore_session` is
    expected to be called once at application start.
    """

    def __init__(self):
        self._state = SessionState()
        self._listeners: List[StateListener] = []

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def user(self) -> Optional[Identity]:
        return self._state.identity

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def error(self) -> Optional[str]:
        return self._state.error

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Call `listener` with the new state after every transition.

        Returns:
            A function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_user(self, identity: Optional[Identity]) -> None:
        """Replace the held identity, e.g. from an auth state notification."""
        self._set(identity=identity)

    def _set(self, **changes) -> None:
        self._state = replace(self._state, **changes)
        logger.debug(
            "Session state: user=%s loading=%s error=%s",
            self._state.identity.id if self._state.identity else None,
            self._state.loading,
            self._state.error,
        )
        for listener in list(self._listeners):
            listener(self._state)

    @abstractmethod
    def sign_in(self, email: str, password: str) -> None:
        ...

    @abstractmethod
    def sign_up(self, email: str, password: str) -> None:
        ...

    @abstractmethod
    def sign_out(self) -> None:
        ...

    @abstractmethod
    def restore_session(self) -> None:
        ...

    @abstractmethod
    def update_username(self, new_username: str) -> None:
        ...

    @abstractmethod
    def reset_password(self, email: str, redirect_to: Optional[str] = None) -> None:
        ...

    @abstractmethod
    def update_password(self, new_password: str) -> None:
        ...
