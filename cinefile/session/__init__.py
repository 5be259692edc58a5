"""
Authentication session state.

Two interchangeable SessionStore implementations: LocalSessionStore keeps
the identity in the local record store, RemoteSessionStore follows a
hosted auth service through an AuthBackend.
"""

from cinefile.session.state import SessionState, SessionStore
from cinefile.session.local import LocalSessionStore
from cinefile.session.remote import RemoteSessionStore, identity_from_session
from cinefile.session.auth_backend import AuthBackend, AuthSubscription, HttpAuthBackend

__all__ = [
    'SessionState',
    'SessionStore',
    'LocalSessionStore',
    'RemoteSessionStore',
    'identity_from_session',
    'AuthBackend',
    'AuthSubscription',
    'HttpAuthBackend',
]
